"""Pytest configuration and fixtures."""

import json
import sys
from datetime import datetime, timezone
from http import HTTPStatus
from pathlib import Path

import pytest
import requests

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from ordering.models import OrderFacts, Preference  # noqa: E402
from storage.sqlite import SQLiteStore  # noqa: E402

PROVIDER_ENV_VARS = ("OPENAI_API_KEY", "GEMINI_API_KEY", "OPENAI_MODEL", "GEMINI_MODEL")


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    """Keep keys from a developer .env out of every test."""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_db(tmp_path):
    """Path of a fresh SQLite database for each test."""
    return str(tmp_path / "orders.db")


@pytest.fixture
def store(temp_db):
    return SQLiteStore(db_path=temp_db)


@pytest.fixture
def order_seven():
    """Order 7: in-store, no address, no pickup time."""
    return OrderFacts(
        id=7,
        preference=Preference.IN_STORE,
        created_at=datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def http_response():
    """Factory for real requests.Response objects with a canned body."""

    def _make(status_code=200, body=None, raw=None, reason=None):
        resp = requests.Response()
        resp.status_code = status_code
        resp.reason = reason if reason is not None else HTTPStatus(status_code).phrase
        if raw is not None:
            resp._content = raw.encode("utf-8")
        else:
            resp._content = json.dumps(body if body is not None else {}).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
        return resp

    return _make


# ── HTTP API ────────────────────────────────────────────────────────────────

SEED_EMAIL = "user@weel.com"
SEED_PASSWORD = "password"


@pytest.fixture
def seeded_user(store):
    """The test login, hashed with a cheap work factor."""
    from auth import hash_password

    return store.upsert_user(SEED_EMAIL, hash_password(SEED_PASSWORD, rounds=4))


@pytest.fixture
def summary_orchestrator():
    """Orchestrator with stub providers and no credentials (always falls back)."""
    from config import ProviderCredentials
    from inference import StubModelBackend
    from ordering import SummaryOrchestrator
    from ordering.tracing import NoOpTracer

    return SummaryOrchestrator(
        backends={"openai": StubModelBackend(), "gemini": StubModelBackend()},
        credentials_loader=ProviderCredentials,
        tracer=NoOpTracer(),
    )


@pytest.fixture
def client(store, summary_orchestrator):
    """TestClient wired to a temp database. Lifespan (seeding) is not run."""
    from fastapi.testclient import TestClient

    from main import app
    from routes.dependencies import get_store, get_summary_orchestrator

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_summary_orchestrator] = lambda: summary_orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client, seeded_user):
    resp = client.post("/auth/login", json={"email": SEED_EMAIL, "password": SEED_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}
