"""
Tests for /auth/login, /me and the health endpoints.
"""

from auth import issue_token
from config import Config


class TestLogin:
    def test_valid_credentials_return_token(self, client, seeded_user):
        resp = client.post("/auth/login", json={"email": "user@weel.com", "password": "password"})

        assert resp.status_code == 200
        assert resp.json()["token"]

    def test_wrong_password(self, client, seeded_user):
        resp = client.post("/auth/login", json={"email": "user@weel.com", "password": "nope"})

        assert resp.status_code == 401
        assert resp.json() == {"error": "invalid credentials"}

    def test_unknown_email(self, client, seeded_user):
        resp = client.post("/auth/login", json={"email": "ghost@weel.com", "password": "password"})

        assert resp.status_code == 401
        assert resp.json() == {"error": "invalid credentials"}

    def test_missing_fields(self, client):
        resp = client.post("/auth/login", json={"email": "user@weel.com"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "email and password required"}

    def test_malformed_body(self, client):
        resp = client.post(
            "/auth/login",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        assert resp.json() == {"error": "invalid json"}


class TestMe:
    def test_returns_current_user(self, client, seeded_user, auth_headers):
        resp = client.get("/me", headers=auth_headers)

        assert resp.status_code == 200
        assert resp.json() == {"id": seeded_user.id, "email": "user@weel.com"}

    def test_requires_token(self, client):
        resp = client.get("/me")

        assert resp.status_code == 401
        assert resp.json() == {"error": "unauthorized"}

    def test_rejects_bad_token(self, client):
        resp = client.get("/me", headers={"Authorization": "Bearer garbage"})
        assert resp.status_code == 401

    def test_rejects_non_bearer_scheme(self, client):
        resp = client.get("/me", headers={"Authorization": "Basic dXNlcjpwYXNz"})
        assert resp.status_code == 401

    def test_token_for_deleted_user(self, client):
        resp = client.get("/me", headers={"Authorization": f"Bearer {issue_token(999)}"})

        assert resp.status_code == 404
        assert resp.json() == {"error": "not found"}


class TestHealth:
    def test_live(self, client):
        resp = client.get("/health/live")

        assert resp.status_code == 200
        assert resp.json() == {"status": "alive"}

    def test_ready(self, client, store, monkeypatch):
        monkeypatch.setattr("routes.dependencies._store", store)
        monkeypatch.setattr(Config, "ENVIRONMENT", "development")

        resp = client.get("/health/ready")

        assert resp.status_code == 200
        assert resp.json() == {"status": "ready"}

    def test_not_ready_with_default_secret_in_production(self, client, store, monkeypatch):
        monkeypatch.setattr("routes.dependencies._store", store)
        monkeypatch.setattr(Config, "ENVIRONMENT", "production")
        monkeypatch.setattr(Config, "JWT_SECRET", "dev-secret")

        resp = client.get("/health/ready")

        assert resp.status_code == 503
        assert resp.json() == {"status": "not_ready", "reason": "invalid configuration"}

    def test_not_ready_when_store_cannot_open(self, client, tmp_path, monkeypatch):
        monkeypatch.setattr("routes.dependencies._store", None)
        monkeypatch.setattr(Config, "ENVIRONMENT", "development")
        monkeypatch.setattr(Config, "DATABASE_PATH", str(tmp_path / "missing-dir" / "orders.db"))

        resp = client.get("/health/ready")

        assert resp.status_code == 503
        assert resp.json()["status"] == "not_ready"


class TestConfigValidate:
    def test_production_with_default_secret_is_invalid(self, monkeypatch):
        monkeypatch.setattr(Config, "ENVIRONMENT", "production")
        monkeypatch.setattr(Config, "JWT_SECRET", "dev-secret")
        assert Config.validate() is False

    def test_production_with_secret_is_valid(self, monkeypatch):
        monkeypatch.setattr(Config, "ENVIRONMENT", "production")
        monkeypatch.setattr(Config, "JWT_SECRET", "a-real-secret")
        assert Config.validate() is True
