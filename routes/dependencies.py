"""
FastAPI dependencies shared by the routers.

- get_store / get_summary_orchestrator: process-wide singletons, overridable
  in tests through app.dependency_overrides
- get_current_user_id: resolves the caller from the bearer token (401 otherwise)
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth import AuthenticationError, verify_token
from config import Config
from ordering import SummaryOrchestrator
from storage import SQLiteStore

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

# Largest value sqlite3 accepts as an INTEGER parameter
MAX_ORDER_ID = 2**63 - 1

# Initialized once per process
_store: Optional[SQLiteStore] = None
_orchestrator: Optional[SummaryOrchestrator] = None


def get_store() -> SQLiteStore:
    """Get or create the SQLite store (singleton)."""
    global _store
    if _store is None:
        _store = SQLiteStore(db_path=Config.DATABASE_PATH)
    return _store


def get_summary_orchestrator() -> SummaryOrchestrator:
    """Get or create the summary orchestrator (singleton, stateless)."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = SummaryOrchestrator()
    return _orchestrator


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> int:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized")
    try:
        return verify_token(credentials.credentials)
    except AuthenticationError as e:
        logger.debug(f"Unauthorized request: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized")


def parse_order_id(order_id: str) -> int:
    """Path ids must be plain decimal digits within SQLite's INTEGER range (400 otherwise)."""
    value = int(order_id) if order_id.isascii() and order_id.isdigit() else 0
    if not 1 <= value <= MAX_ORDER_ID:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid id")
    return value
