"""
Login and identity endpoints.

  POST /auth/login  {"email", "password"} -> {"token"}
  GET  /me          -> {"id", "email"}
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from auth import issue_token, verify_password
from routes.dependencies import get_current_user_id, get_store
from routes.schemas import LoginRequest, MeResponse, TokenResponse
from storage import StorageError, UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/auth/login", response_model=TokenResponse)
def login(body: LoginRequest, store: UserStore = Depends(get_store)):
    if not body.email or not body.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="email and password required")

    try:
        user = store.get_user_by_email(body.email)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="internal error")

    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Login rejected: invalid credentials")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid credentials")

    return TokenResponse(token=issue_token(user.id))


@router.get("/me", response_model=MeResponse)
def me(user_id: int = Depends(get_current_user_id), store: UserStore = Depends(get_store)):
    try:
        user = store.get_user(user_id)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="internal error")

    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return MeResponse(id=user.id, email=user.email)
