"""
Bearer token issuance and verification.

HS256-signed JWTs carrying the user id in a ``user_id`` claim and a standard
``exp`` claim. Tokens are never logged.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from config import Config

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


class AuthenticationError(Exception):
    """Token missing, malformed, expired or signed with another secret."""
    pass


def issue_token(
    user_id: int,
    secret: Optional[str] = None,
    ttl: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + (ttl or timedelta(hours=Config.TOKEN_TTL_HOURS))
    claims = {
        "user_id": user_id,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(claims, secret or Config.JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: Optional[str] = None) -> int:
    """
    Return the user id carried by token.

    Raises:
        AuthenticationError: token is not a valid, unexpired token for secret
    """
    try:
        claims = jwt.decode(
            token,
            secret or Config.JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("token expired") from e
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected bearer token: {type(e).__name__}")
        raise AuthenticationError("invalid token") from e

    user_id = claims.get("user_id")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id < 1:
        raise AuthenticationError("token has no valid user_id claim")
    return user_id
