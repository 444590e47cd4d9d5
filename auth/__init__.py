"""
Authentication: bcrypt password hashes and HS256 bearer tokens.
"""

from auth.passwords import hash_password, verify_password
from auth.tokens import AuthenticationError, issue_token, verify_token

__all__ = [
    "hash_password",
    "verify_password",
    "AuthenticationError",
    "issue_token",
    "verify_token",
]
