"""
Authentication module (mock login with in-memory sessions).
"""

from finsuite.auth.jwt import create_access_token, decode_token
from finsuite.auth.tokens import generate_token, hash_token
from finsuite.auth.sessions import SessionStore, SessionUser, get_session_store
from finsuite.auth.dependencies import (
    get_current_user,
    get_current_user_optional,
)

__all__ = [
    "create_access_token",
    "decode_token",
    "generate_token",
    "hash_token",
    "SessionStore",
    "SessionUser",
    "get_session_store",
    "get_current_user",
    "get_current_user_optional",
]
