"""
FastAPI dependencies for authentication.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status, Request

from finsuite.auth.jwt import decode_token
from finsuite.auth.sessions import SessionStore, SessionUser, get_session_store


def get_token_from_request(request: Request) -> Optional[str]:
    """
    Extract JWT token from request.

    Checks in order:
    1. Authorization header (Bearer token)
    2. access_token cookie

    Returns:
        Token string if found, None otherwise
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]

    return request.cookies.get("access_token")


def get_session_id(request: Request) -> Optional[str]:
    """Session id carried by a valid access token, if any."""
    token = get_token_from_request(request)
    if not token:
        return None

    payload = decode_token(token)
    if not payload:
        return None

    if payload.get("type") != "access":
        return None

    return payload.get("sid")


async def get_current_user_optional(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> Optional[SessionUser]:
    """
    Get the current user if signed in, None otherwise.

    Use this for routes that work both with and without authentication.
    """
    session_id = get_session_id(request)
    if not session_id:
        return None

    return store.get(session_id)


async def get_current_user(
    user: Optional[SessionUser] = Depends(get_current_user_optional),
) -> SessionUser:
    """
    Get the current authenticated user.

    Raises HTTPException 401 if not authenticated.
    """
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user
