"""
Authentication API endpoints.

Mock login: there is no user database and passwords are not checked
against anything. A successful login or signup opens an in-memory
session and returns a JWT that carries its id.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Response, Request
from pydantic import BaseModel, EmailStr

from finsuite.auth.jwt import create_access_token
from finsuite.auth.sessions import SessionStore, SessionUser, get_session_store
from finsuite.auth.dependencies import get_current_user, get_session_id
from finsuite.config import get_settings

router = APIRouter(prefix="/api/auth", tags=["auth"])
settings = get_settings()


# === Pydantic Schemas ===

class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SignupRequest(BaseModel):
    email: EmailStr
    password: str
    confirm_password: str


class UserResponse(BaseModel):
    email: str
    display_name: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# === Helper Functions ===

def set_auth_cookie(response: Response, access_token: str):
    """Set httpOnly cookie for the access token."""
    response.set_cookie(
        key="access_token",
        value=access_token,
        httponly=True,
        secure=settings.app_env == "production",
        samesite="lax",
        max_age=settings.jwt_access_token_expire_minutes * 60,
    )


def clear_auth_cookie(response: Response):
    """Clear auth cookie."""
    response.delete_cookie(key="access_token")


def user_to_response(user: SessionUser) -> UserResponse:
    return UserResponse(email=user.email, display_name=user.display_name)


def start_session(email: str, response: Response, store: SessionStore) -> LoginResponse:
    """Open a session, set the cookie and build the login response."""
    session_id = store.open(email)
    user = store.get(session_id)

    access_token = create_access_token({"sub": user.email, "sid": session_id})
    set_auth_cookie(response, access_token)

    return LoginResponse(access_token=access_token, user=user_to_response(user))


# === Endpoints ===

@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    """
    Sign in with any email and a non-empty password.

    Sets an httpOnly cookie for browser-based auth.
    """
    if not request.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please fill in all fields.",
        )

    return start_session(request.email, response, store)


@router.post("/signup", response_model=LoginResponse)
async def signup(
    request: SignupRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    """Create a mock account and sign in."""
    if not request.password or not request.confirm_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please fill in all fields.",
        )

    if request.password != request.confirm_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Passwords do not match.",
        )

    if len(request.password) < settings.min_password_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {settings.min_password_length} characters long.",
        )

    return start_session(request.email, response, store)


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    """Close the current session and clear the cookie."""
    session_id = get_session_id(request)
    if session_id:
        store.close(session_id)

    clear_auth_cookie(response)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: SessionUser = Depends(get_current_user)):
    """Get the signed-in user."""
    return user_to_response(current_user)
