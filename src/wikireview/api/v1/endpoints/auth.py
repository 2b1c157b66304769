# src/wikireview/api/v1/endpoints/auth.py
"""Authentication endpoints for the WikiReview API."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from wikireview.core.errors import UnauthenticatedError
from wikireview.core.settings import settings
from wikireview.models import User
from wikireview.schemas.common import SuccessResponse
from wikireview.schemas.user import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)

from ..dependencies import (
    CredentialStoreDep,
    OptionalUserDep,
    SessionManagerDep,
    SessionTokenDep,
)

router = APIRouter(prefix="/auth", tags=["authentication"])


def to_user_response(user: User) -> UserResponse:
    """Convert a User ORM instance to its public API shape."""
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        realname=user.display_name,
    )


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


@router.post(
    "/register",
    summary="Create an account and log in",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
)
async def register_user(
    payload: RegisterRequest,
    response: Response,
    credentials: CredentialStoreDep,
    sessions: SessionManagerDep,
) -> AuthResponse:
    """Register a new user and start a session for them."""
    user = credentials.create_user(
        payload.username,
        payload.email,
        payload.password,
        payload.realname,
    )
    token = sessions.create_session(user.id)
    _set_session_cookie(response, token)
    return AuthResponse(user=to_user_response(user))


@router.post(
    "/login",
    summary="Authenticate with username and password",
    response_model=AuthResponse,
)
async def login_user(
    payload: LoginRequest,
    response: Response,
    credentials: CredentialStoreDep,
    sessions: SessionManagerDep,
) -> AuthResponse:
    """Check credentials and issue a session cookie."""
    user = credentials.verify_credentials(payload.username.strip(), payload.password)
    if user is None:
        raise UnauthenticatedError("Invalid username or password")

    token = sessions.create_session(user.id)
    _set_session_cookie(response, token)
    return AuthResponse(user=to_user_response(user))


@router.post("/logout", response_model=SuccessResponse)
async def logout_user(
    response: Response,
    token: SessionTokenDep,
    sessions: SessionManagerDep,
) -> SuccessResponse:
    """Revoke the current session and clear its cookie."""
    sessions.delete_session(token)
    _clear_session_cookie(response)
    return SuccessResponse()


@router.get("/user", response_model=CurrentUserResponse)
async def get_logged_in_user(user: OptionalUserDep) -> CurrentUserResponse:
    """Report who is logged in; anonymous callers get ``loggedIn: false``."""
    if user is None:
        return CurrentUserResponse(logged_in=False, user=None)
    return CurrentUserResponse(logged_in=True, user=to_user_response(user))
