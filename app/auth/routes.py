# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Login, logout and current-user endpoints.
#
# The login view posts credentials here. The route guards ask
# GET /session whether anyone is logged in.
# =============================================================================

import logging
from fastapi import APIRouter, Depends, Response

from app.auth.dependencies import get_current_user, get_current_user_optional
from app.auth.models import (
    AuthUser,
    LoginRequest,
    LoginResponse,
    SessionResponse,
    UserResponse,
)
from app.auth.service import AuthService
from app.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, response: Response) -> LoginResponse:
    """
    Sign in with email and password.

    Returns the access token and also stores it in an http-only cookie
    so page navigation is authenticated.

    Raises:
        401: If the credentials are rejected
        503: If the auth service is unavailable
    """
    result = AuthService.login(request.email, request.password)

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=result.access_token,
        max_age=result.expires_in,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="lax",
    )
    return result


@router.post("/logout")
async def logout(response: Response) -> dict:
    """Forget the auth cookie. Safe to call when logged out."""
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME)
    return {"message": "Logged out"}


@router.get("/session", response_model=SessionResponse)
async def get_session(
    user: AuthUser | None = Depends(get_current_user_optional),
) -> SessionResponse:
    """
    Get the current user, or null.

    Never returns 401: an anonymous visitor simply gets `{"user": null}`.
    """
    return SessionResponse(user=user)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
    """
    return AuthService.get_profile(user)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
