# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from datetime import datetime
from typing import Optional


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class UserResponse(BaseModel):
    """
    Full user response for API endpoints.

    Includes additional profile data from the public.users table.
    """
    id: UUID
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    """Credentials posted by the login view."""
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Returned after a successful sign-in."""
    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user: AuthUser


class SessionResponse(BaseModel):
    """
    The current user, or null when nobody is logged in.

    The client's route guards only ask whether `user` is set.
    """
    user: Optional[AuthUser] = None


class TokenPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    Supabase tokens include standard JWT claims plus custom claims.
    """
    sub: str  # User ID
    email: Optional[str] = None
    aud: str  # Audience (should be "authenticated")
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
    role: Optional[str] = None  # User role
