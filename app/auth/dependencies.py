# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The access token is read from:
# - the Authorization: Bearer header (API clients), or
# - the auth cookie set at login (browser page navigation)
#
# Supports both:
# - ES256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
import time
from typing import Optional
from uuid import UUID
import httpx

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.config import settings
from app.auth.models import AuthUser, TokenPayload

logger = logging.getLogger(__name__)

# Bearer is optional here: the cookie is tried when the header is absent
security = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour

TOKEN_AUDIENCE = "authenticated"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _get_jwks_url() -> str:
    """Get the JWKS URL from Supabase URL."""
    supabase_url = settings.SUPABASE_URL.rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        jwks_url = _get_jwks_url()
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys beat no keys
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[str | dict, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if kid:
        jwks = _fetch_jwks()
        for key in jwks.get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """Bearer header first, then the auth cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.AUTH_COOKIE_NAME) or None


def decode_access_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and return its user.

    Raises:
        HTTPException: 401 if the token is invalid, expired or malformed
    """
    try:
        signing_key, algorithm = _get_signing_key(token)
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=TOKEN_AUDIENCE,
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(f"Invalid token: {str(e)}")

    try:
        claims = TokenPayload(**payload)
    except ValidationError:
        logger.warning("JWT token missing required claims")
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_uuid = UUID(claims.sub)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {claims.sub}")
        raise _unauthorized("Invalid token: malformed user ID")

    logger.debug(f"Authenticated user: {user_uuid}")
    return AuthUser(id=user_uuid, email=claims.email)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Extract and validate the user from a Supabase JWT.

    This dependency guards every protected route.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    token = extract_token(request, credentials)
    if not token:
        raise _unauthorized("Not authenticated")
    return decode_access_token(token)


async def get_current_user_optional(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthUser]:
    """
    Optionally get the current user from JWT token.

    Returns None if no token is provided or the token is invalid,
    instead of raising an error.
    """
    token = extract_token(request, credentials)
    if not token:
        return None

    try:
        return decode_access_token(token)
    except HTTPException:
        return None
