# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Mints HS256 access tokens signed with the test JWT secret
# - Provides a TestClient for the FastAPI app
# =============================================================================

import os
import time
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

TEST_JWT_SECRET = "test-jwt-secret-for-hs256-tokens"

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ["SUPABASE_JWT_SECRET"] = TEST_JWT_SECRET
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.auth.models import AuthUser


# =============================================================================
# Helpers
# =============================================================================

def make_token(
    user_id: str | None = None,
    email: str | None = "user@example.com",
    expires_in: int = 3600,
    audience: str = "authenticated",
    secret: str = TEST_JWT_SECRET,
    **extra_claims,
) -> str:
    """Mint a Supabase-style HS256 access token."""
    now = int(time.time())
    claims = {
        "sub": user_id or str(uuid4()),
        "email": email,
        "aud": audience,
        "iat": now,
        "exp": now + expires_in,
        "role": "authenticated",
    }
    claims.update(extra_claims)
    return jwt.encode(claims, secret, algorithm="HS256")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """TestClient for the application."""
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_user():
    """The user behind `auth_headers`."""
    return AuthUser(id=uuid4(), email="user@example.com")


@pytest.fixture
def auth_token(auth_user):
    """A valid access token for `auth_user`."""
    return make_token(user_id=str(auth_user.id), email=auth_user.email)


@pytest.fixture
def auth_headers(auth_token):
    """Authorization header carrying a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def sample_contact():
    """A stored contact document."""
    return {
        "id": "4f5c2a9e-8b1d-4c3e-9f6a-7d2b1e0c3a5f",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "number": "555-0100",
        "created_at": "2024-01-15T10:30:00+00:00",
        "updated_at": None,
    }


@pytest.fixture
def sample_contacts(sample_contact):
    """A few stored contacts."""
    return [
        sample_contact,
        {
            "id": "7a1e3c5b-2d4f-4a6b-8c9d-0e1f2a3b4c5d",
            "name": "Grace Hopper",
            "email": "grace@example.com",
            "number": None,
            "created_at": "2024-01-16T09:00:00+00:00",
            "updated_at": None,
        },
    ]
