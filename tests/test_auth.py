# =============================================================================
# tests/test_auth.py - Authentication Tests
# =============================================================================
# This module contains tests for:
# - Access token verification (HS256)
# - AuthService sign-in against a mocked Supabase Auth client
# - /auth/login, /auth/logout, /auth/session, /auth/me, /auth/verify
# =============================================================================

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from fastapi import HTTPException
from supabase import AuthApiError

from app.auth import decode_access_token
from app.auth.models import AuthUser, LoginResponse
from app.auth.service import AuthService
from app.exceptions import AuthServiceError, InvalidCredentialsError
from tests.conftest import make_token


def _auth_api_error(message: str, status: int) -> AuthApiError:
    error = AuthApiError.__new__(AuthApiError)
    Exception.__init__(error, message)
    error.message = message
    error.status = status
    return error


# =============================================================================
# Token Verification
# =============================================================================

class TestDecodeAccessToken:
    """Test JWT verification."""

    def test_valid_token(self):
        user_id = str(uuid4())
        user = decode_access_token(make_token(user_id=user_id, email="a@b.com"))

        assert str(user.id) == user_id
        assert user.email == "a@b.com"

    def test_expired_token(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(make_token(expires_in=-60))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    def test_wrong_audience(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(make_token(audience="anon"))

        assert exc_info.value.status_code == 401

    def test_wrong_secret(self):
        with pytest.raises(HTTPException):
            decode_access_token(make_token(secret="some-other-secret-value"))

    def test_malformed_user_id(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(make_token(user_id="not-a-uuid"))

        assert exc_info.value.detail == "Invalid token: malformed user ID"

    def test_garbage(self):
        with pytest.raises(HTTPException):
            decode_access_token("garbage")


# =============================================================================
# AuthService
# =============================================================================

class TestAuthServiceLogin:
    """Test sign-in against mocked Supabase Auth."""

    @pytest.fixture
    def auth_client(self):
        with patch("app.auth.service.SupabaseClient") as mock_client:
            auth_client = MagicMock()
            mock_client.create_auth_client.return_value = auth_client
            yield auth_client

    def test_success(self, auth_client):
        user_id = uuid4()
        auth_client.auth.sign_in_with_password.return_value = SimpleNamespace(
            user=SimpleNamespace(id=str(user_id), email="me@example.com"),
            session=SimpleNamespace(access_token="tok", expires_in=3600),
        )

        result = AuthService.login("me@example.com", "secret")

        assert isinstance(result, LoginResponse)
        assert result.access_token == "tok"
        assert result.user.id == user_id
        auth_client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "me@example.com", "password": "secret"}
        )

    def test_rejected_credentials(self, auth_client):
        auth_client.auth.sign_in_with_password.side_effect = _auth_api_error(
            "Invalid login credentials", 400
        )

        with pytest.raises(InvalidCredentialsError) as exc_info:
            AuthService.login("me@example.com", "wrong")

        assert exc_info.value.status_code == 401

    def test_auth_server_error(self, auth_client):
        auth_client.auth.sign_in_with_password.side_effect = _auth_api_error("upstream", 500)

        with pytest.raises(AuthServiceError) as exc_info:
            AuthService.login("me@example.com", "secret")

        assert exc_info.value.status_code == 503

    def test_no_session_is_rejected(self, auth_client):
        auth_client.auth.sign_in_with_password.return_value = SimpleNamespace(user=None, session=None)

        with pytest.raises(InvalidCredentialsError):
            AuthService.login("me@example.com", "secret")


class TestAuthServiceProfile:
    """Test profile lookup."""

    def test_profile_row(self):
        user = AuthUser(id=uuid4(), email="me@example.com")
        with patch("app.auth.service.SupabaseClient") as mock_client:
            mock_client.fetch_user_profile.return_value = {
                "id": str(user.id),
                "email": user.email,
                "display_name": "Me",
            }
            profile = AuthService.get_profile(user)

        assert profile.display_name == "Me"

    def test_falls_back_to_token(self):
        user = AuthUser(id=uuid4(), email="me@example.com")
        with patch("app.auth.service.SupabaseClient") as mock_client:
            mock_client.fetch_user_profile.return_value = None
            profile = AuthService.get_profile(user)

        assert profile.id == user.id
        assert profile.display_name is None


# =============================================================================
# Routes
# =============================================================================

class TestAuthRoutes:
    """Test the /auth endpoints."""

    def test_login_sets_cookie(self, client):
        user = AuthUser(id=uuid4(), email="me@example.com")
        with patch("app.auth.routes.AuthService") as service:
            service.login.return_value = LoginResponse(access_token="tok", expires_in=3600, user=user)

            response = client.post(
                "/api/v1/auth/login",
                json={"email": "me@example.com", "password": "secret"},
            )

        assert response.status_code == 200
        assert response.json()["access_token"] == "tok"
        assert response.cookies.get("access_token") == "tok"

    def test_login_rejected(self, client):
        with patch("app.auth.routes.AuthService") as service:
            service.login.side_effect = InvalidCredentialsError("me@example.com")

            response = client.post(
                "/api/v1/auth/login",
                json={"email": "me@example.com", "password": "wrong"},
            )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"

    def test_login_requires_password(self, client):
        response = client.post("/api/v1/auth/login", json={"email": "me@example.com"})

        assert response.status_code == 422

    def test_logout(self, client):
        response = client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        assert "access_token" in response.headers.get("set-cookie", "")

    def test_session_anonymous(self, client):
        response = client.get("/api/v1/auth/session")

        assert response.status_code == 200
        assert response.json() == {"user": None}

    def test_session_with_bad_token_is_anonymous(self, client):
        response = client.get("/api/v1/auth/session", headers={"Authorization": "Bearer bad"})

        assert response.status_code == 200
        assert response.json()["user"] is None

    def test_session_logged_in(self, client, auth_headers, auth_user):
        response = client.get("/api/v1/auth/session", headers=auth_headers)

        assert response.json()["user"]["id"] == str(auth_user.id)

    def test_me_requires_login(self, client):
        assert client.get("/api/v1/auth/me").status_code == 401

    def test_me(self, client, auth_headers, auth_user):
        with patch("app.auth.service.SupabaseClient") as mock_client:
            mock_client.fetch_user_profile.return_value = None
            response = client.get("/api/v1/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["email"] == auth_user.email

    def test_verify(self, client, auth_headers, auth_user):
        response = client.get("/api/v1/auth/verify", headers=auth_headers)

        assert response.json() == {
            "valid": True,
            "user_id": str(auth_user.id),
            "email": auth_user.email,
        }
