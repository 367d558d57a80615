# =============================================================================
# app/auth/service.py - Sign-in Against Supabase Auth
# =============================================================================
# Wraps the Supabase Auth password grant and the public.users lookup
# used by the session endpoints.
# =============================================================================

import logging
from uuid import UUID

from supabase import AuthApiError, AuthError

from app.auth.models import AuthUser, LoginResponse, UserResponse
from app.exceptions import AuthServiceError, InvalidCredentialsError
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

# Statuses Supabase Auth uses for rejected credentials
_REJECTED_STATUSES = {400, 401, 403, 422}


class AuthService:
    """Login and profile lookups."""

    @staticmethod
    def login(email: str, password: str) -> LoginResponse:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If Supabase rejects the credentials
            AuthServiceError: If Supabase Auth can't be reached
        """
        try:
            client = SupabaseClient.create_auth_client()
            result = client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthApiError as e:
            if getattr(e, "status", None) in _REJECTED_STATUSES:
                logger.info(f"Rejected login for {email}")
                raise InvalidCredentialsError(email)
            logger.error(f"Supabase Auth error during login: {e}")
            raise AuthServiceError(str(e))
        except (AuthError, SupabaseClientError) as e:
            logger.error(f"Supabase Auth unavailable during login: {e}")
            raise AuthServiceError(str(e))

        if result.session is None or result.user is None:
            logger.info(f"Login for {email} returned no session")
            raise InvalidCredentialsError(email)

        user = AuthUser(id=UUID(str(result.user.id)), email=result.user.email)
        logger.info(f"User logged in: {user.id}")

        return LoginResponse(
            access_token=result.session.access_token,
            expires_in=result.session.expires_in,
            user=user,
        )

    @staticmethod
    def get_profile(user: AuthUser) -> UserResponse:
        """
        Full profile from public.users, or the token's fields when the
        profile row isn't there.
        """
        try:
            row = SupabaseClient.fetch_user_profile(user.id)
        except SupabaseClientError as e:
            logger.warning(f"Could not fetch user profile: {e}")
            row = None

        if row:
            return UserResponse(**row)

        return UserResponse(id=user.id, email=user.email)
