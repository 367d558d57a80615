# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for fetching:
# - Contact documents by their id
# - User profiles for the session endpoints
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   contact = SupabaseClient.fetch_contact(contact_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and a suggestion so callers can say how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        contact = SupabaseClient.fetch_contact("550e8400-...")
        name = contact["name"] if contact else None
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def create_auth_client(cls) -> Client:
        """
        Create a fresh anon-key client for a password sign-in.

        Sign-in stores the resulting session on the client it was made
        with, so each login gets its own client instead of the shared one.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase auth client: {e}",
                code="AUTH_CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used by tests and on shutdown)."""
        cls._instance = None

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # Contacts
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_contact(cls, contact_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a single contact document by its id.

        Args:
            contact_id: The contact id

        Returns:
            Contact dict, or None if no document has that id

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        contact_id_str = cls._normalize_uuid(contact_id)

        try:
            response = (
                client.table(settings.CONTACTS_TABLE)
                .select("*")
                .eq("id", contact_id_str)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch contact: {e}",
                code="FETCH_CONTACT_FAILED",
                suggestion="Check that the contacts table exists and is accessible",
                details={"contact_id": contact_id_str}
            )

        rows = response.data or []
        if not rows:
            logger.debug(f"No contact with id {contact_id_str}")
            return None
        return rows[0]

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user_profile(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a row from the public users table.

        Returns None when the profile row doesn't exist yet (the auth
        trigger may not have run).

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table("users")
                .select("*")
                .eq("id", user_id_str)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch user profile: {e}",
                code="FETCH_USER_FAILED",
                suggestion="Check that the users table exists and is accessible",
                details={"user_id": user_id_str}
            )

        rows = response.data or []
        return rows[0] if rows else None
