# =============================================================================
# core/services/contact_service.py - Contact Business Logic
# =============================================================================
# Handles contact CRUD operations against the contacts table.
# Separates HTTP concerns from database logic.
#
# Error mapping:
# - a document that doesn't exist -> ContactNotFoundError (404)
# - an id that isn't a UUID       -> ContactNotFoundError (404)
# - any driver failure            -> DatabaseUnavailableError (503)
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.contact import ContactCreate, ContactUpdate
from app.config import settings
from app.exceptions import ContactNotFoundError, DatabaseUnavailableError

logger = logging.getLogger(__name__)


class ContactService:
    """
    Service for contact management operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def _parse_id(contact_id: str | UUID) -> str:
        """
        Normalize a contact id to its canonical UUID string.

        No contact can have an id that isn't a UUID, so a malformed id is
        reported as not found rather than sent to the store.
        """
        if isinstance(contact_id, UUID):
            return str(contact_id)
        try:
            return str(UUID(contact_id))
        except (TypeError, ValueError):
            logger.info(f"Contact could not be found: malformed id {contact_id!r}")
            raise ContactNotFoundError(str(contact_id))

    @staticmethod
    def _table():
        try:
            return SupabaseClient.get_client().table(settings.CONTACTS_TABLE)
        except SupabaseClientError as e:
            logger.error(f"Contact store unavailable: {e}")
            raise DatabaseUnavailableError("connect", e.message)

    @staticmethod
    def list_contacts() -> list[dict[str, Any]]:
        """
        Get every contact in the store.

        Returns:
            List of contact dicts, oldest first

        Raises:
            DatabaseUnavailableError: If the query fails
        """
        table = ContactService._table()

        try:
            response = table.select("*").order("created_at").execute()
        except Exception as e:
            logger.error(f"Failed to list contacts: {e}")
            raise DatabaseUnavailableError("list", str(e))

        contacts = response.data or []
        logger.debug(f"Fetched {len(contacts)} contacts")
        return contacts

    @staticmethod
    def get_contact(contact_id: str | UUID) -> dict[str, Any]:
        """
        Get a contact by id.

        Raises:
            ContactNotFoundError: If no contact has that id
            DatabaseUnavailableError: If the query fails
        """
        contact_id_str = ContactService._parse_id(contact_id)

        try:
            contact = SupabaseClient.fetch_contact(contact_id_str)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch contact {contact_id_str}: {e}")
            raise DatabaseUnavailableError("get", e.message)

        if not contact:
            logger.info(f"Contact could not be found: {contact_id_str}")
            raise ContactNotFoundError(contact_id_str)

        return contact

    @staticmethod
    def create_contact(contact: ContactCreate) -> dict[str, Any]:
        """
        Add a new contact.

        Args:
            contact: Validated contact fields

        Returns:
            The saved contact, including its new id

        Raises:
            DatabaseUnavailableError: If the insert fails
        """
        table = ContactService._table()

        try:
            response = table.insert(contact.to_document()).execute()
        except Exception as e:
            logger.error(f"Failed to create contact: {e}")
            raise DatabaseUnavailableError("create", str(e))

        if not response.data:
            logger.error("Contact insert returned no data")
            raise DatabaseUnavailableError("create", "insert returned no data")

        created = response.data[0]
        logger.info(f"Created contact: {created.get('id')}")
        return created

    @staticmethod
    def update_contact(
        contact_id: str | UUID,
        changes: ContactUpdate,
    ) -> dict[str, Any]:
        """
        Apply a partial update to a contact.

        Only the fields present in `changes` are written. Returns the
        document as it is after the update.

        Raises:
            ContactNotFoundError: If no contact has that id
            DatabaseUnavailableError: If the update fails
        """
        contact_id_str = ContactService._parse_id(contact_id)
        update_data = changes.to_changes()

        if not update_data:
            # Nothing to write, but the contact must still exist
            return ContactService.get_contact(contact_id_str)

        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        table = ContactService._table()

        try:
            response = (
                table.update(update_data)
                .eq("id", contact_id_str)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update contact {contact_id_str}: {e}")
            raise DatabaseUnavailableError("update", str(e))

        if not response.data:
            logger.info(f"Contact could not be found: {contact_id_str}")
            raise ContactNotFoundError(contact_id_str)

        logger.info(f"Updated contact: {contact_id_str}")
        return response.data[0]

    @staticmethod
    def delete_contact(contact_id: str | UUID) -> dict[str, Any]:
        """
        Remove a contact.

        Returns:
            The removed contact document

        Raises:
            ContactNotFoundError: If no contact has that id
            DatabaseUnavailableError: If the delete fails
        """
        contact_id_str = ContactService._parse_id(contact_id)
        table = ContactService._table()

        try:
            response = table.delete().eq("id", contact_id_str).execute()
        except Exception as e:
            logger.error(f"Failed to delete contact {contact_id_str}: {e}")
            raise DatabaseUnavailableError("delete", str(e))

        if not response.data:
            logger.info(f"Contact could not be found: {contact_id_str}")
            raise ContactNotFoundError(contact_id_str)

        logger.info(f"Deleted contact: {contact_id_str}")
        return response.data[0]

    @staticmethod
    def count_contacts() -> int:
        """Total number of contacts in the store."""
        table = ContactService._table()

        try:
            response = table.select("id", count="exact").limit(1).execute()
        except Exception as e:
            logger.error(f"Failed to count contacts: {e}")
            raise DatabaseUnavailableError("count", str(e))

        return response.count or 0

    @staticmethod
    def recent_contacts(limit: int = 5) -> list[dict[str, Any]]:
        """The most recently created contacts, newest first."""
        table = ContactService._table()

        try:
            response = (
                table.select("*")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch recent contacts: {e}")
            raise DatabaseUnavailableError("recent", str(e))

        return response.data or []
