# =============================================================================
# core/services/ - Business Logic Services
# =============================================================================
# Services sit between the API routes and the database:
# - contact_service.py: Contact CRUD against the contacts table
# =============================================================================

from .contact_service import ContactService

__all__ = ["ContactService"]
