# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - contact.py: Contact create/update/response schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .contact import (
    ContactCreate,
    ContactResponse,
    ContactUpdate,
)

__all__ = [
    "ContactCreate",
    "ContactResponse",
    "ContactUpdate",
]
