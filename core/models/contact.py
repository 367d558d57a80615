# =============================================================================
# core/models/contact.py - Contact Schemas
# =============================================================================
# These models define the API contract for contact operations:
# - ContactCreate: Input for adding a contact
# - ContactUpdate: Partial input for editing a contact
# - ContactResponse: A stored contact document
#
# A contact is looked up by its `id` field, which the store assigns.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255
NUMBER_MAX_LENGTH = 64


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class ContactCreate(BaseModel):
    """
    Schema for adding a new contact.

    Only name, email and number are read from the request body.
    Anything else the client sends is ignored.

    Example:
        {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "number": "+44 20 7946 0000"
        }
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(
        ...,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="Display name of the contact"
    )

    email: str | None = Field(
        default=None,
        max_length=EMAIL_MAX_LENGTH,
        description="Email address"
    )

    number: str | None = Field(
        default=None,
        max_length=NUMBER_MAX_LENGTH,
        description="Phone number"
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", "number", mode="before")
    @classmethod
    def blank_is_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def to_document(self) -> dict[str, Any]:
        """Fields to insert into the store."""
        return self.model_dump()


class ContactUpdate(BaseModel):
    """
    Schema for editing a contact.

    Every field is optional. Only the keys present in the request body
    are applied, the rest of the stored document is left as is.

    Example:
        {"number": "555-0100"}
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
    )
    email: str | None = Field(default=None, max_length=EMAIL_MAX_LENGTH)
    number: str | None = Field(default=None, max_length=NUMBER_MAX_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", "number", mode="before")
    @classmethod
    def blank_is_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: str | None) -> str | None:
        if value is None:
            raise ValueError("name cannot be removed from a contact")
        return value

    def to_changes(self) -> dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class ContactResponse(BaseModel):
    """
    A stored contact document.

    Returned by every contact endpoint.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Contact id")
    name: str
    email: str | None = None
    number: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
