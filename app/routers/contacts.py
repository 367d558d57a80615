# =============================================================================
# app/routers/contacts.py - Contact CRUD Endpoints
# =============================================================================
# The /contacts resource. All endpoints require authentication.
#
#   GET    /        - Gets all contacts.          200 | 503
#   GET    /{id}    - Gets the contact with id.   200 | 404 | 503
#   POST   /        - Adds a contact.             201 | 503
#   DELETE /{id}    - Removes contact with id.    200 | 404 | 503
#   PUT    /{id}    - Edits contact with id.      200 | 404 | 503
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import get_current_user, AuthUser
from core.models.contact import ContactCreate, ContactResponse, ContactUpdate
from core.services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])

ContactId = Annotated[str, Path(min_length=1, description="Contact id")]


@router.get("", response_model=list[ContactResponse])
@router.get("/", response_model=list[ContactResponse], include_in_schema=False)
async def get_contacts():
    """
    Get all the contacts from the database.

    - HTTP 200 - The contacts were retrieved.
    - HTTP 503 - A server error prevented the contacts from being received.
    """
    return ContactService.list_contacts()


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(contact_id: ContactId):
    """
    Get one contact.

    - HTTP 200 - The contact was retrieved.
    - HTTP 404 - No contact has this id.
    """
    return ContactService.get_contact(contact_id)


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=ContactResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def add_contact(
    request: ContactCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Add a new contact to the database.

    - HTTP 201 - A new contact was created and saved.
    - HTTP 503 - A server error prevented the new contact from being saved.
    """
    contact = ContactService.create_contact(request)
    logger.debug(f"Contact {contact.get('id')} added by user {user.id}")
    return contact


@router.delete("/{contact_id}", response_model=ContactResponse)
async def delete_contact(contact_id: ContactId):
    """
    Remove a contact from the database.

    - HTTP 200 - The contact was removed; the removed document is returned.
    - HTTP 404 - The contact was not found in the database.
    """
    return ContactService.delete_contact(contact_id)


@router.put("/{contact_id}", response_model=ContactResponse)
async def edit_contact(contact_id: ContactId, request: ContactUpdate):
    """
    Update an existing contact in the database.

    Only the fields present in the body change.

    - HTTP 200 - The contact was edited; the updated document is returned.
    - HTTP 404 - The contact was not found in the database.
    """
    return ContactService.update_contact(contact_id, request)
