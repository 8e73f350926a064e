"""
contacts_api/api/contacts.py

Purpose: Contacts endpoints

- All routes require a bearer token
- All routes operate on the caller's own contacts only
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from contacts_api.api.deps import get_contact_service, get_current_user
from contacts_api.models.user import CurrentUser
from contacts_api.schemas.contact import ContactBody, ContactList, ContactOut, FavoriteUpdate
from contacts_api.services.contact_service import ContactService
from utils.constants import DEFAULT_LIMIT, DEFAULT_PAGE

router = APIRouter()


@router.get("", response_model=ContactList)
async def list_contacts(
    page: int = Query(DEFAULT_PAGE),
    limit: int = Query(DEFAULT_LIMIT),
    favorite: Optional[bool] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    return await service.list_contacts(current_user.id, page, limit, favorite)


@router.get("/{contact_id}", response_model=ContactOut)
async def get_contact(
    contact_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    return await service.get_contact(current_user.id, contact_id)


@router.post("", response_model=ContactOut, status_code=status.HTTP_201_CREATED)
async def create_contact(
    body: ContactBody,
    current_user: CurrentUser = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    return await service.create_contact(current_user.id, body)


@router.put("/{contact_id}", response_model=ContactOut)
async def update_contact(
    contact_id: str,
    body: ContactBody,
    current_user: CurrentUser = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    return await service.update_contact(current_user.id, contact_id, body)


@router.patch("/{contact_id}/favorite", response_model=ContactOut)
async def update_favorite(
    contact_id: str,
    body: FavoriteUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    return await service.update_favorite(current_user.id, contact_id, body.favorite)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    await service.delete_contact(current_user.id, contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
