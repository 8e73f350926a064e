"""
contacts_api/services/contact_service.py

Purpose: Contact management

- Owner-scoped create / read / update / delete
- Favorite filter and page/limit pagination for listings
- Every lookup filters by owner, so foreign contacts read as not found
"""

import math
from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument

from contacts_api.core.exceptions import ResourceNotFoundError, ValidationError
from contacts_api.core.logging import get_logger, LogContext
from contacts_api.db.mongo import get_contacts_collection
from contacts_api.models.contact import new_contact_document, public_contact
from contacts_api.schemas.contact import ContactBody
from utils.constants import CONTACT_NOT_FOUND, INVALID_PAGINATION, MAX_LIMIT, MISSING_FAVORITE
from utils.time_utils import utcnow
from utils.validation_utils import parse_object_id

logger = get_logger(__name__)


def last_page(total: int, limit: int) -> int:
    """
    Last available page for ``total`` items, never less than 1.
    """
    return max(1, math.ceil(total / limit))


class ContactService:
    """CRUD over the contacts collection for a single owner"""

    def __init__(self, database):
        self.contacts = get_contacts_collection(database)

    def _owned(self, owner_id: ObjectId, contact_id: str) -> Dict[str, Any]:
        """
        Filter matching one contact of one owner.

        Raises:
            ResourceNotFoundError: If the id is not a valid ObjectId
        """
        oid = parse_object_id(contact_id)
        if oid is None:
            raise ResourceNotFoundError(CONTACT_NOT_FOUND)
        return {"_id": oid, "owner": owner_id}

    async def list_contacts(
        self,
        owner_id: ObjectId,
        page: int,
        limit: int,
        favorite: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """
        Lists a page of the owner's contacts.

        A page past the end is clamped to the last page. ``limit`` is capped
        at MAX_LIMIT.

        Returns:
            {"contacts": [...], "total": int, "page": int, "limit": int}
        """
        if page < 1 or not 1 <= limit <= MAX_LIMIT:
            raise ValidationError(INVALID_PAGINATION, details={"max_limit": MAX_LIMIT})

        query: Dict[str, Any] = {"owner": owner_id}
        if favorite is not None:
            query["favorite"] = favorite

        total = await self.contacts.count_documents(query)
        page = min(page, last_page(total, limit))

        cursor = self.contacts.find(
            query,
            sort=[("_id", ASCENDING)],
            skip=(page - 1) * limit,
            limit=limit,
        )
        documents = await cursor.to_list(length=limit)

        return {
            "contacts": [public_contact(doc) for doc in documents],
            "total": total,
            "page": page,
            "limit": limit,
        }

    async def get_contact(self, owner_id: ObjectId, contact_id: str) -> Dict[str, Any]:
        contact = await self.contacts.find_one(self._owned(owner_id, contact_id))
        if not contact:
            raise ResourceNotFoundError(CONTACT_NOT_FOUND)
        return public_contact(contact)

    async def create_contact(self, owner_id: ObjectId, data: ContactBody) -> Dict[str, Any]:
        document = new_contact_document(data.model_dump(), owner_id)
        result = await self.contacts.insert_one(document)
        document["_id"] = result.inserted_id

        logger.info(
            "Contact created",
            extra={"user_id": str(owner_id), "contact_id": str(result.inserted_id)}
        )
        return public_contact(document)

    async def update_contact(self, owner_id: ObjectId, contact_id: str, data: ContactBody) -> Dict[str, Any]:
        """
        Replaces the fields present in the request body.
        """
        changes = data.model_dump(exclude_unset=True)
        return await self._update(owner_id, contact_id, changes)

    async def update_favorite(self, owner_id: ObjectId, contact_id: str, favorite: Optional[bool]) -> Dict[str, Any]:
        if favorite is None:
            raise ValidationError(MISSING_FAVORITE)
        return await self._update(owner_id, contact_id, {"favorite": favorite})

    async def _update(self, owner_id: ObjectId, contact_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        with LogContext(user_id=str(owner_id), contact_id=contact_id):
            contact = await self.contacts.find_one_and_update(
                self._owned(owner_id, contact_id),
                {"$set": {**changes, "updated_at": utcnow()}},
                return_document=ReturnDocument.AFTER
            )
            if not contact:
                logger.warning("Update of missing or foreign contact")
                raise ResourceNotFoundError(CONTACT_NOT_FOUND)

            logger.info(f"Contact updated: {', '.join(sorted(changes))}")
            return public_contact(contact)

    async def delete_contact(self, owner_id: ObjectId, contact_id: str) -> None:
        result = await self.contacts.delete_one(self._owned(owner_id, contact_id))
        if result.deleted_count == 0:
            raise ResourceNotFoundError(CONTACT_NOT_FOUND)

        logger.info("Contact deleted", extra={"user_id": str(owner_id), "contact_id": contact_id})
