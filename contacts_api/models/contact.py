"""
contacts_api/models/contact.py

Purpose: Contact document model

- New-contact document construction bound to an owner
- Public projection of a contact document
"""

from typing import Any, Dict

from bson import ObjectId

from utils.time_utils import utcnow


def new_contact_document(data: Dict[str, Any], owner_id: ObjectId) -> Dict[str, Any]:
    now = utcnow()
    return {
        "name": data["name"],
        "email": data.get("email"),
        "phone": data["phone"],
        "favorite": bool(data.get("favorite", False)),
        "owner": owner_id,
        "created_at": now,
        "updated_at": now,
    }


def public_contact(contact: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(contact["_id"]),
        "name": contact["name"],
        "email": contact.get("email"),
        "phone": contact["phone"],
        "favorite": contact.get("favorite", False),
        "owner": str(contact["owner"]),
    }
