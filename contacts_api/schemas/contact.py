"""
contacts_api/schemas/contact.py

Purpose: Request/response schemas for the contacts endpoints
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from utils.validation_utils import (
    validate_contact_email,
    validate_contact_name,
    validate_contact_phone,
)


class ContactBody(BaseModel):
    """
    Body of POST /contacts and PUT /contacts/{id}.
    """
    name: str = Field(..., description="First and last name, both capitalized")
    email: Optional[str] = None
    phone: str = Field(..., description="Phone number, e.g. 0501234567")
    favorite: bool = False

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "John Doe",
                "email": "john@example.com",
                "phone": "0501234567",
                "favorite": False
            }
        }
    }

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not validate_contact_name(v):
            raise ValueError("name must be two capitalized words")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not validate_contact_email(v):
            raise ValueError("email has an invalid format")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        if not validate_contact_phone(v):
            raise ValueError("phone has an invalid format")
        return v


class FavoriteUpdate(BaseModel):
    # Checked by the service so a missing flag gets a dedicated message
    favorite: Optional[bool] = None


class ContactOut(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: str
    favorite: bool
    owner: str


class ContactList(BaseModel):
    contacts: List[ContactOut]
    total: int
    page: int
    limit: int
