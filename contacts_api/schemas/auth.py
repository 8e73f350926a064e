"""
contacts_api/schemas/auth.py

Purpose: Request/response schemas for the auth endpoints

- Validates registration and login payloads
- Shapes user data returned to clients (never the hash or token)
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from contacts_api.models.user import Subscription
from utils.validation_utils import MIN_PASSWORD_LENGTH, validate_user_email


class EmailBody(BaseModel):
    email: str = Field(..., description="Account email")

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        if not validate_user_email(v):
            raise ValueError("email has an invalid format")
        return v


class LoginRequest(EmailBody):
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)

    model_config = {
        "json_schema_extra": {
            "example": {"email": "a@b.co", "password": "secret1"}
        }
    }


class RegisterRequest(LoginRequest):
    subscription: Subscription = Subscription.STARTER


class ResendVerificationRequest(EmailBody):
    pass


class SubscriptionUpdate(BaseModel):
    # Checked by the service so a missing or unknown plan gets one message
    subscription: Optional[str] = None


class UserPublic(BaseModel):
    id: str
    email: str
    subscription: Subscription
    verify: bool
    avatarURL: Optional[str] = None


class CurrentSession(BaseModel):
    email: str
    phone: Optional[str] = None
    subscription: Subscription


class MessageResponse(BaseModel):
    message: str


class AvatarResponse(BaseModel):
    avatarURL: str
