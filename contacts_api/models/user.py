"""
contacts_api/models/user.py

Purpose: User document model

- Subscription plans
- New-user document construction (defaults for session, verification, avatar)
- Authenticated identity handed to route handlers
- Public projections of a user document
"""

import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from bson import ObjectId

from utils.constants import GRAVATAR_URL
from utils.time_utils import utcnow


class Subscription(str, Enum):
    STARTER = "starter"
    PRO = "pro"
    BUSINESS = "business"


@dataclass(frozen=True)
class CurrentUser:
    """
    Identity resolved from a bearer token.
    """
    id: ObjectId
    token: str
    document: Dict[str, Any]

    @property
    def user_id(self) -> str:
        return str(self.id)


def default_avatar_url(email: str) -> str:
    """
    Gravatar identicon derived from the normalized email.
    """
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return GRAVATAR_URL.format(digest=digest)


def new_user_document(
    email: str,
    password_hash: str,
    verification_token: str,
    subscription: Subscription = Subscription.STARTER,
) -> Dict[str, Any]:
    now = utcnow()
    return {
        "email": email,
        "password": password_hash,
        "subscription": subscription.value,
        "token": "",
        "token_version": 0,
        "verify": False,
        "verificationToken": verification_token,
        "avatarURL": default_avatar_url(email),
        "created_at": now,
        "updated_at": now,
    }


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """
    Strips secrets (password hash, session token) from a user document.
    """
    return {
        "id": str(user["_id"]),
        "email": user["email"],
        "subscription": user.get("subscription", Subscription.STARTER.value),
        "verify": user.get("verify", False),
        "avatarURL": user.get("avatarURL"),
    }


def session_info(user: Dict[str, Any]) -> Dict[str, Optional[str]]:
    return {
        "email": user["email"],
        "phone": user.get("phone"),
        "subscription": user.get("subscription", Subscription.STARTER.value),
    }
