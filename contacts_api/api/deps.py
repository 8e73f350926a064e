"""
contacts_api/api/deps.py

Purpose: FastAPI dependencies

- Authorization guard (bearer token -> CurrentUser)
- Service construction from explicit settings and the database handle
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from contacts_api.core.config import Settings, get_settings
from contacts_api.core.exceptions import AuthenticationError
from contacts_api.db.mongo import get_database, get_users_collection
from contacts_api.models.user import CurrentUser
from contacts_api.services.auth_service import AuthService, authenticate_token
from contacts_api.services.avatar_service import AvatarStorage
from contacts_api.services.contact_service import ContactService
from contacts_api.services.email_service import EmailService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    database=Depends(get_database),
    config: Settings = Depends(get_settings),
) -> CurrentUser:
    """
    Authorization guard for protected routes.

    Rejects with 401 when the header is missing or not a Bearer token, and
    otherwise defers to the token check against the users collection.
    """
    if credentials is None or credentials.scheme != "Bearer":
        raise AuthenticationError()
    return await authenticate_token(get_users_collection(database), credentials.credentials, config)


def get_email_service(config: Settings = Depends(get_settings)) -> EmailService:
    return EmailService(config)


def get_avatar_storage(config: Settings = Depends(get_settings)) -> AvatarStorage:
    return AvatarStorage(config)


def get_auth_service(
    database=Depends(get_database),
    config: Settings = Depends(get_settings),
    mailer: EmailService = Depends(get_email_service),
    avatars: AvatarStorage = Depends(get_avatar_storage),
) -> AuthService:
    return AuthService(database, config, mailer, avatars)


def get_contact_service(database=Depends(get_database)) -> ContactService:
    return ContactService(database)
