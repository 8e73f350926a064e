"""
contacts_api/services/auth_service.py

Purpose: Account and session management

- Registration with email verification
- Login / logout with a single active token per user
- Bearer token resolution for protected routes
- Subscription and avatar updates
"""

import uuid
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import UploadFile
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
from starlette.concurrency import run_in_threadpool

from contacts_api.core.config import Settings
from contacts_api.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ResourceNotFoundError,
    ValidationError,
)
from contacts_api.core.logging import get_logger, LogContext
from contacts_api.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from contacts_api.db.mongo import get_users_collection
from contacts_api.models.user import (
    CurrentUser,
    Subscription,
    new_user_document,
    public_user,
    session_info,
)
from contacts_api.schemas.auth import LoginRequest, RegisterRequest
from contacts_api.services.avatar_service import AvatarStorage, is_image
from contacts_api.services.email_service import EmailService
from utils.constants import (
    ALREADY_VERIFIED,
    CONCURRENT_LOGIN,
    EMAIL_IN_USE,
    EMAIL_NOT_VERIFIED,
    INVALID_AVATAR,
    INVALID_CREDENTIALS,
    MISSING_SUBSCRIPTION,
    USER_NOT_FOUND,
)
from utils.time_utils import utcnow

logger = get_logger(__name__)


async def authenticate_token(users, token: str, config: Settings) -> CurrentUser:
    """
    Resolves a bearer token to the user it was issued to.

    The token must carry a valid signature, be unexpired, name an existing
    user, and be exactly the token currently stored on that user.

    Raises:
        AuthenticationError: On any failure
    """
    if not token:
        raise AuthenticationError()

    payload = decode_access_token(token, config)

    try:
        user_id = ObjectId(payload["sub"])
    except (InvalidId, TypeError):
        raise AuthenticationError()

    user = await users.find_one({"_id": user_id})
    if not user or not user.get("token") or user["token"] != token:
        logger.warning("Rejected stale or unknown session token", extra={"user_id": str(user_id)})
        raise AuthenticationError()

    return CurrentUser(id=user_id, token=token, document=user)


class AuthService:
    """Registration, verification, sessions and profile updates"""

    def __init__(
        self,
        database,
        config: Settings,
        mailer: EmailService,
        avatars: Optional[AvatarStorage] = None,
    ):
        self.users = get_users_collection(database)
        self.config = config
        self.mailer = mailer
        self.avatars = avatars or AvatarStorage(config)

    async def register(self, data: RegisterRequest) -> str:
        """
        Creates an unverified account and mails its verification link.

        The user is persisted before the mail goes out; a mail failure
        leaves the account in place (resend verification recovers it).

        Returns:
            The registered email

        Raises:
            ConflictError: If the email is already registered
            ExternalServiceError: If the verification mail could not be sent
        """
        with LogContext(email=data.email):
            if await self.users.find_one({"email": data.email}):
                logger.warning("Registration rejected, email in use")
                raise ConflictError(EMAIL_IN_USE)

            password_hash = await run_in_threadpool(hash_password, data.password)
            verification_token = str(uuid.uuid4())
            document = new_user_document(
                data.email, password_hash, verification_token, data.subscription
            )

            try:
                result = await self.users.insert_one(document)
            except DuplicateKeyError:
                logger.warning("Registration lost a race on the unique email index")
                raise ConflictError(EMAIL_IN_USE)

            logger.info("User registered", extra={"user_id": str(result.inserted_id)})

            await self.mailer.send_verification_email(data.email, verification_token)
            return data.email

    async def verify_email(self, verification_token: str) -> None:
        user = await self.users.find_one_and_update(
            {"verificationToken": verification_token},
            {
                "$set": {
                    "verify": True,
                    "verificationToken": None,
                    "updated_at": utcnow()
                }
            },
            return_document=ReturnDocument.AFTER
        )
        if not user:
            raise ResourceNotFoundError(USER_NOT_FOUND)

        logger.info("Email verified", extra={"user_id": str(user["_id"])})

    async def resend_verification(self, email: str) -> None:
        user = await self.users.find_one({"email": email})
        if not user:
            raise ResourceNotFoundError(USER_NOT_FOUND)
        if user.get("verify"):
            raise ValidationError(ALREADY_VERIFIED)

        await self.mailer.send_verification_email(email, user["verificationToken"])
        logger.info("Verification email resent", extra={"user_id": str(user["_id"])})

    async def login(self, data: LoginRequest) -> str:
        """
        Issues a new session token, replacing any previous one.

        The token is stored with a compare-and-swap on ``token_version`` so
        that of two concurrent logins only one is persisted.

        Raises:
            AuthenticationError: Unknown email, wrong password or unverified account
            ConflictError: A concurrent login or logout changed the session first
        """
        user = await self.users.find_one({"email": data.email})
        password_ok = user is not None and await run_in_threadpool(
            verify_password, data.password, user.get("password", "")
        )
        if not password_ok:
            logger.warning("Login rejected, bad credentials", extra={"email": data.email})
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not user.get("verify"):
            logger.warning("Login rejected, email not verified", extra={"user_id": str(user["_id"])})
            raise AuthenticationError(EMAIL_NOT_VERIFIED)

        current_version = user.get("token_version")
        token = create_access_token(str(user["_id"]), (current_version or 0) + 1, self.config)

        updated = await self.users.find_one_and_update(
            {"_id": user["_id"], "token_version": current_version},
            {
                "$set": {"token": token, "updated_at": utcnow()},
                "$inc": {"token_version": 1}
            },
            return_document=ReturnDocument.AFTER
        )
        if updated is None:
            logger.warning("Login lost a concurrent session update", extra={"user_id": str(user["_id"])})
            raise ConflictError(CONCURRENT_LOGIN)

        logger.info("User logged in", extra={"user_id": str(user["_id"])})
        return token

    async def logout(self, current_user: CurrentUser) -> None:
        # Only clears the session the caller actually holds
        await self.users.update_one(
            {"_id": current_user.id, "token": current_user.token},
            {
                "$set": {"token": "", "updated_at": utcnow()},
                "$inc": {"token_version": 1}
            }
        )
        logger.info("User logged out", extra={"user_id": current_user.user_id})

    def current(self, current_user: CurrentUser) -> dict:
        return session_info(current_user.document)

    async def update_subscription(self, current_user: CurrentUser, subscription: Optional[str]) -> dict:
        if subscription not in {plan.value for plan in Subscription}:
            raise ValidationError(MISSING_SUBSCRIPTION)

        user = await self.users.find_one_and_update(
            {"_id": current_user.id},
            {"$set": {"subscription": subscription, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        if not user:
            raise ResourceNotFoundError(USER_NOT_FOUND)

        logger.info(f"Subscription changed to {subscription}", extra={"user_id": current_user.user_id})
        return public_user(user)

    async def update_avatar(self, current_user: CurrentUser, upload: UploadFile) -> str:
        """
        Stores an uploaded image as the user's avatar.

        Returns:
            The new public avatar URL
        """
        if not is_image(upload):
            raise ValidationError(INVALID_AVATAR)

        temp_path = await self.avatars.save_upload(upload)
        try:
            avatar_url = await run_in_threadpool(
                self.avatars.store,
                temp_path,
                current_user.user_id,
                upload.filename,
                upload.content_type,
            )
            await self.users.update_one(
                {"_id": current_user.id},
                {"$set": {"avatarURL": avatar_url, "updated_at": utcnow()}}
            )
        except Exception:
            self.avatars.discard(temp_path)
            raise

        logger.info("Avatar updated", extra={"user_id": current_user.user_id})
        return avatar_url
