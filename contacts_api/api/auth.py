"""
contacts_api/api/auth.py

Purpose: Authentication endpoints

- Register, verify (link and resend), login, logout
- Current session, subscription and avatar updates
"""

from fastapi import APIRouter, Depends, File, UploadFile, status

from contacts_api.api.deps import get_auth_service, get_current_user
from contacts_api.models.user import CurrentUser
from contacts_api.schemas.auth import (
    AvatarResponse,
    CurrentSession,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResendVerificationRequest,
    SubscriptionUpdate,
    UserPublic,
)
from contacts_api.services.auth_service import AuthService
from utils.constants import LOGGED_OUT, VERIFICATION_EMAIL_SENT, VERIFICATION_SUCCESSFUL

router = APIRouter()


@router.post("/register", response_model=str, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """
    Registers an account and sends its verification email.
    Responds with the registered email.
    """
    return await service.register(body)


@router.get("/verify/{verification_token}", response_model=MessageResponse)
async def verify_email(verification_token: str, service: AuthService = Depends(get_auth_service)):
    await service.verify_email(verification_token)
    return {"message": VERIFICATION_SUCCESSFUL}


@router.post("/verify", response_model=MessageResponse)
async def resend_verification(body: ResendVerificationRequest, service: AuthService = Depends(get_auth_service)):
    await service.resend_verification(body.email)
    return {"message": VERIFICATION_EMAIL_SENT}


@router.post("/login", response_model=str)
async def login(body: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """
    Responds with a bearer token; any previously issued token stops working.
    """
    return await service.login(body)


@router.get("/logout", response_model=MessageResponse)
async def logout(
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    await service.logout(current_user)
    return {"message": LOGGED_OUT}


@router.get("/current", response_model=CurrentSession)
async def current(
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return service.current(current_user)


@router.patch("/subscription", response_model=UserPublic)
async def update_subscription(
    body: SubscriptionUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return await service.update_subscription(current_user, body.subscription)


@router.patch("/avatar", response_model=AvatarResponse)
async def update_avatar(
    avatar: UploadFile = File(...),
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    avatar_url = await service.update_avatar(current_user, avatar)
    return {"avatarURL": avatar_url}
