"""
Authentication API endpoints.

Routes:
- POST /auth/register - Create account and personal team
- POST /auth/login - Email/password sign-in
- POST /auth/google - Google sign-in
- POST /auth/refresh - Rotate the token pair
- POST /auth/logout - Revoke access and refresh tokens
- GET/PATCH /auth/me - Profile
- PATCH /auth/me/password - Change password
- POST /auth/me/set-password - First password for Google-only accounts
- POST /auth/forgot-password, POST /auth/reset-password - Password reset
- POST/DELETE /auth/me/link-google - Link or unlink Google

Dependencies: brainforge.application.services.auth_service, brainforge.models.auth
System role: Authentication and profile HTTP API
"""

from fastapi import APIRouter, Depends, status

from brainforge.api.deps import get_bearer_token, get_current_user
from brainforge.api.deps.dependencies import get_auth_service
from brainforge.application.services import AuthService
from brainforge.boundary.db.models import UserModel
from brainforge.models.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    GoogleAuthRequest,
    LinkGoogleRequest,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SetPasswordRequest,
    UpdateProfileRequest,
)
from brainforge.models.common import MessageData, SuccessResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    """
    Register a new account.

    Args:
        request: Email, password and display name
        auth_service: Injected AuthService

    Returns:
        SuccessResponse: ``{user, tokens}``
    """
    return SuccessResponse(data=await auth_service.register(request.email, request.password, request.name))


@router.post("/login")
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    return SuccessResponse(data=await auth_service.login(request.email, request.password))


@router.post("/google")
async def google_login(
    request: GoogleAuthRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    """Sign in with a Google ID token or an implicit-flow access token."""
    user_info = request.user_info.model_dump() if request.user_info else None
    return SuccessResponse(data=await auth_service.google_login(request.credential, user_info))


@router.post("/refresh")
async def refresh(
    request: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    return SuccessResponse(data=await auth_service.refresh(request.refresh_token))


@router.post("/logout")
async def logout(
    request: LogoutRequest | None = None,
    token: str = Depends(get_bearer_token),
    user: UserModel = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    await auth_service.logout(token, request.refresh_token if request else None)
    return SuccessResponse(data=MessageData(message="Logged out successfully"))


@router.get("/me")
async def get_me(
    user: UserModel = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    return SuccessResponse(data=await auth_service.get_profile(user.id))


@router.patch("/me")
async def update_me(
    request: UpdateProfileRequest,
    user: UserModel = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    return SuccessResponse(
        data=await auth_service.update_profile(user.id, request.model_dump(exclude_unset=True))
    )


@router.patch("/me/password")
async def change_password(
    request: ChangePasswordRequest,
    user: UserModel = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    return SuccessResponse(
        data=await auth_service.change_password(user.id, request.current_password, request.new_password)
    )


@router.post("/me/set-password")
async def set_password(
    request: SetPasswordRequest,
    user: UserModel = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    return SuccessResponse(data=await auth_service.set_password(user.id, request.new_password))


@router.post("/forgot-password")
async def forgot_password(
    request: ForgotPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    """Always answers with the same message, whether or not the email exists."""
    return SuccessResponse(data=await auth_service.forgot_password(request.email))


@router.post("/reset-password")
async def reset_password(
    request: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    return SuccessResponse(data=await auth_service.reset_password(request.token, request.new_password))


@router.post("/me/link-google")
async def link_google(
    request: LinkGoogleRequest,
    user: UserModel = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    user_info = request.user_info.model_dump() if request.user_info else None
    return SuccessResponse(data=await auth_service.link_google(user.id, request.credential, user_info))


@router.delete("/me/link-google")
async def unlink_google(
    user: UserModel = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    return SuccessResponse(data=await auth_service.unlink_google(user.id))
