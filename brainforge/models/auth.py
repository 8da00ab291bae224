"""
Auth request schemas.

Dependencies: pydantic
System role: Auth API contracts
"""

from pydantic import BaseModel, EmailStr, Field

from brainforge.models.common import PartialUpdate


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class GoogleUserInfo(BaseModel):
    """Profile the web client already fetched in the implicit flow."""

    sub: str | None = None
    email: EmailStr
    name: str | None = None
    picture: str | None = None


class GoogleAuthRequest(BaseModel):
    """
    Google sign-in payload.

    ``credential`` is an access token when ``user_info`` is present
    (implicit flow) and an ID token otherwise.
    """

    credential: str = Field(..., min_length=1)
    user_info: GoogleUserInfo | None = None


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class LogoutRequest(BaseModel):
    refresh_token: str | None = None


class UpdateProfileRequest(PartialUpdate):
    nullable_fields = frozenset({"avatar_url"})

    name: str | None = Field(None, min_length=1, max_length=100)
    avatar_url: str | None = Field(None, max_length=1024)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=128)


class SetPasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=1, max_length=128)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=128)


class LinkGoogleRequest(BaseModel):
    credential: str = Field(..., min_length=1)
    user_info: GoogleUserInfo | None = None
