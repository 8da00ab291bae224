"""
Auth service orchestrator.

Registration, password and Google sign-in, token refresh and revocation,
profile management and password reset.

Refresh and access tokens are revoked by storing their SHA-256 digest until
the moment the token would have expired anyway.

Dependencies: brainforge.boundary.db.CRUD, brainforge.boundary.google,
              brainforge.core.security
System role: Identity and session use case orchestration
"""

import logging
import secrets
from datetime import timedelta
from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import user_profile
from brainforge.application.services.team_service import create_personal_team
from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD import (
    password_reset_token_crud,
    revoked_token_crud,
    user_crud,
)
from brainforge.boundary.db.models import UserModel
from brainforge.boundary.google import GoogleTokenVerifier
from brainforge.configs import get_settings
from brainforge.core.exceptions import AppError, ConflictError, UnauthorizedError, ValidationError
from brainforge.core.security import (
    generate_token_pair,
    hash_password,
    hash_token,
    validate_password_strength,
    verify_password,
    verify_refresh_token,
)

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If an account exists with this email, a reset link has been generated."


async def revoke_token(db: AsyncSession, token: str, ttl: timedelta) -> None:
    """Blacklist a token for ``ttl``; revoking twice is a no-op."""
    digest = hash_token(token)
    now = utcnow()
    if await revoked_token_crud.is_revoked(db, digest, now):
        return
    await revoked_token_crud.purge_expired(db, now)
    await revoked_token_crud.create(db, token_hash=digest, expires_at=now + ttl)


async def is_token_revoked(db: AsyncSession, token: str) -> bool:
    return await revoked_token_crud.is_revoked(db, hash_token(token), utcnow())


class AuthService:
    """Auth service orchestrator."""

    def __init__(self, db: AsyncSession, google: GoogleTokenVerifier | None = None) -> None:
        """
        Initialize auth service.

        Args:
            db: Async SQLAlchemy session
            google: Google credential verifier (built from settings when omitted)
        """
        self.db = db
        self.google = google or GoogleTokenVerifier(get_settings().security.google_client_id)

    async def _session_payload(self, user: UserModel) -> dict:
        return {"user": user_profile(user), "tokens": generate_token_pair(user.id, user.email)}

    async def _get_user(self, user_id: UUID) -> UserModel:
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise UnauthorizedError("User not found")
        return user

    async def register(self, email: str, password: str, name: str) -> dict:
        """
        Create an account with a personal team.

        Returns:
            dict: ``{user, tokens}``

        Raises:
            ConflictError: Email already registered
            ValidationError: Weak password
        """
        if await user_crud.get_by_email(self.db, email):
            raise ConflictError("Email already registered")
        validate_password_strength(password)

        try:
            user = await user_crud.create(
                self.db,
                email=email.lower(),
                name=name,
                password_hash=hash_password(password),
            )
            await create_personal_team(self.db, user)
            logger.info("User registered", extra={"user_id": str(user.id)})
            return await self._session_payload(user)
        except Exception as e:
            logger.error("Failed to register user", extra={"error": str(e)})
            raise

    async def login(self, email: str, password: str) -> dict:
        user = await user_crud.get_by_email(self.db, email)
        if user is None:
            raise UnauthorizedError("Invalid email or password")
        if not user.password_hash:
            raise UnauthorizedError("This account uses Google sign-in. Please log in with Google.")
        if not verify_password(password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return await self._session_payload(user)

    async def google_login(self, credential: str, user_info: dict | None = None) -> dict:
        """
        Sign in with Google, linking or creating the account as needed.

        Lookup is by Google id first, then by email. An existing email
        account gets the Google id attached; a new user gets a personal team.
        """
        identity = await self.google.verify(credential, user_info)

        user = await user_crud.get_by_google_id(self.db, identity.google_id)
        if user is None:
            user = await user_crud.get_by_email(self.db, identity.email)

        if user is not None:
            if not user.google_id:
                user = await user_crud.update_instance(
                    self.db,
                    user,
                    google_id=identity.google_id,
                    avatar_url=user.avatar_url or identity.picture,
                )
                logger.info("Google account linked on login", extra={"user_id": str(user.id)})
        else:
            user = await user_crud.create(
                self.db,
                email=identity.email.lower(),
                name=identity.name or identity.email.split("@")[0],
                google_id=identity.google_id,
                avatar_url=identity.picture,
            )
            await create_personal_team(self.db, user)
            logger.info("User registered with Google", extra={"user_id": str(user.id)})

        return await self._session_payload(user)

    async def refresh(self, refresh_token: str) -> dict:
        """
        Rotate a refresh token.

        Returns:
            dict: New ``{access_token, refresh_token}``
        """
        if await is_token_revoked(self.db, refresh_token):
            raise UnauthorizedError("Token has been revoked")
        try:
            payload = verify_refresh_token(refresh_token)
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid or expired refresh token")

        user = await user_crud.get_by_id(self.db, payload.user_id)
        if user is None:
            raise UnauthorizedError("User not found")

        config = get_settings().security
        await revoke_token(self.db, refresh_token, timedelta(days=config.refresh_token_ttl_days))
        return generate_token_pair(user.id, user.email)

    async def logout(self, access_token: str, refresh_token: str | None = None) -> None:
        config = get_settings().security
        if refresh_token:
            await revoke_token(self.db, refresh_token, timedelta(days=config.refresh_token_ttl_days))
        await revoke_token(self.db, access_token, timedelta(minutes=config.access_token_ttl_minutes))

    async def get_profile(self, user_id: UUID) -> dict:
        return user_profile(await self._get_user(user_id))

    async def update_profile(self, user_id: UUID, changes: dict) -> dict:
        user = await self._get_user(user_id)
        if changes:
            user = await user_crud.update_instance(self.db, user, **changes)
        return user_profile(user)

    async def change_password(self, user_id: UUID, current_password: str, new_password: str) -> dict:
        user = await self._get_user(user_id)
        if not user.password_hash:
            raise AppError(
                'This account does not have a password. Use "Set Password" instead.',
                status_code=400,
                code="NO_PASSWORD",
            )
        if not verify_password(current_password, user.password_hash):
            raise UnauthorizedError("Current password is incorrect")
        validate_password_strength(new_password)

        await user_crud.update_instance(self.db, user, password_hash=hash_password(new_password))
        logger.info("Password changed", extra={"user_id": str(user_id)})
        return {"message": "Password updated successfully"}

    async def set_password(self, user_id: UUID, new_password: str) -> dict:
        user = await self._get_user(user_id)
        if user.password_hash:
            raise AppError(
                'This account already has a password. Use "Change Password" instead.',
                status_code=400,
                code="HAS_PASSWORD",
            )
        validate_password_strength(new_password)

        await user_crud.update_instance(self.db, user, password_hash=hash_password(new_password))
        return {"message": "Password set successfully"}

    async def forgot_password(self, email: str) -> dict:
        """
        Issue a reset token when the account exists.

        The response never reveals whether the email is registered. Delivery
        is out of band; the token is written to the log.
        """
        user = await user_crud.get_by_email(self.db, email)
        if user is not None:
            token = secrets.token_hex(32)
            ttl = timedelta(minutes=get_settings().security.password_reset_ttl_minutes)
            await password_reset_token_crud.create(
                self.db, token=token, user_id=user.id, expires_at=utcnow() + ttl
            )
            logger.info(
                "Password reset token generated",
                extra={"user_id": str(user.id), "reset_token": token},
            )
        return {"message": FORGOT_PASSWORD_MESSAGE}

    async def reset_password(self, token: str, new_password: str) -> dict:
        record = await password_reset_token_crud.get_by_token(self.db, token)
        if record is None or record.expires_at < utcnow():
            raise ValidationError("Invalid or expired reset token", status_code=400)
        validate_password_strength(new_password)

        user = await self._get_user(record.user_id)
        await user_crud.update_instance(self.db, user, password_hash=hash_password(new_password))
        await password_reset_token_crud.delete_by_id(self.db, record.id)
        logger.info("Password reset", extra={"user_id": str(user.id)})
        return {"message": "Password has been reset successfully"}

    async def link_google(self, user_id: UUID, credential: str, user_info: dict | None = None) -> dict:
        user = await self._get_user(user_id)
        if user.google_id:
            raise AppError("Google account is already linked", status_code=409, code="ALREADY_LINKED")

        identity = await self.google.verify(credential, user_info)
        if identity.email.lower() != user.email.lower():
            raise AppError(
                "Google account email must match your account email",
                status_code=400,
                code="EMAIL_MISMATCH",
            )
        other = await user_crud.get_by_google_id(self.db, identity.google_id)
        if other is not None and other.id != user.id:
            raise AppError(
                "This Google account is already linked to another user",
                status_code=409,
                code="GOOGLE_ALREADY_USED",
            )

        user = await user_crud.update_instance(self.db, user, google_id=identity.google_id)
        return user_profile(user)

    async def unlink_google(self, user_id: UUID) -> dict:
        user = await self._get_user(user_id)
        if not user.google_id:
            raise AppError("No Google account is linked", status_code=400, code="NOT_LINKED")
        if not user.password_hash:
            raise AppError(
                "Please set a password before unlinking Google. You would be locked out otherwise.",
                status_code=400,
                code="NO_PASSWORD",
            )
        user = await user_crud.update_instance(self.db, user, google_id=None)
        return user_profile(user)
