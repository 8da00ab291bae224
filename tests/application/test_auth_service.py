"""
Tests for AuthService on the in-memory database.

Google verification is replaced by an AsyncMock verifier; everything else
runs against real CRUD and security helpers.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from brainforge.application.services.auth_service import (
    FORGOT_PASSWORD_MESSAGE,
    AuthService,
    is_token_revoked,
    revoke_token,
)
from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD import password_reset_token_crud, team_member_crud, user_crud
from brainforge.boundary.db.models import TeamRole
from brainforge.boundary.google import GoogleIdentity
from brainforge.core.exceptions import AppError, ConflictError, UnauthorizedError, ValidationError
from brainforge.core.security import verify_access_token, verify_password

from conftest import TEST_PASSWORD


@pytest.fixture
def google():
    verifier = AsyncMock()
    verifier.verify.return_value = GoogleIdentity(
        google_id="g-123", email="grace@example.com", name="Grace", picture="https://img/grace.png"
    )
    return verifier


@pytest.fixture
def auth_service(test_async_db, google):
    return AuthService(test_async_db, google=google)


class TestRegisterAndLogin:
    """Test suite for password accounts."""

    @pytest.mark.asyncio
    async def test_register_creates_personal_team(self, auth_service, test_async_db):
        result = await auth_service.register("Ada@Example.com", TEST_PASSWORD, "Ada")

        user = result["user"]
        assert user["email"] == "ada@example.com"
        assert user["has_password"] is True
        assert "password_hash" not in user
        assert verify_access_token(result["tokens"]["access_token"]).user_id == user["id"]

        memberships = await team_member_crud.list_for_user(test_async_db, user["id"])
        assert len(memberships) == 1
        assert memberships[0].role == TeamRole.OWNER
        assert memberships[0].team.name == "Ada's Team"

    @pytest.mark.asyncio
    async def test_register_duplicate_email_is_case_insensitive(self, auth_service, make_user):
        await make_user(email="ada@example.com")

        with pytest.raises(ConflictError, match="Email already registered"):
            await auth_service.register("ADA@example.com", TEST_PASSWORD, "Ada")

    @pytest.mark.asyncio
    async def test_register_rejects_weak_password(self, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            await auth_service.register("ada@example.com", "password", "Ada")

        assert exc_info.value.details["field"] == "password"

    @pytest.mark.asyncio
    async def test_login(self, auth_service, make_user):
        user = await make_user(email="ada@example.com")

        result = await auth_service.login("ada@example.com", TEST_PASSWORD)

        assert result["user"]["id"] == user.id
        assert set(result["tokens"]) == {"access_token", "refresh_token"}

    @pytest.mark.asyncio
    async def test_login_wrong_password_and_unknown_email_look_the_same(self, auth_service, make_user):
        await make_user(email="ada@example.com")

        with pytest.raises(UnauthorizedError, match="Invalid email or password"):
            await auth_service.login("ada@example.com", "Wrong1234")
        with pytest.raises(UnauthorizedError, match="Invalid email or password"):
            await auth_service.login("nobody@example.com", TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_login_google_only_account(self, auth_service, make_user):
        await make_user(email="ada@example.com", password=None)

        with pytest.raises(UnauthorizedError, match="Google sign-in"):
            await auth_service.login("ada@example.com", TEST_PASSWORD)


class TestTokens:
    """Test suite for refresh rotation and revocation."""

    @pytest.mark.asyncio
    async def test_refresh_rotates_and_revokes_old_token(self, auth_service):
        session = await auth_service.register("ada@example.com", TEST_PASSWORD, "Ada")
        old_refresh = session["tokens"]["refresh_token"]

        rotated = await auth_service.refresh(old_refresh)

        assert rotated["refresh_token"] != old_refresh
        with pytest.raises(UnauthorizedError, match="Token has been revoked"):
            await auth_service.refresh(old_refresh)
        assert await auth_service.refresh(rotated["refresh_token"])

    @pytest.mark.asyncio
    async def test_refresh_rejects_access_token(self, auth_service):
        session = await auth_service.register("ada@example.com", TEST_PASSWORD, "Ada")

        with pytest.raises(UnauthorizedError, match="Invalid or expired refresh token"):
            await auth_service.refresh(session["tokens"]["access_token"])

    @pytest.mark.asyncio
    async def test_logout_revokes_both_tokens(self, auth_service, test_async_db):
        tokens = (await auth_service.register("ada@example.com", TEST_PASSWORD, "Ada"))["tokens"]

        await auth_service.logout(tokens["access_token"], tokens["refresh_token"])

        assert await is_token_revoked(test_async_db, tokens["access_token"])
        assert await is_token_revoked(test_async_db, tokens["refresh_token"])

    @pytest.mark.asyncio
    async def test_revoke_twice_is_noop(self, test_async_db):
        await revoke_token(test_async_db, "some-token", timedelta(minutes=5))
        await revoke_token(test_async_db, "some-token", timedelta(minutes=5))

        assert await is_token_revoked(test_async_db, "some-token")
        assert not await is_token_revoked(test_async_db, "other-token")

    @pytest.mark.asyncio
    async def test_expired_revocation_no_longer_counts(self, test_async_db):
        await revoke_token(test_async_db, "stale-token", timedelta(seconds=-1))

        assert not await is_token_revoked(test_async_db, "stale-token")


class TestPasswords:
    """Test suite for password change, set and reset."""

    @pytest.mark.asyncio
    async def test_change_password(self, auth_service, make_user, test_async_db):
        user = await make_user()

        await auth_service.change_password(user.id, TEST_PASSWORD, "Better123")

        refreshed = await user_crud.get_by_id(test_async_db, user.id)
        assert verify_password("Better123", refreshed.password_hash)

    @pytest.mark.asyncio
    async def test_change_password_wrong_current(self, auth_service, make_user):
        user = await make_user()

        with pytest.raises(UnauthorizedError, match="Current password is incorrect"):
            await auth_service.change_password(user.id, "Nope12345", "Better123")

    @pytest.mark.asyncio
    async def test_change_and_set_password_depend_on_existing_password(self, auth_service, make_user):
        google_user = await make_user(password=None)
        password_user = await make_user()

        with pytest.raises(AppError) as no_password:
            await auth_service.change_password(google_user.id, "x", "Better123")
        with pytest.raises(AppError) as has_password:
            await auth_service.set_password(password_user.id, "Better123")

        assert no_password.value.code == "NO_PASSWORD"
        assert has_password.value.code == "HAS_PASSWORD"
        assert (await auth_service.set_password(google_user.id, "Better123"))["message"]

    @pytest.mark.asyncio
    async def test_forgot_password_does_not_reveal_accounts(self, auth_service, make_user, test_async_db):
        user = await make_user(email="ada@example.com")

        known = await auth_service.forgot_password("ada@example.com")
        unknown = await auth_service.forgot_password("nobody@example.com")

        assert known == unknown == {"message": FORGOT_PASSWORD_MESSAGE}
        tokens = await password_reset_token_crud.list_where(test_async_db)
        assert [t.user_id for t in tokens] == [user.id]

    @pytest.mark.asyncio
    async def test_reset_password_consumes_token(self, auth_service, make_user, test_async_db):
        user = await make_user(email="ada@example.com")
        await auth_service.forgot_password("ada@example.com")
        token = (await password_reset_token_crud.list_where(test_async_db))[0].token

        await auth_service.reset_password(token, "Fresh1234")

        assert (await auth_service.login("ada@example.com", "Fresh1234"))["user"]["id"] == user.id
        with pytest.raises(ValidationError, match="Invalid or expired reset token"):
            await auth_service.reset_password(token, "Fresh1234")

    @pytest.mark.asyncio
    async def test_reset_password_expired_token(self, auth_service, make_user, test_async_db):
        user = await make_user()
        await password_reset_token_crud.create(
            test_async_db, token="expired", user_id=user.id, expires_at=utcnow() - timedelta(minutes=1)
        )

        with pytest.raises(ValidationError, match="Invalid or expired reset token"):
            await auth_service.reset_password("expired", "Fresh1234")


class TestGoogle:
    """Test suite for Google sign-in and account linking."""

    @pytest.mark.asyncio
    async def test_google_login_creates_user_with_team(self, auth_service, google, test_async_db):
        result = await auth_service.google_login("cred", {"email": "grace@example.com"})

        assert result["user"]["email"] == "grace@example.com"
        assert result["user"]["google_linked"] is True
        assert result["user"]["has_password"] is False
        google.verify.assert_called_once_with("cred", {"email": "grace@example.com"})
        assert len(await team_member_crud.list_for_user(test_async_db, result["user"]["id"])) == 1

    @pytest.mark.asyncio
    async def test_google_login_links_existing_email_account(self, auth_service, make_user):
        user = await make_user(email="grace@example.com")

        result = await auth_service.google_login("cred")

        assert result["user"]["id"] == user.id
        assert result["user"]["google_linked"] is True
        assert result["user"]["avatar_url"] == "https://img/grace.png"

    @pytest.mark.asyncio
    async def test_link_google_requires_matching_email(self, auth_service, make_user):
        user = await make_user(email="ada@example.com")

        with pytest.raises(AppError) as exc_info:
            await auth_service.link_google(user.id, "cred")

        assert exc_info.value.code == "EMAIL_MISMATCH"

    @pytest.mark.asyncio
    async def test_link_google_already_used(self, auth_service, make_user, test_async_db):
        other = await make_user(email="other@example.com")
        await user_crud.update_instance(test_async_db, other, google_id="g-123")
        user = await make_user(email="grace@example.com")

        with pytest.raises(AppError) as exc_info:
            await auth_service.link_google(user.id, "cred")

        assert exc_info.value.code == "GOOGLE_ALREADY_USED"

    @pytest.mark.asyncio
    async def test_unlink_requires_password(self, auth_service, make_user, test_async_db):
        user = await make_user(email="grace@example.com", password=None)
        await user_crud.update_instance(test_async_db, user, google_id="g-123")

        with pytest.raises(AppError) as exc_info:
            await auth_service.unlink_google(user.id)

        assert exc_info.value.code == "NO_PASSWORD"

    @pytest.mark.asyncio
    async def test_link_then_unlink(self, auth_service, make_user):
        user = await make_user(email="grace@example.com")

        linked = await auth_service.link_google(user.id, "cred")
        unlinked = await auth_service.unlink_google(user.id)

        assert linked["google_linked"] is True
        assert unlinked["google_linked"] is False
