"""
Tests for the auth router.

Services are mocked; the real bearer-token guard runs where the test is
about authentication itself.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from brainforge.api.deps import get_current_user
from brainforge.api.deps.dependencies import get_auth_service
from brainforge.api.routers.auth import router as auth_router
from brainforge.boundary.db import get_async_db
from brainforge.core.exceptions import ConflictError, UnauthorizedError

from conftest import build_test_app, make_client, sample_user


@pytest.fixture
def mock_auth_service():
    return AsyncMock()


@pytest.fixture
def client(mock_auth_service):
    client = make_client(build_test_app(auth_router))
    client.app.dependency_overrides[get_auth_service] = lambda: mock_auth_service
    return client


def test_register(client, mock_auth_service):
    user_id = uuid4()
    mock_auth_service.register.return_value = {
        "user": {"id": str(user_id), "email": "ada@example.com", "name": "Ada"},
        "tokens": {"access_token": "a", "refresh_token": "r"},
    }

    response = client.post(
        "/auth/register", json={"email": "ada@example.com", "password": "Password1", "name": "Ada"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["tokens"]["access_token"] == "a"
    mock_auth_service.register.assert_called_once_with("ada@example.com", "Password1", "Ada")


def test_register_rejects_bad_email(client, mock_auth_service):
    response = client.post("/auth/register", json={"email": "not-an-email", "password": "Password1", "name": "Ada"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    mock_auth_service.register.assert_not_called()


def test_register_duplicate_email(client, mock_auth_service):
    mock_auth_service.register.side_effect = ConflictError("Email already registered")

    response = client.post(
        "/auth/register", json={"email": "ada@example.com", "password": "Password1", "name": "Ada"}
    )

    assert response.status_code == 409
    assert response.json()["error"]["message"] == "Email already registered"


def test_login_failure(client, mock_auth_service):
    mock_auth_service.login.side_effect = UnauthorizedError("Invalid email or password")

    response = client.post("/auth/login", json={"email": "ada@example.com", "password": "wrong"})

    assert response.status_code == 401
    assert response.json()["error"] == {"message": "Invalid email or password", "code": "UNAUTHORIZED"}


def test_google_login_passes_user_info(client, mock_auth_service):
    mock_auth_service.google_login.return_value = {"user": {}, "tokens": {}}

    response = client.post(
        "/auth/google",
        json={"credential": "g-token", "user_info": {"sub": "123", "email": "ada@example.com", "name": "Ada"}},
    )

    assert response.status_code == 200
    credential, user_info = mock_auth_service.google_login.call_args.args
    assert credential == "g-token"
    assert user_info["sub"] == "123"
    assert user_info["email"] == "ada@example.com"


def test_refresh(client, mock_auth_service):
    mock_auth_service.refresh.return_value = {"access_token": "a2", "refresh_token": "r2"}

    response = client.post("/auth/refresh", json={"refresh_token": "r1"})

    assert response.status_code == 200
    assert response.json()["data"]["refresh_token"] == "r2"
    mock_auth_service.refresh.assert_called_once_with("r1")


def test_logout_revokes_both_tokens(client, mock_auth_service):
    client.app.dependency_overrides[get_current_user] = lambda: sample_user()

    response = client.post(
        "/auth/logout",
        json={"refresh_token": "r1"},
        headers={"Authorization": "Bearer access-1"},
    )

    assert response.status_code == 200
    assert response.json()["data"]["message"] == "Logged out successfully"
    mock_auth_service.logout.assert_called_once_with("access-1", "r1")


def test_me_requires_bearer_token(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Missing or invalid authorization header"


def test_me_rejects_bad_token(client):
    client.app.dependency_overrides[get_async_db] = lambda: AsyncMock()
    with patch(
        "brainforge.api.deps.dependencies.authenticate_token",
        AsyncMock(side_effect=UnauthorizedError("Invalid or expired token")),
    ) as authenticate:
        response = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid or expired token"
    assert authenticate.call_args.args[1] == "garbage"


def test_update_profile_sends_only_given_fields(client, mock_auth_service):
    user = sample_user()
    client.app.dependency_overrides[get_current_user] = lambda: user
    mock_auth_service.update_profile.return_value = {"id": str(user.id), "name": "Ada L."}

    response = client.patch("/auth/me", json={"name": "Ada L."})

    assert response.status_code == 200
    mock_auth_service.update_profile.assert_called_once_with(user.id, {"name": "Ada L."})


def test_change_password(client, mock_auth_service):
    user = sample_user()
    client.app.dependency_overrides[get_current_user] = lambda: user
    mock_auth_service.change_password.return_value = {"message": "Password updated successfully"}

    response = client.patch(
        "/auth/me/password", json={"current_password": "Password1", "new_password": "Password2"}
    )

    assert response.status_code == 200
    mock_auth_service.change_password.assert_called_once_with(user.id, "Password1", "Password2")


def test_forgot_password_is_public(client, mock_auth_service):
    mock_auth_service.forgot_password.return_value = {"message": "sent"}

    response = client.post("/auth/forgot-password", json={"email": "ada@example.com"})

    assert response.status_code == 200
    mock_auth_service.forgot_password.assert_called_once_with("ada@example.com")


def test_unlink_google(client, mock_auth_service):
    user = sample_user()
    client.app.dependency_overrides[get_current_user] = lambda: user
    mock_auth_service.unlink_google.return_value = {"google_linked": False}

    response = client.delete("/auth/me/link-google")

    assert response.status_code == 200
    assert response.json()["data"] == {"google_linked": False}
