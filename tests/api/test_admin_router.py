"""
Tests for the admin console and system settings routers.

System role: Verification of admin-only HTTP API
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from brainforge.api.deps import get_current_user
from brainforge.api.deps.dependencies import get_admin_service, get_settings_service
from brainforge.api.routers.admin import router as admin_router
from brainforge.api.routers.settings import router as settings_router
from brainforge.boundary.db.models import AIProvider
from brainforge.core.exceptions import AppError

from conftest import build_test_app, make_client, sample_user


@pytest.fixture
def mock_admin_service():
    return AsyncMock()


@pytest.fixture
def mock_settings_service():
    return AsyncMock()


@pytest.fixture
def app(mock_admin_service, mock_settings_service):
    app = build_test_app(admin_router, settings_router)
    app.dependency_overrides[get_admin_service] = lambda: mock_admin_service
    app.dependency_overrides[get_settings_service] = lambda: mock_settings_service
    return app


@pytest.fixture
def admin():
    return sample_user(is_admin=True)


@pytest.fixture
def client(app, admin):
    app.dependency_overrides[get_current_user] = lambda: admin
    return make_client(app)


def test_non_admin_is_rejected(app, mock_admin_service):
    app.dependency_overrides[get_current_user] = lambda: sample_user(is_admin=False)
    client = make_client(app)

    for path in ("/admin/stats", "/admin/users", "/admin/settings"):
        response = client.get(path)
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Admin access required"
    mock_admin_service.stats.assert_not_called()


def test_stats(client, mock_admin_service):
    mock_admin_service.stats.return_value = {"total_users": 3, "total_teams": 2}

    response = client.get("/admin/stats")

    assert response.status_code == 200
    assert response.json()["data"]["total_users"] == 3


def test_list_users_pagination(client, mock_admin_service):
    mock_admin_service.list_users.return_value = {"users": [], "total": 0, "page": 2, "limit": 5}

    response = client.get("/admin/users", params={"page": 2, "limit": 5, "search": "ada"})

    assert response.status_code == 200
    mock_admin_service.list_users.assert_called_once_with(2, 5, "ada")


def test_list_users_limit_is_bounded(client, mock_admin_service):
    response = client.get("/admin/users", params={"limit": 500})

    assert response.status_code == 400
    mock_admin_service.list_users.assert_not_called()


def test_delete_user_passes_acting_admin(client, mock_admin_service, admin):
    target = uuid4()
    mock_admin_service.delete_user.return_value = {"message": "User deleted"}

    response = client.delete(f"/admin/users/{target}")

    assert response.status_code == 200
    mock_admin_service.delete_user.assert_called_once_with(target, admin.id)


def test_delete_self_is_rejected(client, mock_admin_service, admin):
    mock_admin_service.delete_user.side_effect = AppError(
        "You cannot delete your own account", status_code=400, code="CANNOT_DELETE_SELF"
    )

    response = client.delete(f"/admin/users/{admin.id}")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_DELETE_SELF"


def test_set_admin(client, mock_admin_service):
    target = uuid4()
    mock_admin_service.set_admin.return_value = {"id": str(target), "is_admin": True}

    response = client.patch(f"/admin/users/{target}/admin", json={"is_admin": True})

    assert response.status_code == 200
    mock_admin_service.set_admin.assert_called_once_with(target, True)


def test_usage_logs_filters(client, mock_admin_service):
    user_id = uuid4()
    mock_admin_service.ai_usage_logs.return_value = {"logs": [], "total": 0}

    response = client.get(
        "/admin/ai-usage/logs", params={"provider": "GROQ", "user_id": str(user_id), "feature": "chat"}
    )

    assert response.status_code == 200
    mock_admin_service.ai_usage_logs.assert_called_once_with(1, 50, AIProvider.GROQ, user_id, "chat")


class TestSettingsRoutes:
    """Test suite for the settings endpoints."""

    def test_all_settings(self, client, mock_settings_service):
        mock_settings_service.all_settings.return_value = {"general": [{"key": "app_name"}]}

        response = client.get("/admin/settings")

        assert response.status_code == 200
        assert response.json()["data"]["general"][0]["key"] == "app_name"

    def test_system_info_is_not_a_category(self, client, mock_settings_service):
        mock_settings_service.system_info.return_value = {"uptime": "0d 0h 1m 5s"}

        response = client.get("/admin/settings/system/info")

        assert response.status_code == 200
        mock_settings_service.category.assert_not_called()

    def test_bulk_update(self, client, mock_settings_service):
        mock_settings_service.bulk_update.return_value = {"updated": 2}

        response = client.put("/admin/settings", json={"settings": {"app_name": "Forge", "max_upload_mb": 20}})

        assert response.status_code == 200
        mock_settings_service.bulk_update.assert_called_once_with({"app_name": "Forge", "max_upload_mb": 20})

    def test_upsert(self, client, mock_settings_service):
        mock_settings_service.upsert.return_value = {"key": "maintenance_mode", "value": "true"}

        response = client.put("/admin/settings/maintenance_mode", json={"value": True, "category": "general"})

        assert response.status_code == 200
        mock_settings_service.upsert.assert_called_once_with("maintenance_mode", True, None, "general", None)

    def test_reset_category(self, client, mock_settings_service):
        mock_settings_service.reset_category.return_value = [{"key": "app_name"}]

        response = client.post("/admin/settings/reset/general")

        assert response.status_code == 200
        mock_settings_service.reset_category.assert_called_once_with("general")
