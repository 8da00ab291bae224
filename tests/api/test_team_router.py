"""
Tests for the teams router and the team membership guard.

System role: Verification of team HTTP API and role-based access
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from brainforge.api.deps import MANAGER_ROLES, require_admin, require_team_member
from brainforge.api.deps.dependencies import get_team_service
from brainforge.api.routers.teams import router as teams_router
from brainforge.boundary.db.models import TeamMemberModel, TeamRole
from brainforge.core.exceptions import ForbiddenError, GoneError

from conftest import build_test_app, make_client, override_auth, sample_user


@pytest.fixture
def mock_team_service():
    return AsyncMock()


@pytest.fixture
def app(mock_team_service):
    app = build_test_app(teams_router)
    app.dependency_overrides[get_team_service] = lambda: mock_team_service
    return app


@pytest.fixture
def client(app):
    return make_client(app)


def test_create_team(client, mock_team_service, current_user, team_id):
    override_auth(client.app, current_user, team_id)
    mock_team_service.create_team.return_value = {"id": str(team_id), "name": "Platform"}

    response = client.post("/teams", json={"name": "Platform", "description": "Infra"})

    assert response.status_code == 201
    assert response.json()["data"]["name"] == "Platform"
    mock_team_service.create_team.assert_called_once_with(current_user.id, "Platform", "Infra")


def test_invite_info_is_public(client, mock_team_service):
    mock_team_service.get_invite_info.side_effect = GoneError("Invitation has expired or is no longer valid")

    response = client.get("/teams/invite/abc123")

    assert response.status_code == 410
    assert response.json()["error"]["code"] == "GONE"


def test_join_uses_current_user(client, mock_team_service, current_user, team_id):
    override_auth(client.app, current_user, team_id)
    mock_team_service.join.return_value = {"id": str(team_id)}

    response = client.post("/teams/join/tok-1")

    assert response.status_code == 200
    mock_team_service.join.assert_called_once_with("tok-1", current_user)


def test_invite_member(client, mock_team_service, current_user, team_id):
    override_auth(client.app, current_user, team_id, TeamRole.ADMIN)
    mock_team_service.invite.return_value = {"email": "bob@example.com", "role": "MEMBER"}

    response = client.post(f"/teams/{team_id}/invitations", json={"email": "bob@example.com"})

    assert response.status_code == 201
    mock_team_service.invite.assert_called_once_with(team_id, "bob@example.com", TeamRole.MEMBER, current_user.id)


def test_invite_link_defaults_to_member(client, mock_team_service, current_user, team_id):
    override_auth(client.app, current_user, team_id)
    mock_team_service.create_invite_link.return_value = {"token": "t", "url": "http://x/invite/t"}

    response = client.post(f"/teams/{team_id}/invite-link")

    assert response.status_code == 201
    mock_team_service.create_invite_link.assert_called_once_with(team_id, current_user.id, TeamRole.MEMBER)


def test_remove_member_passes_requester_role(client, mock_team_service, current_user, team_id):
    override_auth(client.app, current_user, team_id, TeamRole.MEMBER)
    target = uuid4()

    response = client.delete(f"/teams/{team_id}/members/{target}")

    assert response.status_code == 200
    mock_team_service.remove_member.assert_called_once_with(team_id, target, current_user.id, TeamRole.MEMBER)


def test_update_member_role(client, mock_team_service, current_user, team_id):
    override_auth(client.app, current_user, team_id)
    target = uuid4()
    mock_team_service.update_member_role.return_value = {"user_id": str(target), "role": "ADMIN"}

    response = client.patch(f"/teams/{team_id}/members/{target}", json={"role": "ADMIN"})

    assert response.status_code == 200
    mock_team_service.update_member_role.assert_called_once_with(team_id, target, TeamRole.ADMIN)


def test_delete_team_forbidden_for_non_owner(client, mock_team_service, current_user, team_id):
    override_auth(client.app, current_user, team_id)
    mock_team_service.delete_team.side_effect = ForbiddenError("Only team owner can delete")

    response = client.delete(f"/teams/{team_id}")

    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Only team owner can delete"


class TestRequireTeamMember:
    """Test suite for the team membership guard."""

    def test_guard_is_cached_per_role_set(self):
        assert require_team_member() is require_team_member()
        assert require_team_member(MANAGER_ROLES) is not require_team_member()

    @pytest.mark.asyncio
    async def test_non_member_is_rejected(self):
        user = sample_user()
        with patch(
            "brainforge.api.deps.dependencies.team_member_crud.get_membership",
            AsyncMock(return_value=None),
        ):
            with pytest.raises(ForbiddenError, match="not a member"):
                await require_team_member()(uuid4(), user, AsyncMock())

    @pytest.mark.asyncio
    async def test_role_outside_allowed_set_is_rejected(self):
        user = sample_user()
        team_id = uuid4()
        membership = TeamMemberModel(team_id=team_id, user_id=user.id, role=TeamRole.MEMBER)
        with patch(
            "brainforge.api.deps.dependencies.team_member_crud.get_membership",
            AsyncMock(return_value=membership),
        ):
            with pytest.raises(ForbiddenError, match="Insufficient permissions"):
                await require_team_member(MANAGER_ROLES)(team_id, user, AsyncMock())

    @pytest.mark.asyncio
    async def test_member_passes(self):
        user = sample_user()
        team_id = uuid4()
        membership = TeamMemberModel(team_id=team_id, user_id=user.id, role=TeamRole.ADMIN)
        with patch(
            "brainforge.api.deps.dependencies.team_member_crud.get_membership",
            AsyncMock(return_value=membership),
        ):
            result = await require_team_member(MANAGER_ROLES)(team_id, user, AsyncMock())

        assert result is membership

    @pytest.mark.asyncio
    async def test_require_admin(self):
        with pytest.raises(ForbiddenError, match="Admin access required"):
            await require_admin(sample_user(is_admin=False))

        admin = sample_user(is_admin=True)
        assert await require_admin(admin) is admin
