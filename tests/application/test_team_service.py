"""
Tests for TeamService on the in-memory database.

System role: Verification of team membership, invitation and role rules
"""

from datetime import timedelta

import pytest

from brainforge.application.services import TeamService
from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD import team_invitation_crud, team_member_crud
from brainforge.boundary.db.models import InvitationStatus, TeamRole
from brainforge.core.exceptions import ConflictError, ForbiddenError, GoneError, NotFoundError


@pytest.fixture
def team_service(test_async_db):
    return TeamService(test_async_db)


@pytest.fixture
async def owner(make_user):
    return await make_user(email="owner@example.com", name="Olive")


@pytest.fixture
async def team(make_team, owner):
    return await make_team(owner)


class TestTeams:
    """Test suite for team lifecycle."""

    @pytest.mark.asyncio
    async def test_create_team_makes_creator_owner(self, team_service, owner):
        result = await team_service.create_team(owner.id, "Platform", "Infra")

        assert result["name"] == "Platform"
        assert result["owner_id"] == owner.id
        assert result["member_count"] == 1
        assert result["members"][0]["role"] == TeamRole.OWNER

    @pytest.mark.asyncio
    async def test_list_teams_auto_creates_personal_team(self, team_service, make_user):
        loner = await make_user(name="Lee")

        teams = await team_service.list_teams(loner)

        assert len(teams) == 1
        assert teams[0]["name"] == "Lee's Team"
        assert teams[0]["role"] == TeamRole.OWNER
        assert teams[0]["member_count"] == 1

    @pytest.mark.asyncio
    async def test_only_owner_deletes(self, team_service, team, make_user):
        admin = await make_user()
        await team_member_crud.create(team_service.db, team_id=team.id, user_id=admin.id, role=TeamRole.ADMIN)

        with pytest.raises(ForbiddenError, match="Only team owner can delete"):
            await team_service.delete_team(team.id, admin.id)

        await team_service.delete_team(team.id, team.owner_id)
        with pytest.raises(NotFoundError):
            await team_service.get_team(team.id)


class TestInvitations:
    """Test suite for email invitations and invite links."""

    @pytest.mark.asyncio
    async def test_invite_and_join(self, team_service, team, owner, make_user):
        invitee = await make_user(email="bob@example.com")

        invitation = await team_service.invite(team.id, "Bob@Example.com", TeamRole.ADMIN, owner.id)
        info = await team_service.get_invite_info(invitation["token"])
        joined = await team_service.join(invitation["token"], invitee)

        assert info["team_name"] == "Core Team"
        assert info["role"] == TeamRole.ADMIN
        assert joined["member_count"] == 2
        membership = await team_member_crud.get_membership(team_service.db, team.id, invitee.id)
        assert membership.role == TeamRole.ADMIN
        stored = await team_invitation_crud.get_by_token(team_service.db, invitation["token"])
        assert stored.status == InvitationStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_accepted_invitation_cannot_be_reused(self, team_service, team, owner, make_user):
        invitee = await make_user(email="bob@example.com")
        invitation = await team_service.invite(team.id, "bob@example.com", TeamRole.MEMBER, owner.id)
        await team_service.join(invitation["token"], invitee)

        with pytest.raises(GoneError, match="Invitation is no longer valid"):
            await team_service.join(invitation["token"], invitee)

    @pytest.mark.asyncio
    async def test_invite_as_owner_is_forbidden(self, team_service, team, owner):
        with pytest.raises(ForbiddenError, match="Cannot assign OWNER role"):
            await team_service.invite(team.id, "bob@example.com", TeamRole.OWNER, owner.id)
        with pytest.raises(ForbiddenError, match="Cannot assign OWNER role"):
            await team_service.create_invite_link(team.id, owner.id, TeamRole.OWNER)

    @pytest.mark.asyncio
    async def test_duplicate_invitations(self, team_service, team, owner):
        await team_service.invite(team.id, "bob@example.com", TeamRole.MEMBER, owner.id)

        with pytest.raises(ConflictError, match="Invitation already sent"):
            await team_service.invite(team.id, "bob@example.com", TeamRole.MEMBER, owner.id)
        with pytest.raises(ConflictError, match="User is already a team member"):
            await team_service.invite(team.id, "owner@example.com", TeamRole.MEMBER, owner.id)

    @pytest.mark.asyncio
    async def test_invitation_for_someone_else(self, team_service, team, owner, make_user):
        stranger = await make_user(email="eve@example.com")
        invitation = await team_service.invite(team.id, "bob@example.com", TeamRole.MEMBER, owner.id)

        with pytest.raises(ForbiddenError, match="different email"):
            await team_service.join(invitation["token"], stranger)

    @pytest.mark.asyncio
    async def test_expired_invitation(self, team_service, team, owner, make_user):
        invitee = await make_user(email="bob@example.com")
        invitation = await team_service.invite(team.id, "bob@example.com", TeamRole.MEMBER, owner.id)
        stored = await team_invitation_crud.get_by_token(team_service.db, invitation["token"])
        await team_invitation_crud.update_instance(
            team_service.db, stored, expires_at=utcnow() - timedelta(hours=1)
        )

        with pytest.raises(GoneError, match="expired or is no longer valid"):
            await team_service.get_invite_info(invitation["token"])
        with pytest.raises(GoneError, match="Invitation has expired"):
            await team_service.join(invitation["token"], invitee)

    @pytest.mark.asyncio
    async def test_invite_link_is_reusable(self, team_service, team, owner, make_user):
        first = await make_user()
        second = await make_user()

        link = await team_service.create_invite_link(team.id, owner.id)
        await team_service.join(link["token"], first)
        joined = await team_service.join(link["token"], second)

        assert link["url"].endswith(f"/invite/{link['token']}")
        assert joined["member_count"] == 3

    @pytest.mark.asyncio
    async def test_join_twice_conflicts(self, team_service, team, owner):
        link = await team_service.create_invite_link(team.id, owner.id)

        with pytest.raises(ConflictError, match="already a member"):
            await team_service.join(link["token"], owner)

    @pytest.mark.asyncio
    async def test_unknown_token(self, team_service):
        with pytest.raises(NotFoundError, match="Invitation not found"):
            await team_service.get_invite_info("missing")

    @pytest.mark.asyncio
    async def test_revoke_invitation(self, team_service, team, owner):
        invitation = await team_service.invite(team.id, "bob@example.com", TeamRole.MEMBER, owner.id)

        await team_service.revoke_invitation(team.id, invitation["id"])

        assert await team_service.list_invitations(team.id) == []
        with pytest.raises(GoneError):
            await team_service.get_invite_info(invitation["token"])


class TestMembers:
    """Test suite for role changes and removal."""

    @pytest.fixture
    async def crew(self, make_user, make_team, owner):
        admin = await make_user(name="Ari")
        member = await make_user(name="Mo")
        other = await make_user(name="Oz")
        team = await make_team(
            owner, members={admin: TeamRole.ADMIN, member: TeamRole.MEMBER, other: TeamRole.MEMBER}
        )
        return team, admin, member, other

    @pytest.mark.asyncio
    async def test_owner_role_is_fixed(self, team_service, crew, owner):
        team, admin, _, _ = crew

        with pytest.raises(ForbiddenError, match="Cannot change owner role"):
            await team_service.update_member_role(team.id, owner.id, TeamRole.MEMBER)
        with pytest.raises(ForbiddenError, match="Cannot assign OWNER role"):
            await team_service.update_member_role(team.id, admin.id, TeamRole.OWNER)

    @pytest.mark.asyncio
    async def test_update_role(self, team_service, crew):
        team, _, member, _ = crew

        result = await team_service.update_member_role(team.id, member.id, TeamRole.ADMIN)

        assert result["role"] == TeamRole.ADMIN

    @pytest.mark.asyncio
    async def test_owner_cannot_be_removed(self, team_service, crew, owner):
        team, admin, _, _ = crew

        with pytest.raises(ForbiddenError, match="Cannot remove team owner"):
            await team_service.remove_member(team.id, owner.id, admin.id, TeamRole.ADMIN)

    @pytest.mark.asyncio
    async def test_member_can_only_remove_self(self, team_service, crew):
        team, _, member, other = crew

        with pytest.raises(ForbiddenError, match="Insufficient permissions"):
            await team_service.remove_member(team.id, other.id, member.id, TeamRole.MEMBER)

        await team_service.remove_member(team.id, member.id, member.id, TeamRole.MEMBER)
        assert await team_member_crud.get_membership(team_service.db, team.id, member.id) is None

    @pytest.mark.asyncio
    async def test_admin_removes_member(self, team_service, crew):
        team, admin, _, other = crew

        await team_service.remove_member(team.id, other.id, admin.id, TeamRole.ADMIN)

        members = await team_service.list_members(team.id)
        assert other.id not in {m["user_id"] for m in members}
