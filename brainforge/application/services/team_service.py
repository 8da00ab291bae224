"""
Team service orchestrator.

Team lifecycle, membership roles and invitations. Email invitations are
single use; open invite links stay pending and can be redeemed by anyone
holding the token until they expire.

Dependencies: brainforge.boundary.db.CRUD, brainforge.configs
System role: Team and membership use case orchestration
"""

import logging
import secrets
from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import invitation_dict, member_dict, team_dict
from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD import (
    team_crud,
    team_invitation_crud,
    team_member_crud,
    user_crud,
)
from brainforge.boundary.db.models import (
    InvitationStatus,
    TeamMemberModel,
    TeamModel,
    TeamRole,
    UserModel,
)
from brainforge.configs import get_settings
from brainforge.core.exceptions import ConflictError, ForbiddenError, GoneError, NotFoundError

logger = logging.getLogger(__name__)

MANAGER_ROLES = (TeamRole.OWNER, TeamRole.ADMIN)


async def create_team_with_owner(
    db: AsyncSession, owner_id: UUID, name: str, description: str | None = None
) -> TeamModel:
    """Create a team and its OWNER membership row."""
    team = await team_crud.create(db, name=name, description=description, owner_id=owner_id)
    await team_member_crud.create(db, team_id=team.id, user_id=owner_id, role=TeamRole.OWNER)
    return await team_crud.get_fresh(db, team.id)


async def create_personal_team(db: AsyncSession, user: UserModel) -> TeamModel:
    return await create_team_with_owner(db, user.id, f"{user.name or 'My'}'s Team")


def _invitation_ttl() -> timedelta:
    return timedelta(days=get_settings().security.invitation_ttl_days)


class TeamService:
    """Team service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize team service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_team(self, team_id: UUID) -> TeamModel:
        team = await team_crud.get_fresh(self.db, team_id)
        if team is None:
            raise NotFoundError("Team not found")
        return team

    async def _team_detail(self, team: TeamModel) -> dict:
        data = team_dict(team)
        data["members"] = [member_dict(m) for m in team.members]
        data["member_count"] = len(team.members)
        return data

    async def list_teams(self, user: UserModel) -> list[dict]:
        """
        Teams the user belongs to, each with the user's role.

        A user without any team gets a personal team created on the fly.
        """
        memberships = await team_member_crud.list_for_user(self.db, user.id)
        if not memberships:
            await create_personal_team(self.db, user)
            logger.info("Personal team auto-created", extra={"user_id": str(user.id)})
            memberships = await team_member_crud.list_for_user(self.db, user.id)

        teams = []
        for membership in memberships:
            data = team_dict(membership.team)
            data["role"] = membership.role
            data["member_count"] = await team_member_crud.count_for_team(self.db, membership.team_id)
            teams.append(data)
        return teams

    async def create_team(self, user_id: UUID, name: str, description: str | None = None) -> dict:
        try:
            team = await create_team_with_owner(self.db, user_id, name, description)
            logger.info("Team created", extra={"team_id": str(team.id), "user_id": str(user_id)})
            return await self._team_detail(team)
        except Exception as e:
            logger.error("Failed to create team", extra={"error": str(e), "user_id": str(user_id)})
            raise

    async def get_team(self, team_id: UUID) -> dict:
        return await self._team_detail(await self._get_team(team_id))

    async def update_team(self, team_id: UUID, changes: dict) -> dict:
        team = await self._get_team(team_id)
        if changes:
            team = await team_crud.update_instance(self.db, team, **changes)
        return await self._team_detail(team)

    async def delete_team(self, team_id: UUID, user_id: UUID) -> None:
        team = await self._get_team(team_id)
        if team.owner_id != user_id:
            raise ForbiddenError("Only team owner can delete")
        await team_crud.delete_by_id(self.db, team_id)
        logger.info("Team deleted", extra={"team_id": str(team_id)})

    # Invitations

    async def invite(self, team_id: UUID, email: str, role: TeamRole, inviter_id: UUID) -> dict:
        """
        Send an email invitation.

        Raises:
            ConflictError: Invitee already a member, or a pending invite exists
            ForbiddenError: Attempt to invite as OWNER
        """
        if role == TeamRole.OWNER:
            raise ForbiddenError("Cannot assign OWNER role")

        existing_user = await user_crud.get_by_email(self.db, email)
        if existing_user and await team_member_crud.get_membership(self.db, team_id, existing_user.id):
            raise ConflictError("User is already a team member")
        if await team_invitation_crud.get_pending_for_email(self.db, team_id, email):
            raise ConflictError("Invitation already sent")

        invitation = await team_invitation_crud.create(
            self.db,
            team_id=team_id,
            email=email.lower(),
            role=role,
            token=secrets.token_hex(32),
            expires_at=utcnow() + _invitation_ttl(),
            invited_by=inviter_id,
        )
        logger.info(
            "Team invitation created",
            extra={"team_id": str(team_id), "invitation_id": str(invitation.id)},
        )
        data = invitation_dict(invitation)
        data["token"] = invitation.token
        return data

    async def list_invitations(self, team_id: UUID) -> list[dict]:
        return [invitation_dict(i) for i in await team_invitation_crud.list_pending(self.db, team_id)]

    async def revoke_invitation(self, team_id: UUID, invitation_id: UUID) -> None:
        invitation = await team_invitation_crud.get_in_team(self.db, invitation_id, team_id)
        if invitation is None:
            raise NotFoundError("Invitation not found")
        await team_invitation_crud.update_instance(self.db, invitation, status=InvitationStatus.REVOKED)

    async def create_invite_link(self, team_id: UUID, inviter_id: UUID, role: TeamRole = TeamRole.MEMBER) -> dict:
        if role == TeamRole.OWNER:
            raise ForbiddenError("Cannot assign OWNER role")
        token = secrets.token_hex(32)
        invitation = await team_invitation_crud.create(
            self.db,
            team_id=team_id,
            email=f"invite-link-{token[:8]}@open",
            role=role,
            token=token,
            expires_at=utcnow() + _invitation_ttl(),
            invited_by=inviter_id,
        )
        return {
            "token": invitation.token,
            "expires_at": invitation.expires_at,
            "url": f"{get_settings().app.frontend_url.rstrip('/')}/invite/{invitation.token}",
        }

    async def get_invite_info(self, token: str) -> dict:
        """Public preview of an invitation."""
        invitation = await team_invitation_crud.get_by_token(self.db, token)
        if invitation is None:
            raise NotFoundError("Invitation not found")
        if invitation.status != InvitationStatus.PENDING or invitation.expires_at < utcnow():
            raise GoneError("Invitation has expired or is no longer valid")

        return {
            "team_name": invitation.team.name,
            "team_description": invitation.team.description,
            "member_count": await team_member_crud.count_for_team(self.db, invitation.team_id),
            "role": invitation.role,
            "expires_at": invitation.expires_at,
        }

    async def join(self, token: str, user: UserModel) -> dict:
        """
        Redeem an invitation.

        Raises:
            NotFoundError: Unknown token
            GoneError: Expired or no longer pending
            ForbiddenError: Email invitation addressed to someone else
            ConflictError: Already a member
        """
        invitation = await team_invitation_crud.get_by_token(self.db, token)
        if invitation is None:
            raise NotFoundError("Invitation not found")
        if invitation.status != InvitationStatus.PENDING:
            raise GoneError("Invitation is no longer valid")
        if invitation.expires_at < utcnow():
            raise GoneError("Invitation has expired")

        if not invitation.is_open_link and invitation.email.lower() != user.email.lower():
            raise ForbiddenError("This invitation is for a different email")
        if await team_member_crud.get_membership(self.db, invitation.team_id, user.id):
            raise ConflictError("You are already a member of this team")

        await team_member_crud.create(
            self.db, team_id=invitation.team_id, user_id=user.id, role=invitation.role
        )
        if not invitation.is_open_link:
            await team_invitation_crud.update_instance(
                self.db, invitation, status=InvitationStatus.ACCEPTED
            )
        logger.info(
            "User joined team",
            extra={"team_id": str(invitation.team_id), "user_id": str(user.id)},
        )
        return await self.get_team(invitation.team_id)

    # Members

    async def list_members(self, team_id: UUID) -> list[dict]:
        return [member_dict(m) for m in await team_member_crud.list_for_team(self.db, team_id)]

    async def _get_member(self, team_id: UUID, user_id: UUID) -> TeamMemberModel:
        member = await team_member_crud.get_membership(self.db, team_id, user_id)
        if member is None:
            raise NotFoundError("Member not found")
        return member

    async def update_member_role(self, team_id: UUID, target_user_id: UUID, role: TeamRole) -> dict:
        team = await self._get_team(team_id)
        if target_user_id == team.owner_id:
            raise ForbiddenError("Cannot change owner role")
        if role == TeamRole.OWNER:
            raise ForbiddenError("Cannot assign OWNER role")

        member = await self._get_member(team_id, target_user_id)
        member = await team_member_crud.update_instance(self.db, member, role=role)
        return member_dict(member)

    async def remove_member(
        self,
        team_id: UUID,
        target_user_id: UUID,
        requester_id: UUID,
        requester_role: TeamRole,
    ) -> None:
        """Remove a member; managers may remove anyone but the owner, members only themselves."""
        team = await self._get_team(team_id)
        if target_user_id == team.owner_id:
            raise ForbiddenError("Cannot remove team owner")
        if target_user_id != requester_id and requester_role not in MANAGER_ROLES:
            raise ForbiddenError("Insufficient permissions")

        member = await self._get_member(team_id, target_user_id)
        await team_member_crud.delete_by_id(self.db, member.id)
        logger.info(
            "Team member removed",
            extra={"team_id": str(team_id), "user_id": str(target_user_id)},
        )
