"""
Team, membership and invitation CRUD operations.

Dependencies: sqlalchemy, brainforge.boundary.db.models
System role: Multi-tenant membership persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from brainforge.boundary.db.CRUD.base_crud import BaseCRUD
from brainforge.boundary.db.models.team_model import (
    InvitationStatus,
    TeamInvitationModel,
    TeamMemberModel,
    TeamModel,
)


class TeamCRUD(BaseCRUD[TeamModel]):
    """CRUD operations for TeamModel."""

    def __init__(self) -> None:
        super().__init__(TeamModel)

    async def get_fresh(self, session: AsyncSession, id: UUID) -> TeamModel | None:
        """
        Reload a team, repopulating its eagerly loaded members.

        Membership rows are added through the session rather than the
        collection, so cached instances must be refreshed before reading
        ``members``.
        """
        stmt = select(TeamModel).where(TeamModel.id == id).execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


class TeamMemberCRUD(BaseCRUD[TeamMemberModel]):
    """CRUD operations for TeamMemberModel."""

    def __init__(self) -> None:
        super().__init__(TeamMemberModel)

    async def get_membership(
        self, session: AsyncSession, team_id: UUID, user_id: UUID
    ) -> TeamMemberModel | None:
        stmt = select(TeamMemberModel).where(
            TeamMemberModel.team_id == team_id,
            TeamMemberModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(self, session: AsyncSession, user_id: UUID) -> Sequence[TeamMemberModel]:
        """Memberships of a user, oldest first, with the team loaded."""
        stmt = (
            select(TeamMemberModel)
            .where(TeamMemberModel.user_id == user_id)
            .order_by(TeamMemberModel.joined_at)
            .options(selectinload(TeamMemberModel.team))
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_for_team(self, session: AsyncSession, team_id: UUID) -> Sequence[TeamMemberModel]:
        return await self.list_where(
            session, TeamMemberModel.team_id == team_id, order_by=[TeamMemberModel.joined_at]
        )

    async def count_for_team(self, session: AsyncSession, team_id: UUID) -> int:
        return await self.count_where(session, TeamMemberModel.team_id == team_id)

    async def team_user_ids(self, session: AsyncSession, team_id: UUID) -> list[UUID]:
        stmt = select(TeamMemberModel.user_id).where(TeamMemberModel.team_id == team_id)
        result = await session.execute(stmt)
        return list(result.scalars().all())


class TeamInvitationCRUD(BaseCRUD[TeamInvitationModel]):
    """CRUD operations for TeamInvitationModel."""

    def __init__(self) -> None:
        super().__init__(TeamInvitationModel)

    async def get_by_token(self, session: AsyncSession, token: str) -> TeamInvitationModel | None:
        stmt = select(TeamInvitationModel).where(TeamInvitationModel.token == token)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending_for_email(
        self, session: AsyncSession, team_id: UUID, email: str
    ) -> TeamInvitationModel | None:
        stmt = select(TeamInvitationModel).where(
            TeamInvitationModel.team_id == team_id,
            func.lower(TeamInvitationModel.email) == email.lower(),
            TeamInvitationModel.status == InvitationStatus.PENDING,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def list_pending(self, session: AsyncSession, team_id: UUID) -> Sequence[TeamInvitationModel]:
        return await self.list_where(
            session,
            TeamInvitationModel.team_id == team_id,
            TeamInvitationModel.status == InvitationStatus.PENDING,
            order_by=[TeamInvitationModel.created_at.desc()],
        )


team_crud = TeamCRUD()
team_member_crud = TeamMemberCRUD()
team_invitation_crud = TeamInvitationCRUD()
