"""
Brainstorm session and message CRUD operations.

Dependencies: sqlalchemy, brainforge.boundary.db.models
System role: Brainstorm persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.CRUD.base_crud import BaseCRUD
from brainforge.boundary.db.models import BrainstormMessageModel, BrainstormSessionModel


class BrainstormSessionCRUD(BaseCRUD[BrainstormSessionModel]):
    """CRUD operations for BrainstormSessionModel."""

    def __init__(self) -> None:
        super().__init__(BrainstormSessionModel)

    async def list_for_team(
        self, session: AsyncSession, team_id: UUID, project_id: UUID | None = None
    ) -> Sequence[BrainstormSessionModel]:
        criteria = [BrainstormSessionModel.team_id == team_id]
        if project_id:
            criteria.append(BrainstormSessionModel.project_id == project_id)
        return await self.list_where(
            session, *criteria, order_by=[BrainstormSessionModel.updated_at.desc()]
        )

    async def message_counts(self, session: AsyncSession, session_ids: list[UUID]) -> dict[UUID, int]:
        if not session_ids:
            return {}
        stmt = (
            select(BrainstormMessageModel.session_id, func.count())
            .where(BrainstormMessageModel.session_id.in_(session_ids))
            .group_by(BrainstormMessageModel.session_id)
        )
        return dict((await session.execute(stmt)).all())


class BrainstormMessageCRUD(BaseCRUD[BrainstormMessageModel]):
    """CRUD operations for BrainstormMessageModel."""

    def __init__(self) -> None:
        super().__init__(BrainstormMessageModel)

    async def list_for_session(
        self, session: AsyncSession, session_id: UUID, pinned_only: bool = False
    ) -> Sequence[BrainstormMessageModel]:
        """Messages of a session in chronological order."""
        criteria = [BrainstormMessageModel.session_id == session_id]
        if pinned_only:
            criteria.append(BrainstormMessageModel.is_pinned.is_(True))
        return await self.list_where(session, *criteria, order_by=[BrainstormMessageModel.created_at])

    async def get_in_session(
        self, session: AsyncSession, id: UUID, session_id: UUID
    ) -> BrainstormMessageModel | None:
        stmt = select(BrainstormMessageModel).where(
            BrainstormMessageModel.id == id, BrainstormMessageModel.session_id == session_id
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


brainstorm_session_crud = BrainstormSessionCRUD()
brainstorm_message_crud = BrainstormMessageCRUD()
