"""
Notification CRUD operations.

Dependencies: sqlalchemy, brainforge.boundary.db.models
System role: In-app notification persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.CRUD.base_crud import BaseCRUD
from brainforge.boundary.db.models import NotificationModel


class NotificationCRUD(BaseCRUD[NotificationModel]):
    """CRUD operations for NotificationModel."""

    def __init__(self) -> None:
        super().__init__(NotificationModel)

    async def list_for_user(
        self, session: AsyncSession, team_id: UUID, user_id: UUID, limit: int = 50
    ) -> Sequence[NotificationModel]:
        return await self.list_where(
            session,
            NotificationModel.team_id == team_id,
            NotificationModel.user_id == user_id,
            order_by=[NotificationModel.created_at.desc()],
            limit=limit,
        )

    async def count_unread(self, session: AsyncSession, team_id: UUID, user_id: UUID) -> int:
        return await self.count_where(
            session,
            NotificationModel.team_id == team_id,
            NotificationModel.user_id == user_id,
            NotificationModel.read.is_(False),
        )

    async def get_for_user(
        self, session: AsyncSession, id: UUID, user_id: UUID
    ) -> NotificationModel | None:
        stmt = select(NotificationModel).where(
            NotificationModel.id == id, NotificationModel.user_id == user_id
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def mark_all_read(self, session: AsyncSession, team_id: UUID, user_id: UUID) -> int:
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.team_id == team_id,
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .values(read=True)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount


notification_crud = NotificationCRUD()
