"""
CRUD operations for AI keys, usage logs and assistant chats.

Dependencies: sqlalchemy, brainforge.boundary.db.models
System role: AI persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.CRUD.base_crud import BaseCRUD
from brainforge.boundary.db.models import (
    AIChatMessageModel,
    AIChatModel,
    AIProvider,
    AIUsageLogModel,
    UserAIKeyModel,
)


class UserAIKeyCRUD(BaseCRUD[UserAIKeyModel]):
    """CRUD operations for UserAIKeyModel."""

    def __init__(self) -> None:
        super().__init__(UserAIKeyModel)

    async def list_for_user(self, session: AsyncSession, user_id: UUID) -> Sequence[UserAIKeyModel]:
        return await self.list_where(
            session, UserAIKeyModel.user_id == user_id, order_by=[UserAIKeyModel.created_at]
        )

    async def get_for_provider(
        self, session: AsyncSession, user_id: UUID, provider: AIProvider
    ) -> UserAIKeyModel | None:
        stmt = select(UserAIKeyModel).where(
            UserAIKeyModel.user_id == user_id, UserAIKeyModel.provider == provider
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def get_for_user(
        self, session: AsyncSession, id: UUID, user_id: UUID
    ) -> UserAIKeyModel | None:
        stmt = select(UserAIKeyModel).where(UserAIKeyModel.id == id, UserAIKeyModel.user_id == user_id)
        return (await session.execute(stmt)).scalar_one_or_none()


class AIUsageLogCRUD(BaseCRUD[AIUsageLogModel]):
    """CRUD operations for AIUsageLogModel."""

    def __init__(self) -> None:
        super().__init__(AIUsageLogModel)

    async def list_since(
        self, session: AsyncSession, since: datetime, user_id: UUID | None = None
    ) -> Sequence[AIUsageLogModel]:
        """Usage rows newer than ``since``, newest first."""
        criteria = [AIUsageLogModel.created_at >= since]
        if user_id is not None:
            criteria.append(AIUsageLogModel.user_id == user_id)
        return await self.list_where(session, *criteria, order_by=[AIUsageLogModel.created_at.desc()])


class AIChatCRUD(BaseCRUD[AIChatModel]):
    """CRUD operations for AIChatModel."""

    def __init__(self) -> None:
        super().__init__(AIChatModel)

    async def list_for_user(
        self, session: AsyncSession, team_id: UUID, user_id: UUID, project_id: UUID | None = None
    ) -> Sequence[AIChatModel]:
        criteria = [AIChatModel.team_id == team_id, AIChatModel.created_by == user_id]
        if project_id:
            criteria.append(AIChatModel.project_id == project_id)
        return await self.list_where(session, *criteria, order_by=[AIChatModel.updated_at.desc()])

    async def get_owned(
        self, session: AsyncSession, id: UUID, team_id: UUID, user_id: UUID
    ) -> AIChatModel | None:
        stmt = select(AIChatModel).where(
            AIChatModel.id == id, AIChatModel.team_id == team_id, AIChatModel.created_by == user_id
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def message_counts(self, session: AsyncSession, chat_ids: list[UUID]) -> dict[UUID, int]:
        if not chat_ids:
            return {}
        stmt = (
            select(AIChatMessageModel.chat_id, func.count())
            .where(AIChatMessageModel.chat_id.in_(chat_ids))
            .group_by(AIChatMessageModel.chat_id)
        )
        return dict((await session.execute(stmt)).all())


class AIChatMessageCRUD(BaseCRUD[AIChatMessageModel]):
    """CRUD operations for AIChatMessageModel."""

    def __init__(self) -> None:
        super().__init__(AIChatMessageModel)

    async def list_for_chat(self, session: AsyncSession, chat_id: UUID) -> Sequence[AIChatMessageModel]:
        return await self.list_where(
            session, AIChatMessageModel.chat_id == chat_id, order_by=[AIChatMessageModel.created_at]
        )


user_ai_key_crud = UserAIKeyCRUD()
ai_usage_log_crud = AIUsageLogCRUD()
ai_chat_crud = AIChatCRUD()
ai_chat_message_crud = AIChatMessageCRUD()
