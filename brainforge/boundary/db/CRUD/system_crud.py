"""
CRUD operations for system settings and auth token bookkeeping.

Dependencies: sqlalchemy, brainforge.boundary.db.models
System role: Runtime configuration and token persistence operations
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.CRUD.base_crud import BaseCRUD
from brainforge.boundary.db.models import (
    PasswordResetTokenModel,
    RevokedTokenModel,
    SystemSettingModel,
)


class SystemSettingCRUD(BaseCRUD[SystemSettingModel]):
    """CRUD operations for SystemSettingModel."""

    def __init__(self) -> None:
        super().__init__(SystemSettingModel)

    async def get_by_key(self, session: AsyncSession, key: str) -> SystemSettingModel | None:
        stmt = select(SystemSettingModel).where(SystemSettingModel.key == key)
        return (await session.execute(stmt)).scalar_one_or_none()

    async def list_by_category(
        self, session: AsyncSession, category: str | None = None
    ) -> Sequence[SystemSettingModel]:
        criteria = [SystemSettingModel.category == category] if category else []
        return await self.list_where(
            session, *criteria, order_by=[SystemSettingModel.category, SystemSettingModel.key]
        )


class RevokedTokenCRUD(BaseCRUD[RevokedTokenModel]):
    """CRUD operations for RevokedTokenModel."""

    def __init__(self) -> None:
        super().__init__(RevokedTokenModel)

    async def is_revoked(self, session: AsyncSession, token_hash: str, now: datetime) -> bool:
        stmt = select(RevokedTokenModel.id).where(
            RevokedTokenModel.token_hash == token_hash,
            RevokedTokenModel.expires_at > now,
        )
        return (await session.execute(stmt)).first() is not None

    async def purge_expired(self, session: AsyncSession, now: datetime) -> None:
        await session.execute(delete(RevokedTokenModel).where(RevokedTokenModel.expires_at <= now))


class PasswordResetTokenCRUD(BaseCRUD[PasswordResetTokenModel]):
    """CRUD operations for PasswordResetTokenModel."""

    def __init__(self) -> None:
        super().__init__(PasswordResetTokenModel)

    async def get_by_token(self, session: AsyncSession, token: str) -> PasswordResetTokenModel | None:
        stmt = select(PasswordResetTokenModel).where(PasswordResetTokenModel.token == token)
        return (await session.execute(stmt)).scalar_one_or_none()


system_setting_crud = SystemSettingCRUD()
revoked_token_crud = RevokedTokenCRUD()
password_reset_token_crud = PasswordResetTokenCRUD()
