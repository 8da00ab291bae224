"""
User CRUD operations.

Dependencies: sqlalchemy, brainforge.boundary.db.models
System role: Identity persistence operations
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.CRUD.base_crud import BaseCRUD
from brainforge.boundary.db.models.user_model import UserModel


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """Case-insensitive lookup by login email."""
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_google_id(self, session: AsyncSession, google_id: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.google_id == google_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


user_crud = UserCRUD()
