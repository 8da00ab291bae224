"""
Generic async CRUD for BrainForge models.

Entity CRUD singletons subclass ``BaseCRUD`` with their model and add their
own queries. Most records belong to a team, so the team-scoped lookup used
by every team route lives here too.

Dependencies: sqlalchemy, uuid
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Shared operations over one model class.

    Nothing here commits; the request-scoped session from ``get_async_db``
    owns the transaction.

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Insert a record and load its server defaults.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated id and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_in_team(self, session: AsyncSession, id: UUID, team_id: UUID) -> ModelT | None:
        """
        Load a record only when it belongs to ``team_id``.

        Team routes use this so an id from another team reads as missing.
        """
        stmt = select(self.model).where(self.model.id == id, self.model.team_id == team_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_where(
        self,
        session: AsyncSession,
        *criteria: Any,
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Records matching all criteria.

        Args:
            session: Async database session
            *criteria: SQLAlchemy boolean expressions
            order_by: Ordering expressions
            limit: Maximum number of records (None for all)
            offset: Number of records to skip

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).where(*criteria).order_by(*order_by).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_where(self, session: AsyncSession, *criteria: Any) -> int:
        result = await session.execute(select(func.count()).select_from(self.model).where(*criteria))
        return result.scalar_one()

    async def update_instance(self, session: AsyncSession, instance: ModelT, **kwargs) -> ModelT:
        """Apply field changes to a loaded instance, flush, and reload it."""
        for field, value in kwargs.items():
            setattr(instance, field, value)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete by primary key; child rows go through the database's cascades.

        Returns:
            True if a row was deleted
        """
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0
