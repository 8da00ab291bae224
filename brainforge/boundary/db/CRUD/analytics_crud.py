"""
Cross-table aggregate queries for the admin console.

Dependencies: sqlalchemy, brainforge.boundary.db.models
System role: Platform-wide counting and usage aggregation
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Row, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.base import Base
from brainforge.boundary.db.models import AIUsageLogModel, UserAIKeyModel, UserModel

_TOKENS = AIUsageLogModel.input_tokens + AIUsageLogModel.output_tokens


def _usage_columns() -> list[Any]:
    return [
        func.count(AIUsageLogModel.id).label("requests"),
        func.coalesce(func.sum(AIUsageLogModel.input_tokens), 0).label("input_tokens"),
        func.coalesce(func.sum(AIUsageLogModel.output_tokens), 0).label("output_tokens"),
        func.coalesce(func.sum(AIUsageLogModel.cost), 0.0).label("cost"),
    ]


class AnalyticsCRUD:
    """Aggregate queries spanning several models."""

    async def count(
        self,
        session: AsyncSession,
        model: type[Base],
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> int:
        """Count rows, optionally restricted to a ``created_at`` window [since, until)."""
        stmt = select(func.count()).select_from(model)
        if since is not None:
            stmt = stmt.where(model.created_at >= since)
        if until is not None:
            stmt = stmt.where(model.created_at < until)
        return (await session.execute(stmt)).scalar_one()

    async def count_matching(self, session: AsyncSession, model: type[Base], *criteria: Any) -> int:
        stmt = select(func.count()).select_from(model).where(*criteria)
        return (await session.execute(stmt)).scalar_one()

    async def group_counts(self, session: AsyncSession, column: Any, *criteria: Any) -> dict[str, int]:
        stmt = select(column, func.count()).where(*criteria).group_by(column)
        rows = (await session.execute(stmt)).all()
        return {getattr(value, "value", value): n for value, n in rows}

    async def usage_totals(self, session: AsyncSession, since: datetime) -> Row:
        stmt = select(*_usage_columns()).where(AIUsageLogModel.created_at >= since)
        return (await session.execute(stmt)).one()

    async def usage_by(
        self,
        session: AsyncSession,
        columns: Sequence[Any],
        since: datetime,
        limit: int | None = None,
    ) -> Sequence[Row]:
        """Usage sums grouped by ``columns``; limited queries order by input tokens."""
        stmt = (
            select(*columns, *_usage_columns())
            .where(AIUsageLogModel.created_at >= since)
            .group_by(*columns)
        )
        if limit is not None:
            stmt = stmt.order_by(func.sum(AIUsageLogModel.input_tokens).desc()).limit(limit)
        return (await session.execute(stmt)).all()

    async def daily_usage(self, session: AsyncSession, since: datetime) -> Sequence[Row]:
        day = func.date(AIUsageLogModel.created_at)
        stmt = (
            select(
                day.label("date"),
                func.count(AIUsageLogModel.id).label("requests"),
                func.coalesce(func.sum(_TOKENS), 0).label("tokens"),
                func.coalesce(func.sum(AIUsageLogModel.cost), 0.0).label("cost"),
            )
            .where(AIUsageLogModel.created_at >= since)
            .group_by(day)
            .order_by(day)
        )
        return (await session.execute(stmt)).all()

    async def daily_registrations(self, session: AsyncSession, since: datetime) -> Sequence[Row]:
        day = func.date(UserModel.created_at)
        stmt = (
            select(day.label("date"), func.count(UserModel.id).label("count"))
            .where(UserModel.created_at >= since)
            .group_by(day)
            .order_by(day)
        )
        return (await session.execute(stmt)).all()

    async def users_by_ids(self, session: AsyncSession, ids: Sequence[UUID]) -> dict[UUID, UserModel]:
        if not ids:
            return {}
        users = (await session.execute(select(UserModel).where(UserModel.id.in_(ids)))).scalars().all()
        return {u.id: u for u in users}

    async def search_keys(
        self, session: AsyncSession, search: str | None, limit: int, offset: int
    ) -> tuple[Sequence[UserAIKeyModel], int]:
        """Keys matching owner name/email, provider or label, newest first, plus the match count."""
        stmt = select(UserAIKeyModel).join(UserModel, UserAIKeyModel.user_id == UserModel.id)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(UserModel.name).like(pattern),
                    func.lower(UserModel.email).like(pattern),
                    func.lower(UserAIKeyModel.provider).like(pattern),
                    func.lower(UserAIKeyModel.label).like(pattern),
                )
            )
        total = (await session.execute(select(func.count()).select_from(stmt.subquery()))).scalar_one()
        page = stmt.order_by(UserAIKeyModel.created_at.desc()).offset(offset).limit(limit)
        return (await session.execute(page)).scalars().all(), total


analytics_crud = AnalyticsCRUD()
