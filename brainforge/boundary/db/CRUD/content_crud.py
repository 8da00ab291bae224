"""
CRUD operations for team content: diagrams, sprints, calendar events,
notes, discussions and goals.

These records share the same shape (team scoped, optionally grouped by
project) so most queries come from BaseCRUD plus ``list_for_team``.

Dependencies: sqlalchemy, brainforge.boundary.db.models
System role: Team content persistence operations
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.CRUD.base_crud import BaseCRUD, ModelT
from brainforge.boundary.db.models import (
    CalendarEventModel,
    DiagramModel,
    DiscussionModel,
    DiscussionReplyModel,
    GoalModel,
    NoteHistoryModel,
    NoteModel,
    SprintPlanModel,
    TaskModel,
)


class TeamContentCRUD(BaseCRUD[ModelT]):
    """BaseCRUD with a team listing that honours the project filter."""

    def __init__(self, model: type[ModelT], default_order: Any) -> None:
        super().__init__(model)
        self.default_order = default_order

    async def list_for_team(
        self, session: AsyncSession, team_id: UUID, project_id: UUID | None = None
    ) -> Sequence[ModelT]:
        criteria = [self.model.team_id == team_id]
        if project_id:
            criteria.append(self.model.project_id == project_id)
        return await self.list_where(session, *criteria, order_by=[self.default_order])


class CalendarEventCRUD(BaseCRUD[CalendarEventModel]):
    """CRUD operations for CalendarEventModel."""

    def __init__(self) -> None:
        super().__init__(CalendarEventModel)

    async def list_in_range(
        self,
        session: AsyncSession,
        team_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> Sequence[CalendarEventModel]:
        """
        Events overlapping [start, end].

        An event overlaps when it starts inside the window, ends inside the
        window, or spans the whole window.
        """
        criteria = [CalendarEventModel.team_id == team_id]
        if start and end:
            criteria.append(
                or_(
                    and_(CalendarEventModel.start_date >= start, CalendarEventModel.start_date <= end),
                    and_(CalendarEventModel.end_date >= start, CalendarEventModel.end_date <= end),
                    and_(CalendarEventModel.start_date <= start, CalendarEventModel.end_date >= end),
                )
            )
        return await self.list_where(session, *criteria, order_by=[CalendarEventModel.start_date])

    async def tasks_due_between(
        self, session: AsyncSession, team_id: UUID, start: datetime, end: datetime
    ) -> Sequence[TaskModel]:
        stmt = select(TaskModel).where(
            TaskModel.team_id == team_id,
            TaskModel.due_date.is_not(None),
            TaskModel.due_date >= start,
            TaskModel.due_date <= end,
        )
        return (await session.execute(stmt)).scalars().all()

    async def sprints_due_between(
        self, session: AsyncSession, team_id: UUID, start: datetime, end: datetime
    ) -> Sequence[SprintPlanModel]:
        stmt = select(SprintPlanModel).where(
            SprintPlanModel.team_id == team_id,
            SprintPlanModel.deadline >= start,
            SprintPlanModel.deadline <= end,
        )
        return (await session.execute(stmt)).scalars().all()


class NoteHistoryCRUD(BaseCRUD[NoteHistoryModel]):
    """CRUD operations for NoteHistoryModel."""

    def __init__(self) -> None:
        super().__init__(NoteHistoryModel)

    async def latest(self, session: AsyncSession, note_id: UUID, limit: int = 50):
        return await self.list_where(
            session,
            NoteHistoryModel.note_id == note_id,
            order_by=[NoteHistoryModel.created_at.desc()],
            limit=limit,
        )

    async def delete_for_note(self, session: AsyncSession, note_id: UUID) -> None:
        await session.execute(delete(NoteHistoryModel).where(NoteHistoryModel.note_id == note_id))


class DiscussionCRUD(BaseCRUD[DiscussionModel]):
    """CRUD operations for DiscussionModel."""

    def __init__(self) -> None:
        super().__init__(DiscussionModel)

    async def list_for_team(
        self, session: AsyncSession, team_id: UUID, category: str | None = None
    ) -> Sequence[DiscussionModel]:
        """Pinned threads first, then most recently active."""
        criteria = [DiscussionModel.team_id == team_id]
        if category and category != "all":
            criteria.append(DiscussionModel.category == category)
        return await self.list_where(
            session,
            *criteria,
            order_by=[DiscussionModel.is_pinned.desc(), DiscussionModel.updated_at.desc()],
        )

    async def reply_stats(
        self, session: AsyncSession, discussion_ids: list[UUID]
    ) -> dict[UUID, dict[str, Any]]:
        """Reply count and latest reply per discussion."""
        stats: dict[UUID, dict[str, Any]] = {
            did: {"reply_count": 0, "last_reply": None} for did in discussion_ids
        }
        if not discussion_ids:
            return stats
        stmt = (
            select(DiscussionReplyModel)
            .where(DiscussionReplyModel.discussion_id.in_(discussion_ids))
            .order_by(DiscussionReplyModel.created_at)
        )
        for reply in (await session.execute(stmt)).scalars().all():
            entry = stats[reply.discussion_id]
            entry["reply_count"] += 1
            entry["last_reply"] = reply
        return stats


class DiscussionReplyCRUD(BaseCRUD[DiscussionReplyModel]):
    """CRUD operations for DiscussionReplyModel."""

    def __init__(self) -> None:
        super().__init__(DiscussionReplyModel)

    async def list_for_discussion(self, session: AsyncSession, discussion_id: UUID):
        return await self.list_where(
            session,
            DiscussionReplyModel.discussion_id == discussion_id,
            order_by=[DiscussionReplyModel.created_at],
        )

    async def get_in_discussion(
        self, session: AsyncSession, id: UUID, discussion_id: UUID
    ) -> DiscussionReplyModel | None:
        stmt = select(DiscussionReplyModel).where(
            DiscussionReplyModel.id == id, DiscussionReplyModel.discussion_id == discussion_id
        )
        return (await session.execute(stmt)).scalar_one_or_none()


diagram_crud = TeamContentCRUD(DiagramModel, DiagramModel.updated_at.desc())
sprint_crud = TeamContentCRUD(SprintPlanModel, SprintPlanModel.created_at.desc())
note_crud = TeamContentCRUD(NoteModel, NoteModel.updated_at.desc())
goal_crud = TeamContentCRUD(GoalModel, GoalModel.created_at.desc())
calendar_event_crud = CalendarEventCRUD()
note_history_crud = NoteHistoryCRUD()
discussion_crud = DiscussionCRUD()
discussion_reply_crud = DiscussionReplyCRUD()
