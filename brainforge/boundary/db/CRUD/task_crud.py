"""
Task board CRUD operations.

Dependencies: sqlalchemy, brainforge.boundary.db.models
System role: Task board persistence operations
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import case, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.CRUD.base_crud import BaseCRUD
from brainforge.boundary.db.models import (
    LabelModel,
    TaskActivityModel,
    TaskAssigneeModel,
    TaskCommentModel,
    TaskLabelModel,
    TaskModel,
    TaskPriority,
    TaskStatus,
)

PRIORITY_RANK = case(
    {
        TaskPriority.URGENT.value: 0,
        TaskPriority.HIGH.value: 1,
        TaskPriority.MEDIUM.value: 2,
        TaskPriority.LOW.value: 3,
    },
    value=TaskModel.priority,
    else_=4,
)

SORT_COLUMNS = {
    "priority": PRIORITY_RANK,
    "due_date": TaskModel.due_date,
    "created_at": TaskModel.created_at,
    "title": TaskModel.title,
    "status": TaskModel.status,
}


class TaskCRUD(BaseCRUD[TaskModel]):
    """CRUD operations for TaskModel."""

    def __init__(self) -> None:
        super().__init__(TaskModel)

    async def get_fresh(self, session: AsyncSession, id: UUID) -> TaskModel | None:
        """Reload a task with assignees and labels repopulated."""
        stmt = select(TaskModel).where(TaskModel.id == id).execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def next_order_index(self, session: AsyncSession, team_id: UUID) -> int:
        stmt = select(func.max(TaskModel.order_index)).where(TaskModel.team_id == team_id)
        current = (await session.execute(stmt)).scalar_one_or_none()
        return 0 if current is None else current + 1

    async def search(
        self,
        session: AsyncSession,
        team_id: UUID,
        statuses: list[TaskStatus] | None = None,
        priorities: list[TaskPriority] | None = None,
        assignee_id: UUID | None = None,
        label_id: UUID | None = None,
        sprint_id: UUID | None = None,
        project_id: UUID | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str = "asc",
    ) -> Sequence[TaskModel]:
        """
        Filtered board query.

        Args:
            session: Async database session
            team_id: Team UUID
            statuses / priorities: Match any of the given values
            assignee_id / label_id: Tasks linked to that user / label
            sprint_id / project_id: Exact match
            search: Case-insensitive substring of title or description
            sort_by: One of SORT_COLUMNS, default order_index
            sort_order: "asc" or "desc"

        Returns:
            Matching tasks
        """
        stmt = select(TaskModel).where(TaskModel.team_id == team_id)
        if statuses:
            stmt = stmt.where(TaskModel.status.in_(statuses))
        if priorities:
            stmt = stmt.where(TaskModel.priority.in_(priorities))
        if assignee_id:
            stmt = stmt.where(
                TaskModel.id.in_(
                    select(TaskAssigneeModel.task_id).where(TaskAssigneeModel.user_id == assignee_id)
                )
            )
        if label_id:
            stmt = stmt.where(
                TaskModel.id.in_(select(TaskLabelModel.task_id).where(TaskLabelModel.label_id == label_id))
            )
        if sprint_id:
            stmt = stmt.where(TaskModel.sprint_id == sprint_id)
        if project_id:
            stmt = stmt.where(TaskModel.project_id == project_id)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(TaskModel.title).like(pattern),
                    func.lower(TaskModel.description).like(pattern),
                )
            )

        column: Any = SORT_COLUMNS.get(sort_by or "", TaskModel.order_index)
        stmt = stmt.order_by(column.desc() if sort_order == "desc" else column.asc(), TaskModel.order_index)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_assigned_open(self, session: AsyncSession, user_id: UUID) -> Sequence[TaskModel]:
        """Open tasks assigned to a user across all teams, most urgent first."""
        stmt = (
            select(TaskModel)
            .join(TaskAssigneeModel, TaskAssigneeModel.task_id == TaskModel.id)
            .where(
                TaskAssigneeModel.user_id == user_id,
                TaskModel.status.not_in([TaskStatus.DONE, TaskStatus.CANCELLED]),
            )
            .order_by(PRIORITY_RANK, TaskModel.due_date.is_(None), TaskModel.due_date)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def replace_assignees(self, session: AsyncSession, task_id: UUID, user_ids: list[UUID]) -> None:
        await session.execute(delete(TaskAssigneeModel).where(TaskAssigneeModel.task_id == task_id))
        for user_id in dict.fromkeys(user_ids):
            session.add(TaskAssigneeModel(task_id=task_id, user_id=user_id))
        await session.flush()

    async def replace_labels(self, session: AsyncSession, task_id: UUID, label_ids: list[UUID]) -> None:
        await session.execute(delete(TaskLabelModel).where(TaskLabelModel.task_id == task_id))
        for label_id in dict.fromkeys(label_ids):
            session.add(TaskLabelModel(task_id=task_id, label_id=label_id))
        await session.flush()


class LabelCRUD(BaseCRUD[LabelModel]):
    """CRUD operations for LabelModel."""

    def __init__(self) -> None:
        super().__init__(LabelModel)

    async def list_for_team(self, session: AsyncSession, team_id: UUID) -> Sequence[LabelModel]:
        return await self.list_where(session, LabelModel.team_id == team_id, order_by=[LabelModel.name])


class TaskCommentCRUD(BaseCRUD[TaskCommentModel]):
    """CRUD operations for TaskCommentModel."""

    def __init__(self) -> None:
        super().__init__(TaskCommentModel)

    async def latest(self, session: AsyncSession, task_id: UUID, limit: int | None = None):
        return await self.list_where(
            session,
            TaskCommentModel.task_id == task_id,
            order_by=[TaskCommentModel.created_at.desc()],
            limit=limit,
        )


class TaskActivityCRUD(BaseCRUD[TaskActivityModel]):
    """CRUD operations for TaskActivityModel."""

    def __init__(self) -> None:
        super().__init__(TaskActivityModel)

    async def latest(self, session: AsyncSession, task_id: UUID, limit: int = 50):
        return await self.list_where(
            session,
            TaskActivityModel.task_id == task_id,
            order_by=[TaskActivityModel.created_at.desc()],
            limit=limit,
        )


task_crud = TaskCRUD()
label_crud = LabelCRUD()
task_comment_crud = TaskCommentCRUD()
task_activity_crud = TaskActivityCRUD()
