"""
Task service orchestrator.

Task board operations: creation with assignees and labels, filtered listing,
field updates with an activity trail, comments, drag-and-drop reordering,
team labels and the cross-team "my tasks" view. Creation, status changes and
comments notify the rest of the team.

Dependencies: brainforge.boundary.db.CRUD, brainforge.application.services.notification_service
System role: Task board use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import (
    activity_dict,
    comment_dict,
    label_dict,
    task_dict,
)
from brainforge.application.services.notification_service import NotificationService
from brainforge.application.services.project_service import ensure_project_in_team
from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD import (
    label_crud,
    sprint_crud,
    task_activity_crud,
    task_comment_crud,
    task_crud,
    team_crud,
    team_member_crud,
)
from brainforge.boundary.db.models import LabelModel, TaskModel, TaskStatus
from brainforge.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DETAIL_HISTORY_LIMIT = 20

# Field changes that leave a trail, mapped to their activity action.
TRACKED_FIELDS = {
    "title": "title_changed",
    "status": "status_changed",
    "priority": "priority_changed",
}


def task_link(task_id: UUID) -> str:
    return f"/tasks?task={task_id}"


def _plain(value) -> str | None:
    if value is None:
        return None
    return value.value if hasattr(value, "value") else str(value)


def completion_time(status: TaskStatus):
    return utcnow() if status == TaskStatus.DONE else None


class TaskService:
    """Task service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize task service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db
        self.notifications = NotificationService(db)

    async def _get(self, team_id: UUID, task_id: UUID) -> TaskModel:
        task = await task_crud.get_in_team(self.db, task_id, team_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def _check_assignees(self, team_id: UUID, user_ids: list[UUID]) -> None:
        members = set(await team_member_crud.team_user_ids(self.db, team_id))
        if any(uid not in members for uid in user_ids):
            raise ValidationError("Assignees must be team members", field="assignee_ids", status_code=400)

    async def _check_labels(self, team_id: UUID, label_ids: list[UUID]) -> None:
        if not label_ids:
            return
        team_labels = {
            label.id
            for label in await label_crud.list_where(
                self.db, LabelModel.team_id == team_id, LabelModel.id.in_(label_ids)
            )
        }
        if set(label_ids) - team_labels:
            raise ValidationError("Unknown label", field="label_ids", status_code=400)

    async def _check_sprint(self, team_id: UUID, sprint_id: UUID | None) -> None:
        if sprint_id is not None and await sprint_crud.get_in_team(self.db, sprint_id, team_id) is None:
            raise NotFoundError("Sprint not found")

    async def _log(self, task_id: UUID, user_id: UUID, action: str, old=None, new=None) -> None:
        await task_activity_crud.create(
            self.db,
            task_id=task_id,
            user_id=user_id,
            action=action,
            old_value=_plain(old),
            new_value=_plain(new),
        )

    async def create_task(self, team_id: UUID, user_id: UUID, data: dict) -> dict:
        """
        Create a task at the end of the board.

        Args:
            team_id: Team UUID
            user_id: Creator
            data: CreateTaskRequest fields

        Returns:
            dict: Created task with assignees and labels
        """
        assignee_ids = data.pop("assignee_ids", None) or []
        label_ids = data.pop("label_ids", None) or []
        await ensure_project_in_team(self.db, team_id, data.get("project_id"))
        await self._check_sprint(team_id, data.get("sprint_id"))
        await self._check_assignees(team_id, assignee_ids)
        await self._check_labels(team_id, label_ids)

        try:
            status = data.get("status") or TaskStatus.TODO
            task = await task_crud.create(
                self.db,
                team_id=team_id,
                created_by=user_id,
                order_index=await task_crud.next_order_index(self.db, team_id),
                completed_at=completion_time(status),
                **data,
            )
            if assignee_ids:
                await task_crud.replace_assignees(self.db, task.id, assignee_ids)
            if label_ids:
                await task_crud.replace_labels(self.db, task.id, label_ids)
            await self._log(task.id, user_id, "created", new=task.title)

            await self.notifications.create_for_team(
                team_id,
                user_id,
                title="New Task Created",
                message=f'"{task.title}" was created',
                type="task",
                link=task_link(task.id),
            )
            logger.info("Task created", extra={"task_id": str(task.id), "team_id": str(team_id)})
            return task_dict(await task_crud.get_fresh(self.db, task.id))
        except Exception as e:
            logger.error("Failed to create task", extra={"error": str(e), "team_id": str(team_id)})
            raise

    async def list_tasks(self, team_id: UUID, filters: dict) -> list[dict]:
        tasks = await task_crud.search(
            self.db,
            team_id,
            statuses=filters.get("status"),
            priorities=filters.get("priority"),
            assignee_id=filters.get("assignee_id"),
            label_id=filters.get("label_id"),
            sprint_id=filters.get("sprint_id"),
            project_id=filters.get("project_id"),
            search=filters.get("search"),
            sort_by=filters.get("sort_by"),
            sort_order=filters.get("sort_order") or "asc",
        )
        return [task_dict(t) for t in tasks]

    async def get_task(self, team_id: UUID, task_id: UUID) -> dict:
        task = await self._get(team_id, task_id)
        data = task_dict(task)
        data["comments"] = [
            comment_dict(c) for c in await task_comment_crud.latest(self.db, task.id, DETAIL_HISTORY_LIMIT)
        ]
        data["activities"] = [
            activity_dict(a) for a in await task_activity_crud.latest(self.db, task.id, DETAIL_HISTORY_LIMIT)
        ]
        return data

    async def update_task(self, team_id: UUID, task_id: UUID, user_id: UUID, changes: dict) -> dict:
        """
        Apply a partial update.

        Title, status and priority changes are recorded as activities.
        Moving to DONE stamps ``completed_at``; any other status clears it.
        A status change notifies the team.
        """
        task = await self._get(team_id, task_id)
        if "project_id" in changes:
            await ensure_project_in_team(self.db, team_id, changes["project_id"])
        if "sprint_id" in changes:
            await self._check_sprint(team_id, changes["sprint_id"])

        trail = []
        for field, action in TRACKED_FIELDS.items():
            if field in changes:
                trail.append((action, getattr(task, field), changes[field]))
        if changes.get("status") is not None:
            changes["completed_at"] = completion_time(changes["status"])

        task = await task_crud.update_instance(self.db, task, **changes)
        for action, old, new in trail:
            await self._log(task.id, user_id, action, old, new)

        status_change = next((t for t in trail if t[0] == "status_changed"), None)
        if status_change:
            await self.notifications.create_for_team(
                team_id,
                user_id,
                title="Task Updated",
                message=f'"{task.title}" status changed to {_plain(status_change[2])}',
                type="task",
                link=task_link(task.id),
            )
        return task_dict(await task_crud.get_fresh(self.db, task.id))

    async def update_assignees(self, team_id: UUID, task_id: UUID, assignee_ids: list[UUID]) -> dict:
        task = await self._get(team_id, task_id)
        await self._check_assignees(team_id, assignee_ids)
        await task_crud.replace_assignees(self.db, task.id, assignee_ids)
        return task_dict(await task_crud.get_fresh(self.db, task.id))

    async def delete_task(self, team_id: UUID, task_id: UUID) -> None:
        task = await self._get(team_id, task_id)
        await task_crud.delete_by_id(self.db, task.id)
        logger.info("Task deleted", extra={"task_id": str(task_id)})

    async def add_comment(self, team_id: UUID, task_id: UUID, user_id: UUID, content: str) -> dict:
        task = await self._get(team_id, task_id)
        comment = await task_comment_crud.create(self.db, task_id=task.id, user_id=user_id, content=content)
        await self._log(task.id, user_id, "comment_added", new=content[:200])
        await self.notifications.create_for_team(
            team_id,
            user_id,
            title="New Comment",
            message=f'Comment on "{task.title}": {content[:100]}',
            type="comment",
            link=task_link(task.id),
        )
        return comment_dict(comment)

    async def list_comments(self, team_id: UUID, task_id: UUID) -> list[dict]:
        task = await self._get(team_id, task_id)
        return [comment_dict(c) for c in await task_comment_crud.latest(self.db, task.id)]

    async def list_activities(self, team_id: UUID, task_id: UUID) -> list[dict]:
        task = await self._get(team_id, task_id)
        return [activity_dict(a) for a in await task_activity_crud.latest(self.db, task.id)]

    async def reorder(self, team_id: UUID, items: list[dict]) -> None:
        """
        Persist a new board order.

        All items are applied in the request transaction; an id outside the
        team fails the whole batch.
        """
        ids = [item["id"] for item in items]
        tasks = {
            t.id: t
            for t in await task_crud.list_where(self.db, TaskModel.team_id == team_id, TaskModel.id.in_(ids))
        }
        if len(tasks) != len(set(ids)):
            raise NotFoundError("Task not found")

        for item in items:
            task = tasks[item["id"]]
            task.order_index = item["order_index"]
            if item.get("status") is not None and item["status"] != task.status:
                task.status = item["status"]
                task.completed_at = completion_time(item["status"])
        await self.db.flush()

    # Labels

    async def create_label(self, team_id: UUID, name: str, color: str) -> dict:
        label = await label_crud.create(self.db, team_id=team_id, name=name, color=color)
        return label_dict(label)

    async def list_labels(self, team_id: UUID) -> list[dict]:
        return [label_dict(label) for label in await label_crud.list_for_team(self.db, team_id)]

    async def my_tasks(self, user_id: UUID) -> list[dict]:
        """Open tasks assigned to the user in any team, with the team name."""
        tasks = await task_crud.list_assigned_open(self.db, user_id)
        teams = {}
        result = []
        for task in tasks:
            if task.team_id not in teams:
                team = await team_crud.get_by_id(self.db, task.team_id)
                teams[task.team_id] = {"id": team.id, "name": team.name} if team else None
            data = task_dict(task)
            data["team"] = teams[task.team_id]
            result.append(data)
        return result
