"""
Calendar service orchestrator.

Team calendar events plus an aggregated feed that overlays task due dates
and sprint deadlines on top of the stored events.

Dependencies: brainforge.boundary.db.CRUD
System role: Calendar use case orchestration
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import event_dict
from brainforge.boundary.db.CRUD import (
    brainstorm_session_crud,
    calendar_event_crud,
    sprint_crud,
    task_crud,
)
from brainforge.boundary.db.models import (
    CalendarEventModel,
    SprintPlanModel,
    TaskModel,
    TaskPriority,
)
from brainforge.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

URGENT_COLOR = "#ef4444"
HIGH_COLOR = "#f97316"
DEFAULT_TASK_COLOR = "#3b82f6"
SPRINT_COLOR = "#8b5cf6"

# Linked records an event may point at, with the CRUD that resolves them in the team.
EVENT_LINKS = {
    "task_id": (task_crud, "Task not found"),
    "sprint_id": (sprint_crud, "Sprint plan not found"),
    "session_id": (brainstorm_session_crud, "Brainstorm session not found"),
}


def task_color(priority: TaskPriority | str) -> str:
    value = priority.value if isinstance(priority, TaskPriority) else str(priority)
    if value in ("URGENT", "CRITICAL"):
        return URGENT_COLOR
    if value == "HIGH":
        return HIGH_COLOR
    return DEFAULT_TASK_COLOR


def task_feed_entry(task: TaskModel) -> dict:
    return {
        "id": f"task-{task.id}",
        "title": f"📋 {task.title}",
        "start_date": task.due_date,
        "end_date": task.due_date,
        "type": "DEADLINE",
        "all_day": True,
        "color": task_color(task.priority),
        "meta": {"type": "task", "id": task.id, "status": task.status},
    }


def sprint_feed_entry(sprint: SprintPlanModel) -> dict:
    return {
        "id": f"sprint-{sprint.id}",
        "title": f"🏃 {sprint.title}",
        "start_date": sprint.deadline,
        "end_date": sprint.deadline,
        "type": "SPRINT",
        "all_day": True,
        "color": SPRINT_COLOR,
        "meta": {"type": "sprint", "id": sprint.id, "status": sprint.status},
    }


class CalendarService:
    """Calendar service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get(self, team_id: UUID, event_id: UUID) -> CalendarEventModel:
        event = await calendar_event_crud.get_in_team(self.db, event_id, team_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    async def _check_links(self, team_id: UUID, data: dict) -> None:
        for field, (crud, message) in EVENT_LINKS.items():
            linked_id = data.get(field)
            if linked_id is not None and await crud.get_in_team(self.db, linked_id, team_id) is None:
                raise NotFoundError(message)

    async def list_events(
        self, team_id: UUID, start: datetime | None = None, end: datetime | None = None
    ) -> list[dict]:
        return [event_dict(e) for e in await calendar_event_crud.list_in_range(self.db, team_id, start, end)]

    async def get_event(self, team_id: UUID, event_id: UUID) -> dict:
        return event_dict(await self._get(team_id, event_id))

    async def create_event(self, team_id: UUID, user_id: UUID, data: dict) -> dict:
        await self._check_links(team_id, data)
        event = await calendar_event_crud.create(self.db, team_id=team_id, created_by=user_id, **data)
        logger.info("Calendar event created", extra={"event_id": str(event.id), "team_id": str(team_id)})
        return event_dict(event)

    async def update_event(self, team_id: UUID, event_id: UUID, changes: dict) -> dict:
        event = await self._get(team_id, event_id)
        if changes:
            event = await calendar_event_crud.update_instance(self.db, event, **changes)
        return event_dict(event)

    async def delete_event(self, team_id: UUID, event_id: UUID) -> None:
        await self._get(team_id, event_id)
        await calendar_event_crud.delete_by_id(self.db, event_id)

    async def feed(self, team_id: UUID, start: datetime, end: datetime) -> list[dict]:
        """
        Events in the window followed by task due dates and sprint deadlines.

        Synthetic entries carry ``task-{id}`` / ``sprint-{id}`` ids and a
        ``meta`` block pointing back at the source record.
        """
        events = await calendar_event_crud.list_in_range(self.db, team_id, start, end)
        tasks = await calendar_event_crud.tasks_due_between(self.db, team_id, start, end)
        sprints = await calendar_event_crud.sprints_due_between(self.db, team_id, start, end)
        return [
            *(event_dict(e) for e in events),
            *(task_feed_entry(t) for t in tasks),
            *(sprint_feed_entry(s) for s in sprints),
        ]
