"""
Sprint plan service orchestrator.

Sprint plans with an AI-drafted breakdown that can be turned into board
tasks.

Dependencies: brainforge.boundary.db.CRUD, brainforge.core.ai
System role: Sprint planning use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.coercion import clip_title, coerce_enum
from brainforge.application.serializers import sprint_dict, task_dict
from brainforge.application.services.project_service import ensure_project_in_team
from brainforge.boundary.db.CRUD import sprint_crud, task_crud
from brainforge.boundary.db.models import SprintPlanModel, SprintStatus, TaskPriority, TaskStatus
from brainforge.core.ai import AIService, ChatOptions
from brainforge.core.ai.parsing import extract_json_object
from brainforge.core.ai.prompts import sprint_messages
from brainforge.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class SprintService:
    """Sprint plan service orchestrator."""

    def __init__(self, db: AsyncSession, ai: AIService | None = None) -> None:
        """
        Initialize sprint service.

        Args:
            db: Async SQLAlchemy session
            ai: AI gateway, built on the same session when omitted
        """
        self.db = db
        self.ai = ai or AIService(db)

    async def _get(self, team_id: UUID, sprint_id: UUID) -> SprintPlanModel:
        sprint = await sprint_crud.get_in_team(self.db, sprint_id, team_id)
        if sprint is None:
            raise NotFoundError("Sprint plan not found")
        return sprint

    async def list_sprints(self, team_id: UUID, project_id: UUID | None = None) -> list[dict]:
        return [sprint_dict(s) for s in await sprint_crud.list_for_team(self.db, team_id, project_id)]

    async def get_sprint(self, team_id: UUID, sprint_id: UUID) -> dict:
        return sprint_dict(await self._get(team_id, sprint_id))

    async def create_sprint(self, team_id: UUID, user_id: UUID, data: dict) -> dict:
        await ensure_project_in_team(self.db, team_id, data.get("project_id"))
        sprint = await sprint_crud.create(
            self.db, team_id=team_id, created_by=user_id, status=SprintStatus.DRAFT, data={}, **data
        )
        logger.info("Sprint plan created", extra={"sprint_id": str(sprint.id), "team_id": str(team_id)})
        return sprint_dict(sprint)

    async def generate_plan(
        self,
        user_id: UUID,
        provider: str,
        model: str,
        goal: str,
        deadline: str,
        team_size: int,
        context: str | None = None,
    ) -> dict:
        """
        Ask the model for a sprint breakdown.

        Returns:
            dict: The parsed plan, or ``{error, raw}`` when the reply is not JSON
        """
        result = await self.ai.chat(
            user_id,
            provider,
            model,
            sprint_messages(goal, deadline, team_size, context),
            ChatOptions(temperature=0.4, max_tokens=8192),
            feature="sprint",
        )
        try:
            return extract_json_object(result.content)
        except ValueError:
            logger.warning("Sprint plan reply was not JSON", extra={"model": model})
            return {"error": "Failed to parse AI response", "raw": result.content}

    async def generate_sprint(self, team_id: UUID, user_id: UUID, provider: str, model: str, data: dict) -> dict:
        """Create a DRAFT sprint whose plan is drafted by the model."""
        await ensure_project_in_team(self.db, team_id, data.get("project_id"))
        plan = await self.generate_plan(
            user_id,
            provider,
            model,
            data["goal"],
            data["deadline"].date().isoformat(),
            data.get("team_size") or 3,
            data.get("context"),
        )
        sprint = await sprint_crud.create(
            self.db, team_id=team_id, created_by=user_id, status=SprintStatus.DRAFT, data=plan, **data
        )
        logger.info(
            "Sprint plan generated",
            extra={"sprint_id": str(sprint.id), "parsed": "error" not in plan},
        )
        return sprint_dict(sprint)

    async def update_sprint(self, team_id: UUID, sprint_id: UUID, changes: dict) -> dict:
        sprint = await self._get(team_id, sprint_id)
        if changes:
            sprint = await sprint_crud.update_instance(self.db, sprint, **changes)
        return sprint_dict(sprint)

    async def delete_sprint(self, team_id: UUID, sprint_id: UUID) -> None:
        await self._get(team_id, sprint_id)
        await sprint_crud.delete_by_id(self.db, sprint_id)

    async def convert_to_tasks(self, team_id: UUID, sprint_id: UUID, user_id: UUID) -> list[dict]:
        """
        Turn the plan's task list into TODO board tasks and activate the sprint.

        Raises:
            ValidationError: The plan holds no tasks
        """
        sprint = await self._get(team_id, sprint_id)
        planned = (sprint.data or {}).get("tasks") or []
        if not isinstance(planned, list) or not planned:
            raise ValidationError("No tasks found in sprint plan", status_code=400)

        start = await task_crud.next_order_index(self.db, team_id)
        created = []
        for offset, item in enumerate(p for p in planned if isinstance(p, dict)):
            task = await task_crud.create(
                self.db,
                team_id=team_id,
                project_id=sprint.project_id,
                sprint_id=sprint.id,
                created_by=user_id,
                title=clip_title(item.get("title"), "Untitled task"),
                description=item.get("description") or "",
                priority=coerce_enum(TaskPriority, item.get("priority"), TaskPriority.MEDIUM),
                status=TaskStatus.TODO,
                order_index=start + offset,
            )
            created.append(task)

        await sprint_crud.update_instance(self.db, sprint, status=SprintStatus.ACTIVE)
        logger.info(
            "Sprint converted to tasks",
            extra={"sprint_id": str(sprint_id), "task_count": len(created)},
        )
        return [task_dict(await task_crud.get_fresh(self.db, t.id)) for t in created]
