"""
Goal service orchestrator.

Team goals with progress tracking and SMART goal drafting by the AI.

Dependencies: brainforge.boundary.db.CRUD, brainforge.core.ai
System role: Goal tracking use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.coercion import TITLE_LIMIT, parse_date
from brainforge.application.serializers import goal_dict
from brainforge.application.services.project_service import ensure_project_in_team
from brainforge.boundary.db.CRUD import goal_crud
from brainforge.boundary.db.models import GoalModel, GoalStatus
from brainforge.core.ai import AIService, ChatMessage, ChatOptions
from brainforge.core.ai.parsing import try_extract_json_object
from brainforge.core.ai.prompts import GOALS_PROMPT
from brainforge.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class GoalService:
    """Goal service orchestrator."""

    def __init__(self, db: AsyncSession, ai: AIService | None = None) -> None:
        self.db = db
        self.ai = ai or AIService(db)

    async def _get(self, team_id: UUID, goal_id: UUID) -> GoalModel:
        goal = await goal_crud.get_in_team(self.db, goal_id, team_id)
        if goal is None:
            raise NotFoundError("Goal not found")
        return goal

    async def list_goals(self, team_id: UUID, project_id: UUID | None = None) -> list[dict]:
        return [goal_dict(g) for g in await goal_crud.list_for_team(self.db, team_id, project_id)]

    async def get_goal(self, team_id: UUID, goal_id: UUID) -> dict:
        return goal_dict(await self._get(team_id, goal_id))

    async def create_goal(self, team_id: UUID, user_id: UUID, data: dict) -> dict:
        await ensure_project_in_team(self.db, team_id, data.get("project_id"))
        goal = await goal_crud.create(self.db, team_id=team_id, created_by=user_id, **data)
        return goal_dict(goal)

    async def update_goal(self, team_id: UUID, goal_id: UUID, changes: dict) -> dict:
        goal = await self._get(team_id, goal_id)
        if changes:
            goal = await goal_crud.update_instance(self.db, goal, **changes)
        return goal_dict(goal)

    async def delete_goal(self, team_id: UUID, goal_id: UUID) -> None:
        await self._get(team_id, goal_id)
        await goal_crud.delete_by_id(self.db, goal_id)

    async def generate(
        self,
        team_id: UUID,
        user_id: UUID,
        provider: str,
        model: str,
        prompt: str,
        project_id: UUID | None = None,
    ) -> list[dict]:
        """
        Draft SMART goals from a description and save them.

        Entries without a title are skipped. An unparseable reply yields an
        empty list rather than an error.
        """
        await ensure_project_in_team(self.db, team_id, project_id)
        result = await self.ai.chat(
            user_id,
            provider,
            model,
            [ChatMessage(role="system", content=GOALS_PROMPT), ChatMessage(role="user", content=prompt)],
            ChatOptions(temperature=0.4),
            feature="goals",
        )
        parsed = try_extract_json_object(result.content) or {}
        drafts = parsed.get("goals")
        if not isinstance(drafts, list):
            logger.warning("Goal generation returned no goal list", extra={"model": model})
            return []

        created = []
        for draft in drafts:
            if not isinstance(draft, dict) or not draft.get("title"):
                continue
            goal = await goal_crud.create(
                self.db,
                team_id=team_id,
                created_by=user_id,
                project_id=project_id,
                title=str(draft["title"])[:TITLE_LIMIT],
                description=draft.get("description") or "",
                status=GoalStatus.NOT_STARTED,
                due_date=parse_date(draft.get("dueDate")),
            )
            created.append(goal_dict(goal))
        logger.info("Goals generated", extra={"team_id": str(team_id), "count": len(created)})
        return created
