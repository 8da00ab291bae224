"""
Bulk AI generation service.

Turns one free-text prompt into tasks, a brainstorm session, notes and
goals in a single model call. The reply must be strict JSON; a broken reply
gets exactly one repair round trip before the request fails.

Dependencies: brainforge.boundary.db.CRUD, brainforge.core.ai
System role: Workspace bootstrap use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.coercion import clamp_progress, clip_title, coerce_enum, parse_date
from brainforge.application.serializers import (
    goal_dict,
    message_dict,
    note_dict,
    session_dict,
    task_dict,
)
from brainforge.application.services.project_service import ensure_project_in_team
from brainforge.boundary.db.CRUD import (
    brainstorm_message_crud,
    brainstorm_session_crud,
    goal_crud,
    note_crud,
    task_crud,
)
from brainforge.boundary.db.models import (
    BrainstormMode,
    GoalStatus,
    MessageRole,
    TaskPriority,
    TaskStatus,
)
from brainforge.core.ai import AIService, ChatMessage
from brainforge.core.ai.parsing import try_extract_json_object
from brainforge.core.ai.prompts import GENERATE_SCHEMAS, generate_system_prompt, repair_prompt
from brainforge.core.exceptions import AIParseError, ValidationError

logger = logging.getLogger(__name__)


def normalize_types(generate_types: list[str]) -> list[str]:
    """
    Lower-case, de-duplicate and filter requested kinds.

    Raises:
        ValidationError: Nothing valid was requested
    """
    requested = []
    for value in generate_types or []:
        kind = (value or "").strip().lower()
        if kind in GENERATE_SCHEMAS and kind not in requested:
            requested.append(kind)
    if not requested:
        raise ValidationError(
            "No valid generate_types provided. Allowed: " + ", ".join(GENERATE_SCHEMAS),
            field="generate_types",
            status_code=400,
        )
    return requested


def _entries(parsed: dict, key: str) -> list[dict]:
    value = parsed.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict) and item.get("title")]


class AIGenerateService:
    """Bulk generation orchestrator."""

    def __init__(self, db: AsyncSession, ai: AIService | None = None) -> None:
        self.db = db
        self.ai = ai or AIService(db)

    async def _ask(self, user_id: UUID, provider: str, model: str, system: str, content: str) -> str:
        result = await self.ai.chat(
            user_id,
            provider,
            model,
            [ChatMessage(role="system", content=system), ChatMessage(role="user", content=content)],
            feature="ai-generate",
        )
        return result.content

    async def _parse_with_repair(
        self, user_id: UUID, provider: str, model: str, system: str, raw: str
    ) -> dict:
        parsed = try_extract_json_object(raw)
        if parsed is not None:
            return parsed

        logger.warning("Generation reply was not JSON, asking for a repair", extra={"model": model})
        repaired = await self._ask(user_id, provider, model, system, repair_prompt(raw))
        parsed = try_extract_json_object(repaired)
        if parsed is None:
            raise AIParseError(
                "AI returned invalid JSON even after repair attempt. Please try again.", raw=raw
            )
        return parsed

    async def generate(
        self,
        team_id: UUID,
        user_id: UUID,
        provider: str,
        model: str,
        prompt: str,
        generate_types: list[str],
        project_id: UUID | None = None,
    ) -> dict:
        """
        Generate and persist workspace content from a prompt.

        Args:
            team_id: Team receiving the content
            user_id: Requesting user, owner of the AI key
            provider: Provider id
            model: Model id
            prompt: Free-text description of the work
            generate_types: Subset of tasks, brainstorm, notes, goals
            project_id: Optional project to attach everything to

        Returns:
            dict: ``generated`` (parsed reply), ``created`` records and ``summary`` counts

        Raises:
            ValidationError: No valid type requested
            AIParseError: Reply unparseable after the repair attempt
        """
        requested = normalize_types(generate_types)
        await ensure_project_in_team(self.db, team_id, project_id)

        system = generate_system_prompt(requested)
        raw = await self._ask(user_id, provider, model, system, prompt)
        parsed = await self._parse_with_repair(user_id, provider, model, system, raw)

        created: dict = {"tasks": [], "brainstorm": None, "notes": [], "goals": []}
        try:
            if "tasks" in requested:
                created["tasks"] = await self._create_tasks(team_id, user_id, project_id, parsed)
            if "brainstorm" in requested and isinstance(parsed.get("brainstorm"), dict):
                created["brainstorm"] = await self._create_session(
                    team_id, user_id, project_id, prompt, parsed["brainstorm"]
                )
            if "notes" in requested:
                created["notes"] = await self._create_notes(team_id, user_id, project_id, parsed)
            if "goals" in requested:
                created["goals"] = await self._create_goals(team_id, user_id, project_id, parsed)
        except Exception as e:
            logger.error("Failed to store generated content", extra={"error": str(e), "team_id": str(team_id)})
            raise

        summary = {
            "tasks": len(created["tasks"]),
            "brainstorm": 1 if created["brainstorm"] else 0,
            "notes": len(created["notes"]),
            "goals": len(created["goals"]),
        }
        logger.info("Workspace content generated", extra={"team_id": str(team_id), **summary})
        return {"generated": parsed, "created": created, "summary": summary}

    async def _create_tasks(self, team_id: UUID, user_id: UUID, project_id: UUID | None, parsed: dict) -> list[dict]:
        tasks = []
        for entry in _entries(parsed, "tasks"):
            task = await task_crud.create(
                self.db,
                team_id=team_id,
                created_by=user_id,
                project_id=project_id,
                title=clip_title(entry["title"], "Untitled task"),
                description=str(entry.get("description") or ""),
                priority=coerce_enum(TaskPriority, entry.get("priority"), TaskPriority.MEDIUM),
                status=coerce_enum(TaskStatus, entry.get("status"), TaskStatus.TODO),
                order_index=await task_crud.next_order_index(self.db, team_id),
            )
            tasks.append(task_dict(await task_crud.get_fresh(self.db, task.id)))
        return tasks

    async def _create_session(
        self, team_id: UUID, user_id: UUID, project_id: UUID | None, prompt: str, entry: dict
    ) -> dict:
        session = await brainstorm_session_crud.create(
            self.db,
            team_id=team_id,
            created_by=user_id,
            project_id=project_id,
            title=clip_title(entry.get("title"), "AI Generated Session"),
            mode=coerce_enum(BrainstormMode, entry.get("mode"), BrainstormMode.BRAINSTORM),
            context=prompt,
        )
        messages = []
        opener = entry.get("initialMessage")
        if opener:
            messages.append(
                await brainstorm_message_crud.create(
                    self.db, session_id=session.id, role=MessageRole.ASSISTANT, content=str(opener)
                )
            )
        data = session_dict(session, len(messages))
        data["messages"] = [message_dict(m) for m in messages]
        return data

    async def _create_notes(self, team_id: UUID, user_id: UUID, project_id: UUID | None, parsed: dict) -> list[dict]:
        notes = []
        for entry in _entries(parsed, "notes"):
            note = await note_crud.create(
                self.db,
                team_id=team_id,
                created_by=user_id,
                project_id=project_id,
                title=clip_title(entry["title"], "Untitled note"),
                content=str(entry.get("content") or ""),
                version=1,
            )
            notes.append(note_dict(note))
        return notes

    async def _create_goals(self, team_id: UUID, user_id: UUID, project_id: UUID | None, parsed: dict) -> list[dict]:
        goals = []
        for entry in _entries(parsed, "goals"):
            goal = await goal_crud.create(
                self.db,
                team_id=team_id,
                created_by=user_id,
                project_id=project_id,
                title=clip_title(entry["title"], "Untitled goal"),
                description=str(entry.get("description") or ""),
                status=coerce_enum(GoalStatus, entry.get("status"), GoalStatus.NOT_STARTED),
                progress=clamp_progress(entry.get("progress")),
                due_date=parse_date(entry.get("dueDate")),
            )
            goals.append(goal_dict(goal))
        return goals
