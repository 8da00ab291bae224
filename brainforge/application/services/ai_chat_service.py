"""
AI assistant chat service.

Per-user assistant conversations grounded in a snapshot of the team's
workspace: recent tasks, goals, brainstorm sessions and sprints are
summarized into the system prompt on every turn.

Dependencies: brainforge.boundary.db.CRUD, brainforge.core.ai
System role: Workspace assistant use case orchestration
"""

import logging
from collections import Counter
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import chat_dict, chat_message_dict
from brainforge.application.services.project_service import ensure_project_in_team
from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD import (
    ai_chat_crud,
    ai_chat_message_crud,
    brainstorm_session_crud,
    goal_crud,
    sprint_crud,
    task_crud,
)
from brainforge.boundary.db.models import (
    AIChatModel,
    BrainstormSessionModel,
    GoalModel,
    MessageRole,
    SprintPlanModel,
    TaskModel,
    TaskPriority,
)
from brainforge.core.ai import AIService, ChatMessage
from brainforge.core.ai.prompts import ASSISTANT_PROMPT, EMPTY_WORKSPACE_CONTEXT
from brainforge.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

CONTEXT_LIMITS = {"tasks": 30, "goals": 15, "brainstorms": 10, "sprints": 5}
LISTED_TASKS = 15


def _day(value) -> str:
    return value.date().isoformat() if value else ""


def _task_line(task: TaskModel) -> str:
    line = f"- [{task.status.value}] {task.title}"
    if task.priority != TaskPriority.MEDIUM:
        line += f" ({task.priority.value})"
    if task.due_date:
        line += f" due {_day(task.due_date)}"
    return line


def build_workspace_context(
    tasks: list[TaskModel],
    goals: list[GoalModel],
    sessions: list[BrainstormSessionModel],
    sprints: list[SprintPlanModel],
) -> str:
    """Plain-text workspace summary for the assistant system prompt."""
    sections = []
    if tasks:
        by_status = Counter(t.status.value for t in tasks)
        summary = ", ".join(f"{status}: {n}" for status, n in by_status.items())
        lines = "\n".join(_task_line(t) for t in tasks[:LISTED_TASKS])
        sections.append(f"TASKS ({len(tasks)} recent):\nStatus summary: {summary}\n{lines}")
    if goals:
        lines = "\n".join(
            f"- [{g.status.value}] {g.title} ({g.progress}% done)"
            + (f": {g.description[:100]}" if g.description else "")
            for g in goals
        )
        sections.append(f"GOALS ({len(goals)}):\n{lines}")
    if sessions:
        lines = "\n".join(
            f"- {s.title} ({s.mode.value})" + (f": {s.context[:80]}" if s.context else "")
            for s in sessions
        )
        sections.append(f"BRAINSTORM SESSIONS ({len(sessions)} recent):\n{lines}")
    if sprints:
        lines = "\n".join(
            f"- [{s.status.value}] {s.title}: {s.goal[:100]} (deadline: {_day(s.deadline)})"
            for s in sprints
        )
        sections.append(f"SPRINTS ({len(sprints)}):\n{lines}")
    return "\n\n".join(sections) if sections else EMPTY_WORKSPACE_CONTEXT


class AIChatService:
    """AI assistant chat orchestrator."""

    def __init__(self, db: AsyncSession, ai: AIService | None = None) -> None:
        """
        Initialize chat service.

        Args:
            db: Async SQLAlchemy session
            ai: AI gateway, built on the same session when omitted
        """
        self.db = db
        self.ai = ai or AIService(db)

    async def _get(self, team_id: UUID, chat_id: UUID, user_id: UUID) -> AIChatModel:
        chat = await ai_chat_crud.get_owned(self.db, chat_id, team_id, user_id)
        if chat is None:
            raise NotFoundError("Chat not found")
        return chat

    async def workspace_context(self, team_id: UUID) -> str:
        tasks = await task_crud.list_where(
            self.db, TaskModel.team_id == team_id,
            order_by=[TaskModel.updated_at.desc()], limit=CONTEXT_LIMITS["tasks"],
        )
        goals = await goal_crud.list_where(
            self.db, GoalModel.team_id == team_id,
            order_by=[GoalModel.updated_at.desc()], limit=CONTEXT_LIMITS["goals"],
        )
        sessions = await brainstorm_session_crud.list_where(
            self.db, BrainstormSessionModel.team_id == team_id,
            order_by=[BrainstormSessionModel.updated_at.desc()], limit=CONTEXT_LIMITS["brainstorms"],
        )
        sprints = await sprint_crud.list_where(
            self.db, SprintPlanModel.team_id == team_id,
            order_by=[SprintPlanModel.updated_at.desc()], limit=CONTEXT_LIMITS["sprints"],
        )
        return build_workspace_context(list(tasks), list(goals), list(sessions), list(sprints))

    async def list_chats(self, team_id: UUID, user_id: UUID, project_id: UUID | None = None) -> list[dict]:
        chats = await ai_chat_crud.list_for_user(self.db, team_id, user_id, project_id)
        counts = await ai_chat_crud.message_counts(self.db, [c.id for c in chats])
        return [chat_dict(c, counts.get(c.id, 0)) for c in chats]

    async def create_chat(
        self, team_id: UUID, user_id: UUID, title: str = "New Chat", project_id: UUID | None = None
    ) -> dict:
        await ensure_project_in_team(self.db, team_id, project_id)
        chat = await ai_chat_crud.create(
            self.db, team_id=team_id, created_by=user_id, title=title, project_id=project_id
        )
        return chat_dict(chat, 0)

    async def get_chat(self, team_id: UUID, chat_id: UUID, user_id: UUID) -> dict:
        chat = await self._get(team_id, chat_id, user_id)
        messages = await ai_chat_message_crud.list_for_chat(self.db, chat.id)
        data = chat_dict(chat, len(messages))
        data["messages"] = [chat_message_dict(m) for m in messages]
        return data

    async def rename_chat(self, team_id: UUID, chat_id: UUID, user_id: UUID, title: str) -> dict:
        chat = await self._get(team_id, chat_id, user_id)
        chat = await ai_chat_crud.update_instance(self.db, chat, title=title)
        return chat_dict(chat)

    async def delete_chat(self, team_id: UUID, chat_id: UUID, user_id: UUID) -> None:
        chat = await self._get(team_id, chat_id, user_id)
        await ai_chat_crud.delete_by_id(self.db, chat.id)

    async def send_message(
        self,
        team_id: UUID,
        chat_id: UUID,
        user_id: UUID,
        content: str,
        provider: str,
        model: str,
    ) -> dict:
        """
        Store the user turn, ask the assistant and store its reply.

        Returns:
            dict: The ASSISTANT message
        """
        chat = await self._get(team_id, chat_id, user_id)
        await ai_chat_message_crud.create(self.db, chat_id=chat.id, role=MessageRole.USER, content=content)

        history = await ai_chat_message_crud.list_for_chat(self.db, chat.id)
        system_prompt = ASSISTANT_PROMPT.format(context=await self.workspace_context(team_id))
        messages = [ChatMessage(role="system", content=system_prompt)]
        messages.extend(
            ChatMessage(role=m.role.value.lower(), content=m.content)
            for m in history
            if m.role in (MessageRole.USER, MessageRole.ASSISTANT)
        )

        result = await self.ai.chat(user_id, provider, model, messages, feature="ai-chat")
        reply = await ai_chat_message_crud.create(
            self.db,
            chat_id=chat.id,
            role=MessageRole.ASSISTANT,
            content=result.content,
            provider=provider.upper(),
            model=model,
        )
        chat.updated_at = utcnow()
        await self.db.flush()
        logger.info("Assistant replied", extra={"chat_id": str(chat.id), "model": model})
        return chat_message_dict(reply)
