"""
Brainstorm service orchestrator.

Brainstorm sessions, their message log, pinning, markdown export, the
shared canvas and streamed AI replies through the AI gateway.

Dependencies: brainforge.boundary.db.CRUD, brainforge.core.ai
System role: Brainstorm use case orchestration
"""

import logging
from typing import AsyncIterator
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import message_dict, session_dict
from brainforge.application.services.project_service import ensure_project_in_team
from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD import brainstorm_message_crud, brainstorm_session_crud
from brainforge.boundary.db.models import (
    BrainstormMessageModel,
    BrainstormSessionModel,
    MessageRole,
    UserModel,
)
from brainforge.core.ai import AIService, ChatMessage
from brainforge.core.ai.prompts import brainstorm_system_prompt
from brainforge.core.exceptions import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)

ROLE_TO_CHAT = {MessageRole.USER: "user", MessageRole.ASSISTANT: "assistant"}


def _display_name(message: BrainstormMessageModel) -> str:
    if message.user is not None:
        return message.user.name
    return "User" if message.role == MessageRole.USER else "AI"


def export_markdown(session: BrainstormSessionModel, messages: list[BrainstormMessageModel]) -> str:
    """Render a session transcript as markdown."""
    parts = [
        f"# {session.title}\n\n",
        f"**Mode:** {session.mode.value}\n",
        f"**Created:** {session.created_at.isoformat()}\n\n---\n\n",
    ]
    for message in messages:
        parts.append(f"### {_display_name(message)}\n\n{message.content}\n\n---\n\n")
    return "".join(parts)


class BrainstormService:
    """Brainstorm service orchestrator."""

    def __init__(self, db: AsyncSession, ai: AIService | None = None) -> None:
        """
        Initialize brainstorm service.

        Args:
            db: Async SQLAlchemy session
            ai: AI gateway, built on the same session when omitted
        """
        self.db = db
        self.ai = ai or AIService(db)

    async def get_session_model(self, team_id: UUID, session_id: UUID) -> BrainstormSessionModel:
        session = await brainstorm_session_crud.get_in_team(self.db, session_id, team_id)
        if session is None:
            raise NotFoundError("Brainstorm session not found")
        return session

    async def _get_message(self, team_id: UUID, message_id: UUID) -> BrainstormMessageModel:
        message = await brainstorm_message_crud.get_by_id(self.db, message_id)
        if message is None:
            raise NotFoundError("Message not found")
        await self.get_session_model(team_id, message.session_id)
        return message

    async def _touch(self, session: BrainstormSessionModel) -> None:
        session.updated_at = utcnow()
        await self.db.flush()

    async def list_sessions(self, team_id: UUID, project_id: UUID | None = None) -> list[dict]:
        sessions = await brainstorm_session_crud.list_for_team(self.db, team_id, project_id)
        counts = await brainstorm_session_crud.message_counts(self.db, [s.id for s in sessions])
        return [session_dict(s, counts.get(s.id, 0)) for s in sessions]

    async def create_session(self, team_id: UUID, user_id: UUID, data: dict) -> dict:
        await ensure_project_in_team(self.db, team_id, data.get("project_id"))
        try:
            session = await brainstorm_session_crud.create(
                self.db, team_id=team_id, created_by=user_id, **data
            )
            logger.info(
                "Brainstorm session created",
                extra={"session_id": str(session.id), "team_id": str(team_id)},
            )
            return session_dict(session, 0)
        except Exception as e:
            logger.error("Failed to create brainstorm session", extra={"error": str(e)})
            raise

    async def get_session(self, team_id: UUID, session_id: UUID) -> dict:
        """Session with its full message log, oldest first."""
        session = await self.get_session_model(team_id, session_id)
        messages = await brainstorm_message_crud.list_for_session(self.db, session.id)
        data = session_dict(session, len(messages))
        data["messages"] = [message_dict(m) for m in messages]
        return data

    async def update_session(self, team_id: UUID, session_id: UUID, changes: dict) -> dict:
        session = await self.get_session_model(team_id, session_id)
        if changes:
            session = await brainstorm_session_crud.update_instance(self.db, session, **changes)
        return session_dict(session)

    async def delete_session(self, team_id: UUID, session_id: UUID) -> None:
        await self.get_session_model(team_id, session_id)
        await brainstorm_session_crud.delete_by_id(self.db, session_id)
        logger.info("Brainstorm session deleted", extra={"session_id": str(session_id)})

    async def update_canvas(self, team_id: UUID, session_id: UUID, changes: dict) -> dict:
        """Replace whiteboard and/or flow data; absent keys are left alone."""
        session = await self.get_session_model(team_id, session_id)
        if changes:
            session = await brainstorm_session_crud.update_instance(self.db, session, **changes)
        return session_dict(session)

    # Messages

    async def add_user_message(self, team_id: UUID, session_id: UUID, user_id: UUID, content: str) -> dict:
        session = await self.get_session_model(team_id, session_id)
        message = await brainstorm_message_crud.create(
            self.db, session_id=session.id, user_id=user_id, role=MessageRole.USER, content=content
        )
        await self._touch(session)
        return message_dict(message)

    async def edit_message(self, team_id: UUID, session_id: UUID, message_id: UUID, user_id: UUID, content: str) -> dict:
        await self.get_session_model(team_id, session_id)
        message = await brainstorm_message_crud.get_in_session(self.db, message_id, session_id)
        if message is None:
            raise NotFoundError("Message not found")
        if message.role != MessageRole.USER or message.user_id != user_id:
            raise ForbiddenError("You can only edit your own messages")
        message = await brainstorm_message_crud.update_instance(self.db, message, content=content, is_edited=True)
        return message_dict(message)

    async def delete_message(self, team_id: UUID, session_id: UUID, message_id: UUID, user_id: UUID) -> None:
        await self.get_session_model(team_id, session_id)
        message = await brainstorm_message_crud.get_in_session(self.db, message_id, session_id)
        if message is None:
            raise NotFoundError("Message not found")
        if message.role != MessageRole.USER or message.user_id != user_id:
            raise ForbiddenError("You can only delete your own messages")
        await brainstorm_message_crud.delete_by_id(self.db, message.id)

    async def set_pinned(self, team_id: UUID, message_id: UUID, pinned: bool) -> dict:
        message = await self._get_message(team_id, message_id)
        message = await brainstorm_message_crud.update_instance(self.db, message, is_pinned=pinned)
        return message_dict(message)

    async def pinned_messages(self, team_id: UUID, session_id: UUID) -> list[dict]:
        await self.get_session_model(team_id, session_id)
        messages = await brainstorm_message_crud.list_for_session(self.db, session_id, pinned_only=True)
        return [message_dict(m) for m in messages]

    async def export(self, team_id: UUID, session_id: UUID) -> str:
        session = await self.get_session_model(team_id, session_id)
        messages = await brainstorm_message_crud.list_for_session(self.db, session.id)
        return export_markdown(session, list(messages))

    # AI

    async def build_conversation(self, session: BrainstormSessionModel) -> list[ChatMessage]:
        """System prompt for the session mode followed by the USER/ASSISTANT log."""
        history = await brainstorm_message_crud.list_for_session(self.db, session.id)
        messages = [
            ChatMessage(
                role="system",
                content=brainstorm_system_prompt(session.mode.value, session.title, session.context),
            )
        ]
        messages.extend(
            ChatMessage(role=ROLE_TO_CHAT[m.role], content=m.content)
            for m in history
            if m.role in ROLE_TO_CHAT
        )
        return messages

    async def stream_reply(
        self,
        team_id: UUID,
        session_id: UUID,
        user: UserModel,
        provider: str,
        model: str,
        content: str | None = None,
    ) -> AsyncIterator[str]:
        """
        Stream an AI reply for the session.

        Stores ``content`` as a USER message first when given, yields the
        reply chunk by chunk and persists the full reply as an ASSISTANT
        message once the stream ends.

        Yields:
            str: Reply chunks
        """
        session = await self.get_session_model(team_id, session_id)
        if content:
            await brainstorm_message_crud.create(
                self.db, session_id=session.id, user_id=user.id, role=MessageRole.USER, content=content
            )
        conversation = await self.build_conversation(session)

        chunks = []
        async for chunk in self.ai.stream(user.id, provider, model, conversation):
            chunks.append(chunk)
            yield chunk

        await brainstorm_message_crud.create(
            self.db,
            session_id=session.id,
            role=MessageRole.ASSISTANT,
            content="".join(chunks),
            provider=provider.upper(),
            model=model,
        )
        await self._touch(session)
        logger.info(
            "Brainstorm reply streamed",
            extra={"session_id": str(session.id), "provider": provider.upper(), "model": model},
        )
