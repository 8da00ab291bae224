"""
Note service orchestrator.

Versioned team notes: every content change snapshots the previous content
into the history table, and any snapshot can be restored.

Dependencies: brainforge.boundary.db.CRUD, brainforge.core.ai
System role: Notes use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import note_dict, note_history_dict
from brainforge.application.services.project_service import ensure_project_in_team
from brainforge.boundary.db.CRUD import note_crud, note_history_crud
from brainforge.boundary.db.models import NoteModel
from brainforge.core.ai import AIService
from brainforge.core.ai.prompts import note_assist_messages
from brainforge.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class NoteService:
    """Note service orchestrator."""

    def __init__(self, db: AsyncSession, ai: AIService | None = None) -> None:
        self.db = db
        self.ai = ai or AIService(db)

    async def _get(self, team_id: UUID, note_id: UUID) -> NoteModel:
        note = await note_crud.get_in_team(self.db, note_id, team_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note

    async def _snapshot(self, note: NoteModel, user_id: UUID) -> None:
        await note_history_crud.create(
            self.db, note_id=note.id, content=note.content, version=note.version, edited_by=user_id
        )

    async def list_notes(self, team_id: UUID, project_id: UUID | None = None) -> list[dict]:
        return [note_dict(n) for n in await note_crud.list_for_team(self.db, team_id, project_id)]

    async def get_note(self, team_id: UUID, note_id: UUID) -> dict:
        return note_dict(await self._get(team_id, note_id))

    async def create_note(self, team_id: UUID, user_id: UUID, data: dict) -> dict:
        await ensure_project_in_team(self.db, team_id, data.get("project_id"))
        note = await note_crud.create(self.db, team_id=team_id, created_by=user_id, version=1, **data)
        logger.info("Note created", extra={"note_id": str(note.id), "team_id": str(team_id)})
        return note_dict(note)

    async def update_note(self, team_id: UUID, note_id: UUID, user_id: UUID, changes: dict) -> dict:
        """
        Update title and/or content.

        A content change that differs from the stored content snapshots the
        old version and bumps ``version``.
        """
        note = await self._get(team_id, note_id)
        content = changes.get("content")
        if content is not None and content != note.content:
            await self._snapshot(note, user_id)
            changes["version"] = note.version + 1
        if changes:
            note = await note_crud.update_instance(self.db, note, **changes)
        return note_dict(note)

    async def delete_note(self, team_id: UUID, note_id: UUID) -> None:
        await self._get(team_id, note_id)
        await note_history_crud.delete_for_note(self.db, note_id)
        await note_crud.delete_by_id(self.db, note_id)

    async def history(self, team_id: UUID, note_id: UUID) -> list[dict]:
        note = await self._get(team_id, note_id)
        return [note_history_dict(h) for h in await note_history_crud.latest(self.db, note.id)]

    async def restore(self, team_id: UUID, note_id: UUID, history_id: UUID, user_id: UUID) -> dict:
        """Bring back a snapshot; the current content is snapshotted first."""
        note = await self._get(team_id, note_id)
        entry = await note_history_crud.get_by_id(self.db, history_id)
        if entry is None or entry.note_id != note.id:
            raise NotFoundError("History entry not found")

        await self._snapshot(note, user_id)
        note = await note_crud.update_instance(
            self.db, note, content=entry.content, version=note.version + 1
        )
        logger.info(
            "Note restored",
            extra={"note_id": str(note_id), "restored_version": entry.version},
        )
        return note_dict(note)

    async def ai_assist(self, user_id: UUID, provider: str, model: str, action: str, content: str) -> dict:
        result = await self.ai.chat(
            user_id, provider, model, note_assist_messages(action, content), feature="note-assist"
        )
        return {"content": result.content}
