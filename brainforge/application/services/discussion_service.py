"""
Discussion service orchestrator.

Team discussion threads with replies. Only authors edit or delete their own
threads and replies.

Dependencies: brainforge.boundary.db.CRUD
System role: Discussion board use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import discussion_dict, reply_dict
from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD import discussion_crud, discussion_reply_crud
from brainforge.boundary.db.models import DiscussionModel, DiscussionReplyModel
from brainforge.core.exceptions import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


def _stats_dict(stats: dict) -> dict:
    last = stats["last_reply"]
    return {
        "reply_count": stats["reply_count"],
        "last_reply": reply_dict(last) if last is not None else None,
    }


class DiscussionService:
    """Discussion service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get(self, team_id: UUID, discussion_id: UUID) -> DiscussionModel:
        discussion = await discussion_crud.get_in_team(self.db, discussion_id, team_id)
        if discussion is None:
            raise NotFoundError("Discussion not found")
        return discussion

    async def _get_reply(self, discussion_id: UUID, reply_id: UUID) -> DiscussionReplyModel:
        reply = await discussion_reply_crud.get_in_discussion(self.db, reply_id, discussion_id)
        if reply is None:
            raise NotFoundError("Reply not found")
        return reply

    async def list_discussions(self, team_id: UUID, category: str | None = None) -> list[dict]:
        discussions = await discussion_crud.list_for_team(self.db, team_id, category)
        stats = await discussion_crud.reply_stats(self.db, [d.id for d in discussions])
        return [discussion_dict(d, _stats_dict(stats[d.id])) for d in discussions]

    async def get_discussion(self, team_id: UUID, discussion_id: UUID) -> dict:
        discussion = await self._get(team_id, discussion_id)
        replies = await discussion_reply_crud.list_for_discussion(self.db, discussion.id)
        data = discussion_dict(discussion, {"reply_count": len(replies)})
        data["replies"] = [reply_dict(r) for r in replies]
        return data

    async def create_discussion(self, team_id: UUID, user_id: UUID, data: dict) -> dict:
        discussion = await discussion_crud.create(self.db, team_id=team_id, created_by=user_id, **data)
        logger.info("Discussion created", extra={"discussion_id": str(discussion.id)})
        return discussion_dict(discussion, {"reply_count": 0, "last_reply": None})

    async def update_discussion(self, team_id: UUID, discussion_id: UUID, user_id: UUID, changes: dict) -> dict:
        discussion = await self._get(team_id, discussion_id)
        if discussion.created_by != user_id:
            raise ForbiddenError("You can only edit your own discussions")
        if changes:
            discussion = await discussion_crud.update_instance(self.db, discussion, **changes)
        return discussion_dict(discussion)

    async def delete_discussion(self, team_id: UUID, discussion_id: UUID, user_id: UUID) -> None:
        discussion = await self._get(team_id, discussion_id)
        if discussion.created_by != user_id:
            raise ForbiddenError("You can only delete your own discussions")
        await discussion_crud.delete_by_id(self.db, discussion.id)

    # Replies

    async def add_reply(self, team_id: UUID, discussion_id: UUID, user_id: UUID, content: str) -> dict:
        """Add a reply and bump the thread to the top of the activity order."""
        discussion = await self._get(team_id, discussion_id)
        reply = await discussion_reply_crud.create(
            self.db, discussion_id=discussion.id, user_id=user_id, content=content
        )
        discussion.updated_at = utcnow()
        await self.db.flush()
        return reply_dict(reply)

    async def update_reply(
        self, team_id: UUID, discussion_id: UUID, reply_id: UUID, user_id: UUID, content: str
    ) -> dict:
        await self._get(team_id, discussion_id)
        reply = await self._get_reply(discussion_id, reply_id)
        if reply.user_id != user_id:
            raise ForbiddenError("You can only edit your own replies")
        reply = await discussion_reply_crud.update_instance(self.db, reply, content=content)
        return reply_dict(reply)

    async def delete_reply(self, team_id: UUID, discussion_id: UUID, reply_id: UUID, user_id: UUID) -> None:
        await self._get(team_id, discussion_id)
        reply = await self._get_reply(discussion_id, reply_id)
        if reply.user_id != user_id:
            raise ForbiddenError("You can only delete your own replies")
        await discussion_reply_crud.delete_by_id(self.db, reply.id)
