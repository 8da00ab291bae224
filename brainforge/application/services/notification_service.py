"""
Notification service.

In-app notifications for team activity. Fan-out skips the member who caused
the event.

Dependencies: brainforge.boundary.db.CRUD
System role: Notification use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import notification_dict
from brainforge.boundary.db.CRUD import notification_crud, team_member_crud
from brainforge.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class NotificationService:
    """Notification service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_for_team(
        self,
        team_id: UUID,
        actor_id: UUID,
        title: str,
        message: str | None = None,
        type: str = "info",
        link: str | None = None,
    ) -> int:
        """
        Notify every team member except the actor.

        Returns:
            int: Number of notifications created
        """
        recipients = [uid for uid in await team_member_crud.team_user_ids(self.db, team_id) if uid != actor_id]
        for user_id in recipients:
            await notification_crud.create(
                self.db,
                team_id=team_id,
                user_id=user_id,
                title=title,
                message=message,
                type=type,
                link=link,
            )
        logger.debug(
            "Team notified",
            extra={"team_id": str(team_id), "title": title, "recipients": len(recipients)},
        )
        return len(recipients)

    async def list_notifications(self, team_id: UUID, user_id: UUID) -> list[dict]:
        return [notification_dict(n) for n in await notification_crud.list_for_user(self.db, team_id, user_id)]

    async def unread_count(self, team_id: UUID, user_id: UUID) -> dict:
        return {"count": await notification_crud.count_unread(self.db, team_id, user_id)}

    async def mark_all_read(self, team_id: UUID, user_id: UUID) -> dict:
        return {"updated": await notification_crud.mark_all_read(self.db, team_id, user_id)}

    async def mark_read(self, notification_id: UUID, user_id: UUID) -> dict:
        notification = await notification_crud.get_for_user(self.db, notification_id, user_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        notification = await notification_crud.update_instance(self.db, notification, read=True)
        return notification_dict(notification)

    async def delete(self, notification_id: UUID, user_id: UUID) -> None:
        notification = await notification_crud.get_for_user(self.db, notification_id, user_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        await notification_crud.delete_by_id(self.db, notification.id)
