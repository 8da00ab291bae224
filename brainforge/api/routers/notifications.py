"""
Notification API endpoints.

Routes:
- GET /teams/{team_id}/notifications - Caller's latest notifications
- GET /teams/{team_id}/notifications/unread-count - Unread badge count
- PATCH /teams/{team_id}/notifications/read-all - Mark all read
- PATCH /teams/{team_id}/notifications/{notification_id}/read - Mark one read
- DELETE /teams/{team_id}/notifications/{notification_id} - Delete one

Dependencies: brainforge.application.services.notification_service
System role: In-app notification HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from brainforge.api.deps import require_team_member
from brainforge.api.deps.dependencies import get_notification_service
from brainforge.application.services import NotificationService
from brainforge.boundary.db.models import TeamMemberModel
from brainforge.models.common import MessageData, SuccessResponse

router = APIRouter(prefix="/teams/{team_id}/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(
    team_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    notification_service: NotificationService = Depends(get_notification_service),
) -> SuccessResponse:
    return SuccessResponse(data=await notification_service.list_notifications(team_id, membership.user_id))


@router.get("/unread-count")
async def unread_count(
    team_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    notification_service: NotificationService = Depends(get_notification_service),
) -> SuccessResponse:
    return SuccessResponse(data=await notification_service.unread_count(team_id, membership.user_id))


@router.patch("/read-all")
async def mark_all_read(
    team_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    notification_service: NotificationService = Depends(get_notification_service),
) -> SuccessResponse:
    return SuccessResponse(data=await notification_service.mark_all_read(team_id, membership.user_id))


@router.patch("/{notification_id}/read")
async def mark_read(
    team_id: UUID,
    notification_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    notification_service: NotificationService = Depends(get_notification_service),
) -> SuccessResponse:
    return SuccessResponse(data=await notification_service.mark_read(notification_id, membership.user_id))


@router.delete("/{notification_id}")
async def delete_notification(
    team_id: UUID,
    notification_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    notification_service: NotificationService = Depends(get_notification_service),
) -> SuccessResponse:
    await notification_service.delete(notification_id, membership.user_id)
    return SuccessResponse(data=MessageData(message="Notification deleted"))
