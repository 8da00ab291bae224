"""
Discussion API endpoints.

Routes:
- GET/POST /teams/{team_id}/discussions - List (category filter), create
- GET/PATCH/DELETE /teams/{team_id}/discussions/{discussion_id} - Thread, update, delete
- POST /teams/{team_id}/discussions/{discussion_id}/replies - Reply
- PATCH/DELETE /teams/{team_id}/discussions/{discussion_id}/replies/{reply_id} - Edit, delete own reply

Dependencies: brainforge.application.services.discussion_service
System role: Team forum HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from brainforge.api.deps import require_team_member
from brainforge.api.deps.dependencies import get_discussion_service
from brainforge.application.services import DiscussionService
from brainforge.boundary.db.models import TeamMemberModel
from brainforge.models.common import MessageData, SuccessResponse
from brainforge.models.discussion import CreateDiscussionRequest, ReplyRequest, UpdateDiscussionRequest

router = APIRouter(prefix="/teams/{team_id}/discussions", tags=["discussions"])


@router.get("")
async def list_discussions(
    team_id: UUID,
    category: str | None = None,
    membership: TeamMemberModel = Depends(require_team_member()),
    discussion_service: DiscussionService = Depends(get_discussion_service),
) -> SuccessResponse:
    """Pinned threads first, then most recently active. ``category=all`` lists everything."""
    return SuccessResponse(data=await discussion_service.list_discussions(team_id, category))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_discussion(
    team_id: UUID,
    request: CreateDiscussionRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    discussion_service: DiscussionService = Depends(get_discussion_service),
) -> SuccessResponse:
    return SuccessResponse(
        data=await discussion_service.create_discussion(team_id, membership.user_id, request.model_dump())
    )


@router.get("/{discussion_id}")
async def get_discussion(
    team_id: UUID,
    discussion_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    discussion_service: DiscussionService = Depends(get_discussion_service),
) -> SuccessResponse:
    return SuccessResponse(data=await discussion_service.get_discussion(team_id, discussion_id))


@router.patch("/{discussion_id}")
async def update_discussion(
    team_id: UUID,
    discussion_id: UUID,
    request: UpdateDiscussionRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    discussion_service: DiscussionService = Depends(get_discussion_service),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True)
    discussion = await discussion_service.update_discussion(team_id, discussion_id, membership.user_id, changes)
    return SuccessResponse(data=discussion)


@router.delete("/{discussion_id}")
async def delete_discussion(
    team_id: UUID,
    discussion_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    discussion_service: DiscussionService = Depends(get_discussion_service),
) -> SuccessResponse:
    await discussion_service.delete_discussion(team_id, discussion_id, membership.user_id)
    return SuccessResponse(data=MessageData(message="Discussion deleted"))


@router.post("/{discussion_id}/replies", status_code=status.HTTP_201_CREATED)
async def add_reply(
    team_id: UUID,
    discussion_id: UUID,
    request: ReplyRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    discussion_service: DiscussionService = Depends(get_discussion_service),
) -> SuccessResponse:
    reply = await discussion_service.add_reply(team_id, discussion_id, membership.user_id, request.content)
    return SuccessResponse(data=reply)


@router.patch("/{discussion_id}/replies/{reply_id}")
async def update_reply(
    team_id: UUID,
    discussion_id: UUID,
    reply_id: UUID,
    request: ReplyRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    discussion_service: DiscussionService = Depends(get_discussion_service),
) -> SuccessResponse:
    reply = await discussion_service.update_reply(
        team_id, discussion_id, reply_id, membership.user_id, request.content
    )
    return SuccessResponse(data=reply)


@router.delete("/{discussion_id}/replies/{reply_id}")
async def delete_reply(
    team_id: UUID,
    discussion_id: UUID,
    reply_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    discussion_service: DiscussionService = Depends(get_discussion_service),
) -> SuccessResponse:
    await discussion_service.delete_reply(team_id, discussion_id, reply_id, membership.user_id)
    return SuccessResponse(data=MessageData(message="Reply deleted"))
