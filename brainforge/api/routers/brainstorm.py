"""
Brainstorm API endpoints.

Routes:
- GET/POST /teams/{team_id}/brainstorm - List (project filter), create
- GET/PATCH/DELETE /teams/{team_id}/brainstorm/{session_id} - Detail with messages, update, delete
- POST /teams/{team_id}/brainstorm/{session_id}/messages - Post a user message
- PATCH/DELETE /teams/{team_id}/brainstorm/{session_id}/messages/{message_id} - Edit, delete own message
- POST /teams/{team_id}/brainstorm/{session_id}/stream - SSE AI reply
- PATCH /teams/{team_id}/brainstorm/messages/{message_id}/pin|unpin - Pin state
- GET /teams/{team_id}/brainstorm/{session_id}/pinned - Pinned messages
- GET /teams/{team_id}/brainstorm/{session_id}/export - Markdown transcript
- PATCH /teams/{team_id}/brainstorm/{session_id}/canvas - Whiteboard and flow data

Dependencies: brainforge.application.services.brainstorm_service, brainforge.boundary.db
System role: Brainstorm HTTP API
"""

import json
import logging
from typing import AsyncIterator
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response, StreamingResponse

from brainforge.api.deps import get_current_user, require_team_member
from brainforge.api.deps.dependencies import get_brainstorm_service
from brainforge.application.services import BrainstormService
from brainforge.boundary.db import get_async_session_factory
from brainforge.boundary.db.models import TeamMemberModel, UserModel
from brainforge.core.exceptions import AppError
from brainforge.models.brainstorm import (
    CreateSessionRequest,
    EditMessageRequest,
    SendMessageRequest,
    StreamMessageRequest,
    UpdateCanvasRequest,
    UpdateSessionRequest,
)
from brainforge.models.common import MessageData, SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/teams/{team_id}/brainstorm", tags=["brainstorm"])


def sse_event(payload: object) -> str:
    return f"data: {json.dumps(payload)}\n\n"


async def stream_reply_events(
    team_id: UUID,
    session_id: UUID,
    user_id: UUID,
    request: StreamMessageRequest,
) -> AsyncIterator[str]:
    """
    Yield SSE lines for an AI reply.

    Runs on its own database session because the response outlives the
    request-scoped one. The reply is committed only when the stream
    completes; failures are reported in-band and roll everything back.
    """
    async with get_async_session_factory()() as db:
        try:
            user = await db.get(UserModel, user_id)
            service = BrainstormService(db)
            async for chunk in service.stream_reply(
                team_id, session_id, user, request.provider, request.model, request.content
            ):
                yield sse_event({"content": chunk})
            await db.commit()
            yield "data: [DONE]\n\n"
        except Exception as e:
            await db.rollback()
            message = e.message if isinstance(e, AppError) else str(e) or "AI request failed"
            logger.error(
                "Brainstorm stream failed",
                extra={"session_id": str(session_id), "error": str(e)},
            )
            yield sse_event({"error": message})


@router.get("")
async def list_sessions(
    team_id: UUID,
    project_id: UUID | None = None,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    return SuccessResponse(data=await brainstorm_service.list_sessions(team_id, project_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(
    team_id: UUID,
    request: CreateSessionRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    return SuccessResponse(
        data=await brainstorm_service.create_session(team_id, membership.user_id, request.model_dump())
    )


@router.patch("/messages/{message_id}/pin")
async def pin_message(
    team_id: UUID,
    message_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    return SuccessResponse(data=await brainstorm_service.set_pinned(team_id, message_id, True))


@router.patch("/messages/{message_id}/unpin")
async def unpin_message(
    team_id: UUID,
    message_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    return SuccessResponse(data=await brainstorm_service.set_pinned(team_id, message_id, False))


@router.get("/{session_id}")
async def get_session(
    team_id: UUID,
    session_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    return SuccessResponse(data=await brainstorm_service.get_session(team_id, session_id))


@router.patch("/{session_id}")
async def update_session(
    team_id: UUID,
    session_id: UUID,
    request: UpdateSessionRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True)
    return SuccessResponse(data=await brainstorm_service.update_session(team_id, session_id, changes))


@router.delete("/{session_id}")
async def delete_session(
    team_id: UUID,
    session_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    await brainstorm_service.delete_session(team_id, session_id)
    return SuccessResponse(data=MessageData(message="Session deleted"))


@router.post("/{session_id}/messages", status_code=status.HTTP_201_CREATED)
async def send_message(
    team_id: UUID,
    session_id: UUID,
    request: SendMessageRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    message = await brainstorm_service.add_user_message(team_id, session_id, membership.user_id, request.content)
    return SuccessResponse(data=message)


@router.patch("/{session_id}/messages/{message_id}")
async def edit_message(
    team_id: UUID,
    session_id: UUID,
    message_id: UUID,
    request: EditMessageRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    message = await brainstorm_service.edit_message(
        team_id, session_id, message_id, membership.user_id, request.content
    )
    return SuccessResponse(data=message)


@router.delete("/{session_id}/messages/{message_id}")
async def delete_message(
    team_id: UUID,
    session_id: UUID,
    message_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    await brainstorm_service.delete_message(team_id, session_id, message_id, membership.user_id)
    return SuccessResponse(data=MessageData(message="Message deleted"))


@router.post("/{session_id}/stream")
async def stream_message(
    team_id: UUID,
    session_id: UUID,
    request: StreamMessageRequest,
    user: UserModel = Depends(get_current_user),
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> StreamingResponse:
    """
    Stream an AI reply as server-sent events.

    Each chunk is sent as ``data: {"content": ...}``; the stream ends with
    ``data: [DONE]`` or a single ``data: {"error": ...}`` line.
    """
    await brainstorm_service.get_session_model(team_id, session_id)
    return StreamingResponse(
        stream_reply_events(team_id, session_id, user.id, request),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive", "X-Accel-Buffering": "no"},
    )


@router.get("/{session_id}/pinned")
async def pinned_messages(
    team_id: UUID,
    session_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    return SuccessResponse(data=await brainstorm_service.pinned_messages(team_id, session_id))


@router.get("/{session_id}/export")
async def export_session(
    team_id: UUID,
    session_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> Response:
    """Download the transcript as markdown."""
    markdown = await brainstorm_service.export(team_id, session_id)
    return Response(
        content=markdown,
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="brainstorm-{session_id}.md"'},
    )


@router.patch("/{session_id}/canvas")
async def update_canvas(
    team_id: UUID,
    session_id: UUID,
    request: UpdateCanvasRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    brainstorm_service: BrainstormService = Depends(get_brainstorm_service),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True)
    return SuccessResponse(data=await brainstorm_service.update_canvas(team_id, session_id, changes))
