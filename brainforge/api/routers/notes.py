"""
Note API endpoints.

Routes:
- GET/POST /teams/{team_id}/notes - List (project filter), create
- POST /teams/{team_id}/notes/ai-assist - Rewrite content with an AI action
- GET/PATCH/DELETE /teams/{team_id}/notes/{note_id} - Detail, versioned update, delete
- GET /teams/{team_id}/notes/{note_id}/history - Previous versions
- POST /teams/{team_id}/notes/{note_id}/restore/{history_id} - Restore a version

Dependencies: brainforge.application.services.note_service
System role: Notes HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from brainforge.api.deps import require_team_member
from brainforge.api.deps.dependencies import get_note_service
from brainforge.application.services import NoteService
from brainforge.boundary.db.models import TeamMemberModel
from brainforge.models.common import MessageData, SuccessResponse
from brainforge.models.note import CreateNoteRequest, NoteAssistRequest, UpdateNoteRequest

router = APIRouter(prefix="/teams/{team_id}/notes", tags=["notes"])


@router.get("")
async def list_notes(
    team_id: UUID,
    project_id: UUID | None = None,
    membership: TeamMemberModel = Depends(require_team_member()),
    note_service: NoteService = Depends(get_note_service),
) -> SuccessResponse:
    return SuccessResponse(data=await note_service.list_notes(team_id, project_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(
    team_id: UUID,
    request: CreateNoteRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    note_service: NoteService = Depends(get_note_service),
) -> SuccessResponse:
    return SuccessResponse(data=await note_service.create_note(team_id, membership.user_id, request.model_dump()))


@router.post("/ai-assist")
async def ai_assist(
    team_id: UUID,
    request: NoteAssistRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    note_service: NoteService = Depends(get_note_service),
) -> SuccessResponse:
    """Run an editing action over the given text; nothing is saved."""
    result = await note_service.ai_assist(
        membership.user_id, request.provider, request.model, request.action, request.content
    )
    return SuccessResponse(data=result)


@router.get("/{note_id}")
async def get_note(
    team_id: UUID,
    note_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    note_service: NoteService = Depends(get_note_service),
) -> SuccessResponse:
    return SuccessResponse(data=await note_service.get_note(team_id, note_id))


@router.patch("/{note_id}")
async def update_note(
    team_id: UUID,
    note_id: UUID,
    request: UpdateNoteRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    note_service: NoteService = Depends(get_note_service),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True)
    return SuccessResponse(data=await note_service.update_note(team_id, note_id, membership.user_id, changes))


@router.delete("/{note_id}")
async def delete_note(
    team_id: UUID,
    note_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    note_service: NoteService = Depends(get_note_service),
) -> SuccessResponse:
    await note_service.delete_note(team_id, note_id)
    return SuccessResponse(data=MessageData(message="Note deleted"))


@router.get("/{note_id}/history")
async def note_history(
    team_id: UUID,
    note_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    note_service: NoteService = Depends(get_note_service),
) -> SuccessResponse:
    return SuccessResponse(data=await note_service.history(team_id, note_id))


@router.post("/{note_id}/restore/{history_id}")
async def restore_note(
    team_id: UUID,
    note_id: UUID,
    history_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    note_service: NoteService = Depends(get_note_service),
) -> SuccessResponse:
    return SuccessResponse(data=await note_service.restore(team_id, note_id, history_id, membership.user_id))
