"""
Sprint plan API endpoints.

Routes:
- GET/POST /teams/{team_id}/sprints - List (project filter), create
- POST /teams/{team_id}/sprints/ai-generate - Create a sprint with an AI-drafted plan
- GET/PATCH/DELETE /teams/{team_id}/sprints/{sprint_id} - Detail, update, delete
- POST /teams/{team_id}/sprints/{sprint_id}/convert - Turn the plan into board tasks

Dependencies: brainforge.application.services.sprint_service
System role: Sprint planning HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from brainforge.api.deps import require_team_member
from brainforge.api.deps.dependencies import get_sprint_service
from brainforge.application.services import SprintService
from brainforge.boundary.db.models import TeamMemberModel
from brainforge.models.common import MessageData, SuccessResponse
from brainforge.models.sprint import CreateSprintRequest, GenerateSprintRequest, UpdateSprintRequest

router = APIRouter(prefix="/teams/{team_id}/sprints", tags=["sprints"])


@router.get("")
async def list_sprints(
    team_id: UUID,
    project_id: UUID | None = None,
    membership: TeamMemberModel = Depends(require_team_member()),
    sprint_service: SprintService = Depends(get_sprint_service),
) -> SuccessResponse:
    return SuccessResponse(data=await sprint_service.list_sprints(team_id, project_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_sprint(
    team_id: UUID,
    request: CreateSprintRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    sprint_service: SprintService = Depends(get_sprint_service),
) -> SuccessResponse:
    return SuccessResponse(data=await sprint_service.create_sprint(team_id, membership.user_id, request.model_dump()))


@router.post("/ai-generate", status_code=status.HTTP_201_CREATED)
async def generate_sprint(
    team_id: UUID,
    request: GenerateSprintRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    sprint_service: SprintService = Depends(get_sprint_service),
) -> SuccessResponse:
    """
    Create a DRAFT sprint whose plan the model writes.

    An unparseable reply is still saved, with ``{error, raw}`` as the plan.
    """
    data = request.model_dump(exclude={"provider", "model"})
    sprint = await sprint_service.generate_sprint(
        team_id, membership.user_id, request.provider, request.model, data
    )
    return SuccessResponse(data=sprint)


@router.get("/{sprint_id}")
async def get_sprint(
    team_id: UUID,
    sprint_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    sprint_service: SprintService = Depends(get_sprint_service),
) -> SuccessResponse:
    return SuccessResponse(data=await sprint_service.get_sprint(team_id, sprint_id))


@router.patch("/{sprint_id}")
async def update_sprint(
    team_id: UUID,
    sprint_id: UUID,
    request: UpdateSprintRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    sprint_service: SprintService = Depends(get_sprint_service),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True)
    return SuccessResponse(data=await sprint_service.update_sprint(team_id, sprint_id, changes))


@router.delete("/{sprint_id}")
async def delete_sprint(
    team_id: UUID,
    sprint_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    sprint_service: SprintService = Depends(get_sprint_service),
) -> SuccessResponse:
    await sprint_service.delete_sprint(team_id, sprint_id)
    return SuccessResponse(data=MessageData(message="Sprint deleted"))


@router.post("/{sprint_id}/convert")
async def convert_sprint(
    team_id: UUID,
    sprint_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    sprint_service: SprintService = Depends(get_sprint_service),
) -> SuccessResponse:
    tasks = await sprint_service.convert_to_tasks(team_id, sprint_id, membership.user_id)
    return SuccessResponse(data={"tasks": tasks, "count": len(tasks)})
