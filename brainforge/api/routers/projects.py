"""
Project API endpoints.

Routes:
- GET/POST /teams/{team_id}/projects - List, create
- GET/PATCH/DELETE /teams/{team_id}/projects/{project_id} - Detail, update, delete

Dependencies: brainforge.application.services.project_service
System role: Project HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from brainforge.api.deps import require_team_member
from brainforge.api.deps.dependencies import get_project_service
from brainforge.application.services import ProjectService
from brainforge.boundary.db.models import TeamMemberModel
from brainforge.models.common import MessageData, SuccessResponse
from brainforge.models.team import CreateProjectRequest, UpdateProjectRequest

router = APIRouter(prefix="/teams/{team_id}/projects", tags=["projects"])


@router.get("")
async def list_projects(
    team_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    project_service: ProjectService = Depends(get_project_service),
) -> SuccessResponse:
    return SuccessResponse(data=await project_service.list_projects(team_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    team_id: UUID,
    request: CreateProjectRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    project_service: ProjectService = Depends(get_project_service),
) -> SuccessResponse:
    project = await project_service.create_project(
        team_id, membership.user_id, request.name, request.description, request.color, request.icon
    )
    return SuccessResponse(data=project)


@router.get("/{project_id}")
async def get_project(
    team_id: UUID,
    project_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    project_service: ProjectService = Depends(get_project_service),
) -> SuccessResponse:
    return SuccessResponse(data=await project_service.get_project(team_id, project_id))


@router.patch("/{project_id}")
async def update_project(
    team_id: UUID,
    project_id: UUID,
    request: UpdateProjectRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    project_service: ProjectService = Depends(get_project_service),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True)
    return SuccessResponse(data=await project_service.update_project(team_id, project_id, changes))


@router.delete("/{project_id}")
async def delete_project(
    team_id: UUID,
    project_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    project_service: ProjectService = Depends(get_project_service),
) -> SuccessResponse:
    """Delete a project; its content stays in the team, detached."""
    await project_service.delete_project(team_id, project_id)
    return SuccessResponse(data=MessageData(message="Project deleted"))
