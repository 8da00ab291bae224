"""
Diagram API endpoints.

Routes:
- GET/POST /teams/{team_id}/diagrams - List (project filter), create
- POST /teams/{team_id}/diagrams/ai-generate - Generate a diagram from a prompt
- GET/PATCH/DELETE /teams/{team_id}/diagrams/{diagram_id} - Detail, update, delete

Dependencies: brainforge.application.services.diagram_service
System role: Diagram HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from brainforge.api.deps import require_team_member
from brainforge.api.deps.dependencies import get_diagram_service
from brainforge.application.services import DiagramService
from brainforge.boundary.db.models import TeamMemberModel
from brainforge.models.common import MessageData, SuccessResponse
from brainforge.models.diagram import CreateDiagramRequest, GenerateDiagramRequest, UpdateDiagramRequest

router = APIRouter(prefix="/teams/{team_id}/diagrams", tags=["diagrams"])


@router.get("")
async def list_diagrams(
    team_id: UUID,
    project_id: UUID | None = None,
    membership: TeamMemberModel = Depends(require_team_member()),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> SuccessResponse:
    return SuccessResponse(data=await diagram_service.list_diagrams(team_id, project_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_diagram(
    team_id: UUID,
    request: CreateDiagramRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> SuccessResponse:
    return SuccessResponse(
        data=await diagram_service.create_diagram(team_id, membership.user_id, request.model_dump())
    )


@router.post("/ai-generate", status_code=status.HTTP_201_CREATED)
async def generate_diagram(
    team_id: UUID,
    request: GenerateDiagramRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> SuccessResponse:
    """
    Generate and save a diagram with the caller's AI key.

    Returns:
        SuccessResponse: The saved diagram

    Raises:
        AIParseError(422): The model reply held no usable graph
    """
    diagram = await diagram_service.generate(
        team_id,
        membership.user_id,
        request.provider,
        request.model,
        request.prompt,
        diagram_type=request.type,
        title=request.title,
        description=request.description,
        project_id=request.project_id,
    )
    return SuccessResponse(data=diagram)


@router.get("/{diagram_id}")
async def get_diagram(
    team_id: UUID,
    diagram_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> SuccessResponse:
    return SuccessResponse(data=await diagram_service.get_diagram(team_id, diagram_id))


@router.patch("/{diagram_id}")
async def update_diagram(
    team_id: UUID,
    diagram_id: UUID,
    request: UpdateDiagramRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True)
    return SuccessResponse(data=await diagram_service.update_diagram(team_id, diagram_id, changes))


@router.delete("/{diagram_id}")
async def delete_diagram(
    team_id: UUID,
    diagram_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> SuccessResponse:
    await diagram_service.delete_diagram(team_id, diagram_id)
    return SuccessResponse(data=MessageData(message="Diagram deleted"))
