"""
Goal API endpoints.

Routes:
- GET/POST /teams/{team_id}/goals - List (project filter), create
- POST /teams/{team_id}/goals/ai-generate - Draft SMART goals with AI
- GET/PATCH/DELETE /teams/{team_id}/goals/{goal_id} - Detail, update, delete

Dependencies: brainforge.application.services.goal_service
System role: Goal tracking HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from brainforge.api.deps import require_team_member
from brainforge.api.deps.dependencies import get_goal_service
from brainforge.application.services import GoalService
from brainforge.boundary.db.models import TeamMemberModel
from brainforge.models.common import MessageData, SuccessResponse
from brainforge.models.goal import CreateGoalRequest, GenerateGoalsRequest, UpdateGoalRequest

router = APIRouter(prefix="/teams/{team_id}/goals", tags=["goals"])


@router.get("")
async def list_goals(
    team_id: UUID,
    project_id: UUID | None = None,
    membership: TeamMemberModel = Depends(require_team_member()),
    goal_service: GoalService = Depends(get_goal_service),
) -> SuccessResponse:
    return SuccessResponse(data=await goal_service.list_goals(team_id, project_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_goal(
    team_id: UUID,
    request: CreateGoalRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    goal_service: GoalService = Depends(get_goal_service),
) -> SuccessResponse:
    return SuccessResponse(data=await goal_service.create_goal(team_id, membership.user_id, request.model_dump()))


@router.post("/ai-generate", status_code=status.HTTP_201_CREATED)
async def generate_goals(
    team_id: UUID,
    request: GenerateGoalsRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    goal_service: GoalService = Depends(get_goal_service),
) -> SuccessResponse:
    goals = await goal_service.generate(
        team_id, membership.user_id, request.provider, request.model, request.prompt, request.project_id
    )
    return SuccessResponse(data=goals)


@router.get("/{goal_id}")
async def get_goal(
    team_id: UUID,
    goal_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    goal_service: GoalService = Depends(get_goal_service),
) -> SuccessResponse:
    return SuccessResponse(data=await goal_service.get_goal(team_id, goal_id))


@router.patch("/{goal_id}")
async def update_goal(
    team_id: UUID,
    goal_id: UUID,
    request: UpdateGoalRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    goal_service: GoalService = Depends(get_goal_service),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True)
    return SuccessResponse(data=await goal_service.update_goal(team_id, goal_id, changes))


@router.delete("/{goal_id}")
async def delete_goal(
    team_id: UUID,
    goal_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    goal_service: GoalService = Depends(get_goal_service),
) -> SuccessResponse:
    await goal_service.delete_goal(team_id, goal_id)
    return SuccessResponse(data=MessageData(message="Goal deleted"))
