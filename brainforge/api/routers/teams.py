"""
Team API endpoints.

Routes:
- GET/POST /teams - List own teams, create a team
- GET/PATCH/DELETE /teams/{team_id} - Team detail, update, delete
- POST/GET /teams/{team_id}/invitations - Invite by email, list pending
- DELETE /teams/{team_id}/invitations/{invitation_id} - Revoke invitation
- POST /teams/{team_id}/invite-link - Open invite link
- GET /teams/invite/{token} - Public invitation preview
- POST /teams/join/{token} - Redeem invitation
- GET /teams/{team_id}/members - Members
- PATCH/DELETE /teams/{team_id}/members/{user_id} - Change role, remove

Dependencies: brainforge.application.services.team_service, brainforge.models.team
System role: Team membership HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from brainforge.api.deps import MANAGER_ROLES, get_current_user, require_team_member
from brainforge.api.deps.dependencies import get_team_service
from brainforge.application.services import TeamService
from brainforge.boundary.db.models import TeamMemberModel, TeamRole, UserModel
from brainforge.models.common import MessageData, SuccessResponse
from brainforge.models.team import (
    CreateTeamRequest,
    InviteLinkRequest,
    InviteMemberRequest,
    UpdateMemberRoleRequest,
    UpdateTeamRequest,
)

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("")
async def list_teams(
    user: UserModel = Depends(get_current_user),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    """List the caller's teams; a personal team is created when there is none."""
    return SuccessResponse(data=await team_service.list_teams(user))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_team(
    request: CreateTeamRequest,
    user: UserModel = Depends(get_current_user),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    return SuccessResponse(data=await team_service.create_team(user.id, request.name, request.description))


@router.get("/invite/{token}")
async def get_invite_info(
    token: str,
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    """Preview an invitation. No authentication required."""
    return SuccessResponse(data=await team_service.get_invite_info(token))


@router.post("/join/{token}")
async def join_team(
    token: str,
    user: UserModel = Depends(get_current_user),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    return SuccessResponse(data=await team_service.join(token, user))


@router.get("/{team_id}")
async def get_team(
    team_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    return SuccessResponse(data=await team_service.get_team(team_id))


@router.patch("/{team_id}")
async def update_team(
    team_id: UUID,
    request: UpdateTeamRequest,
    membership: TeamMemberModel = Depends(require_team_member(MANAGER_ROLES)),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    return SuccessResponse(data=await team_service.update_team(team_id, request.model_dump(exclude_unset=True)))


@router.delete("/{team_id}")
async def delete_team(
    team_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member((TeamRole.OWNER,))),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    await team_service.delete_team(team_id, membership.user_id)
    return SuccessResponse(data=MessageData(message="Team deleted"))


@router.post("/{team_id}/invitations", status_code=status.HTTP_201_CREATED)
async def invite_member(
    team_id: UUID,
    request: InviteMemberRequest,
    membership: TeamMemberModel = Depends(require_team_member(MANAGER_ROLES)),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    return SuccessResponse(
        data=await team_service.invite(team_id, request.email, request.role, membership.user_id)
    )


@router.get("/{team_id}/invitations")
async def list_invitations(
    team_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member(MANAGER_ROLES)),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    return SuccessResponse(data=await team_service.list_invitations(team_id))


@router.delete("/{team_id}/invitations/{invitation_id}")
async def revoke_invitation(
    team_id: UUID,
    invitation_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member(MANAGER_ROLES)),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    await team_service.revoke_invitation(team_id, invitation_id)
    return SuccessResponse(data=MessageData(message="Invitation revoked"))


@router.post("/{team_id}/invite-link", status_code=status.HTTP_201_CREATED)
async def create_invite_link(
    team_id: UUID,
    request: InviteLinkRequest | None = None,
    membership: TeamMemberModel = Depends(require_team_member(MANAGER_ROLES)),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    role = request.role if request else TeamRole.MEMBER
    return SuccessResponse(data=await team_service.create_invite_link(team_id, membership.user_id, role))


@router.get("/{team_id}/members")
async def list_members(
    team_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    return SuccessResponse(data=await team_service.list_members(team_id))


@router.patch("/{team_id}/members/{user_id}")
async def update_member_role(
    team_id: UUID,
    user_id: UUID,
    request: UpdateMemberRoleRequest,
    membership: TeamMemberModel = Depends(require_team_member(MANAGER_ROLES)),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    return SuccessResponse(data=await team_service.update_member_role(team_id, user_id, request.role))


@router.delete("/{team_id}/members/{user_id}")
async def remove_member(
    team_id: UUID,
    user_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    team_service: TeamService = Depends(get_team_service),
) -> SuccessResponse:
    """Managers remove others; any member may remove themselves."""
    await team_service.remove_member(team_id, user_id, membership.user_id, membership.role)
    return SuccessResponse(data=MessageData(message="Member removed"))
