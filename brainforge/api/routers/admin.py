"""
Admin console API endpoints.

All routes require an authenticated platform administrator.

Routes:
- GET /admin/stats - Platform totals
- GET /admin/activity - Newest users, tasks and sessions
- GET /admin/users, GET /admin/users/{user_id} - Browse users
- PATCH /admin/users/{user_id}/admin - Grant or revoke admin
- DELETE /admin/users/{user_id} - Delete a user
- GET /admin/teams, GET /admin/teams/{team_id} - Browse teams
- GET /admin/ai-usage, GET /admin/ai-usage/logs - AI usage analytics
- GET /admin/api-keys - Stored keys across users
- GET /admin/growth - 30-day growth trends

Dependencies: brainforge.application.services.admin_service
System role: Platform administration HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from brainforge.api.deps import require_admin
from brainforge.api.deps.dependencies import get_admin_service
from brainforge.application.services import AdminService
from brainforge.boundary.db.models import AIProvider, UserModel
from brainforge.models.admin import SetAdminRequest
from brainforge.models.common import SuccessResponse

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/stats")
async def stats(admin_service: AdminService = Depends(get_admin_service)) -> SuccessResponse:
    return SuccessResponse(data=await admin_service.stats())


@router.get("/activity")
async def recent_activity(
    limit: int = Query(20, ge=1, le=100),
    admin_service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    return SuccessResponse(data=await admin_service.recent_activity(limit))


@router.get("/users")
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str | None = None,
    admin_service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    return SuccessResponse(data=await admin_service.list_users(page, limit, search))


@router.get("/users/{user_id}")
async def get_user(user_id: UUID, admin_service: AdminService = Depends(get_admin_service)) -> SuccessResponse:
    return SuccessResponse(data=await admin_service.get_user(user_id))


@router.patch("/users/{user_id}/admin")
async def set_admin(
    user_id: UUID,
    request: SetAdminRequest,
    admin_service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    return SuccessResponse(data=await admin_service.set_admin(user_id, request.is_admin))


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: UUID,
    admin: UserModel = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    """Delete a user; admins cannot delete themselves."""
    return SuccessResponse(data=await admin_service.delete_user(user_id, admin.id))


@router.get("/teams")
async def list_teams(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str | None = None,
    admin_service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    return SuccessResponse(data=await admin_service.list_teams(page, limit, search))


@router.get("/teams/{team_id}")
async def get_team(team_id: UUID, admin_service: AdminService = Depends(get_admin_service)) -> SuccessResponse:
    return SuccessResponse(data=await admin_service.get_team(team_id))


@router.get("/ai-usage")
async def ai_usage(admin_service: AdminService = Depends(get_admin_service)) -> SuccessResponse:
    """Last 30 days by provider, model, feature, user and day."""
    return SuccessResponse(data=await admin_service.ai_usage())


@router.get("/ai-usage/logs")
async def ai_usage_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    provider: AIProvider | None = None,
    user_id: UUID | None = None,
    feature: str | None = None,
    admin_service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    return SuccessResponse(data=await admin_service.ai_usage_logs(page, limit, provider, user_id, feature))


@router.get("/api-keys")
async def api_keys(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str | None = None,
    admin_service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    return SuccessResponse(data=await admin_service.api_keys(page, limit, search))


@router.get("/growth")
async def growth(admin_service: AdminService = Depends(get_admin_service)) -> SuccessResponse:
    return SuccessResponse(data=await admin_service.growth())
