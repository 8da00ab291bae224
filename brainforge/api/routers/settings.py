"""
System settings API endpoints.

All routes require an authenticated platform administrator.

Routes:
- GET /admin/settings - All settings grouped by category
- PUT /admin/settings - Bulk update values
- GET /admin/settings/system/info - Runtime and host information
- POST /admin/settings/reset/{category} - Restore a category's defaults
- GET /admin/settings/{category} - One category
- PUT /admin/settings/{key} - Upsert one setting

Dependencies: brainforge.application.services.settings_service
System role: Runtime configuration HTTP API
"""

from fastapi import APIRouter, Depends

from brainforge.api.deps import require_admin
from brainforge.api.deps.dependencies import get_settings_service
from brainforge.application.services import SettingsService
from brainforge.models.admin import BulkSettingsRequest, UpsertSettingRequest
from brainforge.models.common import SuccessResponse

router = APIRouter(prefix="/admin/settings", tags=["settings"], dependencies=[Depends(require_admin)])


@router.get("")
async def all_settings(settings_service: SettingsService = Depends(get_settings_service)) -> SuccessResponse:
    return SuccessResponse(data=await settings_service.all_settings())


@router.put("")
async def bulk_update(
    request: BulkSettingsRequest,
    settings_service: SettingsService = Depends(get_settings_service),
) -> SuccessResponse:
    return SuccessResponse(data=await settings_service.bulk_update(request.settings))


@router.get("/system/info")
async def system_info(settings_service: SettingsService = Depends(get_settings_service)) -> SuccessResponse:
    return SuccessResponse(data=await settings_service.system_info())


@router.post("/reset/{category}")
async def reset_category(
    category: str,
    settings_service: SettingsService = Depends(get_settings_service),
) -> SuccessResponse:
    return SuccessResponse(data=await settings_service.reset_category(category))


@router.get("/{category}")
async def get_category(
    category: str,
    settings_service: SettingsService = Depends(get_settings_service),
) -> SuccessResponse:
    return SuccessResponse(data=await settings_service.category(category))


@router.put("/{key}")
async def upsert_setting(
    key: str,
    request: UpsertSettingRequest,
    settings_service: SettingsService = Depends(get_settings_service),
) -> SuccessResponse:
    setting = await settings_service.upsert(
        key, request.value, request.type, request.category, request.description
    )
    return SuccessResponse(data=setting)
