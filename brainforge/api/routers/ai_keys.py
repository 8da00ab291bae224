"""
AI key and usage API endpoints.

Routes:
- GET/POST /ai/keys - Caller's keys, add a key
- PATCH/DELETE /ai/keys/{key_id} - Update label/active flag/secret, delete
- POST /ai/keys/{key_id}/validate - Re-check a key with its vendor
- GET /ai/keys/{key_id}/balance - Vendor balance where available
- GET /ai/usage - Caller's metered usage

Dependencies: brainforge.application.services.ai_key_service, brainforge.models.ai
System role: Bring-your-own-key HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from brainforge.api.deps import get_current_user
from brainforge.api.deps.dependencies import get_ai_key_service
from brainforge.application.services import AIKeyService
from brainforge.boundary.db.models import UserModel
from brainforge.models.ai import AddAIKeyRequest, UpdateAIKeyRequest
from brainforge.models.common import MessageData, SuccessResponse

router = APIRouter(prefix="/ai", tags=["ai"])


@router.get("/keys")
async def list_keys(
    user: UserModel = Depends(get_current_user),
    key_service: AIKeyService = Depends(get_ai_key_service),
) -> SuccessResponse:
    """List the caller's keys. Secrets are never returned."""
    return SuccessResponse(data=await key_service.list_keys(user.id))


@router.post("/keys", status_code=status.HTTP_201_CREATED)
async def add_key(
    request: AddAIKeyRequest,
    user: UserModel = Depends(get_current_user),
    key_service: AIKeyService = Depends(get_ai_key_service),
) -> SuccessResponse:
    return SuccessResponse(data=await key_service.add_key(user.id, request.provider, request.api_key, request.label))


@router.patch("/keys/{key_id}")
async def update_key(
    key_id: UUID,
    request: UpdateAIKeyRequest,
    user: UserModel = Depends(get_current_user),
    key_service: AIKeyService = Depends(get_ai_key_service),
) -> SuccessResponse:
    return SuccessResponse(data=await key_service.update_key(user.id, key_id, request.model_dump(exclude_unset=True)))


@router.delete("/keys/{key_id}")
async def delete_key(
    key_id: UUID,
    user: UserModel = Depends(get_current_user),
    key_service: AIKeyService = Depends(get_ai_key_service),
) -> SuccessResponse:
    await key_service.delete_key(user.id, key_id)
    return SuccessResponse(data=MessageData(message="API key deleted"))


@router.post("/keys/{key_id}/validate")
async def validate_key(
    key_id: UUID,
    user: UserModel = Depends(get_current_user),
    key_service: AIKeyService = Depends(get_ai_key_service),
) -> SuccessResponse:
    return SuccessResponse(data=await key_service.validate(user.id, key_id))


@router.get("/keys/{key_id}/balance")
async def key_balance(
    key_id: UUID,
    user: UserModel = Depends(get_current_user),
    key_service: AIKeyService = Depends(get_ai_key_service),
) -> SuccessResponse:
    return SuccessResponse(data=await key_service.balance(user.id, key_id))


@router.get("/usage")
async def usage(
    days: int = Query(30, ge=1, le=365),
    user: UserModel = Depends(get_current_user),
    key_service: AIKeyService = Depends(get_ai_key_service),
) -> SuccessResponse:
    return SuccessResponse(data=await key_service.usage(user.id, days))
