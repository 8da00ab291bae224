"""
AI chat and bulk generation API endpoints.

Routes:
- GET/POST /teams/{team_id}/ai-chat - Caller's chats (project filter), create
- GET/PATCH/DELETE /teams/{team_id}/ai-chat/{chat_id} - Chat with messages, rename, delete
- POST /teams/{team_id}/ai-chat/{chat_id}/messages - Ask the assistant
- POST /teams/{team_id}/ai-generate - Generate tasks, brainstorm, notes and goals

Dependencies: brainforge.application.services.ai_chat_service, ai_generate_service
System role: Workspace assistant HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from brainforge.api.deps import require_team_member
from brainforge.api.deps.dependencies import get_ai_chat_service, get_ai_generate_service
from brainforge.application.services import AIChatService, AIGenerateService
from brainforge.boundary.db.models import TeamMemberModel
from brainforge.models.ai import ChatMessageRequest, CreateChatRequest, GenerateRequest, RenameChatRequest
from brainforge.models.common import MessageData, SuccessResponse

router = APIRouter(prefix="/teams/{team_id}/ai-chat", tags=["ai-chat"])
generate_router = APIRouter(prefix="/teams/{team_id}/ai-generate", tags=["ai-generate"])


@router.get("")
async def list_chats(
    team_id: UUID,
    project_id: UUID | None = None,
    membership: TeamMemberModel = Depends(require_team_member()),
    chat_service: AIChatService = Depends(get_ai_chat_service),
) -> SuccessResponse:
    return SuccessResponse(data=await chat_service.list_chats(team_id, membership.user_id, project_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_chat(
    team_id: UUID,
    request: CreateChatRequest | None = None,
    membership: TeamMemberModel = Depends(require_team_member()),
    chat_service: AIChatService = Depends(get_ai_chat_service),
) -> SuccessResponse:
    request = request or CreateChatRequest()
    chat = await chat_service.create_chat(team_id, membership.user_id, request.title, request.project_id)
    return SuccessResponse(data=chat)


@router.get("/{chat_id}")
async def get_chat(
    team_id: UUID,
    chat_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    chat_service: AIChatService = Depends(get_ai_chat_service),
) -> SuccessResponse:
    return SuccessResponse(data=await chat_service.get_chat(team_id, chat_id, membership.user_id))


@router.patch("/{chat_id}")
async def rename_chat(
    team_id: UUID,
    chat_id: UUID,
    request: RenameChatRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    chat_service: AIChatService = Depends(get_ai_chat_service),
) -> SuccessResponse:
    return SuccessResponse(
        data=await chat_service.rename_chat(team_id, chat_id, membership.user_id, request.title)
    )


@router.delete("/{chat_id}")
async def delete_chat(
    team_id: UUID,
    chat_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    chat_service: AIChatService = Depends(get_ai_chat_service),
) -> SuccessResponse:
    await chat_service.delete_chat(team_id, chat_id, membership.user_id)
    return SuccessResponse(data=MessageData(message="Chat deleted"))


@router.post("/{chat_id}/messages")
async def send_message(
    team_id: UUID,
    chat_id: UUID,
    request: ChatMessageRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    chat_service: AIChatService = Depends(get_ai_chat_service),
) -> SuccessResponse:
    """
    Ask the workspace assistant.

    The question and the reply are stored together; a failed AI call keeps
    neither.

    Returns:
        SuccessResponse: The stored ASSISTANT message
    """
    reply = await chat_service.send_message(
        team_id, chat_id, membership.user_id, request.content, request.provider, request.model
    )
    return SuccessResponse(data=reply)


@generate_router.post("", status_code=status.HTTP_201_CREATED)
async def generate_content(
    team_id: UUID,
    request: GenerateRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    generate_service: AIGenerateService = Depends(get_ai_generate_service),
) -> SuccessResponse:
    result = await generate_service.generate(
        team_id,
        membership.user_id,
        request.provider,
        request.model,
        request.prompt,
        request.generate_types,
        request.project_id,
    )
    return SuccessResponse(data=result)
