"""
AI key, assistant chat and bulk generation request schemas.

Dependencies: pydantic
System role: AI API contracts
"""

import uuid

from pydantic import BaseModel, Field

from brainforge.boundary.db.models import AIProvider
from brainforge.models.common import AIModelSelection, PartialUpdate


class AddAIKeyRequest(BaseModel):
    provider: AIProvider
    api_key: str = Field(..., min_length=1)
    label: str | None = Field(None, max_length=50)


class UpdateAIKeyRequest(PartialUpdate):
    label: str | None = Field(None, max_length=50)
    is_active: bool | None = None
    api_key: str | None = Field(None, min_length=1)


class CreateChatRequest(BaseModel):
    title: str = Field("New Chat", min_length=1, max_length=200)
    project_id: uuid.UUID | None = None


class RenameChatRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)


class ChatMessageRequest(AIModelSelection):
    content: str = Field(..., min_length=1, max_length=10000)


class GenerateRequest(AIModelSelection):
    """Bulk generation of tasks, a brainstorm, notes and goals from one prompt."""

    prompt: str = Field(..., min_length=1, max_length=10000)
    generate_types: list[str] = Field(..., min_length=1)
    project_id: uuid.UUID | None = None
