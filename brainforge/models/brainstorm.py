"""
Brainstorm request schemas.

Dependencies: pydantic
System role: Brainstorm API contracts
"""

import uuid

from pydantic import BaseModel, Field

from brainforge.boundary.db.models import BrainstormMode
from brainforge.models.common import AIModelSelection, PartialUpdate


class CreateSessionRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    mode: BrainstormMode = BrainstormMode.BRAINSTORM
    context: str | None = Field(None, max_length=5000)
    project_id: uuid.UUID | None = None


class UpdateSessionRequest(PartialUpdate):
    nullable_fields = frozenset({"context"})

    title: str | None = Field(None, min_length=1, max_length=200)
    mode: BrainstormMode | None = None
    context: str | None = Field(None, max_length=5000)
    is_active: bool | None = None


class SendMessageRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=10000)


class StreamMessageRequest(AIModelSelection):
    """Optional user turn followed by an AI reply streamed over SSE."""

    content: str | None = Field(None, min_length=1, max_length=10000)


class EditMessageRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=10000)


class UpdateCanvasRequest(PartialUpdate):
    nullable_fields = frozenset({"whiteboard_data", "flow_data"})

    whiteboard_data: dict | list | None = None
    flow_data: dict | None = None
