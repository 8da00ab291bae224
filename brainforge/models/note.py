"""
Note request schemas.

Dependencies: pydantic
System role: Notes API contracts
"""

import uuid
from typing import Literal

from pydantic import BaseModel, Field

from brainforge.models.common import AIModelSelection, PartialUpdate

NoteAction = Literal[
    "summarize",
    "expand",
    "improve",
    "translate_en",
    "translate_id",
    "fix_grammar",
    "generate_outline",
]


class CreateNoteRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field("", max_length=50000)
    project_id: uuid.UUID | None = None


class UpdateNoteRequest(PartialUpdate):
    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = Field(None, max_length=50000)


class NoteAssistRequest(AIModelSelection):
    """Rewrite content with an AI action. Unknown actions fall back to improve."""

    content: str = Field(..., min_length=1, max_length=50000)
    action: str = "improve"
