"""
Discussion request schemas.

Dependencies: pydantic
System role: Discussion API contracts
"""

from pydantic import BaseModel, Field

from brainforge.models.common import PartialUpdate


class CreateDiscussionRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=50000)
    category: str = Field("general", max_length=50)


class UpdateDiscussionRequest(PartialUpdate):
    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = Field(None, min_length=1, max_length=50000)
    category: str | None = Field(None, max_length=50)
    is_pinned: bool | None = None
    is_closed: bool | None = None


class ReplyRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=50000)
