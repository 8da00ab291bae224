"""
Sprint plan request schemas.

Dependencies: pydantic
System role: Sprint API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from brainforge.boundary.db.models import SprintStatus
from brainforge.models.common import AIModelSelection, PartialUpdate


class CreateSprintRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    goal: str = Field(..., min_length=1, max_length=5000)
    deadline: datetime
    team_size: int = Field(3, ge=1, le=20)
    context: str | None = Field(None, max_length=5000)
    project_id: uuid.UUID | None = None


class GenerateSprintRequest(CreateSprintRequest, AIModelSelection):
    """Create a sprint and let the AI draft its plan."""

    title: str = Field("Sprint Plan", min_length=1, max_length=200)


class UpdateSprintRequest(PartialUpdate):
    title: str | None = Field(None, min_length=1, max_length=200)
    goal: str | None = Field(None, min_length=1, max_length=5000)
    deadline: datetime | None = None
    team_size: int | None = Field(None, ge=1, le=20)
    status: SprintStatus | None = None
    data: dict | None = None
