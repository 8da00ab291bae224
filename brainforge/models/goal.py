"""
Goal request schemas.

Dependencies: pydantic
System role: Goal API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from brainforge.boundary.db.models import GoalStatus
from brainforge.models.common import AIModelSelection, PartialUpdate


class CreateGoalRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    status: GoalStatus = GoalStatus.NOT_STARTED
    progress: int = Field(0, ge=0, le=100)
    due_date: datetime | None = None
    project_id: uuid.UUID | None = None


class UpdateGoalRequest(PartialUpdate):
    nullable_fields = frozenset({"description", "due_date"})

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    status: GoalStatus | None = None
    progress: int | None = Field(None, ge=0, le=100)
    due_date: datetime | None = None


class GenerateGoalsRequest(AIModelSelection):
    prompt: str = Field(..., min_length=1, max_length=5000)
    project_id: uuid.UUID | None = None
