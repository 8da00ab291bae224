"""
Calendar request schemas.

Dependencies: pydantic
System role: Calendar API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from brainforge.boundary.db.models import EventType
from brainforge.models.common import HEX_COLOR_PATTERN, PartialUpdate


class CreateEventRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    type: EventType = EventType.CUSTOM_EVENT
    start_date: datetime
    end_date: datetime | None = None
    all_day: bool = False
    color: str | None = Field(None, pattern=HEX_COLOR_PATTERN)
    task_id: uuid.UUID | None = None
    sprint_id: uuid.UUID | None = None
    session_id: uuid.UUID | None = None


class UpdateEventRequest(PartialUpdate):
    nullable_fields = frozenset({"description", "end_date", "color"})

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    type: EventType | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    all_day: bool | None = None
    color: str | None = Field(None, pattern=HEX_COLOR_PATTERN)
