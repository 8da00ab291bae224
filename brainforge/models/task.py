"""
Task board request schemas.

Dependencies: pydantic
System role: Task API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from brainforge.boundary.db.models import TaskPriority, TaskStatus
from brainforge.models.common import HEX_COLOR_PATTERN, PartialUpdate


class CreateTaskRequest(BaseModel):
    """Request schema for creating a task."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    start_date: datetime | None = None
    due_date: datetime | None = None
    estimation: int | None = Field(None, gt=0)
    sprint_id: uuid.UUID | None = None
    project_id: uuid.UUID | None = None
    assignee_ids: list[uuid.UUID] = Field(default_factory=list)
    label_ids: list[uuid.UUID] = Field(default_factory=list)


class UpdateTaskRequest(PartialUpdate):
    """
    Request schema for updating a task.

    Only fields present in the body are applied; explicit nulls clear the
    nullable fields and are rejected for the rest.
    """

    nullable_fields = frozenset(
        {"description", "start_date", "due_date", "estimation", "time_spent", "sprint_id", "project_id"}
    )

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    start_date: datetime | None = None
    due_date: datetime | None = None
    estimation: int | None = Field(None, gt=0)
    time_spent: int | None = Field(None, ge=0)
    sprint_id: uuid.UUID | None = None
    project_id: uuid.UUID | None = None
    order_index: int | None = Field(None, ge=0)


class TaskFilters(BaseModel):
    """Query filters for the board listing."""

    status: list[TaskStatus] | None = None
    priority: list[TaskPriority] | None = None
    assignee_id: uuid.UUID | None = None
    label_id: uuid.UUID | None = None
    sprint_id: uuid.UUID | None = None
    project_id: uuid.UUID | None = None
    search: str | None = None
    sort_by: Literal["priority", "due_date", "created_at", "title", "status"] | None = None
    sort_order: Literal["asc", "desc"] = "asc"


class UpdateAssigneesRequest(BaseModel):
    assignee_ids: list[uuid.UUID] = Field(default_factory=list)


class CreateCommentRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class ReorderItem(BaseModel):
    id: uuid.UUID
    order_index: int = Field(..., ge=0)
    status: TaskStatus | None = None


class ReorderTasksRequest(BaseModel):
    tasks: list[ReorderItem]


class CreateLabelRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=30)
    color: str = Field(..., pattern=HEX_COLOR_PATTERN)
