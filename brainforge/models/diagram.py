"""
Diagram request schemas.

Dependencies: pydantic
System role: Diagram API contracts
"""

import uuid
from typing import Any

from pydantic import BaseModel, Field

from brainforge.boundary.db.models import DiagramType
from brainforge.models.common import AIModelSelection, PartialUpdate


class DiagramData(BaseModel):
    """React-Flow style graph."""

    nodes: list[Any] = Field(default_factory=list)
    edges: list[Any] = Field(default_factory=list)


class CreateDiagramRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    type: DiagramType = DiagramType.FLOWCHART
    description: str | None = Field(None, max_length=5000)
    data: DiagramData | None = None
    project_id: uuid.UUID | None = None


class UpdateDiagramRequest(PartialUpdate):
    nullable_fields = frozenset({"description", "thumbnail"})

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    data: DiagramData | None = None
    thumbnail: str | None = None


class GenerateDiagramRequest(AIModelSelection):
    prompt: str = Field(..., min_length=1, max_length=5000)
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    type: DiagramType = DiagramType.FLOWCHART
    project_id: uuid.UUID | None = None
