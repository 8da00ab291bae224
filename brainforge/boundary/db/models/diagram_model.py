"""
Diagram ORM model.

Stores a React-Flow style graph: ``{"nodes": [...], "edges": [...]}``.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Diagram persistence
"""

import enum
import uuid

from sqlalchemy import JSON, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brainforge.boundary.db.base import Base, TimestampMixin, UUIDMixin
from brainforge.boundary.db.models.user_model import UserModel


class DiagramType(str, enum.Enum):
    """Supported diagram kinds."""

    ERD = "ERD"
    FLOWCHART = "FLOWCHART"
    ARCHITECTURE = "ARCHITECTURE"
    SEQUENCE = "SEQUENCE"
    MINDMAP = "MINDMAP"
    USERFLOW = "USERFLOW"
    FREEFORM = "FREEFORM"
    COMPONENT = "COMPONENT"


def empty_graph() -> dict:
    return {"nodes": [], "edges": []}


class DiagramModel(Base, UUIDMixin, TimestampMixin):
    """Diagram ORM model."""

    __tablename__ = "diagrams"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("projects.id", ondelete="SET NULL"), default=None, index=True
    )
    created_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    type: Mapped[DiagramType] = mapped_column(
        Enum(DiagramType, native_enum=False, length=20), default=DiagramType.FLOWCHART
    )
    data: Mapped[dict] = mapped_column(JSON, default=empty_graph, nullable=False)
    thumbnail: Mapped[str | None] = mapped_column(Text, default=None)

    creator: Mapped[UserModel] = relationship(lazy="selectin")
