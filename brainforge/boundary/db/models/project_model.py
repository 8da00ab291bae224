"""
Project ORM model.

Projects group tasks, notes, diagrams, goals, sessions and chats inside a
team. Deleting a project detaches its content instead of deleting it.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Optional grouping for team content
"""

import uuid

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from brainforge.boundary.db.base import Base, TimestampMixin, UUIDMixin

DEFAULT_PROJECT_COLOR = "#7b68ee"
DEFAULT_PROJECT_ICON = "folder"


class ProjectModel(Base, UUIDMixin, TimestampMixin):
    """Team project."""

    __tablename__ = "projects"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    created_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(String(2000), default=None)
    color: Mapped[str] = mapped_column(String(20), default=DEFAULT_PROJECT_COLOR)
    icon: Mapped[str] = mapped_column(String(50), default=DEFAULT_PROJECT_ICON)
