"""
Note ORM models with version history.

Every update snapshots the previous content into NoteHistory and bumps
``version``.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Collaborative notes persistence
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brainforge.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from brainforge.boundary.db.models.user_model import UserModel


class NoteModel(Base, UUIDMixin, TimestampMixin):
    """Note ORM model."""

    __tablename__ = "notes"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("projects.id", ondelete="SET NULL"), default=None, index=True
    )
    created_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    creator: Mapped[UserModel] = relationship(lazy="selectin")


class NoteHistoryModel(Base, UUIDMixin, CreatedAtMixin):
    """Snapshot of a note's content before an edit."""

    __tablename__ = "note_history"

    note_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("notes.id", ondelete="CASCADE"), index=True)
    content: Mapped[str] = mapped_column(Text)
    version: Mapped[int] = mapped_column(Integer)
    edited_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))

    editor: Mapped[UserModel] = relationship(lazy="selectin")
