"""
Brainstorm ORM models.

AI-assisted brainstorm sessions with a message log and collaborative
canvases (whiteboard strokes and flow graph).

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Brainstorm persistence
"""

import enum
import uuid

from sqlalchemy import JSON, Boolean, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brainforge.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from brainforge.boundary.db.models.user_model import UserModel


class BrainstormMode(str, enum.Enum):
    """Facilitation style used to build the system prompt."""

    BRAINSTORM = "BRAINSTORM"
    DEBATE = "DEBATE"
    ANALYSIS = "ANALYSIS"
    FREEFORM = "FREEFORM"


class MessageRole(str, enum.Enum):
    """Author of a chat message."""

    USER = "USER"
    ASSISTANT = "ASSISTANT"
    SYSTEM = "SYSTEM"


class BrainstormSessionModel(Base, UUIDMixin, TimestampMixin):
    """Brainstorm session."""

    __tablename__ = "brainstorm_sessions"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("projects.id", ondelete="SET NULL"), default=None, index=True
    )
    created_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    title: Mapped[str] = mapped_column(String(200))
    mode: Mapped[BrainstormMode] = mapped_column(
        Enum(BrainstormMode, native_enum=False, length=20), default=BrainstormMode.BRAINSTORM
    )
    context: Mapped[str | None] = mapped_column(Text, default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    whiteboard_data: Mapped[dict | None] = mapped_column(JSON, default=None, doc="Whiteboard strokes")
    flow_data: Mapped[dict | None] = mapped_column(JSON, default=None, doc="Flow nodes and edges")

    creator: Mapped[UserModel] = relationship(lazy="selectin")


class BrainstormMessageModel(Base, UUIDMixin, CreatedAtMixin):
    """Message in a brainstorm session."""

    __tablename__ = "brainstorm_messages"

    session_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("brainstorm_sessions.id", ondelete="CASCADE"), index=True
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), default=None
    )
    role: Mapped[MessageRole] = mapped_column(Enum(MessageRole, native_enum=False, length=20))
    content: Mapped[str] = mapped_column(Text)
    is_pinned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_edited: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    provider: Mapped[str | None] = mapped_column(String(30), default=None)
    model: Mapped[str | None] = mapped_column(String(100), default=None)

    user: Mapped[UserModel | None] = relationship(lazy="selectin")
