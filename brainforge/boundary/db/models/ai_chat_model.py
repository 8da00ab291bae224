"""
AI assistant chat ORM models.

Chats are private to their creator within a team.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: AI assistant conversation persistence
"""

import uuid

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from brainforge.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from brainforge.boundary.db.models.brainstorm_model import MessageRole


class AIChatModel(Base, UUIDMixin, TimestampMixin):
    """Chat thread with the project assistant."""

    __tablename__ = "ai_chats"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    created_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("projects.id", ondelete="SET NULL"), default=None
    )
    title: Mapped[str] = mapped_column(String(200), default="New Chat")


class AIChatMessageModel(Base, UUIDMixin, CreatedAtMixin):
    """Message in an assistant chat."""

    __tablename__ = "ai_chat_messages"

    chat_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("ai_chats.id", ondelete="CASCADE"), index=True)
    role: Mapped[MessageRole] = mapped_column(Enum(MessageRole, native_enum=False, length=20))
    content: Mapped[str] = mapped_column(Text)
    provider: Mapped[str | None] = mapped_column(String(30), default=None)
    model: Mapped[str | None] = mapped_column(String(100), default=None)
