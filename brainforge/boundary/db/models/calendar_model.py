"""
Calendar event ORM model.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Team calendar persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brainforge.boundary.db.base import Base, TimestampMixin, UUIDMixin
from brainforge.boundary.db.models.user_model import UserModel


class EventType(str, enum.Enum):
    """Calendar event categories."""

    TASK_DEADLINE = "TASK_DEADLINE"
    SPRINT_MILESTONE = "SPRINT_MILESTONE"
    BRAINSTORM_SESSION = "BRAINSTORM_SESSION"
    CUSTOM_EVENT = "CUSTOM_EVENT"
    MEETING = "MEETING"


class CalendarEventModel(Base, UUIDMixin, TimestampMixin):
    """Calendar event, optionally linked to a task, sprint or brainstorm session."""

    __tablename__ = "calendar_events"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    created_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    type: Mapped[EventType] = mapped_column(
        Enum(EventType, native_enum=False, length=30), default=EventType.CUSTOM_EVENT
    )
    start_date: Mapped[datetime] = mapped_column(nullable=False, index=True)
    end_date: Mapped[datetime | None] = mapped_column(default=None)
    all_day: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    color: Mapped[str | None] = mapped_column(String(7), default=None)
    task_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("tasks.id", ondelete="SET NULL"), default=None
    )
    sprint_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("sprint_plans.id", ondelete="SET NULL"), default=None
    )
    session_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("brainstorm_sessions.id", ondelete="SET NULL"), default=None
    )

    creator: Mapped[UserModel] = relationship(lazy="selectin")
