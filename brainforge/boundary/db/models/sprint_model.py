"""
Sprint plan ORM model.

A sprint plan is usually drafted by the AI gateway; ``data`` holds the
generated plan (tasks, milestones, risks, daily plan) until it is converted
into real tasks.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Sprint planning persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brainforge.boundary.db.base import Base, TimestampMixin, UUIDMixin
from brainforge.boundary.db.models.user_model import UserModel


class SprintStatus(str, enum.Enum):
    """Sprint lifecycle."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class SprintPlanModel(Base, UUIDMixin, TimestampMixin):
    """Sprint plan ORM model."""

    __tablename__ = "sprint_plans"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("projects.id", ondelete="SET NULL"), default=None, index=True
    )
    created_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    title: Mapped[str] = mapped_column(String(200))
    goal: Mapped[str] = mapped_column(Text)
    context: Mapped[str | None] = mapped_column(Text, default=None)
    deadline: Mapped[datetime] = mapped_column(nullable=False)
    team_size: Mapped[int] = mapped_column(Integer, default=3, nullable=False)
    status: Mapped[SprintStatus] = mapped_column(
        Enum(SprintStatus, native_enum=False, length=20), default=SprintStatus.DRAFT, nullable=False
    )
    data: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)

    creator: Mapped[UserModel] = relationship(lazy="selectin")
