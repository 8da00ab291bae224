"""
Task board ORM models.

Tasks with assignees, labels, comments and an activity trail.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Task board persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brainforge.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from brainforge.boundary.db.models.user_model import UserModel


class TaskStatus(str, enum.Enum):
    """Board columns."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    IN_REVIEW = "IN_REVIEW"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class TaskPriority(str, enum.Enum):
    """Priorities, most urgent first."""

    URGENT = "URGENT"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class LabelModel(Base, UUIDMixin, CreatedAtMixin):
    """Team-scoped label."""

    __tablename__ = "labels"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(30))
    color: Mapped[str] = mapped_column(String(7))


class TaskModel(Base, UUIDMixin, TimestampMixin):
    """
    Task ORM model.

    Attributes:
        team_id: Owning team
        project_id: Optional project (SET NULL on project deletion)
        sprint_id: Optional sprint the task was planned in
        order_index: Position on the board, unique-ish per team (max+1 on create)
        completed_at: Set when status becomes DONE, cleared otherwise
        assignees / labels: Eagerly loaded association rows
    """

    __tablename__ = "tasks"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("projects.id", ondelete="SET NULL"), default=None, index=True
    )
    sprint_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("sprint_plans.id", ondelete="SET NULL"), default=None, index=True
    )
    created_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus, native_enum=False, length=20), default=TaskStatus.TODO, nullable=False
    )
    priority: Mapped[TaskPriority] = mapped_column(
        Enum(TaskPriority, native_enum=False, length=20), default=TaskPriority.MEDIUM, nullable=False
    )
    start_date: Mapped[datetime | None] = mapped_column(default=None)
    due_date: Mapped[datetime | None] = mapped_column(default=None)
    completed_at: Mapped[datetime | None] = mapped_column(default=None)
    estimation: Mapped[int | None] = mapped_column(Integer, default=None)
    time_spent: Mapped[int | None] = mapped_column(Integer, default=None)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    creator: Mapped[UserModel] = relationship(lazy="selectin", foreign_keys=[created_by])
    assignees: Mapped[list["TaskAssigneeModel"]] = relationship(
        lazy="selectin", cascade="all, delete-orphan", passive_deletes=True
    )
    labels: Mapped[list["TaskLabelModel"]] = relationship(
        lazy="selectin", cascade="all, delete-orphan", passive_deletes=True
    )


class TaskAssigneeModel(Base, UUIDMixin):
    """Task ↔ user assignment."""

    __tablename__ = "task_assignees"
    __table_args__ = (UniqueConstraint("task_id", "user_id", name="uq_task_assignee"),)

    task_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("tasks.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    user: Mapped[UserModel] = relationship(lazy="selectin")


class TaskLabelModel(Base, UUIDMixin):
    """Task ↔ label association."""

    __tablename__ = "task_labels"
    __table_args__ = (UniqueConstraint("task_id", "label_id", name="uq_task_label"),)

    task_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("tasks.id", ondelete="CASCADE"), index=True)
    label_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("labels.id", ondelete="CASCADE"))

    label: Mapped[LabelModel] = relationship(lazy="selectin")


class TaskCommentModel(Base, UUIDMixin, TimestampMixin):
    """Comment on a task."""

    __tablename__ = "task_comments"

    task_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("tasks.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    content: Mapped[str] = mapped_column(Text)

    user: Mapped[UserModel] = relationship(lazy="selectin")


class TaskActivityModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Audit trail entry.

    action is one of created, title_changed, status_changed,
    priority_changed, comment_added.
    """

    __tablename__ = "task_activities"

    task_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("tasks.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    action: Mapped[str] = mapped_column(String(50))
    old_value: Mapped[str | None] = mapped_column(Text, default=None)
    new_value: Mapped[str | None] = mapped_column(Text, default=None)

    user: Mapped[UserModel] = relationship(lazy="selectin")
