"""
Notification ORM model.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: In-app notification persistence
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from brainforge.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class NotificationModel(Base, UUIDMixin, CreatedAtMixin):
    """Notification addressed to one user within a team."""

    __tablename__ = "notifications"

    team_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("teams.id", ondelete="CASCADE"), default=None, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    title: Mapped[str] = mapped_column(String(200))
    message: Mapped[str | None] = mapped_column(Text, default=None)
    type: Mapped[str] = mapped_column(String(30), default="info")
    link: Mapped[str | None] = mapped_column(String(500), default=None)
    read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
