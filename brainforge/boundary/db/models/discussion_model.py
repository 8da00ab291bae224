"""
Discussion board ORM models.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Team discussion persistence
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brainforge.boundary.db.base import Base, TimestampMixin, UUIDMixin
from brainforge.boundary.db.models.user_model import UserModel

DEFAULT_CATEGORY = "general"


class DiscussionModel(Base, UUIDMixin, TimestampMixin):
    """Discussion thread."""

    __tablename__ = "discussions"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    created_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(50), default=DEFAULT_CATEGORY)
    is_pinned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_closed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    creator: Mapped[UserModel] = relationship(lazy="selectin")


class DiscussionReplyModel(Base, UUIDMixin, TimestampMixin):
    """Reply in a discussion thread."""

    __tablename__ = "discussion_replies"

    discussion_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("discussions.id", ondelete="CASCADE"), index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    content: Mapped[str] = mapped_column(Text)

    user: Mapped[UserModel] = relationship(lazy="selectin")
