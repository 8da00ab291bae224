"""
System setting ORM model.

Key/value configuration editable from the admin console. Values are stored
as strings; ``type`` tells the client how to render them.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Runtime configuration persistence
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from brainforge.boundary.db.base import Base, TimestampMixin, UUIDMixin


class SystemSettingModel(Base, UUIDMixin, TimestampMixin):
    """System setting ORM model."""

    __tablename__ = "system_settings"

    key: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    value: Mapped[str] = mapped_column(Text, default="")
    type: Mapped[str] = mapped_column(String(20), default="string")
    category: Mapped[str] = mapped_column(String(50), index=True)
    description: Mapped[str | None] = mapped_column(Text, default=None)
