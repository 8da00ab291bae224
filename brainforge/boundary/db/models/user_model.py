"""
User ORM model.

Accounts authenticate with a password, a linked Google identity, or both.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Identity persistence
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from brainforge.boundary.db.base import Base, TimestampMixin, UUIDMixin


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User account.

    Attributes:
        email: Unique login email
        name: Display name
        password_hash: bcrypt hash, None for Google-only accounts
        google_id: Google subject id when linked
        avatar_url: Profile picture URL
        is_admin: Grants access to the admin console
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, doc="Login email")
    name: Mapped[str] = mapped_column(String(100), doc="Display name")
    password_hash: Mapped[str | None] = mapped_column(String(255), default=None)
    google_id: Mapped[str | None] = mapped_column(String(255), unique=True, default=None)
    avatar_url: Mapped[str | None] = mapped_column(String(1024), default=None)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
