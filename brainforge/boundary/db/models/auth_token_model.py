"""
Auth token bookkeeping models.

RevokedToken is the JWT blacklist (sha256 of the token, kept until the token
would have expired anyway). PasswordResetToken holds one-shot reset tokens.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Token revocation and password reset persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from brainforge.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class RevokedTokenModel(Base, UUIDMixin, CreatedAtMixin):
    """Blacklisted JWT."""

    __tablename__ = "revoked_tokens"

    token_hash: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    expires_at: Mapped[datetime] = mapped_column(nullable=False, index=True)


class PasswordResetTokenModel(Base, UUIDMixin, CreatedAtMixin):
    """Pending password reset."""

    __tablename__ = "password_reset_tokens"

    token: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    expires_at: Mapped[datetime] = mapped_column(nullable=False)
