"""
AI key and usage ORM models.

Users bring their own vendor API keys. Keys are stored AES-GCM encrypted
(see brainforge.core.security.encryption) and every gateway call writes a
usage row with token counts and cost.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: AI key lifecycle and metering persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Enum, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brainforge.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from brainforge.boundary.db.models.user_model import UserModel


class AIProvider(str, enum.Enum):
    """Vendors a key can belong to. Only a subset has a gateway adapter."""

    OPENAI = "OPENAI"
    CLAUDE = "CLAUDE"
    GEMINI = "GEMINI"
    GROQ = "GROQ"
    MISTRAL = "MISTRAL"
    DEEPSEEK = "DEEPSEEK"
    OPENROUTER = "OPENROUTER"
    OLLAMA = "OLLAMA"
    COPILOT = "COPILOT"
    CUSTOM = "CUSTOM"


class UserAIKeyModel(Base, UUIDMixin, TimestampMixin):
    """
    Encrypted per-user vendor key.

    Attributes:
        provider: One key per provider per user
        encrypted_key: ``iv:tag:ciphertext`` hex triple, never returned by the API
        is_active: Cleared when the vendor rejects the key with an auth error
        last_used_at: Touched whenever the gateway decrypts the key
    """

    __tablename__ = "user_ai_keys"
    __table_args__ = (UniqueConstraint("user_id", "provider", name="uq_user_ai_keys_user_provider"),)

    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    provider: Mapped[AIProvider] = mapped_column(Enum(AIProvider, native_enum=False, length=20))
    encrypted_key: Mapped[str] = mapped_column(Text)
    label: Mapped[str] = mapped_column(String(100))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_used_at: Mapped[datetime | None] = mapped_column(default=None)

    user: Mapped[UserModel] = relationship(lazy="selectin")


class AIUsageLogModel(Base, UUIDMixin, CreatedAtMixin):
    """One metered gateway call."""

    __tablename__ = "ai_usage_logs"

    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    provider: Mapped[AIProvider] = mapped_column(Enum(AIProvider, native_enum=False, length=20))
    model: Mapped[str] = mapped_column(String(100))
    input_tokens: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    output_tokens: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    cost: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    feature: Mapped[str] = mapped_column(String(50), default="chat")

    user: Mapped[UserModel] = relationship(lazy="selectin")
