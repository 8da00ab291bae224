"""
Declarative base, UTC datetime column type and id/timestamp mixins.

Every BrainForge table has a UUID primary key; mutable entities also carry
created_at/updated_at, append-only rows (messages, logs, notifications) only
created_at.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime column.

    PostgreSQL round-trips tzinfo natively; SQLite drops it, so naive values
    coming back from the driver are tagged as UTC. Values written are
    normalized to UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Base(DeclarativeBase):
    """Declarative base; maps uuid.UUID and datetime annotations to portable column types."""

    type_annotation_map = {
        uuid.UUID: Uuid(as_uuid=True),
        datetime: UTCDateTime(),
    }


class UUIDMixin:
    """UUID v4 primary key generated client-side on insert."""

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )


class TimestampMixin:
    """created_at on insert, updated_at refreshed by every ORM update."""

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )


class CreatedAtMixin:
    """Creation time only, for rows that are never edited."""

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow,
        nullable=False,
    )
