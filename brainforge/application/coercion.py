"""
Lenient conversion of model-generated values.

AI replies use loose casing and invent values; these helpers map them onto
the ORM enums and column limits instead of rejecting the record.
"""

import enum
from datetime import datetime, timezone
from typing import TypeVar

E = TypeVar("E", bound=enum.Enum)

TITLE_LIMIT = 200


def coerce_enum(enum_cls: type[E], value, default: E) -> E:
    """Match ``value`` case-insensitively against the enum values, else ``default``."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().upper())
        except ValueError:
            return default
    return default


def clip_title(value, fallback: str) -> str:
    text = str(value).strip() if value else ""
    return (text or fallback)[:TITLE_LIMIT]


def parse_date(value) -> datetime | None:
    """ISO date or datetime string to an aware datetime; anything else to None."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def clamp_progress(value) -> int:
    try:
        return max(0, min(100, int(value)))
    except (TypeError, ValueError):
        return 0
