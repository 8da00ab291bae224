"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - create_tables(): Bootstrap schema creation

Dependencies: sqlalchemy, brainforge.configs
System role: Database adapter providing persistent storage for every
BrainForge entity.
"""

from brainforge.boundary.db.base import Base, TimestampMixin, UUIDMixin
from brainforge.boundary.db.connection import (
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
