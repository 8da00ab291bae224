"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI dependency
for database session injection.

Dependencies: sqlalchemy, brainforge.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from brainforge.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create the process-wide async SQLAlchemy engine.

    PostgreSQL gets a sized pool with pre-ping; SQLite URLs (tests, local
    single-user runs) use the driver defaults.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    db_config = get_settings().database
    url = db_config.async_database_url
    if db_config.uses_sqlite:
        return create_async_engine(url, echo=db_config.echo_sql)

    return create_async_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Sessions use autoflush=False and expire_on_commit=False so ORM objects
    stay readable after the request commits.

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        async with get_async_session_factory()() as session:
            await ai_usage_log_crud.create(session, **fields)
            await session.commit()
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for a request-scoped async database session.

    Commits when the route completes without raising and rolls back
    otherwise.

    Yields:
        AsyncSession: Async SQLAlchemy database session

    Usage:
        from fastapi import Depends

        @router.get("/tasks/{id}")
        async def get_task(id: UUID, db: AsyncSession = Depends(get_async_db)):
            return await task_crud.get_by_id(db, id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """
    Create every table registered on Base.metadata.

    Intended for local development and first boot; existing tables are
    left untouched.
    """
    # Register all models on the metadata.
    import brainforge.boundary.db.models  # noqa: F401
    from brainforge.boundary.db.base import Base

    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
