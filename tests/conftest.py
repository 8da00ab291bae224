"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite database, user/team factories, auth overrides
          for router tests
Dependencies: pytest, sqlalchemy, aiosqlite, fastapi
System role: Test infrastructure and fixture management
"""

import os

# Settings are cached on first use, so the test environment goes in first.
os.environ.setdefault("AUTH_BCRYPT_ROUNDS", "4")
os.environ.setdefault("POSTGRES_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LANGFUSE_ENABLE_TRACING", "false")
os.environ.setdefault("AUTH_JWT_SECRET", "test-access-secret-0123456789abcdef")
os.environ.setdefault("AUTH_JWT_REFRESH_SECRET", "test-refresh-secret-0123456789abcdef")

import uuid
from datetime import datetime, timezone

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import brainforge.boundary.db.models  # noqa: F401
from brainforge.api.deps import (
    MANAGER_ROLES,
    get_current_user,
    require_admin,
    require_team_member,
)
from brainforge.api.error_handling import register_exception_handlers
from brainforge.application.services.team_service import create_team_with_owner
from brainforge.boundary.db.base import Base
from brainforge.boundary.db.CRUD import team_member_crud, user_crud
from brainforge.boundary.db.models import TeamMemberModel, TeamRole, UserModel
from brainforge.core.security import hash_password

TEST_PASSWORD = "Password1"


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with the full schema.

    Foreign keys are switched on so ON DELETE CASCADE behaves like PostgreSQL.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory configured like the application's."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create a test database session.

    Yields:
        AsyncSession: Session on the in-memory database, rolled back afterwards
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user(test_async_db):
    """Factory creating users with the shared test password."""

    async def _make_user(
        email: str | None = None,
        name: str = "Test User",
        is_admin: bool = False,
        password: str | None = TEST_PASSWORD,
    ) -> UserModel:
        return await user_crud.create(
            test_async_db,
            email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
            name=name,
            password_hash=hash_password(password) if password else None,
            is_admin=is_admin,
        )

    return _make_user


@pytest.fixture
def make_team(test_async_db):
    """Factory creating a team owned by ``owner`` plus optional extra members."""

    async def _make_team(owner: UserModel, name: str = "Core Team", members: dict | None = None):
        team = await create_team_with_owner(test_async_db, owner.id, name)
        for user, role in (members or {}).items():
            await team_member_crud.create(test_async_db, team_id=team.id, user_id=user.id, role=role)
        return team

    return _make_team


def build_test_app(*routers: APIRouter) -> FastAPI:
    """Bare app with the given routers and the real error handlers."""
    app = FastAPI()
    register_exception_handlers(app)
    for router in routers:
        app.include_router(router)
    return app


def sample_user(is_admin: bool = False) -> UserModel:
    """Detached user for router tests; never touches a database."""
    now = datetime.now(timezone.utc)
    return UserModel(
        id=uuid.uuid4(),
        email="ada@example.com",
        name="Ada",
        password_hash=None,
        is_admin=is_admin,
        created_at=now,
        updated_at=now,
    )


def override_auth(app: FastAPI, user: UserModel, team_id: uuid.UUID, role: TeamRole = TeamRole.OWNER) -> TeamMemberModel:
    """
    Let ``user`` through every guard as a member of ``team_id``.

    Returns:
        TeamMemberModel: The membership handed to the routes
    """
    membership = TeamMemberModel(id=uuid.uuid4(), team_id=team_id, user_id=user.id, role=role)
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[require_team_member()] = lambda: membership
    app.dependency_overrides[require_team_member(MANAGER_ROLES)] = lambda: membership
    app.dependency_overrides[require_team_member((TeamRole.OWNER,))] = lambda: membership
    app.dependency_overrides[require_admin] = lambda: user
    return membership


@pytest.fixture
def team_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def current_user() -> UserModel:
    return sample_user()


def make_client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
