"""
Dependency injection container.

Authentication guards and factory functions for FastAPI dependencies.

Dependencies: fastapi, brainforge.boundary, brainforge.application, brainforge.core.security
System role: DI container for service injection and access control
"""

import logging
from functools import lru_cache
from typing import Callable
from uuid import UUID

import jwt
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.services import (
    AdminService,
    AIChatService,
    AIGenerateService,
    AIKeyService,
    AuthService,
    BrainstormService,
    CalendarService,
    DiagramService,
    DiscussionService,
    GoalService,
    NoteService,
    NotificationService,
    ProjectService,
    SettingsService,
    SprintService,
    TaskService,
    TeamService,
)
from brainforge.application.services.auth_service import is_token_revoked
from brainforge.boundary.db import get_async_db
from brainforge.boundary.db.CRUD import team_member_crud, user_crud
from brainforge.boundary.db.models import TeamMemberModel, TeamRole, UserModel
from brainforge.core.exceptions import ForbiddenError, UnauthorizedError
from brainforge.core.security import verify_access_token
from brainforge.observability.correlation import bind_user

logger = logging.getLogger(__name__)

MANAGER_ROLES = (TeamRole.OWNER, TeamRole.ADMIN)


def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Missing or invalid authorization header")
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise UnauthorizedError("Missing or invalid authorization header")
    return token


async def authenticate_token(db: AsyncSession, token: str) -> UserModel:
    """
    Resolve an access token to its user.

    Shared by the HTTP guard and the websocket handshake.

    Raises:
        UnauthorizedError: Revoked, invalid or expired token, or unknown user
    """
    if await is_token_revoked(db, token):
        raise UnauthorizedError("Token has been revoked")
    try:
        payload = verify_access_token(token)
    except jwt.InvalidTokenError as e:
        logger.debug("Access token rejected", extra={"error": str(e)})
        raise UnauthorizedError("Invalid or expired token")
    user = await user_crud.get_by_id(db, payload.user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


async def get_current_user(
    token: str = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_async_db),
) -> UserModel:
    """
    Get the authenticated user.

    Args:
        token: Bearer access token (injected via Depends)
        db: Async database session (injected via Depends)

    Returns:
        UserModel: The caller
    """
    user = await authenticate_token(db, token)
    bind_user(user.id)
    return user


@lru_cache
def require_team_member(roles: tuple[TeamRole, ...] | None = None) -> Callable:
    """
    Build a guard that checks membership of the ``team_id`` path parameter.

    Args:
        roles: Roles allowed through; any member when omitted

    Returns:
        Callable: Dependency yielding the caller's TeamMemberModel
    """

    async def guard(
        team_id: UUID,
        user: UserModel = Depends(get_current_user),
        db: AsyncSession = Depends(get_async_db),
    ) -> TeamMemberModel:
        membership = await team_member_crud.get_membership(db, team_id, user.id)
        if membership is None:
            raise ForbiddenError("You are not a member of this team")
        if roles is not None and membership.role not in roles:
            raise ForbiddenError("Insufficient permissions")
        return membership

    return guard


async def require_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    """Let platform administrators through."""
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user


def get_auth_service(db: AsyncSession = Depends(get_async_db)) -> AuthService:
    """Get auth service instance."""
    return AuthService(db)


def get_team_service(db: AsyncSession = Depends(get_async_db)) -> TeamService:
    """Get team service instance."""
    return TeamService(db)


def get_project_service(db: AsyncSession = Depends(get_async_db)) -> ProjectService:
    return ProjectService(db)


def get_task_service(db: AsyncSession = Depends(get_async_db)) -> TaskService:
    return TaskService(db)


def get_brainstorm_service(db: AsyncSession = Depends(get_async_db)) -> BrainstormService:
    return BrainstormService(db)


def get_diagram_service(db: AsyncSession = Depends(get_async_db)) -> DiagramService:
    return DiagramService(db)


def get_sprint_service(db: AsyncSession = Depends(get_async_db)) -> SprintService:
    return SprintService(db)


def get_calendar_service(db: AsyncSession = Depends(get_async_db)) -> CalendarService:
    return CalendarService(db)


def get_note_service(db: AsyncSession = Depends(get_async_db)) -> NoteService:
    return NoteService(db)


def get_discussion_service(db: AsyncSession = Depends(get_async_db)) -> DiscussionService:
    return DiscussionService(db)


def get_goal_service(db: AsyncSession = Depends(get_async_db)) -> GoalService:
    return GoalService(db)


def get_notification_service(db: AsyncSession = Depends(get_async_db)) -> NotificationService:
    return NotificationService(db)


def get_ai_chat_service(db: AsyncSession = Depends(get_async_db)) -> AIChatService:
    return AIChatService(db)


def get_ai_generate_service(db: AsyncSession = Depends(get_async_db)) -> AIGenerateService:
    return AIGenerateService(db)


def get_ai_key_service(db: AsyncSession = Depends(get_async_db)) -> AIKeyService:
    return AIKeyService(db)


def get_admin_service(db: AsyncSession = Depends(get_async_db)) -> AdminService:
    """Get admin console service instance."""
    return AdminService(db)


def get_settings_service(db: AsyncSession = Depends(get_async_db)) -> SettingsService:
    return SettingsService(db)
