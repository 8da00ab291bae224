"""
Admin console service.

Platform-wide statistics, user and team browsing, AI usage analytics and
growth trends. Every method assumes the caller already passed the admin
guard.

Dependencies: brainforge.boundary.db.CRUD
System role: Platform administration use case orchestration
"""

import logging
import math
from datetime import timedelta
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import (
    ai_key_dict,
    member_dict,
    project_dict,
    team_dict,
    usage_log_dict,
    user_brief,
    user_profile,
)
from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD import (
    ai_usage_log_crud,
    analytics_crud,
    brainstorm_session_crud,
    project_crud,
    task_crud,
    team_crud,
    team_member_crud,
    user_crud,
)
from brainforge.boundary.db.models import (
    AIChatModel,
    AIProvider,
    AIUsageLogModel,
    BrainstormSessionModel,
    CalendarEventModel,
    DiagramModel,
    DiscussionModel,
    GoalModel,
    NoteModel,
    ProjectModel,
    SprintPlanModel,
    TaskModel,
    TeamInvitationModel,
    TeamMemberModel,
    TeamModel,
    UserAIKeyModel,
    UserModel,
)
from brainforge.core.exceptions import AppError, NotFoundError

logger = logging.getLogger(__name__)

WINDOW = timedelta(days=30)
ACTIVITY_LIMIT = 20

STAT_MODELS = {
    "total_users": UserModel,
    "total_teams": TeamModel,
    "total_projects": ProjectModel,
    "total_tasks": TaskModel,
    "total_ai_keys": UserAIKeyModel,
    "total_brainstorms": BrainstormSessionModel,
    "total_diagrams": DiagramModel,
    "total_notes": NoteModel,
    "total_discussions": DiscussionModel,
    "total_goals": GoalModel,
    "total_calendar_events": CalendarEventModel,
    "total_sprint_plans": SprintPlanModel,
    "total_ai_chats": AIChatModel,
}

GROWTH_MODELS = {
    "users": UserModel,
    "tasks": TaskModel,
    "brainstorms": BrainstormSessionModel,
    "ai_requests": AIUsageLogModel,
}


def change_percent(current: int, previous: int) -> int:
    """Rounded percent change; growth from zero counts as 100."""
    if previous == 0:
        return 100 if current > 0 else 0
    return round((current - previous) / previous * 100)


def _page(total: int, page: int, limit: int) -> dict:
    return {"total": total, "page": page, "total_pages": math.ceil(total / limit) if limit else 0}


def _usage_row(row) -> dict:
    return {
        "requests": row.requests,
        "input_tokens": int(row.input_tokens),
        "output_tokens": int(row.output_tokens),
        "cost": float(row.cost),
    }


def _contains(column, search: str):
    return func.lower(column).like(f"%{search.lower()}%")


class AdminService:
    """Admin console orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_user(self, user_id: UUID) -> UserModel:
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def stats(self) -> dict:
        since = utcnow() - WINDOW
        data = {name: await analytics_crud.count(self.db, model) for name, model in STAT_MODELS.items()}
        data["new_users_this_month"] = await analytics_crud.count(self.db, UserModel, since=since)
        data["ai_usage"] = _usage_row(await analytics_crud.usage_totals(self.db, since))
        data["tasks_by_status"] = await analytics_crud.group_counts(self.db, TaskModel.status)
        data["tasks_by_priority"] = await analytics_crud.group_counts(self.db, TaskModel.priority)
        return data

    async def recent_activity(self, limit: int = ACTIVITY_LIMIT) -> dict:
        users = await user_crud.list_where(self.db, order_by=[UserModel.created_at.desc()], limit=limit)
        tasks = await task_crud.list_where(self.db, order_by=[TaskModel.created_at.desc()], limit=limit)
        sessions = await brainstorm_session_crud.list_where(
            self.db, order_by=[BrainstormSessionModel.created_at.desc()], limit=limit
        )
        return {
            "recent_users": [{**user_brief(u), "created_at": u.created_at} for u in users],
            "recent_tasks": [
                {
                    "id": t.id,
                    "title": t.title,
                    "status": t.status,
                    "created_at": t.created_at,
                    "creator": user_brief(t.creator),
                }
                for t in tasks
            ],
            "recent_sessions": [
                {
                    "id": s.id,
                    "title": s.title,
                    "mode": s.mode,
                    "created_at": s.created_at,
                    "creator": user_brief(s.creator),
                }
                for s in sessions
            ],
        }

    # Users

    async def _user_stats(self, user_id: UUID) -> dict:
        return {
            "team_memberships": await team_member_crud.count_where(self.db, TeamMemberModel.user_id == user_id),
            "created_tasks": await task_crud.count_where(self.db, TaskModel.created_by == user_id),
            "brainstorm_sessions": await brainstorm_session_crud.count_where(
                self.db, BrainstormSessionModel.created_by == user_id
            ),
            "ai_keys": await analytics_crud.count_matching(self.db, UserAIKeyModel, UserAIKeyModel.user_id == user_id),
        }

    async def list_users(self, page: int = 1, limit: int = 20, search: str | None = None) -> dict:
        criteria = [or_(_contains(UserModel.email, search), _contains(UserModel.name, search))] if search else []
        users = await user_crud.list_where(
            self.db, *criteria, order_by=[UserModel.created_at.desc()], limit=limit, offset=(page - 1) * limit
        )
        total = await user_crud.count_where(self.db, *criteria)
        rows = []
        for user in users:
            rows.append({**user_profile(user), "stats": await self._user_stats(user.id)})
        return {"users": rows, **_page(total, page, limit)}

    async def get_user(self, user_id: UUID) -> dict:
        user = await self._get_user(user_id)
        memberships = await team_member_crud.list_for_user(self.db, user.id)
        stats = await self._user_stats(user.id)
        for name, model in (("notes", NoteModel), ("diagrams", DiagramModel), ("projects", ProjectModel)):
            stats[name] = await analytics_crud.count_matching(self.db, model, model.created_by == user.id)
        return {
            **user_profile(user),
            "team_memberships": [
                {"role": m.role, "joined_at": m.joined_at, "team": {"id": m.team.id, "name": m.team.name}}
                for m in memberships
            ],
            "stats": stats,
        }

    async def set_admin(self, user_id: UUID, is_admin: bool) -> dict:
        user = await self._get_user(user_id)
        user = await user_crud.update_instance(self.db, user, is_admin=is_admin)
        logger.info("Admin flag changed", extra={"user_id": str(user_id), "is_admin": is_admin})
        return {**user_brief(user), "is_admin": user.is_admin}

    async def delete_user(self, user_id: UUID, admin_id: UUID) -> dict:
        """
        Delete a user and everything that cascades from it.

        Raises:
            AppError: CANNOT_DELETE_SELF when an admin targets their own account
            NotFoundError: Unknown user
        """
        if user_id == admin_id:
            raise AppError("You cannot delete your own account", status_code=400, code="CANNOT_DELETE_SELF")
        await self._get_user(user_id)
        try:
            await user_crud.delete_by_id(self.db, user_id)
        except Exception as e:
            logger.error("Failed to delete user", extra={"error": str(e), "user_id": str(user_id)})
            raise
        logger.info("User deleted by admin", extra={"user_id": str(user_id), "admin_id": str(admin_id)})
        return {"deleted": True}

    # Teams

    async def _team_stats(self, team_id: UUID) -> dict:
        return {
            "members": await team_member_crud.count_for_team(self.db, team_id),
            "tasks": await task_crud.count_where(self.db, TaskModel.team_id == team_id),
            "projects": await project_crud.count_where(self.db, ProjectModel.team_id == team_id),
        }

    async def list_teams(self, page: int = 1, limit: int = 20, search: str | None = None) -> dict:
        criteria = [_contains(TeamModel.name, search)] if search else []
        teams = await team_crud.list_where(
            self.db, *criteria, order_by=[TeamModel.created_at.desc()], limit=limit, offset=(page - 1) * limit
        )
        total = await team_crud.count_where(self.db, *criteria)
        owners = await analytics_crud.users_by_ids(self.db, [t.owner_id for t in teams])
        rows = [
            {**team_dict(t), "owner": user_brief(owners.get(t.owner_id)), "stats": await self._team_stats(t.id)}
            for t in teams
        ]
        return {"teams": rows, **_page(total, page, limit)}

    async def get_team(self, team_id: UUID) -> dict:
        team = await team_crud.get_by_id(self.db, team_id)
        if team is None:
            raise NotFoundError("Team not found")
        owner = await user_crud.get_by_id(self.db, team.owner_id)
        members = await team_member_crud.list_for_team(self.db, team.id)
        projects = await project_crud.list_where(
            self.db, ProjectModel.team_id == team.id, order_by=[ProjectModel.created_at.desc()], limit=10
        )
        stats = await self._team_stats(team.id)
        stats["brainstorm_sessions"] = await brainstorm_session_crud.count_where(
            self.db, BrainstormSessionModel.team_id == team.id
        )
        stats["invitations"] = await analytics_crud.count_matching(
            self.db, TeamInvitationModel, TeamInvitationModel.team_id == team.id
        )
        return {
            **team_dict(team),
            "owner": user_brief(owner),
            "members": [member_dict(m) for m in members],
            "projects": [project_dict(p) for p in projects],
            "stats": stats,
        }

    # AI usage

    async def ai_usage(self) -> dict:
        """Last-30-day usage by provider, model, feature, user and day."""
        since = utcnow() - WINDOW
        by_provider = await analytics_crud.usage_by(self.db, [AIUsageLogModel.provider], since)
        by_model = await analytics_crud.usage_by(
            self.db, [AIUsageLogModel.provider, AIUsageLogModel.model], since, limit=20
        )
        by_feature = await analytics_crud.usage_by(self.db, [AIUsageLogModel.feature], since)
        top_users = await analytics_crud.usage_by(self.db, [AIUsageLogModel.user_id], since, limit=10)
        users = await analytics_crud.users_by_ids(self.db, [row.user_id for row in top_users])
        daily = await analytics_crud.daily_usage(self.db, since)
        return {
            "by_provider": [{"provider": row.provider, **_usage_row(row)} for row in by_provider],
            "by_model": [{"provider": row.provider, "model": row.model, **_usage_row(row)} for row in by_model],
            "by_feature": [{"feature": row.feature, **_usage_row(row)} for row in by_feature],
            "top_users": [
                {
                    "user": user_brief(users.get(row.user_id))
                    or {"id": row.user_id, "name": "Unknown", "email": "", "avatar_url": None},
                    **_usage_row(row),
                }
                for row in top_users
            ],
            "daily_usage": [
                {"date": str(row.date), "requests": row.requests, "tokens": int(row.tokens), "cost": float(row.cost)}
                for row in daily
            ],
        }

    async def ai_usage_logs(
        self,
        page: int = 1,
        limit: int = 50,
        provider: AIProvider | None = None,
        user_id: UUID | None = None,
        feature: str | None = None,
    ) -> dict:
        criteria = []
        if provider is not None:
            criteria.append(AIUsageLogModel.provider == provider)
        if user_id is not None:
            criteria.append(AIUsageLogModel.user_id == user_id)
        if feature:
            criteria.append(AIUsageLogModel.feature == feature)
        logs = await ai_usage_log_crud.list_where(
            self.db,
            *criteria,
            order_by=[AIUsageLogModel.created_at.desc()],
            limit=limit,
            offset=(page - 1) * limit,
        )
        total = await ai_usage_log_crud.count_where(self.db, *criteria)
        return {
            "logs": [{**usage_log_dict(log), "user": user_brief(log.user)} for log in logs],
            **_page(total, page, limit),
        }

    async def api_keys(self, page: int = 1, limit: int = 20, search: str | None = None) -> dict:
        """Stored keys (never the secret) with an active-key count per provider."""
        keys, total = await analytics_crud.search_keys(self.db, search, limit, (page - 1) * limit)
        summary = await analytics_crud.group_counts(
            self.db, UserAIKeyModel.provider, UserAIKeyModel.is_active.is_(True)
        )
        return {
            "keys": [{**ai_key_dict(k), "user": user_brief(k.user)} for k in keys],
            **_page(total, page, limit),
            "provider_summary": [{"provider": p, "count": n} for p, n in summary.items()],
        }

    async def growth(self) -> dict:
        """Current vs previous 30-day window for users, tasks, brainstorms and AI requests."""
        now = utcnow()
        current_start = now - WINDOW
        previous_start = now - 2 * WINDOW
        data = {}
        for name, model in GROWTH_MODELS.items():
            current = await analytics_crud.count(self.db, model, since=current_start)
            previous = await analytics_crud.count(self.db, model, since=previous_start, until=current_start)
            data[name] = {"current": current, "previous": previous, "change_percent": change_percent(current, previous)}
        registrations = await analytics_crud.daily_registrations(self.db, current_start)
        data["daily_registrations"] = [{"date": str(row.date), "count": row.count} for row in registrations]
        return data
