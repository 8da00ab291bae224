"""API routers."""

from .admin import router as admin_router
from .ai_chat import generate_router as ai_generate_router
from .ai_chat import router as ai_chat_router
from .ai_keys import router as ai_keys_router
from .auth import router as auth_router
from .brainstorm import router as brainstorm_router
from .calendar import router as calendar_router
from .diagrams import router as diagrams_router
from .discussions import router as discussions_router
from .goals import router as goals_router
from .notes import router as notes_router
from .notifications import router as notifications_router
from .projects import router as projects_router
from .realtime import router as realtime_router
from .settings import router as settings_router
from .sprints import router as sprints_router
from .system import router as system_router
from .system import uploads_router
from .tasks import router as tasks_router
from .tasks import users_router
from .teams import router as teams_router

__all__ = [
    "admin_router",
    "ai_chat_router",
    "ai_generate_router",
    "ai_keys_router",
    "auth_router",
    "brainstorm_router",
    "calendar_router",
    "diagrams_router",
    "discussions_router",
    "goals_router",
    "notes_router",
    "notifications_router",
    "projects_router",
    "realtime_router",
    "settings_router",
    "sprints_router",
    "system_router",
    "tasks_router",
    "teams_router",
    "uploads_router",
    "users_router",
]
