"""Service orchestrators."""

from .admin_service import AdminService
from .ai_chat_service import AIChatService
from .ai_generate_service import AIGenerateService
from .ai_key_service import AIKeyService
from .auth_service import AuthService
from .brainstorm_service import BrainstormService
from .calendar_service import CalendarService
from .diagram_service import DiagramService
from .discussion_service import DiscussionService
from .goal_service import GoalService
from .note_service import NoteService
from .notification_service import NotificationService
from .project_service import ProjectService
from .settings_service import SettingsService
from .sprint_service import SprintService
from .task_service import TaskService
from .team_service import TeamService

__all__ = [
    "AdminService",
    "AIChatService",
    "AIGenerateService",
    "AIKeyService",
    "AuthService",
    "BrainstormService",
    "CalendarService",
    "DiagramService",
    "DiscussionService",
    "GoalService",
    "NoteService",
    "NotificationService",
    "ProjectService",
    "SettingsService",
    "SprintService",
    "TaskService",
    "TeamService",
]
