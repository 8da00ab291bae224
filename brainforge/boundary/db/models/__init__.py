"""
Database models package.

Importing this package registers every table on ``Base.metadata``.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Database model definitions for domain entities
"""

from brainforge.boundary.db.models.user_model import UserModel
from brainforge.boundary.db.models.team_model import (
    InvitationStatus,
    TeamInvitationModel,
    TeamMemberModel,
    TeamModel,
    TeamRole,
)
from brainforge.boundary.db.models.project_model import ProjectModel
from brainforge.boundary.db.models.sprint_model import SprintPlanModel, SprintStatus
from brainforge.boundary.db.models.task_model import (
    LabelModel,
    TaskActivityModel,
    TaskAssigneeModel,
    TaskCommentModel,
    TaskLabelModel,
    TaskModel,
    TaskPriority,
    TaskStatus,
)
from brainforge.boundary.db.models.brainstorm_model import (
    BrainstormMessageModel,
    BrainstormMode,
    BrainstormSessionModel,
    MessageRole,
)
from brainforge.boundary.db.models.diagram_model import DiagramModel, DiagramType
from brainforge.boundary.db.models.calendar_model import CalendarEventModel, EventType
from brainforge.boundary.db.models.note_model import NoteHistoryModel, NoteModel
from brainforge.boundary.db.models.discussion_model import DiscussionModel, DiscussionReplyModel
from brainforge.boundary.db.models.goal_model import GoalModel, GoalStatus
from brainforge.boundary.db.models.notification_model import NotificationModel
from brainforge.boundary.db.models.ai_chat_model import AIChatMessageModel, AIChatModel
from brainforge.boundary.db.models.ai_key_model import AIProvider, AIUsageLogModel, UserAIKeyModel
from brainforge.boundary.db.models.setting_model import SystemSettingModel
from brainforge.boundary.db.models.auth_token_model import PasswordResetTokenModel, RevokedTokenModel

__all__ = [
    "UserModel",
    "TeamModel",
    "TeamMemberModel",
    "TeamInvitationModel",
    "TeamRole",
    "InvitationStatus",
    "ProjectModel",
    "SprintPlanModel",
    "SprintStatus",
    "TaskModel",
    "TaskAssigneeModel",
    "TaskLabelModel",
    "TaskCommentModel",
    "TaskActivityModel",
    "LabelModel",
    "TaskStatus",
    "TaskPriority",
    "BrainstormSessionModel",
    "BrainstormMessageModel",
    "BrainstormMode",
    "MessageRole",
    "DiagramModel",
    "DiagramType",
    "CalendarEventModel",
    "EventType",
    "NoteModel",
    "NoteHistoryModel",
    "DiscussionModel",
    "DiscussionReplyModel",
    "GoalModel",
    "GoalStatus",
    "NotificationModel",
    "AIChatModel",
    "AIChatMessageModel",
    "AIProvider",
    "UserAIKeyModel",
    "AIUsageLogModel",
    "SystemSettingModel",
    "RevokedTokenModel",
    "PasswordResetTokenModel",
]
