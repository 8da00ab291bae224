"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from brainforge.boundary.db.CRUD import task_crud, user_crud

    task = await task_crud.get_in_team(db, task_id, team_id)
"""

from brainforge.boundary.db.CRUD.base_crud import BaseCRUD
from brainforge.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from brainforge.boundary.db.CRUD.team_crud import (
    TeamCRUD,
    TeamInvitationCRUD,
    TeamMemberCRUD,
    team_crud,
    team_invitation_crud,
    team_member_crud,
)
from brainforge.boundary.db.CRUD.project_crud import ProjectCRUD, project_crud
from brainforge.boundary.db.CRUD.task_crud import (
    LabelCRUD,
    TaskActivityCRUD,
    TaskCommentCRUD,
    TaskCRUD,
    label_crud,
    task_activity_crud,
    task_comment_crud,
    task_crud,
)
from brainforge.boundary.db.CRUD.brainstorm_crud import (
    BrainstormMessageCRUD,
    BrainstormSessionCRUD,
    brainstorm_message_crud,
    brainstorm_session_crud,
)
from brainforge.boundary.db.CRUD.content_crud import (
    TeamContentCRUD,
    calendar_event_crud,
    diagram_crud,
    discussion_crud,
    discussion_reply_crud,
    goal_crud,
    note_crud,
    note_history_crud,
    sprint_crud,
)
from brainforge.boundary.db.CRUD.notification_crud import NotificationCRUD, notification_crud
from brainforge.boundary.db.CRUD.ai_crud import (
    ai_chat_crud,
    ai_chat_message_crud,
    ai_usage_log_crud,
    user_ai_key_crud,
)
from brainforge.boundary.db.CRUD.system_crud import (
    password_reset_token_crud,
    revoked_token_crud,
    system_setting_crud,
)
from brainforge.boundary.db.CRUD.analytics_crud import AnalyticsCRUD, analytics_crud

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "TeamCRUD",
    "TeamMemberCRUD",
    "TeamInvitationCRUD",
    "team_crud",
    "team_member_crud",
    "team_invitation_crud",
    "ProjectCRUD",
    "project_crud",
    "TaskCRUD",
    "LabelCRUD",
    "TaskCommentCRUD",
    "TaskActivityCRUD",
    "task_crud",
    "label_crud",
    "task_comment_crud",
    "task_activity_crud",
    "BrainstormSessionCRUD",
    "BrainstormMessageCRUD",
    "brainstorm_session_crud",
    "brainstorm_message_crud",
    "TeamContentCRUD",
    "diagram_crud",
    "sprint_crud",
    "note_crud",
    "goal_crud",
    "calendar_event_crud",
    "note_history_crud",
    "discussion_crud",
    "discussion_reply_crud",
    "NotificationCRUD",
    "notification_crud",
    "user_ai_key_crud",
    "ai_usage_log_crud",
    "ai_chat_crud",
    "ai_chat_message_crud",
    "system_setting_crud",
    "revoked_token_crud",
    "password_reset_token_crud",
    "AnalyticsCRUD",
    "analytics_crud",
]
