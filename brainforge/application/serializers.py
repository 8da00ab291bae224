"""
Response shaping for ORM records.

Services hand plain dicts to the API layer; these helpers keep the shape of
each entity consistent wherever it appears (a task inside a calendar feed
looks like a task from the task board).

Dependencies: brainforge.boundary.db.models
System role: ORM to response-dict mapping
"""

from brainforge.boundary.db.models import (
    AIChatMessageModel,
    AIChatModel,
    AIUsageLogModel,
    BrainstormMessageModel,
    BrainstormSessionModel,
    CalendarEventModel,
    DiagramModel,
    DiscussionModel,
    DiscussionReplyModel,
    GoalModel,
    LabelModel,
    NoteHistoryModel,
    NoteModel,
    NotificationModel,
    ProjectModel,
    SprintPlanModel,
    TaskActivityModel,
    TaskCommentModel,
    TaskModel,
    TeamInvitationModel,
    TeamMemberModel,
    TeamModel,
    UserAIKeyModel,
    UserModel,
)


def user_brief(user: UserModel | None) -> dict | None:
    if user is None:
        return None
    return {"id": user.id, "name": user.name, "email": user.email, "avatar_url": user.avatar_url}


def user_profile(user: UserModel) -> dict:
    """Full profile; never exposes the password hash."""
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "avatar_url": user.avatar_url,
        "is_admin": user.is_admin,
        "has_password": user.password_hash is not None,
        "google_linked": user.google_id is not None,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def team_dict(team: TeamModel) -> dict:
    return {
        "id": team.id,
        "name": team.name,
        "description": team.description,
        "owner_id": team.owner_id,
        "created_at": team.created_at,
        "updated_at": team.updated_at,
    }


def member_dict(member: TeamMemberModel) -> dict:
    return {
        "id": member.id,
        "team_id": member.team_id,
        "user_id": member.user_id,
        "role": member.role,
        "joined_at": member.joined_at,
        "user": user_brief(member.user),
    }


def invitation_dict(invitation: TeamInvitationModel) -> dict:
    return {
        "id": invitation.id,
        "team_id": invitation.team_id,
        "email": invitation.email,
        "role": invitation.role,
        "status": invitation.status,
        "expires_at": invitation.expires_at,
        "invited_by": invitation.invited_by,
        "created_at": invitation.created_at,
    }


def project_dict(project: ProjectModel, counts: dict[str, int] | None = None) -> dict:
    data = {
        "id": project.id,
        "team_id": project.team_id,
        "name": project.name,
        "description": project.description,
        "color": project.color,
        "icon": project.icon,
        "created_by": project.created_by,
        "created_at": project.created_at,
        "updated_at": project.updated_at,
    }
    if counts is not None:
        data["counts"] = counts
    return data


def label_dict(label: LabelModel) -> dict:
    return {"id": label.id, "team_id": label.team_id, "name": label.name, "color": label.color}


def task_dict(task: TaskModel) -> dict:
    return {
        "id": task.id,
        "team_id": task.team_id,
        "project_id": task.project_id,
        "sprint_id": task.sprint_id,
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "priority": task.priority,
        "start_date": task.start_date,
        "due_date": task.due_date,
        "completed_at": task.completed_at,
        "estimation": task.estimation,
        "time_spent": task.time_spent,
        "order_index": task.order_index,
        "created_by": task.created_by,
        "creator": user_brief(task.creator),
        "assignees": [user_brief(a.user) for a in task.assignees],
        "labels": [label_dict(tl.label) for tl in task.labels],
        "created_at": task.created_at,
        "updated_at": task.updated_at,
    }


def comment_dict(comment: TaskCommentModel) -> dict:
    return {
        "id": comment.id,
        "task_id": comment.task_id,
        "content": comment.content,
        "user": user_brief(comment.user),
        "created_at": comment.created_at,
    }


def activity_dict(activity: TaskActivityModel) -> dict:
    return {
        "id": activity.id,
        "task_id": activity.task_id,
        "action": activity.action,
        "old_value": activity.old_value,
        "new_value": activity.new_value,
        "user": user_brief(activity.user),
        "created_at": activity.created_at,
    }


def session_dict(session: BrainstormSessionModel, message_count: int | None = None) -> dict:
    data = {
        "id": session.id,
        "team_id": session.team_id,
        "project_id": session.project_id,
        "title": session.title,
        "mode": session.mode,
        "context": session.context,
        "is_active": session.is_active,
        "whiteboard_data": session.whiteboard_data,
        "flow_data": session.flow_data,
        "creator": user_brief(session.creator),
        "created_at": session.created_at,
        "updated_at": session.updated_at,
    }
    if message_count is not None:
        data["message_count"] = message_count
    return data


def message_dict(message: BrainstormMessageModel) -> dict:
    return {
        "id": message.id,
        "session_id": message.session_id,
        "role": message.role,
        "content": message.content,
        "is_pinned": message.is_pinned,
        "is_edited": message.is_edited,
        "provider": message.provider,
        "model": message.model,
        "user": user_brief(message.user),
        "created_at": message.created_at,
    }


def diagram_dict(diagram: DiagramModel) -> dict:
    return {
        "id": diagram.id,
        "team_id": diagram.team_id,
        "project_id": diagram.project_id,
        "title": diagram.title,
        "description": diagram.description,
        "type": diagram.type,
        "data": diagram.data,
        "thumbnail": diagram.thumbnail,
        "creator": user_brief(diagram.creator),
        "created_at": diagram.created_at,
        "updated_at": diagram.updated_at,
    }


def sprint_dict(sprint: SprintPlanModel) -> dict:
    return {
        "id": sprint.id,
        "team_id": sprint.team_id,
        "project_id": sprint.project_id,
        "title": sprint.title,
        "goal": sprint.goal,
        "context": sprint.context,
        "deadline": sprint.deadline,
        "team_size": sprint.team_size,
        "status": sprint.status,
        "data": sprint.data,
        "creator": user_brief(sprint.creator),
        "created_at": sprint.created_at,
        "updated_at": sprint.updated_at,
    }


def event_dict(event: CalendarEventModel) -> dict:
    return {
        "id": event.id,
        "team_id": event.team_id,
        "title": event.title,
        "description": event.description,
        "type": event.type,
        "start_date": event.start_date,
        "end_date": event.end_date,
        "all_day": event.all_day,
        "color": event.color,
        "task_id": event.task_id,
        "sprint_id": event.sprint_id,
        "session_id": event.session_id,
        "creator": user_brief(event.creator),
        "created_at": event.created_at,
        "updated_at": event.updated_at,
    }


def note_dict(note: NoteModel) -> dict:
    return {
        "id": note.id,
        "team_id": note.team_id,
        "project_id": note.project_id,
        "title": note.title,
        "content": note.content,
        "version": note.version,
        "creator": user_brief(note.creator),
        "created_at": note.created_at,
        "updated_at": note.updated_at,
    }


def note_history_dict(entry: NoteHistoryModel) -> dict:
    return {
        "id": entry.id,
        "note_id": entry.note_id,
        "content": entry.content,
        "version": entry.version,
        "editor": user_brief(entry.editor),
        "created_at": entry.created_at,
    }


def discussion_dict(discussion: DiscussionModel, stats: dict | None = None) -> dict:
    data = {
        "id": discussion.id,
        "team_id": discussion.team_id,
        "title": discussion.title,
        "content": discussion.content,
        "category": discussion.category,
        "is_pinned": discussion.is_pinned,
        "is_closed": discussion.is_closed,
        "creator": user_brief(discussion.creator),
        "created_at": discussion.created_at,
        "updated_at": discussion.updated_at,
    }
    if stats is not None:
        data.update(stats)
    return data


def reply_dict(reply: DiscussionReplyModel) -> dict:
    return {
        "id": reply.id,
        "discussion_id": reply.discussion_id,
        "content": reply.content,
        "user": user_brief(reply.user),
        "created_at": reply.created_at,
        "updated_at": reply.updated_at,
    }


def goal_dict(goal: GoalModel) -> dict:
    return {
        "id": goal.id,
        "team_id": goal.team_id,
        "project_id": goal.project_id,
        "title": goal.title,
        "description": goal.description,
        "status": goal.status,
        "progress": goal.progress,
        "due_date": goal.due_date,
        "creator": user_brief(goal.creator),
        "created_at": goal.created_at,
        "updated_at": goal.updated_at,
    }


def notification_dict(notification: NotificationModel) -> dict:
    return {
        "id": notification.id,
        "team_id": notification.team_id,
        "title": notification.title,
        "message": notification.message,
        "type": notification.type,
        "link": notification.link,
        "read": notification.read,
        "created_at": notification.created_at,
    }


def chat_dict(chat: AIChatModel, message_count: int | None = None) -> dict:
    data = {
        "id": chat.id,
        "team_id": chat.team_id,
        "project_id": chat.project_id,
        "title": chat.title,
        "created_at": chat.created_at,
        "updated_at": chat.updated_at,
    }
    if message_count is not None:
        data["message_count"] = message_count
    return data


def chat_message_dict(message: AIChatMessageModel) -> dict:
    return {
        "id": message.id,
        "chat_id": message.chat_id,
        "role": message.role,
        "content": message.content,
        "provider": message.provider,
        "model": message.model,
        "created_at": message.created_at,
    }


def ai_key_dict(key: UserAIKeyModel) -> dict:
    """Stored provider key without the ciphertext."""
    return {
        "id": key.id,
        "provider": key.provider,
        "label": key.label,
        "is_active": key.is_active,
        "last_used_at": key.last_used_at,
        "created_at": key.created_at,
        "updated_at": key.updated_at,
    }


def usage_log_dict(log: AIUsageLogModel) -> dict:
    return {
        "id": log.id,
        "user_id": log.user_id,
        "provider": log.provider,
        "model": log.model,
        "input_tokens": log.input_tokens,
        "output_tokens": log.output_tokens,
        "cost": log.cost,
        "feature": log.feature,
        "created_at": log.created_at,
    }
