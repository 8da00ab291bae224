"""
Task API endpoints.

Routes:
- GET/POST /teams/{team_id}/tasks - Filtered board listing, create
- POST /teams/{team_id}/tasks/reorder - Move tasks between columns and positions
- GET/POST /teams/{team_id}/tasks/labels - Team labels
- GET/PATCH/DELETE /teams/{team_id}/tasks/{task_id} - Detail, update, delete
- PUT /teams/{team_id}/tasks/{task_id}/assignees - Replace assignees
- GET/POST /teams/{team_id}/tasks/{task_id}/comments - Comments
- GET /teams/{team_id}/tasks/{task_id}/activities - Activity log
- GET /users/my-tasks - Open tasks assigned to the caller

Dependencies: brainforge.application.services.task_service, brainforge.models.task
System role: Kanban board HTTP API
"""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from brainforge.api.deps import get_current_user, require_team_member
from brainforge.api.deps.dependencies import get_task_service
from brainforge.application.services import TaskService
from brainforge.boundary.db.models import TaskPriority, TaskStatus, TeamMemberModel, UserModel
from brainforge.models.common import MessageData, SuccessResponse
from brainforge.models.task import (
    CreateCommentRequest,
    CreateLabelRequest,
    CreateTaskRequest,
    ReorderTasksRequest,
    TaskFilters,
    UpdateAssigneesRequest,
    UpdateTaskRequest,
)

router = APIRouter(prefix="/teams/{team_id}/tasks", tags=["tasks"])
users_router = APIRouter(prefix="/users", tags=["tasks"])


def task_filters(
    status_filter: list[TaskStatus] | None = Query(None, alias="status"),
    priority: list[TaskPriority] | None = Query(None),
    assignee_id: UUID | None = None,
    label_id: UUID | None = None,
    sprint_id: UUID | None = None,
    project_id: UUID | None = None,
    search: str | None = None,
    sort_by: Literal["priority", "due_date", "created_at", "title", "status"] | None = None,
    sort_order: Literal["asc", "desc"] = "asc",
) -> TaskFilters:
    """Collect board query parameters; ``status`` and ``priority`` repeat."""
    return TaskFilters(
        status=status_filter,
        priority=priority,
        assignee_id=assignee_id,
        label_id=label_id,
        sprint_id=sprint_id,
        project_id=project_id,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("")
async def list_tasks(
    team_id: UUID,
    filters: TaskFilters = Depends(task_filters),
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    return SuccessResponse(data=await task_service.list_tasks(team_id, filters.model_dump()))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    team_id: UUID,
    request: CreateTaskRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    """
    Create a task at the end of the board.

    Args:
        team_id: Owning team
        request: Task fields plus assignee and label ids
        membership: Caller's membership (injected guard)
        task_service: Injected TaskService

    Returns:
        SuccessResponse: Created task with creator, assignees and labels
    """
    return SuccessResponse(data=await task_service.create_task(team_id, membership.user_id, request.model_dump()))


@router.post("/reorder")
async def reorder_tasks(
    team_id: UUID,
    request: ReorderTasksRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    await task_service.reorder(team_id, [item.model_dump(exclude_none=True) for item in request.tasks])
    return SuccessResponse(data=MessageData(message="Tasks reordered"))


@router.get("/labels")
async def list_labels(
    team_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    return SuccessResponse(data=await task_service.list_labels(team_id))


@router.post("/labels", status_code=status.HTTP_201_CREATED)
async def create_label(
    team_id: UUID,
    request: CreateLabelRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    return SuccessResponse(data=await task_service.create_label(team_id, request.name, request.color))


@router.get("/{task_id}")
async def get_task(
    team_id: UUID,
    task_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    return SuccessResponse(data=await task_service.get_task(team_id, task_id))


@router.patch("/{task_id}")
async def update_task(
    team_id: UUID,
    task_id: UUID,
    request: UpdateTaskRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True)
    return SuccessResponse(data=await task_service.update_task(team_id, task_id, membership.user_id, changes))


@router.put("/{task_id}/assignees")
async def update_assignees(
    team_id: UUID,
    task_id: UUID,
    request: UpdateAssigneesRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    return SuccessResponse(data=await task_service.update_assignees(team_id, task_id, request.assignee_ids))


@router.delete("/{task_id}")
async def delete_task(
    team_id: UUID,
    task_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    await task_service.delete_task(team_id, task_id)
    return SuccessResponse(data=MessageData(message="Task deleted"))


@router.post("/{task_id}/comments", status_code=status.HTTP_201_CREATED)
async def add_comment(
    team_id: UUID,
    task_id: UUID,
    request: CreateCommentRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    return SuccessResponse(
        data=await task_service.add_comment(team_id, task_id, membership.user_id, request.content)
    )


@router.get("/{task_id}/comments")
async def list_comments(
    team_id: UUID,
    task_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    return SuccessResponse(data=await task_service.list_comments(team_id, task_id))


@router.get("/{task_id}/activities")
async def list_activities(
    team_id: UUID,
    task_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    return SuccessResponse(data=await task_service.list_activities(team_id, task_id))


@users_router.get("/my-tasks")
async def my_tasks(
    user: UserModel = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> SuccessResponse:
    """Open tasks assigned to the caller across all their teams."""
    return SuccessResponse(data=await task_service.my_tasks(user.id))
