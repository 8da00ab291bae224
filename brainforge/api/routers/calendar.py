"""
Calendar API endpoints.

Routes:
- GET/POST /teams/{team_id}/calendar - Events overlapping [start, end], create
- GET /teams/{team_id}/calendar/feed - Events merged with task and sprint deadlines
- GET/PATCH/DELETE /teams/{team_id}/calendar/{event_id} - Detail, update, delete

Dependencies: brainforge.application.services.calendar_service
System role: Calendar HTTP API
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, status

from brainforge.api.deps import require_team_member
from brainforge.api.deps.dependencies import get_calendar_service
from brainforge.application.services import CalendarService
from brainforge.boundary.db.models import TeamMemberModel
from brainforge.models.calendar import CreateEventRequest, UpdateEventRequest
from brainforge.models.common import MessageData, SuccessResponse

router = APIRouter(prefix="/teams/{team_id}/calendar", tags=["calendar"])


@router.get("")
async def list_events(
    team_id: UUID,
    start: datetime | None = None,
    end: datetime | None = None,
    membership: TeamMemberModel = Depends(require_team_member()),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> SuccessResponse:
    return SuccessResponse(data=await calendar_service.list_events(team_id, start, end))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    team_id: UUID,
    request: CreateEventRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> SuccessResponse:
    return SuccessResponse(
        data=await calendar_service.create_event(team_id, membership.user_id, request.model_dump())
    )


@router.get("/feed")
async def calendar_feed(
    team_id: UUID,
    start: datetime,
    end: datetime,
    membership: TeamMemberModel = Depends(require_team_member()),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> SuccessResponse:
    """Calendar view data: events, task due dates and sprint deadlines in the window."""
    return SuccessResponse(data=await calendar_service.feed(team_id, start, end))


@router.get("/{event_id}")
async def get_event(
    team_id: UUID,
    event_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> SuccessResponse:
    return SuccessResponse(data=await calendar_service.get_event(team_id, event_id))


@router.patch("/{event_id}")
async def update_event(
    team_id: UUID,
    event_id: UUID,
    request: UpdateEventRequest,
    membership: TeamMemberModel = Depends(require_team_member()),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True)
    return SuccessResponse(data=await calendar_service.update_event(team_id, event_id, changes))


@router.delete("/{event_id}")
async def delete_event(
    team_id: UUID,
    event_id: UUID,
    membership: TeamMemberModel = Depends(require_team_member()),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> SuccessResponse:
    await calendar_service.delete_event(team_id, event_id)
    return SuccessResponse(data=MessageData(message="Event deleted"))
