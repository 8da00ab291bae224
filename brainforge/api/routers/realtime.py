"""
Realtime collaboration websocket.

Routes: WS /ws/brainstorm?token=<access token>

Client sends ``{"event": ..., "data": ...}``:
    join-session     {"session_id": "..."} or the bare id
    leave-session    "..." or {"session_id": "..."}
    whiteboard:draw  {"session_id", "element"}
    whiteboard:undo  {"session_id"}
    whiteboard:clear {"session_id"}
    flow:node-add    {"session_id", "node"}
    flow:node-update {"session_id", "node"}
    flow:node-delete {"session_id", "node_id"}
    flow:edge-add    {"session_id", "edge"}
    flow:edge-delete {"session_id", "edge_id"}

Only members of the session's team can join its room, and only joined
sockets can relay. Server sends the same events to the other sockets in the
room, plus ``presence:members`` after every join, leave and disconnect.

Dependencies: fastapi, brainforge.core.realtime, brainforge.api.deps
System role: Whiteboard and flow canvas synchronisation
"""

import json
import logging
import uuid

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from brainforge.api.deps import authenticate_token
from brainforge.boundary.db import get_async_session_factory
from brainforge.boundary.db.CRUD import brainstorm_session_crud, team_member_crud
from brainforge.core.exceptions import UnauthorizedError
from brainforge.core.realtime import PresenceMember, manager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["realtime"])

# event -> payload field relayed to the room (None relays no payload)
RELAYED_EVENTS: dict[str, str | None] = {
    "whiteboard:draw": "element",
    "whiteboard:undo": None,
    "whiteboard:clear": None,
    "flow:node-add": "node",
    "flow:node-update": "node",
    "flow:node-delete": "node_id",
    "flow:edge-add": "edge",
    "flow:edge-delete": "edge_id",
}

CAMEL_KEYS = {"session_id": "sessionId", "node_id": "nodeId", "edge_id": "edgeId"}


def field(data: object, name: str) -> object:
    """Read ``name`` from a payload, accepting the camelCase spelling too."""
    if not isinstance(data, dict):
        return None
    if name in data:
        return data[name]
    return data.get(CAMEL_KEYS.get(name, name))


def session_of(data: object) -> str | None:
    if isinstance(data, str):
        return data or None
    session_id = field(data, "session_id")
    return str(session_id) if session_id else None


async def can_join(user_id: str, session_id: str) -> bool:
    """True when the brainstorm session exists and the user belongs to its team."""
    try:
        session_uuid = uuid.UUID(session_id)
    except ValueError:
        return False
    async with get_async_session_factory()() as db:
        brainstorm = await brainstorm_session_crud.get_by_id(db, session_uuid)
        if brainstorm is None:
            return False
        membership = await team_member_crud.get_membership(db, brainstorm.team_id, uuid.UUID(user_id))
    return membership is not None


async def handle_event(connection_id: str, member: PresenceMember, event: str, data: object) -> None:
    """Apply one client event to the rooms."""
    session_id = session_of(data)
    if session_id is None:
        logger.debug("Realtime event without session", extra={"event": event})
        return

    if event == "join-session":
        if not await can_join(member.user_id, session_id):
            logger.info("Realtime join refused", extra={"session_id": session_id, "user_id": member.user_id})
            await manager.send(
                connection_id, "error", {"code": "FORBIDDEN", "message": "Not a member of this session's team"}
            )
            return
        manager.join(session_id, connection_id, member)
        await manager.broadcast_presence(session_id)
    elif event == "leave-session":
        manager.leave(session_id, connection_id)
        await manager.broadcast_presence(session_id)
    elif event in RELAYED_EVENTS:
        if not manager.in_room(session_id, connection_id):
            logger.debug("Relay from outside the room", extra={"event": event, "session_id": session_id})
            return
        payload_field = RELAYED_EVENTS[event]
        payload = field(data, payload_field) if payload_field else None
        await manager.broadcast(session_id, event, payload, exclude=connection_id)
    else:
        logger.debug("Unknown realtime event", extra={"event": event})


@router.websocket("/ws/brainstorm")
async def brainstorm_socket(websocket: WebSocket, token: str | None = None) -> None:
    """
    Collaborative canvas socket for brainstorm sessions.

    The access token travels in the query string; invalid tokens close the
    socket with 1008 before it is accepted.
    """
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    try:
        async with get_async_session_factory()() as db:
            user = await authenticate_token(db, token)
    except UnauthorizedError as e:
        logger.info("Realtime connection rejected", extra={"error": e.message})
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    connection_id = uuid.uuid4().hex
    member = PresenceMember(user_id=str(user.id), user_name=user.name, avatar_url=user.avatar_url)
    manager.connect(connection_id, websocket)
    logger.info("Realtime connection opened", extra={"connection_id": connection_id, "user_id": member.user_id})

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                await websocket.send_json(
                    {"event": "error", "data": {"code": "INVALID_JSON", "message": "Invalid JSON format"}}
                )
                continue
            if not isinstance(message, dict) or not isinstance(message.get("event"), str):
                continue
            await handle_event(connection_id, member, message["event"], message.get("data"))
    except WebSocketDisconnect:
        logger.info("Realtime connection closed", extra={"connection_id": connection_id})
    finally:
        for session_id in manager.disconnect(connection_id):
            await manager.broadcast_presence(session_id)
