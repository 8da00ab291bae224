"""
Realtime presence and room fan-out for brainstorm sessions.

Each brainstorm session id is a room. PresenceRegistry remembers who is in
which room per connection; ConnectionManager holds the live websockets and
broadcasts JSON events to a room. Both are in-memory and per process.

Dependencies: fastapi (WebSocket)
System role: Collaborative whiteboard/flow presence layer
"""

import logging
from dataclasses import asdict, dataclass

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresenceMember:
    """User shown in a room's presence list."""

    user_id: str
    user_name: str
    avatar_url: str | None = None


class PresenceRegistry:
    """Room -> {connection_id: member} map."""

    def __init__(self) -> None:
        self._rooms: dict[str, dict[str, PresenceMember]] = {}

    def join(self, session_id: str, connection_id: str, member: PresenceMember) -> list[PresenceMember]:
        """Add a connection to a room and return the room's members."""
        self._rooms.setdefault(session_id, {})[connection_id] = member
        return self.members(session_id)

    def leave(self, session_id: str, connection_id: str) -> list[PresenceMember]:
        """Remove a connection from a room. Empty rooms are forgotten."""
        room = self._rooms.get(session_id)
        if room is None:
            return []
        room.pop(connection_id, None)
        if not room:
            del self._rooms[session_id]
        return self.members(session_id)

    def members(self, session_id: str) -> list[PresenceMember]:
        return list(self._rooms.get(session_id, {}).values())

    def rooms_of(self, connection_id: str) -> list[str]:
        return [sid for sid, room in self._rooms.items() if connection_id in room]

    def drop_connection(self, connection_id: str) -> list[str]:
        """Remove a connection from every room; returns the rooms it left."""
        left = self.rooms_of(connection_id)
        for session_id in left:
            self.leave(session_id, connection_id)
        return left


class ConnectionManager:
    """Live websocket connections grouped by room."""

    def __init__(self) -> None:
        self.presence = PresenceRegistry()
        self._sockets: dict[str, WebSocket] = {}
        self._rooms: dict[str, set[str]] = {}

    def connect(self, connection_id: str, websocket: WebSocket) -> None:
        self._sockets[connection_id] = websocket

    def join(self, session_id: str, connection_id: str, member: PresenceMember) -> list[PresenceMember]:
        self._rooms.setdefault(session_id, set()).add(connection_id)
        return self.presence.join(session_id, connection_id, member)

    def leave(self, session_id: str, connection_id: str) -> list[PresenceMember]:
        room = self._rooms.get(session_id)
        if room is not None:
            room.discard(connection_id)
            if not room:
                del self._rooms[session_id]
        return self.presence.leave(session_id, connection_id)

    def disconnect(self, connection_id: str) -> list[str]:
        """Forget a connection; returns the rooms it was in."""
        self._sockets.pop(connection_id, None)
        left = self.presence.drop_connection(connection_id)
        for session_id in left:
            room = self._rooms.get(session_id)
            if room is not None:
                room.discard(connection_id)
                if not room:
                    del self._rooms[session_id]
        return left

    def in_room(self, session_id: str, connection_id: str) -> bool:
        return connection_id in self._rooms.get(session_id, ())

    async def send(self, connection_id: str, event: str, data: object) -> None:
        """Send ``{"event", "data"}`` to one connection; closed sockets are skipped."""
        websocket = self._sockets.get(connection_id)
        if websocket is None or websocket.client_state != WebSocketState.CONNECTED:
            return
        try:
            await websocket.send_json({"event": event, "data": data})
        except RuntimeError as e:
            logger.warning(
                "Send to closed socket",
                extra={"connection_id": connection_id, "event": event, "error": str(e)},
            )

    async def broadcast(
        self, session_id: str, event: str, data: object, exclude: str | None = None
    ) -> None:
        """Send ``{"event", "data"}`` to every connection in the room except ``exclude``."""
        for connection_id in list(self._rooms.get(session_id, ())):
            if connection_id != exclude:
                await self.send(connection_id, event, data)

    async def broadcast_presence(self, session_id: str) -> None:
        members = [asdict(m) for m in self.presence.members(session_id)]
        await self.broadcast(session_id, "presence:members", members)


manager = ConnectionManager()
