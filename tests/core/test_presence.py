"""
Tests for the realtime presence registry and room broadcasting.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.websockets import WebSocketState

from brainforge.core.realtime import ConnectionManager, PresenceMember
from brainforge.core.realtime.presence import PresenceRegistry

ADA = PresenceMember(user_id="u1", user_name="Ada")
BOB = PresenceMember(user_id="u2", user_name="Bob", avatar_url="https://img/bob.png")


def fake_socket(state: WebSocketState = WebSocketState.CONNECTED) -> MagicMock:
    websocket = MagicMock()
    websocket.client_state = state
    websocket.send_json = AsyncMock()
    return websocket


class TestPresenceRegistry:
    """Test suite for room membership bookkeeping."""

    def test_join_and_leave(self):
        registry = PresenceRegistry()

        assert registry.join("s1", "c1", ADA) == [ADA]
        assert registry.join("s1", "c2", BOB) == [ADA, BOB]
        assert registry.leave("s1", "c1") == [BOB]
        assert registry.leave("s1", "c2") == []
        assert registry.rooms_of("c2") == []

    def test_leave_unknown_room(self):
        assert PresenceRegistry().leave("nowhere", "c1") == []

    def test_same_user_on_two_connections(self):
        registry = PresenceRegistry()
        registry.join("s1", "c1", ADA)
        registry.join("s1", "c2", ADA)

        assert registry.leave("s1", "c1") == [ADA]

    def test_drop_connection_leaves_every_room(self):
        registry = PresenceRegistry()
        registry.join("s1", "c1", ADA)
        registry.join("s2", "c1", ADA)
        registry.join("s2", "c2", BOB)

        assert sorted(registry.drop_connection("c1")) == ["s1", "s2"]
        assert registry.members("s1") == []
        assert registry.members("s2") == [BOB]


class TestConnectionManager:
    """Test suite for fan-out to live sockets."""

    @pytest.fixture
    def room(self):
        manager = ConnectionManager()
        sockets = {"c1": fake_socket(), "c2": fake_socket(), "c3": fake_socket()}
        for connection_id, websocket in sockets.items():
            manager.connect(connection_id, websocket)
        manager.join("s1", "c1", ADA)
        manager.join("s1", "c2", BOB)
        manager.join("s2", "c3", BOB)
        return manager, sockets

    @pytest.mark.asyncio
    async def test_broadcast_excludes_sender_and_other_rooms(self, room):
        manager, sockets = room

        await manager.broadcast("s1", "flow:node-add", {"id": "n1"}, exclude="c1")

        sockets["c1"].send_json.assert_not_called()
        sockets["c2"].send_json.assert_called_once_with({"event": "flow:node-add", "data": {"id": "n1"}})
        sockets["c3"].send_json.assert_not_called()

    @pytest.mark.asyncio
    async def test_broadcast_skips_closed_sockets(self, room):
        manager, sockets = room
        sockets["c2"].client_state = WebSocketState.DISCONNECTED

        await manager.broadcast("s1", "whiteboard:clear", None)

        sockets["c1"].send_json.assert_called_once()
        sockets["c2"].send_json.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_failure_does_not_stop_fan_out(self, room):
        manager, sockets = room
        sockets["c1"].send_json.side_effect = RuntimeError("socket closed")

        await manager.broadcast("s1", "whiteboard:undo", None)

        sockets["c2"].send_json.assert_called_once()

    @pytest.mark.asyncio
    async def test_presence_payload(self, room):
        manager, sockets = room

        await manager.broadcast_presence("s1")

        sockets["c2"].send_json.assert_called_once_with(
            {
                "event": "presence:members",
                "data": [
                    {"user_id": "u1", "user_name": "Ada", "avatar_url": None},
                    {"user_id": "u2", "user_name": "Bob", "avatar_url": "https://img/bob.png"},
                ],
            }
        )

    @pytest.mark.asyncio
    async def test_disconnect_reports_rooms(self, room):
        manager, sockets = room

        assert manager.disconnect("c2") == ["s1"]

        await manager.broadcast("s1", "whiteboard:clear", None)
        sockets["c2"].send_json.assert_not_called()
        assert manager.presence.members("s1") == [ADA]

    @pytest.mark.asyncio
    async def test_send_targets_one_connection(self, room):
        manager, sockets = room

        await manager.send("c3", "error", {"code": "FORBIDDEN"})
        await manager.send("gone", "error", {"code": "FORBIDDEN"})

        sockets["c3"].send_json.assert_called_once_with({"event": "error", "data": {"code": "FORBIDDEN"}})
        sockets["c1"].send_json.assert_not_called()

    def test_in_room(self, room):
        manager, _ = room

        assert manager.in_room("s1", "c1")
        assert not manager.in_room("s1", "c3")
        manager.leave("s1", "c1")
        assert not manager.in_room("s1", "c1")
