"""
Integration tests for the brainstorm collaboration websocket.

Token checks are patched out at the router; room state lives in a fresh
ConnectionManager per test.
"""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from starlette.websockets import WebSocketDisconnect, WebSocketState

from brainforge.api.routers import realtime
from brainforge.boundary.db.CRUD import brainstorm_session_crud
from brainforge.core.exceptions import UnauthorizedError
from brainforge.core.realtime import ConnectionManager, PresenceMember

from conftest import build_test_app, make_client, sample_user

ADA = PresenceMember(user_id="u1", user_name="Ada")
BOB = PresenceMember(user_id="u2", user_name="Bob")


class NullSession:
    async def __aenter__(self):
        return None

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture
def manager():
    fresh = ConnectionManager()
    with patch.object(realtime, "manager", fresh):
        yield fresh


def fake_socket() -> MagicMock:
    websocket = MagicMock()
    websocket.client_state = WebSocketState.CONNECTED
    websocket.send_json = AsyncMock()
    return websocket


class TestHandleEvent:
    """Test suite for event dispatch."""

    @pytest.fixture
    def can_join(self):
        with patch.object(realtime, "can_join", AsyncMock(return_value=True)) as can_join:
            yield can_join

    @pytest.fixture
    def sockets(self, manager, can_join):
        sockets = {"c1": fake_socket(), "c2": fake_socket()}
        for connection_id, websocket in sockets.items():
            manager.connect(connection_id, websocket)
        return sockets

    @pytest.mark.asyncio
    async def test_join_broadcasts_presence(self, manager, sockets):
        await realtime.handle_event("c1", ADA, "join-session", {"session_id": "s1"})
        await realtime.handle_event("c2", BOB, "join-session", "s1")

        last = sockets["c1"].send_json.call_args.args[0]
        assert last["event"] == "presence:members"
        assert [m["user_name"] for m in last["data"]] == ["Ada", "Bob"]

    @pytest.mark.asyncio
    async def test_relay_uses_payload_field_and_camel_case(self, manager, sockets):
        await realtime.handle_event("c1", ADA, "join-session", "s1")
        await realtime.handle_event("c2", BOB, "join-session", "s1")
        sockets["c1"].send_json.reset_mock()
        sockets["c2"].send_json.reset_mock()

        await realtime.handle_event("c1", ADA, "flow:node-delete", {"sessionId": "s1", "nodeId": "n7"})

        sockets["c1"].send_json.assert_not_called()
        sockets["c2"].send_json.assert_called_once_with({"event": "flow:node-delete", "data": "n7"})

    @pytest.mark.asyncio
    async def test_undo_relays_no_payload(self, manager, sockets):
        await realtime.handle_event("c1", ADA, "join-session", "s1")
        await realtime.handle_event("c2", BOB, "join-session", "s1")
        sockets["c2"].send_json.reset_mock()

        await realtime.handle_event("c1", ADA, "whiteboard:undo", {"session_id": "s1", "extra": 1})

        sockets["c2"].send_json.assert_called_once_with({"event": "whiteboard:undo", "data": None})

    @pytest.mark.asyncio
    async def test_leave_updates_presence(self, manager, sockets):
        await realtime.handle_event("c1", ADA, "join-session", "s1")
        await realtime.handle_event("c2", BOB, "join-session", "s1")

        await realtime.handle_event("c2", BOB, "leave-session", {"session_id": "s1"})

        last = sockets["c1"].send_json.call_args.args[0]
        assert [m["user_name"] for m in last["data"]] == ["Ada"]

    @pytest.mark.asyncio
    async def test_events_without_session_or_unknown_are_ignored(self, sockets):
        await realtime.handle_event("c1", ADA, "join-session", {})
        await realtime.handle_event("c1", ADA, "join-session", "s1")
        sockets["c1"].send_json.reset_mock()

        await realtime.handle_event("c1", ADA, "chat:shout", {"session_id": "s1"})

        sockets["c1"].send_json.assert_not_called()

    @pytest.mark.asyncio
    async def test_refused_join_sends_error(self, manager, sockets, can_join):
        await realtime.handle_event("c1", ADA, "join-session", "s1")
        can_join.return_value = False

        await realtime.handle_event("c2", BOB, "join-session", "s1")

        sockets["c2"].send_json.assert_called_once_with(
            {"event": "error", "data": {"code": "FORBIDDEN", "message": "Not a member of this session's team"}}
        )
        assert [m.user_name for m in manager.presence.members("s1")] == ["Ada"]
        assert can_join.call_args.args == ("u2", "s1")

    @pytest.mark.asyncio
    async def test_relay_requires_joined_room(self, manager, sockets):
        await realtime.handle_event("c1", ADA, "join-session", "s1")
        sockets["c1"].send_json.reset_mock()

        await realtime.handle_event("c2", BOB, "whiteboard:clear", {"session_id": "s1"})

        sockets["c1"].send_json.assert_not_called()


class TestCanJoin:
    """Test suite for the room membership check against the database."""

    @pytest.fixture
    async def brainstorm(self, test_async_db, test_session_factory, make_user, make_team):
        owner = await make_user(name="Owner")
        outsider = await make_user(name="Outsider")
        team = await make_team(owner)
        session = await brainstorm_session_crud.create(
            test_async_db, team_id=team.id, created_by=owner.id, title="Roadmap"
        )
        await test_async_db.commit()
        with patch.object(realtime, "get_async_session_factory", lambda: test_session_factory):
            yield session, owner, outsider

    @pytest.mark.asyncio
    async def test_team_member_can_join(self, brainstorm):
        session, owner, _ = brainstorm

        assert await realtime.can_join(str(owner.id), str(session.id)) is True

    @pytest.mark.asyncio
    async def test_outsider_cannot_join(self, brainstorm):
        session, _, outsider = brainstorm

        assert await realtime.can_join(str(outsider.id), str(session.id)) is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("session_id", ["not-a-uuid", str(uuid.uuid4())])
    async def test_unknown_session_cannot_be_joined(self, brainstorm, session_id):
        _, owner, _ = brainstorm

        assert await realtime.can_join(str(owner.id), session_id) is False


class TestSocketEndpoint:
    """Test suite for the websocket route itself."""

    @pytest.fixture
    def client(self, manager):
        user = sample_user()
        with patch.object(realtime, "get_async_session_factory", lambda: NullSession), patch.object(
            realtime, "authenticate_token", AsyncMock(return_value=user)
        ) as authenticate, patch.object(realtime, "can_join", AsyncMock(return_value=True)):
            yield make_client(build_test_app(realtime.router)), user, authenticate

    def test_missing_token_is_refused(self, client):
        test_client, _, _ = client

        with pytest.raises(WebSocketDisconnect) as exc_info:
            with test_client.websocket_connect("/ws/brainstorm"):
                pass

        assert exc_info.value.code == 1008

    def test_bad_token_is_refused(self, client):
        test_client, _, authenticate = client
        authenticate.side_effect = UnauthorizedError("Invalid or expired token")

        with pytest.raises(WebSocketDisconnect) as exc_info:
            with test_client.websocket_connect("/ws/brainstorm?token=garbage"):
                pass

        assert exc_info.value.code == 1008

    def test_join_and_invalid_json(self, client, manager):
        test_client, user, authenticate = client

        with test_client.websocket_connect("/ws/brainstorm?token=good") as websocket:
            websocket.send_text("{not json")
            error = websocket.receive_json()
            websocket.send_json({"event": "join-session", "data": {"session_id": "s1"}})
            presence = websocket.receive_json()

        assert authenticate.call_args.args[1] == "good"
        assert error == {"event": "error", "data": {"code": "INVALID_JSON", "message": "Invalid JSON format"}}
        assert presence["event"] == "presence:members"
        assert presence["data"] == [{"user_id": str(user.id), "user_name": user.name, "avatar_url": None}]
