"""
Tests for the brainstorm router.

Route wiring is tested against a mocked BrainstormService. The SSE
generator is exercised end to end on the in-memory database with a fake
AI gateway.
"""

import json
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from brainforge.api.deps.dependencies import get_brainstorm_service
from brainforge.api.routers import brainstorm
from brainforge.boundary.db.CRUD import brainstorm_message_crud, brainstorm_session_crud
from brainforge.boundary.db.models import BrainstormMode, MessageRole
from brainforge.core.exceptions import NotFoundError
from brainforge.models.brainstorm import StreamMessageRequest

from conftest import build_test_app, make_client, override_auth


@pytest.fixture
def mock_brainstorm_service():
    return AsyncMock()


@pytest.fixture
def client(mock_brainstorm_service, current_user, team_id):
    app = build_test_app(brainstorm.router)
    app.dependency_overrides[get_brainstorm_service] = lambda: mock_brainstorm_service
    override_auth(app, current_user, team_id)
    return make_client(app)


def test_create_session(client, mock_brainstorm_service, current_user, team_id):
    mock_brainstorm_service.create_session.return_value = {"title": "Roadmap", "message_count": 0}

    response = client.post(f"/teams/{team_id}/brainstorm", json={"title": "Roadmap", "mode": "DEBATE"})

    assert response.status_code == 201
    called_team, user_id, data = mock_brainstorm_service.create_session.call_args.args
    assert (called_team, user_id) == (team_id, current_user.id)
    assert data["mode"] == BrainstormMode.DEBATE
    assert data["project_id"] is None


def test_pin_is_team_scoped(client, mock_brainstorm_service, team_id):
    message_id = uuid4()
    mock_brainstorm_service.set_pinned.return_value = {"id": str(message_id), "is_pinned": True}

    pinned = client.patch(f"/teams/{team_id}/brainstorm/messages/{message_id}/pin")
    unpinned = client.patch(f"/teams/{team_id}/brainstorm/messages/{message_id}/unpin")

    assert pinned.status_code == 200
    assert unpinned.status_code == 200
    assert mock_brainstorm_service.set_pinned.call_args_list[0].args == (team_id, message_id, True)
    assert mock_brainstorm_service.set_pinned.call_args_list[1].args == (team_id, message_id, False)


def test_export_markdown(client, mock_brainstorm_service, team_id):
    session_id = uuid4()
    mock_brainstorm_service.export.return_value = "# Roadmap\n"

    response = client.get(f"/teams/{team_id}/brainstorm/{session_id}/export")

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/markdown; charset=utf-8"
    assert response.headers["content-disposition"] == f'attachment; filename="brainstorm-{session_id}.md"'
    assert response.text == "# Roadmap\n"


def test_canvas_update_keeps_absent_keys(client, mock_brainstorm_service, team_id):
    session_id = uuid4()
    mock_brainstorm_service.update_canvas.return_value = {"id": str(session_id)}

    response = client.patch(
        f"/teams/{team_id}/brainstorm/{session_id}/canvas", json={"flow_data": {"nodes": [], "edges": []}}
    )

    assert response.status_code == 200
    mock_brainstorm_service.update_canvas.assert_called_once_with(
        team_id, session_id, {"flow_data": {"nodes": [], "edges": []}}
    )


def test_stream_route_returns_event_stream(client, mock_brainstorm_service, current_user, team_id):
    session_id = uuid4()
    seen = {}

    async def fake_events(team_id_, session_id_, user_id, request):
        seen.update(team_id=team_id_, session_id=session_id_, user_id=user_id, request=request)
        yield brainstorm.sse_event({"content": "Hi"})
        yield "data: [DONE]\n\n"

    with patch.object(brainstorm, "stream_reply_events", fake_events):
        response = client.post(
            f"/teams/{team_id}/brainstorm/{session_id}/stream",
            json={"provider": "openai", "model": "gpt-4o", "content": "Ideas?"},
        )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.headers["cache-control"] == "no-cache"
    assert response.text == 'data: {"content": "Hi"}\n\ndata: [DONE]\n\n'
    assert seen["user_id"] == current_user.id
    assert seen["request"].content == "Ideas?"


def test_stream_route_checks_session_first(client, mock_brainstorm_service, team_id):
    mock_brainstorm_service.get_session_model.side_effect = NotFoundError("Brainstorm session not found")

    response = client.post(
        f"/teams/{team_id}/brainstorm/{uuid4()}/stream", json={"provider": "openai", "model": "gpt-4o"}
    )

    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Brainstorm session not found"


class FakeStreamingAI:
    """Stands in for the AI gateway; replays fixed chunks."""

    chunks = ("Hello", " team")
    error: Exception | None = None

    def __init__(self, db):
        self.db = db

    async def stream(self, user_id, provider, model, messages, options=None):
        if self.error is not None:
            raise self.error
        for chunk in self.chunks:
            yield chunk


async def collect(generator) -> list[str]:
    return [line async for line in generator]


class TestStreamReplyEvents:
    """Test suite for the SSE generator on a real session."""

    @pytest.fixture
    async def session_setup(self, test_async_db, test_session_factory, make_user, make_team):
        user = await make_user(name="Ada")
        team = await make_team(user)
        session = await brainstorm_session_crud.create(
            test_async_db, team_id=team.id, created_by=user.id, title="Launch plan"
        )
        await test_async_db.commit()
        with patch.object(brainstorm, "get_async_session_factory", lambda: test_session_factory):
            yield user, team, session

    @pytest.mark.asyncio
    async def test_streams_chunks_and_persists_reply(self, session_setup, test_async_db):
        user, team, session = session_setup
        request = StreamMessageRequest(provider="openai", model="gpt-4o", content="Ideas?")

        with patch("brainforge.application.services.brainstorm_service.AIService", FakeStreamingAI):
            lines = await collect(brainstorm.stream_reply_events(team.id, session.id, user.id, request))

        assert lines == [
            'data: {"content": "Hello"}\n\n',
            'data: {"content": " team"}\n\n',
            "data: [DONE]\n\n",
        ]
        messages = await brainstorm_message_crud.list_for_session(test_async_db, session.id)
        by_role = {m.role: m for m in messages}
        assert len(messages) == 2
        assert by_role[MessageRole.USER].content == "Ideas?"
        assert by_role[MessageRole.ASSISTANT].content == "Hello team"
        assert by_role[MessageRole.ASSISTANT].provider == "OPENAI"

    @pytest.mark.asyncio
    async def test_failure_is_reported_in_band_and_rolled_back(self, session_setup, test_async_db):
        user, team, session = session_setup
        request = StreamMessageRequest(provider="openai", model="gpt-4o", content="Ideas?")

        class NoKeyAI(FakeStreamingAI):
            error = NotFoundError("No valid API key found for OPENAI. Please add one in settings.")

        with patch("brainforge.application.services.brainstorm_service.AIService", NoKeyAI):
            lines = await collect(brainstorm.stream_reply_events(team.id, session.id, user.id, request))

        assert len(lines) == 1
        assert json.loads(lines[0][len("data: "):]) == {
            "error": "No valid API key found for OPENAI. Please add one in settings."
        }
        assert await brainstorm_message_crud.list_for_session(test_async_db, session.id) == []
