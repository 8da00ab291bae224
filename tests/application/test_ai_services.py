"""
Tests for bulk generation and AI key management.

The AI gateway is an AsyncMock handed to the services; persistence runs on
the in-memory database.
"""

import json
from unittest.mock import AsyncMock

import pytest

from brainforge.application.services import AIGenerateService, AIKeyService
from brainforge.application.services.ai_generate_service import normalize_types
from brainforge.boundary.db.CRUD import ai_usage_log_crud, brainstorm_message_crud, user_ai_key_crud
from brainforge.boundary.db.models import AIProvider, BrainstormMode, GoalStatus, TaskPriority, TaskStatus
from brainforge.core.ai import ChatResult
from brainforge.core.exceptions import AIParseError, ConflictError, NotFoundError, ValidationError
from brainforge.core.security import decrypt


def reply(content: str) -> ChatResult:
    return ChatResult(content=content, input_tokens=10, output_tokens=20, model="gpt-4o")


GENERATED = {
    "tasks": [
        {"title": "Draft launch checklist", "description": "Steps", "priority": "high", "status": "todo"},
        {"title": "Book venue", "priority": "whenever"},
        {"description": "No title, skipped"},
    ],
    "brainstorm": {"title": "Launch angles", "mode": "debate", "initialMessage": "Where do we start?"},
    "notes": [{"title": "Launch brief", "content": "# Brief"}],
    "goals": [{"title": "Hit 100 signups", "status": "in_progress", "progress": 140, "dueDate": "2026-03-01"}],
}


@pytest.fixture
async def owner_team(make_user, make_team):
    owner = await make_user()
    team = await make_team(owner)
    return owner, team


@pytest.fixture
def ai():
    return AsyncMock()


class TestNormalizeTypes:
    """Test suite for requested kind normalization."""

    def test_lowercases_and_dedupes(self):
        assert normalize_types([" Tasks", "tasks", "GOALS", "widgets"]) == ["tasks", "goals"]

    def test_nothing_valid(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_types(["widgets", ""])

        assert exc_info.value.status_code == 400
        assert exc_info.value.details["field"] == "generate_types"


class TestGenerate:
    """Test suite for AIGenerateService.generate."""

    @pytest.mark.asyncio
    async def test_generates_everything_requested(self, test_async_db, ai, owner_team):
        owner, team = owner_team
        ai.chat.return_value = reply("```json\n" + json.dumps(GENERATED) + "\n```")
        service = AIGenerateService(test_async_db, ai=ai)

        result = await service.generate(
            team.id, owner.id, "openai", "gpt-4o", "Plan our launch", ["tasks", "brainstorm", "notes", "goals"]
        )

        assert result["summary"] == {"tasks": 2, "brainstorm": 1, "notes": 1, "goals": 1}
        first, second = result["created"]["tasks"]
        assert (first["priority"], first["status"]) == (TaskPriority.HIGH, TaskStatus.TODO)
        assert second["priority"] == TaskPriority.MEDIUM
        assert second["order_index"] > first["order_index"]

        session = result["created"]["brainstorm"]
        assert session["mode"] == BrainstormMode.DEBATE
        assert session["context"] == "Plan our launch"
        messages = await brainstorm_message_crud.list_for_session(test_async_db, session["id"])
        assert [m.content for m in messages] == ["Where do we start?"]

        goal = result["created"]["goals"][0]
        assert goal["status"] == GoalStatus.IN_PROGRESS
        assert goal["progress"] == 100
        assert goal["due_date"].year == 2026

        ai.chat.assert_called_once()
        assert ai.chat.call_args.kwargs["feature"] == "ai-generate"

    @pytest.mark.asyncio
    async def test_only_requested_kinds_are_stored(self, test_async_db, ai, owner_team):
        owner, team = owner_team
        ai.chat.return_value = reply(json.dumps(GENERATED))
        service = AIGenerateService(test_async_db, ai=ai)

        result = await service.generate(team.id, owner.id, "openai", "gpt-4o", "Plan", ["notes"])

        assert result["summary"] == {"tasks": 0, "brainstorm": 0, "notes": 1, "goals": 0}
        assert result["generated"] == GENERATED

    @pytest.mark.asyncio
    async def test_repairs_broken_json_once(self, test_async_db, ai, owner_team):
        owner, team = owner_team
        ai.chat.side_effect = [
            reply("Sure! Here are your notes: {notes: [oops"),
            reply(json.dumps({"notes": [{"title": "Fixed"}]})),
        ]
        service = AIGenerateService(test_async_db, ai=ai)

        result = await service.generate(team.id, owner.id, "openai", "gpt-4o", "Plan", ["notes"])

        assert [n["title"] for n in result["created"]["notes"]] == ["Fixed"]
        assert ai.chat.call_count == 2

    @pytest.mark.asyncio
    async def test_unrepairable_reply(self, test_async_db, ai, owner_team):
        owner, team = owner_team
        ai.chat.side_effect = [reply("not json"), reply("still not json")]
        service = AIGenerateService(test_async_db, ai=ai)

        with pytest.raises(AIParseError) as exc_info:
            await service.generate(team.id, owner.id, "openai", "gpt-4o", "Plan", ["tasks"])

        assert exc_info.value.status_code == 422
        assert exc_info.value.details == {"raw": "not json"}
        assert ai.chat.call_count == 2

    @pytest.mark.asyncio
    async def test_invalid_types_skip_the_model(self, test_async_db, ai, owner_team):
        owner, team = owner_team
        service = AIGenerateService(test_async_db, ai=ai)

        with pytest.raises(ValidationError):
            await service.generate(team.id, owner.id, "openai", "gpt-4o", "Plan", ["widgets"])

        ai.chat.assert_not_called()


class TestAIKeys:
    """Test suite for AIKeyService."""

    @pytest.mark.asyncio
    async def test_add_key_is_validated_and_encrypted(self, test_async_db, ai, make_user):
        user = await make_user()
        ai.validate_key.return_value = True
        service = AIKeyService(test_async_db, ai=ai)

        key = await service.add_key(user.id, AIProvider.OPENAI, "sk-live-123")

        assert key["label"] == "OPENAI"
        assert key["is_active"] is True
        assert "encrypted_key" not in key
        ai.validate_key.assert_called_once_with("OPENAI", "sk-live-123")
        stored = await user_ai_key_crud.get_for_user(test_async_db, key["id"], user.id)
        assert stored.encrypted_key != "sk-live-123"
        assert decrypt(stored.encrypted_key) == "sk-live-123"

    @pytest.mark.asyncio
    async def test_rejected_key_is_not_stored(self, test_async_db, ai, make_user):
        user = await make_user()
        ai.validate_key.return_value = False
        service = AIKeyService(test_async_db, ai=ai)

        with pytest.raises(ValidationError, match="rejected by the provider"):
            await service.add_key(user.id, AIProvider.GROQ, "gsk-bad")

        assert await service.list_keys(user.id) == []

    @pytest.mark.asyncio
    async def test_one_key_per_provider(self, test_async_db, ai, make_user):
        user = await make_user()
        ai.validate_key.return_value = True
        service = AIKeyService(test_async_db, ai=ai)
        await service.add_key(user.id, AIProvider.CLAUDE, "sk-ant-1")

        with pytest.raises(ConflictError) as exc_info:
            await service.add_key(user.id, AIProvider.CLAUDE, "sk-ant-2")

        assert exc_info.value.code == "KEY_EXISTS"

    @pytest.mark.asyncio
    async def test_provider_without_adapter_is_stored_unchecked(self, test_async_db, ai, make_user):
        user = await make_user()
        service = AIKeyService(test_async_db, ai=ai)

        key = await service.add_key(user.id, AIProvider.MISTRAL, "mistral-key", label="Side project")

        assert key["label"] == "Side project"
        ai.validate_key.assert_not_called()

    @pytest.mark.asyncio
    async def test_validate_records_outcome(self, test_async_db, ai, make_user):
        user = await make_user()
        ai.validate_key.return_value = True
        service = AIKeyService(test_async_db, ai=ai)
        key = await service.add_key(user.id, AIProvider.OPENAI, "sk-live-123")

        ai.validate_key.return_value = False
        result = await service.validate(user.id, key["id"])

        assert result == {"valid": False, "provider": AIProvider.OPENAI}
        assert (await service.list_keys(user.id))[0]["is_active"] is False

    @pytest.mark.asyncio
    async def test_keys_are_private(self, test_async_db, ai, make_user):
        owner = await make_user()
        intruder = await make_user()
        ai.validate_key.return_value = True
        service = AIKeyService(test_async_db, ai=ai)
        key = await service.add_key(owner.id, AIProvider.OPENAI, "sk-live-123")

        with pytest.raises(NotFoundError, match="API key not found"):
            await service.delete_key(intruder.id, key["id"])

        await service.delete_key(owner.id, key["id"])
        assert await service.list_keys(owner.id) == []

    @pytest.mark.asyncio
    async def test_new_secret_reactivates_key(self, test_async_db, ai, make_user):
        user = await make_user()
        ai.validate_key.return_value = True
        service = AIKeyService(test_async_db, ai=ai)
        key = await service.add_key(user.id, AIProvider.OPENAI, "sk-old")
        await service.update_key(user.id, key["id"], {"is_active": False})

        updated = await service.update_key(user.id, key["id"], {"api_key": "sk-new"})

        assert updated["is_active"] is True
        stored = await user_ai_key_crud.get_for_user(test_async_db, key["id"], user.id)
        assert decrypt(stored.encrypted_key) == "sk-new"

    @pytest.mark.asyncio
    async def test_usage_totals(self, test_async_db, ai, make_user):
        user = await make_user()
        for provider, cost in ((AIProvider.OPENAI, 0.5), (AIProvider.OPENAI, 0.25), (AIProvider.GROQ, 0.0)):
            await ai_usage_log_crud.create(
                test_async_db,
                user_id=user.id,
                provider=provider,
                model="m",
                input_tokens=100,
                output_tokens=50,
                cost=cost,
                feature="chat",
            )
        service = AIKeyService(test_async_db, ai=ai)

        usage = await service.usage(user.id)

        assert usage["total_requests"] == 3
        assert usage["total_tokens"] == 450
        assert usage["total_cost"] == pytest.approx(0.75)
        assert usage["by_provider"]["OPENAI"] == {"requests": 2, "tokens": 300, "cost": pytest.approx(0.75)}
        assert len(usage["recent_logs"]) == 3
