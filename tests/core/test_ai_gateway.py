"""
Tests for the AI gateway: provider registry, cost metering, key handling.

Vendor SDKs are replaced by LangChain's fake chat model behind a test
adapter registered under the OPENAI name.
"""

from unittest.mock import patch

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from brainforge.boundary.db.CRUD import ai_usage_log_crud, user_ai_key_crud
from brainforge.boundary.db.models import AIProvider
from brainforge.core.ai import AIService, ChatMessage, ModelDef, get_all_models, get_provider, is_auth_error
from brainforge.core.ai.gateway import compute_cost
from brainforge.core.ai.providers import PROVIDERS, BaseProvider
from brainforge.core.exceptions import NotFoundError, ValidationError
from brainforge.core.security import encrypt


class AuthenticationError(Exception):
    pass


class FakeProvider(BaseProvider):
    """Adapter answering from a fixed list of replies."""

    name = "OPENAI"
    models = [
        ModelDef(id="fake-1", name="Fake", context_window=1000, cost_per_1k_input=1.0, cost_per_1k_output=2.0)
    ]

    def __init__(self, responses=("Hello there",), error: Exception | None = None):
        self.responses = list(responses)
        self.error = error
        self.seen_keys = []

    def build_chat_model(self, api_key, model, options, streaming=False):
        self.seen_keys.append(api_key)
        if self.error is not None:
            raise self.error
        return FakeListChatModel(responses=self.responses)

    async def validate_key(self, api_key):
        return api_key.startswith("sk-")


MESSAGES = [ChatMessage(role="system", content="Be brief"), ChatMessage(role="user", content="Hi")]


class TestHelpers:
    """Test suite for module-level gateway helpers."""

    def test_is_auth_error(self):
        class VendorError(Exception):
            status_code = 401

        assert is_auth_error(VendorError("nope"))
        assert is_auth_error(AuthenticationError("bad key"))
        assert is_auth_error(RuntimeError("400 API key not valid. Please pass a valid API key."))
        assert not is_auth_error(RuntimeError("rate limited"))

    def test_compute_cost(self):
        model = ModelDef(id="m", name="M", context_window=1, cost_per_1k_input=0.005, cost_per_1k_output=0.015)

        assert compute_cost(model, 2000, 1000) == pytest.approx(0.025)
        assert compute_cost(None, 2000, 1000) == 0.0

    def test_get_provider_is_case_insensitive(self):
        assert get_provider("claude").name == "CLAUDE"

    def test_get_provider_unknown(self):
        with pytest.raises(ValidationError, match="Unsupported AI provider: mistral") as exc_info:
            get_provider("mistral")

        assert exc_info.value.status_code == 400

    def test_catalog_covers_every_adapter(self):
        catalog = get_all_models()

        assert set(catalog) == set(PROVIDERS)
        assert all(catalog[name] for name in catalog)


class TestAIService:
    """Test suite for keyed, metered calls."""

    @pytest.fixture
    async def keyed_user(self, make_user, test_async_db):
        user = await make_user()
        await user_ai_key_crud.create(
            test_async_db,
            user_id=user.id,
            provider=AIProvider.OPENAI,
            encrypted_key=encrypt("sk-secret"),
            label="OPENAI",
            is_active=True,
        )
        return user

    @pytest.mark.asyncio
    async def test_chat_meters_usage(self, test_async_db, keyed_user):
        provider = FakeProvider()
        service = AIService(test_async_db)

        with patch.dict(PROVIDERS, {"OPENAI": provider}):
            result = await service.chat(keyed_user.id, "openai", "fake-1", MESSAGES, feature="brainstorm")

        assert result.content == "Hello there"
        assert provider.seen_keys == ["sk-secret"]
        logs = await ai_usage_log_crud.list_where(test_async_db)
        assert len(logs) == 1
        assert (logs[0].provider, logs[0].model, logs[0].feature) == (AIProvider.OPENAI, "fake-1", "brainstorm")
        key = await user_ai_key_crud.get_for_provider(test_async_db, keyed_user.id, AIProvider.OPENAI)
        assert key.last_used_at is not None

    @pytest.mark.asyncio
    async def test_stream_yields_chunks(self, test_async_db, keyed_user):
        service = AIService(test_async_db)

        with patch.dict(PROVIDERS, {"OPENAI": FakeProvider(responses=("abc",))}):
            chunks = [chunk async for chunk in service.stream(keyed_user.id, "OPENAI", "fake-1", MESSAGES)]

        assert "".join(chunks) == "abc"

    @pytest.mark.asyncio
    async def test_missing_key(self, test_async_db, make_user):
        user = await make_user()
        service = AIService(test_async_db)

        with pytest.raises(NotFoundError, match="No valid API key found for GROQ"):
            await service.chat(user.id, "groq", "llama", MESSAGES)

    @pytest.mark.asyncio
    async def test_auth_failure_deactivates_key(self, test_async_db, keyed_user):
        service = AIService(test_async_db)

        with patch.dict(PROVIDERS, {"OPENAI": FakeProvider(error=AuthenticationError("Incorrect API key"))}):
            with pytest.raises(AuthenticationError):
                await service.chat(keyed_user.id, "openai", "fake-1", MESSAGES)

        key = await user_ai_key_crud.get_for_provider(test_async_db, keyed_user.id, AIProvider.OPENAI)
        assert key.is_active is False
        with pytest.raises(NotFoundError):
            await service.chat(keyed_user.id, "openai", "fake-1", MESSAGES)

    @pytest.mark.asyncio
    async def test_other_failures_keep_key(self, test_async_db, keyed_user):
        service = AIService(test_async_db)

        with patch.dict(PROVIDERS, {"OPENAI": FakeProvider(error=RuntimeError("overloaded"))}):
            with pytest.raises(RuntimeError, match="overloaded"):
                await service.chat(keyed_user.id, "openai", "fake-1", MESSAGES)

        key = await user_ai_key_crud.get_for_provider(test_async_db, keyed_user.id, AIProvider.OPENAI)
        assert key.is_active is True
        assert await ai_usage_log_crud.list_where(test_async_db) == []

    @pytest.mark.asyncio
    async def test_validate_key_goes_to_adapter(self, test_async_db):
        service = AIService(test_async_db)

        with patch.dict(PROVIDERS, {"OPENAI": FakeProvider()}):
            assert await service.validate_key("openai", "sk-ok") is True
            assert await service.validate_key("openai", "bogus") is False


class TestKeyDeactivationAcrossRequests:
    """Test suite for a rejected key staying inactive after the request rolls back."""

    @pytest.fixture
    async def committed_user(self, make_user, test_async_db):
        user = await make_user()
        await user_ai_key_crud.create(
            test_async_db,
            user_id=user.id,
            provider=AIProvider.OPENAI,
            encrypted_key=encrypt("sk-revoked"),
            label="OPENAI",
            is_active=True,
        )
        await test_async_db.commit()
        return user

    async def run_in_request(self, session_factory, call) -> None:
        async with session_factory() as db:
            try:
                await call(AIService(db))
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    async def stored_key(self, session_factory, user_id):
        async with session_factory() as db:
            return await user_ai_key_crud.get_for_provider(db, user_id, AIProvider.OPENAI)

    @pytest.mark.asyncio
    async def test_chat_rejection_outlives_rollback(self, test_session_factory, committed_user):
        async def call(service):
            await service.chat(committed_user.id, "openai", "fake-1", MESSAGES)

        with patch.dict(PROVIDERS, {"OPENAI": FakeProvider(error=AuthenticationError("Incorrect API key"))}):
            with pytest.raises(AuthenticationError):
                await self.run_in_request(test_session_factory, call)

        key = await self.stored_key(test_session_factory, committed_user.id)
        assert key.is_active is False
        assert key.last_used_at is None

    @pytest.mark.asyncio
    async def test_stream_rejection_outlives_rollback(self, test_session_factory, committed_user):
        async def call(service):
            async for _ in service.stream(committed_user.id, "openai", "fake-1", MESSAGES):
                pass

        with patch.dict(PROVIDERS, {"OPENAI": FakeProvider(error=AuthenticationError("Incorrect API key"))}):
            with pytest.raises(AuthenticationError):
                await self.run_in_request(test_session_factory, call)

        assert (await self.stored_key(test_session_factory, committed_user.id)).is_active is False

    @pytest.mark.asyncio
    async def test_success_touches_last_used(self, test_session_factory, committed_user):
        async def call(service):
            await service.chat(committed_user.id, "openai", "fake-1", MESSAGES)

        with patch.dict(PROVIDERS, {"OPENAI": FakeProvider()}):
            await self.run_in_request(test_session_factory, call)

        key = await self.stored_key(test_session_factory, committed_user.id)
        assert key.is_active is True
        assert key.last_used_at is not None
