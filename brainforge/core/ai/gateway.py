"""
AI gateway.

Single entry point every feature uses to talk to a model: resolves the
provider adapter, decrypts the caller's stored key, runs the call, meters
tokens and cost into the usage log and traces the generation. Vendor auth
failures deactivate the stored key and the error propagates unchanged;
nothing is retried.

Dependencies: sqlalchemy, brainforge.core.ai.providers, brainforge.core.security,
              brainforge.boundary.db.CRUD, brainforge.observability
System role: Multi-provider AI facade
"""

import logging
from typing import AsyncIterator
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD.ai_crud import ai_usage_log_crud, user_ai_key_crud
from brainforge.boundary.db.models import AIProvider, UserAIKeyModel
from brainforge.core.ai.providers import PROVIDERS, BaseProvider
from brainforge.core.ai.types import BalanceInfo, ChatMessage, ChatOptions, ChatResult, ModelDef
from brainforge.core.exceptions import NotFoundError, ValidationError
from brainforge.core.security import decrypt
from brainforge.observability.langfuse_tracer import get_tracer
from brainforge.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

AUTH_ERROR_MARKERS = ("Incorrect API key", "invalid x-api-key", "API key not valid")


def is_auth_error(error: BaseException) -> bool:
    """
    Recognize a vendor rejecting the API key.

    SDKs disagree on how they report it: OpenAI, Anthropic and Groq raise an
    ``AuthenticationError`` with ``status_code`` 401, Google raises with the
    message only.
    """
    status = getattr(error, "status_code", None) or getattr(error, "status", None)
    if status == 401 or type(error).__name__ == "AuthenticationError":
        return True
    message = str(error)
    return any(marker in message for marker in AUTH_ERROR_MARKERS)


def compute_cost(model_def: ModelDef | None, input_tokens: int, output_tokens: int) -> float:
    """USD cost from per-1k prices; 0 for models missing from the catalog."""
    if model_def is None:
        return 0.0
    return (input_tokens / 1000) * model_def.cost_per_1k_input + (
        output_tokens / 1000
    ) * model_def.cost_per_1k_output


def get_provider(name: str) -> BaseProvider:
    """
    Resolve a provider adapter by name (case-insensitive).

    Raises:
        ValidationError: If no adapter exists for the name
    """
    provider = PROVIDERS.get(name.upper())
    if provider is None:
        raise ValidationError(f"Unsupported AI provider: {name}", status_code=400)
    return provider


def get_all_models() -> dict[str, list[ModelDef]]:
    """Model catalog for every supported provider."""
    return {name: provider.list_models() for name, provider in PROVIDERS.items()}


class AIService:
    """AI gateway bound to a database session."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize gateway with async database session.

        Args:
            db: Async SQLAlchemy session used for keys and usage logs
        """
        self.db = db

    async def get_active_key(self, user_id: UUID, provider: str) -> UserAIKeyModel:
        """
        Load the caller's active key for a provider.

        ``last_used_at`` is touched by the caller once the vendor call
        succeeds, so the request holds no write on the key row meanwhile.

        Raises:
            NotFoundError: If the user has no active key for the provider
        """
        key = await user_ai_key_crud.get_for_provider(self.db, user_id, AIProvider(provider.upper()))
        if key is None or not key.is_active:
            raise NotFoundError(
                f"No valid API key found for {provider.upper()}. Please add one in settings."
            )
        return key

    async def mark_key_invalid(self, key: UserAIKeyModel) -> None:
        """
        Deactivate a key the vendor rejected.

        Written and committed on a separate connection: the vendor error
        propagates and the request session is rolled back.
        """
        async with self.db.bind.begin() as conn:
            await conn.execute(
                update(UserAIKeyModel).where(UserAIKeyModel.id == key.id).values(is_active=False)
            )
        key.is_active = False
        logger.warning(
            "AI key marked invalid after auth failure",
            extra={"user_id": str(key.user_id), "provider": key.provider.value},
        )

    async def chat(
        self,
        user_id: UUID,
        provider: str,
        model: str,
        messages: list[ChatMessage],
        options: ChatOptions | None = None,
        feature: str = "chat",
    ) -> ChatResult:
        """
        Run one completion on the caller's key and meter it.

        Args:
            user_id: Key owner
            provider: Provider name, any case
            model: Vendor model id
            messages: Conversation
            options: Sampling options
            feature: Usage-log feature tag

        Returns:
            ChatResult

        Raises:
            ValidationError: Unsupported provider
            NotFoundError: No active key
            Exception: Whatever the vendor SDK raised
        """
        adapter = get_provider(provider)
        key = await self.get_active_key(user_id, adapter.name)
        try:
            result = await adapter.chat(decrypt(key.encrypted_key), model, messages, options)
        except Exception as e:
            if is_auth_error(e):
                await self.mark_key_invalid(key)
            logger.error(
                "AI chat failed",
                extra={"provider": adapter.name, "model": model, "error": safe_log_value(e)},
            )
            raise

        key.last_used_at = utcnow()
        cost = compute_cost(adapter.find_model(model), result.input_tokens, result.output_tokens)
        await ai_usage_log_crud.create(
            self.db,
            user_id=user_id,
            provider=AIProvider(adapter.name),
            model=model,
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            cost=cost,
            feature=feature,
        )
        get_tracer().trace_generation(
            name=feature,
            provider=adapter.name,
            model=model,
            messages=[m.model_dump() for m in messages],
            output=result.content,
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            cost=cost,
            user_id=str(user_id),
        )
        logger.info(
            "AI chat completed",
            extra={
                "provider": adapter.name,
                "model": model,
                "feature": feature,
                "input_tokens": result.input_tokens,
                "output_tokens": result.output_tokens,
            },
        )
        return result

    async def stream(
        self,
        user_id: UUID,
        provider: str,
        model: str,
        messages: list[ChatMessage],
        options: ChatOptions | None = None,
    ) -> AsyncIterator[str]:
        """Yield completion chunks on the caller's key. Auth failures deactivate the key."""
        adapter = get_provider(provider)
        key = await self.get_active_key(user_id, adapter.name)
        try:
            async for chunk in adapter.stream(decrypt(key.encrypted_key), model, messages, options):
                yield chunk
        except Exception as e:
            if is_auth_error(e):
                await self.mark_key_invalid(key)
            logger.error(
                "AI stream failed",
                extra={"provider": adapter.name, "model": model, "error": safe_log_value(e)},
            )
            raise
        key.last_used_at = utcnow()

    async def validate_key(self, provider: str, api_key: str) -> bool:
        return await get_provider(provider).validate_key(api_key)

    async def get_balance(self, provider: str, api_key: str) -> BalanceInfo:
        return await get_provider(provider).get_balance(api_key)
