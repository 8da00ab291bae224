"""
Langfuse tracing integration.

Singleton tracer that records AI gateway generations (provider, model,
token usage, cost) when Langfuse credentials are configured. When they are
not, every method is a no-op.

Dependencies: langfuse, brainforge.configs
System role: LLM observability for the AI gateway
"""

import logging
from typing import Any

from langfuse import Langfuse

from brainforge.configs import get_settings

logger = logging.getLogger(__name__)


class LangfuseTracer:
    """Langfuse tracer singleton."""

    _instance: "LangfuseTracer | None" = None

    def __new__(cls) -> "LangfuseTracer":
        """Singleton pattern for tracer instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        """Initialize Langfuse client with configuration."""
        if self._initialized:
            return
        self._initialized = True
        self._client: Langfuse | None = None

        config = get_settings().observability
        self._capture_content = config.capture_content
        if not config.is_configured:
            return
        self._client = Langfuse(
            public_key=config.public_key,
            secret_key=config.secret_key,
            host=config.host,
        )
        logger.info("Langfuse tracing enabled", extra={"host": config.host})

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def trace_generation(
        self,
        *,
        name: str,
        provider: str,
        model: str,
        messages: list[dict[str, str]],
        output: str,
        input_tokens: int,
        output_tokens: int,
        cost: float,
        user_id: str | None = None,
    ) -> None:
        """
        Record one completed chat generation.

        Args:
            name: Feature name (chat, ai-chat, brainstorm, ...)
            provider: Provider identifier
            model: Model identifier
            messages: Prompt messages sent to the model
            output: Completion text
            input_tokens: Prompt token count
            output_tokens: Completion token count
            cost: Estimated USD cost
            user_id: Owner of the API key
        """
        if self._client is None:
            return
        metadata: dict[str, Any] = {"provider": provider, "cost": cost}
        if user_id:
            metadata["user_id"] = user_id
        if not self._capture_content:
            messages = [{"role": m["role"], "content": f"<{len(m['content'])} chars>"} for m in messages]
            output = f"<{len(output)} chars>"
        try:
            generation = self._client.start_generation(
                name=name,
                model=model,
                input=messages,
                metadata=metadata,
            )
            generation.update(
                output=output,
                usage_details={"input": input_tokens, "output": output_tokens},
            )
            generation.end()
        except Exception as e:
            logger.warning("Langfuse trace failed", extra={"error": str(e)})

    def flush(self) -> None:
        """Flush buffered events (called on shutdown)."""
        if self._client is not None:
            self._client.flush()


def get_tracer() -> LangfuseTracer:
    """Return the process-wide tracer."""
    return LangfuseTracer()
