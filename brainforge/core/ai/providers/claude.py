"""
Anthropic Claude adapter.

Dependencies: langchain_anthropic
System role: Claude messages API for the AI gateway
"""

from langchain_anthropic import ChatAnthropic

from brainforge.core.ai.providers.base import BaseProvider
from brainforge.core.ai.types import ChatOptions, ModelDef

ANTHROPIC_MODELS_URL = "https://api.anthropic.com/v1/models"
ANTHROPIC_VERSION = "2023-06-01"


class ClaudeProvider(BaseProvider):
    """Claude via ChatAnthropic. System messages become the ``system`` parameter."""

    name = "CLAUDE"
    models = [
        ModelDef(id="claude-sonnet-4-20250514", name="Claude Sonnet 4", context_window=200000, cost_per_1k_input=0.003, cost_per_1k_output=0.015, description="Best balance of speed & intelligence"),
        ModelDef(id="claude-opus-4-20250514", name="Claude Opus 4", context_window=200000, cost_per_1k_input=0.015, cost_per_1k_output=0.075, description="Most capable model"),
        ModelDef(id="claude-3-5-haiku-20241022", name="Claude 3.5 Haiku", context_window=200000, cost_per_1k_input=0.001, cost_per_1k_output=0.005, description="Fastest & cheapest"),
        ModelDef(id="claude-3-5-sonnet-20241022", name="Claude 3.5 Sonnet", context_window=200000, cost_per_1k_input=0.003, cost_per_1k_output=0.015, description="Previous gen flagship"),
        ModelDef(id="claude-3-opus-20240229", name="Claude 3 Opus", context_window=200000, cost_per_1k_input=0.015, cost_per_1k_output=0.075, description="Previous gen most capable"),
    ]

    def build_chat_model(self, api_key, model, options: ChatOptions, streaming=False):
        return ChatAnthropic(
            model=model,
            api_key=api_key,
            temperature=options.temperature,
            max_tokens=options.max_tokens,
            top_p=options.top_p,
            streaming=streaming,
            max_retries=0,
        )

    async def validate_key(self, api_key: str) -> bool:
        return await self._ping_models(
            ANTHROPIC_MODELS_URL,
            headers={"x-api-key": api_key, "anthropic-version": ANTHROPIC_VERSION},
        )
