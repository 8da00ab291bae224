"""
OpenAI adapter.

Dependencies: langchain_openai
System role: OpenAI chat completions for the AI gateway
"""

from langchain_openai import ChatOpenAI

from brainforge.core.ai.providers.base import BaseProvider
from brainforge.core.ai.types import ChatOptions, ModelDef

OPENAI_BASE_URL = "https://api.openai.com/v1"


class OpenAIProvider(BaseProvider):
    """OpenAI via ChatOpenAI."""

    name = "OPENAI"
    models = [
        ModelDef(id="gpt-4o", name="GPT-4o", context_window=128000, cost_per_1k_input=0.005, cost_per_1k_output=0.015),
        ModelDef(id="gpt-4o-mini", name="GPT-4o Mini", context_window=128000, cost_per_1k_input=0.00015, cost_per_1k_output=0.0006),
        ModelDef(id="gpt-4-turbo", name="GPT-4 Turbo", context_window=128000, cost_per_1k_input=0.01, cost_per_1k_output=0.03),
        ModelDef(id="o1-preview", name="O1 Preview", context_window=128000, cost_per_1k_input=0.015, cost_per_1k_output=0.06),
        ModelDef(id="o1-mini", name="O1 Mini", context_window=128000, cost_per_1k_input=0.003, cost_per_1k_output=0.012),
    ]

    base_url: str | None = None
    default_headers: dict[str, str] | None = None

    def build_chat_model(self, api_key, model, options: ChatOptions, streaming=False):
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            base_url=self.base_url,
            default_headers=self.default_headers,
            temperature=options.temperature,
            max_tokens=options.max_tokens,
            top_p=options.top_p,
            streaming=streaming,
            max_retries=0,
        )

    async def validate_key(self, api_key: str) -> bool:
        return await self._ping_models(
            f"{self.base_url or OPENAI_BASE_URL}/models",
            headers={"Authorization": f"Bearer {api_key}"},
        )
