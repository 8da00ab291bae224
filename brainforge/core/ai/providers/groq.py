"""
Groq adapter.

Dependencies: langchain_groq
System role: Groq chat completions for the AI gateway
"""

from langchain_groq import ChatGroq

from brainforge.core.ai.providers.base import BaseProvider
from brainforge.core.ai.types import ChatOptions, ModelDef

GROQ_MODELS_URL = "https://api.groq.com/openai/v1/models"


class GroqProvider(BaseProvider):
    """Groq via ChatGroq."""

    name = "GROQ"
    models = [
        ModelDef(id="llama-3.3-70b-versatile", name="Llama 3.3 70B", context_window=131072, cost_per_1k_input=0.00059, cost_per_1k_output=0.00079, description="Fast inference"),
        ModelDef(id="llama-3.1-8b-instant", name="Llama 3.1 8B", context_window=131072, cost_per_1k_input=0.00005, cost_per_1k_output=0.00008, description="Ultra fast"),
        ModelDef(id="mixtral-8x7b-32768", name="Mixtral 8x7B", context_window=32768, cost_per_1k_input=0.00024, cost_per_1k_output=0.00024),
        ModelDef(id="gemma2-9b-it", name="Gemma 2 9B", context_window=8192, cost_per_1k_input=0.0002, cost_per_1k_output=0.0002),
    ]

    def build_chat_model(self, api_key, model, options: ChatOptions, streaming=False):
        return ChatGroq(
            model=model,
            api_key=api_key,
            temperature=options.temperature,
            max_tokens=options.max_tokens,
            streaming=streaming,
            max_retries=0,
        )

    async def validate_key(self, api_key: str) -> bool:
        return await self._ping_models(GROQ_MODELS_URL, headers={"Authorization": f"Bearer {api_key}"})
