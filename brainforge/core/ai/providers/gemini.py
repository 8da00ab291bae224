"""
Google Gemini adapter.

Dependencies: langchain_google_genai
System role: Gemini generateContent API for the AI gateway
"""

from langchain_google_genai import ChatGoogleGenerativeAI

from brainforge.core.ai.providers.base import BaseProvider
from brainforge.core.ai.types import ChatOptions, ModelDef

GEMINI_MODELS_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiProvider(BaseProvider):
    """Gemini via ChatGoogleGenerativeAI."""

    name = "GEMINI"
    models = [
        ModelDef(id="gemini-2.0-flash", name="Gemini 2.0 Flash", context_window=1048576, cost_per_1k_input=0.0, cost_per_1k_output=0.0, description="Free tier available"),
        ModelDef(id="gemini-1.5-pro", name="Gemini 1.5 Pro", context_window=2097152, cost_per_1k_input=0.00125, cost_per_1k_output=0.005),
        ModelDef(id="gemini-1.5-flash", name="Gemini 1.5 Flash", context_window=1048576, cost_per_1k_input=0.0, cost_per_1k_output=0.0, description="Free tier available"),
    ]

    def build_chat_model(self, api_key, model, options: ChatOptions, streaming=False):
        return ChatGoogleGenerativeAI(
            model=model,
            google_api_key=api_key,
            temperature=options.temperature,
            max_output_tokens=options.max_tokens,
            top_p=options.top_p,
            max_retries=0,
        )

    async def validate_key(self, api_key: str) -> bool:
        return await self._ping_models(GEMINI_MODELS_URL, headers={}, params={"key": api_key})
