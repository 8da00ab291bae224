"""
OpenRouter adapter.

OpenRouter speaks the OpenAI chat completions protocol, so the OpenAI
adapter is reused with a different base URL and attribution header.

Dependencies: langchain_openai
System role: OpenRouter model marketplace for the AI gateway
"""

from brainforge.core.ai.providers.openai import OpenAIProvider
from brainforge.core.ai.types import ModelDef

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_REFERER = "https://brainforge.app"


class OpenRouterProvider(OpenAIProvider):
    """OpenRouter via ChatOpenAI."""

    name = "OPENROUTER"
    base_url = OPENROUTER_BASE_URL
    default_headers = {"HTTP-Referer": OPENROUTER_REFERER}
    models = [
        ModelDef(id="openai/gpt-4o", name="GPT-4o (via OpenRouter)", context_window=128000, cost_per_1k_input=0.005, cost_per_1k_output=0.015),
        ModelDef(id="anthropic/claude-sonnet-4", name="Claude Sonnet 4 (via OpenRouter)", context_window=200000, cost_per_1k_input=0.003, cost_per_1k_output=0.015),
        ModelDef(id="google/gemini-2.0-flash-exp:free", name="Gemini 2.0 Flash (Free)", context_window=1048576, cost_per_1k_input=0, cost_per_1k_output=0),
        ModelDef(id="meta-llama/llama-3.3-70b-instruct", name="Llama 3.3 70B", context_window=131072, cost_per_1k_input=0.0003, cost_per_1k_output=0.0004),
        ModelDef(id="deepseek/deepseek-chat", name="DeepSeek V3", context_window=65536, cost_per_1k_input=0.00014, cost_per_1k_output=0.00028),
    ]
