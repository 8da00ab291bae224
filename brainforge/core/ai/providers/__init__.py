"""
Vendor adapters for the AI gateway.

Exports:
  - BaseProvider: Adapter interface
  - PROVIDERS: Registry of supported adapters keyed by provider name
"""

from brainforge.core.ai.providers.base import BaseProvider
from brainforge.core.ai.providers.claude import ClaudeProvider
from brainforge.core.ai.providers.copilot import CopilotProvider
from brainforge.core.ai.providers.gemini import GeminiProvider
from brainforge.core.ai.providers.groq import GroqProvider
from brainforge.core.ai.providers.openai import OpenAIProvider
from brainforge.core.ai.providers.openrouter import OpenRouterProvider

PROVIDERS: dict[str, BaseProvider] = {
    provider.name: provider
    for provider in (
        OpenAIProvider(),
        ClaudeProvider(),
        GeminiProvider(),
        GroqProvider(),
        OpenRouterProvider(),
        CopilotProvider(),
    )
}

__all__ = [
    "BaseProvider",
    "ClaudeProvider",
    "CopilotProvider",
    "GeminiProvider",
    "GroqProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "PROVIDERS",
]
