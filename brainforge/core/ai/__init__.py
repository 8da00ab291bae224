"""
AI gateway package.

Exports:
  - AIService: Keyed, metered access to every provider
  - get_provider, get_all_models: Adapter registry lookups
  - ChatMessage, ChatOptions, ChatResult, ModelDef: Gateway value types
"""

from brainforge.core.ai.gateway import AIService, get_all_models, get_provider, is_auth_error
from brainforge.core.ai.types import BalanceInfo, ChatMessage, ChatOptions, ChatResult, ModelDef

__all__ = [
    "AIService",
    "BalanceInfo",
    "ChatMessage",
    "ChatOptions",
    "ChatResult",
    "ModelDef",
    "get_all_models",
    "get_provider",
    "is_auth_error",
]
