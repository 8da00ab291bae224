"""
AI gateway value types.

Dependencies: pydantic
System role: Provider-neutral request/response shapes for the AI gateway
"""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """One turn of a conversation sent to a provider."""

    role: Literal["system", "user", "assistant"]
    content: str


class ChatOptions(BaseModel):
    """Sampling options shared by every provider."""

    temperature: float = 0.7
    max_tokens: int = 4096
    top_p: float | None = None


class ChatResult(BaseModel):
    """Normalized completion with token usage."""

    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    model: str


class ModelDef(BaseModel):
    """Catalog entry for a model a provider exposes."""

    id: str
    name: str
    context_window: int
    cost_per_1k_input: float = Field(ge=0)
    cost_per_1k_output: float = Field(ge=0)
    description: str | None = None


class BalanceInfo(BaseModel):
    """Account balance as far as the provider can tell."""

    has_balance: bool | None = None
    message: str
