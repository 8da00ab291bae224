"""
Provider adapter base class.

Each vendor adapter only decides how to build a LangChain chat model for a
key and how to check that key. Message conversion, token accounting and
streaming are shared here.

Dependencies: langchain_core, httpx
System role: Adapter layer between the AI gateway and vendor SDKs
"""

import logging
from abc import ABC, abstractmethod
from typing import AsyncIterator

import httpx
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from brainforge.core.ai.types import BalanceInfo, ChatMessage, ChatOptions, ChatResult, ModelDef

logger = logging.getLogger(__name__)

VALIDATION_TIMEOUT_SECONDS = 10.0

_MESSAGE_TYPES: dict[str, type[BaseMessage]] = {
    "system": SystemMessage,
    "user": HumanMessage,
    "assistant": AIMessage,
}


def to_langchain_messages(messages: list[ChatMessage]) -> list[BaseMessage]:
    """Convert gateway messages to LangChain message objects."""
    return [_MESSAGE_TYPES[m.role](content=m.content) for m in messages]


def _text_of(content: str | list) -> str:
    """Flatten message content that may arrive as a list of content blocks."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class BaseProvider(ABC):
    """
    Vendor adapter.

    Subclasses set ``name`` and ``models`` and implement ``build_chat_model``
    and ``validate_key``.
    """

    name: str
    models: list[ModelDef] = []

    @abstractmethod
    def build_chat_model(
        self, api_key: str, model: str, options: ChatOptions, streaming: bool = False
    ) -> BaseChatModel:
        """Create a LangChain chat model bound to the given key."""

    @abstractmethod
    async def validate_key(self, api_key: str) -> bool:
        """Return True when the vendor accepts the key. Never raises."""

    def list_models(self) -> list[ModelDef]:
        return list(self.models)

    def find_model(self, model_id: str) -> ModelDef | None:
        return next((m for m in self.models if m.id == model_id), None)

    async def get_balance(self, api_key: str) -> BalanceInfo:
        return BalanceInfo(has_balance=None, message="Balance check not supported")

    async def chat(
        self,
        api_key: str,
        model: str,
        messages: list[ChatMessage],
        options: ChatOptions | None = None,
    ) -> ChatResult:
        """
        Run a single completion.

        Args:
            api_key: Decrypted vendor key
            model: Vendor model id
            messages: Conversation, system prompt first if any
            options: Sampling options

        Returns:
            ChatResult with token usage (0 when the vendor reports none)
        """
        llm = self.build_chat_model(api_key, model, options or ChatOptions())
        response = await llm.ainvoke(to_langchain_messages(messages))
        usage = response.usage_metadata or {}
        metadata = response.response_metadata or {}
        return ChatResult(
            content=_text_of(response.content),
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
            model=metadata.get("model_name") or metadata.get("model") or model,
        )

    async def stream(
        self,
        api_key: str,
        model: str,
        messages: list[ChatMessage],
        options: ChatOptions | None = None,
    ) -> AsyncIterator[str]:
        """Yield completion text chunks as they arrive."""
        llm = self.build_chat_model(api_key, model, options or ChatOptions(), streaming=True)
        async for chunk in llm.astream(to_langchain_messages(messages)):
            text = _text_of(chunk.content)
            if text:
                yield text

    async def _ping_models(self, url: str, headers: dict[str, str], params: dict | None = None) -> bool:
        """GET a vendor endpoint and report whether it answered 2xx."""
        try:
            async with httpx.AsyncClient(timeout=VALIDATION_TIMEOUT_SECONDS) as client:
                response = await client.get(url, headers=headers, params=params)
            return response.is_success
        except httpx.HTTPError as e:
            logger.warning(
                "Key validation request failed",
                extra={"provider": self.name, "error": str(e)},
            )
            return False
