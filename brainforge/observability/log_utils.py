"""
Helpers for logging values that may carry AI provider secrets.

Vendor SDK errors often echo part of the rejected key ("Incorrect API key
provided: sk-..."), so anything headed for a log line from the AI gateway
passes through here first.

Dependencies: re (stdlib)
System role: Logging helper functions
"""

import re
from typing import Any

# OpenAI/OpenRouter/Anthropic sk-..., Groq gsk_..., Gemini AIza..., GitHub ghp_/github_pat_
SECRET_PATTERN = re.compile(r"\b(sk-[\w-]{8,}|gsk_\w{8,}|AIza[\w-]{20,}|ghp_\w{20,}|github_pat_\w{20,})")


def mask_secret(secret: str | None, visible: int = 4) -> str:
    """Render an API key as ``****abcd``."""
    if not secret:
        return ""
    return "****" + secret[-visible:]


def redact_secrets(text: str) -> str:
    return SECRET_PATTERN.sub(lambda match: mask_secret(match.group(0)), text)


def safe_log_value(value: Any, max_length: int = 300) -> str:
    """
    Bounded, secret-free string form of a value for ``extra={...}``.

    Args:
        value: Anything, typically an exception or vendor payload
        max_length: Characters kept before truncating

    Returns:
        str: Redacted and truncated text
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    else:
        text = redact_secrets(str(value))

    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text
