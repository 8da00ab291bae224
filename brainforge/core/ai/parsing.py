"""
JSON extraction from model replies.

Models wrap JSON in markdown fences or surround it with prose. These helpers
recover the first top-level object.

Dependencies: json, re
System role: Parsing layer for every AI generator
"""

import json
import re

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` fence."""
    return _FENCE_RE.sub("", text.strip()).strip()


def extract_json_object(text: str) -> dict:
    """
    Parse the JSON object spanning the first ``{`` to the last ``}``.

    Args:
        text: Raw model reply

    Returns:
        Parsed object

    Raises:
        ValueError: If no braces are found or the span is not a JSON object
    """
    cleaned = strip_code_fences(text)
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        raise ValueError("No JSON object found in model reply")
    try:
        parsed = json.loads(cleaned[start : end + 1])
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in model reply: {e.msg}") from e
    if not isinstance(parsed, dict):
        raise ValueError("Model reply JSON is not an object")
    return parsed


def try_extract_json_object(text: str) -> dict | None:
    """Like extract_json_object but returns None instead of raising."""
    try:
        return extract_json_object(text)
    except ValueError:
        return None
