"""
Per-request logging context.

Holds the correlation id of the current HTTP request and, once the auth guard
has resolved the caller, their user id. Both ride on contextvars so they
follow the request through awaits.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import re
import uuid
from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")
user_id_ctx: ContextVar[str] = ContextVar("user_id", default="")

# Client-supplied ids are echoed into headers and logs
_VALID_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Start a request context.

    Args:
        correlation_id: Id sent by the client; replaced with a fresh UUID when
            missing or not a short token

    Returns:
        str: The id now in effect
    """
    value = correlation_id if correlation_id and _VALID_ID.fullmatch(correlation_id) else str(uuid.uuid4())
    correlation_id_ctx.set(value)
    user_id_ctx.set("")
    return value


def get_correlation_id() -> str:
    return correlation_id_ctx.get()


def bind_user(user_id) -> None:
    user_id_ctx.set(str(user_id))


def get_bound_user() -> str:
    return user_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")
    user_id_ctx.set("")
