"""
Observability module.

Logging setup with per-request context, request logging middleware and
Langfuse tracing of AI gateway calls.
"""

from brainforge.observability.correlation import bind_user, get_correlation_id, set_correlation_id
from brainforge.observability.logger import configure_logging

__all__ = [
    "bind_user",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
