"""
Logging setup for the API process.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from brainforge.observability.correlation import get_bound_user, get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s %(user_id)s] %(message)s"

QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "openai", "anthropic", "groq")


class RequestContextFilter(logging.Filter):
    """Stamp records with the request's correlation id and caller."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        record.user_id = get_bound_user() or "anon"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Route all records to stdout with request context attached.

    Safe to call more than once; previous root handlers are replaced.

    Args:
        level: Root log level name
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    # Vendor SDKs log full request lines at INFO
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
