"""
Request observability middleware.

Dependencies: fastapi, starlette, brainforge.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from brainforge.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
SLOW_REQUEST_MS = 2000.0
QUIET_PATHS = {"/api/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request with status and latency."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        path = request.url.path

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request crashed",
                extra={
                    "method": request.method,
                    "path": path,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    "error_type": type(e).__name__,
                },
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        if path in QUIET_PATHS:
            log = logger.debug
        elif duration_ms > SLOW_REQUEST_MS or response.status_code >= 500:
            log = logger.warning
        else:
            log = logger.info
        log(
            f"{request.method} {path} - {response.status_code}",
            extra={
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Open a request context and echo its id back in the response."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
