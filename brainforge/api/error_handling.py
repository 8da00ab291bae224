"""
API error handling.

Maps application exceptions, request validation failures and unexpected
errors onto the ``{success: false, error: {message, code, details?}}``
envelope.

Dependencies: fastapi, starlette, brainforge.core.exceptions
System role: Uniform HTTP error responses
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from brainforge.configs import get_settings
from brainforge.core.exceptions import AppError
from brainforge.models.common import ErrorBody, ErrorResponse

logger = logging.getLogger(__name__)

HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    410: "GONE",
    422: "VALIDATION_ERROR",
}


def error_response(
    status_code: int, message: str, code: str, details: dict[str, Any] | None = None
) -> JSONResponse:
    """Build the error envelope; ``details`` is omitted when empty."""
    body = ErrorResponse(error=ErrorBody(message=message, code=code, details=details or None))
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body, exclude_none=True))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Request failed",
        extra={"path": request.url.path, "status_code": exc.status_code, "code": exc.code, "error": exc.message},
    )
    return error_response(exc.status_code, exc.message, exc.code, exc.details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"), "message": err.get("msg")}
        for err in exc.errors()
    ]
    logger.warning("Request validation failed", extra={"path": request.url.path, "errors": len(errors)})
    return error_response(
        status.HTTP_400_BAD_REQUEST, "Validation error", "VALIDATION_ERROR", {"errors": errors}
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = HTTP_CODES.get(exc.status_code, "HTTP_ERROR")
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    return error_response(exc.status_code, message, code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path, "error": str(exc)})
    message = str(exc) if get_settings().debug else "Internal server error"
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message, "INTERNAL_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to the app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
