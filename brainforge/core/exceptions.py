"""
Exception hierarchy for the BrainForge API.

Every error the services raise on purpose derives from AppError and carries
an HTTP status, a machine-readable code and optional details. The API layer
turns them into the ``{success: false, error: {...}}`` envelope.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AppError(Exception):
    """Base exception for all BrainForge application errors."""

    status_code: int = 400
    default_code: str = "BAD_REQUEST"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            status_code: HTTP status override
            code: Machine-readable error code override
            details: Optional dictionary of additional context
        """
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NotFoundError(AppError):
    """Raised when a resource cannot be found."""

    status_code = 404
    default_code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found", code: str | None = None) -> None:
        super().__init__(message, code=code)


class UnauthorizedError(AppError):
    """Raised when authentication is missing or invalid."""

    status_code = 401
    default_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized", code: str | None = None) -> None:
        super().__init__(message, code=code)


class ForbiddenError(AppError):
    """Raised when the caller lacks permission."""

    status_code = 403
    default_code = "FORBIDDEN"

    def __init__(self, message: str = "Forbidden", code: str | None = None) -> None:
        super().__init__(message, code=code)


class ConflictError(AppError):
    """Raised when a unique resource already exists."""

    status_code = 409
    default_code = "CONFLICT"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code)


class ValidationError(AppError):
    """Raised when input fails a business rule."""

    status_code = 422
    default_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            status_code: HTTP status override (400 for malformed requests)
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, status_code=status_code, details=details)


class GoneError(AppError):
    """Raised when a resource existed but is no longer usable (expired invites)."""

    status_code = 410
    default_code = "GONE"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class AIParseError(AppError):
    """Raised when a model reply cannot be parsed as the expected JSON."""

    status_code = 422
    default_code = "AI_PARSE_ERROR"

    def __init__(self, message: str, raw: str | None = None) -> None:
        super().__init__(message, details={"raw": raw} if raw is not None else None)
