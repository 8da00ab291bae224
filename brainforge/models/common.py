"""
Common response models and the PATCH body base.

Every endpoint answers with the same envelope: ``{success: true, data}`` on
success and ``{success: false, error: {message, code, details?}}`` on
failure.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, Field, ValidationInfo, field_validator

T = TypeVar("T")

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class SuccessResponse(BaseModel, Generic[T]):
    """Generic success response wrapper."""

    success: bool = True
    data: T


class ErrorBody(BaseModel):
    """Error payload."""

    message: str
    code: str
    details: dict[str, Any] | None = Field(default=None, description="Additional error context")


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: ErrorBody


class MessageData(BaseModel):
    """Plain confirmation payload."""

    message: str


class AIModelSelection(BaseModel):
    """Provider/model pair chosen by the user for an AI call."""

    provider: str = Field(..., min_length=1, description="Provider name, e.g. OPENAI")
    model: str = Field(..., min_length=1, description="Vendor model id")


class PartialUpdate(BaseModel):
    """
    Base for PATCH bodies.

    Fields left out of the body stay untouched. An explicit null is accepted
    only for fields listed in ``nullable_fields``; every other field maps to
    a NOT NULL column.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name not in cls.nullable_fields:
            raise ValueError("cannot be null")
        return value
