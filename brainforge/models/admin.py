"""
Admin console request schemas.

Dependencies: pydantic
System role: Admin API contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class SetAdminRequest(BaseModel):
    is_admin: bool


class UpsertSettingRequest(BaseModel):
    value: Any
    type: str | None = Field(None, max_length=20)
    category: str | None = Field(None, max_length=50)
    description: str | None = None


class BulkSettingsRequest(BaseModel):
    settings: dict[str, Any] = Field(..., description="key -> value")
