"""
System API endpoints.

Routes:
- GET /health - Liveness check
- GET /ai/models - Public model catalog per provider
- GET /app/version - Web client version label
- GET /uploads/{filename} - Serve an uploaded file

Dependencies: brainforge.core.ai, brainforge.application.services.settings_service
System role: Public system and static file HTTP API
"""

from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from pydantic import BaseModel

from brainforge.api.deps.dependencies import get_settings_service
from brainforge.application.services import SettingsService
from brainforge.boundary.db.base import utcnow
from brainforge.configs import get_settings
from brainforge.core.ai import get_all_models
from brainforge.core.exceptions import NotFoundError
from brainforge.models.common import SuccessResponse

MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".pdf": "application/pdf",
    ".sql": "text/plain",
    ".txt": "text/plain",
    ".json": "application/json",
    ".csv": "text/csv",
    ".md": "text/markdown",
    ".zip": "application/zip",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime


router = APIRouter(tags=["system"])
uploads_router = APIRouter(tags=["uploads"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="ok", timestamp=utcnow())


@router.get("/ai/models")
async def list_models() -> SuccessResponse:
    """Model catalog grouped by provider. No authentication required."""
    return SuccessResponse(data=get_all_models())


@router.get("/app/version")
async def app_version(settings_service: SettingsService = Depends(get_settings_service)) -> SuccessResponse:
    return SuccessResponse(data={"web_version": await settings_service.web_version()})


def resolve_upload(filename: str) -> Path:
    """
    Locate a file inside the upload directory.

    Raises:
        NotFoundError: Missing file or a name escaping the directory
    """
    root = Path(get_settings().app.upload_dir).resolve()
    path = (root / filename).resolve()
    if root not in path.parents or not path.is_file():
        raise NotFoundError("File not found")
    return path


@uploads_router.get("/uploads/{filename}")
async def serve_upload(filename: str, download: bool = False, name: str | None = None) -> FileResponse:
    """
    Stream an uploaded file.

    ``?download=true`` forces a download, optionally under ``name``. Names
    outside plain ASCII go out in the RFC 5987 ``filename*`` form.
    """
    path = resolve_upload(filename)
    media_type = MIME_TYPES.get(path.suffix.lower(), "application/octet-stream")
    if not download:
        return FileResponse(path, media_type=media_type)
    return FileResponse(
        path,
        media_type=media_type,
        filename=name or filename,
        content_disposition_type="attachment",
    )
