"""
Tests for the public system routes and the error envelope.

Covers health, model catalog, version label, upload serving and how
application, validation, routing and unexpected errors are rendered.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import APIRouter
from pydantic import BaseModel

from brainforge.api.deps.dependencies import get_settings_service
from brainforge.api.routers.system import router as system_router
from brainforge.api.routers.system import resolve_upload, uploads_router
from brainforge.core.exceptions import ConflictError, NotFoundError, ValidationError

from conftest import build_test_app, make_client


@pytest.fixture
def client():
    return make_client(build_test_app(system_router, uploads_router))


@pytest.fixture
def upload_dir(tmp_path):
    settings = MagicMock()
    settings.app.upload_dir = str(tmp_path)
    with patch("brainforge.api.routers.system.get_settings", return_value=settings):
        yield tmp_path


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "timestamp" in data


def test_model_catalog_lists_every_provider(client):
    response = client.get("/ai/models")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert set(body["data"]) == {"OPENAI", "CLAUDE", "GEMINI", "GROQ", "OPENROUTER", "COPILOT"}
    assert body["data"]["OPENAI"][0]["id"] == "gpt-4o"


def test_app_version(client):
    service = AsyncMock()
    service.web_version.return_value = "2.3.1"
    client.app.dependency_overrides[get_settings_service] = lambda: service

    response = client.get("/app/version")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"web_version": "2.3.1"}}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": {"message": "Route GET /nope not found", "code": "NOT_FOUND"},
    }


def test_serve_upload(client, upload_dir):
    (upload_dir / "diagram.png").write_bytes(b"\x89PNG")

    response = client.get("/uploads/diagram.png")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content == b"\x89PNG"


def test_serve_upload_as_download(client, upload_dir):
    (upload_dir / "notes.md").write_text("# hi")

    response = client.get("/uploads/notes.md", params={"download": "true", "name": "meeting.md"})

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="meeting.md"'


@pytest.mark.parametrize(
    "name, header",
    [
        ("文件.pdf", "attachment; filename*=utf-8''%E6%96%87%E4%BB%B6.pdf"),
        ('my "draft".md', "attachment; filename*=utf-8''my%20%22draft%22.md"),
    ],
)
def test_download_name_is_encoded(client, upload_dir, name, header):
    (upload_dir / "notes.md").write_text("# hi")

    response = client.get("/uploads/notes.md", params={"download": "true", "name": name})

    assert response.status_code == 200
    assert response.headers["content-disposition"] == header


def test_inline_upload_has_no_disposition(client, upload_dir):
    (upload_dir / "notes.md").write_text("# hi")

    response = client.get("/uploads/notes.md", params={"name": "ignored.md"})

    assert "content-disposition" not in response.headers


def test_resolve_upload_rejects_traversal(upload_dir):
    (upload_dir.parent / "secret.txt").write_text("nope")

    with pytest.raises(NotFoundError, match="File not found"):
        resolve_upload("../secret.txt")


def test_serve_upload_missing_file(client, upload_dir):
    response = client.get("/uploads/missing.pdf")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


class EchoRequest(BaseModel):
    name: str


def build_error_app():
    router = APIRouter()

    @router.post("/echo")
    async def echo(request: EchoRequest):
        return {"name": request.name}

    @router.get("/conflict")
    async def conflict():
        raise ConflictError("Email already registered")

    @router.get("/invalid")
    async def invalid():
        raise ValidationError("Assignees must be team members", field="assignee_ids", status_code=400)

    @router.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    return make_client(build_test_app(router))


class TestErrorEnvelope:
    """Test suite for exception handler rendering."""

    def test_app_error(self):
        response = build_error_app().get("/conflict")

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "error": {"message": "Email already registered", "code": "CONFLICT"},
        }

    def test_app_error_details(self):
        response = build_error_app().get("/invalid")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"] == {"field": "assignee_ids"}

    def test_request_validation_error(self):
        response = build_error_app().post("/echo", json={})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["message"] == "Validation error"
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["errors"][0]["field"] == "name"

    def test_unhandled_error_hides_internals(self):
        response = build_error_app().get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": {"message": "Internal server error", "code": "INTERNAL_ERROR"},
        }
