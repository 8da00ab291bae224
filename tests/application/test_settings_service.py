"""
Tests for SettingsService and its helpers.

System role: Verification of the runtime settings catalog
"""

import pytest

from brainforge.application.services import SettingsService
from brainforge.application.services.settings_service import DEFAULT_SETTINGS, format_uptime, to_stored


@pytest.fixture
def settings_service(test_async_db):
    return SettingsService(test_async_db)


def test_to_stored_infers_type():
    assert to_stored(True) == ("true", "boolean")
    assert to_stored(False) == ("false", "boolean")
    assert to_stored(20) == ("20", "number")
    assert to_stored(1.5) == ("1.5", "number")
    assert to_stored("Forge") == ("Forge", "string")
    assert to_stored(None) == ("", "string")


def test_format_uptime():
    assert format_uptime(0) == "0d 0h 0m 0s"
    assert format_uptime(90061.7) == "1d 1h 1m 1s"


@pytest.mark.asyncio
async def test_first_read_seeds_defaults(settings_service):
    grouped = await settings_service.all_settings()

    assert set(grouped) == {"general", "email", "notifications", "security", "ai", "version"}
    assert sum(len(rows) for rows in grouped.values()) == len(DEFAULT_SETTINGS)

    await settings_service.all_settings()
    again = await settings_service.all_settings()
    assert sum(len(rows) for rows in again.values()) == len(DEFAULT_SETTINGS)


@pytest.mark.asyncio
async def test_upsert_existing_keeps_category(settings_service):
    await settings_service.ensure_seeded()

    updated = await settings_service.upsert("maintenance_mode", True)

    assert updated["value"] == "true"
    assert updated["category"] == "general"
    assert updated["type"] == "boolean"


@pytest.mark.asyncio
async def test_upsert_creates_missing_key(settings_service):
    created = await settings_service.upsert("feature_flag", 3, category="labs")

    assert created["type"] == "number"
    assert created["category"] == "labs"
    assert [s["key"] for s in await settings_service.category("labs")] == ["feature_flag"]


@pytest.mark.asyncio
async def test_bulk_update_and_reset(settings_service):
    await settings_service.bulk_update({"app_name": "Forge", "max_upload_size_mb": 25})

    general = {s["key"]: s["value"] for s in await settings_service.category("general")}
    assert general["app_name"] == "Forge"
    assert general["max_upload_size_mb"] == "25"

    reset = await settings_service.reset_category("general")
    assert {s["key"]: s["value"] for s in reset}["app_name"] == "BrainForge"
    assert await settings_service.reset_category("nonexistent") == []


@pytest.mark.asyncio
async def test_web_version(settings_service):
    assert await settings_service.web_version() == "0.1.0"

    await settings_service.upsert("web_version", "2.0.0")

    assert await settings_service.web_version() == "2.0.0"


@pytest.mark.asyncio
async def test_system_info(settings_service):
    info = await settings_service.system_info()

    assert info["app"]["name"] == "BrainForge"
    assert info["app"]["web_version"] == "0.1.0"
    assert info["runtime"]["uptime"].endswith("s")
    assert info["system"]["cpus"] >= 0
