"""
System settings service.

Admin-editable key/value configuration. The table is seeded with the
default catalog the first time it is read; values are stored as strings and
``type`` tells clients how to render them.

Dependencies: brainforge.boundary.db.CRUD, brainforge.configs
System role: Runtime configuration use case orchestration
"""

import logging
import os
import platform
import sys
import time
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.CRUD import system_setting_crud
from brainforge.boundary.db.models import SystemSettingModel
from brainforge.configs import get_settings

logger = logging.getLogger(__name__)

PROCESS_STARTED = time.monotonic()

# (category, key, value, type, description)
DEFAULT_SETTINGS: list[tuple[str, str, str, str, str]] = [
    ("general", "app_name", "BrainForge", "string", "Application Name"),
    ("general", "app_description", "Collaborative Project Management Platform", "string", "Description"),
    ("general", "maintenance_mode", "false", "boolean", "Maintenance Mode"),
    ("general", "default_language", "en", "string", "Default Language"),
    ("general", "timezone", "UTC", "string", "Default Timezone"),
    ("general", "max_upload_size_mb", "10", "number", "Max Upload Size (MB)"),
    ("general", "allow_registration", "true", "boolean", "Allow New Registrations"),
    ("email", "smtp_host", "", "string", "SMTP Host"),
    ("email", "smtp_port", "587", "number", "SMTP Port"),
    ("email", "smtp_user", "", "string", "SMTP Username"),
    ("email", "smtp_secure", "true", "boolean", "Use TLS/SSL"),
    ("email", "email_from_name", "BrainForge", "string", "From Name"),
    ("email", "email_from_address", "noreply@brainforge.dev", "string", "From Address"),
    ("email", "send_welcome_email", "true", "boolean", "Send Welcome Email"),
    ("email", "send_invite_email", "true", "boolean", "Send Team Invite Emails"),
    ("notifications", "enable_in_app", "true", "boolean", "In-App Notifications"),
    ("notifications", "enable_email_notifications", "true", "boolean", "Email Notifications"),
    ("notifications", "notify_on_task_assign", "true", "boolean", "Notify on Task Assignment"),
    ("notifications", "notify_on_mention", "true", "boolean", "Notify on Mention"),
    ("notifications", "notify_on_team_invite", "true", "boolean", "Notify on Team Invitation"),
    ("notifications", "digest_frequency", "daily", "string", "Digest Frequency"),
    ("security", "session_timeout_hours", "24", "number", "Session Timeout (hours)"),
    ("security", "max_login_attempts", "5", "number", "Max Login Attempts"),
    ("security", "lockout_duration_minutes", "15", "number", "Lockout Duration (min)"),
    ("security", "require_strong_password", "true", "boolean", "Require Strong Password"),
    ("security", "min_password_length", "8", "number", "Minimum Password Length"),
    ("security", "enable_google_oauth", "true", "boolean", "Enable Google OAuth"),
    ("security", "enable_two_factor", "false", "boolean", "Enable Two-Factor Auth"),
    ("security", "allowed_domains", "", "string", "Allowed Email Domains (comma-separated)"),
    ("security", "cors_origins", "*", "string", "CORS Allowed Origins"),
    ("ai", "default_ai_provider", "OPENAI", "string", "Default AI Provider"),
    ("ai", "ai_enabled", "true", "boolean", "Enable AI Features"),
    ("ai", "max_tokens_per_request", "4096", "number", "Max Tokens per Request"),
    ("ai", "daily_request_limit", "100", "number", "Daily Request Limit per User"),
    ("ai", "enable_brainstorm", "true", "boolean", "Enable Brainstorm Feature"),
    ("ai", "enable_ai_chat", "true", "boolean", "Enable AI Chat"),
    ("ai", "enable_diagram_ai", "true", "boolean", "Enable AI Diagrams"),
    ("ai", "rate_limit_per_minute", "10", "number", "Rate Limit (requests/min)"),
    ("ai", "cost_alert_threshold", "50", "number", "Cost Alert Threshold ($)"),
    ("version", "app_tagline", "Collaborative Project Management Platform", "string", "App Tagline"),
    ("version", "api_version", "0.1.0", "string", "API Version"),
    ("version", "web_version", "0.1.0", "string", "Web Version"),
    ("version", "environment_label", "development", "string", "Environment Label"),
    ("version", "database_provider", "PostgreSQL", "string", "Database Provider"),
    ("version", "database_orm", "SQLAlchemy 2", "string", "Database ORM"),
    ("version", "backend_tech", "FastAPI", "string", "Backend Technology"),
    ("version", "auth_method", "JWT + Google OAuth", "string", "Auth Method"),
    ("version", "realtime_tech", "WebSocket", "string", "Realtime Technology"),
]

DEFAULT_WEB_VERSION = "0.1.0"


def to_stored(value: Any) -> tuple[str, str]:
    """Stored string and inferred type for a client-supplied value."""
    if isinstance(value, bool):
        return ("true" if value else "false"), "boolean"
    if isinstance(value, (int, float)):
        return str(value), "number"
    return ("" if value is None else str(value)), "string"


def setting_dict(setting: SystemSettingModel) -> dict:
    return {
        "id": setting.id,
        "key": setting.key,
        "value": setting.value,
        "type": setting.type,
        "category": setting.category,
        "description": setting.description,
        "updated_at": setting.updated_at,
    }


def format_uptime(seconds: float) -> str:
    seconds = int(seconds)
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{days}d {hours}h {minutes}m {secs}s"


class SettingsService:
    """System settings orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def ensure_seeded(self) -> None:
        if await system_setting_crud.count_where(self.db) > 0:
            return
        for category, key, value, type_, description in DEFAULT_SETTINGS:
            await system_setting_crud.create(
                self.db, category=category, key=key, value=value, type=type_, description=description
            )
        logger.info("System settings seeded", extra={"count": len(DEFAULT_SETTINGS)})

    async def get_value(self, key: str, default: str) -> str:
        setting = await system_setting_crud.get_by_key(self.db, key)
        return setting.value if setting is not None else default

    async def all_settings(self) -> dict[str, list[dict]]:
        """Settings grouped by category."""
        await self.ensure_seeded()
        grouped: dict[str, list[dict]] = {}
        for setting in await system_setting_crud.list_by_category(self.db):
            grouped.setdefault(setting.category, []).append(setting_dict(setting))
        return grouped

    async def category(self, category: str) -> list[dict]:
        await self.ensure_seeded()
        return [setting_dict(s) for s in await system_setting_crud.list_by_category(self.db, category)]

    async def upsert(
        self,
        key: str,
        value: Any,
        type_: str | None = None,
        category: str | None = None,
        description: str | None = None,
    ) -> dict:
        """Update a setting's value, creating it under ``category`` (default general) when missing."""
        stored, inferred = to_stored(value)
        setting = await system_setting_crud.get_by_key(self.db, key)
        if setting is None:
            setting = await system_setting_crud.create(
                self.db,
                key=key,
                value=stored,
                type=type_ or inferred,
                category=category or "general",
                description=description,
            )
        else:
            changes: dict[str, Any] = {"value": stored}
            if type_:
                changes["type"] = type_
            if category:
                changes["category"] = category
            if description is not None:
                changes["description"] = description
            setting = await system_setting_crud.update_instance(self.db, setting, **changes)
        logger.info("System setting updated", extra={"key": key})
        return setting_dict(setting)

    async def bulk_update(self, values: dict[str, Any]) -> list[dict]:
        return [await self.upsert(key, value) for key, value in values.items()]

    async def reset_category(self, category: str) -> list[dict]:
        """Restore a category's defaults; unknown categories reset nothing."""
        results = []
        for default_category, key, value, type_, description in DEFAULT_SETTINGS:
            if default_category != category:
                continue
            results.append(await self.upsert(key, value, type_, category, description))
        return results

    async def web_version(self) -> str:
        return await self.get_value("web_version", DEFAULT_WEB_VERSION)

    async def system_info(self) -> dict:
        """Editable version labels plus live runtime and host facts."""
        await self.ensure_seeded()
        labels = {s.key: s.value for s in await system_setting_crud.list_by_category(self.db, "version")}
        uptime = time.monotonic() - PROCESS_STARTED
        load = os.getloadavg() if hasattr(os, "getloadavg") else ()
        return {
            "app": {
                "name": await self.get_value("app_name", "BrainForge"),
                "tagline": labels.get("app_tagline", ""),
                "api_version": labels.get("api_version", ""),
                "web_version": labels.get("web_version", DEFAULT_WEB_VERSION),
                "environment": labels.get("environment_label") or get_settings().environment,
            },
            "runtime": {
                "python_version": platform.python_version(),
                "implementation": platform.python_implementation(),
                "platform": sys.platform,
                "arch": platform.machine(),
                "uptime": format_uptime(uptime),
                "uptime_seconds": int(uptime),
                "pid": os.getpid(),
            },
            "system": {
                "hostname": platform.node(),
                "os_type": platform.system(),
                "os_release": platform.release(),
                "cpus": os.cpu_count() or 0,
                "load_average": [round(value, 2) for value in load],
            },
            "database": {
                "provider": labels.get("database_provider", ""),
                "orm": labels.get("database_orm", ""),
            },
            "stack": {
                "backend": labels.get("backend_tech", ""),
                "auth": labels.get("auth_method", ""),
                "realtime": labels.get("realtime_tech", ""),
            },
        }
