"""
Aggregated BrainForge settings.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from brainforge.configs.app import AppSettings
from brainforge.configs.base import BaseSettings
from brainforge.configs.database import DatabaseSettings
from brainforge.configs.observability import ObservabilitySettings
from brainforge.configs.security import SecuritySettings

DEFAULT_SECRETS = {
    "AUTH_JWT_SECRET": "change-me-access-secret",
    "AUTH_JWT_REFRESH_SECRET": "change-me-refresh-secret",
    "AUTH_ENCRYPTION_KEY": "0" * 64,
}


class Settings(BaseSettings):
    """Runtime mode plus one section per concern."""

    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    app: AppSettings = AppSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    def insecure_defaults(self) -> list[str]:
        """Names of secret env vars still holding their shipped placeholder."""
        current = {
            "AUTH_JWT_SECRET": self.security.jwt_secret,
            "AUTH_JWT_REFRESH_SECRET": self.security.jwt_refresh_secret,
            "AUTH_ENCRYPTION_KEY": self.security.encryption_key,
        }
        return [name for name, value in current.items() if value == DEFAULT_SECRETS[name]]


@lru_cache
def get_settings() -> Settings:
    """
    Process-wide settings, read from the environment once.

    Tests that change environment variables call ``get_settings.cache_clear()``.
    """
    return Settings()
