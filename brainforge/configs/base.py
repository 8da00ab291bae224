"""
Shared settings base for BrainForge.

Every concern-specific settings class inherits the .env loading rules and the
runtime fields below; concern classes only add their env prefix and fields.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

ENV_FILE_CONFIG = {
    "env_file": ".env",
    "env_file_encoding": "utf-8",
    "case_sensitive": False,
    "extra": "ignore",
}


class BaseSettings(PydanticBaseSettings):
    """Runtime mode shared by the API process and its config sections."""

    model_config = SettingsConfigDict(**ENV_FILE_CONFIG)

    environment: str = Field(
        default="development",
        description="Deployment name shown in /admin/settings/system/info",
    )
    debug: bool = Field(
        default=False,
        description="Expose unhandled error messages in 500 responses",
    )
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in {"production", "prod"}
