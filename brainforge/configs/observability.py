"""
Langfuse settings for tracing AI gateway generations.

Tracing switches on only when both keys are present and enable_tracing is
left on.

Dependencies: pydantic_settings
System role: Observability configuration for tracing and logging
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from brainforge.configs.base import ENV_FILE_CONFIG


class ObservabilitySettings(BaseSettings):
    """LANGFUSE_* environment."""

    model_config = SettingsConfigDict(**ENV_FILE_CONFIG, env_prefix="LANGFUSE_")

    public_key: str | None = None
    secret_key: str | None = None
    host: str = "https://cloud.langfuse.com"
    enable_tracing: bool = True
    capture_content: bool = Field(
        default=True,
        description="Send prompt and completion text; when off only lengths are traced",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.enable_tracing and self.public_key and self.secret_key)
