"""
HTTP application settings.

CORS origins, upload directory and the public frontend URL used when
building invitation links.

Dependencies: pydantic_settings
System role: Web surface configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from brainforge.configs.base import ENV_FILE_CONFIG, BaseSettings


class AppSettings(BaseSettings):
    """FastAPI application configuration."""

    model_config = SettingsConfigDict(**ENV_FILE_CONFIG, env_prefix="APP_")

    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
    upload_dir: str = Field(default="uploads", description="Directory served under /uploads")
    frontend_url: str = Field(default="http://localhost:3000", description="Web client base URL")
    host: str = Field(default="0.0.0.0", description="Bind host for uvicorn")
    port: int = Field(default=4000, description="Bind port for uvicorn")
    api_prefix: str = Field(default="/api", description="Prefix for every REST route")
