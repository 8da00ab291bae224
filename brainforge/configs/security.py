"""
Security configuration settings.

JWT secrets and lifetimes, password hashing cost, API-key encryption key
and Google OAuth client id.

Dependencies: pydantic, pydantic_settings
System role: Authentication and secret-handling configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from brainforge.configs.base import ENV_FILE_CONFIG, BaseSettings


class SecuritySettings(BaseSettings):
    """Authentication and encryption configuration."""

    model_config = SettingsConfigDict(**ENV_FILE_CONFIG, env_prefix="AUTH_")

    jwt_secret: str = Field(
        default="change-me-access-secret",
        description="HS256 secret for access tokens",
    )
    jwt_refresh_secret: str = Field(
        default="change-me-refresh-secret",
        description="HS256 secret for refresh tokens",
    )
    access_token_ttl_minutes: int = Field(default=15, description="Access token lifetime")
    refresh_token_ttl_days: int = Field(default=7, description="Refresh token lifetime")
    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor")
    encryption_key: str = Field(
        default="0" * 64,
        description="AES-256-GCM key for stored AI provider keys (64 hex chars)",
    )
    password_reset_ttl_minutes: int = Field(default=60, description="Password reset token lifetime")
    invitation_ttl_days: int = Field(default=7, description="Team invitation lifetime")
    google_client_id: str | None = Field(default=None, description="Google OAuth client id")
