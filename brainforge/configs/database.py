"""
Relational database settings.

PostgreSQL (asyncpg) by default; POSTGRES_URL accepts any SQLAlchemy async
URL, which is how tests and single-user setups point at sqlite+aiosqlite.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from brainforge.configs.base import ENV_FILE_CONFIG, BaseSettings


class DatabaseSettings(BaseSettings):
    """Connection and pool settings for the BrainForge database."""

    model_config = SettingsConfigDict(**ENV_FILE_CONFIG, env_prefix="POSTGRES_")

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = "postgres"
    db: str = Field(default="brainforge", description="Database name")
    sslmode: str = Field(default="disable", description="'require' enables TLS")

    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = False

    url: str | None = Field(default=None, description="Full async URL overriding the fields above")

    @property
    def async_database_url(self) -> str:
        if self.url:
            return self.url
        query = "?ssl=require" if self.sslmode == "require" else ""
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}{query}"

    @property
    def uses_sqlite(self) -> bool:
        """SQLite engines take no pool sizing arguments."""
        return self.async_database_url.startswith("sqlite")
