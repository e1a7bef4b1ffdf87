"""Application settings and configuration.

This module defines all configuration options for the Radio Calico service and
its headless listening client. Settings are loaded from environment variables
(or a `.env` file) with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Radio Calico", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    # Honor X-Forwarded-For / X-Real-IP ahead of the socket peer (behind a reverse proxy)
    trust_proxy: bool = Field(default=False, alias="TRUST_PROXY")

    # Database configuration
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    database_backend: Literal["sqlite", "postgres"] = Field(
        default="sqlite", alias="DATABASE_BACKEND"
    )
    database_path: str = Field(default="./database.db", alias="DATABASE_PATH")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # PostgreSQL connection pieces, used when DATABASE_URL is unset
    postgres_user: str = Field(default="radiocalico_user", alias="POSTGRES_USER")
    postgres_password: str | None = Field(default=None, alias="POSTGRES_PASSWORD")
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")
    postgres_db: str = Field(default="radiocalico", alias="POSTGRES_DB")

    # Connection pool settings (server-backed databases only)
    db_pool_size: int = Field(default=20, alias="DB_POOL_SIZE")
    db_pool_timeout: float = Field(default=2.0, alias="DB_POOL_TIMEOUT")
    db_pool_recycle: int = Field(default=30, alias="DB_POOL_RECYCLE")

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "DELETE"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    # Listening client
    metadata_url: str = Field(
        default="https://d3d4yli4hf5bmh.cloudfront.net/metadatav2.json",
        alias="METADATA_URL",
    )
    api_base_url: str = Field(default="http://localhost:3000", alias="API_BASE_URL")
    metadata_poll_seconds: float = Field(default=30.0, alias="METADATA_POLL_SECONDS")
    identity_cache_path: Path = Field(
        default=Path("~/.radio_calico/identity.json"),
        alias="IDENTITY_CACHE_PATH",
    )
    identity_ttl_hours: float = Field(default=24.0, alias="IDENTITY_TTL_HOURS")
    http_timeout_seconds: float = Field(default=10.0, alias="HTTP_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The test database URL in testing mode, otherwise DATABASE_URL or a
            URL assembled from the backend-specific settings.
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        if self.database_url:
            return self.database_url
        if self.database_backend == "postgres":
            auth = self.postgres_user
            if self.postgres_password:
                auth = f"{auth}:{self.postgres_password}"
            return (
                f"postgresql+psycopg://{auth}@{self.postgres_host}:"
                f"{self.postgres_port}/{self.postgres_db}"
            )
        return f"sqlite:///{self.database_path}"

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


settings = Settings()
