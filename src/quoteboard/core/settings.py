"""Application settings and configuration.

This module defines all configuration options for the Quoteboard application.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    Site-level advertising options live in the database and are read through
    :class:`quoteboard.services.site_config.SiteConfig` instead.
    """

    # Application metadata
    app_name: str = Field(default="Quoteboard", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    admin_account_ids: list[str] = Field(default_factory=list, alias="ADMIN_ACCOUNT_IDS")

    # Database configuration
    database_url: str = Field(default="sqlite:///./quoteboard.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Anonymous like sets are kept per device in Redis (or process memory for local runs)
    redis_url: str = Field(default="redis://localhost:6379", alias="REDIS_URL")
    like_store_backend: Literal["redis", "memory"] = Field(
        default="redis",
        alias="LIKE_STORE_BACKEND",
    )

    # Public links
    public_base_url: str = Field(default="http://localhost:8080", alias="PUBLIC_BASE_URL")

    # Feed
    feed_page_size: int = Field(default=10, alias="FEED_PAGE_SIZE")
    feed_max_page_size: int = Field(default=50, alias="FEED_MAX_PAGE_SIZE")
    popular_quotes_limit: int = Field(default=5, alias="POPULAR_QUOTES_LIMIT")

    # Impressions are only counted once an item stayed mounted this long
    view_delay_ms: int = Field(default=2000, alias="VIEW_DELAY_MS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def view_delay_seconds(self) -> float:
        """Return the impression delay in seconds, never negative."""
        return max(0.0, self.view_delay_ms / 1000.0)

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


settings = Settings()  # type: ignore[call-arg]
