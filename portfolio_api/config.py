"""
Configuration management for the portfolio API.
Uses pydantic-settings for environment-based configuration.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Portland Redbird Portfolio API"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str | None = None
    SQLITE_FALLBACK_URL: str = "sqlite+aiosqlite:///./portfolio_dev.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Timeouts (seconds) for each external call
    DB_ACQUIRE_TIMEOUT: float = 10.0
    DB_BATCH_TIMEOUT: float = 30.0
    BUCKET_TIMEOUT: float = 30.0

    # Storage Backend Selection
    STORAGE_BACKEND: Literal["http", "local"] = "local"

    # File bucket settings
    FILE_BUCKET_ENDPOINT: str = "http://localhost:9000"
    FILE_BUCKET_API_KEY: str | None = None
    BUCKET_NAME: str = "portfolio-images"
    # Public base URL images are served from; defaults to the bucket endpoint
    BUCKET_PUBLIC_URL: str | None = None

    # Local Storage Settings
    LOCAL_STORAGE_PATH: str = "./storage"

    # Backend API key for write operations
    BACKEND_API_KEY: str | None = None

    # Development Mode - bypasses API key validation for local testing
    DEV_MODE: bool = False

    # File Upload Limits
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def active_database_url(self) -> str:
        """Database URL in use, falling back to SQLite when none is configured."""
        return self.DATABASE_URL or self.SQLITE_FALLBACK_URL

    @property
    def using_sqlite(self) -> bool:
        return "sqlite" in self.active_database_url

    @property
    def public_bucket_url(self) -> str:
        return (self.BUCKET_PUBLIC_URL or self.FILE_BUCKET_ENDPOINT).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
