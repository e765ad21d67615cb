"""Application configuration and settings management."""
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables or .env."""

    model_config = SettingsConfigDict(
        env_file=(Path(__file__).resolve().parent.parent / ".." / ".env"),
        env_file_encoding="utf-8",
        env_prefix="MOVIE_CATALOG_",
        extra="ignore",
    )

    app_name: str = "Movie Catalog"
    secret_key: str = "dev-secret-key-change-in-production"
    environment: str = "development"

    # Database
    database_url: str = "sqlite+aiosqlite:///./movie_catalog.db"

    # Sessions
    session_ttl_seconds: int = 24 * 60 * 60
    session_purge_interval_seconds: int = 60 * 60

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "info"

    @field_validator("environment", "log_level", mode="before")
    @classmethod
    def _normalize(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def session_cookie_secure(self) -> bool:
        """Only mark cookies Secure when serving production traffic."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings instance."""

    return Settings()
