from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings for the relational storage backend.

    Only consulted when STORAGE_BACKEND=sql. Reads from environment variables
    (or .env via pydantic-settings):
      - DATABASE_URL
      - SQL_ECHO
    """

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./data/personal_manager.db",
        description="Async SQLAlchemy URL (default: local SQLite file via aiosqlite).",
    )

    # SQLAlchemy engine options
    SQL_ECHO: bool = Field(
        default=False, description="Echo SQL statements for debugging (default False)"
    )

    # General environment
    ENVIRONMENT: Optional[str] = Field(
        default=None, description="Environment label (dev/test/prod)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def async_database_url(self) -> str:
        """
        Return the URL with an async driver. Bare sqlite:// URLs are upgraded to
        sqlite+aiosqlite:// so AsyncEngine can use them.
        """
        url = self.DATABASE_URL
        if url.startswith("sqlite://"):
            return "sqlite+aiosqlite://" + url[len("sqlite://"):]
        return url

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return a settings object for the database layer."""
    # Settings is cheap to construct; a new instance picks up environment changes.
    return Settings()
