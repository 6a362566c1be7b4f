from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application-level settings for the FastAPI service.

    This is separate from personal_manager.db.config.Settings, which focuses on the
    relational database layer.
    """

    # FastAPI metadata
    APP_NAME: str = Field(default="Personal Manager API")
    APP_DESCRIPTION: str = Field(
        default=(
            "Backend API for a personal portfolio site: profile, resume records, "
            "planner, blog and guestbook."
        )
    )
    APP_VERSION: str = Field(default="0.1.0")

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:4173"],
        description="Comma-separated list or JSON array of allowed origins.",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)
    CORS_ALLOW_METHODS: List[str] = Field(default_factory=lambda: ["*"])
    CORS_ALLOW_HEADERS: List[str] = Field(default_factory=lambda: ["*"])

    # JWT
    JWT_SECRET_KEY: str = Field(
        default="PersonalManager_SuperSecret_Key_2025_Must_Be_Long_Enough_256bits!",
        description="Symmetric key used to sign access tokens.",
    )
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_ISSUER: str = Field(default="PersonalManagerAPI")
    JWT_AUDIENCE: str = Field(default="PersonalManagerClient")
    JWT_EXPIRY_HOURS: int = Field(default=24, ge=1, description="Access token lifetime in hours.")

    # Storage
    STORAGE_BACKEND: Literal["json", "sql"] = Field(
        default="json",
        description="Persistence strategy: flat JSON files or the relational database.",
    )
    DATA_DIR: Path = Field(
        default=Path("data") / "json",
        description="Directory holding one JSON file per entity type.",
    )

    # Startup behavior
    CREATE_TABLES_ON_STARTUP: bool = Field(
        default=True,
        description="If true and STORAGE_BACKEND=sql, create missing tables at startup.",
    )
    AUTO_SEED: bool = Field(
        default=False,
        description="If true, seed an admin account when the user collection is empty.",
    )

    LOG_LEVEL: str = Field(default="INFO")

    # Environment label
    ENVIRONMENT: Optional[str] = Field(
        default=None, description="Environment label (dev/test/prod)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """
        Accept both JSON array format and comma-separated formats for CORS origins.
        """
        if v is None:
            return ["*"]
        if isinstance(v, str):
            parts = [p.strip() for p in v.split(",") if p.strip()]
            return parts or ["*"]
        if isinstance(v, list):
            return v or ["*"]
        return ["*"]


# PUBLIC_INTERFACE
def get_app_settings() -> AppSettings:
    """
    Return a new AppSettings instance populated from environment variables.

    Note:
      A fresh instance is built on every call so tests can change the environment
      between cases. Long-lived objects (the repository factory, the app) keep the
      instance they were created with.
    """
    return AppSettings()
