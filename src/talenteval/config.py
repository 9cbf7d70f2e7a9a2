"""
Application Configuration

Uses Pydantic Settings for type-safe environment variable management.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # ========================================================================
    # APPLICATION
    # ========================================================================

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    DEBUG: bool = False

    # ========================================================================
    # DATABASE
    # ========================================================================

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./talenteval.db",
        description="Async SQLAlchemy connection string (postgresql+asyncpg in deployment)",
    )

    # ========================================================================
    # IDENTITY PROVIDER
    # ========================================================================

    IDENTITY_API_KEY: str = Field(default="", description="Identity provider web API key")

    IDENTITY_BASE_URL: str = Field(
        default="https://identitytoolkit.googleapis.com/v1",
        description="Identity provider REST base URL",
    )

    IDENTITY_TIMEOUT_SECONDS: float = 30.0

    # ========================================================================
    # SESSIONS
    # ========================================================================

    SESSION_COOKIE_NAME: str = "talenteval_session"

    SESSION_COOKIE_MAX_AGE: int = Field(
        default=60 * 60 * 24 * 30,
        description="Lifetime in seconds of a 'remember me' session cookie",
    )

    # ========================================================================
    # ACTIVITY LOG
    # ========================================================================

    ACTIVITY_LOG_LIMIT: int = Field(default=50, ge=1, le=1000)

    @field_validator("IDENTITY_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls: type[Settings], v: str) -> str:  # noqa: ARG003
        """Normalize base URL so endpoint paths can be appended directly."""
        return v.rstrip("/")

    # ========================================================================
    # COMPUTED PROPERTIES
    # ========================================================================

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == "production"

    @property
    def is_local(self) -> bool:
        """Check if running locally."""
        return self.ENVIRONMENT == "local"


# Global settings instance
settings = Settings()
