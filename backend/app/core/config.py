"""
Application configuration using Pydantic Settings.

Infrastructure switching (auth provider, holiday calendar) is controlled by
environment variables.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./facility.db"

    # ===========================================
    # Auth
    # ===========================================
    # mock: bearer token is the user id (development only)
    # jwt: HS256 token signed with JWT_SECRET, "sub" is the user id
    AUTH_PROVIDER: Literal["mock", "jwt"] = "mock"
    JWT_SECRET: str = ""
    JWT_ISSUER: str = "facility-manager"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    # ===========================================
    # Recurrence
    # ===========================================
    RECURRENCE_DEFAULT_MAX_OCCURRENCES: int = 52
    # Upper bound on candidate dates examined per expansion, kept or skipped
    RECURRENCE_MAX_ITERATIONS: int = 1000

    # ===========================================
    # Holidays
    # ===========================================
    # none: no date is a holiday
    # static: HOLIDAY_DATES, comma separated "YYYY-MM-DD" or yearly "MM-DD"
    HOLIDAY_PROVIDER: Literal["none", "static"] = "none"
    HOLIDAY_DATES: str = ""

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
