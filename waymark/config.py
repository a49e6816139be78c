"""Configuration management for Waymark."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # Sandboxed environments set variables directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from WAYMARK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WAYMARK_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Data store (PostgREST style API)
    API_BASE_URL: str = Field(
        default="http://localhost:3000", description="Base URL of the data API"
    )
    API_TOKEN: str = Field(default="", description="Bearer token for the data API")
    REQUEST_TIMEOUT: float = Field(default=15.0, description="Gateway request timeout in seconds")

    # Environment
    ENV: str = Field(default="dev", description="Environment: dev, staging, prod")
    LOG_LEVEL: str = Field(default="", description="Override log level (DEBUG, INFO, ...)")
    LOG_FORMAT: Literal["text", "json"] = Field(default="text", description="Log line format")

    # HTTP surface
    ALLOWED_ORIGINS: str = Field(default="*", description="Comma separated CORS origins")
    PUBLIC_BASE_URL: str = Field(
        default="http://localhost:8000", description="Base URL printed into location codes"
    )

    # Preview sessions
    SESSION_MAX_AGE: int = Field(
        default=3600, description="Seconds before an inactive preview is cleaned up"
    )

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings loaded from the environment
    """
    return Settings()
