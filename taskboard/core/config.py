"""Configuration management for taskboard."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Task Store Configuration
    task_api_url: str = Field(default="http://localhost:8080/api", description="Task store API base URL")
    task_api_token: str | None = Field(default=None, description="Initial bearer credential for the task store")
    api_timeout_seconds: float = Field(default=30.0, description="Timeout for a single task store request")
    list_max_retries: int = Field(default=3, description="Attempts for fetching the task list before giving up")
    list_retry_delay: float = Field(default=1.0, description="Base delay between list attempts (seconds)")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name")


# Application Constants
class Constants:
    """Application-wide constants."""

    # HTTP Status Codes
    HTTP_UNAUTHORIZED: int = 401
    HTTP_SERVER_ERROR: int = 500

    # Field limits enforced by the task store
    TITLE_MAX_LENGTH: int = 255
    DESCRIPTION_MAX_LENGTH: int = 1000

    # Calendar
    MONTHS_PER_YEAR: int = 12


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
