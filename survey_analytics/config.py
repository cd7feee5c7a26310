"""Configuration management using Pydantic Settings."""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Survey Analytics Engine"
    app_version: str = "1.0.0"
    debug: bool = False

    # Survey backend (questions, responses, module analytics, realtime stats)
    survey_api_url: str = "http://localhost:3001"
    survey_api_timeout: float = 4.0  # seconds; expiry counts as a failed poll

    # Polling intervals (seconds)
    module_poll_interval: float = 5.0
    realtime_poll_interval: float = 5.0

    # Fall back to mock/synthetic answers when the backend is unreachable
    enable_mock_fallback: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
