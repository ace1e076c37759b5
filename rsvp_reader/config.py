"""Application configuration settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Reader settings loaded from environment variables (``RSVP_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="RSVP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "rsvp-reader"

    # Playback
    default_wpm: int = 300
    poll_interval_ms: int = 100

    # Context window shown around the current word
    context_before: int = 8
    context_after: int = 8

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Return cached reader settings."""
    return Settings()
