from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from task_tracker import __version__


class Settings(BaseSettings):
    """Runtime settings, read from TASK_TRACKER_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="TASK_TRACKER_",
        env_file=".env",
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = Field(3001, ge=1, le=65535)
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"
    app_version: str = __version__


@lru_cache
def get_settings() -> Settings:
    return Settings()
