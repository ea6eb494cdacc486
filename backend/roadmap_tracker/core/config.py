"""
Application configuration using Pydantic Settings.

Values come from environment variables (or ``.env``). The storage backend
actually in use is a user setting persisted in the key-value store, not an
environment variable; see ``models.app_settings``.
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
    ENVIRONMENT: Literal["local", "test"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Local key-value store ("LocalStorage" backend)
    # ===========================================
    LOCAL_STORE_URL: str = "sqlite:///./roadmap-local.db"
    LOCAL_STORAGE_KEY: str = "roadmapTrackerData"
    APP_SETTINGS_KEY: str = "roadmapAppSettings"

    # ===========================================
    # Directory backend
    # ===========================================
    DATA_FILE_NAME: str = "roadmap-data.json"

    # ===========================================
    # Defaults
    # ===========================================
    DEFAULT_ROADMAP_NAME: str = "My Default Roadmap"
    DEFAULT_POMODORO_WORK_MINUTES: int = 25
    DEFAULT_POMODORO_BREAK_MINUTES: int = 5

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
