"""
User-facing application settings.

These select the active storage backend and hold Pomodoro durations.
They are persisted in the local key-value store under ``APP_SETTINGS_KEY``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from roadmap_tracker.core.config import get_settings
from roadmap_tracker.models.enums import MigrationChoice, StorageLocation


class AppSettings(BaseModel):
    """Persisted app settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    storage_location: StorageLocation = StorageLocation.LOCAL_STORAGE
    directory_name: Optional[str] = Field(
        None, description="Name of the chosen directory when fileSystem is used"
    )
    pomodoro_work_minutes: int = Field(25, ge=1, le=240)
    pomodoro_break_minutes: int = Field(5, ge=1, le=120)

    @classmethod
    def defaults(cls) -> "AppSettings":
        settings = get_settings()
        return cls(
            pomodoro_work_minutes=settings.DEFAULT_POMODORO_WORK_MINUTES,
            pomodoro_break_minutes=settings.DEFAULT_POMODORO_BREAK_MINUTES,
        )

    @property
    def uses_file_system(self) -> bool:
        return self.storage_location == StorageLocation.FILE_SYSTEM

    def same_location(self, other: "AppSettings") -> bool:
        """True if both settings point at the same backend and directory."""
        if self.storage_location != other.storage_location:
            return False
        if self.uses_file_system:
            return self.directory_name == other.directory_name
        return True


class SettingsUpdateRequest(BaseModel):
    """New settings plus the Move/Skip decision for existing data."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    settings: AppSettings
    migration_choice: Optional[MigrationChoice] = None
    directory_path: Optional[str] = Field(
        None, description="Directory to use when switching to fileSystem storage"
    )


class DirectoryGrantRequest(BaseModel):
    """Grant access to a local directory by path."""

    path: str = Field(..., min_length=1)


class StorageStatus(BaseModel):
    """Current storage state for display."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    settings: AppSettings
    location: str
    directory_attached: bool
    switching: bool
    last_error: Optional[str] = None
