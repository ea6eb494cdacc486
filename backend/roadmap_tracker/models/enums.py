"""
Enum definitions for the application.

Values are the exact strings stored in the persisted JSON document.
"""

from enum import Enum


class TimeScale(str, Enum):
    """Grouping granularity of a roadmap."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class StorageLocation(str, Enum):
    """Storage backend selected in app settings."""

    LOCAL_STORAGE = "localStorage"
    FILE_SYSTEM = "fileSystem"


class PermissionMode(str, Enum):
    """Access mode requested on a directory handle."""

    READ = "read"
    READWRITE = "readwrite"


class PermissionState(str, Enum):
    """
    Outcome of a permission query or request.

    PROMPT is only returned by a query (the user has not decided yet).
    CANCELLED means the user dismissed the prompt, as opposed to refusing it.
    """

    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"
    CANCELLED = "cancelled"


class MigrationChoice(str, Enum):
    """What to do with existing data when the storage backend changes."""

    MOVE = "move"
    SKIP = "skip"


class SessionType(str, Enum):
    """Pomodoro session type."""

    WORK = "work"
    BREAK = "break"
