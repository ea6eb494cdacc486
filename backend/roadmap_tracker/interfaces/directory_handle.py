"""
Directory capability interfaces.

A directory handle is a session-scoped capability to a user-chosen directory.
It is never persisted; after a restart the user has to grant it again.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from roadmap_tracker.models.enums import PermissionMode, PermissionState


class IDirectoryHandle(ABC):
    """Permission-gated access to the files of one directory."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the directory."""
        pass

    @abstractmethod
    async def query_permission(self, mode: PermissionMode) -> PermissionState:
        """Return the current permission without prompting."""
        pass

    @abstractmethod
    async def request_permission(self, mode: PermissionMode) -> PermissionState:
        """
        Ask the user for permission.

        Returns:
            GRANTED, DENIED, or CANCELLED if the prompt was dismissed
        """
        pass

    @abstractmethod
    async def read_text(self, file_name: str) -> str:
        """
        Read a file inside the directory.

        Raises:
            NotFoundError: The file does not exist
            ParseError: The file is not valid UTF-8 text
        """
        pass

    @abstractmethod
    async def write_text(self, file_name: str, content: str) -> None:
        """Create or replace a file inside the directory."""
        pass


class IDirectoryPicker(ABC):
    """Lets the user choose a directory."""

    @abstractmethod
    async def pick(self) -> Optional[IDirectoryHandle]:
        """Return the chosen directory, or None if the user cancelled."""
        pass
