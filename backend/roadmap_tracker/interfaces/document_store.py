"""
Document store interface.

Defines the contract shared by both storage backends.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from roadmap_tracker.models.document import AllRoadmapsData


class IDocumentStore(ABC):
    """Abstract interface for persisting the roadmap document."""

    @abstractmethod
    async def load(self) -> Optional[Any]:
        """
        Load the raw stored document.

        Returns:
            Parsed JSON value, or None when nothing is stored at this location

        Raises:
            ParseError: Stored content is not valid JSON
            PermissionDeniedError: Access to the location was refused
        """
        pass

    @abstractmethod
    async def save(self, document: AllRoadmapsData) -> None:
        """
        Persist the document.

        Raises:
            WriteFailureError: The document could not be written
            PermissionDeniedError: Write access to the location was refused
        """
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Replace the stored copy with the empty default document."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Human readable description of the storage location."""
        pass
