"""
FileSystem backend.

Stores the document as ``DATA_FILE_NAME`` inside a user-granted directory.
Permission is re-validated on every load (read) and save (read/write).
"""

import json
from typing import Any, Optional

from roadmap_tracker.core.config import get_settings
from roadmap_tracker.core.exceptions import (
    InfrastructureError,
    NotFoundError,
    ParseError,
    PermissionDeniedError,
    WriteFailureError,
)
from roadmap_tracker.core.logger import setup_logger
from roadmap_tracker.interfaces.directory_handle import IDirectoryHandle
from roadmap_tracker.interfaces.document_store import IDocumentStore
from roadmap_tracker.models.document import AllRoadmapsData
from roadmap_tracker.models.enums import PermissionMode, PermissionState

logger = setup_logger(__name__)


async def verify_directory_permission(
    handle: IDirectoryHandle,
    mode: PermissionMode = PermissionMode.READWRITE,
) -> PermissionState:
    """Query the permission and request it if not already granted."""
    state = await handle.query_permission(mode)
    if state == PermissionState.GRANTED:
        return state
    return await handle.request_permission(mode)


class DirectoryDocumentStore(IDocumentStore):
    """Document store inside a directory reached through a handle."""

    def __init__(self, handle: IDirectoryHandle, file_name: Optional[str] = None):
        self.handle = handle
        self.file_name = file_name or get_settings().DATA_FILE_NAME

    async def _require(self, mode: PermissionMode) -> None:
        state = await verify_directory_permission(self.handle, mode)
        if state == PermissionState.GRANTED:
            return
        access = "Read" if mode == PermissionMode.READ else "Read/Write"
        if state == PermissionState.CANCELLED:
            message = f'{access} permission request for "{self.handle.name}" was dismissed.'
        else:
            message = f'{access} permission for the directory "{self.handle.name}" was not granted.'
        raise PermissionDeniedError(message, state=state)

    async def load(self) -> Optional[Any]:
        await self._require(PermissionMode.READ)
        try:
            content = await self.handle.read_text(self.file_name)
        except NotFoundError:
            logger.info('File "%s" not found in directory.', self.file_name)
            return None
        if not content.strip():
            return None
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ParseError(f"Error parsing {self.file_name}: {e}")

    async def save(self, document: AllRoadmapsData) -> None:
        await self._require(PermissionMode.READWRITE)
        content = json.dumps(document.to_json_dict(), indent=2)
        try:
            await self.handle.write_text(self.file_name, content)
        except InfrastructureError as e:
            logger.error('Error writing file "%s": %s', self.file_name, e.message)
            raise WriteFailureError(f"Failed to save data to file system: {e.message}")

    async def clear(self) -> None:
        await self.save(AllRoadmapsData.empty())

    def describe(self) -> str:
        return f'directory "{self.handle.name}"'
