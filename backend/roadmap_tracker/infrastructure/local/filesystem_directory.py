"""
Local file system implementation of the directory capability.

Permission is tracked per handle, so it lasts only as long as the handle
(one session). Whether the user is asked interactively is decided by the
``prompt`` callable; without one, access is granted whenever the operating
system allows it.
"""

import inspect
import os
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from roadmap_tracker.core.exceptions import InfrastructureError, NotFoundError, ParseError
from roadmap_tracker.core.logger import setup_logger
from roadmap_tracker.interfaces.directory_handle import IDirectoryHandle, IDirectoryPicker
from roadmap_tracker.models.enums import PermissionMode, PermissionState

logger = setup_logger(__name__)

PromptResult = Union[PermissionState, Awaitable[PermissionState]]
PermissionPrompt = Callable[["FileSystemDirectoryHandle", PermissionMode], PromptResult]
PathChooser = Callable[[], Union[Optional[str], Awaitable[Optional[str]]]]


async def _resolve(value):
    if inspect.isawaitable(value):
        return await value
    return value


def _os_allows(path: Path, mode: PermissionMode) -> bool:
    if not path.is_dir():
        return False
    flags = os.R_OK | os.X_OK
    if mode == PermissionMode.READWRITE:
        flags |= os.W_OK
    return os.access(path, flags)


class FileSystemDirectoryHandle(IDirectoryHandle):
    """Handle to a directory on the local file system."""

    def __init__(self, path: Union[str, Path], prompt: Optional[PermissionPrompt] = None):
        self.path = Path(path).expanduser().resolve()
        self._prompt = prompt
        self._granted: set[PermissionMode] = set()

    @property
    def name(self) -> str:
        return self.path.name or str(self.path)

    async def query_permission(self, mode: PermissionMode) -> PermissionState:
        if not _os_allows(self.path, mode):
            return PermissionState.DENIED
        if mode in self._granted or PermissionMode.READWRITE in self._granted:
            return PermissionState.GRANTED
        return PermissionState.PROMPT

    async def request_permission(self, mode: PermissionMode) -> PermissionState:
        if not _os_allows(self.path, mode):
            logger.info("Directory %s is not accessible for %s", self.path, mode.value)
            return PermissionState.DENIED
        if self._prompt is None:
            state = PermissionState.GRANTED
        else:
            state = PermissionState(await _resolve(self._prompt(self, mode)))
        if state == PermissionState.GRANTED:
            self._granted.add(mode)
        logger.info("Permission %s for %s on %s", state.value, mode.value, self.path)
        return state

    async def read_text(self, file_name: str) -> str:
        file_path = self.path / file_name
        if not file_path.exists():
            raise NotFoundError(f"File not found: {file_name}")
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise ParseError(f"File {file_name!r} is not valid UTF-8 text: {e}")
        except OSError as e:
            raise InfrastructureError(f"Failed to read file {file_name!r}: {e}")

    async def write_text(self, file_name: str, content: str) -> None:
        try:
            with open(self.path / file_name, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise InfrastructureError(f"Failed to write file {file_name!r}: {e}")


class FileSystemDirectoryPicker(IDirectoryPicker):
    """Directory picker driven by a path chooser (dialog, CLI prompt, request body)."""

    def __init__(self, chooser: PathChooser, prompt: Optional[PermissionPrompt] = None):
        self._chooser = chooser
        self._prompt = prompt

    async def pick(self) -> Optional[FileSystemDirectoryHandle]:
        chosen = await _resolve(self._chooser())
        if not chosen:
            logger.info("User cancelled directory picker.")
            return None
        path = Path(chosen).expanduser()
        if not path.is_dir():
            logger.error("Error picking directory: %s is not a directory", path)
            return None
        return FileSystemDirectoryHandle(path, prompt=self._prompt)
