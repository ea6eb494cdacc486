"""
Settings API endpoints.

Storage backend selection (with the Move/Skip data migration), directory
re-grants and Pomodoro durations.
"""

from fastapi import APIRouter

from roadmap_tracker.api.deps import Coordinator
from roadmap_tracker.core.exceptions import ValidationError
from roadmap_tracker.infrastructure.local.filesystem_directory import FileSystemDirectoryPicker
from roadmap_tracker.interfaces.directory_handle import IDirectoryHandle
from roadmap_tracker.models.app_settings import (
    AppSettings,
    DirectoryGrantRequest,
    SettingsUpdateRequest,
    StorageStatus,
)
from roadmap_tracker.services.storage_coordinator import StorageCoordinator

router = APIRouter()


def _status(coordinator: StorageCoordinator) -> StorageStatus:
    return StorageStatus(
        settings=coordinator.app_settings,
        location=coordinator.describe_location(),
        directory_attached=coordinator.directory_handle is not None,
        switching=coordinator.switching,
        last_error=coordinator.last_error,
    )


async def _pick(coordinator: StorageCoordinator, path: str) -> IDirectoryHandle:
    handle = await coordinator.pick_directory(FileSystemDirectoryPicker(lambda: path))
    if handle is None:
        raise ValidationError(f"{path} is not a directory.")
    return handle


@router.get("", response_model=AppSettings)
async def get_app_settings(coordinator: Coordinator):
    return coordinator.app_settings


@router.put("", response_model=StorageStatus)
async def update_app_settings(request: SettingsUpdateRequest, coordinator: Coordinator):
    """
    Save settings.

    Changing the storage location requires ``migrationChoice``: ``move``
    copies the current data to the new location, ``skip`` starts from
    whatever the new location holds.
    """
    handle = None
    if request.settings.uses_file_system and request.directory_path:
        handle = await _pick(coordinator, request.directory_path)
    await coordinator.update_settings(request.settings, request.migration_choice, handle)
    return _status(coordinator)


@router.post("/directory", response_model=StorageStatus)
async def grant_directory(request: DirectoryGrantRequest, coordinator: Coordinator):
    """Re-grant the configured directory for this session and load from it."""
    handle = await _pick(coordinator, request.path)
    await coordinator.attach_directory(handle)
    return _status(coordinator)


@router.get("/status", response_model=StorageStatus)
async def get_storage_status(coordinator: Coordinator):
    return _status(coordinator)
