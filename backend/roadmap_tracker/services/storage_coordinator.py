"""
Storage coordinator.

Owns the live document, the app settings and the session's directory
handle. Loads from the active backend through the schema migrator, persists
after every mutation, and runs the Move/Skip protocol when the user changes
storage backend or directory.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

from roadmap_tracker.core.exceptions import (
    BusinessLogicError,
    InfrastructureError,
    ParseError,
    PermissionDeniedError,
    RoadmapTrackerError,
    ValidationError,
    WriteFailureError,
)
from roadmap_tracker.core.logger import setup_logger
from roadmap_tracker.infrastructure.local.directory_document_store import (
    DirectoryDocumentStore,
    verify_directory_permission,
)
from roadmap_tracker.infrastructure.local.local_document_store import LocalDocumentStore
from roadmap_tracker.infrastructure.local.settings_store import SettingsStore
from roadmap_tracker.interfaces.directory_handle import IDirectoryHandle, IDirectoryPicker
from roadmap_tracker.interfaces.document_store import IDocumentStore
from roadmap_tracker.models.app_settings import AppSettings
from roadmap_tracker.models.document import AllRoadmapsData
from roadmap_tracker.models.enums import MigrationChoice, PermissionMode, PermissionState
from roadmap_tracker.services.schema_migrator import migrate, normalize

logger = setup_logger(__name__)

DirectoryStoreFactory = Callable[[IDirectoryHandle], IDocumentStore]


class StorageCoordinator:
    """Single owner of persisted state for one session."""

    def __init__(
        self,
        local_store: LocalDocumentStore,
        settings_store: SettingsStore,
        directory_store_factory: DirectoryStoreFactory = DirectoryDocumentStore,
    ):
        self.local_store = local_store
        self.settings_store = settings_store
        self._directory_store_factory = directory_store_factory

        self.app_settings = AppSettings.defaults()
        self.document = AllRoadmapsData.empty()
        self.directory_handle: Optional[IDirectoryHandle] = None
        self.last_error: Optional[str] = None

        self._lock = asyncio.Lock()
        self._switching = False

    # ===========================================
    # State
    # ===========================================

    @property
    def switching(self) -> bool:
        return self._switching

    def store_for(
        self,
        app_settings: AppSettings,
        handle: Optional[IDirectoryHandle],
    ) -> Optional[IDocumentStore]:
        """Store for the given settings, None if the directory is not attached."""
        if app_settings.uses_file_system:
            return self._directory_store_factory(handle) if handle is not None else None
        return self.local_store

    @property
    def active_store(self) -> Optional[IDocumentStore]:
        return self.store_for(self.app_settings, self.directory_handle)

    def describe_location(self) -> str:
        store = self.active_store
        if store is not None:
            return store.describe()
        return f'directory "{self.app_settings.directory_name}" (not attached)'

    def ensure_mutable(self) -> None:
        """Reject mutations while a backend switch is in flight."""
        if self._switching:
            raise BusinessLogicError("A storage switch is in progress. Try again when it has finished.")

    # ===========================================
    # Loading
    # ===========================================

    async def initialize(self) -> AllRoadmapsData:
        """Load settings and the document at startup."""
        self.app_settings = self.settings_store.load()
        logger.info("Storage location: %s", self.app_settings.storage_location.value)
        return await self.reload()

    async def reload(self) -> AllRoadmapsData:
        """Reload the live document from the active backend."""
        async with self._lock:
            self.document = await self._load_active()
        return self.document

    async def _load_active(self) -> AllRoadmapsData:
        self.last_error = None
        store = self.active_store
        if store is None:
            if self.app_settings.directory_name:
                self.last_error = (
                    f'File System storage is selected for "{self.app_settings.directory_name}", '
                    "but directory access needs to be granted again. "
                    "Please go to Settings to re-select it."
                )
                logger.warning(self.last_error)
            return AllRoadmapsData.empty()

        try:
            raw = await store.load()
        except PermissionDeniedError as e:
            self.last_error = (
                f"{e.message} Please re-select or grant permissions via Settings."
            )
            logger.warning("Permission %s for %s", e.state, store.describe())
            self.directory_handle = None
            return AllRoadmapsData.empty()
        except ParseError as e:
            logger.warning("%s Starting with empty data.", e.message)
            return AllRoadmapsData.empty()
        except InfrastructureError as e:
            self.last_error = f"Failed to load data from {store.describe()}: {e.message}"
            logger.error(self.last_error)
            return AllRoadmapsData.empty()

        result = migrate(raw)
        document = result.document
        if store is self.local_store and result.rewrite:
            try:
                await store.save(document)
            except WriteFailureError as e:
                logger.warning("Could not write back migrated local data: %s", e.message)
        return document

    # ===========================================
    # Saving
    # ===========================================

    async def persist(self) -> None:
        """
        Save the live document to the active backend.

        Raises:
            WriteFailureError: The save failed; the in-memory document is kept
            PermissionDeniedError: The directory refused write access
        """
        self.ensure_mutable()
        store = self.active_store
        if store is None:
            self.last_error = (
                "File System storage is selected. "
                "Please re-select the directory in Settings to load/save data."
            )
            raise WriteFailureError(self.last_error)

        async with self._lock:
            try:
                await store.save(self.document)
            except (WriteFailureError, PermissionDeniedError) as e:
                self.last_error = e.message
                logger.error("Failed to save data to %s: %s", store.describe(), e.message)
                raise
        self.last_error = None

    # ===========================================
    # Directory handles
    # ===========================================

    async def pick_directory(self, picker: IDirectoryPicker) -> Optional[IDirectoryHandle]:
        """Let the user choose a directory. None if they cancelled."""
        return await picker.pick()

    async def attach_directory(self, handle: IDirectoryHandle) -> AllRoadmapsData:
        """
        Re-grant access to the configured directory for this session and load from it.

        Raises:
            ValidationError: FileSystem storage is not selected, or the handle
                points at a different directory
            PermissionDeniedError: The user did not grant access
        """
        self.ensure_mutable()
        if not self.app_settings.uses_file_system:
            raise ValidationError("File System storage is not selected.")
        expected = self.app_settings.directory_name
        if expected and handle.name != expected:
            raise ValidationError(
                f'Selected directory "{handle.name}" is not the configured "{expected}". '
                "Change the storage location in Settings to use a different directory."
            )

        state = await verify_directory_permission(handle, PermissionMode.READWRITE)
        if state != PermissionState.GRANTED:
            self.last_error = f'Permission denied for the directory "{handle.name}".'
            raise PermissionDeniedError(self.last_error, state=state)

        self.directory_handle = handle
        return await self.reload()

    # ===========================================
    # Settings and backend switch
    # ===========================================

    async def update_settings(
        self,
        new_settings: AppSettings,
        choice: Optional[MigrationChoice] = None,
        new_handle: Optional[IDirectoryHandle] = None,
    ) -> AppSettings:
        """
        Save new settings, switching backend when the storage location changes.

        Raises:
            ValidationError: The location changed without a Move/Skip choice
                or without a directory handle
        """
        self.ensure_mutable()
        if new_settings.uses_file_system and new_handle is not None:
            new_settings = new_settings.model_copy(update={"directory_name": new_handle.name})
        elif new_settings.uses_file_system and not new_settings.directory_name:
            # Keep the configured directory when only other settings change
            new_settings = new_settings.model_copy(
                update={"directory_name": self.app_settings.directory_name}
            )
        if not new_settings.uses_file_system:
            new_settings = new_settings.model_copy(update={"directory_name": None})

        if self.app_settings.same_location(new_settings):
            self.settings_store.save(new_settings)
            self.app_settings = new_settings
            return new_settings

        if choice is None:
            raise ValidationError(
                "The storage location changed: choose whether to move or skip existing data."
            )
        await self.switch_backend(new_settings, choice, new_handle)
        return self.app_settings

    async def switch_backend(
        self,
        new_settings: AppSettings,
        choice: MigrationChoice,
        new_handle: Optional[IDirectoryHandle] = None,
    ) -> AllRoadmapsData:
        """
        Move or skip existing data while changing backend/location.

        Either the switch completes (settings committed, new document live)
        or it is aborted with prior settings, handle and document unchanged.

        Raises:
            ValidationError: A directory target without a handle
            RoadmapTrackerError: The switch was aborted
        """
        self.ensure_mutable()
        if new_settings.uses_file_system and new_handle is None:
            raise ValidationError("Please select a directory to store data in.")

        old_settings = self.app_settings
        old_store = self.active_store
        new_store = self.store_for(new_settings, new_handle)
        leaving_local = not old_settings.uses_file_system

        self._switching = True
        try:
            async with self._lock:
                if choice == MigrationChoice.MOVE:
                    document = await self._read_for_move(old_store)
                    if document is None:
                        logger.info("Nothing to move, loading %s instead", new_store.describe())
                        document = await self._read_fresh(new_store)
                    else:
                        await new_store.save(document)
                        logger.info("Moved data from %s to %s", self.describe_location(), new_store.describe())
                else:
                    document = await self._read_fresh(new_store)
                self.settings_store.save(new_settings)
                if leaving_local:
                    await self._clear_local_or_restore(old_settings)
        except RoadmapTrackerError as e:
            self.last_error = f"Storage switch aborted: {e.message}"
            logger.error(self.last_error)
            raise
        finally:
            self._switching = False

        self.app_settings = new_settings
        self.directory_handle = new_handle if new_settings.uses_file_system else None
        self.document = document
        self.last_error = None
        return document

    async def _read_for_move(self, old_store: Optional[IDocumentStore]) -> Optional[AllRoadmapsData]:
        """The document to move, None if the old location holds no data."""
        if old_store is None:
            raise PermissionDeniedError(
                f'Cannot move data: access to "{self.app_settings.directory_name}" has not been granted '
                "in this session. Re-select it first, or skip moving data.",
                state=PermissionState.PROMPT,
            )
        document = normalize(await old_store.load())
        if document == AllRoadmapsData.empty():
            return None
        return document

    async def _read_fresh(self, new_store: IDocumentStore) -> AllRoadmapsData:
        try:
            raw = await new_store.load()
        except ParseError as e:
            logger.warning("%s Starting with empty data.", e.message)
            return AllRoadmapsData.empty()
        return normalize(raw)

    async def _clear_local_or_restore(self, old_settings: AppSettings) -> None:
        try:
            await self.local_store.clear()
        except WriteFailureError:
            try:
                self.settings_store.save(old_settings)
            except WriteFailureError as e:
                logger.error("Could not restore previous settings: %s", e.message)
            raise
