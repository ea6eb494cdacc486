"""
Dependency injection for API endpoints.

One storage coordinator (and therefore one live document) exists per
process; it is created lazily and cached.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from roadmap_tracker.infrastructure.local.key_value_store import KeyValueStore
from roadmap_tracker.infrastructure.local.local_document_store import LocalDocumentStore
from roadmap_tracker.infrastructure.local.settings_store import SettingsStore
from roadmap_tracker.services.roadmap_service import RoadmapService
from roadmap_tracker.services.storage_coordinator import StorageCoordinator


@lru_cache()
def get_key_value_store() -> KeyValueStore:
    """Get key-value store instance."""
    return KeyValueStore()


@lru_cache()
def get_storage_coordinator() -> StorageCoordinator:
    """Get storage coordinator instance."""
    kv_store = get_key_value_store()
    return StorageCoordinator(
        local_store=LocalDocumentStore(kv_store),
        settings_store=SettingsStore(kv_store),
    )


def get_roadmap_service(
    coordinator: Annotated[StorageCoordinator, Depends(get_storage_coordinator)],
) -> RoadmapService:
    """Get roadmap service bound to the coordinator."""
    return RoadmapService(coordinator)


Coordinator = Annotated[StorageCoordinator, Depends(get_storage_coordinator)]
RoadmapSvc = Annotated[RoadmapService, Depends(get_roadmap_service)]
