"""Abstract interfaces for infrastructure abstraction."""

from roadmap_tracker.interfaces.directory_handle import IDirectoryHandle, IDirectoryPicker
from roadmap_tracker.interfaces.document_store import IDocumentStore

__all__ = [
    "IDocumentStore",
    "IDirectoryHandle",
    "IDirectoryPicker",
]
