"""
LocalStorage backend.

Keeps the document as one JSON string under ``LOCAL_STORAGE_KEY`` in the
key-value store. All operations complete synchronously; the async methods
exist to satisfy the shared store contract.
"""

import json
from typing import Any, Optional

from roadmap_tracker.core.config import get_settings
from roadmap_tracker.core.exceptions import InfrastructureError, ParseError, WriteFailureError
from roadmap_tracker.infrastructure.local.key_value_store import KeyValueStore
from roadmap_tracker.interfaces.document_store import IDocumentStore
from roadmap_tracker.models.document import AllRoadmapsData


class LocalDocumentStore(IDocumentStore):
    """Document store backed by the local key-value store."""

    def __init__(self, kv_store: KeyValueStore, key: Optional[str] = None):
        self._kv = kv_store
        self._key = key or get_settings().LOCAL_STORAGE_KEY

    def read(self) -> Optional[Any]:
        """Synchronously read and parse the stored document."""
        raw = self._kv.get_item(self._key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(f"Stored data under {self._key!r} is not valid JSON: {e}")

    def write(self, document: AllRoadmapsData) -> None:
        """Synchronously serialize and store the document."""
        try:
            self._kv.set_item(self._key, json.dumps(document.to_json_dict()))
        except InfrastructureError as e:
            raise WriteFailureError(f"Failed to save data to local storage: {e.message}")

    async def load(self) -> Optional[Any]:
        return self.read()

    async def save(self, document: AllRoadmapsData) -> None:
        self.write(document)

    async def clear(self) -> None:
        self.write(AllRoadmapsData.empty())

    def describe(self) -> str:
        return "local storage"
