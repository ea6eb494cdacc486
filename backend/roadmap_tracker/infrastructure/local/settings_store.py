"""
Persistence of ``AppSettings`` in the local key-value store.
"""

import json

from pydantic import ValidationError as PydanticValidationError

from roadmap_tracker.core.config import get_settings
from roadmap_tracker.core.exceptions import InfrastructureError, WriteFailureError
from roadmap_tracker.core.logger import setup_logger
from roadmap_tracker.infrastructure.local.key_value_store import KeyValueStore
from roadmap_tracker.models.app_settings import AppSettings

logger = setup_logger(__name__)


class SettingsStore:
    """Loads and saves app settings. Unreadable settings fall back to defaults."""

    def __init__(self, kv_store: KeyValueStore, key: str | None = None):
        self._kv = kv_store
        self._key = key or get_settings().APP_SETTINGS_KEY

    def load(self) -> AppSettings:
        raw = self._kv.get_item(self._key)
        if raw is None:
            return AppSettings.defaults()
        try:
            return AppSettings.model_validate(json.loads(raw))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.warning("Stored app settings are invalid, using defaults: %s", e)
            return AppSettings.defaults()

    def save(self, app_settings: AppSettings) -> None:
        try:
            self._kv.set_item(
                self._key,
                app_settings.model_dump_json(by_alias=True),
            )
        except InfrastructureError as e:
            raise WriteFailureError(f"Failed to save settings: {e.message}")
