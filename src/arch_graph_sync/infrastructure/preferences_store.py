"""Layout Preferences Persistence.

Loads and saves the ``LayoutPreferences`` record. Storage is a trust
boundary (it can be edited, corrupted, full or disabled), so neither
operation ever raises: load falls back to the compiled-in default and save
reports failure through its return value and the log.
"""

import logging

from pydantic import ValidationError

from arch_graph_sync.infrastructure.storage import KeyValueStorage
from arch_graph_sync.schemas import LayoutPreferences
from arch_graph_sync.schemas.defaults import (
    DEFAULT_DIVIDER_POSITION,
    DEFAULT_STORAGE_KEY,
)

logger = logging.getLogger(__name__)

# Anything larger than this cannot be a layout record.
MAX_RECORD_BYTES = 64 * 1024


class PreferencesStore:
    """Persistence adapter for the layout subset of engine state."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_STORAGE_KEY,
        default_divider_position: float = DEFAULT_DIVIDER_POSITION,
    ) -> None:
        """Initialize the store.

        Args:
            storage: Backend holding the serialized record.
            key: Key of the record inside the backend.
            default_divider_position: Divider value of the fallback record.
        """
        self.storage = storage
        self.key = key
        self.default_divider_position = default_divider_position

    def default(self) -> LayoutPreferences:
        return LayoutPreferences.default(self.default_divider_position)

    def load(self) -> LayoutPreferences:
        """Read and validate the stored record.

        Returns:
            The stored preferences, or the default when the record is absent,
            oversized, not JSON, or fails schema validation.
        """
        try:
            raw = self.storage.get_item(self.key)
        except Exception as e:
            logger.warning(f"Layout storage unavailable, using defaults: {e}")
            return self.default()

        if raw is None:
            logger.debug(f"No stored layout under '{self.key}', using defaults")
            return self.default()

        size = len(raw.encode("utf-8"))
        if size > MAX_RECORD_BYTES:
            logger.warning(
                f"Stored layout under '{self.key}' is {size} bytes "
                f"(limit {MAX_RECORD_BYTES}), "
                "ignoring it and using defaults"
            )
            return self.default()

        try:
            prefs = LayoutPreferences.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Discarding invalid layout record '{self.key}' "
                f"({e.error_count()} errors): {e.errors()[0]['msg']}"
            )
            return self.default()

        logger.debug(f"Loaded layout preferences: {prefs.model_dump(mode='json')}")
        return prefs

    def save(self, prefs: LayoutPreferences) -> bool:
        """Serialize and write the record.

        Returns:
            True when the write went through, False when the backend failed.
            A failure never affects in-memory state.
        """
        try:
            self.storage.set_item(self.key, prefs.model_dump_json(by_alias=True))
        except Exception as e:
            logger.warning(f"Failed to save layout preferences: {e}")
            return False
        return True

    def clear(self) -> bool:
        """Forget the stored record."""
        try:
            self.storage.remove_item(self.key)
        except Exception as e:
            logger.warning(f"Failed to clear layout preferences: {e}")
            return False
        return True
