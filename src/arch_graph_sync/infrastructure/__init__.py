"""Infrastructure package: storage backends and the preferences store."""

from arch_graph_sync.infrastructure.preferences_store import PreferencesStore
from arch_graph_sync.infrastructure.storage import (
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
)

__all__ = ["PreferencesStore", "KeyValueStorage", "JsonFileStorage", "MemoryStorage"]
