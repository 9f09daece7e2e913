"""Key-value storage backends for persisted preferences.

The interface mirrors browser ``localStorage``: string keys, string values,
``None`` for a missing key. Backends may raise on any call (disabled storage,
full disk); callers that must not fail wrap them.
"""

from pathlib import Path
from typing import Protocol

from arch_graph_sync.schemas.defaults import DEFAULT_STORAGE_DIR

STORAGE_DIR = Path.cwd() / DEFAULT_STORAGE_DIR


class KeyValueStorage(Protocol):
    """Protocol for a durable string key-value store."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class JsonFileStorage:
    """One ``<key>.json`` file per key inside a directory.

    Attributes:
        directory: Folder holding the records. Created lazily on first write.
    """

    def __init__(self, directory: Path | str | None = None) -> None:
        self.directory = Path(directory) if directory is not None else STORAGE_DIR

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        file_path = self._path(key)
        if not file_path.exists():
            return None
        with open(file_path, "r", encoding="utf-8") as f:
            return f.read()

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self._path(key), "w", encoding="utf-8") as f:
            f.write(value)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class MemoryStorage:
    """In-process storage. Lives as long as the object does."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)
