"""Factory wiring a SyncEngine to file-backed preferences.

No module-level engine exists: the application's root scope calls
``create_engine`` once per session and hands the result to every view.
"""

from pathlib import Path

from arch_graph_sync.infrastructure import JsonFileStorage, PreferencesStore
from arch_graph_sync.schemas import EngineConfig
from arch_graph_sync.services.bus import SyncBus
from arch_graph_sync.services.engine import SyncEngine


def create_engine(
    config: EngineConfig | None = None,
    storage_dir: Path | str | None = None,
) -> SyncEngine:
    """Build an engine whose layout survives restarts.

    Args:
        config: Engine settings. Defaults to ``EngineConfig()``.
        storage_dir: Folder for the preferences file. Defaults to
            ``arch_graph_sync.infrastructure.storage.STORAGE_DIR``.
    """
    config = config or EngineConfig()
    store = PreferencesStore(
        JsonFileStorage(storage_dir),
        key=config.storage_key,
        default_divider_position=config.default_divider_position,
    )
    return SyncEngine(config=config, store=store, bus=SyncBus())
