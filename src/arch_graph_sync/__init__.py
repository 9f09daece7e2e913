"""Cross-view selection, highlight and pane layout synchronization.

Typical wiring::

    from arch_graph_sync import create_engine

    engine = create_engine()
    unsubscribe = engine.subscribe("focus-requested", graph_view.center_on)
    engine.select_element("wall-42", source="model")
"""

from arch_graph_sync.logging_config import configure_logging
from arch_graph_sync.services import (
    CommandPanel,
    GraphDataSource,
    SyncBus,
    SyncEngine,
    create_engine,
)

__all__ = [
    "SyncEngine",
    "SyncBus",
    "create_engine",
    "GraphDataSource",
    "CommandPanel",
    "configure_logging",
]
