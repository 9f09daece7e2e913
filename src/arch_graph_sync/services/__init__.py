"""Services package for cross-view synchronization.

This package contains:
- engine.py: SyncEngine, the shared selection/layout store
- bus.py: SyncBus, the typed publish/subscribe channel
- engine_instance.py: create_engine factory with file-backed preferences
- graph_source.py: Graph data source queried by views
- command_panel.py: Consumer applying structured command records
"""

from arch_graph_sync.services.bus import SyncBus
from arch_graph_sync.services.command_panel import (
    CommandPanel,
    parse_command_response,
)
from arch_graph_sync.services.engine import SyncEngine
from arch_graph_sync.services.engine_instance import create_engine
from arch_graph_sync.services.graph_source import (
    GraphDataSource,
    highlight_category_for,
)

__all__ = [
    "SyncEngine",
    "SyncBus",
    "create_engine",
    "GraphDataSource",
    "highlight_category_for",
    "CommandPanel",
    "parse_command_response",
]
