"""Schemas package.

- config.py: Engine configuration (EngineConfig)
- layout.py: Pane layout models and the persisted LayoutPreferences record
- selection.py: Selection/highlight models
- events.py: Synchronization bus events
- state.py: Full engine snapshot
- graph.py: Graph data source records
- commands.py: Structured command records
"""

from .commands import (
    CommandOperation,
    CommandPayload,
    CommandResponse,
    CommandSuggestion,
)
from .config import EngineConfig
from .events import (
    EventName,
    FocusRequested,
    HighlightChanged,
    SelectionChanged,
    SelectionChangeType,
    SyncEvent,
)
from .graph import (
    EdgeType,
    GraphData,
    GraphEdge,
    GraphNode,
    NodeType,
    ValidationResult,
)
from .layout import LayoutPreferences, LayoutState, PaneId, PaneState, PaneStates
from .selection import (
    HighlightCategory,
    HighlightIntensity,
    HighlightStyle,
    SelectionSource,
    SelectionState,
    default_highlight_style,
)
from .state import EngineState

__all__ = [
    "EngineConfig",
    "PaneId",
    "PaneState",
    "PaneStates",
    "LayoutState",
    "LayoutPreferences",
    "SelectionSource",
    "HighlightCategory",
    "HighlightIntensity",
    "HighlightStyle",
    "SelectionState",
    "default_highlight_style",
    "EventName",
    "SelectionChangeType",
    "SyncEvent",
    "SelectionChanged",
    "HighlightChanged",
    "FocusRequested",
    "EngineState",
    "NodeType",
    "EdgeType",
    "GraphNode",
    "GraphEdge",
    "GraphData",
    "ValidationResult",
    "CommandOperation",
    "CommandPayload",
    "CommandSuggestion",
    "CommandResponse",
]
