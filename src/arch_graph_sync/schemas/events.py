"""Synchronization bus event schemas.

Every event is a one-way, fire-and-forget notification. Field names are
snake_case in Python and camelCase on the wire (see ``SyncEvent.to_payload``).
"""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from arch_graph_sync.schemas.selection import HighlightStyle, SelectionSource


class EventName(str, Enum):
    SELECTION_CHANGED = "selection-changed"
    HIGHLIGHT_CHANGED = "highlight-changed"
    FOCUS_REQUESTED = "focus-requested"


class SelectionChangeType(str, Enum):
    SELECT = "select"
    DESELECT = "deselect"
    CLEAR = "clear"


class SyncEvent(BaseModel):
    """Base class for bus events. Subclasses set ``name``."""

    name: ClassVar[EventName]

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    def to_payload(self) -> dict:
        """JSON-ready payload with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class SelectionChanged(SyncEvent):
    """Emitted on every select/deselect and on clear.

    For ``clear`` events ``element_ids`` lists the ids that were selected
    just before the clear.
    """

    name: ClassVar[EventName] = EventName.SELECTION_CHANGED

    type: SelectionChangeType
    source: SelectionSource
    element_ids: tuple[str, ...] = Field(default_factory=tuple)
    timestamp: int = Field(..., description="Epoch milliseconds")


class HighlightChanged(SyncEvent):
    """Emitted on every highlight write. ``highlight_style`` is None on removal."""

    name: ClassVar[EventName] = EventName.HIGHLIGHT_CHANGED

    node_ids: tuple[str, ...]
    highlight_style: HighlightStyle | None


class FocusRequested(SyncEvent):
    """Asks graph-like views to center on ``node_ids``.

    Only emitted for selections that originate in the model view.
    """

    name: ClassVar[EventName] = EventName.FOCUS_REQUESTED

    node_ids: tuple[str, ...]
    animate: bool = True
