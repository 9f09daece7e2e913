"""Full engine snapshot."""

from pydantic import BaseModel, ConfigDict, Field

from arch_graph_sync.schemas.layout import LayoutState
from arch_graph_sync.schemas.selection import SelectionState


class EngineState(BaseModel):
    """Immutable snapshot of everything the engine arbitrates.

    Every engine operation replaces the snapshot with a new one; no
    consumer ever observes a half-applied mutation.
    """

    layout: LayoutState = Field(default_factory=LayoutState)
    selection: SelectionState = Field(default_factory=SelectionState)
    sync_enabled: bool = True
    last_sync_time: int | None = Field(
        None, description="Epoch ms of the last synchronized selection change"
    )

    model_config = ConfigDict(frozen=True)
