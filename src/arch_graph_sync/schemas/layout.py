"""Pane layout schemas: pane identities, pane states and the persisted record."""

from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    field_validator,
    model_validator,
)

from arch_graph_sync.schemas.defaults import DEFAULT_DIVIDER_POSITION


class PaneId(str, Enum):
    """The two panes arbitrated by the layout state machine."""

    PRIMARY = "primary"  # 3D model pane
    SECONDARY = "secondary"  # graph pane

    @property
    def other(self) -> "PaneId":
        return PaneId.SECONDARY if self is PaneId.PRIMARY else PaneId.PRIMARY


class PaneState(str, Enum):
    NORMAL = "normal"
    MAXIMIZED = "maximized"
    MINIMIZED = "minimized"


class PaneStates(BaseModel):
    """Per-pane state pair.

    Construction refuses a pair where the two panes are both
    minimized, so there is always one visible working pane.
    """

    primary: PaneState
    secondary: PaneState

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def normal(cls) -> "PaneStates":
        return cls(primary=PaneState.NORMAL, secondary=PaneState.NORMAL)

    @model_validator(mode="after")
    def _at_least_one_visible(self) -> "PaneStates":
        if (
            self.primary is PaneState.MINIMIZED
            and self.secondary is PaneState.MINIMIZED
        ):
            raise ValueError("both panes cannot be minimized at the same time")
        return self

    def get(self, pane: PaneId) -> PaneState:
        return getattr(self, pane.value)

    @property
    def all_normal(self) -> bool:
        return self.primary is PaneState.NORMAL and self.secondary is PaneState.NORMAL


class LayoutState(BaseModel):
    """In-memory layout snapshot owned by the engine."""

    divider_position: float = Field(
        DEFAULT_DIVIDER_POSITION, description="Current normalized split ratio"
    )
    previous_divider_position: float = Field(
        DEFAULT_DIVIDER_POSITION,
        description="Ratio cached before a maximize/minimize, used by restore",
    )
    pane_states: PaneStates = Field(default_factory=PaneStates.normal)

    model_config = ConfigDict(frozen=True)

    def to_preferences(self, timestamp: int) -> "LayoutPreferences":
        """Extract the persisted subset of this layout."""
        return LayoutPreferences(
            divider_position=self.divider_position,
            pane_states=self.pane_states,
            timestamp=timestamp,
        )


class LayoutPreferences(BaseModel):
    """The only record written to durable storage.

    Serialized with camelCase keys::

        {"dividerPosition": 0.6,
         "paneStates": {"primary": "normal", "secondary": "normal"},
         "timestamp": 1700000000000}

    Unknown keys are ignored. ``dividerPosition`` and ``timestamp`` are
    strict: a numeric string or a boolean is a mistyped field, not a number.
    """

    divider_position: float = Field(
        ...,
        alias="dividerPosition",
        strict=True,
        allow_inf_nan=False,
        description="Normalized split ratio",
    )
    pane_states: PaneStates = Field(..., alias="paneStates")
    timestamp: StrictInt | StrictFloat = Field(
        ..., description="Save time in epoch milliseconds"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("timestamp")
    @classmethod
    def _non_negative(cls, value: int | float) -> int | float:
        if value < 0:
            raise ValueError("timestamp must be non-negative")
        return value

    @classmethod
    def default(
        cls, divider_position: float = DEFAULT_DIVIDER_POSITION
    ) -> "LayoutPreferences":
        """Compiled-in fallback used whenever storage holds nothing usable."""
        return cls(
            divider_position=divider_position,
            pane_states=PaneStates.normal(),
            timestamp=0,
        )
