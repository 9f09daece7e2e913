"""Configuration schema for the synchronization engine."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from arch_graph_sync.schemas.defaults import (
    DEFAULT_DIVIDER_POSITION,
    DEFAULT_FOCUS_ANIMATE,
    DEFAULT_MAX_DIVIDER_RATIO,
    DEFAULT_MIN_DIVIDER_RATIO,
    DEFAULT_STORAGE_KEY,
    DEFAULT_SYNC_ENABLED,
)


class EngineConfig(BaseModel):
    """Compiled-in engine settings.

    The divider bounds are enforced on every write: each position is clamped
    into ``[min_ratio, max_ratio]``. ``default_divider_position`` is what a
    fresh session (or a layout reset) starts from.
    """

    min_ratio: float = Field(
        DEFAULT_MIN_DIVIDER_RATIO,
        ge=0,
        le=1,
        description="Lower bound of the divider position",
    )
    max_ratio: float = Field(
        DEFAULT_MAX_DIVIDER_RATIO,
        ge=0,
        le=1,
        description="Upper bound of the divider position",
    )
    default_divider_position: float = Field(
        DEFAULT_DIVIDER_POSITION,
        ge=0,
        le=1,
        description="Divider position used on first boot and on reset",
    )
    storage_key: str = Field(
        DEFAULT_STORAGE_KEY,
        min_length=1,
        description="Key of the persisted layout record",
    )
    sync_enabled: bool = Field(
        DEFAULT_SYNC_ENABLED,
        description="Whether cross-view focus requests are broadcast at start",
    )
    focus_animate: bool = Field(
        DEFAULT_FOCUS_ANIMATE,
        description="Value of the 'animate' flag on focus-requested events",
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_bounds(self) -> "EngineConfig":
        if self.min_ratio >= self.max_ratio:
            raise ValueError(
                f"min_ratio ({self.min_ratio}) must be below "
                f"max_ratio ({self.max_ratio})"
            )
        if not self.min_ratio <= self.default_divider_position <= self.max_ratio:
            raise ValueError(
                f"default_divider_position ({self.default_divider_position}) "
                f"must lie within [{self.min_ratio}, {self.max_ratio}]"
            )
        return self

    def clamp(self, position: float) -> float:
        """Clamp a divider position into the configured bounds."""
        return max(self.min_ratio, min(self.max_ratio, position))
