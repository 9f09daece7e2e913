"""Selection and highlight schemas."""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from arch_graph_sync.schemas.defaults import HIGHLIGHT_PALETTE


class SelectionSource(str, Enum):
    """Which view originated a selection mutation."""

    MODEL = "model"
    GRAPH = "graph"
    CONTROL = "control"


class HighlightCategory(str, Enum):
    SPACE = "space"
    ELEMENT = "element"
    SYSTEM = "system"
    PIPE = "pipe"


class HighlightIntensity(str, Enum):
    PREVIEW = "preview"
    SELECTED = "selected"
    RESULT = "result"


class HighlightStyle(BaseModel):
    """Visual annotation for one element. Immutable once constructed."""

    color: str = Field(..., min_length=1, description="Visual color token")
    category: HighlightCategory
    intensity: HighlightIntensity

    model_config = ConfigDict(frozen=True)


def default_highlight_style(
    category: HighlightCategory | str,
    intensity: HighlightIntensity | str = HighlightIntensity.SELECTED,
) -> HighlightStyle:
    """Build a style using the palette color for ``category``/``intensity``."""
    category = HighlightCategory(category)
    intensity = HighlightIntensity(intensity)
    return HighlightStyle(
        color=HIGHLIGHT_PALETTE[category.value][intensity.value],
        category=category,
        intensity=intensity,
    )


class SelectionState(BaseModel):
    """Session-transient selection picture shared by every view.

    Not persisted: ids only make sense against the live dataset. The
    highlight map is a read-only view, so a snapshot handed to a consumer
    cannot be edited in place.
    """

    selected: frozenset[str] = Field(
        default_factory=frozenset, description="SelectionSet"
    )
    highlights: Mapping[str, HighlightStyle] = Field(
        default_factory=lambda: MappingProxyType({}),
        description="HighlightMap (element id -> style)",
    )
    hovered: str | None = Field(None, description="Transient hover preview")

    model_config = ConfigDict(frozen=True)

    @field_validator("highlights", mode="after")
    @classmethod
    def _read_only(
        cls, value: Mapping[str, HighlightStyle]
    ) -> Mapping[str, HighlightStyle]:
        return MappingProxyType(dict(value))

    @field_serializer("highlights")
    def _serialize_highlights(
        self, value: Mapping[str, HighlightStyle]
    ) -> dict[str, HighlightStyle]:
        return dict(value)

    def __deepcopy__(self, memo: dict) -> "SelectionState":
        # Frozen all the way down; a read-only mapping cannot be deep-copied.
        return self

    @property
    def is_empty(self) -> bool:
        return not self.selected and not self.highlights and self.hovered is None
