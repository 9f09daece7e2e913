"""Structured command records produced by the natural-language service.

The service itself is external; these schemas pin down its output contract
so the command panel can act on it.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CommandOperation(str, Enum):
    ISOLATE = "ISOLATE"
    HIDE = "HIDE"
    COLOR_CODE = "COLOR_CODE"
    SELECT = "SELECT"
    RESET = "RESET"
    UNKNOWN = "UNKNOWN"
    ROTATE_LEFT = "ROTATE_LEFT"
    ROTATE_RIGHT = "ROTATE_RIGHT"


class CommandPayload(BaseModel):
    """One filter/operation record."""

    operation: CommandOperation
    category: str | None = Field(None, description="Element category, e.g. 'Walls'")
    level: str | None = Field(None, description="Level code, e.g. 'L2'")
    material: str | None = Field(None, description="Material, e.g. 'Concrete'")

    model_config = ConfigDict(frozen=True)

    @property
    def has_filter(self) -> bool:
        return any((self.category, self.level, self.material))


class CommandSuggestion(BaseModel):
    """A follow-up action button offered alongside a response."""

    label: str
    payload: CommandPayload

    model_config = ConfigDict(frozen=True)


class CommandResponse(CommandPayload):
    """Full service response: the payload plus explanation and follow-ups."""

    keywords: list[str] = Field(default_factory=list)
    reasoning: str = ""
    suggestions: list[CommandSuggestion] = Field(default_factory=list)

    @classmethod
    def unknown(cls, reasoning: str = "") -> "CommandResponse":
        """Fallback response for unparseable service output."""
        return cls(operation=CommandOperation.UNKNOWN, reasoning=reasoning)
