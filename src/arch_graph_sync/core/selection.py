"""Selection/highlight model.

Pure transformations of ``SelectionState``. Element ids are opaque: nothing
here checks them against a dataset, so an unknown id is never an error.
"""

from collections.abc import Iterable
from types import MappingProxyType

from arch_graph_sync.schemas import HighlightStyle, SelectionState


def select(state: SelectionState, element_ids: Iterable[str]) -> SelectionState:
    """Add ids to the selection set. Selecting a member again is a no-op."""
    selected = state.selected | frozenset(element_ids)
    return state.model_copy(update={"selected": selected})


def deselect(state: SelectionState, element_ids: Iterable[str]) -> SelectionState:
    selected = state.selected - frozenset(element_ids)
    return state.model_copy(update={"selected": selected})


def highlight(
    state: SelectionState, element_ids: Iterable[str], style: HighlightStyle
) -> SelectionState:
    """Assign ``style`` to every id; the last write wins.

    The selection set is untouched: an element can be highlighted without
    being selected.
    """
    highlights = dict(state.highlights)
    for element_id in element_ids:
        highlights[element_id] = style
    return state.model_copy(update={"highlights": MappingProxyType(highlights)})


def unhighlight(state: SelectionState, element_ids: Iterable[str]) -> SelectionState:
    highlights = dict(state.highlights)
    for element_id in element_ids:
        highlights.pop(element_id, None)
    return state.model_copy(update={"highlights": MappingProxyType(highlights)})


def set_hovered(state: SelectionState, element_id: str | None) -> SelectionState:
    """Replace the hovered element. Hover never touches the selection."""
    return state.model_copy(update={"hovered": element_id})


def clear() -> SelectionState:
    """Empty selection, highlights and hover in one step."""
    return SelectionState()


def unique_ids(element_ids: Iterable[str]) -> tuple[str, ...]:
    """De-duplicate ids, keeping first-seen order (for event payloads)."""
    return tuple(dict.fromkeys(element_ids))
