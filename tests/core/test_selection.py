import pytest

from arch_graph_sync.core import selection as selection_ops
from arch_graph_sync.schemas import (
    HighlightCategory,
    HighlightIntensity,
    SelectionState,
    default_highlight_style,
)


def test_select_is_idempotent():
    state = selection_ops.select(SelectionState(), ["wall-1"])
    again = selection_ops.select(state, ["wall-1"])
    assert again.selected == frozenset({"wall-1"})


def test_select_returns_new_state():
    state = SelectionState()
    new = selection_ops.select(state, ["wall-1", "wall-2"])
    assert state.selected == frozenset()
    assert new.selected == {"wall-1", "wall-2"}


def test_deselect_unknown_id_is_noop():
    state = selection_ops.select(SelectionState(), ["wall-1"])
    assert selection_ops.deselect(state, ["nope"]).selected == {"wall-1"}
    assert selection_ops.deselect(state, ["wall-1"]).selected == frozenset()


def test_highlight_last_write_wins(highlight_style_factory):
    preview = highlight_style_factory(intensity="preview", color="#93c5fd")
    result = highlight_style_factory(intensity="result", color="#1d4ed8")

    state = selection_ops.highlight(SelectionState(), ["wall-1", "wall-2"], preview)
    state = selection_ops.highlight(state, ["wall-2"], result)

    assert state.highlights["wall-1"] == preview
    assert state.highlights["wall-2"] == result
    assert state.selected == frozenset()


def test_unhighlight_ignores_missing_ids(highlight_style_factory):
    style = highlight_style_factory()
    state = selection_ops.highlight(SelectionState(), ["wall-1"], style)
    state = selection_ops.unhighlight(state, ["wall-1", "missing"])
    assert state.highlights == {}


def test_highlight_map_cannot_be_edited_in_place(highlight_style_factory):
    state = selection_ops.highlight(
        SelectionState(), ["wall-1"], highlight_style_factory()
    )
    with pytest.raises(TypeError):
        state.highlights["wall-2"] = highlight_style_factory()
    with pytest.raises(TypeError):
        SelectionState().highlights["wall-1"] = highlight_style_factory()

    built = SelectionState(highlights={"wall-1": highlight_style_factory()})
    with pytest.raises(TypeError):
        del built.highlights["wall-1"]


def test_hover_does_not_touch_selection():
    state = selection_ops.select(SelectionState(), ["wall-1"])
    hovered = selection_ops.set_hovered(state, "wall-9")
    assert hovered.hovered == "wall-9"
    assert hovered.selected == {"wall-1"}
    assert selection_ops.set_hovered(hovered, None).hovered is None


def test_clear_empties_everything(highlight_style_factory):
    state = selection_ops.select(SelectionState(), ["wall-1"])
    state = selection_ops.highlight(state, ["wall-1"], highlight_style_factory())
    state = selection_ops.set_hovered(state, "wall-1")
    assert not state.is_empty
    assert selection_ops.clear().is_empty


def test_unique_ids_keeps_first_seen_order():
    assert selection_ops.unique_ids(["b", "a", "b", "c", "a"]) == ("b", "a", "c")
    assert selection_ops.unique_ids([]) == ()


def test_default_highlight_style_uses_palette():
    style = default_highlight_style("element")
    assert style.category is HighlightCategory.ELEMENT
    assert style.intensity is HighlightIntensity.SELECTED
    assert style.color == "#3b82f6"

    pipe = default_highlight_style(HighlightCategory.PIPE, "result")
    assert pipe.intensity is HighlightIntensity.RESULT
    assert pipe.color
