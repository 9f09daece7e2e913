"""Pane layout state machine.

Two panes, each ``normal``, ``maximized`` or ``minimized``, split by a
divider ratio. Every transition is a pure function from one ``LayoutState``
to the next and preserves two invariants: the panes are never both
minimized, and the divider position stays within the configured bounds.

A refused transition returns the input state object unchanged (callers can
test for refusal with ``is``).
"""

import logging
import math

from arch_graph_sync.schemas import (
    EngineConfig,
    LayoutState,
    PaneId,
    PaneState,
    PaneStates,
)

logger = logging.getLogger(__name__)


def initial_layout(
    config: EngineConfig, divider_position: float | None = None
) -> LayoutState:
    """Build the starting layout, optionally from a hydrated divider value."""
    position = config.default_divider_position
    if divider_position is not None and math.isfinite(divider_position):
        position = config.clamp(divider_position)
    return LayoutState(divider_position=position, previous_divider_position=position)


def set_divider_position(
    state: LayoutState, position: float, config: EngineConfig
) -> LayoutState:
    """Clamp and write the divider; a manual drag restores the two-pane view.

    The dragged ratio also becomes the cached value a later restore returns
    to. NaN is refused. Infinities clamp to the nearest bound.
    """
    if math.isnan(position):
        logger.warning("Ignoring NaN divider position")
        return state
    position = config.clamp(position)
    return state.model_copy(
        update={
            "divider_position": position,
            "previous_divider_position": position,
            "pane_states": PaneStates.normal(),
        }
    )


def maximize_pane(state: LayoutState, pane: PaneId) -> LayoutState:
    """Maximize ``pane`` and minimize the other one."""
    pane = PaneId(pane)
    states = PaneStates(
        **{pane.value: PaneState.MAXIMIZED, pane.other.value: PaneState.MINIMIZED}
    )
    return state.model_copy(
        update={
            "previous_divider_position": _cache_divider(state),
            "pane_states": states,
        }
    )


def minimize_pane(state: LayoutState, pane: PaneId) -> LayoutState:
    """Minimize ``pane``; refused iff the other pane is already minimized.

    When allowed, the other pane is normalized to ``normal`` so the layout
    always ends with exactly one minimized pane and one working pane.
    """
    pane = PaneId(pane)
    if state.pane_states.get(pane.other) is PaneState.MINIMIZED:
        logger.warning(
            f"Refusing to minimize '{pane.value}': "
            f"'{pane.other.value}' is already minimized"
        )
        return state

    states = PaneStates(
        **{pane.value: PaneState.MINIMIZED, pane.other.value: PaneState.NORMAL}
    )
    return state.model_copy(
        update={
            "previous_divider_position": _cache_divider(state),
            "pane_states": states,
        }
    )


def restore_pane(
    state: LayoutState, pane: PaneId, config: EngineConfig
) -> LayoutState:
    """Restore the whole layout, whichever pane is named.

    The two-pane model has no meaningful "one maximized, one normal" state,
    so both panes return to normal and the divider to its cached value.
    """
    logger.debug(f"Restoring layout from pane '{PaneId(pane).value}'")
    return state.model_copy(
        update={
            "divider_position": config.clamp(state.previous_divider_position),
            "pane_states": PaneStates.normal(),
        }
    )


def restore_all_panes(state: LayoutState, config: EngineConfig) -> LayoutState:
    """Both panes normal, divider back to the compiled-in default."""
    default = config.default_divider_position
    return state.model_copy(
        update={
            "divider_position": default,
            "previous_divider_position": default,
            "pane_states": PaneStates.normal(),
        }
    )


def reset_divider_position(state: LayoutState, config: EngineConfig) -> LayoutState:
    """Divider back to default; pane states untouched."""
    return state.model_copy(
        update={"divider_position": config.default_divider_position}
    )


def reset_layout(config: EngineConfig) -> LayoutState:
    return initial_layout(config)


def invariants_hold(state: LayoutState, config: EngineConfig) -> bool:
    """True when ``state`` has a visible pane and an in-bounds divider."""
    states = state.pane_states
    both_minimized = (
        states.primary is PaneState.MINIMIZED
        and states.secondary is PaneState.MINIMIZED
    )
    in_bounds = config.min_ratio <= state.divider_position <= config.max_ratio
    return not both_minimized and in_bounds


def _cache_divider(state: LayoutState) -> float:
    # While a pane is maximized or minimized the cached two-pane ratio
    # stays authoritative.
    if state.pane_states.all_normal:
        return state.divider_position
    return state.previous_divider_position
