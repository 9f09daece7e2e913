"""Synchronization engine - the store every view talks to.

This module contains the engine that owns the shared selection/layout
snapshot. Views call its operations (tagging selections with their source),
the engine derives the next immutable snapshot with the pure functions in
``arch_graph_sync.core``, publishes it on a reactive holder, broadcasts the
semantic effect on its bus and persists the layout subset.
"""

import logging
import threading
import time
from collections.abc import Callable, Iterable

import solara

from arch_graph_sync.core import layout as layout_ops
from arch_graph_sync.core import selection as selection_ops
from arch_graph_sync.infrastructure import MemoryStorage, PreferencesStore
from arch_graph_sync.schemas import (
    EngineConfig,
    EngineState,
    EventName,
    FocusRequested,
    HighlightChanged,
    HighlightStyle,
    LayoutState,
    PaneId,
    PaneStates,
    SelectionChanged,
    SelectionChangeType,
    SelectionSource,
)
from arch_graph_sync.services.bus import Handler, SyncBus

logger = logging.getLogger(__name__)


def epoch_millis() -> int:
    return int(time.time() * 1000)


class SyncEngine:
    """Stateful synchronization engine with dependency injection.

    One instance per session, created by the root scope and handed to each
    view. Every public operation runs inside a single reentrant lock, so a
    bus handler may call back into the engine.

    Attributes:
        config: Compiled-in bounds and defaults.
        store: Persistence adapter for the layout subset.
        bus: Event channel for cross-view notifications.
        state: Reactive holder of the current ``EngineState`` snapshot.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        store: PreferencesStore | None = None,
        bus: SyncBus | None = None,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        """Initialize the engine and hydrate the layout from storage.

        Args:
            config: Engine settings. Defaults to ``EngineConfig()``.
            store: Preferences store. Defaults to a session-only memory store.
            bus: Event bus. Defaults to a fresh ``SyncBus``.
            clock: Source of epoch-millisecond timestamps.
        """
        self.config = config or EngineConfig()
        self.store = store or PreferencesStore(
            MemoryStorage(),
            key=self.config.storage_key,
            default_divider_position=self.config.default_divider_position,
        )
        self.bus = bus or SyncBus()
        self._clock = clock
        self._lock = threading.RLock()

        prefs = self.store.load()
        layout = layout_ops.initial_layout(self.config, prefs.divider_position)
        layout = layout.model_copy(update={"pane_states": prefs.pane_states})
        logger.info(
            f"Engine initialized: divider={layout.divider_position:.2f}, "
            f"panes={layout.pane_states.model_dump(mode='json')}"
        )

        self.state: solara.Reactive[EngineState] = solara.reactive(
            EngineState(layout=layout, sync_enabled=self.config.sync_enabled)
        )

    # ------------------------------------------------------------------
    # Read-only access
    # ------------------------------------------------------------------

    def snapshot(self) -> EngineState:
        """Current immutable snapshot."""
        return self.state.value

    @property
    def selected_elements(self) -> frozenset[str]:
        return self.state.value.selection.selected

    @property
    def highlights(self) -> dict[str, HighlightStyle]:
        return dict(self.state.value.selection.highlights)

    def highlight_for(self, element_id: str) -> HighlightStyle | None:
        return self.state.value.selection.highlights.get(element_id)

    @property
    def hovered_element(self) -> str | None:
        return self.state.value.selection.hovered

    @property
    def divider_position(self) -> float:
        return self.state.value.layout.divider_position

    @property
    def pane_states(self) -> PaneStates:
        return self.state.value.layout.pane_states

    def subscribe(
        self, event_name: EventName | str, handler: Handler
    ) -> Callable[[], None]:
        """Subscribe to engine events. Returns an unsubscribe callable."""
        return self.bus.subscribe(event_name, handler)

    # ------------------------------------------------------------------
    # Selection / highlight
    # ------------------------------------------------------------------

    def select_element(
        self, element_id: str, source: SelectionSource | str = SelectionSource.CONTROL
    ) -> None:
        """Add one element to the selection and announce it.

        Repeating a selection leaves the set unchanged but still emits, so
        views can re-center on repeat clicks.
        """
        self.select_elements([element_id], source)

    def select_elements(
        self,
        element_ids: Iterable[str],
        source: SelectionSource | str = SelectionSource.CONTROL,
    ) -> None:
        """Add several elements to the selection in one step and one event."""
        ids = selection_ops.unique_ids(element_ids)
        source = SelectionSource(source)
        if not ids:
            return

        with self._lock:
            state = self.state.value
            now = self._clock()
            self._update(
                selection=selection_ops.select(state.selection, ids),
                last_sync_time=now if state.sync_enabled else state.last_sync_time,
            )
            logger.debug(f"Selected {list(ids)} from {source.value}")

            self.bus.emit(
                SelectionChanged(
                    type=SelectionChangeType.SELECT,
                    source=source,
                    element_ids=ids,
                    timestamp=now,
                )
            )
            # Only model-originated selections ask graph views to re-center.
            if source is SelectionSource.MODEL and state.sync_enabled:
                self.bus.emit(
                    FocusRequested(node_ids=ids, animate=self.config.focus_animate)
                )

    def deselect_element(
        self, element_id: str, source: SelectionSource | str = SelectionSource.CONTROL
    ) -> None:
        """Remove one element from the selection and announce it."""
        source = SelectionSource(source)
        with self._lock:
            state = self.state.value
            now = self._clock()
            self._update(
                selection=selection_ops.deselect(state.selection, [element_id]),
                last_sync_time=now if state.sync_enabled else state.last_sync_time,
            )
            self.bus.emit(
                SelectionChanged(
                    type=SelectionChangeType.DESELECT,
                    source=source,
                    element_ids=(element_id,),
                    timestamp=now,
                )
            )

    def highlight_elements(
        self, element_ids: Iterable[str], style: HighlightStyle | dict
    ) -> None:
        """Apply ``style`` to every id (last write wins) and announce it."""
        ids = selection_ops.unique_ids(element_ids)
        style = HighlightStyle.model_validate(style)
        with self._lock:
            state = self.state.value
            self._update(selection=selection_ops.highlight(state.selection, ids, style))
            logger.debug(
                f"Highlighted {len(ids)} elements as "
                f"{style.category.value}/{style.intensity.value}"
            )
            self.bus.emit(HighlightChanged(node_ids=ids, highlight_style=style))

    def unhighlight_elements(self, element_ids: Iterable[str]) -> None:
        """Drop the highlight style of every id and announce the removal."""
        ids = selection_ops.unique_ids(element_ids)
        with self._lock:
            state = self.state.value
            self._update(selection=selection_ops.unhighlight(state.selection, ids))
            self.bus.emit(HighlightChanged(node_ids=ids, highlight_style=None))

    def set_hovered_element(self, element_id: str | None) -> None:
        """Replace the hovered element.

        Not broadcast: hover is high-frequency. Views that care read
        ``hovered_element`` or watch ``state``.
        """
        with self._lock:
            state = self.state.value
            if state.selection.hovered == element_id:
                return
            hovered = selection_ops.set_hovered(state.selection, element_id)
            self._update(selection=hovered)

    def clear_highlights(
        self, source: SelectionSource | str = SelectionSource.CONTROL
    ) -> None:
        """Empty selection, highlights and hover atomically; emit one clear event."""
        source = SelectionSource(source)
        with self._lock:
            self._clear_selection(source)

    def set_sync_enabled(self, enabled: bool) -> None:
        """Toggle cross-view focus requests and sync timestamps."""
        with self._lock:
            self._update(sync_enabled=enabled)
            logger.info(f"Cross-view sync {'enabled' if enabled else 'disabled'}")

    # ------------------------------------------------------------------
    # Pane layout
    # ------------------------------------------------------------------

    def set_divider_position(self, position: float) -> None:
        """Clamp and apply a divider drag; both panes return to normal."""
        with self._lock:
            layout = self.state.value.layout
            self._commit_layout(
                layout_ops.set_divider_position(layout, position, self.config)
            )

    def reset_divider_position(self) -> None:
        with self._lock:
            layout = self.state.value.layout
            self._commit_layout(layout_ops.reset_divider_position(layout, self.config))

    def maximize_pane(self, pane: PaneId | str) -> None:
        with self._lock:
            layout = self.state.value.layout
            self._commit_layout(layout_ops.maximize_pane(layout, PaneId(pane)))

    def minimize_pane(self, pane: PaneId | str) -> bool:
        """Minimize ``pane`` unless the other pane is already minimized.

        Returns:
            False when the request was refused (state unchanged).
        """
        with self._lock:
            layout = self.state.value.layout
            new_layout = layout_ops.minimize_pane(layout, PaneId(pane))
            if new_layout is layout:
                return False
            self._commit_layout(new_layout)
            return True

    def restore_pane(self, pane: PaneId | str) -> None:
        with self._lock:
            layout = self.state.value.layout
            self._commit_layout(
                layout_ops.restore_pane(layout, PaneId(pane), self.config)
            )

    def restore_all_panes(self) -> None:
        with self._lock:
            layout = self.state.value.layout
            self._commit_layout(layout_ops.restore_all_panes(layout, self.config))

    def reset_layout(self) -> None:
        """Soft-reset the whole view: default layout and an empty selection."""
        with self._lock:
            logger.info("Resetting layout")
            self._commit_layout(layout_ops.reset_layout(self.config))
            self._clear_selection(SelectionSource.CONTROL)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _update(self, **changes) -> EngineState:
        """Replace the snapshot with a copy carrying ``changes``."""
        new_state = self.state.value.model_copy(update=changes)
        self.state.value = new_state
        return new_state

    def _commit_layout(self, layout: LayoutState) -> None:
        previous = self.state.value.layout
        if layout == previous:
            return
        self._update(layout=layout)
        logger.info(
            f"Layout changed: divider={layout.divider_position:.2f}, "
            f"panes={layout.pane_states.model_dump(mode='json')}"
        )
        self.store.save(layout.to_preferences(timestamp=self._clock()))

    def _clear_selection(self, source: SelectionSource) -> None:
        state = self.state.value
        previous_ids = tuple(sorted(state.selection.selected))
        now = self._clock()
        self._update(
            selection=selection_ops.clear(),
            last_sync_time=now if state.sync_enabled else state.last_sync_time,
        )
        logger.debug(f"Cleared selection of {len(previous_ids)} elements")
        self.bus.emit(
            SelectionChanged(
                type=SelectionChangeType.CLEAR,
                source=source,
                element_ids=previous_ids,
                timestamp=now,
            )
        )
