import logging

import pytest

from arch_graph_sync.schemas import (
    EventName,
    FocusRequested,
    HighlightChanged,
    SelectionChanged,
    SelectionChangeType,
    SelectionSource,
)
from arch_graph_sync.services import SyncBus


@pytest.fixture
def bus() -> SyncBus:
    return SyncBus()


def selection_event(*ids: str) -> SelectionChanged:
    return SelectionChanged(
        type=SelectionChangeType.SELECT,
        source=SelectionSource.GRAPH,
        element_ids=ids,
        timestamp=1,
    )


def test_delivery_in_subscription_order(bus: SyncBus):
    calls = []
    bus.subscribe("selection-changed", lambda e: calls.append("first"))
    bus.subscribe(EventName.SELECTION_CHANGED, lambda e: calls.append("second"))

    assert bus.emit(selection_event("a")) == 2
    assert calls == ["first", "second"]


def test_only_matching_subscribers_receive(bus: SyncBus):
    received = []
    bus.subscribe("focus-requested", received.append)

    bus.emit(selection_event("a"))
    bus.emit(HighlightChanged(node_ids=("a",), highlight_style=None))
    assert received == []

    focus = FocusRequested(node_ids=("a",))
    bus.emit(focus)
    assert received == [focus]


def test_failing_handler_is_isolated(bus: SyncBus, caplog):
    received = []

    def broken(event):
        raise RuntimeError("view crashed")

    bus.subscribe("selection-changed", broken)
    bus.subscribe("selection-changed", received.append)

    with caplog.at_level(logging.ERROR):
        delivered = bus.emit(selection_event("a"))

    assert delivered == 1
    assert len(received) == 1
    assert "view crashed" in caplog.text


def test_unsubscribe_is_idempotent(bus: SyncBus):
    received = []
    unsubscribe = bus.subscribe("selection-changed", received.append)
    assert bus.subscriber_count("selection-changed") == 1

    unsubscribe()
    unsubscribe()
    assert bus.subscriber_count() == 0

    bus.emit(selection_event("a"))
    assert received == []


def test_same_handler_registered_twice(bus: SyncBus):
    received = []
    first = bus.subscribe("selection-changed", received.append)
    bus.subscribe("selection-changed", received.append)

    bus.emit(selection_event("a"))
    assert len(received) == 2

    first()
    bus.emit(selection_event("b"))
    assert len(received) == 3


def test_no_replay_for_late_subscribers(bus: SyncBus):
    bus.emit(selection_event("a"))
    received = []
    bus.subscribe("selection-changed", received.append)
    assert received == []


def test_subscribing_during_dispatch_applies_to_next_event(bus: SyncBus):
    late = []

    def subscribe_late(event):
        bus.subscribe("selection-changed", late.append)

    unsubscribe = bus.subscribe("selection-changed", subscribe_late)
    bus.emit(selection_event("a"))
    assert late == []

    unsubscribe()
    bus.emit(selection_event("b"))
    assert [e.element_ids for e in late] == [("b",)]


def test_unknown_event_name_rejected(bus: SyncBus):
    with pytest.raises(ValueError):
        bus.subscribe("layout-changed", print)


def test_clear_drops_everything(bus: SyncBus):
    bus.subscribe("selection-changed", print)
    bus.subscribe("focus-requested", print)
    bus.clear()
    assert bus.subscriber_count() == 0


def test_event_payload_uses_camel_case():
    payload = selection_event("wall-42").to_payload()
    assert payload == {
        "type": "select",
        "source": "graph",
        "elementIds": ["wall-42"],
        "timestamp": 1,
    }
    focus = FocusRequested(node_ids=("wall-42",), animate=False).to_payload()
    assert focus == {"nodeIds": ["wall-42"], "animate": False}
