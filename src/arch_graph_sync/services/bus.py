"""Synchronization bus.

Typed, in-process publish/subscribe owned by the engine. Delivery is
synchronous and in subscription order: each handler runs to completion
before the next one and before ``emit`` returns. There is no replay buffer
and no retry; a late subscriber never sees earlier events.
"""

import logging
from collections.abc import Callable

from arch_graph_sync.schemas import EventName, SyncEvent

logger = logging.getLogger(__name__)

Handler = Callable[[SyncEvent], None]


class _Subscription:
    """Identity-compared wrapper, so the same handler can be registered twice
    and each registration removed independently."""

    __slots__ = ("handler",)

    def __init__(self, handler: Handler) -> None:
        self.handler = handler


class SyncBus:
    """Publish/subscribe channel for synchronization events."""

    def __init__(self) -> None:
        self._subscriptions: dict[EventName, list[_Subscription]] = {
            name: [] for name in EventName
        }

    def subscribe(
        self, event_name: EventName | str, handler: Handler
    ) -> Callable[[], None]:
        """Register ``handler`` for ``event_name``.

        Returns:
            A callable that removes this registration. Calling it more than
            once is harmless.
        """
        name = EventName(event_name)
        subscription = _Subscription(handler)
        self._subscriptions[name].append(subscription)

        def unsubscribe() -> None:
            try:
                self._subscriptions[name].remove(subscription)
            except ValueError:
                pass

        return unsubscribe

    def emit(self, event: SyncEvent) -> int:
        """Deliver ``event`` to every current subscriber of its name.

        The subscriber list is snapshotted first: handlers added or removed
        during dispatch take effect from the next event. A handler that
        raises is logged and skipped; the others still run.

        Returns:
            Number of handlers that completed without raising.
        """
        delivered = 0
        for subscription in list(self._subscriptions[event.name]):
            try:
                subscription.handler(event)
            except Exception as e:
                logger.error(
                    f"Subscriber {subscription.handler!r} failed on "
                    f"'{event.name.value}': {e}",
                    exc_info=True,
                )
            else:
                delivered += 1
        return delivered

    def subscriber_count(self, event_name: EventName | str | None = None) -> int:
        if event_name is None:
            return sum(len(subs) for subs in self._subscriptions.values())
        return len(self._subscriptions[EventName(event_name)])

    def clear(self) -> None:
        """Drop every subscription (session teardown)."""
        for subs in self._subscriptions.values():
            subs.clear()
