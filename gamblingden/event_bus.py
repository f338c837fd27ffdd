# File: event_bus.py
"""In-process publish/subscribe for GamblingDen events.

Synchronous by contract: publish() runs every listener to completion before
returning, so an engine operation and all of its observers finish inside the
same call. Listener failures are isolated and logged; they never propagate
into the operation that published the event.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from . import const
from .events import Event, resolve_event_type

E = TypeVar("E", bound=Event)

Unsubscribe = Callable[[], None]


class EventBus:
    """Typed event dispatcher.

    Listeners are keyed by event class and called in subscription order.
    Multiple independent buses can coexist (one per coordinator).

    Example:
        bus = EventBus()
        unsub = bus.subscribe(LevelUp, lambda event: print(event.level))
        bus.publish(LevelUp(level=2))
        unsub()
    """

    def __init__(self) -> None:
        """Initialize an empty bus."""
        self._listeners: dict[type[Event], list[Callable[[Event], object]]] = {}

    def subscribe(
        self, event: str | type[E], callback: Callable[[E], object]
    ) -> Unsubscribe:
        """Register callback for an event class or event name.

        Args:
            event: Event class (e.g. ``LevelUp``) or wire name (``"level:up"``)
            callback: Called with the event instance

        Returns:
            Callable that removes this subscription (safe to call twice)
        """
        event_type = resolve_event_type(event)
        listeners = self._listeners.setdefault(event_type, [])
        listeners.append(callback)  # type: ignore[arg-type]
        const.LOGGER.debug(
            "EventBus: listener %s subscribed to '%s'",
            getattr(callback, "__qualname__", repr(callback)),
            event_type.name,
        )

        def _unsubscribe() -> None:
            current = self._listeners.get(event_type)
            if current and callback in current:
                current.remove(callback)  # type: ignore[arg-type]

        return _unsubscribe

    def publish(self, event: Event) -> None:
        """Deliver event to every listener of its class.

        The listener list is copied first so listeners may unsubscribe (or
        subscribe) while being notified.
        """
        listeners = list(self._listeners.get(type(event), ()))
        const.LOGGER.debug(
            "EventBus: publishing '%s' to %s listener(s)", event.name, len(listeners)
        )
        for callback in listeners:
            try:
                callback(event)
            except Exception:  # noqa: BLE001
                const.LOGGER.exception(
                    "ERROR: Listener %s failed while handling '%s'",
                    getattr(callback, "__qualname__", repr(callback)),
                    event.name,
                )

    def listener_count(self, event: str | type[Event]) -> int:
        """Return the number of listeners subscribed to an event."""
        return len(self._listeners.get(resolve_event_type(event), ()))

    def clear(self) -> None:
        """Drop every subscription."""
        self._listeners.clear()
