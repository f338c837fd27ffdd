"""Shared fixtures for GamblingDen tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from gamblingden import const
from gamblingden.coordinator import GamblingDenCoordinator
from gamblingden.events import EVENT_TYPES, Event
from gamblingden.store import MemoryStore


@pytest.fixture
def memory_store() -> MemoryStore:
    """Return an empty in-memory backend."""
    return MemoryStore()


@pytest.fixture
def options() -> dict[str, Any]:
    """Engine options pinned to UTC so calendar tests are host-independent."""
    return {const.CONF_TIME_ZONE: "UTC"}


@pytest.fixture
def make_coordinator(
    memory_store: MemoryStore, options: dict[str, Any]
) -> Iterator[Callable[..., GamblingDenCoordinator]]:
    """Factory building coordinators over the shared backend.

    Extra keyword arguments override options. Every coordinator built is shut
    down at teardown.
    """
    created: list[GamblingDenCoordinator] = []

    def _make(**overrides: Any) -> GamblingDenCoordinator:
        coordinator = GamblingDenCoordinator(memory_store, {**options, **overrides})
        created.append(coordinator)
        return coordinator

    yield _make
    for coordinator in created:
        coordinator.shutdown()


@pytest.fixture
def coordinator(
    make_coordinator: Callable[..., GamblingDenCoordinator],
) -> GamblingDenCoordinator:
    """Return a fresh coordinator with default options."""
    return make_coordinator()


class EventRecorder:
    """Collects published events for assertions."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[Event]) -> list[Any]:
        """Return recorded events of one class, in order."""
        return [event for event in self.events if isinstance(event, event_type)]


@pytest.fixture
def recorder() -> EventRecorder:
    """Return an empty event recorder."""
    return EventRecorder()


@pytest.fixture
def recorded(
    coordinator: GamblingDenCoordinator, recorder: EventRecorder
) -> EventRecorder:
    """Return a recorder subscribed to every event of the default coordinator."""
    for event_type in EVENT_TYPES.values():
        coordinator.on(event_type, recorder)
    return recorder
