"""Base manager class for GamblingDen managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from .. import const
from ..events import Event

if TYPE_CHECKING:
    from ..coordinator import GamblingDenCoordinator
    from ..store import ScopedStore

E = TypeVar("E", bound=Event)


class BaseManager(ABC):
    """Base class for all GamblingDen managers with scoped event support.

    Provides:
    - Coordinator-scoped event emitting (emit)
    - Coordinator-scoped event listening (listen)
    - Automatic cleanup via the coordinator's unsubscribe registry

    Lifecycle (driven by the coordinator):
    - load(): rehydrate owned state from storage, repairing bad values
    - setup(): subscribe to events once every manager has loaded

    Subclasses must implement:
    - setup(): Subscribe to events
    """

    def __init__(self, coordinator: GamblingDenCoordinator) -> None:
        """Initialize manager.

        Args:
            coordinator: Parent coordinator owning this engine instance
        """
        self.coordinator = coordinator

    @property
    def store(self) -> ScopedStore:
        """Return the coordinator's namespaced store."""
        return self.coordinator.store

    @property
    def config(self) -> dict[str, Any]:
        """Return the validated engine options."""
        return self.coordinator.config

    def emit(self, event: Event) -> None:
        """Publish an event on the coordinator's bus.

        Example:
            self.emit(BalanceChanged(balance=90.0))
        """
        const.LOGGER.debug(
            "Emitting event '%s' from %s", event.name, self.__class__.__name__
        )
        self.coordinator.bus.publish(event)

    def listen(self, event_type: type[E], callback: Callable[[E], object]) -> None:
        """Subscribe to an event with automatic cleanup on shutdown.

        Args:
            event_type: Event class to listen for
            callback: Called synchronously with the event instance
        """
        unsub = self.coordinator.bus.subscribe(event_type, callback)
        self.coordinator.register_unsub(unsub)
        const.LOGGER.debug(
            "Manager %s listening to event '%s'",
            self.__class__.__name__,
            event_type.name,
        )

    def load(self) -> None:
        """Rehydrate owned state from storage (no-op by default)."""

    @abstractmethod
    def setup(self) -> None:
        """Set up the manager (subscribe to events).

        Called once during coordinator initialization, after every manager
        has loaded its state.
        """
