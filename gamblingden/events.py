# File: events.py
"""Typed events published by the GamblingDen managers.

Each event is a frozen dataclass whose ``name`` class attribute is the wire
name from const.py (``balance:change``, ``level:up``, ...). The set is closed:
EVENT_TYPES maps every name to its class, and the EventBus only accepts
subclasses of Event.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar

from . import const
from .type_defs import PlayerStats


@dataclass(frozen=True, slots=True)
class Event:
    """Base class for all engine events."""

    name: ClassVar[str] = ""

    def as_payload(self) -> dict[str, Any]:
        """Return the event fields as a plain dict (JSON-serializable)."""
        return asdict(self)


@dataclass(frozen=True, slots=True)
class BalanceChanged(Event):
    """Balance was written (every credit, debit, reward or reset)."""

    name: ClassVar[str] = const.EVENT_BALANCE_CHANGE

    balance: float


@dataclass(frozen=True, slots=True)
class BalanceReset(Event):
    """Balance was reinitialized to the starting value."""

    name: ClassVar[str] = const.EVENT_BALANCE_RESET

    balance: float


@dataclass(frozen=True, slots=True)
class XpChanged(Event):
    """XP grant finished; carries the post-grant XP and level."""

    name: ClassVar[str] = const.EVENT_XP_CHANGE

    xp: int
    level: int


@dataclass(frozen=True, slots=True)
class LevelUp(Event):
    """One level boundary crossed; fired once per level gained."""

    name: ClassVar[str] = const.EVENT_LEVEL_UP

    level: int


@dataclass(frozen=True, slots=True)
class AchievementUnlocked(Event):
    """Achievement unlocked and its reward credited."""

    name: ClassVar[str] = const.EVENT_ACHIEVEMENT_UNLOCK

    achievement_id: str
    achievement_name: str
    description: str
    reward: float


@dataclass(frozen=True, slots=True)
class StatsUpdated(Event):
    """Statistics record mutated; stats is a detached snapshot."""

    name: ClassVar[str] = const.EVENT_STATS_UPDATE

    stats: PlayerStats


@dataclass(frozen=True, slots=True)
class BetPlaced(Event):
    """A wager was accepted and debited."""

    name: ClassVar[str] = const.EVENT_BET_PLACED

    amount: float


@dataclass(frozen=True, slots=True)
class Win(Event):
    """Winnings were credited.

    balance is read after the win statistics are recorded, so it includes
    any rewards that update unlocked. lowest_balance is the lowest balance
    on record BEFORE this credit, which is what the comeback check compares
    against.
    """

    name: ClassVar[str] = const.EVENT_WIN

    amount: float
    balance: float
    lowest_balance: float


@dataclass(frozen=True, slots=True)
class DailyBonusClaimed(Event):
    """Daily bonus claimed; streak is the updated consecutive-day count."""

    name: ClassVar[str] = const.EVENT_DAILY_CLAIM

    streak: int
    claimed_at: str


@dataclass(frozen=True, slots=True)
class SettingsChanged(Event):
    """Lobby settings changed."""

    name: ClassVar[str] = const.EVENT_SETTINGS_CHANGE

    sound_enabled: bool


EVENT_TYPES: dict[str, type[Event]] = {
    event_type.name: event_type
    for event_type in (
        BalanceChanged,
        BalanceReset,
        XpChanged,
        LevelUp,
        AchievementUnlocked,
        StatsUpdated,
        BetPlaced,
        Win,
        DailyBonusClaimed,
        SettingsChanged,
    )
}


def resolve_event_type(event: str | type[Event]) -> type[Event]:
    """Resolve an event name or class to its Event class.

    Raises:
        KeyError: If the name is not a known event
        TypeError: If a class is given that is not an Event subclass
    """
    if isinstance(event, str):
        try:
            return EVENT_TYPES[event]
        except KeyError:
            raise KeyError(
                f"Unknown event '{event}'. Valid events: {', '.join(EVENT_TYPES)}"
            ) from None
    if isinstance(event, type) and issubclass(event, Event) and event is not Event:
        return event
    raise TypeError(f"Not an event type: {event!r}")
