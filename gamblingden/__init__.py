"""GamblingDen player economy and progression engine.

Typical use:
    from gamblingden import GamblingDenCoordinator, JsonFileStore

    den = GamblingDenCoordinator(JsonFileStore("gamblingden-state.json"))
    if den.place_bet(10):
        den.settle_round("slots", 10, 25)
"""

from .coordinator import GamblingDenCoordinator
from .event_bus import EventBus
from .events import (
    AchievementUnlocked,
    BalanceChanged,
    BalanceReset,
    BetPlaced,
    DailyBonusClaimed,
    Event,
    LevelUp,
    SettingsChanged,
    StatsUpdated,
    Win,
    XpChanged,
)
from .store import JsonFileStore, KeyValueStore, MemoryStore, ScopedStore

__all__ = [
    "AchievementUnlocked",
    "BalanceChanged",
    "BalanceReset",
    "BetPlaced",
    "DailyBonusClaimed",
    "Event",
    "EventBus",
    "GamblingDenCoordinator",
    "JsonFileStore",
    "KeyValueStore",
    "LevelUp",
    "MemoryStore",
    "ScopedStore",
    "SettingsChanged",
    "StatsUpdated",
    "Win",
    "XpChanged",
]
