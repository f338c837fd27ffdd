# File: coordinator.py
"""Coordinator for the GamblingDen player economy.

GamblingDenCoordinator is the engine context object: it owns the validated
options, the namespaced store, the event bus and one instance of each
manager. Construct one per player profile and pass it to every game and UI
consumer. Several coordinators can coexist (e.g. one per test).

Boot sequence:
1. Validate options (voluptuous; the only raising path)
2. Resolve the player's time zone
3. Rehydrate every manager from storage inside one transaction
4. Subscribe managers to each other's events

The public methods below are the contract games and the lobby call. They
delegate to the managers and never raise on bad input.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from . import const
from .config import validate_config
from .event_bus import EventBus, Unsubscribe
from .events import Event
from .managers import (
    DailyBonusManager,
    EconomyManager,
    GamificationManager,
    ProgressionManager,
    StatisticsManager,
    SystemManager,
)
from .store import KeyValueStore, MemoryStore, ScopedStore
from .utils import dt_utils, random_utils

if TYPE_CHECKING:
    from datetime import datetime

    from .managers import BaseManager
    from .type_defs import (
        AchievementId,
        AchievementInfo,
        LevelProgress,
        PlayerStats,
        StatsUpdate,
    )

E = TypeVar("E", bound=Event)


def _noop_unsubscribe() -> None:
    """Unsubscribe for a subscription that was never made."""


class GamblingDenCoordinator:
    """Engine context owning all player state."""

    def __init__(
        self,
        store: KeyValueStore | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize the coordinator and rehydrate state.

        Args:
            store: Storage backend (default: a fresh MemoryStore)
            options: Engine options, see config.CONFIG_SCHEMA

        Raises:
            vol.Invalid: If options fail validation
        """
        self.config: dict[str, Any] = validate_config(options)
        self.tz = dt_utils.resolve_timezone(self.config[const.CONF_TIME_ZONE])
        self.store = ScopedStore(
            store if store is not None else MemoryStore(),
            self.config[const.CONF_STORAGE_PREFIX],
        )
        self.bus = EventBus()
        self._unsubs: list[Unsubscribe] = []

        self.economy_manager = EconomyManager(self)
        self.progression_manager = ProgressionManager(self)
        self.gamification_manager = GamificationManager(self)
        self.statistics_manager = StatisticsManager(self)
        self.daily_bonus_manager = DailyBonusManager(self)
        self.system_manager = SystemManager(self)
        self._managers: tuple[BaseManager, ...] = (
            self.economy_manager,
            self.progression_manager,
            self.gamification_manager,
            self.statistics_manager,
            self.daily_bonus_manager,
            self.system_manager,
        )

        with self.store.transaction():
            for manager in self._managers:
                manager.load()
        for manager in self._managers:
            manager.setup()

        const.LOGGER.info(
            "INFO: %s engine started (balance=%.2f, xp=%s, level=%s, achievements=%s)",
            const.GAMBLINGDEN_TITLE,
            self.economy_manager.get_balance(),
            self.progression_manager.get_xp(),
            self.progression_manager.get_level(),
            len(self.gamification_manager.get_unlocked_achievements()),
        )

    # -------------------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------------------

    def register_unsub(self, unsub: Unsubscribe) -> None:
        """Track an unsubscribe callable to run on shutdown."""
        self._unsubs.append(unsub)

    def shutdown(self) -> None:
        """Stop the time check, drop every subscription."""
        self.gamification_manager.cancel_time_checks()
        while self._unsubs:
            self._unsubs.pop()()
        self.bus.clear()
        const.LOGGER.info("INFO: %s engine shut down", const.GAMBLINGDEN_TITLE)

    # -------------------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------------------

    def on(self, event: str | type[E], callback: Callable[[E], object]) -> Unsubscribe:
        """Subscribe to an engine event by class or name ("level:up").

        An unknown name or a class that is not an Event is logged and gets a
        no-op unsubscribe; nothing is subscribed.
        """
        try:
            return self.bus.subscribe(event, callback)
        except (KeyError, TypeError) as err:
            const.LOGGER.warning(
                "WARNING: Ignoring subscription to unknown event %r: %s", event, err
            )
            return _noop_unsubscribe

    # -------------------------------------------------------------------------------------
    # Balance Ledger
    # -------------------------------------------------------------------------------------

    def get_balance(self) -> float:
        """Return the current balance."""
        return self.economy_manager.get_balance()

    def set_balance(self, value: float) -> float:
        """Write the balance directly."""
        return self.economy_manager.set_balance(value)

    def adjust_balance(self, delta: float) -> float:
        """Credit or debit delta; returns the new balance."""
        return self.economy_manager.adjust_balance(delta)

    def reset_balance(self) -> float:
        """Reset the balance to the starting value."""
        return self.economy_manager.reset_balance()

    def place_bet(self, amount: float) -> bool:
        """Place a wager; False if invalid or unaffordable."""
        return self.economy_manager.place_bet(amount)

    def credit_win(self, amount: float) -> None:
        """Credit winnings."""
        self.economy_manager.credit_win(amount)

    def settle_round(self, game: str, wager: float, payout: float) -> bool:
        """Record a finished round (see EconomyManager.settle_round)."""
        return self.economy_manager.settle_round(game, wager, payout)

    # -------------------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------------------

    def get_xp(self) -> int:
        """Return cumulative XP."""
        return self.progression_manager.get_xp()

    def get_level(self) -> int:
        """Return the current level."""
        return self.progression_manager.get_level()

    def get_level_progress(self) -> LevelProgress:
        """Return progress within the current level."""
        return self.progression_manager.get_level_progress()

    # -------------------------------------------------------------------------------------
    # Achievements
    # -------------------------------------------------------------------------------------

    def check_achievement(self, achievement_id: str) -> bool:
        """Unlock an achievement once; False if already unlocked or unknown."""
        return self.gamification_manager.check_achievement(achievement_id)

    def get_all_achievements(self) -> list[AchievementInfo]:
        """Return the catalogue with unlock state."""
        return self.gamification_manager.get_all_achievements()

    def get_unlocked_achievements(self) -> list[AchievementId]:
        """Return unlocked ids in unlock order."""
        return self.gamification_manager.get_unlocked_achievements()

    def is_achievement_unlocked(self, achievement_id: str) -> bool:
        """Return True if the achievement is unlocked."""
        return self.gamification_manager.is_achievement_unlocked(achievement_id)

    def check_time_achievements(
        self, now: datetime | None = None
    ) -> list[AchievementId]:
        """Evaluate time-based achievements now (or at the given instant)."""
        return self.gamification_manager.check_time_achievements(now)

    async def async_start_time_checks(self, interval: float | None = None) -> None:
        """Poll time-based achievements on the running event loop."""
        await self.gamification_manager.async_start_time_checks(interval)

    async def async_stop_time_checks(self) -> None:
        """Stop polling time-based achievements."""
        await self.gamification_manager.async_stop_time_checks()

    # -------------------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------------------

    def update_stats(self, update: StatsUpdate) -> None:
        """Apply a sparse statistics delta."""
        self.statistics_manager.update_stats(update)

    def get_stats(self) -> PlayerStats:
        """Return a detached copy of the statistics record."""
        return self.statistics_manager.get_stats()

    # -------------------------------------------------------------------------------------
    # Daily Bonus
    # -------------------------------------------------------------------------------------

    def can_claim_daily_bonus(self) -> bool:
        """Return True if today's bonus has not been claimed."""
        return self.daily_bonus_manager.can_claim_daily_bonus()

    def claim_daily_bonus(self) -> bool | None:
        """Record today's claim; None if already claimed."""
        return self.daily_bonus_manager.claim_daily_bonus()

    def claim_daily_wheel(self) -> float | None:
        """Run the lobby's bonus wheel flow.

        Spins the wheel, records the claim and credits the prize.

        Returns:
            The prize credited, or None if today's bonus was already claimed
        """
        if not self.can_claim_daily_bonus():
            return None
        prize = self.daily_bonus_manager.spin_wheel()
        with self.store.transaction():
            if not self.claim_daily_bonus():
                return None
            self.adjust_balance(prize)
        return prize

    # -------------------------------------------------------------------------------------
    # Settings / Random
    # -------------------------------------------------------------------------------------

    def is_sound_enabled(self) -> bool:
        """Return the sound setting."""
        return self.system_manager.is_sound_enabled()

    def set_sound_enabled(self, enabled: bool) -> None:
        """Change the sound setting."""
        self.system_manager.set_sound_enabled(enabled)

    @staticmethod
    def random_int(minimum: int, maximum: int) -> int:
        """Return an unbiased random integer in [minimum, maximum]."""
        return random_utils.random_int(minimum, maximum)
