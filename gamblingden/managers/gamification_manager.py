"""Gamification Manager - Achievement unlocking.

The manager owns the ordered list of unlocked achievement ids and is the only
place an unlock happens. Callers (games, the ledger's events, the time poll)
only say "this id may have been earned"; check_achievement() deduplicates,
persists, credits the reward once and publishes AchievementUnlocked.

Signals Consumed:
- BetPlaced: first_spin, high_roller
- Win: comeback, first_win
- LevelUp: level milestones
- StatsUpdated: lucky_streak, whale, diversified
- DailyBonusClaimed: daily streak

Time-based achievements (night_owl, marathon) have no triggering event; they
are polled by check_time_achievements(), optionally on an asyncio task.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
import contextlib
from datetime import datetime
from typing import TYPE_CHECKING

from .. import const
from ..engines.gamification_engine import GamificationEngine
from ..events import (
    AchievementUnlocked,
    BetPlaced,
    DailyBonusClaimed,
    LevelUp,
    StatsUpdated,
    Win,
)
from ..utils import dt_utils
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..coordinator import GamblingDenCoordinator
    from ..type_defs import AchievementId, AchievementInfo


class GamificationManager(BaseManager):
    """Manager for achievement unlock state and evaluation triggers."""

    def __init__(self, coordinator: GamblingDenCoordinator) -> None:
        """Initialize with nothing unlocked."""
        super().__init__(coordinator)
        self._unlocked: list[AchievementId] = []
        self._time_check_task: asyncio.Task[None] | None = None

    def load(self) -> None:
        """Rehydrate the unlock list, keeping ids this version does not know."""
        raw = self.store.load_json(const.STORAGE_KEY_ACHIEVEMENTS, [])
        unlocked = GamificationEngine.sanitize_unlocked(raw)
        if unlocked is None:
            const.LOGGER.warning(
                "WARNING: Stored achievements %r are not a list. Starting empty", raw
            )
            unlocked = []
            self._persist_unlocked(unlocked)
        self._unlocked = unlocked

        unknown = [item for item in unlocked if not GamificationEngine.is_known(item)]
        if unknown:
            const.LOGGER.debug(
                "DEBUG: Keeping unknown unlocked achievement ids: %s", unknown
            )

    def setup(self) -> None:
        """Subscribe achievement evaluation to the engine's events."""
        self.listen(BetPlaced, self._on_bet_placed)
        self.listen(Win, self._on_win)
        self.listen(LevelUp, self._on_level_up)
        self.listen(StatsUpdated, self._on_stats_updated)
        self.listen(DailyBonusClaimed, self._on_daily_bonus_claimed)

    def _persist_unlocked(self, unlocked: list[AchievementId]) -> None:
        self.store.save_json(const.STORAGE_KEY_ACHIEVEMENTS, unlocked)

    # =========================================================================
    # Unlocking
    # =========================================================================

    def check_achievement(self, achievement_id: str) -> bool:
        """Unlock an achievement and credit its reward, at most once.

        The id is recorded before the reward is credited, so a listener that
        re-enters with the same id during the credit sees it unlocked.

        Args:
            achievement_id: Catalogue id (e.g. "first_spin")

        Returns:
            True if this call unlocked it; False if already unlocked or unknown
        """
        if not GamificationEngine.is_known(achievement_id):
            const.LOGGER.debug(
                "DEBUG: Ignoring unknown achievement id %r", achievement_id
            )
            return False
        if achievement_id in self._unlocked:
            return False

        self._unlocked.append(achievement_id)
        self._persist_unlocked(self._unlocked)

        definition = const.ACHIEVEMENTS[achievement_id]
        reward = definition[const.DATA_ACHIEVEMENT_REWARD]
        const.LOGGER.info(
            "INFO: Achievement unlocked: %s (%s), reward %.2f",
            definition[const.DATA_ACHIEVEMENT_NAME],
            achievement_id,
            reward,
        )
        self.coordinator.economy_manager.adjust_balance(reward)
        self.emit(
            AchievementUnlocked(
                achievement_id=achievement_id,
                achievement_name=definition[const.DATA_ACHIEVEMENT_NAME],
                description=GamificationEngine.describe(achievement_id, self.config),
                reward=reward,
            )
        )
        return True

    def _check_all(self, achievement_ids: Iterable[AchievementId]) -> list[AchievementId]:
        """Attempt each id in order; return the ones newly unlocked."""
        return [
            achievement_id
            for achievement_id in achievement_ids
            if achievement_id not in self._unlocked
            and self.check_achievement(achievement_id)
        ]

    # =========================================================================
    # Queries
    # =========================================================================

    def get_all_achievements(self) -> list[AchievementInfo]:
        """Return every catalogue entry with its unlock state."""
        return GamificationEngine.build_achievement_list(self._unlocked, self.config)

    def get_unlocked_achievements(self) -> list[AchievementId]:
        """Return unlocked ids in unlock order (a copy)."""
        return list(self._unlocked)

    def is_achievement_unlocked(self, achievement_id: str) -> bool:
        """Return True if achievement_id has been unlocked."""
        return achievement_id in self._unlocked

    # =========================================================================
    # Event Handlers
    # =========================================================================

    def _on_bet_placed(self, event: BetPlaced) -> None:
        self._check_all(
            GamificationEngine.wager_achievements(
                event.amount, self.config[const.CONF_HIGH_ROLLER_THRESHOLD]
            )
        )

    def _on_win(self, event: Win) -> None:
        self._check_all(
            GamificationEngine.win_achievements(
                event.balance,
                event.lowest_balance,
                self.config[const.CONF_COMEBACK_LOW_BALANCE],
                self.config[const.CONF_COMEBACK_HIGH_BALANCE],
            )
        )

    def _on_level_up(self, event: LevelUp) -> None:
        self._check_all(GamificationEngine.level_achievements(event.level))

    def _on_stats_updated(self, event: StatsUpdated) -> None:
        self._check_all(
            GamificationEngine.stats_achievements(
                event.stats,
                self.config[const.CONF_LUCKY_STREAK_LENGTH],
                self.config[const.CONF_WHALE_TOTAL_WON],
                self.config[const.CONF_GAMES],
            )
        )

    def _on_daily_bonus_claimed(self, event: DailyBonusClaimed) -> None:
        self._check_all(
            GamificationEngine.daily_achievements(
                event.streak, self.config[const.CONF_DAILY_STREAK_TARGET]
            )
        )

    # =========================================================================
    # Time-Based Achievements
    # =========================================================================

    def check_time_achievements(self, now: datetime | None = None) -> list[AchievementId]:
        """Evaluate night_owl and marathon against the clock.

        Args:
            now: Instant to evaluate (defaults to the current time)

        Returns:
            Ids newly unlocked by this check
        """
        now_local = dt_utils.as_local(now or dt_utils.dt_now_utc(), self.coordinator.tz)
        session_start = dt_utils.dt_parse(
            self.coordinator.statistics_manager.get_session_start()
        )
        return self._check_all(
            GamificationEngine.time_achievements(
                now_local,
                session_start,
                self.config[const.CONF_NIGHT_OWL_START_HOUR],
                self.config[const.CONF_NIGHT_OWL_END_HOUR],
                self.config[const.CONF_MARATHON_MINUTES],
            )
        )

    @property
    def time_checks_running(self) -> bool:
        """Return True while the periodic time check task is active."""
        return self._time_check_task is not None and not self._time_check_task.done()

    async def async_start_time_checks(self, interval: float | None = None) -> None:
        """Start polling check_time_achievements on the running loop.

        The first check runs immediately. Starting twice is a no-op.

        Args:
            interval: Seconds between checks (default: time_check_interval)
        """
        if self.time_checks_running:
            return
        seconds = interval or self.config[const.CONF_TIME_CHECK_INTERVAL]
        self._time_check_task = asyncio.get_running_loop().create_task(
            self._async_time_check_loop(seconds)
        )
        const.LOGGER.debug("DEBUG: Time achievement checks every %ss", seconds)

    async def _async_time_check_loop(self, interval: float) -> None:
        while True:
            self.check_time_achievements()
            await asyncio.sleep(interval)

    async def async_stop_time_checks(self) -> None:
        """Cancel the periodic check and wait for it to finish."""
        task = self.cancel_time_checks()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def cancel_time_checks(self) -> asyncio.Task[None] | None:
        """Request cancellation of the periodic check without waiting."""
        task, self._time_check_task = self._time_check_task, None
        if task is not None and not task.done():
            task.cancel()
            const.LOGGER.debug("DEBUG: Time achievement checks stopped")
        return task
