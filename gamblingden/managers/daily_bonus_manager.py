"""Daily Bonus Manager - Once-per-calendar-day claims and the streak.

Eligibility is a local calendar question: a claim at 23:59 and another at
00:01 the next day are both allowed. The streak continues only when the
previous claim was on the local day before today.

The manager never credits currency itself. The prize wheel (spin_wheel) picks
an amount, and the coordinator's claim_daily_wheel() credits it.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from .. import const
from ..events import DailyBonusClaimed
from ..utils import dt_utils, random_utils
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..coordinator import GamblingDenCoordinator


class DailyBonusManager(BaseManager):
    """Manager for the last-claim timestamp and the prize wheel."""

    def __init__(self, coordinator: GamblingDenCoordinator) -> None:
        """Initialize as never claimed."""
        super().__init__(coordinator)
        self._last_claim: datetime | None = None

    def load(self) -> None:
        """Rehydrate the last claim; unparseable values mean never claimed."""
        raw = self.store.load(const.STORAGE_KEY_DAILY_LAST)
        self._last_claim = dt_utils.dt_parse(raw)
        if raw and self._last_claim is None:
            const.LOGGER.warning(
                "WARNING: Stored daily claim '%s' is invalid. Treating as never claimed",
                raw,
            )

    def setup(self) -> None:
        """No subscriptions."""

    def get_last_claim(self) -> datetime | None:
        """Return the last successful claim instant, if any."""
        return self._last_claim

    def can_claim_daily_bonus(self) -> bool:
        """Return True if no claim has been made today (local calendar)."""
        if self._last_claim is None:
            return True
        return not dt_utils.dt_is_same_local_day(
            self._last_claim, dt_utils.dt_now_utc(), self.coordinator.tz
        )

    def claim_daily_bonus(self) -> bool | None:
        """Record today's claim and advance or restart the streak.

        Returns:
            True on success, None if already claimed today
        """
        if not self.can_claim_daily_bonus():
            const.LOGGER.debug("DEBUG: Daily bonus already claimed today")
            return None

        now = dt_utils.dt_now_utc()
        previous = self._last_claim
        self._last_claim = now
        claimed_at = now.isoformat()

        statistics_manager = self.coordinator.statistics_manager
        if previous is not None and dt_utils.dt_is_yesterday(
            previous, now, self.coordinator.tz
        ):
            streak = statistics_manager.get_daily_streak() + 1
        else:
            streak = 1

        with self.store.transaction():
            self.store.save(const.STORAGE_KEY_DAILY_LAST, claimed_at)
            statistics_manager.set_daily_streak(streak)
            const.LOGGER.info("INFO: Daily bonus claimed (streak %s)", streak)
            self.emit(DailyBonusClaimed(streak=streak, claimed_at=claimed_at))
        return True

    def spin_wheel(self) -> float:
        """Pick a prize from the configured wheel using the random source."""
        prize = random_utils.weighted_choice(
            self.config[const.CONF_BONUS_WHEEL_PRIZES],
            self.config[const.CONF_BONUS_WHEEL_WEIGHTS],
        )
        const.LOGGER.debug("DEBUG: Bonus wheel landed on %s", prize)
        return prize
