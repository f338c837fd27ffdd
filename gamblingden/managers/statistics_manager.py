"""Statistics Manager - Running totals for the player.

Owns the PlayerStats record: wagered/won totals, biggest win, per-game play
counts, the lowest balance ever seen, the win streak and the daily-claim
streak. The record is only ever updated incrementally and published as a
detached snapshot after each change.
"""

from __future__ import annotations

from collections.abc import Mapping
import copy
from typing import TYPE_CHECKING

from .. import const
from ..engines.statistics_engine import StatisticsEngine
from ..events import StatsUpdated
from ..utils import dt_utils
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..coordinator import GamblingDenCoordinator
    from ..type_defs import ISODatetime, PlayerStats, StatsUpdate


class StatisticsManager(BaseManager):
    """Manager for the aggregate statistics record."""

    def __init__(self, coordinator: GamblingDenCoordinator) -> None:
        """Initialize with a default record."""
        super().__init__(coordinator)
        self._stats: PlayerStats = self._default_stats()

    def _default_stats(self) -> PlayerStats:
        return StatisticsEngine.default_stats(
            self.config[const.CONF_STARTING_BALANCE],
            self.config[const.CONF_GAMES],
            dt_utils.dt_now_iso(),
        )

    def load(self) -> None:
        """Rehydrate the record and start a new session.

        Stored fields are merged over the defaults; invalid fields are
        repaired. session_start is always reset to now.
        """
        raw = self.store.load_json(const.STORAGE_KEY_STATS, None)
        stats, repaired = StatisticsEngine.sanitize_stats(raw, self._default_stats())
        if repaired:
            const.LOGGER.warning(
                "WARNING: Repaired invalid statistics fields: %s", ", ".join(repaired)
            )
        stats[const.DATA_STATS_SESSION_START] = dt_utils.dt_now_iso()
        self._stats = stats
        self._persist()

    def setup(self) -> None:
        """No subscriptions: statistics are fed by the ledger and games."""

    def _persist(self) -> None:
        self.store.save_json(const.STORAGE_KEY_STATS, self._stats)

    def get_stats(self) -> PlayerStats:
        """Return a deep copy of the record."""
        return copy.deepcopy(self._stats)

    def get_lowest_balance(self) -> float:
        """Return the lowest balance on record."""
        return self._stats[const.DATA_STATS_LOWEST_BALANCE]

    def get_session_start(self) -> ISODatetime:
        """Return the session-start timestamp (UTC ISO string)."""
        return self._stats[const.DATA_STATS_SESSION_START]

    def get_daily_streak(self) -> int:
        """Return the consecutive daily-claim count."""
        return self._stats[const.DATA_STATS_DAILY_STREAK]

    def update_stats(self, update: StatsUpdate) -> None:
        """Apply a sparse delta, persist, and publish the new snapshot.

        The lowest balance is compared against the ledger's current balance,
        not a value passed in.

        Args:
            update: Any of total_wagered, total_won, no_win, game
        """
        if not isinstance(update, Mapping):
            const.LOGGER.warning(
                "WARNING: StatisticsManager.update_stats: ignored non-mapping %r",
                update,
            )
            return
        StatisticsEngine.apply_update(
            self._stats, update, self.coordinator.economy_manager.get_balance()
        )
        self._persist()
        const.LOGGER.debug(
            "DEBUG: StatisticsManager.update_stats: keys=%s", list(update.keys())
        )
        self.emit(StatsUpdated(stats=self.get_stats()))

    def set_daily_streak(self, streak: int) -> None:
        """Store the daily-claim streak and publish the new snapshot."""
        self._stats[const.DATA_STATS_DAILY_STREAK] = max(int(streak), 0)
        self._persist()
        self.emit(StatsUpdated(stats=self.get_stats()))
