"""Progression Manager - XP and level ownership.

XP only ever grows, and the level is always derived from XP through the
configured threshold table. On load the stored level is never trusted over
the stored XP: it is recomputed and rewritten if the two disagree.

Events Emitted:
- LevelUp: once per level crossed, in ascending order
- XpChanged: once per grant, after the level loop
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..engines.progression_engine import ProgressionEngine
from ..events import LevelUp, XpChanged
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..coordinator import GamblingDenCoordinator
    from ..type_defs import LevelProgress


class ProgressionManager(BaseManager):
    """Manager for cumulative XP and the derived level."""

    def __init__(self, coordinator: GamblingDenCoordinator) -> None:
        """Initialize at 0 XP, level 1."""
        super().__init__(coordinator)
        self._xp: int = const.DEFAULT_ZERO
        self._level: int = 1

    @property
    def thresholds(self) -> list[int]:
        """Return the configured cumulative XP table."""
        return self.config[const.CONF_LEVEL_THRESHOLDS]

    def load(self) -> None:
        """Rehydrate XP and reconcile the stored level against it."""
        raw_xp = self.store.load_json(const.STORAGE_KEY_XP, None)
        xp = ProgressionEngine.parse_stored_int(raw_xp)
        if xp is None:
            if raw_xp is not None:
                const.LOGGER.warning(
                    "WARNING: Stored XP %r is invalid. Resetting to 0", raw_xp
                )
                self.store.save_json(const.STORAGE_KEY_XP, const.DEFAULT_ZERO)
            xp = const.DEFAULT_ZERO
        self._xp = xp

        raw_level = self.store.load_json(const.STORAGE_KEY_LEVEL, None)
        stored_level = ProgressionEngine.parse_stored_int(raw_level)
        self._level = ProgressionEngine.level_for_xp(self._xp, self.thresholds)
        if stored_level != self._level:
            if raw_level is not None:
                const.LOGGER.warning(
                    "WARNING: Stored level %r does not match XP %s. Using level %s",
                    raw_level,
                    self._xp,
                    self._level,
                )
            self.store.save_json(const.STORAGE_KEY_LEVEL, self._level)

        const.LOGGER.debug(
            "DEBUG: ProgressionManager loaded xp=%s, level=%s", self._xp, self._level
        )

    def setup(self) -> None:
        """No subscriptions: XP is granted by the ledger."""

    def get_xp(self) -> int:
        """Return cumulative XP."""
        return self._xp

    def get_level(self) -> int:
        """Return the current 1-based level."""
        return self._level

    def get_level_progress(self) -> LevelProgress:
        """Return progress within the current level."""
        return ProgressionEngine.level_progress(self._xp, self._level, self.thresholds)

    def add_xp(self, amount: float) -> int:
        """Grant XP and walk the level table.

        The grant is floored to a whole number. Each threshold crossed bumps
        the level by one, persists it and emits LevelUp, so a large grant can
        fire several level-ups in one call.

        Args:
            amount: XP to grant; non-positive or invalid amounts are ignored

        Returns:
            Number of levels gained
        """
        grant = ProgressionEngine.normalize_xp_grant(amount)
        if grant <= 0:
            return 0

        self._xp += grant
        self.store.save_json(const.STORAGE_KEY_XP, self._xp)

        gained = 0
        while ProgressionEngine.next_level_reached(
            self._xp, self._level, self.thresholds
        ):
            self._level += 1
            gained += 1
            self.store.save_json(const.STORAGE_KEY_LEVEL, self._level)
            const.LOGGER.info("INFO: Level up! Now level %s", self._level)
            self.emit(LevelUp(level=self._level))

        const.LOGGER.debug(
            "DEBUG: ProgressionManager.add_xp: grant=%s, xp=%s, level=%s",
            grant,
            self._xp,
            self._level,
        )
        self.emit(XpChanged(xp=self._xp, level=self._level))
        return gained
