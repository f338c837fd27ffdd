# File: diagnostics.py
"""Diagnostics support for GamblingDen.

Returns the raw persisted values exactly as stored (so a corrupt value can be
seen as-is) next to the live in-memory state the engine is actually using.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from . import const
from .utils import dt_utils

if TYPE_CHECKING:
    from .coordinator import GamblingDenCoordinator


def get_diagnostics(coordinator: GamblingDenCoordinator) -> dict[str, Any]:
    """Return diagnostics for one coordinator.

    Keys:
        storage: raw namespaced values, keyed without the prefix
        state: live balance, progression, achievements, stats, daily, settings
        config: the validated options
    """
    last_claim = coordinator.daily_bonus_manager.get_last_claim()
    return {
        "storage": coordinator.store.snapshot(),
        "state": {
            const.STORAGE_KEY_BALANCE: coordinator.get_balance(),
            const.STORAGE_KEY_XP: coordinator.get_xp(),
            const.STORAGE_KEY_LEVEL: coordinator.get_level(),
            "level_progress": coordinator.get_level_progress(),
            const.STORAGE_KEY_ACHIEVEMENTS: coordinator.get_unlocked_achievements(),
            const.STORAGE_KEY_STATS: coordinator.get_stats(),
            const.STORAGE_KEY_DAILY_LAST: (
                last_claim.isoformat() if last_claim is not None else None
            ),
            "can_claim_daily_bonus": coordinator.can_claim_daily_bonus(),
            const.STORAGE_KEY_SETTINGS: coordinator.system_manager.get_settings(),
            "time_checks_running": coordinator.gamification_manager.time_checks_running,
            "local_time": dt_utils.dt_now_local(coordinator.tz).isoformat(),
        },
        "config": dict(coordinator.config),
    }
