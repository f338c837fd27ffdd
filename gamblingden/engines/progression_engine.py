"""Progression Engine - Pure logic for XP and level calculations.

Levels are 1-based and derived from a cumulative threshold table where
``thresholds[i]`` is the XP needed to reach level ``i + 1``. The table always
starts at 0, so level 1 needs no XP, and its length is the maximum level.

ARCHITECTURE: All functions are static methods that operate on passed-in data.
State management belongs in ProgressionManager.
"""

from __future__ import annotations

from collections.abc import Sequence
import math

from .. import const
from ..type_defs import LevelProgress
from ..utils.math_utils import as_finite_float, calculate_percentage


class ProgressionEngine:
    """Pure logic engine for XP and level lookups."""

    @staticmethod
    def max_level(thresholds: Sequence[int]) -> int:
        """Return the highest reachable level."""
        return len(thresholds)

    @staticmethod
    def level_for_xp(xp: int, thresholds: Sequence[int]) -> int:
        """Return the largest level whose threshold xp has reached.

        Examples (thresholds [0, 100, 250]):
            level_for_xp(0) → 1
            level_for_xp(100) → 2
            level_for_xp(9999) → 3
        """
        level = 1
        while level < len(thresholds) and xp >= thresholds[level]:
            level += 1
        return level

    @staticmethod
    def next_level_reached(xp: int, level: int, thresholds: Sequence[int]) -> bool:
        """Return True when xp has reached the threshold above level."""
        return level < len(thresholds) and xp >= thresholds[level]

    @staticmethod
    def level_progress(
        xp: int, level: int, thresholds: Sequence[int]
    ) -> LevelProgress:
        """Calculate progress within the current level.

        At the maximum level there is nothing left to earn: needed is 0 and
        percent is 100.

        Args:
            xp: Current cumulative XP
            level: Current 1-based level
            thresholds: Cumulative XP table

        Returns:
            LevelProgress with progress, needed and a percent in [0, 100]
        """
        floor_index = min(max(level - 1, 0), len(thresholds) - 1)
        floor_xp = thresholds[floor_index]
        progress = max(xp - floor_xp, 0)
        if level >= len(thresholds):
            return {"progress": progress, "needed": 0, "percent": 100.0}
        needed = thresholds[level] - floor_xp
        return {
            "progress": progress,
            "needed": needed,
            "percent": calculate_percentage(progress, needed),
        }

    @staticmethod
    def normalize_xp_grant(amount: object) -> int:
        """Floor an XP grant to a whole number; invalid or non-positive → 0."""
        converted = as_finite_float(amount)
        if converted is None or converted <= 0:
            return const.DEFAULT_ZERO
        return math.floor(converted)

    @staticmethod
    def parse_stored_int(raw: object) -> int | None:
        """Parse a persisted non-negative integer (XP or level).

        Accepts an int or a JSON-decoded integral float. Anything else yields
        None so the caller can fall back to its default.
        """
        if isinstance(raw, bool):
            return None
        if isinstance(raw, float) and math.isfinite(raw) and raw.is_integer():
            raw = int(raw)
        if not isinstance(raw, int) or raw < 0:
            return None
        return raw
