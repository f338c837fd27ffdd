"""Statistics Engine - Pure logic for the player statistics record.

Design Principles:
    - Stateless: operates on the record passed in, never persists
    - Incremental: totals are updated from sparse deltas, never recomputed
    - Tolerant: stored records are repaired field by field on load
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import copy
import math
from typing import Any

from .. import const
from ..type_defs import PlayerStats, StatsUpdate
from ..utils import dt_utils
from ..utils.math_utils import as_finite_float, round_amount

# Monetary fields: non-negative, rounded to DATA_FLOAT_PRECISION
MONEY_FIELDS = (
    const.DATA_STATS_TOTAL_WAGERED,
    const.DATA_STATS_TOTAL_WON,
    const.DATA_STATS_BIGGEST_WIN,
    const.DATA_STATS_LOWEST_BALANCE,
)

# Counter fields: non-negative integers
COUNTER_FIELDS = (
    const.DATA_STATS_CONSECUTIVE_WINS,
    const.DATA_STATS_DAILY_STREAK,
)


def _as_money(value: Any) -> float | None:
    """Return value as a rounded non-negative float, or None if invalid."""
    converted = as_finite_float(value)
    if converted is None or converted < 0:
        return None
    return round_amount(converted)


def _as_counter(value: Any) -> int | None:
    """Return value as a non-negative int, or None if invalid."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 0:
        return None
    return value


class StatisticsEngine:
    """Stateless helpers for building, repairing and updating PlayerStats.

    Example:
        stats = StatisticsEngine.default_stats(100.0, ["slots"], now_iso)
        StatisticsEngine.apply_update(stats, {"total_won": 25.0}, 125.0)
    """

    @staticmethod
    def default_stats(
        starting_balance: float, games: Sequence[str], session_start: str
    ) -> PlayerStats:
        """Return a fresh statistics record."""
        return {
            const.DATA_STATS_TOTAL_WAGERED: 0.0,
            const.DATA_STATS_TOTAL_WON: 0.0,
            const.DATA_STATS_BIGGEST_WIN: 0.0,
            const.DATA_STATS_GAMES_PLAYED: {game: 0 for game in games},
            const.DATA_STATS_SESSION_START: session_start,
            const.DATA_STATS_LOWEST_BALANCE: round(
                starting_balance, const.DATA_FLOAT_PRECISION
            ),
            const.DATA_STATS_CONSECUTIVE_WINS: 0,
            const.DATA_STATS_DAILY_STREAK: 0,
        }  # type: ignore[return-value]

    @staticmethod
    def sanitize_stats(
        raw: object, defaults: PlayerStats
    ) -> tuple[PlayerStats, list[str]]:
        """Merge a stored record over defaults, field by field.

        Missing fields take their default silently. Fields with the wrong
        type or a negative value take their default and are reported.

        Args:
            raw: Decoded stored record (any JSON value)
            defaults: Record to fall back on; not mutated

        Returns:
            Tuple of (repaired record, names of fields that were invalid)
        """
        stats = copy.deepcopy(defaults)
        if not isinstance(raw, Mapping):
            return stats, ([] if raw is None else ["stats"])

        repaired: list[str] = []
        for field in MONEY_FIELDS:
            if field in raw:
                money = _as_money(raw[field])
                if money is None:
                    repaired.append(field)
                else:
                    stats[field] = money  # type: ignore[literal-required]

        for field in COUNTER_FIELDS:
            if field in raw:
                counter = _as_counter(raw[field])
                if counter is None:
                    repaired.append(field)
                else:
                    stats[field] = counter  # type: ignore[literal-required]

        if const.DATA_STATS_GAMES_PLAYED in raw:
            played = raw[const.DATA_STATS_GAMES_PLAYED]
            if isinstance(played, Mapping):
                games_played = stats[const.DATA_STATS_GAMES_PLAYED]
                for game, count in played.items():
                    counter = _as_counter(count)
                    if isinstance(game, str) and counter is not None:
                        games_played[game] = counter
                    else:
                        repaired.append(f"{const.DATA_STATS_GAMES_PLAYED}.{game}")
            else:
                repaired.append(const.DATA_STATS_GAMES_PLAYED)

        if const.DATA_STATS_SESSION_START in raw:
            session_start = raw[const.DATA_STATS_SESSION_START]
            if dt_utils.dt_parse(session_start) is not None:
                stats[const.DATA_STATS_SESSION_START] = session_start
            else:
                repaired.append(const.DATA_STATS_SESSION_START)

        return stats, repaired

    @staticmethod
    def apply_update(
        stats: PlayerStats, update: StatsUpdate, current_balance: float
    ) -> PlayerStats:
        """Apply a sparse delta to stats in place.

        Field rules:
            total_wagered: added to the running total
            total_won: added to the total, raises biggest_win if larger,
                increments consecutive_wins
            no_win: resets consecutive_wins
            game: increments that game's play counter (new names are added)

        The lowest balance is always compared against current_balance.

        Returns:
            The same stats object, for chaining
        """
        wagered = _as_money(update.get(const.STATS_UPDATE_TOTAL_WAGERED))
        if wagered:
            stats[const.DATA_STATS_TOTAL_WAGERED] = round(
                stats[const.DATA_STATS_TOTAL_WAGERED] + wagered,
                const.DATA_FLOAT_PRECISION,
            )

        won = _as_money(update.get(const.STATS_UPDATE_TOTAL_WON))
        if won:
            stats[const.DATA_STATS_TOTAL_WON] = round(
                stats[const.DATA_STATS_TOTAL_WON] + won, const.DATA_FLOAT_PRECISION
            )
            if won > stats[const.DATA_STATS_BIGGEST_WIN]:
                stats[const.DATA_STATS_BIGGEST_WIN] = won
            stats[const.DATA_STATS_CONSECUTIVE_WINS] += 1

        if update.get(const.STATS_UPDATE_NO_WIN):
            stats[const.DATA_STATS_CONSECUTIVE_WINS] = 0

        game = update.get(const.STATS_UPDATE_GAME)
        if isinstance(game, str) and game:
            games_played = stats[const.DATA_STATS_GAMES_PLAYED]
            games_played[game] = games_played.get(game, 0) + 1

        balance = round(current_balance, const.DATA_FLOAT_PRECISION)
        if balance < stats[const.DATA_STATS_LOWEST_BALANCE]:
            stats[const.DATA_STATS_LOWEST_BALANCE] = balance

        return stats
