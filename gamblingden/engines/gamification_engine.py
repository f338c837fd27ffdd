"""Gamification Engine - Pure logic for achievement condition evaluation.

This engine decides WHICH achievement ids a situation qualifies for. It never
unlocks anything: the GamificationManager deduplicates, persists, credits the
reward and publishes the unlock. Every evaluator returns candidate ids in the
order they should be attempted; already-unlocked ids are filtered by the
manager, not here.

Evaluators:
- wager_achievements: first_spin, high_roller
- win_achievements: comeback, first_win
- level_achievements: level_10, level_25, level_50
- stats_achievements: lucky_streak, whale, diversified
- time_achievements: night_owl, marathon
- daily_achievements: daily_streak_7

ARCHITECTURE: All functions are static methods that operate on passed-in data.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils import dt_utils
from ..utils.math_utils import format_currency_short

if TYPE_CHECKING:
    from ..type_defs import AchievementId, AchievementInfo, PlayerStats


class GamificationEngine:
    """Stateless achievement evaluator."""

    # =========================================================================
    # CATALOGUE
    # =========================================================================

    @staticmethod
    def is_known(achievement_id: object) -> bool:
        """Return True if achievement_id is in the static catalogue."""
        return isinstance(achievement_id, str) and achievement_id in const.ACHIEVEMENTS

    @staticmethod
    def description_values(config: Mapping[str, Any]) -> dict[str, str]:
        """Render the configured thresholds for the description templates."""
        money = {
            key: format_currency_short(config[key])
            for key in (
                const.CONF_HIGH_ROLLER_THRESHOLD,
                const.CONF_COMEBACK_LOW_BALANCE,
                const.CONF_COMEBACK_HIGH_BALANCE,
                const.CONF_WHALE_TOTAL_WON,
            )
        }
        hours = {
            key: f"{config[key]:02d}:00"
            for key in (const.CONF_NIGHT_OWL_START_HOUR, const.CONF_NIGHT_OWL_END_HOUR)
        }
        counts = {
            key: str(config[key])
            for key in (
                const.CONF_LUCKY_STREAK_LENGTH,
                const.CONF_MARATHON_MINUTES,
                const.CONF_DAILY_STREAK_TARGET,
            )
        }
        multiplier = f"{config[const.CONF_JACKPOT_MULTIPLIER]:g}"
        return {**money, **hours, **counts, const.CONF_JACKPOT_MULTIPLIER: multiplier}

    @staticmethod
    def describe(achievement_id: AchievementId, config: Mapping[str, Any]) -> str:
        """Return the description of achievement_id for these options.

        Examples:
            describe("whale", defaults) → "Accumulate €1000 total winnings"
        """
        definition = const.ACHIEVEMENTS[achievement_id]
        return definition[const.DATA_ACHIEVEMENT_DESCRIPTION].format(
            **GamificationEngine.description_values(config)
        )

    @staticmethod
    def build_achievement_list(
        unlocked: Iterable[AchievementId],
        config: Mapping[str, Any],
    ) -> list[AchievementInfo]:
        """Merge the catalogue with unlock state, in catalogue order."""
        unlocked_set = set(unlocked)
        values = GamificationEngine.description_values(config)
        return [
            {
                "id": achievement_id,
                "name": definition[const.DATA_ACHIEVEMENT_NAME],
                "desc": definition[const.DATA_ACHIEVEMENT_DESCRIPTION].format(**values),
                "reward": definition[const.DATA_ACHIEVEMENT_REWARD],
                "unlocked": achievement_id in unlocked_set,
            }
            for achievement_id, definition in const.ACHIEVEMENTS.items()
        ]

    @staticmethod
    def sanitize_unlocked(raw: object) -> list[AchievementId] | None:
        """Normalize a persisted unlock list.

        Keeps string ids (including ids this version does not know) in their
        stored order and drops duplicates and non-strings.

        Returns:
            The cleaned list, or None when raw is not a list at all
        """
        if not isinstance(raw, list):
            return None
        cleaned: list[AchievementId] = []
        for item in raw:
            if isinstance(item, str) and item not in cleaned:
                cleaned.append(item)
        return cleaned

    # =========================================================================
    # EVALUATORS
    # =========================================================================

    @staticmethod
    def wager_achievements(
        amount: float, high_roller_threshold: float
    ) -> list[AchievementId]:
        """Ids earned by an accepted wager."""
        earned = [const.ACHIEVEMENT_FIRST_SPIN]
        if amount >= high_roller_threshold:
            earned.append(const.ACHIEVEMENT_HIGH_ROLLER)
        return earned

    @staticmethod
    def win_achievements(
        balance: float,
        lowest_before: float,
        comeback_low: float,
        comeback_high: float,
    ) -> list[AchievementId]:
        """Ids earned by a credited win.

        Args:
            balance: Balance after the credit
            lowest_before: Lowest balance on record before the credit
            comeback_low: Balance the player must have dropped below
            comeback_high: Balance the player must climb back to
        """
        earned: list[AchievementId] = []
        if balance >= comeback_high and lowest_before < comeback_low:
            earned.append(const.ACHIEVEMENT_COMEBACK)
        earned.append(const.ACHIEVEMENT_FIRST_WIN)
        return earned

    @staticmethod
    def level_achievements(level: int) -> list[AchievementId]:
        """Ids earned on reaching exactly this level."""
        achievement_id = const.LEVEL_ACHIEVEMENTS.get(level)
        return [achievement_id] if achievement_id else []

    @staticmethod
    def stats_achievements(
        stats: PlayerStats,
        lucky_streak_length: int,
        whale_total_won: float,
        games: Sequence[str],
    ) -> list[AchievementId]:
        """Ids earned by the current statistics record."""
        earned: list[AchievementId] = []
        if stats[const.DATA_STATS_CONSECUTIVE_WINS] >= lucky_streak_length:
            earned.append(const.ACHIEVEMENT_LUCKY_STREAK)
        if stats[const.DATA_STATS_TOTAL_WON] >= whale_total_won:
            earned.append(const.ACHIEVEMENT_WHALE)
        played = stats[const.DATA_STATS_GAMES_PLAYED]
        if games and all(played.get(game, 0) > 0 for game in games):
            earned.append(const.ACHIEVEMENT_DIVERSIFIED)
        return earned

    @staticmethod
    def in_hour_window(hour: int, start_hour: int, end_hour: int) -> bool:
        """Check hour against [start_hour, end_hour), wrapping past midnight.

        Examples:
            in_hour_window(2, 0, 4) → True
            in_hour_window(4, 0, 4) → False
            in_hour_window(23, 22, 2) → True
        """
        if start_hour == end_hour:
            return False
        if start_hour < end_hour:
            return start_hour <= hour < end_hour
        return hour >= start_hour or hour < end_hour

    @staticmethod
    def time_achievements(
        now_local: datetime,
        session_start: datetime | None,
        night_owl_start_hour: int,
        night_owl_end_hour: int,
        marathon_minutes: int,
    ) -> list[AchievementId]:
        """Ids earned by the wall clock and session length.

        Args:
            now_local: Current time in the player's zone
            session_start: When this session started (None skips marathon)
            night_owl_start_hour: First hour of the night owl window
            night_owl_end_hour: Hour the window closes (exclusive)
            marathon_minutes: Session length required for marathon
        """
        earned: list[AchievementId] = []
        if GamificationEngine.in_hour_window(
            now_local.hour, night_owl_start_hour, night_owl_end_hour
        ):
            earned.append(const.ACHIEVEMENT_NIGHT_OWL)
        if (
            session_start is not None
            and dt_utils.dt_minutes_between(session_start, now_local)
            >= marathon_minutes
        ):
            earned.append(const.ACHIEVEMENT_MARATHON)
        return earned

    @staticmethod
    def daily_achievements(streak: int, streak_target: int) -> list[AchievementId]:
        """Ids earned by the daily-claim streak."""
        if streak >= streak_target:
            return [const.ACHIEVEMENT_DAILY_STREAK_7]
        return []
