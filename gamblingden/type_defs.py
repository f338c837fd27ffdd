"""Type definitions for GamblingDen data structures.

TypedDict is used for STATIC structures whose keys are known at design time
(achievement definitions, the statistics record, level progress). Dynamic
mappings such as ``games_played`` stay ``dict[str, int]``.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime sanitizing of stored data
(type checks, defaults) lives in the engines that rehydrate state.

IMPORTANT: This file must NOT import from managers or the coordinator to
avoid circular dependencies.
"""

from typing import TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

AchievementId = str
GameName = str
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"


# =============================================================================
# Achievements
# =============================================================================


class AchievementDefinition(TypedDict):
    """Immutable catalogue entry (const.ACHIEVEMENTS values)."""

    name: str
    description: str
    reward: float


class AchievementInfo(TypedDict):
    """Catalogue entry merged with unlock state, for lobby display."""

    id: AchievementId
    name: str
    desc: str
    reward: float
    unlocked: bool


# =============================================================================
# Progression
# =============================================================================


class LevelProgress(TypedDict):
    """XP progress inside the current level."""

    progress: int
    needed: int
    percent: float


# =============================================================================
# Statistics
# =============================================================================


class PlayerStats(TypedDict):
    """Aggregate statistics record persisted under STORAGE_KEY_STATS."""

    total_wagered: float
    total_won: float
    biggest_win: float
    games_played: dict[GameName, int]
    session_start: ISODatetime
    lowest_balance: float
    consecutive_wins: int
    daily_streak: int


class StatsUpdate(TypedDict, total=False):
    """Sparse delta accepted by StatisticsManager.update_stats()."""

    total_wagered: float
    total_won: float
    no_win: bool
    game: GameName


# =============================================================================
# Settings
# =============================================================================


class SettingsData(TypedDict):
    """Persisted lobby settings."""

    sound: bool
