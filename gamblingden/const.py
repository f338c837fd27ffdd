# File: const.py
"""Constants for the GamblingDen player economy.

This file centralizes storage keys, defaults, the level-threshold table, the
achievement catalogue, event names and configuration keys for consistency
across the engines and managers.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General Information
# ------------------------------------------------------------------------------------------------
GAMBLINGDEN_TITLE = "GamblingDen"

# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Storage
# ------------------------------------------------------------------------------------------------
DEFAULT_STORAGE_PREFIX = "gd_"

STORAGE_KEY_BALANCE = "balance"
STORAGE_KEY_XP = "xp"
STORAGE_KEY_LEVEL = "level"
STORAGE_KEY_ACHIEVEMENTS = "achievements"
STORAGE_KEY_STATS = "stats"
STORAGE_KEY_DAILY_LAST = "daily_last"
STORAGE_KEY_SETTINGS = "settings"

# ------------------------------------------------------------------------------------------------
# Numeric Defaults
# ------------------------------------------------------------------------------------------------
DATA_FLOAT_PRECISION = 2
DEFAULT_ZERO = 0

DEFAULT_STARTING_BALANCE = 100.0
DEFAULT_XP_PER_UNIT_WAGERED = 10

# Cumulative XP needed for each level (index 0 = level 1)
DEFAULT_LEVEL_THRESHOLDS = [
    0, 100, 250, 500, 800, 1200, 1700, 2300, 3000, 4000, 5200, 6600, 8200,
    10000, 12500, 15500, 19000, 23000, 28000, 34000, 41000, 49000, 58000, 68000,
    80000, 95000, 112000, 132000, 155000, 182000, 215000, 255000, 302000,
    358000, 425000, 505000, 600000, 715000, 850000, 1010000, 1200000, 1430000,
    1700000, 2020000, 2400000, 2850000, 3400000, 4050000, 4820000, 5750000,
]  # fmt: skip

DEFAULT_HIGH_ROLLER_THRESHOLD = 10.0
DEFAULT_LUCKY_STREAK_LENGTH = 5
DEFAULT_WHALE_TOTAL_WON = 1000.0
DEFAULT_COMEBACK_LOW_BALANCE = 10.0
DEFAULT_COMEBACK_HIGH_BALANCE = 100.0
DEFAULT_JACKPOT_MULTIPLIER = 20.0
DEFAULT_NIGHT_OWL_START_HOUR = 0
DEFAULT_NIGHT_OWL_END_HOUR = 4
DEFAULT_MARATHON_MINUTES = 30
DEFAULT_DAILY_STREAK_TARGET = 7
DEFAULT_TIME_CHECK_INTERVAL = 60

GAME_SLOTS = "slots"
GAME_BLACKJACK = "blackjack"
GAME_CRASH = "crash"
GAME_SCRATCH = "scratch"
DEFAULT_GAMES = [GAME_SLOTS, GAME_BLACKJACK, GAME_CRASH, GAME_SCRATCH]

DEFAULT_BONUS_WHEEL_PRIZES = [10, 25, 50, 15, 100, 20, 35, 75]

DEFAULT_SOUND_ENABLED = True

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_STARTING_BALANCE = "starting_balance"
CONF_XP_PER_UNIT_WAGERED = "xp_per_unit_wagered"
CONF_LEVEL_THRESHOLDS = "level_thresholds"
CONF_HIGH_ROLLER_THRESHOLD = "high_roller_threshold"
CONF_LUCKY_STREAK_LENGTH = "lucky_streak_length"
CONF_WHALE_TOTAL_WON = "whale_total_won"
CONF_COMEBACK_LOW_BALANCE = "comeback_low_balance"
CONF_COMEBACK_HIGH_BALANCE = "comeback_high_balance"
CONF_JACKPOT_MULTIPLIER = "jackpot_multiplier"
CONF_NIGHT_OWL_START_HOUR = "night_owl_start_hour"
CONF_NIGHT_OWL_END_HOUR = "night_owl_end_hour"
CONF_MARATHON_MINUTES = "marathon_minutes"
CONF_DAILY_STREAK_TARGET = "daily_streak_target"
CONF_TIME_CHECK_INTERVAL = "time_check_interval"
CONF_GAMES = "games"
CONF_BONUS_WHEEL_PRIZES = "bonus_wheel_prizes"
CONF_BONUS_WHEEL_WEIGHTS = "bonus_wheel_weights"
CONF_STORAGE_PREFIX = "storage_prefix"
CONF_TIME_ZONE = "time_zone"

# ------------------------------------------------------------------------------------------------
# Statistics Record Keys
# ------------------------------------------------------------------------------------------------
DATA_STATS_TOTAL_WAGERED = "total_wagered"
DATA_STATS_TOTAL_WON = "total_won"
DATA_STATS_BIGGEST_WIN = "biggest_win"
DATA_STATS_GAMES_PLAYED = "games_played"
DATA_STATS_SESSION_START = "session_start"
DATA_STATS_LOWEST_BALANCE = "lowest_balance"
DATA_STATS_CONSECUTIVE_WINS = "consecutive_wins"
DATA_STATS_DAILY_STREAK = "daily_streak"

# Sparse update keys accepted by StatisticsManager.update_stats()
STATS_UPDATE_TOTAL_WAGERED = "total_wagered"
STATS_UPDATE_TOTAL_WON = "total_won"
STATS_UPDATE_NO_WIN = "no_win"
STATS_UPDATE_GAME = "game"

# Settings record keys
DATA_SETTINGS_SOUND = "sound"

# ------------------------------------------------------------------------------------------------
# Events
# ------------------------------------------------------------------------------------------------
EVENT_BALANCE_CHANGE = "balance:change"
EVENT_BALANCE_RESET = "balance:reset"
EVENT_XP_CHANGE = "xp:change"
EVENT_LEVEL_UP = "level:up"
EVENT_ACHIEVEMENT_UNLOCK = "achievement:unlock"
EVENT_STATS_UPDATE = "stats:update"
EVENT_BET_PLACED = "bet:placed"
EVENT_WIN = "win"
EVENT_DAILY_CLAIM = "daily:claim"
EVENT_SETTINGS_CHANGE = "settings:change"

# ------------------------------------------------------------------------------------------------
# Achievements
# ------------------------------------------------------------------------------------------------
ACHIEVEMENT_FIRST_SPIN = "first_spin"
ACHIEVEMENT_FIRST_WIN = "first_win"
ACHIEVEMENT_HIGH_ROLLER = "high_roller"
ACHIEVEMENT_JACKPOT = "jackpot"
ACHIEVEMENT_LUCKY_STREAK = "lucky_streak"
ACHIEVEMENT_NIGHT_OWL = "night_owl"
ACHIEVEMENT_MARATHON = "marathon"
ACHIEVEMENT_DIVERSIFIED = "diversified"
ACHIEVEMENT_COMEBACK = "comeback"
ACHIEVEMENT_WHALE = "whale"
ACHIEVEMENT_LEVEL_10 = "level_10"
ACHIEVEMENT_LEVEL_25 = "level_25"
ACHIEVEMENT_LEVEL_50 = "level_50"
ACHIEVEMENT_DAILY_STREAK_7 = "daily_streak_7"
ACHIEVEMENT_BLACKJACK_21 = "blackjack_21"
ACHIEVEMENT_CRASH_10X = "crash_10x"
ACHIEVEMENT_SCRATCH_JACKPOT = "scratch_jackpot"

DATA_ACHIEVEMENT_NAME = "name"
DATA_ACHIEVEMENT_DESCRIPTION = "description"
DATA_ACHIEVEMENT_REWARD = "reward"

# Static catalogue; insertion order is display order. Descriptions are
# str.format templates whose placeholders are configuration keys
ACHIEVEMENTS = {
    ACHIEVEMENT_FIRST_SPIN: {
        DATA_ACHIEVEMENT_NAME: "First Timer",
        DATA_ACHIEVEMENT_DESCRIPTION: "Place your first bet",
        DATA_ACHIEVEMENT_REWARD: 5.0,
    },
    ACHIEVEMENT_FIRST_WIN: {
        DATA_ACHIEVEMENT_NAME: "Winner!",
        DATA_ACHIEVEMENT_DESCRIPTION: "Win for the first time",
        DATA_ACHIEVEMENT_REWARD: 10.0,
    },
    ACHIEVEMENT_HIGH_ROLLER: {
        DATA_ACHIEVEMENT_NAME: "High Roller",
        DATA_ACHIEVEMENT_DESCRIPTION: (
            "Place a bet of {high_roller_threshold} or more"
        ),
        DATA_ACHIEVEMENT_REWARD: 25.0,
    },
    ACHIEVEMENT_JACKPOT: {
        DATA_ACHIEVEMENT_NAME: "Jackpot!",
        DATA_ACHIEVEMENT_DESCRIPTION: (
            "Hit a {jackpot_multiplier}× or higher multiplier"
        ),
        DATA_ACHIEVEMENT_REWARD: 100.0,
    },
    ACHIEVEMENT_LUCKY_STREAK: {
        DATA_ACHIEVEMENT_NAME: "Lucky Streak",
        DATA_ACHIEVEMENT_DESCRIPTION: "Win {lucky_streak_length} times in a row",
        DATA_ACHIEVEMENT_REWARD: 50.0,
    },
    ACHIEVEMENT_NIGHT_OWL: {
        DATA_ACHIEVEMENT_NAME: "Night Owl",
        DATA_ACHIEVEMENT_DESCRIPTION: (
            "Play between {night_owl_start_hour} and {night_owl_end_hour}"
        ),
        DATA_ACHIEVEMENT_REWARD: 15.0,
    },
    ACHIEVEMENT_MARATHON: {
        DATA_ACHIEVEMENT_NAME: "Marathon",
        DATA_ACHIEVEMENT_DESCRIPTION: (
            "Play for {marathon_minutes} minutes in one session"
        ),
        DATA_ACHIEVEMENT_REWARD: 30.0,
    },
    ACHIEVEMENT_DIVERSIFIED: {
        DATA_ACHIEVEMENT_NAME: "Diversified",
        DATA_ACHIEVEMENT_DESCRIPTION: "Play all available games",
        DATA_ACHIEVEMENT_REWARD: 40.0,
    },
    ACHIEVEMENT_COMEBACK: {
        DATA_ACHIEVEMENT_NAME: "Comeback Kid",
        DATA_ACHIEVEMENT_DESCRIPTION: (
            "Recover from under {comeback_low_balance} to over "
            "{comeback_high_balance}"
        ),
        DATA_ACHIEVEMENT_REWARD: 75.0,
    },
    ACHIEVEMENT_WHALE: {
        DATA_ACHIEVEMENT_NAME: "Whale",
        DATA_ACHIEVEMENT_DESCRIPTION: "Accumulate {whale_total_won} total winnings",
        DATA_ACHIEVEMENT_REWARD: 200.0,
    },
    ACHIEVEMENT_LEVEL_10: {
        DATA_ACHIEVEMENT_NAME: "Rising Star",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach level 10",
        DATA_ACHIEVEMENT_REWARD: 50.0,
    },
    ACHIEVEMENT_LEVEL_25: {
        DATA_ACHIEVEMENT_NAME: "Veteran",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach level 25",
        DATA_ACHIEVEMENT_REWARD: 150.0,
    },
    ACHIEVEMENT_LEVEL_50: {
        DATA_ACHIEVEMENT_NAME: "Legend",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach level 50",
        DATA_ACHIEVEMENT_REWARD: 500.0,
    },
    ACHIEVEMENT_DAILY_STREAK_7: {
        DATA_ACHIEVEMENT_NAME: "Dedicated",
        DATA_ACHIEVEMENT_DESCRIPTION: (
            "Claim daily bonus {daily_streak_target} days in a row"
        ),
        DATA_ACHIEVEMENT_REWARD: 100.0,
    },
    ACHIEVEMENT_BLACKJACK_21: {
        DATA_ACHIEVEMENT_NAME: "Blackjack!",
        DATA_ACHIEVEMENT_DESCRIPTION: "Get a natural blackjack",
        DATA_ACHIEVEMENT_REWARD: 25.0,
    },
    ACHIEVEMENT_CRASH_10X: {
        DATA_ACHIEVEMENT_NAME: "Diamond Hands",
        DATA_ACHIEVEMENT_DESCRIPTION: "Cash out at 10× or higher in Crash",
        DATA_ACHIEVEMENT_REWARD: 50.0,
    },
    ACHIEVEMENT_SCRATCH_JACKPOT: {
        DATA_ACHIEVEMENT_NAME: "Golden Ticket",
        DATA_ACHIEVEMENT_DESCRIPTION: "Win the top prize on scratch cards",
        DATA_ACHIEVEMENT_REWARD: 75.0,
    },
}

# Level reached -> achievement unlocked on that exact level
LEVEL_ACHIEVEMENTS = {
    10: ACHIEVEMENT_LEVEL_10,
    25: ACHIEVEMENT_LEVEL_25,
    50: ACHIEVEMENT_LEVEL_50,
}
