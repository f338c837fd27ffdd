# File: config.py
"""Engine options schema for GamblingDen.

Every option is optional; CONFIG_SCHEMA fills in defaults from const.py and
returns a normalized dict. Invalid options raise ``vol.Invalid`` when the
coordinator is constructed. That is the only raising path in the engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dateutil import tz as dt_tz
import voluptuous as vol

from . import const

# ------------------------------------------------------------------------------------------------
# Field Validators
# ------------------------------------------------------------------------------------------------

POSITIVE_FLOAT = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))
NON_NEGATIVE_FLOAT = vol.All(vol.Coerce(float), vol.Range(min=0))
POSITIVE_INT = vol.All(vol.Coerce(int), vol.Range(min=1))
HOUR = vol.All(vol.Coerce(int), vol.Range(min=0, max=23))
# End of the night owl window is exclusive, so 24 means "until midnight"
END_HOUR = vol.All(vol.Coerce(int), vol.Range(min=0, max=24))


def level_thresholds(value: Any) -> list[int]:
    """Validate the cumulative XP table: non-empty, starts at 0, increasing."""
    thresholds = vol.Schema([vol.All(vol.Coerce(int), vol.Range(min=0))])(value)
    if not thresholds:
        raise vol.Invalid("level_thresholds must contain at least one entry")
    if thresholds[0] != 0:
        raise vol.Invalid("level_thresholds must start at 0")
    for index, (previous, current) in enumerate(zip(thresholds, thresholds[1:])):
        if current <= previous:
            raise vol.Invalid(
                f"level_thresholds must be strictly increasing "
                f"(entry {index + 1}: {current} <= {previous})"
            )
    return thresholds


def time_zone(value: Any) -> str | None:
    """Validate an IANA zone name; None keeps the host local zone."""
    if value is None:
        return None
    name = vol.All(str, vol.Length(min=1))(value)
    if dt_tz.gettz(name) is None:
        raise vol.Invalid(f"Unknown time zone '{name}'")
    return name


def _cross_field_checks(config: dict[str, Any]) -> dict[str, Any]:
    """Checks that span more than one option."""
    weights = config[const.CONF_BONUS_WHEEL_WEIGHTS]
    prizes = config[const.CONF_BONUS_WHEEL_PRIZES]
    if weights is not None:
        if len(weights) != len(prizes):
            raise vol.Invalid(
                f"bonus_wheel_weights has {len(weights)} entries "
                f"but bonus_wheel_prizes has {len(prizes)}",
                path=[const.CONF_BONUS_WHEEL_WEIGHTS],
            )
        if sum(weights) <= 0:
            raise vol.Invalid(
                "bonus_wheel_weights must have a positive total",
                path=[const.CONF_BONUS_WHEEL_WEIGHTS],
            )
    if config[const.CONF_COMEBACK_LOW_BALANCE] >= config[const.CONF_COMEBACK_HIGH_BALANCE]:
        raise vol.Invalid(
            "comeback_low_balance must be below comeback_high_balance",
            path=[const.CONF_COMEBACK_LOW_BALANCE],
        )
    return config


# ------------------------------------------------------------------------------------------------
# Schema
# ------------------------------------------------------------------------------------------------

CONFIG_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Optional(
                const.CONF_STARTING_BALANCE, default=const.DEFAULT_STARTING_BALANCE
            ): NON_NEGATIVE_FLOAT,
            vol.Optional(
                const.CONF_XP_PER_UNIT_WAGERED,
                default=const.DEFAULT_XP_PER_UNIT_WAGERED,
            ): vol.All(vol.Coerce(int), vol.Range(min=0)),
            vol.Optional(
                const.CONF_LEVEL_THRESHOLDS,
                default=lambda: list(const.DEFAULT_LEVEL_THRESHOLDS),
            ): level_thresholds,
            vol.Optional(
                const.CONF_HIGH_ROLLER_THRESHOLD,
                default=const.DEFAULT_HIGH_ROLLER_THRESHOLD,
            ): POSITIVE_FLOAT,
            vol.Optional(
                const.CONF_LUCKY_STREAK_LENGTH,
                default=const.DEFAULT_LUCKY_STREAK_LENGTH,
            ): POSITIVE_INT,
            vol.Optional(
                const.CONF_WHALE_TOTAL_WON, default=const.DEFAULT_WHALE_TOTAL_WON
            ): POSITIVE_FLOAT,
            vol.Optional(
                const.CONF_COMEBACK_LOW_BALANCE,
                default=const.DEFAULT_COMEBACK_LOW_BALANCE,
            ): NON_NEGATIVE_FLOAT,
            vol.Optional(
                const.CONF_COMEBACK_HIGH_BALANCE,
                default=const.DEFAULT_COMEBACK_HIGH_BALANCE,
            ): POSITIVE_FLOAT,
            vol.Optional(
                const.CONF_JACKPOT_MULTIPLIER, default=const.DEFAULT_JACKPOT_MULTIPLIER
            ): POSITIVE_FLOAT,
            vol.Optional(
                const.CONF_NIGHT_OWL_START_HOUR,
                default=const.DEFAULT_NIGHT_OWL_START_HOUR,
            ): HOUR,
            vol.Optional(
                const.CONF_NIGHT_OWL_END_HOUR, default=const.DEFAULT_NIGHT_OWL_END_HOUR
            ): END_HOUR,
            vol.Optional(
                const.CONF_MARATHON_MINUTES, default=const.DEFAULT_MARATHON_MINUTES
            ): POSITIVE_INT,
            vol.Optional(
                const.CONF_DAILY_STREAK_TARGET,
                default=const.DEFAULT_DAILY_STREAK_TARGET,
            ): POSITIVE_INT,
            vol.Optional(
                const.CONF_TIME_CHECK_INTERVAL,
                default=const.DEFAULT_TIME_CHECK_INTERVAL,
            ): POSITIVE_FLOAT,
            vol.Optional(
                const.CONF_GAMES, default=lambda: list(const.DEFAULT_GAMES)
            ): vol.All([vol.All(str, vol.Length(min=1))], vol.Length(min=1), vol.Unique()),
            vol.Optional(
                const.CONF_BONUS_WHEEL_PRIZES,
                default=lambda: list(const.DEFAULT_BONUS_WHEEL_PRIZES),
            ): vol.All([POSITIVE_FLOAT], vol.Length(min=1)),
            vol.Optional(const.CONF_BONUS_WHEEL_WEIGHTS, default=None): vol.Any(
                None, [vol.All(vol.Coerce(int), vol.Range(min=0))]
            ),
            vol.Optional(
                const.CONF_STORAGE_PREFIX, default=const.DEFAULT_STORAGE_PREFIX
            ): vol.All(str, vol.Length(min=1)),
            vol.Optional(const.CONF_TIME_ZONE, default=None): time_zone,
        },
        extra=vol.PREVENT_EXTRA,
    ),
    _cross_field_checks,
)


def validate_config(options: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return options merged over defaults.

    Raises:
        vol.Invalid: If any option is out of range or unknown.
    """
    return CONFIG_SCHEMA(dict(options or {}))
