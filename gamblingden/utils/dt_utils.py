# File: utils/dt_utils.py
"""Date and time utilities for GamblingDen.

Pure Python date/time functions with no engine or storage dependencies.
Uses standard library datetime plus dateutil (tz, parser, relativedelta).

All "local" functions take an optional tz and otherwise use the host local
zone; the coordinator passes its configured zone explicitly. Daily-bonus
eligibility and the night owl window are local-calendar concepts, so every
comparison goes through as_local() first.

Functions:
    - resolve_timezone: IANA name to tzinfo, host local zone as fallback
    - dt_now_utc: Current aware UTC datetime
    - dt_now_local: Current aware local datetime
    - dt_now_iso: Current UTC datetime as ISO string (storage format)
    - as_local: Convert any datetime to the local zone
    - dt_parse: Parse a stored ISO timestamp (lenient, None on failure)
    - dt_local_date: Local calendar date of a datetime
    - dt_is_same_local_day: Same local calendar day check
    - dt_is_yesterday: Previous local calendar day check
    - dt_minutes_between: Elapsed minutes between two datetimes
"""

from __future__ import annotations

from datetime import UTC, date, datetime, tzinfo
import logging

# Third-party date utilities
from dateutil import parser as dt_parser, tz as dt_tz
from dateutil.relativedelta import relativedelta

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# Default timezone when callers pass none
DEFAULT_TIME_ZONE: tzinfo = dt_tz.tzlocal()


# ==============================================================================
# Timezone Resolution
# ==============================================================================


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve an IANA zone name, falling back to the host local zone.

    Args:
        name: IANA zone name such as "Europe/Berlin", or None

    Returns:
        A tzinfo instance. Unknown names log a warning and use the local zone.
    """
    if not name:
        return dt_tz.tzlocal()
    zone = dt_tz.gettz(name)
    if zone is None:
        _LOGGER.warning("Unknown time zone '%s', using host local time", name)
        return dt_tz.tzlocal()
    return zone


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


def dt_now_local(tz: tzinfo | None = None) -> datetime:
    """Return the current datetime in the local zone (timezone-aware).

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.
    """
    return datetime.now(tz or DEFAULT_TIME_ZONE)


def dt_now_iso() -> str:
    """Return the current UTC datetime as an ISO 8601 string.

    Example:
        "2026-10-19T14:30:00.123456+00:00"
    """
    return dt_now_utc().isoformat()


def as_local(value: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert a datetime to the local zone.

    Naive datetimes are treated as UTC, matching how timestamps are stored.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(tz or DEFAULT_TIME_ZONE)


# ==============================================================================
# Parsing
# ==============================================================================


def dt_parse(value: object) -> datetime | None:
    """Parse a stored ISO 8601 timestamp.

    Anything that is not a parseable string yields None so callers fall back
    to their defaults.

    Args:
        value: Raw stored value (normally an ISO string)

    Returns:
        Timezone-aware datetime (naive input assumed UTC) or None
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = dt_parser.isoparse(value.strip())
    except (ValueError, OverflowError) as err:
        _LOGGER.debug("Unparseable timestamp '%s': %s", value, err)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


# ==============================================================================
# Calendar Comparisons
# ==============================================================================


def dt_local_date(value: datetime, tz: tzinfo | None = None) -> date:
    """Return the local calendar date of a datetime."""
    return as_local(value, tz).date()


def dt_is_same_local_day(
    first: datetime, second: datetime, tz: tzinfo | None = None
) -> bool:
    """Check whether two instants fall on the same local calendar day."""
    return dt_local_date(first, tz) == dt_local_date(second, tz)


def dt_is_yesterday(
    value: datetime, now: datetime | None = None, tz: tzinfo | None = None
) -> bool:
    """Check whether value falls on the local calendar day before now.

    Calendar arithmetic (not now - 24h) keeps DST transitions correct.

    Args:
        value: Instant to test
        now: Reference instant (defaults to current time)
        tz: Optional timezone override

    Returns:
        True when value's local date is exactly one day before now's
    """
    reference = now or dt_now_utc()
    yesterday = dt_local_date(reference, tz) + relativedelta(days=-1)
    return dt_local_date(value, tz) == yesterday


def dt_minutes_between(start: datetime, end: datetime) -> float:
    """Return elapsed minutes from start to end (negative if end is earlier)."""
    if start.tzinfo is None:
        start = start.replace(tzinfo=UTC)
    if end.tzinfo is None:
        end = end.replace(tzinfo=UTC)
    return (end - start).total_seconds() / 60
