# File: utils/math_utils.py
"""Math and formatting utilities for GamblingDen.

Pure Python functions with no engine or storage dependencies.
All functions here can be unit tested in isolation.

Functions:
    - as_finite_float: Accept a real number that fits a float, else None
    - round_amount: Consistent rounding of currency amounts
    - clamp: Bound a value to a closed range
    - calculate_percentage: Progress percentage clamped to [0, 100]
    - format_currency: Render an amount as a euro string
    - format_currency_short: Euro string without trailing zero decimals
    - format_compact: Render large numbers as 1.2K / 3.4M
"""

from __future__ import annotations

import math

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default float precision for currency rounding
DATA_FLOAT_PRECISION = 2

CURRENCY_SYMBOL = "€"


# ==============================================================================
# Currency Arithmetic
# ==============================================================================


def as_finite_float(value: object) -> float | None:
    """Return value as a finite float, or None.

    Accepts int and float only (bool excluded). Ints too large for a float
    and NaN or infinity yield None.

    Examples:
        as_finite_float(10) → 10.0
        as_finite_float(10**400) → None
        as_finite_float("10") → None
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    try:
        converted = float(value)
    except OverflowError:
        return None
    if not math.isfinite(converted):
        return None
    return converted


def round_amount(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a currency amount to the configured precision.

    Prevents Python float arithmetic drift (e.g., 27.499999999999996 → 27.5)
    from leaking into stored balances and statistics.

    Args:
        value: The float value to round
        precision: Number of decimal places (default: DATA_FLOAT_PRECISION)

    Returns:
        Rounded float value

    Examples:
        round_amount(10.456) → 10.46
        round_amount(0.1 + 0.2) → 0.3
    """
    return round(value, precision)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Bound value to the closed range [minimum, maximum]."""
    return max(minimum, min(maximum, value))


def calculate_percentage(current: float, target: float) -> float:
    """Calculate a progress percentage clamped to [0, 100].

    A non-positive target means there is nothing left to progress towards,
    which reads as complete.

    Args:
        current: Progress made so far
        target: Amount needed for 100%

    Returns:
        Percentage in [0.0, 100.0]

    Examples:
        calculate_percentage(50, 100) → 50.0
        calculate_percentage(150, 100) → 100.0
        calculate_percentage(0, 0) → 100.0
    """
    if target <= 0:
        return 100.0
    return clamp((current / target) * 100, 0.0, 100.0)


# ==============================================================================
# Display Formatting
# ==============================================================================


def format_currency(value: float) -> str:
    """Format an amount as a euro string with two decimals ("€12.50")."""
    return f"{CURRENCY_SYMBOL}{round_amount(value):.{DATA_FLOAT_PRECISION}f}"


def format_currency_short(value: float) -> str:
    """Format an amount without trailing zero decimals ("€10", "€12.5")."""
    amount = f"{round_amount(value):.{DATA_FLOAT_PRECISION}f}".rstrip("0").rstrip(".")
    return f"{CURRENCY_SYMBOL}{amount}"


def format_compact(value: float) -> str:
    """Format a number compactly for XP bars.

    Examples:
        format_compact(950) → "950"
        format_compact(1250) → "1.2K"
        format_compact(3400000) → "3.4M"
    """
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
