"""Economy Engine - Pure logic for balance arithmetic and wager validation.

This engine provides stateless, pure Python functions for:
- Currency arithmetic with consistent rounding
- Bet validation (positive, finite, covered by the balance)
- Balance clamping (never negative)
- XP earned per unit wagered
- Parsing the persisted balance string
- Jackpot detection for round settlement

ARCHITECTURE: All functions are static methods that operate on passed-in data.
State management belongs in EconomyManager.
"""

from __future__ import annotations

import math

from .. import const
from ..utils.math_utils import as_finite_float, round_amount


class EconomyEngine:
    """Pure logic engine for balance calculations.

    All methods are static - no instance state. Amounts are rounded before
    every comparison so 0.1 + 0.2 compares equal to 0.3.
    """

    @staticmethod
    def is_valid_amount(value: object) -> bool:
        """Return True for a finite int or float (bool excluded).

        Ints too large to convert to a float are invalid.
        """
        return as_finite_float(value) is not None

    @staticmethod
    def to_amount(value: object) -> float | None:
        """Return value rounded to currency precision, or None if invalid."""
        converted = as_finite_float(value)
        if converted is None:
            return None
        return round_amount(converted)

    @staticmethod
    def validate_sufficient_funds(balance: float, cost: float) -> bool:
        """Check if balance covers cost.

        Args:
            balance: Current balance
            cost: Amount to withdraw (positive value)

        Returns:
            True if balance >= cost, False otherwise (NSF)
        """
        return round_amount(balance) >= round_amount(cost)

    @staticmethod
    def validate_bet(amount: object, balance: float) -> bool:
        """Check that a wager can be accepted.

        A bet is rejected when it is not a finite number, rounds to zero or
        below, or exceeds the current balance.

        Args:
            amount: Requested wager
            balance: Current balance

        Returns:
            True if the bet may proceed
        """
        rounded = EconomyEngine.to_amount(amount)
        if rounded is None or rounded <= 0:
            return False
        return EconomyEngine.validate_sufficient_funds(balance, rounded)

    @staticmethod
    def clamp_balance(value: float) -> float:
        """Round value and clamp it to zero or above."""
        return round_amount(max(0.0, float(value)))

    @staticmethod
    def calculate_xp_for_wager(amount: float, xp_per_unit: int) -> int:
        """Return whole XP earned for a wager.

        The product is rounded to 6 places before flooring so float noise
        like 6.9999999999 does not drop a point.

        Examples:
            calculate_xp_for_wager(10, 10) → 100
            calculate_xp_for_wager(0.55, 10) → 5
        """
        if amount <= 0 or xp_per_unit <= 0:
            return const.DEFAULT_ZERO
        product = as_finite_float(amount * xp_per_unit)
        if product is None:
            return const.DEFAULT_ZERO
        return math.floor(round(product, 6))

    @staticmethod
    def parse_stored_balance(raw: str | None) -> float | None:
        """Parse the persisted "%.2f" balance string.

        Args:
            raw: Stored string, or None when nothing was persisted

        Returns:
            The rounded balance, or None when the value is missing, not a
            number, non-finite or negative (caller substitutes the default)
        """
        if raw is None:
            return None
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(value) or value < 0:
            return None
        return round_amount(value)

    @staticmethod
    def format_balance(value: float) -> str:
        """Return the storage representation of a balance ("115.00")."""
        return f"{value:.{const.DATA_FLOAT_PRECISION}f}"

    @staticmethod
    def is_jackpot(wager: float, payout: float, multiplier: float) -> bool:
        """Check whether a payout reaches the jackpot multiple of the wager.

        Examples:
            is_jackpot(1, 20, 20) → True
            is_jackpot(0, 50, 20) → False  (free round)
        """
        if wager <= 0 or payout <= 0:
            return False
        return payout / wager >= multiplier
