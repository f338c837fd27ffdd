"""Economy Manager - The balance ledger.

This manager owns the player's balance and every operation that moves it:
- set/adjust (the only writers of the balance key)
- Bets (debit + XP + wager statistics as one unit)
- Wins (credit + win statistics)
- Round settlement for games (win or loss, per-game counter, jackpot)
- Reset to the starting balance

ARCHITECTURE:
- EconomyManager = "The Bank" (STATEFUL balance operations)
- EconomyEngine = Pure arithmetic and validation (STATELESS)
- GamificationManager listens to BetPlaced and Win (Event Bus coupling)

Validation failures (bad or unaffordable amounts) are reported through the
return value and a WARNING log. Nothing here raises.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..engines.economy_engine import EconomyEngine
from ..events import BalanceChanged, BalanceReset, BetPlaced, Win
from ..utils.math_utils import round_amount
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..coordinator import GamblingDenCoordinator


class EconomyManager(BaseManager):
    """Manager for the balance ledger.

    Responsibilities:
    - Hold the authoritative balance (>= 0, rounded to 2 places)
    - Persist it as a "%.2f" string after every write
    - Emit BalanceChanged / BalanceReset / BetPlaced / Win

    NOT responsible for:
    - Deciding which achievements a bet or win earns (GamificationManager)
    - Statistics arithmetic (StatisticsManager)
    """

    def __init__(self, coordinator: GamblingDenCoordinator) -> None:
        """Initialize the ledger at the configured starting balance."""
        super().__init__(coordinator)
        self._balance: float = self.starting_balance

    @property
    def starting_balance(self) -> float:
        """Return the configured starting balance."""
        return round_amount(self.config[const.CONF_STARTING_BALANCE])

    def load(self) -> None:
        """Rehydrate the balance; invalid stored values reset to the start."""
        raw = self.store.load(const.STORAGE_KEY_BALANCE)
        parsed = EconomyEngine.parse_stored_balance(raw)
        if parsed is None:
            self._balance = self.starting_balance
            if raw is not None:
                const.LOGGER.warning(
                    "WARNING: Stored balance '%s' is invalid. Resetting to %.2f",
                    raw,
                    self._balance,
                )
                self._persist()
            return
        self._balance = parsed
        const.LOGGER.debug("DEBUG: EconomyManager loaded balance=%.2f", self._balance)

    def setup(self) -> None:
        """No subscriptions: the ledger is driven by direct calls."""

    def _persist(self) -> None:
        self.store.save(
            const.STORAGE_KEY_BALANCE, EconomyEngine.format_balance(self._balance)
        )

    # =========================================================================
    # Balance Primitives
    # =========================================================================

    def get_balance(self) -> float:
        """Return the current balance."""
        return self._balance

    def set_balance(self, value: float) -> float:
        """Write the balance (clamped to >= 0 and rounded) and emit the change.

        Args:
            value: New balance

        Returns:
            The balance after the write. A non-finite value is rejected and
            the unchanged balance is returned.
        """
        if not EconomyEngine.is_valid_amount(value):
            const.LOGGER.warning(
                "WARNING: EconomyManager.set_balance: rejected invalid value %r", value
            )
            return self._balance

        old_balance = self._balance
        self._balance = EconomyEngine.clamp_balance(value)
        self._persist()

        const.LOGGER.debug(
            "DEBUG: EconomyManager.set_balance: old=%.2f, new=%.2f",
            old_balance,
            self._balance,
        )
        self.emit(BalanceChanged(balance=self._balance))
        return self._balance

    def adjust_balance(self, delta: float) -> float:
        """Credit (or debit, if negative) delta and return the new balance."""
        if not EconomyEngine.is_valid_amount(delta):
            const.LOGGER.warning(
                "WARNING: EconomyManager.adjust_balance: rejected invalid delta %r",
                delta,
            )
            return self._balance
        return self.set_balance(self._balance + delta)

    def reset_balance(self) -> float:
        """Reinitialize the balance to the starting value."""
        balance = self.set_balance(self.starting_balance)
        const.LOGGER.info("INFO: Balance reset to %.2f", balance)
        self.emit(BalanceReset(balance=balance))
        return balance

    # =========================================================================
    # Game Operations
    # =========================================================================

    def place_bet(self, amount: float) -> bool:
        """Debit a wager and apply its side effects as one unit.

        On success, in order: debit, XP grant, wager statistics, BetPlaced
        (which drives the wager achievements).

        Args:
            amount: Wager; must be positive and covered by the balance

        Returns:
            True if the bet was accepted, False if rejected (no mutation)
        """
        if not EconomyEngine.validate_bet(amount, self._balance):
            const.LOGGER.warning(
                "WARNING: EconomyManager.place_bet: rejected bet %r (balance=%.2f)",
                amount,
                self._balance,
            )
            return False

        wager = round_amount(float(amount))
        xp = EconomyEngine.calculate_xp_for_wager(
            wager, self.config[const.CONF_XP_PER_UNIT_WAGERED]
        )
        with self.store.transaction():
            self.set_balance(self._balance - wager)
            self.coordinator.progression_manager.add_xp(xp)
            self.coordinator.statistics_manager.update_stats(
                {const.STATS_UPDATE_TOTAL_WAGERED: wager}
            )
            self.emit(BetPlaced(amount=wager))

        const.LOGGER.debug(
            "DEBUG: EconomyManager.place_bet: amount=%.2f, xp=%s, balance=%.2f",
            wager,
            xp,
            self._balance,
        )
        return True

    def credit_win(self, amount: float) -> None:
        """Credit winnings, record them and emit Win.

        Non-positive or invalid amounts are ignored, as is a credit whose
        resulting balance would not be a finite number. Win is built after
        the statistics update, so rewards unlocked by that update (lucky
        streak, whale) are part of the balance it carries.
        """
        winnings = EconomyEngine.to_amount(amount)
        if winnings is None:
            const.LOGGER.warning(
                "WARNING: EconomyManager.credit_win: ignored invalid amount %r", amount
            )
            return
        if winnings <= 0:
            const.LOGGER.debug(
                "DEBUG: EconomyManager.credit_win: ignored non-positive amount %r",
                amount,
            )
            return
        if not EconomyEngine.is_valid_amount(self._balance + winnings):
            const.LOGGER.warning(
                "WARNING: EconomyManager.credit_win: ignored %r, balance %.2f "
                "cannot absorb it",
                amount,
                self._balance,
            )
            return

        lowest_before = self.coordinator.statistics_manager.get_lowest_balance()
        with self.store.transaction():
            self.set_balance(self._balance + winnings)
            self.coordinator.statistics_manager.update_stats(
                {const.STATS_UPDATE_TOTAL_WON: winnings}
            )
            self.emit(
                Win(
                    amount=winnings,
                    balance=self._balance,
                    lowest_balance=lowest_before,
                )
            )

        const.LOGGER.debug(
            "DEBUG: EconomyManager.credit_win: amount=%.2f, balance=%.2f",
            winnings,
            self._balance,
        )

    def settle_round(self, game: str, wager: float, payout: float) -> bool:
        """Record the outcome of one game round.

        A positive payout is credited as a win; otherwise the round counts as
        a loss and breaks the win streak. Either way the game's play counter
        is incremented. A payout of at least jackpot_multiplier times the
        wager unlocks the jackpot achievement.

        Args:
            game: Game name (e.g. "slots")
            wager: Amount that was bet on the round (already debited)
            payout: Total returned to the player (0 on a loss)

        Returns:
            True if the round paid out
        """
        won = (EconomyEngine.to_amount(payout) or 0) > 0
        with self.store.transaction():
            if won:
                self.credit_win(payout)
                self.coordinator.statistics_manager.update_stats(
                    {const.STATS_UPDATE_GAME: game}
                )
            else:
                self.coordinator.statistics_manager.update_stats(
                    {const.STATS_UPDATE_NO_WIN: True, const.STATS_UPDATE_GAME: game}
                )
            if (
                won
                and EconomyEngine.is_valid_amount(wager)
                and EconomyEngine.is_jackpot(
                    wager, payout, self.config[const.CONF_JACKPOT_MULTIPLIER]
                )
            ):
                self.coordinator.gamification_manager.check_achievement(
                    const.ACHIEVEMENT_JACKPOT
                )

        const.LOGGER.debug(
            "DEBUG: EconomyManager.settle_round: game=%s, wager=%r, payout=%r, won=%s",
            game,
            wager,
            payout,
            won,
        )
        return won
