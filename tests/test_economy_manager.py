"""Tests for the balance ledger (EconomyManager via the coordinator).

Several tests pre-unlock achievements so rewards do not disturb the balance
arithmetic under test.
"""

from __future__ import annotations

from collections.abc import Callable
import json
import logging
from unittest.mock import patch

import pytest

from gamblingden import const
from gamblingden.coordinator import GamblingDenCoordinator
from gamblingden.events import BalanceChanged, BalanceReset, BetPlaced, Win
from gamblingden.store import MemoryStore

from .conftest import EventRecorder

ALL_ACHIEVEMENTS = list(const.ACHIEVEMENTS)


def seed_unlocked(store: MemoryStore, ids: list[str]) -> None:
    """Persist an unlock list before a coordinator is built."""
    store.set("gd_achievements", json.dumps(ids))


@pytest.fixture
def quiet(
    memory_store: MemoryStore,
    make_coordinator: Callable[..., GamblingDenCoordinator],
) -> GamblingDenCoordinator:
    """Coordinator with every achievement already unlocked."""
    seed_unlocked(memory_store, ALL_ACHIEVEMENTS)
    return make_coordinator()


class TestBalancePrimitives:
    """Tests for get/set/adjust/reset."""

    def test_starting_balance(self, coordinator: GamblingDenCoordinator) -> None:
        """A first run starts at 100.00."""
        assert coordinator.get_balance() == 100.0

    def test_set_balance_clamps_and_rounds(
        self, coordinator: GamblingDenCoordinator, recorded: EventRecorder
    ) -> None:
        """Negative values clamp to 0; values are rounded to cents."""
        assert coordinator.set_balance(-20) == 0.0
        assert coordinator.set_balance(12.345) == 12.35
        assert [e.balance for e in recorded.of_type(BalanceChanged)] == [0.0, 12.35]

    def test_set_balance_persists_string(
        self, coordinator: GamblingDenCoordinator, memory_store: MemoryStore
    ) -> None:
        """The balance is stored as a two-decimal string."""
        coordinator.set_balance(42)
        assert memory_store.get("gd_balance") == "42.00"

    def test_set_balance_rejects_non_finite(
        self, coordinator: GamblingDenCoordinator
    ) -> None:
        """NaN and infinity leave the balance unchanged."""
        assert coordinator.set_balance(float("nan")) == 100.0
        assert coordinator.adjust_balance(float("inf")) == 100.0

    def test_huge_int_is_rejected(
        self,
        coordinator: GamblingDenCoordinator,
        recorded: EventRecorder,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """An int too large for a float is refused without raising."""
        with caplog.at_level(logging.WARNING):
            assert coordinator.set_balance(10**400) == 100.0
            assert coordinator.adjust_balance(10**400) == 100.0
            assert coordinator.adjust_balance(-(10**400)) == 100.0
        assert recorded.events == []
        assert "rejected invalid" in caplog.text

    def test_adjust_balance(self, coordinator: GamblingDenCoordinator) -> None:
        """Adjust adds a delta and returns the new balance."""
        assert coordinator.adjust_balance(25) == 125.0
        assert coordinator.adjust_balance(-200) == 0.0

    def test_reset_balance(
        self, coordinator: GamblingDenCoordinator, recorded: EventRecorder
    ) -> None:
        """Reset restores the starting balance and emits BalanceReset."""
        coordinator.set_balance(3)
        assert coordinator.reset_balance() == 100.0
        assert recorded.of_type(BalanceReset) == [BalanceReset(balance=100.0)]

    def test_custom_starting_balance(
        self, make_coordinator: Callable[..., GamblingDenCoordinator]
    ) -> None:
        """The starting balance is configurable."""
        coordinator = make_coordinator(starting_balance=500)
        assert coordinator.get_balance() == 500.0
        assert coordinator.get_stats()["lowest_balance"] == 500.0


class TestPlaceBet:
    """Tests for place_bet()."""

    def test_bet_then_win_scenario(self, quiet: GamblingDenCoordinator) -> None:
        """100 → bet 10 → 90 with 100 XP → win 25 → 115."""
        assert quiet.place_bet(10) is True
        assert quiet.get_balance() == 90.0
        assert quiet.get_xp() == 100

        quiet.credit_win(25)
        stats = quiet.get_stats()
        assert quiet.get_balance() == 115.0
        assert stats["total_won"] == 25.0
        assert stats["biggest_win"] == 25.0
        assert stats["total_wagered"] == 10.0

    @pytest.mark.parametrize(
        "amount", [0, -1, 100.01, float("nan"), "10", None, 10**400]
    )
    def test_rejected_bet_changes_nothing(
        self,
        coordinator: GamblingDenCoordinator,
        recorded: EventRecorder,
        amount: object,
    ) -> None:
        """Invalid or unaffordable bets return False with no side effects."""
        stats_before = coordinator.get_stats()

        assert coordinator.place_bet(amount) is False  # type: ignore[arg-type]

        assert coordinator.get_balance() == 100.0
        assert coordinator.get_xp() == 0
        assert coordinator.get_stats() == stats_before
        assert recorded.events == []

    def test_bet_of_entire_balance(self, quiet: GamblingDenCoordinator) -> None:
        """Betting exactly the balance is allowed and leaves 0."""
        assert quiet.place_bet(100) is True
        assert quiet.get_balance() == 0.0
        assert quiet.get_stats()["lowest_balance"] == 0.0

    def test_event_order(
        self, coordinator: GamblingDenCoordinator, recorded: EventRecorder
    ) -> None:
        """Debit, XP and statistics are published before any wager achievement."""
        coordinator.place_bet(10)
        names = [event.name for event in recorded.events]
        assert names[0] == "balance:change"
        assert (
            names.index("xp:change")
            < names.index("stats:update")
            < names.index("achievement:unlock")
        )
        assert recorded.of_type(BetPlaced) == [BetPlaced(amount=10.0)]

    def test_first_bet_unlocks_wager_achievements(
        self, coordinator: GamblingDenCoordinator
    ) -> None:
        """A 10 bet earns first_spin (5) and high_roller (25)."""
        coordinator.place_bet(10)
        assert coordinator.get_unlocked_achievements() == ["first_spin", "high_roller"]
        assert coordinator.get_balance() == 120.0

    def test_small_bet_is_not_high_roller(
        self, coordinator: GamblingDenCoordinator
    ) -> None:
        """Bets under the threshold only earn first_spin."""
        coordinator.place_bet(9.99)
        assert not coordinator.is_achievement_unlocked("high_roller")
        assert coordinator.is_achievement_unlocked("first_spin")

    def test_balance_invariant_over_sequence(
        self, quiet: GamblingDenCoordinator
    ) -> None:
        """Balance = start + credits - successful debits, never negative."""
        expected = 100.0
        operations = [
            ("bet", 30.5),
            ("win", 12.25),
            ("bet", 500),
            ("adjust", 0.1),
            ("bet", 0.2),
            ("win", -4),
            ("bet", 81.65),
            ("adjust", -1000),
            ("bet", 0.01),
        ]
        for kind, amount in operations:
            if kind == "bet":
                if quiet.place_bet(amount):
                    expected = round(expected - amount, 2)
            elif kind == "win":
                quiet.credit_win(amount)
                if amount > 0:
                    expected = round(expected + amount, 2)
            else:
                expected = max(round(expected + amount, 2), 0.0)
                quiet.adjust_balance(amount)
            assert quiet.get_balance() == expected
            assert quiet.get_balance() >= 0


class TestCreditWin:
    """Tests for credit_win()."""

    @pytest.mark.parametrize("amount", [0, -5, 0.004, float("nan")])
    def test_non_positive_is_noop(
        self,
        coordinator: GamblingDenCoordinator,
        recorded: EventRecorder,
        amount: float,
    ) -> None:
        """Nothing happens for non-positive or invalid amounts."""
        coordinator.credit_win(amount)
        assert coordinator.get_balance() == 100.0
        assert recorded.events == []

    def test_huge_int_is_ignored(
        self,
        coordinator: GamblingDenCoordinator,
        recorded: EventRecorder,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """An int too large for a float is logged and ignored."""
        with caplog.at_level(logging.WARNING):
            coordinator.credit_win(10**400)
        assert coordinator.get_balance() == 100.0
        assert coordinator.get_stats()["total_won"] == 0.0
        assert recorded.events == []
        assert "ignored invalid amount" in caplog.text

    def test_credit_that_overflows_balance(
        self,
        quiet: GamblingDenCoordinator,
        recorder: EventRecorder,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A win the balance cannot absorb changes no state and emits nothing."""
        quiet.on(Win, recorder)
        quiet.credit_win(1e308)
        assert quiet.get_balance() == 1e308

        with caplog.at_level(logging.WARNING):
            quiet.credit_win(1e308)

        stats = quiet.get_stats()
        assert quiet.get_balance() == 1e308
        assert stats["total_won"] == 1e308
        assert stats["consecutive_wins"] == 1
        assert len(recorder.events) == 1
        assert "cannot absorb" in caplog.text

    def test_overflowing_first_credit_does_not_unlock_first_win(
        self,
        coordinator: GamblingDenCoordinator,
    ) -> None:
        """first_win needs a credit that actually lands."""
        coordinator.set_balance(1e308)
        coordinator.credit_win(1e308)
        assert not coordinator.is_achievement_unlocked("first_win")
        assert coordinator.get_stats()["total_won"] == 0.0

    def test_win_event_payload(
        self, quiet: GamblingDenCoordinator, recorder: EventRecorder
    ) -> None:
        """Win carries the amount, new balance and prior lowest balance."""
        quiet.on(Win, recorder)
        quiet.place_bet(40)
        quiet.credit_win(15)
        assert recorder.events == [Win(amount=15.0, balance=75.0, lowest_balance=60.0)]

    def test_first_win(self, coordinator: GamblingDenCoordinator) -> None:
        """The first credited win unlocks first_win (+10)."""
        coordinator.credit_win(5)
        assert coordinator.is_achievement_unlocked("first_win")
        assert coordinator.get_balance() == 115.0

    def test_comeback(
        self,
        memory_store: MemoryStore,
        make_coordinator: Callable[..., GamblingDenCoordinator],
    ) -> None:
        """Dropping below 10 then winning back to 100+ earns comeback."""
        seed_unlocked(memory_store, [a for a in ALL_ACHIEVEMENTS if a != "comeback"])
        coordinator = make_coordinator()

        coordinator.place_bet(95)
        assert coordinator.get_stats()["lowest_balance"] == 5.0
        coordinator.credit_win(100)

        assert coordinator.is_achievement_unlocked("comeback")
        assert coordinator.get_balance() == 180.0

    def test_comeback_from_zero(
        self,
        memory_store: MemoryStore,
        make_coordinator: Callable[..., GamblingDenCoordinator],
    ) -> None:
        """A lowest balance of exactly 0 counts as a low point."""
        seed_unlocked(memory_store, [a for a in ALL_ACHIEVEMENTS if a != "comeback"])
        coordinator = make_coordinator()

        coordinator.place_bet(100)
        coordinator.credit_win(100)

        assert coordinator.is_achievement_unlocked("comeback")

    def test_comeback_counts_streak_reward(
        self, coordinator: GamblingDenCoordinator
    ) -> None:
        """A lucky_streak reward paid by the same win can complete a comeback."""
        for _ in range(4):
            coordinator.credit_win(0.01)
        coordinator.set_balance(5)
        coordinator.update_stats({})
        assert coordinator.get_stats()["lowest_balance"] == 5.0

        # 5 + 90 = 95, lucky_streak (+50) lifts it to 145 before comeback runs
        coordinator.credit_win(90)

        assert coordinator.get_unlocked_achievements() == [
            "first_win",
            "lucky_streak",
            "comeback",
        ]
        assert coordinator.get_balance() == 220.0

    def test_no_comeback_without_low_point(
        self, coordinator: GamblingDenCoordinator
    ) -> None:
        """Winning from a healthy balance is not a comeback."""
        coordinator.credit_win(50)
        assert not coordinator.is_achievement_unlocked("comeback")


class TestSettleRound:
    """Tests for settle_round()."""

    def test_winning_round(self, quiet: GamblingDenCoordinator) -> None:
        """A payout is credited and the game counted."""
        quiet.place_bet(5)
        assert quiet.settle_round("slots", 5, 12.5) is True
        stats = quiet.get_stats()
        assert quiet.get_balance() == 107.5
        assert stats["games_played"]["slots"] == 1
        assert stats["consecutive_wins"] == 1

    def test_losing_round(self, quiet: GamblingDenCoordinator) -> None:
        """A zero payout resets the streak and counts the game."""
        quiet.credit_win(1)
        assert quiet.settle_round("crash", 5, 0) is False
        stats = quiet.get_stats()
        assert stats["consecutive_wins"] == 0
        assert stats["games_played"]["crash"] == 1

    def test_jackpot(self, coordinator: GamblingDenCoordinator) -> None:
        """A 20x payout unlocks jackpot."""
        coordinator.place_bet(1)
        coordinator.settle_round("slots", 1, 20)
        assert coordinator.is_achievement_unlocked("jackpot")

    def test_below_jackpot(self, coordinator: GamblingDenCoordinator) -> None:
        """19.99x is not a jackpot."""
        coordinator.place_bet(1)
        coordinator.settle_round("slots", 1, 19.99)
        assert not coordinator.is_achievement_unlocked("jackpot")

    def test_diversified_after_every_game(
        self, coordinator: GamblingDenCoordinator
    ) -> None:
        """Playing each configured game once unlocks diversified."""
        for game in const.DEFAULT_GAMES[:-1]:
            coordinator.settle_round(game, 1, 0)
        assert not coordinator.is_achievement_unlocked("diversified")
        coordinator.settle_round(const.DEFAULT_GAMES[-1], 1, 0)
        assert coordinator.is_achievement_unlocked("diversified")


class TestPersistenceFailure:
    """Storage failures never interrupt play."""

    def test_bet_succeeds_when_storage_fails(
        self,
        quiet: GamblingDenCoordinator,
        memory_store: MemoryStore,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """In-memory state stays authoritative after a failed write."""
        quiet.set_balance(100)
        with (
            patch.object(memory_store, "set", side_effect=OSError("quota exceeded")),
            caplog.at_level(logging.ERROR),
        ):
            assert quiet.place_bet(10) is True
            quiet.credit_win(5)

        assert quiet.get_balance() == 95.0
        assert quiet.get_xp() == 100
        assert memory_store.get("gd_balance") == "100.00"
        assert "quota exceeded" in caplog.text
