"""Tests for achievement unlocking (GamificationManager)."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime
from unittest.mock import patch

from freezegun import freeze_time
import pytest

from gamblingden import const
from gamblingden.coordinator import GamblingDenCoordinator
from gamblingden.events import AchievementUnlocked
from gamblingden.store import MemoryStore

from .conftest import EventRecorder


class TestCheckAchievement:
    """Tests for check_achievement()."""

    def test_unlocks_and_rewards_once(
        self, coordinator: GamblingDenCoordinator, recorded: EventRecorder
    ) -> None:
        """Second check is False and pays nothing."""
        assert coordinator.check_achievement("blackjack_21") is True
        assert coordinator.check_achievement("blackjack_21") is False

        assert coordinator.get_balance() == 125.0
        assert recorded.of_type(AchievementUnlocked) == [
            AchievementUnlocked(
                achievement_id="blackjack_21",
                achievement_name="Blackjack!",
                description="Get a natural blackjack",
                reward=25.0,
            )
        ]

    def test_unknown_id(
        self, coordinator: GamblingDenCoordinator, recorded: EventRecorder
    ) -> None:
        """Unknown ids are ignored."""
        assert coordinator.check_achievement("moon_landing") is False
        assert coordinator.get_unlocked_achievements() == []
        assert recorded.events == []

    def test_persisted_before_reward(
        self, coordinator: GamblingDenCoordinator, memory_store: MemoryStore
    ) -> None:
        """The unlock list is stored and the reward reaches the ledger."""
        coordinator.check_achievement("crash_10x")
        assert memory_store.get("gd_achievements") == '["crash_10x"]'
        assert memory_store.get("gd_balance") == "150.00"

    def test_reentrant_check_is_refused(
        self, coordinator: GamblingDenCoordinator
    ) -> None:
        """A listener re-checking the same id during the unlock gets False."""
        results: list[bool] = []

        def _again(event: AchievementUnlocked) -> None:
            results.append(coordinator.check_achievement(event.achievement_id))

        coordinator.on(AchievementUnlocked, _again)
        coordinator.check_achievement("scratch_jackpot")

        assert results == [False]
        assert coordinator.get_balance() == 175.0

    def test_unlock_order_is_kept(self, coordinator: GamblingDenCoordinator) -> None:
        """Unlocked ids are returned in unlock order, as a copy."""
        coordinator.check_achievement("crash_10x")
        coordinator.check_achievement("blackjack_21")
        unlocked = coordinator.get_unlocked_achievements()
        assert unlocked == ["crash_10x", "blackjack_21"]

        unlocked.clear()
        assert coordinator.is_achievement_unlocked("crash_10x")


class TestCatalogue:
    """Tests for get_all_achievements()."""

    def test_all_entries_with_state(self, coordinator: GamblingDenCoordinator) -> None:
        """Every catalogue entry is listed in catalogue order."""
        coordinator.check_achievement("whale")
        entries = coordinator.get_all_achievements()

        assert [entry["id"] for entry in entries] == list(const.ACHIEVEMENTS)
        by_id = {entry["id"]: entry for entry in entries}
        assert by_id["whale"]["unlocked"] is True
        assert by_id["whale"]["reward"] == 200.0
        assert by_id["first_spin"]["unlocked"] is False

    def test_entry_keys(self, coordinator: GamblingDenCoordinator) -> None:
        """Entries carry id, name, desc, reward and unlocked."""
        entry = coordinator.get_all_achievements()[0]
        assert set(entry) == {"id", "name", "desc", "reward", "unlocked"}

    def test_descriptions_follow_options(
        self,
        make_coordinator: Callable[..., GamblingDenCoordinator],
        recorder: EventRecorder,
    ) -> None:
        """Configured thresholds show up in listings and unlock events."""
        coordinator = make_coordinator(
            high_roller_threshold=50, whale_total_won=2500, lucky_streak_length=3
        )
        by_id = {entry["id"]: entry for entry in coordinator.get_all_achievements()}
        assert by_id["high_roller"]["desc"] == "Place a bet of €50 or more"
        assert by_id["whale"]["desc"] == "Accumulate €2500 total winnings"
        assert by_id["lucky_streak"]["desc"] == "Win 3 times in a row"

        coordinator.on(AchievementUnlocked, recorder)
        coordinator.check_achievement("high_roller")
        assert recorder.events[0].description == "Place a bet of €50 or more"


class TestEventTriggers:
    """Achievements earned through ledger and statistics events."""

    def test_lucky_streak(self, coordinator: GamblingDenCoordinator) -> None:
        """Five wins in a row unlock lucky_streak."""
        for _ in range(4):
            coordinator.credit_win(1)
        assert not coordinator.is_achievement_unlocked("lucky_streak")
        coordinator.credit_win(1)
        assert coordinator.is_achievement_unlocked("lucky_streak")

    def test_streak_broken_by_loss(self, coordinator: GamblingDenCoordinator) -> None:
        """A losing round resets the streak."""
        for _ in range(4):
            coordinator.credit_win(1)
        coordinator.settle_round("slots", 1, 0)
        coordinator.credit_win(1)
        assert coordinator.get_stats()["consecutive_wins"] == 1
        assert not coordinator.is_achievement_unlocked("lucky_streak")

    def test_whale(self, coordinator: GamblingDenCoordinator) -> None:
        """1000 total winnings unlock whale."""
        coordinator.credit_win(999.99)
        assert not coordinator.is_achievement_unlocked("whale")
        coordinator.credit_win(0.01)
        assert coordinator.is_achievement_unlocked("whale")


class TestTimeAchievements:
    """Tests for check_time_achievements()."""

    def test_night_owl(
        self, make_coordinator: Callable[..., GamblingDenCoordinator]
    ) -> None:
        """Playing at 02:00 local unlocks night_owl."""
        with freeze_time("2026-01-01 01:55:00"):
            coordinator = make_coordinator()
            assert coordinator.check_time_achievements() == ["night_owl"]

    def test_daytime_earns_nothing(
        self, make_coordinator: Callable[..., GamblingDenCoordinator]
    ) -> None:
        """Noon, five minutes into a session, earns nothing."""
        with freeze_time("2026-01-01 12:00:00"):
            coordinator = make_coordinator()
        assert (
            coordinator.check_time_achievements(
                datetime(2026, 1, 1, 12, 5, tzinfo=UTC)
            )
            == []
        )

    def test_night_owl_uses_player_zone(
        self, make_coordinator: Callable[..., GamblingDenCoordinator]
    ) -> None:
        """23:30 UTC is 01:30 in Athens (winter)."""
        with freeze_time("2026-01-01 23:29:00"):
            coordinator = make_coordinator(time_zone="Europe/Athens")
            assert "night_owl" in coordinator.check_time_achievements(
                datetime(2026, 1, 1, 23, 30, tzinfo=UTC)
            )

    def test_marathon(
        self, make_coordinator: Callable[..., GamblingDenCoordinator]
    ) -> None:
        """Thirty minutes after the session started unlocks marathon."""
        with freeze_time("2026-01-01 12:00:00"):
            coordinator = make_coordinator()

        assert coordinator.check_time_achievements(
            datetime(2026, 1, 1, 12, 29, tzinfo=UTC)
        ) == []
        assert coordinator.check_time_achievements(
            datetime(2026, 1, 1, 12, 31, tzinfo=UTC)
        ) == ["marathon"]

    def test_periodic_checks(self, coordinator: GamblingDenCoordinator) -> None:
        """The polling task runs a check immediately and stops on request."""
        manager = coordinator.gamification_manager

        async def _run() -> None:
            with patch.object(
                manager, "check_time_achievements", return_value=[]
            ) as check:
                await coordinator.async_start_time_checks(interval=3600)
                await asyncio.sleep(0)
                assert check.call_count == 1
                assert manager.time_checks_running

                await coordinator.async_start_time_checks(interval=3600)
                await coordinator.async_stop_time_checks()
                assert not manager.time_checks_running

        asyncio.run(_run())


class TestRehydration:
    """Unlock state across coordinators."""

    @pytest.mark.parametrize("stored", ['{"first_spin": true}', "42", "not json"])
    def test_bad_unlock_list_starts_empty(
        self,
        memory_store: MemoryStore,
        make_coordinator: Callable[..., GamblingDenCoordinator],
        stored: str,
    ) -> None:
        """Non-list or corrupt unlock lists load as empty."""
        memory_store.set("gd_achievements", stored)
        coordinator = make_coordinator()
        assert coordinator.get_unlocked_achievements() == []

    def test_unknown_ids_survive(
        self,
        memory_store: MemoryStore,
        make_coordinator: Callable[..., GamblingDenCoordinator],
    ) -> None:
        """Ids from a newer catalogue are kept and re-persisted."""
        memory_store.set("gd_achievements", '["roulette_master", "first_spin"]')
        coordinator = make_coordinator()

        assert coordinator.get_unlocked_achievements() == [
            "roulette_master",
            "first_spin",
        ]
        coordinator.check_achievement("first_win")
        assert "roulette_master" in memory_store.get("gd_achievements")
