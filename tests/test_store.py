"""Tests for the storage port, its backends and ScopedStore."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from gamblingden.store import JsonFileStore, MemoryStore, ScopedStore


class TestMemoryStore:
    """Tests for the dict-backed store."""

    def test_get_set_remove(self) -> None:
        """Basic round of operations."""
        store = MemoryStore()
        assert store.get("a") is None
        store.set("a", "1")
        assert store.get("a") == "1"
        assert store.keys() == ["a"]
        store.remove("a")
        store.remove("a")
        assert store.get("a") is None

    def test_initial_values(self) -> None:
        """Stores can be pre-seeded."""
        assert MemoryStore({"k": "v"}).get("k") == "v"


class TestJsonFileStore:
    """Tests for the JSON file backend."""

    def test_missing_file_loads_empty(self, tmp_path: Path) -> None:
        """A fresh path starts empty and is created on first write."""
        path = tmp_path / "nested" / "state.json"
        store = JsonFileStore(path)
        assert store.keys() == []
        store.set("gd_balance", "90.00")
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "gd_balance": "90.00"
        }

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        """A second store over the same file sees earlier writes."""
        path = tmp_path / "state.json"
        JsonFileStore(path).set("gd_xp", "100")
        assert JsonFileStore(path).get("gd_xp") == "100"

    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
    def test_corrupt_file_loads_empty(
        self, tmp_path: Path, content: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unreadable or non-object files load as empty with a warning."""
        path = tmp_path / "state.json"
        path.write_text(content, encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            store = JsonFileStore(path)
        assert store.keys() == []
        assert "Starting empty" in caplog.text

    def test_transaction_flushes_once(self, tmp_path: Path) -> None:
        """Writes inside a transaction are flushed together at exit."""
        store = JsonFileStore(tmp_path / "state.json")
        with patch.object(store, "flush", wraps=store.flush) as flush:
            with store.transaction():
                store.set("a", "1")
                with store.transaction():
                    store.set("b", "2")
                store.remove("a")
                assert flush.call_count == 0
        assert flush.call_count == 1
        assert JsonFileStore(tmp_path / "state.json").keys() == ["b"]

    def test_no_temp_files_left_behind(self, tmp_path: Path) -> None:
        """Atomic writes clean up their temp file."""
        store = JsonFileStore(tmp_path / "state.json")
        store.set("a", "1")
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]


class TestScopedStore:
    """Tests for the namespaced, failure-tolerant wrapper."""

    def test_keys_are_prefixed(self) -> None:
        """Every key is written under the prefix."""
        backend = MemoryStore()
        scoped = ScopedStore(backend, "gd_")
        scoped.save("balance", "100.00")
        assert backend.get("gd_balance") == "100.00"
        assert scoped.load("balance") == "100.00"

    def test_load_json_default_is_copied(self) -> None:
        """Missing keys return a fresh copy of the default."""
        scoped = ScopedStore(MemoryStore())
        default: list[str] = []
        value = scoped.load_json("achievements", default)
        value.append("x")
        assert default == []

    def test_corrupt_json_returns_default(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Corrupt JSON logs a warning and yields the default."""
        scoped = ScopedStore(MemoryStore({"gd_stats": "{broken"}))
        with caplog.at_level(logging.WARNING):
            assert scoped.load_json("stats", {"ok": True}) == {"ok": True}
        assert "not valid JSON" in caplog.text

    def test_failed_write_is_logged_not_raised(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Backend write errors are swallowed and reported as False."""
        backend = MemoryStore()
        scoped = ScopedStore(backend)
        with (
            patch.object(backend, "set", side_effect=OSError("quota exceeded")),
            caplog.at_level(logging.ERROR),
        ):
            assert scoped.save("balance", "1.00") is False
        assert "quota exceeded" in caplog.text

    def test_non_serializable_value(self) -> None:
        """save_json reports values json cannot encode."""
        assert ScopedStore(MemoryStore()).save_json("stats", {1, 2}) is False

    def test_failed_transaction_flush_is_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A flush failure at transaction exit does not propagate."""
        backend = JsonFileStore(tmp_path / "state.json")
        scoped = ScopedStore(backend)
        with (
            patch.object(backend, "flush", side_effect=OSError("disk full")),
            caplog.at_level(logging.ERROR),
        ):
            with scoped.transaction():
                scoped.save("xp", "10")
        assert "disk full" in caplog.text
        assert scoped.load("xp") == "10"

    def test_snapshot_only_includes_namespace(self) -> None:
        """snapshot() returns this prefix's keys without the prefix."""
        backend = MemoryStore({"gd_xp": "5", "other_app": "x"})
        assert ScopedStore(backend, "gd_").snapshot() == {"xp": "5"}
