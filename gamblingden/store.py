# File: store.py
"""Handles persistent data storage for the GamblingDen player economy.

The engine talks to storage through one port, KeyValueStore: string values
under string keys plus a scoped transaction that batches writes. Backends are
swappable (in-memory for tests, a JSON file for a local install).

ScopedStore wraps a backend with the application namespace, JSON encoding and
the failure policy: reads of missing or corrupt values return the caller's
default, and failed writes are logged and swallowed so in-memory state stays
authoritative for the rest of the session.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
import copy
import json
import os
from pathlib import Path
import tempfile
from typing import Any

from . import const


class KeyValueStore(ABC):
    """Storage port used by the engine.

    Implementations only need get/set/remove/keys. transaction() defaults to
    a no-op scope; backends with expensive flushes override it to batch.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored string for key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key if present."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return every stored key."""

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Group several writes into one logical unit."""
        yield


class MemoryStore(KeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Initialize the store, optionally pre-seeded with raw values."""
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        """Return the stored string for key, or None if absent."""
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        self._data[key] = value

    def remove(self, key: str) -> None:
        """Delete key if present."""
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        """Return every stored key."""
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """Single JSON object file holding every key.

    The file is read once at construction. Each write (or each outermost
    transaction) rewrites the file atomically through a temp file in the same
    directory followed by os.replace().
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON file. Parent directories are created
                on first flush.
        """
        self._path = Path(path)
        self._data: dict[str, str] = self._load()
        self._transaction_depth = 0
        self._dirty = False

    @property
    def path(self) -> Path:
        """Return the backing file path."""
        return self._path

    def _load(self) -> dict[str, str]:
        """Read the backing file; missing or unreadable files load as empty."""
        if not self._path.exists():
            const.LOGGER.info(
                "INFO: No existing storage found at %s. Initializing new data",
                self._path,
            )
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as err:
            const.LOGGER.warning(
                "WARNING: Storage file %s is unreadable (%s). Starting empty",
                self._path,
                err,
            )
            return {}
        if not isinstance(raw, dict):
            const.LOGGER.warning(
                "WARNING: Storage file %s does not hold an object. Starting empty",
                self._path,
            )
            return {}
        return {str(key): str(value) for key, value in raw.items()}

    def get(self, key: str) -> str | None:
        """Return the stored string for key, or None if absent."""
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        """Store value under key and flush unless inside a transaction."""
        self._data[key] = value
        self._mark_dirty()

    def remove(self, key: str) -> None:
        """Delete key if present and flush unless inside a transaction."""
        if key in self._data:
            del self._data[key]
            self._mark_dirty()

    def keys(self) -> list[str]:
        """Return every stored key."""
        return list(self._data)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Defer flushing until the outermost transaction exits."""
        self._transaction_depth += 1
        try:
            yield
        finally:
            self._transaction_depth -= 1
            if self._transaction_depth == 0 and self._dirty:
                self.flush()

    def _mark_dirty(self) -> None:
        self._dirty = True
        if self._transaction_depth == 0:
            self.flush()

    def flush(self) -> None:
        """Write the in-memory mapping to disk atomically.

        Raises:
            OSError: When the directory or file cannot be written.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._data, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        self._dirty = False


class ScopedStore:
    """Namespaced, JSON-aware, failure-tolerant view over a KeyValueStore.

    Utilizes the configured prefix (default ``gd_``) so unrelated keys in the
    same backend never collide with engine state.
    """

    def __init__(
        self, backend: KeyValueStore, prefix: str = const.DEFAULT_STORAGE_PREFIX
    ) -> None:
        """Initialize the scoped store.

        Args:
            backend: Storage port implementation.
            prefix: Namespace prepended to every key.
        """
        self._backend = backend
        self._prefix = prefix

    @property
    def backend(self) -> KeyValueStore:
        """Return the wrapped backend."""
        return self._backend

    def scoped_key(self, key: str) -> str:
        """Return the namespaced backend key."""
        return f"{self._prefix}{key}"

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def load(self, key: str) -> str | None:
        """Return the raw stored string, or None if absent or unreadable."""
        try:
            return self._backend.get(self.scoped_key(key))
        except (OSError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Failed to read '%s' from storage: %s", self.scoped_key(key), err
            )
            return None

    def load_json(self, key: str, default: Any) -> Any:
        """Return the decoded JSON value, or a copy of default.

        Missing keys return the default silently; corrupt JSON logs a warning.
        """
        raw = self.load(key)
        if raw is None or raw == "":
            return copy.deepcopy(default)
        try:
            return json.loads(raw)
        except ValueError as err:
            const.LOGGER.warning(
                "WARNING: Stored value for '%s' is not valid JSON (%s). Using default",
                self.scoped_key(key),
                err,
            )
            return copy.deepcopy(default)

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def save(self, key: str, value: str) -> bool:
        """Store a raw string.

        Returns:
            True on success. Failures are logged and reported as False; no
            exception is raised.
        """
        scoped = self.scoped_key(key)
        try:
            self._backend.set(scoped, value)
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save '%s' due to storage error: %s. "
                "Continuing with in-memory state",
                scoped,
                err,
            )
            return False
        except (TypeError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Failed to save '%s' due to invalid data: %s", scoped, err
            )
            return False
        const.LOGGER.debug("DEBUG: Saved '%s' to storage", scoped)
        return True

    def save_json(self, key: str, value: Any) -> bool:
        """Encode value as JSON and store it (see save())."""
        try:
            encoded = json.dumps(value)
        except (TypeError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Failed to save '%s' due to non-serializable data: %s",
                self.scoped_key(key),
                err,
            )
            return False
        return self.save(key, encoded)

    def remove(self, key: str) -> bool:
        """Delete a key; failures are logged and reported as False."""
        try:
            self._backend.remove(self.scoped_key(key))
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove '%s' from storage: %s",
                self.scoped_key(key),
                err,
            )
            return False
        return True

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Batch the enclosed writes; a failed final flush is logged."""
        try:
            with self._backend.transaction():
                yield
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to flush storage transaction: %s. "
                "Continuing with in-memory state",
                err,
            )

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    def snapshot(self) -> dict[str, str]:
        """Return every raw value in this namespace, keyed without prefix."""
        try:
            keys = self._backend.keys()
        except OSError as err:
            const.LOGGER.error("ERROR: Failed to list storage keys: %s", err)
            return {}
        result: dict[str, str] = {}
        for scoped in keys:
            if not scoped.startswith(self._prefix):
                continue
            value = self.load(scoped[len(self._prefix) :])
            if value is not None:
                result[scoped[len(self._prefix) :]] = value
        return result
