"""Key-value persistence for job selections and campaign state.

The engine depends only on the SelectionStore protocol: get/set/delete
of JSON-compatible values with last-write-wins semantics. Two
implementations are provided:

- InMemorySelectionStore for tests and throwaway sessions
- SqliteSelectionStore for persistence across runs

Storage location defaults to ``StorageSettings.database_path``.
"""

from __future__ import annotations

import copy
import json
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Protocol, runtime_checkable

from jobquest.core.config import get_settings
from jobquest.core.constants import SELECTED_JOBS_KEY
from jobquest.core.exceptions import StorageError
from jobquest.core.logging import get_logger


logger = get_logger(__name__)


# =============================================================================
# Protocol
# =============================================================================


@runtime_checkable
class SelectionStore(Protocol):
    """Opaque key-value store the campaign reads and writes."""

    def get_selected_job_ids(self) -> list[str]:
        """Selected job ids in selection order."""
        ...

    def set_selected_job_ids(self, job_ids: list[str]) -> None:
        """Replace the selected job ids."""
        ...

    def get_value(self, key: str) -> Any | None:
        """Stored value for ``key`` or None."""
        ...

    def set_value(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value under ``key``."""
        ...

    def delete_value(self, key: str) -> bool:
        """Remove ``key``. Returns True if it existed."""
        ...


def _coerce_job_ids(key: str, value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise StorageError("Stored selection is not a list of job ids", key=key)
    return list(value)


# =============================================================================
# In-Memory Store
# =============================================================================


class InMemorySelectionStore:
    """Dictionary-backed store. Values are deep-copied on the way in and out."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get_selected_job_ids(self) -> list[str]:
        return _coerce_job_ids(SELECTED_JOBS_KEY, self.get_value(SELECTED_JOBS_KEY))

    def set_selected_job_ids(self, job_ids: list[str]) -> None:
        self.set_value(SELECTED_JOBS_KEY, list(job_ids))

    def get_value(self, key: str) -> Any | None:
        return copy.deepcopy(self._values.get(key))

    def set_value(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)

    def delete_value(self, key: str) -> bool:
        if key not in self._values:
            return False
        del self._values[key]
        return True


# =============================================================================
# SQLite Store
# =============================================================================


class SqliteSelectionStore:
    """SQLite-backed store with one JSON document per key.

    Example:
        >>> store = SqliteSelectionStore("data/jobquest.db")
        >>> store.set_selected_job_ids(["hero", "wizard"])
        >>> store.get_selected_job_ids()
        ['hero', 'wizard']
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize the store.

        Args:
            db_path: Path to database file. If None, uses the configured path.

        Raises:
            StorageError: If the database cannot be created.
        """
        if db_path is None:
            self.db_path = get_settings().storage.database_path
        else:
            self.db_path = Path(db_path)

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_schema()
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(
                f"Failed to initialize selection store: {exc}",
                details={"path": str(self.db_path)},
            ) from exc

        logger.info("Selection store initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(str(self.db_path))
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value_json TEXT NOT NULL
                )
            """)

            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    def get_selected_job_ids(self) -> list[str]:
        """Selected job ids in selection order."""
        return _coerce_job_ids(SELECTED_JOBS_KEY, self.get_value(SELECTED_JOBS_KEY))

    def set_selected_job_ids(self, job_ids: list[str]) -> None:
        """Replace the selected job ids."""
        self.set_value(SELECTED_JOBS_KEY, list(job_ids))

    def get_value(self, key: str) -> Any | None:
        """Load and decode the value stored under ``key``.

        Raises:
            StorageError: If the read fails or the stored JSON is corrupt.
        """
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT value_json FROM kv_store WHERE key = ?",
                    (key,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to read value: {exc}", key=key) from exc

        if row is None:
            return None

        try:
            return json.loads(row[0])
        except json.JSONDecodeError as exc:
            raise StorageError(f"Stored value is not valid JSON: {exc}", key=key) from exc

    def set_value(self, key: str, value: Any) -> None:
        """Encode and store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageError: If the value is not JSON-compatible or the write fails.
        """
        try:
            value_json = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Value is not JSON-serialisable: {exc}", key=key) from exc

        try:
            with self._get_connection() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv_store (key, value_json) VALUES (?, ?)",
                    (key, value_json),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to write value: {exc}", key=key) from exc

        logger.debug("Value stored", key=key)

    def delete_value(self, key: str) -> bool:
        """Remove ``key``.

        Returns:
            True if deleted, False if not found.
        """
        try:
            with self._get_connection() as conn:
                cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                deleted = cursor.rowcount > 0
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to delete value: {exc}", key=key) from exc

        if deleted:
            logger.debug("Value deleted", key=key)

        return deleted


# =============================================================================
# Singleton Instance
# =============================================================================


_store_instance: SqliteSelectionStore | None = None


def get_selection_store() -> SqliteSelectionStore:
    """Get the global selection store at the configured path.

    Returns:
        SqliteSelectionStore singleton instance.
    """
    global _store_instance

    if _store_instance is None:
        _store_instance = SqliteSelectionStore()

    return _store_instance


__all__ = [
    "SelectionStore",
    "InMemorySelectionStore",
    "SqliteSelectionStore",
    "get_selection_store",
]
