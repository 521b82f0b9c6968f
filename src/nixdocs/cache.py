"""SQLite-backed persistence for documentation sources."""

import logging
import pickle
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Self

from nixdocs.config import Settings
from nixdocs.errors import CacheError

logger = logging.getLogger(__name__)


class CacheStore:
    """Stores serialised documentation sources in a SQLite database."""

    def __init__(self, db_path: Path | None = None) -> None:
        """Initialise cache store with the given path.

        Args:
            db_path: Path to the SQLite database file. Parent directories are
                created if needed. Defaults to the path from ``Settings.from_env``.
        """
        self.db_path = Path(db_path) if db_path is not None else Settings.from_env().resolve_cache_path()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialise_schema()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database connections.

        Yields:
            SQLite connection with Row factory enabled.
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _initialise_schema(self) -> None:
        """Create database schema if it doesn't exist."""
        with self._get_connection() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS cache_entries (
                    key TEXT PRIMARY KEY,
                    payload BLOB NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                );
            """)
            conn.commit()

    def put(self, key: str, payload: bytes) -> None:
        """Insert or replace a cached payload.

        Args:
            key: Cache key.
            payload: Serialised data.
        """
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO cache_entries (key, payload)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    payload = excluded.payload,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, sqlite3.Binary(payload)),
            )
            conn.commit()

    def get(self, key: str) -> bytes | None:
        """Retrieve a cached payload.

        Args:
            key: Cache key.

        Returns:
            Stored bytes or None if not cached.
        """
        with self._get_connection() as conn:
            cursor = conn.execute("SELECT payload FROM cache_entries WHERE key = ?", (key,))
            row = cursor.fetchone()
            return bytes(row["payload"]) if row else None

    def delete(self, key: str) -> None:
        """Remove a cached payload if present.

        Args:
            key: Cache key.
        """
        with self._get_connection() as conn:
            conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
            conn.commit()

    def clear(self) -> None:
        """Remove every cached payload."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM cache_entries")
            conn.commit()

    def count(self) -> int:
        """Return the number of cached payloads.

        Returns:
            Count of rows in the cache table.
        """
        with self._get_connection() as conn:
            cursor = conn.execute("SELECT COUNT(*) FROM cache_entries")
            result = cursor.fetchone()
            return int(result[0]) if result else 0


class Cache:
    """Mixin giving a documentation source default save/load behaviour.

    The whole instance is pickled, so subclasses get persistence without
    overriding anything. Only load caches written by this package.
    """

    def save(self, store: CacheStore, key: str) -> None:
        """Persist this instance under ``key``.

        Args:
            store: Cache store to write to.
            key: Cache key.
        """
        store.put(key, pickle.dumps(self, protocol=pickle.HIGHEST_PROTOCOL))
        logger.debug("Saved %s to cache key %s", type(self).__name__, key)

    @classmethod
    def load(cls, store: CacheStore, key: str) -> Self | None:
        """Restore an instance previously saved under ``key``.

        Args:
            store: Cache store to read from.
            key: Cache key.

        Returns:
            The restored instance, or None if nothing is cached.

        Raises:
            CacheError: If the payload is corrupt or of another type.
        """
        payload = store.get(key)
        if payload is None:
            return None

        try:
            instance = pickle.loads(payload)  # noqa: S301
        except (pickle.UnpicklingError, EOFError, AttributeError, ImportError) as exc:
            msg = f"Corrupt cache entry {key!r}: {exc}"
            raise CacheError(msg) from exc

        if not isinstance(instance, cls):
            msg = f"Cache entry {key!r} holds {type(instance).__name__}, expected {cls.__name__}"
            raise CacheError(msg)
        return instance
