"""
Key-value storage backends for plan records.
Every backend persists values verbatim as bytes and reports failures as BackendUnavailable.
"""

import sqlite3
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Generator, Optional

import redis

from .config import ensure_db_directory, get_db_path, get_redis_url, get_store_backend
from .errors import BackendUnavailable


class StorageBackend(ABC):
    """Abstract interface for the key-value engine behind the plan store."""

    name = "abstract"

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the stored value, or None when the key is absent."""
        pass

    @abstractmethod
    def delete(self, key: str) -> int:
        """Remove key and return the number of keys removed (0 or 1)."""
        pass

    @abstractmethod
    def is_ready(self) -> bool:
        """Check whether the engine is reachable."""
        pass

    def close(self) -> None:
        pass


class MemoryBackend(StorageBackend):
    """Dict-backed backend for tests and single-process development."""

    name = "memory"

    def __init__(self):
        self._data: Dict[str, bytes] = {}
        self._lock = threading.Lock()
        self.available = True

    def _check(self):
        if not self.available:
            raise BackendUnavailable()

    def set(self, key: str, value: bytes) -> None:
        self._check()
        with self._lock:
            self._data[key] = bytes(value)

    def get(self, key: str) -> Optional[bytes]:
        self._check()
        with self._lock:
            return self._data.get(key)

    def delete(self, key: str) -> int:
        self._check()
        with self._lock:
            return 1 if self._data.pop(key, None) is not None else 0

    def is_ready(self) -> bool:
        return self.available


class RedisBackend(StorageBackend):
    """Redis backend using plain SET/GET/DEL on the plan's objectId."""

    name = "redis"

    def __init__(self, url: str = None, client: "redis.Redis" = None):
        self.url = url or get_redis_url()
        # decode_responses stays off so values come back as the exact bytes written
        self._client = client if client is not None else redis.Redis.from_url(self.url)

    def set(self, key: str, value: bytes) -> None:
        try:
            self._client.set(key, value)
        except redis.exceptions.RedisError as e:
            raise BackendUnavailable() from e

    def get(self, key: str) -> Optional[bytes]:
        try:
            return self._client.get(key)
        except redis.exceptions.RedisError as e:
            raise BackendUnavailable() from e

    def delete(self, key: str) -> int:
        try:
            return int(self._client.delete(key))
        except redis.exceptions.RedisError as e:
            raise BackendUnavailable() from e

    def is_ready(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.exceptions.RedisError:
            return False

    def close(self) -> None:
        self._client.close()


class SQLiteBackend(StorageBackend):
    """SQLite backend with a single key/value table."""

    name = "sqlite"

    def __init__(self, db_path: str = None):
        self.db_path = db_path or get_db_path()
        ensure_db_directory(self.db_path)
        self.init_db()

    @contextmanager
    def get_db(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a SQLite database connection, converting engine errors."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise BackendUnavailable() from e
        try:
            yield conn
        except sqlite3.Error as e:
            raise BackendUnavailable() from e
        finally:
            conn.close()

    def init_db(self):
        """Initialize the database with the plans table."""
        with self.get_db() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS plans (
                    key TEXT PRIMARY KEY,
                    value BLOB NOT NULL
                )
            ''')
            conn.commit()

    def set(self, key: str, value: bytes) -> None:
        with self.get_db() as conn:
            conn.execute(
                "INSERT INTO plans (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, sqlite3.Binary(value))
            )
            conn.commit()

    def get(self, key: str) -> Optional[bytes]:
        with self.get_db() as conn:
            row = conn.execute("SELECT value FROM plans WHERE key = ?", (key,)).fetchone()
            return bytes(row[0]) if row else None

    def delete(self, key: str) -> int:
        with self.get_db() as conn:
            cursor = conn.execute("DELETE FROM plans WHERE key = ?", (key,))
            conn.commit()
            return cursor.rowcount

    def is_ready(self) -> bool:
        """Check that the database opens and the plans table exists."""
        try:
            with self.get_db() as conn:
                row = conn.execute(
                    "SELECT name FROM sqlite_master WHERE type='table' AND name='plans'"
                ).fetchone()
                return row is not None
        except BackendUnavailable:
            return False


def create_backend(name: str = None) -> StorageBackend:
    """Build the configured storage backend."""
    name = (name or get_store_backend()).lower()
    if name == "redis":
        return RedisBackend()
    if name == "sqlite":
        return SQLiteBackend()
    if name == "memory":
        return MemoryBackend()
    raise ValueError(f"Unknown storage backend: {name}")
