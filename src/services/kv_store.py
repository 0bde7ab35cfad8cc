"""Key-value storage for the webtool API.

Values are JSON-encoded strings addressed by exact key. The SQLite backend
uses aiosqlite for async database operations; the in-memory backend is used
by tests and for throwaway local runs.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiosqlite

logger = logging.getLogger(__name__)

# Default database path
DEFAULT_DB_PATH = ".webtool/kv.db"


def _encode(value: Any) -> str:
    """Serialize a value for storage. Strings are stored verbatim."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _decode(raw: str | None, format: str) -> Any:
    if raw is None:
        return None
    if format == "json":
        return json.loads(raw)
    if format == "text":
        return raw
    raise ValueError(f"Unsupported value format: {format}")


class KVStore(ABC):
    """Async get/put/delete by string key."""

    @abstractmethod
    async def get(self, key: str, format: str = "text") -> Any:
        """Read a value.

        Args:
            key: Exact key to look up
            format: "json" to decode the stored value, "text" for the raw string

        Returns:
            The decoded value, or None if the key does not exist
        """

    @abstractmethod
    async def put(self, key: str, value: Any) -> None:
        """Create or overwrite a value. Non-string values are JSON-encoded."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Deleting a missing key is not an error."""


class MemoryKVStore(KVStore):
    """Dict-backed store. Values are kept encoded, like the SQLite backend."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(data or {})

    async def get(self, key: str, format: str = "text") -> Any:
        return _decode(self.data.get(key), format)

    async def put(self, key: str, value: Any) -> None:
        self.data[key] = _encode(value)

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


class SQLiteKVStore(KVStore):
    """Async SQLite key-value storage.

    Single table keyed by string. Every write is committed immediately;
    there are no multi-key transactions.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        """Initialize store with database path.

        Args:
            db_path: Path to SQLite database file. Parent directory
                     will be created if it doesn't exist.
        """
        self.db_path = Path(db_path)
        self.db: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database connection and create the schema.

        Enables WAL mode for better concurrent read performance.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.db = await aiosqlite.connect(str(self.db_path))

        await self.db.execute("PRAGMA journal_mode=WAL")
        await self.db.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        await self.db.commit()
        logger.info(f"KV store connected: {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self.db:
            await self.db.close()
            self.db = None
            logger.info("KV store connection closed")

    def _require_db(self) -> aiosqlite.Connection:
        if self.db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.db

    async def get(self, key: str, format: str = "text") -> Any:
        db = self._require_db()
        async with db.execute("SELECT value FROM kv WHERE key = ?", (key,)) as cursor:
            row = await cursor.fetchone()
        return _decode(row[0] if row else None, format)

    async def put(self, key: str, value: Any) -> None:
        db = self._require_db()
        now = datetime.now(timezone.utc).isoformat()
        await db.execute(
            "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
            (key, _encode(value), now),
        )
        await db.commit()
        logger.debug(f"Stored key {key}")

    async def delete(self, key: str) -> None:
        db = self._require_db()
        await db.execute("DELETE FROM kv WHERE key = ?", (key,))
        await db.commit()
        logger.debug(f"Deleted key {key}")


def create_kv_store(config: dict) -> KVStore:
    """Build the store configured by ``kv_backend``.

    The SQLite store still needs ``await store.connect()`` before use.
    """
    backend = config.get("kv_backend", "sqlite")
    if backend == "memory":
        logger.warning("Using in-memory KV store, data will not survive a restart")
        return MemoryKVStore()
    if backend == "sqlite":
        return SQLiteKVStore(config.get("kv_db_path", DEFAULT_DB_PATH))
    raise ValueError(f"Unknown KV backend: {backend}")
