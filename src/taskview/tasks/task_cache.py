# src/taskview/tasks/task_cache.py

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import sqlite3
import time
from pathlib import Path

from ..core.errors import CacheReadError, CacheWriteError, DecodeError
from .task_models import TaskCollection, tasks_from_payload, tasks_to_payload

logger = logging.getLogger(__name__)

DEFAULT_CACHE_KEY = "tasks"


class SqliteTaskCache:
    """
    Last-known task collection persisted in a SQLite key-value table.

    - one slot under a fixed key, value is the JSON array of task objects
    - schema is created lazily on first use, so storage problems surface as
      CacheReadError / CacheWriteError instead of failing at startup
    - each call opens its own short-lived connection and runs in a worker
      thread, keeping the event loop free
    """

    def __init__(self, db_path: str | Path = "cache.sqlite3", *, key: str = DEFAULT_CACHE_KEY) -> None:
        self._db_path = Path(db_path)
        self._key = key
        self._schema_ready = False

    @property
    def key(self) -> str:
        return self._key

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        if not self._schema_ready:
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at REAL NOT NULL
                    )
                    """
                )
                conn.commit()
            except Exception:
                conn.close()
                raise
            self._schema_ready = True
        return conn

    def _read_raw(self) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (self._key,)).fetchone()
            return None if row is None else str(row["value"])
        finally:
            conn.close()

    def _write_raw(self, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (self._key, value, time.time()),
            )
            conn.commit()
        finally:
            conn.close()

    def _delete_raw(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (self._key,))
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    async def read(self) -> TaskCollection | None:
        try:
            raw = await asyncio.to_thread(self._read_raw)
        except (OSError, sqlite3.Error) as e:
            raise CacheReadError(f"Failed to read cache slot {self._key!r}: {e}") from e

        if raw is None:
            logger.debug("Cache miss key=%s", self._key)
            return None

        try:
            tasks = tasks_from_payload(json.loads(raw))
        except (json.JSONDecodeError, DecodeError) as e:
            raise CacheReadError(f"Corrupted cache slot {self._key!r}: {e}") from e

        logger.debug("Cache hit key=%s tasks=%d", self._key, len(tasks))
        return tasks

    async def write(self, tasks: TaskCollection) -> None:
        value = json.dumps(tasks_to_payload(tasks), ensure_ascii=False)
        try:
            await asyncio.to_thread(self._write_raw, value)
        except (OSError, sqlite3.Error) as e:
            raise CacheWriteError(f"Failed to write cache slot {self._key!r}: {e}") from e
        logger.debug("Cache written key=%s tasks=%d", self._key, len(tasks))

    async def clear(self) -> None:
        try:
            await asyncio.to_thread(self._delete_raw)
        except (OSError, sqlite3.Error) as e:
            raise CacheWriteError(f"Failed to clear cache slot {self._key!r}: {e}") from e
        logger.info("Cache cleared key=%s", self._key)
