from __future__ import annotations

import json
import os
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Any, Protocol

JsonObject = dict[str, Any]


class KVStore(Protocol):
    """Namespaced key-value store with point access and prefix scans.

    Every entry carries an integer version that starts at 1 and grows on each
    write, which is what ``put_if_version`` compares against.
    """

    def put(self, key: str, value: JsonObject) -> None: ...

    def get(self, key: str) -> JsonObject | None: ...

    def get_versioned(self, key: str) -> tuple[JsonObject, int] | None: ...

    def put_if_absent(self, key: str, value: JsonObject) -> bool: ...

    def put_if_version(self, key: str, value: JsonObject, expected_version: int) -> bool: ...

    def scan_by_prefix(self, prefix: str) -> list[tuple[str, JsonObject]]: ...


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _dumps(value: JsonObject) -> str:
    return json.dumps(value, ensure_ascii=False)


class SqliteKVStore:
    def __init__(self, db_path: str):
        self._db_path = db_path
        self._lock = threading.Lock()
        self._conn = self._connect()

    def _connect(self) -> sqlite3.Connection:
        if self._db_path != ":memory:":
            directory = os.path.dirname(self._db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

        conn = sqlite3.connect(
            self._db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.execute("PRAGMA busy_timeout=5000;")
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value_json TEXT NOT NULL,
                version INTEGER NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )
        return conn

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def put(self, key: str, value: JsonObject) -> None:
        with self._lock:
            self._conn.execute(
                """
                INSERT INTO kv_store (key, value_json, version, updated_at)
                VALUES (?, ?, 1, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value_json = excluded.value_json,
                    version = kv_store.version + 1,
                    updated_at = excluded.updated_at
                """,
                (key, _dumps(value), _utc_now()),
            )

    def get(self, key: str) -> JsonObject | None:
        found = self.get_versioned(key)
        if found is None:
            return None
        return found[0]

    def get_versioned(self, key: str) -> tuple[JsonObject, int] | None:
        with self._lock:
            cur = self._conn.execute(
                "SELECT value_json, version FROM kv_store WHERE key = ?",
                (key,),
            )
            row = cur.fetchone()
        if not row:
            return None
        return json.loads(row[0]), int(row[1])

    def put_if_absent(self, key: str, value: JsonObject) -> bool:
        with self._lock:
            cur = self._conn.execute(
                """
                INSERT OR IGNORE INTO kv_store (key, value_json, version, updated_at)
                VALUES (?, ?, 1, ?)
                """,
                (key, _dumps(value), _utc_now()),
            )
            return cur.rowcount == 1

    def put_if_version(self, key: str, value: JsonObject, expected_version: int) -> bool:
        with self._lock:
            cur = self._conn.execute(
                """
                UPDATE kv_store
                SET value_json = ?, version = version + 1, updated_at = ?
                WHERE key = ? AND version = ?
                """,
                (_dumps(value), _utc_now(), key, expected_version),
            )
            return cur.rowcount == 1

    def scan_by_prefix(self, prefix: str) -> list[tuple[str, JsonObject]]:
        # substr() keeps LIKE wildcards in user ids from widening the match.
        with self._lock:
            cur = self._conn.execute(
                """
                SELECT key, value_json
                FROM kv_store
                WHERE key >= ? AND substr(key, 1, ?) = ?
                """,
                (prefix, len(prefix), prefix),
            )
            rows = cur.fetchall()
        return [(row[0], json.loads(row[1])) for row in rows]
