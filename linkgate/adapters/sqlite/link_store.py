"""
SQLite Link Store Adapter.

Implements LinkStorePort on a single `kv_store` table holding JSON values.
Rows may carry an `expires_at` epoch; expired rows read as absent.

The cache TTL hint is accepted on every read. A local SQLite file has no
edge cache to apply it to, so reads always hit the table.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from typing import Any

from linkgate.core.ports.store import LinkStoreDecodeError, LinkStoreUnavailableError

logger = logging.getLogger(__name__)


class SQLiteLinkStore:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def get(self, key: str, *, cache_ttl: int) -> dict[str, Any] | None:
        logger.debug("kv get %s (cache_ttl=%ss)", key, cache_ttl)
        try:
            conn = self._get_conn()
            try:
                row = conn.execute(
                    "SELECT value FROM kv_store "
                    "WHERE key = ? AND (expires_at IS NULL OR expires_at > ?)",
                    (key, int(time.time())),
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise LinkStoreUnavailableError(key, e) from e

        if row is None:
            return None

        try:
            value = json.loads(row[0])
        except json.JSONDecodeError as e:
            raise LinkStoreDecodeError(key) from e

        if not isinstance(value, dict):
            raise LinkStoreDecodeError(key)
        return value

    def put(self, key: str, value: dict[str, Any], expires_at: int | None = None) -> None:
        """Write a JSON value. Used by the CLI to seed local databases."""
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, expires_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value=excluded.value,
                        expires_at=excluded.expires_at
                """,
                    (key, json.dumps(value), expires_at),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise LinkStoreUnavailableError(key, e) from e
