"""
SQLite Access Log Adapter.

Implements AccessLogPort by appending rows to the `access_log` table.
Errors are raised to the caller; the best-effort wrapper decides what to
do with them.
"""

from __future__ import annotations

import json
import sqlite3

from linkgate.core.ports.access_log import AccessLogEntry


class SQLiteAccessLog:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def record(self, entry: AccessLogEntry) -> None:
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute(
                """
                INSERT INTO access_log (
                    slug, matched_key, destination, client_class,
                    locale, referer_host, diverted, utm_json, recorded_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    entry.slug,
                    entry.matched_key,
                    entry.destination,
                    entry.client_class,
                    entry.locale,
                    entry.referer_host,
                    1 if entry.diverted else 0,
                    json.dumps(entry.utm, sort_keys=True),
                    entry.recorded_at.isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def count(self) -> int:
        conn = sqlite3.connect(self.db_path)
        try:
            row = conn.execute("SELECT COUNT(*) FROM access_log").fetchone()
            return int(row[0])
        finally:
            conn.close()
