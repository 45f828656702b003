"""
SQLite Schema Migrator.

Applies the numbered `migrations/*.sql` files to the link database, once
each, tracked by filename in `_migrations`. Only the part of a file above
its "-- Down" marker is run.

Also reports whether the database is ready to serve: no pending files and
every table the link store and access log read from present.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("kv_store", "access_log")

DOWN_MARKER = "-- Down"


class MigrationError(RuntimeError):
    """A migration script failed and was rolled back."""

    def __init__(self, filename: str, cause: sqlite3.Error):
        self.filename = filename
        super().__init__(f"Migration {filename} failed: {cause}")


@dataclass(frozen=True)
class SchemaStatus:
    pending: list[str] = field(default_factory=list)
    missing_tables: list[str] = field(default_factory=list)

    @property
    def ready(self) -> bool:
        return not self.pending and not self.missing_tables


def up_script(path: Path) -> str:
    content = path.read_text()
    return content.split(DOWN_MARKER, 1)[0]


class SQLiteMigrator:
    def __init__(
        self,
        db_path: str,
        migrations_dir: str | Path,
        required_tables: tuple[str, ...] = REQUIRED_TABLES,
    ):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)
        self.required_tables = required_tables

    def migration_files(self) -> list[Path]:
        return sorted(self.migrations_dir.glob("*.sql"))

    def _tables(self, conn: sqlite3.Connection) -> set[str]:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        return {row[0] for row in rows}

    def _applied(self, conn: sqlite3.Connection) -> set[str]:
        if "_migrations" not in self._tables(conn):
            return set()
        return {row[0] for row in conn.execute("SELECT filename FROM _migrations")}

    def status(self) -> SchemaStatus:
        """Inspect the database without creating or changing it."""
        names = [path.name for path in self.migration_files()]
        if not Path(self.db_path).exists():
            return SchemaStatus(pending=names, missing_tables=list(self.required_tables))

        conn = sqlite3.connect(self.db_path)
        try:
            applied = self._applied(conn)
            tables = self._tables(conn)
        finally:
            conn.close()

        return SchemaStatus(
            pending=[name for name in names if name not in applied],
            missing_tables=[t for t in self.required_tables if t not in tables],
        )

    def pending_migrations(self) -> list[str]:
        return self.status().pending

    def missing_tables(self) -> list[str]:
        return self.status().missing_tables

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations. Returns the filenames applied."""
        applied_now: list[str] = []
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS _migrations (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    filename TEXT UNIQUE NOT NULL,
                    applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
            """
            )
            applied = self._applied(conn)

            for path in self.migration_files():
                if path.name in applied:
                    continue
                logger.info("Applying migration %s to %s", path.name, self.db_path)
                try:
                    conn.executescript(up_script(path))
                    conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (path.name,))
                    conn.commit()
                except sqlite3.Error as e:
                    conn.rollback()
                    raise MigrationError(path.name, e) from e
                applied_now.append(path.name)
        finally:
            conn.close()

        return applied_now
