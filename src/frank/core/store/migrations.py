"""
Schema migrations for the Frank progress database.

Uses PRAGMA user_version as the version counter.  Each migration upgrades
from version N to N+1, must be idempotent, and runs before user_version is
bumped; a failure rolls back and surfaces the database path.

Version history:
  0 → 1: progress table (one row per paused task, keyed by original input)
  1 → 2: task_type column so a resumed task keeps the type it started with
  2 → 3: regulated column so a resumed task keeps its breathing-step decision
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from pathlib import Path

import structlog

from frank.core.exceptions import StoreError

logger = structlog.get_logger()

LATEST_SCHEMA_VERSION = 3


def _migrate_0_to_1(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS progress (
            id                  INTEGER PRIMARY KEY AUTOINCREMENT,
            original_input      TEXT NOT NULL UNIQUE,
            answers             TEXT NOT NULL DEFAULT '[]',
            current_step_index  INTEGER NOT NULL DEFAULT 0,
            checklist_progress  TEXT NOT NULL DEFAULT '{}',
            paused              INTEGER NOT NULL DEFAULT 1,
            saved_at            TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)
    conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_progress_saved_at
            ON progress(saved_at)
    """)


def _migrate_1_to_2(conn: sqlite3.Connection) -> None:
    _add_column_if_missing(conn, "progress", "task_type", "TEXT")


def _migrate_2_to_3(conn: sqlite3.Connection) -> None:
    _add_column_if_missing(conn, "progress", "regulated", "INTEGER")


_MIGRATIONS: dict[int, Callable[[sqlite3.Connection], None]] = {
    0: _migrate_0_to_1,
    1: _migrate_1_to_2,
    2: _migrate_2_to_3,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _add_column_if_missing(
    conn: sqlite3.Connection,
    table: str,
    column: str,
    column_def: str,
) -> None:
    cursor = conn.execute(f"PRAGMA table_info({table})")  # noqa: S608
    existing = {row[1] for row in cursor.fetchall()}
    if column not in existing:
        conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {column_def}")  # noqa: S608
        logger.info("migration_added_column", table=table, column=column)


def get_user_version(conn: sqlite3.Connection) -> int:
    row = conn.execute("PRAGMA user_version").fetchone()
    return row[0] if row else 0


def _set_user_version(conn: sqlite3.Connection, version: int) -> None:
    conn.execute(f"PRAGMA user_version = {version}")  # noqa: S608


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def run_migrations(conn: sqlite3.Connection, db_path: Path) -> None:
    """
    Run all pending schema migrations on *conn*.

    Raises :class:`StoreError` (with the database path and a recovery hint)
    if the database is newer than this build or a migration fails.
    """
    current = get_user_version(conn)

    if current > LATEST_SCHEMA_VERSION:
        raise StoreError(
            f"Database {db_path} has schema version {current}, but this build of "
            f"frank only supports up to version {LATEST_SCHEMA_VERSION}. "
            f"Upgrade frank or remove the database file."
        )

    if current == LATEST_SCHEMA_VERSION:
        return

    logger.info("migration_starting", from_version=current, to_version=LATEST_SCHEMA_VERSION)

    for from_version in range(current, LATEST_SCHEMA_VERSION):
        migration = _MIGRATIONS[from_version]
        target = from_version + 1
        logger.info("migration_step", from_version=from_version, to_version=target)

        try:
            migration(conn)
            _set_user_version(conn, target)
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreError(
                f"Schema migration v{from_version} → v{target} failed: {exc}\n"
                f"Database path: {db_path}\n"
                f"Recovery: delete (or rename) the database file and restart.\n"
                f"  mv '{db_path}' '{db_path}.bak'"
            ) from exc

    logger.info("migration_complete", version=get_user_version(conn))
