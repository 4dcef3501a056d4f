"""
SQLite-backed progress store.

Only progress is stored: the original input, the answers given so far,
the step index, checklist ticks and whether the breakdown opened with a
breathing step.  Steps themselves are rebuilt from
the original input on resume, so a template change never leaves a saved
task pointing at stale text.

Saving a snapshot whose ``original_input`` already has a row updates
that row in place.

WAL mode is enabled and PRAGMA user_version migrations run on connect().
"""

from __future__ import annotations

import json
import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, Field

from frank.core.exceptions import StoreError

logger = structlog.get_logger()


class ProgressSnapshot(BaseModel):
    """One paused task."""

    original_input: str
    answers: list[str] = Field(default_factory=list)
    current_step_index: int = Field(default=0, ge=0)
    checklist_progress: dict[str, bool] = Field(default_factory=dict)
    task_type: str | None = None
    regulated: bool | None = None
    paused: bool = True
    id: int | None = None
    saved_at: str | None = None


class ProgressStore:
    """SQLite persistence for paused progress."""

    def __init__(self, db_path: Path) -> None:
        self._path = db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> Path:
        return self._path

    def connect(self) -> None:
        from frank.core.store.migrations import run_migrations

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(self._path))
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode=WAL")
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"Cannot open progress database {self._path}: {exc}") from exc

        run_migrations(self._conn, self._path)

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> ProgressStore:
        self.connect()
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def _db(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("Progress store not connected. Call connect() first.")
        return self._conn

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, snapshot: ProgressSnapshot) -> ProgressSnapshot:
        """Insert or update the row for ``snapshot.original_input``."""
        saved_at = datetime.now(UTC).isoformat()
        try:
            self._db.execute(
                """
                INSERT INTO progress (
                    original_input, answers, current_step_index,
                    checklist_progress, task_type, regulated, paused, saved_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(original_input) DO UPDATE SET
                    answers = excluded.answers,
                    current_step_index = excluded.current_step_index,
                    checklist_progress = excluded.checklist_progress,
                    task_type = excluded.task_type,
                    regulated = excluded.regulated,
                    paused = excluded.paused,
                    saved_at = excluded.saved_at
                """,
                (
                    snapshot.original_input,
                    json.dumps(snapshot.answers),
                    snapshot.current_step_index,
                    json.dumps(snapshot.checklist_progress),
                    snapshot.task_type,
                    None if snapshot.regulated is None else int(snapshot.regulated),
                    int(snapshot.paused),
                    saved_at,
                ),
            )
            self._db.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot save progress: {exc}") from exc

        stored = self.find_by_input(snapshot.original_input)
        if stored is None:
            raise StoreError("Progress row vanished after save")
        logger.info(
            "progress_saved",
            progress_id=stored.id,
            step_index=stored.current_step_index,
            answers=len(stored.answers),
        )
        return stored

    def delete(self, progress_id: int) -> bool:
        try:
            cursor = self._db.execute("DELETE FROM progress WHERE id = ?", (progress_id,))
            self._db.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot delete progress {progress_id}: {exc}") from exc
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info("progress_deleted", progress_id=progress_id)
        return deleted

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, progress_id: int) -> ProgressSnapshot | None:
        row = self._fetch_one("SELECT * FROM progress WHERE id = ?", (progress_id,))
        return _row_to_snapshot(row) if row else None

    def find_by_input(self, original_input: str) -> ProgressSnapshot | None:
        row = self._fetch_one(
            "SELECT * FROM progress WHERE original_input = ?", (original_input,)
        )
        return _row_to_snapshot(row) if row else None

    def list(self, limit: int = 50) -> list[ProgressSnapshot]:
        try:
            rows = self._db.execute(
                "SELECT * FROM progress ORDER BY saved_at DESC, id DESC LIMIT ?", (limit,)
            ).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot list progress: {exc}") from exc
        return [_row_to_snapshot(r) for r in rows]

    def _fetch_one(self, sql: str, params: tuple[Any, ...]) -> sqlite3.Row | None:
        try:
            return self._db.execute(sql, params).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot read progress: {exc}") from exc


def _row_to_snapshot(row: sqlite3.Row) -> ProgressSnapshot:
    return ProgressSnapshot(
        id=row["id"],
        original_input=row["original_input"],
        answers=json.loads(row["answers"]),
        current_step_index=row["current_step_index"],
        checklist_progress=json.loads(row["checklist_progress"]),
        task_type=row["task_type"],
        regulated=None if row["regulated"] is None else bool(row["regulated"]),
        paused=bool(row["paused"]),
        saved_at=row["saved_at"],
    )
