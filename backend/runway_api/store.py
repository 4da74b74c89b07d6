"""SQLite persistence for saved runway analyses."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

DEFAULT_DB_PATH = "runway_analyses.db"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _decode(row: sqlite3.Row) -> dict[str, Any]:
    data = dict(row)
    data["configuration"] = json.loads(data.pop("configuration_json"))
    data["results"] = json.loads(data.pop("results_json"))
    return data


class AnalysisStore:
    """Saved analyses, scoped per user. One connection per call."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self.db_path = str(db_path)
        self.init_db()

    # ── Connection ───────────────────────────────────────────────

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        conn = self._connect()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS saved_analyses (
                    id                 INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id            INTEGER NOT NULL,
                    project_name       TEXT    NOT NULL,
                    configuration_json TEXT    NOT NULL,
                    results_json       TEXT    NOT NULL,
                    notes              TEXT    DEFAULT '',
                    created_at         TEXT    NOT NULL,
                    updated_at         TEXT    NOT NULL
                );

                CREATE INDEX IF NOT EXISTS ix_saved_analyses_user
                    ON saved_analyses (user_id, created_at);
            """)
        finally:
            conn.close()

    # ── Operations ───────────────────────────────────────────────

    def save(
        self,
        user_id: int,
        project_name: str,
        configuration: dict[str, Any],
        results: dict[str, Any],
        notes: str = "",
    ) -> dict[str, Any]:
        now = _now()
        conn = self._connect()
        try:
            cur = conn.execute(
                """INSERT INTO saved_analyses
                   (user_id, project_name, configuration_json, results_json,
                    notes, created_at, updated_at)
                   VALUES (?,?,?,?,?,?,?)""",
                (
                    user_id,
                    project_name,
                    json.dumps(configuration),
                    json.dumps(results),
                    notes,
                    now,
                    now,
                ),
            )
            conn.commit()
            analysis_id = cur.lastrowid
        finally:
            conn.close()
        return self.get(analysis_id, user_id)

    def get(self, analysis_id: int, user_id: int) -> dict[str, Any] | None:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT * FROM saved_analyses WHERE id = ? AND user_id = ?",
                (analysis_id, user_id),
            ).fetchone()
            return _decode(row) if row else None
        finally:
            conn.close()

    def list_for_user(self, user_id: int) -> list[dict[str, Any]]:
        """Summaries (no payloads), newest first."""
        conn = self._connect()
        try:
            rows = conn.execute(
                """SELECT id, user_id, project_name, notes, created_at, updated_at
                   FROM saved_analyses WHERE user_id = ?
                   ORDER BY created_at DESC, id DESC""",
                (user_id,),
            ).fetchall()
            return [dict(r) for r in rows]
        finally:
            conn.close()

    def delete(self, analysis_id: int, user_id: int) -> bool:
        conn = self._connect()
        try:
            cur = conn.execute(
                "DELETE FROM saved_analyses WHERE id = ? AND user_id = ?",
                (analysis_id, user_id),
            )
            conn.commit()
            return cur.rowcount > 0
        finally:
            conn.close()
