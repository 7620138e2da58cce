"""SQLite persistence for the session token."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path

_TOKEN_KEY = "token"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class TokenStore:
    """Keeps the one durable piece of client state: the auth token."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        db_file = Path(self.db_path)
        db_file.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(db_file)

    def bootstrap_schema(self) -> None:
        """Create persistence schema if it does not already exist."""
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS client_state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )

    def load(self) -> str | None:
        self.bootstrap_schema()
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM client_state WHERE key = ?", (_TOKEN_KEY,)).fetchone()
        return row[0] if row else None

    def save(self, token: str) -> None:
        self.bootstrap_schema()
        with self._connect() as conn:
            with conn:
                conn.execute(
                    """
                    INSERT INTO client_state (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (_TOKEN_KEY, token, _utc_now_iso()),
                )

    def clear(self) -> None:
        self.bootstrap_schema()
        with self._connect() as conn:
            with conn:
                conn.execute("DELETE FROM client_state WHERE key = ?", (_TOKEN_KEY,))
