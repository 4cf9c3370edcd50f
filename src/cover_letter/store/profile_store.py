"""SQLite store for the API key and the parsed resume profile."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from cover_letter.models.profile import ResumeProfile

DEFAULT_DB_PATH = Path.home() / ".cover-letter" / "store.db"

_API_KEY = "api_key"
_PROFILE = "resume_profile"


class ProfileStore:
    """Key/value settings table; the pipeline only ever reads from it."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def _get(self, key: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    def _put(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (key, value),
            )

    def get_api_key(self) -> str | None:
        return self._get(_API_KEY)

    def set_api_key(self, api_key: str) -> None:
        self._put(_API_KEY, api_key.strip())

    def get_profile(self) -> ResumeProfile | None:
        raw = self._get(_PROFILE)
        return ResumeProfile.model_validate_json(raw) if raw else None

    def set_profile(self, profile: ResumeProfile) -> None:
        self._put(_PROFILE, profile.model_dump_json())

    def clear(self) -> int:
        """Delete everything stored. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM settings")
            return cursor.rowcount
