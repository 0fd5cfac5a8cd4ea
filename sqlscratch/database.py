"""SQLite store for editor settings and the tabs open at exit.

Credentials are never written here.
"""

import sqlite3
from pathlib import Path
from typing import List, Optional, Tuple

DEFAULT_DB_PATH = Path.home() / ".sqlscratch" / "sqlscratch.db"

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS settings (
        key TEXT PRIMARY KEY,
        value TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS open_tabs (
        position INTEGER PRIMARY KEY,
        file_path TEXT,
        scratch_text TEXT NOT NULL DEFAULT ''
    )
    """,
)


class Database:
    def __init__(self, db_path=None):
        self.db_path = Path(db_path or DEFAULT_DB_PATH)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._get_conn() as conn:
            for statement in _SCHEMA:
                conn.execute(statement)

    def _get_conn(self):
        return sqlite3.connect(self.db_path)

    # Open tabs

    def save_open_tabs(self, tabs: List[Tuple[Optional[Path], str]]) -> None:
        """Replace the stored tabs with ``(file path or None, scratch text)`` pairs."""
        with self._get_conn() as conn:
            conn.execute("DELETE FROM open_tabs")
            conn.executemany(
                "INSERT INTO open_tabs (position, file_path, scratch_text) VALUES (?, ?, ?)",
                [(i, str(path) if path else None, text)
                 for i, (path, text) in enumerate(tabs)],
            )

    def load_open_tabs(self) -> List[Tuple[Optional[str], str]]:
        with self._get_conn() as conn:
            rows = conn.execute(
                "SELECT file_path, scratch_text FROM open_tabs ORDER BY position")
            return [tuple(row) for row in rows]

    # Settings

    def get_setting(self, key, default=None):
        with self._get_conn() as conn:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        return default if row is None else row[0]

    def set_setting(self, key, value):
        with self._get_conn() as conn:
            conn.execute(
                "INSERT INTO settings (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def delete_setting(self, key):
        with self._get_conn() as conn:
            conn.execute("DELETE FROM settings WHERE key = ?", (key,))


_db = None


def _get_db():
    global _db
    if _db is None:
        _db = Database()
    return _db


def use_database(db):
    """Replace the process-wide store."""
    global _db
    _db = db


def get_setting(key, default=None):
    return _get_db().get_setting(key, default)


def set_setting(key, value):
    _get_db().set_setting(key, value)


def delete_setting(key):
    _get_db().delete_setting(key)


def save_open_tabs(tabs):
    _get_db().save_open_tabs(tabs)


def load_open_tabs():
    return _get_db().load_open_tabs()
