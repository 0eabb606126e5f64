"""Schema migrations.

Migrations are applied in order and recorded by name in the ``migrations``
table, so running the runner again only applies what is still pending.
"""
from __future__ import annotations

import logging
import sqlite3

from kcnotes.errors import MigrationError
from kcnotes.storage.database import Database

logger = logging.getLogger(__name__)

TRACKING_TABLE = """
CREATE TABLE IF NOT EXISTS migrations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    applied_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""

MIGRATIONS: list[tuple[str, str]] = [
    (
        "0001_create_users_and_notes",
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        CREATE TABLE IF NOT EXISTS notes (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            content TEXT NOT NULL,
            user_id INTEGER NOT NULL REFERENCES users (id) ON DELETE CASCADE,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        CREATE INDEX IF NOT EXISTS idx_notes_user_id ON notes (user_id);
        """,
    ),
    (
        "0002_add_notes_updated_at",
        "ALTER TABLE notes ADD COLUMN updated_at TIMESTAMP",
    ),
]


def applied_migrations(db: Database) -> list[str]:
    rows = db.fetch_all("SELECT name FROM migrations ORDER BY id")
    return [r["name"] for r in rows]


def apply_migrations(db: Database, migrations: list[tuple[str, str]] | None = None) -> list[str]:
    """Apply pending migrations and return the names applied by this call."""
    pending_source = MIGRATIONS if migrations is None else migrations
    conn = db.connection
    applied: list[str] = []
    try:
        conn.execute(TRACKING_TABLE)
        conn.commit()
        done = set(applied_migrations(db))
        for name, ddl in pending_source:
            if name in done:
                continue
            # one transaction per migration: the DDL and its record land together
            with conn:
                conn.execute("BEGIN")
                for statement in _split(ddl):
                    conn.execute(statement)
                conn.execute("INSERT INTO migrations (name) VALUES (?)", (name,))
            applied.append(name)
            logger.info("Applied migration %s", name)
    except sqlite3.Error as exc:
        raise MigrationError(f"migration failed: {exc}") from exc

    if not applied:
        logger.info("Schema up to date.")
    return applied


def _split(ddl: str) -> list[str]:
    return [s.strip() for s in ddl.split(";") if s.strip()]
