"""
SQLite record store and simple migration system.

``Database`` wraps one SQLite file.  It hands out short-lived
connections (``cursor``), applies versioned migrations on start-up
(``init``) and translates driver exceptions into the API error
hierarchy (``translate_errors``).  The application creates exactly one
``Database`` in ``create_app`` and stores it on ``app.state``; routes
receive it through the ``get_db`` dependency.

Applied migration versions are recorded in the ``migrations`` table
and new ones are executed in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request

from .errors import UnknownServerError, ValidationError


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            first_name TEXT NOT NULL DEFAULT '',
            last_name TEXT NOT NULL DEFAULT '',
            password TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'user',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS locations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL CHECK (length(trim(name)) > 0),
            description TEXT NOT NULL DEFAULT '',
            address TEXT,
            created_by INTEGER,
            created_on TIMESTAMP NOT NULL,
            FOREIGN KEY(created_by) REFERENCES users(id) ON DELETE SET NULL
        );

        CREATE TABLE IF NOT EXISTS surveys (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL CHECK (length(trim(title)) > 0),
            content TEXT NOT NULL DEFAULT '',
            location_id INTEGER,
            created_by INTEGER NOT NULL,
            created_on TIMESTAMP NOT NULL,
            FOREIGN KEY(location_id) REFERENCES locations(id),
            FOREIGN KEY(created_by) REFERENCES users(id)
        );
        """,
    ),
    # Migration 2: indices for the listing queries
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_surveys_created_on ON surveys(created_on);
        CREATE INDEX IF NOT EXISTS idx_surveys_location_id ON surveys(location_id);
        CREATE INDEX IF NOT EXISTS idx_locations_created_on ON locations(created_on);
        """,
    ),
]


class Database:
    """Handle on a single SQLite database file."""

    def __init__(self, url: str):
        self.path = self.resolve_path(url)

    @staticmethod
    def resolve_path(url: str) -> str:
        """Compute the path to the SQLite database file.

        Absolute paths are used as is; relative paths are resolved
        against the project root.
        """
        if os.path.isabs(url):
            return url
        base_dir = Path(__file__).resolve().parent.parent.parent.parent
        return str((base_dir / url).resolve())

    def connect(self) -> sqlite3.Connection:
        """Create and return a new connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name, and foreign key enforcement is switched on for the
        lifetime of the connection (SQLite disables it by default).
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor; commit on success and always close the connection."""
        conn = self.connect()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def init(self) -> None:
        """Create the schema and apply pending migrations."""
        with self.cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    logger.info("Applied migration %s to %s", version, self.path)
                    current_version = version


@contextmanager
def translate_errors() -> Iterator[None]:
    """Map SQLite driver exceptions onto ``ValidationError``/``UnknownServerError``.

    Constraint violations carry a message naming the failed
    constraint and are reported as validation errors.  Any other
    driver failure has no structured detail for the client.
    """
    try:
        yield
    except sqlite3.IntegrityError as exc:
        raise ValidationError(str(exc) or "Constraint violated") from exc
    except sqlite3.Error as exc:
        logger.error("Record store failure: %s", exc)
        raise UnknownServerError() from exc


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the application's ``Database``."""
    return request.app.state.db
