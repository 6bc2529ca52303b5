"""SQLite connection handling and schema bootstrap."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..exceptions import PersistenceError

SCHEMA = """
    CREATE TABLE IF NOT EXISTS master (
        number INTEGER PRIMARY KEY,
        qlevel INTEGER NOT NULL
    );

    CREATE TABLE IF NOT EXISTS documentation (
        uid TEXT PRIMARY KEY,
        created_date TEXT NOT NULL,
        location TEXT
    );

    CREATE TABLE IF NOT EXISTS documentation_attachments (
        accountid INTEGER NOT NULL,
        documentid TEXT NOT NULL,
        FOREIGN KEY (accountid) REFERENCES master(number),
        FOREIGN KEY (documentid) REFERENCES documentation(uid)
    );

    CREATE TABLE IF NOT EXISTS documentation_issues (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        documentid TEXT NOT NULL,
        old_location TEXT NOT NULL,
        new_location TEXT NOT NULL,
        error_message TEXT NOT NULL,
        status TEXT NOT NULL,
        date_added TEXT NOT NULL,
        number INTEGER
    );

    CREATE INDEX IF NOT EXISTS idx_issues_documentid ON documentation_issues(documentid);
    CREATE INDEX IF NOT EXISTS idx_issues_status ON documentation_issues(status);
    CREATE INDEX IF NOT EXISTS idx_attachments_documentid ON documentation_attachments(documentid);
"""


@contextmanager
def connect(db_path: Path, timeout: float = 30.0) -> Iterator[sqlite3.Connection]:
    """Open a connection scoped to one unit of work.

    Commits on success, rolls back on error and always closes. SQLite
    errors are raised as PersistenceError.
    """
    try:
        conn = sqlite3.connect(str(db_path), timeout=timeout)
    except sqlite3.Error as e:
        raise PersistenceError(f"Cannot open database {db_path}: {e}") from e

    try:
        with conn:
            yield conn
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    finally:
        conn.close()


def initialize_database(db_path: Path) -> None:
    """Create the document and issue log tables if they are missing."""
    with connect(db_path) as conn:
        conn.executescript(SCHEMA)
