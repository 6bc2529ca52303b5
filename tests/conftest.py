"""Shared fixtures for document relocator tests."""

import sqlite3
import uuid
from datetime import datetime
from pathlib import Path

import pytest

from docs_relocator.core.database import initialize_database

# A Wednesday, well away from the default Monday 20:00 cutoff
BEFORE_CUTOFF = datetime(2024, 5, 15, 10, 0)


@pytest.fixture
def fixed_clock():
    """Clock pinned to a time before the weekly cutoff."""
    return lambda: BEFORE_CUTOFF


@pytest.fixture
def database(tmp_path):
    """Create an initialized SQLite database."""
    db_path = tmp_path / "documents.db"
    initialize_database(db_path)
    return db_path


@pytest.fixture
def share_root(tmp_path):
    """Create the share root with a provisioned DOCS2023 year folder."""
    root = tmp_path / "share"
    (root / "DOCS2023").mkdir(parents=True)
    return root


@pytest.fixture
def add_document(database):
    """Insert a document attached to an account, returning its UUID."""

    def _add(location, created_on=datetime(2023, 3, 14, 9, 30), number=1,
             qlevel=998, uid=None, stored_uid=None):
        uid = uid or uuid.uuid4()
        key = stored_uid or uid.hex
        with sqlite3.connect(database) as conn:
            conn.execute(
                "INSERT OR IGNORE INTO master (number, qlevel) VALUES (?, ?)",
                (number, qlevel)
            )
            conn.execute(
                "INSERT INTO documentation (uid, created_date, location) VALUES (?, ?, ?)",
                (key, created_on.isoformat(), str(location) if location is not None else None)
            )
            conn.execute(
                "INSERT INTO documentation_attachments (accountid, documentid) VALUES (?, ?)",
                (number, key)
            )
        conn.close()
        return uid

    return _add


@pytest.fixture
def write_file():
    """Write a document file named after its UUID into a directory."""

    def _write(directory: Path, uid: uuid.UUID, content: bytes = b"zip data") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{uid.hex}.zip"
        path.write_bytes(content)
        return path

    return _write


def fetch_issues(db_path):
    with sqlite3.connect(db_path) as conn:
        rows = conn.execute(
            "SELECT documentid, old_location, new_location, error_message, status, number "
            "FROM documentation_issues ORDER BY id"
        ).fetchall()
    conn.close()
    return rows


def fetch_location(db_path, uid):
    key = uid.hex if isinstance(uid, uuid.UUID) else uid
    with sqlite3.connect(db_path) as conn:
        row = conn.execute(
            "SELECT location FROM documentation WHERE uid = ?", (key,)
        ).fetchone()
    conn.close()
    return row[0] if row else None


@pytest.fixture
def read_issues():
    return fetch_issues


@pytest.fixture
def read_location():
    return fetch_location
