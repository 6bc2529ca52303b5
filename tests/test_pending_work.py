"""Tests for the SQLite pending work source."""

import sqlite3
import uuid
from datetime import datetime
from pathlib import Path

import pytest

from docs_relocator.core.pending_work import SqlitePendingWorkSource
from docs_relocator.exceptions import PersistenceError


@pytest.fixture
def source(database):
    return SqlitePendingWorkSource(database)


def log_issue(db_path, uid):
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """INSERT INTO documentation_issues
               (documentid, old_location, new_location, error_message, status, date_added, number)
               VALUES (?, '/old', 'no new location', 'x', 'FILE_MISSING', '2024-01-01', 1)""",
            (uid.hex,)
        )
    conn.close()


class TestFetchPending:
    """Test SqlitePendingWorkSource.fetch_pending."""

    def test_empty_backlog(self, source):
        assert source.fetch_pending() == []

    def test_returns_records(self, source, add_document):
        uid = add_document("/old", created_on=datetime(2023, 3, 14, 8, 0), number=5)

        (record,) = source.fetch_pending()

        assert record.id == uid
        assert record.location == Path("/old")
        assert record.created_on == datetime(2023, 3, 14, 8, 0)
        assert record.file_number == 5
        assert record.file_name == f"{uid.hex}.zip"

    def test_excludes_logged_documents(self, source, database, add_document):
        logged = add_document("/old", number=1)
        pending = add_document("/old", number=2)
        log_issue(database, logged)

        assert [r.id for r in source.fetch_pending()] == [pending]

    def test_excludes_documents_without_location(self, source, add_document):
        add_document(None)
        assert source.fetch_pending() == []

    def test_filters_account_levels(self, database, add_document):
        add_document("/old", number=1, qlevel=998)
        add_document("/old", number=2, qlevel=999)
        add_document("/old", number=3, qlevel=100)

        numbers = [r.file_number for r in SqlitePendingWorkSource(database).fetch_pending()]
        assert numbers == [1, 2]

        only_999 = SqlitePendingWorkSource(database, account_levels=[999]).fetch_pending()
        assert [r.file_number for r in only_999] == [2]

    def test_ordered_by_account_number(self, source, add_document):
        for number in (30, 10, 20):
            add_document("/old", number=number)

        assert [r.file_number for r in source.fetch_pending()] == [10, 20, 30]

    def test_custom_extension(self, database, add_document):
        uid = add_document("/old")
        (record,) = SqlitePendingWorkSource(database, file_extension=".pdf").fetch_pending()
        assert record.file_name == f"{uid.hex}.pdf"

    def test_missing_schema_raises(self, tmp_path):
        db_path = tmp_path / "blank.db"
        sqlite3.connect(db_path).close()

        with pytest.raises(PersistenceError):
            SqlitePendingWorkSource(db_path).fetch_pending()
