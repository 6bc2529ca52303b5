"""Pending work source: the backlog of documents still to relocate."""

import logging
from pathlib import Path
from typing import List, Sequence

from ..models.document import DEFAULT_FILE_EXTENSION, DocumentRecord
from .database import connect

logger = logging.getLogger(__name__)


class SqlitePendingWorkSource:
    """Selects documents attached to closed accounts that have no log entry yet.

    Any document already present in the issue log (moved or failed) is
    excluded, so re-running only picks up what is left.
    """

    def __init__(self, db_path: Path, account_levels: Sequence[int] = (998, 999),
                 file_extension: str = DEFAULT_FILE_EXTENSION):
        self.db_path = Path(db_path)
        self.account_levels = tuple(account_levels)
        self.file_extension = file_extension

    def fetch_pending(self) -> List[DocumentRecord]:
        placeholders = ", ".join("?" for _ in self.account_levels)
        query = f"""
            SELECT d.uid, d.location, d.created_date, m.number
            FROM master m
            INNER JOIN documentation_attachments da ON m.number = da.accountid
            INNER JOIN documentation d ON da.documentid = d.uid
            WHERE m.qlevel IN ({placeholders})
              AND d.location IS NOT NULL
              AND d.uid NOT IN (SELECT documentid FROM documentation_issues)
            ORDER BY m.number, d.uid
        """

        with connect(self.db_path) as conn:
            rows = conn.execute(query, self.account_levels).fetchall()

        records = [
            DocumentRecord.from_row(uid, location, created_on, number,
                                    extension=self.file_extension)
            for uid, location, created_on, number in rows
        ]
        logger.info("Found %d pending documents in %s", len(records), self.db_path)
        return records
