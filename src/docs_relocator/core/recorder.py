"""Relocation recorder: the only component that mutates persisted state."""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..exceptions import OutcomeLogError, PersistenceError
from ..models.document import RelocationOutcome, RelocationStatus
from .database import connect

logger = logging.getLogger(__name__)

NO_NEW_LOCATION = "no new location"


class SqliteRelocationRecorder:
    """Writes location updates and outcome log entries.

    The two mutations are independent; there is no transaction spanning
    both. Every call opens and closes its own connection.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)

    def update_location(self, record_key: Union[uuid.UUID, str], new_location: Path) -> None:
        """Point the document at ``new_location``. Re-applying is harmless.

        ``record_key`` is the uid as stored; a UUID is matched by its hex form.
        """
        if isinstance(record_key, uuid.UUID):
            record_key = record_key.hex
        with connect(self.db_path) as conn:
            cursor = conn.execute(
                "UPDATE documentation SET location = ? WHERE uid = ?",
                (str(new_location), record_key)
            )
            if cursor.rowcount == 0:
                raise PersistenceError(f"Document {record_key} not found")

    def log_outcome(self, outcome: RelocationOutcome) -> None:
        """Append an entry to the issue log.

        Raises:
            OutcomeLogError: when the entry could not be written.
        """
        new_location = outcome.attempted_new_location
        try:
            with connect(self.db_path) as conn:
                conn.execute(
                    """INSERT INTO documentation_issues
                       (documentid, old_location, new_location, error_message,
                        status, date_added, number)
                       VALUES (?, ?, ?, ?, ?, ?, ?)""",
                    (
                        outcome.db_key,
                        str(outcome.previous_location),
                        str(new_location) if new_location is not None else NO_NEW_LOCATION,
                        outcome.message,
                        outcome.status.value,
                        datetime.now().isoformat(),
                        outcome.file_number
                    )
                )
        except PersistenceError as e:
            raise OutcomeLogError(
                f"Failed to log outcome {outcome.status.value} for {outcome.record_id}: {e}"
            ) from e

    def list_outcomes(self, status: Optional[RelocationStatus] = None,
                      limit: int = 50) -> List[Dict]:
        """Return the newest issue log entries, optionally filtered by status."""
        query = """SELECT documentid, old_location, new_location, error_message,
                          status, date_added, number
                   FROM documentation_issues"""
        params = []
        if status is not None:
            query += " WHERE status = ?"
            params.append(status.value)
        query += " ORDER BY id DESC LIMIT ?"
        params.append(limit)

        with connect(self.db_path) as conn:
            rows = conn.execute(query, params).fetchall()

        return [
            {
                "document_id": row[0],
                "old_location": row[1],
                "new_location": row[2],
                "message": row[3],
                "status": row[4],
                "date_added": row[5],
                "number": row[6],
            }
            for row in rows
        ]
