"""Document records and relocation outcomes."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

DEFAULT_FILE_EXTENSION = ".zip"


class RelocationStatus(Enum):
    """Terminal result of one processing attempt."""
    SUCCESS = "SUCCESS"
    FILE_MISSING = "FILE_MISSING"
    ROOT_FOLDER_MISSING = "ROOT_FOLDER_MISSING"
    FILESYSTEM_ERROR = "FILESYSTEM_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    LOCATION_UPDATED_MOVE_FAILED = "LOCATION_UPDATED_MOVE_FAILED"

    @property
    def is_failure(self) -> bool:
        return self is not RelocationStatus.SUCCESS

    @property
    def requires_reconciliation(self) -> bool:
        """True when the database and the filesystem disagree."""
        return self is RelocationStatus.LOCATION_UPDATED_MOVE_FAILED


@dataclass(slots=True, frozen=True)
class DocumentRecord:
    """A persisted reference pairing a document id with its file location.

    Only the essential fields are stored; the file name and source path
    are derived on every access. ``key`` holds the uid exactly as the
    database stores it, when that differs from the lowercase hex form.
    """
    id: uuid.UUID
    location: Path
    created_on: datetime
    file_number: int
    extension: str = DEFAULT_FILE_EXTENSION
    key: Optional[str] = None

    @property
    def db_key(self) -> str:
        """Value that identifies the document in database writes."""
        return self.key if self.key is not None else self.id.hex

    @property
    def file_name(self) -> str:
        return self.id.hex + self.extension

    @property
    def source_path(self) -> Path:
        return self.location / self.file_name

    @classmethod
    def from_row(cls, uid: Union[str, uuid.UUID], location: str,
                 created_on: Union[str, datetime], file_number: int,
                 extension: str = DEFAULT_FILE_EXTENSION) -> "DocumentRecord":
        """Build a record from a database row.

        The raw uid is kept as the record's key so that updates and log
        entries match the stored row whatever its formatting.
        """
        key = None
        if not isinstance(uid, uuid.UUID):
            key = str(uid)
            uid = uuid.UUID(key)
        if not isinstance(created_on, datetime):
            created_on = datetime.fromisoformat(created_on)
        return cls(
            id=uid,
            location=Path(location),
            created_on=created_on,
            file_number=int(file_number),
            extension=extension,
            key=key,
        )


@dataclass(slots=True, frozen=True)
class RelocationOutcome:
    """Outcome logged for one record's processing attempt."""
    record_id: uuid.UUID
    previous_location: Path
    attempted_new_location: Optional[Path]
    status: RelocationStatus
    message: str
    file_number: int
    record_key: Optional[str] = None

    @property
    def db_key(self) -> str:
        return self.record_key if self.record_key is not None else self.record_id.hex

    @classmethod
    def for_record(cls, record: DocumentRecord, status: RelocationStatus,
                   message: str, attempted_new_location: Optional[Path] = None) -> "RelocationOutcome":
        return cls(
            record_id=record.id,
            previous_location=record.location,
            attempted_new_location=attempted_new_location,
            status=status,
            message=message,
            file_number=record.file_number,
            record_key=record.db_key,
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "record_id": str(self.record_id),
            "previous_location": str(self.previous_location),
            "attempted_new_location": (
                str(self.attempted_new_location) if self.attempted_new_location else None
            ),
            "status": self.status.value,
            "message": self.message,
            "file_number": self.file_number,
        }
