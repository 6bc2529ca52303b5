"""Per-document relocation workflow.

A document passes through a fixed sequence of gates:

1. the source file must exist
2. the destination is planned from its creation date
3. the year folder under the root must already exist (never created here)
4. the month folder is created if missing
5. the database location is updated
6. the file is moved
7. success is logged

Any gate may stop processing. Whatever happens, exactly one outcome is
written to the issue log and exactly one counter is incremented. A move
that fails after the location update is logged as
LOCATION_UPDATED_MOVE_FAILED and needs manual reconciliation.
"""

import logging
from pathlib import Path
from typing import Optional

from ..exceptions import FilesystemError, InconsistentRelocationError, PersistenceError
from ..models.document import DocumentRecord, RelocationOutcome, RelocationStatus
from ..models.run import RunCounters
from ..reporting import RelocationReporter
from .filesystem import FilesystemGateway
from .path_planner import DEFAULT_YEAR_PREFIX, DestinationPlan, plan_destination
from .recorder import SqliteRelocationRecorder

logger = logging.getLogger(__name__)

FILE_MISSING_MESSAGE = "This file does not exist"
ROOT_FOLDER_MISSING_MESSAGE = "Could not create root folder, log to skip this file"
SUCCESS_MESSAGE = "SUCCESS"


class DocumentProcessor:
    """Moves one document at a time and records what happened."""

    def __init__(self,
                 root_dir: Path,
                 filesystem: FilesystemGateway,
                 recorder: SqliteRelocationRecorder,
                 counters: RunCounters,
                 reporter: Optional[RelocationReporter] = None,
                 year_prefix: str = DEFAULT_YEAR_PREFIX):
        self.root_dir = Path(root_dir)
        self.filesystem = filesystem
        self.recorder = recorder
        self.counters = counters
        self.reporter = reporter or RelocationReporter()
        self.year_prefix = year_prefix

    def process(self, record: DocumentRecord) -> RelocationOutcome:
        """Run a document through every gate and log the outcome.

        Raises:
            OutcomeLogError: if the outcome could not be logged. Every
                other failure is contained and returned as an outcome.
        """
        self.reporter.record_started(record)

        outcome = self._relocate(record)
        self.recorder.log_outcome(outcome)

        if outcome.status.is_failure:
            self.counters.record_failure()
        else:
            self.counters.record_success()

        self.reporter.outcome_recorded(outcome)
        return outcome

    def _relocate(self, record: DocumentRecord) -> RelocationOutcome:
        try:
            source_exists = self.filesystem.exists(record.source_path)
        except FilesystemError as e:
            return RelocationOutcome.for_record(record, RelocationStatus.FILESYSTEM_ERROR, str(e))

        if not source_exists:
            return RelocationOutcome.for_record(
                record, RelocationStatus.FILE_MISSING, FILE_MISSING_MESSAGE
            )

        plan = plan_destination(self.root_dir, record.created_on, self.year_prefix)
        destination_dir = plan.destination_dir

        try:
            year_exists = self.filesystem.exists(plan.year_dir)
        except FilesystemError as e:
            return RelocationOutcome.for_record(
                record, RelocationStatus.FILESYSTEM_ERROR, str(e), destination_dir
            )

        if not year_exists:
            logger.warning("Root folder %s is missing, skipping %s", plan.year_dir, record.id)
            return RelocationOutcome.for_record(
                record, RelocationStatus.ROOT_FOLDER_MISSING,
                ROOT_FOLDER_MISSING_MESSAGE, destination_dir
            )

        try:
            if self.filesystem.ensure_directory(destination_dir):
                self.reporter.directory_created(record, destination_dir)
        except FilesystemError as e:
            return RelocationOutcome.for_record(
                record, RelocationStatus.FILESYSTEM_ERROR, str(e), destination_dir
            )

        try:
            self.recorder.update_location(record.db_key, destination_dir)
        except PersistenceError as e:
            return RelocationOutcome.for_record(
                record, RelocationStatus.PERSISTENCE_ERROR,
                f"Failed to update location: {e}", destination_dir
            )

        try:
            self._move(record, plan)
        except InconsistentRelocationError as e:
            logger.error("%s", e)
            return RelocationOutcome.for_record(
                record, RelocationStatus.LOCATION_UPDATED_MOVE_FAILED, str(e), destination_dir
            )

        return RelocationOutcome.for_record(
            record, RelocationStatus.SUCCESS, SUCCESS_MESSAGE, destination_dir
        )

    def _move(self, record: DocumentRecord, plan: DestinationPlan) -> None:
        try:
            self.filesystem.move(record.source_path, plan.destination_path(record.file_name))
        except FilesystemError as e:
            raise InconsistentRelocationError(record.id, plan.destination_dir, e) from e
