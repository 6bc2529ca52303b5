"""Relocation pipeline: fetch pending work, schedule it, report."""

import logging
from datetime import datetime
from typing import Callable, Optional

from ..models.config import RelocationConfig
from ..models.run import RunCounters, RunSummary
from ..reporting import LoggingReporter, RelocationReporter
from .filesystem import FilesystemGateway
from .pending_work import SqlitePendingWorkSource
from .processor import DocumentProcessor
from .recorder import SqliteRelocationRecorder
from .scheduler import BatchScheduler, TimeBoxGuard

logger = logging.getLogger(__name__)


class RelocationPipeline:
    """Wires the work source, scheduler and per-document processing together."""

    def __init__(self,
                 config: RelocationConfig,
                 work_source: Optional[SqlitePendingWorkSource] = None,
                 reporter: Optional[RelocationReporter] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.config = config
        self.work_source = work_source or SqlitePendingWorkSource(
            config.database_path,
            account_levels=config.account_levels,
            file_extension=config.file_extension,
        )
        self.reporter = reporter or LoggingReporter()
        self.time_box = TimeBoxGuard(config.cutoff_weekday, config.cutoff_hour, clock)

    def create_processor(self, counters: RunCounters) -> DocumentProcessor:
        """Build a processor with its own filesystem and database handles."""
        return DocumentProcessor(
            root_dir=self.config.root_directory,
            filesystem=FilesystemGateway(),
            recorder=SqliteRelocationRecorder(self.config.database_path),
            counters=counters,
            reporter=self.reporter,
            year_prefix=self.config.year_folder_prefix,
        )

    def run(self) -> RunSummary:
        """Relocate everything currently pending.

        Errors while fetching the backlog or writing the issue log abort
        the run; everything else is recorded per document.
        """
        records = self.work_source.fetch_pending()
        if not records:
            self.reporter.no_pending_records()
            summary = RunSummary()
            self.reporter.run_finished(summary)
            return summary

        scheduler = BatchScheduler(
            self.create_processor,
            batch_size=self.config.batch_size,
            max_workers=self.config.max_workers,
            time_box=self.time_box,
            reporter=self.reporter,
        )
        summary = scheduler.run(records)

        logger.info(
            "Processed %d of %d documents (%d succeeded, %d failed, %d batches skipped)",
            summary.processed, summary.total_records, summary.succeeded,
            summary.failed, summary.batches_skipped
        )
        self.reporter.run_finished(summary)
        return summary
