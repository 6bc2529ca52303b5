"""Batch partitioning and bounded concurrent execution."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from ..exceptions import ConfigurationError
from ..models.document import DocumentRecord
from ..models.run import RunCounters, RunSummary
from ..reporting import RelocationReporter
from .processor import DocumentProcessor

logger = logging.getLogger(__name__)

ProcessorFactory = Callable[[RunCounters], DocumentProcessor]


def partition(records: Sequence[DocumentRecord], batch_size: int) -> List[List[DocumentRecord]]:
    """Split records into contiguous batches of ``batch_size``.

    Order is preserved and only the last batch may be shorter.
    """
    if batch_size < 1:
        raise ConfigurationError(f"Batch size must be at least 1, got {batch_size}")
    return [list(records[i:i + batch_size]) for i in range(0, len(records), batch_size)]


class TimeBoxGuard:
    """Answers whether the weekly cutoff (weekday + hour) has been reached."""

    def __init__(self, cutoff_weekday: int = 0, cutoff_hour: int = 20,
                 clock: Optional[Callable[[], datetime]] = None):
        if not 0 <= cutoff_weekday <= 6:
            raise ConfigurationError(f"Cutoff weekday must be 0-6, got {cutoff_weekday}")
        if not 0 <= cutoff_hour <= 23:
            raise ConfigurationError(f"Cutoff hour must be 0-23, got {cutoff_hour}")
        self.cutoff_weekday = cutoff_weekday
        self.cutoff_hour = cutoff_hour
        self.clock = clock or datetime.now

    def now(self) -> datetime:
        return self.clock()

    def is_past_cutoff(self, now: Optional[datetime] = None) -> bool:
        now = now or self.clock()
        return now.weekday() == self.cutoff_weekday and now.hour >= self.cutoff_hour


class BatchScheduler:
    """Runs batches on a fixed-size thread pool, one unit of work per batch.

    Each unit checks the time box before starting; once past the cutoff it
    skips its whole batch. A unit that already started runs to completion.
    """

    def __init__(self,
                 processor_factory: ProcessorFactory,
                 batch_size: int = 50,
                 max_workers: int = 4,
                 time_box: Optional[TimeBoxGuard] = None,
                 reporter: Optional[RelocationReporter] = None):
        if max_workers < 1:
            raise ConfigurationError(f"Worker count must be at least 1, got {max_workers}")
        if batch_size < 1:
            raise ConfigurationError(f"Batch size must be at least 1, got {batch_size}")
        self.processor_factory = processor_factory
        self.batch_size = batch_size
        self.max_workers = max_workers
        self.time_box = time_box or TimeBoxGuard()
        self.reporter = reporter or RelocationReporter()

    def run(self, records: Sequence[DocumentRecord]) -> RunSummary:
        """Process every batch and wait for all of them.

        Raises:
            The first run-fatal error raised by any unit, after every
            unit has stopped.
        """
        batches = partition(records, self.batch_size)
        counters = RunCounters()
        abort = threading.Event()

        if not batches:
            return counters.snapshot(total_records=0, batches=0)

        self.reporter.run_started(len(records), len(batches))

        total = len(records)
        errors: List[BaseException] = []
        with ThreadPoolExecutor(max_workers=self.max_workers,
                                thread_name_prefix="relocate") as executor:
            futures = {
                executor.submit(
                    self._run_batch, index, batch, counters, abort, total, len(batches)
                ): index
                for index, batch in enumerate(batches, 1)
            }
            for future in as_completed(futures):
                error = future.exception()
                if error is not None:
                    logger.error("Batch %d aborted the run: %s", futures[future], error)
                    abort.set()
                    errors.append(error)

        if errors:
            raise errors[0]

        return counters.snapshot(total_records=total, batches=len(batches))

    def _run_batch(self, index: int, batch: List[DocumentRecord], counters: RunCounters,
                   abort: threading.Event, total_records: int, total_batches: int) -> None:
        if abort.is_set():
            return

        now = self.time_box.now()
        if self.time_box.is_past_cutoff(now):
            counters.record_skipped_batch()
            self.reporter.time_box_reached(
                index, counters.snapshot(total_records, total_batches), now
            )
            return

        self.reporter.batch_started(index, len(batch))
        processor = self.processor_factory(counters)
        for record in batch:
            if abort.is_set():
                logger.warning("Batch %d stopping early, run aborted", index)
                return
            processor.process(record)
