"""Run-scoped counters and the summary they produce."""

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class RunSummary:
    """Counts reported at the end of a run (or when the cutoff is hit)."""
    succeeded: int = 0
    failed: int = 0
    total_records: int = 0
    batches: int = 0
    batches_skipped: int = 0

    @property
    def processed(self) -> int:
        return self.succeeded + self.failed

    @property
    def time_box_triggered(self) -> bool:
        return self.batches_skipped > 0


class RunCounters:
    """Success/failure counters shared by all batch workers of one run."""

    def __init__(self):
        self._lock = threading.Lock()
        self._succeeded = 0
        self._failed = 0
        self._batches_skipped = 0

    def record_success(self) -> None:
        with self._lock:
            self._succeeded += 1

    def record_failure(self) -> None:
        with self._lock:
            self._failed += 1

    def record_skipped_batch(self) -> None:
        with self._lock:
            self._batches_skipped += 1

    @property
    def succeeded(self) -> int:
        with self._lock:
            return self._succeeded

    @property
    def failed(self) -> int:
        with self._lock:
            return self._failed

    def snapshot(self, total_records: int = 0, batches: int = 0) -> RunSummary:
        with self._lock:
            return RunSummary(
                succeeded=self._succeeded,
                failed=self._failed,
                total_records=total_records,
                batches=batches,
                batches_skipped=self._batches_skipped,
            )
