"""Progress and summary reporting for relocation runs."""

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .models.document import DocumentRecord, RelocationOutcome
from .models.run import RunSummary

logger = logging.getLogger(__name__)


class RelocationReporter:
    """Receives progress events from a run. All hooks are no-ops.

    Hooks are called from worker threads and must be thread-safe.
    """

    def run_started(self, total_records: int, batches: int) -> None:
        pass

    def no_pending_records(self) -> None:
        pass

    def batch_started(self, batch_index: int, size: int) -> None:
        pass

    def record_started(self, record: DocumentRecord) -> None:
        pass

    def directory_created(self, record: DocumentRecord, directory: Path) -> None:
        pass

    def outcome_recorded(self, outcome: RelocationOutcome) -> None:
        pass

    def time_box_reached(self, batch_index: int, summary: RunSummary, at: datetime) -> None:
        pass

    def run_finished(self, summary: RunSummary) -> None:
        pass


class LoggingReporter(RelocationReporter):
    """Writes progress events through the ``logging`` module."""

    def run_started(self, total_records: int, batches: int) -> None:
        logger.info("Processing %d documents in %d batches", total_records, batches)

    def no_pending_records(self) -> None:
        logger.info("No more files were found with the current query")

    def batch_started(self, batch_index: int, size: int) -> None:
        logger.info("Batch %d: processing %d documents", batch_index, size)

    def record_started(self, record: DocumentRecord) -> None:
        logger.debug("Working on document %s (#%d)", record.id, record.file_number)

    def directory_created(self, record: DocumentRecord, directory: Path) -> None:
        logger.info("Month folder did not exist, created %s", directory)

    def outcome_recorded(self, outcome: RelocationOutcome) -> None:
        if outcome.status.requires_reconciliation:
            logger.error("Document %s needs reconciliation: %s", outcome.record_id, outcome.message)
        elif outcome.status.is_failure:
            logger.warning("Document %s: %s (%s)", outcome.record_id,
                           outcome.status.value, outcome.message)
        else:
            logger.info("Moved document %s to %s", outcome.record_id,
                        outcome.attempted_new_location)

    def time_box_reached(self, batch_index: int, summary: RunSummary, at: datetime) -> None:
        logger.warning(
            "Cutoff reached at %s, skipping batch %d (%d succeeded, %d failed so far)",
            at.isoformat(timespec="seconds"), batch_index, summary.succeeded, summary.failed
        )

    def run_finished(self, summary: RunSummary) -> None:
        logger.info("Run finished: %d succeeded, %d failed", summary.succeeded, summary.failed)


class ConsoleReporter(RelocationReporter):
    """Renders progress and the final summary with Rich."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose
        self._lock = threading.Lock()
        self._processed = 0

    def run_started(self, total_records: int, batches: int) -> None:
        self.console.print(
            f"[bold cyan]Relocating {total_records} documents[/bold cyan] "
            f"in {batches} batches"
        )

    def no_pending_records(self) -> None:
        self.console.print("[yellow]No more files were found with the current query[/yellow]")

    def batch_started(self, batch_index: int, size: int) -> None:
        if self.verbose:
            self.console.print(f"[dim]Batch {batch_index}: {size} documents[/dim]")

    def record_started(self, record: DocumentRecord) -> None:
        if self.verbose:
            self.console.print(f"[dim]Working on document {record.id}[/dim]")

    def directory_created(self, record: DocumentRecord, directory: Path) -> None:
        self.console.print(f"[blue]Created month folder {directory}[/blue]")

    def outcome_recorded(self, outcome: RelocationOutcome) -> None:
        with self._lock:
            self._processed += 1
            count = self._processed

        if outcome.status.requires_reconciliation:
            self.console.print(
                f"[bold red]#{count} {outcome.record_id}: NEEDS RECONCILIATION[/bold red] "
                f"{outcome.message}"
            )
        elif outcome.status.is_failure:
            self.console.print(
                f"[red]#{count} {outcome.record_id}: {outcome.status.value}[/red] {outcome.message}"
            )
        elif self.verbose:
            self.console.print(
                f"[green]#{count} {outcome.record_id} -> {outcome.attempted_new_location}[/green]"
            )

    def time_box_reached(self, batch_index: int, summary: RunSummary, at: datetime) -> None:
        self.console.print(
            f"[yellow]The time set for this process to end has been reached. "
            f"Skipped batch {batch_index} at {at:%Y-%m-%d %H:%M:%S} "
            f"({summary.succeeded} succeeded, {summary.failed} failed so far)[/yellow]"
        )

    def run_finished(self, summary: RunSummary) -> None:
        table = Table(title="Relocation Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Pending documents", str(summary.total_records))
        table.add_row("Batches", str(summary.batches))
        table.add_row("Succeeded", f"[green]{summary.succeeded}[/green]")
        table.add_row("Failed", f"[red]{summary.failed}[/red]" if summary.failed else "0")
        if summary.batches_skipped:
            table.add_row("Batches skipped (cutoff)", f"[yellow]{summary.batches_skipped}[/yellow]")

        self.console.print(table)
