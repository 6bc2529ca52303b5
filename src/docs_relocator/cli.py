"""Command line interface for the document relocator."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .core.database import initialize_database
from .core.pipeline import RelocationPipeline
from .core.recorder import SqliteRelocationRecorder
from .exceptions import ConfigurationError, DocRelocatorError
from .models.config import (
    RelocationConfig,
    create_default_config,
    load_config,
    parse_weekday,
)
from .models.document import RelocationStatus
from .reporting import ConsoleReporter

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_config(config_path: Optional[Path], root: Optional[Path], database: Optional[Path],
                  batch_size: Optional[int], workers: Optional[int],
                  cutoff_day: Optional[str], cutoff_hour: Optional[int]) -> RelocationConfig:
    """Load the config file (if any) and apply command line overrides."""
    if config_path:
        data = load_config(config_path).to_dict()
    else:
        data = {}

    overrides = {
        "root_directory": str(root) if root else None,
        "database_path": str(database) if database else None,
        "batch_size": batch_size,
        "max_workers": workers,
        "cutoff_weekday": parse_weekday(cutoff_day) if cutoff_day is not None else None,
        "cutoff_hour": cutoff_hour,
    }
    data.update({key: value for key, value in overrides.items() if value is not None})

    if "root_directory" not in data or "database_path" not in data:
        raise ConfigurationError(
            "A root directory and a database are required (use --config or --root/--database)"
        )
    return RelocationConfig.from_dict(data)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Relocate archived documents into the year/month share layout."""
    pass


@cli.command()
@click.option('--config', 'config_path', type=click.Path(exists=True, path_type=Path),
              help='Configuration file path')
@click.option('--root', type=click.Path(path_type=Path),
              help='Share root holding the year folders')
@click.option('--database', type=click.Path(path_type=Path),
              help='SQLite database with documents and the issue log')
@click.option('--batch-size', type=click.IntRange(min=1), help='Documents per batch')
@click.option('--workers', type=click.IntRange(min=1), help='Batches processed concurrently')
@click.option('--cutoff-day', help='Weekday after which no new batch starts (e.g. monday)')
@click.option('--cutoff-hour', type=click.IntRange(0, 23), help='Hour of the cutoff day')
@click.option('--verbose', is_flag=True, help='Verbose output')
def run(config_path: Optional[Path], root: Optional[Path], database: Optional[Path],
        batch_size: Optional[int], workers: Optional[int], cutoff_day: Optional[str],
        cutoff_hour: Optional[int], verbose: bool):
    """Move every pending document and log the outcome."""
    _setup_logging(verbose)

    try:
        cfg = _build_config(config_path, root, database, batch_size, workers,
                            cutoff_day, cutoff_hour)

        console.print("\n[bold cyan]Document Relocation Plan[/bold cyan]")
        console.print(f"Root: {cfg.root_directory}")
        console.print(f"Database: {cfg.database_path}")
        console.print(f"Batch size: {cfg.batch_size}, workers: {cfg.max_workers}")

        pipeline = RelocationPipeline(cfg, reporter=ConsoleReporter(console, verbose=verbose))
        summary = pipeline.run()

    except DocRelocatorError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[red]Unexpected error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)

    if summary.time_box_triggered:
        console.print("[yellow]Stopped at the configured cutoff; re-run to continue.[/yellow]")


@cli.command('init-config')
@click.argument('path', type=click.Path(path_type=Path))
@click.option('--force', is_flag=True, help='Overwrite an existing file')
def init_config(path: Path, force: bool):
    """Write a default configuration file to PATH."""
    if path.exists() and not force:
        console.print(f"[red]{path} already exists (use --force to overwrite)[/red]")
        sys.exit(1)
    create_default_config(path)
    console.print(f"[green]Wrote default configuration to {path}[/green]")


@cli.command('init-db')
@click.argument('database', type=click.Path(path_type=Path))
def init_db(database: Path):
    """Create the document and issue log tables in DATABASE."""
    try:
        initialize_database(database)
    except DocRelocatorError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    console.print(f"[green]Initialized {database}[/green]")


@cli.command()
@click.argument('database', type=click.Path(exists=True, path_type=Path))
@click.option('--status', type=click.Choice([s.value for s in RelocationStatus],
                                            case_sensitive=False),
              help='Only show entries with this status')
@click.option('--limit', type=click.IntRange(min=1), default=20, show_default=True,
              help='Number of entries to show')
def issues(database: Path, status: Optional[str], limit: int):
    """Show the newest entries of the issue log in DATABASE."""
    recorder = SqliteRelocationRecorder(database)
    try:
        entries = recorder.list_outcomes(
            RelocationStatus(status.upper()) if status else None, limit=limit
        )
    except DocRelocatorError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if not entries:
        console.print("[yellow]No issue log entries found[/yellow]")
        return

    table = Table(title="Issue Log")
    table.add_column("Added", style="dim")
    table.add_column("Document", style="cyan")
    table.add_column("Status")
    table.add_column("Old location")
    table.add_column("New location")
    table.add_column("Message")

    for entry in entries:
        entry_status = RelocationStatus(entry["status"])
        if entry_status.requires_reconciliation:
            status_text = f"[bold red]{entry_status.value}[/bold red]"
        elif entry_status.is_failure:
            status_text = f"[red]{entry_status.value}[/red]"
        else:
            status_text = f"[green]{entry_status.value}[/green]"
        table.add_row(entry["date_added"], entry["document_id"], status_text,
                      entry["old_location"], entry["new_location"], entry["message"])

    console.print(table)


def main():
    cli()


if __name__ == '__main__':
    main()
