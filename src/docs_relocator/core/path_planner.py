"""Destination planning for the year/month share layout."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

DEFAULT_YEAR_PREFIX = "DOCS"

# Fixed table so folder names never depend on the runtime locale.
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class DestinationPlan:
    """Where a document created at a given time belongs under the root."""
    root_dir: Path
    year_folder: str
    month_folder: str

    @property
    def year_dir(self) -> Path:
        return self.root_dir / self.year_folder

    @property
    def destination_dir(self) -> Path:
        return self.year_dir / self.month_folder

    def destination_path(self, file_name: str) -> Path:
        return self.destination_dir / file_name


def plan_destination(root_dir: Path, created_on: datetime,
                     prefix: str = DEFAULT_YEAR_PREFIX) -> DestinationPlan:
    """Compute the destination folders for a document.

    Uses the timestamp's own year and month fields, without converting
    it to UTC first.
    """
    return DestinationPlan(
        root_dir=Path(root_dir),
        year_folder=f"{prefix}{created_on.year:04d}",
        month_folder=MONTH_ABBREVIATIONS[created_on.month - 1],
    )
