"""Document Relocator

Moves database-referenced documents into a year/month folder layout on a
shared drive, logging every outcome so the job can be re-run until the
backlog is empty.
"""

__version__ = "0.1.0"

from .core.pipeline import RelocationPipeline
from .core.processor import DocumentProcessor
from .core.scheduler import BatchScheduler, TimeBoxGuard
from .models.config import RelocationConfig, load_config
from .models.document import DocumentRecord, RelocationOutcome, RelocationStatus
from .models.run import RunSummary

__all__ = [
    "RelocationPipeline",
    "DocumentProcessor",
    "BatchScheduler",
    "TimeBoxGuard",
    "RelocationConfig",
    "load_config",
    "DocumentRecord",
    "RelocationOutcome",
    "RelocationStatus",
    "RunSummary",
]
