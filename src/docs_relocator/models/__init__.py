"""Data models for the document relocator."""

from .document import DocumentRecord, RelocationOutcome, RelocationStatus
from .config import RelocationConfig, load_config, save_config
from .run import RunCounters, RunSummary

__all__ = [
    "DocumentRecord",
    "RelocationOutcome",
    "RelocationStatus",
    "RelocationConfig",
    "load_config",
    "save_config",
    "RunCounters",
    "RunSummary",
]
