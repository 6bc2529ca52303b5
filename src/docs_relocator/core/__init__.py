"""Core relocation components."""

from .filesystem import FilesystemGateway
from .path_planner import DestinationPlan, plan_destination
from .pending_work import SqlitePendingWorkSource
from .recorder import SqliteRelocationRecorder
from .processor import DocumentProcessor
from .scheduler import BatchScheduler, TimeBoxGuard, partition
from .pipeline import RelocationPipeline

__all__ = [
    "FilesystemGateway",
    "DestinationPlan",
    "plan_destination",
    "SqlitePendingWorkSource",
    "SqliteRelocationRecorder",
    "DocumentProcessor",
    "BatchScheduler",
    "TimeBoxGuard",
    "partition",
    "RelocationPipeline",
]
