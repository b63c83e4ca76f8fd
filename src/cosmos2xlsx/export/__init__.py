"""
Export pipeline package.

Provides the pieces of a collection export: value normalization, schema
unification, paginated reading, worksheet writing and orchestration.
"""

from .events import ConsoleProgressObserver, EventKind, ProgressEvent, ProgressObserver
from .normalizer import ValueKind, classify_value, normalize_cell_value
from .schema import parse_column_list, unify_columns
from .reader import CollectionReader
from .writer import SheetWriter, WriteResult, WriteStatus
from .orchestrator import (
    CollectionOutcome,
    ExportOrchestrator,
    ExportReport,
    ExportState,
    OutcomeStatus,
)

__all__ = [
    "ConsoleProgressObserver",
    "EventKind",
    "ProgressEvent",
    "ProgressObserver",
    "ValueKind",
    "classify_value",
    "normalize_cell_value",
    "parse_column_list",
    "unify_columns",
    "CollectionReader",
    "SheetWriter",
    "WriteResult",
    "WriteStatus",
    "CollectionOutcome",
    "ExportOrchestrator",
    "ExportReport",
    "ExportState",
    "OutcomeStatus",
]
