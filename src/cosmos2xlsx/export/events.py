"""
Progress events for the export pipeline.

The orchestrator, reader and writer report progress through an observer
instead of printing, so callers decide how (and whether) it is shown.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from cosmos2xlsx.logging import log_export_event
from cosmos2xlsx.utils.console import error, info, success, warning


class EventKind(Enum):
    """Kinds of progress events"""
    COLLECTIONS_RESOLVED = "collections_resolved"
    STATE_CHANGED = "state_changed"
    PAGE_RETRIEVED = "page_retrieved"
    WRITING = "writing"
    SAVED = "saved"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ProgressEvent:
    kind: EventKind
    message: str
    collection: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


class ProgressObserver:
    """Receives progress events. The base implementation ignores them."""

    def on_progress(self, event: ProgressEvent) -> None:
        pass


class ConsoleProgressObserver(ProgressObserver):
    """Renders events on the console and records them in the log file"""

    _LOG_LEVELS = {
        EventKind.FAILED: "error",
        EventKind.SKIPPED: "warning",
        EventKind.STATE_CHANGED: "debug",
        EventKind.PAGE_RETRIEVED: "debug",
    }

    def on_progress(self, event: ProgressEvent) -> None:
        log_export_event(
            event.kind.value,
            event.message,
            collection=event.collection,
            level=self._LOG_LEVELS.get(event.kind, "info"),
            details=event.details,
        )

        if event.kind == EventKind.STATE_CHANGED:
            return
        if event.kind == EventKind.FAILED:
            error(event.message)
        elif event.kind == EventKind.SKIPPED:
            warning(event.message)
        elif event.kind == EventKind.SAVED:
            success(event.message)
        elif event.kind == EventKind.PAGE_RETRIEVED:
            info(f"  {event.message}")
        else:
            info(event.message)
