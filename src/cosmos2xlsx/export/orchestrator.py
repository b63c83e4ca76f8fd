"""
Export orchestrator.

Drives reader, schema unification and writer for each requested
collection, one at a time. A failing collection is recorded and the run
moves on to the next one.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Union

from cosmos2xlsx.constants import EXIT_OK, EXIT_PARTIAL_FAILURE
from cosmos2xlsx.exceptions import CollectionError
from cosmos2xlsx.logging import collection_scope, get_logger
from cosmos2xlsx.source.base import DocumentSource
from .events import EventKind, ProgressEvent, ProgressObserver
from .reader import CollectionReader
from .schema import unify_columns
from .writer import SheetWriter, WriteStatus


class ExportState(Enum):
    """Lifecycle of one collection export"""
    PENDING = "pending"
    READING = "reading"
    UNIFYING = "unifying"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


class OutcomeStatus(Enum):
    EXPORTED = "exported"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class CollectionOutcome:
    """Terminal result of exporting one collection"""

    name: str
    state: ExportState = ExportState.PENDING
    status: Optional[OutcomeStatus] = None
    path: Optional[Path] = None
    document_count: int = 0
    columns: List[str] = field(default_factory=list)
    truncated_cells: int = 0
    error: Optional[str] = None


@dataclass
class ExportReport:
    """Outcomes of a run, in the order collections were requested"""

    outcomes: List[CollectionOutcome] = field(default_factory=list)

    def _with_status(self, status: OutcomeStatus) -> List[CollectionOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status == status]

    @property
    def exported(self) -> List[CollectionOutcome]:
        return self._with_status(OutcomeStatus.EXPORTED)

    @property
    def skipped(self) -> List[CollectionOutcome]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> List[CollectionOutcome]:
        return self._with_status(OutcomeStatus.FAILED)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    @property
    def exit_code(self) -> int:
        return EXIT_PARTIAL_FAILURE if self.has_failures else EXIT_OK


class ExportOrchestrator:
    """Exports collections of a DocumentSource into XLSX files"""

    def __init__(
        self,
        source: DocumentSource,
        reader: Optional[CollectionReader] = None,
        writer: Optional[SheetWriter] = None,
        observer: Optional[ProgressObserver] = None,
    ):
        self.source = source
        self.observer = observer or ProgressObserver()
        self.reader = reader or CollectionReader(source, self.observer)
        self.writer = writer or SheetWriter(self.observer)
        self.logger = get_logger("cosmos2xlsx.export.orchestrator")

    def resolve_collections(self, collections: Optional[Sequence[str]] = None) -> List[str]:
        """
        Explicit names are used verbatim, without checking they exist.
        Otherwise every collection of the source is exported.

        Errors from the source propagate: without a collection list
        there is nothing to export.
        """
        if collections:
            names = list(collections)
            message = f"Exporting specified containers: {', '.join(names)}"
        else:
            self.logger.info("Listing all collections of the source")
            names = self.source.list_collections()
            message = f"Found {len(names)} containers to export"

        self.observer.on_progress(
            ProgressEvent(
                EventKind.COLLECTIONS_RESOLVED, message, details={"count": len(names)}
            )
        )
        return names

    def run(
        self,
        output_dir: Union[str, Path],
        collections: Optional[Sequence[str]] = None,
        columns: Optional[Sequence[str]] = None,
    ) -> ExportReport:
        """
        Export each collection and collect the outcomes.

        Args:
            output_dir: Existing directory the workbooks are written to
            collections: Collection names, None or empty for all
            columns: Column override, None or empty to derive per collection

        Returns:
            ExportReport with one outcome per collection, in request order
        """
        report = ExportReport()
        names = self.resolve_collections(collections)
        self.logger.info(f"Starting export of {len(names)} collection(s) to {output_dir}")

        for name in names:
            outcome = self.export_collection(name, output_dir, columns)
            report.outcomes.append(outcome)

        self.logger.info(
            f"Export finished: {len(report.exported)} exported, "
            f"{len(report.skipped)} skipped, {len(report.failed)} failed"
        )
        return report

    def export_collection(
        self,
        name: str,
        output_dir: Union[str, Path],
        columns: Optional[Sequence[str]] = None,
    ) -> CollectionOutcome:
        """Export one collection, never raising for collection-scoped errors"""
        outcome = CollectionOutcome(name=name)
        try:
            self._transition(outcome, ExportState.READING)
            documents = self.reader.read(name)
            outcome.document_count = len(documents)

            self._transition(outcome, ExportState.UNIFYING)
            outcome.columns = unify_columns(documents, columns)

            self._transition(outcome, ExportState.WRITING)
            result = self.writer.write(name, documents, outcome.columns, output_dir)
        except CollectionError as e:
            self._fail(outcome, e.message)
            return outcome
        except Exception as e:
            self._fail(outcome, str(e) or e.__class__.__name__)
            return outcome

        outcome.path = result.path
        outcome.truncated_cells = result.truncated_cells
        outcome.status = (
            OutcomeStatus.EXPORTED
            if result.status == WriteStatus.WRITTEN
            else OutcomeStatus.SKIPPED
        )
        self._transition(outcome, ExportState.DONE)
        return outcome

    def _transition(self, outcome: CollectionOutcome, state: ExportState) -> None:
        previous = outcome.state
        outcome.state = state
        self.observer.on_progress(
            ProgressEvent(
                EventKind.STATE_CHANGED,
                f"{previous.value} -> {state.value}",
                collection=outcome.name,
                details={"from": previous.value, "to": state.value},
            )
        )

    def _fail(self, outcome: CollectionOutcome, message: str) -> None:
        stage = outcome.state.value
        outcome.error = message
        outcome.status = OutcomeStatus.FAILED
        self.logger.error(
            f"Export of '{outcome.name}' failed while {stage}: {message}",
            extra=collection_scope(outcome.name),
        )
        self._transition(outcome, ExportState.FAILED)
        self.observer.on_progress(
            ProgressEvent(
                EventKind.FAILED,
                f"Error exporting container '{outcome.name}': {message}",
                collection=outcome.name,
                details={"stage": stage},
            )
        )
