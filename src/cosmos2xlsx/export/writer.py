"""
Worksheet writer.

Writes one collection to its own XLSX workbook: a bold header row with the
column set, then one row per document, with columns sized to their content.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet
from tqdm import tqdm

from cosmos2xlsx.constants import (
    DEFAULT_SHEET_TITLE,
    MAX_CELL_LENGTH,
    MAX_COLUMN_WIDTH,
    SHEET_EXTENSION,
    SHEET_TITLE_INVALID_CHARS,
    SHEET_TITLE_MAX_LENGTH,
)
from cosmos2xlsx.exceptions import CollectionWriteError
from cosmos2xlsx.logging import collection_scope, get_logger
from .events import EventKind, ProgressEvent, ProgressObserver
from .normalizer import normalize_cell_value

HEADER_FONT = Font(bold=True)


class WriteStatus(Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"


@dataclass
class WriteResult:
    collection: str
    status: WriteStatus
    path: Optional[Path] = None
    row_count: int = 0
    column_count: int = 0
    truncated_cells: int = 0


def sheet_title_for(collection_name: str) -> str:
    """
    Build a valid worksheet title from a collection name.

    Excel rejects []:*?/\\ in sheet titles and limits them to 31 characters.
    """
    title = "".join(
        "_" if char in SHEET_TITLE_INVALID_CHARS else char for char in collection_name
    )
    title = title[:SHEET_TITLE_MAX_LENGTH].strip("'")
    return title or DEFAULT_SHEET_TITLE


def output_path_for(collection_name: str, output_dir: Union[str, Path]) -> Path:
    return Path(output_dir) / f"{collection_name}.{SHEET_EXTENSION}"


class SheetWriter:
    """Writes a collection's documents into an XLSX file"""

    def __init__(
        self,
        observer: Optional[ProgressObserver] = None,
        show_progress: bool = True,
        max_column_width: int = MAX_COLUMN_WIDTH,
    ):
        self.observer = observer or ProgressObserver()
        self.show_progress = show_progress
        self.max_column_width = max_column_width
        self.logger = get_logger("cosmos2xlsx.export.writer")

    def write(
        self,
        collection_name: str,
        documents: Sequence[Mapping[str, Any]],
        columns: Sequence[str],
        output_dir: Union[str, Path],
    ) -> WriteResult:
        """
        Write documents to <output_dir>/<collection_name>.xlsx.

        An empty collection is skipped and no file is created. An existing
        file with the same name is overwritten.

        Args:
            collection_name: Collection name, used for sheet and file name
            documents: Documents in the order they should appear
            columns: Ordered column set
            output_dir: Existing output directory

        Returns:
            WriteResult describing the outcome

        Raises:
            CollectionWriteError: If the workbook cannot be saved
        """
        if not documents:
            self.logger.info(f"Collection '{collection_name}' is empty, skipping")
            self.observer.on_progress(
                ProgressEvent(
                    EventKind.SKIPPED,
                    f"Container '{collection_name}' is empty. Skipping.",
                    collection=collection_name,
                )
            )
            return WriteResult(collection_name, WriteStatus.SKIPPED)

        self.observer.on_progress(
            ProgressEvent(
                EventKind.WRITING,
                f"Creating XLSX file for {len(documents)} items...",
                collection=collection_name,
                details={"rows": len(documents), "columns": len(columns)},
            )
        )

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = sheet_title_for(collection_name)

        widths = self._write_header(sheet, columns)
        rows = tqdm(
            documents,
            desc=f"Writing {collection_name}",
            unit="rows",
            colour="green",
            leave=False,
            disable=not self.show_progress,
        )
        truncated = 0
        for row_index, document in enumerate(rows, start=2):
            truncated += self._write_row(
                sheet, collection_name, row_index, document, columns, widths
            )

        self._autosize_columns(sheet, widths)

        path = output_path_for(collection_name, output_dir)
        try:
            workbook.save(path)
        except OSError as e:
            raise CollectionWriteError(
                collection_name, f"Failed to save {path}: {e}", e
            ) from e

        self.logger.info(f"Saved {len(documents)} rows of '{collection_name}' to {path}")
        message = f"Saved to: {path}"
        if truncated:
            message += f" ({truncated} cells truncated to {MAX_CELL_LENGTH} characters)"
        self.observer.on_progress(
            ProgressEvent(
                EventKind.SAVED,
                message,
                collection=collection_name,
                details={"rows": len(documents), "path": str(path), "truncated_cells": truncated},
            )
        )
        return WriteResult(
            collection_name,
            WriteStatus.WRITTEN,
            path=path,
            row_count=len(documents),
            column_count=len(columns),
            truncated_cells=truncated,
        )

    def _write_header(self, sheet: Worksheet, columns: Sequence[str]) -> List[int]:
        widths = []
        for col_index, name in enumerate(columns, start=1):
            cell = sheet.cell(row=1, column=col_index)
            text = _set_text(cell, name[:MAX_CELL_LENGTH])
            cell.font = HEADER_FONT
            widths.append(_text_width(text))
        return widths

    def _write_row(
        self,
        sheet: Worksheet,
        collection_name: str,
        row_index: int,
        document: Mapping[str, Any],
        columns: Sequence[str],
        widths: List[int],
    ) -> int:
        """Write one document, returning the number of cells that were truncated"""
        truncated = 0
        for col_index, name in enumerate(columns, start=1):
            if name not in document:
                continue
            text = ILLEGAL_CHARACTERS_RE.sub("", normalize_cell_value(document[name]))
            if text == "":
                continue
            if len(text) > MAX_CELL_LENGTH:
                self.logger.warning(
                    f"Value of '{name}' in row {row_index} of '{collection_name}' has "
                    f"{len(text)} characters, truncated to {MAX_CELL_LENGTH}",
                    extra=collection_scope(collection_name),
                )
                text = text[:MAX_CELL_LENGTH]
                truncated += 1
            _set_text(sheet.cell(row=row_index, column=col_index), text)
            widths[col_index - 1] = max(widths[col_index - 1], _text_width(text))
        return truncated

    def _autosize_columns(self, sheet: Worksheet, widths: List[int]) -> None:
        for col_index, width in enumerate(widths, start=1):
            letter = get_column_letter(col_index)
            sheet.column_dimensions[letter].width = min(width + 2, self.max_column_width)


def _set_text(cell, text: str) -> str:
    """Store text verbatim, never as a formula or error value"""
    text = ILLEGAL_CHARACTERS_RE.sub("", text)
    cell.value = text
    cell.data_type = "s"
    return text


def _text_width(text: str) -> int:
    return max((len(line) for line in text.splitlines()), default=0)
