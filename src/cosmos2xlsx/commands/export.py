"""
Export command.

Exports Cosmos DB containers to XLSX files, one workbook per container.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from keyring.errors import KeyringError

from cosmos2xlsx.constants import (
    DEFAULT_PAGE_SIZE,
    ENV_CONNECTION_STRING,
    ENV_DATABASE,
    EXIT_FATAL,
)
from cosmos2xlsx.exceptions import SourceConnectionError
from cosmos2xlsx.export import (
    ConsoleProgressObserver,
    ExportOrchestrator,
    ExportReport,
    SheetWriter,
    parse_column_list,
)
from cosmos2xlsx.logging import get_logger
from cosmos2xlsx.logging.utils import sanitize_string
from cosmos2xlsx.source import CosmosDocumentSource
from cosmos2xlsx.utils.config_store import ConfigStore
from cosmos2xlsx.utils.console import (
    console,
    create_table,
    error,
    info,
    status_text,
    success,
    warning,
)


@dataclass
class ExportSettings:
    """Resolved inputs of an export run"""

    connection_string: str
    database: str
    output_dir: Path
    page_size: int = DEFAULT_PAGE_SIZE
    containers: Optional[List[str]] = None
    columns: Optional[List[str]] = None


def resolve_export_settings(
    config_store: ConfigStore,
    connection_string: Optional[str],
    database: Optional[str],
    output_dir: Optional[str],
    page_size: Optional[int],
    containers: Optional[List[str]],
    columns: Optional[List[str]],
) -> ExportSettings:
    """
    Resolve export inputs with priority: argument/env > stored settings > default.

    Raises:
        ValueError: If no connection string or database can be determined
    """
    settings: Dict[str, Any] = config_store.get_settings()

    if not connection_string:
        try:
            connection_string = config_store.get_connection_string()
        except KeyringError:
            connection_string = None
    if not connection_string:
        raise ValueError(
            "No connection string. Use --connection-string, set "
            f"{ENV_CONNECTION_STRING} or run 'cosmos2xlsx config set-connection'."
        )

    database = database or settings.get("database")
    if not database:
        raise ValueError(
            f"No database name. Use --database, set {ENV_DATABASE} "
            "or run 'cosmos2xlsx config set database <name>'."
        )

    output = output_dir or settings.get("output_dir") or str(Path.cwd())
    resolved_page_size = int(page_size or settings.get("page_size") or DEFAULT_PAGE_SIZE)
    if resolved_page_size <= 0:
        raise ValueError("Page size must be a positive integer")

    return ExportSettings(
        connection_string=connection_string,
        database=database,
        output_dir=Path(output),
        page_size=resolved_page_size,
        containers=parse_column_list(containers) or None,
        columns=parse_column_list(columns) or None,
    )


def display_report(report: ExportReport) -> None:
    """Print a summary table of all collection outcomes"""
    caption = (
        f"{len(report.exported)} exported, {len(report.skipped)} skipped, "
        f"{len(report.failed)} failed"
    )
    table = create_table(
        "Export Summary", ["Container", "Status", "Rows", "Columns", "Output"], caption=caption
    )
    for outcome in report.outcomes:
        status = outcome.status.value if outcome.status else outcome.state.value
        output = str(outcome.path) if outcome.path else (outcome.error or "-")
        table.add_row(
            outcome.name,
            status_text(status),
            str(outcome.document_count),
            str(len(outcome.columns)),
            output,
        )
    console.print(table)


def create_export_command():
    """Create the export command function"""

    def export(
        connection_string: str = typer.Option(
            None,
            "--connection-string",
            "-c",
            envvar=ENV_CONNECTION_STRING,
            help="Cosmos DB connection string (default: stored connection)",
            show_envvar=True,
        ),
        database: str = typer.Option(
            None,
            "--database",
            "-d",
            envvar=ENV_DATABASE,
            help="Database name (required unless configured)",
        ),
        containers: List[str] = typer.Option(
            None,
            "--containers",
            "-t",
            help="Container names to export, repeatable or comma-separated "
            "(default: all containers)",
        ),
        output_dir: str = typer.Option(
            None,
            "--output",
            "-o",
            help="Output directory for XLSX files (default: current directory)",
        ),
        columns: List[str] = typer.Option(
            None,
            "--columns",
            "-p",
            help="Column names (properties) to export, repeatable or "
            "comma-separated (default: all properties)",
        ),
        page_size: int = typer.Option(
            None, "--page-size", help=f"Items per query page (default: {DEFAULT_PAGE_SIZE})"
        ),
        no_progress: bool = typer.Option(
            False, "--no-progress", help="Hide the row writing progress bar"
        ),
    ):
        """Export data from Cosmos DB containers to XLSX files"""
        logger = get_logger("cosmos2xlsx.commands.export")

        try:
            settings = resolve_export_settings(
                ConfigStore(),
                connection_string,
                database,
                output_dir,
                page_size,
                containers,
                columns,
            )
        except ValueError as e:
            error(str(e))
            raise typer.Exit(EXIT_FATAL)

        try:
            settings.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create output directory {settings.output_dir}: {e}")
            error(f"Cannot create output directory {settings.output_dir}: {e}")
            raise typer.Exit(EXIT_FATAL)

        if settings.columns:
            info(f"Exporting specified columns: {', '.join(settings.columns)}")

        observer = ConsoleProgressObserver()
        info("Connecting to Cosmos DB...")
        try:
            with CosmosDocumentSource.connect(
                settings.connection_string,
                settings.database,
                page_size=settings.page_size,
            ) as source:
                orchestrator = ExportOrchestrator(
                    source,
                    writer=SheetWriter(observer, show_progress=not no_progress),
                    observer=observer,
                )
                report = orchestrator.run(
                    settings.output_dir,
                    collections=settings.containers,
                    columns=settings.columns,
                )
        except SourceConnectionError as e:
            logger.error(f"Connection failed: {e}")
            error(f"Error: {e}")
            raise typer.Exit(EXIT_FATAL)
        except Exception as e:
            message = sanitize_string(str(e))
            logger.error(f"Export aborted: {message}")
            error(f"Error: {message}")
            raise typer.Exit(EXIT_FATAL)

        print()
        display_report(report)

        if report.has_failures:
            failed = ", ".join(outcome.name for outcome in report.failed)
            warning(
                f"Export finished with errors: {len(report.failed)}/"
                f"{len(report.outcomes)} containers failed ({failed})"
            )
            raise typer.Exit(report.exit_code)

        success("Export completed successfully!")

    return export
