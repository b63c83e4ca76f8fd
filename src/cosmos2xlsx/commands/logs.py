"""
Log commands.

`logs show` prints the tail of the cosmos2xlsx log file, optionally
filtered by level, and `logs info` describes where logs are written.
"""

import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from cosmos2xlsx.constants import LOG_APP_NAME, LOG_FILE_NAME, LOG_LINES_TO_SHOW
from cosmos2xlsx.logging import get_logger
from cosmos2xlsx.logging.config import LogConfig, get_log_directory, get_log_file_path
from cosmos2xlsx.utils.console import error, info, warning

app = typer.Typer(help="Inspect cosmos2xlsx logs")
console = Console()


def _matches(line: str, level: Optional[str]) -> bool:
    return not level or level.upper() in line


def _tail(log_file: Path, lines: int, level: Optional[str]) -> List[str]:
    """Last `lines` entries of the log file that match level"""
    with open(log_file, "r", encoding="utf-8") as f:
        matching = [line for line in f if _matches(line, level)]
    return matching[-lines:] if lines > 0 else []


def _follow(log_file: Path, level: Optional[str]) -> None:
    info("Following log file... (Press Ctrl+C to stop)")
    try:
        with open(log_file, "r", encoding="utf-8") as f:
            f.seek(0, 2)
            while True:
                line = f.readline()
                if not line:
                    time.sleep(0.1)
                elif _matches(line, level):
                    console.print(line.rstrip())
    except KeyboardInterrupt:
        info("\nStopped following logs.")


def _file_rows(log_file: Path) -> List[Tuple[str, str]]:
    if not log_file.exists():
        return [("Current Size", "File not found"), ("Last Modified", "N/A")]
    stat = log_file.stat()
    modified = datetime.fromtimestamp(stat.st_mtime)
    return [
        ("Current Size", f"{stat.st_size / (1024 * 1024):.2f} MB"),
        ("Last Modified", modified.strftime("%Y-%m-%d %H:%M:%S")),
    ]


@app.command("show")
def show_logs(
    lines: int = typer.Option(
        LOG_LINES_TO_SHOW, "--lines", "-n", help="Number of lines to show"
    ),
    follow: bool = typer.Option(False, "--follow", "-f", help="Follow log output"),
    level: Optional[str] = typer.Option(
        None, "--level", help="Filter by log level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Show recent log entries"""
    logger = get_logger("cosmos2xlsx.commands.logs")

    try:
        log_file = get_log_file_path()
        if not log_file.exists():
            warning(f"No log file found. Run an {LOG_APP_NAME} export to generate logs.")
            return

        display_lines = _tail(log_file, lines, level)
        if not display_lines:
            info("No log entries found matching the criteria.")
            return

        console.print(Syntax("".join(display_lines), "log", theme="monokai", line_numbers=False))

        if follow:
            _follow(log_file, level)
    except OSError as e:
        logger.error(f"Failed to show logs: {e}")
        error(f"Failed to show logs: {e}")
        raise typer.Exit(1)


@app.command("info")
def log_info() -> None:
    """Show log configuration and file information"""
    logger = get_logger("cosmos2xlsx.commands.logs")

    try:
        config = LogConfig()
        log_file = get_log_file_path(config)
        log_dir = get_log_directory()

        rows = [
            ("Log Directory", str(log_dir)),
            ("Log File", str(log_file)),
            ("Log Level", config.default_level.value),
            ("Rotation", "Daily at midnight"),
            ("Retention Days", str(config.log_retention_days)),
        ]
        rows.extend(_file_rows(log_file))
        rows.append(("Rotated Files", str(len(list(log_dir.glob(f"{LOG_FILE_NAME}.log.*"))))))
    except OSError as e:
        logger.error(f"Failed to show log info: {e}")
        error(f"Failed to show log info: {e}")
        raise typer.Exit(1)

    table = Table(
        title=f"{LOG_APP_NAME} Log Information",
        show_header=True,
        header_style="bold blue",
    )
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for setting, value in rows:
        table.add_row(setting, value)
    console.print(table)
