"""Console output helpers built on rich"""

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

console = Console()

# Styles of the per-container statuses shown in the export summary
STATUS_STYLES = {
    "exported": "green",
    "skipped": "yellow",
    "failed": "bold red",
}


def success(message: str):
    console.print(f"✔ {message}", style="bold green")


def error(message: str):
    console.print(f"✖ {message}", style="bold red")


def warning(message: str):
    console.print(f"⚠  {message}", style="bold yellow")


def info(message: str):
    console.print(message, style="cyan")


def create_table(title: str, columns: List[str], caption: Optional[str] = None) -> Table:
    """Create a rich table with a bold header row"""
    table = Table(title=title, caption=caption, show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column)
    return table


def status_text(status: str) -> Text:
    """Status label coloured by outcome, unknown statuses are unstyled"""
    return Text(status, style=STATUS_STYLES.get(status, ""))


def display_panel(content: str, title: str, style: str = "blue"):
    console.print(Panel(content, title=title, border_style=style))
