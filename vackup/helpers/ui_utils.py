"""
CLI Utilities for Vackup

Rich-based helpers for console output shared by the commands and the
console notifier.
"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..types import VolumeRow

console = Console()


def print_success(message: str):
    """Print success message with green checkmark"""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str):
    """Print error message with red X"""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_warning(message: str):
    """Print warning message with yellow warning symbol"""
    console.print(f"[yellow]⚠[/yellow]  {escape(message)}")


def print_info(message: str):
    """Print info message with cyan arrow"""
    console.print(f"[cyan]→[/cyan] {escape(message)}")


def create_table(title: str, columns: List[tuple]) -> Table:
    """
    Create a styled Rich table

    Args:
        title: Table title
        columns: List of (name, style, width) tuples, width may be None

    Returns:
        Rich Table instance
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for name, style, width in columns:
        table.add_column(name, style=style, width=width)
    return table


def format_volume_name(row: VolumeRow) -> Text:
    """Volume name with a link-count badge when containers use it."""
    text = Text(row.name)
    if row.links > 0:
        text.append(f" ({row.links})", style="bold cyan")
    return text


def create_volume_table(rows: List[VolumeRow], title: Optional[str] = "Volumes") -> Table:
    """Render volume rows the same way the terminal UI lays them out."""
    table = create_table(
        title,
        [
            ("Driver", "white", None),
            ("Volume name", "cyan", None),
            ("Containers", "green", None),
            ("Mount point", "dim", None),
            ("Size", "yellow", None),
        ],
    )
    for row in rows:
        table.add_row(
            row.driver,
            format_volume_name(row),
            "\n".join(row.container_names),
            row.mount_point,
            row.size,
        )
    return table
