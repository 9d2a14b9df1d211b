"""
sqlblob inspect - Show how a payload would be encoded.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from sqlblob.cli._io import read_input
from sqlblob.storage import inspect_token

console = Console()


def inspect(
    path: Path | None = typer.Argument(None, help="File to inspect (default: stdin)", exists=True, dir_okay=False),
) -> None:
    """
    Display the chosen offset, escape count and sizes for a payload.
    """
    raw = read_input(path)
    stats = inspect_token(raw)

    table = Table(title=str(path) if path else "stdin", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Raw length", str(stats.raw_length))
    table.add_row("Offset", "-" if stats.offset is None else f"0x{stats.offset:02x}")
    table.add_row("Escapes", str(stats.escapes))
    table.add_row("Encoded length", str(stats.encoded_length))
    table.add_row("Overhead", str(stats.overhead))
    table.add_row("Buffer capacity", str(stats.capacity))

    console.print(table)
