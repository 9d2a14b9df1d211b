"""
Shared input/output helpers for CLI commands.
"""

from pathlib import Path

import typer


def read_input(path: Path | None) -> bytes:
    """Read all bytes from ``path``, or from stdin when no path is given."""
    if path is None:
        return typer.get_binary_stream("stdin").read()
    return path.read_bytes()


def write_output(data: bytes, path: Path | None) -> None:
    """Write bytes to ``path``, or to stdout when no path is given."""
    if path is None:
        stream = typer.get_binary_stream("stdout")
        stream.write(data)
        stream.flush()
    else:
        path.write_bytes(data)
