"""
sqlblob decode - Recover raw bytes from a token.
"""

from pathlib import Path

import typer

from sqlblob.cli._io import read_input, write_output
from sqlblob.buffer import TranscodingBuffer
from sqlblob.exceptions import SqlBlobError
from sqlblob.utils.logging import get_logger

logger = get_logger("sqlblob.cli.decode")


def _strip_literal(data: bytes) -> bytes:
    """Remove the surrounding quotes of an SQL literal (trailing newline allowed)."""
    data = data.rstrip(b"\r\n")
    if len(data) >= 2 and data[:1] == b"'" and data[-1:] == b"'":
        return data[1:-1]
    raise typer.BadParameter("input is not a single-quoted SQL literal")


def decode(
    path: Path | None = typer.Argument(None, help="File holding the token (default: stdin)", exists=True, dir_okay=False),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write raw bytes here (default: stdout)"),
    sql: bool = typer.Option(False, "--sql", help="Input is a quoted SQL literal"),
) -> None:
    """
    Decode a token read from a file (or stdin).

    The token ends at the first NUL byte or at the end of input.
    """
    token = read_input(path)
    if sql:
        token = _strip_literal(token)

    try:
        with TranscodingBuffer() as buf:
            buf.set_encoded(token)
            raw = buf.get_binary()
    except SqlBlobError as e:
        logger.error(f"Decoding failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    logger.info(f"Decoded {len(token)}-byte token into {len(raw)} bytes")
    write_output(raw, output)
