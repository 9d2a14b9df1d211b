"""
sqlblob encode - Turn raw bytes into a token.
"""

from pathlib import Path

import typer

from sqlblob.cli._io import read_input, write_output
from sqlblob.buffer import TranscodingBuffer
from sqlblob.exceptions import SqlBlobError
from sqlblob.utils.logging import get_logger
from sqlblob.utils.sql_escape import TOKEN_TEXT_ENCODING, quote_token

logger = get_logger("sqlblob.cli.encode")


def encode(
    path: Path | None = typer.Argument(None, help="File to encode (default: stdin)", exists=True, dir_okay=False),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the token here (default: stdout)"),
    sql: bool = typer.Option(False, "--sql", help="Emit a quoted SQL literal instead of the bare token"),
) -> None:
    """
    Encode a file (or stdin) into a token with no NUL and no quote bytes.
    """
    raw = read_input(path)
    try:
        with TranscodingBuffer() as buf:
            buf.set_binary(raw)
            token = buf.get_encoded()
        data = quote_token(token).encode(TOKEN_TEXT_ENCODING) if sql else token
    except SqlBlobError as e:
        logger.error(f"Encoding failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    logger.info(f"Encoded {len(raw)} bytes into {len(token)}-byte token")
    write_output(data, output)
