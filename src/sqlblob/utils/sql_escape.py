"""
SQL literal helpers for encoded tokens.

Tokens never contain a quote or a NUL byte, so they can be wrapped in single
quotes as-is. Token bytes map one-to-one onto characters through latin-1,
which lets a token travel inside SQL text and come back from a TEXT column
unchanged.
"""

from sqlblob.codec.decoder import validate_token
from sqlblob.exceptions import MalformedEncodingError

TOKEN_TEXT_ENCODING = "latin-1"


def token_to_text(token: bytes | bytearray | memoryview) -> str:
    """
    Convert a token to text for SQL statements.

    Example:
        >>> token_to_text(b"\\x01&&&")
        '\\x01&&&'
    """
    return bytes(token).decode(TOKEN_TEXT_ENCODING)


def text_to_token(text: str) -> bytes:
    """
    Convert text read back from the database into token bytes.

    Raises:
        MalformedEncodingError: If the text holds characters outside latin-1,
            which no token can produce
    """
    try:
        return text.encode(TOKEN_TEXT_ENCODING)
    except UnicodeEncodeError as e:
        raise MalformedEncodingError(f"character {text[e.start]!r} cannot appear in a token", position=e.start) from e


def quote_token(token: bytes | bytearray | memoryview) -> str:
    """
    Wrap a token in single quotes for direct use in SQL text.

    The token is checked first; nothing is escaped since a valid token holds
    no quote characters.

    Args:
        token: Encoded token (terminator optional)

    Returns:
        Quoted SQL literal

    Raises:
        MalformedEncodingError: If ``token`` is not a valid token

    Example:
        >>> quote_token(b"x")
        "'x'"
    """
    length = validate_token(token)
    return f"'{token_to_text(bytes(token)[:length])}'"


def escape_sql_string(value: str | None) -> str:
    """
    Escape SQL string value (for use in SQL queries).

    Escapes single quotes by doubling them, which is the SQL standard.

    Args:
        value: String value to escape

    Returns:
        Escaped string with single quotes doubled, or NULL for None

    Example:
        >>> escape_sql_string("O'Brien")
        "'O''Brien'"
    """
    if value is None:
        return "NULL"

    escaped = str(value).replace("'", "''")
    return f"'{escaped}'"
