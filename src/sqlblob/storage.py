"""
Entry points for code that stores binary data through SQL text.

``encode_for_storage`` turns raw bytes into a token that can be placed inside
a single-quoted SQL literal; ``decode_from_storage`` turns a token read back
from a query result into the original bytes.
"""

from dataclasses import dataclass

from sqlblob.codec.encoder import EMPTY_TOKEN, encode_binary, encoded_capacity
from sqlblob.codec.decoder import decode_binary
from sqlblob.codec.frequency import byte_histogram
from sqlblob.codec.offset import escape_cost, select_offset
from sqlblob.utils.sql_escape import text_to_token


def encode_for_storage(raw: bytes | bytearray | memoryview) -> bytes:
    """
    Encode raw bytes into a token safe for a single-quoted SQL literal.

    Args:
        raw: Raw payload

    Returns:
        Token bytes (no terminator)
    """
    return encode_binary(raw)


def decode_from_storage(token: bytes | bytearray | memoryview | str) -> bytes:
    """
    Decode a token read back from the database.

    Args:
        token: Token bytes, or the text a TEXT column returned for it

    Returns:
        Raw payload

    Raises:
        MalformedEncodingError: If the value is not a valid token
    """
    if isinstance(token, str):
        token = text_to_token(token)
    return decode_binary(token)


@dataclass(frozen=True)
class TokenStats:
    """Encoding summary for a raw payload."""

    raw_length: int
    offset: int | None
    escapes: int
    encoded_length: int
    capacity: int

    @property
    def overhead(self) -> int:
        """Extra bytes the token needs over the raw payload."""
        return self.encoded_length - self.raw_length


def inspect_token(raw: bytes | bytearray | memoryview) -> TokenStats:
    """
    Describe how ``raw`` would be encoded.

    Empty payloads report no offset: they always encode to ``b"x"``.
    """
    n = len(memoryview(raw).cast("B"))
    if n == 0:
        return TokenStats(
            raw_length=0, offset=None, escapes=0, encoded_length=len(EMPTY_TOKEN), capacity=encoded_capacity(0)
        )

    histogram = byte_histogram(raw)
    offset = select_offset(histogram)
    escapes = escape_cost(histogram, offset)
    return TokenStats(
        raw_length=n,
        offset=offset,
        escapes=escapes,
        encoded_length=1 + n + escapes,
        capacity=encoded_capacity(n),
    )
