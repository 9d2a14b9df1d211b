"""
Token-to-binary decoder.

Reverses ``encode_binary``: the first byte is the offset, each escape pair
``0x01 f`` stands for 0x00 (f=1), 0x01 (f=2) or 0x27 (f=3), and every
resolved byte has the offset added back (mod 256). The token ends at the
first 0x00 byte or at the end of the object.

Tokens are validated completely before anything is written, so a malformed
token never leaves a buffer half-decoded.
"""

import re

from sqlblob.codec.encoder import TERMINATOR
from sqlblob.codec.offset import QUOTE
from sqlblob.exceptions import MalformedEncodingError
from sqlblob.utils.logging import get_logger

logger = get_logger("sqlblob.codec.decoder")

# An escape byte and whatever follows it (possibly nothing)
_ESCAPE_PAIR = re.compile(rb"\x01(.?)", re.DOTALL)
_VALID_ESCAPE = re.compile(rb"\x01([\x01-\x03])")
_UNESCAPE = {b"\x01": b"\x00", b"\x02": b"\x01", b"\x03": bytes([QUOTE])}

_unshift_tables: dict[int, bytes] = {}


def _unshift_table(offset: int) -> bytes:
    table = _unshift_tables.get(offset)
    if table is None:
        table = bytes((value + offset) & 0xFF for value in range(256))
        _unshift_tables[offset] = table
    return table


def _logical_token(token: bytes | bytearray | memoryview) -> bytes:
    data = bytes(token)
    end = data.find(bytes([TERMINATOR]))
    return data if end == -1 else data[:end]


def _check(data: bytes) -> None:
    if not data:
        raise MalformedEncodingError("token is empty", position=0)

    quote = data.find(bytes([QUOTE]))
    if quote != -1:
        raise MalformedEncodingError("unescaped quote character", position=quote)

    for match in _ESCAPE_PAIR.finditer(data, 1):
        follower = match.group(1)
        if not follower:
            raise MalformedEncodingError("escape byte at end of token", position=match.start())
        if follower not in _UNESCAPE:
            raise MalformedEncodingError(f"invalid escape sequence 0x01 0x{follower[0]:02x}", position=match.start())


def validate_token(token: bytes | bytearray | memoryview) -> int:
    """
    Check that ``token`` follows the encoded-token grammar.

    Args:
        token: Encoded token, with or without its 0x00 terminator

    Returns:
        Logical length of the token (terminator excluded)

    Raises:
        MalformedEncodingError: If the token is empty, contains a bare quote,
            or holds an escape byte not followed by 0x01, 0x02 or 0x03
    """
    data = _logical_token(token)
    _check(data)
    return len(data)


def decode_binary(token: bytes | bytearray | memoryview) -> bytes:
    """
    Recover the raw payload from an encoded token.

    Args:
        token: Encoded token, with or without its 0x00 terminator

    Returns:
        Raw payload

    Raises:
        MalformedEncodingError: If the token does not follow the escape grammar
    """
    data = _logical_token(token)
    try:
        _check(data)
    except MalformedEncodingError as e:
        logger.warning(f"Rejected {len(data)}-byte token: {e.message}")
        raise

    offset = data[0]
    payload = _VALID_ESCAPE.sub(lambda m: _UNESCAPE[m.group(1)], data[1:])
    return payload.translate(_unshift_table(offset))


def decode_into(buf: bytearray) -> int:
    """
    Decode the token held in ``buf`` in place.

    The decoded payload is never longer than the token, so it is written over
    the start of the buffer; bytes past the returned length are left as they
    were. On failure the buffer is not modified.

    Args:
        buf: Buffer holding an encoded token

    Returns:
        Length of the decoded payload

    Raises:
        MalformedEncodingError: If the token does not follow the escape grammar
    """
    decoded = decode_binary(buf)
    buf[: len(decoded)] = decoded
    return len(decoded)
