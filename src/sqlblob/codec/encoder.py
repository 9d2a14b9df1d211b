"""
Binary-to-token encoder.

The token is ``[offset][escaped payload]`` followed by a 0x00 terminator
wherever it is written into a buffer. Each raw byte ``b`` becomes
``c = (b - offset) mod 256``; the three values that cannot appear inside a
single-quoted SQL string (or that collide with the escape byte) are written
as two-byte escapes:

    ======  =========
    c       emitted
    ======  =========
    0x00    0x01 0x01
    0x01    0x01 0x02
    0x27    0x01 0x03
    other   c
    ======  =========
"""

from sqlblob.codec.frequency import byte_histogram
from sqlblob.codec.offset import QUOTE, select_offset
from sqlblob.utils.logging import get_logger

logger = get_logger("sqlblob.codec.encoder")

ESCAPE = 0x01
TERMINATOR = 0x00
EMPTY_TOKEN = b"x"

# Order matters: the escape byte itself is doubled up before any other
# escape introduces new 0x01 bytes.
_ESCAPES = (
    (bytes([ESCAPE]), bytes([ESCAPE, 0x02])),
    (bytes([TERMINATOR]), bytes([ESCAPE, 0x01])),
    (bytes([QUOTE]), bytes([ESCAPE, 0x03])),
)

_shift_tables: dict[int, bytes] = {}


def _shift_table(offset: int) -> bytes:
    """Translation table mapping each byte b to (b - offset) mod 256."""
    table = _shift_tables.get(offset)
    if table is None:
        table = bytes((value - offset) & 0xFF for value in range(256))
        _shift_tables[offset] = table
    return table


def encoded_capacity(n: int) -> int:
    """
    Buffer size that always holds the encoding of ``n`` raw bytes.

    At most three extra bytes are needed for every 254 input bytes, plus the
    offset byte and the terminator: ``3 + ceil(257 * n / 254)``.
    """
    if n < 0:
        raise ValueError(f"Payload length cannot be negative: {n}")
    return 3 + -(-257 * n // 254)


def encode_with_offset(data: bytes | bytearray | memoryview, offset: int) -> bytes:
    """
    Encode ``data`` using an explicit offset.

    Args:
        data: Raw payload
        offset: Offset in [1, 255], not 0x27

    Returns:
        Logical token (offset byte plus escaped payload, no terminator)
    """
    if not 1 <= offset <= 255 or offset == QUOTE:
        raise ValueError(f"Invalid offset: {offset}")

    payload = bytes(data).translate(_shift_table(offset))
    for raw, escaped in _ESCAPES:
        payload = payload.replace(raw, escaped)
    return bytes([offset]) + payload


def encode_binary(data: bytes | bytearray | memoryview) -> bytes:
    """
    Encode a raw payload into a token safe for a single-quoted SQL literal.

    Args:
        data: Raw payload (may be empty)

    Returns:
        Logical token without the terminator; ``b"x"`` for empty input

    Example:
        >>> encode_binary(b"'''")
        b'\\x01&&&'
    """
    if len(data) == 0:
        return EMPTY_TOKEN

    offset = select_offset(byte_histogram(data))
    token = encode_with_offset(data, offset)
    logger.debug(f"Encoded {len(data)} bytes into {len(token)}-byte token (offset 0x{offset:02x})")
    return token


def encode_into(data: bytes | bytearray | memoryview, out: bytearray, start: int = 0) -> int:
    """
    Encode ``data`` into a caller-owned buffer, followed by a 0x00 terminator.

    ``data`` must not share memory with ``out``: the encoded form can run
    ahead of the input it was produced from.

    Args:
        data: Raw payload
        out: Destination buffer
        start: Position in ``out`` where the token starts

    Returns:
        Logical length of the token (terminator excluded)

    Raises:
        ValueError: If ``out`` is too small for the token and its terminator
    """
    token = encode_binary(data)
    end = start + len(token)
    if end + 1 > len(out):
        raise ValueError(f"Output buffer too small: need {end + 1 - start} bytes, have {len(out) - start}")

    out[start:end] = token
    out[end] = TERMINATOR
    return len(token)
