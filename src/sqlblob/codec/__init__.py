"""
Binary-safe codec for single-quoted SQL literals.

Encodes arbitrary bytes into a token that contains no 0x00 and no 0x27 byte,
and decodes it back exactly.
"""

from sqlblob.codec.decoder import decode_binary, decode_into, validate_token
from sqlblob.codec.encoder import (
    EMPTY_TOKEN,
    ESCAPE,
    TERMINATOR,
    encode_binary,
    encode_into,
    encode_with_offset,
    encoded_capacity,
)
from sqlblob.codec.frequency import byte_histogram
from sqlblob.codec.offset import QUOTE, escape_cost, select_offset

__all__ = [
    "EMPTY_TOKEN",
    "ESCAPE",
    "QUOTE",
    "TERMINATOR",
    "byte_histogram",
    "decode_binary",
    "decode_into",
    "encode_binary",
    "encode_into",
    "encode_with_offset",
    "encoded_capacity",
    "escape_cost",
    "select_offset",
    "validate_token",
]
