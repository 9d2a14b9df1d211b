"""
sqlblob - Binary-safe tokens for single-quoted SQL literals.

Encodes arbitrary bytes into text containing no NUL and no quote character,
so binary data can be inlined into SQL statements and recovered exactly.
"""

__version__ = "0.1.0"

# Global config
from sqlblob.config.singleton import config

# Transcoding buffer
from sqlblob.buffer import BufferState, TranscodingBuffer

# Codec
from sqlblob.codec import (
    byte_histogram,
    decode_binary,
    encode_binary,
    encoded_capacity,
    escape_cost,
    select_offset,
    validate_token,
)

# Exceptions
from sqlblob.exceptions import (
    AllocationError,
    AllocationFailure,
    CodecError,
    ConfigurationError,
    MalformedEncoding,
    MalformedEncodingError,
    SqlBlobError,
)

# Storage entry points
from sqlblob.storage import TokenStats, decode_from_storage, encode_for_storage, inspect_token

# SQL helpers
from sqlblob.utils.sql_escape import escape_sql_string, quote_token, text_to_token, token_to_text

# Logging utilities
from sqlblob.utils.logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    # Storage
    "encode_for_storage",
    "decode_from_storage",
    "inspect_token",
    "TokenStats",
    # Buffer
    "TranscodingBuffer",
    "BufferState",
    # Codec
    "byte_histogram",
    "select_offset",
    "escape_cost",
    "encode_binary",
    "decode_binary",
    "validate_token",
    "encoded_capacity",
    # SQL
    "quote_token",
    "token_to_text",
    "text_to_token",
    "escape_sql_string",
    # Logging
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    # Config
    "config",
    # Exceptions
    "SqlBlobError",
    "ConfigurationError",
    "CodecError",
    "AllocationError",
    "AllocationFailure",
    "MalformedEncodingError",
    "MalformedEncoding",
]
