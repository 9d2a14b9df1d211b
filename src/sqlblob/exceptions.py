"""
sqlblob exception hierarchy.

All domain-specific exceptions inherit from SqlBlobError, so callers can catch
any library error with a single base class while still handling the codec
failures individually.

Hierarchy::

    SqlBlobError
    ├── ConfigurationError        - config loading, parsing, validation
    └── CodecError                - encode/decode failures
        ├── AllocationError       - buffer of required capacity unavailable
        └── MalformedEncodingError - token does not follow the escape grammar
"""

from __future__ import annotations


class SqlBlobError(Exception):
    """Base exception for all sqlblob errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(SqlBlobError):
    """Raised when configuration loading, parsing, or validation fails."""


# --- Codec -------------------------------------------------------------------


class CodecError(SqlBlobError):
    """Raised when a payload cannot be encoded or decoded."""


class AllocationError(CodecError):
    """Raised when a buffer of the required capacity cannot be obtained.

    Raised before the target buffer is touched, so the buffer keeps its
    previous contents and state.
    """

    def __init__(self, requested: int, *, limit: int | None = None) -> None:
        if limit is None:
            message = f"Cannot allocate buffer of {requested} bytes"
        else:
            message = f"Cannot allocate buffer of {requested} bytes (limit: {limit})"
        super().__init__(message, details={"requested": requested, "limit": limit})
        self.requested = requested
        self.limit = limit


class MalformedEncodingError(CodecError):
    """Raised when an encoded token does not follow the escape grammar."""

    def __init__(self, reason: str, *, position: int | None = None) -> None:
        if position is None:
            message = f"Cannot decode binary: {reason}"
        else:
            message = f"Cannot decode binary: {reason} at byte {position}"
        super().__init__(message, details={"reason": reason, "position": position})
        self.reason = reason
        self.position = position


# Names used by callers that think in terms of failure kinds
AllocationFailure = AllocationError
MalformedEncoding = MalformedEncodingError
