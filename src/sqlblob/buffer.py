"""
Transcoding buffer.

Holds one payload in a single owned allocation and converts lazily between
its raw and encoded forms: the encoder runs only when the token is asked for
while the buffer holds raw bytes, the decoder only when raw bytes are asked
for while it holds a token.
"""

from __future__ import annotations

from enum import StrEnum
from types import TracebackType

from sqlblob.codec.decoder import decode_into
from sqlblob.codec.encoder import TERMINATOR, encode_into, encoded_capacity
from sqlblob.exceptions import AllocationError
from sqlblob.utils.logging import get_logger
from sqlblob.utils.sql_escape import text_to_token

logger = get_logger("sqlblob.buffer")


class BufferState(StrEnum):
    """What the current buffer contents mean."""

    EMPTY = "empty"  # No allocation
    RAW = "raw"  # Raw payload bytes
    ENCODED = "encoded"  # Token followed by a 0x00 terminator


def _as_bytes(data: bytes | bytearray | memoryview) -> memoryview:
    """Byte-level view of any bytes-like object (str and int are rejected)."""
    if isinstance(data, str):
        raise TypeError("Expected a bytes-like object, got str")
    return memoryview(data).cast("B")


class TranscodingBuffer:
    """
    Owned byte buffer that tracks whether it holds raw or encoded data.

    The buffer is sized so that any raw payload stored with ``set_binary`` can
    be encoded where it sits. Decoding also happens in place since the decoded
    payload is never longer than its token.

    Copies are deep (``copy()``, ``copy.copy``, ``copy.deepcopy``);
    ``take()`` moves the allocation to a new instance and empties this one.
    Instances are not thread-safe.

    Examples:
        >>> buf = TranscodingBuffer()
        >>> buf.set_binary(b"'''")
        >>> buf.get_encoded()
        b'\\x01&&&'
        >>> buf.state
        <BufferState.ENCODED: 'encoded'>
        >>> buf.get_binary()
        b"'''"
    """

    def __init__(self, max_capacity: int | None = None):
        """
        Initialize an empty buffer.

        Args:
            max_capacity: Largest allocation allowed, in bytes. Defaults to
                ``codec.max_capacity`` from the global config, or no limit.
        """
        self._max_capacity = max_capacity
        self._buf: bytearray | None = None
        self._capacity = 0
        self._length = 0
        self._state = BufferState.EMPTY

    @classmethod
    def from_binary(cls, data: bytes | bytearray | memoryview, max_capacity: int | None = None) -> TranscodingBuffer:
        """Create a buffer holding a raw payload."""
        buf = cls(max_capacity=max_capacity)
        buf.set_binary(data)
        return buf

    @classmethod
    def from_encoded(
        cls, token: bytes | bytearray | memoryview | str, max_capacity: int | None = None
    ) -> TranscodingBuffer:
        """Create a buffer holding an encoded token."""
        buf = cls(max_capacity=max_capacity)
        buf.set_encoded(token)
        return buf

    # ---- properties ----

    @property
    def state(self) -> BufferState:
        return self._state

    @property
    def capacity(self) -> int:
        """Bytes allocated."""
        return self._capacity

    @property
    def length(self) -> int:
        """Meaningful bytes in the current representation (terminator excluded)."""
        return self._length

    @property
    def max_capacity(self) -> int | None:
        if self._max_capacity is not None:
            return self._max_capacity

        from sqlblob.config.singleton import get_config

        cfg = get_config()
        return cfg.max_capacity if cfg is not None else None

    # ---- state transitions ----

    def set_binary(self, data: bytes | bytearray | memoryview) -> None:
        """
        Store a raw payload, discarding previous contents.

        Raises:
            AllocationError: If the worst-case encoding capacity cannot be
                allocated. The buffer is left unchanged.
        """
        view = _as_bytes(data)
        n = view.nbytes
        new_buf = self._allocate(encoded_capacity(n))
        new_buf[:n] = view

        self._adopt(new_buf, n, BufferState.RAW)

    def set_encoded(self, token: bytes | bytearray | memoryview | str) -> None:
        """
        Store an encoded token, discarding previous contents.

        The token is copied up to its first 0x00 byte; it is not checked
        until the raw form is requested. Text read back from a TEXT column
        is accepted as well.

        Raises:
            AllocationError: If the buffer cannot be allocated. The buffer is
                left unchanged.
        """
        if isinstance(token, str):
            token = text_to_token(token)
        data = _as_bytes(token).tobytes()
        end = data.find(bytes([TERMINATOR]))
        if end != -1:
            data = data[:end]

        length = len(data)
        new_buf = self._allocate(length + 1)
        new_buf[:length] = data
        new_buf[length] = TERMINATOR

        self._adopt(new_buf, length, BufferState.ENCODED)

    def get_encoded(self) -> bytes:
        """
        Return the encoded token (terminator excluded), encoding if needed.

        An empty buffer is treated as a zero-length payload.
        """
        self._ensure_encoded()
        return bytes(self._buf[: self._length])

    def get_encoded_length(self) -> int:
        """Logical length of the encoded token."""
        self._ensure_encoded()
        return self._length

    def get_binary(self) -> bytes:
        """
        Return the raw payload, decoding in place if needed.

        Raises:
            MalformedEncodingError: If the stored token cannot be decoded. The
                buffer keeps the token and stays ENCODED.
        """
        if self._state is BufferState.EMPTY:
            return b""
        self._ensure_raw()
        return bytes(self._buf[: self._length])

    def get_binary_length(self) -> int:
        """Length of the raw payload, decoding in place if needed."""
        if self._state is BufferState.EMPTY:
            return 0
        self._ensure_raw()
        return self._length

    def clear(self) -> None:
        """Release the allocation and return to EMPTY."""
        self._buf = None
        self._capacity = 0
        self._length = 0
        self._state = BufferState.EMPTY

    close = clear

    # ---- ownership ----

    def copy(self) -> TranscodingBuffer:
        """Deep copy: the new buffer gets its own allocation."""
        clone = type(self)(max_capacity=self._max_capacity)
        if self._buf is not None:
            clone._buf = bytearray(self._buf)
            clone._capacity = self._capacity
            clone._length = self._length
            clone._state = self._state
        return clone

    def __copy__(self) -> TranscodingBuffer:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> TranscodingBuffer:
        return self.copy()

    def take(self) -> TranscodingBuffer:
        """Move the allocation into a new buffer; this buffer becomes EMPTY."""
        moved = type(self)(max_capacity=self._max_capacity)
        moved._buf = self._buf
        moved._capacity = self._capacity
        moved._length = self._length
        moved._state = self._state
        self.clear()
        return moved

    # ---- protocol ----

    def __enter__(self) -> TranscodingBuffer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.clear()

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"TranscodingBuffer(state={self._state.value}, length={self._length}, capacity={self._capacity})"

    # ---- internals ----

    def _allocate(self, capacity: int) -> bytearray:
        limit = self.max_capacity
        if limit is not None and capacity > limit:
            logger.warning(f"Refusing {capacity}-byte allocation above limit of {limit} bytes")
            raise AllocationError(capacity, limit=limit)
        try:
            return bytearray(capacity)
        except (MemoryError, OverflowError) as e:
            raise AllocationError(capacity, limit=limit) from e

    def _adopt(self, buf: bytearray, length: int, state: BufferState) -> None:
        self._buf = buf
        self._capacity = len(buf)
        self._length = length
        self._state = state

    def _ensure_encoded(self) -> None:
        if self._state is BufferState.ENCODED:
            return
        if self._state is BufferState.EMPTY:
            self.set_binary(b"")

        required = encoded_capacity(self._length)
        if self._capacity < required:
            # Raw bytes decoded from an external token sit in a token-sized buffer
            grown = self._allocate(required)
            grown[: self._length] = self._buf[: self._length]
            self._adopt(grown, self._length, BufferState.RAW)

        # The token can run ahead of the input it is produced from
        raw = bytes(self._buf[: self._length])
        self._length = encode_into(raw, self._buf)
        self._state = BufferState.ENCODED
        logger.debug(f"Encoded {len(raw)}-byte payload in place ({self._length}-byte token)")

    def _ensure_raw(self) -> None:
        if self._state is BufferState.RAW:
            return
        token_length = self._length
        self._length = decode_into(self._buf)
        self._state = BufferState.RAW
        logger.debug(f"Decoded {token_length}-byte token in place ({self._length}-byte payload)")
