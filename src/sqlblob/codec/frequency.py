"""
Byte frequency table.

Counts how often each of the 256 byte values occurs in a raw payload; the
offset selector reads escape costs straight off this table.
"""

from collections import Counter

HISTOGRAM_SIZE = 256


def byte_histogram(data: bytes | bytearray | memoryview) -> list[int]:
    """
    Count occurrences of each byte value.

    Args:
        data: Raw payload (any bytes-like object, may be empty)

    Returns:
        List of 256 counts indexed by byte value

    Example:
        >>> byte_histogram(b"''a")[0x27]
        2
    """
    counts = Counter(memoryview(data).cast("B"))
    return [counts.get(value, 0) for value in range(HISTOGRAM_SIZE)]
