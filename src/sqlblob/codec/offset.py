"""
Offset selection.

Every raw byte is shifted by a single offset ``e`` before escaping. A raw byte
that lands on 0x00, 0x01 or the quote character after the shift costs one
extra output byte, so the best offset is the one whose three "landing" byte
values are the rarest in the payload.
"""

from collections.abc import Sequence

from sqlblob.codec.frequency import HISTOGRAM_SIZE

QUOTE = 0x27
MIN_OFFSET = 1
MAX_OFFSET = 255


def escape_cost(histogram: Sequence[int], offset: int) -> int:
    """
    Number of escape sequences needed when encoding with ``offset``.

    Raw bytes equal to ``offset``, ``offset + 1`` and ``offset + 0x27``
    (mod 256) become 0x00, 0x01 and 0x27 and must be escaped.

    Args:
        histogram: 256-entry byte histogram of the raw payload
        offset: Candidate offset

    Returns:
        Escape count for that offset
    """
    return (
        histogram[offset % HISTOGRAM_SIZE]
        + histogram[(offset + 1) % HISTOGRAM_SIZE]
        + histogram[(offset + QUOTE) % HISTOGRAM_SIZE]
    )


def candidate_offsets() -> range:
    """All offsets in scan order; callers skip the quote value."""
    return range(MIN_OFFSET, MAX_OFFSET + 1)


def select_offset(histogram: Sequence[int]) -> int:
    """
    Pick the offset that minimises the escape count.

    Offsets are scanned upward from 1, skipping the quote value. The first
    offset to reach a new lowest cost wins, and the scan stops at the first
    zero-cost offset. Output therefore stays byte-for-byte identical to tokens
    written by other encoders using the same rule.

    Args:
        histogram: 256-entry byte histogram of a non-empty payload

    Returns:
        Chosen offset in [1, 255], never 0x27

    Raises:
        ValueError: If the histogram is malformed or describes an empty payload
    """
    if len(histogram) != HISTOGRAM_SIZE:
        raise ValueError(f"Histogram must have {HISTOGRAM_SIZE} entries, got {len(histogram)}")

    total = sum(histogram)
    if total <= 0:
        raise ValueError("Cannot select an offset for an empty payload")

    best_offset = 0
    best_cost = total
    for offset in candidate_offsets():
        if offset == QUOTE:
            continue
        cost = escape_cost(histogram, offset)
        if cost < best_cost:
            best_cost = cost
            best_offset = offset
            if cost == 0:
                break

    # Offsets 1 and 3 cover disjoint byte values, so some offset always
    # beats the total and best_offset is set here.
    return best_offset
