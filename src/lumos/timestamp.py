from __future__ import annotations

from lumos.layout import TIMESTAMP_END, TIMESTAMP_START


def advance_timestamp(buf: bytearray) -> bool:
    """Bump the modification counter in place.

    Increments the first byte of offsets 10..14 that is not 0xFF and stops
    there. A fully saturated counter is left alone: wraparound behavior is
    unknown, so nothing is written.

    Returns True if a byte was incremented.
    """

    for i in range(TIMESTAMP_START, TIMESTAMP_END):
        if buf[i] != 0xFF:
            buf[i] += 1
            return True
    return False


def read_timestamp(data: bytes) -> bytes:
    return bytes(data[TIMESTAMP_START:TIMESTAMP_END])
