from __future__ import annotations

from dataclasses import dataclass

from lumos.errors import InconsistentFlagError, InvalidLengthError
from lumos.layout import (
    FLAG_DISABLED,
    FLAG_ENABLED,
    STATE_ACTIVE_MARKER,
    STATE_FLAG_FOR_LEN,
    STATE_FLAG_OFFSET,
    STATE_LEN_DISABLED,
    STATE_LEN_ENABLED,
    STATE_PREFIX_END,
    STATE_SPLICE_OFFSET,
    STATE_SPLICE_PAD,
)
from lumos.timestamp import advance_timestamp


@dataclass(frozen=True)
class StateBlob:
    """The enabled/disabled blob. The bytes are the layout; there is no other form."""

    data: bytes

    @property
    def flag(self) -> int:
        return self.data[STATE_FLAG_OFFSET]


def decode(data: bytes) -> StateBlob:
    n = len(data)
    if n not in STATE_FLAG_FOR_LEN:
        raise InvalidLengthError(
            f"state blob must be {STATE_LEN_DISABLED} or {STATE_LEN_ENABLED} bytes, got {n}"
        )

    flag = data[STATE_FLAG_OFFSET]
    if flag not in (FLAG_DISABLED, FLAG_ENABLED):
        raise InconsistentFlagError(f"unknown state flag 0x{flag:02x}")
    if flag != STATE_FLAG_FOR_LEN[n]:
        raise InconsistentFlagError(f"state flag 0x{flag:02x} does not match length {n}")

    return StateBlob(bytes(data))


def encode(blob: StateBlob) -> bytes:
    return blob.data


def is_enabled(blob: StateBlob) -> bool:
    return blob.flag == FLAG_ENABLED


def toggle(blob: StateBlob) -> StateBlob:
    """Return the opposite-mode blob with its counter advanced.

    Disabling drops the two marker bytes after offset 22 and shifts the tail
    left (43 -> 41). Enabling inserts them and shifts the tail right (41 -> 43).
    Only bytes 0..21 are carried over; byte 22 is always written as 0x00.
    """

    src = blob.data
    head = src[:STATE_PREFIX_END] + STATE_SPLICE_PAD

    if is_enabled(blob):
        tail = src[STATE_SPLICE_OFFSET + len(STATE_ACTIVE_MARKER) :]
        out = bytearray(head + tail)
        out[STATE_FLAG_OFFSET] = FLAG_DISABLED
    else:
        tail = src[STATE_SPLICE_OFFSET:]
        out = bytearray(head + STATE_ACTIVE_MARKER + tail)
        out[STATE_FLAG_OFFSET] = FLAG_ENABLED

    advance_timestamp(out)
    return StateBlob(bytes(out))
