from __future__ import annotations

from dataclasses import dataclass

from lumos.errors import InvalidLengthError
from lumos.layout import (
    MAX_KELVIN,
    MIN_KELVIN,
    SETTINGS_MIN_LEN,
    SETTINGS_TEMP_HI_OFFSET,
    SETTINGS_TEMP_LO_OFFSET,
    TEMP_BAND,
    TEMP_LO_BIAS,
    TEMP_LO_SCALE,
)
from lumos.timestamp import advance_timestamp


@dataclass(frozen=True)
class SettingsBlob:
    data: bytes


def decode(data: bytes) -> SettingsBlob:
    if len(data) < SETTINGS_MIN_LEN:
        raise InvalidLengthError(
            f"settings blob must be at least {SETTINGS_MIN_LEN} bytes, got {len(data)}"
        )
    return SettingsBlob(bytes(data))


def encode(blob: SettingsBlob) -> bytes:
    return blob.data


def clamp_percentage(pct: float) -> float:
    return min(100.0, max(0.0, float(pct)))


def kelvin_of(blob: SettingsBlob) -> float:
    lo = blob.data[SETTINGS_TEMP_LO_OFFSET]
    hi = blob.data[SETTINGS_TEMP_HI_OFFSET]
    return hi * TEMP_BAND + (lo - TEMP_LO_BIAS) / TEMP_LO_SCALE


def percentage_of(kelvin: float) -> float:
    return 100 - (kelvin - MIN_KELVIN) / (MAX_KELVIN - MIN_KELVIN) * 100


def kelvin_of_percentage(pct: float) -> float:
    pct = clamp_percentage(pct)
    return MAX_KELVIN - (pct / 100) * (MAX_KELVIN - MIN_KELVIN)


def encode_kelvin(kelvin: float) -> tuple[int, int]:
    """Return the (lo, hi) temperature bytes.

    Both casts truncate. Windows reads the truncated form, so do not round.
    """

    hi = int(kelvin // TEMP_BAND)
    lo = int((kelvin - hi * TEMP_BAND) * TEMP_LO_SCALE) + TEMP_LO_BIAS
    return lo, hi


def with_strength(blob: SettingsBlob, pct: float) -> SettingsBlob:
    """Return a copy of ``blob`` set to ``pct`` strength, counter advanced.

    Out-of-range percentages are clamped. Every byte outside the temperature
    pair and the counter is left as it was, including opaque trailing data.
    """

    lo, hi = encode_kelvin(kelvin_of_percentage(pct))

    out = bytearray(blob.data)
    out[SETTINGS_TEMP_LO_OFFSET] = lo
    out[SETTINGS_TEMP_HI_OFFSET] = hi
    advance_timestamp(out)
    return SettingsBlob(bytes(out))
