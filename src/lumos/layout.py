"""Reverse-engineered layout of the Windows blue-light reduction blobs.

Single source of truth for offsets, lengths and marker bytes. Nothing here is
documented by Microsoft; keep every correction in this file.
"""

# Shared 5-byte "last modified" counter, offsets 10..14 in both blobs.
TIMESTAMP_START = 10
TIMESTAMP_END = 15  # exclusive

# State blob
STATE_FLAG_OFFSET = 18
FLAG_DISABLED = 0x13
FLAG_ENABLED = 0x15

STATE_LEN_DISABLED = 41
STATE_LEN_ENABLED = 43

# Bytes [0, 22) are copied verbatim on every transition.
STATE_PREFIX_END = 22
# Byte 22 is not carried across a transition; it is rebuilt as zero.
STATE_SPLICE_PAD = b"\x00"
# Enabled blobs carry two extra marker bytes right after offset 22.
STATE_SPLICE_OFFSET = 23
STATE_ACTIVE_MARKER = b"\x10\x00"

STATE_FLAG_FOR_LEN = {
    STATE_LEN_DISABLED: FLAG_DISABLED,
    STATE_LEN_ENABLED: FLAG_ENABLED,
}

# Settings blob: fixed-point color temperature, low byte first.
SETTINGS_TEMP_LO_OFFSET = 0x23
SETTINGS_TEMP_HI_OFFSET = 0x24
SETTINGS_MIN_LEN = 0x25

# lo = (kelvin - hi * 64) * 2 + 128, hi = kelvin // 64
TEMP_BAND = 64
TEMP_LO_SCALE = 2
TEMP_LO_BIAS = 128

MIN_KELVIN = 1200  # maximum warmth, 100 % strength
MAX_KELVIN = 6500  # neutral, 0 % strength
