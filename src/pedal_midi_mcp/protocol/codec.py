"""Raw MIDI byte encoding and range helpers.

Channel-voice layout::

    Control Change:  [0xB0 | (channel - 1)] [controller] [value]
    Program Change:  [0xC0 | (channel - 1)] [program]

Channels are 1-based on the API and 0-based in the status nibble. All data
bytes are 7-bit.
"""

from __future__ import annotations

import re

from ..errors import ValidationError

CONTROL_CHANGE = 0xB0
PROGRAM_CHANGE = 0xC0
SYSEX_START = 0xF0
SYSEX_END = 0xF7

MIN_CHANNEL = 1
MAX_CHANNEL = 16
MAX_DATA = 0x7F

_HEX_SEPARATORS = re.compile(r"[\s\-:,]+")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_channel(channel: int) -> int:
    if not _is_int(channel) or not MIN_CHANNEL <= channel <= MAX_CHANNEL:
        raise ValidationError(f"MIDI channel must be between 1 and 16, got {channel}")
    return channel


def check_data(value: int, label: str) -> int:
    """Ensure ``value`` is a 7-bit data byte."""
    if not _is_int(value) or not 0 <= value <= MAX_DATA:
        raise ValidationError(f"{label} must be between 0 and 127, got {value}")
    return value


def encode_control_change(channel: int, cc: int, value: int) -> bytes:
    """Build a 3-byte Control Change message.

    Args:
        channel: MIDI channel 1-16.
        cc: Controller number 0-127.
        value: Controller value 0-127.
    """
    check_channel(channel)
    check_data(cc, "CC number")
    check_data(value, "MIDI value")
    return bytes([CONTROL_CHANGE | (channel - 1), cc, value])


def encode_program_change(channel: int, program: int) -> bytes:
    """Build a 2-byte Program Change message.

    Args:
        channel: MIDI channel 1-16.
        program: Program number 0-127.
    """
    check_channel(channel)
    check_data(program, "Program number")
    return bytes([PROGRAM_CHANGE | (channel - 1), program])


def clamp(value: int, low: int, high: int) -> int:
    """Clamp ``value`` into ``[low, high]`` without complaint."""
    return max(low, min(high, value))


def to_hex(data: bytes) -> str:
    """Format bytes as upper-case, space-separated hex (``B0 05 64``)."""
    return " ".join(f"{b:02X}" for b in data)


def parse_hex(text: str) -> bytes:
    """Parse a hex dump such as ``"F0 00 7F-00 01 F7"`` into bytes.

    Whitespace, dashes, colons and commas are accepted as separators.

    Raises:
        ValidationError: If the text is empty, has an odd number of digits,
            or contains non-hex characters.
    """
    digits = _HEX_SEPARATORS.sub("", text or "")
    if not digits:
        raise ValidationError("Sysex data cannot be empty")
    if len(digits) % 2:
        raise ValidationError(f"Hex data has an odd number of digits ({len(digits)})")
    try:
        return bytes.fromhex(digits)
    except ValueError as e:
        raise ValidationError(f"Invalid sysex data format: {e}") from e
