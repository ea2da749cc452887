"""Protocol layer: MIDI message types, byte encoding and hex helpers."""

from .codec import encode_control_change, encode_program_change, parse_hex, to_hex
from .messages import (
    ControlChangeMessage,
    MidiMessage,
    ProgramChangeMessage,
    SysexMessage,
)
