"""Immutable MIDI message types.

Every message validates its fields at construction and stays valid for its
lifetime, so encoding an existing message cannot fail.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..errors import ValidationError
from .codec import (
    SYSEX_END,
    SYSEX_START,
    check_channel,
    check_data,
    encode_control_change,
    encode_program_change,
    to_hex,
)


@dataclass(frozen=True)
class ControlChangeMessage:
    """A Control Change on one of the 16 channels."""

    channel: int
    control_number: int
    value: int
    parameter_name: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        check_channel(self.channel)
        check_data(self.control_number, "CC number")
        check_data(self.value, "MIDI value")

    def to_bytes(self) -> bytes:
        return encode_control_change(self.channel, self.control_number, self.value)

    def to_hex(self) -> str:
        return to_hex(self.to_bytes())

    def __str__(self) -> str:
        label = self.parameter_name or f"CC {self.control_number}"
        return f"CC ch={self.channel} {label}={self.value}"


@dataclass(frozen=True)
class ProgramChangeMessage:
    """A Program Change selecting one of 128 programs."""

    channel: int
    program: int
    description: str | None = None

    def __post_init__(self) -> None:
        check_channel(self.channel)
        check_data(self.program, "Program number")

    def to_bytes(self) -> bytes:
        return encode_program_change(self.channel, self.program)

    def to_hex(self) -> str:
        return to_hex(self.to_bytes())

    def __str__(self) -> str:
        return f"PC ch={self.channel} prog={self.program}"


@dataclass(frozen=True)
class SysexMessage:
    """A System Exclusive message bracketed by 0xF0 ... 0xF7.

    Two messages are equal when their payloads are equal; the description
    and preset name are informational only.
    """

    payload: bytes
    description: str | None = field(default=None, compare=False)
    preset_name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        payload = bytes(self.payload)
        if not payload:
            raise ValidationError("Sysex data cannot be empty")
        if payload[0] != SYSEX_START:
            raise ValidationError(f"Sysex must start with 0xF0, got 0x{payload[0]:02X}")
        if payload[-1] != SYSEX_END:
            raise ValidationError(f"Sysex must end with 0xF7, got 0x{payload[-1]:02X}")
        # accept bytearray/list input but store an immutable copy
        object.__setattr__(self, "payload", payload)

    def __len__(self) -> int:
        return len(self.payload)

    def to_bytes(self) -> bytes:
        return self.payload

    def to_hex(self) -> str:
        return to_hex(self.payload)

    def __repr__(self) -> str:
        return (
            f"SysexMessage(len={len(self.payload)}, "
            f"preset_name={self.preset_name!r})"
        )


MidiMessage = Union[ControlChangeMessage, ProgramChangeMessage, SysexMessage]
