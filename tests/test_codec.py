"""Tests for MIDI byte encoding and message validation."""

import pytest

from pedal_midi_mcp.errors import ValidationError
from pedal_midi_mcp.protocol.codec import (
    clamp,
    encode_control_change,
    encode_program_change,
    parse_hex,
    to_hex,
)
from pedal_midi_mcp.protocol.messages import (
    ControlChangeMessage,
    ProgramChangeMessage,
    SysexMessage,
)


def test_control_change_bytes():
    """Channel 1, CC7, value 127 -> B0 07 7F."""
    data = encode_control_change(1, 7, 127)
    assert data == bytes([0xB0, 0x07, 0x7F])
    assert to_hex(data) == "B0 07 7F"


def test_program_change_on_last_channel():
    """Channel 16, program 0 -> CF 00."""
    assert to_hex(encode_program_change(16, 0)) == "CF 00"


def test_channel_nibble_is_zero_based():
    assert encode_control_change(3, 1, 0)[0] == 0xB2
    assert encode_program_change(4, 9) == bytes([0xC3, 0x09])


@pytest.mark.parametrize("channel", [0, 17, -1])
def test_channel_out_of_range(channel):
    with pytest.raises(ValidationError, match="MIDI channel"):
        encode_control_change(channel, 1, 1)


def test_data_bytes_must_be_seven_bit():
    with pytest.raises(ValidationError):
        encode_control_change(1, 128, 0)
    with pytest.raises(ValidationError):
        encode_control_change(1, 1, 128)
    with pytest.raises(ValidationError):
        encode_program_change(1, -1)


def test_booleans_are_not_data_bytes():
    """True and False are ints to Python but never valid MIDI numbers."""
    with pytest.raises(ValidationError, match="CC number"):
        ControlChangeMessage(1, True, 1)
    with pytest.raises(ValidationError, match="MIDI value"):
        encode_control_change(1, 7, False)
    with pytest.raises(ValidationError, match="MIDI channel"):
        encode_program_change(True, 0)


def test_validation_error_is_value_error():
    """Callers catching ValueError still see range violations."""
    with pytest.raises(ValueError):
        ControlChangeMessage(1, 5, 200)


def test_clamp():
    assert clamp(150, 0, 127) == 127
    assert clamp(-5, 0, 127) == 0
    assert clamp(64, 10, 100) == 64


def test_control_change_message():
    msg = ControlChangeMessage(1, 5, 100, parameter_name="Filter")
    assert msg.to_bytes() == bytes([0xB0, 0x05, 0x64])
    assert msg.to_hex() == "B0 05 64"
    assert "Filter=100" in str(msg)


def test_program_change_message_rejects_bad_channel():
    with pytest.raises(ValidationError):
        ProgramChangeMessage(0, 1)


def test_parse_hex_separators():
    """Spaces, dashes, colons and commas are all accepted."""
    assert parse_hex("F0 00 7F-00:01,F7") == bytes([0xF0, 0x00, 0x7F, 0x00, 0x01, 0xF7])
    assert parse_hex("f07ef7") == bytes([0xF0, 0x7E, 0xF7])


@pytest.mark.parametrize("text", ["", "   ", "F0 0", "F0 ZZ F7"])
def test_parse_hex_rejects_bad_input(text):
    with pytest.raises(ValidationError):
        parse_hex(text)


def test_sysex_requires_terminator():
    """A payload not ending in F7 never becomes a message."""
    with pytest.raises(ValidationError, match="0xF7"):
        SysexMessage(bytes([0xF0, 0x00, 0x01]))


def test_sysex_requires_start_byte():
    with pytest.raises(ValidationError, match="0xF0"):
        SysexMessage(bytes([0x00, 0x01, 0xF7]))


def test_sysex_rejects_empty():
    with pytest.raises(ValidationError):
        SysexMessage(b"")


def test_sysex_equality_ignores_description():
    a = SysexMessage(bytearray([0xF0, 0x01, 0xF7]), description="one")
    b = SysexMessage(bytes([0xF0, 0x01, 0xF7]), description="two")
    assert a == b
    assert isinstance(a.payload, bytes)
    assert len(a) == 3
    assert a.to_hex() == "F0 01 F7"
