"""Tests for the mido-backed output connection."""

from unittest.mock import MagicMock

import pytest

from pedal_midi_mcp.transport import midi_connection
from pedal_midi_mcp.transport.midi_connection import MidiConnection, list_output_ports


@pytest.fixture
def fake_mido(monkeypatch):
    fake = MagicMock()
    fake.get_output_names.return_value = ["IAC Driver Bus 1", "USB MIDI Interface"]
    fake.backend.name = "mido.backends.rtmidi"
    monkeypatch.setattr(midi_connection, "mido", fake)
    return fake


def test_list_output_ports(fake_mido):
    assert list_output_ports() == ["IAC Driver Bus 1", "USB MIDI Interface"]


def test_open_matches_fragment(fake_mido):
    conn = MidiConnection()
    info = conn.open("usb midi")

    fake_mido.open_output.assert_called_once_with("USB MIDI Interface")
    assert conn.connected
    assert info.name == "USB MIDI Interface"
    assert conn.port_info.backend == "mido.backends.rtmidi"


def test_open_without_fragment_uses_first_port(fake_mido):
    assert MidiConnection().open().name == "IAC Driver Bus 1"


def test_open_no_match(fake_mido):
    with pytest.raises(ConnectionError, match="matching 'Quad'"):
        MidiConnection().open("Quad")


def test_open_failure_becomes_connection_error(fake_mido):
    fake_mido.open_output.side_effect = OSError("port busy")
    conn = MidiConnection()
    with pytest.raises(ConnectionError, match="port busy"):
        conn.open()
    assert not conn.connected


def test_write_requires_connection(fake_mido):
    with pytest.raises(ConnectionError):
        MidiConnection().write(bytes([0xB0, 0x07, 0x7F]))


def test_write_sends_one_message(fake_mido):
    conn = MidiConnection()
    conn.open()
    port = fake_mido.open_output.return_value

    written = conn.write(bytes([0xB0, 0x07, 0x7F]))

    assert written == 3
    fake_mido.Message.from_bytes.assert_called_once_with([0xB0, 0x07, 0x7F])
    port.send.assert_called_once_with(fake_mido.Message.from_bytes.return_value)


def test_close(fake_mido):
    conn = MidiConnection()
    conn.open()
    port = fake_mido.open_output.return_value

    conn.close()
    conn.close()

    port.close.assert_called_once_with()
    assert not conn.connected
