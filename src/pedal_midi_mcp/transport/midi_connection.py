"""MIDI output connection to the pedal board.

Uses ``mido`` with the ``python-rtmidi`` backend. Only the output side is
opened; the pedals are never asked to reply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import mido

logger = logging.getLogger(__name__)


@dataclass
class PortInfo:
    """Identification of the open output port."""

    name: str = ""
    backend: str = ""


def list_output_ports() -> list[str]:
    """Names of all MIDI output ports the backend can see."""
    return list(mido.get_output_names())


class MidiConnection:
    """Manages the MIDI output port used to reach the pedals.

    Usage::

        conn = MidiConnection()
        conn.open("USB MIDI")
        conn.write(bytes([0xB0, 0x07, 0x7F]))
        conn.close()
    """

    def __init__(self) -> None:
        self._port = None
        self._connected = False
        self._port_info = PortInfo()

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def port_info(self) -> PortInfo:
        return self._port_info

    def open(self, port_fragment: str | None = None) -> PortInfo:
        """Open the first output port whose name contains ``port_fragment``.

        With no fragment the first available port is used.

        Raises:
            ConnectionError: If no matching port exists or it cannot be opened.
        """
        names = list_output_ports()
        logger.debug("MIDI output ports: %s", names)
        if port_fragment:
            wanted = port_fragment.casefold()
            names = [n for n in names if wanted in n.casefold()]
        if not names:
            suffix = f" matching {port_fragment!r}" if port_fragment else ""
            raise ConnectionError(f"No MIDI output port found{suffix}")

        name = names[0]
        try:
            self._port = mido.open_output(name)
        except OSError as e:
            raise ConnectionError(f"Could not open MIDI port {name!r}: {e}") from e

        self._connected = True
        self._port_info = PortInfo(name=name, backend=mido.backend.name)
        logger.info("Connected to MIDI output %s", name)
        return self._port_info

    def close(self) -> None:
        """Close the output port."""
        if not self._connected:
            return

        try:
            self._port.close()
        except OSError as e:
            logger.warning("Error closing MIDI port: %s", e)
        finally:
            self._port = None
            self._connected = False
            logger.info("Disconnected from %s", self._port_info.name)

    def write(self, data: bytes) -> int:
        """Send one complete MIDI message.

        Args:
            data: Raw message bytes, status byte first.

        Returns:
            Number of bytes written.

        Raises:
            ConnectionError: If not connected.
            ValueError: If the bytes do not form a single MIDI message.
        """
        if not self._connected:
            raise ConnectionError("Not connected to a MIDI port")

        message = mido.Message.from_bytes(list(data))
        self._port.send(message)
        return len(data)
