"""Executors deliver MIDI messages and report one result per message.

An executor never raises for a delivery problem; failures come back as
``ExecutionResult(success=False)`` so a batch keeps going after one bad send.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable

from ..protocol.messages import (
    ControlChangeMessage,
    MidiMessage,
    ProgramChangeMessage,
    SysexMessage,
)
from .midi_connection import MidiConnection

logger = logging.getLogger(__name__)


def _kind(message: MidiMessage) -> str:
    if isinstance(message, ControlChangeMessage):
        return "MIDI command"
    if isinstance(message, ProgramChangeMessage):
        return "MIDI program change"
    return "Sysex"


@dataclass
class ExecutionResult:
    """Outcome of delivering a single message."""

    success: bool
    message: str
    sent_message: MidiMessage | None = None
    timestamp: float = field(default_factory=time.time)
    bytes_transmitted: int = 0


class DeviceExecutor:
    """Base class for anything that can deliver MIDI messages."""

    def execute(self, message: MidiMessage) -> ExecutionResult:
        raise NotImplementedError

    def execute_many(self, messages: Iterable[MidiMessage]) -> list[ExecutionResult]:
        """Deliver messages in order; each one succeeds or fails on its own."""
        return [self.execute(message) for message in messages]

    def is_available(self) -> bool:
        raise NotImplementedError

    def status(self) -> str:
        raise NotImplementedError


class MidiPortExecutor(DeviceExecutor):
    """Sends messages through a ``MidiConnection``.

    Without an open connection the executor runs headless: it logs what it
    would have sent and reports success.
    """

    def __init__(
        self,
        connection: MidiConnection | None = None,
        port_fragment: str | None = None,
    ) -> None:
        self._connection = connection
        self._port_fragment = port_fragment

    @property
    def connection(self) -> MidiConnection | None:
        return self._connection

    def execute(self, message: MidiMessage) -> ExecutionResult:
        kind = _kind(message)
        data = message.to_bytes()
        hex_string = message.to_hex()
        sysex_len = len(data) if isinstance(message, SysexMessage) else 0

        if not self.is_available():
            logger.info("No MIDI port open, %s logged only: %s", kind, hex_string)
            return ExecutionResult(
                success=True,
                message=f"{kind} logged only (no MIDI port): {hex_string}",
                sent_message=message,
                bytes_transmitted=sysex_len,
            )

        try:
            written = self._connection.write(data)
        except Exception as e:
            logger.exception("Failed to send %s %s", kind, hex_string)
            return ExecutionResult(
                success=False,
                message=f"Failed to execute {kind}: {e}",
                sent_message=message,
            )

        logger.debug("Sent %s: %s", kind, hex_string)
        return ExecutionResult(
            success=True,
            message=f"{kind} sent successfully: {hex_string}",
            sent_message=message,
            bytes_transmitted=written if sysex_len else 0,
        )

    def is_available(self) -> bool:
        return self._connection is not None and self._connection.connected

    def status(self) -> str:
        if not self.is_available():
            return "MIDI executor headless (no output port open)"
        return f"Connected to MIDI output {self._connection.port_info.name}"

    def reconnect(self) -> bool:
        """Close and re-open the output port, picking up newly attached devices.

        Returns:
            True if a port is open afterwards.
        """
        if self._connection is None:
            self._connection = MidiConnection()
        self._connection.close()
        try:
            self._connection.open(self._port_fragment)
        except ConnectionError as e:
            logger.warning("MIDI re-scan found no usable port: %s", e)
            return False
        return True


class RecordingExecutor(DeviceExecutor):
    """In-memory executor that records every message it accepts."""

    def __init__(self) -> None:
        self.sent: list[MidiMessage] = []
        self.should_fail = False

    @property
    def control_changes(self) -> list[ControlChangeMessage]:
        return [m for m in self.sent if isinstance(m, ControlChangeMessage)]

    @property
    def program_changes(self) -> list[ProgramChangeMessage]:
        return [m for m in self.sent if isinstance(m, ProgramChangeMessage)]

    @property
    def sysex_messages(self) -> list[SysexMessage]:
        return [m for m in self.sent if isinstance(m, SysexMessage)]

    def clear(self) -> None:
        self.sent.clear()

    def execute(self, message: MidiMessage) -> ExecutionResult:
        kind = _kind(message)
        if self.should_fail:
            return ExecutionResult(False, f"Recorded {kind} failed", message)
        self.sent.append(message)
        length = len(message) if isinstance(message, SysexMessage) else 0
        return ExecutionResult(
            True,
            f"Recorded {kind}: {message.to_hex()}",
            message,
            bytes_transmitted=length,
        )

    def is_available(self) -> bool:
        return True

    def status(self) -> str:
        return (
            f"Recording executor ({len(self.control_changes)} CC, "
            f"{len(self.program_changes)} PC, "
            f"{len(self.sysex_messages)} sysex messages)"
        )
