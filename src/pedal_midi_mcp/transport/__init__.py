"""Transport layer: MIDI output port and message executors."""

from .executor import DeviceExecutor, ExecutionResult, MidiPortExecutor, RecordingExecutor
from .midi_connection import MidiConnection, PortInfo, list_output_ports
