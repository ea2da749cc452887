"""Line-delimited JSON-RPC dispatcher for the pedal tools.

One request per input line, one response per request, in arrival order::

    -> {"jsonrpc": "2.0", "id": 3, "method": "tools/call",
        "params": {"name": "list_pedals", "arguments": {}}}
    <- {"jsonrpc": "2.0", "result": {"content": [...]}, "id": 3}

Every failure inside a request becomes ``{"code": -1, "message": ...}``;
the loop itself only ends when the input does.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, TextIO

from mcp.types import (
    CallToolResult,
    Implementation,
    InitializeResult,
    ServerCapabilities,
    TextContent,
    ToolsCapability,
)

from . import __version__
from .errors import (
    DeviceNotFoundError,
    MissingArgumentError,
    PedalMidiError,
    UnknownToolError,
    ValidationError,
)
from .interpret import interpret, render
from .models.catalog import InMemoryCatalog
from .models.device import Device, Parameter, make_device_id
from .pedals import eventide_h90, template_parameters
from .pedals.composer import PresetRegistry
from .protocol.codec import parse_hex
from .protocol.messages import ControlChangeMessage, ProgramChangeMessage, SysexMessage
from .tools import list_tools_result
from .transport.executor import DeviceExecutor, ExecutionResult, MidiPortExecutor

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "pedal-midi-mcp"
ERROR_CODE = -1


@dataclass
class DispatchOutcome:
    """Result of handling one input line.

    ``response`` is None for notifications, which get no reply.
    """

    request_id: Any
    method: str | None
    response: dict[str, Any] | None

    @property
    def is_error(self) -> bool:
        return self.response is not None and "error" in self.response


def _success(request_id: Any, result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "result": result, "id": request_id}


def _error(request_id: Any, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "error": {"code": ERROR_CODE, "message": message},
        "id": request_id,
    }


def _text_result(text: str) -> dict[str, Any]:
    result = CallToolResult(content=[TextContent(type="text", text=text)])
    return result.model_dump(by_alias=True, exclude_none=True, mode="json")


# ─── ARGUMENT HELPERS ─────────────────────────────────────────────────

def _require(args: dict[str, Any], key: str) -> Any:
    value = args.get(key)
    if value is None:
        raise MissingArgumentError(key)
    return value


def _as_int(value: Any, label: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{label} must be an integer, got {value!r}")


_TRUE = ("true", "yes", "1")
_FALSE = ("false", "no", "0", "")


def _as_bool(value: Any, label: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ValidationError(f"{label} must be a boolean, got {value!r}")


def _require_int(args: dict[str, Any], key: str) -> int:
    return _as_int(_require(args, key), key)


def _require_str(args: dict[str, Any], key: str) -> str:
    value = _require(args, key)
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string, got {value!r}")
    return value


def _status_word(result: ExecutionResult) -> str:
    return "SUCCESS" if result.success else "FAILED"


class ToolDispatcher:
    """Routes JSON-RPC requests to the pedal tools.

    Usage::

        dispatcher = ToolDispatcher(catalog, executor, default_registry())
        dispatcher.run(sys.stdin, sys.stdout)
    """

    def __init__(
        self,
        catalog: InMemoryCatalog,
        executor: DeviceExecutor,
        registry: PresetRegistry | None = None,
    ) -> None:
        self._catalog = catalog
        self._executor = executor
        self._registry = registry or PresetRegistry({})
        self._methods: dict[str, Callable[[dict[str, Any]], Any]] = {
            "initialize": lambda params: self.initialize_result(),
            "tools/list": lambda params: list_tools_result(),
            "tools/call": self._call_tool,
            "ping": lambda params: {},
        }
        self._tools: dict[str, Callable[[dict[str, Any]], str]] = {
            "add_pedal": self._add_pedal,
            "get_pedal": self._get_pedal,
            "remove_pedal": self._remove_pedal,
            "list_pedals": self._list_pedals,
            "generate_cc_command": self._generate_cc_command,
            "interpret_sound_request": self._interpret_sound_request,
            "list_h90_algorithms": self._list_h90_algorithms,
            "execute_midi_command": self._execute_midi_command,
            "execute_midi_commands": self._execute_midi_commands,
            "execute_program_change": self._execute_program_change,
            "generate_preset": self._generate_preset,
            "send_sysex": self._send_sysex,
            "get_midi_status": self._get_midi_status,
            "rescan_midi_devices": self._rescan_midi_devices,
        }

    @property
    def catalog(self) -> InMemoryCatalog:
        return self._catalog

    @property
    def executor(self) -> DeviceExecutor:
        return self._executor

    # ─── LOOP ─────────────────────────────────────────────────────────

    @staticmethod
    def initialize_result() -> dict[str, Any]:
        result = InitializeResult(
            protocolVersion=PROTOCOL_VERSION,
            capabilities=ServerCapabilities(tools=ToolsCapability()),
            serverInfo=Implementation(name=SERVER_NAME, version=__version__),
        )
        return result.model_dump(by_alias=True, exclude_none=True, mode="json")

    def startup(self) -> DispatchOutcome:
        """The unsolicited ``initialize`` result sent before any input."""
        return DispatchOutcome(0, "initialize", _success(0, self.initialize_result()))

    def serve(self, lines: Iterable[str]) -> Iterator[DispatchOutcome]:
        """Yield one outcome per non-blank line until the input ends."""
        for line in lines:
            if not line.strip():
                continue
            yield self.handle_line(line)

    def run(self, stdin: TextIO, stdout: TextIO) -> None:
        """Serve ``stdin`` and write each response to ``stdout`` as one line."""
        self._write(stdout, self.startup())
        for outcome in self.serve(stdin):
            self._write(stdout, outcome)
        logger.info("Input closed, dispatcher stopping")

    @staticmethod
    def _write(stdout: TextIO, outcome: DispatchOutcome) -> None:
        if outcome.response is None:
            return
        stdout.write(json.dumps(outcome.response) + "\n")
        stdout.flush()

    def handle_line(self, line: str) -> DispatchOutcome:
        try:
            message = json.loads(line)
        except ValueError as e:
            logger.warning("Unparseable request line: %s", e)
            return DispatchOutcome(None, None, _error(None, f"Parse error: {e}"))
        if not isinstance(message, dict):
            return DispatchOutcome(None, None, _error(None, "Invalid request: expected a JSON object"))
        return self.handle_message(message)

    def handle_message(self, message: dict[str, Any]) -> DispatchOutcome:
        request_id = message.get("id")
        method = message.get("method")

        if "id" not in message and isinstance(method, str) and method.startswith("notifications/"):
            logger.debug("Notification %s", method)
            return DispatchOutcome(None, method, None)

        handler = self._methods.get(method) if isinstance(method, str) else None
        if handler is None:
            logger.warning("Unknown method %s (id=%s)", method, request_id)
            return DispatchOutcome(request_id, method, _error(request_id, f"Unknown method: {method}"))

        params = message.get("params") or {}
        try:
            result = handler(params)
        except PedalMidiError as e:
            logger.error("%s failed (id=%s): %s", method, request_id, e)
            return DispatchOutcome(request_id, method, _error(request_id, str(e)))
        except Exception as e:
            logger.exception("%s raised (id=%s)", method, request_id)
            return DispatchOutcome(request_id, method, _error(request_id, str(e) or type(e).__name__))
        return DispatchOutcome(request_id, method, _success(request_id, result))

    def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            raise ValidationError("Tool arguments must be a JSON object")

        handler = self._tools.get(name)
        if handler is None:
            raise UnknownToolError(name)

        logger.info("Tool call '%s'", name)
        logger.debug("Tool arguments: %s", arguments)
        start = time.monotonic()
        text = handler(arguments)
        logger.info("Tool call '%s' completed in %.1fms", name, (time.monotonic() - start) * 1000)
        return _text_result(text)

    # ─── CATALOG TOOLS ────────────────────────────────────────────────

    def _add_pedal(self, args: dict[str, Any]) -> str:
        manufacturer = _require_str(args, "manufacturer")
        model_name = _require_str(args, "modelName")
        raw_params = _require(args, "parameters")
        if not isinstance(raw_params, list):
            raise ValidationError("parameters must be a list")

        parameters = []
        for i, item in enumerate(raw_params):
            if not isinstance(item, dict):
                raise ValidationError(f"parameters[{i}] must be an object")
            for key in ("name", "ccNumber"):
                if key not in item:
                    raise MissingArgumentError(f"parameters[{i}].{key}")
            parameters.append(Parameter.from_dict(item))

        device = Device(
            id=make_device_id(manufacturer, model_name),
            manufacturer=manufacturer,
            model_name=model_name,
            version=args.get("version"),
            control_channel=_as_int(args.get("midiChannel", 1), "midiChannel"),
            parameters=tuple(parameters),
            description=args.get("description"),
        )
        self._catalog.save(device)
        logger.info("Saved pedal %s with %d parameters", device.id, len(parameters))
        return (
            f"Successfully added pedal: {device.display_name} with "
            f"{len(parameters)} parameters (id: {device.id})"
        )

    def _get_pedal(self, args: dict[str, Any]) -> str:
        device = self._catalog.require(_require_str(args, "pedalId"))
        data = device.to_dict()
        category = args.get("category")
        if category is not None:
            if not isinstance(category, str):
                raise ValidationError(f"category must be a string, got {category!r}")
            data["parameters"] = [p.to_dict() for p in device.parameters_in_category(category)]
        return json.dumps(data, indent=2)

    def _remove_pedal(self, args: dict[str, Any]) -> str:
        device_id = _require_str(args, "pedalId")
        if not self._catalog.delete(device_id):
            raise DeviceNotFoundError(device_id)
        logger.info("Removed pedal %s", device_id)
        return f"Successfully removed pedal: {device_id}"

    def _list_pedals(self, args: dict[str, Any]) -> str:
        devices = self._catalog.list_all()
        if not devices:
            return "No pedals available. Use add_pedal to register one."
        lines = [
            f"{d.id}: {d.display_name} ({len(d.parameters)} parameters)"
            for d in devices
        ]
        return "Available pedals:\n" + "\n".join(lines)

    def _generate_cc_command(self, args: dict[str, Any]) -> str:
        device = self._catalog.require(_require_str(args, "pedalId"))
        param = device.require_parameter(_require_str(args, "parameterName"))
        requested = _require_int(args, "value")
        value = param.clamp(requested)

        message = ControlChangeMessage(
            device.control_channel, param.control_number, value, param.name,
        )
        lines = [
            f"MIDI Command for {device.display_name}:",
            f"Parameter: {param.name} (CC {param.control_number})",
            f"Value: {value}",
            f"Channel: {device.control_channel}",
            f"MIDI Bytes: {message.to_hex()}",
        ]
        if value != requested:
            lines.append(
                f"Note: requested {requested} was clamped into "
                f"{param.min_value}-{param.max_value}"
            )
        return "\n".join(lines)

    def _interpret_sound_request(self, args: dict[str, Any]) -> str:
        device = self._catalog.require(_require_str(args, "pedalId"))
        request = _require_str(args, "request")
        return render(device, interpret(device, request))

    def _list_h90_algorithms(self, args: dict[str, Any]) -> str:
        request = args.get("request")
        category = args.get("category")
        if request:
            algorithms = eventide_h90.suggest_algorithms(str(request))
            heading = f"H90 algorithms for \"{request}\":"
            if not algorithms:
                return (
                    f"No H90 algorithm category matched \"{request}\".\n"
                    f"Categories: {', '.join(eventide_h90.categories())}"
                )
        elif category:
            algorithms = eventide_h90.algorithms_in_category(str(category))
            if not algorithms:
                raise ValidationError(
                    f"Unknown H90 category '{category}'. "
                    f"Known: {', '.join(eventide_h90.categories())}"
                )
            heading = f"H90 {algorithms[0].category} algorithms:"
        else:
            algorithms = list(eventide_h90.ALGORITHMS.values())
            heading = "H90 algorithms:"
        lines = [heading]
        lines.extend(f"  {a.describe()}" for a in algorithms)
        lines.append("Select with CC10 (algorithm A) or CC20 (algorithm B).")
        return "\n".join(lines)

    # ─── SENDING TOOLS ────────────────────────────────────────────────

    def _control_change(
        self, device: Device, cc: int, value: int, description: str | None,
    ) -> ControlChangeMessage:
        param = device.parameter_by_cc(cc)
        if param is not None:
            value = param.clamp(value)
        name = param.name if param is not None else f"CC {cc}"
        return ControlChangeMessage(
            device.control_channel, cc, value,
            parameter_name=name,
            description=description or f"Set {name} to {value}",
        )

    def _execute_midi_command(self, args: dict[str, Any]) -> str:
        device = self._catalog.require(_require_str(args, "pedalId"))
        message = self._control_change(
            device,
            _require_int(args, "ccNumber"),
            _require_int(args, "value"),
            args.get("description"),
        )
        result = self._executor.execute(message)
        if result.success:
            logger.info("execute_midi_command: %s", result.message)
        else:
            logger.error("execute_midi_command failed: %s", result.message)

        return "\n".join([
            "MIDI Command Execution:",
            f"Status: {_status_word(result)}",
            f"Pedal: {device.display_name}",
            f"Parameter: {message.parameter_name} (CC {message.control_number})",
            f"Value: {message.value}",
            f"Channel: {device.control_channel}",
            f"Message: {result.message}",
            f"MIDI Bytes: {message.to_hex()}",
        ])

    def _execute_midi_commands(self, args: dict[str, Any]) -> str:
        device = self._catalog.require(_require_str(args, "pedalId"))
        commands = _require(args, "commands")
        if not isinstance(commands, list):
            raise ValidationError("commands must be a list")

        # Items that fail to build get a local result and never reach the executor
        slots: list[ControlChangeMessage | ExecutionResult] = []
        for i, item in enumerate(commands):
            try:
                if not isinstance(item, dict):
                    raise ValidationError("command must be an object")
                slots.append(self._control_change(
                    device,
                    _require_int(item, "ccNumber"),
                    _require_int(item, "value"),
                    item.get("description"),
                ))
            except PedalMidiError as e:
                logger.warning("Command %d rejected: %s", i + 1, e)
                slots.append(ExecutionResult(False, f"Invalid command: {e}"))

        messages = [s for s in slots if isinstance(s, ControlChangeMessage)]
        sent = iter(self._executor.execute_many(messages))
        results = [next(sent) if isinstance(s, ControlChangeMessage) else s for s in slots]

        succeeded = sum(1 for r in results if r.success)
        lines = [
            "MIDI Commands Execution:",
            f"Pedal: {device.display_name}",
            f"Commands executed: {len(results)}",
            f"Successful: {succeeded}",
            f"Failed: {len(results) - succeeded}",
            "",
        ]
        for i, result in enumerate(results, start=1):
            lines.append(f"Command {i}:")
            lines.append(f"  Status: {_status_word(result)}")
            lines.append(f"  Message: {result.message}")
        return "\n".join(lines)

    def _execute_program_change(self, args: dict[str, Any]) -> str:
        device = self._catalog.require(_require_str(args, "pedalId"))
        program = _require_int(args, "program")
        message = ProgramChangeMessage(
            device.control_channel, program,
            description=args.get("description") or f"Switch to preset {program}",
        )
        result = self._executor.execute(message)
        return "\n".join([
            "MIDI Program Change Execution:",
            f"Status: {_status_word(result)}",
            f"Pedal: {device.display_name}",
            f"Program: {program}",
            f"Channel: {device.control_channel}",
            f"Message: {result.message}",
            f"MIDI Bytes: {message.to_hex()}",
        ])

    def _preset_values(self, device_id: str, raw: dict[str, Any]) -> dict[int, int]:
        device = self._catalog.get(device_id)
        shortcuts = template_parameters(device_id)
        values: dict[int, int] = {}
        for key, value in raw.items():
            key = str(key).strip()
            if key.isdigit():
                cc = int(key)
            elif key.lower() in shortcuts:
                cc = shortcuts[key.lower()]
            elif device is not None:
                cc = device.require_parameter(key).control_number
            else:
                raise ValidationError(
                    f"Parameter '{key}' needs a CC number: pedal {device_id} is not in the catalog"
                )
            values[cc] = _as_int(value, f"parameters[{key}]")
        return values

    def _generate_preset(self, args: dict[str, Any]) -> str:
        device_id = _require_str(args, "pedalId")
        name = _require_str(args, "presetName")
        raw = _require(args, "parameters")
        if not isinstance(raw, dict):
            raise ValidationError("parameters must be an object of CC number -> value")

        composer = self._registry.require(device_id)
        composed = composer.build(self._preset_values(device_id, raw), name)
        sysex = composed.message

        lines = [
            f"{composer.family} preset '{name}' generated",
            f"Parameters mapped: {composed.mapped}",
            f"Parameters skipped: {composed.skipped}",
            f"Length: {len(sysex)} bytes",
            f"Sysex: {sysex.to_hex()}",
        ]
        if _as_bool(args.get("send", False), "send"):
            result = self._executor.execute(sysex)
            lines.append(f"Send status: {_status_word(result)}")
            lines.append(f"Message: {result.message}")
        return "\n".join(lines)

    def _send_sysex(self, args: dict[str, Any]) -> str:
        text = args.get("sysexData")
        if not isinstance(text, str) or not text.strip():
            raise MissingArgumentError("sysexData")
        description = args.get("description")
        sysex = SysexMessage(parse_hex(text), description=description)

        result = self._executor.execute(sysex)
        if result.success:
            lines = ["Sysex transmission successful"]
        else:
            lines = ["Sysex transmission failed"]
        if description:
            lines.append(f"Description: {description}")
        if result.success:
            lines.append(f"Bytes transmitted: {result.bytes_transmitted}")
            lines.append(f"Data sent: {sysex.to_hex()}")
            lines.append(f"Status: {result.message}")
        else:
            lines.append(f"Error: {result.message}")
            lines.append(f"Data attempted: {sysex.to_hex()}")
        return "\n".join(lines)

    # ─── STATUS TOOLS ─────────────────────────────────────────────────

    def _get_midi_status(self, args: dict[str, Any]) -> str:
        return "\n".join([
            "MIDI Executor Status:",
            f"Available: {self._executor.is_available()}",
            f"Status: {self._executor.status()}",
        ])

    def _rescan_midi_devices(self, args: dict[str, Any]) -> str:
        logger.info("Re-scanning MIDI devices")
        if isinstance(self._executor, MidiPortExecutor):
            self._executor.reconnect()

        available = self._executor.is_available()
        lines = [
            "MIDI Device Re-scan Complete",
            f"Connection Status: {'CONNECTED' if available else 'DISCONNECTED'}",
            f"Device Details: {self._executor.status()}",
        ]
        if not available:
            lines.extend([
                "No MIDI devices found. Please check:",
                "1. MIDI interface is connected and powered",
                "2. Pedals are connected to MIDI interface",
                "3. No other applications are using the MIDI interface",
            ])
        return "\n".join(lines)
