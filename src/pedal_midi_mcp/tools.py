"""Static catalog of the tools advertised through ``tools/list``."""

from __future__ import annotations

from typing import Any

from mcp.types import Tool


def _object(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


_PEDAL_ID = {"type": "string", "description": "Pedal id, e.g. 'meris_lvx'"}
_MIDI_VALUE = {"type": "integer", "minimum": 0, "maximum": 127}

_PARAMETER_SCHEMA = _object(
    {
        "name": {"type": "string"},
        "ccNumber": {"type": "integer", "minimum": 0, "maximum": 127},
        "minValue": {"type": "integer", "default": 0},
        "maxValue": {"type": "integer", "default": 127},
        "description": {"type": "string"},
        "unit": {"type": "string"},
        "category": {"type": "string"},
    },
    ["name", "ccNumber"],
)

TOOLS: tuple[Tool, ...] = (
    Tool(
        name="add_pedal",
        description="Add a new guitar pedal with its MIDI CC mappings (replaces an existing pedal with the same id)",
        inputSchema=_object(
            {
                "manufacturer": {"type": "string"},
                "modelName": {"type": "string"},
                "version": {"type": "string"},
                "midiChannel": {"type": "integer", "minimum": 1, "maximum": 16, "default": 1},
                "description": {"type": "string"},
                "parameters": {"type": "array", "items": _PARAMETER_SCHEMA},
            },
            ["manufacturer", "modelName", "parameters"],
        ),
    ),
    Tool(
        name="get_pedal",
        description="Get information about a specific pedal, optionally only one parameter category",
        inputSchema=_object(
            {
                "pedalId": _PEDAL_ID,
                "category": {"type": "string", "description": "Only list parameters in this category, e.g. 'Delay'"},
            },
            ["pedalId"],
        ),
    ),
    Tool(
        name="remove_pedal",
        description="Remove a pedal from the catalog",
        inputSchema=_object({"pedalId": _PEDAL_ID}, ["pedalId"]),
    ),
    Tool(
        name="list_pedals",
        description="List all available pedals",
        inputSchema=_object({}),
    ),
    Tool(
        name="generate_cc_command",
        description=(
            "Build the Control Change bytes for a named parameter. The value is "
            "clamped into the parameter's range; nothing is sent."
        ),
        inputSchema=_object(
            {
                "pedalId": _PEDAL_ID,
                "parameterName": {"type": "string"},
                "value": {"type": "integer"},
            },
            ["pedalId", "parameterName", "value"],
        ),
    ),
    Tool(
        name="interpret_sound_request",
        description="Suggest parameter changes for a descriptive request such as 'make it brighter'",
        inputSchema=_object(
            {"pedalId": _PEDAL_ID, "request": {"type": "string"}},
            ["pedalId", "request"],
        ),
    ),
    Tool(
        name="list_h90_algorithms",
        description=(
            "List Eventide H90 algorithms with their numbers for CC10/CC20. Filter by "
            "category, or pass a request such as 'lush echo' for suggestions."
        ),
        inputSchema=_object(
            {
                "category": {"type": "string", "description": "e.g. 'Delay', 'Reverb', 'Harmonizer'"},
                "request": {"type": "string", "description": "Free-text description of the sound"},
            }
        ),
    ),
    Tool(
        name="execute_midi_command",
        description="Execute a MIDI CC command on a pedal",
        inputSchema=_object(
            {
                "pedalId": _PEDAL_ID,
                "ccNumber": {"type": "integer", "minimum": 0, "maximum": 127},
                "value": {"type": "integer"},
                "description": {"type": "string", "description": "Optional description of what this command does"},
            },
            ["pedalId", "ccNumber", "value"],
        ),
    ),
    Tool(
        name="execute_midi_commands",
        description="Execute multiple MIDI CC commands in sequence",
        inputSchema=_object(
            {
                "pedalId": _PEDAL_ID,
                "commands": {
                    "type": "array",
                    "items": _object(
                        {
                            "ccNumber": {"type": "integer"},
                            "value": {"type": "integer"},
                            "description": {"type": "string"},
                        },
                        ["ccNumber", "value"],
                    ),
                },
            },
            ["pedalId", "commands"],
        ),
    ),
    Tool(
        name="execute_program_change",
        description="Execute a MIDI program change to switch pedal preset",
        inputSchema=_object(
            {
                "pedalId": _PEDAL_ID,
                "program": _MIDI_VALUE,
                "description": {"type": "string", "description": "Optional description of the preset"},
            },
            ["pedalId", "program"],
        ),
    ),
    Tool(
        name="generate_preset",
        description=(
            "Compose a SysEx preset for a Meris LVX, Mercury X or Enzo X. Parameter keys "
            "are CC numbers, parameter names or short names such as 'mix' or "
            "'filter_freq'. Set send=true to transmit it."
        ),
        inputSchema=_object(
            {
                "pedalId": _PEDAL_ID,
                "presetName": {"type": "string", "maxLength": 16},
                "parameters": {"type": "object", "additionalProperties": _MIDI_VALUE},
                "send": {"type": "boolean", "default": False},
            },
            ["pedalId", "presetName", "parameters"],
        ),
    ),
    Tool(
        name="send_sysex",
        description=(
            "Send sysex data directly to a MIDI device. Used to upload presets or "
            "send custom sysex messages to guitar pedals."
        ),
        inputSchema=_object(
            {
                "sysexData": {
                    "type": "string",
                    "description": "Hexadecimal sysex data to send (e.g., 'F0 00 7F 00 01 F7')",
                },
                "description": {"type": "string", "description": "Optional description of what this sysex does"},
            },
            ["sysexData"],
        ),
    ),
    Tool(
        name="get_midi_status",
        description="Get the status of the MIDI connection and executor",
        inputSchema=_object({}),
    ),
    Tool(
        name="rescan_midi_devices",
        description="Re-scan for MIDI devices (useful if devices were connected after server startup)",
        inputSchema=_object({}),
    ),
)


def tool_names() -> list[str]:
    return [tool.name for tool in TOOLS]


def list_tools_result() -> dict[str, Any]:
    """Payload for a ``tools/list`` response."""
    return {
        "tools": [
            tool.model_dump(by_alias=True, exclude_none=True, mode="json")
            for tool in TOOLS
        ]
    }
