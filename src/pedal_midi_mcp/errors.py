"""Exception types raised by the catalog, codec and dispatcher layers."""

from __future__ import annotations


class PedalMidiError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(PedalMidiError, ValueError):
    """A field is outside its protocol range or a frame is malformed."""


class LookupFailure(PedalMidiError, LookupError):
    """A device, parameter, tool or method could not be resolved."""


class DeviceNotFoundError(LookupFailure):
    def __init__(self, device_id: str) -> None:
        super().__init__(f"Pedal not found: {device_id}")
        self.device_id = device_id


class ParameterNotFoundError(LookupFailure):
    def __init__(self, device_id: str, name: str) -> None:
        super().__init__(f"Parameter '{name}' not found on pedal {device_id}")
        self.device_id = device_id
        self.name = name


class UnknownToolError(LookupFailure):
    def __init__(self, name: str | None) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class MissingArgumentError(PedalMidiError, KeyError):
    """A required tool argument is absent."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        # KeyError would otherwise repr() the key
        return f"Missing required parameter: {self.key}"
