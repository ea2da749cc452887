"""Device and parameter records.

A ``Device`` is one MIDI-controllable processor and owns an ordered tuple of
``Parameter`` entries. Both are immutable; the catalog replaces whole devices.

JSON layout (one document per device)::

    {
      "id": "meris_lvx",
      "manufacturer": "Meris",
      "modelName": "LVX",
      "version": "1.0.2b",
      "midiChannel": 2,
      "description": "...",
      "parameters": [
        {"name": "Mix", "ccNumber": 1, "minValue": 0, "maxValue": 127,
         "unit": "%", "category": "Global"}
      ]
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ParameterNotFoundError, ValidationError
from ..protocol.codec import check_channel, check_data, clamp


def make_device_id(manufacturer: str, model_name: str) -> str:
    """Derive a catalog id, e.g. ("Meris", "Mercury X") -> "meris_mercury_x"."""
    return f"{manufacturer.lower()}_{model_name.lower().replace(' ', '_')}"


@dataclass(frozen=True)
class Parameter:
    """A named Control Change with its declared value range."""

    name: str
    control_number: int
    min_value: int = 0
    max_value: int = 127
    description: str | None = None
    unit: str | None = None
    category: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError(
                f"Parameter name must be a non-empty string, got {self.name!r}"
            )
        check_data(self.control_number, "CC number")
        check_data(self.min_value, "minValue")
        check_data(self.max_value, "maxValue")
        if self.min_value > self.max_value:
            raise ValidationError(
                f"Parameter '{self.name}': minValue {self.min_value} "
                f"exceeds maxValue {self.max_value}"
            )

    def clamp(self, value: int) -> int:
        """Fit ``value`` into this parameter's declared range."""
        return clamp(value, self.min_value, self.max_value)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "name": self.name,
            "ccNumber": self.control_number,
            "minValue": self.min_value,
            "maxValue": self.max_value,
        }
        for key in ("description", "unit", "category"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Parameter:
        return cls(
            name=data["name"],
            control_number=data["ccNumber"],
            min_value=data.get("minValue", 0),
            max_value=data.get("maxValue", 127),
            description=data.get("description"),
            unit=data.get("unit"),
            category=data.get("category"),
        )


@dataclass(frozen=True)
class Device:
    """A MIDI-controllable pedal and its parameter table."""

    id: str
    manufacturer: str
    model_name: str
    version: str | None = None
    control_channel: int = 1
    parameters: tuple[Parameter, ...] = field(default_factory=tuple)
    description: str | None = None

    def __post_init__(self) -> None:
        check_channel(self.control_channel)
        object.__setattr__(self, "parameters", tuple(self.parameters))

    @property
    def display_name(self) -> str:
        return f"{self.manufacturer} {self.model_name}"

    def parameter_by_cc(self, control_number: int) -> Parameter | None:
        for param in self.parameters:
            if param.control_number == control_number:
                return param
        return None

    def parameter_by_name(self, name: str) -> Parameter | None:
        wanted = name.casefold()
        for param in self.parameters:
            if param.name.casefold() == wanted:
                return param
        return None

    def require_parameter(self, name: str) -> Parameter:
        param = self.parameter_by_name(name)
        if param is None:
            raise ParameterNotFoundError(self.id, name)
        return param

    def parameters_in_category(self, category: str) -> list[Parameter]:
        wanted = category.casefold()
        return [
            p for p in self.parameters
            if p.category is not None and p.category.casefold() == wanted
        ]

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "manufacturer": self.manufacturer,
            "modelName": self.model_name,
            "midiChannel": self.control_channel,
            "parameters": [p.to_dict() for p in self.parameters],
        }
        if self.version is not None:
            d["version"] = self.version
        if self.description is not None:
            d["description"] = self.description
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Device:
        manufacturer = data["manufacturer"]
        model_name = data["modelName"]
        return cls(
            id=data.get("id") or make_device_id(manufacturer, model_name),
            manufacturer=manufacturer,
            model_name=model_name,
            version=data.get("version"),
            control_channel=data.get("midiChannel", 1),
            parameters=tuple(Parameter.from_dict(p) for p in data.get("parameters", [])),
            description=data.get("description"),
        )

    def __repr__(self) -> str:
        return f"Device(id={self.id!r}, parameters={len(self.parameters)})"
