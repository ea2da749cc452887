"""Fixed-layout SysEx preset composer.

Every supported family stores a preset as a fixed-width record::

    +------+---------------+-----------------------------+------------+------+
    | 0xF0 | family header | defaults + parameter bytes  | name field | 0xF7 |
    | 1 B  | 7 bytes       | at fixed per-CC offsets     | 16 bytes   | 1 B  |
    +------+---------------+-----------------------------+------------+------+

The composer algorithm is shared; only the ``PresetLayout`` data differs
between families.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..errors import LookupFailure
from ..protocol.codec import SYSEX_END, check_data, to_hex
from ..protocol.messages import SysexMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresetLayout:
    """Frame geometry and factory defaults for one device family."""

    family: str
    header: bytes
    frame_length: int
    name_offset: int
    name_length: int
    offsets: Mapping[int, int]
    defaults: tuple[tuple[int, bytes], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "offsets", MappingProxyType(dict(self.offsets)))
        if self.name_offset + self.name_length > self.frame_length - 1:
            raise ValueError(f"{self.family}: name field overlaps the terminator")
        for offset, block in self.defaults:
            if offset < len(self.header) or offset + len(block) > self.frame_length - 1:
                raise ValueError(
                    f"{self.family}: default block at {offset} falls outside the body"
                )


@dataclass(frozen=True)
class ComposedPreset:
    """A composed frame plus how many parameters landed in it."""

    message: SysexMessage
    mapped: int
    skipped: int


class PresetComposer:
    """Builds preset SysEx frames for a single device family."""

    def __init__(self, layout: PresetLayout) -> None:
        self._layout = layout

    @property
    def layout(self) -> PresetLayout:
        return self._layout

    @property
    def family(self) -> str:
        return self._layout.family

    def offset_for(self, control_number: int) -> int | None:
        """Frame offset a CC is stored at, or None for CC-only controls."""
        offset = self._layout.offsets.get(control_number)
        if offset is None or offset >= self._layout.frame_length - 1:
            return None
        return offset

    def build(self, values: Mapping[int, int], name: str) -> ComposedPreset:
        """Compose a preset frame and report mapped/skipped counts.

        Args:
            values: Control number -> value (0-127).
            name: Preset name; truncated to the family's name field.

        Raises:
            ValidationError: If any value is outside 0-127.
        """
        layout = self._layout
        family = layout.family
        logger.info(
            "Generating %s preset '%s' with %d CC parameters",
            family, name, len(values),
        )

        frame = bytearray(layout.frame_length)
        frame[: len(layout.header)] = layout.header

        for offset, block in layout.defaults:
            frame[offset : offset + len(block)] = block

        mapped = 0
        skipped = 0
        for control_number, value in values.items():
            check_data(value, f"CC{control_number} value")
            offset = self.offset_for(control_number)
            if offset is None:
                logger.warning("%s CC%s has no preset offset, skipping", family, control_number)
                skipped += 1
                continue
            frame[offset] = value & 0x7F
            mapped += 1
        logger.info("%s parameter mapping: %d mapped, %d skipped", family, mapped, skipped)

        start = layout.name_offset
        end = start + layout.name_length
        frame[start:end] = bytes(layout.name_length)
        name_bytes = name.encode("ascii", errors="replace")[: layout.name_length]
        frame[start : start + len(name_bytes)] = name_bytes

        frame[-1] = SYSEX_END
        logger.debug("%s sysex: %s", family, to_hex(bytes(frame)))

        message = SysexMessage(
            bytes(frame),
            description=f"{family} preset generated from {len(values)} parameters",
            preset_name=name,
        )
        return ComposedPreset(message=message, mapped=mapped, skipped=skipped)

    def compose_preset(self, values: Mapping[int, int], name: str) -> SysexMessage:
        return self.build(values, name).message

    def __repr__(self) -> str:
        return f"PresetComposer(family={self.family!r})"


class PresetRegistry:
    """Read-only mapping of device id -> composer."""

    def __init__(self, composers: Mapping[str, PresetComposer]) -> None:
        self._composers = MappingProxyType(dict(composers))

    def get(self, device_id: str) -> PresetComposer | None:
        return self._composers.get(device_id)

    def require(self, device_id: str) -> PresetComposer:
        composer = self.get(device_id)
        if composer is None:
            raise LookupFailure(
                f"No preset format for pedal {device_id}. "
                f"Supported: {', '.join(self.device_ids())}"
            )
        return composer

    def device_ids(self) -> list[str]:
        return sorted(self._composers)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._composers
