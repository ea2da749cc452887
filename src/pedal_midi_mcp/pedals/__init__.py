"""Built-in device definitions and per-family preset composers."""

from __future__ import annotations

from ..models.device import Device
from . import eventide_h90, meris_enzo_x, meris_lvx, meris_mercury_x, quad_cortex
from .composer import ComposedPreset, PresetComposer, PresetLayout, PresetRegistry

_PRESET_FAMILIES = (meris_lvx, meris_mercury_x, meris_enzo_x)


def builtin_devices() -> list[Device]:
    """Catalog entries shipped with the server."""
    return [
        meris_lvx.DEVICE,
        meris_mercury_x.DEVICE,
        meris_enzo_x.DEVICE,
        quad_cortex.DEVICE,
        eventide_h90.DEVICE,
    ]


def default_registry() -> PresetRegistry:
    """Registry of every family that has a SysEx preset format."""
    return PresetRegistry({
        module.DEVICE_ID: PresetComposer(module.LAYOUT) for module in _PRESET_FAMILIES
    })


def template_parameters(device_id: str) -> dict[str, int]:
    """Commonly used CCs for sound design, keyed by a short name."""
    for module in _PRESET_FAMILIES:
        if module.DEVICE_ID == device_id:
            return dict(module.TEMPLATE_PARAMETERS)
    return {}
