"""Meris Mercury X modular reverb: preset layout and CC table.

Preset offsets are linear: CC n (1-100) is stored at byte n + 8 of the
231-byte frame. The default blocks reproduce a factory dump that the pedal
accepts as-is.
"""

from __future__ import annotations

from ..models.device import Device, Parameter
from .composer import PresetLayout

DEVICE_ID = "meris_mercury_x"

HEADER = bytes([0xF0, 0x00, 0x02, 0x10, 0x00, 0x02, 0x01, 0x26])
FRAME_LENGTH = 231
NAME_OFFSET = 212
NAME_LENGTH = 16

_DEFAULTS = (
    # preset enable flag, mix/trims, control bytes, levels, tone, predelay
    (8, bytes([
        0x01, 0x70, 0x67, 0x00, 0x00, 0x00, 0x08, 0x40,
        0x46, 0x00, 0x7F, 0x00, 0x00, 0x40, 0x00, 0x00,
        0x00, 0x00, 0x25, 0x7F, 0x40,
    ])),
    (32, bytes([
        0x7F, 0x42, 0x2A, 0x00, 0x00, 0x00, 0x00, 0x16,
        0x10, 0x1E, 0x46, 0x00, 0x00, 0x00, 0x00, 0x00,
        0x1D, 0x59, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
        0x64, 0x00, 0x20, 0x00, 0x00,
    ])),
    (80, bytes([
        0x24, 0x36, 0x49, 0x5B, 0x6D, 0x7F, 0x55, 0x55,
        0x55, 0x55, 0x55, 0x55, 0x55, 0x55, 0x00, 0x00,
    ])),
    (107, bytes([0x4E, 0x40, 0x40])),
    (115, bytes([0x20, 0x7F, 0x7B])),
    (123, bytes([0x40])),
    (131, bytes([0x3F, 0x7F, 0x00, 0x7F])),
    (160, bytes([
        0x01, 0x10, 0x20, 0x30, 0x40, 0x50, 0x60, 0x70,
        0x7F, 0x70, 0x60, 0x50, 0x40, 0x30, 0x20, 0x10,
        0x00, 0x00, 0x7F, 0x00, 0x00, 0x7F, 0x00, 0x00,
        0x7F, 0x00, 0x00, 0x7F, 0x00, 0x00, 0x7F, 0x00,
        0x00, 0x7F, 0x00, 0x00, 0x7F, 0x00, 0x00, 0x00,
        0x01, 0x4D, 0x01, 0x03, 0x00, 0x14, 0x00, 0x44,
        0x00, 0x39, 0x00, 0x3B,
    ])),
)

LAYOUT = PresetLayout(
    family="Mercury X",
    header=HEADER,
    frame_length=FRAME_LENGTH,
    name_offset=NAME_OFFSET,
    name_length=NAME_LENGTH,
    offsets={cc: cc + 8 for cc in range(1, 101)},
    defaults=_DEFAULTS,
)

TEMPLATE_PARAMETERS = {
    "mix": 1,
    "reverb_structure": 5,
    "decay": 11,
    "predelay": 12,
    "tone": 10,
    "input_level": 7,
    "output_level": 8,
    "reverb_level": 9,
    "dynamics_type": 19,
    "filter_freq": 33,
    "modulation_rate": 45,
}

_NAMED = [
    (1, "Mix", "Global", "%", "Wet/dry mix balance"),
    (2, "Dry Trim", "Global", "dB", "Dry signal level trim"),
    (3, "Wet Trim", "Global", "dB", "Wet signal level trim"),
    (4, "Expression Pedal", "Expression", "%", "Expression pedal input"),
    (5, "Preamp Type", "Preamp", None, "Preamp processor type"),
    (6, "Preamp Location", "Preamp", None, "Preamp position in the signal path"),
    (7, "Gain/Volume Pedal Level", "Preamp", "dB", "Preamp gain"),
    (8, "Balance", "Preamp", "%", "Preamp balance"),
    (11, "Preamp Level", "Preamp", "dB", "Preamp output level"),
    (13, "Delay Structure", "Delay", None, "Predelay structure"),
    (14, "Bypass", "Control", None, "0-63=bypass, 64-127=engaged"),
    (15, "Predelay Time", "Predelay", "ms", "Time before the reverb tank"),
    (16, "Predelay Type", "Predelay", None,
     "0-42=Digital, 43-85=BBD, 86-127=Magnetic; colours the predelay, not the reverb"),
    (17, "Left Note Division", "Timing", None, "Note division for the left predelay"),
    (18, "Right Note Division", "Timing", None, "Note division for the right predelay"),
    (19, "Predelay Feedback", "Predelay", "%",
     "0=single reflection, 64=moderate repeats, 127=infinite"),
    (20, "Cross Feedback", "Delay", "%", "Feedback between left and right predelay"),
    (21, "Predelay Modulation", "Predelay", "%", "Predelay modulation depth"),
    (22, "Predelay Damping", "Predelay", "%", "High-frequency damping of the predelay"),
    (23, "Dry Blend", "Mix", "%", "Dry signal blend"),
    (24, "Half Speed", "Delay", None, "Halve the predelay clock"),
    (28, "MIDI Clock", "MIDI", None, "Follow incoming MIDI clock"),
    (32, "Reverb Structure", "Reverb", None, "Reverb tank algorithm"),
    (42, "Predelay Blend", "Reverb", "%", "Predelay feeding the tank versus parallel"),
    (43, "Gate Attack", "Gate", "ms", "Gate attack time"),
    (44, "Gate Hold", "Gate", "ms", "Gate hold time"),
    (45, "Gate Decay", "Gate", "ms", "Gate decay time"),
    (62, "Dynamics Type", "Dynamics", None, "Dynamics processor type"),
    (63, "Dynamics Location", "Dynamics", None, "Dynamics position in the signal path"),
    (70, "Pitch Type", "Pitch", None, "Pitch processor type"),
    (71, "Pitch Location", "Pitch", None, "Pitch position in the signal path"),
    (78, "Filter Type", "Filter", None, "Filter processor type"),
    (79, "Filter Location", "Filter", None, "Filter position in the signal path"),
    (86, "Modulation Type", "Modulation", None, "Modulation processor type"),
    (87, "Modulation Location", "Modulation", None, "Modulation position in the signal path"),
    (117, "Toggle Tuner Mode", "Control", None, "Any value toggles the tuner"),
    (118, "Trigger Hold Modifier", "Control", None, "Press = 127, release = 0"),
]

_NUMBERED = [
    (33, 9, "Reverb Parameter", "Reverb"),
    (64, 6, "Dynamics Parameter", "Dynamics"),
    (72, 6, "Pitch Parameter", "Pitch"),
    (80, 6, "Filter Parameter", "Filter"),
    (88, 6, "Modulation Parameter", "Modulation"),
]


def _parameters() -> tuple[Parameter, ...]:
    params = [
        Parameter(name, cc, description=desc, unit=unit, category=category)
        for cc, name, category, unit, desc in _NAMED
    ]
    for first, count, label, category in _NUMBERED:
        params.extend(
            Parameter(f"{label} {i + 1}", first + i, category=category)
            for i in range(count)
        )
    return tuple(sorted(params, key=lambda p: p.control_number))


DEVICE = Device(
    id=DEVICE_ID,
    manufacturer="Meris",
    model_name="Mercury X",
    control_channel=1,
    parameters=_parameters(),
    description=(
        "Modular reverb with a PREDELAY + REVERB TANK architecture. The predelay "
        "creates early reflections that feed the reverb algorithm; it is not a "
        "standalone delay."
    ),
)
