"""Meris LVX modular delay: preset layout and CC table.

Preset offsets (231-byte frame)::

    CC 1-4    -> 9-12    global mix / trims / expression
    CC 5-8    -> 13-16   preamp type, location, parameters 1-2
    CC 11     -> 17      preamp level
    CC 13-103 -> 18-108  delay, dynamics, pitch, filter, mod, looper
    CC 117    -> 109     tuner toggle
    CC 118    -> 110     hold modifier
"""

from __future__ import annotations

from ..models.device import Device, Parameter
from .composer import PresetLayout

DEVICE_ID = "meris_lvx"

HEADER = bytes([0xF0, 0x00, 0x02, 0x10, 0x00, 0x02, 0x00, 0x26])
FRAME_LENGTH = 231
NAME_OFFSET = 212
NAME_LENGTH = 16

_OFFSETS = {1: 9, 2: 10, 3: 11, 4: 12, 5: 13, 6: 14, 7: 15, 8: 16, 11: 17}
_OFFSETS.update({cc: cc + 5 for cc in range(13, 104)})
_OFFSETS.update({117: 109, 118: 110})

_DEFAULTS = (
    (9, bytes([0x7F, 0x40, 0x40])),              # mix 100%, trims centred
    (18, bytes([0x00, 0x7F, 0x40, 0x56])),       # standard structure, fx on, digital
    (24, bytes([0x20])),                         # low feedback
    (35, bytes([
        0x28, 0x6E, 0x32, 0x1E, 0x0A, 0x32, 0x0A, 0x3C,
        0x7F, 0x7F, 0x7F, 0x7F, 0x7F, 0x7F, 0x7F, 0x7F,
        0x00, 0x12, 0x24, 0x36, 0x49, 0x5B, 0x6D, 0x7F,
    ])),
    (59, bytes([0x55] * 8)),                     # sequencer
    (160, bytes([
        0x10, 0x20, 0x30, 0x40, 0x50, 0x60, 0x70, 0x7F,
        0x70, 0x60, 0x50, 0x40, 0x30, 0x20, 0x10, 0x00,
    ])),
)

LAYOUT = PresetLayout(
    family="LVX",
    header=HEADER,
    frame_length=FRAME_LENGTH,
    name_offset=NAME_OFFSET,
    name_length=NAME_LENGTH,
    offsets=_OFFSETS,
    defaults=_DEFAULTS,
)

# Most useful CCs for sound design
TEMPLATE_PARAMETERS = {
    "mix": 1,
    "time": 15,
    "feedback": 19,
    "delay_type": 16,
    "modulation": 21,
    "filter_freq": 80,
    "filter_res": 81,
    "dynamics_type": 62,
    "pitch_type": 70,
    "mod_type": 86,
}

_NAMED = [
    (1, "Mix", "Global", "%", "Wet/dry mix balance"),
    (2, "Dry Trim", "Global", "dB", "Dry signal level trim"),
    (3, "Wet Trim", "Global", "dB", "Wet signal level trim"),
    (4, "Expression Pedal", "Expression", "%", "Expression pedal input"),
    (5, "Preamp Type", "Preamp", None,
     "0-18=OFF, 19-36=Volume Pedal, 37-54=Tube, 55-73=Transistor, "
     "74-91=Op-Amp, 92-109=Drive, 110-127=Bitcrusher"),
    (6, "Preamp Location", "Preamp", None, "0-31=PRE+DRY, 32-63=PRE, 64-95=FDBK, 96-127=POST"),
    (13, "Delay Structure", "Delay", None,
     "0-21=Standard, 22-42=Multitap, 43-63=Multifilter, 64-85=Poly, "
     "86-106=Reverse, 107-127=Series"),
    (14, "Bypass", "Control", None, "0-63=bypass, 64-127=engaged"),
    (15, "Time", "Delay", "ms", "Delay time"),
    (16, "Delay Type", "Delay", None, "Delay engine character"),
    (17, "Left Note Division", "Timing", None, "Note division for the left channel"),
    (18, "Right Note Division", "Timing", None, "Note division for the right channel"),
    (19, "Feedback", "Delay", "%", "Delay feedback"),
    (20, "Cross Feedback", "Delay", "%", "Feedback between left and right"),
    (21, "Delay Mod", "Modulation", "%", "Delay line modulation depth"),
    (62, "Dynamic Type", "Dynamics", None, "Dynamics processor type"),
    (63, "Dynamic Location", "Dynamics", None, "Dynamics position in the signal path"),
    (70, "Pitch Type", "Pitch", None, "Pitch processor type"),
    (71, "Pitch Location", "Pitch", None, "Pitch position in the signal path"),
    (78, "Filter Type", "Filter", None, "Filter processor type"),
    (79, "Filter Location", "Filter", None, "Filter position in the signal path"),
    (86, "Mod Type", "Modulation", None, "Modulation processor type"),
    (87, "Mod Location", "Modulation", None, "Modulation position in the signal path"),
    (94, "Looper Location", "Looper", None, "Looper position in the signal path"),
    (95, "Looper Level", "Looper", "%", "Looper playback level"),
    (96, "Looper Feedback", "Looper", "%", "Looper decay per pass"),
    (97, "Looper FX1 Select", "Looper", None, "Looper FX1 function"),
    (98, "Looper FX2 Select", "Looper", None, "Looper FX2 function"),
    (100, "Looper Record/Overdub Press", "Looper", None, "Press = 127, release = 0"),
    (101, "Looper Play/Stop Press", "Looper", None, "Press = 127, release = 0"),
    (102, "Looper FX1 Press", "Looper", None, "Press = 127, release = 0"),
    (103, "Looper FX2 Press", "Looper", None, "Press = 127, release = 0"),
    (117, "Toggle Tuner Mode", "Control", None, "Any value toggles the tuner"),
    (118, "Trigger Hold Modifier", "Control", None, "Press = 127, release = 0"),
]

# Numbered slots whose meaning depends on the selected type
_NUMBERED = [
    (7, 6, "Preamp Parameter", "Preamp"),
    (22, 40, "Delay Parameter", "Delay"),
    (64, 6, "Dynamic Parameter", "Dynamics"),
    (72, 6, "Pitch Parameter", "Pitch"),
    (80, 6, "Filter Parameter", "Filter"),
    (88, 6, "Mod Parameter", "Modulation"),
]


def _parameters() -> tuple[Parameter, ...]:
    params = [
        Parameter(name, cc, description=desc, unit=unit, category=category)
        for cc, name, category, unit, desc in _NAMED
    ]
    for first, count, label, category in _NUMBERED:
        for i in range(count):
            params.append(Parameter(
                f"{label} {i + 1}", first + i,
                description=f"{category} parameter {i + 1}",
                category=category,
            ))
    return tuple(sorted(params, key=lambda p: p.control_number))


DEVICE = Device(
    id=DEVICE_ID,
    manufacturer="Meris",
    model_name="LVX",
    version="1.0.2b",
    control_channel=2,
    parameters=_parameters(),
    description=(
        "Meris LVX modular delay system: preamp, delay structures, dynamics, "
        "pitch, filter, modulation and looper sections"
    ),
)
