"""Neural DSP Quad Cortex: CC table only, no preset format."""

from __future__ import annotations

from ..models.device import Device, Parameter

DEVICE_ID = "neural_dsp_quad_cortex"

# (cc, name, min, max, category, description)
_PARAMETERS = [
    (0, "Bank Select (MSB)", 0, 1, "Preset",
     "0=Preset group 0-127, 1=Preset group 128-256"),
    (1, "Expression Pedal 1", 0, 127, "Expression", "Expression pedal 1 input"),
    (2, "Expression Pedal 2", 0, 127, "Expression", "Expression pedal 2 input"),
    (32, "Bank Select (LSB) - Setlist", 0, 12, "Preset",
     "Setlist change (used with Program Change)"),
    (43, "Scene Select", 0, 7, "Scene", "Scene select A-H"),
    (44, "Tempo BPM", 0, 127, "Tempo", "Tempo in BPM"),
    (45, "Tuner Screen", 0, 127, "Display", "0-63=Tuner Off, 64-127=Tuner On"),
    (46, "Gig View Screen", 0, 127, "Display", "0-63=Gig View Off, 64-127=Gig View On"),
    (47, "Change Modes", 0, 2, "Mode", "0=Preset Mode, 1=Scene Mode, 2=Stomp Mode"),
    (48, "Looper X Parameter Editor Menu", 0, 127, "Looper",
     "0-63=Opens Looper X (Perform mode), 64-127=Closes Looper X"),
    (49, "Duplicate/Stop Duplicate", 64, 127, "Looper", "Trigger duplicate/stop duplicate"),
    (50, "Enable/Disable One Shot", 64, 127, "Looper", "Enable/disable one shot mode"),
    (51, "Enable/Disable Half Speed", 64, 127, "Looper", "Enable/disable half speed playback"),
    (52, "Punch Feature", 0, 127, "Looper", "0-63=Punch Out, 64-127=Punch In/Punch Out"),
    (53, "Record/Stop", 0, 127, "Looper", "0-63=Stop recording, 64-127=Record/Overdub/Stop"),
    (54, "Play/Stop", 64, 127, "Looper", "Play/stop looper playback"),
    (55, "Enable/Disable Reverse", 64, 127, "Looper", "Enable/disable reverse playback"),
    (56, "Undo/Redo", 64, 127, "Looper", "Undo/redo last action"),
    (57, "Duplicate Mode Parameter", 0, 1, "Looper", "0=Free, 1=Sync"),
    (58, "Quantize Parameter", 0, 9, "Looper", "0=Off, 1-8=1-8 Beats, 9=16 Beats"),
    (59, "MIDI Clock Start", 0, 1, "Looper", "0=Off, 1=On"),
    (60, "Perform/Params Mode", 0, 1, "Looper", "0=Perform Mode, 1=Params Mode"),
    (61, "Routing Mode Parameter", 0, 13, "Looper",
     "Routing mode 0-13: Grid > I/Os > Multi Out"),
    (62, "Ignore Duplicate PC", 0, 127, "MIDI",
     "0-63=Off, 64-127=On - ignore duplicate program changes"),
]


def _parameters() -> tuple[Parameter, ...]:
    footswitches = [
        (35 + i, f"Footswitch {letter} Enable/Bypass", 0, 127, "Footswitch",
         f"Enable/bypass footswitch {letter} (all modes)")
        for i, letter in enumerate("ABCDEFGH")
    ]
    rows = sorted(_PARAMETERS + footswitches, key=lambda row: row[0])
    return tuple(
        Parameter(name, cc, min_value=low, max_value=high,
                  description=desc, category=category)
        for cc, name, low, high, category, desc in rows
    )


DEVICE = Device(
    id=DEVICE_ID,
    manufacturer="Neural DSP",
    model_name="Quad Cortex",
    control_channel=4,
    parameters=_parameters(),
    description=(
        "Floor modeler with scene, stomp and preset modes. Presets are recalled "
        "with Bank Select (CC0/CC32) followed by a Program Change."
    ),
)
