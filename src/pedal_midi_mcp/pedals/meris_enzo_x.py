"""Meris Enzo X guitar synthesizer: preset layout and CC table."""

from __future__ import annotations

from ..models.device import Device, Parameter
from .composer import PresetLayout

DEVICE_ID = "meris_enzo_x"

HEADER = bytes([0xF0, 0x00, 0x02, 0x10, 0x00, 0x02, 0x02, 0x26])
FRAME_LENGTH = 231
NAME_OFFSET = 212
NAME_LENGTH = 16

_DEFAULTS = (
    (9, bytes([0x60, 0x40, 0x40])),                          # mix 75%, trims centred
    (13, bytes([0x01, 0x7F, 0x40, 0x40, 0x60, 0x20])),       # poly, fx on, levels
    (19, bytes([0x00, 0x40])),                               # osc 1 saw, centre octave
    (23, bytes([0x7F])),                                     # osc 1 full level
    (25, bytes([0x01, 0x40])),                               # osc 2 square, centre octave
    (29, bytes([0x40])),                                     # osc 2 half level
    (31, bytes([0x00, 0x60, 0x20])),                         # low pass, cutoff, resonance
    (37, bytes([0x10, 0x40, 0x60, 0x30])),                   # amp ADSR
    (59, bytes([0x55] * 8)),
    (67, bytes([0x00, 0x00, 0x00])),                         # drive/ambience/mod off
    (160, bytes([
        0x10, 0x20, 0x30, 0x40, 0x50, 0x60, 0x70, 0x7F,
        0x70, 0x60, 0x50, 0x40, 0x30, 0x20, 0x10, 0x00,
    ])),
)

LAYOUT = PresetLayout(
    family="Enzo X",
    header=HEADER,
    frame_length=FRAME_LENGTH,
    name_offset=NAME_OFFSET,
    name_length=NAME_LENGTH,
    offsets={cc: cc + 8 for cc in range(1, 101)},
    defaults=_DEFAULTS,
)

TEMPLATE_PARAMETERS = {
    "mix": 1,
    "synth_mode": 5,
    "osc1_waveform": 11,
    "osc2_waveform": 17,
    "filter_cutoff": 24,
    "filter_resonance": 25,
    "amp_attack": 29,
    "amp_decay": 30,
    "amp_sustain": 31,
    "amp_release": 32,
    "lfo1_rate": 38,
    "drive_amount": 49,
}

_PARAMETERS = [
    (1, "Mix", "Mix", "%"),
    (2, "Dry Trim", "Mix", "dB"),
    (3, "Wet Trim", "Mix", "dB"),
    (4, "Expression Pedal", "Expression", "%"),
    (5, "Drive Type", "Drive", None),
    (6, "Drive Location", "Drive", None),
    (7, "Gain/Volume/Sample Rate", "Drive", "dB"),
    (8, "Balance/Bits", "Drive", None),
    (9, "Drive Level", "Drive", "dB"),
    (10, "Ambience Type", "Ambience", None),
    (11, "Feedback/Decay", "Ambience", "%"),
    (12, "Half Speed", "Ambience", None),
    (13, "Ambience Mod", "Ambience", "%"),
    (14, "Bypass", "Control", None),
    (15, "Time", "Clock", "BPM"),
    (16, "Ambience Highs", "Ambience", "%"),
    (17, "Echo Left Division", "Ambience", None),
    (18, "Echo Right Division", "Ambience", None),
    (19, "Ambience + Echo Mix", "Ambience", "%"),
    (20, "Ambience Lows", "Ambience", "%"),
    (21, "MIDI Clock", "MIDI", None),
    (22, "Synth Mode", "Synth", None),
    (23, "Synth Pitch", "Oscillator", "semitones"),
    (24, "OSC 1 Wave Shape", "Oscillator", None),
    (25, "OSC 2 Wave Shape", "Oscillator", None),
    (26, "OSC 2 Pitch Offset", "Oscillator", "semitones"),
    (27, "OSC 2 Detune", "Oscillator", "cents"),
    (28, "Synth Glide", "Oscillator", "seconds"),
    (29, "OSC 1 Gain", "Oscillator", "%"),
    (30, "OSC 2 Gain", "Oscillator", "%"),
    (31, "XMOD", "Oscillator", "%"),
    (32, "ARP Mode", "Arpeggiator", None),
    (33, "ARP Steps", "Arpeggiator", None),
    (34, "ARP Octaves", "Arpeggiator", None),
    (35, "Level", "Oscillator", "dB"),
    (36, "Dry Blend", "Mix", "%"),
    (37, "ARP Cycle Latch", "Arpeggiator", None),
    (38, "Filter Type", "Filter", None),
    (39, "Filter Frequency", "Filter", "Hz"),
    (40, "Filter Topology", "Filter", None),
    (41, "Filter Resonance", "Filter", "%"),
    (42, "Filter Noise", "Filter", "%"),
    (43, "Twin Filter Spread", "Filter", "%"),
    (44, "Filter Envelope Amount", "Filter", "%"),
    (46, "Filter Envelope Type", "Filter", None),
    (47, "Filter Attack Time", "Filter", "seconds"),
    (48, "Filter Decay Time", "Filter", "seconds"),
    (49, "Filter Sustain Time", "Filter", "seconds"),
    (50, "Filter Sustain Level", "Filter", "%"),
    (51, "Filter Release Time", "Filter", "seconds"),
    (52, "Direction", "Envelope", None),
    (53, "Depth", "Envelope", "%"),
    (54, "Note Persist", "Envelope", "%"),
    (55, "Amplitude Attack Time", "Envelope", "seconds"),
    (56, "Amplitude Decay Time", "Envelope", "seconds"),
    (57, "Amplitude Sustain Level", "Envelope", "%"),
    (58, "Amplitude Sustain Time", "Envelope", "seconds"),
    (59, "Amplitude Release Time", "Envelope", "seconds"),
    (60, "Oscillator Mod Speed", "Oscillator", "Hz"),
    (61, "Oscillator Mod Depth", "Oscillator", "%"),
    (62, "Oscillator Mod Ramp Time", "Oscillator", "seconds"),
    (86, "Mod Type", "Modulation", None),
    (87, "Mod Location", "Modulation", None),
    (88, "Mod Speed/Frequency", "Modulation", "Hz"),
    (89, "Mod Depth", "Modulation", "%"),
    (90, "Mod Mode/Waveshape/Stages", "Modulation", None),
    (91, "Mod Feedback", "Modulation", "%"),
    (92, "Mod Mix", "Modulation", "%"),
    (93, "Mod Note Div", "Modulation", None),
    (117, "Toggle Tuner Mode", "Control", None),
    (118, "Trigger Hold Modifier", "Control", None),
]

DEVICE = Device(
    id=DEVICE_ID,
    manufacturer="Meris",
    model_name="Enzo X",
    control_channel=3,
    parameters=tuple(
        Parameter(name, cc, unit=unit, category=category)
        for cc, name, category, unit in _PARAMETERS
    ),
    description=(
        "Modular guitar SYNTHESIZER that tracks your playing. Key controls: "
        "Synth Mode (CC22), OSC wave shapes (CC24/25), Filter Frequency (CC39), "
        "Filter Resonance (CC41), Amp Attack (CC55). Not a delay or reverb."
    ),
)
