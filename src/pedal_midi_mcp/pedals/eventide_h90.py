"""Eventide H90 Harmonizer: CC table and algorithm directory.

The H90 runs two algorithms (A and B) at once. CC10 and CC20 pick the
algorithm for each slot by number; the numbers are grouped by category::

    Delay 0-12   Distortion 13-17   EQ 18         Harmonizer 19-33
    Looper 34    Modulation 35-47   Multi 48      Reverb 49-62
    Synth 63-65  Utility 66-67

The ``.pgm90`` program-file format is not composed here; presets are
recalled with Program Change and shaped with CCs.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models.device import Device, Parameter

DEVICE_ID = "eventide_h90"


@dataclass(frozen=True)
class AlgorithmInfo:
    """One selectable H90 algorithm."""

    number: int
    name: str
    category: str
    key_parameters: tuple[str, ...] = ("mix",)

    def describe(self) -> str:
        return f"{self.number}: {self.name} [{self.category}] ({', '.join(self.key_parameters)})"


_DELAY = ("mix", "delay_time", "feedback")
_PITCH = ("mix", "pitch_a", "pitch_b")
_MOD = ("mix", "depth", "speed")
_REVERB = ("mix", "decay", "size")

# (category, names in algorithm-number order, default key parameters)
_BLOCKS = (
    ("Delay", (
        "Delay", "Band Delay", "Bouquet Delay", "Digital Delay", "Ducked Delay",
        "Filter Pong", "Head Space", "Mod Delay", "MultiTap", "Reverse",
        "Tape Echo", "UltraTap", "Vintage Delay",
    ), _DELAY),
    ("Distortion", (
        "Aggravate", "CrushStation", "PitchFuzz", "Sculpt", "WeedWacker",
    ), ("mix", "drive", "tone")),
    ("EQ", ("EQ Compressor",), ("mix", "threshold", "gain")),
    ("Harmonizer", (
        "Diatonic", "H910 H949", "HarModulator", "HarPeggiator", "Crystals",
        "Harmonizer+", "Octaver", "PitchFlex", "PolyFlex", "Polyphony",
        "MicroPitch", "Prism Shift", "Quadravox", "Resonator", "VocalShift",
    ), _PITCH),
    ("Looper", ("Looper",), ("mix", "play_level")),
    ("Modulation", (
        "Even-Vibe", "Harmadillo", "Instant Flanger", "Instant Phaser", "ModFilter",
        "Phaser", "Q-Wah", "RingMod", "Chorus", "Rotary",
        "TremoloPan", "Flanger", "Undulator",
    ), _MOD),
    ("Multi", ("SpaceTime",), ("mix", "delay_level", "reverb_level")),
    ("Reverb", (
        "Blackhole", "DualVerb", "DynaVerb", "Hall", "MangledVerb",
        "ModEchoVerb", "Plate", "Reverse Reverb", "Room", "SP2016 Reverb",
        "Spring", "Shimmer", "TremoloVerb", "Wormhole",
    ), _REVERB),
    ("Synth", ("HotSawz", "PolySynth", "Synthonizer"), ("mix", "filter", "glide")),
    ("Utility", ("Mute", "Thru"), ("mix",)),
)

# Algorithms whose controls differ from their category's usual set
_KEY_PARAMETERS = {
    "Delay": ("mix", "delay_time", "feedback", "filter"),
    "Band Delay": ("mix", "dlya", "dlyb", "fbka", "dmix", "filter_freq"),
    "Bouquet Delay": ("mix", "delay_time", "feedback", "tone", "modulation"),
    "Digital Delay": ("mix", "dlya", "dlyb", "fbka", "fbkb", "dmix", "fltr"),
    "Ducked Delay": ("mix", "dlya", "dlyb", "threshold", "release"),
    "MicroPitch": ("mix", "pcha", "pchb", "dlya", "dlyb", "mod_depth", "mod_rate"),
    "TremoloPan": ("intensity", "speed", "pan_width", "shape", "phase"),
}


def _algorithms() -> dict[int, AlgorithmInfo]:
    table: dict[int, AlgorithmInfo] = {}
    for category, names, keys in _BLOCKS:
        for name in names:
            number = len(table)
            table[number] = AlgorithmInfo(
                number, name, category, _KEY_PARAMETERS.get(name, keys),
            )
    return table


ALGORITHMS: dict[int, AlgorithmInfo] = _algorithms()

# First matching group wins
_SUGGESTIONS = (
    (("delay", "echo"), "Delay"),
    (("reverb", "space", "ambient"), "Reverb"),
    (("harmony", "pitch", "octave"), "Harmonizer"),
    (("chorus", "flange", "phase", "modulation"), "Modulation"),
    (("distortion", "overdrive", "fuzz"), "Distortion"),
    (("synth",), "Synth"),
)


def algorithm_info(number: int) -> AlgorithmInfo | None:
    return ALGORITHMS.get(number)


def algorithms_in_category(category: str) -> list[AlgorithmInfo]:
    wanted = category.casefold()
    return [a for a in ALGORITHMS.values() if a.category.casefold() == wanted]


def find_algorithm(name: str) -> AlgorithmInfo | None:
    """Look an algorithm up by name, ignoring case."""
    wanted = name.strip().casefold()
    for algorithm in ALGORITHMS.values():
        if algorithm.name.casefold() == wanted:
            return algorithm
    return None


def categories() -> list[str]:
    """Category names in algorithm-number order."""
    return [category for category, _, _ in _BLOCKS]


def suggest_algorithms(request: str) -> list[AlgorithmInfo]:
    """Algorithms worth trying for a free-text request such as 'lush echo'.

    Returns an empty list when no keyword matches.
    """
    text = request.lower()
    for words, category in _SUGGESTIONS:
        if any(word in text for word in words):
            return algorithms_in_category(category)
    return []


def _category_ranges() -> str:
    parts = []
    for category in categories():
        numbers = [a.number for a in algorithms_in_category(category)]
        span = str(numbers[0]) if len(numbers) == 1 else f"{numbers[0]}-{numbers[-1]}"
        parts.append(f"{category}({span})")
    return "Categories: " + ", ".join(parts)


def _slot(letter: str, base: int) -> list[tuple]:
    category = f"Algorithm {letter}"
    rows = [
        (base, f"Algorithm {letter} Select", category,
         f"Algorithm for slot {letter}. {_category_ranges()}"),
        (base + 1, f"Algorithm {letter} Mix", category, f"Wet/dry mix of algorithm {letter}"),
        (base + 2, f"Algorithm {letter} Bypass", category, "0-63=bypass, 64-127=active"),
    ]
    rows.extend(
        (base + 2 + n, f"Algorithm {letter} Param {n}", category,
         "Function depends on the selected algorithm")
        for n in range(1, 6)
    )
    return rows


# (cc, name, category, description)
_PARAMETERS = [
    (0, "Program Change", "Global", "Select H90 Program (0-99)"),
    (1, "Preset Mix", "Global", "Overall wet/dry mix of the preset"),
    (2, "Bypass", "Global", "0-63=bypass, 64-127=active"),
    (3, "Tap Tempo", "Global", "Send 127 to tap"),
    (4, "Expression Pedal", "Expression", "Expression pedal input"),
    *_slot("A", 10),
    *_slot("B", 20),
    (30, "Routing Mode", "Routing",
     "0-31=Series A->B, 32-63=Series B->A, 64-95=Parallel, 96-127=Series with crossfade"),
    (31, "HotSwitch 1", "Performance", "Toggle HotSwitch 1"),
    (32, "HotSwitch 2", "Performance", "Toggle HotSwitch 2"),
    (33, "HotSwitch 3", "Performance", "Toggle HotSwitch 3"),
    (34, "Kill Dry", "Global", "0-63=dry on, 64-127=dry off"),
]

DEVICE = Device(
    id=DEVICE_ID,
    manufacturer="Eventide",
    model_name="H90 Harmonizer",
    version="1.11.4",
    control_channel=8,
    parameters=tuple(
        Parameter(name, cc, description=desc, category=category)
        for cc, name, category, desc in _PARAMETERS
    ),
    description=(
        "Dual-algorithm multi-effects processor. Each preset runs algorithms A "
        "and B in a selectable routing; HotSwitches morph between settings."
    ),
)
