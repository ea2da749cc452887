"""Tests for the Eventide H90 device and algorithm directory."""

import pytest

from pedal_midi_mcp.pedals import eventide_h90
from pedal_midi_mcp.pedals.eventide_h90 import (
    ALGORITHMS,
    DEVICE,
    algorithm_info,
    algorithms_in_category,
    categories,
    find_algorithm,
    suggest_algorithms,
)


def test_device_cc_table():
    """Global controls, two algorithm slots, routing and HotSwitches on channel 8."""
    assert DEVICE.id == "eventide_h90"
    assert DEVICE.control_channel == 8
    assert DEVICE.parameter_by_cc(2).name == "Bypass"
    assert DEVICE.parameter_by_cc(10).name == "Algorithm A Select"
    assert DEVICE.parameter_by_cc(17).name == "Algorithm A Param 5"
    assert DEVICE.parameter_by_cc(20).name == "Algorithm B Select"
    assert DEVICE.parameter_by_cc(30).category == "Routing"
    assert DEVICE.parameter_by_cc(34).name == "Kill Dry"
    assert [p.name for p in DEVICE.parameters_in_category("performance")] == [
        "HotSwitch 1", "HotSwitch 2", "HotSwitch 3",
    ]
    assert len(DEVICE.parameters) == 26


def test_select_description_lists_ranges():
    description = DEVICE.parameter_by_cc(10).description
    assert "Delay(0-12)" in description
    assert "EQ(18)" in description
    assert "Utility(66-67)" in description


@pytest.mark.parametrize("number,name", [
    (0, "Delay"),
    (1, "Band Delay"),
    (2, "Bouquet Delay"),
    (23, "Crystals"),
    (29, "MicroPitch"),
    (43, "Chorus"),
    (45, "TremoloPan"),
    (46, "Flanger"),
    (49, "Blackhole"),
    (63, "HotSawz"),
])
def test_algorithm_numbers(number, name):
    assert algorithm_info(number).name == name


def test_algorithm_table_is_contiguous():
    assert sorted(ALGORITHMS) == list(range(68))
    assert algorithm_info(68) is None


def test_category_ranges():
    assert categories() == [
        "Delay", "Distortion", "EQ", "Harmonizer", "Looper",
        "Modulation", "Multi", "Reverb", "Synth", "Utility",
    ]
    harmonizers = algorithms_in_category("harmonizer")
    assert (harmonizers[0].number, harmonizers[-1].number) == (19, 33)
    assert [a.name for a in algorithms_in_category("Utility")] == ["Mute", "Thru"]
    assert algorithms_in_category("Kazoo") == []


def test_key_parameters():
    assert find_algorithm("Digital Delay").key_parameters == (
        "mix", "dlya", "dlyb", "fbka", "fbkb", "dmix", "fltr",
    )
    assert "pan_width" in find_algorithm("TremoloPan").key_parameters
    assert all(a.key_parameters for a in ALGORITHMS.values())


def test_find_algorithm_ignores_case():
    assert find_algorithm("crystals").number == 23
    assert find_algorithm("  SP2016 reverb ").category == "Reverb"
    assert find_algorithm("Nope") is None


@pytest.mark.parametrize("request_text,category", [
    ("a long echo", "Delay"),
    ("huge ambient space", "Reverb"),
    ("octave up", "Harmonizer"),
    ("slow flange", "Modulation"),
    ("fuzz", "Distortion"),
    ("synth pad", "Synth"),
])
def test_suggest_algorithms(request_text, category):
    suggestions = suggest_algorithms(request_text)
    assert suggestions
    assert {a.category for a in suggestions} == {category}


def test_suggest_first_group_wins():
    """'echo' in a reverb request still picks delays."""
    assert suggest_algorithms("echo into reverb")[0].category == "Delay"
    assert suggest_algorithms("make it purple") == []


def test_describe():
    assert eventide_h90.ALGORITHMS[34].describe() == "34: Looper [Looper] (mix, play_level)"
