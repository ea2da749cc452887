"""Tests for device records and the device catalogs."""

import json

import pytest

from pedal_midi_mcp.errors import (
    DeviceNotFoundError,
    ParameterNotFoundError,
    ValidationError,
)
from pedal_midi_mcp.models import (
    Device,
    InMemoryCatalog,
    JsonDirectoryCatalog,
    Parameter,
    make_device_id,
    seed,
)


def _delay(**overrides):
    fields = dict(
        id="meris_lvx",
        manufacturer="Meris",
        model_name="LVX",
        control_channel=1,
        parameters=(
            Parameter("Mix", 1, unit="%", category="Global"),
            Parameter("Filter", 5, category="Filter"),
            Parameter("Feedback", 4, max_value=100, category="Delay"),
        ),
    )
    fields.update(overrides)
    return Device(**fields)


def test_make_device_id():
    assert make_device_id("Meris", "Mercury X") == "meris_mercury_x"
    assert make_device_id("Neural DSP", "Quad Cortex") == "neural dsp_quad_cortex"


def test_parameter_validation():
    with pytest.raises(ValidationError):
        Parameter("Bad", 128)
    with pytest.raises(ValidationError, match="exceeds"):
        Parameter("Inverted", 1, min_value=100, max_value=10)


def test_parameter_name_must_be_text():
    for bad in (5, None, "", "   "):
        with pytest.raises(ValidationError, match="Parameter name"):
            Parameter(bad, 1)
    with pytest.raises(ValidationError):
        Parameter.from_dict({"name": 5, "ccNumber": 1})


def test_parameter_clamp():
    param = Parameter("Feedback", 4, min_value=10, max_value=100)
    assert param.clamp(300) == 100
    assert param.clamp(0) == 10
    assert param.clamp(50) == 50


def test_device_rejects_bad_channel():
    with pytest.raises(ValidationError):
        _delay(control_channel=17)


def test_parameter_lookup():
    device = _delay()
    assert device.parameter_by_cc(5).name == "Filter"
    assert device.parameter_by_cc(99) is None
    assert device.parameter_by_name("fILTER").control_number == 5
    assert device.parameter_by_name("Missing") is None


def test_parameter_lookup_first_match_wins():
    device = _delay(parameters=(Parameter("Level", 7), Parameter("level", 9)))
    assert device.parameter_by_name("LEVEL").control_number == 7


def test_require_parameter():
    with pytest.raises(ParameterNotFoundError) as exc:
        _delay().require_parameter("Tone")
    assert "Parameter 'Tone' not found on pedal meris_lvx" in str(exc.value)
    assert isinstance(exc.value, LookupError)


def test_parameters_in_category():
    names = [p.name for p in _delay().parameters_in_category("delay")]
    assert names == ["Feedback"]


def test_device_from_dict_derives_id():
    device = Device.from_dict({
        "manufacturer": "Meris",
        "modelName": "Enzo X",
        "midiChannel": 3,
        "parameters": [{"name": "Mix", "ccNumber": 1}],
    })
    assert device.id == "meris_enzo_x"
    assert device.control_channel == 3
    assert device.parameters[0].max_value == 127


def test_device_to_dict_uses_wire_keys():
    d = _delay(version="1.0.2b").to_dict()
    assert d["modelName"] == "LVX"
    assert d["midiChannel"] == 1
    assert d["version"] == "1.0.2b"
    assert d["parameters"][0] == {
        "name": "Mix", "ccNumber": 1, "minValue": 0, "maxValue": 127,
        "unit": "%", "category": "Global",
    }
    assert "description" not in d


def test_in_memory_catalog():
    catalog = InMemoryCatalog([_delay(id="b"), _delay(id="a")])
    assert [d.id for d in catalog.list_all()] == ["a", "b"]
    assert catalog.get("missing") is None
    assert "a" in catalog
    with pytest.raises(DeviceNotFoundError, match="Pedal not found: missing"):
        catalog.require("missing")


def test_save_replaces_whole_device():
    catalog = InMemoryCatalog([_delay()])
    catalog.save(_delay(parameters=(Parameter("Mix", 1),)))
    assert len(catalog.require("meris_lvx").parameters) == 1
    assert len(catalog) == 1


def test_json_catalog_persists(tmp_path):
    catalog = JsonDirectoryCatalog(tmp_path)
    catalog.save(_delay())

    path = tmp_path / "meris_lvx.json"
    assert path.exists()
    assert json.loads(path.read_text())["modelName"] == "LVX"

    reloaded = JsonDirectoryCatalog(tmp_path)
    assert reloaded.require("meris_lvx") == _delay()


def test_json_catalog_skips_unreadable_files(tmp_path):
    (tmp_path / "broken.json").write_text("{not json")
    (tmp_path / "incomplete.json").write_text(json.dumps({"id": "x"}))
    JsonDirectoryCatalog(tmp_path).save(_delay())

    catalog = JsonDirectoryCatalog(tmp_path)
    assert [d.id for d in catalog.list_all()] == ["meris_lvx"]


def test_json_catalog_delete(tmp_path):
    catalog = JsonDirectoryCatalog(tmp_path / "pedals")
    catalog.save(_delay())
    assert catalog.delete("meris_lvx")
    assert not (tmp_path / "pedals" / "meris_lvx.json").exists()
    assert not catalog.delete("meris_lvx")


def test_seed_keeps_existing_devices():
    catalog = InMemoryCatalog([_delay(model_name="Custom")])
    added = seed(catalog, [_delay(), _delay(id="other")])
    assert added == 1
    assert catalog.require("meris_lvx").model_name == "Custom"
    assert "other" in catalog


@pytest.mark.parametrize("device_id", ["../../escaped_x", "sub/dir", "back\\slash", ".."])
def test_json_catalog_rejects_ids_outside_directory(tmp_path, device_id):
    """Device ids never name a file outside the catalog directory."""
    root = tmp_path / "data" / "pedals"
    catalog = JsonDirectoryCatalog(root)

    with pytest.raises(ValidationError, match="Invalid device id"):
        catalog.save(_delay(id=device_id))
    with pytest.raises(ValidationError):
        catalog.delete(device_id)

    assert device_id not in catalog
    assert [p.name for p in tmp_path.rglob("*.json")] == []


def test_json_catalog_delete_unknown_id(tmp_path):
    catalog = JsonDirectoryCatalog(tmp_path)
    assert not catalog.delete("never_saved")
