"""Tests for environment configuration and server assembly."""

from pathlib import Path

import pytest

from pedal_midi_mcp.config import ServerConfig
from pedal_midi_mcp.server import build_dispatcher


def test_defaults():
    config = ServerConfig.from_env({})
    assert config.data_dir == Path("data/pedals")
    assert config.port is None
    assert config.log_level == "INFO"
    assert config.seed_builtins is True
    assert config.headless is False


def test_environment_overrides():
    config = ServerConfig.from_env({
        "PEDAL_MIDI_DATA_DIR": "/var/lib/pedals",
        "PEDAL_MIDI_PORT": "USB MIDI",
        "PEDAL_MIDI_LOG_LEVEL": "debug",
        "PEDAL_MIDI_SEED_BUILTINS": "0",
        "PEDAL_MIDI_HEADLESS": "yes",
    })
    assert config.data_dir == Path("/var/lib/pedals")
    assert config.port == "USB MIDI"
    assert config.log_level == "DEBUG"
    assert config.seed_builtins is False
    assert config.headless is True


def test_invalid_boolean():
    with pytest.raises(ValueError, match="PEDAL_MIDI_HEADLESS"):
        ServerConfig.from_env({"PEDAL_MIDI_HEADLESS": "maybe"})


def test_build_dispatcher_headless(tmp_path):
    """Headless startup seeds the catalog and never touches a MIDI port."""
    config = ServerConfig(data_dir=tmp_path, headless=True)
    dispatcher = build_dispatcher(config)

    assert len(dispatcher.catalog) == 5
    assert (tmp_path / "meris_lvx.json").exists()
    assert not dispatcher.executor.is_available()


def test_build_dispatcher_without_seed(tmp_path):
    config = ServerConfig(data_dir=tmp_path, headless=True, seed_builtins=False)
    assert len(build_dispatcher(config).catalog) == 0
