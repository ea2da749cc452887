"""Server configuration read from ``PEDAL_MIDI_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

ENV_PREFIX = "PEDAL_MIDI_"

_DEFAULTS = {
    "data_dir": "data/pedals",
    "port": None,
    "log_level": "INFO",
    "seed_builtins": True,
    "headless": False,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{name.upper()} must be a boolean, got {raw!r}")


@dataclass
class ServerConfig:
    data_dir: Path = Path(_DEFAULTS["data_dir"])
    port: str | None = _DEFAULTS["port"]
    log_level: str = _DEFAULTS["log_level"]
    seed_builtins: bool = _DEFAULTS["seed_builtins"]
    headless: bool = _DEFAULTS["headless"]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build a config, letting each ``PEDAL_MIDI_<KEY>`` override its default."""
        env = os.environ if environ is None else environ
        values = dict(_DEFAULTS)
        for key, default in _DEFAULTS.items():
            raw = env.get(ENV_PREFIX + key.upper())
            if raw is None:
                continue
            if isinstance(default, bool):
                values[key] = _parse_bool(key, raw)
            else:
                values[key] = raw.strip() or default
        return cls(
            data_dir=Path(values["data_dir"]),
            port=values["port"],
            log_level=values["log_level"].upper(),
            seed_builtins=values["seed_builtins"],
            headless=values["headless"],
        )
