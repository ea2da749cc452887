"""Device catalogs: look devices up by id and upsert whole devices.

``JsonDirectoryCatalog`` keeps one ``<id>.json`` document per device. The
directory is read once at construction; ``save`` rewrites a single file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from ..errors import DeviceNotFoundError, ValidationError
from .device import Device

logger = logging.getLogger(__name__)


class InMemoryCatalog:
    """Catalog held entirely in a dict keyed by device id."""

    def __init__(self, devices: Iterable[Device] = ()) -> None:
        self._devices: dict[str, Device] = {}
        for device in devices:
            self._devices[device.id] = device

    def get(self, device_id: str) -> Device | None:
        return self._devices.get(device_id)

    def require(self, device_id: str) -> Device:
        device = self.get(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return device

    def list_all(self) -> list[Device]:
        return [self._devices[key] for key in sorted(self._devices)]

    def save(self, device: Device) -> None:
        """Insert or replace ``device`` as a whole."""
        self._devices[device.id] = device

    def delete(self, device_id: str) -> bool:
        return self._devices.pop(device_id, None) is not None

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices

    def __len__(self) -> int:
        return len(self._devices)


class JsonDirectoryCatalog(InMemoryCatalog):
    """Catalog persisted as one JSON file per device.

    Usage::

        catalog = JsonDirectoryCatalog("data/pedals")
        catalog.save(device)          # writes data/pedals/<id>.json
        catalog.require("meris_lvx")
    """

    def __init__(self, directory: str | Path) -> None:
        super().__init__()
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)
        self._load_all()

    @property
    def directory(self) -> Path:
        return self._dir

    def _path_for(self, device_id: str) -> Path:
        """File for ``device_id``; the id must name a file inside the directory.

        Raises:
            ValidationError: If the id contains a path separator or ``..``,
                or would otherwise resolve outside the catalog directory.
        """
        if not device_id or any(part in device_id for part in ("/", "\\", "..")):
            raise ValidationError(f"Invalid device id for file storage: {device_id!r}")
        path = self._dir / f"{device_id}.json"
        if path.resolve().parent != self._dir.resolve():
            raise ValidationError(f"Invalid device id for file storage: {device_id!r}")
        return path

    def _load_all(self) -> None:
        for path in sorted(self._dir.glob("*.json")):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                device = Device.from_dict(data)
            except (OSError, ValueError, KeyError, TypeError) as e:
                logger.warning("Skipping unreadable device file %s: %s", path, e)
                continue
            self._devices[device.id] = device
        logger.info("Loaded %d device(s) from %s", len(self._devices), self._dir)

    def save(self, device: Device) -> None:
        path = self._path_for(device.id)
        path.write_text(json.dumps(device.to_dict(), indent=2), encoding="utf-8")
        super().save(device)
        logger.debug("Saved device %s to %s", device.id, path)

    def delete(self, device_id: str) -> bool:
        path = self._path_for(device_id)
        removed = super().delete(device_id)
        if path.exists():
            path.unlink()
            removed = True
        return removed


def seed(catalog: InMemoryCatalog, devices: Iterable[Device]) -> int:
    """Save each device whose id is not yet in ``catalog``.

    Returns:
        The number of devices added.
    """
    added = 0
    for device in devices:
        if catalog.get(device.id) is None:
            catalog.save(device)
            added += 1
    return added
