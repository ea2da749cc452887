"""Data models for devices, parameters and the device catalog."""

from .catalog import InMemoryCatalog, JsonDirectoryCatalog, seed
from .device import Device, Parameter, make_device_id
