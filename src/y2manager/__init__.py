"""y2manager - edit the devices of a yandex2mqtt bridge config file."""

from __future__ import annotations

from importlib.metadata import version

from .config import AppSettings, UpdateAppSettings, get_app_settings
from .errors import (
    CapabilityNotSupportedError,
    ConfigParseError,
    ConfigSchemaError,
    ConfigWriteError,
    DeviceNotFoundError,
    Y2ManagerError,
)
from .jsconfig import parse_config_text, render_config_text
from .models import Configuration, Device, DeviceUpdate, NewDevice, ToggleResult
from .storage import DeviceStore

__all__ = [
    "AppSettings",
    "CapabilityNotSupportedError",
    "ConfigParseError",
    "ConfigSchemaError",
    "ConfigWriteError",
    "Configuration",
    "Device",
    "DeviceNotFoundError",
    "DeviceStore",
    "DeviceUpdate",
    "NewDevice",
    "ToggleResult",
    "UpdateAppSettings",
    "Y2ManagerError",
    "__version__",
    "get_app_settings",
    "parse_config_text",
    "render_config_text",
]

__version__ = version("y2manager")
