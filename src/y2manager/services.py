"""Operations spanning app settings and the device store."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from y2manager.config import (
    AppSettings,
    UpdateAppSettings,
    devices_path_from_settings,
    expand_path,
    get_app_settings,
    load_app_settings,
    resolve_settings_path,
    write_app_settings,
)
from y2manager.models import Device, PathCheck
from y2manager.storage import DeviceStore

logger = logging.getLogger(__name__)


def update_app_settings(
    store: DeviceStore,
    changes: UpdateAppSettings,
    settings_path: Path | None = None,
) -> AppSettings:
    """Apply settings changes, repoint the store if the devices file moved,
    and write the settings file."""
    path = settings_path or resolve_settings_path()
    current = load_app_settings(path)
    settings = current.model_copy(update=changes.model_dump(exclude_none=True))

    if changes.devices_file_path:
        store.reload(devices_path_from_settings(settings))

    write_app_settings(settings, path)
    get_app_settings.cache_clear()
    logger.info("Saved app settings to %s", path)
    return settings


def check_path(value: str) -> PathCheck:
    """Tell whether a devices file can be used at ``value``."""
    if not value.strip():
        return PathCheck(valid=False, message="Path is required")

    path = expand_path(value)
    if path.is_dir():
        return PathCheck(valid=False, message="Path is a directory")
    if path.is_file() and os.access(path, os.R_OK | os.W_OK):
        return PathCheck(valid=True, message="Path is readable and writable")

    directory = path.parent
    if directory.is_dir() and os.access(directory, os.R_OK | os.W_OK):
        return PathCheck(
            valid=True, message="Directory is accessible, file will be created"
        )

    return PathCheck(valid=False, message="Path or directory is not accessible")


def search_devices(
    devices: list[Device], query: str | None = None, room: str | None = None
) -> list[Device]:
    """Filter devices by room and by a case-insensitive text query."""
    needle = (query or "").strip().lower()
    result: list[Device] = []
    for device in devices:
        if room is not None and device.room != room:
            continue
        if needle and not any(
            needle in field.lower() for field in (device.name, device.id, device.room)
        ):
            continue
        result.append(device)
    return result
