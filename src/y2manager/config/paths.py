from __future__ import annotations

import os
from pathlib import Path

SETTINGS_FILENAME = "app-settings.json"
DEFAULT_DEVICES_FILE_PATH = "/opt/yandex2mqtt/config.js"


def default_settings_path() -> Path:
    return Path.cwd() / SETTINGS_FILENAME


def expand_path(value: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(value)))
