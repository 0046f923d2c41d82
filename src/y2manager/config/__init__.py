from __future__ import annotations

from .paths import (
    DEFAULT_DEVICES_FILE_PATH,
    SETTINGS_FILENAME,
    default_settings_path,
    expand_path,
)
from .settings import (
    FALLBACK_ENV_VAR,
    SETTINGS_ENV_VAR,
    AppSettings,
    UpdateAppSettings,
    devices_path_from_settings,
    get_app_settings,
    load_app_settings,
    render_app_settings,
    resolve_fallback_path,
    resolve_settings_path,
    write_app_settings,
)

__all__ = [
    "DEFAULT_DEVICES_FILE_PATH",
    "FALLBACK_ENV_VAR",
    "SETTINGS_ENV_VAR",
    "SETTINGS_FILENAME",
    "AppSettings",
    "UpdateAppSettings",
    "default_settings_path",
    "devices_path_from_settings",
    "expand_path",
    "get_app_settings",
    "load_app_settings",
    "render_app_settings",
    "resolve_fallback_path",
    "resolve_settings_path",
    "write_app_settings",
]
