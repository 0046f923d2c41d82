from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .paths import DEFAULT_DEVICES_FILE_PATH, default_settings_path, expand_path

SETTINGS_ENV_VAR = "Y2MANAGER_SETTINGS"
FALLBACK_ENV_VAR = "Y2MANAGER_FALLBACK"

logger = logging.getLogger(__name__)


class AppSettings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid", "populate_by_name": True}

    devices_file_path: str = Field(
        default=DEFAULT_DEVICES_FILE_PATH, alias="devicesFilePath"
    )


class UpdateAppSettings(BaseModel):
    model_config = {"extra": "forbid", "populate_by_name": True}

    devices_file_path: str | None = Field(default=None, alias="devicesFilePath")


def resolve_settings_path() -> Path:
    env_path = os.environ.get(SETTINGS_ENV_VAR)
    if env_path:
        return expand_path(env_path)
    return default_settings_path()


def resolve_fallback_path() -> Path | None:
    env_path = os.environ.get(FALLBACK_ENV_VAR)
    return expand_path(env_path) if env_path else None


def load_app_settings(path: Path) -> AppSettings:
    if not path.exists():
        logger.debug("No settings file at %s, using defaults", path)
        return AppSettings()

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in settings file: {path}\n{exc}") from exc

    try:
        return AppSettings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid settings file: {path}\n{exc}") from exc


@lru_cache
def get_app_settings() -> AppSettings:
    return load_app_settings(resolve_settings_path())


def devices_path_from_settings(settings: AppSettings) -> Path:
    return expand_path(settings.devices_file_path)


def render_app_settings(settings: AppSettings) -> str:
    return json.dumps(settings.model_dump(by_alias=True), indent=2) + "\n"


def write_app_settings(settings: AppSettings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_app_settings(settings), encoding="utf-8")
