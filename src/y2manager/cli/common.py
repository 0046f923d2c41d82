from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from y2manager.config import (
    AppSettings,
    devices_path_from_settings,
    get_app_settings,
    resolve_fallback_path,
)
from y2manager.storage import DeviceStore


def fail(message: str) -> NoReturn:
    Console(stderr=True).print(f"[red]✗[/red] {escape(message)}")
    raise typer.Exit(1)


def fail_validation(title: str, exc: ValidationError) -> NoReturn:
    details = "\n".join(
        f"  {'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
        for error in exc.errors()
    )
    fail(f"{title}:\n{details}")


def load_settings_or_exit() -> AppSettings:
    try:
        return get_app_settings()
    except ValueError as exc:
        fail(str(exc))


def build_store(settings: AppSettings, devices_file: Path | None = None) -> DeviceStore:
    path = devices_file or devices_path_from_settings(settings)
    return DeviceStore.open(path, fallback_path=resolve_fallback_path())


def open_store_or_exit() -> DeviceStore:
    return build_store(load_settings_or_exit())


def read_json_or_exit(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        fail(f"Cannot read {path}: {exc}")
    except json.JSONDecodeError as exc:
        fail(f"Invalid JSON in {path}: {exc}")


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)
