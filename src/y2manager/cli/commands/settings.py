from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from y2manager.cli.common import build_store, dump_json, fail, load_settings_or_exit
from y2manager.config import UpdateAppSettings, resolve_settings_path
from y2manager.services import check_path, update_app_settings

app = typer.Typer(no_args_is_help=True, help="Manage app settings.")


@app.command("show")
def show_settings() -> None:
    """Show app settings and where they come from."""
    settings = load_settings_or_exit()
    path = resolve_settings_path()

    source = str(path) if path.exists() else "defaults"
    typer.echo(f"Settings source: {source}")
    typer.echo(dump_json(settings.model_dump(by_alias=True)))


@app.command("set-path")
def set_devices_path(
    path: Annotated[str, typer.Argument(help="Path of the bridge config.js")],
) -> None:
    """Point the manager at another devices file."""
    store = build_store(load_settings_or_exit())
    try:
        settings = update_app_settings(store, UpdateAppSettings(devices_file_path=path))
    except (ValueError, OSError) as exc:
        fail(str(exc))

    Console().print(
        f"[green]✓[/green] Devices file set to {settings.devices_file_path} "
        f"({len(store.list_devices())} device(s))"
    )


@app.command("test-path")
def test_devices_path(
    path: Annotated[str, typer.Argument(help="Path to check")],
) -> None:
    """Check whether a devices file can be read and written at a path."""
    result = check_path(path)
    console = Console()
    if result.valid:
        console.print(f"[green]✓[/green] {result.message}")
    else:
        console.print(f"[red]✗[/red] {result.message}")
        raise typer.Exit(1)
