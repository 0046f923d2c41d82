from __future__ import annotations

from typing import Annotated

import typer

from y2manager.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands import settings as settings_cmd
from .commands.devices import register as register_devices
from .commands.info import register as register_info

app = typer.Typer(
    help="y2manager - manage devices of a yandex2mqtt bridge config",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config")
app.add_typer(settings_cmd.app, name="settings")

register_devices(app)
register_info(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug messages"),
    ] = False,
) -> None:
    """y2manager CLI."""
    setup_logging(verbose=verbose)

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"y2manager version {get_version('y2manager')}")
        raise typer.Exit()
