from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console

from y2manager.cli.common import dump_json, fail, fail_validation, open_store_or_exit
from y2manager.errors import ConfigParseError, ConfigWriteError
from y2manager.jsconfig import parse_config_text
from y2manager.models import Configuration

app = typer.Typer(
    no_args_is_help=True, help="Show, export and import the bridge config."
)


def read_configuration_data(path: Path) -> Any:
    """Read a ``module.exports`` config file or a JSON document."""
    text = path.read_text(encoding="utf-8")
    data = parse_config_text(text)
    if data is not None:
        return data
    return json.loads(text)


@app.command("show")
def show_config() -> None:
    """Print the config module as it is written to disk."""
    store = open_store_or_exit()
    typer.echo(store.render(), nl=False)


@app.command("export")
def export_config(
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write to this file")
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Export plain JSON instead of config.js")
    ] = False,
) -> None:
    """Export the configuration."""
    store = open_store_or_exit()
    if as_json:
        text = dump_json(store.data()) + "\n"
    else:
        text = store.render()

    if output is None:
        typer.echo(text, nl=False)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as exc:
        fail(f"Cannot write {output}: {exc}")
    Console().print(f"[green]✓[/green] Exported configuration to {output}")


@app.command("import")
def import_config(
    source: Annotated[
        Path, typer.Argument(help="config.js module or JSON document to load")
    ],
) -> None:
    """Replace the whole configuration, devices included."""
    try:
        data = read_configuration_data(source)
    except OSError as exc:
        fail(f"Cannot read {source}: {exc}")
    except (ConfigParseError, json.JSONDecodeError) as exc:
        fail(f"Cannot parse {source}: {exc}")

    try:
        configuration = Configuration.model_validate(data)
    except ValidationError as exc:
        fail_validation("Invalid configuration", exc)

    store = open_store_or_exit()
    try:
        store.save_configuration(configuration)
    except ConfigWriteError as exc:
        fail(str(exc))

    Console().print(
        f"[green]✓[/green] Imported {len(configuration.devices)} device(s) "
        f"into {store.path}"
    )
