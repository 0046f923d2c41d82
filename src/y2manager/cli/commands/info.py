from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from y2manager.cli.common import build_store, load_settings_or_exit
from y2manager.config import resolve_settings_path
from y2manager.errors import ConfigSchemaError


def register(app: typer.Typer) -> None:
    @app.command()
    def info() -> None:
        """Show file locations and statistics."""
        settings = load_settings_or_exit()
        store = build_store(settings)
        settings_path = resolve_settings_path()

        console = Console()

        console.print("[bold]y2manager info[/bold]\n")
        console.print(
            f"Settings file: {settings_path if settings_path.exists() else 'defaults'}"
        )
        console.print(f"Devices file: {store.path}")
        if not store.path.exists():
            console.print("  [yellow]![/yellow] file does not exist yet")
        if store.fallback_path is not None:
            console.print(f"Fallback file: {store.fallback_path}")

        try:
            configuration = store.configuration
        except ConfigSchemaError as exc:
            console.print(f"  [yellow]![/yellow] {escape(str(exc))}")
            console.print("\n[bold]Statistics[/bold]")
            console.print(f"Readable devices: {len(store.list_devices())}")
            return

        console.print("\n[bold]Bridge[/bold]")
        mqtt = configuration.mqtt
        console.print(f"MQTT broker: {mqtt.host}:{mqtt.port}")
        console.print(f"HTTPS port: {configuration.https.port}")

        console.print("\n[bold]Statistics[/bold]")
        console.print(f"Devices: {len(configuration.devices)}")
        console.print(f"Rooms: {len(store.list_rooms())}")
        console.print(f"Clients: {len(configuration.clients)}")
        console.print(f"Users: {len(configuration.users)}")
