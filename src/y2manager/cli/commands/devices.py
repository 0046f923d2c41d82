from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from y2manager.cli.common import (
    dump_json,
    fail,
    fail_validation,
    open_store_or_exit,
    read_json_or_exit,
)
from y2manager.errors import Y2ManagerError
from y2manager.models import ON_OFF_CAPABILITY, DeviceUpdate, NewDevice
from y2manager.services import search_devices

app = typer.Typer(no_args_is_help=True, help="Create, edit and remove devices.")


def parse_mqtt_option(value: str) -> dict[str, str]:
    """Turn ``INSTANCE[:SET[:STATE]]`` into an MQTT instance mapping."""
    instance, *topics = value.split(":", 2)
    if not instance:
        raise typer.BadParameter(f"Missing instance name in '{value}'")

    entry = {"instance": instance}
    for key, topic in zip(("set", "state"), topics):
        if topic:
            entry[key] = topic
    return entry


def _payload(
    json_file: Path | None,
    name: str | None,
    room: str | None,
    device_type: str | None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    if json_file is not None:
        data = read_json_or_exit(json_file)
        if not isinstance(data, dict):
            fail(f"{json_file} must contain a JSON object")
        payload.update(data)

    for key, value in (("name", name), ("room", room), ("type", device_type)):
        if value is not None:
            payload[key] = value
    return payload


@app.command("list")
def list_devices(
    room: Annotated[str | None, typer.Option("--room", help="Only this room")] = None,
    search: Annotated[
        str | None, typer.Option("--search", "-s", help="Match name, id or room")
    ] = None,
) -> None:
    """List devices."""
    store = open_store_or_exit()
    devices = search_devices(store.list_devices(), query=search, room=room)

    console = Console()

    if not devices:
        console.print("No devices found.")
        console.print(f"Devices file: {store.path}")
        return

    table = Table()
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Room")
    table.add_column("Type")
    table.add_column("On", justify="center")

    for device in devices:
        capability = device.find_capability(ON_OFF_CAPABILITY)
        if capability is None:
            state = "-"
        elif capability.state is not None and capability.state.value is True:
            state = "on"
        else:
            state = "off"
        table.add_row(
            device.id,
            escape(device.name),
            escape(device.room),
            escape(device.type),
            state,
        )

    console.print(table)


@app.command("show")
def show_device(device_id: Annotated[str, typer.Argument(help="Device id")]) -> None:
    """Print a device as JSON."""
    store = open_store_or_exit()
    device = store.get_device(device_id)
    if device is None:
        fail(f"Device '{device_id}' not found")
    typer.echo(dump_json(device.to_data()))


@app.command("add")
def add_device(
    name: Annotated[str | None, typer.Option("--name", help="Device name")] = None,
    room: Annotated[str | None, typer.Option("--room", help="Room name")] = None,
    device_type: Annotated[
        str | None,
        typer.Option("--type", help="Device type, e.g. devices.types.light"),
    ] = None,
    mqtt: Annotated[
        list[str] | None,
        typer.Option("--mqtt", help="MQTT instance as INSTANCE[:SET[:STATE]]"),
    ] = None,
    capability: Annotated[
        list[str] | None,
        typer.Option(
            "--capability", help="Capability type, retrievable and reportable"
        ),
    ] = None,
    json_file: Annotated[
        Path | None, typer.Option("--json", help="Read the device from a JSON file")
    ] = None,
) -> None:
    """Add a device; its id is generated."""
    payload = _payload(json_file, name, room, device_type)
    if mqtt:
        payload["mqtt"] = list(payload.get("mqtt") or []) + [
            parse_mqtt_option(value) for value in mqtt
        ]
    payload.setdefault("mqtt", [])
    if capability:
        payload["capabilities"] = list(payload.get("capabilities") or []) + [
            {"type": value, "retrievable": True, "reportable": True}
            for value in capability
        ]

    try:
        new_device = NewDevice.model_validate(payload)
    except ValidationError as exc:
        fail_validation("Invalid device data", exc)

    store = open_store_or_exit()
    try:
        device = store.create_device(new_device)
    except Y2ManagerError as exc:
        fail(str(exc))

    console = Console()
    console.print(
        f"[green]✓[/green] Added '{escape(device.name)}' "
        f"in {escape(device.room)} as {device.id}"
    )


@app.command("update")
def update_device(
    device_id: Annotated[str, typer.Argument(help="Device id")],
    name: Annotated[str | None, typer.Option("--name", help="New name")] = None,
    room: Annotated[str | None, typer.Option("--room", help="New room")] = None,
    device_type: Annotated[str | None, typer.Option("--type", help="New type")] = None,
    json_file: Annotated[
        Path | None,
        typer.Option("--json", help="Read fields to change from a JSON file"),
    ] = None,
) -> None:
    """Change fields of a device."""
    payload = _payload(json_file, name, room, device_type)
    if not payload:
        fail("Nothing to update")

    try:
        updates = DeviceUpdate.model_validate(payload)
    except ValidationError as exc:
        fail_validation("Invalid device data", exc)

    store = open_store_or_exit()
    try:
        device = store.update_device(device_id, updates)
    except Y2ManagerError as exc:
        fail(str(exc))
    if device is None:
        fail(f"Device '{device_id}' not found")

    Console().print(f"[green]✓[/green] Updated {device.id}")


@app.command("remove")
def remove_device(device_id: Annotated[str, typer.Argument(help="Device id")]) -> None:
    """Remove a device."""
    store = open_store_or_exit()
    try:
        removed = store.delete_device(device_id)
    except Y2ManagerError as exc:
        fail(str(exc))

    console = Console()
    if removed:
        console.print(f"[green]✓[/green] Removed device '{device_id}'")
    else:
        console.print(f"[yellow]![/yellow] Device '{device_id}' not found")
        raise typer.Exit(1)


@app.command("toggle")
def toggle_device(device_id: Annotated[str, typer.Argument(help="Device id")]) -> None:
    """Switch a device on or off."""
    store = open_store_or_exit()
    try:
        result = store.toggle_device(device_id)
    except Y2ManagerError as exc:
        fail(str(exc))

    state = "on" if result.new_state else "off"
    Console().print(
        f"[green]✓[/green] '{escape(result.device.name)}' switched {state}"
    )


def register(root: typer.Typer) -> None:
    root.add_typer(app, name="devices")

    @root.command()
    def rooms() -> None:
        """List rooms used by devices."""
        store = open_store_or_exit()
        for room in store.list_rooms():
            typer.echo(room)
