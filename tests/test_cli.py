from __future__ import annotations

import json
import re

import pytest
from typer.testing import CliRunner

from y2manager.cli.app import app
from y2manager.config import AppSettings, get_app_settings, write_app_settings
from y2manager.storage import DeviceStore

runner = CliRunner()


@pytest.fixture
def settings_file(tmp_path, config_file, monkeypatch):
    path = tmp_path / "app-settings.json"
    write_app_settings(AppSettings(devices_file_path=str(config_file)), path)
    monkeypatch.setenv("Y2MANAGER_SETTINGS", str(path))
    monkeypatch.setenv("COLUMNS", "200")
    get_app_settings.cache_clear()
    return path


def test_list_devices(settings_file):
    result = runner.invoke(app, ["devices", "list"])

    assert result.exit_code == 0
    assert "Ceiling light" in result.stdout
    assert "Temperature sensor" in result.stdout


def test_list_devices_by_room(settings_file):
    result = runner.invoke(app, ["devices", "list", "--room", "Bedroom"])

    assert result.exit_code == 0
    assert "Temperature sensor" in result.stdout
    assert "Ceiling light" not in result.stdout


def test_show_device(settings_file):
    result = runner.invoke(app, ["devices", "show", "id_device_0001"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["name"] == "Ceiling light"
    assert data["valueMapping"][0]["type"] == "on_off"


def test_show_missing_device(settings_file):
    result = runner.invoke(app, ["devices", "show", "nope"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_add_device_and_list_rooms(settings_file, config_file):
    result = runner.invoke(
        app,
        [
            "devices",
            "add",
            "--name",
            "Lamp",
            "--room",
            "Hall",
            "--type",
            "devices.types.light",
            "--mqtt",
            "on:input/lamp:input/lamp",
            "--capability",
            "devices.capabilities.on_off",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Added 'Lamp'" in result.stdout

    device = DeviceStore.open(config_file).list_devices()[-1]
    assert re.fullmatch(r"id_device_[0-9a-f]{8}", device.id)
    assert device.to_data()["mqtt"] == [
        {"instance": "on", "set": "input/lamp", "state": "input/lamp"}
    ]
    assert device.capabilities[0].retrievable is True

    rooms = runner.invoke(app, ["rooms"])
    assert rooms.exit_code == 0
    assert rooms.stdout.splitlines() == ["Bedroom", "Hall", "Living room"]


def test_add_device_from_json(settings_file, config_file, tmp_path):
    payload = tmp_path / "device.json"
    payload.write_text(
        json.dumps(
            {
                "name": "Socket",
                "room": "Kitchen",
                "type": "devices.types.socket",
                "mqtt": [{"instance": "on", "set": "kitchen/socket"}],
            }
        )
    )

    result = runner.invoke(app, ["devices", "add", "--json", str(payload)])

    assert result.exit_code == 0, result.output
    names = [d.name for d in DeviceStore.open(config_file).list_devices()]
    assert names[-1] == "Socket"


def test_add_invalid_device(settings_file, config_file):
    before = config_file.read_text()

    result = runner.invoke(app, ["devices", "add", "--room", "Hall"])

    assert result.exit_code == 1
    assert "Invalid device data" in result.output
    assert config_file.read_text() == before


def test_update_device(settings_file, config_file):
    result = runner.invoke(
        app, ["devices", "update", "id_device_0002", "--room", "Nursery"]
    )

    assert result.exit_code == 0, result.output
    assert DeviceStore.open(config_file).get_device("id_device_0002").room == "Nursery"


def test_update_requires_changes_and_known_device(settings_file):
    assert runner.invoke(app, ["devices", "update", "id_device_0002"]).exit_code == 1
    result = runner.invoke(app, ["devices", "update", "nope", "--name", "x"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_remove_device(settings_file, config_file):
    result = runner.invoke(app, ["devices", "remove", "id_device_0003"])
    assert result.exit_code == 0
    assert DeviceStore.open(config_file).get_device("id_device_0003") is None

    again = runner.invoke(app, ["devices", "remove", "id_device_0003"])
    assert again.exit_code == 1
    assert "not found" in again.stdout


def test_toggle_device(settings_file):
    result = runner.invoke(app, ["devices", "toggle", "id_device_0001"])

    assert result.exit_code == 0
    assert "switched on" in result.stdout


def test_toggle_device_without_on_off(settings_file, config_file):
    before = config_file.read_text()

    result = runner.invoke(app, ["devices", "toggle", "id_device_0003"])

    assert result.exit_code == 1
    assert "on_off" in result.output
    assert config_file.read_text() == before


def test_config_show_and_export(settings_file, tmp_path):
    shown = runner.invoke(app, ["config", "show"])
    assert shown.exit_code == 0
    assert shown.stdout.startswith("module.exports = {\n")

    target = tmp_path / "export" / "config.js"
    exported = runner.invoke(app, ["config", "export", "--output", str(target)])
    assert exported.exit_code == 0
    assert target.read_text() == shown.stdout


def test_config_export_json(settings_file):
    result = runner.invoke(app, ["config", "export", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["mqtt"]["port"] == 1883
    assert data["https"]["privateKey"].endswith("privkey.pem")


def test_config_import(settings_file, config_file, tmp_path):
    source = tmp_path / "import.json"
    source.write_text(
        json.dumps(
            {
                "mqtt": {"host": "broker", "port": 1884, "user": "", "password": ""},
                "devices": [
                    {"id": "a", "name": "n", "room": "r", "type": "t", "mqtt": []}
                ],
            }
        )
    )

    result = runner.invoke(app, ["config", "import", str(source)])

    assert result.exit_code == 0, result.output
    store = DeviceStore.open(config_file)
    assert [d.id for d in store.list_devices()] == ["a"]
    assert store.configuration.mqtt.host == "broker"


def test_config_import_rejects_bad_file(settings_file, config_file, tmp_path):
    before = config_file.read_text()
    source = tmp_path / "bad.js"
    source.write_text("module.exports = {devices: load()};")

    result = runner.invoke(app, ["config", "import", str(source)])

    assert result.exit_code == 1
    assert config_file.read_text() == before


def test_settings_show(settings_file, config_file):
    result = runner.invoke(app, ["settings", "show"])

    assert result.exit_code == 0
    assert "devicesFilePath" in result.stdout
    assert str(config_file) in result.stdout


def test_settings_set_path(settings_file, tmp_path):
    target = tmp_path / "other" / "config.js"

    result = runner.invoke(app, ["settings", "set-path", str(target)])

    assert result.exit_code == 0, result.output
    assert json.loads(settings_file.read_text()) == {"devicesFilePath": str(target)}


def test_settings_test_path(settings_file, tmp_path):
    ok = runner.invoke(app, ["settings", "test-path", str(tmp_path / "new.js")])
    assert ok.exit_code == 0
    assert "will be created" in ok.stdout

    bad = runner.invoke(app, ["settings", "test-path", str(tmp_path / "a" / "b.js")])
    assert bad.exit_code == 1


def test_info(settings_file, config_file):
    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert "Devices: 3" in result.stdout
    assert "Rooms: 2" in result.stdout


def test_mismatched_config_is_left_alone(settings_file, config_file):
    content = (
        "module.exports = {\n"
        "    users: [{id: 1, username: 'a', password: 'b', name: 'c'}],\n"
        "    devices: [{id: 'a', name: 'Lamp', room: 'Hall', type: 't', mqtt: []}],\n"
        "};\n"
    )
    config_file.write_text(content)

    added = runner.invoke(
        app, ["devices", "add", "--name", "Fan", "--room", "Attic", "--type", "t"]
    )
    info = runner.invoke(app, ["info"])
    listed = runner.invoke(app, ["devices", "list"])

    assert added.exit_code == 1
    assert config_file.read_text() == content
    assert info.exit_code == 0
    assert "does not match the expected schema" in " ".join(info.stdout.split())
    assert "Readable devices: 1" in info.stdout
    assert "Lamp" in listed.stdout
