"""Tests for writing config modules."""

from __future__ import annotations

import pytest

from y2manager.jsconfig import parse_config_text, render_config_text, render_value
from y2manager.models import Configuration


def test_render_config_text_layout():
    data = {
        "mqtt": {"host": "localhost", "port": 1883},
        "devices": [],
        "clients": [{"id": "1", "is-trusted": True}],
        "users": {},
    }

    expected = (
        "module.exports = {\n"
        "    mqtt: {\n"
        '        host: "localhost",\n'
        "        port: 1883\n"
        "    },\n"
        "    devices: [],\n"
        "    clients: [\n"
        "        {\n"
        '            id: "1",\n'
        '            "is-trusted": true\n'
        "        }\n"
        "    ],\n"
        "    users: {}\n"
        "};\n"
    )
    assert render_config_text(data) == expected


def test_only_keys_are_unquoted():
    rendered = render_value({"note": '"quoted": yes', "$ok_1": 1, "1st": 2})

    assert rendered == (
        '{\n    note: "\\"quoted\\": yes",\n    $ok_1: 1,\n    "1st": 2\n}'
    )


def test_render_scalars():
    assert render_value([1.0, 2.5, float("nan"), True, None, -0.0]) == (
        "[\n    1,\n    2.5,\n    null,\n    true,\n    null,\n    0\n]"
    )


def test_render_keeps_non_ascii():
    assert render_value("Гостиная") == '"Гостиная"'


def test_render_rejects_unknown_types():
    with pytest.raises(TypeError):
        render_value({"when": object()})


def test_plain_data_roundtrip():
    data = {
        "a-b": "}{",
        "nested": {"list": [1, 2.5, "x'y", None, False, []], "empty": {}},
        "text": "line\nbreak\ttab \x01 😀",
    }

    assert parse_config_text(render_config_text(data)) == data


def test_configuration_roundtrip(sample_config_path):
    """Writing a parsed config and reading it back gives the same config."""
    original = Configuration.model_validate(
        parse_config_text(sample_config_path.read_text())
    )

    text = render_config_text(original.to_data())
    reparsed = Configuration.model_validate(parse_config_text(text))

    assert reparsed == original
    assert render_config_text(reparsed.to_data()) == text


def test_rendered_keys_match_file_spelling(sample_config_path):
    configuration = Configuration.model_validate(
        parse_config_text(sample_config_path.read_text())
    )

    text = render_config_text(configuration.to_data())

    assert "privateKey:" in text
    assert "valueMapping:" in text
    assert "clientSecret:" in text
    assert "private_key" not in text
    assert "parameters: null" not in text
