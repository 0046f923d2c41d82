"""Writer for ``module.exports = {...}`` configuration files."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from typing import Any

INDENT = 4

_BARE_KEY_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def render_key(key: str) -> str:
    if _BARE_KEY_RE.match(key):
        return key
    return json.dumps(key, ensure_ascii=False)


def _render_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return "null"
        # JavaScript has a single number type: 2.0 is written as 2
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    raise TypeError(f"Cannot write {type(value).__name__} to a config file")


def render_value(value: Any, indent: int = INDENT, level: int = 0) -> str:
    """Render plain data the way ``JSON.stringify(value, null, indent)`` does,
    with bare identifier keys."""
    inner = " " * (indent * (level + 1))
    outer = " " * (indent * level)

    if isinstance(value, Mapping):
        if not value:
            return "{}"
        items = [
            f"{inner}{render_key(str(key))}: {render_value(item, indent, level + 1)}"
            for key, item in value.items()
        ]
        return "{\n" + ",\n".join(items) + f"\n{outer}}}"

    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = [f"{inner}{render_value(item, indent, level + 1)}" for item in value]
        return "[\n" + ",\n".join(items) + f"\n{outer}]"

    return _render_scalar(value)


def render_config_text(data: Mapping[str, Any]) -> str:
    return f"module.exports = {render_value(data)};\n"
