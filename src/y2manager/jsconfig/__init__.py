"""Read and write ``module.exports = {...}`` bridge configuration files."""

from __future__ import annotations

from .parser import (
    MODULE_EXPORTS_MARKER,
    extract_object_literal,
    find_matching_brace,
    parse_config_text,
    parse_object_literal,
)
from .serializer import render_config_text, render_key, render_value

__all__ = [
    "MODULE_EXPORTS_MARKER",
    "extract_object_literal",
    "find_matching_brace",
    "parse_config_text",
    "parse_object_literal",
    "render_config_text",
    "render_key",
    "render_value",
]
