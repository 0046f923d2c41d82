"""Reader for ``module.exports = {...}`` configuration files.

The bridge configuration is a CommonJS module whose only statement exports an
object literal. Rather than evaluating it, the literal is located with a
brace scanner and read by a small recursive-descent parser that understands
the JSON-like subset of JavaScript people actually write in such files:
bare or quoted keys, single or double quoted strings, comments and trailing
commas.
"""

from __future__ import annotations

import math
import re
from typing import Any

from y2manager.errors import ConfigParseError

MODULE_EXPORTS_MARKER = "module.exports = {"

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER_RE = re.compile(
    r"[+-]?(?:0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|Infinity"
    r"|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_KEYWORD_VALUES: dict[str, Any] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
    "NaN": math.nan,
    "Infinity": math.inf,
}

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}


def _line_col(text: str, pos: int) -> tuple[int, int]:
    line = text.count("\n", 0, pos) + 1
    column = pos - text.rfind("\n", 0, pos)
    return line, column


def _comment_end(text: str, pos: int, end: int) -> int | None:
    """Return the index just past a comment starting at ``pos``, if any."""
    if text.startswith("//", pos, end):
        newline = text.find("\n", pos, end)
        return end if newline == -1 else newline
    if text.startswith("/*", pos, end):
        close = text.find("*/", pos + 2, end)
        if close == -1:
            raise ConfigParseError("Unterminated comment", *_line_col(text, pos))
        return close + 2
    return None


def _string_end(text: str, pos: int, end: int) -> int:
    quote = text[pos]
    i = pos + 1
    while i < end:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n" and quote != "`":
            break
        i += 1
    raise ConfigParseError("Unterminated string", *_line_col(text, pos))


def find_matching_brace(text: str, start: int) -> int:
    """Return the index of the ``}`` closing the ``{`` at ``start``.

    Braces inside string literals and comments are not counted.
    """
    if not text.startswith("{", start):
        raise ConfigParseError("Expected '{'", *_line_col(text, start))

    depth = 0
    i = start
    end = len(text)
    while i < end:
        ch = text[i]
        if ch in "\"'`":
            i = _string_end(text, i, end)
            continue
        if ch == "/":
            after = _comment_end(text, i, end)
            if after is not None:
                i = after
                continue
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1

    raise ConfigParseError("Object literal is never closed", *_line_col(text, start))


def extract_object_literal(text: str) -> str | None:
    """Return the exported object literal source, or None without a marker."""
    marker = text.find(MODULE_EXPORTS_MARKER)
    if marker == -1:
        return None
    brace = marker + len(MODULE_EXPORTS_MARKER) - 1
    return text[brace : find_matching_brace(text, brace) + 1]


class _Parser:
    def __init__(self, text: str, pos: int = 0, end: int | None = None) -> None:
        self.text = text
        self.pos = pos
        self.end = len(text) if end is None else end

    def error(self, message: str, pos: int | None = None) -> ConfigParseError:
        line, column = _line_col(self.text, self.pos if pos is None else pos)
        return ConfigParseError(message, line, column)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < self.end else ""

    def skip_whitespace(self) -> None:
        while self.pos < self.end:
            ch = self.text[self.pos]
            if ch.isspace():
                self.pos += 1
            elif ch == "/":
                after = _comment_end(self.text, self.pos, self.end)
                if after is None:
                    return
                self.pos = after
            else:
                return

    def expect_end(self) -> None:
        self.skip_whitespace()
        if self.pos != self.end:
            raise self.error("Unexpected content after value")

    def parse_value(self) -> Any:
        self.skip_whitespace()
        ch = self.peek()
        if not ch:
            raise self.error("Unexpected end of input")
        if ch == "{":
            return self.parse_object()
        if ch == "[":
            return self.parse_array()
        if ch in ("'", '"', "`"):
            return self.parse_string()
        if ch in "+-." or ch.isdigit():
            return self.parse_number()

        start = self.pos
        match = _IDENTIFIER_RE.match(self.text, self.pos, self.end)
        if match is None:
            raise self.error(f"Unexpected character {ch!r}")
        word = match.group(0)
        if word not in _KEYWORD_VALUES:
            raise self.error(f"Unsupported expression '{word}'", start)
        self.pos = match.end()
        return _KEYWORD_VALUES[word]

    def parse_object(self) -> dict[str, Any]:
        start = self.pos
        self.pos += 1
        result: dict[str, Any] = {}
        while True:
            self.skip_whitespace()
            if self.peek() == "}":
                self.pos += 1
                return result

            key = self.parse_key()
            self.skip_whitespace()
            if self.peek() != ":":
                raise self.error(f"Expected ':' after key '{key}'")
            self.pos += 1
            result[key] = self.parse_value()

            self.skip_whitespace()
            ch = self.peek()
            if ch == ",":
                self.pos += 1
            elif ch == "}":
                self.pos += 1
                return result
            elif not ch:
                raise self.error("Unterminated object", start)
            else:
                raise self.error("Expected ',' or '}'")

    def parse_array(self) -> list[Any]:
        start = self.pos
        self.pos += 1
        result: list[Any] = []
        while True:
            self.skip_whitespace()
            if self.peek() == "]":
                self.pos += 1
                return result

            result.append(self.parse_value())

            self.skip_whitespace()
            ch = self.peek()
            if ch == ",":
                self.pos += 1
            elif ch == "]":
                self.pos += 1
                return result
            elif not ch:
                raise self.error("Unterminated array", start)
            else:
                raise self.error("Expected ',' or ']'")

    def parse_key(self) -> str:
        ch = self.peek()
        if ch in ("'", '"'):
            return self.parse_string()
        if ch.isdigit() or ch == ".":
            number = self.parse_number()
            return str(number) if isinstance(number, int) else repr(number)
        match = _IDENTIFIER_RE.match(self.text, self.pos, self.end)
        if match is None:
            if not ch:
                raise self.error("Unexpected end of input")
            raise self.error(f"Unexpected character {ch!r} in object key")
        self.pos = match.end()
        return match.group(0)

    def parse_string(self) -> str:
        start = self.pos
        quote = self.text[self.pos]
        self.pos += 1
        chunks: list[str] = []
        while self.pos < self.end:
            ch = self.text[self.pos]
            if ch == quote:
                self.pos += 1
                return "".join(chunks)
            if ch == "\\":
                chunks.append(self.parse_escape())
                continue
            if quote == "`":
                if self.text.startswith("${", self.pos, self.end):
                    raise self.error("Template substitutions are not supported")
            elif ch in "\r\n":
                break
            chunks.append(ch)
            self.pos += 1
        raise self.error("Unterminated string", start)

    def parse_escape(self) -> str:
        start = self.pos
        self.pos += 1
        ch = self.peek()
        if not ch:
            raise self.error("Unterminated string", start)
        self.pos += 1

        if ch in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[ch]
        if ch == "\r":
            if self.peek() == "\n":
                self.pos += 1
            return ""
        if ch in "\n\u2028\u2029":
            return ""
        if ch == "x":
            return chr(self.read_hex(2, start))
        if ch == "u":
            return self.parse_unicode_escape(start)
        if ch == "0" and not self.peek().isdigit():
            return "\0"
        if ch.isdigit():
            raise self.error("Octal escape sequences are not supported", start)
        return ch

    def parse_unicode_escape(self, start: int) -> str:
        if self.peek() == "{":
            close = self.text.find("}", self.pos, self.end)
            digits = self.text[self.pos + 1 : close] if close != -1 else ""
            if not digits or not set(digits) <= _HEX_DIGITS:
                raise self.error("Invalid unicode escape", start)
            code = int(digits, 16)
            if code > 0x10FFFF:
                raise self.error("Unicode escape out of range", start)
            self.pos = close + 1
            return chr(code)

        code = self.read_hex(4, start)
        if 0xD800 <= code < 0xDC00 and self.text.startswith("\\u", self.pos, self.end):
            saved = self.pos
            self.pos += 2
            low = self.read_hex(4, saved)
            if 0xDC00 <= low < 0xE000:
                return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
            self.pos = saved
        return chr(code)

    def read_hex(self, count: int, start: int) -> int:
        digits = self.text[self.pos : self.pos + count]
        if len(digits) != count or not set(digits) <= _HEX_DIGITS:
            raise self.error("Invalid hex escape", start)
        self.pos += count
        return int(digits, 16)

    def parse_number(self) -> int | float:
        match = _NUMBER_RE.match(self.text, self.pos, self.end)
        if match is None:
            raise self.error("Invalid number")
        self.pos = match.end()

        literal = match.group(0)
        sign = -1 if literal.startswith("-") else 1
        body = literal.lstrip("+-")
        if body == "Infinity":
            return sign * math.inf
        if body[:2].lower() in ("0x", "0o", "0b"):
            return sign * int(body, 0)
        if any(ch in body for ch in ".eE"):
            return sign * float(body)
        return sign * int(body)


def parse_object_literal(source: str) -> Any:
    """Parse a single object-literal (or any literal) expression."""
    parser = _Parser(source)
    value = parser.parse_value()
    parser.expect_end()
    return value


def parse_config_text(text: str) -> dict[str, Any] | None:
    """Parse the object exported by a config module.

    Returns None when the text has no ``module.exports = {`` marker.
    """
    marker = text.find(MODULE_EXPORTS_MARKER)
    if marker == -1:
        return None

    brace = marker + len(MODULE_EXPORTS_MARKER) - 1
    end = find_matching_brace(text, brace) + 1

    parser = _Parser(text, brace, end)
    value: dict[str, Any] = parser.parse_object()
    parser.expect_end()
    return value
