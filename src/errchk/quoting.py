"""Go string literal handling for annotations and report text.

Annotations written as ``// ERROR "regexp"`` carry a Go string literal, and the
report renders patterns, checker names and attempted texts the same way the
Go toolchain prints them with ``%q`` and ``%#q``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

_SIMPLE_ESCAPES: Final[dict[str, str]] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}
_QUOTE_ESCAPES: Final[dict[str, str]] = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}
_HEX_DIGITS: Final[frozenset[str]] = frozenset("0123456789abcdefABCDEF")
_OCTAL_DIGITS: Final[frozenset[str]] = frozenset("01234567")
_HEX_WIDTHS: Final[dict[str, int]] = {"x": 2, "u": 4, "U": 8}
_MAX_CODE_POINT: Final[int] = 0x10FFFF
_BYTE_ORDER_MARK: Final[str] = "\ufeff"


def unquote_literal(text: str) -> str:
    """Interpret ``text`` as a Go string literal and return its value.

    Double-quoted, back-quoted (raw) and single-character single-quoted forms
    are accepted. Raises ``ValueError`` when ``text`` is not a valid literal.
    """
    if len(text) < 2 or text[0] != text[-1] or text[0] not in "\"'`":
        raise ValueError(f"invalid syntax: {text!r}")
    quote = text[0]
    body = text[1:-1]

    if quote == "`":
        if "`" in body:
            raise ValueError(f"invalid syntax: {text!r}")
        return body.replace("\r", "")

    if "\n" in body:
        raise ValueError(f"invalid syntax: {text!r}")
    value = _decode_escapes(body, quote)
    if quote == "'" and len(value) != 1:
        raise ValueError(f"invalid syntax: {text!r}")
    return value


def _decode_escapes(body: str, quote: str) -> str:
    out: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == quote:
            raise ValueError(f"unescaped {quote} inside literal")
        if char != "\\":
            out.append(char)
            index += 1
            continue

        if index + 1 >= len(body):
            raise ValueError("literal ends inside an escape sequence")
        code = body[index + 1]
        index += 2
        if code in _SIMPLE_ESCAPES:
            if (code == "'" and quote == '"') or (code == '"' and quote == "'"):
                raise ValueError(f"escape \\{code} not allowed inside {quote} literal")
            out.append(_SIMPLE_ESCAPES[code])
        elif code in _HEX_WIDTHS:
            width = _HEX_WIDTHS[code]
            digits = body[index : index + width]
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                raise ValueError(f"invalid \\{code} escape")
            value = int(digits, 16)
            if code != "x" and (value > _MAX_CODE_POINT or 0xD800 <= value <= 0xDFFF):
                raise ValueError(f"invalid code point in \\{code} escape")
            out.append(chr(value))
            index += width
        elif code in _OCTAL_DIGITS:
            digits = body[index - 1 : index + 2]
            if len(digits) != 3 or not set(digits) <= _OCTAL_DIGITS:
                raise ValueError("invalid octal escape")
            value = int(digits, 8)
            if value > 0xFF:
                raise ValueError("octal escape out of range")
            out.append(chr(value))
            index += 2
        else:
            raise ValueError(f"unknown escape sequence \\{code}")
    return "".join(out)


def quote(text: str) -> str:
    """Render ``text`` as a double-quoted Go literal (``%q``)."""
    parts: list[str] = ['"']
    for char in text:
        escaped = _QUOTE_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif char.isprintable():
            parts.append(char)
        elif ord(char) < 0x80:
            parts.append(f"\\x{ord(char):02x}")
        elif ord(char) <= 0xFFFF:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(f"\\U{ord(char):08x}")
    parts.append('"')
    return "".join(parts)


def can_backquote(text: str) -> bool:
    for char in text:
        if char == "`" or char == _BYTE_ORDER_MARK:
            return False
        if char != "\t" and (ord(char) < 0x20 or ord(char) == 0x7F):
            return False
    return True


def quote_backquoted(text: str) -> str:
    """Render ``text`` the way ``%#q`` does: raw when possible."""
    if can_backquote(text):
        return f"`{text}`"
    return quote(text)


def quote_list(items: Iterable[str]) -> str:
    return "[" + " ".join(quote(item) for item in items) + "]"
