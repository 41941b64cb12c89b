"""C-style path quoting as git prints it.

Git wraps a path in double quotes and backslash-escapes it when it holds a
double quote, a backslash or a control character. ``core.quotePath=false``
only stops bytes above 0x7f from being escaped as octal.
"""

from __future__ import annotations

import re

_ESCAPES = {
    b"a": b"\a",
    b"b": b"\b",
    b"t": b"\t",
    b"n": b"\n",
    b"v": b"\v",
    b"f": b"\f",
    b"r": b"\r",
    b'"': b'"',
    b"\\": b"\\",
}
_REVERSE = {v: b"\\" + k for k, v in _ESCAPES.items()}

_ESCAPE_RE = re.compile(rb"\\([0-7]{3}|.)", re.DOTALL)
_NEEDS_QUOTING_RE = re.compile(rb'["\\\x00-\x1f\x7f]')


def _unescape(m: re.Match) -> bytes:
    code = m.group(1)
    if len(code) == 3:
        return bytes([int(code, 8) & 0xFF])
    return _ESCAPES.get(code, code)


def unquote_path(field: str) -> str:
    """Return *field* with git's C-quoting removed; unquoted fields pass through."""
    if len(field) < 2 or not (field.startswith('"') and field.endswith('"')):
        return field
    raw = field[1:-1].encode("utf-8", errors="surrogateescape")
    return _ESCAPE_RE.sub(_unescape, raw).decode("utf-8", errors="surrogateescape")


def quote_path(raw: bytes) -> bytes:
    """Quote *raw* the way git does in patch headers, if it needs it."""
    if not _NEEDS_QUOTING_RE.search(raw):
        return raw
    out = bytearray(b'"')
    for byte in raw:
        char = bytes([byte])
        if char in _REVERSE:
            out += _REVERSE[char]
        elif byte < 0x20 or byte == 0x7F:
            out += b"\\%03o" % byte
        else:
            out += char
    out += b'"'
    return bytes(out)
