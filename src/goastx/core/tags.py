"""Struct field tags: ``key:"value"`` pairs inside a string literal.

Pairs are scanned like Go's ``reflect.StructTag``: a key is a run of printable
characters other than space, quote and colon, followed by ``:`` and a
double-quoted, backslash-escaped value. Pairs are separated by spaces.
"""

import re

from goastx.models import TagSet

_ESCAPE = re.compile(
    r'\\(?:(?P<simple>[abfnrtv\\"])|x(?P<hex>[0-9A-Fa-f]{2})|(?P<octal>[0-7]{3})'
    r"|u(?P<u4>[0-9A-Fa-f]{4})|U(?P<u8>[0-9A-Fa-f]{8}))"
)

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}


def parse_tag(raw: str) -> tuple[TagSet, str]:
    """Parse a tag literal including its delimiters, e.g. ``\\`json:"id"\\```.

    Returns the parsed pairs and the literal unchanged. Malformed content never
    raises; it just yields fewer (or no) pairs.
    """
    if len(raw) < 2:
        return TagSet(), raw
    return TagSet(pairs=scan_pairs(raw[1:-1])), raw


def scan_pairs(tag: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    while tag:
        tag = tag.lstrip(" ")
        if not tag:
            break

        i = 0
        while i < len(tag) and tag[i] > " " and tag[i] not in ':"\x7f':
            i += 1
        if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
            break
        name = tag[:i]
        tag = tag[i + 1 :]

        i = 1
        while i < len(tag) and tag[i] != '"':
            if tag[i] == "\\":
                i += 1
            i += 1
        if i >= len(tag):
            break
        quoted = tag[: i + 1]
        tag = tag[i + 1 :]

        value = unquote(quoted)
        # A value that does not unquote hides only its own key.
        if value is not None:
            pairs.append((name, value))
    return pairs


def unquote(quoted: str) -> str | None:
    """Decode a Go double-quoted string literal, or return None if it is invalid."""
    if len(quoted) < 2 or quoted[0] != '"' or quoted[-1] != '"':
        return None
    body = quoted[1:-1]
    if "\n" in body:
        return None

    decoded = bytearray()
    pos = 0
    while pos < len(body):
        slash = body.find("\\", pos)
        if slash < 0:
            decoded += body[pos:].encode("utf-8")
            break
        decoded += body[pos:slash].encode("utf-8")
        match = _ESCAPE.match(body, slash)
        if match is None:
            return None
        escaped = _decode_escape(match)
        if escaped is None:
            return None
        decoded += escaped
        pos = match.end()
    return decoded.decode("utf-8", errors="replace")


def _decode_escape(match: re.Match[str]) -> bytes | None:
    if match["simple"]:
        return _SIMPLE_ESCAPES[match["simple"]].encode("utf-8")
    if match["hex"]:
        return bytes([int(match["hex"], 16)])
    if match["octal"]:
        value = int(match["octal"], 8)
        return bytes([value]) if value <= 0xFF else None
    code_point = int(match["u4"] or match["u8"], 16)
    if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
        return None
    return chr(code_point).encode("utf-8")
