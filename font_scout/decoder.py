# === FILE: font_scout/decoder.py ===
"""
Decoder: reverses the layered obfuscation sites use to hide font URLs.

Handles JS-escaped slashes (``\\/``), ``\\uXXXX`` escapes, percent-encoding,
numeric HTML entities (hex and decimal) and a small table of named entities.
Malformed sequences are left untouched; :func:`decode` never raises.
"""
from __future__ import annotations

import re
from typing import Callable, Final, Sequence

__all__: Sequence[str] = ("decode",)

_UNICODE_ESCAPE_RE: Final = re.compile(r"\\u([0-9A-Fa-f]{4})")
_HEX_ENTITY_RE: Final = re.compile(r"&#[xX]([0-9A-Fa-f]+);")
_DEC_ENTITY_RE: Final = re.compile(r"&#([0-9]+);")
_PERCENT_RUN_RE: Final = re.compile(r"(?:%[0-9A-Fa-f]{2})+")

# surrogateescape keeps invalid UTF-8 bytes as U+DC80..U+DCFF; map them back to U+0080..U+00FF
_ESCAPED_BYTES: Final[dict[int, int]] = {0xDC00 + b: b for b in range(0x80, 0x100)}

_NAMED_ENTITIES: Final[tuple[tuple[str, str], ...]] = (
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&colon;", ":"),
    ("&sol;", "/"),
)

# upper bound for whole-pipeline passes; real pages need two at most
_MAX_PASSES: Final[int] = 8


def _to_char(codepoint: int, original: str) -> str:
    if codepoint == 0 or codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        return original
    return chr(codepoint)


def _until_stable(text: str, step: Callable[[str], str]) -> str:
    while True:
        decoded = step(text)
        if decoded == text:
            return text
        text = decoded


def _unescape_slashes(text: str) -> str:
    return text.replace("\\/", "/")


def _unescape_unicode(text: str) -> str:
    return _UNICODE_ESCAPE_RE.sub(lambda m: _to_char(int(m.group(1), 16), m.group(0)), text)


def _decode_percent_run(match: re.Match[str]) -> str:
    raw = bytes.fromhex(match.group(0).replace("%", ""))
    return raw.decode("utf-8", errors="surrogateescape").translate(_ESCAPED_BYTES)


def _unescape_percent(text: str) -> str:
    return _PERCENT_RUN_RE.sub(_decode_percent_run, text)


def _unescape_numeric_entities(text: str) -> str:
    # large digit runs are bounded by _to_char, int() itself never fails here
    text = _HEX_ENTITY_RE.sub(lambda m: _to_char(int(m.group(1), 16), m.group(0)), text)
    return _DEC_ENTITY_RE.sub(lambda m: _to_char(int(m.group(1)), m.group(0)), text)


def _unescape_named_entities(text: str) -> str:
    for entity, char in _NAMED_ENTITIES:
        text = text.replace(entity, char)
    return text


_STEPS: Final[tuple[Callable[[str], str], ...]] = (
    _unescape_slashes,
    _unescape_unicode,
    _unescape_percent,
    _unescape_numeric_entities,
    _unescape_named_entities,
)


def _single_pass(text: str) -> str:
    for step in _STEPS:
        text = _until_stable(text, step)
    return text


def decode(text: str) -> str:
    """Return *text* with all supported escape layers removed.

    Every step is repeated until it stops matching, then the whole pipeline
    runs again while it keeps changing the text, so that entities which
    reveal another escaped form (``&#92;/`` → ``\\/`` → ``/``) are resolved too.

    >>> decode("https:\\\\/\\\\/fonts.googleapis.com\\\\/css")
    'https://fonts.googleapis.com/css'
    """
    if not text:
        return ""
    for _ in range(_MAX_PASSES):
        decoded = _single_pass(text)
        if decoded == text:
            break
        text = decoded
    return text
