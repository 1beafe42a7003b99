"""CP437 translation helpers for TheDraw glyph cells."""
from __future__ import annotations

from enum import Enum
from typing import Final


class TextEncoding(Enum):
    """How glyph cell bytes are turned into display text."""

    UNICODE = "unicode"
    RAW = "raw"


_BLANK: Final[int] = 0x20

# TheDraw fonts are drawn with the IBM PC character set.
_CODEPAGE: Final[str] = "cp437"


def _build_utf8_table() -> tuple[bytes, ...]:
    table = []
    for code in range(256):
        byte = code if code >= _BLANK else _BLANK
        table.append(bytes([byte]).decode(_CODEPAGE).encode("utf-8"))
    return tuple(table)


_UTF8_TABLE: Final[tuple[bytes, ...]] = _build_utf8_table()

_RAW_TABLE: Final[tuple[bytes, ...]] = tuple(
    bytes([code if code >= _BLANK else _BLANK]) for code in range(256)
)


def normalize_control(byte: int) -> int:
    """Return ``byte`` with control codes below ``0x20`` folded to a space."""

    raw = int(byte) & 0xFF
    return raw if raw >= _BLANK else _BLANK


def transcode(byte: int, mode: TextEncoding = TextEncoding.UNICODE) -> bytes:
    """Return the display text for a single codepage ``byte``.

    ``UNICODE`` mode yields the UTF-8 encoding of the CP437 code point (one
    to three bytes for this codepage). ``RAW`` mode passes the byte through
    untouched so terminals with a native CP437 font can draw it directly.
    """

    raw = int(byte) & 0xFF
    if mode is TextEncoding.RAW:
        return _RAW_TABLE[raw]
    return _UTF8_TABLE[raw]


def decode_name(raw: bytes) -> str:
    """Decode a font name field into text."""

    return bytes(raw).decode(_CODEPAGE)


__all__ = ["TextEncoding", "decode_name", "normalize_control", "transcode"]
