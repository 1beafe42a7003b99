"""Pytest configuration and synthetic TheDraw font builders."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Mapping, Sequence

import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
_src_str = str(_SRC)
if _SRC.exists() and _src_str not in sys.path:
    sys.path.insert(0, _src_str)

from tdfiglet.font import CHARSET, MAGIC  # noqa: E402

GLYPH_DATA_OFFSET = 233

Row = Sequence[tuple[str | int, int]]


def glyph_record(width: int, height: int, rows: Sequence[Row]) -> bytes:
    """Encode ``rows`` of ``(char, color)`` pairs as a glyph record."""

    record = bytearray([width, height])
    for index, row in enumerate(rows):
        if index:
            record.append(0x0D)
        for char, color in row:
            code = ord(char) if isinstance(char, str) else char
            record.extend((code, color))
    record.append(0x00)
    return bytes(record)


def build_tdf(
    glyphs: Mapping[str, bytes],
    *,
    name: bytes = b"TESTFONT",
    kind: int = 2,
    spacing: int = 1,
    offsets: Mapping[str, int] | None = None,
) -> bytes:
    """Assemble a font file from pre-encoded glyph ``records``."""

    header = bytearray(GLYPH_DATA_OFFSET)
    header[: len(MAGIC)] = MAGIC
    header[24] = len(name)
    header[25 : 25 + len(name)] = name
    header[41] = kind
    header[42] = spacing
    header[43] = 0

    body = bytearray()
    table = {char: 0xFFFF for char in CHARSET}
    for char, record in glyphs.items():
        table[char] = len(body)
        body.extend(record)
    if offsets:
        table.update(offsets)

    for index, char in enumerate(CHARSET):
        position = 45 + index * 2
        header[position : position + 2] = table[char].to_bytes(2, "little")
    return bytes(header + body)


@pytest.fixture
def make_record() -> Callable[..., bytes]:
    return glyph_record


@pytest.fixture
def make_font_bytes() -> Callable[..., bytes]:
    return build_tdf


@pytest.fixture
def letter_a_font_bytes() -> bytes:
    """A 3x2 ``A`` with every cell in color 0."""

    record = glyph_record(
        3,
        2,
        [
            [("A", 0), (" ", 0), ("A", 0)],
            [(" ", 0), ("A", 0), (" ", 0)],
        ],
    )
    return build_tdf({"A": record}, spacing=1)
