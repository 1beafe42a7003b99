"""Decoder for TheDraw ``.tdf`` color fonts."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from types import MappingProxyType
from typing import Final, Mapping, Optional, Sequence

from .codepage import TextEncoding, decode_name, normalize_control, transcode

LOGGER = logging.getLogger(__name__)

MAGIC: Final[bytes] = b"\x13TheDraw FONTS file\x1a"

CHARSET: Final[str] = (
    "!\"#$%&'()*+,-./0123456789:;<=>?@ABCDEFGHIJKLMNO"
    "PQRSTUVWXYZ[\\]^_`abcdefghijklmnopqrstuvwxyz{|}~"
)
NUM_CHARS: Final[int] = len(CHARSET)

ABSENT_OFFSET: Final[int] = 0xFFFF

_NAME_LENGTH_OFFSET = 24
_NAME_OFFSET = 25
_KIND_OFFSET = 41
_SPACING_OFFSET = 42
_BLOCK_SIZE_OFFSET = 43
_CHAR_TABLE_OFFSET = 45
_GLYPH_DATA_OFFSET = 233

_ROW_TERMINATOR = 0x0D
_RECORD_TERMINATOR = 0x00

_CHAR_INDEX: Final[Mapping[str, int]] = MappingProxyType(
    {char: index for index, char in enumerate(CHARSET)}
)


class FontKind(IntEnum):
    """Structural category stored in the font header."""

    OUTLINE = 0
    BLOCK = 1
    COLOR = 2


class FontError(ValueError):
    """Base class for font decoding and rendering failures."""


class FontDecodeError(FontError):
    """Raised when a font buffer cannot be decoded."""


class BadSignatureError(FontDecodeError):
    """Raised when the buffer does not start with the TheDraw signature."""

    def __init__(self) -> None:
        super().__init__("invalid font file: missing TheDraw FONTS signature")


class TruncatedFontError(FontDecodeError):
    """Raised when the header ends before the glyph data region."""

    def __init__(self, length: int) -> None:
        super().__init__(
            f"font header truncated: {length} bytes, "
            f"expected at least {_GLYPH_DATA_OFFSET}"
        )
        self.length = length


class OffsetOutOfRangeError(FontDecodeError):
    """Raised when a character table entry points past the buffer end."""

    def __init__(self, index: int, offset: int, length: int) -> None:
        super().__init__(
            f"glyph offset {offset:#06x} for {CHARSET[index]!r} "
            f"(table entry {index}) lies outside the {length}-byte font"
        )
        self.index = index
        self.offset = offset
        self.length = length


class TruncatedGlyphError(FontDecodeError):
    """Raised when a glyph record runs off the end of the buffer."""

    def __init__(self, char: str, offset: int) -> None:
        super().__init__(
            f"glyph record for {char!r} at offset {offset:#06x} is not terminated"
        )
        self.char = char
        self.offset = offset


class UnsupportedFontKindError(FontError):
    """Raised when rendering is requested for a non-color font."""

    def __init__(self, kind_code: int) -> None:
        try:
            label = FontKind(kind_code).name.lower()
        except ValueError:
            label = f"unknown ({kind_code})"
        super().__init__(f"unsupported font kind: {label}")
        self.kind_code = kind_code


class FontLoadError(FontError):
    """Raised when a font file cannot be read from disk."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


@dataclass(frozen=True)
class Cell:
    """One character position of a glyph."""

    color: int = 0
    text: bytes = b" "

    @property
    def foreground(self) -> int:
        return self.color & 0x0F

    @property
    def background(self) -> int:
        return (self.color & 0xF0) >> 4


BLANK_CELL: Final[Cell] = Cell()


@dataclass(frozen=True)
class Glyph:
    """Decoded cell grid for a single character.

    ``cells`` always spans the font's ``max_height`` rows so shorter glyphs
    are padded with blank cells beneath their own ``height``.
    """

    width: int
    height: int
    cells: tuple[Cell, ...]

    @property
    def grid_height(self) -> int:
        if not self.width:
            return 0
        return len(self.cells) // self.width

    def row(self, index: int) -> Sequence[Cell]:
        """Return the cells of row ``index``; rows past the grid are blank."""

        if not 0 <= index < self.grid_height:
            return (BLANK_CELL,) * self.width
        start = index * self.width
        return self.cells[start : start + self.width]


@dataclass(frozen=True)
class Font:
    """A decoded TheDraw font."""

    name: str
    kind_code: int
    spacing: int
    block_size: int
    char_table: tuple[int, ...]
    max_height: int
    glyphs: Mapping[str, Glyph] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:  # pragma: no cover - dataclass internals
        object.__setattr__(self, "glyphs", MappingProxyType(dict(self.glyphs)))

    @property
    def kind(self) -> Optional[FontKind]:
        try:
            return FontKind(self.kind_code)
        except ValueError:
            return None

    @property
    def is_color(self) -> bool:
        return self.kind_code == FontKind.COLOR

    @property
    def available_chars(self) -> str:
        """Characters with a glyph, in character table order."""

        return "".join(char for char in CHARSET if char in self.glyphs)

    def glyph_for(self, char: str) -> Optional[Glyph]:
        """Return the glyph for ``char`` or ``None`` when the font lacks it."""

        return self.glyphs.get(char)

    def require_color(self) -> None:
        if not self.is_color:
            raise UnsupportedFontKindError(self.kind_code)


def char_index(char: str) -> int:
    """Return the character table slot for ``char`` or ``-1``."""

    return _CHAR_INDEX.get(char, -1)


def decode_font(
    buffer: bytes, *, encoding: TextEncoding = TextEncoding.UNICODE
) -> Font:
    """Decode ``buffer`` into a :class:`Font`.

    The decode is all-or-nothing: any structural problem raises a
    :class:`FontDecodeError` subclass and no partial font is produced.
    """

    data = bytes(buffer)
    if data[: len(MAGIC)] != MAGIC:
        raise BadSignatureError()
    if len(data) < _GLYPH_DATA_OFFSET:
        raise TruncatedFontError(len(data))

    name_length = data[_NAME_LENGTH_OFFSET]
    name = decode_name(data[_NAME_OFFSET : _NAME_OFFSET + name_length])
    kind_code = data[_KIND_OFFSET]
    spacing = data[_SPACING_OFFSET]
    block_size = data[_BLOCK_SIZE_OFFSET]
    char_table = _read_char_table(data)
    LOGGER.debug(
        "font %r: kind=%d spacing=%d block_size=%d",
        name,
        kind_code,
        spacing,
        block_size,
    )

    _validate_offsets(char_table, len(data))
    max_height = _scan_max_height(data, char_table)

    glyphs: dict[str, Glyph] = {}
    for index, offset in enumerate(char_table):
        if offset == ABSENT_OFFSET:
            continue
        char = CHARSET[index]
        glyphs[char] = _decode_glyph(
            data,
            char,
            _GLYPH_DATA_OFFSET + offset,
            max_height=max_height,
            encoding=encoding,
        )

    LOGGER.debug("font %r: decoded %d glyphs, height %d", name, len(glyphs), max_height)
    return Font(
        name=name,
        kind_code=kind_code,
        spacing=spacing,
        block_size=block_size,
        char_table=char_table,
        max_height=max_height,
        glyphs=glyphs,
    )


def load_font(path: Path | str, *, encoding: TextEncoding = TextEncoding.UNICODE) -> Font:
    """Read and decode the font stored at ``path``."""

    font_path = Path(path)
    try:
        data = font_path.read_bytes()
    except OSError as exc:
        raise FontLoadError(font_path, exc.strerror or str(exc)) from exc
    LOGGER.info("Loaded font file %s (%d bytes)", font_path, len(data))
    return decode_font(data, encoding=encoding)


def _read_char_table(data: Sequence[int]) -> tuple[int, ...]:
    entries = []
    for index in range(NUM_CHARS):
        position = _CHAR_TABLE_OFFSET + index * 2
        entries.append(data[position] | (data[position + 1] << 8))
    return tuple(entries)


def _validate_offsets(char_table: Sequence[int], length: int) -> None:
    for index, offset in enumerate(char_table):
        if offset == ABSENT_OFFSET:
            continue
        # Width and height must both be readable.
        if _GLYPH_DATA_OFFSET + offset + 2 > length:
            raise OffsetOutOfRangeError(index, offset, length)


def _scan_max_height(data: Sequence[int], char_table: Sequence[int]) -> int:
    height = 0
    for offset in char_table:
        if offset == ABSENT_OFFSET:
            continue
        height = max(height, data[_GLYPH_DATA_OFFSET + offset + 1])
    return height


def _decode_glyph(
    data: Sequence[int],
    char: str,
    start: int,
    *,
    max_height: int,
    encoding: TextEncoding,
) -> Glyph:
    width = data[start]
    height = data[start + 1]
    cells = [BLANK_CELL] * (width * max_height)

    position = start + 2
    end = len(data)
    row = col = 0
    dropped = 0
    while True:
        if position >= end:
            raise TruncatedGlyphError(char, start - _GLYPH_DATA_OFFSET)
        byte = data[position]
        position += 1
        if byte == _RECORD_TERMINATOR:
            break
        if byte == _ROW_TERMINATOR:
            row += 1
            col = 0
            continue
        if position >= end:
            raise TruncatedGlyphError(char, start - _GLYPH_DATA_OFFSET)
        color = data[position]
        position += 1

        if col < width and row < max_height:
            text = transcode(normalize_control(byte), encoding)
            cells[row * width + col] = Cell(color=color, text=text)
        else:
            dropped += 1
        col += 1

    if dropped:
        LOGGER.warning(
            "glyph %r: dropped %d cells outside its %dx%d grid",
            char,
            dropped,
            width,
            max_height,
        )
    return Glyph(width=width, height=height, cells=tuple(cells))


__all__ = [
    "ABSENT_OFFSET",
    "BadSignatureError",
    "CHARSET",
    "Cell",
    "Font",
    "FontDecodeError",
    "FontError",
    "FontKind",
    "FontLoadError",
    "Glyph",
    "MAGIC",
    "NUM_CHARS",
    "OffsetOutOfRangeError",
    "TruncatedFontError",
    "TruncatedGlyphError",
    "UnsupportedFontKindError",
    "char_index",
    "decode_font",
    "load_font",
]
