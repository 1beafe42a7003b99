"""Color escape sequences for ANSI terminals and mIRC clients."""
from __future__ import annotations

from enum import Enum
from typing import Final


class ColorScheme(Enum):
    """Escape sequence family used to express cell colors."""

    ANSI = "ansi"
    MIRC = "mirc"


# TheDraw color order:
# BLK BLU GRN CYN RED MAG BRN GRY DGRY LBLU LGRN LCYN LRED PNK YLW WHT
ANSI_FOREGROUND: Final[tuple[int, ...]] = (
    30, 34, 32, 36, 31, 35, 33, 37, 90, 94, 92, 96, 91, 95, 93, 97,
)
ANSI_BACKGROUND: Final[tuple[int, ...]] = (
    40, 44, 42, 46, 41, 45, 43, 47, 100, 104, 102, 106, 101, 105, 103, 107,
)
MIRC_FOREGROUND: Final[tuple[int, ...]] = (
    1, 2, 3, 10, 5, 6, 7, 15, 14, 12, 9, 11, 4, 13, 8, 0,
)
MIRC_BACKGROUND: Final[tuple[int, ...]] = MIRC_FOREGROUND

_ANSI_RESET: Final[bytes] = b"\x1b[0m"
_MIRC_COLOR: Final[bytes] = b"\x03"

_LINE_TERMINATORS: Final[dict[ColorScheme, bytes]] = {
    ColorScheme.ANSI: b"\n",
    ColorScheme.MIRC: b"\r\n",
}


def split_color(color: int) -> tuple[int, int]:
    """Return the ``(foreground, background)`` palette indices of ``color``."""

    raw = int(color) & 0xFF
    return raw & 0x0F, (raw & 0xF0) >> 4


def color_escape(color: int, scheme: ColorScheme) -> bytes:
    """Return the escape selecting the colors packed into ``color``.

    mIRC codes are zero padded to two digits so a cell whose text starts
    with a digit is not read as part of the color number.
    """

    fg, bg = split_color(color)
    if scheme is ColorScheme.MIRC:
        # Always two digits, never the shortest form such as ``\x031,1``.
        codes = f"{MIRC_FOREGROUND[fg]:02d},{MIRC_BACKGROUND[bg]:02d}"
        return _MIRC_COLOR + codes.encode("ascii")
    return f"\x1b[{ANSI_FOREGROUND[fg]};{ANSI_BACKGROUND[bg]}m".encode("ascii")


def reset_escape(scheme: ColorScheme) -> bytes:
    """Return the sequence restoring default colors."""

    if scheme is ColorScheme.MIRC:
        return _MIRC_COLOR
    return _ANSI_RESET


def line_terminator(scheme: ColorScheme) -> bytes:
    return _LINE_TERMINATORS[scheme]


__all__ = [
    "ANSI_BACKGROUND",
    "ANSI_FOREGROUND",
    "ColorScheme",
    "MIRC_BACKGROUND",
    "MIRC_FOREGROUND",
    "color_escape",
    "line_terminator",
    "reset_escape",
    "split_color",
]
