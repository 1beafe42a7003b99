"""Compose strings into banner lines using a decoded TheDraw font."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from .codepage import TextEncoding
from .colors import ColorScheme, color_escape, line_terminator, reset_escape
from .font import Cell, Font, Glyph

DEFAULT_SCREEN_WIDTH = 80

# Blank lines around banners are bare newlines for every color scheme.
BANNER_SEPARATOR = b"\n"


class Justification(Enum):
    """Horizontal placement of a rendered line."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


@dataclass(frozen=True)
class RenderConfig:
    """Options controlling how fonts are decoded and lines are composed."""

    justification: Justification = Justification.LEFT
    screen_width: int = DEFAULT_SCREEN_WIDTH
    color_scheme: ColorScheme = ColorScheme.ANSI
    encoding: TextEncoding = TextEncoding.UNICODE


@dataclass(frozen=True)
class LineLayout:
    """Measured placement of one input string."""

    glyphs: tuple[Glyph, ...]
    width: int
    height: int
    padding: int


def _truncating_half(value: int) -> int:
    return -(-value // 2) if value < 0 else value // 2


def compute_padding(line_width: int, config: RenderConfig) -> int:
    """Return the left padding for a line ``line_width`` cells wide.

    The result is negative when the line is wider than the screen.
    """

    if config.justification is Justification.RIGHT:
        return config.screen_width - line_width
    if config.justification is Justification.CENTER:
        return _truncating_half(config.screen_width - line_width)
    return 0


def layout(text: str, font: Font, config: RenderConfig) -> LineLayout:
    """Measure ``text`` against ``font``, skipping characters it lacks."""

    glyphs = tuple(
        glyph for glyph in (font.glyph_for(char) for char in text) if glyph is not None
    )
    width = sum(glyph.width for glyph in glyphs)
    if glyphs:
        width += font.spacing * (len(glyphs) - 1)
    height = max((glyph.height for glyph in glyphs), default=0)
    return LineLayout(
        glyphs=glyphs,
        width=width,
        height=height,
        padding=compute_padding(width, config),
    )


def render_row(cells: Sequence[Cell], scheme: ColorScheme) -> bytes:
    """Emit one glyph row, selecting a new color only when it changes."""

    parts: list[bytes] = []
    previous: int | None = None
    for cell in cells:
        if cell.color != previous:
            parts.append(color_escape(cell.color, scheme))
            previous = cell.color
        parts.append(cell.text)
    return b"".join(parts)


def render(text: str, font: Font, config: RenderConfig | None = None) -> list[bytes]:
    """Return the banner rows for ``text``, each ending in a line terminator.

    Raises :class:`~tdfiglet.font.UnsupportedFontKindError` for outline and
    block fonts.
    """

    config = config or RenderConfig()
    font.require_color()

    measured = layout(text, font, config)
    scheme = config.color_scheme
    reset = reset_escape(scheme)
    gap = b" " * font.spacing
    lead = b" " * max(measured.padding, 0)
    newline = line_terminator(scheme)

    lines: list[bytes] = []
    for row in range(measured.height):
        parts = [lead]
        for glyph in measured.glyphs:
            parts.append(render_row(glyph.row(row), scheme))
            parts.append(reset)
            parts.append(gap)
        parts.append(newline)
        lines.append(b"".join(parts))
    return lines


def render_lines(
    texts: Iterable[str], font: Font, config: RenderConfig | None = None
) -> list[bytes]:
    """Render several strings, separating each banner with a blank line."""

    config = config or RenderConfig()
    output: list[bytes] = []
    for text in texts:
        output.extend(render(text, font, config))
        output.append(BANNER_SEPARATOR)
    return output


__all__ = [
    "BANNER_SEPARATOR",
    "DEFAULT_SCREEN_WIDTH",
    "Justification",
    "LineLayout",
    "RenderConfig",
    "compute_padding",
    "layout",
    "render",
    "render_lines",
    "render_row",
]
