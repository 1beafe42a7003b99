from __future__ import annotations

import pytest

from tdfiglet.colors import ColorScheme
from tdfiglet.font import Cell, FontKind, UnsupportedFontKindError, decode_font
from tdfiglet.render import (
    Justification,
    RenderConfig,
    compute_padding,
    layout,
    render,
    render_lines,
    render_row,
)


@pytest.fixture
def two_letter_font(make_font_bytes, make_record):
    wide = make_record(
        4,
        3,
        [
            [("H", 0x07), ("H", 0x07), ("H", 0x0C), ("H", 0x0C)],
            [("H", 0x07), ("H", 0x07), ("H", 0x0C), ("H", 0x0C)],
            [("H", 0x07), ("H", 0x07), ("H", 0x0C), ("H", 0x0C)],
        ],
    )
    narrow = make_record(1, 2, [[("i", 0x1E)], [("i", 0x1E)]])
    return decode_font(make_font_bytes({"H": wide, "i": narrow}, spacing=2))


@pytest.mark.parametrize(
    "justification, expected",
    [
        (Justification.LEFT, 0),
        (Justification.CENTER, 30),
        (Justification.RIGHT, 60),
    ],
)
def test_compute_padding(justification: Justification, expected: int) -> None:
    config = RenderConfig(justification=justification, screen_width=80)
    assert compute_padding(20, config) == expected


def test_center_padding_truncates_toward_zero() -> None:
    config = RenderConfig(justification=Justification.CENTER, screen_width=10)
    assert compute_padding(15, config) == -2
    assert compute_padding(7, config) == 1


def test_layout_measures_included_glyphs(two_letter_font) -> None:
    measured = layout("Hi?i", two_letter_font, RenderConfig())
    assert len(measured.glyphs) == 3
    assert measured.width == 4 + 2 + 1 + 2 + 1
    assert measured.height == 3
    assert measured.padding == 0


def test_layout_of_unknown_text_is_empty(two_letter_font) -> None:
    measured = layout("zzz", two_letter_font, RenderConfig())
    assert measured.glyphs == ()
    assert (measured.width, measured.height) == (0, 0)
    assert render("zzz", two_letter_font) == []


def test_render_row_coalesces_color_runs() -> None:
    cells = [Cell(1, b"a"), Cell(1, b"b"), Cell(2, b"c"), Cell(2, b"d"), Cell(2, b"e")]
    output = render_row(cells, ColorScheme.ANSI)

    assert output.count(b"\x1b[") == 2
    assert output == b"\x1b[34;40mab\x1b[32;40mcde"


def test_render_row_mirc() -> None:
    output = render_row([Cell(0x0F, b"x"), Cell(0x0F, b"y")], ColorScheme.MIRC)
    assert output == b"\x0300,01xy"


def test_end_to_end_single_glyph(letter_a_font_bytes) -> None:
    font = decode_font(letter_a_font_bytes)
    lines = render("A", font, RenderConfig(justification=Justification.LEFT, screen_width=80))

    assert lines == [
        b"\x1b[30;40mA A\x1b[0m \n",
        b"\x1b[30;40m A \x1b[0m \n",
    ]


def test_render_pads_and_spaces_glyphs(two_letter_font) -> None:
    config = RenderConfig(justification=Justification.RIGHT, screen_width=20)
    lines = render("Hi", two_letter_font, config)

    assert len(lines) == 3
    padding = b" " * (20 - 7)
    assert lines[0] == (
        padding
        + b"\x1b[37;40mHH\x1b[91;40mHH\x1b[0m  "
        + b"\x1b[93;44mi\x1b[0m  \n"
    )
    # ``i`` is shorter than ``H``; its third row is blank.
    assert lines[2].endswith(b"\x1b[30;40m \x1b[0m  \n")


def test_render_skips_absent_characters(two_letter_font) -> None:
    assert render("H?i", two_letter_font) == render("Hi", two_letter_font)


def test_negative_padding_emits_no_spaces(two_letter_font) -> None:
    config = RenderConfig(justification=Justification.RIGHT, screen_width=2)
    lines = render("HH", two_letter_font, config)
    assert lines[0].startswith(b"\x1b[")


def test_render_is_idempotent(two_letter_font) -> None:
    config = RenderConfig(justification=Justification.CENTER, color_scheme=ColorScheme.MIRC)
    assert render("iHi", two_letter_font, config) == render("iHi", two_letter_font, config)


def test_mirc_lines_end_with_crlf(two_letter_font) -> None:
    lines = render("i", two_letter_font, RenderConfig(color_scheme=ColorScheme.MIRC))
    assert lines == [b"\x0308,02i\x03  \r\n", b"\x0308,02i\x03  \r\n"]


def test_render_lines_separates_banners(two_letter_font) -> None:
    output = render_lines(["i", "i"], two_letter_font)
    assert len(output) == 6
    assert output[2] == b"\n"
    assert output[5] == b"\n"


def test_render_refuses_non_color_fonts(make_font_bytes, make_record) -> None:
    font = decode_font(
        make_font_bytes({"a": make_record(1, 1, [[("a", 1)]])}, kind=FontKind.OUTLINE)
    )
    with pytest.raises(UnsupportedFontKindError):
        render("a", font)


def test_banner_separator_is_bare_newline_for_mirc(two_letter_font) -> None:
    output = render_lines(["i"], two_letter_font, RenderConfig(color_scheme=ColorScheme.MIRC))
    assert output[:2] == [b"\x0308,02i\x03  \r\n"] * 2
    assert output[2] == b"\n"
