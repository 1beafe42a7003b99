"""Public tdfiglet API: TheDraw font decoding and banner rendering."""
from __future__ import annotations

from .codepage import TextEncoding, transcode
from .colors import ColorScheme
from .config import ConfigError, load_render_config
from .font import (
    BadSignatureError,
    Cell,
    Font,
    FontDecodeError,
    FontError,
    FontKind,
    FontLoadError,
    Glyph,
    OffsetOutOfRangeError,
    TruncatedFontError,
    TruncatedGlyphError,
    UnsupportedFontKindError,
    decode_font,
    load_font,
)
from .info import describe_font
from .render import Justification, LineLayout, RenderConfig, layout, render, render_lines

__all__ = [
    "BadSignatureError",
    "Cell",
    "ColorScheme",
    "ConfigError",
    "Font",
    "FontDecodeError",
    "FontError",
    "FontKind",
    "FontLoadError",
    "Glyph",
    "Justification",
    "LineLayout",
    "OffsetOutOfRangeError",
    "RenderConfig",
    "TextEncoding",
    "TruncatedFontError",
    "TruncatedGlyphError",
    "UnsupportedFontKindError",
    "decode_font",
    "describe_font",
    "layout",
    "load_font",
    "load_render_config",
    "render",
    "render_lines",
    "transcode",
]
