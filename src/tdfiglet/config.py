"""Render defaults loaded from a TOML configuration file."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping, TypeVar

import tomllib

from .codepage import TextEncoding
from .colors import ColorScheme
from .render import Justification, RenderConfig

_E = TypeVar("_E", Justification, ColorScheme, TextEncoding)

_JUSTIFY_ALIASES: dict[str, Justification] = {
    "l": Justification.LEFT,
    "left": Justification.LEFT,
    "r": Justification.RIGHT,
    "right": Justification.RIGHT,
    "c": Justification.CENTER,
    "center": Justification.CENTER,
}

_COLOR_ALIASES: dict[str, ColorScheme] = {
    "a": ColorScheme.ANSI,
    "ansi": ColorScheme.ANSI,
    "m": ColorScheme.MIRC,
    "mirc": ColorScheme.MIRC,
}

# ``a`` keeps the original ``-e a`` spelling for raw CP437 output.
_ENCODING_ALIASES: dict[str, TextEncoding] = {
    "u": TextEncoding.UNICODE,
    "unicode": TextEncoding.UNICODE,
    "a": TextEncoding.RAW,
    "ascii": TextEncoding.RAW,
    "raw": TextEncoding.RAW,
}

_KNOWN_KEYS = frozenset({"justify", "width", "color", "encoding"})


class ConfigError(ValueError):
    """Raised when a configuration file fails validation."""


def _lookup(aliases: Mapping[str, _E], value: Any, option: str) -> _E:
    if not isinstance(value, str):
        raise ConfigError(f"{option} must be a string, received {type(value).__name__}")
    resolved = aliases.get(value.strip().lower())
    if resolved is None:
        choices = ", ".join(sorted(aliases))
        raise ConfigError(f"invalid {option} {value!r} (expected one of: {choices})")
    return resolved


def parse_justification(value: Any) -> Justification:
    return _lookup(_JUSTIFY_ALIASES, value, "justify")


def parse_color_scheme(value: Any) -> ColorScheme:
    return _lookup(_COLOR_ALIASES, value, "color")


def parse_encoding(value: Any) -> TextEncoding:
    return _lookup(_ENCODING_ALIASES, value, "encoding")


def parse_screen_width(value: Any) -> int:
    """Validate a screen width, accepting integers or numeric strings."""

    if isinstance(value, bool):
        raise ConfigError("width must be an integer")
    if isinstance(value, int):
        width = value
    elif isinstance(value, str):
        try:
            width = int(value.strip(), base=10)
        except ValueError as exc:
            raise ConfigError(f"invalid width: {value!r}") from exc
    else:
        raise ConfigError("width must be an integer")
    if width < 1:
        raise ConfigError(f"width must be positive, received {width}")
    return width


def config_from_mapping(
    data: Mapping[str, Any], *, base: RenderConfig | None = None
) -> RenderConfig:
    """Build a :class:`RenderConfig` from the ``[render]`` table ``data``."""

    config = base or RenderConfig()
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"unknown [render] keys: {', '.join(unknown)}")

    changes: dict[str, Any] = {}
    if "justify" in data:
        changes["justification"] = parse_justification(data["justify"])
    if "width" in data:
        changes["screen_width"] = parse_screen_width(data["width"])
    if "color" in data:
        changes["color_scheme"] = parse_color_scheme(data["color"])
    if "encoding" in data:
        changes["encoding"] = parse_encoding(data["encoding"])
    return replace(config, **changes)


def load_render_config(config_path: Path) -> RenderConfig:
    """Parse and validate the render configuration at ``config_path``."""

    try:
        with config_path.open("rb") as stream:
            raw_data = tomllib.load(stream)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{config_path}: {exc}") from exc

    section = raw_data.get("render")
    if section is None:
        return RenderConfig()
    if not isinstance(section, Mapping):
        raise ConfigError("[render] section must be a mapping")
    return config_from_mapping(section)


__all__ = [
    "ConfigError",
    "config_from_mapping",
    "load_render_config",
    "parse_color_scheme",
    "parse_encoding",
    "parse_justification",
    "parse_screen_width",
]
