"""Human readable summary of a decoded font."""
from __future__ import annotations

from pathlib import Path

from .font import Font


def describe_font(font: Font, path: Path | str | None = None) -> list[str]:
    """Return the ``-i`` report lines for ``font``."""

    lines: list[str] = []
    if path is not None:
        lines.append(f"file: {path}")
    kind = font.kind.name.lower() if font.kind is not None else f"unknown ({font.kind_code})"
    lines.extend(
        [
            f"font: {font.name}",
            f"kind: {kind}",
            f"spacing: {font.spacing}",
            f"height: {font.max_height}",
            f"char list: {font.available_chars}",
        ]
    )
    return lines


__all__ = ["describe_font"]
