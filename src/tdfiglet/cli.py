"""Render text banners with TheDraw color fonts."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Callable, NoReturn, Sequence, TypeVar

from .config import (
    ConfigError,
    load_render_config,
    parse_color_scheme,
    parse_encoding,
    parse_justification,
    parse_screen_width,
)
from .font import FontDecodeError, FontLoadError, load_font
from .info import describe_font
from .render import BANNER_SEPARATOR, RenderConfig, render_lines

LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")

# sysexits.h
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_OSERR = 71
EX_CONFIG = 78


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EX_USAGE, f"{self.prog}: error: {message}\n")


def _option(parse: Callable[[str], _T]) -> Callable[[str], _T]:
    def convert(value: str) -> _T:
        try:
            return parse(value)
        except ConfigError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    convert.__name__ = parse.__name__.removeprefix("parse_")
    return convert


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed command-line arguments for ``tdfiglet``."""

    parser = _ArgumentParser(prog="tdfiglet", description=__doc__)
    parser.add_argument(
        "-j",
        dest="justify",
        type=_option(parse_justification),
        default=None,
        help="Justify left, right, or center (l|r|c, default: l)",
    )
    parser.add_argument(
        "-w",
        dest="width",
        type=_option(parse_screen_width),
        default=None,
        help="Screen width used for justification (default: 80)",
    )
    parser.add_argument(
        "-c",
        dest="color",
        type=_option(parse_color_scheme),
        default=None,
        help="Color format ANSI or mIRC (a|m, default: a)",
    )
    parser.add_argument(
        "-e",
        dest="encoding",
        type=_option(parse_encoding),
        default=None,
        help="Encode cells as unicode or raw CP437 bytes (u|a, default: u)",
    )
    parser.add_argument(
        "-i",
        dest="info",
        action="store_true",
        help="Print font details",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML file providing render defaults",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity written to stderr",
    )
    parser.add_argument("font", type=Path, help="Path to a TheDraw .tdf font")
    parser.add_argument("text", nargs="*", help="Strings to render")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RenderConfig:
    """Merge config file defaults with command-line overrides."""

    config = load_render_config(args.config) if args.config else RenderConfig()
    return RenderConfig(
        justification=args.justify or config.justification,
        screen_width=args.width or config.screen_width,
        color_scheme=args.color or config.color_scheme,
        encoding=args.encoding or config.encoding,
    )


def run(args: argparse.Namespace, stream: BinaryIO) -> int:
    try:
        config = build_config(args)
    except (ConfigError, OSError) as exc:
        LOGGER.error("invalid configuration: %s", exc)
        return EX_CONFIG

    try:
        font = load_font(args.font, encoding=config.encoding)
    except FontLoadError as exc:
        LOGGER.error("%s", exc)
        return EX_NOINPUT
    except FontDecodeError as exc:
        LOGGER.error("%s: %s", args.font, exc)
        return EX_DATAERR

    if args.info:
        for line in describe_font(font, args.font):
            stream.write(line.encode("utf-8") + b"\n")

    if not font.is_color:
        LOGGER.warning("%s: only color fonts can be rendered", args.font)
        stream.flush()
        return EX_OK

    stream.write(BANNER_SEPARATOR)
    for line in render_lines(args.text, font, config):
        stream.write(line)
    stream.flush()
    return EX_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``tdfiglet`` command."""

    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(name)s: %(levelname)s: %(message)s",
    )
    try:
        return run(args, sys.stdout.buffer)
    except MemoryError:
        LOGGER.error("out of memory while rendering %s", args.font)
        return EX_OSERR


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())
