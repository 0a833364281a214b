"""Command line entry point: print a file with its ANSI styling decoded.

Lines are tokenized, optionally wrapped to the terminal width, and rendered
again for the colors the terminal supports.
"""

from __future__ import annotations

import argparse
import io
import logging
import shutil
import sys
from collections.abc import Iterable
from typing import TextIO

from pi.pager.ansi_tokenizer import tokens_from_string
from pi.pager.config import (
    COLOR_TYPE_CHOICES,
    UNPRINTABLE_CHOICES,
    PagerConfig,
    load_config,
    parse_color_type,
    parse_unprintable_style,
)
from pi.pager.linewrapper import wrap_line
from pi.pager.render import render_line

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pi-pager",
        description="Show text with embedded ANSI styling, adapted to the terminal",
    )
    parser.add_argument("file", nargs="?", help="File to show (default: stdin)")
    parser.add_argument("--width", type=int, help="Wrap width (default: terminal width)")
    parser.add_argument("--wrap", action="store_true", default=None, help="Wrap long lines")
    parser.add_argument("--colors", choices=COLOR_TYPE_CHOICES, help="Colors the terminal supports")
    parser.add_argument(
        "--unprintable",
        choices=UNPRINTABLE_CHOICES,
        help="Show unprintable characters highlighted or as whitespace",
    )
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    return parser.parse_args(argv)


def dump(lines: Iterable[str], config: PagerConfig, width: int, out: TextIO) -> None:
    """Write *lines* to *out*, styled for ``config.color_type``."""
    options = config.tokenizer_options()
    for line_number, raw in enumerate(lines, start=1):
        cells, _plain = tokens_from_string(raw.rstrip("\r\n"), logger, options)

        if config.wrap_long_lines and len(cells) > width:
            sub_lines = wrap_line(width, cells)
            logger.debug("Line %d wrapped into %d lines", line_number, len(sub_lines))
        else:
            sub_lines = [cells]

        for sub_line in sub_lines:
            out.write(render_line(sub_line, config.color_type))
            out.write("\n")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = load_config()
    if args.colors:
        config.color_type = parse_color_type(args.colors)
    if args.unprintable:
        config.unprintable = parse_unprintable_style(args.unprintable)
    if args.wrap is not None:
        config.wrap_long_lines = args.wrap

    width = args.width if args.width is not None else shutil.get_terminal_size().columns
    if width < 1:
        print(f"Error: width must be at least 1, got {width}", file=sys.stderr)
        sys.exit(1)

    if args.file is None:
        stdin = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="replace")
        dump(stdin, config, width, sys.stdout)
        return

    try:
        with open(args.file, encoding="utf-8", errors="replace") as f:
            dump(f, config, width, sys.stdout)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
