"""Pager configuration: terminal capabilities, display options, man page styles.

Defaults come from the environment, ``$PI_CONFIG_DIR/pager.json`` (default
``~/.pi/pager.json``) overrides them, and command line flags override both.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from pi.pager.ansi_tokenizer import ManPageFormat, TokenizerOptions, UnprintableStyle, tokens_from_string
from pi.pager.colors import ColorType
from pi.pager.style import STYLE_DEFAULT, Style

logger = logging.getLogger(__name__)

_COLOR_TYPE_NAMES: dict[str, ColorType] = {
    "8": ColorType.COLORS_8,
    "16": ColorType.COLORS_16,
    "256": ColorType.COLORS_256,
    "24bit": ColorType.COLORS_24BIT,
}

COLOR_TYPE_CHOICES = tuple(_COLOR_TYPE_NAMES)
UNPRINTABLE_CHOICES: tuple[UnprintableStyle, ...] = ("highlight", "whitespace")


@dataclass
class PagerConfig:
    color_type: ColorType = ColorType.COLORS_16
    unprintable: UnprintableStyle = "highlight"
    wrap_long_lines: bool = False
    man_page: ManPageFormat = field(default_factory=ManPageFormat)

    def tokenizer_options(self) -> TokenizerOptions:
        return TokenizerOptions(unprintable=self.unprintable, man_page=self.man_page)


def parse_color_type(name: str) -> ColorType:
    """Parse a color count name (``8``, ``16``, ``256`` or ``24bit``)."""
    try:
        return _COLOR_TYPE_NAMES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown color count <{name}>, expected one of {', '.join(COLOR_TYPE_CHOICES)}"
        ) from None


def parse_unprintable_style(name: str) -> UnprintableStyle:
    for style in UNPRINTABLE_CHOICES:
        if name == style:
            return style
    raise ValueError(
        f"Unknown unprintable style <{name}>, expected one of {', '.join(UNPRINTABLE_CHOICES)}"
    )


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


def detect_color_type(env: Mapping[str, str] | None = None) -> ColorType:
    """Guess how many colors the terminal supports from ``COLORTERM`` and ``TERM``."""
    env = os.environ if env is None else env
    color_term = env.get("COLORTERM", "").lower()
    term = env.get("TERM", "").lower()

    if color_term in ("truecolor", "24bit"):
        return ColorType.COLORS_24BIT
    if "256color" in term:
        return ColorType.COLORS_256
    if not term or term == "dumb":
        return ColorType.COLORS_8
    return ColorType.COLORS_16


def termcap_to_style(termcap: str) -> Style:
    """Decode an SGR string, like ``LESS_TERMCAP_md`` values, into a style."""
    cells, _plain = tokens_from_string(termcap + "x", logger)
    if not cells:
        logger.warning("Unusable termcap style, ignoring: <%r>", termcap)
        return STYLE_DEFAULT
    return cells[-1].style


def man_page_format_from_env(env: Mapping[str, str] | None = None) -> ManPageFormat:
    """Man page styles, honoring ``LESS_TERMCAP_md`` (bold) and ``LESS_TERMCAP_us`` (underline)."""
    env = os.environ if env is None else env
    default = ManPageFormat()

    bold = env.get("LESS_TERMCAP_md")
    underline = env.get("LESS_TERMCAP_us")
    return ManPageFormat(
        bold=termcap_to_style(bold) if bold else default.bold,
        underline=termcap_to_style(underline) if underline else default.underline,
    )


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------


def _get_config_path(env: Mapping[str, str]) -> Path:
    config_dir = Path(env.get("PI_CONFIG_DIR", Path.home() / ".pi"))
    return config_dir / "pager.json"


def _apply_settings(config: PagerConfig, data: dict[str, Any]) -> None:
    if "colors" in data:
        config.color_type = parse_color_type(str(data["colors"]))
    if "unprintable" in data:
        config.unprintable = parse_unprintable_style(data["unprintable"])
    if "wrap" in data:
        if not isinstance(data["wrap"], bool):
            raise ValueError(f"wrap must be true or false, got {data['wrap']!r}")
        config.wrap_long_lines = data["wrap"]


def load_config(env: Mapping[str, str] | None = None) -> PagerConfig:
    """Build the configuration from the environment and the config file.

    A broken config file is reported on stderr and otherwise ignored.
    """
    env = os.environ if env is None else env
    config = PagerConfig(
        color_type=detect_color_type(env),
        man_page=man_page_format_from_env(env),
    )

    config_path = _get_config_path(env)
    if not config_path.exists():
        return config

    # Applied to a copy so a half valid file changes nothing
    updated = replace(config)
    try:
        data = json.loads(config_path.read_text())
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        _apply_settings(updated, data)
    except Exception as e:
        print(f"Error reading config {config_path}: {e}", file=sys.stderr)
        return config

    logger.debug("Loaded settings from %s", config_path)
    return updated
