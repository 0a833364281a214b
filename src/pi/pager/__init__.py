"""pi-pager: ANSI aware text decoding, color downsampling and line wrapping for a terminal pager."""

# Colors
from pi.pager.colors import COLOR_DEFAULT, Color, ColorType, color256_to_rgb

# Styles and cells
from pi.pager.style import STYLE_DEFAULT, Attr, Style
from pi.pager.cells import Cell, cells_from_string, cells_to_string, trim_space_left, trim_space_right

# Tokenizing
from pi.pager.ansi_tokenizer import (
    ManPageFormat,
    TokenizerOptions,
    UnprintableStyle,
    consume_composite_color,
    tokens_from_string,
)

# Wrapping and rendering
from pi.pager.linewrapper import NO_BREAK_SPACE, get_wrap_width, wrap_line
from pi.pager.render import render_line

# Configuration
from pi.pager.config import PagerConfig, detect_color_type, load_config

__all__ = [
    # Colors
    "COLOR_DEFAULT",
    "Color",
    "ColorType",
    "color256_to_rgb",
    # Styles and cells
    "STYLE_DEFAULT",
    "Attr",
    "Style",
    "Cell",
    "cells_from_string",
    "cells_to_string",
    "trim_space_left",
    "trim_space_right",
    # Tokenizing
    "ManPageFormat",
    "TokenizerOptions",
    "UnprintableStyle",
    "consume_composite_color",
    "tokens_from_string",
    # Wrapping and rendering
    "NO_BREAK_SPACE",
    "get_wrap_width",
    "wrap_line",
    "render_line",
    # Configuration
    "PagerConfig",
    "detect_color_type",
    "load_config",
]
