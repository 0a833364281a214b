"""Render styled cells back into terminal text."""

from __future__ import annotations

from collections.abc import Iterable

from pi.pager.cells import Cell
from pi.pager.colors import ColorType
from pi.pager.style import STYLE_DEFAULT

RESET = "\x1b[0m"


def render_line(cells: Iterable[Cell], terminal_color_type: ColorType) -> str:
    """Return *cells* as text with SGR sequences for *terminal_color_type*.

    Only style changes are emitted, and the line always ends with default
    styling so styles never leak into the next line.
    """
    parts: list[str] = []
    style = STYLE_DEFAULT
    for cell in cells:
        parts.append(cell.style.render_update_from(style, terminal_color_type))
        parts.append(cell.char)
        style = cell.style

    if style != STYLE_DEFAULT:
        parts.append(RESET)
    return "".join(parts)
