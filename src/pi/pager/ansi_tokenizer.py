"""Decode a line of text with embedded ANSI escape sequences into styled cells.

Only SGR (``ESC[...m``) sequences change the style. Other well formed
sequences (cursor movement, OSC hyperlinks and titles, charset selection) are
swallowed silently. Malformed sequences are dropped and reported through the
caller's logger; tokenizing never fails because of bad input.

Also decodes man page style overstriking (``c BS c`` for bold, ``_ BS c`` for
underline) and replaces unprintable characters so every cell can be shown.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

import wcwidth

from pi.pager.cells import Cell, cells_to_string
from pi.pager.colors import COLOR_DEFAULT, Color
from pi.pager.style import STYLE_DEFAULT, Attr, Style

logger = logging.getLogger(__name__)

_ESC = "\x1b"
_BACKSPACE = "\b"
_BEL = "\x07"

# How unprintable characters are shown: as a reversed "?" or as a space
UnprintableStyle = Literal["highlight", "whitespace"]


@dataclass(frozen=True)
class ManPageFormat:
    """Styles used for man page overstrike formatting."""

    bold: Style = field(default_factory=lambda: STYLE_DEFAULT.with_attr(Attr.BOLD))
    underline: Style = field(default_factory=lambda: STYLE_DEFAULT.with_attr(Attr.UNDERLINE))


@dataclass(frozen=True)
class TokenizerOptions:
    unprintable: UnprintableStyle = "highlight"
    man_page: ManPageFormat = field(default_factory=ManPageFormat)


_DEFAULT_OPTIONS = TokenizerOptions()


# ---------------------------------------------------------------------------
# tokens_from_string
# ---------------------------------------------------------------------------


def tokens_from_string(
    line: str,
    log: logging.Logger | None = None,
    options: TokenizerOptions | None = None,
) -> tuple[list[Cell], str]:
    """Turn *line* into one styled cell per visible character.

    Returns ``(cells, plain)`` where *plain* is the text of the cells, with
    ``len(plain) == len(cells)``. Problems with escape sequences are reported
    to *log* (default: this module's logger).
    """
    log = log or logger
    options = options or _DEFAULT_OPTIONS

    cells: list[Cell] = []
    style = STYLE_DEFAULT
    length = len(line)
    i = 0
    while i < length:
        char = line[i]

        if char == _ESC:
            i, style = _consume_escape(line, i, style, log)
            continue

        # Man page overstrike: "x\bx" is bold x, "_\bx" is underlined x
        if i + 2 < length and line[i + 1] == _BACKSPACE and line[i + 2] not in (_ESC, _BACKSPACE):
            overstruck = line[i + 2]
            if char == overstruck:
                cells.append(_printable_cell(overstruck, options.man_page.bold, options))
                i += 3
                continue
            if char == "_":
                cells.append(_printable_cell(overstruck, options.man_page.underline, options))
                i += 3
                continue
            if overstruck == "_":
                cells.append(_printable_cell(char, options.man_page.underline, options))
                i += 3
                continue

        cells.append(_printable_cell(char, style, options))
        i += 1

    return cells, cells_to_string(cells)


def _printable_cell(char: str, style: Style, options: TokenizerOptions) -> Cell:
    if not _is_unprintable(char):
        return Cell(char, style)

    if options.unprintable == "whitespace":
        return Cell(" ", style)
    return Cell("?", style.with_attr(Attr.REVERSE))


def _is_unprintable(char: str) -> bool:
    if char == "\t":
        return False
    if char == "\ufffd":
        # What bytes.decode(errors="replace") leaves for broken input
        return True
    if unicodedata.category(char) == "Cc":
        # wcwidth reports NUL as zero width, but no control character is drawable
        return True
    return wcwidth.wcwidth(char) < 0


# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------


def _consume_escape(line: str, start: int, style: Style, log: logging.Logger) -> tuple[int, Style]:
    """Consume the escape sequence starting at ``line[start]``.

    Returns the index to continue tokenizing from and the resulting style.
    """
    length = len(line)
    if start + 1 >= length:
        log.warning("Incomplete escape sequence at end of line: <%r>", line[start:])
        return length, style

    introducer = line[start + 1]

    if introducer == "[":
        return _consume_csi(line, start, style, log)

    if introducer in "]_P^":
        # OSC, APC, DCS and PM strings, terminated by BEL or ESC \
        end = _find_string_terminator(line, start + 2)
        if end < 0:
            log.warning("Unterminated escape sequence string: <%r>", line[start:])
            return length, style
        return end, style

    # Other escapes: optional intermediate bytes, then one final byte
    j = start + 1
    while j < length and " " <= line[j] <= "/":
        j += 1
    if j >= length:
        log.warning("Incomplete escape sequence at end of line: <%r>", line[start:])
        return length, style
    if "0" <= line[j] <= "~":
        return j + 1, style

    log.warning("Unrecognized escape sequence, discarding: <%r>", line[start:j])
    return j, style


def _find_string_terminator(line: str, start: int) -> int:
    """Return the index just past the BEL or ST ending a string, or -1."""
    j = start
    while j < len(line):
        if line[j] == _BEL:
            return j + 1
        if line[j] == _ESC and j + 1 < len(line) and line[j + 1] == "\\":
            return j + 2
        j += 1
    return -1


def _consume_csi(line: str, start: int, style: Style, log: logging.Logger) -> tuple[int, Style]:
    length = len(line)

    # Parameter bytes, then intermediate bytes, then the final byte
    j = start + 2
    while j < length and "0" <= line[j] <= "?":
        j += 1
    params_end = j
    while j < length and " " <= line[j] <= "/":
        j += 1

    if j >= length:
        log.warning("Incomplete escape sequence at end of line: <%r>", line[start:])
        return length, style

    final = line[j]
    if not "@" <= final <= "~":
        # The offending character is not part of the sequence, it is tokenized
        # as ordinary text
        log.warning("Malformed escape sequence, discarding: <%r>", line[start:j])
        return j, style

    if final != "m" or params_end != j:
        # Not about styling
        return j + 1, style

    return j + 1, _update_style(style, line[start + 2 : params_end], log)


# ---------------------------------------------------------------------------
# SGR
# ---------------------------------------------------------------------------


def _update_style(style: Style, params_text: str, log: logging.Logger) -> Style:
    """Apply the SGR parameters *params_text* (``"1;31"`` style) to *style*."""
    if not params_text:
        # ESC[m is a reset
        return STYLE_DEFAULT

    if any(char not in "0123456789;" for char in params_text):
        log.warning("Unsupported SGR parameters: <CSI %sm>", params_text)
        return style

    original = style
    params = params_text.split(";")
    index = 0
    while index < len(params):
        param = params[index]
        code = int(param) if param else 0

        if code in (38, 48):
            try:
                index, color = consume_composite_color(params, index)
            except ValueError as e:
                log.warning("%s", e)
                return original
            style = style.with_foreground(color) if code == 38 else style.with_background(color)
            continue

        updated = _apply_sgr_code(style, code)
        if updated is None:
            log.warning("Unrecognized ANSI SGR code <%s>: <CSI %sm>", param, params_text)
        else:
            style = updated
        index += 1

    return style


def _apply_sgr_code(style: Style, code: int) -> Style | None:
    """Apply a single parameter SGR code, or return None if it is unknown."""
    if code == 0:
        return STYLE_DEFAULT
    if code == 1:
        return style.with_attr(Attr.BOLD)
    if code == 2:
        return style.with_attr(Attr.DIM)
    if code == 3:
        return style.with_attr(Attr.ITALIC)
    if code == 4:
        return style.with_attr(Attr.UNDERLINE)
    if code == 5:
        return style.with_attr(Attr.BLINK)
    if code == 7:
        return style.with_attr(Attr.REVERSE)
    if code == 22:
        return style.without_attr(Attr.BOLD | Attr.DIM)
    if code == 23:
        return style.without_attr(Attr.ITALIC)
    if code == 24:
        return style.without_attr(Attr.UNDERLINE)
    if code == 25:
        return style.without_attr(Attr.BLINK)
    if code == 27:
        return style.without_attr(Attr.REVERSE)
    if 30 <= code <= 37:
        return style.with_foreground(Color.color16(code - 30))
    if code == 39:
        return style.with_foreground(COLOR_DEFAULT)
    if 40 <= code <= 47:
        return style.with_background(Color.color16(code - 40))
    if code == 49:
        return style.with_background(COLOR_DEFAULT)
    if 90 <= code <= 97:
        return style.with_foreground(Color.color16(code - 90 + 8))
    if 100 <= code <= 107:
        return style.with_background(Color.color16(code - 100 + 8))
    return None


def consume_composite_color(params: Sequence[str], index: int) -> tuple[int, Color]:
    """Decode an extended color starting at ``params[index]``.

    ``params[index]`` must be ``38`` (foreground) or ``48`` (background),
    followed by either ``5;N`` (256 colors) or ``2;R;G;B`` (24-bit).

    Returns the index of the first parameter after the color and the color.
    Raises ``ValueError`` naming the offending value and the sequence.
    """
    sequence = f"<CSI {';'.join(params)}m>"

    if _int_or_none(params[index]) not in (38, 48):
        raise ValueError(
            f"Unknown start of color sequence <{params[index]}>, "
            f"expected 38 (foreground) or 48 (background): {sequence}"
        )

    index += 1
    if index >= len(params):
        raise ValueError(f"Incomplete color sequence: {sequence}")

    color_type = _int_or_none(params[index])
    index += 1

    if color_type == 5:
        if index >= len(params):
            raise ValueError(f"Incomplete 8 bit color sequence: {sequence}")
        return index + 1, Color.color256(_color_component(params[index], sequence))

    if color_type == 2:
        if index + 2 >= len(params):
            raise ValueError(f"Incomplete 24 bit color sequence, expected N8;2;R;G;Bm: {sequence}")
        red, green, blue = (_color_component(p, sequence) for p in params[index : index + 3])
        return index + 3, Color.rgb(red, green, blue)

    raise ValueError(
        f"Unknown color type <{params[index - 1]}>, expected 5 (8 bit color) or 2 (24 bit color): {sequence}"
    )


def _color_component(param: str, sequence: str) -> int:
    if not param.isdigit() or int(param) > 255:
        raise ValueError(f"Color value must be 0-255, got <{param}>: {sequence}")
    return int(param)


def _int_or_none(param: str) -> int | None:
    return int(param) if param.isdigit() else None
