"""Word wrapping of styled cell lines."""

from __future__ import annotations

from collections.abc import Sequence

from pi.pager.cells import Cell, trim_space_left, trim_space_right

# https://www.compart.com/en/unicode/U+00A0
NO_BREAK_SPACE = "\xa0"


def get_wrap_width(line: Sequence[Cell], max_wrap_width: int) -> int:
    """Return where to break *line* so the first part fits *max_wrap_width*.

    Breaks before the last whitespace at or before ``max_wrap_width``, or
    exactly at ``max_wrap_width`` if there is none. Only valid for lines
    longer than ``max_wrap_width``.
    """
    if len(line) <= max_wrap_width:
        raise RuntimeError(
            f"cannot compute wrap width when input isn't longer than max "
            f"({len(line)}<={max_wrap_width})"
        )

    for next_index in range(max_wrap_width, 0, -1):
        char = line[next_index].char
        if char.isspace() and char != NO_BREAK_SPACE:
            return next_index

    return max_wrap_width


def wrap_line(width: int, line: Sequence[Cell]) -> list[Sequence[Cell]]:
    """Split *line* into sub-lines no longer than *width*.

    Words are kept together where possible. Wrapped lines have no leading or
    trailing whitespace, apart from the first line's own indentation. Lines
    that already fit come back as a single trimmed sub-line, and an empty
    line gives a single empty sub-line.
    """
    if width < 1:
        raise RuntimeError(f"wrap width must be at least 1, got {width}")

    # Trailing space could end up alone on a line, which would look weird
    line = trim_space_right(line)
    if not line:
        return [line]

    wrapped: list[Sequence[Cell]] = []
    while len(line) > width:
        wrap_width = get_wrap_width(line, width)
        first_part = line[:wrap_width]
        if wrapped:
            # Leading whitespace on a continuation line would look like indentation
            first_part = trim_space_left(first_part)

        wrapped.append(trim_space_right(first_part))

        line = trim_space_left(line[wrap_width:])

    if wrapped:
        line = trim_space_left(line)

    if line:
        wrapped.append(trim_space_right(line))

    return wrapped
