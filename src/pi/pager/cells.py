"""Styled display cells and helpers for sequences of them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pi.pager.style import STYLE_DEFAULT, Style


@dataclass(frozen=True, slots=True)
class Cell:
    """One displayable character with its resolved style."""

    char: str
    style: Style = STYLE_DEFAULT

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError(f"a cell holds exactly one character, got {self.char!r}")


def cells_from_string(text: str, style: Style = STYLE_DEFAULT) -> list[Cell]:
    """Build cells for plain *text*, all with the same *style*."""
    return [Cell(char, style) for char in text]


def cells_to_string(cells: Sequence[Cell]) -> str:
    return "".join(cell.char for cell in cells)


def trim_space_left(cells: Sequence[Cell]) -> Sequence[Cell]:
    """Drop leading whitespace cells."""
    start = 0
    while start < len(cells) and cells[start].char.isspace():
        start += 1
    return cells[start:]


def trim_space_right(cells: Sequence[Cell]) -> Sequence[Cell]:
    """Drop trailing whitespace cells."""
    end = len(cells)
    while end > 0 and cells[end - 1].char.isspace():
        end -= 1
    return cells[:end]
