"""Text styles: foreground and background colors plus attribute flags."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntFlag

from pi.pager.colors import COLOR_DEFAULT, Color, ColorType


class Attr(IntFlag):
    NONE = 0
    BOLD = 1 << 0
    BLINK = 1 << 1
    DIM = 1 << 2
    ITALIC = 1 << 3
    REVERSE = 1 << 4
    UNDERLINE = 1 << 5


# SGR parameter turning each attribute on, in rendering order
_ATTR_SGR: tuple[tuple[Attr, str], ...] = (
    (Attr.BOLD, "1"),
    (Attr.DIM, "2"),
    (Attr.ITALIC, "3"),
    (Attr.UNDERLINE, "4"),
    (Attr.BLINK, "5"),
    (Attr.REVERSE, "7"),
)


@dataclass(frozen=True)
class Style:
    """Immutable text style. The ``with_*`` methods return new styles."""

    fg: Color = COLOR_DEFAULT
    bg: Color = COLOR_DEFAULT
    attrs: Attr = Attr.NONE

    def with_attr(self, attr: Attr) -> Style:
        return replace(self, attrs=self.attrs | attr)

    def without_attr(self, attr: Attr) -> Style:
        return replace(self, attrs=self.attrs & ~attr)

    def with_foreground(self, color: Color) -> Style:
        return replace(self, fg=color)

    def with_background(self, color: Color) -> Style:
        return replace(self, bg=color)

    def has_attr(self, attr: Attr) -> bool:
        return (self.attrs & attr) == attr

    def render_update_from(self, previous: Style, terminal_color_type: ColorType) -> str:
        """Return the SGR sequence changing *previous* into this style.

        Returns an empty string if nothing changes. Attributes can only be
        removed by a full reset, after which everything that differs from the
        default style is applied again.
        """
        if self == previous:
            return ""

        params: list[str] = []
        if previous.attrs & ~self.attrs:
            params.append("0")
            previous = STYLE_DEFAULT

        for attr, code in _ATTR_SGR:
            if self.attrs & attr and not previous.attrs & attr:
                params.append(code)

        if self.fg != previous.fg:
            params.append(self.fg.sgr_params(True, terminal_color_type))
        if self.bg != previous.bg:
            params.append(self.bg.sgr_params(False, terminal_color_type))

        return f"\x1b[{';'.join(params)}m"

    def __str__(self) -> str:
        names = [attr.name.lower() for attr, _code in _ATTR_SGR if self.attrs & attr]
        attrs = "|".join(names) if names else "none"
        return f"{self.fg} on {self.bg} ({attrs})"


STYLE_DEFAULT = Style()
