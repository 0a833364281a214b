"""Color model: 16, 256 and 24-bit colors, palette lookups and downsampling.

Colors are small immutable values. Anything with less precision than the
output terminal supports is rendered as-is; anything with more precision is
mapped to the perceptually nearest palette entry before rendering.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum


class ColorType(IntEnum):
    """Color precision, ordered from least to most precise.

    Also used as the terminal capability level when rendering.
    """

    DEFAULT = 0

    # Output only; 3-bit input colors are stored as COLORS_16
    COLORS_8 = 1

    COLORS_16 = 2
    COLORS_256 = 3
    COLORS_24BIT = 4


# ---------------------------------------------------------------------------
# Reference palette
# ---------------------------------------------------------------------------

# https://en.wikipedia.org/wiki/ANSI_escape_code#3-bit_and_4-bit
_COLOR_NAMES_16: tuple[str, ...] = (
    "0 black",
    "1 red",
    "2 green",
    "3 yellow (orange)",
    "4 blue",
    "5 magenta",
    "6 cyan",
    "7 white (light gray)",
    "8 bright black (dark gray)",
    "9 bright red",
    "10 bright green",
    "11 bright yellow",
    "12 bright blue",
    "13 bright magenta",
    "14 bright cyan",
    "15 bright white",
)

# xterm defaults for the first 16 entries
_STANDARD_16: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 128, 0),
    (0, 0, 128),
    (128, 0, 128),
    (0, 128, 128),
    (192, 192, 192),
    (128, 128, 128),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)

_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


def color256_to_rgb(index: int) -> tuple[int, int, int]:
    """Return the reference RGB value of a 256-color palette index.

    * 0-15: the standard 16 colors
    * 16-231: a 6x6x6 color cube
    * 232-255: a 24 step grayscale ramp
    """
    if not 0 <= index <= 255:
        raise ValueError(f"256-color index must be 0-255, got {index}")

    if index < 16:
        return _STANDARD_16[index]

    if index < 232:
        cube = index - 16
        return (
            _CUBE_LEVELS[cube // 36],
            _CUBE_LEVELS[(cube // 6) % 6],
            _CUBE_LEVELS[cube % 6],
        )

    gray = 8 + (index - 232) * 10
    return (gray, gray, gray)


_PALETTE_256: tuple[tuple[int, int, int], ...] = tuple(color256_to_rgb(i) for i in range(256))

# Highest palette index to scan per terminal capability
_SCAN_RANGE: dict[ColorType, int] = {
    ColorType.COLORS_8: 7,
    ColorType.COLORS_16: 15,
    ColorType.COLORS_256: 255,
}


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Color:
    """An immutable color value.

    ``value`` is the palette index for 16 and 256 colors and ``0xRRGGBB`` for
    24-bit colors. Equality is by type and value.
    """

    color_type: ColorType
    value: int = 0

    @classmethod
    def color16(cls, index: int) -> Color:
        if not 0 <= index <= 15:
            raise ValueError(f"16-color index must be 0-15, got {index}")
        return cls(ColorType.COLORS_16, index)

    @classmethod
    def color256(cls, index: int) -> Color:
        if not 0 <= index <= 255:
            raise ValueError(f"256-color index must be 0-255, got {index}")
        return cls(ColorType.COLORS_256, index)

    @classmethod
    def rgb(cls, red: int, green: int, blue: int) -> Color:
        if not all(0 <= c <= 255 for c in (red, green, blue)):
            raise ValueError(f"RGB values must be 0-255, got ({red}, {green}, {blue})")
        return cls(ColorType.COLORS_24BIT, (red << 16) | (green << 8) | blue)

    @classmethod
    def hex(cls, rgb: int) -> Color:
        """Create a 24-bit color from an ``0xRRGGBB`` integer."""
        if not 0 <= rgb <= 0xFFFFFF:
            raise ValueError(f"RGB value must be 0x000000-0xffffff, got {rgb:#x}")
        return cls(ColorType.COLORS_24BIT, rgb)

    @property
    def is_default(self) -> bool:
        return self.color_type == ColorType.DEFAULT

    @property
    def channels(self) -> tuple[int, int, int]:
        """Red, green and blue of a 24-bit color."""
        if self.color_type != ColorType.COLORS_24BIT:
            raise RuntimeError(f"channels only available for 24 bit colors, got {self}")
        return ((self.value >> 16) & 0xFF, (self.value >> 8) & 0xFF, self.value & 0xFF)

    def to_24bit(self) -> Color:
        """Promote to a 24-bit color using the reference palette."""
        if self.color_type == ColorType.COLORS_24BIT:
            return self

        if self.color_type in (ColorType.COLORS_8, ColorType.COLORS_16, ColorType.COLORS_256):
            return Color.rgb(*_PALETTE_256[self.value])

        raise RuntimeError(f"cannot convert {self} to 24 bit")

    def distance(self, other: Color) -> float:
        """Perceptual distance between two 24-bit colors.

        Uses the "redmean" approximation from
        https://www.compuphase.com/cmetric.htm, scaled so that the distance
        between black and white is 1.0.
        """
        if self.color_type != ColorType.COLORS_24BIT or other.color_type != ColorType.COLORS_24BIT:
            raise RuntimeError(f"distance only supported for 24 bit colors, got {self} vs {other}")

        return _redmean(self.channels, other.channels) / _MAX_DISTANCE

    def downsample_to(self, terminal_color_type: ColorType) -> Color:
        """Map this color to the nearest color the terminal can show.

        Colors already within the terminal's capability are returned unchanged.
        """
        if self.is_default or terminal_color_type == ColorType.DEFAULT:
            raise RuntimeError(
                f"downsampling to or from default color not supported, {self} -> {terminal_color_type!r}"
            )

        if self.color_type <= terminal_color_type:
            return self

        target = self.to_24bit().channels
        scan_range = _SCAN_RANGE[terminal_color_type]

        best_match = 0
        best_distance = math.inf
        for index in range(scan_range + 1):
            distance = _redmean(target, _PALETTE_256[index])
            # Strictly less: ties keep the lowest index
            if distance < best_distance:
                best_distance = distance
                best_match = index

        if best_match <= 15:
            return Color.color16(best_match)
        return Color.color256(best_match)

    # -- Rendering ----------------------------------------------------------

    def sgr_params(self, foreground: bool, terminal_color_type: ColorType) -> str:
        """SGR parameters selecting this color, without ``ESC[`` and ``m``."""
        marker = "3" if foreground else "4"

        if self.is_default:
            return f"{marker}9"

        color = self.downsample_to(terminal_color_type)

        if color.color_type == ColorType.COLORS_16:
            if color.value < 8:
                return f"{marker}{color.value}"
            bright_marker = "9" if foreground else "10"
            return f"{bright_marker}{color.value - 8}"

        if color.color_type == ColorType.COLORS_256:
            return f"{marker}8;5;{color.value}"

        red, green, blue = color.channels
        return f"{marker}8;2;{red};{green};{blue}"

    def foreground_ansi(self, terminal_color_type: ColorType) -> str:
        return f"\x1b[{self.sgr_params(True, terminal_color_type)}m"

    def background_ansi(self, terminal_color_type: ColorType) -> str:
        return f"\x1b[{self.sgr_params(False, terminal_color_type)}m"

    def __str__(self) -> str:
        if self.color_type == ColorType.DEFAULT:
            return "Default color"

        if self.color_type in (ColorType.COLORS_8, ColorType.COLORS_16):
            return _COLOR_NAMES_16[self.value]

        if self.color_type == ColorType.COLORS_256:
            if self.value < 16:
                return _COLOR_NAMES_16[self.value]
            return f"#{self.value:02x}"

        return f"#{self.value:06x}"


def _redmean(a: tuple[int, int, int], b: tuple[int, int, int]) -> float:
    ar, ag, ab = a
    br, bg, bb = b
    rmean = (ar + br) // 2
    r = ar - br
    g = ag - bg
    bl = ab - bb
    return math.sqrt((((512 + rmean) * r * r) >> 8) + 4 * g * g + (((767 - rmean) * bl * bl) >> 8))


_MAX_DISTANCE = _redmean((0, 0, 0), (255, 255, 255))

COLOR_DEFAULT = Color(ColorType.DEFAULT)
