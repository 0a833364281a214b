"""Tests for pi.pager.colors -- color model, distance and downsampling."""

from __future__ import annotations

import pytest

from pi.pager.colors import COLOR_DEFAULT, Color, ColorType, color256_to_rgb

BLACK = Color.rgb(0, 0, 0)
WHITE = Color.rgb(255, 255, 255)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    """Constructors and value equality."""

    def test_equal_inputs_give_equal_colors(self) -> None:
        assert Color.color256(74) == Color.color256(74)
        assert Color.rgb(10, 20, 30) == Color.rgb(10, 20, 30)

    def test_type_is_part_of_equality(self) -> None:
        assert Color.color16(1) != Color.color256(1)

    def test_hex_matches_rgb(self) -> None:
        assert Color.hex(0x0A141E) == Color.rgb(10, 20, 30)

    def test_channels(self) -> None:
        assert Color.rgb(10, 20, 30).channels == (10, 20, 30)

    def test_out_of_range_values_rejected(self) -> None:
        with pytest.raises(ValueError):
            Color.color16(16)
        with pytest.raises(ValueError):
            Color.color256(256)
        with pytest.raises(ValueError):
            Color.rgb(0, 256, 0)
        with pytest.raises(ValueError):
            Color.hex(0x1000000)

    def test_colors_are_immutable(self) -> None:
        color = Color.color16(1)
        with pytest.raises(AttributeError):
            color.value = 2  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------


class TestPalette:
    """Reference RGB values of palette indices."""

    def test_standard_colors(self) -> None:
        assert color256_to_rgb(0) == (0, 0, 0)
        assert color256_to_rgb(1) == (128, 0, 0)
        assert color256_to_rgb(9) == (255, 0, 0)
        assert color256_to_rgb(15) == (255, 255, 255)

    def test_color_cube(self) -> None:
        assert color256_to_rgb(16) == (0, 0, 0)
        assert color256_to_rgb(17) == (0, 0, 95)
        assert color256_to_rgb(196) == (255, 0, 0)
        assert color256_to_rgb(231) == (255, 255, 255)

    def test_grayscale_ramp(self) -> None:
        assert color256_to_rgb(232) == (8, 8, 8)
        assert color256_to_rgb(255) == (238, 238, 238)

    def test_to_24bit(self) -> None:
        assert Color.color16(1).to_24bit() == Color.rgb(128, 0, 0)
        assert Color.color256(17).to_24bit() == Color.rgb(0, 0, 95)
        assert Color.rgb(1, 2, 3).to_24bit() == Color.rgb(1, 2, 3)

    def test_default_cannot_be_converted(self) -> None:
        with pytest.raises(RuntimeError):
            COLOR_DEFAULT.to_24bit()


# ---------------------------------------------------------------------------
# Distance
# ---------------------------------------------------------------------------


class TestDistance:
    """Perceptual distance between 24-bit colors."""

    def test_black_white_is_one(self) -> None:
        assert BLACK.distance(WHITE) == 1.0

    def test_same_color_is_zero(self) -> None:
        color = Color.rgb(12, 200, 77)
        assert color.distance(color) == 0.0

    def test_symmetric(self) -> None:
        colors = [BLACK, WHITE, Color.rgb(255, 0, 0), Color.rgb(12, 200, 77), Color.rgb(1, 2, 3)]
        for a in colors:
            for b in colors:
                assert a.distance(b) == b.distance(a)

    def test_within_unit_range(self) -> None:
        assert 0.0 < Color.rgb(255, 0, 0).distance(Color.rgb(0, 0, 255)) <= 1.0

    def test_green_weighs_more_than_blue(self) -> None:
        assert BLACK.distance(Color.rgb(0, 100, 0)) > BLACK.distance(Color.rgb(0, 0, 100))

    def test_non_24bit_rejected(self) -> None:
        with pytest.raises(RuntimeError):
            Color.color16(1).distance(WHITE)
        with pytest.raises(RuntimeError):
            WHITE.distance(COLOR_DEFAULT)


# ---------------------------------------------------------------------------
# Downsampling
# ---------------------------------------------------------------------------


class TestDownsample:
    """Nearest palette match for less capable terminals."""

    def test_already_low_enough_unchanged(self) -> None:
        assert Color.color16(3).downsample_to(ColorType.COLORS_256) == Color.color16(3)
        assert Color.color256(74).downsample_to(ColorType.COLORS_256) == Color.color256(74)
        assert Color.rgb(1, 2, 3).downsample_to(ColorType.COLORS_24BIT) == Color.rgb(1, 2, 3)

    def test_exact_standard_color(self) -> None:
        assert Color.rgb(255, 0, 0).downsample_to(ColorType.COLORS_16) == Color.color16(9)

    def test_ties_keep_lowest_index(self) -> None:
        # Index 9 and 196 are both pure red
        assert Color.rgb(255, 0, 0).downsample_to(ColorType.COLORS_256) == Color.color16(9)

    def test_cube_match_is_tagged_256(self) -> None:
        assert Color.rgb(0, 0, 95).downsample_to(ColorType.COLORS_256) == Color.color256(17)

    def test_grayscale_match(self) -> None:
        assert Color.rgb(8, 8, 8).downsample_to(ColorType.COLORS_256) == Color.color256(232)

    def test_256_color_to_16(self) -> None:
        assert Color.color256(196).downsample_to(ColorType.COLORS_16) == Color.color16(9)

    def test_8_color_terminal(self) -> None:
        assert Color.rgb(255, 0, 0).downsample_to(ColorType.COLORS_8) == Color.color16(1)

    def test_not_path_dependent(self) -> None:
        references = [BLACK, WHITE, Color.rgb(255, 0, 0), Color.rgb(10, 250, 10)]
        for color in references + [Color.color256(index) for index in range(256)]:
            via_256 = color.downsample_to(ColorType.COLORS_256).downsample_to(ColorType.COLORS_16)
            assert via_256 == color.downsample_to(ColorType.COLORS_16)

    def test_default_rejected(self) -> None:
        with pytest.raises(RuntimeError):
            COLOR_DEFAULT.downsample_to(ColorType.COLORS_16)
        with pytest.raises(RuntimeError):
            Color.rgb(1, 2, 3).downsample_to(ColorType.DEFAULT)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRendering:
    """SGR sequences for foreground and background colors."""

    def test_default(self) -> None:
        assert COLOR_DEFAULT.foreground_ansi(ColorType.COLORS_24BIT) == "\x1b[39m"
        assert COLOR_DEFAULT.background_ansi(ColorType.COLORS_8) == "\x1b[49m"

    def test_16_colors(self) -> None:
        assert Color.color16(1).foreground_ansi(ColorType.COLORS_16) == "\x1b[31m"
        assert Color.color16(1).background_ansi(ColorType.COLORS_16) == "\x1b[41m"
        assert Color.color16(9).foreground_ansi(ColorType.COLORS_16) == "\x1b[91m"
        assert Color.color16(9).background_ansi(ColorType.COLORS_16) == "\x1b[101m"

    def test_256_colors(self) -> None:
        assert Color.color256(74).foreground_ansi(ColorType.COLORS_256) == "\x1b[38;5;74m"
        assert Color.color256(74).background_ansi(ColorType.COLORS_24BIT) == "\x1b[48;5;74m"

    def test_24bit_colors(self) -> None:
        color = Color.rgb(10, 20, 30)
        assert color.foreground_ansi(ColorType.COLORS_24BIT) == "\x1b[38;2;10;20;30m"
        assert color.background_ansi(ColorType.COLORS_24BIT) == "\x1b[48;2;10;20;30m"

    def test_downsampled_before_rendering(self) -> None:
        assert Color.rgb(255, 0, 0).foreground_ansi(ColorType.COLORS_16) == "\x1b[91m"
        assert Color.rgb(0, 0, 95).foreground_ansi(ColorType.COLORS_256) == "\x1b[38;5;17m"


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


class TestNames:
    def test_default(self) -> None:
        assert str(COLOR_DEFAULT) == "Default color"

    def test_16_color_names(self) -> None:
        assert str(Color.color16(1)) == "1 red"
        assert str(Color.color16(8)) == "8 bright black (dark gray)"

    def test_256_colors(self) -> None:
        assert str(Color.color256(3)) == "3 yellow (orange)"
        assert str(Color.color256(74)) == "#4a"

    def test_24bit(self) -> None:
        assert str(Color.rgb(10, 20, 30)) == "#0a141e"
