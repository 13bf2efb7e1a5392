"""
Unit tests for color parsing, conversion and gamut handling.
"""

import pytest

from huescale.services.colors import (
    ColorError, OKLABColor, OKLCHColor, RGBColor, clamp, clamp_to_gamut, hue_difference,
    is_achromatic, is_displayable, normalize_hue, oklab_to_oklch, oklch_to_hex, oklch_to_oklab,
    oklch_to_rgb, parse_color, rgb_to_oklch,
)


class TestParseColor:
    """Test CSS color parsing."""

    def test_hex_with_and_without_hash(self):
        assert parse_color("#2D72D2") == parse_color("2D72D2")

    def test_blue_coordinates(self):
        color = parse_color("#2D72D2")
        assert color.l == pytest.approx(0.57, abs=0.02)
        assert color.c == pytest.approx(0.15, abs=0.02)
        assert color.h == pytest.approx(259.0, abs=2.0)
        assert color.alpha == 1.0

    def test_css_functions(self):
        assert parse_color("rgb(45 114 210)").h == pytest.approx(parse_color("#2D72D2").h, abs=1e-3)
        assert parse_color("oklch(0.5 0.1 120)").l == pytest.approx(0.5)

    @pytest.mark.parametrize("value", ["not-a-color", "", "   ", "#12345"])
    def test_invalid_input(self, value):
        with pytest.raises(ColorError):
            parse_color(value)

    @pytest.mark.parametrize("value", ["#808080", "#FFFFFF", "#000000", "rgb(20 20 20)"])
    def test_grays_are_exactly_achromatic(self, value):
        gray = parse_color(value)

        assert gray.c == 0.0
        assert gray.h == 0.0
        assert is_achromatic(gray)


class TestConversions:
    """Test conversions between OKLCH, sRGB and OKLAB."""

    def test_hex_round_trip(self):
        assert oklch_to_hex(parse_color("#2D72D2")) == "#2D72D2"

    def test_hex_is_upper_case(self):
        assert oklch_to_hex(parse_color("#abcdef")) == "#ABCDEF"

    def test_rgb_channels(self):
        assert oklch_to_rgb(parse_color("#2D72D2")) == RGBColor(45, 114, 210)

    def test_rgb_to_oklch(self):
        assert rgb_to_oklch(RGBColor(45, 114, 210)).l == pytest.approx(parse_color("#2D72D2").l, abs=1e-6)

    def test_oklab_polar_relation(self):
        color = OKLCHColor(0.6, 0.1, 90.0)

        lab = oklch_to_oklab(color)

        assert lab.l == pytest.approx(0.6)
        assert lab.a == pytest.approx(0.0, abs=1e-9)
        assert lab.b == pytest.approx(0.1)
        assert oklab_to_oklch(OKLABColor(lab.l, lab.a, lab.b)).h == pytest.approx(90.0)


class TestGamut:
    """Test sRGB gamut checks and chroma reduction."""

    def test_saturated_green_is_not_displayable(self):
        assert not is_displayable(OKLCHColor(0.5, 0.4, 150.0))

    def test_moderate_color_is_displayable(self):
        assert is_displayable(OKLCHColor(0.6, 0.05, 250.0))

    def test_clamp_reduces_chroma_and_keeps_lightness(self):
        original = OKLCHColor(0.7, 0.4, 150.0)

        clamped = clamp_to_gamut(original)

        assert 0 < clamped.c < original.c
        assert clamped.l == pytest.approx(original.l, abs=1e-3)
        assert clamped.h == pytest.approx(original.h, abs=1.0)
        assert is_displayable(clamped)

    @pytest.mark.parametrize("color", [
        OKLCHColor(0.9, 0.35, 250.0),
        OKLCHColor(0.05, 0.3, 30.0),
        OKLCHColor(0.5, 0.4, 150.0),
        OKLCHColor(0.3, 0.3, 320.0),
    ])
    def test_clamp_changes_chroma_only(self, color):
        clamped = clamp_to_gamut(color)

        assert abs(hue_difference(color.h, clamped.h)) < 0.1
        assert clamped.l == pytest.approx(color.l, abs=1e-3)
        assert 0 < clamped.c < color.c

    def test_clamp_at_white_is_exactly_achromatic(self):
        clamped = clamp_to_gamut(OKLCHColor(1.0, 0.2, 250.0))

        assert clamped.c == 0.0
        assert clamped.h == 250.0
        assert clamped.l == pytest.approx(1.0, abs=1e-4)


class TestHueMath:
    """Test hue helpers."""

    @pytest.mark.parametrize("hue,expected", [(-30.0, 330.0), (720.0, 0.0), (360.0, 0.0), (45.5, 45.5)])
    def test_normalize_hue(self, hue, expected):
        assert normalize_hue(hue) == pytest.approx(expected)

    @pytest.mark.parametrize("h1,h2,expected", [
        (350.0, 10.0, 20.0),
        (10.0, 350.0, -20.0),
        (0.0, 180.0, 180.0),
        (180.0, 0.0, 180.0),
        (90.0, 90.0, 0.0),
    ])
    def test_hue_difference(self, h1, h2, expected):
        assert hue_difference(h1, h2) == pytest.approx(expected)

    def test_is_achromatic(self):
        assert is_achromatic(OKLCHColor(0.5, 0.0, 120.0))
        assert is_achromatic(OKLCHColor(0.5, 0.1, float("nan")))
        assert not is_achromatic(OKLCHColor(0.5, 0.1, 120.0))

    def test_clamp(self):
        assert clamp(1.2, 0.0, 1.0) == 1.0
        assert clamp(-0.1, 0.0, 1.0) == 0.0
        assert clamp(0.4, 0.0, 1.0) == 0.4
