"""
Unit tests for palette generation from a single anchor color.
"""

import pytest

from huescale.config import DEFAULT_PATTERN_PATH
from huescale.services.colors import OKLCHColor, hue_difference, is_displayable, oklch_to_hex, parse_color
from huescale.services.learning import IDENTITY_TRANSFORM, StopTransform
from huescale.services.learning.collections import STOP_POSITIONS
from huescale.services.palette.generator import (
    PaletteGenerationError, compute_relative_transform, generate_palette_from_stop,
)
from huescale.services.patterns import FilePatternLoader
from tests.conftest import make_pattern

ZERO_CHROMA_AT_200_LIGHTNESS = [1.8, 1.6, 1.4, 1.2, 1.0, 0.9, 0.8, 0.6, 0.5, 0.4]
ZERO_CHROMA_AT_200 = [0.5, 0.0, 0.8, 0.9, 1.0, 0.9, 0.8, 0.7, 0.6, 0.5]


@pytest.fixture
def default_pattern():
    return FilePatternLoader().load_pattern(str(DEFAULT_PATTERN_PATH))


class TestGeneratePalette:
    """Test generate_palette_from_stop."""

    def test_ten_stops_in_ascending_order(self, smoothed_pattern):
        palette = generate_palette_from_stop(OKLCHColor(0.6, 0.1, 250.0), 500, smoothed_pattern, "blue")

        assert palette.name == "blue"
        assert [stop.position for stop in palette.stops] == list(STOP_POSITIONS)

    @pytest.mark.parametrize("anchor_stop", STOP_POSITIONS)
    def test_anchor_color_is_kept_at_anchor_stop(self, smoothed_pattern, anchor_stop):
        anchor = OKLCHColor(0.6, 0.1, 250.0)

        palette = generate_palette_from_stop(anchor, anchor_stop, smoothed_pattern, "anchored")

        assert palette.color_at(anchor_stop) == anchor

    def test_default_pattern_reproduces_its_source_color(self, default_pattern):
        palette = generate_palette_from_stop(parse_color("#2D72D2"), 500, default_pattern, "blue")

        assert oklch_to_hex(palette.color_at(500)) == "#2D72D2"

    def test_every_stop_is_displayable(self, default_pattern):
        palette = generate_palette_from_stop(parse_color("#00FF88"), 500, default_pattern, "green")

        for stop in palette.stops:
            assert is_displayable(stop.color), stop

    def test_lightness_does_not_increase_with_position(self, default_pattern):
        palette = generate_palette_from_stop(parse_color("#F0842A"), 500, default_pattern, "orange")

        lightness = [stop.color.l for stop in palette.stops]
        assert all(a >= b for a, b in zip(lightness, lightness[1:]))
        assert all(0.0 <= l <= 1.0 for l in lightness)

    def test_hue_and_alpha_are_carried(self, smoothed_pattern):
        anchor = OKLCHColor(0.5, 0.1, 30.0, alpha=0.5)

        palette = generate_palette_from_stop(anchor, 500, smoothed_pattern, "translucent")

        for stop in palette.stops:
            assert stop.color.h == pytest.approx(30.0)
            assert stop.color.alpha == 0.5

    def test_invalid_anchor_stop(self, smoothed_pattern):
        with pytest.raises(PaletteGenerationError) as exc_info:
            generate_palette_from_stop(OKLCHColor(0.6, 0.1, 250.0), 550, smoothed_pattern, "bad")

        assert "anchor stop 550" in exc_info.value.message
        assert exc_info.value.cause is not None

    def test_zero_lightness_multiplier_at_anchor_fails(self):
        pattern = make_pattern([1.8, 0.0, 1.4, 1.2, 1.0, 0.9, 0.8, 0.6, 0.5, 0.4], [1.0] * 10)

        with pytest.raises(PaletteGenerationError, match="lightness multiplier is 0"):
            generate_palette_from_stop(OKLCHColor(0.6, 0.1, 250.0), 200, pattern, "zero")

    def test_zero_chroma_multiplier_with_chromatic_anchor_fails(self):
        pattern = make_pattern(ZERO_CHROMA_AT_200_LIGHTNESS, ZERO_CHROMA_AT_200)

        with pytest.raises(PaletteGenerationError, match="chroma multiplier is 0"):
            generate_palette_from_stop(OKLCHColor(0.6, 0.1, 250.0), 200, pattern, "zero")

    def test_zero_chroma_multiplier_with_gray_anchor(self):
        pattern = make_pattern(ZERO_CHROMA_AT_200_LIGHTNESS, ZERO_CHROMA_AT_200)

        palette = generate_palette_from_stop(OKLCHColor(0.6, 0.0, 0.0), 200, pattern, "gray")

        assert all(stop.color.c == 0.0 for stop in palette.stops)
        assert palette.color_at(200).l == pytest.approx(0.6)
        assert palette.color_at(100).l == pytest.approx(0.6 * 1.8 / 1.6)

    def test_clamped_stops_keep_anchor_hue(self, default_pattern):
        anchor = parse_color("#00FF88")

        palette = generate_palette_from_stop(anchor, 500, default_pattern, "green")

        for stop in palette.stops:
            assert abs(hue_difference(anchor.h, stop.color.h)) < 0.1, stop

    def test_missing_stop_lookup(self, smoothed_pattern):
        palette = generate_palette_from_stop(OKLCHColor(0.6, 0.1, 250.0), 500, smoothed_pattern, "blue")

        with pytest.raises(PaletteGenerationError):
            palette.color_at(150)


class TestRelativeTransform:
    """Test target transforms expressed relative to the anchor."""

    def test_ratios_and_delta(self):
        target = StopTransform(lightness_multiplier=1.5, chroma_multiplier=0.5, hue_shift_degrees=10.0)
        anchor = StopTransform(lightness_multiplier=0.5, chroma_multiplier=0.25, hue_shift_degrees=4.0)

        relative = compute_relative_transform(target, anchor, OKLCHColor(0.6, 0.1, 250.0))

        assert relative.lightness_ratio == 3.0
        assert relative.chroma_ratio == 2.0
        assert relative.hue_delta == 6.0

    def test_zero_target_multiplier_is_allowed(self):
        target = StopTransform(lightness_multiplier=0.0, chroma_multiplier=0.0, hue_shift_degrees=0.0)

        relative = compute_relative_transform(target, IDENTITY_TRANSFORM, OKLCHColor(0.6, 0.1, 250.0))

        assert relative.lightness_ratio == 0.0
        assert relative.chroma_ratio == 0.0
