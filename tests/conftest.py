"""
Test configuration and fixtures for Huescale tests.
"""
from pathlib import Path

import pytest

from huescale.config import Config
from huescale.services.colors import OKLCHColor
from huescale.services.learning import AnalyzedPalette, PaletteStop, StopTransform, TransformationPattern, PatternMetadata
from huescale.services.learning.collections import STOP_POSITIONS, StopArray
from huescale.services.learning.interpolation import smooth_pattern
from huescale.services.learning.statistics import extract_patterns
from huescale.services.patterns import MemoryPatternLoader

FIXTURES = Path(__file__).parent / "fixtures"

# A blue scale: lightness falls from 0.9 to 0.2, chroma peaks at 500
BLUE_LIGHTNESS = (0.9, 0.82, 0.74, 0.62, 0.5, 0.44, 0.38, 0.32, 0.26, 0.2)
BLUE_CHROMA = (0.08, 0.1, 0.12, 0.14, 0.15, 0.14, 0.12, 0.1, 0.08, 0.06)


def make_palette(name, lightness=BLUE_LIGHTNESS, chroma=BLUE_CHROMA, hue=250.0):
    """Build an AnalyzedPalette from per-stop lightness/chroma and one hue (or a list of hues)."""
    hues = hue if isinstance(hue, (list, tuple)) else [hue] * len(STOP_POSITIONS)
    stops = tuple(
        PaletteStop(position=position, color=OKLCHColor(l=l, c=c, h=h))
        for position, l, c, h in zip(STOP_POSITIONS, lightness, chroma, hues)
    )
    return AnalyzedPalette(name=name, stops=stops)


def make_pattern(lightness, chroma, hue=0.0, name="raw"):
    """Build a TransformationPattern directly from per-stop multipliers."""
    hues = hue if isinstance(hue, (list, tuple)) else [hue] * len(STOP_POSITIONS)
    transforms = StopArray(
        StopTransform(lightness_multiplier=l, chroma_multiplier=c, hue_shift_degrees=h)
        for l, c, h in zip(lightness, chroma, hues)
    )
    return TransformationPattern(
        name=name,
        reference_stop=500,
        transforms=transforms,
        metadata=PatternMetadata(source_count=1, confidence=0.8)
    )


@pytest.fixture
def blue_palette():
    return make_palette("blue")


@pytest.fixture
def raw_pattern(blue_palette):
    return extract_patterns([blue_palette])


@pytest.fixture
def smoothed_pattern(raw_pattern):
    return smooth_pattern(raw_pattern)


@pytest.fixture
def memory_loader(smoothed_pattern):
    return MemoryPatternLoader(patterns={"default": smoothed_pattern})


@pytest.fixture
def test_settings():
    class TestConfig(Config):
        PATTERN_SOURCE = "default"
        MAX_CONCURRENCY = 2

    return TestConfig()


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from huescale.services.observability import reset_metrics
    reset_metrics()
