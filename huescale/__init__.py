"""
Huescale

Learns a color-scale transformation pattern from example palettes and applies
it to any anchor color to synthesize perceptually uniform ten-stop palettes.
"""

__version__ = "1.0.0"

from huescale.config import ConfigError
from huescale.errors import HuescaleError
from huescale.services.colors import (
    ColorError, OKLABColor, OKLCHColor, RGBColor, clamp_to_gamut, is_displayable,
    oklch_to_hex, oklch_to_oklab, oklch_to_rgb, parse_color,
)
from huescale.services.colors.transform import apply_optical_appearance, is_transformation_viable
from huescale.services.learning import AnalyzedPalette, PaletteStop, StopTransform, TransformationPattern
from huescale.services.learning.collections import CollectionError, StopArray, StopIndex, STOP_POSITIONS
from huescale.services.learning.interpolation import InterpolationError, smooth_pattern
from huescale.services.learning.statistics import PatternExtractionError, extract_patterns
from huescale.services.palette.generator import Palette, PaletteGenerationError, generate_palette_from_stop
from huescale.services.patterns import PatternLoadError

__all__ = [
    "HuescaleError",
    "ConfigError",
    "ColorError",
    "CollectionError",
    "InterpolationError",
    "PaletteGenerationError",
    "PatternExtractionError",
    "PatternLoadError",
    "OKLCHColor",
    "OKLABColor",
    "RGBColor",
    "AnalyzedPalette",
    "PaletteStop",
    "Palette",
    "StopTransform",
    "TransformationPattern",
    "StopArray",
    "StopIndex",
    "STOP_POSITIONS",
    "parse_color",
    "oklch_to_hex",
    "oklch_to_rgb",
    "oklch_to_oklab",
    "is_displayable",
    "clamp_to_gamut",
    "extract_patterns",
    "smooth_pattern",
    "generate_palette_from_stop",
    "apply_optical_appearance",
    "is_transformation_viable",
]
