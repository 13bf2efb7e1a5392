"""
Huescale Pattern Learning

Types describing how lightness, chroma and hue change across the ten stops of
a palette, learned from example palettes.
"""

from dataclasses import dataclass, field
from typing import Tuple

from huescale.services.colors import OKLCHColor
from .collections import StopArray


@dataclass(frozen=True)
class StopTransform:
    """Transformation for a single stop relative to a reference point."""
    lightness_multiplier: float  # Multiply reference L by this
    chroma_multiplier: float  # Multiply reference C by this
    hue_shift_degrees: float  # Add this to reference H, in (-180, 180]


IDENTITY_TRANSFORM = StopTransform(lightness_multiplier=1.0, chroma_multiplier=1.0, hue_shift_degrees=0.0)


@dataclass(frozen=True)
class PatternMetadata:
    source_count: int  # How many palettes contributed
    confidence: float  # [0, 1] based on consistency


@dataclass(frozen=True)
class TransformationPattern:
    """Complete transformation pattern learned from example palettes."""
    name: str
    reference_stop: int  # Usually 500
    transforms: StopArray  # StopArray[StopTransform]
    metadata: PatternMetadata

    def transform_at(self, position: int) -> StopTransform:
        return self.transforms.get(position)


@dataclass(frozen=True)
class PaletteStop:
    """One color at one stop position."""
    position: int
    color: OKLCHColor


@dataclass(frozen=True)
class AnalyzedPalette:
    """An example palette with OKLCH colors, input to pattern extraction."""
    name: str
    stops: Tuple[PaletteStop, ...] = field(default_factory=tuple)
