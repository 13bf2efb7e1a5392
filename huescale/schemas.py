"""
Huescale Schemas
Pydantic models for example palette files and palette generation requests/results.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from huescale.config import config
from huescale.services.learning.collections import STOP_POSITIONS

StopPositionValue = Literal[100, 200, 300, 400, 500, 600, 700, 800, 900, 1000]
ColorSpaceValue = Literal["hex", "rgb", "oklch", "oklab"]


# ============================================================================
# EXAMPLE PALETTE FILES
# ============================================================================

class ExampleStop(BaseModel):
    """Single stop of an example palette file."""
    position: StopPositionValue = Field(..., description="Canonical stop position (100-1000)")
    hex: str = Field(
        ...,
        pattern=r"^#?[0-9A-Fa-f]{6}([0-9A-Fa-f]{2})?$",
        description="Hex color code in format #RRGGBB"
    )


class ExamplePaletteFile(BaseModel):
    """Example palette used to learn a transformation pattern."""
    name: str = Field(..., min_length=1, description="Palette name")
    stops: List[ExampleStop] = Field(
        ...,
        min_length=10,
        max_length=10,
        description="Exactly one stop per canonical position"
    )

    @model_validator(mode="after")
    def check_positions(self):
        positions = sorted(stop.position for stop in self.stops)
        if tuple(positions) != STOP_POSITIONS:
            raise ValueError(f"Palette must contain each stop position exactly once, got {positions}")
        return self


# ============================================================================
# SINGLE PALETTE
# ============================================================================

class PaletteRequest(BaseModel):
    """Request to generate a palette from a color and anchor stop."""
    input_color: str = Field(..., min_length=1, description="Any CSS color string")
    anchor_stop: StopPositionValue = Field(500, description="Stop the input color is placed at")
    output_format: ColorSpaceValue = Field(
        default_factory=lambda: config.DEFAULT_OUTPUT_FORMAT,
        description="Output color space"
    )
    palette_name: str = Field(default_factory=lambda: config.DEFAULT_PALETTE_NAME, min_length=1)
    pattern_source: Optional[str] = Field(None, description="Pattern file overriding the configured default")


class FormattedStop(BaseModel):
    """A palette stop with its formatted output value."""
    position: StopPositionValue
    l: float
    c: float
    h: float
    alpha: float = 1.0
    value: str = Field(..., description="Color in the requested output format")


class PaletteResult(BaseModel):
    """Generated palette with formatted color values."""
    name: str = Field(..., min_length=1)
    input_color: str
    anchor_stop: StopPositionValue
    output_format: ColorSpaceValue
    stops: List[FormattedStop] = Field(..., min_length=10, max_length=10)


# ============================================================================
# BATCH
# ============================================================================

class ColorAnchor(BaseModel):
    """Color paired with its anchor stop position."""
    color: str = Field(..., min_length=1)
    stop: StopPositionValue = 500


class GenerationFailure(ColorAnchor):
    """A failed palette generation with error details."""
    error: str


class BatchRequest(BaseModel):
    """Request to generate several palettes in one operation."""
    pairs: List[ColorAnchor] = Field(..., min_length=1)
    output_format: ColorSpaceValue = Field(default_factory=lambda: config.DEFAULT_OUTPUT_FORMAT)
    palette_group_name: str = Field(default_factory=lambda: config.DEFAULT_BATCH_NAME, min_length=1)
    pattern_source: Optional[str] = None


class BatchResult(BaseModel):
    """Palettes generated by a batch run, plus captured failures."""
    batch_id: str
    group_name: str = Field(..., min_length=1)
    output_format: ColorSpaceValue
    generated_at: str = Field(..., description="ISO 8601 timestamp")
    palettes: List[PaletteResult] = Field(..., min_length=1)
    failures: List[GenerationFailure] = Field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.failures)


# ============================================================================
# OPTICAL APPEARANCE TRANSFORM
# ============================================================================

class TransformRequest(BaseModel):
    """Apply one reference appearance to one or more target hues."""
    reference: str = Field(..., min_length=1, description="Color providing lightness and chroma")
    targets: List[str] = Field(..., min_length=1, description="Colors providing hue")
    anchor_stop: Optional[StopPositionValue] = Field(
        None, description="When set, generate a palette from each transformed color at this stop"
    )
    output_format: ColorSpaceValue = Field(default_factory=lambda: config.DEFAULT_OUTPUT_FORMAT)
    palette_group_name: str = Field(default_factory=lambda: config.DEFAULT_BATCH_NAME, min_length=1)
    pattern_source: Optional[str] = None

    @field_validator("targets")
    @classmethod
    def strip_targets(cls, targets: List[str]) -> List[str]:
        cleaned = [target.strip() for target in targets]
        if any(not target for target in cleaned):
            raise ValueError("Target colors cannot be empty")
        return cleaned


class TransformedColor(BaseModel):
    """Result of one reference -> target transform."""
    target: str
    value: str
    viable: bool
    palette: Optional[PaletteResult] = None


class TransformFailure(BaseModel):
    target: str
    error: str


class TransformResult(BaseModel):
    batch_id: str
    reference: str
    output_format: ColorSpaceValue
    generated_at: str
    results: List[TransformedColor] = Field(..., min_length=1)
    failures: List[TransformFailure] = Field(default_factory=list)
