"""
Core palette generation logic.

Applies a smoothed transformation pattern to a single anchor color to
synthesize all ten stops of a palette.
"""

from dataclasses import dataclass
from typing import Tuple

from loguru import logger

from huescale.errors import HuescaleError
from huescale.services.colors import (
    OKLCHColor, clamp, clamp_to_gamut, is_displayable, normalize_hue,
)
from huescale.services.learning import PaletteStop, StopTransform, TransformationPattern
from huescale.services.learning.collections import STOP_POSITIONS, CollectionError


class PaletteGenerationError(HuescaleError):
    """Palette generation failed."""
    kind = "PaletteGenerationError"


@dataclass(frozen=True)
class Palette:
    """Generated palette: ten stops sorted ascending by position."""
    name: str
    stops: Tuple[PaletteStop, ...]

    def color_at(self, position: int) -> OKLCHColor:
        for stop in self.stops:
            if stop.position == position:
                return stop.color
        raise PaletteGenerationError(f"Palette \"{self.name}\" has no stop {position}")


@dataclass(frozen=True)
class RelativeTransform:
    lightness_ratio: float
    chroma_ratio: float
    hue_delta: float


def get_stop_transform(pattern: TransformationPattern, position: int, role: str) -> StopTransform:
    try:
        return pattern.transform_at(position)
    except CollectionError as e:
        raise PaletteGenerationError(f"Failed to get transform for {role} stop {position}", e)


def channel_ratio(target_multiplier: float, anchor_multiplier: float, anchor_value: float, channel: str) -> float:
    """
    Scale factor for one channel.

    A zero anchor multiplier only matters when there is something to scale:
    an anchor value of 0 stays 0 at every stop.
    """
    if anchor_multiplier != 0:
        return target_multiplier / anchor_multiplier
    if anchor_value == 0:
        return 0.0
    raise PaletteGenerationError(
        f"Anchor stop {channel} multiplier is 0, cannot scale anchor {channel} {anchor_value}"
    )


def compute_relative_transform(
    target: StopTransform,
    anchor: StopTransform,
    anchor_color: OKLCHColor
) -> RelativeTransform:
    """Ratios of the target stop relative to the anchor stop's own transform."""
    return RelativeTransform(
        lightness_ratio=channel_ratio(
            target.lightness_multiplier, anchor.lightness_multiplier, anchor_color.l, "lightness"
        ),
        chroma_ratio=channel_ratio(
            target.chroma_multiplier, anchor.chroma_multiplier, anchor_color.c, "chroma"
        ),
        hue_delta=target.hue_shift_degrees - anchor.hue_shift_degrees
    )


def apply_relative_transform(color: OKLCHColor, transform: RelativeTransform) -> OKLCHColor:
    return OKLCHColor(
        l=clamp(color.l * transform.lightness_ratio, 0.0, 1.0),
        c=max(0.0, color.c * transform.chroma_ratio),
        h=normalize_hue(color.h + transform.hue_delta),
        alpha=color.alpha
    )


def ensure_displayable(color: OKLCHColor) -> OKLCHColor:
    """Clamp chroma into sRGB when the color is not displayable."""
    if is_displayable(color):
        return color
    clamped = clamp_to_gamut(color)
    logger.debug(f"Gamut clamp at L={color.l:.3f}: chroma {color.c:.4f} -> {clamped.c:.4f}")
    return clamped


def generate_stop(
    anchor_color: OKLCHColor,
    anchor_transform: StopTransform,
    pattern: TransformationPattern,
    target_stop: int
) -> PaletteStop:
    target_transform = get_stop_transform(pattern, target_stop, "target")
    relative = compute_relative_transform(target_transform, anchor_transform, anchor_color)
    color = ensure_displayable(apply_relative_transform(anchor_color, relative))
    return PaletteStop(position=target_stop, color=color)


def generate_palette_from_stop(
    anchor_color: OKLCHColor,
    anchor_stop: int,
    pattern: TransformationPattern,
    name: str
) -> Palette:
    """
    Generate a complete palette from a single anchor color.

    Strategy:
    1. Take the input color as the anchor at the given stop
    2. Express every stop relative to the anchor stop's transform
    3. Clamp to the displayable gamut as needed

    Args:
        anchor_color: Color placed at anchor_stop
        anchor_stop: Canonical stop position of the anchor
        pattern: Smoothed transformation pattern
        name: Palette name

    Returns:
        Palette with ten stops sorted ascending

    Raises:
        PaletteGenerationError: If the anchor or a target transform is unavailable, or
            a zero anchor multiplier would have to scale a non-zero channel
    """
    anchor_transform = get_stop_transform(pattern, anchor_stop, "anchor")

    stops = [generate_stop(anchor_color, anchor_transform, pattern, target) for target in STOP_POSITIONS]
    stops.sort(key=lambda stop: stop.position)

    logger.debug(f"Generated palette \"{name}\" anchored at {anchor_stop} with pattern {pattern.name}")
    return Palette(name=name, stops=tuple(stops))
