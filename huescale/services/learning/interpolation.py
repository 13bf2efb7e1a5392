"""
Interpolation and smoothing of learned transformation patterns.

Raw per-stop multipliers are only trusted at 100, 500 and 1000. Lightness and
chroma are each refit as a quadratic through those three points (with 500
pinned to 1.0); hue collapses to a single median shift for the whole scale.
"""

from typing import Callable, Tuple

import numpy as np

from huescale.errors import HuescaleError
from . import StopTransform, TransformationPattern
from .collections import (
    CollectionError, DARKEST_STOP, LIGHTEST_STOP, REFERENCE_STOP, StopArray,
)


class InterpolationError(HuescaleError):
    """Pattern smoothing failed."""
    kind = "InterpolationError"


# The reference stop is always "no change"
REFERENCE_MULTIPLIER = 1.0

STOP_RANGE = DARKEST_STOP - LIGHTEST_STOP

SMOOTHED_SUFFIX = "-smoothed"


def normalize_position(position: int) -> float:
    """Map a stop position onto [0, 1]."""
    return (position - LIGHTEST_STOP) / STOP_RANGE


def fit_quadratic(value_start: float, value_end: float) -> Tuple[float, float, float]:
    """
    Fit y = a*x^2 + b*x + c through (0, value_start), (x_mid, 1.0), (1, value_end).

    x_mid is the normalized reference stop (4/9).

    Returns:
        Coefficients (a, b, c)
    """
    c = value_start
    x_mid = normalize_position(REFERENCE_STOP)
    a = (REFERENCE_MULTIPLIER - c - value_end * x_mid + c * x_mid) / (x_mid * x_mid - x_mid)
    b = value_end - c - a
    return a, b, c


def create_quadratic_interpolation(
    pattern: TransformationPattern,
    extract_property: Callable[[StopTransform], float]
) -> StopArray:
    """
    Build a smooth curve through the 100, 500 and 1000 values of one property.

    The curve reproduces the raw endpoint values, is exactly 1.0 at stop 500
    and is floored at 0 everywhere.
    """
    value_start = extract_property(pattern.transforms.get(LIGHTEST_STOP))
    value_end = extract_property(pattern.transforms.get(DARKEST_STOP))
    a, b, c = fit_quadratic(value_start, value_end)

    def evaluate(position: int) -> float:
        # Pin the reference stop so float error cannot move it off 1.0
        if position == REFERENCE_STOP:
            return REFERENCE_MULTIPLIER
        x = normalize_position(position)
        return max(0.0, a * x * x + b * x + c)

    return StopArray.build(evaluate)


def calculate_consistent_hue(pattern: TransformationPattern) -> float:
    """Median hue shift across all ten stops."""
    shifts = [transform.hue_shift_degrees for transform in pattern.transforms]
    if not shifts:
        raise InterpolationError("Failed to calculate median: array is empty")
    return float(np.median(shifts))


def smooth_pattern(pattern: TransformationPattern) -> TransformationPattern:
    """
    Smooth a raw pattern into a generation-ready one.

    - Lightness follows a quadratic through 100, 500 (=1.0) and 1000
    - Chroma follows its own quadratic through the same three stops
    - Hue is one consistent median shift applied to every stop

    Raises:
        InterpolationError: If the transforms are not a complete StopArray
    """
    if not isinstance(pattern.transforms, StopArray):
        raise InterpolationError(
            f"Failed to smooth pattern: transforms must be a StopArray, got {type(pattern.transforms).__name__}"
        )

    try:
        lightness = create_quadratic_interpolation(pattern, lambda t: t.lightness_multiplier)
        chroma = create_quadratic_interpolation(pattern, lambda t: t.chroma_multiplier)
        hue_shift = calculate_consistent_hue(pattern)
    except CollectionError as e:
        raise InterpolationError("Failed to smooth pattern", e)

    try:
        transforms = StopArray.build(lambda position: StopTransform(
            lightness_multiplier=lightness.get(position),
            chroma_multiplier=chroma.get(position),
            hue_shift_degrees=hue_shift
        ))
    except CollectionError as e:
        raise InterpolationError("Failed to build transform map", e)

    return TransformationPattern(
        name=f"{pattern.name}{SMOOTHED_SUFFIX}",
        reference_stop=pattern.reference_stop,
        transforms=transforms,
        metadata=pattern.metadata
    )
