"""
Statistical analysis of example palettes to extract transformation patterns.

Each palette contributes one StopTransform sample per stop, expressed relative
to its reference stop. Samples are aggregated per stop with the median, and
cross-palette spread determines the pattern's confidence.
"""

from typing import List, Optional, Sequence

import numpy as np
from loguru import logger

from huescale.errors import HuescaleError
from huescale.services.colors import hue_difference
from . import AnalyzedPalette, PatternMetadata, StopTransform, TransformationPattern
from .collections import (
    STOP_COUNT, STOP_POSITIONS, CollectionError, StopArray, position_to_index, REFERENCE_STOP,
)


# Prevents division by zero for black / gray reference colors
MIN_DIVISOR = 0.001

DEFAULT_SINGLE_PALETTE_CONFIDENCE = 0.8

LEARNED_PATTERN_NAME = "learned-pattern"


class PatternExtractionError(HuescaleError):
    """Pattern extraction failed."""
    kind = "PatternExtractionError"


def median(values: Sequence[float]) -> float:
    """
    Median of a non-empty list.

    Odd counts return the middle element; even counts return the mean of the
    two middle elements.

    Raises:
        PatternExtractionError: If values is empty
    """
    if len(values) == 0:
        raise PatternExtractionError("Failed to calculate median: array is empty")
    return float(np.median(np.asarray(values, dtype=float)))


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation; 0 for an empty list."""
    if len(values) == 0:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float)))


def extract_palette_transforms(palette: AnalyzedPalette, reference_stop: int) -> List[tuple]:
    """
    Express every stop of one palette relative to its reference stop.

    Returns:
        List of (StopIndex, StopTransform) samples

    Raises:
        PatternExtractionError: If the reference stop is missing or a stop position is invalid
    """
    reference = next((stop for stop in palette.stops if stop.position == reference_stop), None)
    if reference is None:
        raise PatternExtractionError(
            f"Failed to extract transforms: palette \"{palette.name}\" missing reference stop {reference_stop}"
        )

    ref_l = max(MIN_DIVISOR, reference.color.l)
    ref_c = max(MIN_DIVISOR, reference.color.c)

    samples = []
    for stop in palette.stops:
        try:
            index = position_to_index(stop.position)
        except CollectionError as e:
            raise PatternExtractionError(f"Palette \"{palette.name}\" has an invalid stop", e)

        samples.append((index, StopTransform(
            lightness_multiplier=stop.color.l / ref_l,
            chroma_multiplier=stop.color.c / ref_c,
            hue_shift_degrees=hue_difference(reference.color.h, stop.color.h)
        )))
    return samples


def group_transforms_by_stop(samples: Sequence[tuple]) -> List[List[StopTransform]]:
    """Bucket samples into one list per stop, in stop order."""
    groups: List[List[StopTransform]] = [[] for _ in range(STOP_COUNT)]
    for index, transform in samples:
        groups[index].append(transform)
    return groups


def calculate_stop_transform(transforms: Sequence[StopTransform], position: int) -> StopTransform:
    """Aggregate samples for one stop with the per-field median."""
    if not transforms:
        raise PatternExtractionError(
            f"Failed to calculate transform: no transforms found for stop {position}"
        )

    fields = (
        ("lightness", [t.lightness_multiplier for t in transforms]),
        ("chroma", [t.chroma_multiplier for t in transforms]),
        ("hue", [t.hue_shift_degrees for t in transforms]),
    )
    medians = []
    for label, values in fields:
        try:
            medians.append(median(values))
        except PatternExtractionError as e:
            raise PatternExtractionError(f"Failed to calculate {label} median for stop {position}", e)

    return StopTransform(
        lightness_multiplier=medians[0],
        chroma_multiplier=medians[1],
        hue_shift_degrees=medians[2]
    )


def calculate_confidence(groups: Sequence[Sequence[StopTransform]]) -> float:
    """
    Confidence from consistency across palettes.

    Averages the lightness and chroma standard deviations of every stop with
    at least two samples and maps the result linearly: 1 - average, clamped to
    [0, 1]. Lower variance means higher confidence.
    """
    deviations = []
    for transforms in groups:
        if len(transforms) < 2:
            continue
        deviations.append(std_dev([t.lightness_multiplier for t in transforms]))
        deviations.append(std_dev([t.chroma_multiplier for t in transforms]))

    if not deviations:
        return DEFAULT_SINGLE_PALETTE_CONFIDENCE

    average = float(np.mean(deviations))
    return max(0.0, min(1.0, 1.0 - average))


def extract_patterns(
    palettes: Sequence[AnalyzedPalette],
    reference_stop: Optional[int] = None
) -> TransformationPattern:
    """
    Extract a transformation pattern from analyzed palettes.

    Args:
        palettes: Non-empty list of example palettes
        reference_stop: Stop the multipliers are expressed against (default 500)

    Returns:
        Raw (unsmoothed) pattern named "learned-pattern"

    Raises:
        PatternExtractionError: On empty input, a missing reference stop, or a stop with no samples
    """
    reference_stop = REFERENCE_STOP if reference_stop is None else reference_stop

    if len(palettes) == 0:
        raise PatternExtractionError("Failed to extract patterns: no palettes provided")

    try:
        position_to_index(reference_stop)
    except CollectionError as e:
        raise PatternExtractionError(f"Invalid reference stop {reference_stop!r}", e)

    samples = []
    for palette in palettes:
        try:
            samples.extend(extract_palette_transforms(palette, reference_stop))
        except PatternExtractionError as e:
            raise PatternExtractionError("Failed to extract transforms from palettes", e)

    groups = group_transforms_by_stop(samples)

    transforms = []
    for position, group in zip(STOP_POSITIONS, groups):
        try:
            transforms.append(calculate_stop_transform(group, position))
        except PatternExtractionError as e:
            raise PatternExtractionError(f"Failed to calculate transform for stop {position}", e)

    if len(palettes) == 1:
        confidence = DEFAULT_SINGLE_PALETTE_CONFIDENCE
    else:
        confidence = calculate_confidence(groups)

    logger.debug(f"Extracted pattern from {len(palettes)} palette(s) "
                 f"against stop {reference_stop}, confidence={confidence:.3f}")

    return TransformationPattern(
        name=LEARNED_PATTERN_NAME,
        reference_stop=reference_stop,
        transforms=StopArray(transforms),
        metadata=PatternMetadata(source_count=len(palettes), confidence=confidence)
    )
