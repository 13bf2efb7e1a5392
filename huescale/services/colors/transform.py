"""
Huescale Optical Appearance Transform

Transfers the lightness and chroma of a reference color onto the hue of a
target color, with gamut guards that refuse to silently return a gray.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Union

from loguru import logger

from huescale.config import config
from . import (
    ColorError, OKLCHColor, clamp_to_gamut, is_achromatic, is_displayable, normalize_hue,
)


# Reference lightness outside this band is too dark/light to carry chroma
MIN_VIABLE_LIGHTNESS = 0.05
MAX_VIABLE_LIGHTNESS = 0.95

# Clamping may remove strictly less than this share of chroma
MAX_CHROMA_LOSS_RATIO = 0.5


def create_base_transform(reference: OKLCHColor, target: OKLCHColor) -> OKLCHColor:
    """Reference L and C with target H."""
    return OKLCHColor(
        l=reference.l,
        c=reference.c,
        h=normalize_hue(target.h),
        alpha=reference.alpha
    )


def handle_achromatic_cases(reference: OKLCHColor, target: OKLCHColor) -> Optional[OKLCHColor]:
    """
    Resolve the achromatic edge cases of the transform.

    Args:
        reference: Color providing lightness and chroma
        target: Color providing hue

    Returns:
        The transformed color if an edge case applies, otherwise None
    """
    # Gray reference: keep target's hue but stay colorless
    if is_achromatic(reference):
        return OKLCHColor(l=reference.l, c=0.0, h=normalize_hue(target.h), alpha=reference.alpha)

    # Gray target has no hue opinion, keep the reference's own hue
    if is_achromatic(target):
        return OKLCHColor(
            l=reference.l,
            c=reference.c,
            h=normalize_hue(reference.h),
            alpha=reference.alpha
        )

    return None


def has_lost_chroma(original: OKLCHColor, clamped: OKLCHColor) -> bool:
    return clamped.c == 0 and original.c > 0


def apply_optical_appearance(reference: OKLCHColor, target: OKLCHColor) -> OKLCHColor:
    """
    Apply the optical appearance of reference to target's hue.

    Takes the lightness and chroma from the reference color and applies them to
    the target color's hue, so the "look and feel" (brightness and saturation)
    of the reference is kept while the hue matches the target.

    Args:
        reference: The color to take L and C from
        target: The color to take H from

    Returns:
        Transformed color, clamped into sRGB when needed

    Raises:
        ColorError: If clamping reduces chroma to 0 and the hue would be lost
    """
    edge_case = handle_achromatic_cases(reference, target)
    if edge_case is not None:
        return edge_case

    base = create_base_transform(reference, target)
    if is_displayable(base):
        return base

    clamped = clamp_to_gamut(base)
    if has_lost_chroma(base, clamped):
        raise ColorError(
            "Transformed color is out of gamut and clamping reduced chroma to 0, losing hue information"
        )

    logger.debug(f"Clamped transformed color chroma {base.c:.4f} -> {clamped.c:.4f} at hue {base.h:.1f}")
    return clamped


def chroma_loss_ratio(original: OKLCHColor, clamped: OKLCHColor) -> float:
    return (original.c - clamped.c) / original.c if original.c > 0 else 0.0


def is_transformation_viable(reference: OKLCHColor, target: OKLCHColor) -> bool:
    """
    Check if a transformation is viable without significant quality loss.

    Returns:
        False for a reference lightness outside [0.05, 0.95]; True when both
        colors are achromatic; otherwise True if the base transform is
        displayable or loses less than half its chroma when clamped.
    """
    if not MIN_VIABLE_LIGHTNESS <= reference.l <= MAX_VIABLE_LIGHTNESS:
        return False

    if is_achromatic(reference) and is_achromatic(target):
        return True

    base = create_base_transform(reference, target)
    if is_displayable(base):
        return True

    try:
        clamped = clamp_to_gamut(base)
    except ColorError:
        return False
    return chroma_loss_ratio(reference, clamped) < MAX_CHROMA_LOSS_RATIO


def apply_optical_appearance_many(
    reference: OKLCHColor,
    targets: Sequence[OKLCHColor],
    max_workers: Optional[int] = None
) -> List[Union[OKLCHColor, ColorError]]:
    """
    Apply one reference appearance to many targets.

    Each target is independent; failures are returned in place of the color
    so one out-of-gamut target does not abort the rest.

    Returns:
        One entry per target, in input order
    """
    def transform_one(target: OKLCHColor) -> Union[OKLCHColor, ColorError]:
        try:
            return apply_optical_appearance(reference, target)
        except ColorError as e:
            return e

    workers = max_workers or config.MAX_CONCURRENCY
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(transform_one, targets))
