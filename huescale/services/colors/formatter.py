"""
Color formatting for palette output.

Converts OKLCH colors to hex, rgb(), oklch() and oklab() strings.
"""

from typing import Callable, Dict, List, Sequence

from huescale.schemas import FormattedStop
from . import (
    ColorError, OKLABColor, OKLCHColor, RGBColor, oklch_to_hex, oklch_to_oklab, oklch_to_rgb,
)


FULL_OPACITY = 1.0

LIGHTNESS_PRECISION = 2
CHROMA_PRECISION = 3
HUE_PRECISION = 1
OKLAB_AXIS_PRECISION = 3


def _alpha_suffix(alpha: float, separator: str) -> str:
    return f"{separator}{alpha:g}" if alpha != FULL_OPACITY else ""


def _lightness(l: float) -> str:
    return f"{l * 100:.{LIGHTNESS_PRECISION}f}%"


def format_rgb(rgb: RGBColor) -> str:
    """Format an RGB color as a CSS rgb() string."""
    return f"rgb({rgb.r}, {rgb.g}, {rgb.b}{_alpha_suffix(rgb.alpha, ', ')})"


def format_oklch(color: OKLCHColor) -> str:
    """Format an OKLCH color as a CSS oklch() string."""
    return (
        f"oklch({_lightness(color.l)} {color.c:.{CHROMA_PRECISION}f} "
        f"{color.h:.{HUE_PRECISION}f}{_alpha_suffix(color.alpha, ' / ')})"
    )


def format_oklab(oklab: OKLABColor) -> str:
    """Format an OKLAB color as a CSS oklab() string."""
    return (
        f"oklab({_lightness(oklab.l)} {oklab.a:.{OKLAB_AXIS_PRECISION}f} "
        f"{oklab.b:.{OKLAB_AXIS_PRECISION}f}{_alpha_suffix(oklab.alpha, ' / ')})"
    )


COLOR_FORMATTERS: Dict[str, Callable[[OKLCHColor], str]] = {
    "hex": oklch_to_hex,
    "rgb": lambda color: format_rgb(oklch_to_rgb(color)),
    "oklch": format_oklch,
    "oklab": lambda color: format_oklab(oklch_to_oklab(color)),
}


def format_color(color: OKLCHColor, color_space: str) -> str:
    """
    Convert an OKLCH color to a string in the requested color space.

    Args:
        color: Color to format
        color_space: One of "hex", "rgb", "oklch", "oklab"

    Raises:
        ColorError: For an unknown color space or a failed conversion
    """
    formatter = COLOR_FORMATTERS.get(color_space)
    if formatter is None:
        raise ColorError(f"Unsupported output format: {color_space}")
    return formatter(color)


def format_palette_stops(stops: Sequence, color_space: str) -> List[FormattedStop]:
    """Format every palette stop, keeping position order."""
    return [
        FormattedStop(
            position=stop.position,
            l=stop.color.l,
            c=stop.color.c,
            h=stop.color.h,
            alpha=stop.color.alpha,
            value=format_color(stop.color, color_space)
        )
        for stop in stops
    ]
