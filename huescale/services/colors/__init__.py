"""
Huescale Color Primitives

OKLCH is the internal representation for every color manipulation. Parsing,
space conversion and sRGB gamut handling are delegated to coloraide; this
module only adapts its results to plain immutable values.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from coloraide import Color

from huescale.errors import HuescaleError


class ColorError(HuescaleError):
    """Color parsing, conversion or gamut clamping failed."""
    kind = "ColorError"


@dataclass(frozen=True)
class OKLCHColor:
    """A color in OKLCH space."""
    l: float  # Lightness [0, 1]
    c: float  # Chroma [0, ~0.5]
    h: float  # Hue [0, 360), NaN when undefined
    alpha: float = 1.0


@dataclass(frozen=True)
class RGBColor:
    """An sRGB color with 8-bit channels."""
    r: int
    g: int
    b: int
    alpha: float = 1.0


@dataclass(frozen=True)
class OKLABColor:
    """A color in OKLAB space."""
    l: float
    a: float
    b: float
    alpha: float = 1.0


HEX_WITHOUT_HASH = re.compile(r"^(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

GAMUT_SPACE = "srgb"
FIT_METHOD = "oklch-chroma"
# Chroma-only reduction, no final RGB clip: lightness and hue stay put
FIT_JND = 0.0


def parse_color(color_string: str) -> OKLCHColor:
    """
    Parse any CSS color string to OKLCH.

    Args:
        color_string: e.g. "#2D72D2", "2D72D2", "rgb(45 114 210)", "oklch(0.57 0.15 259)"

    Returns:
        Parsed color; achromatic colors get hue 0

    Raises:
        ColorError: If the string cannot be parsed
    """
    if not isinstance(color_string, str) or not color_string.strip():
        raise ColorError(f"Could not parse color string: {color_string!r}")

    text = color_string.strip()
    if HEX_WITHOUT_HASH.match(text):
        text = f"#{text}"

    try:
        parsed = Color(text)
    except ValueError as e:
        raise ColorError(f"Could not parse color string: {color_string}", e)

    return _from_coloraide(parsed, "parsed color")


def oklch_to_hex(color: OKLCHColor) -> str:
    """
    Convert OKLCH to an upper-case hex string.

    Returns:
        "#RRGGBB", or "#RRGGBBAA" when alpha < 1
    """
    try:
        srgb = _to_coloraide(color).convert(GAMUT_SPACE)
        hex_value = srgb.to_string(hex=True, fit=FIT_METHOD)
    except (ValueError, TypeError) as e:
        raise ColorError("Could not convert OKLCH to hex", e)
    return hex_value.upper()


def oklch_to_rgb(color: OKLCHColor) -> RGBColor:
    """Convert OKLCH to 8-bit sRGB, fitting into gamut first."""
    try:
        srgb = _to_coloraide(color).convert(GAMUT_SPACE).fit(GAMUT_SPACE, method=FIT_METHOD)
        r, g, b = (_channel(srgb[name]) for name in ("red", "green", "blue"))
    except (ValueError, TypeError) as e:
        raise ColorError("Could not convert OKLCH to RGB", e)

    return RGBColor(
        r=int(round(r * 255)),
        g=int(round(g * 255)),
        b=int(round(b * 255)),
        alpha=_alpha(srgb)
    )


def rgb_to_oklch(color: RGBColor) -> OKLCHColor:
    """Convert 8-bit sRGB to OKLCH."""
    try:
        converted = Color(GAMUT_SPACE, [color.r / 255, color.g / 255, color.b / 255], color.alpha).convert("oklch")
    except (ValueError, TypeError) as e:
        raise ColorError("Could not convert RGB to OKLCH", e)
    return _from_coloraide(converted, "rgb")


def oklch_to_oklab(color: OKLCHColor) -> OKLABColor:
    """Convert OKLCH to OKLAB."""
    try:
        lab = _to_coloraide(color).convert("oklab")
        l, a, b = (_channel(lab[name]) for name in ("lightness", "a", "b"))
    except (ValueError, TypeError) as e:
        raise ColorError("Could not convert OKLCH to OKLAB", e)
    return OKLABColor(l=l, a=a, b=b, alpha=_alpha(lab))


def oklab_to_oklch(color: OKLABColor) -> OKLCHColor:
    """Convert OKLAB to OKLCH."""
    try:
        converted = Color("oklab", [color.l, color.a, color.b], color.alpha).convert("oklch")
    except (ValueError, TypeError) as e:
        raise ColorError("Could not convert OKLAB to OKLCH", e)
    return _from_coloraide(converted, "oklab")


def is_displayable(color: OKLCHColor) -> bool:
    """Check if a color is displayable in the sRGB gamut."""
    return _to_coloraide(color).in_gamut(GAMUT_SPACE)


def clamp_to_gamut(color: OKLCHColor) -> OKLCHColor:
    """
    Clamp a color to the sRGB gamut by reducing chroma.

    Lightness and hue are kept. A fit that ends achromatic (hue undefined)
    reports chroma 0 and keeps the input hue.

    Raises:
        ColorError: If the library cannot fit the color
    """
    try:
        fitted = _to_coloraide(color).fit(GAMUT_SPACE, method=FIT_METHOD, jnd=FIT_JND)
    except (ValueError, TypeError, ZeroDivisionError) as e:
        raise ColorError("Could not clamp OKLCH color to gamut", e)

    l, c, h = (fitted[name] for name in ("lightness", "chroma", "hue"))
    achromatic = _undefined(h) or _undefined(c)
    return OKLCHColor(
        l=color.l if _undefined(l) else float(l),
        c=0.0 if achromatic else max(0.0, float(c)),
        h=color.h if achromatic else normalize_hue(float(h)),
        alpha=_alpha(fitted, fallback=color.alpha)
    )


def is_achromatic(color: OKLCHColor) -> bool:
    """A color has no hue information when chroma is 0 or hue is undefined."""
    return color.c == 0 or math.isnan(color.h)


def normalize_hue(hue: float) -> float:
    """
    Normalize hue to [0, 360).

    NaN is passed through unchanged.
    """
    normalized = hue % 360.0
    # -1e-20 % 360 rounds up to 360.0
    return 0.0 if normalized == 360.0 else normalized


def hue_difference(h1: float, h2: float) -> float:
    """
    Shortest signed angular distance from h1 to h2.

    Returns:
        Degrees in (-180, 180]
    """
    diff = ((h2 - h1 + 180.0) % 360.0) - 180.0
    return 180.0 if diff <= -180.0 else diff


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp a value between lower and upper."""
    return max(lower, min(upper, value))


def _to_coloraide(color: OKLCHColor) -> Color:
    return Color("oklch", [color.l, color.c, color.h], color.alpha)


def _from_coloraide(color: Color, source: str) -> OKLCHColor:
    oklch = color.convert("oklch")
    l, c, h = (oklch[name] for name in ("lightness", "chroma", "hue"))
    if _undefined(l) or _undefined(c):
        raise ColorError(f"Incomplete OKLCH color from {source}: l={l}, c={c}, h={h}")

    # Undefined hue marks an achromatic color; drop the float residue in chroma
    if _undefined(h):
        return OKLCHColor(l=float(l), c=0.0, h=0.0, alpha=_alpha(oklch))

    return OKLCHColor(
        l=float(l),
        c=max(0.0, float(c)),
        h=normalize_hue(float(h)),
        alpha=_alpha(oklch)
    )


def _alpha(color: Color, fallback: float = 1.0) -> float:
    alpha = color["alpha"]
    return fallback if _undefined(alpha) else float(alpha)


def _channel(value: Any) -> float:
    return 0.0 if _undefined(value) else float(value)


def _undefined(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))
