"""Color space helpers used by the palette engine.

Implements hex parsing, WCAG 2.1 relative luminance / contrast ratio and the
sRGB <-> OKLab <-> OKLCH conversions (Bjoern Ottosson's matrices). Everything is
plain float math so results are deterministic across platforms.

Public API:
- parse_hex(color) -> (r, g, b)
- normalize_hex(color) -> "#RRGGBB"
- relative_luminance(color) -> float
- contrast_ratio(fg, bg) -> float
- hex_contrast(a, b) -> float | None
- meets_wcag(ratio, level) -> bool
- hex_to_oklch(color) -> Oklch
- oklch_to_hex(l, c, h) -> str

Out-of-gamut OKLCH colors are mapped back into sRGB by reducing chroma at
constant lightness and hue, so hue is never traded away before chroma is.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

__all__ = [
    "InvalidColorError",
    "Oklch",
    "parse_hex",
    "normalize_hex",
    "to_hex",
    "srgb_to_linear",
    "linear_to_srgb",
    "relative_luminance",
    "luminance_contrast",
    "contrast_ratio",
    "hex_contrast",
    "meets_wcag",
    "WCAG_THRESHOLDS",
    "hex_to_oklch",
    "oklch_to_hex",
    "oklch_to_linear_rgb",
]

RGB = Tuple[int, int, int]

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_GAMUT_EPS = 1e-6

WCAG_THRESHOLDS = {"AA": 4.5, "AAA": 7.0}


class InvalidColorError(ValueError):
    """Raised when a color string cannot be parsed as #RGB / #RRGGBB."""


@dataclass(frozen=True)
class Oklch:
    l: float  # noqa: E741 - conventional channel name
    c: float
    h: float


def parse_hex(color: str) -> RGB:
    """Parse #RGB / #RRGGBB (leading '#' optional) into 0-255 channels."""
    if not isinstance(color, str):
        raise InvalidColorError(f"Color must be a hex string: {color!r}")
    m = _HEX_RE.match(color.strip())
    if not m:
        raise InvalidColorError(f"Color must be a #RRGGBB hex string: {color!r}")
    digits = m.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def _clamp_byte(v: int) -> int:
    return 0 if v < 0 else 255 if v > 255 else v


def to_hex(r: int, g: int, b: int) -> str:
    return f"#{_clamp_byte(r):02X}{_clamp_byte(g):02X}{_clamp_byte(b):02X}"


def normalize_hex(color: str) -> str:
    """Return the uppercase #RRGGBB form of a color."""
    return to_hex(*parse_hex(color))


def srgb_to_linear(c: float) -> float:
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def linear_to_srgb(c: float) -> float:
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * (c ** (1 / 2.4)) - 0.055


def relative_luminance(color: str) -> float:
    r, g, b = parse_hex(color)
    r_l = srgb_to_linear(r / 255.0)
    g_l = srgb_to_linear(g / 255.0)
    b_l = srgb_to_linear(b / 255.0)
    # Rec. 709 coefficients used by WCAG
    return 0.2126 * r_l + 0.7152 * g_l + 0.0722 * b_l


def luminance_contrast(y1: float, y2: float) -> float:
    """Contrast ratio between two relative luminance values."""
    lighter = max(y1, y2)
    darker = min(y1, y2)
    return (lighter + 0.05) / (darker + 0.05)


def contrast_ratio(fg: str, bg: str) -> float:
    return luminance_contrast(relative_luminance(fg), relative_luminance(bg))


def hex_contrast(a: str, b: str) -> Optional[float]:
    """Contrast ratio of two colors, or None if either cannot be parsed."""
    try:
        return contrast_ratio(a, b)
    except InvalidColorError:
        return None


def meets_wcag(ratio: float, level: str = "AA") -> bool:
    try:
        threshold = WCAG_THRESHOLDS[getattr(level, "value", level)]
    except KeyError:
        raise ValueError(f"Unknown WCAG level: {level}") from None
    return ratio >= threshold


# OKLab / OKLCH ---------------------------------------------------------------


def _cbrt(v: float) -> float:
    return math.copysign(abs(v) ** (1.0 / 3.0), v)


def _linear_rgb_to_oklab(r: float, g: float, b: float) -> tuple[float, float, float]:
    l_ = _cbrt(0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b)
    m_ = _cbrt(0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b)
    s_ = _cbrt(0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b)
    return (
        0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_,
        1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_,
        0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_,
    )


def _oklab_to_linear_rgb(L: float, a: float, b: float) -> tuple[float, float, float]:
    l_ = L + 0.3963377774 * a + 0.2158037573 * b
    m_ = L - 0.1055613458 * a - 0.0638541728 * b
    s_ = L - 0.0894841775 * a - 1.2914855480 * b
    lc, mc, sc = l_ ** 3, m_ ** 3, s_ ** 3
    return (
        4.0767416621 * lc - 3.3077115913 * mc + 0.2309699292 * sc,
        -1.2684380046 * lc + 2.6097574011 * mc - 0.3413193965 * sc,
        -0.0041960863 * lc - 0.7034186147 * mc + 1.7076147010 * sc,
    )


def oklch_to_linear_rgb(l: float, c: float, h: float) -> tuple[float, float, float]:  # noqa: E741
    rad = math.radians(h)
    return _oklab_to_linear_rgb(l, c * math.cos(rad), c * math.sin(rad))


def _in_gamut(rgb: tuple[float, float, float]) -> bool:
    return all(-_GAMUT_EPS <= ch <= 1 + _GAMUT_EPS for ch in rgb)


def _gamut_map(l: float, c: float, h: float) -> tuple[float, float, float]:  # noqa: E741
    """Linear sRGB for (l, c, h), reducing chroma until the color fits sRGB."""
    rgb = oklch_to_linear_rgb(l, c, h)
    if _in_gamut(rgb):
        return rgb
    lo, hi = 0.0, c
    for _ in range(20):
        mid = (lo + hi) / 2
        if _in_gamut(oklch_to_linear_rgb(l, mid, h)):
            lo = mid
        else:
            hi = mid
    return oklch_to_linear_rgb(l, lo, h)


def hex_to_oklch(color: str) -> Oklch:
    """Convert a hex color into OKLCH (hue in degrees, 0 for achromatic colors)."""
    r, g, b = parse_hex(color)
    L, a, b_ = _linear_rgb_to_oklab(
        srgb_to_linear(r / 255.0), srgb_to_linear(g / 255.0), srgb_to_linear(b / 255.0)
    )
    c = math.hypot(a, b_)
    if c < 1e-6:
        return Oklch(l=L, c=0.0, h=0.0)
    h = math.degrees(math.atan2(b_, a)) % 360.0
    return Oklch(l=L, c=c, h=h)


def oklch_to_hex(l: float, c: float, h: float) -> str:  # noqa: E741
    """Convert OKLCH to #RRGGBB, gamut-mapping by chroma reduction."""
    if l >= 1.0:
        return "#FFFFFF"
    if l <= 0.0:
        return "#000000"
    rgb = _gamut_map(l, max(0.0, c), h % 360.0)
    channels = [
        int(round(linear_to_srgb(min(1.0, max(0.0, ch))) * 255)) for ch in rgb
    ]
    return to_hex(*channels)
