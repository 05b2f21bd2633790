"""Feasible interval guard.

Every contrast constraint on a background reduces to a bound on its relative
luminance Y, so a role's acceptable backgrounds form an interval [y_min, y_max].
This module computes the UI bound (non-text contrast against the page surface,
WCAG 1.4.11) and the text bound (contrast against a black or white foreground,
WCAG 1.4.3), intersects them and neutralizes seeds whose interval is too narrow
to hit with any safety margin.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .color_space import Oklch
from .determinism import SeededRandom
from .models import Foreground, Theme

__all__ = [
    "INTERVAL_WIDTH_THRESHOLD",
    "HEADROOM",
    "EPS",
    "NEUTRAL_MAX_CHROMA",
    "ContrastTargets",
    "FeasibleInterval",
    "ui_bounds_for_surface",
    "text_bounds_for_fg",
    "calculate_feasible_interval",
    "choose_feasible_foreground",
    "handle_narrow_interval",
]

_logger = logging.getLogger(__name__)

INTERVAL_WIDTH_THRESHOLD = 0.02  # tau, in Y space
HEADROOM = 0.01  # distance kept from interval edges
EPS = 1e-3
NEUTRAL_MAX_CHROMA = 0.10

Bounds = Tuple[float, float]


@dataclass(frozen=True)
class ContrastTargets:
    """Minimum contrast ratios for a role. ``ui=None`` disables the surface bound."""

    text: float
    ui: Optional[float] = 3.0


@dataclass(frozen=True)
class FeasibleInterval:
    y_min: float
    y_max: float
    width: float
    is_narrow: bool
    is_tiny: bool
    was_adjusted: bool = False

    @property
    def midpoint(self) -> float:
        return min(1.0, max(0.0, (self.y_min + self.y_max) / 2))

    @property
    def is_empty(self) -> bool:
        return self.y_min > self.y_max

    def contains(self, y: float) -> bool:
        return self.y_min <= y <= self.y_max


def ui_bounds_for_surface(theme: Theme, surface_y: float, min_contrast: float = 3.0) -> Bounds:
    """Y bounds keeping a background ``min_contrast`` away from the surface.

    Light theme: the background sits below the surface, (Ys + 0.05) / (Y + 0.05) >= cr.
    Dark theme: the background sits above the surface, (Y + 0.05) / (Ys + 0.05) >= cr.
    """
    if Theme(theme) is Theme.LIGHT:
        y_max = (surface_y + 0.05) / min_contrast - 0.05
        return 0.0, max(0.0, y_max)
    y_min = min_contrast * (surface_y + 0.05) - 0.05
    return min(1.0, max(0.0, y_min)), 1.0


def text_bounds_for_fg(fg: Foreground, min_contrast: float = 4.5) -> Bounds:
    """Y bounds giving ``fg`` text at least ``min_contrast`` on the background."""
    if Foreground(fg) is Foreground.BLACK:
        # (Y + 0.05) / 0.05 >= cr
        y_min = min_contrast * 0.05 - 0.05
        return min(1.0, max(0.0, y_min)), 1.0
    # 1.05 / (Y + 0.05) >= cr
    y_max = 1.05 / min_contrast - 0.05
    return 0.0, max(0.0, y_max)


def _make_interval(y_min: float, y_max: float) -> FeasibleInterval:
    width = max(0.0, y_max - y_min)
    return FeasibleInterval(
        y_min=y_min,
        y_max=y_max,
        width=width,
        is_narrow=width < INTERVAL_WIDTH_THRESHOLD,
        is_tiny=width < INTERVAL_WIDTH_THRESHOLD / 2,
    )


def calculate_feasible_interval(
    theme: Theme, surface_y: float, targets: ContrastTargets, fg: Foreground
) -> FeasibleInterval:
    """Intersect the UI and text bounds for one foreground."""
    if targets.ui is None:
        ui_min, ui_max = 0.0, 1.0
    else:
        ui_min, ui_max = ui_bounds_for_surface(theme, surface_y, targets.ui)
    text_min, text_max = text_bounds_for_fg(fg, targets.text)
    return _make_interval(max(ui_min, text_min), min(ui_max, text_max))


def choose_feasible_foreground(
    theme: Theme,
    surface_y: float,
    targets: ContrastTargets,
    rng: Optional[SeededRandom] = None,
) -> Tuple[Foreground, FeasibleInterval]:
    """Pick the foreground whose interval can actually be hit.

    The theme's customary foreground (black on light, white on dark) wins when
    its interval is wider than the edge margin; otherwise the other one; if
    neither is usable the wider interval is returned for neutralization.
    """
    theme = Theme(theme)
    candidates = {
        fg: calculate_feasible_interval(theme, surface_y, targets, fg) for fg in Foreground
    }
    order = (
        (Foreground.BLACK, Foreground.WHITE)
        if theme is Theme.LIGHT
        else (Foreground.WHITE, Foreground.BLACK)
    )
    for fg in order:
        if candidates[fg].width > HEADROOM + EPS:
            return fg, candidates[fg]

    black, white = candidates[Foreground.BLACK], candidates[Foreground.WHITE]
    if white.width > black.width:
        return Foreground.WHITE, white
    if black.width > white.width:
        return Foreground.BLACK, black
    # equal widths: an interval whose bounds crossed can never be hit
    if white.is_empty != black.is_empty:
        return (Foreground.BLACK, black) if white.is_empty else (Foreground.WHITE, white)
    fg = rng.choice((Foreground.WHITE, Foreground.BLACK)) if rng is not None else Foreground.WHITE
    return fg, candidates[fg]


def handle_narrow_interval(
    interval: FeasibleInterval, seed: Oklch
) -> Tuple[Oklch, FeasibleInterval]:
    """Neutralize a seed whose interval is narrow.

    Chroma is compressed to at most ``NEUTRAL_MAX_CHROMA`` while hue is kept so
    the result still reads as the seed's color family. Lightness is estimated from
    the interval midpoint (callers solve it exactly). Applying this twice yields
    the same result.
    """
    if not interval.is_narrow:
        return seed, interval
    centre_y = interval.midpoint
    neutralized = Oklch(
        l=centre_y ** (1.0 / 3.0),
        c=min(seed.c, NEUTRAL_MAX_CHROMA),
        h=seed.h,
    )
    if not interval.was_adjusted:
        _logger.debug(
            "neutralizing narrow interval [%.4f, %.4f] (chroma %.3f -> %.3f)",
            interval.y_min,
            interval.y_max,
            seed.c,
            neutralized.c,
        )
    return neutralized, replace(interval, was_adjusted=True)
