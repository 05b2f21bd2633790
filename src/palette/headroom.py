"""Headroom targeting.

Picks a concrete Y inside a feasible interval that keeps a safety margin above
the minimum contrast instead of sitting on the legal edge.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .interval_guard import HEADROOM, FeasibleInterval
from .models import Foreground

__all__ = [
    "SubtleHeadroom",
    "SolidHeadroom",
    "HeadroomTargets",
    "DEFAULT_HEADROOM",
    "DEFAULT_BIAS",
    "pick_y_target_with_headroom",
    "calculate_headroom",
    "meets_headroom_target",
]

DEFAULT_BIAS = 0.15


@dataclass(frozen=True)
class SubtleHeadroom:
    ui_vs_surface: float = 0.2  # aim for 3.2:1
    text_vs_bg: float = 0.3  # aim for 7.3:1


@dataclass(frozen=True)
class SolidHeadroom:
    text_vs_bg: float = 0.2  # aim for 4.7:1 (AA)


@dataclass(frozen=True)
class HeadroomTargets:
    subtle: SubtleHeadroom = SubtleHeadroom()
    solid: SolidHeadroom = SolidHeadroom()


DEFAULT_HEADROOM = HeadroomTargets()


def pick_y_target_with_headroom(
    interval: FeasibleInterval,
    headroom_target: float,
    bias: float = DEFAULT_BIAS,
    *,
    foreground: Foreground = Foreground.WHITE,
) -> Optional[float]:
    """Return a Y target inside ``interval`` or None when the interval is empty.

    Parameters
    ----------
    interval : FeasibleInterval
        Feasible Y interval for the role.
    headroom_target : float
        Desired margin; clamped to half the interval width.
    bias : float, default 0.15
        0..0.5 shift from the centre toward the side with more text contrast
        (darker for white text, lighter for black text).
    foreground : Foreground
        Text color the background is being tuned for.
    """
    width = interval.width
    if width <= 0:
        return None

    actual_headroom = min(headroom_target, width / 2)
    if foreground is Foreground.WHITE:
        position = 0.5 - bias
    else:
        position = 0.5 + bias
    usable = width - 2 * actual_headroom
    y = interval.y_min + actual_headroom + usable * position

    lo, hi = interval.y_min + HEADROOM, interval.y_max - HEADROOM
    if lo > hi:
        # narrower than two edge margins
        return (interval.y_min + interval.y_max) / 2
    return max(lo, min(hi, y))


def calculate_headroom(achieved_contrast: float, target_contrast: float) -> float:
    return max(0.0, achieved_contrast - target_contrast)


def meets_headroom_target(
    achieved_contrast: float,
    target_contrast: float,
    headroom_target: float,
    epsilon: float = 1e-3,
) -> bool:
    return calculate_headroom(achieved_contrast, target_contrast) >= headroom_target - epsilon
