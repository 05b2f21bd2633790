"""Text color policy registry.

Codified rules for picking black or white text on a solid background, keyed by
OKLCH hue. Some hue families read better with one foreground even when the other
is technically legal (yellows are intrinsically bright, blues intrinsically
dark), so the registry states a preference and only flips to the other color when
it clears a stricter, per-policy threshold.

Rules (``choose_text_by_policy``):
 - Hue normalized to [0, 360). ``None`` (achromatic) never matches a policy.
 - Policy matched: preferred text if it meets the role minimum (solid 4.5,
   subtle 7.0); else the fallback if it clears ``fallback_threshold``; else the
   preferred text as a best effort (contract flags report the failure).
 - No policy: whichever of black/white has the higher contrast (white on ties).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .color_space import hex_contrast
from .models import Foreground, Role

__all__ = [
    "TextPolicy",
    "TEXT_POLICIES",
    "ROLE_MIN_CONTRAST",
    "normalize_hue",
    "get_policy_for_hue",
    "choose_text_by_policy",
]

ROLE_MIN_CONTRAST = {Role.SOLID: 4.5, Role.SUBTLE: 7.0}


@dataclass(frozen=True)
class TextPolicy:
    name: str
    hue_range: Tuple[float, float]  # inclusive; lo > hi wraps through 0
    preferred_text: Foreground
    fallback_threshold: float
    description: str

    def matches(self, hue: float) -> bool:
        lo, hi = self.hue_range
        if lo <= hi:
            return lo <= hue <= hi
        return hue >= lo or hue <= hi


TEXT_POLICIES: Tuple[TextPolicy, ...] = (
    TextPolicy(
        name="Yellow/Amber/Lime",
        hue_range=(65.0, 135.0),
        preferred_text=Foreground.BLACK,
        fallback_threshold=7.0,
        description="Bright yellows require black text for readability",
    ),
    TextPolicy(
        name="Sky/Mint (Light Pastels)",
        hue_range=(160.0, 200.0),
        preferred_text=Foreground.BLACK,
        fallback_threshold=4.5,
        description="Light cyan/mint pastels prefer black text",
    ),
    TextPolicy(
        name="Blue/Indigo/Violet",
        hue_range=(230.0, 325.0),
        preferred_text=Foreground.WHITE,
        fallback_threshold=7.0,
        description="Deep blues and violets carry white text; black only on very light tints",
    ),
    TextPolicy(
        name="Red/Coral/Rose",
        hue_range=(345.0, 45.0),
        preferred_text=Foreground.WHITE,
        fallback_threshold=7.0,
        description="Saturated reds and corals carry white text; black only on pale tints",
    ),
)


def normalize_hue(hue: float) -> float:
    return ((hue % 360.0) + 360.0) % 360.0


def get_policy_for_hue(hue: Optional[float]) -> Optional[TextPolicy]:
    if hue is None:
        return None
    normalized = normalize_hue(hue)
    for policy in TEXT_POLICIES:
        if policy.matches(normalized):
            return policy
    return None


def choose_text_by_policy(bg_hex: str, hue: Optional[float], role: Role) -> Foreground:
    """Choose the foreground for ``bg_hex`` according to the policy registry."""
    policy = get_policy_for_hue(hue)
    if policy is None:
        white = hex_contrast(bg_hex, Foreground.WHITE.hex) or 0.0
        black = hex_contrast(bg_hex, Foreground.BLACK.hex) or 0.0
        return Foreground.WHITE if white >= black else Foreground.BLACK

    preferred = policy.preferred_text
    if (hex_contrast(bg_hex, preferred.hex) or 0.0) >= ROLE_MIN_CONTRAST[role]:
        return preferred
    fallback = preferred.opposite
    if (hex_contrast(bg_hex, fallback.hex) or 0.0) >= policy.fallback_threshold:
        return fallback
    return preferred
