"""Immutable data structures shared by the palette engine.

Generated palettes are handed out from the cache as shared instances, so every
record here is a frozen dataclass. Foreground colors stay symbolic
(`Foreground.BLACK` / `Foreground.WHITE`) inside the engine and are resolved to
hex only by `get_role_tokens`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from .color_space import Oklch

if TYPE_CHECKING:  # pragma: no cover
    from .interval_guard import FeasibleInterval

__all__ = [
    "Theme",
    "ConformanceLevel",
    "Role",
    "Foreground",
    "Faithfulness",
    "Adjustments",
    "RoleResult",
    "VibrantAccent",
    "ContractStatus",
    "HeadroomReport",
    "Diagnostics",
    "GeneratedPalette",
]


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class ConformanceLevel(str, Enum):
    AA = "AA"
    AAA = "AAA"

    @property
    def min_contrast(self) -> float:
        return 7.0 if self is ConformanceLevel.AAA else 4.5


class Role(str, Enum):
    SOLID = "solid"
    SUBTLE = "subtle"


class Foreground(str, Enum):
    BLACK = "black"
    WHITE = "white"

    @property
    def hex(self) -> str:
        return "#000000" if self is Foreground.BLACK else "#FFFFFF"

    @property
    def luminance(self) -> float:
        return 0.0 if self is Foreground.BLACK else 1.0

    @property
    def opposite(self) -> "Foreground":
        return Foreground.WHITE if self is Foreground.BLACK else Foreground.BLACK


class Faithfulness(str, Enum):
    STRICT = "strict"
    BALANCED = "balanced"
    WCAG_FIRST = "wcag-first"


@dataclass(frozen=True)
class Adjustments:
    """How far a role drifted from the seed in OKLCH."""

    delta_l: float
    delta_c: float
    delta_h: float
    reason: str


@dataclass(frozen=True)
class RoleResult:
    """One background/foreground pair.

    Attributes
    ----------
    role : Role
        ``Role.SOLID`` or ``Role.SUBTLE``.
    bg : str
        Background color (#RRGGBB).
    text : Foreground
        Foreground resolved by the text policy.
    contrast : float
        Measured contrast of ``text`` on ``bg``.
    variant : str
        Role specific companion color: hover state for solid, border for subtle.
    """

    role: Role
    bg: str
    text: Foreground
    contrast: float
    variant: str
    adjustments: Optional[Adjustments] = None
    interval: Optional["FeasibleInterval"] = None

    @property
    def hover(self) -> Optional[str]:
        """Hover state of a solid role; subtle roles have none."""
        return self.variant if self.role is Role.SOLID else None

    @property
    def border(self) -> Optional[str]:
        return self.variant if self.role is Role.SUBTLE else None

    @property
    def text_hex(self) -> str:
        return self.text.hex


@dataclass(frozen=True)
class VibrantAccent:
    """Decorative accent (gradients, icons). Never carries text."""

    color: str
    max_chroma: float
    role: str = "vibrant-accent"
    warning: str = "NO_TEXT_ALLOWED"


@dataclass(frozen=True)
class ContractStatus:
    subtle_aaa: bool  # subtle text >= 7:1
    subtle_ui3: bool  # subtle vs surface >= 3:1
    solid_aa: bool  # solid text >= requested level
    headroom_ok: bool

    @property
    def all_passed(self) -> bool:
        return self.subtle_aaa and self.subtle_ui3 and self.solid_aa and self.headroom_ok


@dataclass(frozen=True)
class HeadroomReport:
    subtle_text_vs_bg: float
    subtle_ui_vs_surface: float
    solid_text_vs_bg: float


@dataclass(frozen=True)
class Diagnostics:
    feasible_interval_width: float
    interval_was_narrow: bool
    interval_was_tiny: bool
    seed_was_extreme: bool
    chroma_compressed: bool
    lightness_adjusted: bool
    subtle_used_neutral_tint: bool
    headroom: HeadroomReport
    text_policy: Optional[str]
    faithfulness: Faithfulness
    generator_version: str
    roles_version: str
    contract_schema_version: str
    surface_signature: str
    compute_time_ms: float


@dataclass(frozen=True)
class GeneratedPalette:
    seed: str
    theme: Theme
    level: ConformanceLevel
    oklch: Oklch
    solid: RoleResult
    subtle: RoleResult
    contract: ContractStatus
    diagnostics: Diagnostics
    pair_ids: Tuple[Tuple[str, str], ...] = ()
    vibrant: Optional[VibrantAccent] = None
