"""Accessible palette engine.

Generates contrast-safe solid / subtle / vibrant color roles from a seed color
with WCAG guarantees, deterministic output and an LRU palette cache.
"""

from .color_space import (  # noqa: F401
    InvalidColorError,
    Oklch,
    WCAG_THRESHOLDS,
    contrast_ratio,
    hex_to_oklch,
    meets_wcag,
    normalize_hex,
    oklch_to_hex,
    relative_luminance,
)
from .models import (  # noqa: F401
    Adjustments,
    ConformanceLevel,
    ContractStatus,
    Diagnostics,
    Faithfulness,
    Foreground,
    GeneratedPalette,
    HeadroomReport,
    Role,
    RoleResult,
    Theme,
    VibrantAccent,
)
from .determinism import SeededRandom, hash_to_seed  # noqa: F401
from .interval_guard import (  # noqa: F401
    ContrastTargets,
    FeasibleInterval,
    calculate_feasible_interval,
    handle_narrow_interval,
)
from .headroom import pick_y_target_with_headroom  # noqa: F401
from .text_policy import TEXT_POLICIES, TextPolicy, choose_text_by_policy, get_policy_for_hue  # noqa: F401
from .cache import CacheKey, CacheStats, PaletteCache  # noqa: F401
from .generator import (  # noqa: F401
    ColorSuggestion,
    GeneratorOptions,
    MultiSeedPalette,
    PaletteEngine,
    default_engine,
    generate_multi_seed_palette,
    generate_palette,
    generate_suggestions,
    get_role_tokens,
    preview_palette,
    reset_default_engine,
)
