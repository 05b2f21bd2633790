"""Accessible palette generator.

Derives contrast-safe color roles from an arbitrary seed color:

 - ``subtle``: badge / chip background. Text at AAA (7:1) *and* 3:1 separation
   from the page surface.
 - ``solid``: button / banner background. Text at the requested level
   (AA 4.5:1 or AAA 7:1).
 - ``vibrant`` (optional): the seed itself, for decoration only (never text).

For each role the acceptable backgrounds are expressed as an interval of
relative luminance Y (see ``interval_guard``); a target Y with headroom is picked
inside it, the OKLCH lightness producing that Y is solved by bisection with the
seed's hue, and the text color is resolved through the policy registry.

Entry points:
 - ``PaletteEngine``: owns the theme surfaces and a ``PaletteCache``.
 - ``generate_palette`` / ``get_role_tokens`` / ``generate_multi_seed_palette`` /
   ``generate_suggestions``: module helpers delegating to ``default_engine()``
   unless an explicit ``engine`` is given.

Invalid seeds return ``None`` instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from threading import Lock
from time import perf_counter
from typing import Dict, List, Mapping, Optional, Tuple

from config import settings

from .cache import CacheKey, PaletteCache, compute_surface_signature, hash_options
from .color_space import (
    InvalidColorError,
    Oklch,
    hex_contrast,
    hex_to_oklch,
    normalize_hex,
    oklch_to_hex,
    relative_luminance,
)
from .determinism import SeededRandom, hash_to_seed
from .headroom import DEFAULT_BIAS, DEFAULT_HEADROOM, calculate_headroom, pick_y_target_with_headroom
from .interval_guard import (
    EPS,
    ContrastTargets,
    FeasibleInterval,
    calculate_feasible_interval,
    choose_feasible_foreground,
    handle_narrow_interval,
)
from .models import (
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
from .text_policy import choose_text_by_policy, get_policy_for_hue

__all__ = [
    "GeneratorOptions",
    "SurfaceReference",
    "MultiSeedPalette",
    "ColorSuggestion",
    "PaletteEngine",
    "SEMANTIC_ROLES",
    "solve_lightness",
    "default_engine",
    "reset_default_engine",
    "generate_palette",
    "preview_palette",
    "get_role_tokens",
    "generate_multi_seed_palette",
    "generate_suggestions",
]

_logger = logging.getLogger(__name__)

UI_MIN = 3.0  # WCAG 1.4.11 non-text contrast
TEXT_AAA = 7.0
SUBTLE_MAX_CHROMA = 0.12
ACHROMATIC_CHROMA = 0.01  # below this the seed has no meaningful hue
ADJUSTMENT_THRESHOLD = 0.01
SOLID_HOVER_DELTA = {Theme.LIGHT: -0.08, Theme.DARK: 0.06}
SUBTLE_BORDER_DELTA = {Theme.LIGHT: -0.08, Theme.DARK: 0.08}
PAIR_IDS: Tuple[Tuple[str, str], ...] = (
    ("subtle", "primary:subtle:02"),
    ("solid", "primary:solid:10"),
)
SEMANTIC_ROLES: Tuple[str, ...] = ("primary", "success", "warning", "danger", "info")

_SOLVE_ITERATIONS = 24
_FIT_STEP = 0.002
_FIT_MAX_STEPS = 500


@dataclass(frozen=True)
class GeneratorOptions:
    """Options accepted by ``PaletteEngine.generate_palette``.

    Strings are accepted for the enum fields and coerced; unknown values raise
    ValueError.
    """

    theme: Theme = Theme.LIGHT
    level: ConformanceLevel = ConformanceLevel.AA
    include_vibrant: bool = True
    deterministic_seed: Optional[int] = None
    surface: Optional[str] = None  # overrides the engine's surface for ``theme``
    faithfulness: Faithfulness = Faithfulness.BALANCED
    max_chroma_compression: float = 0.15

    def __post_init__(self) -> None:
        object.__setattr__(self, "theme", Theme(self.theme))
        object.__setattr__(self, "level", ConformanceLevel(self.level))
        object.__setattr__(self, "faithfulness", Faithfulness(self.faithfulness))
        if not 0.0 <= self.max_chroma_compression < 1.0:
            raise ValueError(
                f"max_chroma_compression must be in [0, 1): {self.max_chroma_compression}"
            )

    def fingerprint(self) -> str:
        """Hash of the options not already part of the cache key."""
        return hash_options(
            {
                "include_vibrant": self.include_vibrant,
                "deterministic_seed": self.deterministic_seed,
                "faithfulness": self.faithfulness.value,
                "max_chroma_compression": self.max_chroma_compression,
            }
        )


@dataclass(frozen=True)
class SurfaceReference:
    hex: str
    y: float
    theme: Theme

    @property
    def signature(self) -> str:
        return compute_surface_signature(self.y, self.theme)


@dataclass(frozen=True)
class MultiSeedPalette:
    palettes: Dict[str, GeneratedPalette]
    warnings: Tuple[str, ...] = ()

    def get(self, role: str) -> Optional[GeneratedPalette]:
        return self.palettes.get(role)


@dataclass(frozen=True)
class ColorSuggestion:
    type: str  # 'flip-text' | 'darken-bg' | 'lighten-bg' | 'adjust-both'
    bg: str
    fg: str
    contrast: float
    reason: str
    priority: int  # 1 = best


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


def _luminance_at(lightness: float, c: float, h: float) -> Tuple[str, float]:
    hex_color = oklch_to_hex(lightness, c, h)
    return hex_color, relative_luminance(hex_color)


def solve_lightness(
    c: float, h: float, y_target: float, rng: Optional[SeededRandom] = None
) -> Tuple[float, str, float]:
    """Bisect OKLCH lightness so the rendered hex lands closest to ``y_target``.

    Returns ``(lightness, hex, measured_y)``. When both ends of the final bracket
    render different hexes equally close to the target, ``rng`` picks one.
    """
    lo, hi = 0.0, 1.0
    for _ in range(_SOLVE_ITERATIONS):
        mid = (lo + hi) / 2
        _, y = _luminance_at(mid, c, h)
        if y < y_target:
            lo = mid
        else:
            hi = mid
    candidates = []
    for lightness in (lo, hi):
        hex_color, y = _luminance_at(lightness, c, h)
        candidates.append((abs(y - y_target), lightness, hex_color, y))
    best = min(cand[0] for cand in candidates)
    ties = [cand for cand in candidates if cand[0] - best <= 1e-12]
    if rng is not None and len({cand[2] for cand in ties}) > 1:
        chosen = rng.choice(ties)
    else:
        chosen = ties[0]
    return chosen[1], chosen[2], chosen[3]


def _fit_into_interval(
    lightness: float, c: float, h: float, interval: FeasibleInterval
) -> Tuple[float, str, float]:
    """Step lightness until the rendered (quantized) color lies in ``interval``."""
    hex_color, y = _luminance_at(lightness, c, h)
    if interval.is_empty:
        return lightness, hex_color, y
    steps = 0
    while not interval.contains(y) and steps < _FIT_MAX_STEPS:
        if y < interval.y_min:
            lightness = min(1.0, lightness + _FIT_STEP)
        else:
            lightness = max(0.0, lightness - _FIT_STEP)
        hex_color, y = _luminance_at(lightness, c, h)
        steps += 1
    return lightness, hex_color, y


def _adjustments(seed: Oklch, lightness: float, c: float, reason: str) -> Optional[Adjustments]:
    delta_l = lightness - seed.l
    delta_c = c - seed.c
    if abs(delta_l) > ADJUSTMENT_THRESHOLD or abs(delta_c) > ADJUSTMENT_THRESHOLD:
        return Adjustments(delta_l=delta_l, delta_c=delta_c, delta_h=0.0, reason=reason)
    return None


def _resolve_text(
    bg_hex: str, hue: Optional[float], role: Role, interval_fg: Foreground, required: float
) -> Foreground:
    text = choose_text_by_policy(bg_hex, hue, role)
    if text is interval_fg:
        return text
    policy_contrast = hex_contrast(bg_hex, text.hex) or 0.0
    interval_contrast = hex_contrast(bg_hex, interval_fg.hex) or 0.0
    if policy_contrast < required - EPS and interval_contrast >= required - EPS:
        _logger.debug(
            "policy text %s misses %.1f:1 on %s; keeping %s",
            text.value,
            required,
            bg_hex,
            interval_fg.value,
        )
        return interval_fg
    return text


class PaletteEngine:
    """Palette generator bound to a set of theme surfaces and a cache.

    Parameters
    ----------
    surfaces : Mapping[Theme | str, str] | None
        Surface (page background) hex per theme. Missing themes fall back to
        ``config.settings``.
    cache : PaletteCache | None
        Cache instance; a private one is created when omitted.
    """

    def __init__(
        self,
        surfaces: Optional[Mapping[object, str]] = None,
        cache: Optional[PaletteCache] = None,
    ) -> None:
        configured: Dict[Theme, str] = {
            Theme.LIGHT: settings.DEFAULT_SURFACE_LIGHT,
            Theme.DARK: settings.DEFAULT_SURFACE_DARK,
        }
        for theme, hex_color in (surfaces or {}).items():
            configured[Theme(theme)] = hex_color
        self._surfaces = {
            theme: self._surface_reference(theme, hex_color)
            for theme, hex_color in configured.items()
        }
        self.cache = cache if cache is not None else PaletteCache()

    # Surfaces ---------------------------------------------------
    @staticmethod
    def _surface_reference(theme: Theme, hex_color: str) -> SurfaceReference:
        normalized = normalize_hex(hex_color)
        return SurfaceReference(hex=normalized, y=relative_luminance(normalized), theme=theme)

    def surface_for(self, theme: Theme, override: Optional[str] = None) -> SurfaceReference:
        theme = Theme(theme)
        if override is not None:
            return self._surface_reference(theme, override)
        return self._surfaces[theme]

    # Public API -------------------------------------------------
    def cache_key(
        self, seed: str, options: Optional[GeneratorOptions] = None, **overrides
    ) -> Optional[CacheKey]:
        """Cache key for a generation request, or None if seed/surface are invalid."""
        opts = self._options(options, overrides)
        try:
            seed_hex = normalize_hex(seed)
            surface = self.surface_for(opts.theme, opts.surface)
        except InvalidColorError:
            return None
        return self._key(seed_hex, opts, surface)

    def generate_palette(
        self, seed: str, options: Optional[GeneratorOptions] = None, **overrides
    ) -> Optional[GeneratedPalette]:
        """Generate (or fetch from cache) the palette for ``seed``.

        Keyword overrides are the ``GeneratorOptions`` fields (``theme``,
        ``level``, ``include_vibrant``, ``deterministic_seed``, ``surface``,
        ``faithfulness``, ``max_chroma_compression``).
        """
        opts = self._options(options, overrides)
        try:
            seed_hex = normalize_hex(seed)
        except InvalidColorError as exc:
            _logger.debug("rejecting seed: %s", exc)
            return None
        try:
            surface = self.surface_for(opts.theme, opts.surface)
        except InvalidColorError as exc:
            _logger.debug("rejecting surface override: %s", exc)
            return None
        key = self._key(seed_hex, opts, surface)
        return self.cache.get_or_compute(key, lambda: self._compute(seed_hex, opts, surface))

    preview_palette = generate_palette

    def get_role_tokens(
        self, seed: str, options: Optional[GeneratorOptions] = None, **overrides
    ) -> Optional[Dict[str, str]]:
        """Flat role -> #RRGGBB mapping for a styling layer.

        Defaults: level AA, vibrant included, deterministic seed 42.
        """
        if options is None:
            overrides.setdefault("level", ConformanceLevel.AA)
            overrides.setdefault("include_vibrant", True)
            overrides.setdefault("deterministic_seed", settings.ROLE_TOKENS_DETERMINISTIC_SEED)
        palette = self.generate_palette(seed, options, **overrides)
        if palette is None:
            return None
        tokens = {
            "subtle-bg": palette.subtle.bg,
            "subtle-text": palette.subtle.text_hex,
            "subtle-border": palette.subtle.border,
            "solid-bg": palette.solid.bg,
            "solid-text": palette.solid.text_hex,
            "solid-hover": palette.solid.hover,
        }
        if palette.vibrant is not None:
            tokens["vibrant"] = palette.vibrant.color
        return tokens

    def generate_multi_seed_palette(
        self, seeds: Mapping[str, str], options: Optional[GeneratorOptions] = None, **overrides
    ) -> MultiSeedPalette:
        """Generate palettes for the semantic roles (primary, success, warning, danger, info)."""
        unknown = sorted(set(seeds) - set(SEMANTIC_ROLES))
        if unknown:
            raise ValueError(f"Unknown semantic roles: {', '.join(unknown)}")
        palettes: Dict[str, GeneratedPalette] = {}
        warnings: List[str] = []
        for role in SEMANTIC_ROLES:
            seed = seeds.get(role)
            if not seed:
                continue
            palette = self.generate_palette(seed, options, **overrides)
            if palette is None:
                warnings.append(f"Invalid hex color for {role}: {seed!r}")
                continue
            palettes[role] = palette
        return MultiSeedPalette(palettes=palettes, warnings=tuple(warnings))

    def generate_suggestions(
        self,
        seed: str,
        *,
        level: ConformanceLevel = ConformanceLevel.AA,
        count: int = 3,
        preserve_hue: bool = True,
    ) -> List[ColorSuggestion]:
        """Curated background/text pairs that all meet ``level``, best first."""
        level = ConformanceLevel(level)
        target = level.min_contrast
        try:
            seed_hex = normalize_hex(seed)
        except InvalidColorError:
            return []
        suggestions: List[ColorSuggestion] = []

        contrast_black = hex_contrast(seed_hex, Foreground.BLACK.hex) or 0.0
        contrast_white = hex_contrast(seed_hex, Foreground.WHITE.hex) or 0.0
        if contrast_black >= target:
            suggestions.append(
                ColorSuggestion(
                    type="flip-text",
                    bg=seed_hex,
                    fg=Foreground.BLACK.hex,
                    contrast=contrast_black,
                    reason="Keep your exact color, use black text",
                    priority=1,
                )
            )
        elif contrast_white >= target:
            suggestions.append(
                ColorSuggestion(
                    type="flip-text",
                    bg=seed_hex,
                    fg=Foreground.WHITE.hex,
                    contrast=contrast_white,
                    reason="Keep your exact color, use white text",
                    priority=1,
                )
            )

        if preserve_hue:
            seed_oklch = hex_to_oklch(seed_hex)
            for step in range(1, 7):
                darker_hex = oklch_to_hex(
                    max(0.2, seed_oklch.l - 0.05 * step), seed_oklch.c, seed_oklch.h
                )
                contrast = hex_contrast(darker_hex, Foreground.WHITE.hex) or 0.0
                if contrast >= target:
                    suggestions.append(
                        ColorSuggestion(
                            type="darken-bg",
                            bg=darker_hex,
                            fg=Foreground.WHITE.hex,
                            contrast=contrast,
                            reason="Darken background slightly, keep white text",
                            priority=2,
                        )
                    )
                    break
            if len(suggestions) < count:
                lighter_hex = oklch_to_hex(
                    min(0.95, seed_oklch.l + 0.2), seed_oklch.c * 0.3, seed_oklch.h
                )
                contrast = hex_contrast(lighter_hex, Foreground.BLACK.hex) or 0.0
                if contrast >= target:
                    suggestions.append(
                        ColorSuggestion(
                            type="lighten-bg",
                            bg=lighter_hex,
                            fg=Foreground.BLACK.hex,
                            contrast=contrast,
                            reason="Subtle background version, high contrast",
                            priority=3,
                        )
                    )

        if len(suggestions) < count:
            palette = self.generate_palette(seed_hex, level=level)
            if palette is not None:
                suggestions.append(
                    ColorSuggestion(
                        type="adjust-both",
                        bg=palette.solid.bg,
                        fg=palette.solid.text.hex,
                        contrast=palette.solid.contrast,
                        reason="Auto-adjusted for optimal readability",
                        priority=len(suggestions) + 1,
                    )
                )
        return suggestions[:count]

    # Internals --------------------------------------------------
    @staticmethod
    def _options(options: Optional[GeneratorOptions], overrides: dict) -> GeneratorOptions:
        if options is None:
            return GeneratorOptions(**overrides)
        return replace(options, **overrides) if overrides else options

    @staticmethod
    def _key(seed_hex: str, opts: GeneratorOptions, surface: SurfaceReference) -> CacheKey:
        return CacheKey(
            seed=seed_hex,
            theme=opts.theme,
            level=opts.level,
            surface_signature=surface.signature,
            options_hash=opts.fingerprint(),
        )

    def _compute(
        self, seed_hex: str, opts: GeneratorOptions, surface: SurfaceReference
    ) -> Optional[GeneratedPalette]:
        start = perf_counter()
        seed = hex_to_oklch(seed_hex)
        hue = None if seed.c < ACHROMATIC_CHROMA else seed.h
        rng = SeededRandom(
            opts.deterministic_seed
            if opts.deterministic_seed is not None
            else hash_to_seed(seed_hex)
        )
        bias = 0.5 if opts.faithfulness is Faithfulness.WCAG_FIRST else DEFAULT_BIAS
        solid_target = opts.level.min_contrast

        solid = self._build_solid(seed_hex, seed, hue, surface, opts, bias, rng)
        subtle = self._build_subtle(seed, hue, surface, opts, bias, rng)

        if solid.contrast < solid_target - EPS or subtle.contrast < TEXT_AAA - EPS:
            _logger.warning(
                "no contract-satisfying palette for %s (%s/%s): solid %.2f:1, subtle %.2f:1",
                seed_hex,
                opts.theme.value,
                opts.level.value,
                solid.contrast,
                subtle.contrast,
            )
            return None

        ui_contrast = hex_contrast(subtle.bg, surface.hex) or 0.0
        headroom = HeadroomReport(
            subtle_text_vs_bg=calculate_headroom(subtle.contrast, TEXT_AAA),
            subtle_ui_vs_surface=calculate_headroom(ui_contrast, UI_MIN),
            solid_text_vs_bg=calculate_headroom(solid.contrast, solid_target),
        )
        contract = ContractStatus(
            subtle_aaa=subtle.contrast >= TEXT_AAA - EPS,
            subtle_ui3=ui_contrast >= UI_MIN - EPS,
            solid_aa=solid.contrast >= solid_target - EPS,
            headroom_ok=(
                headroom.solid_text_vs_bg >= DEFAULT_HEADROOM.solid.text_vs_bg - EPS
                and headroom.subtle_text_vs_bg >= DEFAULT_HEADROOM.subtle.text_vs_bg - EPS
                and headroom.subtle_ui_vs_surface >= DEFAULT_HEADROOM.subtle.ui_vs_surface - EPS
            ),
        )

        vibrant = (
            VibrantAccent(color=seed_hex, max_chroma=seed.c) if opts.include_vibrant else None
        )
        policy = get_policy_for_hue(hue)
        intervals = [r.interval for r in (solid, subtle) if r.interval is not None]
        solid_adj = solid.adjustments
        compute_ms = (perf_counter() - start) * 1000.0
        if compute_ms > settings.SLOW_GENERATION_WARN_MS:
            _logger.warning("palette generation for %s took %.1f ms", seed_hex, compute_ms)

        diagnostics = Diagnostics(
            feasible_interval_width=min(i.width for i in intervals),
            interval_was_narrow=any(i.is_narrow for i in intervals),
            interval_was_tiny=any(i.is_tiny for i in intervals),
            seed_was_extreme=any(i.is_tiny for i in intervals),
            chroma_compressed=solid_adj is not None and solid_adj.delta_c < -EPS,
            lightness_adjusted=solid_adj is not None and abs(solid_adj.delta_l) > EPS,
            subtle_used_neutral_tint=subtle.interval is not None and subtle.interval.was_adjusted,
            headroom=headroom,
            text_policy=policy.name if policy else None,
            faithfulness=opts.faithfulness,
            generator_version=settings.GENERATOR_VERSION,
            roles_version=settings.ROLES_VERSION,
            contract_schema_version=settings.CONTRACT_SCHEMA_VERSION,
            surface_signature=surface.signature,
            compute_time_ms=compute_ms,
        )
        return GeneratedPalette(
            seed=seed_hex,
            theme=opts.theme,
            level=opts.level,
            oklch=seed,
            solid=solid,
            subtle=subtle,
            contract=contract,
            diagnostics=diagnostics,
            pair_ids=PAIR_IDS,
            vibrant=vibrant,
        )

    def _build_solid(
        self,
        seed_hex: str,
        seed: Oklch,
        hue: Optional[float],
        surface: SurfaceReference,
        opts: GeneratorOptions,
        bias: float,
        rng: SeededRandom,
    ) -> RoleResult:
        theme = opts.theme
        target = opts.level.min_contrast
        policy_fg = choose_text_by_policy(seed_hex, hue, Role.SOLID)
        interval = calculate_feasible_interval(
            theme, surface.y, ContrastTargets(text=target, ui=None), policy_fg
        )
        working, handled = handle_narrow_interval(interval, seed)

        if opts.faithfulness is Faithfulness.STRICT and not handled.was_adjusted:
            seed_contrast = hex_contrast(seed_hex, policy_fg.hex) or 0.0
            if (
                handled.contains(relative_luminance(seed_hex))
                and seed_contrast >= target + DEFAULT_HEADROOM.solid.text_vs_bg
            ):
                hover = oklch_to_hex(
                    _clamp01(seed.l + SOLID_HOVER_DELTA[theme]), seed.c, seed.h
                )
                return RoleResult(
                    role=Role.SOLID,
                    bg=seed_hex,
                    text=policy_fg,
                    contrast=seed_contrast,
                    variant=hover,
                    adjustments=None,
                    interval=handled,
                )

        compression = 0.0 if opts.faithfulness is Faithfulness.STRICT else opts.max_chroma_compression
        chroma = working.c * (1.0 - compression)
        if handled.was_adjusted:
            y_target = handled.midpoint
        else:
            y_target = pick_y_target_with_headroom(
                handled, DEFAULT_HEADROOM.solid.text_vs_bg, bias, foreground=policy_fg
            )
            if y_target is None:
                y_target = handled.midpoint
        lightness, _, _ = solve_lightness(chroma, working.h, y_target, rng)
        lightness, bg_hex, _ = _fit_into_interval(lightness, chroma, working.h, handled)

        text = _resolve_text(bg_hex, hue, Role.SOLID, policy_fg, target)
        contrast = hex_contrast(bg_hex, text.hex) or 0.0
        hover = oklch_to_hex(_clamp01(lightness + SOLID_HOVER_DELTA[theme]), chroma, working.h)
        reason = (
            "Narrow interval: neutralized and centered"
            if handled.was_adjusted
            else f"Adjusted for {target}:1 contrast with {text.value} text"
        )
        return RoleResult(
            role=Role.SOLID,
            bg=bg_hex,
            text=text,
            contrast=contrast,
            variant=hover,
            adjustments=_adjustments(seed, lightness, chroma, reason),
            interval=handled,
        )

    def _build_subtle(
        self,
        seed: Oklch,
        hue: Optional[float],
        surface: SurfaceReference,
        opts: GeneratorOptions,
        bias: float,
        rng: SeededRandom,
    ) -> RoleResult:
        theme = opts.theme
        fg, interval = choose_feasible_foreground(
            theme, surface.y, ContrastTargets(text=TEXT_AAA, ui=UI_MIN), rng
        )
        working, handled = handle_narrow_interval(interval, seed)
        if handled.was_adjusted:
            y_target = handled.midpoint
        else:
            y_target = pick_y_target_with_headroom(
                handled, DEFAULT_HEADROOM.subtle.text_vs_bg, bias, foreground=fg
            )
            if y_target is None:
                y_target = handled.midpoint

        chroma = min(working.c, SUBTLE_MAX_CHROMA)
        lightness, _, _ = solve_lightness(chroma, working.h, y_target, rng)
        lightness, bg_hex, _ = _fit_into_interval(lightness, chroma, working.h, handled)

        text = _resolve_text(bg_hex, hue, Role.SUBTLE, fg, TEXT_AAA)
        contrast = hex_contrast(bg_hex, text.hex) or 0.0
        border = oklch_to_hex(_clamp01(lightness + SUBTLE_BORDER_DELTA[theme]), chroma, working.h)
        reason = (
            "Narrow interval: tinted neutral for surface separation"
            if handled.was_adjusted
            else "Reduced chroma for subtle background"
        )
        return RoleResult(
            role=Role.SUBTLE,
            bg=bg_hex,
            text=text,
            contrast=contrast,
            variant=border,
            adjustments=_adjustments(seed, lightness, chroma, reason),
            interval=handled,
        )


# Default engine handle ---------------------------------------------------

_default_engine: Optional[PaletteEngine] = None
_default_lock = Lock()


def default_engine() -> PaletteEngine:
    """Lazily created engine used by the module level helpers."""
    global _default_engine
    with _default_lock:
        if _default_engine is None:
            _default_engine = PaletteEngine()
        return _default_engine


def reset_default_engine(engine: Optional[PaletteEngine] = None) -> PaletteEngine:
    """Replace the default engine (a fresh one when ``engine`` is None)."""
    global _default_engine
    with _default_lock:
        _default_engine = engine if engine is not None else PaletteEngine()
        return _default_engine


def generate_palette(
    seed: str,
    options: Optional[GeneratorOptions] = None,
    *,
    engine: Optional[PaletteEngine] = None,
    **overrides,
) -> Optional[GeneratedPalette]:
    return (engine or default_engine()).generate_palette(seed, options, **overrides)


preview_palette = generate_palette


def get_role_tokens(
    seed: str,
    options: Optional[GeneratorOptions] = None,
    *,
    engine: Optional[PaletteEngine] = None,
    **overrides,
) -> Optional[Dict[str, str]]:
    return (engine or default_engine()).get_role_tokens(seed, options, **overrides)


def generate_multi_seed_palette(
    seeds: Mapping[str, str],
    options: Optional[GeneratorOptions] = None,
    *,
    engine: Optional[PaletteEngine] = None,
    **overrides,
) -> MultiSeedPalette:
    return (engine or default_engine()).generate_multi_seed_palette(seeds, options, **overrides)


def generate_suggestions(
    seed: str,
    *,
    level: ConformanceLevel = ConformanceLevel.AA,
    count: int = 3,
    preserve_hue: bool = True,
    engine: Optional[PaletteEngine] = None,
) -> List[ColorSuggestion]:
    return (engine or default_engine()).generate_suggestions(
        seed, level=level, count=count, preserve_hue=preserve_hue
    )
