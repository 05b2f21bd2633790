"""Tests for the palette generator (contrast contract, determinism, roles)."""

import pytest

from palette import (
    ConformanceLevel,
    Faithfulness,
    Foreground,
    GeneratorOptions,
    PaletteEngine,
    Theme,
    generate_palette,
    preview_palette,
)
from palette import generator
from palette.cache import compute_surface_signature
from palette.color_space import contrast_ratio, hex_to_oklch, relative_luminance
from palette.determinism import SeededRandom
from palette.interval_guard import EPS, handle_narrow_interval

SEEDS = [
    "#FF5733",
    "#3B82F6",
    "#FFFF00",
    "#002B5C",
    "#FFF9C4",
    "#10B981",
    "#FF00FF",
    "#00FFFF",
    "#7F1D1D",
    "#000000",
    "#FFFFFF",
    "#808080",
]


def _stable(palette):
    return (palette.solid, palette.subtle, palette.vibrant, palette.contract, palette.oklch)


@pytest.mark.parametrize("bad", ["not-a-color", "#12", "", "#GGGGGG"])
def test_invalid_seed_returns_none(engine, bad):
    assert engine.generate_palette(bad) is None
    assert len(engine.cache) == 0


def test_short_seed_is_normalized(engine):
    palette = engine.generate_palette("#f00")
    assert palette.seed == "#FF0000"


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("theme", ["light", "dark"])
@pytest.mark.parametrize("level", ["AA", "AAA"])
def test_text_contrast_contract(engine, seed, theme, level):
    palette = engine.generate_palette(seed, theme=theme, level=level)
    assert palette is not None
    minimum = ConformanceLevel(level).min_contrast
    assert palette.solid.contrast >= minimum - EPS
    assert palette.subtle.contrast >= 7.0 - EPS
    assert palette.solid.contrast == pytest.approx(
        contrast_ratio(palette.solid.bg, palette.solid.text.hex)
    )
    assert palette.subtle.contrast == pytest.approx(
        contrast_ratio(palette.subtle.bg, palette.subtle.text.hex)
    )
    assert palette.contract.solid_aa and palette.contract.subtle_aaa
    assert palette.contract.subtle_ui3


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("theme", ["light", "dark"])
def test_generation_is_deterministic_across_engines(seed, theme):
    a = PaletteEngine().generate_palette(seed, theme=theme, level="AAA")
    b = PaletteEngine().generate_palette(seed, theme=theme, level="AAA")
    assert a is not b
    assert _stable(a) == _stable(b)


def test_repeat_call_hits_cache(engine):
    assert engine.generate_palette("#10B981") is engine.generate_palette("#10B981")


def test_theme_changes_surface_signature(engine):
    light = engine.generate_palette("#10B981", theme="light")
    dark = engine.generate_palette("#10B981", theme="dark")
    assert light is not dark
    assert light.diagnostics.surface_signature.endswith("_light")
    assert dark.diagnostics.surface_signature.endswith("_dark")


@pytest.mark.parametrize("theme", ["light", "dark"])
def test_yellow_gets_black_solid_text(engine, theme):
    palette = engine.generate_palette("#FFFF00", theme=theme)
    assert palette.solid.text is Foreground.BLACK
    assert palette.diagnostics.text_policy == "Yellow/Amber/Lime"


@pytest.mark.parametrize("theme", ["light", "dark"])
def test_blue_gets_white_solid_text(engine, theme):
    palette = engine.generate_palette("#3B82F6", theme=theme)
    assert palette.solid.text is Foreground.WHITE


def test_navy_light_contract(engine):
    palette = engine.generate_palette("#002B5C", theme="light", level="AA")
    assert palette.contract.solid_aa
    assert palette.contract.subtle_aaa


def test_pale_yellow_dark_passes_everything(engine):
    palette = engine.generate_palette("#FFF9C4", theme="dark", level="AA")
    assert palette.contract.all_passed
    assert palette.contract.headroom_ok


def test_vibrant_is_seed_identity(engine):
    palette = engine.generate_palette("#FF00FF")
    assert palette.vibrant.color == "#FF00FF"
    assert palette.vibrant.warning == "NO_TEXT_ALLOWED"
    assert palette.vibrant.role == "vibrant-accent"
    assert engine.generate_palette("#FF00FF", include_vibrant=False).vibrant is None


def test_hover_and_border_move_away_from_surface(engine):
    light = engine.generate_palette("#3B82F6", theme="light")
    assert relative_luminance(light.solid.hover) < relative_luminance(light.solid.bg)
    assert relative_luminance(light.subtle.variant) < relative_luminance(light.subtle.bg)
    dark = engine.generate_palette("#3B82F6", theme="dark")
    assert relative_luminance(dark.solid.hover) > relative_luminance(dark.solid.bg)
    assert relative_luminance(dark.subtle.variant) > relative_luminance(dark.subtle.bg)


def test_subtle_hue_follows_seed(engine):
    palette = engine.generate_palette("#3B82F6", theme="light")
    seed_hue = palette.oklch.h
    subtle = hex_to_oklch(palette.subtle.bg)
    assert subtle.c <= 0.12 + 0.01
    assert abs(subtle.h - seed_hue) < 10.0


def test_chroma_compression_is_reported(engine):
    palette = engine.generate_palette("#FF5733")
    assert palette.diagnostics.chroma_compressed
    assert palette.solid.adjustments is not None
    assert palette.solid.adjustments.delta_c < 0
    uncompressed = engine.generate_palette("#FF5733", max_chroma_compression=0.0)
    assert not uncompressed.diagnostics.chroma_compressed


def test_invalid_compression_rejected(engine):
    with pytest.raises(ValueError):
        engine.generate_palette("#FF5733", max_chroma_compression=1.5)


def test_invalid_theme_rejected(engine):
    with pytest.raises(ValueError):
        engine.generate_palette("#FF5733", theme="sepia")


def test_strict_keeps_seed_that_already_passes(engine):
    strict = engine.generate_palette("#1E3A8A", faithfulness="strict")
    assert strict.solid.bg == "#1E3A8A"
    assert strict.solid.adjustments is None
    assert strict.diagnostics.faithfulness is Faithfulness.STRICT
    balanced = engine.generate_palette("#1E3A8A")
    assert balanced.solid.bg != "#1E3A8A"


def test_wcag_first_pushes_contrast_further(engine):
    balanced = engine.generate_palette("#FFFF00")
    wcag_first = engine.generate_palette("#FFFF00", faithfulness="wcag-first")
    assert wcag_first.solid.contrast > balanced.solid.contrast


def test_narrow_surface_interval_neutralizes_subtle(engine):
    surface = "#6A6A6A"
    palette = engine.generate_palette("#FF5733", theme="light", surface=surface)
    assert palette is not None
    assert palette.diagnostics.interval_was_narrow
    assert palette.diagnostics.subtle_used_neutral_tint
    assert palette.subtle.interval.was_adjusted
    assert contrast_ratio(palette.subtle.bg, surface) >= 3.0 - EPS
    assert palette.subtle.contrast >= 7.0 - EPS
    assert hex_to_oklch(palette.subtle.bg).c <= 0.10 + 0.03
    assert palette.diagnostics.surface_signature == compute_surface_signature(
        relative_luminance(surface), Theme.LIGHT
    )


def test_neutralized_role_is_stable_when_reapplied(engine):
    palette = engine.generate_palette("#FF5733", theme="light", surface="#6A6A6A")
    interval = palette.subtle.interval
    neutral = hex_to_oklch(palette.subtle.bg)
    again, again_interval = handle_narrow_interval(interval, neutral)
    assert again_interval == interval
    assert again.h == neutral.h
    assert again.l ** 3 == pytest.approx(interval.midpoint)
    assert abs(relative_luminance(palette.subtle.bg) - interval.midpoint) < 0.02


def test_neutralized_background_as_seed_keeps_its_chroma(engine):
    first = engine.generate_palette("#FF5733", theme="light", surface="#6A6A6A")
    again = engine.generate_palette(first.subtle.bg, theme="light", surface="#6A6A6A")
    assert again.diagnostics.subtle_used_neutral_tint
    first_c = hex_to_oklch(first.subtle.bg).c
    assert hex_to_oklch(again.subtle.bg).c >= first_c - 0.02


def test_surface_too_dark_reports_soft_failure(engine):
    palette = engine.generate_palette("#3B82F6", theme="light", surface="#4D4D4D")
    assert palette is not None
    assert palette.diagnostics.seed_was_extreme
    assert not palette.contract.subtle_ui3
    assert not palette.contract.all_passed
    assert palette.subtle.contrast >= 7.0 - EPS


def test_invalid_surface_override_returns_none(engine):
    assert engine.generate_palette("#3B82F6", surface="paper") is None


def test_engine_surfaces_override_defaults():
    engine = PaletteEngine(surfaces={"light": "#FFFFFF"})
    palette = engine.generate_palette("#3B82F6")
    assert palette.diagnostics.surface_signature == "surf_1.0000_light"


def test_achromatic_seed_has_no_policy(engine):
    palette = engine.generate_palette("#808080")
    assert palette.diagnostics.text_policy is None


def test_diagnostics_versions_and_pair_ids(engine):
    palette = engine.generate_palette("#10B981")
    d = palette.diagnostics
    assert d.generator_version == "v2.0.0"
    assert d.roles_version == "v1.0.0"
    assert d.contract_schema_version == "1"
    assert d.compute_time_ms >= 0.0
    assert dict(palette.pair_ids) == {"subtle": "primary:subtle:02", "solid": "primary:solid:10"}


def test_options_object_and_overrides(engine):
    options = GeneratorOptions(theme="dark", level="AAA")
    palette = engine.generate_palette("#10B981", options)
    assert palette.theme is Theme.DARK
    assert palette.level is ConformanceLevel.AAA
    assert engine.generate_palette("#10B981", options, include_vibrant=False).vibrant is None


def test_module_helpers_use_default_engine():
    palette = generate_palette("#FF5733", theme="dark")
    assert palette is generate_palette("#FF5733", theme="dark")
    assert preview_palette("#FF5733", theme="dark") is palette


def test_deterministic_seed_gets_its_own_cache_entry(engine):
    default_key = engine.cache_key("#3B82F6")
    key_one = engine.cache_key("#3B82F6", deterministic_seed=1)
    key_two = engine.cache_key("#3B82F6", deterministic_seed=2)
    assert len({default_key, key_one, key_two}) == 3
    one = engine.generate_palette("#3B82F6", deterministic_seed=1)
    two = engine.generate_palette("#3B82F6", deterministic_seed=2)
    assert one is not two
    assert engine.generate_palette("#3B82F6", deterministic_seed=1) is one
    assert len(engine.cache) == 2


@pytest.mark.parametrize("seed", SEEDS)
def test_deterministic_seed_is_reproducible_across_engines(seed):
    a = PaletteEngine().generate_palette(seed, theme="dark", deterministic_seed=7)
    b = PaletteEngine().generate_palette(seed, theme="dark", deterministic_seed=7)
    assert _stable(a) == _stable(b)


def _split_luminance(lightness, c, h):
    # two renderings exactly 0.1 either side of a 0.5 target
    return ("#111111", 0.4) if lightness < 0.5 else ("#EEEEEE", 0.6)


def test_lightness_tie_is_broken_by_seeded_rng(monkeypatch):
    monkeypatch.setattr(generator, "_luminance_at", _split_luminance)
    assert generator.solve_lightness(0.1, 200.0, 0.5)[1] == "#111111"
    assert generator.solve_lightness(0.1, 200.0, 0.5, SeededRandom(0))[1] == "#111111"
    assert generator.solve_lightness(0.1, 200.0, 0.5, SeededRandom(2**31))[1] == "#EEEEEE"
    for seed in (0, 2**31, 12345):
        first = generator.solve_lightness(0.1, 200.0, 0.5, SeededRandom(seed))
        again = generator.solve_lightness(0.1, 200.0, 0.5, SeededRandom(seed))
        assert first == again


def test_hover_and_border_belong_to_their_roles(engine):
    palette = engine.generate_palette("#10B981")
    assert palette.solid.hover == palette.solid.variant
    assert palette.solid.border is None
    assert palette.subtle.border == palette.subtle.variant
    assert palette.subtle.hover is None
