"""Palette generation CLI.

Generates the accessible role palette for a seed color and prints either a
human-readable summary, the full palette as JSON (``--json``) or the flat role
token mapping (``--tokens``).

Exit code 0 on success, 1 when no palette could be produced (invalid seed or
surface, or no contract-satisfying solution).

Example:
  python -m cli.generate_palette "#3B82F6" --theme dark --level AAA --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict

from palette import GeneratedPalette, PaletteEngine


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate an accessible color palette from a seed color")
    p.add_argument("seed", help="Seed color (#RGB or #RRGGBB, leading # optional)")
    p.add_argument("--theme", choices=["light", "dark"], default="light")
    p.add_argument("--level", choices=["AA", "AAA"], default="AA", help="Solid text conformance level")
    p.add_argument("--surface", help="Override the page surface color for the chosen theme")
    p.add_argument(
        "--faithfulness",
        choices=["strict", "balanced", "wcag-first"],
        default="balanced",
        help="How closely the solid role tracks the seed",
    )
    p.add_argument("--no-vibrant", action="store_true", help="Omit the vibrant accent")
    output = p.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Emit the full palette as JSON")
    output.add_argument("--tokens", action="store_true", help="Emit the flat role token mapping as JSON")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def palette_to_dict(palette: GeneratedPalette) -> Dict[str, Any]:
    payload = asdict(palette)
    payload["contract"]["all_passed"] = palette.contract.all_passed
    return payload


def _print_summary(palette: GeneratedPalette) -> None:
    print(f"Seed: {palette.seed} ({palette.theme.value}, {palette.level.value})")
    for result in (palette.solid, palette.subtle):
        print(
            f"  {result.role.value:<7} bg={result.bg} text={result.text.hex} "
            f"contrast={result.contrast:.2f}:1 variant={result.variant}"
        )
    if palette.vibrant is not None:
        print(f"  vibrant bg={palette.vibrant.color} ({palette.vibrant.warning})")
    status = "PASS" if palette.contract.all_passed else "PARTIAL"
    print(f"Contract: {status}")
    d = palette.diagnostics
    print(
        f"  interval width={d.feasible_interval_width:.4f} narrow={d.interval_was_narrow} "
        f"policy={d.text_policy or '-'} time={d.compute_time_ms:.1f}ms"
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    engine = PaletteEngine()
    options = dict(
        theme=args.theme,
        level=args.level,
        surface=args.surface,
        faithfulness=args.faithfulness,
        include_vibrant=not args.no_vibrant,
    )
    if args.tokens:
        tokens = engine.get_role_tokens(args.seed, **options)
        if tokens is None:
            print(f"Could not generate palette for seed: {args.seed}", file=sys.stderr)
            return 1
        print(json.dumps(tokens, indent=2))
        return 0

    palette = engine.generate_palette(args.seed, **options)
    if palette is None:
        print(f"Could not generate palette for seed: {args.seed}", file=sys.stderr)
        return 1
    if args.json:
        print(json.dumps(palette_to_dict(palette), ensure_ascii=False, indent=2))
    else:
        _print_summary(palette)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
