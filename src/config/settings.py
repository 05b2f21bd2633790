"""Global configuration and constants for the palette engine."""

from __future__ import annotations

import os
from typing import Final

# Theme surfaces are brand tokens supplied from outside the engine. The defaults
# mirror the stock surface roles: light ~ oklch(0.98 0 0), dark ~ oklch(0.22 0 0).
DEFAULT_SURFACE_LIGHT: Final = os.environ.get("PALETTE_SURFACE_LIGHT", "#F8F8F8")
DEFAULT_SURFACE_DARK: Final = os.environ.get("PALETTE_SURFACE_DARK", "#1B1B1B")

PALETTE_CACHE_CAPACITY: Final = int(os.environ.get("PALETTE_CACHE_CAPACITY", "100"))
SLOW_GENERATION_WARN_MS: Final = float(os.environ.get("PALETTE_SLOW_WARN_MS", "50.0"))

GENERATOR_VERSION: Final = "v2.0.0"
ROLES_VERSION: Final = "v1.0.0"
CONTRACT_SCHEMA_VERSION: Final = "1"

# PRNG seed used by the role token wrapper so repeated calls stay byte-identical
ROLE_TOKENS_DETERMINISTIC_SEED: Final = 42
