"""Palette cache.

A size-bound Least-Recently-Used cache for `GeneratedPalette` instances. A hit
returns the *same* object that was stored so callers can compare palettes by
identity.

Design goals:
 - O(1) insert / lookup / eviction using OrderedDict.
 - Explicit, constructible object (no module singleton) so tests can use
   isolated caches.
 - Thread-safe: an RLock serializes access so LRU order and counters stay
   consistent; concurrent computations of the same key are coalesced (first
   caller computes, the others wait for its result).
 - Entries whose palette does not match their key are treated as corruption:
   the whole cache is cleared instead of serving a possibly wrong palette.
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Dict, List, Mapping, Optional

from config.settings import PALETTE_CACHE_CAPACITY

from .models import ConformanceLevel, GeneratedPalette, Theme

__all__ = [
    "CacheKey",
    "CacheStats",
    "PaletteCache",
    "compute_surface_signature",
    "hash_options",
]

_logger = logging.getLogger(__name__)


def compute_surface_signature(surface_y: float, theme: Theme) -> str:
    """Fingerprint of the surface luminance and theme (e.g. ``surf_0.9387_light``)."""
    return f"surf_{surface_y:.4f}_{Theme(theme).value}"


def hash_options(options: Mapping[str, Any]) -> str:
    """Stable short hash of an option mapping (key order independent)."""
    payload = json.dumps(options, sort_keys=True, default=str)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()[:12]


@dataclass(frozen=True)
class CacheKey:
    seed: str
    theme: Theme
    level: ConformanceLevel
    surface_signature: str
    options_hash: str


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    evictions: int
    corruptions: int
    coalesced: int
    size: int
    capacity: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class _InFlight:
    def __init__(self) -> None:
        self.done = threading.Event()
        self.result: Optional[GeneratedPalette] = None
        self.error: Optional[BaseException] = None


def _matches(key: CacheKey, palette: GeneratedPalette) -> bool:
    return (
        palette.seed == key.seed
        and palette.theme == key.theme
        and palette.level == key.level
        and palette.diagnostics.surface_signature == key.surface_signature
    )


class PaletteCache:
    """LRU cache for generated palettes.

    Parameters
    ----------
    capacity : int
        Maximum number of palettes retained. Inserting beyond this evicts the
        least recently used entry. Values < 1 are clamped to 1.
    """

    def __init__(self, capacity: int = PALETTE_CACHE_CAPACITY) -> None:
        self.capacity = max(1, int(capacity))
        self._lock = RLock()
        self._store: "OrderedDict[CacheKey, GeneratedPalette]" = OrderedDict()
        self._in_flight: Dict[CacheKey, _InFlight] = {}
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._corruptions = 0
        self._coalesced = 0

    # Public API -------------------------------------------------
    def get(self, key: CacheKey) -> Optional[GeneratedPalette]:
        """Return the cached palette and mark it most recently used."""
        with self._lock:
            palette = self._lookup(key)
            if palette is None:
                self._misses += 1
            else:
                self._hits += 1
            return palette

    def put(self, key: CacheKey, palette: GeneratedPalette) -> None:
        with self._lock:
            if key in self._store:
                self._store.move_to_end(key, last=True)
                self._store[key] = palette
                return
            self._store[key] = palette
            while len(self._store) > self.capacity:
                evicted, _ = self._store.popitem(last=False)
                self._evictions += 1
                _logger.debug("palette cache evicted %s/%s", evicted.seed, evicted.theme.value)

    def get_or_compute(
        self, key: CacheKey, compute: Callable[[], Optional[GeneratedPalette]]
    ) -> Optional[GeneratedPalette]:
        """Return the cached palette or compute it once for all concurrent callers.

        ``None`` results are handed to waiting callers but never stored.
        """
        with self._lock:
            palette = self._lookup(key)
            if palette is not None:
                self._hits += 1
                return palette
            pending = self._in_flight.get(key)
            owner = pending is None
            if owner:
                self._misses += 1
                pending = _InFlight()
                self._in_flight[key] = pending
            else:
                self._coalesced += 1
        if not owner:
            pending.done.wait()
            if pending.error is not None:
                raise pending.error
            return pending.result

        try:
            palette = compute()
        except BaseException as exc:  # interrupts too
            pending.error = exc
            raise
        else:
            pending.result = palette
            if palette is not None:
                self.put(key, palette)
            return palette
        finally:
            with self._lock:
                self._in_flight.pop(key, None)
            pending.done.set()

    def invalidate(self, key: CacheKey) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                corruptions=self._corruptions,
                coalesced=self._coalesced,
                size=len(self._store),
                capacity=self.capacity,
            )

    def keys(self) -> List[CacheKey]:
        with self._lock:
            return list(self._store.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    # Internals --------------------------------------------------
    def _lookup(self, key: CacheKey) -> Optional[GeneratedPalette]:
        palette = self._store.get(key)
        if palette is None:
            return None
        if not _matches(key, palette):
            self._corruptions += 1
            _logger.error(
                "palette cache entry for %s does not match its key; clearing %d entries",
                key.seed,
                len(self._store),
            )
            self._store.clear()
            return None
        self._store.move_to_end(key, last=True)
        return palette
