"""Tests for the LRU palette cache (eviction, corruption guard, coalescing)."""

import threading
import time

import pytest

from palette.cache import CacheKey, PaletteCache, compute_surface_signature, hash_options
from palette.generator import PaletteEngine
from palette.models import ConformanceLevel, Theme


def test_surface_signature_format_and_theme_split():
    assert compute_surface_signature(0.93869, Theme.LIGHT) == "surf_0.9387_light"
    assert compute_surface_signature(0.5, Theme.LIGHT) != compute_surface_signature(0.5, Theme.DARK)


def test_hash_options_is_order_independent():
    assert hash_options({"a": 1, "b": True}) == hash_options({"b": True, "a": 1})
    assert hash_options({"a": 1}) != hash_options({"a": 2})
    assert len(hash_options({})) == 12


def test_hit_returns_same_instance():
    cache = PaletteCache()
    engine = PaletteEngine(cache=cache)
    first = engine.generate_palette("#3B82F6")
    second = engine.generate_palette("#3b82f6")
    assert first is second
    stats = cache.stats()
    assert stats.hits == 1
    assert stats.misses == 1
    assert stats.hit_rate == pytest.approx(0.5)


def test_lru_eviction_drops_least_recently_used():
    cache = PaletteCache(capacity=2)
    engine = PaletteEngine(cache=cache)
    engine.generate_palette("#FF0000")
    engine.generate_palette("#00FF00")
    engine.generate_palette("#FF0000")  # touch
    engine.generate_palette("#0000FF")
    assert engine.cache_key("#FF0000") in cache
    assert engine.cache_key("#00FF00") not in cache
    assert len(cache) == 2
    assert cache.stats().evictions == 1


def test_capacity_is_at_least_one():
    assert PaletteCache(capacity=0).capacity == 1


def test_none_results_are_not_stored():
    cache = PaletteCache()
    key = CacheKey("#000000", Theme.LIGHT, ConformanceLevel.AA, "surf_0.9387_light", "x")
    assert cache.get_or_compute(key, lambda: None) is None
    assert len(cache) == 0


def test_mismatched_entry_clears_cache():
    cache = PaletteCache()
    engine = PaletteEngine(cache=cache)
    red_key = engine.cache_key("#FF0000")
    green = engine.generate_palette("#00FF00")
    cache.put(red_key, green)
    assert cache.get(red_key) is None
    assert len(cache) == 0
    assert cache.stats().corruptions == 1
    # regenerated palette is correct again
    assert engine.generate_palette("#FF0000").seed == "#FF0000"


def test_invalidate_and_clear():
    cache = PaletteCache()
    engine = PaletteEngine(cache=cache)
    engine.generate_palette("#FF0000")
    engine.generate_palette("#00FF00")
    cache.invalidate(engine.cache_key("#FF0000"))
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0
    assert cache.keys() == []


def test_concurrent_requests_share_one_computation():
    cache = PaletteCache()
    key = PaletteEngine(cache=cache).cache_key("#123456")
    palette = PaletteEngine(cache=PaletteCache()).generate_palette("#123456")
    started = threading.Event()
    release = threading.Event()
    calls = []
    results = []

    def slow_compute():
        calls.append("owner")
        started.set()
        release.wait(5)
        return palette

    def second_compute():
        calls.append("waiter")
        return palette

    owner = threading.Thread(target=lambda: results.append(cache.get_or_compute(key, slow_compute)))
    owner.start()
    assert started.wait(5)
    waiter = threading.Thread(target=lambda: results.append(cache.get_or_compute(key, second_compute)))
    waiter.start()
    deadline = time.monotonic() + 5
    while cache.stats().coalesced < 1 and time.monotonic() < deadline:
        time.sleep(0.01)
    release.set()
    owner.join(5)
    waiter.join(5)

    assert calls == ["owner"]
    assert len(results) == 2
    assert all(r is palette for r in results)
    assert cache.stats().coalesced == 1


def test_failed_computation_is_not_cached():
    cache = PaletteCache()
    engine = PaletteEngine(cache=cache)
    key = engine.cache_key("#123456")
    palette = engine.generate_palette("#123456")
    cache.clear()

    def boom():
        raise RuntimeError("generation failed")

    with pytest.raises(RuntimeError):
        cache.get_or_compute(key, boom)
    assert cache.get_or_compute(key, lambda: palette) is palette


class _Abort(BaseException):
    pass


def test_waiter_sees_interrupt_raised_by_owner():
    cache = PaletteCache()
    engine = PaletteEngine(cache=cache)
    key = engine.cache_key("#123456")
    palette = engine.generate_palette("#123456")
    cache.clear()
    started = threading.Event()
    release = threading.Event()
    abort = _Abort()
    owner_errors = []
    waiter_outcome = []

    def aborted_compute():
        started.set()
        release.wait(5)
        raise abort

    def run_owner():
        try:
            cache.get_or_compute(key, aborted_compute)
        except BaseException as exc:
            owner_errors.append(exc)

    def run_waiter():
        try:
            waiter_outcome.append(cache.get_or_compute(key, lambda: palette))
        except BaseException as exc:
            waiter_outcome.append(exc)

    owner = threading.Thread(target=run_owner)
    owner.start()
    assert started.wait(5)
    waiter = threading.Thread(target=run_waiter)
    waiter.start()
    deadline = time.monotonic() + 5
    while cache.stats().coalesced < 1 and time.monotonic() < deadline:
        time.sleep(0.01)
    release.set()
    owner.join(5)
    waiter.join(5)

    assert owner_errors == [abort]
    assert waiter_outcome == [abort]
    assert len(cache) == 0
    assert cache.get_or_compute(key, lambda: palette) is palette
