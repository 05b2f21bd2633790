import pytest

from palette import PaletteCache, PaletteEngine, reset_default_engine


@pytest.fixture
def engine():
    """Engine with a private cache so tests never share palettes."""
    return PaletteEngine(cache=PaletteCache())


@pytest.fixture(autouse=True)
def _fresh_default_engine():
    # module level helpers delegate to the default engine; isolate its cache
    reset_default_engine()
    yield
    reset_default_engine()
