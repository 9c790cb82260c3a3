"""
Pytest configuration and shared fixtures.

Provides seeded random sources, bit-width policies and generators used
across the test suite, and isolates configuration loading from the
developer's real environment.
"""

import random

import pytest

from lseq.core.base import DoubleBase
from lseq.core.config import clear_cache
from lseq.core.generator import LSEQGenerator

# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config lookups at an empty temp directory and reset the cache."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("LSEQ_INITIAL_WIDTH", raising=False)
    monkeypatch.delenv("LSEQ_BOUNDARY", raising=False)
    monkeypatch.chdir(tmp_path)
    clear_cache()
    yield
    clear_cache()


# ==============================================================================
# Generator Fixtures
# ==============================================================================


@pytest.fixture
def rng():
    """Seeded random source for reproducible runs."""
    return random.Random(1234)


@pytest.fixture
def base():
    """Default bit-width policy (initial width 5)."""
    return DoubleBase()


@pytest.fixture
def generator(base, rng):
    """Generator with default boundary and a seeded random source."""
    return LSEQGenerator(base, 10, rng=rng)
