"""
Shared test fixtures for the wonderlights test suite.

These fixtures provide common coordinate spaces, RNGs and stores that many
test files need. Local fixtures in individual test files override these
(pytest convention).
"""

import math
import random

import pytest

from wonderlights.config import EffectConfigStore
from wonderlights.gift_coords import CoordinateSpace


# ---------------------------------------------------------------------------
# Randomness
# ---------------------------------------------------------------------------

@pytest.fixture
def rng():
    """Seeded RNG so every effect run is reproducible."""
    return random.Random(12345)


# ---------------------------------------------------------------------------
# Raw coordinates
# ---------------------------------------------------------------------------

def make_cone_points(count: int = 150, height: float = 200.0, radius: float = 50.0):
    """
    Raw positions of lights wound in a spiral around a cone, like a real tree.

    This is a plain function (not a fixture) so tests can call it inline
    with their own sizes.  Importable as:

        from conftest import make_cone_points
    """
    points = []
    for i in range(count):
        t = i / count
        r = radius * (1.0 - t)
        angle = i * 0.7
        points.append((r * math.cos(angle) + 300.0, r * math.sin(angle) - 40.0, height * t + 15.0))
    return points


def make_grid_points(size: int = 3, spacing: float = 1.0):
    """Raw positions of a size x size x size cube of lights."""
    return [
        (x * spacing, y * spacing, z * spacing)
        for z in range(size)
        for y in range(size)
        for x in range(size)
    ]


# ---------------------------------------------------------------------------
# Coordinate spaces
# ---------------------------------------------------------------------------

@pytest.fixture
def cone_coords():
    """A deterministic cone-shaped tree of 150 lights."""
    return CoordinateSpace.from_raw(make_cone_points())


@pytest.fixture
def grid_coords():
    """27 lights on a 3x3x3 grid, normalized to x, y in {-1, 0, 1}, z in {0, 1, 2}."""
    return CoordinateSpace.from_raw(make_grid_points())


@pytest.fixture
def line_coords():
    """5 lights in a row along x."""
    return CoordinateSpace.from_raw([(float(i), 0.0, 0.0) for i in range(5)])


@pytest.fixture
def eight_coords():
    """8 lights in a row along x."""
    return CoordinateSpace.from_raw([(float(i), 0.0, 0.0) for i in range(8)])


# ---------------------------------------------------------------------------
# Config storage
# ---------------------------------------------------------------------------

@pytest.fixture
def store(tmp_path):
    """Effect config store writing into a temp directory."""
    return EffectConfigStore(tmp_path / "config")
