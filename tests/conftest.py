"""Pytest configuration for path tracer tests.

Shared fixtures: a seeded random source and small scenes that render in a
fraction of a second.
"""

import pytest

from core.random_source import RandomSource
from core.vector import Color, Point3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """Seeded random source so sampling tests are repeatable."""
    return RandomSource(1234)


@pytest.fixture
def grey():
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def unit_sphere_world(grey):
    """A single diffuse unit sphere at the origin."""
    return HittableList([Sphere(Point3(0.0, 0.0, 0.0), 1.0, grey)])


@pytest.fixture
def empty_world():
    return HittableList()
