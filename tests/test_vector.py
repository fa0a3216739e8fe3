"""Unit tests for Vector3, Ray and Interval.

Tests cover:
- Arithmetic, dot and cross products
- Normalization and near-zero detection
- Ray evaluation
- Open and closed interval membership
"""

import math

import pytest

from core.interval import Interval
from core.ray import Ray
from core.vector import Vector3


class TestVector3:
    """Tests for vector arithmetic."""

    def test_add_sub_neg(self):
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(0.5, -1.0, 2.0)
        assert a + b == Vector3(1.5, 1.0, 5.0)
        assert a - b == Vector3(0.5, 3.0, 1.0)
        assert -a == Vector3(-1.0, -2.0, -3.0)

    def test_scalar_and_elementwise_multiplication(self):
        a = Vector3(1.0, 2.0, 3.0)
        assert a * 2 == Vector3(2.0, 4.0, 6.0)
        assert 2.0 * a == Vector3(2.0, 4.0, 6.0)
        assert a * Vector3(0.5, 0.5, 2.0) == Vector3(0.5, 1.0, 6.0)
        assert a / 2 == Vector3(0.5, 1.0, 1.5)

    def test_dot_and_cross(self):
        x = Vector3(1.0, 0.0, 0.0)
        y = Vector3(0.0, 1.0, 0.0)
        assert x.dot(y) == 0.0
        assert x.cross(y) == Vector3(0.0, 0.0, 1.0)
        assert y.cross(x) == Vector3(0.0, 0.0, -1.0)

    def test_normalize(self):
        v = Vector3(3.0, 4.0, 0.0).normalize()
        assert v.length() == pytest.approx(1.0)
        assert v.x == pytest.approx(0.6)
        assert Vector3(0.0, 0.0, 0.0).normalize() == Vector3(0.0, 0.0, 0.0)

    def test_near_zero(self):
        assert Vector3(1e-9, -1e-9, 0.0).near_zero()
        assert not Vector3(1e-9, 1e-7, 0.0).near_zero()

    def test_iteration(self):
        assert list(Vector3(1.0, 2.0, 3.0)) == [1.0, 2.0, 3.0]


class TestRay:
    """Tests for ray evaluation."""

    def test_at(self):
        ray = Ray(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 2.0, 0.0))
        assert ray.at(0.0) == Vector3(1.0, 0.0, 0.0)
        assert ray.at(1.5) == Vector3(1.0, 3.0, 0.0)


class TestInterval:
    """Tests for interval membership."""

    def test_surrounds_is_open(self):
        interval = Interval(0.0, 1.0)
        assert interval.surrounds(0.5)
        assert not interval.surrounds(0.0)
        assert not interval.surrounds(1.0)

    def test_contains_is_closed(self):
        interval = Interval(0.0, 1.0)
        assert interval.contains(0.0)
        assert interval.contains(1.0)
        assert not interval.contains(1.1)

    def test_clamp(self):
        interval = Interval(0.0, 0.9999)
        assert interval.clamp(-1.0) == 0.0
        assert interval.clamp(2.0) == 0.9999
        assert interval.clamp(0.5) == 0.5

    def test_constants(self):
        assert Interval.UNIVERSE.surrounds(1e300)
        assert not Interval.EMPTY.contains(0.0)
        assert Interval(0.0, math.inf).size == math.inf
