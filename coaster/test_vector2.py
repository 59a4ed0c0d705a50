import math

import numpy as np
import pytest

from coaster.physics.vector2 import Vector2, ZERO


def test_arithmetic_returns_new_vectors():
    u, v = Vector2(1.0, 2.0), Vector2(3.0, -4.0)
    assert u + v == Vector2(4.0, -2.0)
    assert u - v == Vector2(-2.0, 6.0)
    assert -u == Vector2(-1.0, -2.0)
    assert u * 2 == Vector2(2.0, 4.0)
    assert 2 * u == Vector2(2.0, 4.0)
    assert v / 2 == Vector2(1.5, -2.0)
    assert u == Vector2(1.0, 2.0)


def test_vectors_are_immutable():
    v = Vector2(1.0, 1.0)
    with pytest.raises(AttributeError):
        v.x = 5.0


def test_norms_and_products():
    v = Vector2(3.0, -4.0)
    assert v.squared_norm() == 25.0
    assert v.norm() == 5.0
    assert v.dot(Vector2(1.0, 1.0)) == -1.0
    u = v.unit()
    assert u.x == pytest.approx(0.6)
    assert u.y == pytest.approx(-0.8)


def test_projection_and_angles():
    x_axis = Vector2(2.0, 0.0)
    assert x_axis.proj(Vector2(3.0, 7.0)) == Vector2(3.0, 0.0)
    assert x_axis.angle(Vector2(0.0, 5.0)) == pytest.approx(math.pi / 2)
    assert Vector2(0.0, -1.0).polar_angle() == pytest.approx(-math.pi / 2)
    p = Vector2.from_polar(2.0, math.pi / 3)
    assert p.norm() == pytest.approx(2.0)
    assert p.polar_angle() == pytest.approx(math.pi / 3)


def test_array_conversion():
    v = Vector2.from_array(np.array([1.5, -2.5]))
    assert v == Vector2(1.5, -2.5)
    np.testing.assert_array_equal(v.as_array(), [1.5, -2.5])
    assert tuple(v) == (1.5, -2.5)
    with pytest.raises(ValueError):
        Vector2.from_array([1.0, 2.0, 3.0])


def test_finiteness():
    assert ZERO.is_finite()
    assert not Vector2(float("nan"), 0.0).is_finite()
    assert not Vector2(0.0, float("inf")).is_finite()


def test_zero_vector_cannot_be_normalized():
    with pytest.raises(ZeroDivisionError):
        ZERO.unit()
    with pytest.raises(ZeroDivisionError):
        ZERO.proj(Vector2(1.0, 0.0))
    with pytest.raises(ZeroDivisionError):
        Vector2(1.0, 1.0) / 0
