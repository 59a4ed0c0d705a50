# coaster/physics/forces.py
"""
Equations of motion for a particle constrained to a curve.

The state is y = [s, v] with s the curve parameter. Requiring the particle to
stay on the curve x(s) gives

    x'' = dd(s) v^2 + d(s) a

and projecting the field term G on the tangent d(s):

    a = -(d . dd v^2 + d . G) / |d|^2

with G = (0, g) for uniform gravity and G = g r / |r|^1.5 for the central
potential (g signed). The right-hand sides return [v, a]. The reaction force
the curve exerts on the particle is m (x'' + G).
"""
import math
from typing import Callable, Dict

import numpy as np

from coaster.physics.errors import ConfigurationError, DegenerateGeometryError
from coaster.physics.state import MotionContext, PotentialKind
from coaster.physics.vector2 import Vector2

# The central potential divides by |r|^1.5 (not |r|^3) to keep the behaviour of the
# existing simulations; see test_forces.py.
CENTRAL_DISTANCE_EXPONENT = 1.5

RhsFunction = Callable[[float, np.ndarray, MotionContext], np.ndarray]


def _tangent_norm2(bd: Vector2, s: float) -> float:
    norm2 = bd.squared_norm()
    if norm2 == 0.0:
        raise DegenerateGeometryError(f"curve tangent vanishes at s={s:.6g}")
    return norm2


def _central_term(ctx: MotionContext, b: Vector2) -> Vector2:
    """
    g * r / |r|^1.5 with r measured from the center of attraction.
    Undefined (NaN) when b sits on the center.
    """
    r = b - ctx.center
    r_norm = r.norm()
    if r_norm == 0.0:
        return Vector2(math.nan, math.nan)
    return r * (ctx.gravity / r_norm ** CENTRAL_DISTANCE_EXPONENT)


def linear_gravity(t: float, y: np.ndarray, ctx: MotionContext) -> np.ndarray:
    """
    Uniform gravity along the y-axis; ctx.gravity is the signed acceleration.
    """
    s, v = y[0], y[1]
    bd = ctx.curve.d(s)
    bdd = ctx.curve.dd(s)
    norm2 = _tangent_norm2(bd, s)
    a = -1.0 / norm2 * (bd.dot(bdd) * v ** 2 + ctx.gravity * bd.y)
    return np.array([v, a], dtype=float)


def central_force(t: float, y: np.ndarray, ctx: MotionContext) -> np.ndarray:
    """
    Attraction towards ctx.center with coefficient ctx.gravity.
    """
    s, v = y[0], y[1]
    b = ctx.curve.f(s)
    bd = ctx.curve.d(s)
    bdd = ctx.curve.dd(s)
    norm2 = _tangent_norm2(bd, s)
    a = -1.0 / norm2 * (bd.dot(bdd) * v ** 2 + bd.dot(_central_term(ctx, b)))
    return np.array([v, a], dtype=float)


_RHS: Dict[PotentialKind, RhsFunction] = {
    PotentialKind.LINEAR: linear_gravity,
    PotentialKind.CENTRAL: central_force,
}


def rhs_for(potential) -> RhsFunction:
    try:
        return _RHS[PotentialKind(potential)]
    except ValueError:
        raise ConfigurationError(f"Unknown potential: {potential!r}") from None


def reaction_force(y: np.ndarray, ctx: MotionContext, t: float = 0.0) -> Vector2:
    """
    Force the curve exerts on the particle in state y (for rendering).
    """
    s, v = float(y[0]), float(y[1])
    a = float(rhs_for(ctx.potential)(t, y, ctx)[1])
    bd = ctx.curve.d(s)
    bdd = ctx.curve.dd(s)
    kinematic = bdd * (v * v) + bd * a
    if ctx.potential is PotentialKind.LINEAR:
        field = Vector2(0.0, ctx.gravity)
    else:
        field = _central_term(ctx, ctx.curve.f(s))
    return (kinematic + field) * ctx.mass
