"""
Parametric 2D curves for the constrained-particle simulation.

Two families are supported:
- PolynomialCurve: Bezier curve of arbitrary order in the Bernstein basis.
- NaturalCubicSpline: piecewise cubic through every control point with zero
  second derivative at both ends.

Every curve evaluates position f(t), first derivative d(t) and second
derivative dd(t) for a global parameter t in [0, 1]. Callers keep t inside
[0, 1]; the curves never clamp it.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Sequence, Tuple, Union

import numpy as np

from coaster.physics.errors import ConfigurationError
from coaster.physics.vector2 import Vector2, ZERO

PointLike = Union[Vector2, Sequence[float]]

MIN_CONTROL_POINTS = 2


class CurveType(Enum):
    POLYNOMIAL = "polynomial"
    NATURAL_SPLINE = "natural_spline"


def _as_vector(p: PointLike) -> Vector2:
    if isinstance(p, Vector2):
        return p
    return Vector2.from_array(p)


def binom(n: int, k: int) -> float:
    """
    Binomial coefficient "n choose k" as (k+1)(k+2)...n / (n-k)!.
    Avoids building n! explicitly.
    """
    a = 1
    for i in range(k + 1, n + 1):
        a *= i
    b = 1
    for j in range(2, n - k + 1):
        b *= j
    return a / b


def bernstein(n: int, i: int, t: float) -> float:
    return binom(n, i) * (1.0 - t) ** (n - i) * t ** i


def solve_tridiagonal(sub, diag, sup, rhs) -> np.ndarray:
    """
    Thomas algorithm for a tridiagonal system.

    sub, diag, sup: (N,) coefficients; sub[0] and sup[N-1] are ignored.
    rhs: (N,) or (N, k) right-hand side. Each column is solved with the same
    row operations, so vector-valued unknowns are handled coordinate-wise.
    Inputs are not modified.
    """
    sub = np.asarray(sub, dtype=float)
    sup = np.array(sup, dtype=float)
    diag = np.asarray(diag, dtype=float)
    x = np.array(rhs, dtype=float)
    n = diag.shape[0]

    sup[0] = sup[0] / diag[0]
    x[0] = x[0] / diag[0]
    # forward sweep
    for j in range(1, n):
        w = 1.0 / (diag[j] - sub[j] * sup[j - 1])
        sup[j] = sup[j] * w
        x[j] = (x[j] - sub[j] * x[j - 1]) * w
    # back substitution
    for k in range(n - 2, -1, -1):
        x[k] = x[k] - sup[k] * x[k + 1]
    return x


class Curve(ABC):
    """
    Base parametric curve. Owns its control points; derived data is rebuilt by update().
    """
    def __init__(self, points: Sequence[PointLike]):
        if len(points) < MIN_CONTROL_POINTS:
            raise ConfigurationError(
                f"{type(self).__name__} requires at least {MIN_CONTROL_POINTS} control points, got {len(points)}"
            )
        self._points: List[Vector2] = [_as_vector(p) for p in points]
        self.update()

    @property
    def points(self) -> Tuple[Vector2, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def replace_point(self, index: int, point: PointLike) -> None:
        """
        Replace a single control point and recompute the derived coefficients.
        """
        if not -len(self._points) <= index < len(self._points):
            raise IndexError(f"control point index {index} out of range")
        self._points[index] = _as_vector(point)
        self.update()

    @abstractmethod
    def update(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def f(self, t: float) -> Vector2:
        raise NotImplementedError

    @abstractmethod
    def d(self, t: float) -> Vector2:
        raise NotImplementedError

    @abstractmethod
    def dd(self, t: float) -> Vector2:
        raise NotImplementedError


class PolynomialCurve(Curve):
    """
    Bezier curve of order n = len(points) - 1 in the Bernstein basis.

    d() and dd() use the hodograph control points:
        dpoints[i]  = points[i+1] - points[i]
        ddpoints[i] = dpoints[i+1] - dpoints[i]
    """
    def update(self) -> None:
        self.n = len(self._points) - 1
        self.dpoints = [self._points[i + 1] - self._points[i] for i in range(self.n)]
        self.ddpoints = [self.dpoints[j + 1] - self.dpoints[j] for j in range(self.n - 1)]

    def f(self, t: float) -> Vector2:
        val = ZERO
        for i, point in enumerate(self._points):
            val = val + point * bernstein(self.n, i, t)
        return val

    def d(self, t: float) -> Vector2:
        n1 = self.n - 1
        val = ZERO
        for i, point in enumerate(self.dpoints):
            val = val + point * bernstein(n1, i, t)
        return val * self.n

    def dd(self, t: float) -> Vector2:
        # order 1: no ddpoints and n(n-1) == 0, so the result is exactly zero
        n2 = self.n - 2
        val = ZERO
        for i, point in enumerate(self.ddpoints):
            val = val + point * bernstein(n2, i, t)
        return val * (self.n * (self.n - 1))


class NaturalCubicSpline(Curve):
    """
    Natural cubic spline through all control points.

    Segment i (local parameter u in [0, 1]) is A[i] + B[i] u + C[i] u^2 + D[i] u^3.
    The tangents at the knots come from the tridiagonal system

        | 2 1         | |D0|   | 3(p1 - p0)     |
        | 1 4 1       | |D1|   | 3(p2 - p0)     |
        |   . . .     | |..| = | ...            |
        |     1 4 1   | |  |   | 3(pm - pm-2)   |
        |       1 2   | |Dm|   | 3(pm - pm-1)   |

    which gives C2 continuity and zero curvature at both ends.
    """
    def update(self) -> None:
        m = len(self._points) - 1
        self.segments = m
        pts = np.array([p.as_array() for p in self._points], dtype=float)

        sub = np.ones(m + 1, dtype=float)
        diag = np.full(m + 1, 4.0, dtype=float)
        sup = np.ones(m + 1, dtype=float)
        sub[0] = 0.0
        diag[0] = 2.0
        diag[m] = 2.0
        sup[m] = 0.0

        rhs = np.empty((m + 1, 2), dtype=float)
        rhs[0] = 3.0 * (pts[1] - pts[0])
        rhs[1:m] = 3.0 * (pts[2:] - pts[:-2])
        rhs[m] = 3.0 * (pts[m] - pts[m - 1])

        tangents = solve_tridiagonal(sub, diag, sup, rhs)

        a = pts[:-1]
        b = tangents[:-1]
        c = 3.0 * (pts[1:] - pts[:-1]) - 2.0 * tangents[:-1] - tangents[1:]
        d = 2.0 * (pts[:-1] - pts[1:]) + tangents[:-1] + tangents[1:]

        self.A = [Vector2.from_array(row) for row in a]
        self.B = [Vector2.from_array(row) for row in b]
        self.C = [Vector2.from_array(row) for row in c]
        self.D = [Vector2.from_array(row) for row in d]

    def segment(self, t: float) -> Tuple[int, float]:
        """
        Map global t to (segment index, local parameter).
        The index is clamped so t == 1.0 lands at u == 1.0 of the last segment.
        """
        u = t * self.segments
        i = max(min(int(math.floor(u)), self.segments - 1), 0)
        return i, u - i

    def f(self, t: float) -> Vector2:
        i, u = self.segment(t)
        return self.A[i] + self.B[i] * u + self.C[i] * (u * u) + self.D[i] * (u * u * u)

    def d(self, t: float) -> Vector2:
        i, u = self.segment(t)
        return (self.B[i] + self.C[i] * (2.0 * u) + self.D[i] * (3.0 * u * u)) * self.segments

    def dd(self, t: float) -> Vector2:
        i, u = self.segment(t)
        return (self.C[i] * 2.0 + self.D[i] * (6.0 * u)) * (self.segments ** 2)


_CURVE_CLASSES = {
    CurveType.POLYNOMIAL: PolynomialCurve,
    CurveType.NATURAL_SPLINE: NaturalCubicSpline,
}


def create_curve(curve_type, points: Sequence[PointLike]) -> Curve:
    """
    Build a curve of the given type ("polynomial" / "natural_spline" or CurveType).
    """
    try:
        kind = CurveType(curve_type)
    except ValueError:
        raise ConfigurationError(f"Unknown curve type: {curve_type!r}") from None
    return _CURVE_CLASSES[kind](points)


def linear_control_points(start: PointLike, end: PointLike, order: int) -> List[Vector2]:
    """
    order + 1 evenly spaced points on the segment start -> end.
    This is the editor's initial (straight) curve.
    """
    if order < 1:
        raise ConfigurationError(f"order must be >= 1, got {order}")
    start = _as_vector(start)
    delta = _as_vector(end) - start
    return [start + delta * (i / order) for i in range(order + 1)]


def sample_curve(curve: Curve, steps: int) -> List[Vector2]:
    """
    Precompute steps + 1 points along the curve for drawing.
    """
    if steps <= 0:
        raise ConfigurationError("steps must be > 0")
    return [curve.f(i / steps) for i in range(steps + 1)]
