# coaster/physics/vector2.py
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vector2:
    """
    Vector of the 2-dimensional Euclidean space.
    Immutable: every operation returns a new vector.
    """
    x: float
    y: float

    @classmethod
    def from_polar(cls, r: float, theta: float) -> "Vector2":
        return cls(r * math.cos(theta), r * math.sin(theta))

    @classmethod
    def from_array(cls, arr) -> "Vector2":
        arr = np.asarray(arr, dtype=float)
        if arr.shape != (2,):
            raise ValueError(f"Cannot coerce {arr!r} to a 2D vector")
        return cls(float(arr[0]), float(arr[1]))

    def __add__(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x + v.x, self.y + v.y)

    def __sub__(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x - v.x, self.y - v.y)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __mul__(self, a: float) -> "Vector2":
        a = float(a)
        return Vector2(self.x * a, self.y * a)

    __rmul__ = __mul__

    def __truediv__(self, a: float) -> "Vector2":
        """Raises ZeroDivisionError when a == 0."""
        return self * (1.0 / a)

    def __iter__(self):
        yield self.x
        yield self.y

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def dot(self, v: "Vector2") -> float:
        return self.x * v.x + self.y * v.y

    def squared_norm(self) -> float:
        """
        Square of the Euclidean norm; avoids the square root.
        """
        return self.dot(self)

    def norm(self) -> float:
        return math.sqrt(self.squared_norm())

    def proj(self, v: "Vector2") -> "Vector2":
        """
        Projection of v on this vector (this vector must be nonzero).
        """
        return self * (self.dot(v) / self.squared_norm())

    def unit(self) -> "Vector2":
        """Unit vector along this one; ZeroDivisionError on the zero vector."""
        return self / self.norm()

    def angle(self, v: "Vector2") -> float:
        """
        Angle between this vector and v in radians (both must be nonzero).
        """
        return math.acos(self.dot(v) / (self.norm() * v.norm()))

    def polar_angle(self) -> float:
        return math.atan2(self.y, self.x)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


ZERO = Vector2(0.0, 0.0)
