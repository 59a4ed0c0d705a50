# coaster/physics/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

from coaster.physics.curves import Curve
from coaster.physics.errors import ConfigurationError
from coaster.physics.vector2 import Vector2, ZERO


class PotentialKind(Enum):
    LINEAR = "linear"
    CENTRAL = "central"


@dataclass
class MotionContext:
    """
    Configuration read by the equation-of-motion functions.

    Attributes:
        curve: Curve the particle is bound to (set when a run starts)
        mass: Particle mass
        potential: Which potential drives the particle
        gravity: Signed g along y (LINEAR) or attraction coefficient (CENTRAL)
        center: Center of attraction, used by CENTRAL only
    """
    curve: Optional[Curve] = None
    mass: float = 1.0
    potential: PotentialKind = PotentialKind.LINEAR
    gravity: float = -9.8
    center: Vector2 = field(default=ZERO)

    def __post_init__(self):
        try:
            self.potential = PotentialKind(self.potential)
        except ValueError:
            raise ConfigurationError(f"Unknown potential: {self.potential!r}") from None
        if not isinstance(self.center, Vector2):
            self.center = Vector2.from_array(self.center)
        if self.mass <= 0:
            raise ConfigurationError(f"mass must be > 0, got {self.mass}")


def initial_state(s0: float = 0.0, v0: float = 0.0) -> np.ndarray:
    """
    State vector [s, v]: curve parameter and its rate of change.
    """
    return np.array([s0, v0], dtype=float)
