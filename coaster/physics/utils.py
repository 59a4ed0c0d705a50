# coaster/physics/utils.py
import numpy as np

from coaster.physics.forces import CENTRAL_DISTANCE_EXPONENT
from coaster.physics.state import MotionContext, PotentialKind


def mechanical_energy(y: np.ndarray, ctx: MotionContext) -> float:
    """
    Kinetic + potential energy of the particle in state y = [s, v].
    Used as a numerical stability diagnostic (drift shows integration error).

    Potentials match the force terms in forces.py:
      LINEAR:  U = m g y
      CENTRAL: U = m g |r|^(2 - p) / (2 - p), p = CENTRAL_DISTANCE_EXPONENT
    """
    s, v = float(y[0]), float(y[1])
    speed2 = ctx.curve.d(s).squared_norm() * v * v
    b = ctx.curve.f(s)
    if ctx.potential is PotentialKind.LINEAR:
        potential = ctx.gravity * b.y
    else:
        power = 2.0 - CENTRAL_DISTANCE_EXPONENT
        potential = ctx.gravity * (b - ctx.center).norm() ** power / power
    return ctx.mass * (0.5 * speed2 + potential)


def is_finite_state(y: np.ndarray) -> bool:
    return bool(np.all(np.isfinite(y)))
