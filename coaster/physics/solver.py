# coaster/physics/solver.py
import math
from enum import Enum
from typing import Any, Callable

import numpy as np

from coaster.physics.errors import ConfigurationError

Rhs = Callable[[float, np.ndarray, Any], np.ndarray]


class SolverScheme(Enum):
    EULER = "euler"
    RK4 = "rk4"


class OdeSolver:
    """
    Fixed-step solver for y'(t) = f(t, y, context).

    time and state are public so the renderer can read them between ticks.
    """
    def __init__(self, rhs: Rhs, step_size: float, context: Any = None):
        step_size = float(step_size)
        if not step_size > 0.0 or not math.isfinite(step_size):
            raise ConfigurationError(f"step_size must be a positive number, got {step_size}")
        self.f = rhs
        self.step_size = step_size
        self.context = context
        self.time = 0.0
        self.state = np.zeros(2, dtype=float)

    def reset(self, time: float, state) -> None:
        self.time = float(time)
        self.state = np.array(state, dtype=float)

    def integrate(self, target_time: float) -> None:
        """
        Integrate until target_time: full steps of step_size plus one remainder step.
        time equals target_time afterwards.
        """
        target_time = float(target_time)
        dt = target_time - self.time
        if dt < 0.0:
            raise ValueError(f"cannot integrate backwards from t={self.time} to t={target_time}")
        n_steps = int(math.floor(dt / self.step_size))
        remainder = dt - n_steps * self.step_size

        for _ in range(n_steps):
            self.step(self.step_size)
        self.step(remainder)
        # absorb the rounding of the repeated t += h
        self.time = target_time

    def step(self, h: float) -> None:
        raise NotImplementedError


class EulerSolver(OdeSolver):
    """
    Explicit Euler, first order.
    """
    def step(self, h: float) -> None:
        dy = self.f(self.time, self.state, self.context)
        self.state = self.state + h * np.asarray(dy, dtype=float)
        self.time += h


class RK4Solver(OdeSolver):
    """
    Runge-Kutta 4th order solver for state integration.
    """
    def step(self, h: float) -> None:
        """
        Perform a single RK4 step.
        """
        def deriv(t, y):
            return np.asarray(self.f(t, y, self.context), dtype=float)

        h_half = 0.5 * h
        y0 = self.state

        k1 = deriv(self.time, y0)
        k2 = deriv(self.time + h_half, y0 + h_half * k1)
        k3 = deriv(self.time + h_half, y0 + h_half * k2)
        k4 = deriv(self.time + h, y0 + h * k3)

        self.state = y0 + (h / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)
        self.time += h


_SOLVERS = {
    SolverScheme.EULER: EulerSolver,
    SolverScheme.RK4: RK4Solver,
}


def create_solver(scheme, step_size: float, rhs: Rhs, context: Any = None) -> OdeSolver:
    try:
        kind = SolverScheme(scheme)
    except ValueError:
        raise ConfigurationError(f"Unknown solver scheme: {scheme!r}") from None
    return _SOLVERS[kind](rhs, step_size, context)
