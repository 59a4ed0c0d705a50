"""
Simulation driver: owns the active curve and the solver, advances the run on
each external tick and exposes position / force for rendering.

Run states:
  IDLE     -> no run bound; the curve may be edited
  RUNNING  -> tick() integrates; edits are rejected
  STOPPED  -> run ended (user stop, particle left the curve, degenerate tangent,
              non-finite state); the curve may be edited again
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from coaster.config import settings
from coaster.physics.curves import (
    Curve,
    CurveType,
    create_curve,
    linear_control_points,
    sample_curve,
)
from coaster.physics.errors import DegenerateGeometryError, SimulationStateError
from coaster.physics.forces import reaction_force, rhs_for
from coaster.physics.solver import OdeSolver, SolverScheme, create_solver
from coaster.physics.state import MotionContext, PotentialKind, initial_state
from coaster.physics.utils import is_finite_state, mechanical_energy
from coaster.physics.vector2 import Vector2

log = logging.getLogger(__name__)


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class StopReason(Enum):
    USER = "user"
    LEFT_CURVE = "left_curve"
    DEGENERATE_TANGENT = "degenerate_tangent"
    NON_FINITE = "non_finite"


def straight_curve(order: int, curve_type=CurveType.POLYNOMIAL,
                   width: float = settings.CANVAS_WIDTH,
                   height: float = settings.CANVAS_HEIGHT,
                   padding: float = settings.INIT_PADDING) -> Curve:
    """
    Horizontal curve across the middle of the canvas with order + 1 control points.
    """
    start = Vector2(padding, height / 2.0)
    end = Vector2(width - padding, height / 2.0)
    return create_curve(curve_type, linear_control_points(start, end, order))


class SimulationDriver:
    """
    Tick-driven runner for one particle on one curve.
    """
    def __init__(self, curve: Optional[Curve] = None,
                 mass: float = settings.MASS,
                 potential=settings.POTENTIAL,
                 gravity: Optional[float] = None,
                 center: Tuple[float, float] = settings.CENTER_OF_ATTRACTION,
                 solver=settings.SOLVER,
                 step_size: float = settings.DT,
                 max_frame_length: float = settings.MAX_FRAME_LENGTH,
                 curve_steps: int = settings.CURVE_STEPS):
        potential = PotentialKind(potential)
        if gravity is None:
            gravity = settings.gravity_signed() if potential is PotentialKind.LINEAR else settings.GRAVITY_COEFFICIENT
        self.context = MotionContext(mass=float(mass), potential=potential, gravity=float(gravity), center=center)
        self.scheme = SolverScheme(solver)
        self.step_size = float(step_size)
        self.max_frame_length = float(max_frame_length)
        self.curve_steps = int(curve_steps)

        self.solver: Optional[OdeSolver] = None
        self.run_state = RunState.IDLE
        self.stop_reason: Optional[StopReason] = None
        self._force: Optional[Vector2] = None
        self._first_tick = False

        self._curve: Curve = curve if curve is not None else straight_curve(
            settings.clamp_control_points(settings.CONTROL_POINTS) - 1, settings.CURVE_TYPE
        )
        self.polyline: List[Vector2] = sample_curve(self._curve, self.curve_steps)

    # ------------------------------------------------------------------
    # Curve editing (IDLE / STOPPED only)
    # ------------------------------------------------------------------
    @property
    def curve(self) -> Curve:
        return self._curve

    @property
    def editable(self) -> bool:
        return self.run_state is not RunState.RUNNING

    def _require_editable(self, what: str) -> None:
        if not self.editable:
            raise SimulationStateError(f"cannot {what} while a run is in progress")

    def set_curve(self, curve: Curve) -> None:
        """
        Replace the curve wholesale. A running simulation is stopped first.
        """
        if self.run_state is RunState.RUNNING:
            self.stop()
        self._curve = curve
        self._enter_idle()

    def reset_curve(self, order: Optional[int] = None, curve_type=None) -> Curve:
        """
        New straight curve with order + 1 control points (the editor's reset).
        """
        if order is None:
            order = settings.clamp_control_points(settings.CONTROL_POINTS) - 1
        if curve_type is None:
            curve_type = settings.CURVE_TYPE
        self.set_curve(straight_curve(order, curve_type))
        log.debug("Curve reset: order=%d type=%s", order, CurveType(curve_type).value)
        return self._curve

    def move_point(self, index: int, point) -> None:
        self._require_editable("move a control point")
        self._curve.replace_point(index, point)
        self._enter_idle()

    def _enter_idle(self) -> None:
        self.polyline = sample_curve(self._curve, self.curve_steps)
        self.solver = None
        self._force = None
        self.stop_reason = None
        self.run_state = RunState.IDLE

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def configure(self, mass: Optional[float] = None, potential=None, gravity: Optional[float] = None,
                  center=None, solver=None, step_size: Optional[float] = None) -> None:
        """
        Change run parameters. Only allowed when no run is in progress.
        """
        self._require_editable("reconfigure")
        ctx = self.context
        self.context = MotionContext(
            curve=ctx.curve,
            mass=ctx.mass if mass is None else float(mass),
            potential=ctx.potential if potential is None else potential,
            gravity=ctx.gravity if gravity is None else float(gravity),
            center=ctx.center if center is None else center,
        )
        if solver is not None:
            self.scheme = SolverScheme(solver)
        if step_size is not None:
            self.step_size = float(step_size)
        self.solver = None

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------
    def start(self) -> None:
        """
        Bind the current curve to the run and wait for the first tick.
        """
        self._require_editable("start")
        self.context.curve = self._curve
        self.solver = create_solver(self.scheme, self.step_size, rhs_for(self.context.potential), self.context)
        self.solver.reset(0.0, initial_state())
        self._first_tick = True
        self._force = None
        self.stop_reason = None
        self.run_state = RunState.RUNNING
        log.info(
            "Run started: solver=%s dt=%.4g potential=%s g=%.4g mass=%.4g",
            self.scheme.value, self.step_size, self.context.potential.value,
            self.context.gravity, self.context.mass,
        )

    def stop(self, reason: StopReason = StopReason.USER) -> None:
        if self.run_state is not RunState.RUNNING:
            return
        self.run_state = RunState.STOPPED
        self.stop_reason = reason
        if reason in (StopReason.DEGENERATE_TANGENT, StopReason.NON_FINITE):
            log.warning("Run stopped at t=%.4f s: %s", self.solver.time, reason.value)
        else:
            log.info("Run stopped at t=%.4f s: %s (s=%.4f)", self.solver.time, reason.value, self.parameter)

    def tick(self, timestamp: float) -> bool:
        """
        Advance the simulation to timestamp (seconds). Returns True while running.
        """
        if self.run_state is not RunState.RUNNING:
            return False
        t = float(timestamp)
        if self._first_tick:
            self.solver.time = t
            self._first_tick = False

        if t < self.solver.time:
            log.debug("Ignoring out-of-order tick %.4f < %.4f", t, self.solver.time)
            return True
        if t - self.solver.time > self.max_frame_length:
            log.warning("Clamping frame gap %.3f s to %.3f s", t - self.solver.time, self.max_frame_length)
            self.solver.time = t - self.max_frame_length

        try:
            self.solver.integrate(t)
            if not is_finite_state(self.solver.state):
                self.stop(StopReason.NON_FINITE)
                return False
            if not 0.0 <= self.parameter <= 1.0:
                self.stop(StopReason.LEFT_CURVE)
                return False
            force = reaction_force(self.solver.state, self.context, t)
            if not force.is_finite():
                self.stop(StopReason.NON_FINITE)
                return False
            self._force = force
        except DegenerateGeometryError as e:
            log.debug("Degenerate geometry: %s", e)
            self.stop(StopReason.DEGENERATE_TANGENT)
            return False
        return True

    # ------------------------------------------------------------------
    # Read-out for rendering
    # ------------------------------------------------------------------
    @property
    def time(self) -> Optional[float]:
        return None if self.solver is None else float(self.solver.time)

    @property
    def parameter(self) -> float:
        return 0.0 if self.solver is None else float(self.solver.state[0])

    @property
    def velocity(self) -> float:
        return 0.0 if self.solver is None else float(self.solver.state[1])

    @property
    def position(self) -> Optional[Vector2]:
        """
        Particle position while it is on the curve, else None.
        """
        if self.solver is None:
            return None
        s = self.parameter
        if not 0.0 <= s <= 1.0:
            return None
        return self._curve.f(s)

    @property
    def force(self) -> Optional[Vector2]:
        """
        Reaction force computed after the last successful tick.
        """
        return self._force

    def energy(self) -> Optional[float]:
        if self.solver is None or self.context.curve is None:
            return None
        return mechanical_energy(self.solver.state, self.context)


def run_headless(driver: SimulationDriver, duration: float = settings.DEMO_DURATION,
                 frame_dt: float = settings.FRAME_DT, start_time: float = 0.0) -> List[Dict[str, Any]]:
    """
    Drive the simulation with evenly spaced ticks and collect one sample per tick
    while the particle is on the curve.

    Returns a list of records:
      {"time", "s", "v", "x", "y", "fx", "fy", "energy"}
    """
    if driver.run_state is not RunState.RUNNING:
        driver.start()

    samples: List[Dict[str, Any]] = []
    n_frames = int(duration / frame_dt)
    for k in range(n_frames + 1):
        if not driver.tick(start_time + k * frame_dt):
            break
        pos = driver.position
        force = driver.force
        samples.append({
            "time": driver.time - start_time,
            "s": driver.parameter,
            "v": driver.velocity,
            "x": pos.x,
            "y": pos.y,
            "fx": force.x,
            "fy": force.y,
            "energy": driver.energy(),
        })
    log.info("Headless run: %d samples, state=%s", len(samples), driver.run_state.value)
    return samples
