import math

import numpy as np
import pytest

from coaster.physics.errors import ConfigurationError
from coaster.physics.solver import (
    EulerSolver,
    RK4Solver,
    SolverScheme,
    create_solver,
)


def constant_velocity(t, y, ctx):
    return np.array([y[1], 0.0])


def harmonic_oscillator(t, y, ctx):
    return np.array([y[1], -y[0]])


@pytest.mark.parametrize("scheme", list(SolverScheme))
@pytest.mark.parametrize("step_size", [0.1, 0.25, 0.5, 1.0])
def test_constant_velocity_is_integrated_exactly(scheme, step_size):
    solver = create_solver(scheme, step_size, constant_velocity)
    solver.reset(0.0, [0.0, 1.0])
    solver.integrate(2.0)
    assert solver.time == 2.0
    assert solver.state[0] == pytest.approx(2.0, rel=1e-12)
    assert solver.state[1] == 1.0


def test_rk4_beats_euler_on_harmonic_oscillator():
    period = 2.0 * math.pi
    h = 0.05
    errors = {}
    for scheme in SolverScheme:
        solver = create_solver(scheme, h, harmonic_oscillator)
        solver.reset(0.0, [1.0, 0.0])
        solver.integrate(period)
        errors[scheme] = float(np.linalg.norm(solver.state - np.array([1.0, 0.0])))

    assert errors[SolverScheme.RK4] * 1e3 <= errors[SolverScheme.EULER]


@pytest.mark.parametrize("scheme", list(SolverScheme))
@pytest.mark.parametrize("target", [0.3, 1.2345, 2.0, 7.77])
def test_integrate_lands_exactly_on_target(scheme, target):
    solver = create_solver(scheme, 0.1, harmonic_oscillator)
    solver.reset(0.0, [1.0, 0.0])
    solver.integrate(target)
    assert solver.time == target
    # consecutive calls keep landing on the requested times
    solver.integrate(target + 0.0173)
    assert solver.time == target + 0.0173


def test_integrate_to_current_time_is_a_no_op():
    solver = RK4Solver(harmonic_oscillator, 0.1)
    solver.reset(3.0, [0.4, -0.2])
    solver.integrate(3.0)
    assert solver.time == 3.0
    np.testing.assert_array_equal(solver.state, [0.4, -0.2])


def test_integrate_backwards_is_rejected():
    solver = EulerSolver(harmonic_oscillator, 0.1)
    solver.reset(1.0, [1.0, 0.0])
    with pytest.raises(ValueError):
        solver.integrate(0.5)


def test_euler_step_matches_formula():
    solver = EulerSolver(harmonic_oscillator, 0.1)
    solver.reset(0.0, [1.0, 0.5])
    solver.step(0.1)
    np.testing.assert_allclose(solver.state, [1.0 + 0.1 * 0.5, 0.5 - 0.1 * 1.0])
    assert solver.time == pytest.approx(0.1)


def test_rk4_step_is_fourth_order():
    # y' = y: one RK4 step equals the Taylor series of e^h up to h^4
    solver = RK4Solver(lambda t, y, ctx: y, 0.1)
    h = 0.1
    solver.reset(0.0, [1.0])
    solver.step(h)
    assert solver.state[0] == pytest.approx(1 + h + h ** 2 / 2 + h ** 3 / 6 + h ** 4 / 24, rel=1e-14)


def test_context_is_passed_to_rhs():
    seen = []

    def rhs(t, y, ctx):
        seen.append(ctx)
        return np.zeros_like(y)

    marker = object()
    solver = create_solver("rk4", 0.5, rhs, marker)
    solver.reset(0.0, [0.0, 0.0])
    solver.integrate(1.0)
    assert seen and all(c is marker for c in seen)


def test_time_dependent_rhs_sees_stage_times():
    # y' = t  ->  y(T) = T^2 / 2, exact for RK4
    solver = RK4Solver(lambda t, y, ctx: np.array([t]), 0.3)
    solver.reset(0.0, [0.0])
    solver.integrate(2.0)
    assert solver.state[0] == pytest.approx(2.0, rel=1e-12)


@pytest.mark.parametrize("step_size", [0.0, -0.1, float("nan"), float("inf")])
def test_invalid_step_size_is_rejected(step_size):
    with pytest.raises(ConfigurationError):
        create_solver(SolverScheme.EULER, step_size, constant_velocity)


def test_unknown_scheme_is_rejected():
    with pytest.raises(ConfigurationError):
        create_solver("leapfrog", 0.1, constant_velocity)


def test_factory_builds_requested_scheme():
    assert isinstance(create_solver("euler", 0.1, constant_velocity), EulerSolver)
    assert isinstance(create_solver(SolverScheme.RK4, 0.1, constant_velocity), RK4Solver)
