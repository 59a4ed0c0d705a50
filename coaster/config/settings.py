"""
Project settings (constants + small helpers).
Units: canvas pixels for lengths, seconds (s), kilograms (kg), pixels/second^2 for gravity.
The y-axis points down, as on a drawing canvas.
"""
from __future__ import annotations

import os

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")

# Run
VALIDATE_ON_IMPORT = False

# Particle
MASS = 1.0

# Potentials ("linear" | "central")
POTENTIAL = "linear"
GRAVITY_ACCELERATION = 9.8      # magnitude; pulls towards +y (canvas down)
GRAVITY_COEFFICIENT = 400.0     # attraction coefficient of the central potential
CENTER_OF_ATTRACTION = (400.0, 300.0)

# Integration ("euler" | "rk4")
SOLVER = "rk4"
DT = 0.01
DT_MIN = 1e-5
DT_MAX = 0.5

# Protection against huge catch-up bursts after the renderer was suspended.
MAX_FRAME_LENGTH = 10 * 1 / 60.0
FRAME_DT = 1 / 60.0

# Canvas / editor
CANVAS_WIDTH = 800.0
CANVAS_HEIGHT = 600.0
INIT_PADDING = 50.0
CURVE_TYPE = "polynomial"       # "polynomial" | "natural_spline"
CONTROL_POINTS = 4
CONTROL_POINTS_MIN = 2
CONTROL_POINTS_MAX = 12
CURVE_STEPS = 200

# Headless demo
DEMO_DURATION = 20.0


def gravity_signed() -> float:
    """Signed g as used by the equations of motion (negative pulls down the canvas)."""
    return -1.0 * GRAVITY_ACCELERATION


def clamp_control_points(val) -> int:
    out = int(CONTROL_POINTS if val is None else val)
    return max(int(CONTROL_POINTS_MIN), min(int(CONTROL_POINTS_MAX), out))


def clamp_step_size(val) -> float:
    out = float(DT if val is None else val)
    return max(float(DT_MIN), min(float(DT_MAX), out))


def validate_settings() -> None:
    if MASS <= 0:
        raise ValueError("MASS must be > 0")
    if DT <= 0:
        raise ValueError("DT must be > 0")
    if DT_MIN <= 0:
        raise ValueError("DT_MIN must be > 0")
    if DT_MAX < DT_MIN:
        raise ValueError("DT_MAX must be >= DT_MIN")
    if MAX_FRAME_LENGTH <= 0:
        raise ValueError("MAX_FRAME_LENGTH must be > 0")
    if FRAME_DT <= 0:
        raise ValueError("FRAME_DT must be > 0")
    if CONTROL_POINTS_MIN < 2:
        raise ValueError("CONTROL_POINTS_MIN must be >= 2")
    if CONTROL_POINTS_MAX < CONTROL_POINTS_MIN:
        raise ValueError("CONTROL_POINTS_MAX must be >= CONTROL_POINTS_MIN")
    if CURVE_STEPS <= 0:
        raise ValueError("CURVE_STEPS must be > 0")
    if CANVAS_WIDTH <= 2 * INIT_PADDING:
        raise ValueError("CANVAS_WIDTH must leave room for INIT_PADDING on both sides")
    if POTENTIAL not in ("linear", "central"):
        raise ValueError("POTENTIAL must be 'linear' or 'central'")
    if SOLVER not in ("euler", "rk4"):
        raise ValueError("SOLVER must be 'euler' or 'rk4'")
    if CURVE_TYPE not in ("polynomial", "natural_spline"):
        raise ValueError("CURVE_TYPE must be 'polynomial' or 'natural_spline'")


if VALIDATE_ON_IMPORT:
    validate_settings()
