# coaster/physics/errors.py


class CoasterError(Exception):
    """
    Base class for errors raised by the curve / solver / motion layers.
    """


class ConfigurationError(CoasterError, ValueError):
    """
    Invalid construction input: too few control points, bad step size,
    unknown curve type or solver scheme. Raised before any object is returned.
    """


class DegenerateGeometryError(CoasterError, ArithmeticError):
    """
    The curve tangent vanished (|d(s)| == 0) while evaluating the equation of motion.
    Only the simulation driver catches this; it ends the run.
    """


class SimulationStateError(CoasterError, RuntimeError):
    """
    Operation not allowed in the current run state (e.g. editing the curve while running).
    """
