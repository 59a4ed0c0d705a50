# coaster/main.py
import logging
import traceback

from coaster.config import settings
from coaster.physics.curves import create_curve
from coaster.physics.vector2 import Vector2
from coaster.simulation.runner import SimulationDriver, run_headless
from coaster.visualization.animation import animate_simulation
from coaster.visualization.plots import plot_energy_drift, plot_parameter_over_time

# --- Setup logger ------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S"
)
log = logging.getLogger("main")


def demo_curve():
    """
    A valley: the particle starts at rest on the left rim.
    """
    w, h, pad = settings.CANVAS_WIDTH, settings.CANVAS_HEIGHT, settings.INIT_PADDING
    points = [
        Vector2(pad, 0.2 * h),
        Vector2(0.3 * w, 0.95 * h),
        Vector2(0.7 * w, 0.95 * h),
        Vector2(w - pad, 0.15 * h),
    ]
    return create_curve(settings.CURVE_TYPE, points)


def build_driver() -> SimulationDriver:
    return SimulationDriver(
        curve=demo_curve(),
        mass=settings.MASS,
        potential=settings.POTENTIAL,
        solver=settings.SOLVER,
        step_size=settings.clamp_step_size(settings.DT),
    )


def main():
    try:
        settings.validate_settings()

        # 1) Headless run for diagnostics
        driver = build_driver()
        samples = run_headless(driver, duration=settings.DEMO_DURATION, frame_dt=settings.FRAME_DT)
        if samples:
            e0, e1 = samples[0]["energy"], samples[-1]["energy"]
            log.info(
                "Simulated %.2f s: final s=%.4f, energy %.4f -> %.4f, stop=%s",
                samples[-1]["time"], samples[-1]["s"], e0, e1,
                driver.stop_reason.value if driver.stop_reason else "none",
            )

        # 2) Quick plots
        try:
            plot_parameter_over_time(samples)
            plot_energy_drift(samples)
            log.info("Plots generated.")
        except Exception as e:
            log.warning("Plotting failed: %s", e)

        # 3) Animate (best-effort)
        try:
            animate_simulation(build_driver())
        except Exception as e:
            log.warning("Animation failed or running headless: %s", e)

    except Exception:
        log.error("Fatal exception during run:")
        traceback.print_exc()


if __name__ == "__main__":
    main()
