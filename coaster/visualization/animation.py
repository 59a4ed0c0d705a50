# coaster/visualization/animation.py
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from coaster.config.settings import CANVAS_HEIGHT, CANVAS_WIDTH, FRAME_DT
from coaster.simulation.runner import RunState, SimulationDriver

CURVE_COLOR = "#073642"
OUTLINE_COLOR = "#93a1a1"
POINT_COLOR = "#dc322f"
PARTICLE_COLOR = "#268bd2"
FORCE_COLOR = "#859900"
FORCE_SCALE = 2.0


def animate_simulation(driver: SimulationDriver, frames: int = 1200, frame_dt: float = FRAME_DT,
                       show: bool = True) -> FuncAnimation:
    """
    Play a run in a matplotlib window. Each frame is one tick of the driver.
    The control polygon is drawn while the run is not in progress.
    """
    fig, ax = plt.subplots(figsize=(10, 7.5))
    ax.set_title("Particle on a curve")
    ax.set_xlim(0, CANVAS_WIDTH)
    # canvas coordinates: y grows downwards
    ax.set_ylim(CANVAS_HEIGHT, 0)
    ax.set_aspect("equal")

    xs = [p.x for p in driver.polyline]
    ys = [p.y for p in driver.polyline]
    curve_plot, = ax.plot(xs, ys, color=CURVE_COLOR, linewidth=3)

    cx = [p.x for p in driver.curve.points]
    cy = [p.y for p in driver.curve.points]
    outline_plot, = ax.plot(cx, cy, color=OUTLINE_COLOR, linewidth=1.5, marker="o",
                            markerfacecolor=POINT_COLOR, markeredgecolor=POINT_COLOR)

    particle_plot, = ax.plot([], [], "o", color=PARTICLE_COLOR, markersize=12)
    force_plot, = ax.plot([], [], color=FORCE_COLOR, linewidth=2)
    status_text = ax.text(10, 20, "", fontsize=9)

    if driver.run_state is not RunState.RUNNING:
        driver.start()

    def update(frame):
        driver.tick(frame * frame_dt)
        editing = driver.run_state is not RunState.RUNNING
        outline_plot.set_visible(editing)

        pos = driver.position
        force = driver.force
        if pos is not None and not editing:
            particle_plot.set_data([pos.x], [pos.y])
            if force is not None:
                tip = pos + force * FORCE_SCALE
                force_plot.set_data([pos.x, tip.x], [pos.y, tip.y])
        else:
            particle_plot.set_data([], [])
            force_plot.set_data([], [])

        if driver.run_state is RunState.STOPPED:
            status_text.set_text(f"stopped: {driver.stop_reason.value}")
        else:
            status_text.set_text(f"t={driver.time or 0.0:.2f}s  s={driver.parameter:.3f}")

        return [curve_plot, outline_plot, particle_plot, force_plot, status_text]

    anim = FuncAnimation(
        fig,
        update,
        frames=frames,
        interval=int(frame_dt * 1000),
        blit=True,
        repeat=False,
    )

    if show:
        plt.show()
    return anim
