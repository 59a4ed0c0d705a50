import os

import matplotlib.pyplot as plt

from coaster.config.settings import OUTPUT_DIR


def plot_parameter_over_time(samples, output_dir=OUTPUT_DIR):
    """
    Plot the curve parameter s and its rate v against time.
    """
    os.makedirs(output_dir, exist_ok=True)

    times = [r["time"] for r in samples]

    fig, (ax_s, ax_v) = plt.subplots(2, 1, figsize=(10, 6), sharex=True)
    ax_s.plot(times, [r["s"] for r in samples])
    ax_s.set_ylabel("s")
    ax_s.set_ylim(-0.05, 1.05)
    ax_v.plot(times, [r["v"] for r in samples], color="tab:orange")
    ax_v.set_ylabel("ds/dt")
    ax_v.set_xlabel("Time (s)")
    ax_s.set_title("Curve Parameter Over Time")

    save_path = os.path.join(output_dir, "parameter_over_time.png")
    fig.tight_layout()
    fig.savefig(save_path)
    plt.close(fig)

    print(f"[OK] Saved: {save_path}")
    return save_path


def plot_energy_drift(samples, output_dir=OUTPUT_DIR):
    """
    Plot relative mechanical-energy drift (numerical error indicator).
    """
    os.makedirs(output_dir, exist_ok=True)

    times = [r["time"] for r in samples]
    e0 = samples[0]["energy"] if samples else 0.0
    scale = abs(e0) if e0 else 1.0
    drift = [(r["energy"] - e0) / scale for r in samples]

    plt.figure(figsize=(8, 5))
    plt.plot(times, drift)
    plt.xlabel("Time (s)")
    plt.ylabel("Relative Energy Drift")
    plt.title("Energy Drift")

    save_path = os.path.join(output_dir, "energy_drift.png")
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close()

    print(f"[OK] Saved: {save_path}")
    return save_path
