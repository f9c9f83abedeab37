"""PNG writers for trajectories and temperature histories."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt
import numpy as np

from ..heat import TemperatureFrame, frames_to_array
from ..projectile import ProjectileResult

_COLORS = ("#FF6B6B", "#4ECDC4", "#45B7D1", "#FFA07A", "#98D8C8")


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_trajectory_png(
    runs: Sequence[tuple[str, ProjectileResult]],
    outdir: str | Path,
    filename: str = "trajectory.png",
    title: str = "Projectile trajectory",
) -> Path:
    """Plot y(x) for one or more labelled runs on shared axes."""
    if not runs:
        raise ValueError("No trajectories to plot.")

    path = _ensure_outdir(outdir) / filename
    fig, ax = plt.subplots(figsize=(7.2, 4.0), dpi=140)
    for idx, (label, result) in enumerate(runs):
        arr = result.as_array()
        if arr.size == 0:
            continue
        ax.plot(arr[:, 0], arr[:, 1], color=_COLORS[idx % len(_COLORS)], lw=1.8, label=label)
    ax.axhline(0.0, color="0.4", lw=0.8)
    ax.set_xlabel("range [m]")
    ax.set_ylabel("height [m]")
    ax.set_title(title)
    ax.grid(alpha=0.3)
    if len(runs) > 1:
        ax.legend(loc="best", fontsize=8)
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path


def save_temperature_map_png(
    frames: Sequence[TemperatureFrame],
    x_m: np.ndarray,
    outdir: str | Path,
    filename: str = "temperature_map.png",
) -> Path:
    """Save temperature as a (time, position) heatmap."""
    temps = frames_to_array(list(frames))
    x_arr = np.asarray(x_m, dtype=float)
    t_arr = np.asarray([f.time for f in frames], dtype=float)

    path = _ensure_outdir(outdir) / filename
    fig, ax = plt.subplots(figsize=(7.2, 3.6), dpi=150)
    im = ax.imshow(
        temps,
        extent=(float(x_arr[0]), float(x_arr[-1]), float(t_arr[-1]), float(t_arr[0])),
        aspect="auto",
        origin="upper",
        cmap="inferno",
    )
    ax.set_xlabel("x [m]")
    ax.set_ylabel("time [s]")
    ax.set_title("Temperature")
    cbar = fig.colorbar(im, ax=ax)
    cbar.set_label("T [degC]")
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path


def save_center_temp_png(
    frames: Sequence[TemperatureFrame],
    outdir: str | Path,
    filename: str = "center_temp.png",
) -> Path:
    """Save center temperature vs time."""
    if not frames:
        raise ValueError("Frames are empty; nothing to plot.")

    t = np.asarray([f.time for f in frames], dtype=float)
    center = np.asarray([f.center_temp for f in frames], dtype=float)

    path = _ensure_outdir(outdir) / filename
    fig, ax = plt.subplots(figsize=(7.2, 3.0), dpi=140)
    ax.plot(t, center, color="#1f77b4", lw=1.8)
    ax.set_xlabel("time [s]")
    ax.set_ylabel("center T [degC]")
    ax.set_title("Center temperature")
    ax.grid(alpha=0.3)
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
