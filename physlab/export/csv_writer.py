"""CSV writers for trajectories, temperature frames and comparison tables."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Sequence

import numpy as np

from ..heat import TemperatureFrame
from ..projectile import ProjectileResult


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_trajectory_csv(result: ProjectileResult, outdir: str | Path, filename: str = "trajectory.csv") -> Path:
    """Save trajectory points as x, y, v, t rows."""
    path = _ensure_outdir(outdir) / filename
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["x_m", "y_m", "v_m_s", "t_s"])
        for p in result.trajectory:
            writer.writerow([f"{p.x:.12g}", f"{p.y:.12g}", f"{p.v:.12g}", f"{p.t:.12g}"])
    return path


def save_frames_csv(
    frames: Sequence[TemperatureFrame],
    x_m: np.ndarray,
    outdir: str | Path,
    filename: str = "frames.csv",
) -> Path:
    """Save one row per frame: time, center temperature, then every node."""
    x_arr = np.asarray(x_m, dtype=float)
    path = _ensure_outdir(outdir) / filename
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["time_s", "center_temp_C"] + [f"T_x{float(x):.6g}" for x in x_arr])
        for idx, frame in enumerate(frames):
            temps = np.asarray(frame.temperatures, dtype=float)
            if temps.shape != x_arr.shape:
                raise ValueError(f"frames[{idx}] has {temps.size} nodes, expected {x_arr.size}.")
            writer.writerow(
                [f"{frame.time:.12g}", f"{frame.center_temp:.12g}"] + [f"{float(v):.12g}" for v in temps]
            )
    return path


def save_comparison_csv(
    rows: Sequence[dict[str, float]],
    columns: Sequence[str],
    outdir: str | Path,
    filename: str = "comparison.csv",
) -> Path:
    """Save step-size comparison rows."""
    path = _ensure_outdir(outdir) / filename
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(columns))
        writer.writeheader()
        for row in rows:
            writer.writerow({key: f"{float(row[key]):.12g}" for key in columns})
    return path
