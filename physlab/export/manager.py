"""Export manager orchestrating format-specific writers."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable, Sequence

from ..grid import Grid1D
from ..heat import HeatParams, TemperatureFrame, courant_number, frames_to_array
from ..projectile import ProjectileParams, ProjectileResult
from ..services.compare_service import COMPARISON_COLUMNS, StepSizeRun, build_comparison_rows
from .csv_writer import save_comparison_csv, save_frames_csv, save_trajectory_csv
from .npy_writer import save_array_npy
from .png_writer import save_center_temp_png, save_temperature_map_png, save_trajectory_png
from .summary_writer import save_summary_csv, save_summary_json

VALID_FORMATS = frozenset({"csv", "json", "npy", "png"})


def _requested(formats: Iterable[str]) -> set[str]:
    requested = {str(fmt).lower() for fmt in formats}
    unknown = requested - VALID_FORMATS
    if unknown:
        raise ValueError(f"Unsupported export format(s): {sorted(unknown)}")
    return requested


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def export_projectile(
    result: ProjectileResult,
    params: ProjectileParams,
    outdir: str | Path,
    formats: Iterable[str],
) -> list[Path]:
    """Export one projectile run."""
    requested = _requested(formats)
    out = _ensure_outdir(outdir)
    written: list[Path] = []

    if "csv" in requested:
        written.append(save_trajectory_csv(result, out))
        written.append(save_summary_csv(result.summary(), out))
    if "npy" in requested:
        written.append(save_array_npy(result.as_array(), out, "trajectory.npy"))
    if "json" in requested:
        summary: dict[str, Any] = {"params": asdict(params)}
        summary.update(result.summary())
        written.append(save_summary_json(summary, out))
    if "png" in requested:
        written.append(save_trajectory_png([(f"dt = {params.dt:g} s", result)], out))
    return written


def export_heat(
    frames: Sequence[TemperatureFrame],
    params: HeatParams,
    outdir: str | Path,
    formats: Iterable[str],
) -> list[Path]:
    """Export the frames of one heat run."""
    requested = _requested(formats)
    out = _ensure_outdir(outdir)
    grid = Grid1D.from_length(params.length, params.dx)
    written: list[Path] = []

    if "csv" in requested:
        written.append(save_frames_csv(frames, grid.x, out))
    if "npy" in requested:
        written.append(save_array_npy(frames_to_array(list(frames)), out, "temperatures.npy"))
    if "json" in requested:
        summary: dict[str, Any] = {
            "params": asdict(params),
            "courant": courant_number(params.alpha, params.dt, params.dx),
            "nodes": grid.n,
            "frames": len(frames),
            "final_time": float(frames[-1].time) if frames else 0.0,
            "final_center_temp": float(frames[-1].center_temp) if frames else None,
        }
        written.append(save_summary_json(summary, out))
    if "png" in requested:
        written.append(save_temperature_map_png(frames, grid.x, out))
        written.append(save_center_temp_png(frames, out))
    return written


def export_comparison(
    runs: Sequence[StepSizeRun],
    outdir: str | Path,
    formats: Iterable[str],
) -> list[Path]:
    """Export a step-size comparison."""
    requested = _requested(formats)
    out = _ensure_outdir(outdir)
    rows = build_comparison_rows(runs)
    written: list[Path] = []

    if "csv" in requested:
        written.append(save_comparison_csv(rows, COMPARISON_COLUMNS, out))
    if "npy" in requested:
        for run in runs:
            written.append(save_array_npy(run.result.as_array(), out, f"trajectory_dt{run.dt:g}.npy"))
    if "json" in requested:
        written.append(save_summary_json({"runs": rows}, out))
    if "png" in requested:
        labelled = [(f"dt = {run.dt:g} s", run.result) for run in runs]
        written.append(save_trajectory_png(labelled, out, filename="comparison.png", title="Step size comparison"))
    return written
