"""Step-size comparison helpers shared by the CLI, decks and exports."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..projectile import MAX_STEPS, ProjectileParams, ProjectileResult, simulate

COMPARISON_COLUMNS: tuple[str, ...] = (
    "dt",
    "range",
    "maxHeight",
    "finalVelocity",
    "timeOfFlight",
    "simulationSteps",
    "truncated",
    "rangeDelta",
)


@dataclass(frozen=True)
class StepSizeRun:
    dt: float
    result: ProjectileResult


def sweep_time_steps(
    v0: float,
    angle: float,
    h0: float,
    time_steps: Iterable[float],
    *,
    max_steps: int = MAX_STEPS,
) -> list[StepSizeRun]:
    """Run one launch once per step size, keeping the given order."""
    runs: list[StepSizeRun] = []
    for dt in time_steps:
        params = ProjectileParams(v0=v0, angle=angle, h0=h0, dt=float(dt))
        runs.append(StepSizeRun(dt=float(dt), result=simulate(params, max_steps=max_steps)))
    return runs


def range_deltas(runs: Sequence[StepSizeRun]) -> list[float]:
    """Absolute range change between consecutive runs (NaN for the first)."""
    deltas: list[float] = []
    prev: float | None = None
    for run in runs:
        cur = float(run.result.range)
        deltas.append(math.nan if prev is None else abs(cur - prev))
        prev = cur
    return deltas


def build_comparison_rows(runs: Sequence[StepSizeRun]) -> list[dict[str, float]]:
    """Build tabular rows, one per step size."""
    rows: list[dict[str, float]] = []
    for run, delta in zip(runs, range_deltas(runs)):
        row: dict[str, float] = {"dt": run.dt}
        for key, value in run.result.summary().items():
            row[key] = float(value)
        row["rangeDelta"] = delta
        rows.append(row)
    return rows


def format_comparison_table(rows: Sequence[dict[str, float]]) -> str:
    """Render comparison rows as a fixed-width text table."""
    header = ["dt [s]", "range [m]", "maxHeight [m]", "finalV [m/s]", "tof [s]", "steps"]
    lines = ["  ".join(f"{h:>14}" for h in header)]
    for row in rows:
        cells = [
            f"{row['dt']:>14g}",
            f"{row['range']:>14.2f}",
            f"{row['maxHeight']:>14.2f}",
            f"{row['finalVelocity']:>14.2f}",
            f"{row['timeOfFlight']:>14.2f}",
            f"{int(row['simulationSteps']):>14d}",
        ]
        line = "  ".join(cells)
        if row.get("truncated"):
            line += "  (truncated)"
        lines.append(line)
    return "\n".join(lines)
