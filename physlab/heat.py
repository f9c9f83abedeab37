"""Explicit finite-difference solver for 1D heat conduction.

Forward-time, centered-space scheme on a uniform grid with fixed (Dirichlet)
end temperatures:

    T_i^{k+1} = T_i^k + r * (T_{i+1}^k - 2 T_i^k + T_{i-1}^k),  r = alpha*dt/dx^2

The scheme is stable for r <= 0.5. Stability is checked once, before any
buffer is allocated.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterator

import numpy as np

from .errors import InstabilityError
from .grid import Grid1D
from .units import ensure_finite, ensure_positive

logger = logging.getLogger(__name__)

STABILITY_LIMIT = 0.5
SAMPLE_EVERY = 10

# Tolerance for floor(total_time / dt) so that 0.3 / 0.1 counts as 3 steps.
_FLOOR_TOL = 1.0e-12


@dataclass(frozen=True)
class HeatParams:
    """Rod and run parameters, SI units (m, s, degC, m^2/s)."""

    length: float = 1.0
    dt: float = 0.01
    dx: float = 0.01
    total_time: float = 2.0
    initial_temp: float = 20.0
    left_boundary: float = 100.0
    right_boundary: float = 0.0
    alpha: float = 9.7e-5

    def validate(self) -> "HeatParams":
        ensure_positive("length", float(self.length))
        ensure_positive("dt", float(self.dt))
        ensure_positive("dx", float(self.dx))
        ensure_positive("total_time", float(self.total_time))
        ensure_positive("alpha", float(self.alpha))
        ensure_finite("initial_temp", float(self.initial_temp))
        ensure_finite("left_boundary", float(self.left_boundary))
        ensure_finite("right_boundary", float(self.right_boundary))
        return self


@dataclass(frozen=True)
class TemperatureFrame:
    """Snapshot of the temperature field at one instant."""

    temperatures: np.ndarray = field(repr=False)
    time: float
    center_temp: float
    stable: bool = True

    def to_message(self) -> dict[str, Any]:
        return {
            "temperatures": [float(v) for v in self.temperatures],
            "time": float(self.time),
            "centerTemp": float(self.center_temp),
            "stable": bool(self.stable),
        }


def courant_number(alpha: float, dt: float, dx: float) -> float:
    """Dimensionless ratio alpha*dt/dx^2."""
    return float(alpha) * float(dt) / (float(dx) * float(dx))


def check_stability(params: HeatParams) -> float:
    """Return the Courant number, raising InstabilityError above the limit."""
    r = courant_number(params.alpha, params.dt, params.dx)
    if r > STABILITY_LIMIT:
        raise InstabilityError(r, STABILITY_LIMIT)
    return r


def step_count(total_time: float, dt: float) -> int:
    """Number of full time steps that fit into total_time."""
    return int(math.floor(float(total_time) / float(dt) + _FLOOR_TOL))


def _is_sample_step(step: int, n_steps: int, every: int) -> bool:
    return step % every == 0 or step == n_steps - 1


def run(params: HeatParams, *, sample_every: int = SAMPLE_EVERY) -> Iterator[TemperatureFrame]:
    """Validate params and return a lazy stream of temperature frames.

    Raises ValidationError or InstabilityError before any frame exists. The
    returned iterator performs the time stepping as it is consumed; dropping
    it stops the computation.
    """
    params.validate()
    if sample_every < 1:
        raise ValueError(f"sample_every must be >= 1, got {sample_every}.")
    r = check_stability(params)
    grid = Grid1D.from_length(params.length, params.dx)
    n_steps = step_count(params.total_time, params.dt)
    logger.debug("Heat run: n=%d r=%.6g steps=%d", grid.n, r, n_steps)
    return _iterate(params, grid, r, n_steps, sample_every)


def _iterate(
    params: HeatParams,
    grid: Grid1D,
    r: float,
    n_steps: int,
    sample_every: int,
) -> Iterator[TemperatureFrame]:
    left = float(params.left_boundary)
    right = float(params.right_boundary)
    center = grid.center_index
    inner = grid.interior

    T = np.full(grid.n, float(params.initial_temp), dtype=float)
    T_next = np.empty_like(T)
    T[0] = left
    T[-1] = right

    t = 0.0
    yield TemperatureFrame(temperatures=T.copy(), time=t, center_temp=float(T[center]))

    for step in range(n_steps):
        T_next[inner] = T[inner] + r * (T[2:] - 2.0 * T[inner] + T[:-2])
        T_next[0] = left
        T_next[-1] = right
        T, T_next = T_next, T
        t += float(params.dt)

        if _is_sample_step(step, n_steps, sample_every):
            yield TemperatureFrame(temperatures=T.copy(), time=t, center_temp=float(T[center]))


def run_all(params: HeatParams, *, sample_every: int = SAMPLE_EVERY) -> list[TemperatureFrame]:
    """Run to completion and collect every emitted frame."""
    return list(run(params, sample_every=sample_every))


def frames_to_array(frames: list[TemperatureFrame]) -> np.ndarray:
    """Stack frame temperatures into a (frames, n) array."""
    if not frames:
        raise ValueError("frames is empty.")
    return np.vstack([np.asarray(f.temperatures, dtype=float) for f in frames])
