"""Uniform 1D grid definition."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .units import ensure_positive

# Absorbs round-off in length/dx so that e.g. 1.1/0.1 yields 11 intervals.
# A positive length always spans at least one interval.
_CEIL_TOL = 1.0e-12


def grid_size(length: float, dx: float) -> int:
    """Number of nodes needed to cover [0, length] with spacing dx."""
    ensure_positive("length", float(length))
    ensure_positive("dx", float(dx))
    intervals = int(math.ceil(float(length) / float(dx) - _CEIL_TOL))
    return max(intervals, 1) + 1


@dataclass(frozen=True)
class Grid1D:
    """Uniform 1D grid with nodes at x[i] = i * dx.

    The last node sits at (n - 1) * dx, which can exceed `length` when the
    length is not a multiple of dx.
    """

    length: float
    dx: float
    n: int
    x: np.ndarray

    @classmethod
    def from_length(cls, length: float, dx: float) -> "Grid1D":
        """Construct a grid from rod length and node spacing."""
        n = grid_size(length, dx)
        x = np.arange(n, dtype=float) * float(dx)
        return cls(length=float(length), dx=float(dx), n=n, x=x)

    @property
    def center_index(self) -> int:
        """Index of the node reported as the center temperature."""
        return self.n // 2

    @property
    def interior(self) -> slice:
        """Slice of nodes evolved by the scheme."""
        return slice(1, self.n - 1)

    def nearest_index(self, x: float) -> int:
        """Nearest node index for a requested coordinate in m."""
        return int(np.argmin(np.abs(self.x - float(x))))
