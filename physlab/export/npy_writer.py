"""NumPy array writer."""

from __future__ import annotations

from pathlib import Path

import numpy as np


def save_array_npy(arr: np.ndarray, outdir: str | Path, filename: str) -> Path:
    """Save a float array as .npy."""
    out = Path(outdir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / filename
    np.save(path, np.asarray(arr, dtype=float))
    return path
