"""Typed models for deck-level configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ..heat import HeatParams
from ..projectile import ProjectileParams

SimulationKind = Literal["projectile", "heat", "compare"]

DEFAULT_TIME_STEPS: tuple[float, ...] = (1.0, 0.1, 0.01, 0.001, 0.0001)
EXPORT_FORMATS: tuple[str, ...] = ("csv", "json", "npy", "png")


@dataclass(frozen=True)
class ExportConfig:
    """Artifact export configuration."""

    outdir: str = "outputs/run"
    formats: list[str] = field(default_factory=lambda: ["csv", "json"])


@dataclass(frozen=True)
class CompareConfig:
    """Step-size comparison for one launch."""

    v0: float
    angle: float
    h0: float = 0.0
    time_steps: tuple[float, ...] = DEFAULT_TIME_STEPS


@dataclass(frozen=True)
class RunDeck:
    """One parsed run deck; exactly one of the params fields is set."""

    simulation: SimulationKind
    projectile: ProjectileParams | None = None
    heat: HeatParams | None = None
    compare: CompareConfig | None = None
    export: ExportConfig | None = None
