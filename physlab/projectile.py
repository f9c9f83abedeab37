"""Projectile motion under gravity and quadratic air drag.

The integrator is explicit (forward) Euler with a fixed step. Velocity is
updated first and the new velocity is used to advance the position.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .units import deg_to_rad, ensure_between, ensure_finite, ensure_positive

logger = logging.getLogger(__name__)

G_M_S2 = 9.81
MAX_STEPS = 1_000_000


@dataclass(frozen=True)
class BodyModel:
    """Fixed physical constants of the projectile and the air around it."""

    rho_kg_m3: float = 1.225
    Cd: float = 0.47
    area_m2: float = 0.01
    mass_kg: float = 1.0
    g_m_s2: float = G_M_S2

    @property
    def drag_factor(self) -> float:
        """Drag acceleration per unit squared speed, 0.5*rho*Cd*A/m."""
        return 0.5 * self.rho_kg_m3 * self.Cd * self.area_m2 / self.mass_kg


DEFAULT_BODY = BodyModel()


@dataclass(frozen=True)
class ProjectileParams:
    """Launch conditions: speed [m/s], angle [deg], height [m], step [s]."""

    v0: float
    angle: float
    h0: float = 0.0
    dt: float = 0.01

    def validate(self) -> "ProjectileParams":
        ensure_positive("v0", float(self.v0))
        ensure_between("angle", float(self.angle), 0.0, 90.0)
        ensure_finite("h0", float(self.h0))
        ensure_positive("dt", float(self.dt))
        return self


@dataclass(frozen=True)
class TrajectoryPoint:
    x: float
    y: float
    v: float
    t: float


@dataclass(frozen=True)
class ProjectileResult:
    """Outcome of one projectile run.

    `truncated` is set when the step cap stopped the run while the body was
    still above ground.
    """

    trajectory: list[TrajectoryPoint] = field(repr=False)
    range: float
    max_height: float
    final_velocity: float
    time_of_flight: float
    step_count: int
    truncated: bool = False

    def as_array(self) -> np.ndarray:
        """Return trajectory as an (N, 4) array of x, y, v, t."""
        if not self.trajectory:
            return np.zeros((0, 4), dtype=float)
        return np.asarray([(p.x, p.y, p.v, p.t) for p in self.trajectory], dtype=float)

    def summary(self) -> dict[str, Any]:
        """Scalar result fields, without the trajectory."""
        return {
            "range": float(self.range),
            "maxHeight": float(self.max_height),
            "finalVelocity": float(self.final_velocity),
            "timeOfFlight": float(self.time_of_flight),
            "simulationSteps": int(self.step_count),
            "truncated": bool(self.truncated),
        }


def simulate(
    params: ProjectileParams,
    *,
    body: BodyModel = DEFAULT_BODY,
    max_steps: int = MAX_STEPS,
) -> ProjectileResult:
    """Integrate a launch until the body drops below ground level."""
    params.validate()
    if max_steps < 1:
        raise ValueError(f"max_steps must be >= 1, got {max_steps}.")

    dt = float(params.dt)
    k = body.drag_factor
    g = body.g_m_s2

    angle_rad = deg_to_rad(params.angle)
    vx = float(params.v0) * math.cos(angle_rad)
    vy = float(params.v0) * math.sin(angle_rad)
    x = 0.0
    y = float(params.h0)
    t = 0.0

    trajectory: list[TrajectoryPoint] = []
    max_height = y
    steps = 0
    truncated = False

    while y >= 0.0:
        v = math.sqrt(vx * vx + vy * vy)
        trajectory.append(TrajectoryPoint(x=x, y=y, v=v, t=t))
        if y > max_height:
            max_height = y

        # Drag direction is undefined at rest.
        if v == 0.0:
            ax = 0.0
            ay = -g
        else:
            drag_acc = k * v * v
            ax = -drag_acc * (vx / v)
            ay = -g - drag_acc * (vy / v)

        vx += ax * dt
        vy += ay * dt
        x += vx * dt
        y += vy * dt
        t += dt
        steps += 1

        if steps >= max_steps and y >= 0.0:
            truncated = True
            break

    result = ProjectileResult(
        trajectory=trajectory,
        range=x,
        max_height=max_height,
        final_velocity=math.sqrt(vx * vx + vy * vy),
        time_of_flight=t,
        step_count=steps,
        truncated=truncated,
    )
    if truncated:
        logger.warning(
            "Projectile run stopped at the %d step cap (dt=%g, t=%g s, y=%g m).",
            max_steps,
            dt,
            t,
            y,
        )
    logger.debug(
        "Projectile run: dt=%g steps=%d range=%.6g m max_height=%.6g m",
        dt,
        steps,
        result.range,
        result.max_height,
    )
    return result
