"""Simulation service built on top of the two engines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generator, Iterator, Mapping

from .. import heat, projectile
from ..config.models import CompareConfig
from ..protocol import decode_heat_request, decode_projectile_request, encode_frame, encode_projectile_result
from .compare_service import StepSizeRun, sweep_time_steps


@dataclass(slots=True)
class SimulationService:
    """Entry points shared by the CLI, deck runner and server adapters.

    Holds run limits only; every call builds fresh engine state.
    """

    max_steps: int = projectile.MAX_STEPS
    sample_every: int = heat.SAMPLE_EVERY

    def run_projectile(self, params: projectile.ProjectileParams) -> projectile.ProjectileResult:
        return projectile.simulate(params, max_steps=self.max_steps)

    def run_projectile_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Decode a request payload, simulate, and encode the response."""
        params = decode_projectile_request(payload)
        return encode_projectile_result(self.run_projectile(params))

    def stream_heat(self, params: heat.HeatParams) -> Iterator[heat.TemperatureFrame]:
        return heat.run(params, sample_every=self.sample_every)

    def stream_heat_payload(self, payload: Mapping[str, Any]) -> Generator[dict[str, Any], None, None]:
        """Decode a parameter message and return a lazy stream of frame messages.

        Validation and stability errors are raised here, before any frame.
        """
        frames = self.stream_heat(decode_heat_request(payload))
        return (encode_frame(frame) for frame in frames)

    def run_heat(self, params: heat.HeatParams) -> list[heat.TemperatureFrame]:
        return list(self.stream_heat(params))

    def compare_time_steps(self, cfg: CompareConfig) -> list[StepSizeRun]:
        return sweep_time_steps(cfg.v0, cfg.angle, cfg.h0, cfg.time_steps, max_steps=self.max_steps)


def build_default_simulation_service() -> SimulationService:
    """Create SimulationService with the default engine limits."""
    return SimulationService()
