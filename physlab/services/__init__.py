"""Service-layer entry points for physlab."""

from .compare_service import (
    COMPARISON_COLUMNS,
    StepSizeRun,
    build_comparison_rows,
    format_comparison_table,
    range_deltas,
    sweep_time_steps,
)
from .simulation_service import SimulationService, build_default_simulation_service

__all__ = [
    "COMPARISON_COLUMNS",
    "SimulationService",
    "StepSizeRun",
    "build_comparison_rows",
    "build_default_simulation_service",
    "format_comparison_table",
    "range_deltas",
    "sweep_time_steps",
]
