"""Step-size comparison tests."""

from __future__ import annotations

import math

import pytest

from physlab.services import build_comparison_rows, format_comparison_table, range_deltas, sweep_time_steps


pytestmark = pytest.mark.unit


def test_sweep_keeps_order_and_converges() -> None:
    runs = sweep_time_steps(50.0, 45.0, 0.0, [0.1, 0.01, 0.001])
    assert [r.dt for r in runs] == [0.1, 0.01, 0.001]

    deltas = range_deltas(runs)
    assert math.isnan(deltas[0])
    assert deltas[2] < deltas[1]

    steps = [r.result.step_count for r in runs]
    assert steps[0] < steps[1] < steps[2]


def test_rows_and_table() -> None:
    runs = sweep_time_steps(20.0, 30.0, 1.0, [0.05, 0.01])
    rows = build_comparison_rows(runs)
    assert rows[0]["dt"] == 0.05
    assert rows[1]["simulationSteps"] == float(runs[1].result.step_count)
    assert rows[1]["truncated"] == 0.0

    table = format_comparison_table(rows)
    lines = table.splitlines()
    assert len(lines) == 3
    assert "range [m]" in lines[0]


def test_truncated_runs_are_marked_in_table() -> None:
    runs = sweep_time_steps(50.0, 45.0, 0.0, [0.01], max_steps=3)
    rows = build_comparison_rows(runs)
    assert rows[0]["truncated"] == 1.0
    assert "(truncated)" in format_comparison_table(rows)
