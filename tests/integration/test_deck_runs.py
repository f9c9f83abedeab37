"""Deck execution and export integration tests."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import numpy as np
import pytest
import yaml

from physlab.deck import run_deck, run_deck_data
from physlab.errors import DeckError


pytestmark = pytest.mark.integration


def _write_deck(tmp_path: Path, deck: dict, name: str = "deck.yaml") -> Path:
    path = tmp_path / name
    path.write_text(yaml.safe_dump(deck, sort_keys=False), encoding="utf-8")
    return path


def test_projectile_deck_exports_all_formats(tmp_path: Path) -> None:
    deck_path = _write_deck(
        tmp_path,
        {
            "simulation": "projectile",
            "params": {"v0": 50.0, "angle": 45.0, "h0": 0.0, "dt": 0.01},
            "export": {"outdir": "outputs/projectile", "formats": ["csv", "json", "npy", "png"]},
        },
    )
    outcome = run_deck(deck_path)
    outdir = tmp_path / "outputs" / "projectile"

    assert outcome.outdir == outdir.resolve()
    assert outcome.projectile is not None
    for name in ("trajectory.csv", "summary.csv", "summary.json", "trajectory.npy", "trajectory.png"):
        assert (outdir / name).exists(), name

    with (outdir / "trajectory.csv").open("r", encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == outcome.projectile.step_count
    assert float(rows[0]["x_m"]) == 0.0

    summary = json.loads((outdir / "summary.json").read_text(encoding="utf-8"))
    assert summary["params"]["v0"] == 50.0
    assert summary["range"] == pytest.approx(outcome.projectile.range)

    arr = np.load(outdir / "trajectory.npy")
    assert arr.shape == (outcome.projectile.step_count, 4)


def test_heat_deck_exports_frames(tmp_path: Path) -> None:
    deck_path = _write_deck(
        tmp_path,
        {
            "simulation": "heat",
            "params": {
                "material": "aluminum",
                "length": 1.0,
                "dx": 0.1,
                "dt": 0.01,
                "total_time": 1.0,
                "left_boundary": 100.0,
                "right_boundary": 0.0,
            },
            "export": {"formats": ["csv", "json", "npy", "png"]},
        },
    )
    outdir = tmp_path / "override"
    outcome = run_deck(deck_path, out_override=outdir)

    assert len(outcome.frames) == 12
    temps = np.load(outdir / "temperatures.npy")
    assert temps.shape == (12, 11)
    np.testing.assert_array_equal(temps[:, 0], 100.0)
    np.testing.assert_array_equal(temps[:, -1], 0.0)

    with (outdir / "frames.csv").open("r", encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0][:2] == ["time_s", "center_temp_C"]
    assert len(rows) == 13
    assert len(rows[1]) == 2 + 11

    summary = json.loads((outdir / "summary.json").read_text(encoding="utf-8"))
    assert summary["nodes"] == 11
    assert summary["frames"] == 12
    assert (outdir / "temperature_map.png").exists()
    assert (outdir / "center_temp.png").exists()


def test_compare_deck_writes_table(tmp_path: Path) -> None:
    outcome = run_deck_data(
        {
            "simulation": "compare",
            "params": {"v0": 30.0, "angle": 40.0},
            "compare": {"time_steps": [0.1, 0.01]},
            "export": {"formats": ["csv", "json", "png"]},
        },
        deck_path=tmp_path / "inline.yaml",
        out_override=tmp_path / "cmp",
    )
    assert [r.dt for r in outcome.comparison] == [0.1, 0.01]

    with (tmp_path / "cmp" / "comparison.csv").open("r", encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    assert [float(r["dt"]) for r in rows] == [0.1, 0.01]
    assert rows[0]["rangeDelta"] == "nan"

    summary = json.loads((tmp_path / "cmp" / "summary.json").read_text(encoding="utf-8"))
    assert summary["runs"][0]["rangeDelta"] is None
    assert (tmp_path / "cmp" / "comparison.png").exists()


def test_deck_without_export_writes_nothing(tmp_path: Path) -> None:
    outcome = run_deck_data(
        {"simulation": "projectile", "params": {"v0": 10.0, "angle": 20.0, "dt": 0.01}},
        deck_path=tmp_path / "inline.yaml",
    )
    assert outcome.exports == []
    assert outcome.outdir is None
    assert list(tmp_path.iterdir()) == []


def test_unstable_heat_deck_raises_deck_error(tmp_path: Path) -> None:
    deck_path = _write_deck(
        tmp_path,
        {"simulation": "heat", "params": {"alpha": 1.0, "dt": 0.01, "dx": 0.1, "total_time": 1.0}},
    )
    with pytest.raises(DeckError, match="unstable parameters"):
        run_deck(deck_path)


def test_missing_and_empty_decks(tmp_path: Path) -> None:
    with pytest.raises(DeckError, match="not found"):
        run_deck(tmp_path / "missing.yaml")
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(DeckError, match="empty"):
        run_deck(empty)
