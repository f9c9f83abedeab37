"""Deck parsing tests."""

from __future__ import annotations

import pytest

from physlab.config import DEFAULT_TIME_STEPS, parse_deck, parse_heat_params, parse_projectile_params
from physlab.errors import ValidationError
from physlab.materials import get_material


pytestmark = pytest.mark.unit


def test_parse_projectile_deck() -> None:
    deck = parse_deck(
        {
            "simulation": "projectile",
            "params": {"v0": 50, "angle": 45, "dt": 0.01},
            "export": {"outdir": "out/p", "formats": ["CSV", "png"]},
        }
    )
    assert deck.simulation == "projectile"
    assert deck.projectile is not None
    assert deck.projectile.h0 == 0.0
    assert deck.export is not None
    assert deck.export.formats == ["csv", "png"]
    assert deck.heat is None


def test_projectile_params_require_dt() -> None:
    with pytest.raises(ValidationError, match="Missing required key 'dt'"):
        parse_projectile_params({"v0": 10, "angle": 10})


def test_projectile_angle_out_of_range_rejected() -> None:
    with pytest.raises(ValidationError, match="angle must be in"):
        parse_projectile_params({"v0": 10, "angle": 120, "dt": 0.1})


def test_heat_params_accept_deck_and_wire_keys() -> None:
    snake = parse_heat_params({"dt": 0.02, "dx": 0.05, "total_time": 3.0, "left_boundary": 50.0})
    camel = parse_heat_params({"timeStep": 0.02, "spaceStep": 0.05, "totalTime": 3.0, "leftBoundary": 50.0})
    assert snake == camel
    assert snake.right_boundary == 0.0
    assert snake.alpha == pytest.approx(9.7e-5)


def test_heat_material_sets_alpha() -> None:
    params = parse_heat_params({"material": "copper"})
    assert params.alpha == pytest.approx(get_material("copper").diffusivity_m2_s)
    with pytest.raises(ValidationError, match="either 'alpha' or 'material'"):
        parse_heat_params({"material": "copper", "alpha": 1.0e-4})


def test_compare_deck_defaults_time_steps() -> None:
    deck = parse_deck({"simulation": "compare", "params": {"v0": 50, "angle": 45}})
    assert deck.compare is not None
    assert deck.compare.time_steps == DEFAULT_TIME_STEPS
    assert deck.export is None


def test_compare_deck_rejects_nonpositive_step() -> None:
    with pytest.raises(ValidationError, match=r"time_steps\[1\] must be > 0"):
        parse_deck(
            {
                "simulation": "compare",
                "params": {"v0": 50, "angle": 45},
                "compare": {"time_steps": [0.1, 0.0]},
            }
        )


def test_unknown_simulation_and_format_rejected() -> None:
    with pytest.raises(ValidationError, match="deck.simulation must be one of"):
        parse_deck({"simulation": "orbit", "params": {}})
    with pytest.raises(ValidationError, match="formats"):
        parse_deck(
            {
                "simulation": "heat",
                "params": {},
                "export": {"formats": ["vtk"]},
            }
        )
