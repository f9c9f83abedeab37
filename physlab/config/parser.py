"""Config parsing and translation utilities."""

from __future__ import annotations

from typing import Any, Mapping, cast

from ..errors import ValidationError
from ..heat import HeatParams
from ..materials import get_material
from ..projectile import ProjectileParams
from .models import DEFAULT_TIME_STEPS, EXPORT_FORMATS, CompareConfig, ExportConfig, RunDeck, SimulationKind
from .validators import as_mapping, ensure_choice, opt_mapping, pick, required, to_float, to_float_list

SIMULATION_KINDS: tuple[str, ...] = ("projectile", "heat", "compare")

# Field name -> accepted keys (deck snake_case first, then wire camelCase).
HEAT_KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "length": ("length",),
    "dt": ("dt", "time_step", "timeStep"),
    "dx": ("dx", "space_step", "spaceStep"),
    "total_time": ("total_time", "totalTime"),
    "initial_temp": ("initial_temp", "initialTemp"),
    "left_boundary": ("left_boundary", "leftBoundary"),
    "right_boundary": ("right_boundary", "rightBoundary"),
    "alpha": ("alpha",),
}


def parse_projectile_params(
    payload: Mapping[str, Any],
    context: str = "params",
    *,
    require_dt: bool = True,
) -> ProjectileParams:
    """Extract validated projectile launch parameters."""
    v0 = to_float(required(payload, "v0", context), "v0", context)
    angle = to_float(required(payload, "angle", context), "angle", context)
    h0 = to_float(payload.get("h0", 0.0), "h0", context)
    if require_dt:
        dt = to_float(required(payload, "dt", context), "dt", context)
    else:
        dt = to_float(payload.get("dt", ProjectileParams.dt), "dt", context)
    return ProjectileParams(v0=v0, angle=angle, h0=h0, dt=dt).validate()


def parse_heat_params(payload: Mapping[str, Any], context: str = "params") -> HeatParams:
    """Extract validated heat parameters; missing keys take HeatParams defaults."""
    values: dict[str, float] = {}
    for name, aliases in HEAT_KEY_ALIASES.items():
        found = pick(payload, aliases)
        if found is not None:
            key, raw = found
            values[name] = to_float(raw, key, context)

    if "material" in payload:
        if "alpha" in values:
            raise ValidationError(f"{context} accepts either 'alpha' or 'material', not both.")
        values["alpha"] = get_material(str(payload["material"])).diffusivity_m2_s

    return HeatParams(**values).validate()


def parse_export_config(raw: Any, context: str = "deck.export") -> ExportConfig | None:
    """Parse optional export section."""
    if raw is None:
        return None
    section = as_mapping(raw, context)
    formats_raw = section.get("formats", ["csv", "json"])
    if not isinstance(formats_raw, list) or not formats_raw:
        raise ValidationError(f"{context}.formats must be a non-empty list.")
    formats = [ensure_choice(f"{context}.formats[{idx}]", fmt, EXPORT_FORMATS) for idx, fmt in enumerate(formats_raw)]
    return ExportConfig(outdir=str(section.get("outdir", "outputs/run")), formats=formats)


def parse_compare_config(params: Mapping[str, Any], raw: Any, context: str = "deck.compare") -> CompareConfig:
    """Parse launch params plus the list of step sizes to compare."""
    launch = parse_projectile_params(params, "deck.params", require_dt=False)
    section = opt_mapping(raw, context)
    if "time_steps" in section:
        steps = to_float_list(section["time_steps"], "time_steps", context)
    else:
        steps = list(DEFAULT_TIME_STEPS)
    for idx, dt in enumerate(steps):
        if dt <= 0.0:
            raise ValidationError(f"{context}.time_steps[{idx}] must be > 0, got {dt}.")
    return CompareConfig(v0=launch.v0, angle=launch.angle, h0=launch.h0, time_steps=tuple(steps))


def parse_deck(deck: Mapping[str, Any]) -> RunDeck:
    """Parse a deck payload into a typed RunDeck."""
    kind = ensure_choice("deck.simulation", required(deck, "simulation", "deck"), SIMULATION_KINDS)
    params = as_mapping(required(deck, "params", "deck"), "deck.params")
    export = parse_export_config(deck.get("export"))
    simulation = cast(SimulationKind, kind)

    if simulation == "projectile":
        return RunDeck(simulation=simulation, projectile=parse_projectile_params(params, "deck.params"), export=export)
    if simulation == "heat":
        return RunDeck(simulation=simulation, heat=parse_heat_params(params, "deck.params"), export=export)
    return RunDeck(
        simulation=simulation,
        compare=parse_compare_config(params, deck.get("compare")),
        export=export,
    )
