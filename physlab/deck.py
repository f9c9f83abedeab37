"""YAML run-deck loader and execution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .config import RunDeck, as_mapping, parse_deck
from .errors import DeckError, InstabilityError, ValidationError
from .export import export_comparison, export_heat, export_projectile
from .heat import TemperatureFrame
from .projectile import ProjectileResult
from .services import SimulationService, StepSizeRun, build_default_simulation_service

logger = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    """Result of executing one deck."""

    deck: RunDeck
    projectile: ProjectileResult | None = None
    frames: list[TemperatureFrame] = field(default_factory=list)
    comparison: list[StepSizeRun] = field(default_factory=list)
    outdir: Path | None = None
    exports: list[Path] = field(default_factory=list)


def load_deck(deck_path: str | Path) -> dict[str, Any]:
    """Load YAML deck from file."""
    path = Path(deck_path)
    if not path.exists():
        raise DeckError(f"Deck file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise DeckError(f"Failed to parse YAML deck: {path}") from exc

    if payload is None:
        raise DeckError(f"Deck is empty: {path}")
    try:
        return as_mapping(payload, "deck")
    except ValidationError as exc:
        raise DeckError(str(exc)) from exc


def resolve_outdir(deck_path: Path, outdir_cfg: str | None, out_override: str | Path | None) -> Path:
    """Resolve output directory from override/config/default values."""
    if out_override is not None:
        path = Path(out_override)
        if not path.is_absolute():
            path = path.resolve()
        return path

    path = Path("outputs/run") if outdir_cfg is None else Path(outdir_cfg)
    if not path.is_absolute():
        path = (deck_path.parent / path).resolve()
    return path


def run_deck_data(
    deck: dict[str, Any],
    *,
    deck_path: str | Path | None = None,
    out_override: str | Path | None = None,
    service: SimulationService | None = None,
) -> RunOutcome:
    """Run an in-memory deck payload."""
    path = Path("__in_memory_deck__.yaml") if deck_path is None else Path(deck_path)
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    svc = build_default_simulation_service() if service is None else service

    try:
        parsed = parse_deck(deck)
    except ValidationError as exc:
        raise DeckError(str(exc)) from exc

    outcome = RunOutcome(deck=parsed)
    try:
        if parsed.simulation == "projectile":
            assert parsed.projectile is not None
            outcome.projectile = svc.run_projectile(parsed.projectile)
        elif parsed.simulation == "heat":
            assert parsed.heat is not None
            outcome.frames = svc.run_heat(parsed.heat)
        else:
            assert parsed.compare is not None
            outcome.comparison = svc.compare_time_steps(parsed.compare)
    except (ValidationError, InstabilityError) as exc:
        raise DeckError(str(exc)) from exc

    export_cfg = parsed.export
    if export_cfg is None and out_override is None:
        return outcome

    outdir = resolve_outdir(path, export_cfg.outdir if export_cfg else None, out_override)
    formats = export_cfg.formats if export_cfg else ["csv", "json"]
    try:
        if outcome.projectile is not None and parsed.projectile is not None:
            outcome.exports = export_projectile(outcome.projectile, parsed.projectile, outdir, formats)
        elif parsed.heat is not None:
            outcome.exports = export_heat(outcome.frames, parsed.heat, outdir, formats)
        else:
            outcome.exports = export_comparison(outcome.comparison, outdir, formats)
    except (OSError, ValueError) as exc:
        raise DeckError(f"Export to {outdir} failed: {exc}") from exc

    outcome.outdir = outdir
    logger.info("Deck '%s' exported %d file(s) to %s", parsed.simulation, len(outcome.exports), outdir)
    return outcome


def run_deck(deck_path: str | Path, out_override: str | Path | None = None) -> RunOutcome:
    """Load and run a YAML deck file."""
    path = Path(deck_path).resolve()
    deck = load_deck(path)
    return run_deck_data(deck, deck_path=path, out_override=out_override)
