"""Application-layer CLI adapter."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from ..config import DEFAULT_TIME_STEPS, EXPORT_FORMATS, CompareConfig
from ..deck import DeckError, run_deck
from ..errors import InstabilityError, ValidationError
from ..export import export_comparison, export_heat, export_projectile
from ..heat import HeatParams
from ..projectile import ProjectileParams
from ..selfcheck import run_selfcheck
from ..server import ServerConfig, serve_forever
from ..services import build_comparison_rows, build_default_simulation_service, format_comparison_table

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

_HEAT_DEFAULTS = HeatParams()


def _add_export_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--out", type=str, default=None, help="Write artifacts to this directory")
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=EXPORT_FORMATS,
        default=None,
        help="Export format (repeatable, default: csv and json)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser."""
    parser = argparse.ArgumentParser(prog="physlab", description="physlab simulation engines")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Run a YAML run deck")
    run_p.add_argument("deck", type=str, help="Path to deck YAML")
    run_p.add_argument("--out", type=str, default=None, help="Override export output directory")

    proj_p = sub.add_parser("projectile", help="Simulate one projectile launch")
    proj_p.add_argument("--v0", type=float, required=True, help="Launch speed [m/s]")
    proj_p.add_argument("--angle", type=float, required=True, help="Launch angle [deg]")
    proj_p.add_argument("--h0", type=float, default=0.0, help="Launch height [m]")
    proj_p.add_argument("--dt", type=float, default=0.01, help="Time step [s]")
    _add_export_args(proj_p)

    heat_p = sub.add_parser("heat", help="Simulate 1D heat conduction")
    heat_p.add_argument("--length", type=float, default=_HEAT_DEFAULTS.length, help="Rod length [m]")
    heat_p.add_argument("--dt", type=float, default=_HEAT_DEFAULTS.dt, help="Time step [s]")
    heat_p.add_argument("--dx", type=float, default=_HEAT_DEFAULTS.dx, help="Space step [m]")
    heat_p.add_argument("--total-time", type=float, default=_HEAT_DEFAULTS.total_time, help="Run time [s]")
    heat_p.add_argument("--initial-temp", type=float, default=_HEAT_DEFAULTS.initial_temp, help="Interior [degC]")
    heat_p.add_argument("--left", type=float, default=_HEAT_DEFAULTS.left_boundary, help="Left end [degC]")
    heat_p.add_argument("--right", type=float, default=_HEAT_DEFAULTS.right_boundary, help="Right end [degC]")
    heat_p.add_argument("--alpha", type=float, default=_HEAT_DEFAULTS.alpha, help="Diffusivity [m^2/s]")
    _add_export_args(heat_p)

    cmp_p = sub.add_parser("compare", help="Compare one launch across time steps")
    cmp_p.add_argument("--v0", type=float, required=True, help="Launch speed [m/s]")
    cmp_p.add_argument("--angle", type=float, required=True, help="Launch angle [deg]")
    cmp_p.add_argument("--h0", type=float, default=0.0, help="Launch height [m]")
    cmp_p.add_argument(
        "--dt",
        dest="time_steps",
        type=float,
        action="append",
        default=None,
        help="Time step to include (repeatable, default: 1 .. 1e-4)",
    )
    _add_export_args(cmp_p)

    serve_p = sub.add_parser("serve", help="Serve heat streams, projectile requests and health")
    serve_p.add_argument("--host", type=str, default="localhost")
    serve_p.add_argument("--port", type=int, default=8080)
    serve_p.add_argument(
        "--origin",
        dest="origins",
        action="append",
        default=None,
        help="Allowed websocket origin (repeatable, default: any)",
    )

    selfcheck_p = sub.add_parser("selfcheck", help="Run dependency and smoke self-check")
    selfcheck_p.add_argument(
        "--no-smoke",
        action="store_true",
        help="Run import checks only (skip smoke simulation).",
    )

    return parser


def _print_exports(paths: list[Path]) -> None:
    outdirs = sorted({str(Path(p).parent) for p in paths})
    for outdir in outdirs:
        print(f"Output: {outdir}")


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    service = build_default_simulation_service()
    formats = getattr(args, "formats", None) or ["csv", "json"]

    try:
        if args.command == "run":
            outcome = run_deck(args.deck, out_override=args.out)
            print(f"Done. simulation={outcome.deck.simulation}, exports={len(outcome.exports)}")
            _print_exports(outcome.exports)
            return 0

        if args.command == "projectile":
            params = ProjectileParams(v0=args.v0, angle=args.angle, h0=args.h0, dt=args.dt)
            result = service.run_projectile(params)
            print(
                f"range={result.range:.2f} m  maxHeight={result.max_height:.2f} m  "
                f"finalVelocity={result.final_velocity:.2f} m/s  timeOfFlight={result.time_of_flight:.2f} s  "
                f"steps={result.step_count}"
            )
            if result.truncated:
                print("Warning: step cap reached before impact; result is truncated.")
            if args.out:
                _print_exports(export_projectile(result, params, args.out, formats))
            return 0

        if args.command == "heat":
            params_h = HeatParams(
                length=args.length,
                dt=args.dt,
                dx=args.dx,
                total_time=args.total_time,
                initial_temp=args.initial_temp,
                left_boundary=args.left,
                right_boundary=args.right,
                alpha=args.alpha,
            )
            frames = service.run_heat(params_h)
            last = frames[-1]
            print(f"frames={len(frames)}  time={last.time:.4g} s  centerTemp={last.center_temp:.4f}")
            if args.out:
                _print_exports(export_heat(frames, params_h, args.out, formats))
            return 0

        if args.command == "compare":
            steps = tuple(args.time_steps) if args.time_steps else DEFAULT_TIME_STEPS
            cfg = CompareConfig(v0=args.v0, angle=args.angle, h0=args.h0, time_steps=steps)
            runs = service.compare_time_steps(cfg)
            print(format_comparison_table(build_comparison_rows(runs)))
            if args.out:
                _print_exports(export_comparison(runs, args.out, formats))
            return 0
    except (DeckError, ValidationError, InstabilityError) as exc:
        parser.exit(2, f"Error: {exc}\n")

    if args.command == "serve":
        config = ServerConfig(
            host=args.host,
            port=args.port,
            origins=tuple(args.origins) if args.origins else None,
        )
        try:
            serve_forever(config)
        except KeyboardInterrupt:
            print("Stopped.")
        return 0

    if args.command == "selfcheck":
        report = run_selfcheck(smoke=not bool(args.no_smoke))
        print(report.to_text())
        return 0 if report.ok else 1

    parser.exit(2, "Unknown command\n")
    return 2
