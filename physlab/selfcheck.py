from __future__ import annotations

import importlib
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .deck import run_deck_data


@dataclass
class CheckRow:
    name: str
    ok: bool
    detail: str


@dataclass
class SelfCheckReport:
    rows: list[CheckRow]

    @property
    def ok(self) -> bool:
        return all(row.ok for row in self.rows)

    def to_text(self) -> str:
        lines: list[str] = []
        for row in self.rows:
            status = "OK" if row.ok else "FAIL"
            lines.append(f"[{status}] {row.name}: {row.detail}")
        lines.append(f"overall: {'OK' if self.ok else 'FAIL'}")
        return "\n".join(lines)


_SMOKE_DECKS = {
    "smoke.projectile": (
        {
            "simulation": "projectile",
            "params": {"v0": 50.0, "angle": 45.0, "h0": 0.0, "dt": 0.01},
            "export": {"formats": ["csv", "json", "png"]},
        },
        ("trajectory.csv", "summary.json", "trajectory.png"),
    ),
    "smoke.heat": (
        {
            "simulation": "heat",
            "params": {"length": 1.0, "dx": 0.1, "dt": 0.01, "total_time": 0.5},
            "export": {"formats": ["csv", "npy", "png"]},
        },
        ("frames.csv", "temperatures.npy", "temperature_map.png"),
    ),
}


def run_selfcheck(*, smoke: bool = True) -> SelfCheckReport:
    rows: list[CheckRow] = []

    for module_name in ("numpy", "yaml", "matplotlib", "websockets"):
        try:
            mod = importlib.import_module(module_name)
            version = getattr(mod, "__version__", "unknown")
            rows.append(CheckRow(module_name, True, f"version={version}"))
        except Exception as exc:
            rows.append(CheckRow(module_name, False, str(exc)))

    if smoke and all(row.ok for row in rows):
        for name, (deck, expected) in _SMOKE_DECKS.items():
            try:
                with tempfile.TemporaryDirectory(prefix="physlab-selfcheck-") as tmp:
                    outdir = Path(tmp) / "out"
                    outcome = run_deck_data(deck, deck_path=Path(tmp) / "_inline_deck.yaml", out_override=outdir)
                    missing = [fname for fname in expected if not (outdir / fname).exists()]
                    if missing:
                        rows.append(CheckRow(name, False, f"missing artifacts: {', '.join(missing)}"))
                    else:
                        rows.append(CheckRow(name, True, f"exports={len(outcome.exports)}"))
            except Exception as exc:
                rows.append(CheckRow(name, False, str(exc)))

    return SelfCheckReport(rows=rows)
