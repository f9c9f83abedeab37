"""Run summary writers."""

from __future__ import annotations

import csv
import json
import math
from pathlib import Path


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _json_safe(value: object) -> object:
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _flatten_summary(prefix: str, value: object, rows: list[tuple[str, str]]) -> None:
    if isinstance(value, dict):
        for key, sub in value.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            _flatten_summary(name, sub, rows)
        return
    if isinstance(value, list):
        rows.append((prefix, json.dumps(_json_safe(value), ensure_ascii=False)))
        return
    rows.append((prefix, f"{value}"))


def save_summary_json(summary: dict, outdir: str | Path, filename: str = "summary.json") -> Path:
    """Save run summary in JSON format; non-finite floats become null."""
    path = _ensure_outdir(outdir) / filename
    with path.open("w", encoding="utf-8") as f:
        json.dump(_json_safe(summary), f, ensure_ascii=False, indent=2)
    return path


def save_summary_csv(summary: dict, outdir: str | Path, filename: str = "summary.csv") -> Path:
    """Save run summary in flattened key-value CSV format."""
    path = _ensure_outdir(outdir) / filename
    rows: list[tuple[str, str]] = []
    _flatten_summary("", summary, rows)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["key", "value"])
        for key, value in rows:
            writer.writerow([key, value])
    return path
