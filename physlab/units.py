"""Unit conversion and scalar validation helpers."""

from __future__ import annotations

import math

from .errors import ValidationError

DEG_TO_RAD = math.pi / 180.0


def deg_to_rad(value: float) -> float:
    """Convert degrees to radians."""
    return float(value) * DEG_TO_RAD


def ensure_finite(name: str, value: float) -> None:
    """Validate that a scalar is a finite number."""
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be a finite number, got {value}.")


def ensure_positive(name: str, value: float, allow_zero: bool = False) -> None:
    """Validate that a scalar is positive (or non-negative if allow_zero)."""
    ensure_finite(name, value)
    if allow_zero:
        if value < 0.0:
            raise ValidationError(f"{name} must be >= 0, got {value}.")
        return
    if value <= 0.0:
        raise ValidationError(f"{name} must be > 0, got {value}.")


def ensure_between(name: str, value: float, low: float, high: float) -> None:
    """Validate that a scalar lies in the closed interval [low, high]."""
    ensure_finite(name, value)
    if value < low or value > high:
        raise ValidationError(f"{name} must be in [{low:g}, {high:g}], got {value}.")
