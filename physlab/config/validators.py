"""Shared config validation helpers."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..errors import ValidationError


def as_mapping(value: Any, context: str) -> dict[str, Any]:
    """Require mapping value."""
    if not isinstance(value, dict):
        raise ValidationError(f"{context} must be a mapping.")
    return value


def opt_mapping(value: Any, context: str) -> dict[str, Any]:
    """Return mapping or empty mapping for None."""
    if value is None:
        return {}
    return as_mapping(value, context)


def required(mapping: Mapping[str, Any], key: str, context: str) -> Any:
    """Require mapping key existence."""
    if not isinstance(mapping, Mapping):
        raise ValidationError(f"{context} must be a mapping.")
    if key not in mapping:
        raise ValidationError(f"Missing required key '{key}' in {context}.")
    return mapping[key]


def pick(mapping: Mapping[str, Any], keys: Sequence[str]) -> tuple[str, Any] | None:
    """Return the first (key, value) present among alias keys."""
    for key in keys:
        if key in mapping:
            return key, mapping[key]
    return None


def to_float(value: Any, key: str, context: str) -> float:
    """Convert value to float with contextual error message."""
    if isinstance(value, bool):
        raise ValidationError(f"{context}.{key} must be a number, got {value!r}.")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{context}.{key} must be a number, got {value!r}.") from exc


def to_float_list(value: Any, key: str, context: str) -> list[float]:
    """Convert a non-empty list of numbers."""
    if not isinstance(value, (list, tuple)) or not value:
        raise ValidationError(f"{context}.{key} must be a non-empty list of numbers.")
    return [to_float(item, f"{key}[{idx}]", context) for idx, item in enumerate(value)]


def ensure_choice(name: str, value: str, allowed: Sequence[str]) -> str:
    """Validate str choice and return normalized value."""
    val = str(value).lower()
    if val not in allowed:
        joined = ", ".join(allowed)
        raise ValidationError(f"{name} must be one of: {joined}. Got '{value}'.")
    return val
