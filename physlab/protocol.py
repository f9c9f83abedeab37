"""Wire message codecs shared by the server and the services.

Messages are JSON objects with camelCase keys. Heat parameter messages follow
zero-value semantics: a missing or zero `alpha`, `length` or `initialTemp`
falls back to its default.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from .config.parser import parse_projectile_params
from .config.validators import as_mapping, to_float
from .errors import ValidationError
from .heat import HeatParams, TemperatureFrame
from .projectile import ProjectileParams, ProjectileResult
from .units import ensure_finite, ensure_positive

DEFAULT_ALPHA = 9.7e-5  # aluminum
DEFAULT_LENGTH = 1.0
DEFAULT_INITIAL_TEMP = 20.0

HEALTH_PAYLOAD: dict[str, str] = {"status": "ok"}

_HEAT_WIRE_FIELDS: dict[str, str] = {
    "length": "length",
    "timeStep": "dt",
    "spaceStep": "dx",
    "totalTime": "total_time",
    "initialTemp": "initial_temp",
    "leftBoundary": "left_boundary",
    "rightBoundary": "right_boundary",
    "alpha": "alpha",
}

_ZERO_FALLBACKS: dict[str, float] = {
    "alpha": DEFAULT_ALPHA,
    "length": DEFAULT_LENGTH,
    "initial_temp": DEFAULT_INITIAL_TEMP,
}

_POSITIVE_WIRE_KEYS = frozenset({"length", "timeStep", "spaceStep", "totalTime", "alpha"})


def dumps(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def loads_mapping(raw: str | bytes, context: str = "message") -> dict[str, Any]:
    """Decode a JSON object, raising ValidationError on anything else."""
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{context} is not valid JSON: {exc}") from exc
    return as_mapping(payload, context)


def decode_heat_request(payload: Mapping[str, Any]) -> HeatParams:
    """Build validated HeatParams from a wire parameter message.

    Errors name the camelCase key the client sent.
    """
    values: dict[str, float] = {}
    for wire_key, name in _HEAT_WIRE_FIELDS.items():
        raw = payload.get(wire_key)
        values[name] = 0.0 if raw is None else to_float(raw, wire_key, "message")
    for name, default in _ZERO_FALLBACKS.items():
        if values[name] == 0.0:
            values[name] = default
    for wire_key, name in _HEAT_WIRE_FIELDS.items():
        if wire_key in _POSITIVE_WIRE_KEYS:
            ensure_positive(wire_key, values[name])
        else:
            ensure_finite(wire_key, values[name])
    return HeatParams(**values).validate()


def decode_projectile_request(payload: Mapping[str, Any]) -> ProjectileParams:
    """Build validated ProjectileParams from a request payload."""
    return parse_projectile_params(payload, "request")


def encode_projectile_result(result: ProjectileResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "trajectory": [{"x": p.x, "y": p.y, "v": p.v, "t": p.t} for p in result.trajectory],
    }
    payload.update(result.summary())
    return payload


def encode_frame(frame: TemperatureFrame) -> dict[str, Any]:
    return frame.to_message()


def encode_error(exc: BaseException | str) -> dict[str, str]:
    return {"error": str(exc)}
