"""Material presets for heat conduction runs."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ValidationError


@dataclass(frozen=True)
class Material:
    """Bulk thermal properties in SI units."""

    name: str
    conductivity_W_mK: float
    density_kg_m3: float
    specific_heat_J_kgK: float

    @property
    def diffusivity_m2_s(self) -> float:
        """Thermal diffusivity alpha = k / (rho * c)."""
        return self.conductivity_W_mK / (self.density_kg_m3 * self.specific_heat_J_kgK)


MATERIALS: dict[str, Material] = {
    "aluminum": Material("aluminum", 237.0, 2700.0, 900.0),
    "copper": Material("copper", 401.0, 8960.0, 385.0),
    "steel": Material("steel", 16.0, 8000.0, 500.0),
}


def get_material(name: str) -> Material:
    """Look up a preset by case-insensitive name."""
    key = str(name).strip().lower()
    if key not in MATERIALS:
        joined = ", ".join(sorted(MATERIALS))
        raise ValidationError(f"material must be one of: {joined}. Got '{name}'.")
    return MATERIALS[key]
