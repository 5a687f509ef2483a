# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Spacecraft physical configuration.

CubeSat form factor, mass, battery and solar array description, with the
cross-section and array-area estimates used when no explicit value is given.

No external dependencies — only stdlib dataclasses.
"""
from dataclasses import dataclass

from satdesign.domain.atmosphere import DragConfig
from satdesign.domain.errors import InvalidInputError

# Minimum face area by form factor (m²), used as the drag cross-section
CROSS_SECTION_M2: dict[str, float] = {
    "1U": 0.01,
    "1.5U": 0.01,
    "2U": 0.01,
    "3U": 0.01,
    "6U": 0.02,
    "12U": 0.04,
}

# Body-mounted array estimate by form factor (m²)
SOLAR_AREA_M2: dict[str, float] = {
    "1U": 0.01,
    "1.5U": 0.015,
    "2U": 0.02,
    "3U": 0.03,
    "6U": 0.06,
    "12U": 0.12,
}

PANEL_CONFIGS = ("body-mounted", "1-axis-deployable", "2-axis-deployable")
POINTING_MODES = ("tumbling", "nadir-pointing", "sun-pointing")


@dataclass(frozen=True)
class SurfaceMaterial:
    """Thermo-optical surface finish: solar absorptivity and IR emissivity."""
    name: str
    absorptivity: float
    emissivity: float


SURFACE_MATERIALS: dict[str, SurfaceMaterial] = {
    "black-anodized": SurfaceMaterial("Black anodized aluminium", 0.86, 0.86),
    "solar-cells": SurfaceMaterial("Solar cells", 0.75, 0.82),
    "white-paint": SurfaceMaterial("White paint", 0.20, 0.90),
    "bare-aluminum": SurfaceMaterial("Bare aluminium", 0.15, 0.05),
    "gold-foil": SurfaceMaterial("Gold foil", 0.25, 0.04),
    "mli": SurfaceMaterial("MLI blanket", 0.10, 0.03),
}


@dataclass(frozen=True)
class SpacecraftConfig:
    """Spacecraft bus description.

    cross_section_m2 and solar_panel_area_m2 default to form-factor
    estimates when left as None.
    """
    dry_mass_kg: float
    size: str = "3U"
    battery_capacity_wh: float = 20.0
    cross_section_m2: float | None = None
    solar_panel_area_m2: float | None = None
    solar_cell_efficiency: float = 0.28
    solar_panel_config: str = "body-mounted"
    pointing_mode: str = "nadir-pointing"
    drag_coefficient: float = 2.2
    surface_material: str = "black-anodized"

    def __post_init__(self) -> None:
        if not self.dry_mass_kg > 0:
            raise InvalidInputError(f"Dry mass must be positive, got {self.dry_mass_kg} kg")
        if self.size not in CROSS_SECTION_M2:
            raise InvalidInputError(
                f"Unknown form factor: {self.size!r} (expected one of {list(CROSS_SECTION_M2)})"
            )
        if self.battery_capacity_wh < 0:
            raise InvalidInputError(
                f"Battery capacity must be non-negative, got {self.battery_capacity_wh} Wh"
            )
        if self.cross_section_m2 is not None and self.cross_section_m2 < 0:
            raise InvalidInputError(f"Cross-section must be non-negative, got {self.cross_section_m2} m²")
        if self.solar_panel_area_m2 is not None and self.solar_panel_area_m2 < 0:
            raise InvalidInputError(
                f"Solar panel area must be non-negative, got {self.solar_panel_area_m2} m²"
            )
        if not 0.0 <= self.solar_cell_efficiency <= 1.0:
            raise InvalidInputError(
                f"Solar cell efficiency must be in [0, 1], got {self.solar_cell_efficiency}"
            )
        if self.solar_panel_config not in PANEL_CONFIGS:
            raise InvalidInputError(f"Unknown solar panel configuration: {self.solar_panel_config!r}")
        if self.pointing_mode not in POINTING_MODES:
            raise InvalidInputError(f"Unknown pointing mode: {self.pointing_mode!r}")
        if not self.drag_coefficient > 0:
            raise InvalidInputError(f"Drag coefficient must be positive, got {self.drag_coefficient}")
        if self.surface_material not in SURFACE_MATERIALS:
            raise InvalidInputError(
                f"Unknown surface material: {self.surface_material!r} (expected one of {list(SURFACE_MATERIALS)})"
            )

    @property
    def effective_cross_section_m2(self) -> float:
        if self.cross_section_m2 is not None:
            return self.cross_section_m2
        return CROSS_SECTION_M2[self.size]

    @property
    def solar_array_area_m2(self) -> float:
        if self.solar_panel_area_m2 is not None:
            return self.solar_panel_area_m2
        return SOLAR_AREA_M2[self.size]

    def drag_config(self) -> DragConfig:
        return DragConfig(
            cd=self.drag_coefficient,
            area_m2=self.effective_cross_section_m2,
            mass_kg=self.dry_mass_kg,
        )

    @property
    def material(self) -> SurfaceMaterial:
        return SURFACE_MATERIALS[self.surface_material]

    @property
    def ballistic_coefficient(self) -> float:
        """C_d * A / m (m²/kg)."""
        return self.drag_config().ballistic_coefficient
