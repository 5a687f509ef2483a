# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbit-average thermal budget.

Single-node radiative balance of a CubeSat: absorbed solar, Earth IR and
albedo flux plus internal dissipation against Stefan-Boltzmann emission
from the radiating surface. Hot case is full sunlight, cold case is
eclipse with reduced internal dissipation. The one-orbit profile steps a
lumped thermal mass through the eclipse returned by the eclipse model.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from satdesign.domain.eclipse import compute_eclipse
from satdesign.domain.errors import InvalidInputError
from satdesign.domain.orbital_mechanics import OrbitalConstants
from satdesign.domain.propagation import OrbitalElements, derive_orbital_state
from satdesign.domain.spacecraft import SpacecraftConfig, SurfaceMaterial
from satdesign.domain.status import Status, classify_at_least, classify_at_most, worst_status

STEFAN_BOLTZMANN = 5.670374419e-8   # W/(m² K⁴)
EARTH_IR_W_M2 = 240.0
EARTH_ALBEDO = 0.3
# fraction of the outer surface free to radiate (panels and mounts block the rest)
RADIATION_EFFICIENCY = 0.65
SPECIFIC_HEAT_J_KG_K = 900.0        # aluminium
COLD_CASE_INTERNAL_FRACTION = 0.3
PROFILE_ORBITS = 5
MIN_TEMPERATURE_K = 3.0
KELVIN = 273.15

HOT_NOMINAL_MAX_C = 50.0
HOT_WARNING_MAX_C = 60.0
COLD_NOMINAL_MIN_C = -10.0
COLD_WARNING_MIN_C = -20.0

# Outer surface area by form factor (m²)
SURFACE_AREA_M2: dict[str, float] = {
    "1U": 6 * 0.01,
    "1.5U": 2 * 0.01 + 4 * 0.015,
    "2U": 2 * 0.01 + 4 * 0.02,
    "3U": 2 * 0.01 + 4 * 0.03,
    "6U": 2 * 0.02 + 2 * 0.06 + 2 * 0.03,
    "12U": 2 * 0.04 + 2 * 0.06 + 2 * 0.06,
}

# Largest face by form factor (m²), taken as both Sun- and Earth-facing area
FACE_AREA_M2: dict[str, float] = {
    "1U": 0.01,
    "1.5U": 0.015,
    "2U": 0.02,
    "3U": 0.03,
    "6U": 0.06,
    "12U": 0.06,
}


@dataclass(frozen=True)
class ThermalBalance:
    """Equilibrium temperature and the heat inputs that set it."""
    temperature_k: float
    temperature_c: float
    solar_w: float
    earth_ir_w: float
    albedo_w: float
    internal_w: float
    absorbed_w: float


@dataclass(frozen=True)
class ThermalProfilePoint:
    position_deg: float
    time_min: float
    temperature_c: float
    in_sunlight: bool
    solar_w: float
    earth_ir_w: float
    albedo_w: float


@dataclass(frozen=True)
class ThermalReport:
    """Hot/cold equilibrium cases and the one-orbit temperature swing."""
    material: str
    hot_case_c: float
    cold_case_c: float
    hot_case_status: Status
    cold_case_status: Status
    orbit_min_c: float
    orbit_max_c: float
    eclipse_fraction: float
    internal_power_w: float
    recommendation: str
    status: Status


def earth_view_factor(altitude_km: float) -> float:
    """F = 1 - sqrt(1 - (R / (R + h))²)."""
    if not altitude_km > 0:
        raise InvalidInputError(f"Altitude must be positive, got {altitude_km} km")
    ratio = OrbitalConstants.R_EARTH_EQUATORIAL / (OrbitalConstants.R_EARTH_EQUATORIAL + altitude_km)
    return 1.0 - math.sqrt(1.0 - ratio * ratio)


def _heat_inputs(
    material: SurfaceMaterial,
    view_factor: float,
    face_area_m2: float,
    in_sunlight: bool,
) -> tuple[float, float, float]:
    solar_flux = OrbitalConstants.SOLAR_FLUX
    solar = material.absorptivity * solar_flux * face_area_m2 if in_sunlight else 0.0
    earth_ir = material.emissivity * EARTH_IR_W_M2 * view_factor * face_area_m2
    albedo = (
        material.absorptivity * solar_flux * EARTH_ALBEDO * view_factor * face_area_m2
        if in_sunlight else 0.0
    )
    return solar, earth_ir, albedo


def _radiating_conductance(material: SurfaceMaterial, size: str) -> float:
    """epsilon * sigma * A_rad (W/K⁴)."""
    return material.emissivity * STEFAN_BOLTZMANN * SURFACE_AREA_M2[size] * RADIATION_EFFICIENCY


def steady_state_temperature(
    spacecraft: SpacecraftConfig,
    altitude_km: float,
    in_sunlight: bool,
    internal_power_w: float,
) -> ThermalBalance:
    """
    Equilibrium temperature from Q_absorbed = epsilon * sigma * A_rad * T⁴.

    Args:
        spacecraft: Form factor and surface finish.
        altitude_km: Orbit altitude (km), sets the Earth view factor.
        in_sunlight: Whether solar and albedo flux are present.
        internal_power_w: Internal dissipation (W).

    Returns:
        ThermalBalance. A surface that cannot radiate reports 0 K.

    Raises:
        InvalidInputError: If altitude is not positive or internal power
            is negative.
    """
    if internal_power_w < 0:
        raise InvalidInputError(f"Internal power must be non-negative, got {internal_power_w} W")
    material = spacecraft.material
    solar, earth_ir, albedo = _heat_inputs(
        material, earth_view_factor(altitude_km), FACE_AREA_M2[spacecraft.size], in_sunlight,
    )
    absorbed = solar + earth_ir + albedo + internal_power_w
    conductance = _radiating_conductance(material, spacecraft.size)
    temperature_k = (absorbed / conductance) ** 0.25 if conductance > 0 else 0.0
    return ThermalBalance(
        temperature_k=temperature_k,
        temperature_c=temperature_k - KELVIN,
        solar_w=solar,
        earth_ir_w=earth_ir,
        albedo_w=albedo,
        internal_w=internal_power_w,
        absorbed_w=absorbed,
    )


def compute_thermal_profile(
    elements: OrbitalElements,
    spacecraft: SpacecraftConfig,
    internal_power_w: float,
    steps: int = 360,
    beta_deg: float | None = None,
) -> tuple[ThermalProfilePoint, ...]:
    """
    Temperature over one orbit with lumped thermal inertia.

    Starts from the hot-case equilibrium, integrates dT = Q_net * dt / (m c_p)
    over several orbits and returns the last one, by which point the
    profile is periodic. The eclipse is centred at 180 deg of orbit
    position.

    Raises:
        InvalidInputError: If steps < 2 or internal power is negative.
    """
    if steps < 2:
        raise InvalidInputError(f"At least 2 steps are required, got {steps}")

    state = derive_orbital_state(elements)
    eclipse = compute_eclipse(state, beta_deg)
    altitude = state.average_altitude_km
    material = spacecraft.material
    view_factor = earth_view_factor(altitude)
    face_area = FACE_AREA_M2[spacecraft.size]
    conductance = _radiating_conductance(material, spacecraft.size)
    thermal_mass = spacecraft.dry_mass_kg * SPECIFIC_HEAT_J_KG_K

    period_min = eclipse.period_min
    dt_s = period_min * 60.0 / steps
    half_shadow_deg = eclipse.eclipse_fraction * 180.0

    temperature_k = steady_state_temperature(spacecraft, altitude, True, internal_power_w).temperature_k
    points = []
    for orbit in range(PROFILE_ORBITS):
        for i in range(steps):
            position = i / steps * 360.0
            in_shadow = half_shadow_deg > 0 and abs(position - 180.0) <= half_shadow_deg
            solar, earth_ir, albedo = _heat_inputs(material, view_factor, face_area, not in_shadow)
            net_w = solar + earth_ir + albedo + internal_power_w - conductance * temperature_k ** 4
            temperature_k = max(MIN_TEMPERATURE_K, temperature_k + net_w * dt_s / thermal_mass)
            if orbit == PROFILE_ORBITS - 1:
                points.append(ThermalProfilePoint(
                    position_deg=position,
                    time_min=i / steps * period_min,
                    temperature_c=temperature_k - KELVIN,
                    in_sunlight=not in_shadow,
                    solar_w=solar,
                    earth_ir_w=earth_ir,
                    albedo_w=albedo,
                ))
    return tuple(points)


def _recommendation(hot_c: float, cold_c: float) -> str:
    notes = []
    if cold_c < COLD_NOMINAL_MIN_C:
        notes.append("Consider heater or MLI for cold survival")
    if hot_c > HOT_NOMINAL_MAX_C:
        notes.append("Consider radiator or white paint coating")
    if not notes:
        notes.append("Thermal environment within typical CubeSat limits")
    return ". ".join(notes)


def compute_thermal_analysis(
    elements: OrbitalElements,
    spacecraft: SpacecraftConfig,
    internal_power_w: float,
    beta_deg: float | None = None,
) -> ThermalReport:
    """
    Compute the thermal budget for a spacecraft on an orbit.

    Args:
        elements: Orbit of the spacecraft.
        spacecraft: Form factor, mass and surface finish.
        internal_power_w: Orbit-average internal dissipation (W), usually
            the power budget's average consumption.
        beta_deg: Sun beta angle; worst case 0 when omitted.

    Returns:
        ThermalReport. Hot case is nominal up to 50 C and warning up to
        60 C; cold case is nominal down to -10 C and warning down to
        -20 C. The overall status is the worse of the two.

    Raises:
        InvalidInputError: On negative internal power or invalid elements.
    """
    state = derive_orbital_state(elements)
    altitude = state.average_altitude_km
    hot = steady_state_temperature(spacecraft, altitude, True, internal_power_w)
    cold = steady_state_temperature(
        spacecraft, altitude, False, internal_power_w * COLD_CASE_INTERNAL_FRACTION,
    )
    hot_status = classify_at_most(hot.temperature_c, HOT_NOMINAL_MAX_C, HOT_WARNING_MAX_C)
    cold_status = classify_at_least(cold.temperature_c, COLD_NOMINAL_MIN_C, COLD_WARNING_MIN_C)

    profile = compute_thermal_profile(elements, spacecraft, internal_power_w, beta_deg=beta_deg)
    temperatures = [p.temperature_c for p in profile]
    eclipse = compute_eclipse(state, beta_deg)

    return ThermalReport(
        material=spacecraft.surface_material,
        hot_case_c=hot.temperature_c,
        cold_case_c=cold.temperature_c,
        hot_case_status=hot_status,
        cold_case_status=cold_status,
        orbit_min_c=min(temperatures),
        orbit_max_c=max(temperatures),
        eclipse_fraction=eclipse.eclipse_fraction,
        internal_power_w=internal_power_w,
        recommendation=_recommendation(hot.temperature_c, cold.temperature_c),
        status=worst_status(hot_status, cold_status),
    )
