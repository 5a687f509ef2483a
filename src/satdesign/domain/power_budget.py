# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbit-average power budget.

Solar generation from array area, cell efficiency and an incidence factor
for the panel configuration and pointing mode, reduced by the eclipse
fraction; consumption from the subsystem duty cycles; battery depth of
discharge over one eclipse; end-of-life generation with linear cell
degradation.

Degenerate budgets are reported as data: zero generation gives an infinite
negative margin, an empty battery gives an infinite depth of discharge.
"""
import math
from dataclasses import dataclass

import numpy as np

from satdesign.domain.eclipse import compute_eclipse
from satdesign.domain.errors import InvalidInputError
from satdesign.domain.orbital_mechanics import OrbitalConstants
from satdesign.domain.propagation import OrbitalElements, derive_orbital_state
from satdesign.domain.spacecraft import SpacecraftConfig
from satdesign.domain.status import (
    WARNING,
    Status,
    classify_at_least,
    classify_at_most,
    worst_status,
)


@dataclass(frozen=True)
class PowerSubsystem:
    """One consumer in the subsystem power model."""
    id: str
    name: str
    power_w: float
    duty_cycle: float
    mode: str = ""
    eclipse_only: bool = False

    @property
    def average_power_w(self) -> float:
        return self.power_w * self.duty_cycle


DEFAULT_SUBSYSTEMS: tuple[PowerSubsystem, ...] = (
    PowerSubsystem("obc", "On-board computer", 0.5, 1.0, mode="always-on"),
    PowerSubsystem("radio-tx", "Radio transmitter", 2.0, 0.15, mode="contact"),
    PowerSubsystem("camera", "Camera payload", 3.0, 0.10, mode="imaging"),
    PowerSubsystem("adcs", "Attitude control", 1.0, 1.0, mode="always-on"),
    PowerSubsystem("heater", "Battery heater", 1.5, 0.40, mode="eclipse", eclipse_only=True),
)

# Average cosine-loss factor: (panel configuration, pointing mode) -> factor
INCIDENCE_FACTORS: dict[tuple[str, str], float] = {
    ("body-mounted", "tumbling"): 0.25,
    ("body-mounted", "nadir-pointing"): 0.30,
    ("body-mounted", "sun-pointing"): 0.50,
    ("1-axis-deployable", "tumbling"): 0.40,
    ("1-axis-deployable", "nadir-pointing"): 0.55,
    ("1-axis-deployable", "sun-pointing"): 0.70,
    ("2-axis-deployable", "tumbling"): 0.50,
    ("2-axis-deployable", "nadir-pointing"): 0.70,
    ("2-axis-deployable", "sun-pointing"): 0.90,
}

DEFAULT_DEGRADATION_RATE = 0.03

MARGIN_NOMINAL_MIN = 0.20
MARGIN_WARNING_MIN = 0.0
DOD_NOMINAL_MAX = 0.30
DOD_WARNING_MAX = 0.50


@dataclass(frozen=True)
class PowerReport:
    """Orbit-average power budget."""
    peak_solar_power_w: float
    avg_power_generation_w: float
    avg_power_consumption_w: float
    power_margin: float
    margin_status: Status
    battery_dod: float
    dod_status: Status
    eclipse_fraction: float
    eclipse_duration_min: float
    sunlight_duration_min: float
    period_min: float
    eol_power_generation_w: float
    eol_margin: float
    eol_margin_status: Status
    status: Status


@dataclass(frozen=True)
class PowerProfilePoint:
    time_min: float
    in_eclipse: bool
    generation_w: float
    consumption_w: float
    battery_wh: float


def validate_subsystems(subsystems: tuple[PowerSubsystem, ...]) -> None:
    for sub in subsystems:
        if sub.power_w < 0:
            raise InvalidInputError(f"Subsystem {sub.id!r} power must be non-negative, got {sub.power_w} W")
        if not 0.0 <= sub.duty_cycle <= 1.0:
            raise InvalidInputError(
                f"Subsystem {sub.id!r} duty cycle must be in [0, 1], got {sub.duty_cycle}"
            )


def peak_solar_power(spacecraft: SpacecraftConfig) -> float:
    """Sunlit array output (W) including the average incidence loss."""
    factor = INCIDENCE_FACTORS[(spacecraft.solar_panel_config, spacecraft.pointing_mode)]
    return (
        spacecraft.solar_array_area_m2
        * OrbitalConstants.SOLAR_FLUX
        * spacecraft.solar_cell_efficiency
        * factor
    )


def power_margin(generation_w: float, consumption_w: float) -> tuple[float, Status]:
    """
    Fractional margin (gen - cons) / gen and its status.

    Zero generation with a load gives -inf (critical); zero over zero gives
    0 with a warning status.
    """
    if generation_w == 0:
        if consumption_w > 0:
            return -math.inf, classify_at_least(-math.inf, MARGIN_NOMINAL_MIN, MARGIN_WARNING_MIN)
        return 0.0, WARNING
    margin = (generation_w - consumption_w) / generation_w
    return margin, classify_at_least(margin, MARGIN_NOMINAL_MIN, MARGIN_WARNING_MIN)


def battery_depth_of_discharge(
    consumption_w: float,
    eclipse_hours: float,
    capacity_wh: float,
) -> float:
    """Fraction of battery capacity drained over one eclipse (not clamped)."""
    energy_wh = consumption_w * eclipse_hours
    if capacity_wh == 0:
        return math.inf if energy_wh > 0 else 0.0
    return energy_wh / capacity_wh


def compute_power_analysis(
    elements: OrbitalElements,
    spacecraft: SpacecraftConfig,
    subsystems: tuple[PowerSubsystem, ...] = DEFAULT_SUBSYSTEMS,
    lifetime_years: float = 0.0,
    degradation_rate: float = DEFAULT_DEGRADATION_RATE,
    beta_deg: float | None = None,
) -> PowerReport:
    """
    Compute the orbit-average power budget.

    Args:
        elements: Orbit of the spacecraft.
        spacecraft: Array, battery and pointing description.
        subsystems: Power consumers.
        lifetime_years: Mission duration used for end-of-life generation.
        degradation_rate: Fractional array loss per year (linear).
        beta_deg: Sun beta angle; worst case 0 when omitted.

    Returns:
        PowerReport with BOL/EOL margins, depth of discharge and eclipse
        durations. The overall status is the worst of the margin, DoD and
        EOL margin statuses.

    Raises:
        InvalidInputError: On negative power, duty outside [0, 1], negative
            lifetime or degradation outside [0, 1].
    """
    validate_subsystems(subsystems)
    if lifetime_years < 0:
        raise InvalidInputError(f"Lifetime must be non-negative, got {lifetime_years} years")
    if not 0.0 <= degradation_rate <= 1.0:
        raise InvalidInputError(f"Degradation rate must be in [0, 1], got {degradation_rate}")

    state = derive_orbital_state(elements)
    eclipse = compute_eclipse(state, beta_deg)

    peak = peak_solar_power(spacecraft)
    generation = peak * (1.0 - eclipse.eclipse_fraction)
    consumption = sum(s.average_power_w for s in subsystems)

    margin, margin_status = power_margin(generation, consumption)

    dod = battery_depth_of_discharge(
        consumption, eclipse.eclipse_duration_min / 60.0, spacecraft.battery_capacity_wh,
    )
    dod_status = classify_at_most(dod, DOD_NOMINAL_MAX, DOD_WARNING_MAX)

    eol_generation = generation * max(0.0, 1.0 - degradation_rate * lifetime_years)
    eol_margin, eol_status = power_margin(eol_generation, consumption)

    return PowerReport(
        peak_solar_power_w=peak,
        avg_power_generation_w=generation,
        avg_power_consumption_w=consumption,
        power_margin=margin,
        margin_status=margin_status,
        battery_dod=dod,
        dod_status=dod_status,
        eclipse_fraction=eclipse.eclipse_fraction,
        eclipse_duration_min=eclipse.eclipse_duration_min,
        sunlight_duration_min=eclipse.sunlight_duration_min,
        period_min=eclipse.period_min,
        eol_power_generation_w=eol_generation,
        eol_margin=eol_margin,
        eol_margin_status=eol_status,
        status=worst_status(margin_status, dod_status, eol_status),
    )


def compute_orbit_power_profile(
    elements: OrbitalElements,
    spacecraft: SpacecraftConfig,
    subsystems: tuple[PowerSubsystem, ...] = DEFAULT_SUBSYSTEMS,
    samples: int = 121,
    beta_deg: float | None = None,
) -> tuple[PowerProfilePoint, ...]:
    """
    One-orbit power timeline starting with a full battery.

    The eclipse is centred at half the period. Eclipse-only loads draw
    power only in shadow; the battery state of charge is clamped to
    [0, capacity].
    """
    if samples < 2:
        raise InvalidInputError(f"At least 2 samples are required, got {samples}")
    validate_subsystems(subsystems)

    state = derive_orbital_state(elements)
    eclipse = compute_eclipse(state, beta_deg)
    period_min = eclipse.period_min
    half_shadow = eclipse.eclipse_duration_min / 2.0
    shadow_start = period_min / 2.0 - half_shadow
    shadow_end = period_min / 2.0 + half_shadow

    peak = peak_solar_power(spacecraft)
    base_load = sum(s.average_power_w for s in subsystems if not s.eclipse_only)
    eclipse_load = sum(s.average_power_w for s in subsystems if s.eclipse_only)
    capacity = spacecraft.battery_capacity_wh

    times = np.linspace(0.0, period_min, samples)
    dt_h = (times[1] - times[0]) / 60.0
    battery = capacity
    points = []
    for t in times:
        in_shadow = half_shadow > 0 and shadow_start <= t <= shadow_end
        generation = 0.0 if in_shadow else peak
        consumption = base_load + (eclipse_load if in_shadow else 0.0)
        if points:
            battery = min(capacity, max(0.0, battery + (generation - consumption) * dt_h))
        points.append(PowerProfilePoint(
            time_min=float(t),
            in_eclipse=bool(in_shadow),
            generation_w=generation,
            consumption_w=consumption,
            battery_wh=float(battery),
        ))
    return tuple(points)
