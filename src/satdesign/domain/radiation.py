# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Trapped-radiation dose model and radiation budget.

Unshielded annual total ionizing dose from an AP-8-style altitude table
(log-linear interpolation, clamped at the table ends), scaled by an
inclination factor for South Atlantic Anomaly exposure and attenuated
exponentially by aluminium shielding.

Dose curves are evaluated on evenly spaced numpy grids and returned as
immutable tuples of points.
"""
import math
from dataclasses import dataclass

import numpy as np

from satdesign.domain.errors import InvalidInputError
from satdesign.domain.status import CRITICAL, NOMINAL, WARNING, Status

# (altitude_km, unshielded dose krad/yr) behind minimal spacecraft structure
_DOSE_TABLE: tuple[tuple[float, float], ...] = (
    (200, 0.1),
    (300, 0.3),
    (400, 0.8),
    (500, 1.5),
    (600, 3.0),
    (700, 5.0),
    (800, 8.0),
    (1000, 15.0),
    (1200, 30.0),
    (1500, 80.0),
    (2000, 200.0),
    (3000, 500.0),    # inner belt peak
    (4000, 300.0),
    (6000, 100.0),
    (10000, 30.0),    # slot region
    (15000, 15.0),
    (20000, 8.0),
    (25000, 4.0),
    (30000, 2.0),
    (36000, 1.0),     # GEO
)

_TABLE_ALT = np.array([row[0] for row in _DOSE_TABLE], dtype=float)
_TABLE_LOG_DOSE = np.log(np.array([row[1] for row in _DOSE_TABLE], dtype=float))

SHIELDING_E_FOLD_MM = 2.0

DOSE_NOMINAL_MAX_KRAD = 10.0
DOSE_WARNING_MAX_KRAD = 100.0


@dataclass(frozen=True)
class DoseShieldingPoint:
    thickness_mm: float
    dose_krad_per_year: float
    mission_total_krad: float


@dataclass(frozen=True)
class DoseAltitudePoint:
    altitude_km: float
    dose_krad_per_year: float


@dataclass(frozen=True)
class RadiationReport:
    """Radiation environment and component guidance for one mission."""
    altitude_km: float
    inclination_deg: float
    shielding_mm: float
    lifetime_years: float
    unshielded_dose_krad_per_year: float
    inclination_factor: float
    shielding_factor: float
    annual_dose_krad: float
    mission_total_krad: float
    saa_exposure: str
    belt_region: str
    recommendation: str
    status: Status


def unshielded_dose_rate(altitude_km: float) -> float:
    """Unshielded annual dose (krad/yr), log-linear in the altitude table."""
    if altitude_km < 0:
        raise InvalidInputError(f"Altitude must be non-negative, got {altitude_km} km")
    return float(np.exp(np.interp(altitude_km, _TABLE_ALT, _TABLE_LOG_DOSE)))


def inclination_factor(inclination_deg: float) -> float:
    """SAA exposure multiplier; mid inclinations cross the anomaly most often."""
    i_eff = min(inclination_deg, 180.0 - inclination_deg)
    if i_eff <= 10:
        return 0.7
    if i_eff <= 30:
        return 0.9
    if i_eff <= 60:
        return 1.3
    if i_eff <= 80:
        return 1.1
    return 1.0


def shielding_attenuation(thickness_mm: float) -> float:
    """Aluminium attenuation exp(-t / 2 mm); 1.0 for no shielding."""
    if thickness_mm < 0:
        raise InvalidInputError(f"Shielding thickness must be non-negative, got {thickness_mm} mm")
    return math.exp(-thickness_mm / SHIELDING_E_FOLD_MM)


def annual_dose_rate(altitude_km: float, inclination_deg: float) -> float:
    """Unshielded annual dose at an orbit, including the inclination factor."""
    return unshielded_dose_rate(altitude_km) * inclination_factor(inclination_deg)


def _check_curve(lo: float, hi: float, samples: int, what: str) -> None:
    if samples < 2:
        raise InvalidInputError(f"At least 2 samples are required, got {samples}")
    if not hi > lo:
        raise InvalidInputError(f"Maximum {what} must exceed minimum ({lo} >= {hi})")
    if lo < 0:
        raise InvalidInputError(f"Minimum {what} must be non-negative, got {lo}")


def compute_dose_vs_shielding(
    altitude_km: float,
    inclination_deg: float,
    lifetime_years: float,
    min_mm: float = 0.0,
    max_mm: float = 10.0,
    samples: int = 21,
) -> tuple[DoseShieldingPoint, ...]:
    """
    Annual and mission dose across a range of shielding thicknesses.

    Args:
        altitude_km: Orbit altitude (km).
        inclination_deg: Orbit inclination (deg).
        lifetime_years: Mission duration (years).
        min_mm: Thinnest shielding evaluated (mm Al).
        max_mm: Thickest shielding evaluated (mm Al).
        samples: Number of evenly spaced points, endpoints included.

    Returns:
        Tuple of DoseShieldingPoint, thinnest first.

    Raises:
        InvalidInputError: If samples < 2, max <= min, or a thickness,
            altitude or lifetime is negative.
    """
    _check_curve(min_mm, max_mm, samples, "thickness")
    if lifetime_years < 0:
        raise InvalidInputError(f"Lifetime must be non-negative, got {lifetime_years} years")

    base = annual_dose_rate(altitude_km, inclination_deg)
    points = []
    for t in np.linspace(min_mm, max_mm, samples):
        dose = base * shielding_attenuation(float(t))
        points.append(DoseShieldingPoint(
            thickness_mm=float(t),
            dose_krad_per_year=dose,
            mission_total_krad=dose * lifetime_years,
        ))
    return tuple(points)


def compute_dose_vs_altitude(
    inclination_deg: float,
    shielding_mm: float,
    min_km: float = 200.0,
    max_km: float = 2000.0,
    samples: int = 37,
) -> tuple[DoseAltitudePoint, ...]:
    """Shielded annual dose across a range of altitudes."""
    _check_curve(min_km, max_km, samples, "altitude")
    attenuation = shielding_attenuation(shielding_mm)
    return tuple(
        DoseAltitudePoint(
            altitude_km=float(h),
            dose_krad_per_year=annual_dose_rate(float(h), inclination_deg) * attenuation,
        )
        for h in np.linspace(min_km, max_km, samples)
    )


def saa_exposure(inclination_deg: float) -> str:
    i_eff = min(inclination_deg, 180.0 - inclination_deg)
    if 30 <= i_eff <= 60:
        return "high"
    if 20 <= i_eff <= 70:
        return "moderate"
    return "low"


def belt_region(altitude_km: float) -> str:
    if altitude_km < 800:
        return "Below inner belt (LEO)"
    if altitude_km < 1500:
        return "Inner belt fringe"
    if altitude_km < 6000:
        return "Inner Van Allen belt"
    if altitude_km < 12000:
        return "Slot region"
    if altitude_km < 25000:
        return "Outer Van Allen belt"
    return "GEO region"


def component_recommendation(mission_total_krad: float) -> str:
    if mission_total_krad < 5:
        return "COTS components acceptable"
    if mission_total_krad < 10:
        return "COTS with radiation margin testing"
    if mission_total_krad < 30:
        return "Radiation-tolerant components recommended"
    if mission_total_krad < 100:
        return "Radiation-tolerant components with spot shielding"
    return "Radiation-hardened components required"


def _dose_status(mission_total_krad: float) -> Status:
    if mission_total_krad < DOSE_NOMINAL_MAX_KRAD:
        return NOMINAL
    if mission_total_krad < DOSE_WARNING_MAX_KRAD:
        return WARNING
    return CRITICAL


def compute_radiation_environment(
    altitude_km: float,
    inclination_deg: float,
    shielding_mm: float,
    lifetime_years: float,
) -> RadiationReport:
    """
    Radiation budget for a single orbit and shielding choice.

    Status is nominal below 10 krad mission total, warning below 100 krad,
    critical otherwise.
    """
    if lifetime_years < 0:
        raise InvalidInputError(f"Lifetime must be non-negative, got {lifetime_years} years")

    unshielded = unshielded_dose_rate(altitude_km)
    inc_factor = inclination_factor(inclination_deg)
    shield_factor = shielding_attenuation(shielding_mm)
    annual = unshielded * inc_factor * shield_factor
    total = annual * lifetime_years

    return RadiationReport(
        altitude_km=altitude_km,
        inclination_deg=inclination_deg,
        shielding_mm=shielding_mm,
        lifetime_years=lifetime_years,
        unshielded_dose_krad_per_year=unshielded,
        inclination_factor=inc_factor,
        shielding_factor=shield_factor,
        annual_dose_krad=annual,
        mission_total_krad=total,
        saa_exposure=saa_exposure(inclination_deg),
        belt_region=belt_region(altitude_km),
        recommendation=component_recommendation(total),
        status=_dose_status(total),
    )
