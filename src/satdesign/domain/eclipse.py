# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Eclipse geometry.

Cylindrical Earth shadow for a circular orbit at altitude h and Sun beta
angle beta. The Sun-orbit geometry (RAAN/season coupling) is not modelled;
without an explicit beta the worst case beta = 0 is used, which every
inclined orbit passes through during the year.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from satdesign.domain.errors import InvalidInputError
from satdesign.domain.orbital_mechanics import OrbitalConstants
from satdesign.domain.propagation import OrbitalState

OBLIQUITY_DEG = 23.44


@dataclass(frozen=True)
class EclipseGeometry:
    """Shadow fraction and durations for one orbit."""
    beta_deg: float
    eclipse_fraction: float
    eclipse_duration_min: float
    sunlight_duration_min: float
    period_min: float


def beta_angle_extremes_deg(inclination_deg: float) -> tuple[float, float]:
    """Achievable |beta| envelope over a year, [0, min(90, i_eff + obliquity)].

    Retrograde inclinations are folded (i_eff = min(i, 180 - i)).
    """
    i_eff = min(inclination_deg, 180.0 - inclination_deg)
    return 0.0, min(90.0, i_eff + OBLIQUITY_DEG)


def eclipse_fraction(altitude_km: float, beta_deg: float = 0.0) -> float:
    """
    Fraction of the orbit spent in the cylindrical Earth shadow.

    beta* = asin(R / (R + h)); no eclipse when |beta| >= beta*, otherwise
    f = acos(sqrt(h^2 + 2Rh) / ((R + h) cos beta)) / pi.

    Args:
        altitude_km: Circular orbit altitude (km), positive.
        beta_deg: Sun beta angle (deg).

    Returns:
        Eclipse fraction in [0, 0.5).

    Raises:
        InvalidInputError: If altitude is not positive.
    """
    if not altitude_km > 0:
        raise InvalidInputError(f"Altitude must be positive, got {altitude_km} km")

    r = OrbitalConstants.R_EARTH_EQUATORIAL
    h = altitude_km
    beta = math.radians(beta_deg)
    beta_star = math.asin(r / (r + h))
    if abs(beta) >= beta_star:
        return 0.0

    ratio = math.sqrt(h**2 + 2.0 * r * h) / ((r + h) * math.cos(beta))
    return math.acos(min(1.0, ratio)) / math.pi


def compute_eclipse(state: OrbitalState, beta_deg: float | None = None) -> EclipseGeometry:
    """Eclipse geometry at the average altitude of an orbital state."""
    beta = 0.0 if beta_deg is None else beta_deg
    fraction = eclipse_fraction(state.average_altitude_km, beta)
    period_min = state.period_min
    return EclipseGeometry(
        beta_deg=beta,
        eclipse_fraction=fraction,
        eclipse_duration_min=fraction * period_min,
        sunlight_duration_min=(1.0 - fraction) * period_min,
        period_min=period_min,
    )
