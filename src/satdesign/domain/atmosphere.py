# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Atmospheric density model and drag acceleration.

Exponential atmospheric density with altitude-dependent scale height
(Vallado Table 8-4). Covers 0-1000 km; a constant floor is used above the
table and sea-level density below it. Solar activity scales the density by
(F10.7 / 140)^0.7.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from satdesign.domain.errors import InvalidInputError
from satdesign.domain.orbital_mechanics import OrbitalConstants


@dataclass(frozen=True)
class DragConfig:
    """Drag configuration for a satellite.

    cd: drag coefficient (dimensionless, typically 2.0-2.5)
    area_m2: cross-sectional area (m²)
    mass_kg: satellite mass (kg)
    """
    cd: float
    area_m2: float
    mass_kg: float

    @property
    def ballistic_coefficient(self) -> float:
        """Ballistic coefficient B_c = C_d * A / m (m²/kg)."""
        return self.cd * self.area_m2 / self.mass_kg


# Exponential atmosphere lookup table: (base_altitude_km, base_density_kg_m3, scale_height_km)
# Source: Vallado Table 8-4
_ATMOSPHERE_TABLE: tuple[tuple[float, float, float], ...] = (
    (0, 1.225, 7.249),
    (25, 3.899e-02, 6.349),
    (30, 1.774e-02, 6.682),
    (40, 3.972e-03, 7.554),
    (50, 1.057e-03, 8.382),
    (60, 3.206e-04, 7.714),
    (70, 8.770e-05, 6.549),
    (80, 1.905e-05, 5.799),
    (90, 3.396e-06, 5.382),
    (100, 5.297e-07, 5.877),
    (110, 9.661e-08, 7.263),
    (120, 2.438e-08, 9.473),
    (130, 8.484e-09, 12.636),
    (140, 3.845e-09, 16.149),
    (150, 2.070e-09, 22.523),
    (180, 5.464e-10, 29.740),
    (200, 2.789e-10, 37.105),
    (250, 7.248e-11, 45.546),
    (300, 2.418e-11, 53.628),
    (350, 9.518e-12, 53.298),
    (400, 3.725e-12, 58.515),
    (450, 1.585e-12, 60.828),
    (500, 6.967e-13, 63.822),
    (600, 1.454e-13, 71.835),
    (700, 3.614e-14, 88.667),
    (800, 1.170e-14, 124.64),
    (900, 5.245e-15, 181.05),
    (1000, 3.019e-15, 268.00),
)

_SEA_LEVEL_DENSITY = 1.225
_EXOSPHERE_FLOOR = 3.019e-15

SOLAR_ACTIVITY_F107: dict[str, float] = {
    "low": 70.0,
    "moderate": 140.0,
    "high": 250.0,
}
_REFERENCE_F107 = 140.0


def solar_activity_multiplier(solar_activity: str = "moderate") -> float:
    """Density scale factor (F10.7 / 140)^0.7 for a solar activity level.

    Raises:
        InvalidInputError: If the level is not low, moderate or high.
    """
    try:
        f107 = SOLAR_ACTIVITY_F107[solar_activity]
    except KeyError as exc:
        raise InvalidInputError(
            f"Unknown solar activity level: {solar_activity!r} "
            f"(expected one of {sorted(SOLAR_ACTIVITY_F107)})"
        ) from exc
    return (f107 / _REFERENCE_F107) ** 0.7


def atmospheric_density(altitude_km: float, solar_activity: str = "moderate") -> float:
    """Atmospheric density at given altitude using piecewise exponential model.

    Binary-searches the lookup table for the altitude bracket, then
    interpolates: rho = rho_base * exp(-(h - h_base) / H), bounded below
    by the base density of the next bracket.

    Args:
        altitude_km: Altitude above Earth surface in km.
        solar_activity: "low", "moderate" or "high".

    Returns:
        Atmospheric density in kg/m³. Sea-level density below 0 km and
        the exospheric floor above 1000 km.

    Raises:
        InvalidInputError: If the solar activity level is unknown.
    """
    multiplier = solar_activity_multiplier(solar_activity)
    if altitude_km < _ATMOSPHERE_TABLE[0][0]:
        return _SEA_LEVEL_DENSITY * multiplier
    if altitude_km > _ATMOSPHERE_TABLE[-1][0]:
        return _EXOSPHERE_FLOOR * multiplier

    # Binary search for bracket
    lo, hi = 0, len(_ATMOSPHERE_TABLE) - 1
    while lo < hi - 1:
        mid = (lo + hi) // 2
        if _ATMOSPHERE_TABLE[mid][0] <= altitude_km:
            lo = mid
        else:
            hi = mid
    if altitude_km >= _ATMOSPHERE_TABLE[hi][0]:
        lo = hi

    h_base, rho_base, scale_height = _ATMOSPHERE_TABLE[lo]
    rho = rho_base * math.exp(-(altitude_km - h_base) / scale_height)
    # never below the next band's base density, keeps the profile monotone
    if lo + 1 < len(_ATMOSPHERE_TABLE):
        rho = max(rho, _ATMOSPHERE_TABLE[lo + 1][1])
    return rho * multiplier


def drag_acceleration(density: float, velocity: float, ballistic_coefficient: float) -> float:
    """Drag acceleration magnitude.

    a_drag = 0.5 * rho * v² * B_c

    Args:
        density: Atmospheric density (kg/m³).
        velocity: Orbital velocity magnitude (m/s).
        ballistic_coefficient: C_d * A / m (m²/kg), e.g.
            DragConfig.ballistic_coefficient.

    Returns:
        Drag acceleration in m/s².
    """
    return 0.5 * density * velocity ** 2 * ballistic_coefficient


def semi_major_axis_decay_rate(
    a_km: float,
    ballistic_coefficient: float,
    solar_activity: str = "moderate",
) -> float:
    """Rate of semi-major axis decay due to atmospheric drag.

    da/dt = -rho(h) * B_c * sqrt(mu * a)

    evaluated in SI units with h = a - R_equatorial.

    Args:
        a_km: Semi-major axis in km.
        ballistic_coefficient: C_d * A / m (m²/kg).
        solar_activity: "low", "moderate" or "high".

    Returns:
        da/dt in km/day (negative — orbit decays).
    """
    h_km = a_km - OrbitalConstants.R_EARTH_EQUATORIAL
    rho = atmospheric_density(h_km, solar_activity)
    a_m = a_km * 1000.0
    mu_si = OrbitalConstants.MU_EARTH * 1e9
    rate_m_s = -rho * ballistic_coefficient * math.sqrt(mu_si * a_m)
    return rate_m_s / 1000.0 * OrbitalConstants.SECONDS_PER_DAY
