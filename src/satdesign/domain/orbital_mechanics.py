# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital mechanics functions.

Two-body relations used by every budget: Kepler's third law, vis-viva,
Kepler's equation, element-to-Cartesian conversion and J2 secular rates.
Distances in km, times in seconds, angles in radians unless the name says deg.
"""
import math
from dataclasses import dataclass

from satdesign.domain.errors import InvalidInputError


@dataclass(frozen=True)
class OrbitalConstants:
    """Standard Earth and physical constants (km-based)."""
    MU_EARTH: float = 398600.4418          # km³/s² — gravitational parameter
    R_EARTH_MEAN: float = 6371.0           # km — mean radius
    R_EARTH_EQUATORIAL: float = 6378.137   # km — WGS84 equatorial radius
    J2_EARTH: float = 1.08262668e-3        # J2 zonal harmonic
    EARTH_OMEGA: float = 7.2921159e-5      # rad/s — sidereal rotation rate
    SOLAR_FLUX: float = 1361.0             # W/m² at 1 AU
    G0: float = 9.80665                    # m/s² — standard gravity
    C_LIGHT: float = 299792458.0           # m/s
    K_BOLTZMANN: float = 1.380649e-23      # J/K
    SECONDS_PER_DAY: float = 86400.0
    DAYS_PER_YEAR: float = 365.25
    INTERFACE_ALTITUDE_KM: float = 120.0   # atmospheric interface


# Module-level singleton
OrbitalConstants = OrbitalConstants()

_SUN_SYNC_RAAN_RATE_DEG_DAY = 360.0 / 365.25


def orbital_period(a_km: float) -> float:
    """Orbital period in seconds from semi-major axis (Kepler's third law)."""
    return 2.0 * math.pi * math.sqrt(a_km ** 3 / OrbitalConstants.MU_EARTH)


def mean_motion(a_km: float) -> float:
    """Mean motion in rad/s."""
    return math.sqrt(OrbitalConstants.MU_EARTH / a_km ** 3)


def vis_viva_speed(a_km: float, r_km: float) -> float:
    """Orbital speed (km/s) at radius r on an orbit with semi-major axis a."""
    return math.sqrt(OrbitalConstants.MU_EARTH * (2.0 / r_km - 1.0 / a_km))


def solve_kepler(mean_anomaly_rad: float, e: float, tolerance: float = 1e-12) -> float:
    """
    Solve Kepler's equation M = E - e sin E for the eccentric anomaly.

    Newton-Raphson from E0 = M (or pi for high eccentricity), at most
    50 iterations.
    """
    m = math.fmod(mean_anomaly_rad, 2.0 * math.pi)
    ecc_anomaly = m if e < 0.8 else math.pi
    for _ in range(50):
        delta = (ecc_anomaly - e * math.sin(ecc_anomaly) - m) / (1.0 - e * math.cos(ecc_anomaly))
        ecc_anomaly -= delta
        if abs(delta) < tolerance:
            break
    return ecc_anomaly


def eccentric_to_true_anomaly(ecc_anomaly_rad: float, e: float) -> float:
    return 2.0 * math.atan2(
        math.sqrt(1.0 + e) * math.sin(ecc_anomaly_rad / 2.0),
        math.sqrt(1.0 - e) * math.cos(ecc_anomaly_rad / 2.0),
    )


def true_to_mean_anomaly(nu_rad: float, e: float) -> float:
    ecc_anomaly = 2.0 * math.atan2(
        math.sqrt(1.0 - e) * math.sin(nu_rad / 2.0),
        math.sqrt(1.0 + e) * math.cos(nu_rad / 2.0),
    )
    return ecc_anomaly - e * math.sin(ecc_anomaly)


def kepler_to_cartesian(
    a: float,
    e: float,
    i_rad: float,
    omega_big_rad: float,
    omega_small_rad: float,
    nu_rad: float,
) -> tuple[list[float], list[float]]:
    """
    Convert Keplerian orbital elements to ECI Cartesian position/velocity.

    Args:
        a: Semi-major axis (km)
        e: Eccentricity (0 for circular)
        i_rad: Inclination (radians)
        omega_big_rad: RAAN / longitude of ascending node (radians)
        omega_small_rad: Argument of perigee (radians)
        nu_rad: True anomaly (radians)

    Returns:
        (position_eci [x,y,z] in km, velocity_eci [vx,vy,vz] in km/s)
    """
    mu = OrbitalConstants.MU_EARTH

    r = a * (1 - e**2) / (1 + e * math.cos(nu_rad))

    p_factor = math.sqrt(mu / (a * (1 - e**2)))
    pos_pqw = [r * math.cos(nu_rad), r * math.sin(nu_rad), 0.0]
    vel_pqw = [
        -p_factor * math.sin(nu_rad),
        p_factor * (e + math.cos(nu_rad)),
        0.0,
    ]

    cO = math.cos(omega_big_rad)
    sO = math.sin(omega_big_rad)
    co = math.cos(omega_small_rad)
    so = math.sin(omega_small_rad)
    ci = math.cos(i_rad)
    si = math.sin(i_rad)

    rotation = [
        [cO * co - sO * so * ci, -cO * so - sO * co * ci, sO * si],
        [sO * co + cO * so * ci, -sO * so + cO * co * ci, -cO * si],
        [so * si, co * si, ci],
    ]

    pos_eci = [
        sum(rotation[j][k] * pos_pqw[k] for k in range(3)) for j in range(3)
    ]
    vel_eci = [
        sum(rotation[j][k] * vel_pqw[k] for k in range(3)) for j in range(3)
    ]

    return pos_eci, vel_eci


def j2_raan_rate_deg_per_day(a_km: float, e: float, inclination_deg: float) -> float:
    """Secular RAAN drift from J2 (deg/day)."""
    c = OrbitalConstants
    p = a_km * (1.0 - e**2)
    rate = -1.5 * mean_motion(a_km) * c.J2_EARTH * (c.R_EARTH_EQUATORIAL / p) ** 2 * math.cos(
        math.radians(inclination_deg)
    )
    return math.degrees(rate) * c.SECONDS_PER_DAY


def j2_arg_perigee_rate_deg_per_day(a_km: float, e: float, inclination_deg: float) -> float:
    """Secular argument-of-perigee drift from J2 (deg/day)."""
    c = OrbitalConstants
    p = a_km * (1.0 - e**2)
    cos_i = math.cos(math.radians(inclination_deg))
    rate = 0.75 * mean_motion(a_km) * c.J2_EARTH * (c.R_EARTH_EQUATORIAL / p) ** 2 * (5.0 * cos_i**2 - 1.0)
    return math.degrees(rate) * c.SECONDS_PER_DAY


def is_sun_synchronous(a_km: float, e: float, inclination_deg: float, tolerance_deg_day: float = 0.05) -> bool:
    """True when J2 RAAN drift matches the mean solar motion (0.9856 deg/day)."""
    drift = j2_raan_rate_deg_per_day(a_km, e, inclination_deg)
    return abs(drift - _SUN_SYNC_RAAN_RATE_DEG_DAY) < tolerance_deg_day


def sso_inclination_deg(altitude_km: float) -> float:
    """
    Calculate Sun-synchronous orbit inclination for a circular orbit.

    Inverts the J2 RAAN drift for a target rate of 360 deg / 365.25 days.

    Args:
        altitude_km: Orbital altitude above the equatorial radius (km)

    Returns:
        Inclination in degrees (retrograde, > 90°)

    Raises:
        InvalidInputError: If no inclination yields a Sun-synchronous drift.
    """
    c = OrbitalConstants
    a = c.R_EARTH_EQUATORIAL + altitude_km
    target_rad_s = math.radians(_SUN_SYNC_RAAN_RATE_DEG_DAY) / c.SECONDS_PER_DAY
    cos_i = -target_rad_s / (1.5 * mean_motion(a) * c.J2_EARTH * (c.R_EARTH_EQUATORIAL / a) ** 2)
    if abs(cos_i) > 1.0:
        raise InvalidInputError(f"No Sun-synchronous inclination exists at {altitude_km} km")
    return math.degrees(math.acos(cos_i))
