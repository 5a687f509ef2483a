# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Reference frame conversions.

Greenwich mean sidereal time, ECI -> ECEF rotation, spherical-Earth
geodetic conversion and topocentric look angles. Spherical Earth with the
equatorial radius throughout, which matches the engineering-grade accuracy
of the budgets.

No external dependencies — only stdlib math/datetime.
"""
import math
from datetime import datetime, timezone

from satdesign.domain.orbital_mechanics import OrbitalConstants

_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
_JD_J2000 = 2451545.0


def julian_date(moment: datetime) -> float:
    """Julian Date of a timezone-aware datetime (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return _JD_J2000 + (moment - _J2000).total_seconds() / 86400.0


def gmst_rad(moment: datetime) -> float:
    """Greenwich mean sidereal angle (IAU-82), normalized to [0, 2pi)."""
    t = (julian_date(moment) - _JD_J2000) / 36525.0
    seconds = (
        67310.54841
        + (876600.0 * 3600.0 + 8640184.812866) * t
        + 0.093104 * t**2
        - 6.2e-6 * t**3
    )
    return math.fmod(seconds, 86400.0) / 86400.0 * 2.0 * math.pi % (2.0 * math.pi)


def eci_to_ecef(position_eci: tuple[float, float, float], gmst_angle: float) -> tuple[float, float, float]:
    """Rotate an ECI position about the pole by the sidereal angle."""
    x, y, z = position_eci
    cos_g = math.cos(gmst_angle)
    sin_g = math.sin(gmst_angle)
    return (cos_g * x + sin_g * y, -sin_g * x + cos_g * y, z)


def ecef_to_geodetic(position_ecef: tuple[float, float, float]) -> tuple[float, float, float]:
    """
    Spherical-Earth latitude/longitude (deg) and altitude (km).

    Longitude is wrapped to [-180, 180].
    """
    x, y, z = position_ecef
    r = math.sqrt(x**2 + y**2 + z**2)
    lat = math.degrees(math.asin(z / r))
    lon = math.degrees(math.atan2(y, x))
    return lat, lon, r - OrbitalConstants.R_EARTH_EQUATORIAL


def geodetic_to_ecef(lat_deg: float, lon_deg: float, alt_km: float) -> tuple[float, float, float]:
    lat = math.radians(lat_deg)
    lon = math.radians(lon_deg)
    r = OrbitalConstants.R_EARTH_EQUATORIAL + alt_km
    return (
        r * math.cos(lat) * math.cos(lon),
        r * math.cos(lat) * math.sin(lon),
        r * math.sin(lat),
    )


def look_angles(
    sat_ecef: tuple[float, float, float],
    lat_deg: float,
    lon_deg: float,
    alt_km: float,
) -> tuple[float, float, float]:
    """
    Elevation, azimuth (deg) and range (km) from a ground site to a satellite.

    Uses the South-East-Zenith topocentric frame; azimuth is measured
    clockwise from north in [0, 360).
    """
    sx, sy, sz = geodetic_to_ecef(lat_deg, lon_deg, alt_km)
    dx = sat_ecef[0] - sx
    dy = sat_ecef[1] - sy
    dz = sat_ecef[2] - sz

    lat = math.radians(lat_deg)
    lon = math.radians(lon_deg)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    sin_lon, cos_lon = math.sin(lon), math.cos(lon)

    south = sin_lat * cos_lon * dx + sin_lat * sin_lon * dy - cos_lat * dz
    east = -sin_lon * dx + cos_lon * dy
    zenith = cos_lat * cos_lon * dx + cos_lat * sin_lon * dy + sin_lat * dz

    rng = math.sqrt(south**2 + east**2 + zenith**2)
    elevation = math.degrees(math.asin(zenith / rng))
    azimuth = math.degrees(math.atan2(east, -south)) % 360.0
    return elevation, azimuth, rng
