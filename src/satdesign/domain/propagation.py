# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital elements and derived orbital state.

Validates a set of classical elements and derives the period, mean motion,
perigee/apogee geometry and J2 secular drift that the budget modules consume.

No external dependencies — only stdlib math/dataclasses/datetime.
"""
import math
from dataclasses import dataclass
from datetime import datetime

from satdesign.domain.errors import InvalidInputError
from satdesign.domain.orbital_mechanics import (
    OrbitalConstants,
    is_sun_synchronous,
    j2_arg_perigee_rate_deg_per_day,
    j2_raan_rate_deg_per_day,
    mean_motion,
    orbital_period,
    true_to_mean_anomaly,
    vis_viva_speed,
)


@dataclass(frozen=True)
class OrbitalElements:
    """Classical Keplerian elements (km, degrees)."""
    semi_major_axis_km: float
    eccentricity: float
    inclination_deg: float
    raan_deg: float = 0.0
    arg_perigee_deg: float = 0.0
    true_anomaly_deg: float = 0.0

    @property
    def mean_anomaly_deg(self) -> float:
        m = true_to_mean_anomaly(math.radians(self.true_anomaly_deg), self.eccentricity)
        return math.degrees(m) % 360.0

    @property
    def perigee_radius_km(self) -> float:
        return self.semi_major_axis_km * (1.0 - self.eccentricity)

    @property
    def apogee_radius_km(self) -> float:
        return self.semi_major_axis_km * (1.0 + self.eccentricity)

    @classmethod
    def circular(
        cls,
        altitude_km: float,
        inclination_deg: float,
        raan_deg: float = 0.0,
        true_anomaly_deg: float = 0.0,
    ) -> "OrbitalElements":
        """Circular orbit at an altitude above the equatorial radius."""
        return cls(
            semi_major_axis_km=OrbitalConstants.R_EARTH_EQUATORIAL + altitude_km,
            eccentricity=0.0,
            inclination_deg=inclination_deg,
            raan_deg=raan_deg,
            true_anomaly_deg=true_anomaly_deg,
        )


def validate_elements(elements: OrbitalElements) -> None:
    """
    Reject elements outside the physical domain.

    Raises:
        InvalidInputError: If a <= 0, e outside [0, 1), inclination outside
            [0, 180] deg, or the perigee lies inside the Earth.
    """
    if not elements.semi_major_axis_km > 0:
        raise InvalidInputError(
            f"Semi-major axis must be positive, got {elements.semi_major_axis_km} km"
        )
    if not 0.0 <= elements.eccentricity < 1.0:
        raise InvalidInputError(
            f"Eccentricity must be in [0, 1), got {elements.eccentricity}"
        )
    if not 0.0 <= elements.inclination_deg <= 180.0:
        raise InvalidInputError(
            f"Inclination must be in [0, 180] deg, got {elements.inclination_deg}"
        )
    if elements.perigee_radius_km <= OrbitalConstants.R_EARTH_MEAN:
        raise InvalidInputError(
            f"Perigee radius {elements.perigee_radius_km:.1f} km is inside the Earth "
            f"({OrbitalConstants.R_EARTH_MEAN} km)"
        )


@dataclass(frozen=True)
class OrbitalState:
    """Derived two-body quantities for one set of elements.

    average_altitude_km is a - R_equatorial: a representative mean for
    eccentric orbits, not a true time average.
    """
    elements: OrbitalElements
    period_s: float
    mean_motion_rad_s: float
    average_altitude_km: float
    perigee_altitude_km: float
    apogee_altitude_km: float
    perigee_speed_km_s: float
    apogee_speed_km_s: float
    revs_per_day: float
    raan_drift_deg_day: float
    arg_perigee_drift_deg_day: float
    is_sun_synchronous: bool

    @property
    def period_min(self) -> float:
        return self.period_s / 60.0

    def ground_track(self, duration_s: float, step_s: float, epoch: datetime | None = None):
        """Lazy ground track for this orbit (see ground_track.compute_ground_track)."""
        from satdesign.domain.ground_track import compute_ground_track

        return compute_ground_track(self.elements, duration_s, step_s, epoch=epoch)


def derive_orbital_state(elements: OrbitalElements) -> OrbitalState:
    """
    Derive the orbital state from classical elements.

    Args:
        elements: Orbital elements (km, degrees).

    Returns:
        OrbitalState with period, mean motion, perigee/apogee geometry and
        J2 secular drift rates.

    Raises:
        InvalidInputError: If the elements fail validation.
    """
    validate_elements(elements)

    a = elements.semi_major_axis_km
    e = elements.eccentricity
    i = elements.inclination_deg
    r_eq = OrbitalConstants.R_EARTH_EQUATORIAL
    r_p = elements.perigee_radius_km
    r_a = elements.apogee_radius_km
    period = orbital_period(a)

    return OrbitalState(
        elements=elements,
        period_s=period,
        mean_motion_rad_s=mean_motion(a),
        average_altitude_km=a - r_eq,
        perigee_altitude_km=r_p - r_eq,
        apogee_altitude_km=r_a - r_eq,
        perigee_speed_km_s=vis_viva_speed(a, r_p),
        apogee_speed_km_s=vis_viva_speed(a, r_a),
        revs_per_day=OrbitalConstants.SECONDS_PER_DAY / period,
        raan_drift_deg_day=j2_raan_rate_deg_per_day(a, e, i),
        arg_perigee_drift_deg_day=j2_arg_perigee_rate_deg_per_day(a, e, i),
        is_sun_synchronous=is_sun_synchronous(a, e, i),
    )
