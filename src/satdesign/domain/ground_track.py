# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ground track computation.

Propagates a satellite's position over time using Keplerian two-body
mechanics and converts to geodetic coordinates (lat/lon/alt) via the
ECI -> ECEF -> geodetic pipeline.

Limitation: pure Keplerian propagation (no drag, no J2, no perturbations).
The mean anomaly advances linearly in time and Kepler's equation is solved
at every sample, so eccentric orbits are handled.

No external dependencies — only stdlib math/dataclasses/datetime.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator

from satdesign.domain.coordinate_frames import (
    ecef_to_geodetic,
    eci_to_ecef,
    gmst_rad,
)
from satdesign.domain.errors import InvalidInputError
from satdesign.domain.orbital_mechanics import (
    OrbitalConstants,
    eccentric_to_true_anomaly,
    kepler_to_cartesian,
    mean_motion,
    solve_kepler,
)
from satdesign.domain.propagation import OrbitalElements, validate_elements


@dataclass(frozen=True)
class GroundTrackPoint:
    """A single point on a satellite's ground track."""
    time_s: float
    lat_deg: float
    lon_deg: float
    alt_km: float


def position_ecef(
    elements: OrbitalElements,
    elapsed_s: float,
    theta0_rad: float = 0.0,
) -> tuple[float, float, float]:
    """
    Earth-fixed position (km) after elapsed_s of two-body motion.

    The mean anomaly advances linearly; Earth rotates from the sidereal
    angle theta0_rad at t = 0.
    """
    a = elements.semi_major_axis_km
    e = elements.eccentricity
    m = math.radians(elements.mean_anomaly_deg) + mean_motion(a) * elapsed_s
    nu_rad = eccentric_to_true_anomaly(solve_kepler(m, e), e)
    pos_eci, _ = kepler_to_cartesian(
        a=a, e=e,
        i_rad=math.radians(elements.inclination_deg),
        omega_big_rad=math.radians(elements.raan_deg),
        omega_small_rad=math.radians(elements.arg_perigee_deg),
        nu_rad=nu_rad,
    )
    theta = theta0_rad + OrbitalConstants.EARTH_OMEGA * elapsed_s
    return eci_to_ecef((pos_eci[0], pos_eci[1], pos_eci[2]), theta)


class GroundTrack:
    """
    Finite, restartable ground track sequence.

    Points are computed on demand; every call to iter() starts again from
    t = 0. Samples cover [0, duration] inclusive at a fixed step.
    """

    def __init__(
        self,
        elements: OrbitalElements,
        duration_s: float,
        step_s: float,
        epoch: datetime | None = None,
    ) -> None:
        self.elements = elements
        self.duration_s = duration_s
        self.step_s = step_s
        self.epoch = epoch

    def __len__(self) -> int:
        return int(math.floor(self.duration_s / self.step_s + 1e-9)) + 1

    def __iter__(self) -> Iterator[GroundTrackPoint]:
        theta0 = gmst_rad(self.epoch) if self.epoch is not None else 0.0
        for k in range(len(self)):
            elapsed = k * self.step_s
            lat_deg, lon_deg, alt_km = ecef_to_geodetic(
                position_ecef(self.elements, elapsed, theta0)
            )
            yield GroundTrackPoint(
                time_s=elapsed,
                lat_deg=lat_deg,
                lon_deg=lon_deg,
                alt_km=alt_km,
            )


def compute_ground_track(
    elements: OrbitalElements,
    duration_s: float,
    step_s: float,
    epoch: datetime | None = None,
) -> GroundTrack:
    """
    Compute the ground track of a satellite over a time interval.

    Args:
        elements: Orbital elements at t = 0.
        duration_s: Total time span to compute (s), non-negative.
        step_s: Time between consecutive points (s), positive.
        epoch: UTC datetime of t = 0. Sets the initial Greenwich sidereal
            angle; without it the angle starts at zero.

    Returns:
        GroundTrack yielding GroundTrackPoint objects from 0 to duration.

    Raises:
        InvalidInputError: If step is not positive, duration is negative,
            or the elements are invalid.
    """
    if not (step_s > 0 and math.isfinite(step_s)):
        raise InvalidInputError(f"Step must be positive and finite, got {step_s} s")
    if not (duration_s >= 0 and math.isfinite(duration_s)):
        raise InvalidInputError(f"Duration must be non-negative and finite, got {duration_s} s")
    validate_elements(elements)
    return GroundTrack(elements, duration_s, step_s, epoch=epoch)
