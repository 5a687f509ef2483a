# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Walker constellation geometry.

Walker delta (planes spread over 360 deg of RAAN) and Walker star (planes
spread over 180 deg) patterns described by T/P/F. Totals that do not divide
evenly across the planes are distributed floor(T/P) per plane, with the
remaining satellites added one each to the trailing planes.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from satdesign.domain.errors import InvalidInputError
from satdesign.domain.propagation import OrbitalElements, derive_orbital_state
from satdesign.domain.status import NOMINAL, WARNING, Status

WALKER_TYPES = ("delta", "star")


@dataclass(frozen=True)
class WalkerParams:
    """Walker pattern T/P/F at one altitude and inclination."""
    type: str
    total_sats: int
    planes: int
    phasing: int
    altitude_km: float
    inclination_deg: float
    raan0_deg: float = 0.0


@dataclass(frozen=True)
class ConstellationMetrics:
    """Constellation summary; status is warning when planes are unevenly filled."""
    total_satellites: int
    planes: int
    sats_per_plane: int
    plane_populations: tuple[int, ...]
    total_mass_kg: float
    orbital_period_min: float
    coverage_lat_band: tuple[float, float]
    status: Status


@dataclass(frozen=True)
class ConstellationSatellite:
    """One generated member of a Walker constellation."""
    id: int
    plane: int
    index_in_plane: int
    elements: OrbitalElements


def validate_walker(walker: WalkerParams) -> None:
    if walker.type not in WALKER_TYPES:
        raise InvalidInputError(f"Unknown Walker type: {walker.type!r} (expected one of {list(WALKER_TYPES)})")
    if walker.planes < 1:
        raise InvalidInputError(f"Number of planes must be at least 1, got {walker.planes}")
    if walker.total_sats < walker.planes:
        raise InvalidInputError(
            f"Total satellites ({walker.total_sats}) must be at least the number of planes ({walker.planes})"
        )
    if not 0 <= walker.phasing < walker.planes:
        raise InvalidInputError(
            f"Phasing must be in [0, {walker.planes - 1}], got {walker.phasing}"
        )


def plane_populations(total_sats: int, planes: int) -> tuple[int, ...]:
    """Satellites per plane; the remainder goes one each to the trailing planes."""
    base, extra = divmod(total_sats, planes)
    return tuple(base + (1 if p >= planes - extra else 0) for p in range(planes))


def coverage_latitude_band(inclination_deg: float) -> tuple[float, float]:
    """Latitude band reached by the ground tracks, [-L, L] with L = min(i, 180 - i)."""
    limit = min(inclination_deg, 180.0 - inclination_deg)
    return -limit, limit


def compute_constellation_metrics(
    walker: WalkerParams,
    unit_sat_mass_kg: float,
) -> ConstellationMetrics:
    """
    Summarize a Walker constellation.

    Args:
        walker: Walker pattern parameters.
        unit_sat_mass_kg: Mass of one satellite (kg).

    Returns:
        ConstellationMetrics with per-plane populations, total mass,
        orbital period and latitude coverage band.

    Raises:
        InvalidInputError: If P < 1, T < P, F outside [0, P), the unit mass
            is negative or the orbit is invalid.
    """
    validate_walker(walker)
    if unit_sat_mass_kg < 0:
        raise InvalidInputError(f"Unit satellite mass must be non-negative, got {unit_sat_mass_kg} kg")

    state = derive_orbital_state(OrbitalElements.circular(walker.altitude_km, walker.inclination_deg))
    populations = plane_populations(walker.total_sats, walker.planes)
    even = walker.total_sats % walker.planes == 0

    return ConstellationMetrics(
        total_satellites=walker.total_sats,
        planes=walker.planes,
        sats_per_plane=math.ceil(walker.total_sats / walker.planes),
        plane_populations=populations,
        total_mass_kg=walker.total_sats * unit_sat_mass_kg,
        orbital_period_min=state.period_min,
        coverage_lat_band=coverage_latitude_band(walker.inclination_deg),
        status=NOMINAL if even else WARNING,
    )


def generate_walker_constellation(walker: WalkerParams) -> list[ConstellationSatellite]:
    """
    Generate orbital elements for every satellite of a Walker pattern.

    RAAN spacing is 360/P for delta and 180/P for star. Satellites are
    spaced evenly within each plane and adjacent planes are offset in
    anomaly by F * 360 / T.
    """
    validate_walker(walker)
    raan_spacing = (360.0 if walker.type == "delta" else 180.0) / walker.planes
    phase_offset = walker.phasing * 360.0 / walker.total_sats

    satellites: list[ConstellationSatellite] = []
    sat_id = 0
    for plane, count in enumerate(plane_populations(walker.total_sats, walker.planes)):
        raan = (walker.raan0_deg + plane * raan_spacing) % 360.0
        spacing = 360.0 / count
        for index in range(count):
            anomaly = (index * spacing + plane * phase_offset) % 360.0
            satellites.append(ConstellationSatellite(
                id=sat_id,
                plane=plane,
                index_in_plane=index,
                elements=OrbitalElements.circular(
                    walker.altitude_km,
                    walker.inclination_deg,
                    raan_deg=raan,
                    true_anomaly_deg=anomaly,
                ),
            ))
            sat_id += 1
    return satellites
