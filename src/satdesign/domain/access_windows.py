# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ground-station access windows.

Samples the two-body orbit at a fixed step, computes topocentric look
angles from every active station and records the intervals in which the
satellite stays above the station's minimum elevation for at least one
minute. Passes still in progress at the end of the span are dropped.

No external dependencies — only stdlib math/dataclasses/datetime.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from satdesign.domain.coordinate_frames import gmst_rad, look_angles
from satdesign.domain.errors import InvalidInputError
from satdesign.domain.ground_track import position_ecef
from satdesign.domain.propagation import OrbitalElements, validate_elements

MIN_PASS_DURATION_S = 60.0
LINK_EFFICIENCY = 0.7


@dataclass(frozen=True)
class GroundStation:
    id: str
    name: str
    lat_deg: float
    lon_deg: float
    alt_km: float = 0.0
    min_elevation_deg: float = 5.0
    active: bool = True


DEFAULT_GROUND_STATIONS: tuple[GroundStation, ...] = (
    GroundStation("svalbard", "Svalbard (SvalSat)", 78.23, 15.39, 0.5, 5.0, True),
    GroundStation("fairbanks", "Fairbanks, AK", 64.86, -147.72, 0.16, 5.0, True),
    GroundStation("darmstadt", "Darmstadt (ESOC)", 49.87, 8.63, 0.14, 5.0, True),
    GroundStation("santiago", "Santiago, Chile", -33.45, -70.67, 0.52, 5.0, True),
    GroundStation("goldstone", "Goldstone (DSN)", 35.43, -116.89, 0.99, 5.0, False),
    GroundStation("canberra", "Canberra (DSN)", -35.40, 148.98, 0.68, 5.0, False),
    GroundStation("madrid", "Madrid (DSN)", 40.43, -4.25, 0.83, 5.0, False),
    GroundStation("tokyo", "Tokyo, Japan", 35.68, 139.77, 0.04, 10.0, False),
    GroundStation("bangalore", "Bangalore (ISTRAC)", 13.03, 77.57, 0.92, 5.0, False),
    GroundStation("tromso", "Tromsø, Norway", 69.65, 18.96, 0.10, 5.0, False),
    GroundStation("mcmurdo", "McMurdo, Antarctica", -77.85, 166.67, 0.02, 5.0, False),
    GroundStation("hawaii", "Hawaii (AMOS)", 20.71, -156.26, 3.06, 5.0, False),
    GroundStation("singapore", "Singapore", 1.35, 103.82, 0.01, 10.0, False),
    GroundStation("redu", "Redu, Belgium", 50.00, 5.15, 0.38, 5.0, False),
    GroundStation("kiruna", "Kiruna, Sweden", 67.86, 20.22, 0.39, 5.0, False),
)


@dataclass(frozen=True)
class AccessWindow:
    """One pass of the satellite over a ground station."""
    station_id: str
    station_name: str
    aos: datetime
    los: datetime
    tca: datetime
    max_elevation_deg: float
    aos_azimuth_deg: float
    los_azimuth_deg: float
    duration_s: float
    quality: str


@dataclass(frozen=True)
class ContactMetrics:
    passes_per_day: float
    avg_pass_duration_min: float
    max_gap_hours: float
    daily_contact_min: float
    daily_data_mb: float


def pass_quality(max_elevation_deg: float) -> str:
    """Grade A (>= 60 deg), B (>= 30), C (>= 10), D otherwise."""
    if max_elevation_deg >= 60:
        return "A"
    if max_elevation_deg >= 30:
        return "B"
    if max_elevation_deg >= 10:
        return "C"
    return "D"


def _station_windows(
    station: GroundStation,
    samples: list[tuple[float, tuple[float, float, float]]],
    epoch: datetime,
) -> list[AccessWindow]:
    windows: list[AccessWindow] = []
    in_pass = False
    start = aos_az = max_el = tca = last_az = 0.0

    for t, sat_ecef in samples:
        elevation, azimuth, _ = look_angles(sat_ecef, station.lat_deg, station.lon_deg, station.alt_km)
        if elevation >= station.min_elevation_deg:
            if not in_pass:
                in_pass = True
                start, aos_az, max_el, tca = t, azimuth, elevation, t
            if elevation > max_el:
                max_el, tca = elevation, t
            last_az = azimuth
        elif in_pass:
            in_pass = False
            duration = t - start
            if duration >= MIN_PASS_DURATION_S:
                windows.append(AccessWindow(
                    station_id=station.id,
                    station_name=station.name,
                    aos=epoch + timedelta(seconds=start),
                    los=epoch + timedelta(seconds=t),
                    tca=epoch + timedelta(seconds=tca),
                    max_elevation_deg=max_el,
                    aos_azimuth_deg=aos_az,
                    los_azimuth_deg=last_az,
                    duration_s=duration,
                    quality=pass_quality(max_el),
                ))
    return windows


def compute_access_windows(
    elements: OrbitalElements,
    stations: tuple[GroundStation, ...],
    epoch: datetime,
    duration_s: float,
    step_s: float = 30.0,
) -> list[AccessWindow]:
    """
    Predict passes over the active ground stations.

    Args:
        elements: Orbital elements at epoch.
        stations: Candidate stations; inactive ones are skipped.
        epoch: UTC datetime of the elements.
        duration_s: Prediction span (s).
        step_s: Sampling step (s).

    Returns:
        Access windows of at least 60 s, sorted by AOS.

    Raises:
        InvalidInputError: If step is not positive, duration is negative or
            the elements are invalid.
    """
    if not (step_s > 0 and math.isfinite(step_s)):
        raise InvalidInputError(f"Step must be positive and finite, got {step_s} s")
    if not (duration_s >= 0 and math.isfinite(duration_s)):
        raise InvalidInputError(f"Duration must be non-negative and finite, got {duration_s} s")
    validate_elements(elements)

    active = [s for s in stations if s.active]
    if not active:
        return []

    theta0 = gmst_rad(epoch)
    count = int(duration_s // step_s) + 1
    samples = [
        (k * step_s, position_ecef(elements, k * step_s, theta0))
        for k in range(count)
    ]

    windows: list[AccessWindow] = []
    for station in active:
        windows.extend(_station_windows(station, samples, epoch))
    windows.sort(key=lambda w: w.aos)
    return windows


def compute_contact_metrics(
    windows: list[AccessWindow],
    duration_s: float,
    data_rate_kbps: float,
) -> ContactMetrics:
    """Pass statistics and daily downlink volume at 70 % link efficiency."""
    days = duration_s / 86400.0
    if not windows:
        return ContactMetrics(0.0, 0.0, days * 24.0, 0.0, 0.0)

    per_day = max(1.0, days)
    total_contact_s = sum(w.duration_s for w in windows)
    max_gap_s = 0.0
    for prev, cur in zip(windows, windows[1:]):
        max_gap_s = max(max_gap_s, (cur.aos - prev.los).total_seconds())

    daily_contact_s = total_contact_s / per_day
    daily_bits = data_rate_kbps * 1000.0 * daily_contact_s * LINK_EFFICIENCY
    return ContactMetrics(
        passes_per_day=len(windows) / per_day,
        avg_pass_duration_min=total_contact_s / len(windows) / 60.0,
        max_gap_hours=max_gap_s / 3600.0,
        daily_contact_min=daily_contact_s / 60.0,
        daily_data_mb=daily_bits / 8.0 / 1024.0 / 1024.0,
    )
