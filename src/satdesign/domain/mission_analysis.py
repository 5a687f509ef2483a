# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Mission-level analysis composition.

Runs the independent budgets (orbit, power, delta-V, link, radiation,
thermal, lifetime, constellation and ground contacts) for one parameter
bundle and collects them into a single report with an overall status. The
budgets share no mutable state, so they are evaluated concurrently on a
thread pool.
"""
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from datetime import datetime

from satdesign.domain.access_windows import (
    DEFAULT_GROUND_STATIONS,
    AccessWindow,
    ContactMetrics,
    GroundStation,
    compute_access_windows,
    compute_contact_metrics,
)
from satdesign.domain.constellation import (
    ConstellationMetrics,
    WalkerParams,
    compute_constellation_metrics,
)
from satdesign.domain.delta_v import (
    DeltaVReport,
    Maneuver,
    PropulsionConfig,
    compute_delta_v_budget,
)
from satdesign.domain.lifetime import Deorbited, estimate_lifetime
from satdesign.domain.link_budget import (
    LinkBudgetParams,
    LinkBudgetResult,
    LinkMarginPoint,
    compute_link_budget,
    compute_link_margin_profile,
    default_link_params,
)
from satdesign.domain.power_budget import (
    DEFAULT_SUBSYSTEMS,
    PowerReport,
    PowerSubsystem,
    compute_power_analysis,
)
from satdesign.domain.propagation import OrbitalElements, OrbitalState, derive_orbital_state
from satdesign.domain.radiation import RadiationReport, compute_radiation_environment
from satdesign.domain.spacecraft import SpacecraftConfig
from satdesign.domain.status import Status, worst_status
from satdesign.domain.thermal import ThermalReport, compute_thermal_analysis

logger = logging.getLogger(__name__)

CONTACT_SPAN_S = 86400.0
LINK_MIN_ELEVATION_DEG = 5.0


@dataclass(frozen=True)
class MissionParameters:
    """Every input of a mission analysis."""
    elements: OrbitalElements
    spacecraft: SpacecraftConfig
    subsystems: tuple[PowerSubsystem, ...] = DEFAULT_SUBSYSTEMS
    propulsion: PropulsionConfig = field(default_factory=PropulsionConfig)
    maneuvers: tuple[Maneuver, ...] = ()
    link: LinkBudgetParams = field(default_factory=default_link_params)
    walker: WalkerParams | None = None
    unit_sat_mass_kg: float | None = None
    shielding_mm: float = 2.0
    lifetime_years: float = 2.0
    solar_activity: str = "moderate"
    horizon_years: float = 25.0
    epoch: datetime | None = None
    ground_stations: tuple[GroundStation, ...] = DEFAULT_GROUND_STATIONS


@dataclass(frozen=True)
class LifetimeSummary:
    deorbited: bool
    time_days: float
    reason: str | None
    horizon_years: float


@dataclass(frozen=True)
class ContactSummary:
    windows: tuple[AccessWindow, ...]
    metrics: ContactMetrics


@dataclass(frozen=True)
class MissionAnalysis:
    """All budgets for one mission; status is the worst budget status."""
    orbit: OrbitalState
    power: PowerReport
    delta_v: DeltaVReport
    link: LinkBudgetResult
    link_profile: tuple[LinkMarginPoint, ...]
    radiation: RadiationReport
    thermal: ThermalReport
    lifetime: LifetimeSummary
    constellation: ConstellationMetrics | None
    contacts: ContactSummary | None
    status: Status


def _lifetime(params: MissionParameters) -> LifetimeSummary:
    outcome = estimate_lifetime(
        params.elements,
        params.spacecraft.ballistic_coefficient,
        horizon_years=params.horizon_years,
        solar_activity=params.solar_activity,
    )
    if isinstance(outcome, Deorbited):
        return LifetimeSummary(True, outcome.time_days, None, params.horizon_years)
    return LifetimeSummary(False, outcome.time_days, outcome.reason, params.horizon_years)


def _contacts(params: MissionParameters) -> ContactSummary:
    windows = compute_access_windows(
        params.elements, params.ground_stations, params.epoch, CONTACT_SPAN_S,
    )
    metrics = compute_contact_metrics(windows, CONTACT_SPAN_S, params.link.data_rate_kbps)
    return ContactSummary(tuple(windows), metrics)


def analyze_mission(params: MissionParameters, max_workers: int | None = None) -> MissionAnalysis:
    """
    Evaluate every budget for a mission.

    Args:
        params: Mission parameter bundle.
        max_workers: Thread pool size (executor default when None).

    Returns:
        MissionAnalysis. Constellation metrics are present only when a
        Walker pattern is given, ground contacts only when an epoch is.

    Raises:
        InvalidInputError: From the first budget rejecting its inputs.
    """
    orbit = derive_orbital_state(params.elements)
    altitude = orbit.average_altitude_km
    inclination = params.elements.inclination_deg
    spacecraft = params.spacecraft
    logger.debug("analyzing mission at %.1f km, %.1f deg", altitude, inclination)

    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        power_f = ex.submit(
            compute_power_analysis,
            params.elements, spacecraft, params.subsystems, params.lifetime_years,
        )
        delta_v_f = ex.submit(
            compute_delta_v_budget,
            params.propulsion, params.maneuvers, spacecraft.dry_mass_kg, altitude,
            params.lifetime_years, spacecraft.ballistic_coefficient, params.solar_activity,
        )
        link_f = ex.submit(compute_link_budget, params.link, altitude, LINK_MIN_ELEVATION_DEG)
        profile_f = ex.submit(
            lambda: tuple(compute_link_margin_profile(params.link, altitude, LINK_MIN_ELEVATION_DEG))
        )
        radiation_f = ex.submit(
            compute_radiation_environment,
            altitude, inclination, params.shielding_mm, params.lifetime_years,
        )
        thermal_f = ex.submit(
            compute_thermal_analysis,
            params.elements, spacecraft, sum(s.average_power_w for s in params.subsystems),
        )
        lifetime_f = ex.submit(_lifetime, params)
        constellation_f = None
        if params.walker is not None:
            unit_mass = params.unit_sat_mass_kg
            if unit_mass is None:
                unit_mass = spacecraft.dry_mass_kg + params.propulsion.propellant_mass_kg
            constellation_f = ex.submit(compute_constellation_metrics, params.walker, unit_mass)
        contacts_f = ex.submit(_contacts, params) if params.epoch is not None else None

        power = power_f.result()
        delta_v = delta_v_f.result()
        link = link_f.result()
        link_profile = profile_f.result()
        radiation = radiation_f.result()
        thermal = thermal_f.result()
        lifetime = lifetime_f.result()
        constellation = constellation_f.result() if constellation_f is not None else None
        contacts = contacts_f.result() if contacts_f is not None else None

    statuses = [power.status, delta_v.status, link.status, radiation.status, thermal.status]
    if constellation is not None:
        statuses.append(constellation.status)
    status = worst_status(*statuses)
    logger.debug(
        "mission status %s (power=%s delta_v=%s link=%s radiation=%s thermal=%s)",
        status, power.status, delta_v.status, link.status, radiation.status, thermal.status,
    )

    return MissionAnalysis(
        orbit=orbit,
        power=power,
        delta_v=delta_v,
        link=link,
        link_profile=link_profile,
        radiation=radiation,
        thermal=thermal,
        lifetime=lifetime,
        constellation=constellation,
        contacts=contacts,
        status=status,
    )


def json_safe(value):
    """Replace non-finite floats with "inf", "-inf" or None, recursively.

    Degenerate budgets carry infinite margins, which strict JSON cannot
    represent.
    """
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return None
        return "inf" if value > 0 else "-inf"
    if isinstance(value, dict):
        return {key: json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(item) for item in value]
    return value


def analysis_to_dict(analysis: MissionAnalysis) -> dict:
    """JSON-ready mapping of a mission analysis.

    Datetimes become ISO 8601 strings and infinite values the strings
    "inf" / "-inf".
    """
    data = asdict(analysis)
    if data["contacts"] is not None:
        for window in data["contacts"]["windows"]:
            for key in ("aos", "los", "tca"):
                window[key] = window[key].isoformat()
    return json_safe(data)
