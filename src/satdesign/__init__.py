# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Satellite Mission Design

Engineering-grade budgets for small-satellite missions: orbital state and
J2 drift, eclipse geometry, power, delta-V, downlink, radiation dose,
thermal balance, orbit lifetime, Walker constellations, ground-station
contacts and post-mission disposal compliance.
"""

from satdesign.domain.errors import InvalidInputError
from satdesign.domain.status import (
    Status,
    NOMINAL,
    WARNING,
    CRITICAL,
    worst_status,
)
from satdesign.domain.orbital_mechanics import (
    OrbitalConstants,
    kepler_to_cartesian,
    sso_inclination_deg,
)
from satdesign.domain.coordinate_frames import (
    gmst_rad,
    eci_to_ecef,
    ecef_to_geodetic,
    geodetic_to_ecef,
)
from satdesign.domain.propagation import (
    OrbitalElements,
    OrbitalState,
    derive_orbital_state,
)
from satdesign.domain.ground_track import (
    GroundTrackPoint,
    GroundTrack,
    compute_ground_track,
)
from satdesign.domain.eclipse import (
    EclipseGeometry,
    compute_eclipse,
    eclipse_fraction,
)
from satdesign.domain.atmosphere import (
    DragConfig,
    atmospheric_density,
)
from satdesign.domain.spacecraft import SpacecraftConfig, SURFACE_MATERIALS
from satdesign.domain.power_budget import (
    PowerSubsystem,
    PowerReport,
    DEFAULT_SUBSYSTEMS,
    compute_power_analysis,
    compute_orbit_power_profile,
)
from satdesign.domain.delta_v import (
    PropulsionConfig,
    Maneuver,
    DeltaVReport,
    compute_delta_v_budget,
    tsiolkovsky_dv,
)
from satdesign.domain.link_budget import (
    LinkBudgetParams,
    LinkBudgetResult,
    default_link_params,
    compute_link_budget,
    compute_link_margin_profile,
)
from satdesign.domain.radiation import (
    RadiationReport,
    compute_radiation_environment,
    compute_dose_vs_shielding,
    compute_dose_vs_altitude,
)
from satdesign.domain.thermal import (
    ThermalReport,
    compute_thermal_analysis,
    compute_thermal_profile,
)
from satdesign.domain.lifetime import (
    DecayPoint,
    Deorbited,
    Unresolved,
    propagate_decay,
    estimate_lifetime,
)
from satdesign.domain.constellation import (
    WalkerParams,
    ConstellationMetrics,
    compute_constellation_metrics,
    generate_walker_constellation,
)
from satdesign.domain.access_windows import (
    GroundStation,
    AccessWindow,
    DEFAULT_GROUND_STATIONS,
    compute_access_windows,
    compute_contact_metrics,
)
from satdesign.domain.compliance import (
    list_compliance_profiles,
    evaluate_compliance_profile,
)
from satdesign.domain.mission_analysis import (
    MissionParameters,
    MissionAnalysis,
    analyze_mission,
)
from satdesign.adapters.json_io import (
    MissionConfigError,
    JsonMissionReader,
    JsonReportWriter,
)

__all__ = [
    "InvalidInputError",
    "Status",
    "NOMINAL",
    "WARNING",
    "CRITICAL",
    "worst_status",
    "OrbitalConstants",
    "kepler_to_cartesian",
    "sso_inclination_deg",
    "gmst_rad",
    "eci_to_ecef",
    "ecef_to_geodetic",
    "geodetic_to_ecef",
    "OrbitalElements",
    "OrbitalState",
    "derive_orbital_state",
    "GroundTrackPoint",
    "GroundTrack",
    "compute_ground_track",
    "EclipseGeometry",
    "compute_eclipse",
    "eclipse_fraction",
    "DragConfig",
    "atmospheric_density",
    "SpacecraftConfig",
    "SURFACE_MATERIALS",
    "PowerSubsystem",
    "PowerReport",
    "DEFAULT_SUBSYSTEMS",
    "compute_power_analysis",
    "compute_orbit_power_profile",
    "PropulsionConfig",
    "Maneuver",
    "DeltaVReport",
    "compute_delta_v_budget",
    "tsiolkovsky_dv",
    "LinkBudgetParams",
    "LinkBudgetResult",
    "default_link_params",
    "compute_link_budget",
    "compute_link_margin_profile",
    "RadiationReport",
    "compute_radiation_environment",
    "compute_dose_vs_shielding",
    "compute_dose_vs_altitude",
    "ThermalReport",
    "compute_thermal_analysis",
    "compute_thermal_profile",
    "DecayPoint",
    "Deorbited",
    "Unresolved",
    "propagate_decay",
    "estimate_lifetime",
    "WalkerParams",
    "ConstellationMetrics",
    "compute_constellation_metrics",
    "generate_walker_constellation",
    "GroundStation",
    "AccessWindow",
    "DEFAULT_GROUND_STATIONS",
    "compute_access_windows",
    "compute_contact_metrics",
    "list_compliance_profiles",
    "evaluate_compliance_profile",
    "MissionParameters",
    "MissionAnalysis",
    "analyze_mission",
    "MissionConfigError",
    "JsonMissionReader",
    "JsonReportWriter",
]
