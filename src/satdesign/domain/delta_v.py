# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Delta-V budget and propellant computation.

Available delta-V from the Tsiolkovsky rocket equation; required delta-V
from the maneuver ledger, a disposal burn lowering perigee to the
atmospheric interface, and drag make-up over the mission lifetime.

No external dependencies — only stdlib math/dataclasses/logging.
"""
import logging
import math
from dataclasses import dataclass

from satdesign.domain.atmosphere import atmospheric_density, drag_acceleration
from satdesign.domain.errors import InvalidInputError
from satdesign.domain.orbital_mechanics import OrbitalConstants
from satdesign.domain.status import WARNING, Status, classify_at_least

logger = logging.getLogger(__name__)

_SECONDS_PER_YEAR = OrbitalConstants.DAYS_PER_YEAR * OrbitalConstants.SECONDS_PER_DAY

# largest argument math.exp accepts without overflow
_MAX_EXPONENT = 709.0

PROPULSION_TYPES = ("none", "chemical", "electric")

MARGIN_NOMINAL_MIN = 0.10
MARGIN_WARNING_MIN = 0.0


@dataclass(frozen=True)
class PropulsionConfig:
    """Propulsion system. type "none" provides no delta-V."""
    type: str = "none"
    specific_impulse_s: float = 0.0
    propellant_mass_kg: float = 0.0


@dataclass(frozen=True)
class Maneuver:
    """Ledger entry input; per_year entries are multiplied by the lifetime."""
    id: str
    name: str
    delta_v_ms: float
    per_year: bool = False


@dataclass(frozen=True)
class LedgerEntry:
    id: str
    name: str
    delta_v_ms: float
    propellant_kg: float


@dataclass(frozen=True)
class DeltaVReport:
    """Delta-V availability against the mission requirement."""
    propulsion_type: str
    available_delta_v_ms: float
    required_delta_v_ms: float
    deorbit_delta_v_ms: float
    drag_delta_v_ms: float
    margin_ms: float
    margin_fraction: float
    propellant_remaining_kg: float
    mass_ratio: float
    ledger: tuple[LedgerEntry, ...]
    status: Status


def tsiolkovsky_dv(
    isp_s: float,
    dry_mass_kg: float,
    propellant_mass_kg: float,
) -> float:
    """Tsiolkovsky rocket equation: delta-V from propellant mass.

    dV = Isp * g0 * ln(m0 / mf)

    Args:
        isp_s: Specific impulse (seconds).
        dry_mass_kg: Dry mass (kg).
        propellant_mass_kg: Propellant mass (kg).

    Returns:
        Delta-V capacity in m/s.

    Raises:
        InvalidInputError: If dry_mass <= 0 or propellant < 0.
    """
    if dry_mass_kg <= 0:
        raise InvalidInputError(f"dry_mass_kg must be positive, got {dry_mass_kg}")
    if propellant_mass_kg < 0:
        raise InvalidInputError(f"propellant_mass_kg must be non-negative, got {propellant_mass_kg}")
    if propellant_mass_kg == 0.0:
        return 0.0
    m0 = dry_mass_kg + propellant_mass_kg
    return isp_s * OrbitalConstants.G0 * math.log(m0 / dry_mass_kg)


def propellant_mass_for_dv(
    isp_s: float,
    dry_mass_kg: float,
    dv_ms: float,
) -> float:
    """Propellant mass required for a given delta-V.

    m_prop = m_dry * (exp(dV / (Isp * g0)) - 1)

    Negative delta-V gives a negative mass (propellant shortfall). A mass
    ratio beyond float range is reported as infinite.
    """
    exponent = dv_ms / (isp_s * OrbitalConstants.G0)
    if exponent > _MAX_EXPONENT:
        return math.inf
    return dry_mass_kg * (math.exp(exponent) - 1.0)


def compute_deorbit_delta_v(
    altitude_km: float,
    target_perigee_km: float = OrbitalConstants.INTERFACE_ALTITUDE_KM,
) -> float:
    """First Hohmann burn lowering perigee from a circular orbit (m/s).

    Zero when the orbit is already at or below the target perigee.
    """
    if altitude_km <= target_perigee_km:
        return 0.0
    mu = OrbitalConstants.MU_EARTH
    r1 = OrbitalConstants.R_EARTH_EQUATORIAL + altitude_km
    r2 = OrbitalConstants.R_EARTH_EQUATORIAL + target_perigee_km
    a_transfer = (r1 + r2) / 2.0
    v_circular = math.sqrt(mu / r1)
    v_apoapsis = math.sqrt(mu * (2.0 / r1 - 1.0 / a_transfer))
    return (v_circular - v_apoapsis) * 1000.0


def drag_delta_v_per_year(
    altitude_km: float,
    ballistic_coefficient: float,
    solar_activity: str = "moderate",
) -> float:
    """Annual drag make-up delta-V, the drag deceleration held over one year (m/s)."""
    r_m = (OrbitalConstants.R_EARTH_EQUATORIAL + altitude_km) * 1000.0
    v = math.sqrt(OrbitalConstants.MU_EARTH * 1e9 / r_m)
    rho = atmospheric_density(altitude_km, solar_activity)
    return drag_acceleration(rho, v, ballistic_coefficient) * _SECONDS_PER_YEAR


def _validate(
    propulsion: PropulsionConfig,
    maneuvers: tuple[Maneuver, ...],
    dry_mass_kg: float,
    lifetime_years: float,
    ballistic_coefficient: float,
) -> None:
    if propulsion.type not in PROPULSION_TYPES:
        raise InvalidInputError(
            f"Unknown propulsion type: {propulsion.type!r} (expected one of {list(PROPULSION_TYPES)})"
        )
    if dry_mass_kg <= 0:
        raise InvalidInputError(f"Dry mass must be positive, got {dry_mass_kg} kg")
    if propulsion.propellant_mass_kg < 0:
        raise InvalidInputError(
            f"Propellant mass must be non-negative, got {propulsion.propellant_mass_kg} kg"
        )
    if propulsion.type != "none" and propulsion.specific_impulse_s <= 0:
        raise InvalidInputError(
            f"Specific impulse must be positive, got {propulsion.specific_impulse_s} s"
        )
    for m in maneuvers:
        if m.delta_v_ms < 0:
            raise InvalidInputError(f"Maneuver {m.id!r} delta-V must be non-negative, got {m.delta_v_ms} m/s")
    if lifetime_years < 0:
        raise InvalidInputError(f"Lifetime must be non-negative, got {lifetime_years} years")
    if ballistic_coefficient < 0:
        raise InvalidInputError(
            f"Ballistic coefficient must be non-negative, got {ballistic_coefficient} m²/kg"
        )


def compute_delta_v_budget(
    propulsion: PropulsionConfig,
    maneuvers: tuple[Maneuver, ...],
    dry_mass_kg: float,
    avg_altitude_km: float,
    lifetime_years: float,
    ballistic_coefficient: float = 0.01,
    solar_activity: str = "moderate",
) -> DeltaVReport:
    """
    Compute the mission delta-V budget.

    Args:
        propulsion: Thruster type, Isp and loaded propellant.
        maneuvers: Ordered maneuver ledger.
        dry_mass_kg: Spacecraft mass without propellant (kg).
        avg_altitude_km: Operational altitude for disposal and drag (km).
        lifetime_years: Mission duration (years).
        ballistic_coefficient: C_d * A / m (m²/kg).
        solar_activity: Density level for drag make-up.

    Returns:
        DeltaVReport. Status is nominal at >= 10 % margin, warning at
        >= 0 %, critical below. A zero requirement is reported as warning.

    Raises:
        InvalidInputError: On out-of-domain inputs or an unknown
            propulsion type.
    """
    _validate(propulsion, maneuvers, dry_mass_kg, lifetime_years, ballistic_coefficient)

    has_thruster = propulsion.type != "none"
    isp = propulsion.specific_impulse_s

    if has_thruster:
        available = tsiolkovsky_dv(isp, dry_mass_kg, propulsion.propellant_mass_kg)
    else:
        available = 0.0

    def _propellant(dv: float) -> float:
        return propellant_mass_for_dv(isp, dry_mass_kg, dv) if has_thruster else 0.0

    ledger = []
    for m in maneuvers:
        dv = m.delta_v_ms * lifetime_years if m.per_year else m.delta_v_ms
        ledger.append(LedgerEntry(m.id, m.name, dv, _propellant(dv)))

    deorbit = compute_deorbit_delta_v(avg_altitude_km)
    drag = drag_delta_v_per_year(avg_altitude_km, ballistic_coefficient, solar_activity) * lifetime_years
    ledger.append(LedgerEntry("deorbit", "Deorbit burn", deorbit, _propellant(deorbit)))
    ledger.append(LedgerEntry("drag_makeup", "Drag make-up", drag, _propellant(drag)))

    required = sum(entry.delta_v_ms for entry in ledger)
    margin = available - required

    if required == 0:
        margin_fraction = math.inf if available > 0 else 0.0
        status = WARNING
    else:
        margin_fraction = margin / required
        status = classify_at_least(margin_fraction, MARGIN_NOMINAL_MIN, MARGIN_WARNING_MIN)

    remaining = _propellant(margin)
    logger.debug(
        "delta-v budget: available=%.2f required=%.2f margin=%.2f m/s (%s)",
        available, required, margin, status,
    )

    return DeltaVReport(
        propulsion_type=propulsion.type,
        available_delta_v_ms=available,
        required_delta_v_ms=required,
        deorbit_delta_v_ms=deorbit,
        drag_delta_v_ms=drag,
        margin_ms=margin,
        margin_fraction=margin_fraction,
        propellant_remaining_kg=remaining,
        mass_ratio=(dry_mass_kg + propulsion.propellant_mass_kg) / dry_mass_kg,
        ledger=tuple(ledger),
        status=status,
    )
