# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Machine-readable post-mission disposal profiles and traces."""
from __future__ import annotations

from dataclasses import dataclass

from satdesign.domain.delta_v import compute_deorbit_delta_v
from satdesign.domain.errors import InvalidInputError
from satdesign.domain.lifetime import Deorbited, estimate_lifetime
from satdesign.domain.orbital_mechanics import OrbitalConstants
from satdesign.domain.propagation import OrbitalElements


@dataclass(frozen=True)
class RuleEvaluation:
    rule_id: str
    passed: bool
    rationale: str
    remediation: str


@dataclass(frozen=True)
class ComplianceProfile:
    profile_id: str
    title: str
    max_lifetime_years: float
    rationale: str
    effective_date: str


_PRESETS = {
    "us_fcc_5year_v1": ComplianceProfile(
        profile_id="us_fcc_5year_v1",
        title="US FCC 5-year disposal preset",
        max_lifetime_years=5.0,
        rationale="FCC post-mission disposal timeline for LEO satellites.",
        effective_date="2024-09-29",
    ),
    "iadc_25year_v1": ComplianceProfile(
        profile_id="iadc_25year_v1",
        title="IADC 25-year disposal preset",
        max_lifetime_years=25.0,
        rationale="IADC space debris mitigation guideline for LEO disposal.",
        effective_date="2007-09-01",
    ),
}


def list_compliance_profiles() -> list[str]:
    return sorted(_PRESETS)


def get_compliance_profile(profile_id: str) -> ComplianceProfile:
    try:
        return _PRESETS[profile_id]
    except KeyError as exc:
        raise InvalidInputError(f"Unknown compliance profile: {profile_id}") from exc


def evaluate_compliance_profile(
    profile_id: str,
    elements: OrbitalElements,
    ballistic_coefficient: float,
    solar_activity: str = "moderate",
) -> dict[str, object]:
    """Evaluate a profile and emit trace with rule IDs and remediation.

    Natural decay is propagated up to the profile's lifetime limit; a
    propagation that does not reach the interface by then is a violation.
    """
    profile = get_compliance_profile(profile_id)
    outcome = estimate_lifetime(
        elements,
        ballistic_coefficient,
        horizon_years=profile.max_lifetime_years,
        solar_activity=solar_activity,
    )
    compliant = isinstance(outcome, Deorbited)
    threshold_days = profile.max_lifetime_years * OrbitalConstants.DAYS_PER_YEAR
    altitude_km = elements.semi_major_axis_km - OrbitalConstants.R_EARTH_EQUATORIAL
    deorbit_dv = compute_deorbit_delta_v(altitude_km)

    if compliant:
        rationale = (
            f"Natural lifetime {outcome.time_days:.2f} days "
            f"<= threshold {threshold_days:.2f} days"
        )
    else:
        rationale = (
            f"Natural lifetime exceeds threshold {threshold_days:.2f} days "
            f"({outcome.reason})"
        )

    rules = [
        RuleEvaluation(
            rule_id=f"{profile.profile_id}:deorbit_lifetime",
            passed=compliant,
            rationale=rationale,
            remediation=(
                "No remediation required"
                if compliant
                else f"Perform a {deorbit_dv:.1f} m/s deorbit burn to lower perigee to "
                     f"{OrbitalConstants.INTERFACE_ALTITUDE_KM:.0f} km, or lower the operational orbit"
            ),
        )
    ]

    violations = [r.rule_id for r in rules if not r.passed]
    remediation = [r.remediation for r in rules if not r.passed]

    return {
        "profile": {
            "id": profile.profile_id,
            "title": profile.title,
            "effective_date": profile.effective_date,
            "rationale": profile.rationale,
        },
        "assessment": {
            "compliant": compliant,
            "natural_lifetime_days": outcome.time_days if compliant else None,
            "threshold_days": threshold_days,
            "deorbit_delta_v_ms": deorbit_dv,
        },
        "rules": [r.__dict__ for r in rules],
        "violated_rule_ids": violations,
        "remediation_options": remediation,
    }
