# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the composed mission analysis."""
import json
from datetime import datetime, timezone

import pytest

from satdesign.domain.constellation import WalkerParams
from satdesign.domain.delta_v import Maneuver, PropulsionConfig
from satdesign.domain.errors import InvalidInputError
from satdesign.domain.mission_analysis import (
    MissionParameters,
    analysis_to_dict,
    analyze_mission,
    json_safe,
)
from satdesign.domain.propagation import OrbitalElements
from satdesign.domain.spacecraft import SpacecraftConfig
from satdesign.domain.status import worst_status

EPOCH = datetime(2026, 3, 20, 12, 0, 0, tzinfo=timezone.utc)

SPACECRAFT = SpacecraftConfig(
    dry_mass_kg=10.0,
    size="6U",
    battery_capacity_wh=80.0,
    solar_panel_area_m2=0.12,
    solar_panel_config="2-axis-deployable",
    pointing_mode="sun-pointing",
)


def _params(**overrides):
    params = dict(
        elements=OrbitalElements.circular(500.0, 97.4),
        spacecraft=SPACECRAFT,
        propulsion=PropulsionConfig(type="electric", specific_impulse_s=800.0, propellant_mass_kg=0.3),
        maneuvers=(Maneuver("raise", "Orbit raise", 20.0),),
        lifetime_years=3.0,
    )
    params.update(overrides)
    return MissionParameters(**params)


class TestAnalyzeMission:

    def test_minimal_mission(self):
        analysis = analyze_mission(_params())
        assert analysis.orbit.average_altitude_km == pytest.approx(500.0)
        assert analysis.constellation is None
        assert analysis.contacts is None
        assert analysis.link.elevation_deg == 5.0
        assert len(analysis.link_profile) == 86
        assert analysis.radiation.lifetime_years == 3.0
        assert analysis.power.status == "nominal"

    def test_status_is_worst_budget(self):
        analysis = analyze_mission(_params())
        expected = worst_status(
            analysis.power.status,
            analysis.delta_v.status,
            analysis.link.status,
            analysis.radiation.status,
            analysis.thermal.status,
        )
        assert analysis.status == expected

    def test_critical_power_drives_overall_status(self):
        analysis = analyze_mission(_params(spacecraft=SpacecraftConfig(dry_mass_kg=4.0)))
        assert analysis.power.status == "critical"
        assert analysis.status == "critical"

    def test_constellation_and_contacts(self):
        walker = WalkerParams("delta", 12, 3, 1, 500.0, 97.4)
        analysis = analyze_mission(_params(walker=walker, epoch=EPOCH))
        assert analysis.constellation.total_satellites == 12
        assert analysis.constellation.total_mass_kg == pytest.approx(12 * 10.3)
        assert analysis.contacts.windows
        assert analysis.contacts.metrics.passes_per_day == len(analysis.contacts.windows)

    def test_explicit_unit_mass(self):
        walker = WalkerParams("delta", 12, 3, 1, 500.0, 97.4)
        analysis = analyze_mission(_params(walker=walker, unit_sat_mass_kg=8.0))
        assert analysis.constellation.total_mass_kg == pytest.approx(96.0)

    def test_uneven_constellation_warns(self):
        walker = WalkerParams("delta", 10, 3, 0, 500.0, 97.4)
        analysis = analyze_mission(_params(walker=walker))
        assert analysis.constellation.status == "warning"
        assert analysis.status in ("warning", "critical")

    def test_thermal_uses_average_consumption(self):
        analysis = analyze_mission(_params())
        assert analysis.thermal.internal_power_w == pytest.approx(analysis.power.avg_power_consumption_w)
        assert analysis.thermal.eclipse_fraction == pytest.approx(analysis.power.eclipse_fraction)
        assert analysis.thermal.cold_case_c < analysis.thermal.hot_case_c

    def test_lifetime_summary(self):
        analysis = analyze_mission(_params(elements=OrbitalElements.circular(250.0, 51.6)))
        assert analysis.lifetime.deorbited
        assert analysis.lifetime.reason is None
        assert analysis.lifetime.horizon_years == 25.0

    def test_serial_and_parallel_agree(self):
        params = _params()
        assert analyze_mission(params, max_workers=1) == analyze_mission(params)

    def test_invalid_input_propagates(self):
        with pytest.raises(InvalidInputError):
            analyze_mission(_params(lifetime_years=-1.0))


class TestAnalysisToDict:

    def test_json_ready(self):
        walker = WalkerParams("delta", 12, 3, 1, 500.0, 97.4)
        data = analysis_to_dict(analyze_mission(_params(walker=walker, epoch=EPOCH)))
        text = json.dumps(data)
        assert '"status"' in text
        first = data["contacts"]["windows"][0]
        assert isinstance(first["aos"], str)
        assert datetime.fromisoformat(first["aos"]).tzinfo is not None
        assert data["orbit"]["elements"]["inclination_deg"] == 97.4

    def test_infinite_values_serialize_as_strict_json(self):
        def reject(constant):
            raise ValueError(f"non-standard JSON constant {constant}")

        drained = SpacecraftConfig(dry_mass_kg=4.0, size="3U", battery_capacity_wh=0.0)
        data = analysis_to_dict(analyze_mission(_params(spacecraft=drained)))
        assert data["power"]["battery_dod"] == "inf"
        assert data["power"]["dod_status"] == "critical"
        parsed = json.loads(json.dumps(data, allow_nan=False), parse_constant=reject)
        assert parsed["power"]["battery_dod"] == "inf"

    def test_json_safe_nested(self):
        value = {"a": [1.0, float("-inf")], "b": (float("nan"), "x")}
        assert json_safe(value) == {"a": [1.0, "-inf"], "b": [None, "x"]}
