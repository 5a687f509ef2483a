# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the trapped-radiation dose model."""
import math

import pytest

from satdesign.domain.errors import InvalidInputError
from satdesign.domain.radiation import (
    belt_region,
    component_recommendation,
    compute_dose_vs_altitude,
    compute_dose_vs_shielding,
    compute_radiation_environment,
    inclination_factor,
    saa_exposure,
    shielding_attenuation,
    unshielded_dose_rate,
)


class TestUnshieldedDose:

    def test_table_node(self):
        assert unshielded_dose_rate(500.0) == pytest.approx(1.5)

    def test_log_linear_between_nodes(self):
        assert unshielded_dose_rate(450.0) == pytest.approx(math.sqrt(0.8 * 1.5))

    def test_clamped_at_table_ends(self):
        assert unshielded_dose_rate(100.0) == pytest.approx(0.1)
        assert unshielded_dose_rate(40000.0) == pytest.approx(1.0)

    def test_inner_belt_peak(self):
        assert unshielded_dose_rate(3000.0) > unshielded_dose_rate(2000.0)
        assert unshielded_dose_rate(3000.0) > unshielded_dose_rate(4000.0)

    def test_negative_altitude(self):
        with pytest.raises(InvalidInputError):
            unshielded_dose_rate(-1.0)


class TestFactors:

    @pytest.mark.parametrize("inclination,expected", [
        (5.0, 0.7),
        (28.5, 0.9),
        (53.0, 1.3),
        (70.0, 1.1),
        (97.6, 1.0),
        (175.0, 0.7),
    ])
    def test_inclination_factor(self, inclination, expected):
        assert inclination_factor(inclination) == expected

    def test_shielding_attenuation(self):
        assert shielding_attenuation(0.0) == 1.0
        assert shielding_attenuation(2.0) == pytest.approx(math.exp(-1.0))

    def test_negative_shielding(self):
        with pytest.raises(InvalidInputError):
            shielding_attenuation(-0.5)


class TestLabels:

    def test_saa_exposure(self):
        assert saa_exposure(45.0) == "high"
        assert saa_exposure(25.0) == "moderate"
        assert saa_exposure(97.6) == "low"

    def test_belt_region(self):
        assert belt_region(550.0) == "Below inner belt (LEO)"
        assert belt_region(1000.0) == "Inner belt fringe"
        assert belt_region(3000.0) == "Inner Van Allen belt"
        assert belt_region(35786.0) == "GEO region"

    def test_component_recommendation(self):
        assert component_recommendation(1.0) == "COTS components acceptable"
        assert component_recommendation(5.0) == "COTS with radiation margin testing"
        assert component_recommendation(150.0) == "Radiation-hardened components required"


class TestDoseCurves:

    def test_dose_vs_shielding(self):
        curve = compute_dose_vs_shielding(550.0, 53.0, 3.0)
        assert len(curve) == 21
        assert curve[0].thickness_mm == 0.0
        assert curve[-1].thickness_mm == pytest.approx(10.0)
        doses = [p.dose_krad_per_year for p in curve]
        assert doses == sorted(doses, reverse=True)
        for point in curve:
            assert point.mission_total_krad == pytest.approx(point.dose_krad_per_year * 3.0)

    def test_dose_vs_altitude(self):
        curve = compute_dose_vs_altitude(53.0, 2.0, samples=10)
        assert len(curve) == 10
        assert curve[0].altitude_km == 200.0
        assert curve[-1].altitude_km == 2000.0
        assert curve[-1].dose_krad_per_year > curve[0].dose_krad_per_year

    def test_too_few_samples(self):
        with pytest.raises(InvalidInputError):
            compute_dose_vs_shielding(550.0, 53.0, 3.0, samples=1)

    def test_empty_range(self):
        with pytest.raises(InvalidInputError):
            compute_dose_vs_altitude(53.0, 2.0, min_km=800.0, max_km=800.0)


class TestRadiationEnvironment:

    def test_leo_sso_nominal(self):
        report = compute_radiation_environment(550.0, 97.6, 2.0, 3.0)
        expected_annual = math.sqrt(1.5 * 3.0) * 1.0 * math.exp(-1.0)
        assert report.annual_dose_krad == pytest.approx(expected_annual)
        assert report.mission_total_krad == pytest.approx(expected_annual * 3.0)
        assert report.status == "nominal"
        assert report.recommendation == "COTS components acceptable"
        assert report.belt_region == "Below inner belt (LEO)"
        assert report.saa_exposure == "low"

    def test_meo_warning(self):
        report = compute_radiation_environment(1500.0, 0.0, 2.0, 1.0)
        assert 10.0 <= report.mission_total_krad < 100.0
        assert report.status == "warning"

    def test_inner_belt_critical(self):
        report = compute_radiation_environment(3000.0, 45.0, 0.0, 5.0)
        assert report.mission_total_krad == pytest.approx(500.0 * 1.3 * 5.0)
        assert report.status == "critical"

    def test_zero_lifetime(self):
        report = compute_radiation_environment(550.0, 53.0, 2.0, 0.0)
        assert report.mission_total_krad == 0.0
        assert report.status == "nominal"

    def test_negative_lifetime(self):
        with pytest.raises(InvalidInputError):
            compute_radiation_environment(550.0, 53.0, 2.0, -1.0)
