# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the orbit-average power budget and one-orbit power profile."""
import math

import pytest

from satdesign.domain.eclipse import eclipse_fraction
from satdesign.domain.errors import InvalidInputError
from satdesign.domain.power_budget import (
    DEFAULT_SUBSYSTEMS,
    PowerSubsystem,
    battery_depth_of_discharge,
    compute_orbit_power_profile,
    compute_power_analysis,
    peak_solar_power,
    power_margin,
)
from satdesign.domain.propagation import OrbitalElements
from satdesign.domain.spacecraft import SpacecraftConfig

ORBIT = OrbitalElements.circular(500.0, 97.4)

DEPLOYABLE_6U = SpacecraftConfig(
    dry_mass_kg=10.0,
    size="6U",
    battery_capacity_wh=80.0,
    solar_panel_area_m2=0.12,
    solar_panel_config="2-axis-deployable",
    pointing_mode="sun-pointing",
)


class TestSubsystems:

    def test_average_power(self):
        sub = PowerSubsystem("tx", "Transmitter", 4.0, 0.25)
        assert sub.average_power_w == 1.0

    def test_default_consumption(self):
        assert sum(s.average_power_w for s in DEFAULT_SUBSYSTEMS) == pytest.approx(2.7)

    def test_heater_is_eclipse_only(self):
        heaters = [s for s in DEFAULT_SUBSYSTEMS if s.eclipse_only]
        assert [s.id for s in heaters] == ["heater"]


class TestPowerMargin:

    def test_margin_fraction(self):
        margin, status = power_margin(10.0, 7.0)
        assert margin == pytest.approx(0.3)
        assert status == "nominal"

    def test_small_positive_margin_is_warning(self):
        _, status = power_margin(10.0, 9.0)
        assert status == "warning"

    def test_deficit_is_critical(self):
        margin, status = power_margin(5.0, 6.0)
        assert margin < 0
        assert status == "critical"

    def test_zero_generation_with_load(self):
        margin, status = power_margin(0.0, 1.0)
        assert margin == -math.inf
        assert status == "critical"

    def test_zero_generation_zero_load(self):
        assert power_margin(0.0, 0.0) == (0.0, "warning")


class TestDepthOfDischarge:

    def test_fraction(self):
        assert battery_depth_of_discharge(3.0, 0.5, 20.0) == pytest.approx(0.075)

    def test_not_clamped(self):
        assert battery_depth_of_discharge(10.0, 1.0, 5.0) == pytest.approx(2.0)

    def test_empty_battery(self):
        assert battery_depth_of_discharge(1.0, 0.5, 0.0) == math.inf
        assert battery_depth_of_discharge(0.0, 0.5, 0.0) == 0.0


class TestComputePowerAnalysis:

    def test_generation_and_consumption(self):
        report = compute_power_analysis(ORBIT, DEPLOYABLE_6U)
        peak = 0.12 * 1361.0 * 0.28 * 0.90
        assert report.peak_solar_power_w == pytest.approx(peak)
        assert peak_solar_power(DEPLOYABLE_6U) == pytest.approx(peak)
        assert report.eclipse_fraction == pytest.approx(eclipse_fraction(500.0))
        assert report.avg_power_generation_w == pytest.approx(peak * (1.0 - report.eclipse_fraction))
        assert report.avg_power_consumption_w == pytest.approx(2.7)

    def test_nominal_budget(self):
        report = compute_power_analysis(ORBIT, DEPLOYABLE_6U, lifetime_years=3.0)
        gen = report.avg_power_generation_w
        assert report.power_margin == pytest.approx((gen - 2.7) / gen)
        assert report.battery_dod == pytest.approx(2.7 * report.eclipse_duration_min / 60.0 / 80.0)
        assert report.status == "nominal"

    def test_end_of_life_degradation(self):
        report = compute_power_analysis(ORBIT, DEPLOYABLE_6U, lifetime_years=3.0, degradation_rate=0.03)
        assert report.eol_power_generation_w == pytest.approx(report.avg_power_generation_w * 0.91)
        assert report.eol_margin < report.power_margin

    def test_body_mounted_3u_is_power_negative(self):
        report = compute_power_analysis(ORBIT, SpacecraftConfig(dry_mass_kg=4.0))
        assert report.power_margin < 0
        assert report.margin_status == "critical"
        assert report.status == "critical"

    def test_no_eclipse_at_high_beta(self):
        report = compute_power_analysis(ORBIT, DEPLOYABLE_6U, beta_deg=80.0)
        assert report.eclipse_fraction == 0.0
        assert report.battery_dod == 0.0
        assert report.avg_power_generation_w == pytest.approx(report.peak_solar_power_w)

    def test_zero_battery_is_critical(self):
        sc = SpacecraftConfig(dry_mass_kg=4.0, battery_capacity_wh=0.0)
        report = compute_power_analysis(ORBIT, sc)
        assert report.battery_dod == math.inf
        assert report.dod_status == "critical"

    def test_no_subsystems(self):
        report = compute_power_analysis(ORBIT, DEPLOYABLE_6U, subsystems=())
        assert report.avg_power_consumption_w == 0.0
        assert report.power_margin == pytest.approx(1.0)

    @pytest.mark.parametrize("kwargs", [
        {"subsystems": (PowerSubsystem("x", "X", -1.0, 0.5),)},
        {"subsystems": (PowerSubsystem("x", "X", 1.0, 1.5),)},
        {"lifetime_years": -1.0},
        {"degradation_rate": 1.5},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(InvalidInputError):
            compute_power_analysis(ORBIT, DEPLOYABLE_6U, **kwargs)


class TestOrbitPowerProfile:

    def test_sample_count_and_span(self):
        profile = compute_orbit_power_profile(ORBIT, DEPLOYABLE_6U)
        assert len(profile) == 121
        assert profile[0].time_min == 0.0
        report = compute_power_analysis(ORBIT, DEPLOYABLE_6U)
        assert profile[-1].time_min == pytest.approx(report.period_min)

    def test_starts_full_and_stays_bounded(self):
        profile = compute_orbit_power_profile(ORBIT, DEPLOYABLE_6U)
        assert profile[0].battery_wh == 80.0
        for point in profile:
            assert 0.0 <= point.battery_wh <= 80.0

    def test_eclipse_loads(self):
        profile = compute_orbit_power_profile(ORBIT, DEPLOYABLE_6U)
        shadow = [p for p in profile if p.in_eclipse]
        sunlit = [p for p in profile if not p.in_eclipse]
        assert shadow and sunlit
        for p in shadow:
            assert p.generation_w == 0.0
            assert p.consumption_w == pytest.approx(2.7)
        for p in sunlit:
            assert p.consumption_w == pytest.approx(2.1)

    def test_battery_drains_in_eclipse(self):
        profile = compute_orbit_power_profile(ORBIT, DEPLOYABLE_6U)
        assert min(p.battery_wh for p in profile) < 80.0

    def test_too_few_samples(self):
        with pytest.raises(InvalidInputError):
            compute_orbit_power_profile(ORBIT, DEPLOYABLE_6U, samples=1)
