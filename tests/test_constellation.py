# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for Walker constellation metrics and generation."""
import pytest

from satdesign.domain.constellation import (
    WalkerParams,
    compute_constellation_metrics,
    coverage_latitude_band,
    generate_walker_constellation,
    plane_populations,
)
from satdesign.domain.errors import InvalidInputError
from satdesign.domain.orbital_mechanics import OrbitalConstants, orbital_period


def _walker(**overrides):
    params = dict(
        type="delta", total_sats=24, planes=6, phasing=1,
        altitude_km=550.0, inclination_deg=53.0,
    )
    params.update(overrides)
    return WalkerParams(**params)


class TestPlanePopulations:

    def test_even(self):
        assert plane_populations(24, 6) == (4, 4, 4, 4, 4, 4)

    def test_remainder_goes_to_trailing_planes(self):
        assert plane_populations(10, 3) == (3, 3, 4)
        assert plane_populations(11, 4) == (2, 3, 3, 3)

    def test_72_over_6(self):
        assert plane_populations(72, 6) == (12,) * 6

    def test_70_over_6(self):
        populations = plane_populations(70, 6)
        assert populations == (11, 11, 12, 12, 12, 12)
        assert sum(populations) == 70

    def test_sums_to_total(self):
        for total in range(5, 40):
            assert sum(plane_populations(total, 5)) == total


class TestCoverageBand:

    def test_prograde(self):
        assert coverage_latitude_band(53.0) == (-53.0, 53.0)

    def test_retrograde_folded(self):
        assert coverage_latitude_band(97.6) == pytest.approx((-82.4, 82.4))


class TestConstellationMetrics:

    def test_even_walker_delta(self):
        metrics = compute_constellation_metrics(_walker(), 4.0)
        assert metrics.total_satellites == 24
        assert metrics.sats_per_plane == 4
        assert metrics.total_mass_kg == pytest.approx(96.0)
        assert metrics.coverage_lat_band == (-53.0, 53.0)
        expected_period = orbital_period(OrbitalConstants.R_EARTH_EQUATORIAL + 550.0) / 60.0
        assert metrics.orbital_period_min == pytest.approx(expected_period)
        assert metrics.status == "nominal"

    def test_uneven_planes_is_warning(self):
        metrics = compute_constellation_metrics(_walker(total_sats=10, planes=3, phasing=0), 4.0)
        assert metrics.plane_populations == (3, 3, 4)
        assert metrics.sats_per_plane == 4
        assert metrics.status == "warning"

    @pytest.mark.parametrize("overrides", [
        {"planes": 0},
        {"total_sats": 4, "planes": 6},
        {"phasing": 6},
        {"phasing": -1},
        {"type": "rosette"},
        {"altitude_km": -500.0},
    ])
    def test_rejects_invalid(self, overrides):
        with pytest.raises(InvalidInputError):
            compute_constellation_metrics(_walker(**overrides), 4.0)

    def test_negative_unit_mass(self):
        with pytest.raises(InvalidInputError):
            compute_constellation_metrics(_walker(), -1.0)


class TestGenerateWalker:

    def test_count_and_ids(self):
        sats = generate_walker_constellation(_walker())
        assert len(sats) == 24
        assert [s.id for s in sats] == list(range(24))

    def test_delta_raan_spacing(self):
        sats = generate_walker_constellation(_walker())
        raans = sorted({s.elements.raan_deg for s in sats})
        assert raans == pytest.approx([0.0, 60.0, 120.0, 180.0, 240.0, 300.0])

    def test_star_raan_spacing(self):
        sats = generate_walker_constellation(_walker(type="star", inclination_deg=86.4))
        raans = sorted({s.elements.raan_deg for s in sats})
        assert raans == pytest.approx([0.0, 30.0, 60.0, 90.0, 120.0, 150.0])

    def test_phasing_offset(self):
        sats = generate_walker_constellation(_walker())
        first_of_plane_1 = next(s for s in sats if s.plane == 1 and s.index_in_plane == 0)
        assert first_of_plane_1.elements.true_anomaly_deg == pytest.approx(15.0)

    def test_in_plane_spacing(self):
        sats = [s for s in generate_walker_constellation(_walker(phasing=0)) if s.plane == 0]
        assert [s.elements.true_anomaly_deg for s in sats] == pytest.approx([0.0, 90.0, 180.0, 270.0])

    def test_circular_at_altitude(self):
        for sat in generate_walker_constellation(_walker()):
            assert sat.elements.eccentricity == 0.0
            assert sat.elements.inclination_deg == 53.0
