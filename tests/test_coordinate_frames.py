# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for sidereal time, frame rotation and topocentric look angles."""
import math
from datetime import datetime, timezone

import pytest

from satdesign.domain.coordinate_frames import (
    ecef_to_geodetic,
    eci_to_ecef,
    geodetic_to_ecef,
    gmst_rad,
    julian_date,
    look_angles,
)

J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestJulianDate:

    def test_j2000(self):
        assert julian_date(J2000) == pytest.approx(2451545.0)

    def test_naive_is_utc(self):
        assert julian_date(datetime(2000, 1, 1, 12, 0, 0)) == julian_date(J2000)

    def test_one_day_later(self):
        later = datetime(2000, 1, 2, 12, 0, 0, tzinfo=timezone.utc)
        assert julian_date(later) - julian_date(J2000) == pytest.approx(1.0)


class TestGmst:

    def test_gmst_at_j2000(self):
        assert math.degrees(gmst_rad(J2000)) == pytest.approx(280.4606, abs=1e-3)

    def test_gmst_range(self):
        for day in range(1, 28, 3):
            angle = gmst_rad(datetime(2026, 3, day, 7, 30, tzinfo=timezone.utc))
            assert 0.0 <= angle < 2.0 * math.pi


class TestEciToEcef:

    def test_zero_angle_identity(self):
        assert eci_to_ecef((7000.0, 1.0, 2.0), 0.0) == pytest.approx((7000.0, 1.0, 2.0))

    def test_quarter_turn(self):
        x, y, z = eci_to_ecef((7000.0, 0.0, 100.0), math.pi / 2.0)
        assert x == pytest.approx(0.0, abs=1e-9)
        assert y == pytest.approx(-7000.0)
        assert z == 100.0


class TestGeodetic:

    def test_round_trip(self):
        lat, lon, alt = ecef_to_geodetic(geodetic_to_ecef(45.0, -120.0, 550.0))
        assert lat == pytest.approx(45.0)
        assert lon == pytest.approx(-120.0)
        assert alt == pytest.approx(550.0)

    def test_equator_prime_meridian(self):
        lat, lon, alt = ecef_to_geodetic((7000.0, 0.0, 0.0))
        assert lat == 0.0
        assert lon == 0.0
        assert alt == pytest.approx(7000.0 - 6378.137)


class TestLookAngles:

    def test_overhead(self):
        sat = geodetic_to_ecef(30.0, 10.0, 500.0)
        elevation, _, rng = look_angles(sat, 30.0, 10.0, 0.0)
        assert elevation == pytest.approx(90.0, abs=1e-6)
        assert rng == pytest.approx(500.0)

    def test_due_north(self):
        sat = geodetic_to_ecef(5.0, 0.0, 500.0)
        elevation, azimuth, _ = look_angles(sat, 0.0, 0.0, 0.0)
        assert elevation > 0
        assert min(azimuth, 360.0 - azimuth) == pytest.approx(0.0, abs=1e-6)

    def test_due_east(self):
        sat = geodetic_to_ecef(0.0, 5.0, 500.0)
        _, azimuth, _ = look_angles(sat, 0.0, 0.0, 0.0)
        assert azimuth == pytest.approx(90.0, abs=1e-6)

    def test_below_horizon(self):
        sat = geodetic_to_ecef(0.0, 180.0, 500.0)
        elevation, _, _ = look_angles(sat, 0.0, 0.0, 0.0)
        assert elevation < 0
