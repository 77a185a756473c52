# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for ECI → ECEF → geodetic conversion."""
import math
from datetime import datetime, timedelta, timezone

import pytest

from beaconlink.domain.coordinate_frames import (
    ecef_to_geodetic,
    eci_to_ecef,
    eci_to_geodetic,
    gmst_rad,
)
from beaconlink.domain.state import GeodeticPosition


class TestGmst:

    def test_j2000_value(self):
        gmst = gmst_rad(datetime(2000, 1, 1, 12, tzinfo=timezone.utc))
        assert math.degrees(gmst) == pytest.approx(280.46061837, abs=1e-6)

    def test_range(self):
        gmst = gmst_rad(datetime(2026, 7, 4, 3, 15, tzinfo=timezone.utc))
        assert 0.0 <= gmst < 2.0 * math.pi

    def test_sidereal_day_returns_same_angle(self):
        t0 = datetime(2026, 2, 1, tzinfo=timezone.utc)
        t1 = t0 + timedelta(seconds=86164.0905)
        assert gmst_rad(t1) == pytest.approx(gmst_rad(t0), abs=1e-5)


class TestEciToEcef:

    def test_zero_rotation_identity(self):
        assert eci_to_ecef((7000.0, 100.0, 50.0), 0.0) == pytest.approx((7000.0, 100.0, 50.0))

    def test_quarter_turn(self):
        x, y, z = eci_to_ecef((7000.0, 0.0, 0.0), math.pi / 2)
        assert (x, y, z) == pytest.approx((0.0, -7000.0, 0.0), abs=1e-9)

    def test_preserves_magnitude(self):
        v = (3000.0, -4000.0, 5000.0)
        r = eci_to_ecef(v, 1.234)
        assert math.hypot(*r) == pytest.approx(math.hypot(*v))


class TestEcefToGeodetic:

    def test_returns_record(self):
        assert isinstance(ecef_to_geodetic((6378.137, 0.0, 0.0)), GeodeticPosition)

    def test_equator_surface(self):
        geo = ecef_to_geodetic((6378.137, 0.0, 0.0))
        assert geo.latitude_deg == pytest.approx(0.0, abs=1e-9)
        assert geo.longitude_deg == pytest.approx(0.0, abs=1e-9)
        assert geo.altitude_km == pytest.approx(0.0, abs=1e-6)

    def test_equator_altitude(self):
        geo = ecef_to_geodetic((0.0, 7078.137, 0.0))
        assert geo.longitude_deg == pytest.approx(90.0)
        assert geo.altitude_km == pytest.approx(700.0, abs=1e-6)

    def test_north_pole(self):
        geo = ecef_to_geodetic((0.0, 0.0, 6356.7523142 + 500.0))
        assert geo.latitude_deg == pytest.approx(90.0)
        assert geo.altitude_km == pytest.approx(500.0, abs=1e-3)

    def test_southern_western_hemisphere(self):
        geo = ecef_to_geodetic((-3000.0, -3000.0, -4000.0))
        assert geo.latitude_deg < 0.0
        assert -180.0 < geo.longitude_deg < -90.0

    def test_mid_latitude_matches_forward_transform(self):
        lat = math.radians(45.0)
        e2 = 0.00669437999014
        n = 6378.137 / math.sqrt(1.0 - e2 * math.sin(lat)**2)
        h = 550.0
        point = ((n + h) * math.cos(lat), 0.0, (n * (1.0 - e2) + h) * math.sin(lat))
        geo = ecef_to_geodetic(point)
        assert geo.latitude_deg == pytest.approx(45.0, abs=1e-9)
        assert geo.altitude_km == pytest.approx(550.0, abs=1e-6)


class TestEciToGeodetic:

    def test_returns_geodetic_position(self):
        t = datetime(2026, 3, 20, tzinfo=timezone.utc)
        pos = eci_to_geodetic((7078.137, 0.0, 0.0), t)
        assert isinstance(pos, GeodeticPosition)
        assert pos.altitude_km == pytest.approx(700.0, abs=1e-6)
        assert -180.0 <= pos.longitude_deg <= 180.0
        expected_lon = (-math.degrees(gmst_rad(t)) + 180.0) % 360.0 - 180.0
        assert pos.longitude_deg == pytest.approx(expected_lon, abs=1e-6)
