# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for vector primitives and communication-cone geometry."""
import ast
import math

import pytest

from beaconlink.domain.geometry import (
    CommunicationCone,
    beacon_antenna_cones,
    half_angle_rad,
    horizon_axes,
    is_link_closed,
    is_point_in_cone,
    nadir_vector,
    relay_cone,
)
from beaconlink.domain.vector import (
    ZERO,
    add,
    cross,
    dot,
    is_finite,
    magnitude,
    normalize,
    scale,
    subtract,
)


BEACON = (7000.0, 0.0, 0.0)
ALONG_TRACK = (0.0, 7.5, 0.0)


def _off_axis_point(apex, axis, perpendicular, angle_deg, distance):
    """Point at the given angle from axis, in the axis/perpendicular plane."""
    a = math.radians(angle_deg)
    direction = add(scale(axis, math.cos(a)), scale(perpendicular, math.sin(a)))
    return add(apex, scale(direction, distance))


class TestVector:

    def test_dot_cross(self):
        assert dot((1.0, 2.0, 3.0), (4.0, 5.0, 6.0)) == 32.0
        assert cross((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == (0.0, 0.0, 1.0)

    def test_arithmetic(self):
        assert add((1.0, 2.0, 3.0), (1.0, 1.0, 1.0)) == (2.0, 3.0, 4.0)
        assert subtract((1.0, 2.0, 3.0), (1.0, 1.0, 1.0)) == (0.0, 1.0, 2.0)
        assert scale((1.0, -2.0, 3.0), 2.0) == (2.0, -4.0, 6.0)
        assert magnitude((3.0, 4.0, 12.0)) == 13.0

    def test_normalize(self):
        assert normalize((0.0, 0.0, 5.0)) == (0.0, 0.0, 1.0)
        assert magnitude(normalize((3.0, -7.0, 1.5))) == pytest.approx(1.0)

    def test_normalize_zero_returns_zero(self):
        assert normalize(ZERO) == ZERO
        assert normalize((1e-15, 0.0, 0.0)) == ZERO

    def test_is_finite(self):
        assert is_finite((1.0, 2.0, 3.0))
        assert not is_finite((1.0, float('nan'), 3.0))
        assert not is_finite((float('inf'), 0.0, 0.0))


class TestRelayCone:

    def test_half_angle(self):
        assert half_angle_rad(62.0) == pytest.approx(math.radians(31.0))

    def test_nadir_points_to_earth_center(self):
        assert nadir_vector((0.0, 8000.0, 0.0)) == pytest.approx((0.0, -1.0, 0.0))

    def test_cone_fields(self):
        cone = relay_cone((8000.0, 0.0, 0.0), 62.0, owner_id="R1")
        assert isinstance(cone, CommunicationCone)
        assert cone.apex == (8000.0, 0.0, 0.0)
        assert cone.axis == pytest.approx((-1.0, 0.0, 0.0))
        assert cone.owner_id == "R1"


class TestPointInCone:

    APEX = (8000.0, 1000.0, -500.0)

    def _cone(self, fov_deg=62.0):
        return relay_cone(self.APEX, fov_deg)

    def _perpendicular(self, axis):
        return normalize(cross(axis, (0.0, 0.0, 1.0)))

    def test_on_axis_inside(self):
        cone = self._cone()
        target = add(self.APEX, scale(cone.axis, 1000.0))
        assert is_point_in_cone(target, cone)

    def test_behind_apex_outside(self):
        cone = self._cone()
        assert not is_point_in_cone(add(self.APEX, scale(cone.axis, -1000.0)), cone)

    @pytest.mark.parametrize("distance", [1.0, 100.0, 10_000.0, 1e7])
    def test_scale_invariant(self, distance):
        cone = self._cone()
        perp = self._perpendicular(cone.axis)
        inside = _off_axis_point(self.APEX, cone.axis, perp, 30.0, distance)
        outside = _off_axis_point(self.APEX, cone.axis, perp, 32.0, distance)
        assert is_point_in_cone(inside, cone)
        assert not is_point_in_cone(outside, cone)

    def test_clamped_cosine_on_axis(self):
        # Rounding can push the dot product just above 1
        apex = (1234.5678, 2345.6789, 3456.789)
        cone = CommunicationCone(apex=apex, axis=normalize((1.0, 1.0, 1.0)),
                                 half_angle_rad=1e-6)
        target = add(apex, scale((1.0, 1.0, 1.0), 1e5))
        assert is_point_in_cone(target, cone)

    def test_target_at_apex_is_at_ninety_degrees(self):
        assert not is_point_in_cone(self.APEX, self._cone(62.0))
        assert is_point_in_cone(self.APEX, self._cone(180.0))


class TestHorizonAxes:

    def test_projects_velocity(self):
        forward, aft = horizon_axes(BEACON, (1.0, 7.5, 0.0))
        assert forward == pytest.approx((0.0, 1.0, 0.0))
        assert aft == pytest.approx((0.0, -1.0, 0.0))

    def test_radial_velocity_falls_back_to_z_reference(self):
        forward, aft = horizon_axes(BEACON, (5.0, 0.0, 0.0))
        assert dot(forward, normalize(BEACON)) == pytest.approx(0.0, abs=1e-12)
        assert forward == pytest.approx((0.0, -1.0, 0.0))
        assert aft == pytest.approx(scale(forward, -1.0))

    def test_polar_position_falls_back_to_x_reference(self):
        forward, _ = horizon_axes((0.0, 0.0, 7000.0), (0.0, 0.0, 1.0))
        assert forward == pytest.approx((0.0, 1.0, 0.0))

    def test_zero_position(self):
        assert horizon_axes(ZERO, ALONG_TRACK) is None
        assert beacon_antenna_cones(ZERO, ALONG_TRACK, 62.0) == []


class TestBeaconAntennaCones:

    def test_two_named_cones(self):
        cones = beacon_antenna_cones(BEACON, ALONG_TRACK, 62.0)
        assert [c.owner_id for c in cones] == ["BEACON-Ant1", "BEACON-Ant2"]
        assert all(c.apex == BEACON for c in cones)
        assert all(c.half_angle_rad == pytest.approx(math.radians(31.0)) for c in cones)
        assert cones[0].axis == pytest.approx(scale(cones[1].axis, -1.0))


class TestLinkClosure:

    def test_relay_overhead_one_way(self):
        assert is_link_closed(BEACON, (8000.0, 0.0, 0.0), 62.0)

    def test_relay_far_off_axis(self):
        assert not is_link_closed(BEACON, (0.0, 8000.0, 0.0), 62.0)

    def test_overhead_fails_bidirectional(self):
        cones = beacon_antenna_cones(BEACON, ALONG_TRACK, 62.0)
        assert not is_link_closed(BEACON, (8000.0, 0.0, 0.0), 62.0, cones)

    def test_low_elevation_relay_closes_both_ways(self):
        # Relay 25° above the Beacon's forward horizon, 2000 km away
        relay = _off_axis_point(BEACON, (0.0, 1.0, 0.0), (1.0, 0.0, 0.0), 25.0, 2000.0)
        cones = beacon_antenna_cones(BEACON, ALONG_TRACK, 62.0)
        assert is_link_closed(BEACON, relay, 120.0, cones)
        assert not is_link_closed(BEACON, relay, 62.0, cones)

    def test_empty_cone_list_never_closes(self):
        assert not is_link_closed(BEACON, (8000.0, 0.0, 0.0), 62.0, [])


class TestGeometryPurity:

    def test_geometry_and_vector_are_stdlib_only(self):
        import beaconlink.domain.geometry as geometry
        import beaconlink.domain.vector as vector

        allowed = {'math', 'dataclasses', 'logging', 'typing', '__future__'}
        for mod in (geometry, vector):
            with open(mod.__file__) as f:
                tree = ast.parse(f.read())
            for node in ast.walk(tree):
                if isinstance(node, ast.Import):
                    for alias in node.names:
                        assert alias.name.split('.')[0] in allowed, \
                            f"Disallowed import '{alias.name}' in {mod.__name__}"
                if isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
                    root = node.module.split('.')[0]
                    assert root in allowed or root == 'beaconlink', \
                        f"Disallowed import from '{node.module}' in {mod.__name__}"
