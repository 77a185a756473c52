# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Communication-cone geometry.

Relay satellites carry a nadir-pointing antenna modeled as a cone with
its apex at the satellite. The Beacon is "illuminated" by a relay when
its position lies inside that cone. Optionally the Beacon carries two
horizon-aligned antennas pointing along and against its horizontal
velocity, used when links must close in both directions.

Earth is centered at the inertial-frame origin.
"""
import logging
import math
from dataclasses import dataclass

from beaconlink.domain.vector import (
    Vector3,
    cross,
    dot,
    magnitude,
    normalize,
    scale,
    subtract,
)


_log = logging.getLogger(__name__)

HORIZONTAL_VELOCITY_EPSILON = 1e-9
_REFERENCE_AXES: tuple[Vector3, Vector3] = ((0.0, 0.0, 1.0), (1.0, 0.0, 0.0))


@dataclass(frozen=True)
class CommunicationCone:
    """Antenna coverage cone."""
    apex: Vector3
    axis: Vector3  # unit vector
    half_angle_rad: float
    owner_id: str = ""


def half_angle_rad(fov_deg: float) -> float:
    """Half-angle in radians of a cone with full opening angle fov_deg."""
    return math.radians(fov_deg / 2.0)


def nadir_vector(position: Vector3) -> Vector3:
    """Unit vector from a satellite toward Earth's center."""
    return normalize(scale(position, -1.0))


def relay_cone(position: Vector3, fov_deg: float, owner_id: str = "") -> CommunicationCone:
    """Nadir-pointing cone of a relay satellite."""
    return CommunicationCone(
        apex=position,
        axis=nadir_vector(position),
        half_angle_rad=half_angle_rad(fov_deg),
        owner_id=owner_id,
    )


def is_point_in_cone(target: Vector3, cone: CommunicationCone) -> bool:
    """
    True if target lies within the cone's half-angle of its axis.

    The dot product is clamped to [-1, 1] before acos. A target at the
    apex has no direction; its zero vector sits at 90° from the axis.
    """
    direction = normalize(subtract(target, cone.apex))
    cos_angle = max(-1.0, min(1.0, dot(cone.axis, direction)))
    return math.acos(cos_angle) <= cone.half_angle_rad


def horizon_axes(position: Vector3, velocity: Vector3) -> tuple[Vector3, Vector3] | None:
    """
    Forward and aft horizontal antenna axes of the Beacon.

    The velocity is projected onto the local horizontal plane (normal to
    zenith = position / |position|). When the horizontal component is
    degenerate, any horizontal direction is used: zenith × z, or
    zenith × x when zenith is nearly parallel to z.

    Returns:
        (forward, aft) unit vectors, or None if position is zero.
    """
    zenith = normalize(position)
    if magnitude(zenith) == 0.0:
        return None

    horizontal = subtract(velocity, scale(zenith, dot(velocity, zenith)))
    if magnitude(horizontal) < HORIZONTAL_VELOCITY_EPSILON:
        _log.warning(
            "Horizontal velocity is near zero (|v_h|=%.3e); using a fallback horizontal axis",
            magnitude(horizontal),
        )
        reference = _REFERENCE_AXES[0]
        if abs(dot(zenith, reference)) > 0.9:
            reference = _REFERENCE_AXES[1]
        horizontal = cross(zenith, reference)

    forward = normalize(horizontal)
    return forward, scale(forward, -1.0)


def beacon_antenna_cones(
    position: Vector3,
    velocity: Vector3,
    fov_deg: float,
    owner_id: str = "BEACON",
) -> list[CommunicationCone]:
    """Two horizon-aligned Beacon cones; empty if the direction is undefined."""
    axes = horizon_axes(position, velocity)
    if axes is None:
        return []
    half_angle = half_angle_rad(fov_deg)
    return [
        CommunicationCone(apex=position, axis=axis, half_angle_rad=half_angle,
                          owner_id=f"{owner_id}-Ant{i}")
        for i, axis in enumerate(axes, start=1)
    ]


def is_link_closed(
    beacon_position: Vector3,
    relay_position: Vector3,
    relay_fov_deg: float,
    beacon_cones: list[CommunicationCone] | None = None,
) -> bool:
    """
    One-way link test: Beacon inside the relay's nadir cone.

    When beacon_cones is given the link must also close the other way:
    the relay must lie inside at least one Beacon antenna cone.
    """
    if not is_point_in_cone(beacon_position, relay_cone(relay_position, relay_fov_deg)):
        return False
    if beacon_cones is None:
        return True
    return any(is_point_in_cone(relay_position, cone) for cone in beacon_cones)
