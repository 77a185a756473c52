# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Per-instant body states.
"""
from dataclasses import dataclass
from datetime import datetime

from beaconlink.domain.vector import Vector3


@dataclass(frozen=True)
class InertialState:
    """Inertial (TEME/ECI) position in km and velocity in km/s."""
    timestamp: datetime
    position_eci: Vector3
    velocity_eci: Vector3


@dataclass(frozen=True)
class GeodeticPosition:
    """WGS84 geodetic position."""
    latitude_deg: float
    longitude_deg: float
    altitude_km: float


@dataclass(frozen=True)
class TrackSample:
    """One track point: inertial state plus its geodetic projection."""
    timestamp: datetime
    position_eci: Vector3
    velocity_eci: Vector3
    geodetic: GeodeticPosition
