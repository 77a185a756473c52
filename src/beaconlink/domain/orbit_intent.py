# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Beacon orbit intent.

The user describes the Beacon orbit either as Sun-synchronous (altitude
plus local solar time at the descending node) or as non-polar (altitude
plus explicit inclination and optional RAAN). The two variants are
tagged with OrbitKind and matched exhaustively where they are consumed.
"""
import math
from dataclasses import dataclass
from enum import Enum

from beaconlink.domain.errors import InvalidOrbitParameters


class OrbitKind(Enum):
    SUN_SYNCHRONOUS = "SunSynchronous"
    NON_POLAR = "NonPolar"


@dataclass(frozen=True)
class SunSynchronousIntent:
    """Sun-synchronous Beacon orbit."""
    altitude_km: float
    local_solar_time_hours: float  # at the descending node, [0, 24)

    @property
    def kind(self) -> OrbitKind:
        return OrbitKind.SUN_SYNCHRONOUS


@dataclass(frozen=True)
class NonPolarIntent:
    """Beacon orbit with explicit inclination and optional RAAN."""
    altitude_km: float
    inclination_deg: float
    raan_deg: float | None = None

    @property
    def kind(self) -> OrbitKind:
        return OrbitKind.NON_POLAR


OrbitIntent = SunSynchronousIntent | NonPolarIntent


def _finite(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def validate_intent(intent: OrbitIntent) -> None:
    """
    Check an orbit intent against its domain.

    Raises:
        InvalidOrbitParameters: Non-positive altitude, LST outside [0, 24),
            inclination outside [0, 180] or RAAN outside [0, 360).
    """
    if not isinstance(intent, (SunSynchronousIntent, NonPolarIntent)):
        raise InvalidOrbitParameters(f"Unknown orbit intent: {intent!r}")
    if not _finite(intent.altitude_km) or intent.altitude_km <= 0:
        raise InvalidOrbitParameters(
            f"Altitude must be positive, got {intent.altitude_km} km"
        )

    if isinstance(intent, SunSynchronousIntent):
        lst = intent.local_solar_time_hours
        if not _finite(lst) or not 0.0 <= lst < 24.0:
            raise InvalidOrbitParameters(
                f"Local solar time must be in [0, 24) hours, got {lst}"
            )
    elif isinstance(intent, NonPolarIntent):
        inc = intent.inclination_deg
        raan = intent.raan_deg
        if not _finite(inc) or not 0.0 <= inc <= 180.0:
            raise InvalidOrbitParameters(
                f"Inclination must be in [0, 180] degrees, got {inc}"
            )
        if raan is not None and (not _finite(raan) or not 0.0 <= raan < 360.0):
            raise InvalidOrbitParameters(
                f"RAAN must be in [0, 360) degrees, got {raan}"
            )
