# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for the orbit propagator.

Adapters wrap a concrete propagator (SGP4) behind these two operations.
"""
from datetime import datetime
from typing import Protocol, runtime_checkable

from beaconlink.domain.element_set import ElementSet
from beaconlink.domain.state import GeodeticPosition, InertialState
from beaconlink.domain.vector import Vector3


@runtime_checkable
class Propagator(Protocol):
    """Port for predicting a body's inertial state from its element set."""

    def propagate(self, element_set: ElementSet, timestamp: datetime) -> InertialState:
        """
        Inertial position (km) and velocity (km/s) at timestamp.

        Raises:
            PropagationFailure: The propagator reported an error code or
                produced non-finite components.
        """
        ...

    def to_geodetic(self, position_eci: Vector3, timestamp: datetime) -> GeodeticPosition:
        """Geodetic projection of an inertial position at timestamp."""
        ...
