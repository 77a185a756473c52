# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for the simulation's external collaborators.

Adapters implement these to reach a concrete propagator or catalog.
"""
from beaconlink.ports.export import ResultExporter
from beaconlink.ports.propagator import Propagator
from beaconlink.ports.relay_source import RelayElementSource

__all__ = ["Propagator", "RelayElementSource", "ResultExporter"]
