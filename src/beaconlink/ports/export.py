# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for simulation result export.

Adapters implement this to write results in various formats
(JSON, GeoJSON, etc.).
"""
from typing import Protocol, runtime_checkable

from beaconlink.domain.simulation import SimulationResult


@runtime_checkable
class ResultExporter(Protocol):
    """Port for exporting a simulation result to file."""

    def export(self, result: SimulationResult, path: str) -> int:
        """
        Write the result to path.

        Returns:
            Number of records written (format-specific).
        """
        ...
