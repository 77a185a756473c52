# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Polar star constellation generation.

Produces element sets for an Iridium-like relay constellation: circular
polar planes spread over 180° of RAAN, with alternate planes phased by
half a slot. Used as the built-in relay fallback when no live catalog
is reachable.
"""
from dataclasses import dataclass
from datetime import datetime, timezone

from beaconlink.domain.element_set import ElementSet, build_element_set


@dataclass(frozen=True)
class StarShellConfig:
    """Immutable configuration for a polar star constellation."""
    altitude_km: float
    inclination_deg: float
    num_planes: int
    sats_per_plane: int
    plane_spacing_deg: float
    shell_name: str
    first_catalog_number: int = 90000


IRIDIUM_SHELL = StarShellConfig(
    altitude_km=780.0,
    inclination_deg=86.4,
    num_planes=6,
    sats_per_plane=11,
    plane_spacing_deg=31.6,
    shell_name="IRIDIUM",
)

DEFAULT_RELAY_EPOCH = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def generate_star_shell(
    config: StarShellConfig,
    epoch: datetime = DEFAULT_RELAY_EPOCH,
) -> list[ElementSet]:
    """
    Element sets for every satellite of a star shell.

    Satellite k of plane p sits at mean anomaly k·360/S + (p mod 2)·180/S,
    on a plane with RAAN p·plane_spacing.

    Args:
        config: Shell configuration parameters.
        epoch: Common epoch of the element sets.

    Returns:
        List of ElementSet, plane by plane.
    """
    slot_deg = 360.0 / config.sats_per_plane
    element_sets: list[ElementSet] = []

    for plane_idx in range(config.num_planes):
        raan_deg = (plane_idx * config.plane_spacing_deg) % 360.0
        phase_deg = (plane_idx % 2) * slot_deg / 2.0

        for sat_idx in range(config.sats_per_plane):
            number = plane_idx * config.sats_per_plane + sat_idx
            element_sets.append(build_element_set(
                name=f"{config.shell_name} P{plane_idx + 1}-{sat_idx + 1:02d}",
                catalog_number=config.first_catalog_number + number,
                epoch=epoch,
                altitude_km=config.altitude_km,
                inclination_deg=config.inclination_deg,
                raan_deg=raan_deg,
                mean_anomaly_deg=(sat_idx * slot_deg + phase_deg) % 360.0,
            ))

    return element_sets


def default_relay_element_sets() -> list[ElementSet]:
    """Built-in Iridium-like relay constellation (66 satellites)."""
    return generate_star_shell(IRIDIUM_SHELL)
