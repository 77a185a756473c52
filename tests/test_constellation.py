# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the built-in polar star relay constellation."""
from datetime import datetime, timezone

import pytest

from beaconlink.domain.constellation import (
    DEFAULT_RELAY_EPOCH,
    IRIDIUM_SHELL,
    StarShellConfig,
    default_relay_element_sets,
    generate_star_shell,
)
from beaconlink.domain.element_set import parse_tle_text


class TestIridiumShell:

    def test_66_satellites(self):
        sets = default_relay_element_sets()
        assert len(sets) == 66
        assert len({s.catalog_number for s in sets}) == 66
        assert len({s.name for s in sets}) == 66

    def test_shared_orbit(self):
        sets = default_relay_element_sets()
        assert all(s.inclination_deg == IRIDIUM_SHELL.inclination_deg for s in sets)
        assert all(s.epoch == DEFAULT_RELAY_EPOCH for s in sets)
        motions = {round(s.mean_motion_rev_per_day, 8) for s in sets}
        assert len(motions) == 1

    def test_names_and_catalog_numbers(self):
        sets = default_relay_element_sets()
        assert sets[0].name == "IRIDIUM P1-01"
        assert sets[-1].name == "IRIDIUM P6-11"
        assert sets[0].catalog_number == IRIDIUM_SHELL.first_catalog_number

    def test_survives_tle_text_round_trip(self):
        sets = default_relay_element_sets()
        text = "\n".join(f"{s.name}\n{s.line1}\n{s.line2}" for s in sets)
        assert len(parse_tle_text(text)) == 66


class TestGenerateStarShell:

    CONFIG = StarShellConfig(
        altitude_km=800.0, inclination_deg=87.0, num_planes=3,
        sats_per_plane=4, plane_spacing_deg=60.0, shell_name="TEST",
    )

    def test_plane_raans(self):
        sets = generate_star_shell(self.CONFIG)
        raans = sorted({s.raan_deg for s in sets})
        assert raans == pytest.approx([0.0, 60.0, 120.0])

    def test_alternate_planes_phased_half_slot(self):
        sets = generate_star_shell(self.CONFIG)
        plane1 = [s.mean_anomaly_deg for s in sets[0:4]]
        plane2 = [s.mean_anomaly_deg for s in sets[4:8]]
        assert plane1 == pytest.approx([0.0, 90.0, 180.0, 270.0])
        assert plane2 == pytest.approx([45.0, 135.0, 225.0, 315.0])

    def test_custom_epoch(self):
        epoch = datetime(2026, 9, 1, tzinfo=timezone.utc)
        sets = generate_star_shell(self.CONFIG, epoch)
        assert all(s.epoch == epoch for s in sets)
