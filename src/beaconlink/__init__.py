# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
BeaconLink

Simulate communication visibility between a user-defined LEO Beacon
satellite and a relay constellation (Iridium by default). Synthesizes
the Beacon's element set from Sun-synchronous or non-polar orbit
intent, propagates every body with SGP4, tests the Beacon against each
relay's nadir antenna cone, and reports handshakes, blackout periods
and full ground tracks.
"""

from beaconlink.domain.errors import (
    BeaconLinkError,
    ElementSynthesisFailure,
    InvalidOrbitParameters,
    NoUsableRelayData,
    PropagationFailure,
)
from beaconlink.domain.orbit_intent import (
    NonPolarIntent,
    OrbitIntent,
    OrbitKind,
    SunSynchronousIntent,
    validate_intent,
)
from beaconlink.domain.orbital_mechanics import (
    OrbitalConstants,
    mean_motion_rad_s,
    sso_inclination_deg,
    j2_raan_rate,
)
from beaconlink.domain.solar import (
    SunPosition,
    sun_position,
    sun_right_ascension_deg,
)
from beaconlink.domain.element_set import (
    ElementSet,
    build_element_set,
    format_tle_lines,
    parse_tle,
    parse_tle_text,
    synthesize_element_set,
    tle_checksum,
)
from beaconlink.domain.constellation import (
    StarShellConfig,
    default_relay_element_sets,
    generate_star_shell,
)
from beaconlink.domain.state import (
    GeodeticPosition,
    InertialState,
    TrackSample,
)
from beaconlink.domain.coordinate_frames import (
    gmst_rad,
    eci_to_ecef,
    ecef_to_geodetic,
    eci_to_geodetic,
)
from beaconlink.domain.geometry import (
    CommunicationCone,
    beacon_antenna_cones,
    is_link_closed,
    is_point_in_cone,
    nadir_vector,
    relay_cone,
)
from beaconlink.domain.simulation import (
    BeaconSimulation,
    BlackoutPeriod,
    Handshake,
    SimulationConfig,
    SimulationResult,
    StepDiagnostic,
    StepRecord,
    compute_track,
    run_simulation,
    summarize_blackouts,
    usable_relays,
)

__version__ = "1.0.0"
