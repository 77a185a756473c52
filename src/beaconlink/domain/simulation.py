# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Handshake and blackout simulation.

Steps the Beacon and every relay satellite through a discrete timeline,
tests whether the Beacon lies inside each relay's nadir cone, and turns
the per-step set of connected relays into events:

    handshake: a relay absent from the previous processed step's set
               and present in the current one (rising edge)
    blackout:  a maximal run of processed steps with an empty set

The connection set is a single frozenset replaced wholesale each step.
Propagation failures are recovered per body and per step: a failed
relay is left out of that step, a failed Beacon step is dropped from the
record entirely and leaves the connection state untouched.
"""
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable, Iterator

from beaconlink.domain.element_set import ElementSet, synthesize_element_set
from beaconlink.domain.errors import (
    InvalidOrbitParameters,
    NoUsableRelayData,
    PropagationFailure,
)
from beaconlink.domain.geometry import beacon_antenna_cones, is_link_closed
from beaconlink.domain.orbit_intent import OrbitIntent, validate_intent
from beaconlink.domain.state import GeodeticPosition, InertialState, TrackSample

if TYPE_CHECKING:
    from beaconlink.ports.propagator import Propagator
    from beaconlink.ports.relay_source import RelayElementSource


_log = logging.getLogger(__name__)

DEFAULT_RELAY_FOV_DEG = 62.0
DEFAULT_BEACON_FOV_DEG = 62.0
LOG_EVERY_N_STEPS = 60
_LOGGED_RELAYS = 3


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for one simulation run."""
    beacon_intent: OrbitIntent
    relay_fov_deg: float = DEFAULT_RELAY_FOV_DEG
    beacon_fov_deg: float = DEFAULT_BEACON_FOV_DEG
    duration_hours: float = 24.0
    time_step_seconds: float = 60.0
    bidirectional: bool = False


@dataclass(frozen=True)
class Handshake:
    """A relay starting to illuminate the Beacon."""
    timestamp: datetime
    relay_id: str
    beacon_position: GeodeticPosition
    relay_position: GeodeticPosition


@dataclass(frozen=True)
class BlackoutPeriod:
    """A maximal interval with no relay illuminating the Beacon."""
    start_time: datetime
    end_time: datetime
    duration_seconds: float


@dataclass(frozen=True)
class StepDiagnostic:
    """A body skipped at one step."""
    timestamp: datetime
    body_id: str
    reason: str
    error_code: int | None = None


@dataclass(frozen=True)
class StepRecord:
    """Outcome of one processed step."""
    index: int
    timestamp: datetime
    connected: frozenset[str]
    handshakes: tuple[Handshake, ...]


@dataclass(frozen=True)
class SimulationResult:
    """Statistics, event logs and full tracks of one run."""
    start_time: datetime
    end_time: datetime
    beacon_element_set: ElementSet
    total_handshakes: int
    handshakes: tuple[Handshake, ...]
    active_links: tuple[frozenset[str], ...]
    blackout_periods: tuple[BlackoutPeriod, ...]
    number_of_blackouts: int
    total_blackout_duration_s: float
    average_blackout_duration_s: float
    beacon_track: tuple[TrackSample, ...]
    relay_tracks: dict[str, tuple[TrackSample, ...]] = field(default_factory=dict)
    skipped_beacon_steps: int = 0


DiagnosticSink = Callable[[StepDiagnostic], None]


def validate_config(config: SimulationConfig) -> None:
    """
    Raises:
        InvalidOrbitParameters: Bad orbit intent, non-positive duration or
            step, or a field of view outside (0, 180] degrees.
    """
    validate_intent(config.beacon_intent)
    if not math.isfinite(config.duration_hours) or config.duration_hours < 0:
        raise InvalidOrbitParameters(
            f"Duration must be non-negative, got {config.duration_hours} h"
        )
    if not math.isfinite(config.time_step_seconds) or config.time_step_seconds <= 0:
        raise InvalidOrbitParameters(
            f"Time step must be positive, got {config.time_step_seconds} s"
        )
    for label, fov in (("Relay", config.relay_fov_deg), ("Beacon", config.beacon_fov_deg)):
        if not math.isfinite(fov) or not 0.0 < fov <= 180.0:
            raise InvalidOrbitParameters(
                f"{label} field of view must be in (0, 180] degrees, got {fov}"
            )


def summarize_blackouts(periods: list[BlackoutPeriod]) -> tuple[int, float, float]:
    """(count, total duration s, mean duration s); the mean is 0 with no blackouts."""
    count = len(periods)
    total = sum(p.duration_seconds for p in periods)
    average = total / count if count > 0 else 0.0
    return count, total, average


def timeline(start: datetime, duration_hours: float, step_seconds: float) -> Iterator[datetime]:
    """Instants from start to start + duration inclusive, step_seconds apart."""
    steps = int(math.floor(duration_hours * 3600.0 / step_seconds + 1e-9))
    for k in range(steps + 1):
        yield start + timedelta(seconds=k * step_seconds)


def _relay_ids(relays: list[ElementSet]) -> dict[str, ElementSet]:
    """Stable identifier per relay: its name, disambiguated by catalog number."""
    by_id: dict[str, ElementSet] = {}
    for elements in relays:
        relay_id = elements.name or f"SAT {elements.catalog_number}"
        if relay_id in by_id:
            relay_id = f"{relay_id} [{elements.catalog_number}]"
        if relay_id in by_id:
            _log.warning("Duplicate relay element set %s ignored", relay_id)
            continue
        by_id[relay_id] = elements
    return by_id


def usable_relays(
    relays: list[ElementSet],
    propagator: "Propagator",
    start_time: datetime,
) -> list[ElementSet]:
    """
    Relays the propagator can place at start_time, in input order.

    Raises:
        NoUsableRelayData: No relay survives.
    """
    usable: list[ElementSet] = []
    for elements in relays:
        try:
            propagator.propagate(elements, start_time)
        except PropagationFailure as e:
            _log.warning("Dropping relay %s: %s", elements.name, e.reason)
            continue
        usable.append(elements)

    if not usable:
        raise NoUsableRelayData(
            f"None of the {len(relays)} relay element sets could be propagated; cannot simulate"
        )
    if len(usable) < len(relays):
        _log.warning("%d of %d relay element sets dropped", len(relays) - len(usable), len(relays))
    return usable


class BeaconSimulation:
    """
    Stateful handshake/blackout engine for one run.

    Owns the previous step's connection set, the open-blackout marker and
    the append-only logs. Drive it with step() for each instant, then
    call finish(); or call run() to do both over the configured window.
    An engine serves a single run: run() refuses an engine that has
    already processed an instant.
    """

    def __init__(
        self,
        config: SimulationConfig,
        beacon: ElementSet,
        relays: list[ElementSet],
        propagator: "Propagator",
        diagnostics: DiagnosticSink | None = None,
    ):
        validate_config(config)
        if not relays:
            raise NoUsableRelayData("No relay element sets available; cannot simulate")

        self._config = config
        self._beacon = beacon
        self._relays = _relay_ids(relays)
        self._propagator = propagator
        self._diagnostics = diagnostics

        self._previous_connected: frozenset[str] = frozenset()
        self._blackout_start: datetime | None = None
        self._last_timestamp: datetime | None = None
        self._first_timestamp: datetime | None = None
        self._skipped_beacon_steps = 0

        self._handshakes: list[Handshake] = []
        self._blackouts: list[BlackoutPeriod] = []
        self._active_links: list[frozenset[str]] = []
        self._beacon_track: list[TrackSample] = []
        self._relay_tracks: dict[str, list[TrackSample]] = {
            relay_id: [] for relay_id in self._relays
        }

    @property
    def relay_ids(self) -> list[str]:
        return list(self._relays)

    @property
    def connected(self) -> frozenset[str]:
        """Relays connected at the last processed step."""
        return self._previous_connected

    def _skip(self, failure: PropagationFailure) -> None:
        _log.warning("%s", failure)
        if self._diagnostics is not None:
            self._diagnostics(StepDiagnostic(
                timestamp=failure.timestamp,
                body_id=failure.body_id,
                reason=failure.reason,
                error_code=failure.error_code,
            ))

    def _sample(self, state: InertialState) -> TrackSample:
        return TrackSample(
            timestamp=state.timestamp,
            position_eci=state.position_eci,
            velocity_eci=state.velocity_eci,
            geodetic=self._propagator.to_geodetic(state.position_eci, state.timestamp),
        )

    def step(self, timestamp: datetime) -> StepRecord | None:
        """
        Process one instant.

        Returns:
            The step's record, or None when the Beacon could not be
            propagated and the step was skipped.
        """
        try:
            beacon_state = self._propagator.propagate(self._beacon, timestamp)
        except PropagationFailure as e:
            self._skipped_beacon_steps += 1
            self._skip(e)
            return None

        index = len(self._beacon_track)
        beacon_sample = self._sample(beacon_state)
        self._beacon_track.append(beacon_sample)

        verbose = index % LOG_EVERY_N_STEPS == 0 and _log.isEnabledFor(logging.DEBUG)
        if verbose:
            x, y, z = beacon_state.position_eci
            _log.debug("--- %s --- Beacon ECI x=%.0f y=%.0f z=%.0f km",
                       timestamp.isoformat(), x, y, z)

        beacon_cones = None
        if self._config.bidirectional:
            beacon_cones = beacon_antenna_cones(
                beacon_state.position_eci, beacon_state.velocity_eci,
                self._config.beacon_fov_deg, owner_id=self._beacon.name,
            )

        connected: set[str] = set()
        relay_positions: dict[str, GeodeticPosition] = {}
        for n, (relay_id, elements) in enumerate(self._relays.items()):
            try:
                relay_state = self._propagator.propagate(elements, timestamp)
            except PropagationFailure as e:
                self._skip(e)
                continue

            relay_sample = self._sample(relay_state)
            self._relay_tracks[relay_id].append(relay_sample)

            if verbose and n < _LOGGED_RELAYS:
                x, y, z = relay_state.position_eci
                _log.debug("  %s ECI x=%.0f y=%.0f z=%.0f km", relay_id[:12], x, y, z)

            if is_link_closed(
                beacon_state.position_eci,
                relay_state.position_eci,
                self._config.relay_fov_deg,
                beacon_cones,
            ):
                connected.add(relay_id)
                relay_positions[relay_id] = relay_sample.geodetic

        current = frozenset(connected)

        new_handshakes = tuple(
            Handshake(
                timestamp=timestamp,
                relay_id=relay_id,
                beacon_position=beacon_sample.geodetic,
                relay_position=relay_positions[relay_id],
            )
            for relay_id in self._relays
            if relay_id in current and relay_id not in self._previous_connected
        )
        self._handshakes.extend(new_handshakes)

        if not current:
            if self._blackout_start is None:
                self._blackout_start = timestamp
        elif self._blackout_start is not None:
            self._close_blackout(timestamp)

        self._active_links.append(current)
        self._previous_connected = current
        if self._first_timestamp is None:
            self._first_timestamp = timestamp
        self._last_timestamp = timestamp

        return StepRecord(
            index=index,
            timestamp=timestamp,
            connected=current,
            handshakes=new_handshakes,
        )

    def _close_blackout(self, end: datetime) -> None:
        start = self._blackout_start
        self._blackouts.append(BlackoutPeriod(
            start_time=start,
            end_time=end,
            duration_seconds=(end - start).total_seconds(),
        ))
        self._blackout_start = None

    def finish(self, start_time: datetime | None = None) -> SimulationResult:
        """
        Close any open blackout at the last processed instant and assemble the result.
        """
        if self._blackout_start is not None:
            self._close_blackout(self._last_timestamp)

        count, total, average = summarize_blackouts(self._blackouts)
        start = start_time or self._first_timestamp or self._beacon.epoch
        end = self._last_timestamp or start

        return SimulationResult(
            start_time=start,
            end_time=end,
            beacon_element_set=self._beacon,
            total_handshakes=len(self._handshakes),
            handshakes=tuple(self._handshakes),
            active_links=tuple(self._active_links),
            blackout_periods=tuple(self._blackouts),
            number_of_blackouts=count,
            total_blackout_duration_s=total,
            average_blackout_duration_s=average,
            beacon_track=tuple(self._beacon_track),
            relay_tracks={k: tuple(v) for k, v in self._relay_tracks.items()},
            skipped_beacon_steps=self._skipped_beacon_steps,
        )

    def run(self, start_time: datetime) -> SimulationResult:
        """Step through the configured window from start_time and finish."""
        if self._beacon_track or self._skipped_beacon_steps:
            raise RuntimeError("BeaconSimulation has already run; create a new engine per run")
        cfg = self._config
        for timestamp in timeline(start_time, cfg.duration_hours, cfg.time_step_seconds):
            self.step(timestamp)

        if not self._beacon_track:
            _log.warning("Beacon could not be propagated at any step")

        result = self.finish(start_time)
        _log.info(
            "Simulation complete: %d steps, %d handshakes, %d blackouts (%.0f s total)",
            len(result.beacon_track), result.total_handshakes,
            result.number_of_blackouts, result.total_blackout_duration_s,
        )
        return result


def run_simulation(
    config: SimulationConfig,
    relay_source: "RelayElementSource",
    propagator: "Propagator",
    start_time: datetime | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> SimulationResult:
    """
    Run a full simulation.

    Args:
        config: Beacon orbit intent, fields of view and timeline.
        relay_source: Supplier of relay element sets.
        propagator: Orbit propagator.
        start_time: UTC start; defaults to now. Naive datetimes are UTC.
        diagnostics: Optional sink for per-step propagation failures.

    Raises:
        InvalidOrbitParameters: Bad orbit intent or configuration.
        ElementSynthesisFailure: The Beacon element set cannot be built.
        NoUsableRelayData: The relay source returned nothing, or no relay
            could be propagated at start_time.
    """
    if start_time is None:
        start_time = datetime.now(tz=timezone.utc)
    elif start_time.tzinfo is None:
        start_time = start_time.replace(tzinfo=timezone.utc)

    validate_config(config)
    beacon = synthesize_element_set(config.beacon_intent, start_time)

    relays = relay_source.fetch_relay_element_sets()
    if not relays:
        raise NoUsableRelayData("No relay element sets available; cannot simulate")
    relays = usable_relays(relays, propagator, start_time)
    _log.info("Simulating Beacon against %d relay satellites", len(relays))

    engine = BeaconSimulation(config, beacon, relays, propagator, diagnostics)
    return engine.run(start_time)


def compute_track(
    propagator: "Propagator",
    element_set: ElementSet,
    start: datetime,
    duration: timedelta,
    step: timedelta,
) -> list[TrackSample]:
    """
    Sample one body's track over a window, skipping instants that fail.

    Raises:
        ValueError: If step is zero or negative.
    """
    step_seconds = step.total_seconds()
    if step_seconds <= 0:
        raise ValueError(f"Step must be positive, got {step}")

    track: list[TrackSample] = []
    for timestamp in timeline(start, duration.total_seconds() / 3600.0, step_seconds):
        try:
            state = propagator.propagate(element_set, timestamp)
        except PropagationFailure as e:
            _log.warning("%s", e)
            continue
        track.append(TrackSample(
            timestamp=timestamp,
            position_eci=state.position_eci,
            velocity_eci=state.velocity_eci,
            geodetic=propagator.to_geodetic(state.position_eci, timestamp),
        ))
    return track
