# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for Beacon relay simulations.

Usage:
    # Sun-synchronous Beacon at 700 km, descending node at 10:30 LST
    beaconlink --orbit sso --altitude 700 --lst 10.5

    # Non-polar Beacon at 550 km, 53° inclination, RAAN 40°
    beaconlink --orbit nonpolar --altitude 550 --inclination 53 --raan 40

    # Offline relay data and exports
    beaconlink --orbit sso --altitude 700 --lst 10.5 --tle-file iridium.tle
    beaconlink --orbit sso --altitude 700 --lst 10.5 --builtin-relays \\
        --export-json result.json --export-geojson tracks.geojson
"""
import argparse
import logging
import sys
from datetime import datetime, timezone

from beaconlink.domain.errors import BeaconLinkError
from beaconlink.domain.orbit_intent import NonPolarIntent, OrbitIntent, SunSynchronousIntent
from beaconlink.domain.simulation import (
    DEFAULT_BEACON_FOV_DEG,
    DEFAULT_RELAY_FOV_DEG,
    SimulationConfig,
    SimulationResult,
    run_simulation,
)
from beaconlink.adapters.celestrak import (
    BuiltinRelaySource,
    CelesTrakRelaySource,
    FileRelaySource,
)
from beaconlink.adapters.geojson_exporter import GeoJsonTrackExporter
from beaconlink.adapters.json_io import JsonResultWriter
from beaconlink.adapters.sgp4_propagator import SGP4Propagator
from beaconlink.ports.relay_source import RelayElementSource


def _parse_start(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO-8601 start time: {text!r}") from None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def build_intent(args: argparse.Namespace) -> OrbitIntent:
    if args.orbit == 'sso':
        if args.lst is None:
            raise ValueError("--lst is required for a Sun-synchronous orbit")
        return SunSynchronousIntent(
            altitude_km=args.altitude,
            local_solar_time_hours=args.lst,
        )
    if args.inclination is None:
        raise ValueError("--inclination is required for a non-polar orbit")
    return NonPolarIntent(
        altitude_km=args.altitude,
        inclination_deg=args.inclination,
        raan_deg=args.raan,
    )


def build_relay_source(args: argparse.Namespace) -> RelayElementSource:
    if args.tle_file:
        return FileRelaySource(args.tle_file)
    if args.builtin_relays:
        return BuiltinRelaySource()
    return CelesTrakRelaySource(group=args.group, timeout=args.timeout)


def format_summary(result: SimulationResult) -> str:
    beacon = result.beacon_element_set
    lines = [
        f"Beacon: inc {beacon.inclination_deg:.4f}°, RAAN {beacon.raan_deg:.4f}°, "
        f"{beacon.mean_motion_rev_per_day:.8f} rev/day",
        f"Window: {result.start_time.isoformat()} → {result.end_time.isoformat()} "
        f"({len(result.beacon_track)} steps)",
        f"Total handshakes: {result.total_handshakes}",
        f"Blackouts: {result.number_of_blackouts}, "
        f"total {result.total_blackout_duration_s:.0f} s, "
        f"mean {result.average_blackout_duration_s:.1f} s",
    ]
    if result.skipped_beacon_steps:
        lines.append(f"Skipped Beacon steps: {result.skipped_beacon_steps}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='beaconlink',
        description="Simulate Beacon-to-relay handshakes and blackouts",
    )
    orbit_group = parser.add_argument_group('Beacon orbit')
    orbit_group.add_argument(
        '--orbit', choices=['sso', 'nonpolar'], required=True,
        help="Sun-synchronous (altitude + LST) or non-polar (altitude + inclination)",
    )
    orbit_group.add_argument('--altitude', type=float, required=True, help="Altitude (km)")
    orbit_group.add_argument(
        '--lst', type=float,
        help="Local solar time at the descending node (hours, [0, 24))",
    )
    orbit_group.add_argument('--inclination', type=float, help="Inclination (degrees)")
    orbit_group.add_argument('--raan', type=float, help="RAAN (degrees, default 0)")

    sim_group = parser.add_argument_group('Simulation')
    sim_group.add_argument(
        '--relay-fov', type=float, default=DEFAULT_RELAY_FOV_DEG,
        help=f"Relay antenna full field of view in degrees (default: {DEFAULT_RELAY_FOV_DEG})",
    )
    sim_group.add_argument(
        '--beacon-fov', type=float, default=DEFAULT_BEACON_FOV_DEG,
        help=f"Beacon antenna full field of view in degrees (default: {DEFAULT_BEACON_FOV_DEG})",
    )
    sim_group.add_argument('--duration-hours', type=float, default=24.0,
                           help="Simulated window length (default: 24)")
    sim_group.add_argument('--step-seconds', type=float, default=60.0,
                           help="Time step (default: 60)")
    sim_group.add_argument('--start', type=_parse_start,
                           help="ISO-8601 start time (default: now, UTC)")
    sim_group.add_argument(
        '--bidirectional', action='store_true', default=False,
        help="Also require the relay inside one of the Beacon's horizon antenna cones",
    )

    relay_group = parser.add_argument_group('Relay data')
    relay_group.add_argument('--group', default='iridium',
                             help="CelesTrak group name (default: iridium)")
    relay_group.add_argument('--timeout', type=int, default=30,
                             help="HTTP timeout in seconds (default: 30)")
    relay_group.add_argument('--tle-file', help="Read relay TLEs from a local file")
    relay_group.add_argument('--builtin-relays', action='store_true', default=False,
                             help="Use the built-in Iridium-like constellation (no network)")

    export_group = parser.add_argument_group('Export')
    export_group.add_argument('--export-json', help="Write the full result to JSON")
    export_group.add_argument('--export-geojson', help="Write ground tracks to GeoJSON")
    export_group.add_argument('--no-tracks', action='store_true', default=False,
                              help="Omit tracks from the JSON export")

    parser.add_argument('-v', '--verbose', action='store_true', default=False,
                        help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SimulationConfig(
            beacon_intent=build_intent(args),
            relay_fov_deg=args.relay_fov,
            beacon_fov_deg=args.beacon_fov,
            duration_hours=args.duration_hours,
            time_step_seconds=args.step_seconds,
            bidirectional=args.bidirectional,
        )
        result = run_simulation(
            config,
            relay_source=build_relay_source(args),
            propagator=SGP4Propagator(),
            start_time=args.start,
        )
        print(format_summary(result))

        if args.export_json:
            JsonResultWriter(include_tracks=not args.no_tracks).export(result, args.export_json)
            print(f"Exported result to {args.export_json}")

        if args.export_geojson:
            n = GeoJsonTrackExporter().export(result, args.export_geojson)
            print(f"Exported {n} features to {args.export_geojson}")

    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except (BeaconLinkError, ValueError, ConnectionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
