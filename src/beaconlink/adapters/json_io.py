# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON result writer.

Serializes a SimulationResult: timestamps as ISO-8601, connection sets
as sorted lists, tracks as lists of sample objects.
"""
import json
from typing import Any

from beaconlink.domain.simulation import SimulationResult
from beaconlink.domain.state import GeodeticPosition, TrackSample
from beaconlink.ports.export import ResultExporter


def _geodetic(pos: GeodeticPosition) -> dict[str, float]:
    return {
        'latitude_deg': round(pos.latitude_deg, 6),
        'longitude_deg': round(pos.longitude_deg, 6),
        'altitude_km': round(pos.altitude_km, 3),
    }


def _sample(sample: TrackSample) -> dict[str, Any]:
    return {
        'timestamp': sample.timestamp.isoformat(),
        'position_eci_km': list(sample.position_eci),
        'velocity_eci_km_s': list(sample.velocity_eci),
        'geodetic': _geodetic(sample.geodetic),
    }


def result_to_dict(result: SimulationResult, include_tracks: bool = True) -> dict[str, Any]:
    """Plain-data view of a result, ready for json.dump."""
    beacon = result.beacon_element_set
    data: dict[str, Any] = {
        'start_time': result.start_time.isoformat(),
        'end_time': result.end_time.isoformat(),
        'beacon': {
            'name': beacon.name,
            'tle': [beacon.line1, beacon.line2],
            'inclination_deg': beacon.inclination_deg,
            'raan_deg': beacon.raan_deg,
            'mean_motion_rev_per_day': beacon.mean_motion_rev_per_day,
        },
        'statistics': {
            'total_handshakes': result.total_handshakes,
            'number_of_blackouts': result.number_of_blackouts,
            'total_blackout_duration_s': result.total_blackout_duration_s,
            'average_blackout_duration_s': result.average_blackout_duration_s,
            'skipped_beacon_steps': result.skipped_beacon_steps,
        },
        'handshakes': [
            {
                'timestamp': h.timestamp.isoformat(),
                'relay_id': h.relay_id,
                'beacon_position': _geodetic(h.beacon_position),
                'relay_position': _geodetic(h.relay_position),
            }
            for h in result.handshakes
        ],
        'blackout_periods': [
            {
                'start_time': b.start_time.isoformat(),
                'end_time': b.end_time.isoformat(),
                'duration_s': b.duration_seconds,
            }
            for b in result.blackout_periods
        ],
        'active_links': [sorted(links) for links in result.active_links],
    }
    if include_tracks:
        data['beacon_track'] = [_sample(s) for s in result.beacon_track]
        data['relay_tracks'] = {
            relay_id: [_sample(s) for s in track]
            for relay_id, track in result.relay_tracks.items()
        }
    return data


class JsonResultWriter(ResultExporter):
    """Writes simulation results to JSON files."""

    def __init__(self, include_tracks: bool = True):
        self._include_tracks = include_tracks

    def export(self, result: SimulationResult, path: str) -> int:
        data = result_to_dict(result, include_tracks=self._include_tracks)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return result.total_handshakes
