# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
GeoJSON ground-track exporter.

Exports the Beacon and relay ground tracks as LineString features and
each handshake as a Point feature at the Beacon's position.
Coordinates follow RFC 7946 order: [lon, lat, alt_km].
Tracks are split where they cross the antimeridian so map renderers do
not draw lines across the whole globe.
External dependencies (json, file I/O) are confined to this adapter.
"""
import json
from typing import Any

from beaconlink.domain.simulation import SimulationResult
from beaconlink.domain.state import TrackSample
from beaconlink.ports.export import ResultExporter


def _coordinates(sample: TrackSample) -> list[float]:
    g = sample.geodetic
    return [round(g.longitude_deg, 6), round(g.latitude_deg, 6), round(g.altitude_km, 3)]


def split_at_antimeridian(track: tuple[TrackSample, ...] | list[TrackSample]) -> list[list[list[float]]]:
    """Break a track into segments wherever longitude jumps by more than 180°."""
    segments: list[list[list[float]]] = []
    current: list[list[float]] = []
    for sample in track:
        point = _coordinates(sample)
        if current and abs(point[0] - current[-1][0]) > 180.0:
            segments.append(current)
            current = []
        current.append(point)
    if current:
        segments.append(current)
    return segments


def _track_feature(name: str, role: str, track) -> dict[str, Any] | None:
    segments = [s for s in split_at_antimeridian(track) if len(s) >= 2]
    if not segments:
        return None
    return {
        'type': 'Feature',
        'geometry': {'type': 'MultiLineString', 'coordinates': segments},
        'properties': {
            'name': name,
            'role': role,
            'start': track[0].timestamp.isoformat(),
            'end': track[-1].timestamp.isoformat(),
            'samples': len(track),
        },
    }


class GeoJsonTrackExporter(ResultExporter):
    """Exports ground tracks and handshakes as a GeoJSON FeatureCollection."""

    def __init__(self, include_relays: bool = True):
        self._include_relays = include_relays

    def export(self, result: SimulationResult, path: str) -> int:
        features = []

        beacon = _track_feature(result.beacon_element_set.name, 'beacon', result.beacon_track)
        if beacon is not None:
            features.append(beacon)

        if self._include_relays:
            for relay_id, track in result.relay_tracks.items():
                feature = _track_feature(relay_id, 'relay', track)
                if feature is not None:
                    features.append(feature)

        for h in result.handshakes:
            g = h.beacon_position
            features.append({
                'type': 'Feature',
                'geometry': {
                    'type': 'Point',
                    'coordinates': [
                        round(g.longitude_deg, 6),
                        round(g.latitude_deg, 6),
                        round(g.altitude_km, 3),
                    ],
                },
                'properties': {
                    'role': 'handshake',
                    'relay_id': h.relay_id,
                    'timestamp': h.timestamp.isoformat(),
                },
            })

        collection = {
            'type': 'FeatureCollection',
            'features': features,
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(collection, f, indent=2, ensure_ascii=False)

        return len(features)
