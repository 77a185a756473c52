# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for JSON and GeoJSON result export."""
import json
from datetime import datetime, timedelta, timezone

from beaconlink.adapters.geojson_exporter import GeoJsonTrackExporter, split_at_antimeridian
from beaconlink.adapters.json_io import JsonResultWriter, result_to_dict
from beaconlink.domain.element_set import build_element_set
from beaconlink.domain.simulation import BlackoutPeriod, Handshake, SimulationResult
from beaconlink.domain.state import GeodeticPosition, TrackSample
from beaconlink.ports.export import ResultExporter


START = datetime(2026, 3, 20, 12, 0, 0, tzinfo=timezone.utc)


def _sample(k, lon, lat=10.0, alt=700.0):
    return TrackSample(
        timestamp=START + timedelta(minutes=k),
        position_eci=(7078.0, float(k), 0.0),
        velocity_eci=(0.0, 7.5, 0.0),
        geodetic=GeodeticPosition(latitude_deg=lat, longitude_deg=lon, altitude_km=alt),
    )


def _result():
    beacon_track = (_sample(0, 170.0), _sample(1, 175.0), _sample(2, -178.0), _sample(3, -173.0))
    relay_track = (_sample(0, 20.0, alt=780.0), _sample(1, 24.0, alt=780.0),
                   _sample(2, 28.0, alt=780.0), _sample(3, 32.0, alt=780.0))
    handshake = Handshake(
        timestamp=START + timedelta(minutes=1),
        relay_id="IRIDIUM 106",
        beacon_position=beacon_track[1].geodetic,
        relay_position=relay_track[1].geodetic,
    )
    blackout = BlackoutPeriod(START + timedelta(minutes=2), START + timedelta(minutes=3), 60.0)
    return SimulationResult(
        start_time=START,
        end_time=START + timedelta(minutes=3),
        beacon_element_set=build_element_set("BEACON", 99999, START, 700.0, 98.2, 10.0),
        total_handshakes=1,
        handshakes=(handshake,),
        active_links=(frozenset(), frozenset({"IRIDIUM 106"}), frozenset(), frozenset()),
        blackout_periods=(blackout,),
        number_of_blackouts=1,
        total_blackout_duration_s=60.0,
        average_blackout_duration_s=60.0,
        beacon_track=beacon_track,
        relay_tracks={"IRIDIUM 106": relay_track, "LONELY": (_sample(0, 0.0),)},
    )


class TestResultToDict:

    def test_statistics(self):
        data = result_to_dict(_result())
        assert data['statistics'] == {
            'total_handshakes': 1,
            'number_of_blackouts': 1,
            'total_blackout_duration_s': 60.0,
            'average_blackout_duration_s': 60.0,
            'skipped_beacon_steps': 0,
        }

    def test_events_serialized(self):
        data = result_to_dict(_result())
        assert data['handshakes'][0]['relay_id'] == "IRIDIUM 106"
        assert data['handshakes'][0]['timestamp'] == "2026-03-20T12:01:00+00:00"
        assert data['blackout_periods'][0]['duration_s'] == 60.0
        assert data['active_links'] == [[], ["IRIDIUM 106"], [], []]
        assert data['beacon']['tle'][0].startswith("1 99999U")

    def test_tracks_optional(self):
        assert len(result_to_dict(_result())['beacon_track']) == 4
        data = result_to_dict(_result(), include_tracks=False)
        assert 'beacon_track' not in data
        assert 'relay_tracks' not in data

    def test_json_serializable(self):
        json.dumps(result_to_dict(_result()))


class TestJsonResultWriter:

    def test_implements_port(self):
        assert isinstance(JsonResultWriter(), ResultExporter)

    def test_writes_file(self, tmp_path):
        path = tmp_path / "result.json"
        count = JsonResultWriter(include_tracks=False).export(_result(), str(path))
        assert count == 1
        data = json.loads(path.read_text(encoding='utf-8'))
        assert data['statistics']['total_handshakes'] == 1
        assert 'beacon_track' not in data


class TestSplitAtAntimeridian:

    def test_splits_on_wrap(self):
        segments = split_at_antimeridian(_result().beacon_track)
        assert [len(s) for s in segments] == [2, 2]
        assert segments[1][0][0] == -178.0

    def test_no_wrap_single_segment(self):
        segments = split_at_antimeridian(_result().relay_tracks["IRIDIUM 106"])
        assert len(segments) == 1

    def test_empty(self):
        assert split_at_antimeridian([]) == []

    def test_coordinate_order_lon_lat_alt(self):
        point = split_at_antimeridian([_sample(0, 12.5, lat=-45.0, alt=701.0)])[0][0]
        assert point == [12.5, -45.0, 701.0]


class TestGeoJsonTrackExporter:

    def test_implements_port(self):
        assert isinstance(GeoJsonTrackExporter(), ResultExporter)

    def test_feature_collection(self, tmp_path):
        path = tmp_path / "tracks.geojson"
        count = GeoJsonTrackExporter().export(_result(), str(path))
        data = json.loads(path.read_text(encoding='utf-8'))
        assert data['type'] == 'FeatureCollection'
        roles = [f['properties']['role'] for f in data['features']]
        # Single-sample relay track has no drawable segment
        assert roles == ['beacon', 'relay', 'handshake']
        assert count == 3

    def test_beacon_feature_is_multilinestring(self, tmp_path):
        path = tmp_path / "tracks.geojson"
        GeoJsonTrackExporter().export(_result(), str(path))
        beacon = json.loads(path.read_text(encoding='utf-8'))['features'][0]
        assert beacon['geometry']['type'] == 'MultiLineString'
        assert len(beacon['geometry']['coordinates']) == 2
        assert beacon['properties']['name'] == "BEACON"
        assert beacon['properties']['samples'] == 4

    def test_handshake_point(self, tmp_path):
        path = tmp_path / "tracks.geojson"
        GeoJsonTrackExporter().export(_result(), str(path))
        point = json.loads(path.read_text(encoding='utf-8'))['features'][-1]
        assert point['geometry'] == {'type': 'Point', 'coordinates': [175.0, 10.0, 700.0]}
        assert point['properties']['relay_id'] == "IRIDIUM 106"

    def test_without_relays(self, tmp_path):
        path = tmp_path / "tracks.geojson"
        count = GeoJsonTrackExporter(include_relays=False).export(_result(), str(path))
        assert count == 2
