# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for propagation, relay catalogs and result export.

External dependencies (sgp4, urllib, json, file I/O) are confined to this layer.
"""
from beaconlink.adapters.celestrak import (
    BuiltinRelaySource,
    CelesTrakRelaySource,
    FileRelaySource,
)
from beaconlink.adapters.geojson_exporter import GeoJsonTrackExporter
from beaconlink.adapters.json_io import JsonResultWriter, result_to_dict
from beaconlink.adapters.sgp4_propagator import SGP4Propagator

__all__ = [
    "BuiltinRelaySource",
    "CelesTrakRelaySource",
    "FileRelaySource",
    "GeoJsonTrackExporter",
    "JsonResultWriter",
    "SGP4Propagator",
    "result_to_dict",
]
