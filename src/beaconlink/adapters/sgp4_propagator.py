# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SGP4 propagator adapter.

Wraps the sgp4 library behind the Propagator port. External dependency
(sgp4) is confined to this layer and imported lazily.

TLE mean elements are SGP4-specific, not pure Keplerian; positions come
back in the TEME frame in km, velocities in km/s. Every non-zero SGP4
error code and every non-finite component is surfaced as a
PropagationFailure, never as zeros or a stale state.
"""
import logging
from datetime import datetime, timezone

from beaconlink.domain.coordinate_frames import eci_to_geodetic
from beaconlink.domain.element_set import ElementSet
from beaconlink.domain.errors import PropagationFailure
from beaconlink.domain.state import GeodeticPosition, InertialState
from beaconlink.domain.vector import Vector3, is_finite
from beaconlink.ports.propagator import Propagator


_log = logging.getLogger(__name__)

SGP4_ERROR_MESSAGES = {
    1: "mean elements, ecc >= 1.0 or ecc < -0.001 or a < 0.95 er",
    2: "mean motion less than 0.0",
    3: "perturbed elements, ecc < 0.0 or ecc > 1.0",
    4: "semi-latus rectum < 0.0",
    5: "epoch elements are sub-orbital",
    6: "satellite has decayed",
}


def _require_sgp4():
    """Import sgp4 lazily; raise clear error if not installed."""
    try:
        from sgp4.api import Satrec, jday
    except ImportError:
        raise ImportError(
            "sgp4 is required for orbit propagation. "
            "Install with: pip install sgp4"
        ) from None
    return Satrec, jday


def sgp4_error_message(error_code: int) -> str:
    return SGP4_ERROR_MESSAGES.get(error_code, "unknown SGP4 error")


def _as_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (treat naive as UTC)."""
    return dt.astimezone(timezone.utc) if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


class SGP4Propagator(Propagator):
    """
    Propagates element sets with SGP4.

    Satellite records are initialised once per element set and cached by
    their two-line text, so stepping a constellation through a timeline
    only pays the initialisation cost on the first step.
    """

    def __init__(self):
        self._Satrec, self._jday = _require_sgp4()
        self._records: dict[tuple[str, str], object] = {}

    def _record(self, element_set: ElementSet, timestamp: datetime):
        key = (element_set.line1, element_set.line2)
        satrec = self._records.get(key)
        if satrec is None:
            try:
                satrec = self._Satrec.twoline2rv(element_set.line1, element_set.line2)
            except (ValueError, IndexError) as e:
                raise PropagationFailure(
                    element_set.name, timestamp, f"unparsable element set: {e}",
                ) from e
            self._records[key] = satrec
        error = getattr(satrec, 'error', 0)
        if error:
            raise PropagationFailure(
                element_set.name, timestamp, sgp4_error_message(error), error,
            )
        return satrec

    def propagate(self, element_set: ElementSet, timestamp: datetime) -> InertialState:
        satrec = self._record(element_set, timestamp)
        dt = _as_utc(timestamp)
        jd, fr = self._jday(dt.year, dt.month, dt.day, dt.hour, dt.minute,
                            dt.second + dt.microsecond / 1e6)

        error_code, position_km, velocity_km_s = satrec.sgp4(jd, fr)
        if error_code != 0:
            raise PropagationFailure(
                element_set.name, timestamp, sgp4_error_message(error_code), error_code,
            )

        position: Vector3 = (float(position_km[0]), float(position_km[1]), float(position_km[2]))
        velocity: Vector3 = (float(velocity_km_s[0]), float(velocity_km_s[1]), float(velocity_km_s[2]))
        if not (is_finite(position) and is_finite(velocity)):
            raise PropagationFailure(
                element_set.name, timestamp, "non-finite state vector",
            )

        return InertialState(timestamp=timestamp, position_eci=position, velocity_eci=velocity)

    def to_geodetic(self, position_eci: Vector3, timestamp: datetime) -> GeodeticPosition:
        return eci_to_geodetic(position_eci, timestamp)
