# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Element sets: synthesis from orbit intent, two-line formatting and parsing.

An ElementSet carries the classical mean elements of one body at one
epoch together with the two-line text the SGP4 propagator consumes.
Relay element sets are parsed from catalog text; the Beacon element set
is synthesized from the user's orbit intent as a new, circular orbit.

TLE fixed-column layout (1-based columns):
    Line 1: 03-07 catalog, 08 class, 10-17 designator, 19-32 epoch,
            34-43 ṅ/2, 45-52 n̈/6, 54-61 B*, 63 ephem type, 65-68 set no.
    Line 2: 09-16 inc, 18-25 RAAN, 27-33 ecc, 35-42 argp, 44-51 M,
            53-63 mean motion, 64-68 rev no.
    Column 69 of both lines is the mod-10 checksum.
"""
import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from beaconlink.domain.errors import ElementSynthesisFailure, InvalidOrbitParameters
from beaconlink.domain.orbit_intent import (
    NonPolarIntent,
    OrbitIntent,
    SunSynchronousIntent,
    validate_intent,
)
from beaconlink.domain.orbital_mechanics import (
    mean_motion_rad_s,
    rad_s_to_rev_per_day,
    semi_major_axis_km,
    sso_inclination_deg,
)
from beaconlink.domain.solar import sun_right_ascension_deg


_log = logging.getLogger(__name__)

NEAR_CIRCULAR_ECCENTRICITY = 1e-4
BEACON_CATALOG_NUMBER = 99999
BEACON_NAME = "BEACON"

_ZERO_NDOT = " .00000000"
_ZERO_IMPLIED_EXP = " 00000-0"
_IMPLIED_EXP_RE = re.compile(r'^([+-]?)(\d{1,5})([+-]\d)$')


@dataclass(frozen=True)
class ElementSet:
    """Mean orbital elements of one body at one epoch."""
    name: str
    catalog_number: int
    epoch: datetime
    mean_motion_rev_per_day: float
    eccentricity: float
    inclination_deg: float
    raan_deg: float
    arg_perigee_deg: float
    mean_anomaly_deg: float
    line1: str
    line2: str
    bstar: float = 0.0
    mean_motion_dot: float = 0.0
    mean_motion_ddot: float = 0.0


# ── Checksum and epoch encoding ─────────────────────────────────────

def tle_checksum(line: str) -> int:
    """Mod-10 checksum over the first 68 columns: digits count their value, '-' counts 1."""
    total = 0
    for char in line[:68]:
        if char.isdigit():
            total += int(char)
        elif char == '-':
            total += 1
    return total % 10


def encode_tle_epoch(epoch: datetime) -> tuple[int, float]:
    """
    Split a UTC instant into two-digit year and 1-based fractional day of year.

    Naive datetimes are treated as UTC.
    """
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    epoch = epoch.astimezone(timezone.utc)
    start_of_year = datetime(epoch.year, 1, 1, tzinfo=timezone.utc)
    day_of_year = (epoch - start_of_year).total_seconds() / 86400.0 + 1.0
    return epoch.year % 100, day_of_year


def decode_tle_epoch(two_digit_year: int, day_of_year: float) -> datetime:
    """Inverse of encode_tle_epoch; years 57-99 map to the 1900s."""
    year = 1900 + two_digit_year if two_digit_year >= 57 else 2000 + two_digit_year
    start_of_year = datetime(year, 1, 1, tzinfo=timezone.utc)
    return start_of_year + timedelta(days=day_of_year - 1.0)


# ── Formatting ──────────────────────────────────────────────────────

def _with_checksum(body: str, which: str) -> str:
    if len(body) != 68:
        raise ElementSynthesisFailure(
            f"TLE line {which} has {len(body)} columns before checksum, expected 68: {body!r}"
        )
    return body + str(tle_checksum(body))


def format_tle_lines(
    catalog_number: int,
    epoch: datetime,
    mean_motion_rev_per_day: float,
    eccentricity: float,
    inclination_deg: float,
    raan_deg: float,
    arg_perigee_deg: float,
    mean_anomaly_deg: float,
    element_set_number: int = 1,
    rev_number: int = 1,
) -> tuple[str, str]:
    """
    Render mean elements as a two-line element set with zero drag terms.

    Raises:
        ElementSynthesisFailure: A value is non-finite or overflows its column.
    """
    values = (mean_motion_rev_per_day, eccentricity, inclination_deg,
              raan_deg, arg_perigee_deg, mean_anomaly_deg)
    if not all(math.isfinite(v) for v in values):
        raise ElementSynthesisFailure(f"Non-finite orbital element in {values}")
    if not 0 <= catalog_number <= 99999:
        raise ElementSynthesisFailure(f"Catalog number out of range: {catalog_number}")
    if not 0.0 <= eccentricity < 1.0:
        raise ElementSynthesisFailure(f"Eccentricity out of range: {eccentricity}")

    yy, day_of_year = encode_tle_epoch(epoch)
    designator = f"{yy:02d}001A"

    ecc_digits = f"{round(eccentricity * 1e7):07d}"
    if len(ecc_digits) != 7:
        raise ElementSynthesisFailure(f"Eccentricity does not fit 7 digits: {eccentricity}")

    line1 = (
        f"1 {catalog_number:05d}U {designator:<8} {yy:02d}{day_of_year:012.8f} "
        f"{_ZERO_NDOT} {_ZERO_IMPLIED_EXP} {_ZERO_IMPLIED_EXP} 0 {element_set_number:>4}"
    )
    line2 = (
        f"2 {catalog_number:05d} {inclination_deg:8.4f} {raan_deg % 360.0:8.4f} "
        f"{ecc_digits} {arg_perigee_deg % 360.0:8.4f} {mean_anomaly_deg % 360.0:8.4f} "
        f"{mean_motion_rev_per_day:11.8f}{rev_number % 100000:5d}"
    )
    return _with_checksum(line1, "1"), _with_checksum(line2, "2")


def build_element_set(
    name: str,
    catalog_number: int,
    epoch: datetime,
    altitude_km: float,
    inclination_deg: float,
    raan_deg: float,
    mean_anomaly_deg: float = 0.0,
    eccentricity: float = NEAR_CIRCULAR_ECCENTRICITY,
    arg_perigee_deg: float = 0.0,
) -> ElementSet:
    """
    Element set for a near-circular orbit at the given altitude.

    Mean motion comes from Kepler's third law, n = √(μ/a³), expressed in
    revolutions per day. Drag terms are zero.
    """
    a_km = semi_major_axis_km(altitude_km)
    mean_motion = rad_s_to_rev_per_day(mean_motion_rad_s(a_km))
    raan = raan_deg % 360.0

    line1, line2 = format_tle_lines(
        catalog_number=catalog_number,
        epoch=epoch,
        mean_motion_rev_per_day=mean_motion,
        eccentricity=eccentricity,
        inclination_deg=inclination_deg,
        raan_deg=raan,
        arg_perigee_deg=arg_perigee_deg,
        mean_anomaly_deg=mean_anomaly_deg,
    )
    return ElementSet(
        name=name,
        catalog_number=catalog_number,
        epoch=epoch,
        mean_motion_rev_per_day=mean_motion,
        eccentricity=eccentricity,
        inclination_deg=inclination_deg,
        raan_deg=raan,
        arg_perigee_deg=arg_perigee_deg % 360.0,
        mean_anomaly_deg=mean_anomaly_deg % 360.0,
        line1=line1,
        line2=line2,
    )


# ── Beacon synthesis ────────────────────────────────────────────────

def sso_raan_deg(epoch: datetime, local_solar_time_hours: float) -> float:
    """
    RAAN that places the descending node at the requested local solar time.

    The Sun's right ascension at epoch, minus the hour angle of the local
    solar time (15°/h), shifted 180° from the descending to the
    ascending node. Normalized to [0, 360).
    """
    sun_ra = sun_right_ascension_deg(epoch)
    return (sun_ra - local_solar_time_hours * 15.0 + 180.0) % 360.0


def synthesize_element_set(
    intent: OrbitIntent,
    epoch: datetime,
    name: str = BEACON_NAME,
    catalog_number: int = BEACON_CATALOG_NUMBER,
) -> ElementSet:
    """
    Build the Beacon element set from the user's orbit intent.

    The orbit is new and near-circular: eccentricity 1e-4, argument of
    perigee and mean anomaly zero, epoch at the simulation start.

    Raises:
        InvalidOrbitParameters: The intent is outside its domain.
        ElementSynthesisFailure: The element set cannot be formatted.
    """
    validate_intent(intent)

    if isinstance(intent, SunSynchronousIntent):
        inclination = sso_inclination_deg(intent.altitude_km, NEAR_CIRCULAR_ECCENTRICITY)
        raan = sso_raan_deg(epoch, intent.local_solar_time_hours)
    elif isinstance(intent, NonPolarIntent):
        inclination = intent.inclination_deg
        raan = intent.raan_deg if intent.raan_deg is not None else 0.0
    else:
        raise InvalidOrbitParameters(f"Unknown orbit intent: {intent!r}")

    elements = build_element_set(
        name=name,
        catalog_number=catalog_number,
        epoch=epoch,
        altitude_km=intent.altitude_km,
        inclination_deg=inclination,
        raan_deg=raan,
    )
    _log.info(
        "Synthesized %s element set: %s, inc=%.4f°, raan=%.4f°, n=%.8f rev/day",
        name, intent.kind.value, elements.inclination_deg,
        elements.raan_deg, elements.mean_motion_rev_per_day,
    )
    _log.debug("%s TLE:\n%s\n%s", name, elements.line1, elements.line2)
    return elements


# ── Parsing ─────────────────────────────────────────────────────────

def _parse_implied_exponent(field: str) -> float:
    """Parse TLE implied-decimal exponent notation, e.g. ' 48098-4' → 0.48098e-4."""
    text = field.replace(' ', '')
    if not text:
        return 0.0
    m = _IMPLIED_EXP_RE.match(text)
    if not m:
        raise ValueError(f"Malformed exponent field: {field!r}")
    sign, mantissa, exponent = m.groups()
    return float(f"{sign}0.{mantissa}e{exponent}")


def parse_tle(name: str, line1: str, line2: str) -> ElementSet:
    """
    Parse one two-line element set.

    Raises:
        ValueError: The lines are not a well-formed TLE pair.
    """
    line1 = line1.rstrip()
    line2 = line2.rstrip()
    if not (line1.startswith('1 ') and line2.startswith('2 ')):
        raise ValueError(f"Not a TLE pair for {name!r}")
    if len(line1) < 68 or len(line2) < 68:
        raise ValueError(f"Truncated TLE for {name!r}")
    if len(line1) >= 69 and line1[68].isdigit() and int(line1[68]) != tle_checksum(line1):
        _log.debug("Checksum mismatch on line 1 of %s", name)
    if len(line2) >= 69 and line2[68].isdigit() and int(line2[68]) != tle_checksum(line2):
        _log.debug("Checksum mismatch on line 2 of %s", name)

    epoch = decode_tle_epoch(int(line1[18:20]), float(line1[20:32]))
    ndot_text = line1[33:43].strip()

    return ElementSet(
        name=name.strip(),
        catalog_number=int(line1[2:7]),
        epoch=epoch,
        mean_motion_rev_per_day=float(line2[52:63]),
        eccentricity=float("0." + line2[26:33].strip()),
        inclination_deg=float(line2[8:16]),
        raan_deg=float(line2[17:25]),
        arg_perigee_deg=float(line2[34:42]),
        mean_anomaly_deg=float(line2[43:51]),
        line1=line1,
        line2=line2,
        bstar=_parse_implied_exponent(line1[53:61]),
        mean_motion_dot=float(ndot_text) if ndot_text else 0.0,
        mean_motion_ddot=_parse_implied_exponent(line1[44:52]),
    )


def parse_tle_text(raw: str) -> list[ElementSet]:
    """
    Parse catalog text of 3-line blocks (name, line 1, line 2).

    Blank lines and stray lines are skipped. A name line not followed by
    a TLE pair is skipped; a block whose fields do not parse is dropped
    with a warning.
    """
    lines = [ln.strip() for ln in raw.splitlines() if ln.strip()]
    elements: list[ElementSet] = []
    i = 0
    while i < len(lines):
        name = lines[i]
        if name.startswith('1 ') or name.startswith('2 '):
            i += 1
            continue
        if i + 2 >= len(lines):
            break
        line1, line2 = lines[i + 1], lines[i + 2]
        if line1.startswith('1 ') and line2.startswith('2 '):
            try:
                elements.append(parse_tle(name, line1, line2))
            except ValueError as e:
                _log.warning("Skipping %s: %s", name, e)
            i += 3
        else:
            i += 1
    return elements
