# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital mechanics functions.

Circular-orbit mean motion and the J2 secular nodal drift used to size
Sun-synchronous inclinations. Constants follow the WGS-72 values the SGP4
propagator is built on, in kilometres and seconds.
"""
import logging
import math
from dataclasses import dataclass

import numpy as np


_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _OrbitalConstants:
    """Orbital constants consistent with SGP4 (WGS-72)."""
    MU_EARTH_KM3_S2: float = 398600.8    # km³/s², gravitational parameter
    R_EARTH_KM: float = 6378.135         # km, equatorial radius
    J2_EARTH: float = 1.08263e-3         # J2 perturbation coefficient
    SECONDS_PER_DAY: float = 86400.0
    MINUTES_PER_DAY: float = 1440.0
    TROPICAL_YEAR_DAYS: float = 365.2422
    # WGS84 ellipsoid, used for geodetic output only
    R_EARTH_EQUATORIAL_KM: float = 6378.137
    R_EARTH_POLAR_KM: float = 6356.7523142
    E_SQUARED: float = 0.00669437999014


OrbitalConstants: _OrbitalConstants = _OrbitalConstants()


def semi_major_axis_km(altitude_km: float) -> float:
    """Semi-major axis of a circular orbit at the given altitude (km)."""
    return OrbitalConstants.R_EARTH_KM + altitude_km


def mean_motion_rad_s(a_km: float) -> float:
    """
    Keplerian mean motion n = √(μ / a³).

    Args:
        a_km: Semi-major axis (km).

    Returns:
        Mean motion in rad/s.
    """
    return float(np.sqrt(OrbitalConstants.MU_EARTH_KM3_S2 / a_km**3))


def rad_s_to_rev_per_day(n_rad_s: float) -> float:
    """Convert mean motion from rad/s to revolutions per day."""
    return n_rad_s * OrbitalConstants.SECONDS_PER_DAY / (2.0 * math.pi)


def rev_per_day_to_rad_s(n_rev_day: float) -> float:
    """Convert mean motion from revolutions per day to rad/s."""
    return n_rev_day * 2.0 * math.pi / OrbitalConstants.SECONDS_PER_DAY


def sso_regression_rate_rad_s() -> float:
    """Mean solar motion: one full node revolution per tropical year (rad/s)."""
    c = OrbitalConstants
    return 2.0 * math.pi / (c.TROPICAL_YEAR_DAYS * c.SECONDS_PER_DAY)


def j2_raan_rate(n: float, a_km: float, e: float, i_rad: float) -> float:
    """
    J2 secular rate of RAAN (longitude of ascending node).

    dΩ/dt = -3/2 · n · J2 · (R_E/a)² · cos(i) / (1-e²)²

    Args:
        n: Mean motion (rad/s).
        a_km: Semi-major axis (km).
        e: Eccentricity.
        i_rad: Inclination (radians).

    Returns:
        RAAN rate in rad/s. Negative for prograde, positive for retrograde.
    """
    c = OrbitalConstants
    p_ratio = (c.R_EARTH_KM / a_km) ** 2
    return float(-1.5 * n * c.J2_EARTH * p_ratio * np.cos(i_rad) / (1 - e**2) ** 2)


def sso_cos_inclination(a_km: float, e: float) -> float:
    """
    Unclamped cos(i) that makes the J2 nodal drift match the mean Sun.

    Inverts j2_raan_rate for the target rate 2π / tropical year.
    Values outside [-1, 1] mean no Sun-synchronous orbit exists at
    this semi-major axis.
    """
    c = OrbitalConstants
    n = mean_motion_rad_s(a_km)
    target = sso_regression_rate_rad_s()
    return -target * (2.0 / 3.0) * (1 - e**2) ** 2 / (
        n * c.J2_EARTH * (c.R_EARTH_KM / a_km) ** 2
    )


def sso_inclination_deg(altitude_km: float, eccentricity: float = 1e-4) -> float:
    """
    Sun-synchronous inclination for a given altitude.

    cos(i) is clamped to [-1, 1] before acos; for altitudes where no real
    solution exists the returned inclination is the clamped boundary
    (180°) and a warning is logged.

    Args:
        altitude_km: Orbital altitude above the equatorial radius (km).
        eccentricity: Orbit eccentricity (near-circular by default).

    Returns:
        Inclination in degrees (retrograde, > 90° for LEO).
    """
    cos_i = sso_cos_inclination(semi_major_axis_km(altitude_km), eccentricity)
    if cos_i < -1.0 or cos_i > 1.0:
        _log.warning(
            "No Sun-synchronous solution at %.1f km (cos_i=%.4f); clamping",
            altitude_km, cos_i,
        )
    cos_i = max(-1.0, min(1.0, cos_i))
    return float(np.degrees(np.arccos(cos_i)))


def orbital_period_s(a_km: float) -> float:
    """Orbital period T = 2π / n in seconds."""
    return 2.0 * math.pi / mean_motion_rad_s(a_km)
