# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coordinate frame conversions for track output.

Reference frames:
    ECI:      Earth-Centered Inertial (the propagator's TEME frame)
    ECEF:     Earth-Centered Earth-Fixed (rotating with Earth)
    Geodetic: Latitude, Longitude, Altitude (WGS84 ellipsoid)

The ECI→ECEF rotation is a Z-axis rotation by the Greenwich Mean
Sidereal Time (GMST) angle. ECEF→Geodetic uses the iterative Bowring
method on the WGS84 ellipsoid. Distances are in kilometres.
"""
import math
from datetime import datetime, timezone

from beaconlink.domain.orbital_mechanics import OrbitalConstants
from beaconlink.domain.state import GeodeticPosition
from beaconlink.domain.vector import Vector3


_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
_MAX_LAT_ITERATIONS = 10
_LAT_TOLERANCE_RAD = 1e-12


def gmst_rad(epoch: datetime) -> float:
    """
    Greenwich Mean Sidereal Time for a UTC epoch.

        GMST(°) = 280.46061837 + 360.98564736629 * (JD - 2451545.0)
                  + 0.000387933 * T² - T³/38710000

    Returns:
        GMST in radians, normalized to [0, 2π).
    """
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)

    jd_since_j2000 = (epoch - _J2000).total_seconds() / 86400.0
    t_centuries = jd_since_j2000 / 36525.0

    gmst_deg = (
        280.46061837
        + 360.98564736629 * jd_since_j2000
        + 0.000387933 * t_centuries**2
        - t_centuries**3 / 38710000.0
    ) % 360.0

    return math.radians(gmst_deg)


def eci_to_ecef(position_eci: Vector3, gmst_angle_rad: float) -> Vector3:
    """
    Rotate an ECI position into ECEF by R_z(-θ):

        [x_ecef]   [ cos(θ)  sin(θ)  0] [x_eci]
        [y_ecef] = [-sin(θ)  cos(θ)  0] [y_eci]
        [z_ecef]   [   0       0     1] [z_eci]
    """
    cos_t = math.cos(gmst_angle_rad)
    sin_t = math.sin(gmst_angle_rad)
    x, y, z = position_eci
    return (cos_t * x + sin_t * y, -sin_t * x + cos_t * y, z)


def ecef_to_geodetic(position_ecef: Vector3) -> GeodeticPosition:
    """
    Geodetic position of an ECEF point (km) on the WGS84 ellipsoid.

    Latitude is refined with Bowring's fixed-point update until it moves
    less than _LAT_TOLERANCE_RAD. Longitude is in (-180, 180].
    """
    c = OrbitalConstants
    a_km = c.R_EARTH_EQUATORIAL_KM
    e2 = c.E_SQUARED

    x, y, z = position_ecef
    rho = math.hypot(x, y)

    lat = math.atan2(z, rho * (1.0 - e2))
    for _ in range(_MAX_LAT_ITERATIONS):
        prime_vertical = a_km / math.sqrt(1.0 - e2 * math.sin(lat)**2)
        refined = math.atan2(z + e2 * prime_vertical * math.sin(lat), rho)
        converged = abs(refined - lat) < _LAT_TOLERANCE_RAD
        lat = refined
        if converged:
            break

    prime_vertical = a_km / math.sqrt(1.0 - e2 * math.sin(lat)**2)
    if rho > 1e-9:
        altitude_km = rho / math.cos(lat) - prime_vertical
    else:
        # On the polar axis
        altitude_km = abs(z) - c.R_EARTH_POLAR_KM

    return GeodeticPosition(
        latitude_deg=math.degrees(lat),
        longitude_deg=math.degrees(math.atan2(y, x)),
        altitude_km=altitude_km,
    )


def eci_to_geodetic(position_eci: Vector3, timestamp: datetime) -> GeodeticPosition:
    """Geodetic position of an ECI point at the given instant."""
    return ecef_to_geodetic(eci_to_ecef(position_eci, gmst_rad(timestamp)))
