# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Analytical solar ephemeris.

Low-order Sun position from the Astronomical Almanac approximation:
mean longitude plus equation of center, projected onto the equator with
the mean obliquity of the ecliptic. Accuracy ~0.01°, ample for placing
the node of a Sun-synchronous orbit.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timezone

import numpy as np

# J2000.0 reference epoch
_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@dataclass(frozen=True)
class SunPosition:
    """Apparent Sun direction at a given epoch."""
    ecliptic_longitude_rad: float
    right_ascension_rad: float  # [0, 2π)
    declination_rad: float


def days_since_j2000(epoch: datetime) -> float:
    """Days since J2000.0 (2000-01-01 12:00:00 UTC); naive epochs are UTC."""
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    return (epoch - _J2000).total_seconds() / 86400.0


def sun_position(epoch: datetime) -> SunPosition:
    """Sun ecliptic longitude, right ascension and declination.

    Args:
        epoch: UTC datetime.

    Returns:
        SunPosition with angles in radians.
    """
    n = days_since_j2000(epoch)

    # Mean longitude, corrected for aberration (degrees)
    L_deg = (280.460 + 0.9856474 * n) % 360.0
    # Mean anomaly (degrees)
    g_rad = float(np.radians((357.528 + 0.9856003 * n) % 360.0))

    # Equation of center
    lambda_rad = float(np.radians(
        L_deg + 1.915 * float(np.sin(g_rad)) + 0.020 * float(np.sin(2.0 * g_rad))
    ))

    # Mean obliquity of the ecliptic
    eps_rad = float(np.radians(23.439 - 0.0000004 * n))

    ra_rad = float(np.arctan2(np.cos(eps_rad) * np.sin(lambda_rad), np.cos(lambda_rad)))
    ra_rad %= 2.0 * math.pi
    dec_rad = float(np.arcsin(np.sin(eps_rad) * np.sin(lambda_rad)))

    return SunPosition(
        ecliptic_longitude_rad=lambda_rad % (2.0 * math.pi),
        right_ascension_rad=ra_rad,
        declination_rad=dec_rad,
    )


def sun_right_ascension_deg(epoch: datetime) -> float:
    """Sun right ascension in degrees, [0, 360). Convenience wrapper."""
    return math.degrees(sun_position(epoch).right_ascension_rad)
