"""
Reference Frame Transformations

Converts SGP4 output (TEME, treated as the inertial frame) to Earth-fixed
(ECEF) coordinates via Greenwich mean sidereal time, and ECEF to WGS-84
geodetic longitude / latitude / height.

All functions are stateless and safe to call from any thread.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

import numpy as np

from orbit_tracker.constants import (
    TWOPI,
    WGS84_A_KM,
    WGS84_B_KM,
    WGS84_E2,
    WGS84_EP2,
)
from orbit_tracker.timeconv import datetime_to_jd_fr


@dataclass(frozen=True)
class GeodeticPoint:
    """WGS-84 geodetic position. Degrees, and metres above the ellipsoid."""

    longitude: float
    latitude: float
    height: float


def sidereal_time(at: datetime) -> float:
    """
    Greenwich mean sidereal time (IAU 1982 model).

    Args:
        at: Instant (naive values are UTC; UT1 is approximated by UTC)

    Returns:
        GMST in radians, in [0, 2*pi)
    """
    jd, fr = datetime_to_jd_fr(at)
    T = (jd - 2451545.0 + fr) / 36525.0

    gmst_sec = (
        67310.54841 +
        (876600.0 * 3600.0 + 8640184.812866) * T +
        0.093104 * T * T -
        6.2e-6 * T * T * T
    )

    return (gmst_sec % 86400.0) * (TWOPI / 86400.0)


def inertial_to_fixed(position: Sequence[float], gmst: float) -> np.ndarray:
    """
    Rotate an inertial position by -gmst about the polar axis.

    Args:
        position: TEME position [x, y, z] (any length unit)
        gmst: Greenwich sidereal angle in radians

    Returns:
        ECEF position in the same unit
    """
    cos_g = math.cos(gmst)
    sin_g = math.sin(gmst)
    x, y, z = position

    return np.array([
        cos_g * x + sin_g * y,
        -sin_g * x + cos_g * y,
        z,
    ])


def fixed_to_geodetic(position: Sequence[float]) -> GeodeticPoint:
    """
    ECEF to WGS-84 geodetic conversion using Bowring's method.

    Bowring's first step is already sub-millimetre for LEO heights; two
    further refinements cover high orbits.

    Args:
        position: ECEF position [x, y, z] (km)

    Returns:
        GeodeticPoint with height in metres
    """
    a = WGS84_A_KM
    b = WGS84_B_KM
    e2 = WGS84_E2
    ep2 = WGS84_EP2

    x, y, z = (float(c) for c in position)
    lon = math.atan2(y, x)
    p = math.hypot(x, y)

    # Polar axis
    if p < 1e-10:
        lat = math.pi / 2.0 if z >= 0 else -math.pi / 2.0
        return GeodeticPoint(math.degrees(lon), math.degrees(lat), (abs(z) - b) * 1000.0)

    # Reduced latitude
    beta = math.atan2(z * a, p * b)
    for _ in range(3):
        sin_b = math.sin(beta)
        cos_b = math.cos(beta)
        lat = math.atan2(
            z + ep2 * b * sin_b * sin_b * sin_b,
            p - e2 * a * cos_b * cos_b * cos_b,
        )
        beta = math.atan2(b * math.sin(lat), a * math.cos(lat))

    sin_lat = math.sin(lat)
    cos_lat = math.cos(lat)
    N = a / math.sqrt(1.0 - e2 * sin_lat * sin_lat)

    if abs(cos_lat) > 1e-10:
        h = p / cos_lat - N
    else:
        h = z / sin_lat - N * (1.0 - e2)

    return GeodeticPoint(math.degrees(lon), math.degrees(lat), h * 1000.0)


def geodetic_to_fixed(point: GeodeticPoint) -> np.ndarray:
    """Geodetic point to ECEF position in metres."""
    lat = math.radians(point.latitude)
    lon = math.radians(point.longitude)
    h_km = point.height / 1000.0

    sin_lat = math.sin(lat)
    N = WGS84_A_KM / math.sqrt(1.0 - WGS84_E2 * sin_lat * sin_lat)

    return np.array([
        (N + h_km) * math.cos(lat) * math.cos(lon),
        (N + h_km) * math.cos(lat) * math.sin(lon),
        (N * (1.0 - WGS84_E2) + h_km) * sin_lat,
    ]) * 1000.0
