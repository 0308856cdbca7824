"""
Physical constants and tracking defaults.

WGS-84 ellipsoid parameters are used for geodetic conversion; SGP4 itself
runs on the WGS-72 constants built into the sgp4 library.
"""

import math

TWOPI: float = 2.0 * math.pi
MINUTES_PER_DAY: float = 1440.0

# WGS-84 ellipsoid
WGS84_A_KM: float = 6378.137  # Equatorial radius (km)
WGS84_F: float = 1.0 / 298.257223563  # Flattening
WGS84_B_KM: float = WGS84_A_KM * (1.0 - WGS84_F)  # Polar radius (km)
WGS84_E2: float = 2.0 * WGS84_F - WGS84_F * WGS84_F  # First eccentricity squared
WGS84_EP2: float = WGS84_E2 / (1.0 - WGS84_E2)  # Second eccentricity squared

# SGP4 switches to the SDP4 deep-space branch at this period
DEEP_SPACE_PERIOD_MINUTES: float = 225.0

# Orbital period used when mean motion is degenerate
DEFAULT_PERIOD_MINUTES: float = 90.0

# Orbit sampler defaults (one ~90 minute LEO revolution at 1 minute steps)
DEFAULT_STEP_SECONDS: float = 60.0
DEFAULT_DURATION_SECONDS: float = 5400.0

# Period-derived path sampling policy
MIN_PATH_DURATION_SECONDS: int = 600
MIN_PATH_STEP_SECONDS: int = 5
TARGET_PATH_SAMPLES: int = 240

# Marker size hint (pixels) against camera distance (metres)
MARKER_BASE_PIXELS: float = 12.0
MARKER_REFERENCE_DISTANCE_M: float = 1_000_000.0
MARKER_MIN_PIXELS: float = 6.0
MARKER_MAX_PIXELS: float = 20.0
