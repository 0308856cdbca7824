"""
Orbit Tracker Configuration

Reference TLE data and runtime defaults for the demonstration and tests.

Reference TLE Data:
    ISS element set used by the tracker UI as its default input.

    IMPORTANT: Update this TLE data periodically for accuracy.
    - Low Earth Orbit (LEO) satellites: Update weekly
    - Medium Earth Orbit (MEO): Update monthly
    - Geostationary (GEO): Update quarterly

    Current TLE epoch: 2024-08-22 (day 235.53307911)

    Sources for updated TLEs:
    - Space-Track.org (requires free registration)
    - CelesTrak.org (public access)

Environment:
    ORBIT_TRACKER_LOG_LEVEL: logging level name for the demo (default INFO)
"""

import os
from typing import Dict, Any

from orbit_tracker.constants import (
    DEFAULT_DURATION_SECONDS,
    DEFAULT_PERIOD_MINUTES,
    DEFAULT_STEP_SECONDS,
)

# Reference ISS TLE (checksum digits recomputed; the UI default carried
# stale ones)
REFERENCE_ISS_TLE: Dict[str, Any] = {
    'name': 'ISS (ZARYA)',
    'norad_id': 25544,
    'line1': '1 25544U 98067A   24235.53307911  .00018417  00000+0  33452-3 0  9995',
    'line2': '2 25544  51.6443  40.1893 0005352  58.1370  58.2267 15.50206503447348',
    'epoch': '2024-08-22T12:47:38Z',
    'mean_motion': 15.50206503,
    'inclination': 51.6443,
    'eccentricity': 0.0005352
}

# Speed slider range in the reference UI
DEFAULT_SPEED: float = 1.0
MIN_UI_SPEED: float = 0.1
MAX_UI_SPEED: float = 10.0

# Demo render loop
DEFAULT_FRAMES: int = 10
DEFAULT_FRAME_SECONDS: float = 60.0

LOG_LEVEL: str = os.environ.get('ORBIT_TRACKER_LOG_LEVEL', 'INFO').upper()

__all__ = [
    'REFERENCE_ISS_TLE',
    'DEFAULT_SPEED',
    'MIN_UI_SPEED',
    'MAX_UI_SPEED',
    'DEFAULT_FRAMES',
    'DEFAULT_FRAME_SECONDS',
    'DEFAULT_PERIOD_MINUTES',
    'DEFAULT_STEP_SECONDS',
    'DEFAULT_DURATION_SECONDS',
    'LOG_LEVEL',
]
