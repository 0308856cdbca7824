"""
Orbit Sampler

Builds a predicted ground path by propagating at fixed steps across a
time window and converting each state to geodetic coordinates.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Iterator, Sequence, Tuple

import numpy as np

from orbit_tracker.constants import (
    DEFAULT_DURATION_SECONDS,
    DEFAULT_STEP_SECONDS,
    MIN_PATH_DURATION_SECONDS,
    MIN_PATH_STEP_SECONDS,
    TARGET_PATH_SAMPLES,
)
from orbit_tracker.errors import DecayError, PropagationError
from orbit_tracker.frames import (
    GeodeticPoint,
    fixed_to_geodetic,
    geodetic_to_fixed,
    inertial_to_fixed,
    sidereal_time,
)
from orbit_tracker.propagator import propagate
from orbit_tracker.timeconv import as_utc
from orbit_tracker.tle_parser import OrbitalElements

logger = logging.getLogger(__name__)


class PathSample:
    """Immutable predicted path: geodetic points ordered by increasing time."""

    def __init__(self, times: Sequence[datetime], points: Sequence[GeodeticPoint]):
        if len(times) != len(points):
            raise ValueError("times and points must have the same length")
        if any(t1 >= t2 for t1, t2 in zip(times, times[1:])):
            raise ValueError("path times must be strictly increasing")
        self._times = tuple(times)
        self._points = tuple(points)

    @property
    def times(self) -> Tuple[datetime, ...]:
        return self._times

    @property
    def points(self) -> Tuple[GeodeticPoint, ...]:
        return self._points

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[GeodeticPoint]:
        return iter(self._points)

    def __getitem__(self, index: int) -> GeodeticPoint:
        return self._points[index]

    def __repr__(self) -> str:
        return f"PathSample({len(self)} points)"

    def as_array(self) -> np.ndarray:
        """(N, 3) array of [longitude_deg, latitude_deg, height_m]."""
        if not self._points:
            return np.empty((0, 3))
        return np.array([[p.longitude, p.latitude, p.height] for p in self._points])

    def to_fixed(self) -> np.ndarray:
        """(N, 3) array of ECEF positions in metres, for polyline rendering."""
        if not self._points:
            return np.empty((0, 3))
        return np.array([geodetic_to_fixed(p) for p in self._points])


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def sampling_policy(period_minutes: float) -> Tuple[int, int]:
    """
    Derive path sampling from the orbital period.

    Covers one revolution (at least ten minutes) with roughly
    TARGET_PATH_SAMPLES points, never finer than MIN_PATH_STEP_SECONDS.

    Returns:
        Tuple of (step_seconds, duration_seconds)
    """
    duration = max(MIN_PATH_DURATION_SECONDS, _round_half_up(period_minutes * 60.0))
    step = max(MIN_PATH_STEP_SECONDS, _round_half_up(duration / TARGET_PATH_SAMPLES))
    return step, duration


def sample_orbit(
    elements: OrbitalElements,
    start_time: datetime,
    step_seconds: float = DEFAULT_STEP_SECONDS,
    duration_seconds: float = DEFAULT_DURATION_SECONDS,
) -> PathSample:
    """
    Sample the predicted path over [start_time, start_time + duration].

    Instants where propagation fails transiently are skipped. A decayed
    orbit ends the walk and the points gathered so far are returned.

    Args:
        elements: Parsed orbital elements
        start_time: First sampled instant
        step_seconds: Spacing between samples (> 0)
        duration_seconds: Window length (>= 0)

    Returns:
        PathSample with up to floor(duration / step) + 1 points
    """
    if not (math.isfinite(step_seconds) and step_seconds > 0):
        raise ValueError(f"step_seconds must be positive and finite, got {step_seconds}")
    if not (math.isfinite(duration_seconds) and duration_seconds >= 0):
        raise ValueError(
            f"duration_seconds must be non-negative and finite, got {duration_seconds}"
        )

    start_time = as_utc(start_time)
    count = int(math.floor(duration_seconds / step_seconds)) + 1

    times = []
    points = []
    skipped = 0

    for k in range(count):
        t = start_time + timedelta(seconds=k * step_seconds)
        try:
            state = propagate(elements, t)
        except DecayError as e:
            logger.warning(
                f"Satellite {elements.catalog_number} decayed at {t.isoformat()}, "
                f"path truncated to {len(points)} of {count} points: {e}"
            )
            break
        except PropagationError as e:
            skipped += 1
            logger.debug(f"Skipping path sample at {t.isoformat()}: {e}")
            continue

        ecef = inertial_to_fixed(state.position, sidereal_time(t))
        times.append(t)
        points.append(fixed_to_geodetic(ecef))

    if skipped:
        logger.debug(f"Skipped {skipped} path samples for satellite {elements.catalog_number}")

    return PathSample(times, points)
