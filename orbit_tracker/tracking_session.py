"""
Tracking Session

Binds a simulation clock to the propagation pipeline and pushes results
to a render sink.

Lifecycle::

    IDLE --start(tle1, tle2, now)--> TRACKING --stop()--> IDLE

`start` parses before touching any state, so a rejected TLE leaves the
session exactly as it was. `stop` clears everything synchronously: a
`tick` after `stop` emits nothing.

The session is not locked internally; it must be driven from the
thread that owns the render loop.
"""

import logging
import math
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from orbit_tracker.clock import SimulationClock, validate_multiplier
from orbit_tracker.constants import DEFAULT_PERIOD_MINUTES, TWOPI
from orbit_tracker.errors import PropagationError
from orbit_tracker.frames import inertial_to_fixed, sidereal_time
from orbit_tracker.orbit_sampler import PathSample, sample_orbit, sampling_policy
from orbit_tracker.propagator import propagate
from orbit_tracker.render import FrameUpdate, NullRenderSink, RenderSink, marker_pixel_size
from orbit_tracker.timeconv import as_utc, utc_now
from orbit_tracker.tle_parser import OrbitalElements, parse_tle

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Tracking session states"""

    IDLE = "IDLE"
    TRACKING = "TRACKING"


def compute_orbital_period_minutes(elements: OrbitalElements) -> float:
    """
    Orbital period in minutes from the mean motion.

    Falls back to DEFAULT_PERIOD_MINUTES when the result is zero-division,
    non-finite or non-positive.
    """
    revs_per_min = elements.mean_motion_rad_per_min / TWOPI
    try:
        period = 1.0 / revs_per_min
    except ZeroDivisionError:
        period = math.inf

    if math.isfinite(period) and period > 0:
        return period

    logger.warning(
        f"Degenerate mean motion {elements.mean_motion!r} for satellite "
        f"{elements.catalog_number}, using {DEFAULT_PERIOD_MINUTES} minute period"
    )
    return DEFAULT_PERIOD_MINUTES


class TrackingSession:
    """
    Live satellite tracking controller.

    Args:
        clock: Time source with ``now()``, writable ``multiplier`` and
            ``reset(at)`` (default: a new SimulationClock)
        sink: Render sink receiving path, positions and hints
        speed: Initial time multiplier
    """

    def __init__(self, clock=None, sink: Optional[RenderSink] = None, speed: float = 1.0):
        self.clock = clock if clock is not None else SimulationClock()
        self.sink = sink if sink is not None else NullRenderSink()
        self._speed = validate_multiplier(speed)

        self._state = SessionState.IDLE
        self._elements: Optional[OrbitalElements] = None
        self._path: Optional[PathSample] = None
        self._period_minutes: Optional[float] = None
        self._start_time: Optional[datetime] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_tracking(self) -> bool:
        return self._state is SessionState.TRACKING

    @property
    def elements(self) -> Optional[OrbitalElements]:
        return self._elements

    @property
    def path(self) -> Optional[PathSample]:
        return self._path

    @property
    def period_minutes(self) -> Optional[float]:
        return self._period_minutes

    @property
    def start_time(self) -> Optional[datetime]:
        return self._start_time

    @property
    def current_time(self) -> Optional[datetime]:
        if not self.is_tracking:
            return None
        return as_utc(self.clock.now())

    @property
    def speed(self) -> float:
        return self._speed

    def start(self, tle1: str, tle2: str, now: Optional[datetime] = None) -> PathSample:
        """
        Begin (or restart) tracking the satellite described by a TLE pair.

        Args:
            tle1: TLE line 1
            tle2: TLE line 2
            now: Simulation start instant (default: current UTC time)

        Returns:
            The predicted path handed to the render sink

        Raises:
            FormatError, ChecksumError: TLE rejected; session unchanged
        """
        elements = parse_tle(tle1, tle2)
        now = as_utc(now) if now is not None else utc_now()

        period = compute_orbital_period_minutes(elements)
        step, duration = sampling_policy(period)
        path = sample_orbit(elements, now, step, duration)

        if self.is_tracking:
            self.sink.remove_entities()

        self._elements = elements
        self._path = path
        self._period_minutes = period
        self._start_time = now

        self.clock.reset(now)
        self.clock.multiplier = self._speed
        self._state = SessionState.TRACKING

        logger.info(
            f"Tracking satellite {elements.catalog_number} from {now.isoformat()}: "
            f"period {period:.2f} min, {len(path)} path points "
            f"(step {step}s over {duration}s)"
        )

        self.sink.show_path(path)
        self.tick()
        return path

    def stop(self) -> None:
        """Stop tracking and remove render entities. No-op when idle."""
        if not self.is_tracking:
            return

        catalog_number = self._elements.catalog_number
        self._elements = None
        self._path = None
        self._period_minutes = None
        self._start_time = None
        self._state = SessionState.IDLE

        self.sink.remove_entities()
        logger.info(f"Stopped tracking satellite {catalog_number}")

    def set_speed(self, multiplier: float) -> None:
        """
        Update the time multiplier. Forwarded to the clock in either state;
        the predicted path is not re-sampled.
        """
        self._speed = validate_multiplier(multiplier)
        self.clock.multiplier = self._speed
        logger.debug(f"Speed multiplier set to {self._speed}")

    def tick(self, camera_position: Optional[Sequence[float]] = None) -> Optional[FrameUpdate]:
        """
        Per-frame update driven by the render loop.

        Args:
            camera_position: Camera ECEF position in metres, used for the
                marker size hint

        Returns:
            FrameUpdate (position None when propagation failed this
            frame), or None while idle
        """
        if not self.is_tracking:
            return None

        now = as_utc(self.clock.now())
        try:
            state = propagate(self._elements, now)
        except PropagationError as e:
            update = FrameUpdate(time=now, error=str(e))
            logger.debug(f"No position at {now.isoformat()}: {e}")
            self.sink.update_position(update)
            return update

        ecef_m = inertial_to_fixed(state.position, sidereal_time(now)) * 1000.0
        position = tuple(float(c) for c in ecef_m)

        marker_size = None
        if camera_position is not None:
            distance = float(np.linalg.norm(np.asarray(camera_position, dtype=float) - ecef_m))
            marker_size = marker_pixel_size(distance)

        update = FrameUpdate(time=now, position=position, marker_size=marker_size)
        self.sink.update_position(update)
        if marker_size is not None:
            self.sink.update_marker_size(marker_size)

        return update
