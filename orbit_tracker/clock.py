"""
Simulation Clock

The tracking session consumes a clock that supplies "current simulated
time", accepts a speed multiplier, and can be reset to a start instant.
Any object providing ``now()``, a writable ``multiplier`` and
``reset(at)`` can be used; `SimulationClock` is the reference
implementation, advanced explicitly by the render loop.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from orbit_tracker.timeconv import as_utc, utc_now

logger = logging.getLogger(__name__)


def validate_multiplier(multiplier: float) -> float:
    """Return `multiplier` as float, or raise ValueError unless positive and finite."""
    try:
        value = float(multiplier)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Speed multiplier must be a number, got {multiplier!r}") from e
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(f"Speed multiplier must be positive and finite, got {multiplier!r}")
    return value


class SimulationClock:
    """
    Unbounded simulation clock.

    Simulated time advances by ``real_seconds * multiplier`` on each
    `tick` while `should_animate` is set.
    """

    def __init__(self, start: Optional[datetime] = None, multiplier: float = 1.0):
        self.current_time = as_utc(start) if start is not None else utc_now()
        self._multiplier = validate_multiplier(multiplier)
        self.should_animate = True

    @property
    def multiplier(self) -> float:
        return self._multiplier

    @multiplier.setter
    def multiplier(self, value: float) -> None:
        self._multiplier = validate_multiplier(value)

    def now(self) -> datetime:
        return self.current_time

    def reset(self, at: datetime) -> None:
        """Jump to `at` and resume animation."""
        self.current_time = as_utc(at)
        self.should_animate = True

    def tick(self, real_seconds: float) -> datetime:
        """Advance by `real_seconds` of wall time and return the new simulated time."""
        if self.should_animate:
            self.current_time += timedelta(seconds=real_seconds * self._multiplier)
        return self.current_time
