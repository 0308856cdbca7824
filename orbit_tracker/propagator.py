"""
SGP4 Propagation

Propagates `OrbitalElements` to an instant using the proven sgp4 library
(Vallado et al. 2006). The library picks the near-earth (SGP4) or
deep-space (SDP4) branch from the orbital period on initialisation.

Error codes reported by ``Satrec.sgp4`` are mapped onto the package's
exception hierarchy: decay codes raise `DecayError`, everything else
raises `PropagationError`.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Tuple

from sgp4.api import Satrec

from orbit_tracker.errors import DecayError, PropagationError
from orbit_tracker.timeconv import as_utc, datetime_to_jd_fr
from orbit_tracker.tle_parser import OrbitalElements

logger = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]

# SGP4 error code meanings
SGP4_ERROR_CODES = {
    0: "No error",
    1: "Mean eccentricity < 0.0 or > 1.0",
    2: "Mean motion < 0.0",
    3: "Perturbed eccentricity < 0.0 or > 1.0",
    4: "Semi-latus rectum < 0.0",
    5: "Epoch elements are sub-orbital",
    6: "Satellite has decayed",
}

DECAY_ERROR_CODES = frozenset({5, 6})


@dataclass(frozen=True)
class StateVector:
    """TEME position (km) and velocity (km/s) at `time`."""

    time: datetime
    position: Vector3
    velocity: Vector3


@lru_cache(maxsize=32)
def _load_satrec(line1: str, line2: str) -> Satrec:
    return Satrec.twoline2rv(line1, line2)


def propagate(elements: OrbitalElements, at: datetime) -> StateVector:
    """
    Propagate orbital elements to an instant.

    Args:
        elements: Parsed orbital elements
        at: Target time (naive values are UTC)

    Returns:
        StateVector in the TEME frame

    Raises:
        DecayError: SGP4 reports the satellite has decayed
        PropagationError: Any other SGP4 failure at this instant
    """
    at = as_utc(at)
    satellite = _load_satrec(elements.line1, elements.line2)

    jd, fr = datetime_to_jd_fr(at)
    error, position, velocity = satellite.sgp4(jd, fr)

    if error != 0:
        message = SGP4_ERROR_CODES.get(error, f"Unknown error code {error}")
        logger.debug(
            f"SGP4 error {error} for satellite {elements.catalog_number} "
            f"at {at.isoformat()}: {message}"
        )
        if error in DECAY_ERROR_CODES:
            raise DecayError(f"SGP4 error {error}: {message}", error, at)
        raise PropagationError(f"SGP4 error {error}: {message}", error, at)

    if not all(math.isfinite(c) for c in (*position, *velocity)):
        raise PropagationError("SGP4 returned a non-finite state", 0, at)

    return StateVector(time=at, position=tuple(position), velocity=tuple(velocity))
