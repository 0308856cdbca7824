"""
Satellite Orbit Tracking Package

Orbital state engine for live satellite tracking from TLE data.

Modules:
    tle_parser: TLE validation and decoding into OrbitalElements
    propagator: SGP4/SDP4 propagation via the sgp4 library
    frames: TEME to ECEF to geodetic transformations
    orbit_sampler: Predicted path sampling
    tracking_session: Clock-driven tracking state machine
    clock: Reference simulation clock
    render: Render sink interface and marker size hint

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

from orbit_tracker.clock import SimulationClock
from orbit_tracker.errors import (
    ChecksumError,
    DecayError,
    FormatError,
    OrbitTrackerError,
    ParseError,
    PropagationError,
)
from orbit_tracker.frames import (
    GeodeticPoint,
    fixed_to_geodetic,
    geodetic_to_fixed,
    inertial_to_fixed,
    sidereal_time,
)
from orbit_tracker.orbit_sampler import PathSample, sample_orbit, sampling_policy
from orbit_tracker.propagator import StateVector, propagate
from orbit_tracker.render import FrameUpdate, NullRenderSink, RenderSink, marker_pixel_size
from orbit_tracker.tle_parser import OrbitalElements, TLEParser, parse_tle
from orbit_tracker.tracking_session import (
    SessionState,
    TrackingSession,
    compute_orbital_period_minutes,
)

__version__ = "1.0.0"
