"""
Render Sink Interface

The tracking session pushes its output to a render sink: the predicted
path when tracking starts, one `FrameUpdate` per clock tick, a marker
size hint, and a removal signal on stop. Concrete sinks (a 3D globe, a
2D ground-track plot, a test recorder) subclass `RenderSink` and
override what they need.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from orbit_tracker.constants import (
    MARKER_BASE_PIXELS,
    MARKER_MAX_PIXELS,
    MARKER_MIN_PIXELS,
    MARKER_REFERENCE_DISTANCE_M,
)


@dataclass(frozen=True)
class FrameUpdate:
    """
    Live marker state for one frame.

    `position` is the ECEF position in metres, or None when no state
    could be propagated for this frame (`error` then says why).
    """

    time: datetime
    position: Optional[Tuple[float, float, float]] = None
    marker_size: Optional[float] = None
    error: Optional[str] = None

    @property
    def has_position(self) -> bool:
        return self.position is not None


class RenderSink:
    """Base sink; every hook is a no-op."""

    def show_path(self, path) -> None:
        """Replace the displayed path with a new PathSample."""

    def update_position(self, update: FrameUpdate) -> None:
        """Move (or hide, when update.position is None) the live marker."""

    def update_marker_size(self, pixels: float) -> None:
        """Apply the camera-distance marker size hint."""

    def remove_entities(self) -> None:
        """Remove the path and marker."""


NullRenderSink = RenderSink


def marker_pixel_size(distance: float) -> float:
    """
    Marker size in pixels for a camera-to-marker distance in metres.

    12 px at distance 0, shrinking towards 6 px with distance and capped
    at 20 px. Distances at or below -1e6 m clamp to the maximum.
    """
    denominator = distance + MARKER_REFERENCE_DISTANCE_M
    if denominator <= 0.0:
        return MARKER_MAX_PIXELS

    pixel = MARKER_BASE_PIXELS * (MARKER_REFERENCE_DISTANCE_M / denominator)
    return max(MARKER_MIN_PIXELS, min(MARKER_MAX_PIXELS, pixel))
