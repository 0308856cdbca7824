"""
Orbit Tracker Demonstration

Drives a TrackingSession with a SimulationClock the way a globe viewer's
render loop would:
- TLE parsing and validation
- Predicted path sampling over one revolution
- Per-frame Earth-fixed positions as simulated time advances
- Optional ground-track plot of the path and live marker

Usage:
    python demo.py [--line1 L1 --line2 L2] [--speed X] [--frames N]
                   [--frame-seconds S] [--start ISO] [--plot FILE]
                   [--verbose]

Arguments:
    --speed: Time multiplier forwarded to the clock
    --frames: Number of render frames to simulate
    --frame-seconds: Wall-clock seconds per simulated frame
    --start: Simulation start instant (default: now)
    --plot: Save a ground-track PNG to FILE
    --verbose: Enable debug logging from the tracking engine
"""

import argparse
import logging
import math
from datetime import datetime
from typing import List, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

import config
from logging_config import configure_logging, get_logger
from orbit_tracker import (
    FrameUpdate,
    ParseError,
    PathSample,
    RenderSink,
    SimulationClock,
    TrackingSession,
    fixed_to_geodetic,
)

logger = get_logger(__name__)


class GroundTrackSink(RenderSink):
    """
    Render sink that collects the path and live marker positions and
    draws them as a 2D ground track.
    """

    def __init__(self):
        self.path: Optional[PathSample] = None
        self.markers: List[FrameUpdate] = []
        self.marker_size: Optional[float] = None

    def show_path(self, path: PathSample) -> None:
        self.path = path
        logger.info(f"Path: {len(path)} points")

    def update_position(self, update: FrameUpdate) -> None:
        if not update.has_position:
            logger.warning(f"No position at {update.time.isoformat()}: {update.error}")
            return
        self.markers.append(update)
        x, y, z = update.position
        logger.info(
            f"{update.time.isoformat()}: "
            f"x={x / 1000:9.2f}km y={y / 1000:9.2f}km z={z / 1000:9.2f}km"
        )

    def update_marker_size(self, pixels: float) -> None:
        self.marker_size = pixels

    def remove_entities(self) -> None:
        self.path = None
        self.markers = []

    def save(self, output_file: str, title: str) -> None:
        """Plot path and marker positions over longitude/latitude."""
        fig, ax = plt.subplots(figsize=(12, 6))

        if self.path is not None and len(self.path):
            track = self.path.as_array()
            # Break the line where it wraps across the antimeridian
            lon = track[:, 0].copy()
            lat = track[:, 1]
            wraps = [i for i in range(1, len(lon)) if abs(lon[i] - lon[i - 1]) > 180.0]
            segments = [0] + wraps + [len(lon)]
            for start, end in zip(segments, segments[1:]):
                ax.plot(lon[start:end], lat[start:end], color="gold", linewidth=2)

        if self.markers:
            geodetic = [
                fixed_to_geodetic([c / 1000.0 for c in m.position]) for m in self.markers
            ]
            ax.scatter(
                [g.longitude for g in geodetic],
                [g.latitude for g in geodetic],
                color="black",
                s=self.marker_size or 12,
                zorder=3,
                label="Satellite",
            )
            ax.legend(loc="lower left")

        ax.set_xlim(-180, 180)
        ax.set_ylim(-90, 90)
        ax.set_xlabel("Longitude (deg)")
        ax.set_ylabel("Latitude (deg)")
        ax.set_title(title)
        ax.grid(True, alpha=0.3)

        plt.tight_layout()
        plt.savefig(output_file, dpi=150, bbox_inches="tight")
        logger.info(f"Saved ground track plot to {output_file}")
        plt.close(fig)


def run_tracking(
    line1: str,
    line2: str,
    speed: float,
    frames: int,
    frame_seconds: float,
    sink: GroundTrackSink,
    start: Optional[datetime] = None,
) -> TrackingSession:
    """
    Start tracking and advance the clock through `frames` render frames.

    A camera parked 10 000 km above the sub-satellite point of the first
    frame drives the marker size hint.
    """
    clock = SimulationClock(multiplier=speed)
    session = TrackingSession(clock=clock, sink=sink, speed=speed)
    session.start(line1, line2, start)

    elements = session.elements
    logger.info(f"NORAD ID: {elements.catalog_number}")
    logger.info(f"Epoch: {elements.epoch.isoformat()}")
    logger.info(f"Inclination: {elements.inclination:.4f} degrees")
    logger.info(f"Eccentricity: {elements.eccentricity:.7f}")
    logger.info(f"Mean Motion: {elements.mean_motion:.8f} rev/day")
    logger.info(f"Period: {session.period_minutes:.2f} minutes")

    camera = None
    if sink.markers:
        x, y, z = sink.markers[0].position
        scale = 1.0 + 1.0e7 / math.sqrt(x * x + y * y + z * z)
        camera = (x * scale, y * scale, z * scale)

    for _ in range(frames):
        clock.tick(frame_seconds)
        session.tick(camera_position=camera)

    if sink.marker_size is not None:
        logger.info(f"Marker size hint: {sink.marker_size:.1f} px")

    return session


def main() -> None:
    """Main demonstration entry point."""
    parser = argparse.ArgumentParser(description="Satellite Orbit Tracking Demonstration")
    parser.add_argument("--line1", default=config.REFERENCE_ISS_TLE["line1"], help="TLE line 1")
    parser.add_argument("--line2", default=config.REFERENCE_ISS_TLE["line2"], help="TLE line 2")
    parser.add_argument("--speed", type=float, default=config.DEFAULT_SPEED,
                        help="Simulation time multiplier")
    parser.add_argument("--frames", type=int, default=config.DEFAULT_FRAMES,
                        help="Number of render frames to simulate")
    parser.add_argument("--frame-seconds", type=float, default=config.DEFAULT_FRAME_SECONDS,
                        help="Wall-clock seconds per frame")
    parser.add_argument("--start", type=datetime.fromisoformat,
                        help="Simulation start (ISO 8601, default: now)")
    parser.add_argument("--plot", metavar="FILE", help="Save ground track plot to FILE")
    parser.add_argument("--verbose", action="store_true", help="Enable orbit_tracker debug logging")

    args = parser.parse_args()

    configure_logging(
        level=config.LOG_LEVEL, package_level=logging.DEBUG if args.verbose else None
    )

    logger.info("Satellite Orbit Tracking Demonstration")
    logger.info("=" * 60)

    sink = GroundTrackSink()
    try:
        session = run_tracking(
            args.line1, args.line2, args.speed, args.frames, args.frame_seconds, sink, args.start
        )
    except ParseError as e:
        logger.error(f"Invalid TLE lines: {e}")
        raise SystemExit(1)
    except ValueError as e:
        logger.error(str(e))
        raise SystemExit(2)

    if args.plot:
        sink.save(args.plot, f"Ground track: satellite {session.elements.catalog_number}")

    session.stop()

    logger.info("=" * 60)
    logger.info("Demonstration complete")


if __name__ == "__main__":
    main()
