"""
Logging Configuration

Centralized logging configuration for the orbit tracker.

Library modules under ``orbit_tracker`` never configure handlers; they log
through ``logging.getLogger(__name__)`` and so sit under the
``orbit_tracker`` logger. Field decoding failures and skipped path
samples are logged at DEBUG. Session start and stop are INFO; orbital
decay and period fallbacks are WARNING. Entry points call
`configure_logging` once.

Usage:
    from logging_config import configure_logging, get_logger

    # Quiet application output, full detail from the tracking engine
    configure_logging(logging.WARNING, package_level=logging.DEBUG)

    logger = get_logger(__name__)
    logger.warning("Reference TLE is more than two weeks old")
"""

import logging
import sys
from typing import Optional, Union

# Default logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Parent of every library module logger
PACKAGE_LOGGER = "orbit_tracker"


def configure_logging(level: Union[int, str] = logging.INFO,
                      log_file: Optional[str] = None,
                      package_level: Union[int, str, None] = None) -> None:
    """
    Configure logging for the entire application.

    Replaces any handlers installed by an earlier call, so a CLI can
    reconfigure after parsing its arguments.

    Parameters
    ----------
    level : int or str
        Root logging level (e.g., logging.DEBUG or "DEBUG")
    log_file : str, optional
        Path to log file. If None, logs only to console.
    package_level : int or str, optional
        Level for the ``orbit_tracker`` loggers. If None they follow the
        root level.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    logging.getLogger(PACKAGE_LOGGER).setLevel(
        logging.NOTSET if package_level is None else package_level
    )


def get_logger(name: str) -> logging.Logger:
    """Logger for an application module; library modules use logging.getLogger."""
    return logging.getLogger(name)
