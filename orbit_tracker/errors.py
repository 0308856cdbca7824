"""
Exception Hierarchy

Errors raised by the orbital state engine.

Parse errors (`FormatError`, `ChecksumError`) are surfaced to whoever
submitted the TLE. Propagation errors are raised per instant; callers
decide whether to skip the instant (`PropagationError`) or stop
(`DecayError`).
"""

from datetime import datetime
from typing import Optional


class OrbitTrackerError(Exception):
    """Base class for all orbit tracker errors."""


class ParseError(OrbitTrackerError, ValueError):
    """TLE text could not be decoded into orbital elements."""


class FormatError(ParseError):
    """Structurally malformed TLE line (length, prefix, catalog, field)."""


class ChecksumError(ParseError):
    """Checksum digit in column 69 does not match the line contents."""

    def __init__(self, line_number: int, expected: int, actual: int):
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Line {line_number} checksum mismatch: "
            f"computed {expected}, found {actual}"
        )


class PropagationError(OrbitTrackerError, RuntimeError):
    """SGP4 could not produce a state at a specific instant."""

    def __init__(self, message: str, error_code: int = 0,
                 time: Optional[datetime] = None):
        self.error_code = error_code
        self.time = time
        super().__init__(message)


class DecayError(PropagationError):
    """The orbit has decayed; no state exists at or beyond this instant."""
