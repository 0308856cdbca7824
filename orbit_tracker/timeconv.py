"""
Time conversion helpers shared by the parser, propagator and frames.
"""

from datetime import datetime, timedelta, timezone
from typing import Tuple

from sgp4.api import jday


def as_utc(dt: datetime) -> datetime:
    """Return `dt` as an aware UTC datetime. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def datetime_to_jd_fr(dt: datetime) -> Tuple[float, float]:
    """
    Convert datetime to Julian date and fraction.

    Args:
        dt: Datetime object (naive values are UTC)

    Returns:
        Tuple of (julian_day, fraction) as expected by ``Satrec.sgp4``
    """
    dt = as_utc(dt)
    second = dt.second + dt.microsecond / 1e6
    return jday(dt.year, dt.month, dt.day, dt.hour, dt.minute, second)


def epoch_to_datetime(epoch_year: int, epoch_days: float) -> datetime:
    """
    Convert TLE epoch to datetime.

    Args:
        epoch_year: Two-digit year from the TLE (57-99 -> 19xx, else 20xx)
        epoch_days: Day of year with fractional part (day 1 is Jan 1)

    Returns:
        Datetime object in UTC
    """
    year = 1900 + epoch_year if epoch_year >= 57 else 2000 + epoch_year
    return datetime(year, 1, 1, tzinfo=timezone.utc) + timedelta(days=epoch_days - 1.0)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
