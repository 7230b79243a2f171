"""Calendar, Julian Day and sidereal time conversions."""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, tzinfo
from enum import Enum
from typing import NamedTuple, Optional, Union

import erfa

from .angles import normalize_degrees

__all__ = [
    "CalendarKind",
    "CalendarDateTime",
    "J2000",
    "DAYS_PER_CENTURY",
    "day_fraction",
    "calendar_to_julian_day",
    "local_date",
    "julian_day",
    "julian_day_to_calendar",
    "julian_day_to_century",
    "julian_century_to_day",
    "julian_day_since_j2000",
    "modified_julian_day",
    "gmst",
    "lmst",
]

J2000 = float(erfa.DJ00)  # Julian Day of the J2000.0 epoch.
DAYS_PER_CENTURY = float(erfa.DJC)  # Days per Julian century.
SECONDS_PER_DAY = float(erfa.DAYSEC)
MJD_OFFSET = 2400000.5
GREGORIAN_REFORM_JD = 2299161  # First Julian Day number of the Gregorian calendar.

DateLike = Union[date, datetime]


class CalendarKind(str, Enum):
    """Calendar used to interpret a year/month/day triple."""

    GREGORIAN = "gregorian"
    JULIAN = "julian"


class CalendarDateTime(NamedTuple):
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    microsecond: int = 0


def day_fraction(
    hour: float = 0, minute: float = 0, second: float = 0, microsecond: float = 0
) -> float:
    """Return the fraction of a day elapsed at the given time of day."""

    seconds = (hour or 0) * 3600.0 + (minute or 0) * 60.0 + (second or 0)
    seconds += (microsecond or 0) / 1_000_000.0
    return seconds / SECONDS_PER_DAY


def calendar_to_julian_day(
    year: int,
    month: int,
    day: float,
    day_fraction: float = 0.0,
    calendar: CalendarKind = CalendarKind.GREGORIAN,
) -> float:
    """Convert a calendar date into a Julian Day.

    Parameters
    ----------
    year, month, day:
        Calendar date. Astronomical year numbering is used, so 1 BC is year 0.
    day_fraction:
        Fraction of the day elapsed since midnight.
    calendar:
        :attr:`CalendarKind.GREGORIAN` (proleptic before 1582) or
        :attr:`CalendarKind.JULIAN`.

    Returns
    -------
    float
        The Julian Day.
    """

    if month <= 2:
        year -= 1
        month += 12

    if calendar is CalendarKind.GREGORIAN:
        a = math.floor(year / 100)
        b = 2 - a + math.floor(a / 4)
    else:
        b = 0

    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + day_fraction
        + b
        - 1524.5
    )


def local_date(value: Optional[DateLike], tz: tzinfo) -> date:
    """Civil date to search: today in *tz* when omitted, the date part of a datetime."""

    if value is None:
        return datetime.now(tz).date()
    if isinstance(value, datetime):
        return value.date()
    return value


def _as_utc(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value
        return value.astimezone(UTC).replace(tzinfo=None)
    return datetime(value.year, value.month, value.day)


def julian_day(value: DateLike, calendar: CalendarKind = CalendarKind.GREGORIAN) -> float:
    """Julian Day of a :class:`~datetime.date` or :class:`~datetime.datetime`.

    Naive datetimes are taken to be UTC; aware ones are converted to UTC.
    A plain date refers to its UTC midnight.
    """

    moment = _as_utc(value)
    fraction = day_fraction(moment.hour, moment.minute, moment.second, moment.microsecond)
    return calendar_to_julian_day(moment.year, moment.month, moment.day, fraction, calendar)


def julian_day_to_calendar(jd: float) -> CalendarDateTime:
    """Convert a Julian Day back into calendar components.

    Days before JD 2299161 are returned in the Julian calendar, later days in
    the Gregorian calendar. The time of day is rounded to the microsecond.
    """

    z = math.floor(jd + 0.5)
    f = jd + 0.5 - z

    if z < GREGORIAN_REFORM_JD:
        a = z
    else:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.floor(alpha / 4)

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    microseconds = round(f * SECONDS_PER_DAY * 1_000_000)
    if microseconds >= SECONDS_PER_DAY * 1_000_000:
        # Rounding reached the next midnight; recompute from that day.
        return julian_day_to_calendar(z + 0.5)

    seconds, microsecond = divmod(microseconds, 1_000_000)
    hour, seconds = divmod(seconds, 3600)
    minute, second = divmod(seconds, 60)
    return CalendarDateTime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), int(microsecond)
    )


def julian_day_to_century(jd: float) -> float:
    """Julian centuries elapsed since J2000.0."""

    return (jd - J2000) / DAYS_PER_CENTURY


def julian_century_to_day(jc: float) -> float:
    """Inverse of :func:`julian_day_to_century`."""

    return jc * DAYS_PER_CENTURY + J2000


def julian_day_since_j2000(value: DateLike) -> float:
    return julian_day(value) - J2000


def modified_julian_day(value: DateLike) -> float:
    return julian_day(value) - MJD_OFFSET


def gmst(value: DateLike) -> float:
    """Greenwich mean sidereal time in degrees, ``[0, 360)``."""

    jd2000 = julian_day_since_j2000(value)
    t = jd2000 / DAYS_PER_CENTURY
    degrees = (
        280.46061837
        + 360.98564736629 * jd2000
        + 0.000387933 * t * t
        - t * t * t / 38710000.0
    )
    return normalize_degrees(degrees)


def lmst(value: DateLike, longitude: float) -> float:
    """Local mean sidereal time in degrees for an east-positive *longitude*."""

    return normalize_degrees(gmst(value) + longitude)
