"""The 24 solar terms (jieqi) from the Sun's apparent ecliptic longitude."""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta
from typing import Optional, Tuple

from .angles import normalize_degrees
from .solar import sun_apparent_long
from .timescale import julian_day, julian_day_to_century

__all__ = [
    "SOLAR_TERMS",
    "TROPICAL_YEAR_DAYS",
    "current_solar_term",
    "days_until_next_solar_term",
    "next_solar_term",
    "month_of_current_solar_term",
    "solar_term_name",
]

TROPICAL_YEAR_DAYS = 365.242189
DAILY_MOTION = 360.0 / TROPICAL_YEAR_DAYS  # Mean solar motion in degrees per day.
TERM_SPAN = 15.0
_BOUNDARY_EPSILON = 1e-7

# (code, name, apparent longitude in degrees), starting at the March equinox.
SOLAR_TERMS: Tuple[Tuple[str, str, float], ...] = (
    ("Z2", "春分", 0.0),
    ("J3", "清明", 15.0),
    ("Z3", "谷雨", 30.0),
    ("J4", "立夏", 45.0),
    ("Z4", "小满", 60.0),
    ("J5", "芒种", 75.0),
    ("Z5", "夏至", 90.0),
    ("J6", "小暑", 105.0),
    ("Z6", "大暑", 120.0),
    ("J7", "立秋", 135.0),
    ("Z7", "处暑", 150.0),
    ("J8", "白露", 165.0),
    ("Z8", "秋分", 180.0),
    ("J9", "寒露", 195.0),
    ("Z9", "霜降", 210.0),
    ("J10", "立冬", 225.0),
    ("Z10", "小雪", 240.0),
    ("J11", "大雪", 255.0),
    ("Z11", "冬至", 270.0),
    ("J12", "小寒", 285.0),
    ("Z12", "大寒", 300.0),
    ("J1", "立春", 315.0),
    ("Z1", "雨水", 330.0),
    ("J2", "惊蛰", 345.0),
)

# Gregorian month in which each term index usually falls.
_TERM_MONTHS = (3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8, 9, 9, 10, 10, 11, 11, 12, 12, 1, 1, 2, 2, 3)


def _now(at: Optional[datetime]) -> datetime:
    if at is None:
        return datetime.now(UTC)
    if at.tzinfo is None:
        return at.replace(tzinfo=UTC)
    return at


def _apparent_longitude(at: datetime) -> float:
    jc = julian_day_to_century(julian_day(at))
    return normalize_degrees(sun_apparent_long(jc))


def current_solar_term(at: Optional[datetime] = None) -> float:
    """Fractional solar term index at *at*.

    The value lies in ``[0.5, 24.5)``; its integer part names the term whose
    longitude is nearest, so ``floor(value) % 24`` indexes :data:`SOLAR_TERMS`.
    Naive datetimes are taken as UTC.
    """

    return (_apparent_longitude(_now(at)) + TERM_SPAN / 2.0) / TERM_SPAN


def days_until_next_solar_term(at: Optional[datetime] = None) -> float:
    """Approximate days until the next boundary of :func:`current_solar_term`.

    Parameters
    ----------
    at:
        Reference instant, ``now`` when omitted.

    Returns
    -------
    float
        Days in ``(0, 15.3]`` computed with the mean solar motion.
    """

    longitude = _apparent_longitude(_now(at))
    offset = longitude + TERM_SPAN / 2.0
    term_value = offset / TERM_SPAN

    if abs(math.fmod(offset, TERM_SPAN)) < _BOUNDARY_EPSILON:
        next_index = term_value + 1.0
    else:
        next_index = math.ceil(term_value)

    boundary = normalize_degrees(TERM_SPAN * next_index - TERM_SPAN / 2.0)
    difference = boundary - longitude
    if difference < 0:
        difference += 360.0
    return difference / DAILY_MOTION


def next_solar_term(at: Optional[datetime] = None, iterations: int = 5) -> datetime:
    """Instant the Sun next reaches a multiple of 15 degrees of longitude.

    Parameters
    ----------
    at:
        Start of the search, ``now`` when omitted. Naive values are UTC.
    iterations:
        Newton refinement steps after the mean-motion estimate.

    Returns
    -------
    datetime
        In the time zone of *at*.
    """

    start = _now(at)
    longitude = _apparent_longitude(start)
    target = math.fmod((math.floor(longitude / TERM_SPAN) + 1.0) * TERM_SPAN, 360.0)

    estimate = math.fmod(target - longitude + 360.0, 360.0) / DAILY_MOTION
    moment = start + timedelta(days=estimate)

    for _ in range(iterations):
        delta = math.remainder(_apparent_longitude(moment) - target, 360.0)
        moment = moment + timedelta(days=-delta / DAILY_MOTION)

    return moment.astimezone(start.tzinfo)


def month_of_current_solar_term(at: Optional[datetime] = None) -> int:
    """Gregorian month (1-12) associated with the current solar term."""

    index = int(math.floor(current_solar_term(at))) % len(SOLAR_TERMS)
    return _TERM_MONTHS[index]


def solar_term_name(index: int) -> str:
    """Chinese name of the term at *index*, ``0`` being the March equinox."""

    return SOLAR_TERMS[index % len(SOLAR_TERMS)][1]
