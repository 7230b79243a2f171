"""Moon rise and set search, horizontal coordinates and phase."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import List, Literal, Optional, Tuple, Union

from .angles import normalize_degrees
from .lunar import MOON_APPARENT_RADIUS, BodyPosition, interpolate, moon_position
from .models import Observer
from .timescale import julian_day, julian_day_since_j2000, lmst, local_date

__all__ = [
    "MoonTransitError",
    "NoTransit",
    "TransitEvent",
    "moon_transit_event",
    "riseset",
    "moonrise",
    "moonset",
    "azimuth",
    "elevation",
    "zenith",
    "moon_phase",
]

LOGGER = logging.getLogger(__name__)

SIDEREAL_RATE = 1.0027379097096138907193594760917  # Sidereal days per solar day.
PARALLAX_FACTOR = 41.685  # Horizontal parallax in degrees times distance in Earth radii.
SYNODIC_SCALE_DAYS = 28.0


class MoonTransitError(ValueError):
    """Raised when the Moon does not rise (or set) during the searched day."""


@dataclass(frozen=True)
class NoTransit:
    """No horizon crossing in the hour; carries the altitude function at its end."""

    parallax: float


@dataclass(frozen=True)
class TransitEvent:
    """A horizon crossing found within one hour of the scan."""

    kind: Literal["rise", "set"]
    offset: timedelta
    azimuth: float
    distance: float


TransitOutcome = Union[NoTransit, TransitEvent]


def moon_transit_event(
    hour: float,
    lmst_degrees: float,
    latitude: float,
    distance: float,
    window: List[BodyPosition],
) -> TransitOutcome:
    """Test one hour of the scan for a horizon crossing.

    Parameters
    ----------
    hour:
        Hour of the scan at the start of the window.
    lmst_degrees:
        Local mean sidereal time at the start of the scan.
    latitude:
        Observer latitude in degrees.
    distance:
        Moon distance in Earth radii, used for the parallax term.
    window:
        Three positions for the start, middle and end of the hour. Slots 0
        and 2 must hold right ascension and declination; the altitude
        function is written into the ``distance`` fields.

    Returns
    -------
    NoTransit or TransitEvent
    """

    mst = math.radians(lmst_degrees)
    k1 = math.radians(15.0 * SIDEREAL_RATE)

    if window[2].right_ascension < window[0].right_ascension:
        window[2].right_ascension += 2.0 * math.pi

    ha0 = mst - window[0].right_ascension + hour * k1
    ha2 = mst - window[2].right_ascension + hour * k1 + k1
    ha1 = (ha0 + ha2) / 2.0

    window[1].declination = (window[2].declination + window[0].declination) / 2.0

    sl = math.sin(math.radians(latitude))
    cl = math.cos(math.radians(latitude))

    z = math.cos(math.radians(90.0 + MOON_APPARENT_RADIUS - PARALLAX_FACTOR / distance))

    def altitude(position: BodyPosition, ha: float) -> float:
        return sl * math.sin(position.declination) + cl * math.cos(position.declination) * math.cos(ha) - z

    if hour == 0:
        window[0].distance = altitude(window[0], ha0)
    window[2].distance = altitude(window[2], ha2)

    g0 = window[0].distance
    g2 = window[2].distance
    if math.copysign(1.0, g0) == math.copysign(1.0, g2):
        return NoTransit(g2)

    window[1].distance = altitude(window[1], ha1)
    g1 = window[1].distance

    a = 2.0 * g2 - 4.0 * g1 + 2.0 * g0
    b = 4.0 * g1 - 3.0 * g0 - g2

    if a == 0.0:
        if b == 0.0:
            return NoTransit(g2)
        e = -g0 / b
    else:
        discriminant = b * b - 4.0 * a * g0
        if discriminant < 0.0:
            return NoTransit(g2)
        discriminant = math.sqrt(discriminant)
        e = (-b + discriminant) / (2.0 * a)
        if e > 1.0 or e < 0.0:
            e = (-b - discriminant) / (2.0 * a)

    # Half a minute is added before truncating to whole minutes.
    event_hours = hour + e + 1.0 / 120.0
    whole_hours = int(event_hours)
    minutes = int((event_hours - whole_hours) * 60.0)

    sd = math.sin(window[1].declination)
    cd = math.cos(window[1].declination)
    ha = ha0 + e * (ha2 - ha0)
    sh = math.sin(ha)
    ch = math.cos(ha)
    x = cl * sd - sl * cd * ch
    y = -cd * sh
    az = normalize_degrees(math.degrees(math.atan2(y, x)))

    if g0 < 0.0 < g2:
        kind: Literal["rise", "set"] = "rise"
    elif g0 > 0.0 > g2:
        kind = "set"
    else:
        return NoTransit(g2)

    # Crossings late in hour 23 can round up past the end of the scan.
    return TransitEvent(kind, timedelta(hours=whole_hours, minutes=minutes), az, g2)


def _keep_candidate(
    kept: datetime,
    candidate: datetime,
    complementary: Optional[datetime],
    reference: datetime,
) -> bool:
    """Whether *candidate* should replace the *kept* event of the same kind."""

    kept_offset = (kept - reference).total_seconds()
    candidate_offset = (candidate - reference).total_seconds()
    kept_sign = math.copysign(1.0, kept_offset)

    if kept_sign == math.copysign(1.0, candidate_offset):
        return abs(kept_offset) > abs(candidate_offset)
    if complementary is None:
        return False
    complementary_offset = (complementary - reference).total_seconds()
    return kept_sign == math.copysign(1.0, complementary_offset)


def riseset(
    day: date, observer: Observer, tz: tzinfo = UTC
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Scan the 24 hours from midnight of *day* in *tz* for moonrise and moonset.

    Parameters
    ----------
    day:
        Civil date to scan.
    observer:
        Where the Moon is observed from.
    tz:
        Time zone whose midnight starts the scan.

    Returns
    -------
    tuple
        ``(rise, set)`` as UTC datetimes, either of which may be ``None``.
        An event in the last minute of the scan can fall just after it.
    """

    start = datetime.combine(day, time(), tzinfo=tz).astimezone(UTC)
    jd2000 = julian_day_since_j2000(start)
    t0 = lmst(start, observer.longitude)

    samples = [moon_position(jd2000 + 0.5 * index) for index in range(3)]
    for index in range(1, 3):
        if samples[index].right_ascension <= samples[index - 1].right_ascension:
            samples[index].right_ascension += 2.0 * math.pi

    window = [
        BodyPosition(samples[0].right_ascension, samples[0].declination, samples[0].distance),
        BodyPosition(),
        BodyPosition(),
    ]

    rise_time: Optional[datetime] = None
    set_time: Optional[datetime] = None

    for hour in range(24):
        fraction = (hour + 1) / 24.0
        window[2].right_ascension = interpolate(
            samples[0].right_ascension,
            samples[1].right_ascension,
            samples[2].right_ascension,
            fraction,
        )
        window[2].declination = interpolate(
            samples[0].declination, samples[1].declination, samples[2].declination, fraction
        )

        outcome = moon_transit_event(hour, t0, observer.latitude, samples[1].distance, window)
        if isinstance(outcome, NoTransit):
            window[2].distance = outcome.parallax
        else:
            event_time = start + outcome.offset
            query_time = start + timedelta(hours=hour)
            LOGGER.debug(
                json.dumps(
                    {
                        "event": "lunar_event_candidate",
                        "kind": outcome.kind,
                        "time": event_time.isoformat(),
                        "azimuth": outcome.azimuth,
                    }
                )
            )
            if outcome.kind == "rise":
                if rise_time is None:
                    rise_time = event_time
                elif _keep_candidate(rise_time, event_time, set_time, query_time):
                    LOGGER.debug(
                        json.dumps(
                            {
                                "event": "lunar_event_replaced",
                                "kind": "rise",
                                "previous": rise_time.isoformat(),
                                "time": event_time.isoformat(),
                            }
                        )
                    )
                    rise_time = event_time
            else:
                if set_time is None:
                    set_time = event_time
                elif _keep_candidate(set_time, event_time, rise_time, query_time):
                    LOGGER.debug(
                        json.dumps(
                            {
                                "event": "lunar_event_replaced",
                                "kind": "set",
                                "previous": set_time.isoformat(),
                                "time": event_time.isoformat(),
                            }
                        )
                    )
                    set_time = event_time

        window[0] = window[2]
        window[2] = BodyPosition(distance=window[0].distance)

    return rise_time, set_time


def _event_on_date(
    observer: Observer, day: date, tz: tzinfo, kind: Literal["rise", "set"]
) -> Optional[datetime]:
    index = 0 if kind == "rise" else 1
    found = riseset(day, observer, tz)[index]
    if found is None:
        verb = "rises" if kind == "rise" else "sets"
        raise MoonTransitError(f"Moon never {verb} on this date, at this location")

    result = found.astimezone(tz)
    if result.date() == day:
        return result

    shift = -1 if result.date() > day else 1
    LOGGER.debug(
        json.dumps(
            {
                "event": "moon_transit_retry",
                "kind": kind,
                "date": day.isoformat(),
                "found": result.isoformat(),
                "shift_days": shift,
            }
        )
    )
    retry = riseset(day + timedelta(days=shift), observer, tz)[index]
    if retry is None:
        return None
    result = retry.astimezone(tz)
    if result.date() != day:
        return None
    return result


def moonrise(
    observer: Observer, day: Optional[date] = None, tz: tzinfo = UTC
) -> Optional[datetime]:
    """Time the Moon rises on *day* in *tz*.

    Returns
    -------
    datetime or None
        ``None`` when the nearest rise falls on another local date.

    Raises
    ------
    MoonTransitError
        If no rise is found during the scanned local day.
    """

    day = local_date(day, tz)
    return _event_on_date(observer, day, tz, "rise")


def moonset(
    observer: Observer, day: Optional[date] = None, tz: tzinfo = UTC
) -> Optional[datetime]:
    """Time the Moon sets on *day* in *tz*.

    Returns
    -------
    datetime or None
        ``None`` when the nearest set falls on another local date.

    Raises
    ------
    MoonTransitError
        If no set is found during the scanned local day.
    """

    day = local_date(day, tz)
    return _event_on_date(observer, day, tz, "set")


def _horizontal(observer: Observer, at: datetime) -> Tuple[float, float, float]:
    """Return the ``(x, y, z)`` horizon-frame direction of the Moon."""

    if at.tzinfo is None:
        at = at.replace(tzinfo=UTC)
    jd2000 = julian_day_since_j2000(at)
    position = moon_position(jd2000)
    hourangle = math.radians(lmst(at, observer.longitude)) - position.right_ascension

    sh = math.sin(hourangle)
    ch = math.cos(hourangle)
    sd = math.sin(position.declination)
    cd = math.cos(position.declination)
    sl = math.sin(math.radians(observer.latitude))
    cl = math.cos(math.radians(observer.latitude))

    x = -ch * cd * sl + sd * cl
    y = -sh * cd
    z = ch * cd * cl + sd * sl
    return x, y, z


def azimuth(observer: Observer, at: datetime) -> float:
    """Azimuth of the Moon in degrees clockwise from north."""

    x, y, _ = _horizontal(observer, at)
    return normalize_degrees(math.degrees(math.atan2(y, x)))


def elevation(observer: Observer, at: datetime) -> float:
    """Geocentric elevation of the Moon in degrees."""

    x, y, z = _horizontal(observer, at)
    return math.degrees(math.atan2(z, math.hypot(x, y)))


def zenith(observer: Observer, at: datetime) -> float:
    return 90.0 - elevation(observer, at)


def moon_phase(day: Optional[date] = None) -> float:
    """Age of the Moon in days on a 28 day scale.

    ======  =================
    0       New moon
    7       First quarter
    14      Full moon
    21      Last quarter
    ======  =================
    """

    if day is None:
        day = datetime.now(UTC).date()
    jd = julian_day(local_date(day, UTC))
    dt = (jd - 2382148) ** 2 / (41048480 * 86400)
    t = (jd + dt - 2451545.0) / 36525
    t2 = t * t
    t3 = t2 * t

    d = math.radians(normalize_degrees(297.85 + 445267.1115 * t - 0.0016300 * t2 + t3 / 545868))
    m = math.radians(normalize_degrees(357.53 + 35999.0503 * t))
    m1 = math.radians(
        normalize_degrees(134.96 + 477198.8676 * t + 0.0089970 * t2 + t3 / 69699)
    )

    elongation = math.degrees(d) + 6.29 * math.sin(m1)
    elongation -= 2.10 * math.sin(m)
    elongation += 1.27 * math.sin(2 * d - m1)
    elongation += 0.66 * math.sin(2 * d)
    elongation = int(normalize_degrees(elongation))

    return ((elongation + 6.43) / 360) * SYNODIC_SCALE_DAYS
