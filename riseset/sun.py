"""Solar position at an instant and the iterative solar transit solver."""

from __future__ import annotations

import json
import logging
import math
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import Dict, Optional, Tuple, Union

import numpy as np

from .models import Depression, ObscuredElevation, Observer, SimpleElevation, SunDirection
from .refraction import refraction_at_zenith
from .settings import SolverSettings, load_settings
from .solar import eq_of_time, sun_declination
from .timescale import julian_day, julian_day_to_century, local_date

__all__ = [
    "SunTransitError",
    "SUN_APPARENT_RADIUS",
    "adjust_to_horizon",
    "adjust_to_obscuring_feature",
    "hour_angle",
    "time_of_transit",
    "time_at_elevation",
    "noon",
    "midnight",
    "zenith_and_azimuth",
    "zenith",
    "azimuth",
    "elevation",
    "dawn",
    "sunrise",
    "sunset",
    "dusk",
    "daylight",
    "night",
    "twilight",
    "golden_hour",
    "blue_hour",
    "rahukaalam",
    "sun",
]

LOGGER = logging.getLogger(__name__)

SUN_APPARENT_RADIUS = 32.0 / (60.0 * 2.0)  # Degrees.
EARTH_MEAN_RADIUS_M = 6371000.0  # Mean Earth radius used for the horizon dip.
LATITUDE_LIMIT = 89.8  # Keeps the hour-angle denominator away from zero.
MINUTES_PER_DAY = 1440.0
_DOMAIN_TOLERANCE = 1e-9

# Index into this list with date.weekday() (Monday == 0).
_RAHUKAALAM_OCTANTS = (1, 6, 4, 5, 3, 2, 7)

DepressionLike = Union[Depression, float]


class SunTransitError(ValueError):
    """Raised when the Sun does not cross the requested zenith on a date."""


def _clamped_latitude(latitude: float) -> float:
    return max(-LATITUDE_LIMIT, min(LATITUDE_LIMIT, latitude))


def adjust_to_horizon(elevation: float) -> float:
    """Extra degrees of horizon depression seen from *elevation* meters up."""

    if elevation <= 0:
        return 0.0
    return math.degrees(math.acos(EARTH_MEAN_RADIUS_M / (EARTH_MEAN_RADIUS_M + elevation)))


def adjust_to_obscuring_feature(height: float, distance: float) -> float:
    """Degrees to adjust for a feature *height* meters tall, *distance* meters away."""

    if height == 0.0:
        return 0.0
    sign = -1.0 if height < 0.0 else 1.0
    ratio = abs(height) / math.hypot(height, distance)
    return sign * math.degrees(math.acos(ratio))


def _elevation_adjustment(observer: Observer) -> float:
    elevation_model = observer.elevation
    if isinstance(elevation_model, SimpleElevation):
        return adjust_to_horizon(elevation_model.meters)
    if isinstance(elevation_model, ObscuredElevation):
        return adjust_to_obscuring_feature(elevation_model.height, elevation_model.distance)
    return 0.0


def hour_angle(
    latitude: float, declination: float, zenith: float, direction: SunDirection
) -> float:
    """Hour angle in radians at which the Sun reaches *zenith*.

    Parameters
    ----------
    latitude, declination, zenith:
        Angles in degrees.
    direction:
        :attr:`SunDirection.SETTING` negates the result.

    Returns
    -------
    float
        Hour angle in radians.

    Raises
    ------
    SunTransitError
        If the Sun never reaches *zenith* at this latitude and declination.
    """

    latitude_rad = math.radians(latitude)
    declination_rad = math.radians(declination)
    zenith_rad = math.radians(zenith)

    h = (math.cos(zenith_rad) - math.sin(latitude_rad) * math.sin(declination_rad)) / (
        math.cos(latitude_rad) * math.cos(declination_rad)
    )
    if abs(h) > 1.0 + _DOMAIN_TOLERANCE:
        raise SunTransitError(
            f"Sun never reaches a zenith of {zenith:.4f} degrees at latitude {latitude:.4f}"
        )

    result = math.acos(float(np.clip(h, -1.0, 1.0)))
    if direction is SunDirection.SETTING:
        result = -result
    return result


def _wrap_minutes(offset: float) -> float:
    """Wrap a minute offset from noon into ``(-720, 720]``."""

    while offset <= -MINUTES_PER_DAY / 2:
        offset += MINUTES_PER_DAY
    while offset > MINUTES_PER_DAY / 2:
        offset -= MINUTES_PER_DAY
    return offset


def _resolve(settings: Optional[SolverSettings]) -> SolverSettings:
    return settings if settings is not None else load_settings()


def _minutes_to_datetime(day: date, minutes: float) -> datetime:
    """UTC datetime *minutes* after midnight of *day*; overflow moves the date."""

    return datetime.combine(day, time(), tzinfo=UTC) + timedelta(minutes=minutes)


def time_of_transit(
    observer: Observer,
    day: date,
    zenith: float,
    direction: SunDirection,
    with_refraction: bool = True,
    settings: Optional[SolverSettings] = None,
) -> datetime:
    """Find the UTC time at which the Sun crosses *zenith* on *day*.

    Parameters
    ----------
    observer:
        Where the Sun is observed from.
    day:
        UTC calendar date to search.
    zenith:
        Target zenith angle in degrees before horizon and refraction
        adjustments.
    direction:
        Rising or setting crossing.
    with_refraction:
        Add atmospheric refraction at the adjusted zenith.
    settings:
        Iteration limits; read from the environment when omitted.

    Returns
    -------
    datetime
        Timezone-aware UTC datetime. It may fall on a neighbouring date.

    Raises
    ------
    SunTransitError
        If the Sun never reaches the adjusted zenith.
    """

    if settings is None:
        settings = load_settings()
    if isinstance(day, datetime):
        day = day.date()

    latitude = _clamped_latitude(observer.latitude)
    adjusted_zenith = zenith + _elevation_adjustment(observer)
    if with_refraction:
        adjusted_zenith += refraction_at_zenith(adjusted_zenith)

    jd = julian_day(day)
    time_utc = MINUTES_PER_DAY / 2
    change = float("inf")
    iterations = 0

    while iterations < settings.max_iterations and change >= settings.tolerance_minutes:
        iterations += 1
        jc = julian_day_to_century(jd + time_utc / MINUTES_PER_DAY)
        declination = sun_declination(jc)
        hourangle = hour_angle(latitude, declination, adjusted_zenith, direction)

        delta = -observer.longitude - math.degrees(hourangle)
        offset = _wrap_minutes(delta * 4.0 - eq_of_time(jc))

        new_time = MINUTES_PER_DAY / 2 + offset
        change = abs(new_time - time_utc)
        time_utc = new_time

    if change >= settings.tolerance_minutes:
        LOGGER.warning(
            json.dumps(
                {
                    "event": "solar_transit_iteration_cap",
                    "date": day.isoformat(),
                    "zenith": adjusted_zenith,
                    "iterations": iterations,
                    "last_change_minutes": change,
                }
            )
        )
    else:
        LOGGER.debug(
            json.dumps(
                {
                    "event": "solar_transit_converged",
                    "date": day.isoformat(),
                    "zenith": adjusted_zenith,
                    "iterations": iterations,
                }
            )
        )

    return _minutes_to_datetime(day, time_utc)


def _transit_on_date(
    observer: Observer,
    day: date,
    zenith: float,
    direction: SunDirection,
    tz: tzinfo,
    event: str,
    settings: SolverSettings,
) -> datetime:
    """Solve for *day*, retrying once on the adjacent day if the local date differs."""

    result = time_of_transit(observer, day, zenith, direction, settings=settings).astimezone(tz)
    if result.date() == day:
        return result

    shift = 1 if result.date() < day else -1
    LOGGER.debug(
        json.dumps(
            {
                "event": "solar_transit_retry",
                "name": event,
                "date": day.isoformat(),
                "found": result.isoformat(),
                "shift_days": shift,
            }
        )
    )
    result = time_of_transit(
        observer, day + timedelta(days=shift), zenith, direction, settings=settings
    ).astimezone(tz)
    if result.date() != day:
        raise SunTransitError(f"Unable to find a {event} time on the date specified")
    return result


def time_at_elevation(
    observer: Observer,
    elevation: float,
    day: Optional[date] = None,
    direction: SunDirection = SunDirection.RISING,
    tz: tzinfo = UTC,
    with_refraction: bool = True,
    settings: Optional[SolverSettings] = None,
) -> datetime:
    """Time at which the Sun is *elevation* degrees above the horizon.

    Elevations above 90 degrees are folded onto the setting Sun, so 110
    means a setting Sun at 70 degrees.
    """

    day = local_date(day, tz)
    if elevation > 90.0:
        elevation = 180.0 - elevation
        direction = SunDirection.SETTING

    zenith_angle = 90.0 - elevation
    return time_of_transit(
        observer, day, zenith_angle, direction, with_refraction=with_refraction, settings=settings
    ).astimezone(tz)


def noon(observer: Observer, day: Optional[date] = None, tz: tzinfo = UTC) -> datetime:
    """Solar noon, when the Sun crosses the local meridian."""

    day = local_date(day, tz)
    jc = julian_day_to_century(julian_day(day))
    time_utc = MINUTES_PER_DAY / 2 - 4.0 * observer.longitude - eq_of_time(jc)
    return _minutes_to_datetime(day, time_utc).astimezone(tz)


def midnight(observer: Observer, day: Optional[date] = None, tz: tzinfo = UTC) -> datetime:
    """Solar midnight closest to the start of *day*."""

    day = local_date(day, tz)
    jd_noon = julian_day(datetime.combine(day, time(12)))
    jc = julian_day_to_century(jd_noon + 0.5 - observer.longitude / 360.0)
    time_utc = -4.0 * observer.longitude - eq_of_time(jc)
    return _minutes_to_datetime(day, time_utc).astimezone(tz)


def zenith_and_azimuth(
    observer: Observer,
    dateandtime: datetime,
    with_refraction: bool = True,
) -> Tuple[float, float]:
    """Solar zenith and azimuth in degrees at an instant.

    Naive datetimes are taken to be UTC.
    """

    latitude = _clamped_latitude(observer.latitude)
    longitude = observer.longitude

    if dateandtime.tzinfo is None:
        utc_datetime = dateandtime.replace(tzinfo=UTC)
    else:
        utc_datetime = dateandtime.astimezone(UTC)

    jc = julian_day_to_century(julian_day(utc_datetime))
    declination = sun_declination(jc)
    eqtime = eq_of_time(jc)

    true_solar_time = (
        utc_datetime.hour * 60.0
        + utc_datetime.minute
        + (utc_datetime.second + utc_datetime.microsecond / 1_000_000.0) / 60.0
        + eqtime
        + 4.0 * longitude
    )
    while true_solar_time > MINUTES_PER_DAY:
        true_solar_time -= MINUTES_PER_DAY

    hourangle = true_solar_time / 4.0 - 180.0
    if hourangle < -180.0:
        hourangle += 360.0

    ch = math.cos(math.radians(hourangle))
    cl = math.cos(math.radians(latitude))
    sl = math.sin(math.radians(latitude))
    sd = math.sin(math.radians(declination))
    cd = math.cos(math.radians(declination))

    csz = float(np.clip(cl * cd * ch + sl * sd, -1.0, 1.0))
    zenith_angle = math.degrees(math.acos(csz))

    az_denom = cl * math.sin(math.radians(zenith_angle))
    if abs(az_denom) > 0.001:
        az_rad = ((sl * math.cos(math.radians(zenith_angle))) - sd) / az_denom
        az_rad = float(np.clip(az_rad, -1.0, 1.0))
        azimuth_angle = 180.0 - math.degrees(math.acos(az_rad))
        if hourangle > 0.0:
            azimuth_angle = -azimuth_angle
    elif latitude > 0.0:
        azimuth_angle = 180.0
    else:
        azimuth_angle = 0.0

    if azimuth_angle < 0.0:
        azimuth_angle += 360.0

    if with_refraction:
        zenith_angle -= refraction_at_zenith(zenith_angle)

    return zenith_angle, azimuth_angle


def zenith(observer: Observer, dateandtime: datetime, with_refraction: bool = True) -> float:
    return zenith_and_azimuth(observer, dateandtime, with_refraction)[0]


def azimuth(observer: Observer, dateandtime: datetime) -> float:
    """Solar azimuth in degrees clockwise from north."""

    return zenith_and_azimuth(observer, dateandtime)[1]


def elevation(observer: Observer, dateandtime: datetime, with_refraction: bool = True) -> float:
    return 90.0 - zenith(observer, dateandtime, with_refraction)


def dawn(
    observer: Observer,
    day: Optional[date] = None,
    depression: DepressionLike = Depression.CIVIL,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> datetime:
    """Time the Sun rises through *depression* degrees below the horizon.

    Raises
    ------
    SunTransitError
        If dawn does not occur on *day* at this location.
    """

    day = local_date(day, tz)
    return _transit_on_date(
        observer, day, 90.0 + float(depression), SunDirection.RISING, tz, "dawn", _resolve(settings)
    )


def sunrise(
    observer: Observer,
    day: Optional[date] = None,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> datetime:
    """Time the upper limb of the Sun clears the horizon.

    Raises
    ------
    SunTransitError
        If the Sun does not rise on *day* at this location.
    """

    day = local_date(day, tz)
    return _transit_on_date(
        observer,
        day,
        90.0 + SUN_APPARENT_RADIUS,
        SunDirection.RISING,
        tz,
        "sunrise",
        _resolve(settings),
    )


def sunset(
    observer: Observer,
    day: Optional[date] = None,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> datetime:
    """Time the upper limb of the Sun drops below the horizon.

    Raises
    ------
    SunTransitError
        If the Sun does not set on *day* at this location.
    """

    day = local_date(day, tz)
    return _transit_on_date(
        observer,
        day,
        90.0 + SUN_APPARENT_RADIUS,
        SunDirection.SETTING,
        tz,
        "sunset",
        _resolve(settings),
    )


def dusk(
    observer: Observer,
    day: Optional[date] = None,
    depression: DepressionLike = Depression.CIVIL,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> datetime:
    """Time the Sun sets through *depression* degrees below the horizon.

    Raises
    ------
    SunTransitError
        If dusk does not occur on *day* at this location.
    """

    day = local_date(day, tz)
    return _transit_on_date(
        observer, day, 90.0 + float(depression), SunDirection.SETTING, tz, "dusk", _resolve(settings)
    )


def daylight(
    observer: Observer,
    day: Optional[date] = None,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> Tuple[datetime, datetime]:
    day = local_date(day, tz)
    settings = _resolve(settings)
    return sunrise(observer, day, tz, settings), sunset(observer, day, tz, settings)


def night(
    observer: Observer,
    day: Optional[date] = None,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> Tuple[datetime, datetime]:
    """From civil dusk on *day* to civil dawn on the following day."""

    day = local_date(day, tz)
    settings = _resolve(settings)
    start = dusk(observer, day, Depression.CIVIL, tz, settings)
    end = dawn(observer, day + timedelta(days=1), Depression.CIVIL, tz, settings)
    return start, end


def _ordered(
    start: datetime, end: datetime, direction: SunDirection
) -> Tuple[datetime, datetime]:
    if direction is SunDirection.RISING:
        return start, end
    return end, start


def twilight(
    observer: Observer,
    day: Optional[date] = None,
    direction: SunDirection = SunDirection.RISING,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> Tuple[datetime, datetime]:
    """Period between civil depression and sunrise (or sunset and civil depression)."""

    day = local_date(day, tz)
    settings = _resolve(settings)
    start = time_of_transit(
        observer, day, 90.0 + Depression.CIVIL, direction, settings=settings
    ).astimezone(tz)
    if direction is SunDirection.RISING:
        end = sunrise(observer, day, tz, settings)
    else:
        end = sunset(observer, day, tz, settings)
    return _ordered(start, end, direction)


def golden_hour(
    observer: Observer,
    day: Optional[date] = None,
    direction: SunDirection = SunDirection.RISING,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> Tuple[datetime, datetime]:
    """Period while the Sun is between 4 degrees below and 6 degrees above the horizon."""

    day = local_date(day, tz)
    settings = _resolve(settings)
    start = time_of_transit(observer, day, 90.0 + 4.0, direction, settings=settings).astimezone(tz)
    end = time_of_transit(observer, day, 90.0 - 6.0, direction, settings=settings).astimezone(tz)
    return _ordered(start, end, direction)


def blue_hour(
    observer: Observer,
    day: Optional[date] = None,
    direction: SunDirection = SunDirection.RISING,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> Tuple[datetime, datetime]:
    """Period while the Sun is between 6 and 4 degrees below the horizon."""

    day = local_date(day, tz)
    settings = _resolve(settings)
    start = time_of_transit(observer, day, 90.0 + 6.0, direction, settings=settings).astimezone(tz)
    end = time_of_transit(observer, day, 90.0 + 4.0, direction, settings=settings).astimezone(tz)
    return _ordered(start, end, direction)


def rahukaalam(
    observer: Observer,
    day: Optional[date] = None,
    daytime: bool = True,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> Tuple[datetime, datetime]:
    """The inauspicious eighth of the day (or night) in Vedic astrology."""

    day = local_date(day, tz)
    settings = _resolve(settings)
    if daytime:
        start = sunrise(observer, day, tz, settings)
        end = sunset(observer, day, tz, settings)
    else:
        start = sunset(observer, day, tz, settings)
        end = sunrise(observer, day + timedelta(days=1), tz, settings)

    octant_duration = (end - start) / 8
    octant = _RAHUKAALAM_OCTANTS[day.weekday()]
    start = start + octant_duration * octant
    return start, start + octant_duration


def sun(
    observer: Observer,
    day: Optional[date] = None,
    dawn_dusk_depression: DepressionLike = Depression.CIVIL,
    tz: tzinfo = UTC,
    settings: Optional[SolverSettings] = None,
) -> Dict[str, Optional[datetime]]:
    """Dawn, sunrise, noon, sunset and dusk for *day*.

    Events that do not happen on *day* are reported as ``None``. The solver
    settings are read once and shared by every event.
    """

    day = local_date(day, tz)
    settings = _resolve(settings)
    events: Dict[str, Optional[datetime]] = {}
    calculators = (
        ("dawn", lambda: dawn(observer, day, dawn_dusk_depression, tz, settings)),
        ("sunrise", lambda: sunrise(observer, day, tz, settings)),
        ("noon", lambda: noon(observer, day, tz)),
        ("sunset", lambda: sunset(observer, day, tz, settings)),
        ("dusk", lambda: dusk(observer, day, dawn_dusk_depression, tz, settings)),
    )
    for name, calculate in calculators:
        try:
            events[name] = calculate()
        except SunTransitError as exc:
            LOGGER.info(json.dumps({"event": "sun_event_missing", "name": name, "error": str(exc)}))
            events[name] = None
    return events
