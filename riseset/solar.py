"""Solar ephemeris as closed-form functions of the Julian century.

The formulae follow the NOAA solar calculator. Every function takes the
Julian century ``T`` elapsed since J2000.0 and returns degrees unless stated
otherwise.
"""

from __future__ import annotations

import math

import numpy as np

from .angles import normalize_degrees

__all__ = [
    "geom_mean_long_sun",
    "geom_mean_anomaly_sun",
    "eccentric_location_earth_orbit",
    "sun_eq_of_center",
    "sun_true_long",
    "sun_true_anomaly",
    "sun_rad_vector",
    "sun_apparent_long",
    "mean_obliquity_of_ecliptic",
    "obliquity_correction",
    "sun_rt_ascension",
    "sun_declination",
    "var_y",
    "eq_of_time",
]


def geom_mean_long_sun(juliancentury: float) -> float:
    """Geometric mean longitude of the Sun, ``[0, 360)``."""

    l0 = 280.46646 + juliancentury * (36000.76983 + 0.0003032 * juliancentury)
    return normalize_degrees(l0)


def geom_mean_anomaly_sun(juliancentury: float) -> float:
    """Geometric mean anomaly of the Sun (not reduced)."""

    return 357.52911 + juliancentury * (35999.05029 - 0.0001537 * juliancentury)


def eccentric_location_earth_orbit(juliancentury: float) -> float:
    """Eccentricity of the Earth's orbit (unitless)."""

    return 0.016708634 - juliancentury * (0.000042037 + 0.0000001267 * juliancentury)


def sun_eq_of_center(juliancentury: float) -> float:
    m = math.radians(geom_mean_anomaly_sun(juliancentury))
    return (
        math.sin(m) * (1.914602 - juliancentury * (0.004817 + 0.000014 * juliancentury))
        + math.sin(2.0 * m) * (0.019993 - 0.000101 * juliancentury)
        + math.sin(3.0 * m) * 0.000289
    )


def sun_true_long(juliancentury: float) -> float:
    return geom_mean_long_sun(juliancentury) + sun_eq_of_center(juliancentury)


def sun_true_anomaly(juliancentury: float) -> float:
    return geom_mean_anomaly_sun(juliancentury) + sun_eq_of_center(juliancentury)


def sun_rad_vector(juliancentury: float) -> float:
    """Distance from the Earth to the Sun in astronomical units."""

    v = math.radians(sun_true_anomaly(juliancentury))
    e = eccentric_location_earth_orbit(juliancentury)
    return (1.000001018 * (1.0 - e * e)) / (1.0 + e * math.cos(v))


def _omega(juliancentury: float) -> float:
    """Longitude of the Moon's ascending node, in radians."""

    return math.radians(125.04 - 1934.136 * juliancentury)


def sun_apparent_long(juliancentury: float) -> float:
    """Apparent longitude with the first-order nutation and aberration term."""

    return sun_true_long(juliancentury) - 0.00569 - 0.00478 * math.sin(_omega(juliancentury))


def mean_obliquity_of_ecliptic(juliancentury: float) -> float:
    seconds = 21.448 - juliancentury * (
        46.815 + juliancentury * (0.00059 - juliancentury * 0.001813)
    )
    return 23.0 + (26.0 + seconds / 60.0) / 60.0


def obliquity_correction(juliancentury: float) -> float:
    return mean_obliquity_of_ecliptic(juliancentury) + 0.00256 * math.cos(_omega(juliancentury))


def sun_rt_ascension(juliancentury: float) -> float:
    """Right ascension of the Sun, ``[0, 360)``."""

    oc = math.radians(obliquity_correction(juliancentury))
    al = math.radians(sun_apparent_long(juliancentury))
    return normalize_degrees(math.degrees(math.atan2(math.cos(oc) * math.sin(al), math.cos(al))))


def sun_declination(juliancentury: float) -> float:
    e = math.radians(obliquity_correction(juliancentury))
    lambd = math.radians(sun_apparent_long(juliancentury))
    sint = float(np.clip(math.sin(e) * math.sin(lambd), -1.0, 1.0))
    return math.degrees(math.asin(sint))


def var_y(juliancentury: float) -> float:
    epsilon = obliquity_correction(juliancentury)
    y = math.tan(math.radians(epsilon) / 2.0)
    return y * y


def eq_of_time(juliancentury: float) -> float:
    """Equation of time in minutes (apparent minus mean solar time)."""

    l0 = math.radians(geom_mean_long_sun(juliancentury))
    e = eccentric_location_earth_orbit(juliancentury)
    m = math.radians(geom_mean_anomaly_sun(juliancentury))
    y = var_y(juliancentury)

    sin2l0 = math.sin(2.0 * l0)
    sinm = math.sin(m)
    cos2l0 = math.cos(2.0 * l0)
    sin4l0 = math.sin(4.0 * l0)
    sin2m = math.sin(2.0 * m)

    eq_time = (
        y * sin2l0
        - 2.0 * e * sinm
        + 4.0 * e * y * sinm * cos2l0
        - 0.5 * y * y * sin4l0
        - 1.25 * e * e * sin2m
    )
    return math.degrees(eq_time) * 4.0
