"""Lunar ephemeris from fundamental arguments and periodic-term series."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple

import numpy as np

from .lunar_tables import COS, D, FM, GM, GS, L2, LM, LS, OM, SIN, TABLE_U, TABLE_V, TABLE_W, LunarSeriesRow
from .timescale import DAYS_PER_CENTURY

__all__ = [
    "EphemerisError",
    "BodyPosition",
    "MOON_APPARENT_RADIUS",
    "interpolate",
    "moon_mean_longitude",
    "moon_mean_anomaly",
    "moon_argument_of_latitude",
    "moon_mean_elongation_from_sun",
    "longitude_lunar_ascending_node",
    "sun_mean_longitude",
    "sun_mean_anomaly",
    "venus_mean_longitude",
    "moon_position",
    "obliquity_of_ecliptic",
    "moon_true_longitude",
]

LOGGER = logging.getLogger(__name__)

MOON_APPARENT_RADIUS = 1896.0 / (60.0 * 60.0)  # Degrees.
EARTH_RADII_PER_UNIT = 60.40974  # Scales sqrt(U) to Earth radii.
TWO_PI = 2.0 * math.pi


class EphemerisError(RuntimeError):
    """Raised when the lunar series tables are internally inconsistent."""


@dataclass
class BodyPosition:
    """Right ascension and declination in radians, plus a distance value.

    Inside the transit solver ``distance`` holds the altitude function rather
    than a distance.
    """

    right_ascension: float = 0.0
    declination: float = 0.0
    distance: float = 0.0


def interpolate(f0: float, f1: float, f2: float, p: float) -> float:
    """Three-point interpolation at fraction *p* of the way from *f0* to *f2*."""

    a = f1 - f0
    b = f2 - f1 - a
    return f0 + p * (2.0 * a + b * (2.0 * p - 1.0))


def _revolutions(value: float) -> float:
    return value - math.floor(value)


def _moon_mean_longitude_raw(jd2000: float) -> float:
    return 0.606434 + 0.03660110129 * jd2000


def moon_mean_longitude(jd2000: float) -> float:
    return _revolutions(_moon_mean_longitude_raw(jd2000))


def moon_mean_anomaly(jd2000: float) -> float:
    return _revolutions(0.374897 + 0.03629164709 * jd2000)


def moon_argument_of_latitude(jd2000: float) -> float:
    return _revolutions(0.259091 + 0.03674819520 * jd2000)


def moon_mean_elongation_from_sun(jd2000: float) -> float:
    return _revolutions(0.827362 + 0.03386319198 * jd2000)


def longitude_lunar_ascending_node(jd2000: float) -> float:
    return moon_mean_longitude(jd2000) - moon_argument_of_latitude(jd2000)


def sun_mean_longitude(jd2000: float) -> float:
    return _revolutions(0.779072 + 0.00273790931 * jd2000)


def sun_mean_anomaly(jd2000: float) -> float:
    return _revolutions(0.993126 + 0.00273777850 * jd2000)


def venus_mean_longitude(jd2000: float) -> float:
    return _revolutions(0.505498 + 0.00445046867 * jd2000)


_ARGUMENT_FUNCTIONS: Dict[int, Callable[[float], float]] = {
    LM: moon_mean_longitude,
    GM: moon_mean_anomaly,
    FM: moon_argument_of_latitude,
    D: moon_mean_elongation_from_sun,
    OM: longitude_lunar_ascending_node,
    LS: sun_mean_longitude,
    GS: sun_mean_anomaly,
    L2: venus_mean_longitude,
}
_ARGUMENT_ORDER: Tuple[int, ...] = tuple(sorted(_ARGUMENT_FUNCTIONS))


@dataclass(frozen=True)
class _CompiledSeries:
    """Array form of a series table ready for vectorised evaluation."""

    coefficients: np.ndarray
    uses_century: np.ndarray
    is_sine: np.ndarray
    multipliers: np.ndarray


def _compile_series(name: str, rows: Sequence[LunarSeriesRow]) -> _CompiledSeries:
    """Convert *rows* into arrays, checking every referenced argument exists."""

    multipliers = np.zeros((len(rows), len(_ARGUMENT_ORDER)), dtype=float)
    for row_index, row in enumerate(rows):
        if row.trig not in (SIN, COS):
            raise EphemerisError(f"Series {name} row {row_index} has unknown function {row.trig!r}")
        for argument, multiplier in row.multipliers.items():
            if multiplier == 0:
                continue
            if argument not in _ARGUMENT_FUNCTIONS:
                raise EphemerisError(
                    f"Series {name} row {row_index} references undefined argument {argument}"
                )
            multipliers[row_index, _ARGUMENT_ORDER.index(argument)] = multiplier

    compiled = _CompiledSeries(
        coefficients=np.array([row.coefficient for row in rows], dtype=float),
        uses_century=np.array([row.uses_century for row in rows], dtype=bool),
        is_sine=np.array([row.trig == SIN for row in rows], dtype=bool),
        multipliers=multipliers,
    )
    for array in (compiled.coefficients, compiled.uses_century, compiled.is_sine, compiled.multipliers):
        array.setflags(write=False)
    return compiled


_SERIES_V = _compile_series("V", TABLE_V)
_SERIES_U = _compile_series("U", TABLE_U)
_SERIES_W = _compile_series("W", TABLE_W)
LOGGER.debug(
    json.dumps(
        {
            "event": "lunar_tables_compiled",
            "rows": {"V": len(TABLE_V), "U": len(TABLE_U), "W": len(TABLE_W)},
        }
    )
)


def _evaluate(series: _CompiledSeries, arguments: np.ndarray, t: float) -> float:
    angles = (series.multipliers @ arguments) * TWO_PI
    terms = np.where(series.is_sine, np.sin(angles), np.cos(angles))
    scale = np.where(series.uses_century, t, 1.0)
    return float(np.sum(series.coefficients * scale * terms))


def moon_position(jd2000: float) -> BodyPosition:
    """Geocentric position of the Moon.

    Parameters
    ----------
    jd2000:
        Days since J2000.0.

    Returns
    -------
    BodyPosition
        Right ascension and declination in radians and the distance in
        Earth radii.
    """

    arguments = np.array([_ARGUMENT_FUNCTIONS[index](jd2000) for index in _ARGUMENT_ORDER])
    t = jd2000 / DAYS_PER_CENTURY + 1.0

    v = _evaluate(_SERIES_V, arguments, t)
    u = _evaluate(_SERIES_U, arguments, t)
    w = _evaluate(_SERIES_W, arguments, t)

    # The fractional part keeps the sign of the raw argument, so the right
    # ascension stays continuous across the epoch.
    mean_longitude = math.fmod(_moon_mean_longitude_raw(jd2000), 1.0)

    s = float(np.clip(w / math.sqrt(u - v * v), -1.0, 1.0))
    right_ascension = math.asin(s) + mean_longitude * TWO_PI

    s = float(np.clip(v / math.sqrt(u), -1.0, 1.0))
    declination = math.asin(s)

    distance = EARTH_RADII_PER_UNIT * math.sqrt(u)
    return BodyPosition(right_ascension, declination, distance)


def obliquity_of_ecliptic(jd2000: float) -> float:
    """IAU 1980 mean obliquity of the ecliptic in radians."""

    t = jd2000 / DAYS_PER_CENTURY
    seconds = 21.448 - 46.8150 * t - 0.00059 * t * t + 0.001813 * t * t * t
    return math.radians(23.0 + 26.0 / 60.0 + seconds / 3600.0)


def moon_true_longitude(jd2000: float) -> float:
    """Ecliptic longitude of the Moon in revolutions, ``[0, 1)``."""

    position = moon_position(jd2000)
    epsilon = obliquity_of_ecliptic(jd2000)
    alpha = position.right_ascension
    delta = position.declination
    longitude = math.atan2(
        math.sin(alpha) * math.cos(epsilon) + math.tan(delta) * math.sin(epsilon),
        math.cos(alpha),
    )
    return _revolutions(longitude / TWO_PI)
