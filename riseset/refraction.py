"""Empirical atmospheric refraction model."""

from __future__ import annotations

import math

__all__ = ["REFRACTION_ZENITH_LIMIT", "refraction_at_elevation", "refraction_at_zenith"]

REFRACTION_ZENITH_LIMIT = 85.0  # No correction is modelled beyond this zenith angle.
_HIGH_BAND_ELEVATION = 5.0
_LOW_BAND_ELEVATION = -0.575


def refraction_at_elevation(elevation: float) -> float:
    """Refraction in arc-seconds for a geometric *elevation* in degrees.

    Three formulae are used depending on the elevation band: a rational
    function of ``tan(elevation)`` above 5°, a quartic in the elevation down
    to -0.575°, and ``-20.774 / tan(elevation)`` below that.
    """

    if elevation > _HIGH_BAND_ELEVATION:
        te = math.tan(math.radians(elevation))
        return 58.1 / te - 0.07 / te**3 + 0.000086 / te**5
    if elevation > _LOW_BAND_ELEVATION:
        return 1735.0 + elevation * (
            -518.2 + elevation * (103.4 + elevation * (-12.79 + elevation * 0.711))
        )
    te = math.tan(math.radians(elevation))
    return -20.774 / te


def refraction_at_zenith(zenith: float) -> float:
    """Refraction correction in degrees for a zenith angle in degrees.

    Parameters
    ----------
    zenith:
        Geometric zenith angle of the body.

    Returns
    -------
    float
        Correction in degrees, ``0.0`` when *zenith* exceeds
        :data:`REFRACTION_ZENITH_LIMIT`.
    """

    if zenith > REFRACTION_ZENITH_LIMIT:
        return 0.0
    return refraction_at_elevation(90.0 - zenith) / 3600.0
