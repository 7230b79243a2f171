"""Angle value type and coordinate string parsing."""

from __future__ import annotations

import functools
import math
import re
from dataclasses import dataclass
from typing import Optional, Union

__all__ = ["Angle", "normalize_degrees", "clamp", "dms_to_float"]

_DMS_PATTERN = re.compile(
    r"""
    ^\s*
    (?P<deg>\d{1,3}(?:\.\d+)?)\s*°\s*
    (?:(?P<min>\d{1,2}(?:\.\d+)?)\s*(?:['′](?!')))?\s*
    (?:(?P<sec>\d{1,2}(?:\.\d+)?)\s*(?:''|["″]))?\s*
    (?P<dir>[NSEW])?
    \s*$
    """,
    re.IGNORECASE | re.VERBOSE,
)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Angle:
    """An angle carrying both its radian and degree representation."""

    radians: float

    @classmethod
    def from_degrees(cls, value: float) -> "Angle":
        return cls(math.radians(value))

    @classmethod
    def from_radians(cls, value: float) -> "Angle":
        return cls(value)

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return self.radians == other.radians

    def __lt__(self, other: "Angle") -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return self.radians < other.radians

    def __hash__(self) -> int:
        return hash(self.radians)


def normalize_degrees(value: float) -> float:
    """Reduce *value* into ``[0, 360)``."""

    result = value % 360.0
    # float modulo can round a tiny negative input up to exactly 360.
    return 0.0 if result == 360.0 else result


def clamp(value: float, limit: float) -> float:
    """Clamp *value* into ``[-limit, limit]``."""

    return max(-limit, min(limit, value))


def dms_to_float(value: Union[str, float], limit: Optional[float] = None) -> float:
    """Convert a degrees/minutes/seconds string into decimal degrees.

    Parameters
    ----------
    value:
        Either a number (or numeric string) or a string such as
        ``51°31'N`` or ``41° 17' 11.256'' S``. Minutes and seconds are
        optional; ``S`` and ``W`` make the result negative.
    limit:
        When given, the result is clamped into ``[-limit, limit]``.

    Returns
    -------
    float
        The angle in decimal degrees.

    Raises
    ------
    ValueError
        If *value* is neither numeric nor a recognisable DMS string.
    """

    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        match = _DMS_PATTERN.match(str(value))
        if match is None:
            raise ValueError(
                f"Unable to convert degrees/minutes/seconds to float: {value!r}"
            ) from exc
        result = (
            float(match.group("deg"))
            + float(match.group("min") or 0.0) / 60.0
            + float(match.group("sec") or 0.0) / 3600.0
        )
        direction = (match.group("dir") or "").upper()
        if direction in ("S", "W"):
            result = -result

    if limit is not None:
        result = clamp(result, limit)
    return result
