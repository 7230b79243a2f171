"""Periodic-term tables for the lunar position series.

Each row holds a coefficient, whether the term grows with the century factor
``T``, the trigonometric function applied and the integer multipliers of the
fundamental arguments. Column order of the multipliers is
``Gm, Fm, D, Om, Ls, Gs, L2``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple, Tuple

__all__ = [
    "LM",
    "GM",
    "FM",
    "D",
    "OM",
    "LS",
    "GS",
    "L2",
    "SIN",
    "COS",
    "LunarSeriesRow",
    "TABLE_V",
    "TABLE_U",
    "TABLE_W",
]

# Fundamental argument indices.
LM = 1  # Moon mean longitude.
GM = 2  # Moon mean anomaly.
FM = 3  # Moon argument of latitude.
D = 4  # Moon mean elongation from the Sun.
OM = 5  # Longitude of the lunar ascending node.
LS = 7  # Sun mean longitude.
GS = 8  # Sun mean anomaly.
L2 = 12  # Venus mean longitude.

SIN = "sin"
COS = "cos"

_COLUMNS = (GM, FM, D, OM, LS, GS, L2)


class LunarSeriesRow(NamedTuple):
    coefficient: float
    uses_century: bool
    trig: str
    multipliers: Mapping[int, int]


def _rows(
    entries: Iterable[Tuple[float, bool, str, Tuple[int, ...]]],
) -> Tuple[LunarSeriesRow, ...]:
    return tuple(
        LunarSeriesRow(coefficient, uses_century, trig, MappingProxyType(dict(zip(_COLUMNS, multipliers))))
        for coefficient, uses_century, trig, multipliers in entries
    )


# Latitude series.
TABLE_V = _rows([
    (0.39558, False, SIN, (0, 1, 0, 1, 0, 0, 0)),
    (0.08200, False, SIN, (0, 1, 0, 0, 0, 0, 0)),
    (0.03257, False, SIN, (1, -1, 0, -1, 0, 0, 0)),
    (0.01092, False, SIN, (1, 1, 0, 1, 0, 0, 0)),
    (0.00666, False, SIN, (1, -1, 0, 0, 0, 0, 0)),
    (-0.00644, False, SIN, (1, 1, -2, 1, 0, 0, 0)),
    (-0.00331, False, SIN, (0, 1, -2, 1, 0, 0, 0)),
    (-0.00304, False, SIN, (0, 1, -2, 0, 0, 0, 0)),
    (-0.00240, False, SIN, (1, -1, -2, -1, 0, 0, 0)),
    (0.00226, False, SIN, (1, 1, 0, 0, 0, 0, 0)),
    (-0.00108, False, SIN, (1, 1, -2, 0, 0, 0, 0)),
    (-0.00079, False, SIN, (0, 1, 0, -1, 0, 0, 0)),
    (0.00078, False, SIN, (0, 1, 2, 1, 0, 0, 0)),
    (0.00066, False, SIN, (0, 1, 0, 1, 0, -1, 0)),
    (-0.00062, False, SIN, (0, 1, 0, 1, 0, 1, 0)),
    (-0.00050, False, SIN, (1, -1, -2, 0, 0, 0, 0)),
    (0.00045, False, SIN, (2, 1, 0, 1, 0, 0, 0)),
    (-0.00031, False, SIN, (2, 1, -2, 1, 0, 0, 0)),
    (-0.00027, False, SIN, (1, 1, -2, 1, 0, 1, 0)),
    (-0.00024, False, SIN, (0, 1, -2, 1, 0, 1, 0)),
    (-0.00021, True, SIN, (0, 1, 0, 1, 0, 0, 0)),
    (0.00018, False, SIN, (0, 1, -1, 1, 0, 0, 0)),
    (0.00016, False, SIN, (0, 1, 2, 0, 0, 0, 0)),
    (0.00016, False, SIN, (1, -1, 0, -1, 0, -1, 0)),
    (-0.00016, False, SIN, (2, -1, 0, -1, 0, 0, 0)),
    (-0.00015, False, SIN, (0, 1, -2, 0, 0, 1, 0)),
    (-0.00012, False, SIN, (1, -1, -2, -1, 0, 1, 0)),
    (-0.00011, False, SIN, (1, -1, 0, -1, 0, 1, 0)),
    (0.00009, False, SIN, (1, 1, 0, 1, 0, -1, 0)),
    (0.00009, False, SIN, (2, 1, 0, 0, 0, 0, 0)),
    (0.00008, False, SIN, (2, -1, 0, 0, 0, 0, 0)),
    (0.00008, False, SIN, (1, 1, 2, 1, 0, 0, 0)),
    (-0.00008, False, SIN, (0, 3, -2, 1, 0, 0, 0)),
    (0.00007, False, SIN, (1, -1, 2, 0, 0, 0, 0)),
    (-0.00007, False, SIN, (2, -1, -2, -1, 0, 0, 0)),
    (-0.00007, False, SIN, (1, 1, 0, 1, 0, 1, 0)),
    (-0.00006, False, SIN, (0, 1, 1, 1, 0, 0, 0)),
    (0.00006, False, SIN, (0, 1, -2, 0, 0, -1, 0)),
    (0.00006, False, SIN, (1, -1, 0, 1, 0, 0, 0)),
    (0.00006, False, SIN, (0, 1, 2, 1, 0, -1, 0)),
    (-0.00005, False, SIN, (1, 1, -2, 0, 0, 1, 0)),
    (-0.00004, False, SIN, (2, 1, -2, 0, 0, 0, 0)),
    (0.00004, False, SIN, (1, -3, 0, -1, 0, 0, 0)),
    (0.00004, False, SIN, (1, -1, 0, 0, 0, -1, 0)),
    (-0.00003, False, SIN, (1, -1, 0, 0, 0, 1, 0)),
    (0.00003, False, SIN, (0, 1, -1, 0, 0, 0, 0)),
    (0.00003, False, SIN, (0, 1, -2, 1, 0, -1, 0)),
    (-0.00003, False, SIN, (0, 1, -2, -1, 0, 0, 0)),
    (0.00003, False, SIN, (1, 1, -2, 1, 0, -1, 0)),
    (0.00003, False, SIN, (0, 1, 0, 0, 0, -1, 0)),
    (-0.00003, False, SIN, (0, 1, -1, 1, 0, -1, 0)),
    (-0.00002, False, SIN, (1, -1, -2, 0, 0, 1, 0)),
    (-0.00002, False, SIN, (0, 1, 0, 0, 0, 1, 0)),
    (0.00002, False, SIN, (1, 1, -1, 1, 0, 0, 0)),
    (-0.00002, False, SIN, (1, 1, 0, -1, 0, 0, 0)),
    (0.00002, False, SIN, (3, 1, 0, 1, 0, 0, 0)),
    (-0.00002, False, SIN, (2, -1, -4, -1, 0, 0, 0)),
    (0.00002, False, SIN, (1, -1, -2, -1, 0, -1, 0)),
    (-0.00002, True, SIN, (1, -1, 0, -1, 0, 0, 0)),
    (-0.00002, False, SIN, (1, -1, -4, -1, 0, 0, 0)),
    (-0.00002, False, SIN, (1, 1, -4, 0, 0, 0, 0)),
    (-0.00002, False, SIN, (2, -1, -2, 0, 0, 0, 0)),
    (0.00002, False, SIN, (1, 1, 2, 0, 0, 0, 0)),
    (0.00002, False, SIN, (1, 1, 0, 0, 0, -1, 0)),
])

# Distance series.
TABLE_U = _rows([
    (1, False, COS, (0, 0, 0, 0, 0, 0, 0)),
    (-0.10828, False, COS, (1, 0, 0, 0, 0, 0, 0)),
    (-0.01880, False, COS, (1, 0, -2, 0, 0, 0, 0)),
    (-0.01479, False, COS, (0, 0, 2, 0, 0, 0, 0)),
    (0.00181, False, COS, (2, 0, -2, 0, 0, 0, 0)),
    (-0.00147, False, COS, (2, 0, 0, 0, 0, 0, 0)),
    (-0.00105, False, COS, (0, 0, 2, 0, 0, -1, 0)),
    (-0.00075, False, COS, (1, 0, -2, 0, 0, 1, 0)),
    (-0.00067, False, COS, (1, 0, 0, 0, 0, -1, 0)),
    (0.00057, False, COS, (0, 0, 1, 0, 0, 0, 0)),
    (0.00055, False, COS, (1, 0, 0, 0, 0, 1, 0)),
    (-0.00046, False, COS, (1, 0, 2, 0, 0, 0, 0)),
    (0.00041, False, COS, (1, -2, 0, 0, 0, 0, 0)),
    (0.00024, False, COS, (0, 0, 0, 0, 0, 1, 0)),
    (0.00017, False, COS, (0, 0, 2, 0, 0, 1, 0)),
    (0.00013, False, COS, (1, 0, -2, 0, 0, -1, 0)),
    (-0.00010, False, COS, (1, 0, -4, 0, 0, 0, 0)),
    (-0.00009, False, COS, (0, 0, 1, 0, 0, 1, 0)),
    (0.00007, False, COS, (2, 0, -2, 0, 0, 1, 0)),
    (0.00006, False, COS, (3, 0, -2, 0, 0, 0, 0)),
    (0.00006, False, COS, (0, 2, -2, 0, 0, 0, 0)),
    (-0.00005, False, COS, (0, 0, 2, 0, 0, -2, 0)),
    (-0.00005, False, COS, (2, 0, -4, 0, 0, 0, 0)),
    (0.00005, False, COS, (1, 2, -2, 0, 0, 0, 0)),
    (-0.00005, False, COS, (1, 0, -1, 0, 0, 0, 0)),
    (-0.00004, False, COS, (1, 0, 2, 0, 0, -1, 0)),
    (-0.00004, False, COS, (3, 0, 0, 0, 0, 0, 0)),
    (-0.00003, False, COS, (1, 0, -4, 0, 0, 1, 0)),
    (-0.00003, False, COS, (2, -2, 0, 0, 0, 0, 0)),
    (-0.00003, False, COS, (0, 2, 0, 0, 0, 0, 0)),
])

# Longitude series.
TABLE_W = _rows([
    (0.10478, False, SIN, (1, 0, 0, 0, 0, 0, 0)),
    (-0.04105, False, SIN, (0, 2, 0, 2, 0, 0, 0)),
    (-0.02130, False, SIN, (1, 0, -2, 0, 0, 0, 0)),
    (-0.01779, False, SIN, (0, 2, 0, 1, 0, 0, 0)),
    (0.01774, False, SIN, (0, 0, 0, 1, 0, 0, 0)),
    (0.00987, False, SIN, (0, 0, 2, 0, 0, 0, 0)),
    (-0.00338, False, SIN, (1, -2, 0, -2, 0, 0, 0)),
    (-0.00309, False, SIN, (0, 0, 0, 0, 0, 1, 0)),
    (-0.00190, False, SIN, (0, 2, 0, 0, 0, 0, 0)),
    (-0.00144, False, SIN, (1, 0, 0, 1, 0, 0, 0)),
    (-0.00144, False, SIN, (1, -2, 0, -1, 0, 0, 0)),
    (-0.00113, False, SIN, (1, 2, 0, 2, 0, 0, 0)),
    (-0.00094, False, SIN, (1, 0, -2, 0, 0, 1, 0)),
    (-0.00092, False, SIN, (2, 0, -2, 0, 0, 0, 0)),
    (0.00071, False, SIN, (0, 0, 2, 0, 0, -1, 0)),
    (0.00070, False, SIN, (2, 0, 0, 0, 0, 0, 0)),
    (0.00067, False, SIN, (1, 2, -2, 2, 0, 0, 0)),
    (0.00066, False, SIN, (0, 2, -2, 1, 0, 0, 0)),
    (-0.00066, False, SIN, (0, 0, 2, 1, 0, 0, 0)),
    (0.00061, False, SIN, (1, 0, 0, 0, 0, -1, 0)),
    (-0.00058, False, SIN, (0, 0, 1, 0, 0, 0, 0)),
    (-0.00049, False, SIN, (1, 2, 0, 1, 0, 0, 0)),
    (-0.00049, False, SIN, (1, 0, 0, -1, 0, 0, 0)),
    (-0.00042, False, SIN, (1, 0, 0, 0, 0, 1, 0)),
    (0.00034, False, SIN, (0, 2, -2, 2, 0, 0, 0)),
    (-0.00026, False, SIN, (0, 2, -2, 0, 0, 0, 0)),
    (0.00025, False, SIN, (1, -2, -2, -2, 0, 0, 0)),
    (0.00024, False, SIN, (1, -2, 0, 0, 0, 0, 0)),
    (0.00023, False, SIN, (1, 2, -2, 1, 0, 0, 0)),
    (0.00023, False, SIN, (1, 0, -2, -1, 0, 0, 0)),
    (0.00019, False, SIN, (1, 0, 2, 0, 0, 0, 0)),
    (0.00012, False, SIN, (1, 0, -2, 0, 0, -1, 0)),
    (0.00011, False, SIN, (1, 0, -2, 1, 0, 0, 0)),
    (0.00011, False, SIN, (1, -2, -2, -1, 0, 0, 0)),
    (-0.00010, False, SIN, (0, 0, 2, 0, 0, 1, 0)),
    (0.00009, False, SIN, (1, 0, -1, 0, 0, 0, 0)),
    (0.00008, False, SIN, (0, 0, 1, 0, 0, 1, 0)),
    (-0.00008, False, SIN, (0, 2, 2, 2, 0, 0, 0)),
    (-0.00008, False, SIN, (0, 0, 0, 2, 0, 0, 0)),
    (-0.00007, False, SIN, (0, 2, 0, 2, 0, -1, 0)),
    (0.00006, False, SIN, (0, 2, 0, 2, 0, 1, 0)),
    (-0.00005, False, SIN, (1, 2, 0, 0, 0, 0, 0)),
    (0.00005, False, SIN, (3, 0, 0, 0, 0, 0, 0)),
    (-0.00005, False, SIN, (1, 0, 0, 0, 16, 0, -18)),
    (-0.00005, False, SIN, (2, 2, 0, 2, 0, 0, 0)),
    (0.00004, True, SIN, (0, 2, 0, 2, 0, 0, 0)),
    (0.00004, False, COS, (1, 0, 0, 0, 16, 0, -18)),
    (-0.00004, False, SIN, (1, -2, 2, 0, 0, 0, 0)),
    (-0.00004, False, SIN, (1, 0, -4, 0, 0, 0, 0)),
    (-0.00004, False, SIN, (3, 0, -2, 0, 0, 0, 0)),
    (-0.00004, False, SIN, (0, 2, 2, 1, 0, 0, 0)),
    (-0.00004, False, SIN, (0, 0, 2, -1, 0, 0, 0)),
    (-0.00003, False, SIN, (0, 0, 0, 0, 0, 2, 0)),
    (-0.00003, False, SIN, (1, 0, -2, 0, 0, 2, 0)),
    (0.00003, False, SIN, (0, 2, -2, 1, 0, 1, 0)),
    (-0.00003, False, SIN, (0, 0, 2, 1, 0, -1, 0)),
    (0.00003, False, SIN, (2, 2, -2, 2, 0, 0, 0)),
    (0.00003, False, SIN, (0, 0, 2, 0, 0, -2, 0)),
    (-0.00003, False, SIN, (2, 0, -2, 0, 0, 1, 0)),
    (0.00003, False, SIN, (1, 2, -2, 2, 0, 1, 0)),
    (-0.00003, False, SIN, (2, 0, -4, 0, 0, 0, 0)),
    (0.00002, False, SIN, (0, 2, -2, 2, 0, 1, 0)),
    (-0.00002, False, SIN, (2, 2, 0, 1, 0, 0, 0)),
    (-0.00002, False, SIN, (2, 0, 0, -1, 0, 0, 0)),
    (0.00002, True, COS, (1, 0, 0, 0, 16, 0, -18)),
    (0.00002, False, SIN, (0, 0, 4, 0, 0, 0, 0)),
    (-0.00002, False, SIN, (0, 2, -1, 2, 0, 0, 0)),
    (-0.00002, False, SIN, (1, 2, -2, 0, 0, 0, 0)),
    (-0.00002, False, SIN, (2, 0, 0, 1, 0, 0, 0)),
    (-0.00002, False, SIN, (2, -2, 0, -1, 0, 0, 0)),
    (0.00002, False, SIN, (1, 0, 2, 0, 0, -1, 0)),
    (0.00002, False, SIN, (2, 0, 0, 0, 0, -1, 0)),
    (-0.00002, False, SIN, (1, 0, -4, 0, 0, 1, 0)),
    (0.00002, True, SIN, (1, 0, 0, 0, 16, 0, -18)),
    (-0.00002, False, SIN, (1, -2, 0, -2, 0, -1, 0)),
    (0.00002, False, SIN, (2, -2, 0, -2, 0, 0, 0)),
    (-0.00002, False, SIN, (1, 0, 2, 1, 0, 0, 0)),
    (-0.00002, False, SIN, (1, -2, 2, -1, 0, 0, 0)),
])
