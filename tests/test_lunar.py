from __future__ import annotations

from datetime import date

import erfa
import numpy as np
import pytest

from riseset import lunar
from riseset.lunar_tables import SIN, TABLE_U, TABLE_V, TABLE_W, LunarSeriesRow
from riseset.timescale import julian_day_since_j2000


@pytest.mark.parametrize(
    "day,expected",
    [
        (date(1969, 6, 28), (-1.9638999378692186, -0.4666623303219141, 56.55564052259119)),
        (date(1992, 4, 12), (-3.932462849957415, 0.24034553813386558, 57.76236323127602)),
    ],
)
def test_moon_position(day: date, expected):
    position = lunar.moon_position(julian_day_since_j2000(day))
    assert position.right_ascension == pytest.approx(expected[0], abs=1e-9)
    assert position.declination == pytest.approx(expected[1], abs=1e-9)
    assert position.distance == pytest.approx(expected[2], abs=1e-7)


def test_moon_distance_in_plausible_range():
    for jd2000 in np.linspace(-5000.0, 5000.0, 41):
        distance = lunar.moon_position(float(jd2000)).distance
        assert 55.0 < distance < 64.5


def test_table_sizes():
    assert (len(TABLE_V), len(TABLE_U), len(TABLE_W)) == (64, 30, 78)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        TABLE_V[0].multipliers[2] = 5
    with pytest.raises(ValueError):
        lunar._SERIES_V.coefficients[0] = 1.0


def test_undefined_argument_is_an_ephemeris_error():
    row = LunarSeriesRow(1.0, False, SIN, {6: 1})
    with pytest.raises(lunar.EphemerisError, match="undefined argument 6"):
        lunar._compile_series("X", [row])


def test_unknown_trig_function_is_an_ephemeris_error():
    row = LunarSeriesRow(1.0, False, "tan", {2: 1})
    with pytest.raises(lunar.EphemerisError):
        lunar._compile_series("X", [row])


def test_fundamental_arguments_are_fractions_of_a_revolution():
    for jd2000 in (-20000.5, -1.0, 0.0, 0.5, 8765.5, 36525.0):
        for function in (
            lunar.moon_mean_longitude,
            lunar.moon_mean_anomaly,
            lunar.moon_argument_of_latitude,
            lunar.moon_mean_elongation_from_sun,
            lunar.sun_mean_longitude,
            lunar.sun_mean_anomaly,
            lunar.venus_mean_longitude,
        ):
            assert 0.0 <= function(jd2000) < 1.0


def test_interpolate():
    assert lunar.interpolate(1.0, 2.0, 3.0, 0.5) == pytest.approx(2.0)
    assert lunar.interpolate(1.0, 2.0, 3.0, 0.0) == pytest.approx(1.0)
    assert lunar.interpolate(1.0, 2.0, 3.0, 1.0) == pytest.approx(3.0)
    assert lunar.interpolate(0.0, 1.0, 4.0, 0.5) == pytest.approx(1.0)
    assert lunar.interpolate(0.0, 1.0, 4.0, 0.25) == pytest.approx(0.25)


def test_obliquity_matches_erfa():
    for jd2000 in (-36525.0, 0.0, 8765.5, 36525.0):
        expected = erfa.obl80(erfa.DJ00, jd2000)
        assert lunar.obliquity_of_ecliptic(jd2000) == pytest.approx(expected, abs=1e-8)


def test_moon_true_longitude_is_normalised():
    for jd2000 in np.linspace(-3000.0, 3000.0, 25):
        value = lunar.moon_true_longitude(float(jd2000))
        assert 0.0 <= value < 1.0


def test_moon_true_longitude_advances_about_thirteen_degrees_a_day():
    start = lunar.moon_true_longitude(8765.5)
    end = lunar.moon_true_longitude(8766.5)
    daily = ((end - start) % 1.0) * 360.0
    assert 11.0 < daily < 16.0


def test_right_ascension_is_continuous_where_mean_longitude_changes_sign():
    # The raw mean longitude passes through zero about 16.57 days before J2000.
    before = lunar.moon_position(-16.58)
    after = lunar.moon_position(-16.56)
    assert 0.0 < after.right_ascension - before.right_ascension < 0.01
