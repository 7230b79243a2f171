from __future__ import annotations

import math
from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from riseset import solar_terms
from riseset.solar_terms import (
    SOLAR_TERMS,
    current_solar_term,
    days_until_next_solar_term,
    month_of_current_solar_term,
    next_solar_term,
    solar_term_name,
)


@pytest.mark.parametrize(
    "moment,expected",
    [
        (datetime(2012, 3, 20, 21, 31, tzinfo=UTC), 0),
        (datetime(2012, 6, 21, 11, 12, tzinfo=UTC), 6),
        (datetime(2012, 9, 22, 20, 0, tzinfo=UTC), 12),
    ],
)
def test_current_solar_term_at_equinoxes_and_solstices(moment: datetime, expected: int):
    assert math.floor(current_solar_term(moment)) == expected


@pytest.mark.parametrize(
    "moment,expected",
    [
        (datetime(2012, 3, 20, 16, 9, tzinfo=UTC), 0.5),
        (datetime(2025, 4, 20, 15, 12, tzinfo=UTC), 2.5),
        (datetime(2012, 6, 21, 11, 12, tzinfo=UTC), 6.5),
        (datetime(2012, 9, 22, 20, 0, tzinfo=UTC), 12.5),
        (datetime(2012, 12, 21, 4, 20, tzinfo=UTC), 18.5),
    ],
)
def test_current_solar_term_value(moment: datetime, expected: float):
    assert abs(current_solar_term(moment) - expected) < 0.5


def test_current_solar_term_range():
    for offset in range(0, 366, 5):
        value = current_solar_term(datetime(2021, 1, 1, tzinfo=UTC) + timedelta(days=offset))
        assert 0.5 <= value < 24.5


def test_current_solar_term_is_timezone_independent():
    local = datetime(2012, 6, 21, 19, 12, tzinfo=timezone(timedelta(hours=8)))
    utc = datetime(2012, 6, 21, 11, 12, tzinfo=UTC)
    assert current_solar_term(local) == pytest.approx(current_solar_term(utc), abs=1e-9)
    assert current_solar_term(utc.replace(tzinfo=None)) == current_solar_term(utc)


def test_all_terms_appear_over_a_year():
    start = datetime(2020, 1, 1, tzinfo=UTC)
    seen = {math.floor(current_solar_term(start + timedelta(days=offset))) % 24 for offset in range(370)}
    assert seen == set(range(24))


def test_solar_term_increases_with_time():
    first = current_solar_term(datetime(2020, 3, 20, tzinfo=UTC))
    second = current_solar_term(datetime(2020, 3, 21, tzinfo=UTC))
    if second < first:
        second += 24.0
    assert first < second


def test_days_until_next_solar_term_range():
    for offset in range(0, 366, 3):
        days = days_until_next_solar_term(datetime(2024, 1, 1, tzinfo=UTC) + timedelta(days=offset))
        assert 0.0 < days < 16.0


def test_days_until_next_solar_term_decreases():
    moment = datetime(2024, 5, 10, tzinfo=UTC)
    now = days_until_next_solar_term(moment)
    later = days_until_next_solar_term(moment + timedelta(hours=1))
    assert later < now
    assert now - later == pytest.approx(1.0 / 24.0, abs=0.01)


def test_next_solar_term_lands_on_boundary():
    boundary = next_solar_term(datetime(1970, 1, 1, tzinfo=UTC), iterations=10)
    fractional = current_solar_term(boundary) % 1.0
    assert abs(fractional - 0.5) < 1e-4
    assert boundary > datetime(1970, 1, 1, tzinfo=UTC)


def test_next_solar_term_from_guyu_is_lixia():
    start = datetime(2025, 4, 20, 15, 0, tzinfo=UTC)
    boundary = next_solar_term(start)
    assert start < boundary < start + timedelta(days=16)
    assert math.floor(current_solar_term(boundary + timedelta(hours=1))) == 3
    assert solar_term_name(3) == "立夏"


def test_next_solar_term_keeps_time_zone():
    tz = timezone(timedelta(hours=8))
    start = datetime(2025, 4, 20, 23, 0, tzinfo=tz)
    boundary = next_solar_term(start)
    assert boundary.utcoffset() == timedelta(hours=8)


@pytest.mark.parametrize(
    "day,expected",
    [
        (date(2021, 12, 21), 12),
        (date(2022, 1, 5), 1),
        (date(2022, 3, 20), 3),
        (date(2022, 6, 21), 6),
        (date(2022, 9, 23), 9),
        (date(2022, 11, 7), 11),
    ],
)
def test_month_of_current_solar_term(day: date, expected: int):
    moment = datetime(day.year, day.month, day.day, tzinfo=UTC)
    assert month_of_current_solar_term(moment) == expected


def test_solar_term_names():
    assert len(SOLAR_TERMS) == 24
    assert solar_term_name(0) == "春分"
    assert solar_term_name(6) == "夏至"
    assert solar_term_name(12) == "秋分"
    assert solar_term_name(18) == "冬至"
    assert solar_term_name(24) == solar_term_name(0)
    assert [longitude for _, _, longitude in SOLAR_TERMS] == [15.0 * index for index in range(24)]


def test_daily_motion():
    assert solar_terms.DAILY_MOTION == pytest.approx(0.9856, abs=1e-4)
