from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from riseset.models import Observer


def assert_close_in_time(actual: datetime, expected: datetime, seconds: float) -> None:
    difference = abs((actual - expected).total_seconds())
    assert difference <= seconds, f"{actual.isoformat()} differs from {expected.isoformat()} by {difference:.0f}s"


@pytest.fixture(scope="session")
def london() -> Observer:
    return Observer(latitude=51.509865, longitude=-0.118092)


@pytest.fixture(scope="session")
def new_delhi() -> Observer:
    return Observer(latitude=28.6139, longitude=77.2090)


@pytest.fixture(scope="session")
def riyadh() -> Observer:
    return Observer(latitude=25.0, longitude=46.7, elevation=620)


@pytest.fixture(scope="session")
def wellington() -> Observer:
    return Observer(latitude="41° 17' 11.256'' S", longitude="174° 46' 34.4496'' E", elevation=13)


@pytest.fixture(scope="session")
def wellington_tz() -> timezone:
    return timezone(timedelta(hours=13))


@pytest.fixture(scope="session")
def barcelona() -> Observer:
    return Observer(latitude="41° 23' 24.7380'' N", longitude="2° 9' 14.4252'' E")


@pytest.fixture(scope="session")
def greenwich() -> Observer:
    return Observer(latitude=51.4733, longitude=-0.0008333)


@pytest.fixture(scope="session")
def svalbard() -> Observer:
    return Observer(latitude=78.2232, longitude=15.6469, elevation=0.0)
