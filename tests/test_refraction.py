from __future__ import annotations

import pytest

from riseset.refraction import REFRACTION_ZENITH_LIMIT, refraction_at_elevation, refraction_at_zenith


def test_no_refraction_beyond_zenith_limit():
    assert refraction_at_zenith(REFRACTION_ZENITH_LIMIT + 0.001) == 0.0
    assert refraction_at_zenith(90.833) == 0.0
    assert refraction_at_zenith(120.0) == 0.0


def test_refraction_is_positive_above_the_limit():
    assert refraction_at_zenith(REFRACTION_ZENITH_LIMIT) > 0.0
    assert refraction_at_zenith(45.0) == pytest.approx(58.1 / 3600.0, abs=1e-3)


@pytest.mark.parametrize("boundary", [5.0, -0.575])
def test_bands_agree_at_boundaries(boundary: float):
    below = refraction_at_elevation(boundary)
    above = refraction_at_elevation(boundary + 1e-9)
    assert above == pytest.approx(below, abs=3.0)


def test_refraction_decreases_with_elevation():
    values = [refraction_at_elevation(elevation) for elevation in (1.0, 5.0, 10.0, 30.0, 60.0)]
    assert values == sorted(values, reverse=True)
