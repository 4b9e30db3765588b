import pytest

from apps.matching.utils.distance import distance_miles

from .conftest import NEW_YORK, MIDTOWN


def test_distance_is_symmetric():
    assert distance_miles(*NEW_YORK, *MIDTOWN) == pytest.approx(distance_miles(*MIDTOWN, *NEW_YORK))


def test_distance_to_self_is_zero():
    assert distance_miles(*NEW_YORK, *NEW_YORK) == 0


def test_point_about_five_km_away():
    # ~0.045 degrees of latitude is roughly 5 km
    distance = distance_miles(40.7128, -74.0060, 40.7578, -74.0060)
    assert 0 < distance < 5


def test_new_york_to_midtown():
    assert round(distance_miles(*NEW_YORK, *MIDTOWN), 1) == 3.4


def test_antipodal_points_do_not_fail():
    distance = distance_miles(0, 0, 0, 180)
    assert distance == pytest.approx(3959 * 3.141592653589793, rel=1e-6)
