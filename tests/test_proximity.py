import math
from datetime import date

from proximity import PROXIMITY_THRESHOLD_DEGREES, detect_proximity, squared_degree_distance
from records import PointRecord, VesselPresence

TURTLE = PointRecord(latitude=45.0, longitude=-62.0, time_index=0)


def _vessel(lon, lat=45.0):
    return VesselPresence(lat, lon, 0, date(2020, 3, 1), 1.0)


def test_vessel_within_threshold():
    assert detect_proximity([TURTLE], [_vessel(-61.8)], 0.5)


def test_vessel_outside_threshold():
    assert not detect_proximity([TURTLE], [_vessel(-60.0)], 0.5)


def test_boundary_is_not_an_alert():
    # exactly on the threshold: strict less-than
    assert not detect_proximity([TURTLE], [_vessel(-61.0)], 1.0)


def test_empty_subsets():
    assert not detect_proximity([], [_vessel(-61.8)], 0.5)
    assert not detect_proximity([TURTLE], [], 0.5)
    assert not detect_proximity([], [], 0.5)


def test_planar_degree_distance():
    assert math.isclose(squared_degree_distance(TURTLE, _vessel(-61.7, 45.4)), 0.25)


def test_any_pair_triggers():
    turtles = [PointRecord(10.0, 10.0, 0), TURTLE]
    vessels = [_vessel(0.0, 0.0), _vessel(-62.1, 45.1)]
    assert detect_proximity(turtles, vessels, PROXIMITY_THRESHOLD_DEGREES)


def test_nan_coordinates_never_alert():
    turtle = PointRecord(math.nan, -62.0, 0)
    assert not detect_proximity([turtle], [_vessel(-62.0)], 0.5)
