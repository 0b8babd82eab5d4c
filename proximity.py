"""Turtle/vessel proximity alert."""

from __future__ import annotations

# ~55 km of latitude; planar degree distance, advisory only
PROXIMITY_THRESHOLD_DEGREES = 0.5


def squared_degree_distance(a, b):
    """Planar squared distance in degree space: dlon^2 + dlat^2."""
    dlon = a.longitude - b.longitude
    dlat = a.latitude - b.latitude
    return dlon * dlon + dlat * dlat


def detect_proximity(turtles, vessels, threshold_degrees=PROXIMITY_THRESHOLD_DEGREES):
    """
    Check whether any vessel lies within the threshold of any turtle

    Args:
        turtles: Turtle sightings in the active window
        vessels: Vessel presence records in the active window
        threshold_degrees: Alert radius in degrees

    Returns:
        alert: True on the first pair strictly closer than the threshold
    """
    if not turtles or not vessels:
        return False

    threshold_sq = threshold_degrees * threshold_degrees
    for vessel in vessels:
        for turtle in turtles:
            # NaN coordinates compare False and never raise an alert
            if squared_degree_distance(vessel, turtle) < threshold_sq:
                return True
    return False
