"""Select the records whose day index falls inside the active time window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from records import PointRecord, VesselPresence


@dataclass(frozen=True, slots=True)
class FilteredLayers:
    """Per-class subsets for one window, all filtered with the same window."""

    sightings: Tuple[PointRecord, ...]
    trends: Tuple[PointRecord, ...]
    vessels: Tuple[VesselPresence, ...]

    @property
    def points_in_window(self):
        return len(self.sightings)


def vessel_time_index(record_date, min_date):
    """Whole days between min_date and the record date (negative before min_date)."""
    return (record_date - min_date).days


def filter_in_window(records, window):
    """Keep records with window.start_day <= time_index < window.end_day_exclusive.

    Returns a new tuple in input order; the input is not modified.
    """
    start = window.start_day
    end = window.end_day_exclusive
    return tuple(r for r in records if start <= r.time_index < end)


def filter_layers(store, window):
    """Apply one window to sightings, trends and vessel presence alike."""
    return FilteredLayers(
        sightings=filter_in_window(store.sightings, window),
        trends=filter_in_window(store.trends, window),
        vessels=filter_in_window(store.vessels, window),
    )
