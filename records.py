"""In-memory record store for turtle sightings, trend points and vessel presence."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Tuple

SIGHTING = "sighting"
TREND = "trend"


@dataclass(frozen=True, slots=True)
class PointRecord:
    """A turtle position.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        time_index: Day offset from the dataset's min_date.
        kind: SIGHTING for an observed occurrence, TREND for a predicted path point.
    """

    latitude: float
    longitude: float
    time_index: int
    kind: str = SIGHTING

    @property
    def is_trend(self):
        return self.kind == TREND


@dataclass(frozen=True, slots=True)
class VesselPresence:
    """Fishing vessel presence at a location on a given day."""

    latitude: float
    longitude: float
    time_index: int
    date: date
    presence_hours: float
    vessel_id: str = ""


@dataclass(frozen=True, slots=True)
class RecordStore:
    """Everything loaded from one data-source load. Never mutated afterwards."""

    min_date: date
    max_time_index: int
    sightings: Tuple[PointRecord, ...] = field(default_factory=tuple)
    trends: Tuple[PointRecord, ...] = field(default_factory=tuple)
    vessels: Tuple[VesselPresence, ...] = field(default_factory=tuple)

    @property
    def max_week_index(self):
        return self.max_time_index // 7

    def summary(self):
        return {
            'min_date': self.min_date.isoformat(),
            'max_time_index': self.max_time_index,
            'sightings': len(self.sightings),
            'trends': len(self.trends),
            'vessels': len(self.vessels),
        }


def split_by_kind(records):
    """Split parsed turtle rows into (sightings, trends), keeping file order."""
    sightings = []
    trends = []
    for record in records:
        if record.is_trend:
            trends.append(record)
        else:
            sightings.append(record)
    return tuple(sightings), tuple(trends)
