from datetime import date

import pytest

from records import PointRecord, RecordStore, TREND, VesselPresence


@pytest.fixture
def min_date():
    return date(2020, 3, 1)


@pytest.fixture
def store(min_date):
    sightings = (
        PointRecord(45.0, -62.0, 0),
        PointRecord(45.5, -62.9, 8),
        PointRecord(46.6, -64.4, 23),
    )
    trends = (
        PointRecord(45.35, -62.6, 5, TREND),
        PointRecord(45.55, -63.0, 9, TREND),
    )
    vessels = (
        VesselPresence(45.0, -61.8, 1, date(2020, 3, 2), 3.5, "v001"),
        VesselPresence(47.5, -61.0, 15, date(2020, 3, 16), 2.0, "v004"),
    )
    return RecordStore(
        min_date=min_date,
        max_time_index=27,
        sightings=sightings,
        trends=trends,
        vessels=vessels,
    )
