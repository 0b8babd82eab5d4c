"""Fetch and parse the metadata, turtle and vessel data sources.

All three sources are fetched concurrently and joined: either every source
loads and parses, or the load fails with DataLoadError and no store is built.
"""

from __future__ import annotations

import asyncio
import csv
import io
import json
import logging
import math
from datetime import date
from pathlib import Path

import requests

from records import PointRecord, RecordStore, SIGHTING, TREND, VesselPresence, split_by_kind
from time_filter import vessel_time_index

logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """A data source could not be fetched or parsed. Loads are never retried."""


def _is_url(source):
    return str(source).startswith(('http://', 'https://'))


def fetch_text(source, timeout_seconds=30):
    """Read a source as text from an http(s) URL or a local path."""
    if _is_url(source):
        response = requests.get(source, timeout=timeout_seconds)
        response.raise_for_status()
        return response.text
    return Path(source).read_text(encoding='utf-8')


def parse_metadata(text):
    """
    Parse the metadata JSON

    Returns:
        (min_date, max_time_index)

    Raises:
        DataLoadError: If minDate / maxTimeIndex are missing or invalid
    """
    try:
        meta = json.loads(text)
        min_date = date.fromisoformat(str(meta['minDate']).strip()[:10])
        max_time_index = int(meta['maxTimeIndex'])
    except (ValueError, KeyError, TypeError) as exc:
        raise DataLoadError(f"Invalid metadata: {exc}") from exc
    return min_date, max_time_index


def _loose_float(value):
    # sighting rows are not validated; bad numbers become NaN
    try:
        return float(value.strip())
    except (ValueError, AttributeError):
        return math.nan


def _parse_int(value):
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        # '12.0' style exports; truncate toward zero like an integer parse
        return int(float(text))


def _data_rows(text):
    """CSV rows with the header row dropped and blank lines skipped."""
    reader = csv.reader(io.StringIO(text.strip()))
    next(reader, None)
    for row in reader:
        if row:
            yield row


def parse_turtle_csv(text, min_date=None, cutoff_date=None):
    """
    Parse the sighting/trend CSV (latitude, longitude, time_index, is_trend)

    Args:
        text: CSV text including its header row
        min_date: Dataset reference date, needed only when cutoff_date is set
        cutoff_date: Rows dated before this day are dropped (None keeps all)

    Returns:
        (sightings, trends) as tuples of PointRecord
    """
    cutoff_index = None
    if cutoff_date is not None and min_date is not None:
        cutoff_index = vessel_time_index(cutoff_date, min_date)

    records = []
    dropped = 0
    nan_rows = 0
    for row in _data_rows(text):
        try:
            time_index = _parse_int(row[2])
        except (ValueError, OverflowError, IndexError):
            dropped += 1
            continue
        if cutoff_index is not None and time_index < cutoff_index:
            continue

        latitude = _loose_float(row[0])
        longitude = _loose_float(row[1])
        if math.isnan(latitude) or math.isnan(longitude):
            nan_rows += 1
        is_trend = len(row) > 3 and row[3].strip().lower() == 'true'
        records.append(PointRecord(
            latitude=latitude,
            longitude=longitude,
            time_index=time_index,
            kind=TREND if is_trend else SIGHTING,
        ))

    if dropped:
        logger.warning("Dropped %s turtle rows without an integer time_index", dropped)
    if nan_rows:
        logger.warning("%s turtle rows have non-numeric coordinates", nan_rows)
    return split_by_kind(records)


def parse_vessel_csv(text, min_date):
    """
    Parse the vessel presence CSV (latitude, longitude, date, id, presence_hours)

    Rows with non-numeric coordinates, an unreadable date or a presence_hours
    value that is not a finite non-negative number are dropped.
    """
    vessels = []
    dropped = 0
    for row in _data_rows(text):
        try:
            latitude = float(row[0])
            longitude = float(row[1])
            record_date = date.fromisoformat(row[2].strip()[:10])
            presence_hours = float(row[4])
        except (ValueError, IndexError):
            dropped += 1
            continue
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            dropped += 1
            continue
        if not math.isfinite(presence_hours) or presence_hours < 0:
            dropped += 1
            continue

        vessels.append(VesselPresence(
            latitude=latitude,
            longitude=longitude,
            time_index=vessel_time_index(record_date, min_date),
            date=record_date,
            presence_hours=presence_hours,
            vessel_id=row[3].strip(),
        ))

    if dropped:
        logger.debug("Dropped %s malformed vessel rows", dropped)
    return tuple(vessels)


async def _fetch(source, timeout_seconds):
    try:
        return await asyncio.to_thread(fetch_text, source, timeout_seconds)
    except (OSError, ValueError, requests.RequestException) as exc:
        raise DataLoadError(f"Could not fetch {source}: {exc}") from exc


async def load_record_store_async(config):
    """Fetch metadata, turtle and vessel sources concurrently, then parse."""
    logger.info("Loading data: %s, %s, %s",
                config.metadata_source, config.sightings_source, config.vessels_source)

    meta_text, turtle_text, vessel_text = await asyncio.gather(
        _fetch(config.metadata_source, config.timeout_seconds),
        _fetch(config.sightings_source, config.timeout_seconds),
        _fetch(config.vessels_source, config.timeout_seconds),
    )

    min_date, max_time_index = parse_metadata(meta_text)
    try:
        sightings, trends = parse_turtle_csv(turtle_text, min_date, config.cutoff_date)
        vessels = parse_vessel_csv(vessel_text, min_date)
    except (csv.Error, ValueError) as exc:
        raise DataLoadError(f"Could not parse CSV data: {exc}") from exc

    store = RecordStore(
        min_date=min_date,
        max_time_index=max_time_index,
        sightings=sightings,
        trends=trends,
        vessels=vessels,
    )
    logger.info("Loaded %s", store.summary())
    return store


def load_record_store(config):
    """Blocking wrapper around load_record_store_async.

    Raises:
        DataLoadError: If any source fails; nothing is partially loaded.
    """
    try:
        return asyncio.run(load_record_store_async(config))
    except DataLoadError as exc:
        logger.error("Data load failed: %s", exc)
        raise
