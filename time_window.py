"""Time window model: cursor -> 7-day window and its display label."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta

WINDOW_LENGTH_DAYS = 7

CONTINUOUS = "continuous"
WEEK = "week"
CURSOR_MODES = (CONTINUOUS, WEEK)

LOADING_LABEL = "Loading Dates..."

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Half-open day range [start_day, end_day_exclusive)."""

    start_day: int
    end_day_exclusive: int

    def contains(self, time_index):
        return self.start_day <= time_index < self.end_day_exclusive


def window_for_cursor(cursor):
    """Window for a continuous cursor. The fractional part never widens the window."""
    start_day = math.floor(cursor)
    return TimeWindow(start_day, start_day + WINDOW_LENGTH_DAYS)


def window_for_week(week_index):
    start_day = int(week_index) * WINDOW_LENGTH_DAYS
    return TimeWindow(start_day, start_day + WINDOW_LENGTH_DAYS)


def window_for(cursor, mode=CONTINUOUS):
    if mode == CONTINUOUS:
        return window_for_cursor(cursor)
    if mode == WEEK:
        return window_for_week(cursor)
    raise ValueError(f"Unknown cursor mode: {mode!r}")


def hour_of_day(cursor):
    """Hour within the current day, truncated: 10.5 -> 12."""
    # round off float noise first: 32/3 would otherwise truncate to 15h
    return min(int(round((cursor - math.floor(cursor)) * 24, 9)), 23)


def day_within_week(cursor):
    """1-indexed day of the 7-day cycle the cursor's day falls on."""
    return math.floor(cursor) % WINDOW_LENGTH_DAYS + 1


def format_date(d):
    """Format as 'Mar 1, 2020' regardless of locale."""
    return f"{MONTH_ABBREVIATIONS[d.month - 1]} {d.day}, {d.year}"


def format_window_label(cursor, min_date, mode=CONTINUOUS):
    """
    Human-readable label for the window selected by the cursor

    Args:
        cursor: Continuous day cursor or week index, depending on mode
        min_date: Dataset reference date, or None while data is loading
        mode: CONTINUOUS or WEEK

    Returns:
        label: e.g. 'Week: Mar 11, 2020 - Mar 17, 2020 (Day 4 @ 12h)'
    """
    if min_date is None:
        return LOADING_LABEL

    window = window_for(cursor, mode)
    start = min_date + timedelta(days=window.start_day)
    end = start + timedelta(days=WINDOW_LENGTH_DAYS - 1)
    label = f"Week: {format_date(start)} - {format_date(end)}"

    if mode == CONTINUOUS:
        label += f" (Day {day_within_week(cursor)} @ {hour_of_day(cursor)}h)"
    return label


def max_cursor(max_time_index, mode=CONTINUOUS):
    """Upper slider bound: last day index, or last week index in week mode."""
    if mode == WEEK:
        return max_time_index // WINDOW_LENGTH_DAYS
    return max_time_index


def clamp_cursor(value, upper):
    return min(max(value, 0), upper)


def step_week(week_index, delta, max_week):
    """Previous/next week navigation, clamped to [0, max_week]."""
    return clamp_cursor(int(week_index) + delta, max_week)
