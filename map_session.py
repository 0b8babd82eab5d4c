"""Owning context for the map view: data, cursor, mode and playback.

Every view is derived through one fixed pipeline, run on demand:
TimeWindow -> filtered layers -> proximity alert -> ViewSnapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import proximity
import time_filter
import time_window
from playback import Playback

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """What the rendering layer needs for one frame."""

    mode: str
    cursor: float
    window: time_window.TimeWindow
    label: str
    layers: time_filter.FilteredLayers
    alert: bool

    @property
    def points_in_window(self):
        return self.layers.points_in_window


class MapSession:
    """Mutable state for one viewer. Pure computations receive it explicitly."""

    def __init__(self, threshold_degrees=proximity.PROXIMITY_THRESHOLD_DEGREES,
                 playback=None, mode=time_window.CONTINUOUS):
        if mode not in time_window.CURSOR_MODES:
            raise ValueError(f"Unknown cursor mode: {mode!r}")
        self.store = None
        self.cursor = 0.0
        self.mode = mode
        self.threshold_degrees = threshold_degrees
        self.playback = playback if playback is not None else Playback()

    @property
    def is_loaded(self):
        return self.store is not None

    @property
    def min_date(self):
        return self.store.min_date if self.store is not None else None

    @property
    def max_cursor(self):
        if self.store is None:
            return 0
        return time_window.max_cursor(self.store.max_time_index, self.mode)

    def load(self, store):
        """Replace the record store and restart from the first window."""
        self.store = store
        self.cursor = 0.0
        logger.info("Session loaded %s", store.summary())

    def set_cursor(self, value):
        value = time_window.clamp_cursor(float(value), self.max_cursor)
        if self.mode == time_window.WEEK:
            value = int(value)
        self.cursor = value
        return self.cursor

    def set_mode(self, mode):
        """Switch cursor mode, keeping the same window start where possible."""
        if mode not in time_window.CURSOR_MODES:
            raise ValueError(f"Unknown cursor mode: {mode!r}")
        if mode == self.mode:
            return
        start_day = time_window.window_for(self.cursor, self.mode).start_day
        self.mode = mode
        if mode == time_window.WEEK:
            self.set_cursor(start_day // time_window.WINDOW_LENGTH_DAYS)
        else:
            self.set_cursor(start_day)

    def step_week(self, delta):
        """Previous/next week. Only meaningful in week mode."""
        if self.mode != time_window.WEEK:
            raise ValueError("step_week requires week mode")
        self.cursor = time_window.step_week(self.cursor, delta, self.max_cursor)
        return self.cursor

    def tick(self):
        """One playback tick. Stopped playback or missing data leaves the cursor alone."""
        if self.store is None:
            return self.cursor
        self.cursor = self.playback.tick(self.cursor, self.max_cursor)
        return self.cursor

    def label(self):
        return time_window.format_window_label(self.cursor, self.min_date, self.mode)

    def snapshot(self):
        """Run the window/filter/alert pipeline; None until data is fully loaded."""
        if self.store is None:
            return None

        window = time_window.window_for(self.cursor, self.mode)
        layers = time_filter.filter_layers(self.store, window)
        alert = proximity.detect_proximity(layers.sightings, layers.vessels, self.threshold_degrees)
        return ViewSnapshot(
            mode=self.mode,
            cursor=self.cursor,
            window=window,
            label=self.label(),
            layers=layers,
            alert=alert,
        )
