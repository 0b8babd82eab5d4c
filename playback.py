"""Playback driver: advances the time cursor one step per animation tick."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MIN_SPEED = 0.1
MAX_SPEED = 5.0
SPEED_STEP = 0.1
ASSUMED_TICKS_PER_SECOND = 60


class PlaybackState(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"


def clamp_speed(speed):
    return min(max(float(speed), MIN_SPEED), MAX_SPEED)


def advance_cursor(cursor, speed, max_cursor, ticks_per_second=ASSUMED_TICKS_PER_SECOND):
    """
    Move the cursor forward by one tick's worth of days

    The step is speed / ticks_per_second no matter how much wall-clock time
    passed since the previous tick; missed ticks are never caught up.

    Args:
        cursor: Current cursor (days)
        speed: Days per second of playback at the assumed tick rate
        max_cursor: Upper cursor bound
        ticks_per_second: Assumed host tick rate

    Returns:
        new_cursor: Advanced cursor, or exactly 0.0 once it passes max_cursor
    """
    new_cursor = cursor + speed / ticks_per_second
    if new_cursor > max_cursor:
        # loop playback; overshoot is discarded
        return 0.0
    return new_cursor


@dataclass
class Playback:
    """Play/pause state and speed. The cursor itself lives with the caller."""

    speed: float = 1.0
    state: PlaybackState = PlaybackState.STOPPED
    ticks_per_second: float = ASSUMED_TICKS_PER_SECOND

    def __post_init__(self):
        self.speed = clamp_speed(self.speed)

    @property
    def is_playing(self):
        return self.state is PlaybackState.PLAYING

    def play(self):
        self.state = PlaybackState.PLAYING

    def pause(self):
        self.state = PlaybackState.STOPPED

    def toggle(self):
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def set_speed(self, speed):
        self.speed = clamp_speed(speed)

    def tick(self, cursor, max_cursor):
        if not self.is_playing:
            return cursor
        return advance_cursor(cursor, self.speed, max_cursor, self.ticks_per_second)
