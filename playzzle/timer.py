"""Elapsed-time clock and move counter shared by both puzzle variants."""

import time
from typing import Callable, Optional


def format_time(total_seconds: int) -> str:
    """Format a number of seconds as MM:SS."""
    minutes, seconds = divmod(int(total_seconds), 60)
    return f"{minutes:02d}:{seconds:02d}"


class GameTimer:
    """
    Monotonic elapsed-seconds clock with start/pause/stop/reset.

    Time accrues only between start() and the next pause()/stop(). Whole
    seconds are reported, matching a once-per-second tick.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Initialize the timer.

        Args:
            clock: Callable returning monotonic seconds (defaults to time.monotonic)
        """
        self._clock = clock or time.monotonic
        self._accrued = 0.0
        self._started_at: Optional[float] = None

    @property
    def is_active(self) -> bool:
        """Whether time is currently accruing."""
        return self._started_at is not None

    @property
    def elapsed(self) -> float:
        """Elapsed time in fractional seconds."""
        if self._started_at is None:
            return self._accrued
        return self._accrued + (self._clock() - self._started_at)

    @property
    def seconds(self) -> int:
        """Elapsed whole seconds."""
        return int(self.elapsed)

    def start(self) -> None:
        if self._started_at is not None:
            return
        self._started_at = self._clock()

    def pause(self) -> None:
        if self._started_at is None:
            return
        self._accrued += self._clock() - self._started_at
        self._started_at = None

    def stop(self) -> None:
        self.pause()

    def reset(self) -> None:
        self.stop()
        self._accrued = 0.0

    def format(self) -> str:
        return format_time(self.seconds)


class MoveCounter:
    """Counts registered player actions. Never decremented."""

    def __init__(self):
        self.count = 0

    def increment(self) -> int:
        self.count += 1
        return self.count

    def reset(self) -> None:
        self.count = 0
