"""Tests for the game timer and move counter."""

from playzzle.timer import GameTimer, MoveCounter, format_time


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestFormatTime:
    """Tests for MM:SS formatting."""

    def test_zero(self):
        assert format_time(0) == "00:00"

    def test_minutes_and_seconds(self):
        assert format_time(75) == "01:15"

    def test_minutes_not_capped(self):
        """Test that an hour is shown as 60 minutes."""
        assert format_time(3600) == "60:00"


class TestGameTimer:
    """Tests for GameTimer class."""

    def test_initial_state(self):
        timer = GameTimer(clock=FakeClock())

        assert timer.seconds == 0
        assert not timer.is_active

    def test_accrues_whole_seconds(self):
        clock = FakeClock()
        timer = GameTimer(clock=clock)

        timer.start()
        clock.advance(5.7)

        assert timer.is_active
        assert timer.seconds == 5

    def test_pause_freezes_time(self):
        """Test that paused time is not counted but not lost either."""
        clock = FakeClock()
        timer = GameTimer(clock=clock)

        timer.start()
        clock.advance(5)
        timer.pause()
        clock.advance(100)

        assert timer.seconds == 5
        assert not timer.is_active

        timer.start()
        clock.advance(3)

        assert timer.seconds == 8

    def test_start_twice_keeps_running(self):
        clock = FakeClock()
        timer = GameTimer(clock=clock)

        timer.start()
        clock.advance(4)
        timer.start()
        clock.advance(4)

        assert timer.seconds == 8

    def test_stop_then_reset(self):
        clock = FakeClock()
        timer = GameTimer(clock=clock)

        timer.start()
        clock.advance(12)
        timer.stop()

        assert timer.seconds == 12

        timer.reset()

        assert timer.seconds == 0
        assert not timer.is_active

    def test_format(self):
        clock = FakeClock()
        timer = GameTimer(clock=clock)
        timer.start()
        clock.advance(61)

        assert timer.format() == "01:01"


class TestMoveCounter:
    """Tests for MoveCounter class."""

    def test_increment_and_reset(self):
        counter = MoveCounter()

        assert counter.increment() == 1
        assert counter.increment() == 2

        counter.reset()

        assert counter.count == 0
