import pytest

from springmotion.streams.clock import FrameClock, default_clock


class CountingClock(FrameClock):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.starts = 0
        self.stops = 0

    def _start(self):
        self.starts += 1

    def _stop(self):
        self.stops += 1


def test_invalid_interval():
    with pytest.raises(ValueError):
        FrameClock(0)


def test_tick_uses_fixed_interval_unless_overridden():
    clock = FrameClock(0.02)
    seen = []
    clock.add_callback(seen.append)
    assert clock.tick() == 1
    clock.tick(0.5)
    assert seen == [0.02, 0.5]
    assert clock.frame_count == 2
    with pytest.raises(ValueError):
        clock.tick(0)


def test_duplicate_registration_is_ignored():
    clock = FrameClock()
    cb = lambda dt: None  # noqa: E731
    clock.add_callback(cb)
    clock.add_callback(cb)
    assert clock.callback_count() == 1
    clock.remove_callback(cb)
    clock.remove_callback(cb)
    assert clock.idle


def test_callbacks_changed_during_tick():
    clock = FrameClock()
    order = []

    def late(_dt):
        order.append("late")

    def first(_dt):
        order.append("first")
        clock.remove_callback(second)
        clock.add_callback(late)

    def second(_dt):
        order.append("second")

    clock.add_callback(first)
    clock.add_callback(second)
    clock.tick()
    assert order == ["first"]
    clock.remove_callback(first)
    clock.tick()
    assert order == ["first", "late"]


def test_start_and_stop_hooks():
    clock = CountingClock()
    a = lambda dt: None  # noqa: E731
    b = lambda dt: None  # noqa: E731
    clock.add_callback(a)
    clock.add_callback(b)
    assert clock.starts == 1
    clock.remove_callback(a)
    assert clock.stops == 0
    clock.remove_callback(b)
    assert clock.stops == 1


def test_run_until_idle():
    clock = FrameClock()
    remaining = {"n": 3}

    def countdown(_dt):
        remaining["n"] -= 1
        if remaining["n"] == 0:
            clock.remove_callback(countdown)

    clock.add_callback(countdown)
    assert clock.run_until_idle() == 3

    clock.add_callback(lambda dt: None)
    with pytest.raises(RuntimeError):
        clock.run_until_idle(max_frames=5)


def test_default_clock_is_shared():
    assert default_clock() is default_clock()
