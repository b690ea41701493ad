import gc

import pytest

from springmotion.streams.observable import MotionObservable, MotionState, flatten
from springmotion.streams.runtime import AttributeProperty, MotionRuntime


class Box:
    def __init__(self):
        self.x = None


class ManualSource:
    """Stream whose producer is driven by the test."""

    def __init__(self):
        self.observers = []
        self.disconnects = 0
        self.stream = MotionObservable(self._connect)

    def _connect(self, observer):
        self.observers.append(observer)

        def disconnect():
            self.observers.remove(observer)
            self.disconnects += 1

        return disconnect

    def emit(self, value):
        for obs in list(self.observers):
            obs.on_next(value)

    def set_state(self, state):
        for obs in list(self.observers):
            obs.on_state(state)


class DictEntry:
    def __init__(self, key):
        self.key = key

    def get(self, target):
        return target[self.key]

    def set(self, target, value):
        target[self.key] = value


def test_write_forwards_values_to_accessor():
    runtime = MotionRuntime()
    source = ManualSource()
    box = Box()
    sub = runtime.write(source.stream, box, AttributeProperty("x"))
    source.emit(3)
    assert box.x == 3
    assert runtime.subscription_count(box) == 1
    sub.unsubscribe()
    assert source.disconnects == 1
    assert runtime.subscription_count() == 0
    source.emit(4)
    assert box.x == 3


def test_write_requires_accessor():
    with pytest.raises(ValueError):
        MotionRuntime().write(ManualSource().stream, Box(), None)


def test_is_active_tracks_stream_states():
    runtime = MotionRuntime()
    a, b = ManualSource(), ManualSource()
    first = Box()
    runtime.write(a.stream, first, AttributeProperty("x"))
    box = Box()
    runtime.write(b.stream, box, AttributeProperty("x"))
    seen = []
    runtime.is_active.subscribe(seen.append)
    a.set_state(MotionState.ACTIVE)
    b.set_state(MotionState.ACTIVE)
    a.set_state(MotionState.AT_REST)
    assert runtime.is_active.read() is True
    runtime.detach(box)
    assert runtime.is_active.read() is False
    assert seen == [False, True, False]


def test_collected_target_releases_subscription():
    runtime = MotionRuntime()
    source = ManualSource()
    box = Box()
    runtime.write(source.stream, box, AttributeProperty("x"))
    del box
    gc.collect()
    assert runtime.subscription_count() == 0
    assert source.disconnects == 1


def test_non_weakrefable_target_is_held_until_detach():
    runtime = MotionRuntime()
    source = ManualSource()
    target = {"x": 0}
    runtime.write(source.stream, target, DictEntry("x"))
    source.emit(9)
    assert target["x"] == 9
    assert runtime.detach(target) == 1
    assert source.disconnects == 1


def test_dispose_releases_all_targets():
    runtime = MotionRuntime()
    sources = [ManualSource() for _ in range(3)]
    boxes = [Box() for _ in range(3)]
    for source, box in zip(sources, boxes):
        runtime.write(source.stream, box, AttributeProperty("x"))
    runtime.dispose()
    assert runtime.subscription_count() == 0
    assert [s.disconnects for s in sources] == [1, 1, 1]


def test_flatten_passes_values_and_states_through():
    source = ManualSource()
    values, states = [], []
    sub = flatten(source.stream).subscribe(values.append, states.append)
    source.emit(1)
    source.set_state(MotionState.ACTIVE)
    source.emit(2)
    assert values == [1, 2]
    assert states == [MotionState.ACTIVE]
    sub.unsubscribe()
    assert source.disconnects == 1


def test_failed_subscribe_leaves_no_entry():
    def connect(observer):
        observer.on_state(MotionState.ACTIVE)
        raise RuntimeError("connect failed")

    runtime = MotionRuntime()
    box = Box()
    with pytest.raises(RuntimeError):
        runtime.write(MotionObservable(connect), box, AttributeProperty("x"))
    assert runtime.subscription_count() == 0
    assert runtime.is_active.read() is False
    assert runtime.detach(box) == 0
