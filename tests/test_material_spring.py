import pytest

from springmotion.interactions.material_spring import (
    DEFAULT_FRICTION,
    DEFAULT_FRICTION_PROPERTY,
    DEFAULT_TENSION,
    DEFAULT_TENSION_PROPERTY,
    MaterialSpring,
)
from springmotion.springs.vectorizers import FloatVectorizer
from springmotion.streams.clock import FrameClock
from springmotion.streams.reactive import ReactiveProperty, ReactiveReadable
from springmotion.streams.runtime import AttributeProperty, MotionRuntime


class Card:
    def __init__(self):
        self.opacity = 0.0
        self.history = []

    def __setattr__(self, name, value):
        if name == "opacity" and "history" in self.__dict__:
            self.history.append(value)
        super().__setattr__(name, value)


def _opacity_spring(clock, **kw):
    return MaterialSpring.from_values(
        AttributeProperty("opacity"), FloatVectorizer(), 1.0, 0.0, 0.0, 0.001, clock=clock, **kw
    )


def test_default_constants():
    assert DEFAULT_TENSION == 342.0
    assert DEFAULT_FRICTION == 30.0
    assert DEFAULT_TENSION_PROPERTY.read() == 342.0
    assert DEFAULT_FRICTION_PROPERTY.read() == 30.0
    assert not hasattr(DEFAULT_TENSION_PROPERTY, "write")
    assert MaterialSpring.DEFAULT_TENSION == DEFAULT_TENSION


def test_from_values_wraps_and_defaults():
    spring = _opacity_spring(FrameClock())
    for param in (
        spring.destination,
        spring.initial_value,
        spring.initial_velocity,
        spring.tension,
        spring.friction,
    ):
        assert isinstance(param, ReactiveProperty)
    assert spring.tension.read() == 342.0
    assert spring.friction.read() == 30.0
    assert spring.threshold.read() == 0.001


def test_reactive_constructor_defaults_tension_and_friction():
    spring = MaterialSpring(
        AttributeProperty("opacity"),
        FloatVectorizer(),
        ReactiveProperty.of(1.0),
        ReactiveProperty.of(0.0),
        ReactiveProperty.of(0.0),
        ReactiveReadable.of(0.01),
        clock=FrameClock(),
    )
    assert spring.tension.read() == DEFAULT_TENSION
    assert spring.friction.read() == DEFAULT_FRICTION
    spring.tension.write(500.0)
    assert DEFAULT_TENSION_PROPERTY.read() == 342.0


def test_missing_collaborators_fail_fast():
    with pytest.raises(ValueError):
        MaterialSpring.from_values(None, FloatVectorizer(), 1.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        MaterialSpring.from_values(AttributeProperty("x"), None, 1.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        MaterialSpring(
            AttributeProperty("x"),
            FloatVectorizer(),
            None,
            ReactiveProperty.of(0.0),
            ReactiveProperty.of(0.0),
            ReactiveReadable.of(0.01),
        )


def test_threshold_is_read_only():
    spring = _opacity_spring(FrameClock())
    with pytest.raises(AttributeError):
        spring.threshold = ReactiveReadable.of(1.0)


def test_rebinding_accepts_raw_values_but_not_none():
    spring = _opacity_spring(FrameClock())
    spring.friction = 12.0
    assert isinstance(spring.friction, ReactiveProperty)
    assert spring.friction.read() == 12.0
    shared = ReactiveProperty.of(0.5)
    spring.destination = shared
    assert spring.destination is shared
    with pytest.raises(ValueError):
        spring.tension = None


def test_apply_writes_stream_onto_target():
    clock = FrameClock()
    runtime = MotionRuntime()
    card = Card()
    runtime.add(_opacity_spring(clock), card)
    assert runtime.is_active.read() is True
    assert card.history == [0.0]
    clock.run_until_idle()
    assert card.opacity == 1.0
    assert len(card.history) > 2
    assert runtime.is_active.read() is False


def test_external_parameter_drives_destination():
    clock = FrameClock()
    runtime = MotionRuntime()
    target = ReactiveProperty.of(1.0)
    spring = MaterialSpring(
        AttributeProperty("opacity"),
        FloatVectorizer(),
        target,
        ReactiveProperty.of(0.0),
        ReactiveProperty.of(0.0),
        ReactiveReadable.of(0.001),
        clock=clock,
    )
    card = Card()
    runtime.add(spring, card)
    clock.run_until_idle()
    target.write(0.25)
    assert runtime.is_active.read() is True
    clock.run_until_idle()
    assert card.opacity == 0.25


def test_detach_stops_ticks_and_reattach_starts_fresh():
    clock = FrameClock()
    runtime = MotionRuntime()
    spring = _opacity_spring(clock)
    card = Card()
    runtime.add(spring, card)
    for _ in range(5):
        clock.tick()
    assert runtime.detach(card) == 1
    assert clock.idle
    assert runtime.subscription_count(card) == 0
    assert runtime.is_active.read() is False
    frozen = card.opacity
    clock.tick()
    assert card.opacity == frozen

    runtime.add(spring, card)
    assert card.opacity == 0.0
    clock.run_until_idle()
    assert card.opacity == 1.0
