"""Vectorizing spring source.

Turns a spring configuration into a ``MotionObservable`` of domain values.
Every subscription opens an independent connection that owns one
``SpringSimulator`` per vector component, all driven by the same frame
clock.

Connection lifecycle:
 1. Subscribe to threshold, tension, friction and destination, then to
    initial value and initial velocity. Each subscription immediately
    delivers the current value.
 2. Seed position/velocity from the initial parameters, emit the initial
    value, report ``ACTIVE`` and register on the clock.
 3. Each frame: advance every component, then either emit the reassembled
    value or, when every component is within threshold, snap all of them to
    the destination, emit it exactly, report ``AT_REST`` and leave the clock.
 4. Unsubscribing drops the clock callback, every parameter subscription
    and the simulators.

Parameter writes while connected:
 - destination / tension / friction / threshold: retarget or retune using the
   current physical state; a resting connection wakes only if the rest
   condition no longer holds. A destination moved within threshold of a
   resting connection snaps it onto the new destination and emits that.
 - initial value: overwrite positions, emit them, force simulating.
 - initial velocity: overwrite velocities, force simulating.
Rebinding a parameter on the spring swaps the connection's subscription to
the new parameter, which then behaves like a write of its current value.

Tension and friction may be scalars or per-component sequences.
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Callable, Generic, List, Optional, Protocol, Sequence, TypeVar

from ..reduced_motion import is_reduced_motion
from ..streams.clock import FrameClock, default_clock
from ..streams.observable import MotionObservable, MotionObserver, MotionState
from ..streams.reactive import ReactiveReadable
from ..streams.subscription import Subscription
from .simulator import SpringSimulator, SpringStatus
from .vectorizers import TypeVectorizer, check_vector

__all__ = ["SpringConfiguration", "SpringSource"]

_logger = logging.getLogger(__name__)

T = TypeVar("T")

RebindListener = Callable[[str, ReactiveReadable[Any]], None]

# Initial state comes last so the seed happens against the final
# destination and coefficients.
PARAMETERS = (
    "threshold",
    "tension",
    "friction",
    "destination",
    "initial_value",
    "initial_velocity",
)


class SpringConfiguration(Protocol[T]):  # noqa: D401 - structural
    destination: ReactiveReadable[T]
    initial_value: ReactiveReadable[T]
    initial_velocity: ReactiveReadable[T]
    threshold: ReactiveReadable[float]
    tension: ReactiveReadable[Any]
    friction: ReactiveReadable[Any]

    def observe_rebinding(self, listener: RebindListener) -> Subscription: ...  # pragma: no cover


class SpringSource(Generic[T]):
    def __init__(
        self,
        spring: SpringConfiguration[T],
        vectorizer: TypeVectorizer[T],
        clock: Optional[FrameClock] = None,
    ) -> None:
        if spring is None:
            raise ValueError("a spring configuration is required")
        if vectorizer is None:
            raise ValueError("a vectorizer is required")
        self._spring = spring
        self._vectorizer = vectorizer
        self._clock = clock if clock is not None else default_clock()
        self.stream: MotionObservable[T] = MotionObservable(self._connect)

    @property
    def clock(self) -> FrameClock:
        return self._clock

    def _connect(self, observer: MotionObserver[T]) -> Callable[[], None]:
        connection = _SpringConnection(self._spring, self._vectorizer, self._clock, observer)
        connection.start()
        return connection.stop


class _SpringConnection(Generic[T]):
    def __init__(
        self,
        spring: SpringConfiguration[T],
        vectorizer: TypeVectorizer[T],
        clock: FrameClock,
        observer: MotionObserver[T],
    ) -> None:
        self._spring = spring
        self._vectorizer = vectorizer
        self._clock = clock
        self._observer = observer
        self._dimensions = vectorizer.dimensions
        self._simulators: List[SpringSimulator] = []
        self._param_subs: dict[str, Subscription] = {}
        self._rebind_sub: Optional[Subscription] = None
        self._seed_position: List[float] = []
        self._seed_velocity: List[float] = []
        self._state = MotionState.AT_REST
        self._started = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        self._simulators = [SpringSimulator() for _ in range(self._dimensions)]
        self._rebind_sub = self._spring.observe_rebinding(self._on_rebind)
        try:
            for name in PARAMETERS:
                self._bind(name, getattr(self._spring, name))
            self._started = True
            for sim, x, v in zip(self._simulators, self._seed_position, self._seed_velocity):
                sim.restart(x, v)
            self._emit_positions()
            self._activate()
        except BaseException:
            self.stop()
            raise
        _logger.debug("spring connection started (%d dimension(s))", self._dimensions)

    def stop(self) -> None:
        if self._rebind_sub is not None:
            self._rebind_sub.unsubscribe()
            self._rebind_sub = None
        for sub in self._param_subs.values():
            sub.unsubscribe()
        self._param_subs.clear()
        self._clock.remove_callback(self._on_frame)
        self._simulators = []
        self._started = False
        _logger.debug("spring connection stopped")

    def _bind(self, name: str, parameter: ReactiveReadable[Any]) -> None:
        previous = self._param_subs.pop(name, None)
        if previous is not None:
            previous.unsubscribe()
        self._param_subs[name] = parameter.subscribe(getattr(self, f"_on_{name}"))

    def _on_rebind(self, name: str, parameter: ReactiveReadable[Any]) -> None:
        if name in self._param_subs:
            self._bind(name, parameter)

    # ------------------------------------------------------------------
    # Parameter listeners
    # ------------------------------------------------------------------
    def _per_component(self, name: str, value: Any) -> List[float]:
        if isinstance(value, Real):
            return [float(value)] * self._dimensions
        try:
            return check_vector(value, self._dimensions)
        except ValueError as exc:
            raise ValueError(f"{name}: {exc}") from exc

    def _on_threshold(self, value: float) -> None:
        for sim in self._simulators:
            sim.threshold = value
        self._wake_if_disturbed()

    def _on_tension(self, value: float | Sequence[float]) -> None:
        for sim, k in zip(self._simulators, self._per_component("tension", value)):
            sim.tension = k
        self._wake_if_disturbed()

    def _on_friction(self, value: float | Sequence[float]) -> None:
        for sim, c in zip(self._simulators, self._per_component("friction", value)):
            sim.friction = c
        self._wake_if_disturbed()

    def _on_destination(self, value: T) -> None:
        vector = check_vector(self._vectorizer.to_vector(value), self._dimensions)
        for sim, d in zip(self._simulators, vector):
            sim.destination = d
        if self._started and self._state is MotionState.AT_REST and all(
            sim.status is SpringStatus.AT_REST for sim in self._simulators
        ):
            # Moved within threshold: rest on the new destination instead.
            if any(sim.position != sim.destination for sim in self._simulators):
                for sim in self._simulators:
                    sim.snap_to_rest()
                self._emit_destination()
            return
        self._wake_if_disturbed()

    def _on_initial_value(self, value: T) -> None:
        self._seed_position = check_vector(self._vectorizer.to_vector(value), self._dimensions)
        if not self._started:
            return
        for sim, x in zip(self._simulators, self._seed_position):
            sim.restart(position=x)
        self._emit_positions()
        self._activate()

    def _on_initial_velocity(self, value: T) -> None:
        self._seed_velocity = check_vector(self._vectorizer.to_vector(value), self._dimensions)
        if not self._started:
            return
        for sim, v in zip(self._simulators, self._seed_velocity):
            sim.restart(velocity=v)
        self._activate()

    def _wake_if_disturbed(self) -> None:
        if not self._started or self._state is MotionState.ACTIVE:
            return
        if any(sim.status is SpringStatus.SIMULATING for sim in self._simulators):
            self._activate()

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    def _on_frame(self, dt: float) -> None:
        if is_reduced_motion():
            self._settle()
            return
        for sim in self._simulators:
            sim.advance(dt)
        if all(sim.is_within_threshold() for sim in self._simulators):
            self._settle()
        else:
            self._emit_positions()

    def _activate(self) -> None:
        if self._state is MotionState.ACTIVE:
            return
        self._state = MotionState.ACTIVE
        self._observer.on_state(MotionState.ACTIVE)
        self._clock.add_callback(self._on_frame)

    def _settle(self) -> None:
        for sim in self._simulators:
            sim.snap_to_rest()
        self._state = MotionState.AT_REST
        self._clock.remove_callback(self._on_frame)
        self._emit_destination()
        self._observer.on_state(MotionState.AT_REST)
        _logger.debug("spring connection at rest")

    def _emit_positions(self) -> None:
        self._observer.on_next(
            self._vectorizer.from_vector([sim.position for sim in self._simulators])
        )

    def _emit_destination(self) -> None:
        self._observer.on_next(self._spring.destination.read())
