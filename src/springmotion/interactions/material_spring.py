"""Material spring interaction.

A spring pulls a property from an initial value towards a destination using
a physical simulation. The interaction holds the configuration as reactive
parameters, owns a ``SpringSource`` built from them, and on ``apply`` asks
the runtime to write the source's stream onto the target property.

Two construction forms:
 - ``MaterialSpring(...)`` takes reactive parameters for full external
   control.
 - ``MaterialSpring.from_values(...)`` takes raw values and wraps each one
   in a ``ReactiveProperty``; tension and friction default to
   ``DEFAULT_TENSION`` / ``DEFAULT_FRICTION``.

``destination``, ``initial_value``, ``initial_velocity``, ``tension`` and
``friction`` can be rebound at any time by assigning a new parameter (or a
raw value, which gets wrapped). Live streams switch to the new parameter on
the spot. ``threshold`` is read-only.
"""

from __future__ import annotations

from typing import Any, Generic, List, Optional, TypeVar

from ..config import settings
from ..springs.source import RebindListener, SpringSource
from ..springs.vectorizers import TypeVectorizer
from ..streams.clock import FrameClock
from ..streams.observable import MotionObservable, flatten
from ..streams.reactive import ReactiveProperty, ReactiveReadable
from ..streams.runtime import MotionRuntime, PropertyAccessor
from ..streams.subscription import Subscription

__all__ = [
    "DEFAULT_TENSION",
    "DEFAULT_FRICTION",
    "DEFAULT_TENSION_PROPERTY",
    "DEFAULT_FRICTION_PROPERTY",
    "MaterialSpring",
]

O = TypeVar("O")
T = TypeVar("T")

DEFAULT_TENSION = settings.DEFAULT_TENSION
DEFAULT_FRICTION = settings.DEFAULT_FRICTION
DEFAULT_TENSION_PROPERTY: ReactiveReadable[float] = ReactiveReadable.of(DEFAULT_TENSION)
DEFAULT_FRICTION_PROPERTY: ReactiveReadable[float] = ReactiveReadable.of(DEFAULT_FRICTION)


def _as_parameter(name: str, value: Any) -> ReactiveReadable[Any]:
    if value is None:
        raise ValueError(f"{name} must not be None")
    if isinstance(value, ReactiveReadable):
        return value
    return ReactiveProperty.of(value)


class _Rebindable:
    """Descriptor for a configuration parameter that can be swapped."""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return instance._params[self.name]

    def __set__(self, instance: "MaterialSpring[Any, Any]", value: Any) -> None:
        instance._rebind(self.name, _as_parameter(self.name, value))


class MaterialSpring(Generic[O, T]):
    DEFAULT_TENSION = DEFAULT_TENSION
    DEFAULT_FRICTION = DEFAULT_FRICTION
    DEFAULT_TENSION_PROPERTY = DEFAULT_TENSION_PROPERTY
    DEFAULT_FRICTION_PROPERTY = DEFAULT_FRICTION_PROPERTY

    destination = _Rebindable()
    initial_value = _Rebindable()
    initial_velocity = _Rebindable()
    tension = _Rebindable()
    friction = _Rebindable()

    def __init__(
        self,
        accessor: PropertyAccessor,
        vectorizer: TypeVectorizer[T],
        destination: ReactiveReadable[T],
        initial_value: ReactiveReadable[T],
        initial_velocity: ReactiveReadable[T],
        threshold: ReactiveReadable[float],
        tension: Optional[ReactiveReadable[Any]] = None,
        friction: Optional[ReactiveReadable[Any]] = None,
        *,
        clock: Optional[FrameClock] = None,
    ) -> None:
        if accessor is None:
            raise ValueError("a property accessor is required")
        if vectorizer is None:
            raise ValueError("a vectorizer is required")
        self._accessor = accessor
        self._vectorizer = vectorizer
        self._rebind_subs: List[Subscription] = []
        self._params: dict[str, ReactiveReadable[Any]] = {
            "destination": _as_parameter("destination", destination),
            "initial_value": _as_parameter("initial_value", initial_value),
            "initial_velocity": _as_parameter("initial_velocity", initial_velocity),
            "threshold": _as_parameter("threshold", threshold),
            "tension": _as_parameter(
                "tension", ReactiveProperty.of(DEFAULT_TENSION) if tension is None else tension
            ),
            "friction": _as_parameter(
                "friction", ReactiveProperty.of(DEFAULT_FRICTION) if friction is None else friction
            ),
        }
        self._source: SpringSource[T] = SpringSource(self, vectorizer, clock)

    @classmethod
    def from_values(
        cls,
        accessor: PropertyAccessor,
        vectorizer: TypeVectorizer[T],
        destination: T,
        initial_value: T,
        initial_velocity: T,
        threshold: float = settings.DEFAULT_THRESHOLD,
        tension: Any = DEFAULT_TENSION,
        friction: Any = DEFAULT_FRICTION,
        *,
        clock: Optional[FrameClock] = None,
    ) -> "MaterialSpring[O, T]":
        return cls(
            accessor,
            vectorizer,
            ReactiveProperty.of(destination),
            ReactiveProperty.of(initial_value),
            ReactiveProperty.of(initial_velocity),
            ReactiveProperty.of(threshold),
            ReactiveProperty.of(tension),
            ReactiveProperty.of(friction),
            clock=clock,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def threshold(self) -> ReactiveReadable[float]:
        return self._params["threshold"]

    @property
    def accessor(self) -> PropertyAccessor:
        return self._accessor

    @property
    def vectorizer(self) -> TypeVectorizer[T]:
        return self._vectorizer

    @property
    def stream(self) -> MotionObservable[T]:
        return self._source.stream

    def observe_rebinding(self, listener: RebindListener) -> Subscription:
        sub = Subscription(handler=listener, _on_cancel=self._rebind_subs.remove)
        self._rebind_subs.append(sub)
        return sub

    def _rebind(self, name: str, parameter: ReactiveReadable[Any]) -> None:
        self._params[name] = parameter
        for sub in list(self._rebind_subs):
            if sub.active:
                sub.handler(name, parameter)

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------
    def apply(self, runtime: MotionRuntime, target: O) -> None:
        runtime.write(flatten(self.stream), target, self._accessor)
