"""Minimal push stream used to deliver spring output.

A ``MotionObservable`` wraps a *connect* function. Each ``subscribe`` call
invokes it with a fresh ``MotionObserver`` and receives a disconnect
callable, so every subscriber gets its own producer state. Streams carry
two channels: ``next`` for values and an optional ``state`` channel that
reports whether the producer is ``ACTIVE`` or ``AT_REST``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

from .subscription import Subscription

__all__ = [
    "MotionState",
    "MotionObserver",
    "MotionObservable",
    "flatten",
]

T = TypeVar("T")


class MotionState(str, Enum):
    AT_REST = "at_rest"
    ACTIVE = "active"


@dataclass
class MotionObserver(Generic[T]):
    next: Callable[[T], None]
    state: Optional[Callable[[MotionState], None]] = None

    def on_next(self, value: T) -> None:
        self.next(value)

    def on_state(self, state: MotionState) -> None:
        if self.state is not None:
            self.state(state)


Connect = Callable[[MotionObserver[T]], Callable[[], None]]


class MotionObservable(Generic[T]):
    def __init__(self, connect: Connect[T]) -> None:
        self._connect = connect

    def subscribe(
        self,
        next: Callable[[T], None],
        state: Optional[Callable[[MotionState], None]] = None,
    ) -> Subscription:
        observer: MotionObserver[T] = MotionObserver(next=next, state=state)
        disconnect = self._connect(observer)
        return Subscription(handler=observer, _on_cancel=lambda _sub: disconnect())


def flatten(stream: MotionObservable[T]) -> MotionObservable[T]:
    """Collapse a stream into a single stream of values in emission order.

    Spring streams have exactly one upstream source, so this is a direct
    pass-through of both channels.
    """

    def connect(observer: MotionObserver[T]) -> Callable[[], None]:
        sub = stream.subscribe(observer.on_next, observer.on_state)
        return sub.unsubscribe

    return MotionObservable(connect)
