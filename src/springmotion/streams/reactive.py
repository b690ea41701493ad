"""Reactive parameters.

Two capability levels:

 - ``ReactiveReadable``: synchronous ``read()`` plus push-based ``subscribe``.
 - ``ReactiveProperty``: a readable that also accepts ``write(value)``.

Each instance owns its observer registry. Dispatch is synchronous and
copy-first (the same strategy the GUI event bus uses), so a listener may
unsubscribe itself, or subscribe others, while a notification is running.

Subscribing delivers the current value immediately, then every later write
in the order it happened. Values are never coalesced. ``None`` is not a
valid parameter value.
"""

from __future__ import annotations

from typing import Callable, Generic, List, TypeVar

from .subscription import Subscription

__all__ = [
    "Listener",
    "ReactiveReadable",
    "ReactiveProperty",
]

V = TypeVar("V")

Listener = Callable[[V], None]


def _require_value(value):
    if value is None:
        raise ValueError("reactive parameters cannot hold None")
    return value


class ReactiveReadable(Generic[V]):
    """Current value plus change notification. Read-only from the outside."""

    def __init__(self, value: V) -> None:
        self._value: V = _require_value(value)
        self._subs: List[Subscription] = []

    @classmethod
    def of(cls, value: V) -> "ReactiveReadable[V]":
        return cls(value)

    def read(self) -> V:
        return self._value

    def subscribe(self, listener: Listener[V]) -> Subscription:
        sub = Subscription(handler=listener, _on_cancel=self._remove)
        self._subs.append(sub)
        try:
            listener(self._value)
        except BaseException:
            sub.unsubscribe()
            raise
        return sub

    def subscriber_count(self) -> int:
        return len(self._subs)

    def _remove(self, sub: Subscription) -> None:
        for i, existing in enumerate(self._subs):
            if existing is sub:
                self._subs.pop(i)
                break

    def _set(self, value: V) -> None:
        self._value = _require_value(value)
        for sub in list(self._subs):
            if sub.active:
                sub.handler(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class ReactiveProperty(ReactiveReadable[V]):
    """Readable that can be written externally.

    ``write`` notifies every current subscriber before returning. Listener
    exceptions propagate to the writer.
    """

    @classmethod
    def of(cls, value: V) -> "ReactiveProperty[V]":
        return cls(value)

    def write(self, value: V) -> None:
        self._set(value)
