"""Motion runtime: writes streams onto target properties.

The runtime is the external write sink interactions are applied to. For
each ``write`` it subscribes to the stream and forwards every value to
``accessor.set(target, value)``. Subscriptions are grouped per target so
``detach(target)`` tears down everything bound to it. Targets that support
weak references are not kept alive by the runtime; once collected, their
subscriptions are released.

``is_active`` is a readable that is True while at least one written stream
reports ``MotionState.ACTIVE``.
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Set, TypeVar

from .observable import MotionObservable, MotionState
from .reactive import ReactiveProperty, ReactiveReadable
from .subscription import Subscription

__all__ = [
    "PropertyAccessor",
    "AttributeProperty",
    "Interaction",
    "MotionRuntime",
]

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class PropertyAccessor(Protocol):  # noqa: D401 - structural
    def get(self, target: Any) -> Any: ...  # pragma: no cover - structural

    def set(self, target: Any, value: Any) -> None: ...  # pragma: no cover - structural


@dataclass(frozen=True)
class AttributeProperty:
    """Accessor for a plain Python attribute."""

    name: str

    def get(self, target: Any) -> Any:
        return getattr(target, self.name)

    def set(self, target: Any, value: Any) -> None:
        setattr(target, self.name, value)


class Interaction(Protocol):  # noqa: D401 - structural
    def apply(self, runtime: "MotionRuntime", target: Any) -> None: ...  # pragma: no cover


@dataclass(eq=False)
class _Write:
    key: int
    accessor: PropertyAccessor
    upstream: Optional[Subscription] = None


class MotionRuntime:
    def __init__(self) -> None:
        self._writes: Dict[int, List[_Write]] = {}
        self._active: Set[int] = set()
        self._is_active: ReactiveProperty[bool] = ReactiveProperty.of(False)

    @property
    def is_active(self) -> ReactiveReadable[bool]:
        return self._is_active

    def add(self, interaction: Interaction, target: Any) -> None:
        interaction.apply(self, target)

    def write(
        self, stream: MotionObservable[T], target: Any, accessor: PropertyAccessor
    ) -> Subscription:
        if accessor is None:
            raise ValueError("a property accessor is required")
        if stream is None:
            raise ValueError("a stream is required")
        key = id(target)
        entry = _Write(key=key, accessor=accessor)
        try:
            ref: Callable[[], Any] = weakref.ref(target, lambda _r: self._release(key))
        except TypeError:
            # Not weak-referenceable; held strongly until detach().
            ref = lambda: target  # noqa: E731

        def on_next(value: T) -> None:
            obj = ref()
            if obj is not None:
                accessor.set(obj, value)

        def on_state(motion_state: MotionState) -> None:
            if motion_state is MotionState.ACTIVE:
                self._active.add(id(entry))
            else:
                self._active.discard(id(entry))
            self._refresh_active()

        try:
            entry.upstream = stream.subscribe(on_next, on_state)
        except BaseException:
            self._active.discard(id(entry))
            self._refresh_active()
            raise
        self._writes.setdefault(key, []).append(entry)
        _logger.debug("writing stream onto %s via %r", type(target).__name__, accessor)
        return Subscription(handler=entry, _on_cancel=lambda _s: self._cancel(entry))

    def detach(self, target: Any) -> int:
        """Unsubscribe every stream written onto *target*; returns the count."""
        return self._release(id(target))

    def dispose(self) -> None:
        for key in list(self._writes):
            self._release(key)

    def subscription_count(self, target: Any = None) -> int:
        if target is not None:
            return len(self._writes.get(id(target), ()))
        return sum(len(v) for v in self._writes.values())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _cancel(self, entry: _Write) -> None:
        bucket = self._writes.get(entry.key)
        if bucket and entry in bucket:
            bucket.remove(entry)
            if not bucket:
                self._writes.pop(entry.key, None)
        self._teardown(entry)

    def _release(self, key: int) -> int:
        writes = self._writes.pop(key, [])
        for entry in writes:
            self._teardown(entry)
        if writes:
            _logger.debug("released %d stream(s)", len(writes))
        return len(writes)

    def _teardown(self, entry: _Write) -> None:
        if entry.upstream is not None:
            entry.upstream.unsubscribe()
        self._active.discard(id(entry))
        self._refresh_active()

    def _refresh_active(self) -> None:
        active = bool(self._active)
        if active != self._is_active.read():
            self._is_active.write(active)
