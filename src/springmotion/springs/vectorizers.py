"""Type vectorizers.

A vectorizer maps a domain value onto a fixed-length list of floats and
back, so one scalar spring can run per component. Implementations are
stateless and pure. ``from_vector(to_vector(v)) == v`` must hold for every
representable ``v``; a vector of the wrong length is a programming error
and raises ``ValueError``.
"""

from __future__ import annotations

from typing import Iterable, List, Protocol, Sequence, Tuple, TypeVar

__all__ = [
    "TypeVectorizer",
    "FloatVectorizer",
    "TupleVectorizer",
    "check_vector",
]

T = TypeVar("T")


class TypeVectorizer(Protocol[T]):  # noqa: D401 - structural
    dimensions: int

    def to_vector(self, value: T) -> List[float]: ...  # pragma: no cover - structural

    def from_vector(self, vector: Sequence[float]) -> T: ...  # pragma: no cover - structural


def check_vector(vector: Iterable[float], dimensions: int) -> List[float]:
    """Return *vector* as a list of floats, enforcing its length."""
    values = [float(v) for v in vector]
    if len(values) != dimensions:
        raise ValueError(f"expected a vector of length {dimensions}, got {len(values)}")
    return values


class FloatVectorizer:
    dimensions = 1

    def to_vector(self, value: float) -> List[float]:
        return [float(value)]

    def from_vector(self, vector: Sequence[float]) -> float:
        return check_vector(vector, 1)[0]


class TupleVectorizer:
    """Fixed-length tuples of floats, e.g. ``(x, y)`` positions."""

    def __init__(self, dimensions: int) -> None:
        if dimensions <= 0:
            raise ValueError("dimensions must be > 0")
        self.dimensions = dimensions

    def to_vector(self, value: Tuple[float, ...]) -> List[float]:
        return check_vector(value, self.dimensions)

    def from_vector(self, vector: Sequence[float]) -> Tuple[float, ...]:
        return tuple(check_vector(vector, self.dimensions))
