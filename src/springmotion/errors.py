"""Exception types raised by the spring engine.

Everything here signals a programming error or a broken simulation; none of
these are meant to be caught and recovered from during normal operation.
"""

from __future__ import annotations

__all__ = ["SpringMotionError", "SpringDivergenceError"]


class SpringMotionError(RuntimeError):
    """Base class for springmotion failures."""


class SpringDivergenceError(SpringMotionError):
    """Raised when a simulated position or velocity stops being finite."""

    def __init__(self, position: float, velocity: float, destination: float) -> None:
        super().__init__(
            f"spring diverged (position={position!r}, velocity={velocity!r}, "
            f"destination={destination!r})"
        )
        self.position = position
        self.velocity = velocity
        self.destination = destination
