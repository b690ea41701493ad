"""Scalar spring simulator.

Integrates one damped harmonic oscillator with unit mass:

    a = -tension * (position - destination) - friction * velocity

Design Goals:
 - Headless and deterministic: time only moves when ``advance(dt)`` is
   called, and each frame is split into fixed RK4 substeps
   (``SOLVER_TIMESTEP``) so results do not depend on frame jitter.
 - Live reconfiguration: ``destination``, ``tension``, ``friction`` and
   ``threshold`` may change mid-flight. They move the equilibrium only;
   position and velocity carry over untouched.
 - Forced restart: ``restart(position, velocity)`` overwrites the physical
   state and always resumes simulating.
 - Completion: the caller decides when to settle (a multi-dimensional
   spring rests only when every component is within threshold), then calls
   ``snap_to_rest`` so the final position equals the destination exactly.

States:
 - AT_REST: |position - destination| <= threshold and |velocity| <= threshold.
   ``advance`` is a no-op while resting.
 - SIMULATING: otherwise. Leaving rest happens through a setter that breaks
   the rest condition or through ``restart``.

Frames longer than ``MAX_FRAME_DELTA`` are clamped so a stalled host does
not produce a single huge step. A non-finite position or velocity raises
``SpringDivergenceError``.

Helpers:
 - critical_damping(tension) -> float
 - simulate(simulator, dt, max_frames) -> list[float]
 - is_overshooting(samples, destination, start) -> bool
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List

from ..config import settings
from ..errors import SpringDivergenceError

__all__ = [
    "SpringStatus",
    "SpringState",
    "SpringSimulator",
    "critical_damping",
    "simulate",
    "is_overshooting",
]

_logger = logging.getLogger(__name__)


class SpringStatus(str, Enum):
    AT_REST = "at_rest"
    SIMULATING = "simulating"


@dataclass(frozen=True)
class SpringState:
    position: float
    velocity: float


def _finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return value


class SpringSimulator:
    def __init__(
        self,
        destination: float = 0.0,
        *,
        position: float | None = None,
        velocity: float = 0.0,
        tension: float = settings.DEFAULT_TENSION,
        friction: float = settings.DEFAULT_FRICTION,
        threshold: float = settings.DEFAULT_THRESHOLD,
        solver_timestep: float = settings.SOLVER_TIMESTEP,
    ) -> None:
        if solver_timestep <= 0:
            raise ValueError("solver_timestep must be > 0")
        self._solver_timestep = float(solver_timestep)
        self._destination = _finite("destination", destination)
        self._position = self._destination if position is None else _finite("position", position)
        self._velocity = _finite("velocity", velocity)
        self._tension = self._check_tension(tension)
        self._friction = self._check_friction(friction)
        self._threshold = self._check_threshold(threshold)
        self._status = SpringStatus.AT_REST if self.is_within_threshold() else SpringStatus.SIMULATING

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @staticmethod
    def _check_tension(value: float) -> float:
        value = _finite("tension", value)
        if value <= 0:
            raise ValueError("tension must be > 0")
        return value

    @staticmethod
    def _check_friction(value: float) -> float:
        value = _finite("friction", value)
        if value < 0:
            raise ValueError("friction must be >= 0")
        return value

    @staticmethod
    def _check_threshold(value: float) -> float:
        value = _finite("threshold", value)
        if value <= 0:
            raise ValueError("threshold must be > 0")
        return value

    # ------------------------------------------------------------------
    # Configuration (retarget / retune)
    # ------------------------------------------------------------------
    @property
    def destination(self) -> float:
        return self._destination

    @destination.setter
    def destination(self, value: float) -> None:
        self._destination = _finite("destination", value)
        self._wake_if_disturbed()

    @property
    def tension(self) -> float:
        return self._tension

    @tension.setter
    def tension(self, value: float) -> None:
        self._tension = self._check_tension(value)
        self._wake_if_disturbed()

    @property
    def friction(self) -> float:
        return self._friction

    @friction.setter
    def friction(self, value: float) -> None:
        self._friction = self._check_friction(value)
        self._wake_if_disturbed()

    @property
    def threshold(self) -> float:
        return self._threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        self._threshold = self._check_threshold(value)
        self._wake_if_disturbed()

    def _wake_if_disturbed(self) -> None:
        if self._status is SpringStatus.AT_REST and not self.is_within_threshold():
            self._status = SpringStatus.SIMULATING

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def position(self) -> float:
        return self._position

    @property
    def velocity(self) -> float:
        return self._velocity

    @property
    def state(self) -> SpringState:
        return SpringState(self._position, self._velocity)

    @property
    def status(self) -> SpringStatus:
        return self._status

    def is_within_threshold(self) -> bool:
        return (
            abs(self._position - self._destination) <= self._threshold
            and abs(self._velocity) <= self._threshold
        )

    def restart(self, position: float | None = None, velocity: float | None = None) -> None:
        """Overwrite position and/or velocity and force SIMULATING."""
        if position is not None:
            self._position = _finite("position", position)
        if velocity is not None:
            self._velocity = _finite("velocity", velocity)
        self._status = SpringStatus.SIMULATING

    def snap_to_rest(self) -> None:
        self._position = self._destination
        self._velocity = 0.0
        self._status = SpringStatus.AT_REST

    # ------------------------------------------------------------------
    # Integration
    # ------------------------------------------------------------------
    def _acceleration(self, position: float, velocity: float) -> float:
        return -self._tension * (position - self._destination) - self._friction * velocity

    def advance(self, dt: float) -> SpringState:
        """Integrate the spring forward by *dt* seconds (one frame)."""
        if dt <= 0:
            raise ValueError("dt must be > 0")
        if self._status is SpringStatus.AT_REST:
            return self.state
        dt = min(float(dt), settings.MAX_FRAME_DELTA)
        steps = max(1, math.ceil(dt / self._solver_timestep - 1e-9))
        h = dt / steps
        x, v = self._position, self._velocity
        accel = self._acceleration
        for _ in range(steps):
            k1x, k1v = v, accel(x, v)
            k2x = v + 0.5 * h * k1v
            k2v = accel(x + 0.5 * h * k1x, k2x)
            k3x = v + 0.5 * h * k2v
            k3v = accel(x + 0.5 * h * k2x, k3x)
            k4x = v + h * k3v
            k4v = accel(x + h * k3x, k4x)
            x += h / 6.0 * (k1x + 2.0 * k2x + 2.0 * k3x + k4x)
            v += h / 6.0 * (k1v + 2.0 * k2v + 2.0 * k3v + k4v)
        if not (math.isfinite(x) and math.isfinite(v)):
            _logger.error(
                "spring diverged: position=%r velocity=%r destination=%r tension=%r friction=%r",
                x,
                v,
                self._destination,
                self._tension,
                self._friction,
            )
            raise SpringDivergenceError(x, v, self._destination)
        self._position, self._velocity = x, v
        return self.state


def critical_damping(tension: float) -> float:
    """Return the friction giving critical damping for unit mass (2 * sqrt(k))."""
    if tension <= 0:
        raise ValueError("tension must be > 0")
    return 2.0 * math.sqrt(tension)


def simulate(
    simulator: SpringSimulator,
    dt: float = settings.FRAME_INTERVAL,
    max_frames: int = 10_000,
) -> List[float]:
    """Run a lone simulator to rest, returning the position after each frame.

    The last sample is the destination exactly. Raises ``RuntimeError`` if
    the spring has not settled within *max_frames*.
    """
    samples: List[float] = []
    while simulator.status is not SpringStatus.AT_REST:
        if len(samples) >= max_frames:
            raise RuntimeError(f"spring did not settle within {max_frames} frames")
        simulator.advance(dt)
        if simulator.is_within_threshold():
            simulator.snap_to_rest()
        samples.append(simulator.position)
    return samples


def is_overshooting(samples: List[float], destination: float, start: float) -> bool:
    """Return True if any sample passes *destination* coming from *start*."""
    if destination >= start:
        return any(s > destination for s in samples)
    return any(s < destination for s in samples)
