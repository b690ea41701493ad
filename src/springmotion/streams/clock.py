"""Frame clock (shared tick schedule).

Every spring connection registers a frame callback while it is simulating
and removes it once it comes to rest. All callbacks registered on one clock
observe the same tick boundaries. A tick advances time by a fixed
``frame_interval`` unless the caller passes an explicit ``dt``; real elapsed
time is never consulted, which keeps simulations deterministic and lets
tests drive frames by hand.

Subclasses hook ``_start`` / ``_stop`` to drive ``tick`` from a host event
loop; they are invoked when the first callback arrives and when the last
one leaves.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..config import settings

__all__ = ["FrameCallback", "FrameClock", "default_clock"]

_logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameClock:
    def __init__(self, frame_interval: float = settings.FRAME_INTERVAL) -> None:
        if frame_interval <= 0:
            raise ValueError("frame_interval must be > 0")
        self.frame_interval = float(frame_interval)
        self.frame_count = 0
        self._callbacks: List[FrameCallback] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def add_callback(self, callback: FrameCallback) -> None:
        if callback in self._callbacks:
            return
        self._callbacks.append(callback)
        if len(self._callbacks) == 1:
            _logger.debug("frame clock starting")
            self._start()

    def remove_callback(self, callback: FrameCallback) -> None:
        if callback not in self._callbacks:
            return
        self._callbacks.remove(callback)
        if not self._callbacks:
            _logger.debug("frame clock idle after %d frames", self.frame_count)
            self._stop()

    def callback_count(self) -> int:
        return len(self._callbacks)

    @property
    def idle(self) -> bool:
        return not self._callbacks

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------
    def tick(self, dt: Optional[float] = None) -> int:
        """Advance every registered callback by one frame.

        Callbacks removed earlier in the same frame are skipped; callbacks
        added during the frame first run on the next one. Returns the number
        of callbacks invoked.
        """
        step = self.frame_interval if dt is None else float(dt)
        if step <= 0:
            raise ValueError("dt must be > 0")
        invoked = 0
        for callback in list(self._callbacks):
            if callback not in self._callbacks:
                continue
            callback(step)
            invoked += 1
        self.frame_count += 1
        return invoked

    def run_until_idle(self, max_frames: int = 10_000) -> int:
        """Tick until no callbacks remain; returns the number of frames run."""
        frames = 0
        while self._callbacks:
            if frames >= max_frames:
                raise RuntimeError(f"frame clock still busy after {max_frames} frames")
            self.tick()
            frames += 1
        return frames

    # Host integration hooks -------------------------------------------
    def _start(self) -> None:
        pass

    def _stop(self) -> None:
        pass


_default_clock: FrameClock | None = None


def default_clock() -> FrameClock:
    """Process-wide clock used by springs constructed without one."""
    global _default_clock
    if _default_clock is None:
        _default_clock = FrameClock()
    return _default_clock
