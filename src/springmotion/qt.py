"""PyQt6 integration.

Bridges the headless spring engine to Qt objects:

 - ``QtFrameClock``: a ``FrameClock`` whose ticks come from a ``QTimer``.
   The timer only runs while at least one spring is simulating; each
   timeout advances by the fixed frame interval, not by measured time.
 - ``QtProperty``: property accessor over ``QObject.property`` /
   ``QObject.setProperty`` (declared Q_PROPERTYs and dynamic properties).
 - Vectorizers for ``QPointF``, ``QSizeF``, ``QRectF`` and ``QColor``.

Typical use::

    clock = QtFrameClock()
    spring = MaterialSpring.from_values(
        QtProperty("pos"), QPointFVectorizer(), QPointF(200, 40), widget.pos(), QPointF(),
        clock=clock,
    )
    MotionRuntime().add(spring, widget)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from PyQt6.QtCore import QObject, QPointF, QRectF, QSizeF, Qt, QTimer
from PyQt6.QtGui import QColor

from .config import settings
from .springs.vectorizers import check_vector
from .streams.clock import FrameClock

__all__ = [
    "QtFrameClock",
    "QtProperty",
    "QPointFVectorizer",
    "QSizeFVectorizer",
    "QRectFVectorizer",
    "QColorVectorizer",
]

_logger = logging.getLogger(__name__)


class QtFrameClock(FrameClock):
    def __init__(
        self, frame_interval: float = settings.FRAME_INTERVAL, parent: Optional[QObject] = None
    ) -> None:
        super().__init__(frame_interval)
        self._timer = QTimer(parent)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(max(1, round(self.frame_interval * 1000)))
        self._timer.timeout.connect(self._on_timeout)

    @property
    def running(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self) -> None:
        self.tick()

    def _start(self) -> None:
        _logger.debug("starting frame timer (%d ms)", self._timer.interval())
        self._timer.start()

    def _stop(self) -> None:
        self._timer.stop()


@dataclass(frozen=True)
class QtProperty:
    """Accessor for a named ``QObject`` property."""

    name: str

    def get(self, target: QObject) -> Any:
        return target.property(self.name)

    def set(self, target: QObject, value: Any) -> None:
        target.setProperty(self.name, value)


class QPointFVectorizer:
    dimensions = 2

    def to_vector(self, value: QPointF) -> List[float]:
        return [value.x(), value.y()]

    def from_vector(self, vector: Sequence[float]) -> QPointF:
        x, y = check_vector(vector, 2)
        return QPointF(x, y)


class QSizeFVectorizer:
    dimensions = 2

    def to_vector(self, value: QSizeF) -> List[float]:
        return [value.width(), value.height()]

    def from_vector(self, vector: Sequence[float]) -> QSizeF:
        w, h = check_vector(vector, 2)
        return QSizeF(w, h)


class QRectFVectorizer:
    dimensions = 4

    def to_vector(self, value: QRectF) -> List[float]:
        return [value.x(), value.y(), value.width(), value.height()]

    def from_vector(self, vector: Sequence[float]) -> QRectF:
        x, y, w, h = check_vector(vector, 4)
        return QRectF(x, y, w, h)


class QColorVectorizer:
    """RGBA channels as floats in 0..255; rounded and clamped on the way back."""

    dimensions = 4

    def to_vector(self, value: QColor) -> List[float]:
        return [
            float(value.red()),
            float(value.green()),
            float(value.blue()),
            float(value.alpha()),
        ]

    def from_vector(self, vector: Sequence[float]) -> QColor:
        r, g, b, a = (min(255, max(0, round(c))) for c in check_vector(vector, 4))
        return QColor(r, g, b, a)
