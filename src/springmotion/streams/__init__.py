"""Push streams, reactive parameters, the frame clock and the write runtime."""

from .subscription import Subscription  # noqa: F401
from .reactive import ReactiveReadable, ReactiveProperty  # noqa: F401
from .observable import MotionState, MotionObserver, MotionObservable, flatten  # noqa: F401
from .clock import FrameClock, default_clock  # noqa: F401
from .runtime import (  # noqa: F401
    AttributeProperty,
    Interaction,
    MotionRuntime,
    PropertyAccessor,
)
