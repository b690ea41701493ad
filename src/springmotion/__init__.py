"""springmotion: reactive spring engine.

Drives arbitrary properties with damped spring physics whose destination,
tension and friction can change mid-flight without discontinuities.
The PyQt6 integration lives in ``springmotion.qt`` and is imported on demand.
"""

from .streams import (  # noqa: F401
    AttributeProperty,
    FrameClock,
    Interaction,
    MotionObservable,
    MotionRuntime,
    MotionState,
    PropertyAccessor,
    ReactiveProperty,
    ReactiveReadable,
    Subscription,
    default_clock,
    flatten,
)
from .springs import (  # noqa: F401
    FloatVectorizer,
    SpringSimulator,
    SpringSource,
    SpringStatus,
    TupleVectorizer,
    TypeVectorizer,
)
from .interactions import (  # noqa: F401
    DEFAULT_FRICTION,
    DEFAULT_FRICTION_PROPERTY,
    DEFAULT_TENSION,
    DEFAULT_TENSION_PROPERTY,
    MaterialSpring,
)
from .errors import SpringDivergenceError, SpringMotionError  # noqa: F401
from .reduced_motion import (  # noqa: F401
    is_reduced_motion,
    set_reduced_motion,
    temporarily_reduced_motion,
)

__version__ = "0.1.0"
