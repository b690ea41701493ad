"""Spring physics: vectorizers, the scalar simulator and the vectorizing source."""

from .vectorizers import TypeVectorizer, FloatVectorizer, TupleVectorizer, check_vector  # noqa: F401
from .simulator import (  # noqa: F401
    SpringSimulator,
    SpringState,
    SpringStatus,
    critical_damping,
    is_overshooting,
    simulate,
)
from .source import SpringConfiguration, SpringSource  # noqa: F401
