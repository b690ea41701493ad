"""Declarative interactions applied to targets through a ``MotionRuntime``."""

from .material_spring import (  # noqa: F401
    DEFAULT_FRICTION,
    DEFAULT_FRICTION_PROPERTY,
    DEFAULT_TENSION,
    DEFAULT_TENSION_PROPERTY,
    MaterialSpring,
)
