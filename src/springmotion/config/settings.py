"""Global configuration and constants for the spring engine."""

from __future__ import annotations

import os
from typing import Final

# Default spring coefficients, extracted from a POP spring with speed = 12
# and bounciness = 4.
DEFAULT_TENSION: Final = 342.0
DEFAULT_FRICTION: Final = 30.0
DEFAULT_THRESHOLD: Final = 0.01

# Frame clock cadence; ticks advance by a fixed interval regardless of how
# long the host took to deliver them.
FRAME_RATE: Final = int(os.environ.get("SPRINGMOTION_FRAME_RATE", "60"))
FRAME_INTERVAL: Final = 1.0 / FRAME_RATE

SOLVER_TIMESTEP: Final = 0.001  # seconds per RK4 substep
MAX_FRAME_DELTA: Final = 0.064  # seconds; longer frames are clamped
