"""
Clock Controller Module

Wall-clock source for the DUID generator with an adjustable drift offset.

The controller reports ``real_wall_clock_ms + drift``. Drift is normally 0; it
is set to simulate clock skew in tests or to smooth over a known regression of
the host clock. The value returned here may go backwards when drift is lowered;
keeping virtual time non-decreasing is the job of the sequence allocator.
"""

import time
from typing import Callable


def wall_clock_ms() -> int:
    """Returns the current Unix time in milliseconds."""
    return int(time.time() * 1000)


class ClockController:
    """Millisecond clock with a per-instance drift offset.

    Attributes:
        drift: Signed offset in milliseconds added to every reading.
    """

    def __init__(self, source: Callable[[], int] = wall_clock_ms):
        self._source = source
        self.drift = 0

    def current_time_ms(self) -> int:
        """Returns the real wall clock plus the configured drift."""
        return self._source() + self.drift

    def drift_time(self, delta_ms: int) -> int:
        """Sets the drift offset.

        Args:
            delta_ms: Signed offset in milliseconds, replaces any previous drift.

        Returns:
            The drift now in effect.
        """
        self.drift = int(delta_ms)
        return self.drift
