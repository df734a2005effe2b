"""
Frame clock.

Turns monotonic timestamps into per-frame delta times for the simulation.
"""
import time
from typing import Callable, Optional


class FrameClock:
    """Derives a clamped ``dt`` from consecutive timestamps.

    The first timestamp has no predecessor, so the clock must be seeded
    before the first tick; an unseeded ``tick`` seeds itself and returns 0.
    Steps are clamped to ``[0, max_dt]`` so a stalled window or a clock that
    jumps backwards never feeds a negative or huge step into the game.

    Examples:
        >>> clock = FrameClock(max_dt=0.1)
        >>> clock.seed(10.0)
        >>> clock.tick(10.0625)
        0.0625
        >>> clock.tick(12.0)  # window was dragged for two seconds
        0.1
    """

    def __init__(
        self,
        time_source: Callable[[], float] = time.monotonic,
        max_dt: float = 0.1,
    ):
        """
        Args:
            time_source: Returns monotonic seconds when no timestamp is given
            max_dt: Largest step handed to the simulation
        """
        if max_dt <= 0:
            raise ValueError(f'max_dt must be positive, got {max_dt}')
        self._time_source = time_source
        self._max_dt = max_dt
        self._last: Optional[float] = None

    @property
    def seeded(self) -> bool:
        return self._last is not None

    @property
    def max_dt(self) -> float:
        return self._max_dt

    def seed(self, timestamp: Optional[float] = None) -> None:
        """Record the starting timestamp."""
        self._last = self._time_source() if timestamp is None else timestamp

    def reset(self) -> None:
        """Forget the last timestamp (next tick re-seeds)."""
        self._last = None

    def tick(self, timestamp: Optional[float] = None) -> float:
        """Advance to ``timestamp`` and return the clamped step in seconds."""
        now = self._time_source() if timestamp is None else timestamp
        if self._last is None:
            self._last = now
            return 0.0

        dt = now - self._last
        self._last = now
        return min(max(dt, 0.0), self._max_dt)
