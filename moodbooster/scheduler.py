"""
Timeouts driven by the frame loop.

The driver owns a TimerScheduler and advances it with the same ``dt`` as
the simulation; anything scheduled on it can be cancelled, which keeps
delayed transitions (the result screen returning to attract) under the
driver's control.
"""

from dataclasses import dataclass, field
from typing import Callable, List

from moodbooster.logging import get_logger

log = get_logger('scheduler')


@dataclass
class Timeout:
    """A pending callback.

    Attributes:
        delay: Seconds requested at scheduling time
        callback: Called once when the countdown reaches zero
        name: Label for logging
        remaining: Seconds left on the countdown
        cancelled: Set by cancel(); a cancelled timeout never fires
        fired: Set once the callback has run
    """
    delay: float
    callback: Callable[[], None]
    name: str = ""
    remaining: float = field(init=False)
    cancelled: bool = False
    fired: bool = False

    def __post_init__(self):
        self.remaining = max(0.0, self.delay)

    @property
    def is_pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        """Prevent the callback from running."""
        self.cancelled = True


class TimerScheduler:
    """Frame-driven collection of cancellable timeouts."""

    def __init__(self):
        self._timeouts: List[Timeout] = []

    @property
    def pending(self) -> List[Timeout]:
        """Timeouts that have neither fired nor been cancelled."""
        return [t for t in self._timeouts if t.is_pending]

    def schedule(self, delay: float, callback: Callable[[], None], name: str = "") -> Timeout:
        """Run ``callback`` after ``delay`` seconds of scheduler time.

        Returns:
            Handle that can be cancelled
        """
        timeout = Timeout(delay=delay, callback=callback, name=name)
        self._timeouts.append(timeout)
        log.debug("Scheduled %s in %.2fs", name or 'timeout', delay)
        return timeout

    def cancel(self, timeout: Timeout) -> None:
        timeout.cancel()
        log.debug("Cancelled %s", timeout.name or 'timeout')

    def cancel_all(self) -> None:
        """Cancel every pending timeout."""
        for timeout in self._timeouts:
            timeout.cancel()
        self._timeouts.clear()

    def update(self, dt: float) -> int:
        """
        Advance all countdowns and fire the ones that expire.

        Callbacks may schedule new timeouts; those start counting on the
        next update.

        Args:
            dt: Delta time in seconds

        Returns:
            Number of callbacks fired
        """
        due = list(self._timeouts)
        fired = 0
        for timeout in due:
            if not timeout.is_pending:
                continue
            timeout.remaining -= max(0.0, dt)
            if timeout.remaining <= 0:
                timeout.fired = True
                log.debug("Firing %s", timeout.name or 'timeout')
                timeout.callback()
                fired += 1

        self._timeouts = [t for t in self._timeouts if t.is_pending]
        return fired
