"""
Transient user-facing notices.

The state machine posts short messages ("Move under the coffee spout!",
"+5 mood") when actions are rejected or rewarded. The renderer shows the
active ones as toasts; listeners can subscribe for anything else (sound,
analytics). Posting never blocks or fails the simulation tick.
"""

from typing import Callable, List

from pydantic import BaseModel, ConfigDict, Field

from moodbooster.logging import get_logger
from moodbooster.models import NoticeKind

log = get_logger('notifications')

NoticeListener = Callable[['Notice'], None]


class Notice(BaseModel):
    """Immutable notice with an age for fade-out.

    Attributes:
        kind: What happened
        message: Text shown to the player
        age: Seconds since posting
        duration: Seconds the notice stays visible
    """
    kind: NoticeKind
    message: str
    age: float = Field(0.0, ge=0)
    duration: float = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)

    @property
    def expired(self) -> bool:
        return self.age >= self.duration

    @property
    def fade(self) -> float:
        """Remaining visibility from 1.0 (new) to 0.0 (expired)."""
        return max(0.0, 1.0 - self.age / self.duration)

    def aged(self, dt: float) -> 'Notice':
        return self.model_copy(update={'age': self.age + max(0.0, dt)})


class NotificationChannel:
    """Collects notices and fans them out to listeners.

    Examples:
        >>> channel = NotificationChannel(duration=1.0)
        >>> _ = channel.post(NoticeKind.CONSUMED, "Coffee power +10!")
        >>> len(channel.active)
        1
        >>> channel.update(1.0)
        >>> len(channel.active)
        0
    """

    def __init__(self, duration: float = 1.5, max_active: int = 4):
        """
        Args:
            duration: Seconds each notice stays active
            max_active: Oldest notices are dropped beyond this count
        """
        self._duration = duration
        self._max_active = max_active
        self._active: List[Notice] = []
        self._listeners: List[NoticeListener] = []

    @property
    def active(self) -> List[Notice]:
        """Live notices, oldest first."""
        return list(self._active)

    def subscribe(self, listener: NoticeListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def post(self, kind: NoticeKind, message: str) -> Notice:
        """Publish a notice to the active list and every listener."""
        notice = Notice(kind=kind, message=message, duration=self._duration)
        self._active.append(notice)
        if len(self._active) > self._max_active:
            self._active = self._active[-self._max_active:]

        log.debug("Notice %s: %s", kind.value, message)

        for listener in list(self._listeners):
            try:
                listener(notice)
            except Exception:
                log.exception("Notice listener %r failed", listener)
        return notice

    def update(self, dt: float) -> None:
        """Age notices and drop the expired ones."""
        self._active = [n.aged(dt) for n in self._active]
        self._active = [n for n in self._active if not n.expired]

    def clear(self) -> None:
        self._active.clear()
