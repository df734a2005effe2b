"""
Input Manager - Holds the active input source.
"""
from typing import List, Optional

from moodbooster.input.input_event import InputEvent
from moodbooster.input.sources.base import InputSource
from moodbooster.logging import get_logger

log = get_logger('input')


class InputManager:
    """Manages the active input source and provides unified event access.

    Only one input source can be active at a time. The source can be
    swapped at runtime without changing game logic.

    Examples:
        >>> manager = InputManager()
        >>> manager.get_events()
        []
    """

    def __init__(self, source: Optional[InputSource] = None):
        """Initialize with an optional input source."""
        self._source: Optional[InputSource] = None
        if source is not None:
            self.set_source(source)

    def set_source(self, source: InputSource) -> None:
        """Set or change the active input source.

        Raises:
            TypeError: If source is not an instance of InputSource
        """
        if not isinstance(source, InputSource):
            raise TypeError(
                f"source must be an instance of InputSource, got {type(source).__name__}"
            )
        self._source = source
        log.debug("Input source set to %s", type(source).__name__)

    def has_source(self) -> bool:
        return self._source is not None

    def update(self, dt: float) -> None:
        """Update the active input source.

        Args:
            dt: Delta time in seconds since last update.
        """
        if self._source is not None:
            self._source.update(dt)

    def get_events(self) -> List[InputEvent]:
        """Get collected events since last update."""
        if self._source is None:
            return []
        return self._source.poll_events()

    def clear_events(self) -> None:
        """Discard any pending events from the active source."""
        if self._source is not None:
            self._source.poll_events()

    def detach(self) -> Optional[InputSource]:
        """Close and drop the active source.

        Returns:
            The detached source, or None if there was none
        """
        source, self._source = self._source, None
        if source is not None:
            source.close()
            log.debug("Input source %s detached", type(source).__name__)
        return source
